"""Small file helpers used by installer workflows."""

import os
from pathlib import Path

from bundlefs.engine.errors import wrap_os_error


def mkdir(path: str | os.PathLike[str]) -> None:
    """Create a directory and any missing parents.

    An existing directory is left as is.

    Raises:
        IOFault: If the directory cannot be created.
    """
    try:
        Path(path).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise wrap_os_error(e, os.fspath(path), "create directory") from e


def read_file(path: str | os.PathLike[str]) -> str:
    """Return the UTF-8 contents of a file.

    Raises:
        IOFault: If the file cannot be read.
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise wrap_os_error(e, os.fspath(path), "read") from e


def write_file(path: str | os.PathLike[str], contents: str) -> None:
    """Write a UTF-8 string to a file, creating parent directories as needed.

    Raises:
        IOFault: If the file cannot be written.
    """
    target = Path(path)
    mkdir(target.parent)
    try:
        target.write_text(contents, encoding="utf-8")
    except OSError as e:
        raise wrap_os_error(e, os.fspath(path), "write") from e


def read_chunk(path: str | os.PathLike[str], offset: int, length: int) -> bytes:
    """Read up to ``length`` bytes starting at ``offset``.

    Used to sniff file headers. Fewer bytes are returned when the file
    ends early, and none when ``offset`` is past the end.

    Raises:
        ValueError: If ``offset`` or ``length`` is negative.
        IOFault: If the file cannot be read.
    """
    if offset < 0 or length < 0:
        msg = f"Invalid chunk: offset={offset}, length={length}"
        raise ValueError(msg)

    try:
        with open(path, "rb") as f:
            f.seek(offset)
            return f.read(length)
    except OSError as e:
        raise wrap_os_error(e, os.fspath(path), "read") from e
