"""Non-throwing existence probe."""

import errno
import os

from bundlefs.engine.errors import PermissionDeniedError, is_not_found, wrap_os_error


def exists(path: str | os.PathLike[str]) -> bool:
    """Check whether a path exists and is readable.

    Not-found is a legitimate False result. Any other failure is raised.
    Symlinks are followed, so a dangling link reports False.

    Args:
        path: Path to probe.

    Returns:
        True if the path exists, False if the OS reports it missing.

    Raises:
        PermissionDeniedError: If the path exists but cannot be read.
        IOFault: If the probe fails for any other reason.
    """
    path_str = os.fspath(path)
    try:
        os.stat(path_str)
    except OSError as e:
        if is_not_found(e):
            return False
        raise wrap_os_error(e, path_str, "access") from e

    if not os.access(path_str, os.R_OK):
        # the path may have vanished since the stat
        if not os.path.exists(path_str):
            return False
        raise PermissionDeniedError(
            f"Cannot access {path_str}: Permission denied",
            path=path_str,
            errno=errno.EACCES,
        )
    return True
