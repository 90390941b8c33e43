"""Additive directory-tree replication.

After a successful ditto, every entry of ``src`` is present in ``dst``:
files with equal content, symlinks with the same target string, and
directories as directories. Entries that only exist in ``dst`` are left
alone.

Directories are always created fresh at the destination, shallowest
first and one at a time. Files and symlinks are then placed on the
bounded worker pool, since every directory they need already exists.
"""

import logging
import os
import shutil
import threading
from dataclasses import dataclass

from bundlefs.core.config import EngineConfig
from bundlefs.engine.enumerator import enumerate_tree
from bundlefs.engine.eraser import wipe
from bundlefs.engine.errors import SourceNotFoundError, is_not_found, wrap_os_error
from bundlefs.engine.files import mkdir
from bundlefs.engine.models import DittoOptions, EntryStat, Operation, ProgressEvent
from bundlefs.engine.pool import run_bounded

logger = logging.getLogger(__name__)

# Copies must stay readable and writable by their owner
_FORCED_MODE = 0o666


@dataclass(frozen=True, slots=True)
class DittoResult:
    """Summary of a ditto.

    Attributes:
        files: Number of files and symlinks placed at the destination.
        directories: Number of directories created below the destination.
        skipped: Number of entries excluded by ``should_skip``.
    """

    files: int = 0
    directories: int = 0
    skipped: int = 0


def copy_mode(source_mode: int) -> int:
    """Permission bits for a copied file."""
    return (source_mode & 0o777) | _FORCED_MODE


def _unlink_link(path: str) -> None:
    logger.debug("unlink %s", path)
    try:
        os.unlink(path)
    except OSError as e:
        if not is_not_found(e):
            raise wrap_os_error(e, path, "unlink") from e


def _copy_file(src_file: str, dst_file: str, entry_stat: EntryStat) -> None:
    mode = copy_mode(entry_stat.mode)
    logger.debug("cp %o %s %s", mode, src_file, dst_file)

    try:
        src_stream = open(src_file, "rb")  # noqa: SIM115
    except OSError as e:
        raise wrap_os_error(e, src_file, "open") from e

    try:
        # an existing link at the destination is replaced, never written through
        if os.path.islink(dst_file):
            _unlink_link(dst_file)

        try:
            fd = os.open(dst_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
        except OSError as e:
            raise wrap_os_error(e, dst_file, "create") from e

        # the write side must be fully flushed and closed before the entry counts
        try:
            with os.fdopen(fd, "wb") as dst_stream:
                shutil.copyfileobj(src_stream, dst_stream)
        except OSError as e:
            raise wrap_os_error(e, dst_file, "write") from e
    finally:
        src_stream.close()


def _place(src_file: str, dst_file: str, entry_stat: EntryStat, operation: Operation, config: EngineConfig) -> None:
    """Materialize one non-directory entry at the destination."""
    if entry_stat.is_symlink:
        try:
            link_target = os.readlink(src_file)
        except OSError as e:
            raise wrap_os_error(e, src_file, "readlink") from e

        logger.debug("symlink %s %s", link_target, dst_file)
        # whatever was there before (file, directory, stale link) has to go
        wipe(dst_file, config=config)
        try:
            os.symlink(link_target, dst_file)
        except OSError as e:
            raise wrap_os_error(e, dst_file, "symlink") from e
        return

    if operation == Operation.MOVE:
        logger.debug("rename %s %s", src_file, dst_file)
        try:
            os.replace(src_file, dst_file)
        except OSError as e:
            raise wrap_os_error(e, src_file, "rename") from e
        return

    _copy_file(src_file, dst_file, entry_stat)


def ditto(
    src: str | os.PathLike[str],
    dst: str | os.PathLike[str],
    options: DittoOptions | None = None,
    *,
    config: EngineConfig | None = None,
) -> DittoResult:
    """Mirror ``src`` into ``dst`` without removing anything from ``dst``.

    If ``src`` is not a directory, it is copied, renamed or re-linked as a
    single entry. Skipped entries count toward neither ``done`` nor
    ``total`` of the progress events.

    Args:
        src: Source file or directory.
        dst: Destination path.
        options: Progress callback, skip predicate and copy/move choice.
        config: Engine configuration (pool size, ignore patterns).

    Returns:
        DittoResult summarizing the work done.

    Raises:
        SourceNotFoundError: If ``src`` does not exist.
        IOFault: On the first filesystem failure. Entries already placed
            stay in place.
    """
    options = options or DittoOptions()
    config = config or EngineConfig()
    src_root = os.fspath(src)
    dst_root = os.fspath(dst)
    logger.debug("ditto %s %s", src_root, dst_root)

    try:
        root_stat = EntryStat.from_stat(os.lstat(src_root))
    except OSError as e:
        if is_not_found(e):
            raise SourceNotFoundError(src_root) from e
        raise wrap_os_error(e, src_root, "stat") from e

    if not root_stat.is_directory:
        _place(src_root, dst_root, root_stat, options.operation, config)
        return DittoResult(files=1)

    listing = enumerate_tree(src_root, config.ignore_patterns)

    # shallow first, sequentially: parents must exist before children
    mkdir(dst_root)
    directories = sorted(listing.directories, key=len)
    for rel in directories:
        full = os.path.join(dst_root, rel)
        logger.debug("mkdir %s", full)
        mkdir(full)

    work: list[tuple[str, EntryStat]] = []
    skipped = 0
    for rel, entry_stat in listing.files:
        if options.should_skip(rel):
            logger.debug("skipping %s", rel)
            skipped += 1
            continue
        work.append((rel, entry_stat))

    total = len(work)
    done = 0
    lock = threading.Lock()
    # a wipe nested in a worker must not add workers of its own
    worker_config = config.model_copy(update={"concurrency_limit": 1})

    def place(item: tuple[str, EntryStat]) -> None:
        nonlocal done
        rel, entry_stat = item
        _place(
            os.path.join(src_root, rel),
            os.path.join(dst_root, rel),
            entry_stat,
            options.operation,
            worker_config,
        )
        with lock:
            done += 1
            options.on_progress(ProgressEvent.of(done, total))

    run_bounded(place, work, config.concurrency_limit)

    logger.info(
        "Mirrored %s to %s (%s %d files & %d directories, skipped %d)",
        src_root,
        dst_root,
        "moved" if options.operation == Operation.MOVE else "copied",
        total,
        len(directories),
        skipped,
    )
    return DittoResult(files=total, directories=len(directories), skipped=skipped)
