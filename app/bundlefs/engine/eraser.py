"""Idempotent recursive deletion.

Removes a path and everything beneath it. Files are unlinked on the
bounded worker pool; directories are then removed one at a time,
deepest first, because a directory must be empty before it can go.
A missing path, or an entry that disappears mid-way, counts as
already removed, so a failed wipe can simply be retried.
"""

import logging
import os
import threading
from dataclasses import dataclass

from bundlefs.core.config import EngineConfig
from bundlefs.engine.enumerator import enumerate_tree
from bundlefs.engine.errors import SourceNotFoundError, is_not_found, wrap_os_error
from bundlefs.engine.models import EntryStat, ProgressCallback, ProgressEvent
from bundlefs.engine.pool import run_bounded

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WipeResult:
    """Summary of a wipe.

    Attributes:
        path: Path that was wiped.
        files_removed: Number of files and symlinks unlinked.
        dirs_removed: Number of directories removed, including ``path`` itself.
    """

    path: str
    files_removed: int = 0
    dirs_removed: int = 0


def _lstat_or_none(path: str) -> EntryStat | None:
    try:
        return EntryStat.from_stat(os.lstat(path))
    except OSError as e:
        if is_not_found(e):
            return None
        raise wrap_os_error(e, path, "stat") from e


def _unlink(path: str) -> None:
    try:
        os.unlink(path)
    except OSError as e:
        if not is_not_found(e):
            raise wrap_os_error(e, path, "unlink") from e


def _rmdir(path: str) -> None:
    try:
        os.rmdir(path)
    except OSError as e:
        if not is_not_found(e):
            raise wrap_os_error(e, path, "rmdir") from e


def wipe(
    path: str | os.PathLike[str],
    *,
    config: EngineConfig | None = None,
    on_progress: ProgressCallback | None = None,
) -> WipeResult:
    """Delete ``path`` entirely, whether it is a file, symlink or directory.

    Args:
        path: Path to remove.
        config: Engine configuration (pool size, ignore patterns).
        on_progress: Called once per removed file.

    Returns:
        WipeResult summarizing what was removed.

    Raises:
        IOFault: On the first failure other than not-found. Entries removed
            before the failure stay removed.
    """
    config = config or EngineConfig()
    root = os.fspath(path)
    logger.debug("wipe %s", root)

    root_stat = _lstat_or_none(root)
    if root_stat is None:
        return WipeResult(path=root)

    if not root_stat.is_directory:
        logger.debug("unlink %s", root)
        _unlink(root)
        return WipeResult(path=root, files_removed=1)

    try:
        listing = enumerate_tree(root, config.ignore_patterns)
    except SourceNotFoundError:
        return WipeResult(path=root)

    dirs: list[str] = []
    files: list[str] = []
    for rel in listing.all_paths:
        entry_stat = _lstat_or_none(os.path.join(root, rel))
        if entry_stat is None:
            continue
        if entry_stat.is_directory:
            dirs.append(rel)
        else:
            files.append(rel)

    total = len(files)
    done = 0
    lock = threading.Lock()

    def unlink(rel: str) -> None:
        nonlocal done
        full = os.path.join(root, rel)
        logger.debug("unlink %s", full)
        _unlink(full)
        with lock:
            done += 1
            if on_progress is not None:
                on_progress(ProgressEvent.of(done, total))

    run_bounded(unlink, files, config.concurrency_limit)

    # deepest first, one at a time
    dirs.sort(key=len, reverse=True)
    for rel in dirs:
        full = os.path.join(root, rel)
        logger.debug("rmdir %s", full)
        _rmdir(full)

    logger.debug("rmdir %s", root)
    _rmdir(root)

    logger.info("Wiped %s (removed %d files & %d directories)", root, len(files), len(dirs))
    return WipeResult(path=root, files_removed=len(files), dirs_removed=len(dirs) + 1)
