"""Recursive, ignore-aware tree enumeration.

Walks a directory with os.scandir, including hidden entries, and
reports every entry relative to the root. Symlinks are reported as
such and never followed into.
"""

import fnmatch
import logging
import os
from collections.abc import Iterable

from bundlefs.engine.errors import SourceNotFoundError, is_not_found, wrap_os_error
from bundlefs.engine.models import EntryStat, TreeListing

logger = logging.getLogger(__name__)


def is_ignored(relative_path: str, patterns: Iterable[str]) -> bool:
    """Check if a relative path matches any ignore pattern.

    Patterns are glob rules matched against the POSIX form of the path.
    A leading ``**/`` also matches at the top level, and a trailing
    ``/**`` also matches the directory itself.

    Args:
        relative_path: Path relative to the walked root.
        patterns: Glob rules to test.

    Returns:
        True if the path should be excluded.
    """
    posix = relative_path.replace(os.sep, "/")

    for pattern in patterns:
        candidates = {pattern}
        if pattern.startswith("**/"):
            candidates.add(pattern[3:])
        for candidate in list(candidates):
            if candidate.endswith("/**"):
                candidates.add(candidate[:-3])

        if any(fnmatch.fnmatchcase(posix, c) for c in candidates):
            return True

    return False


def enumerate_tree(root: str | os.PathLike[str], ignore_patterns: Iterable[str] = ()) -> TreeListing:
    """List every entry under ``root``.

    Entries that vanish between listing and stat are dropped. Ignored
    directories are pruned along with everything beneath them.

    Args:
        root: Directory to walk.
        ignore_patterns: Glob rules excluding matching relative paths.

    Returns:
        TreeListing of directories and (file or symlink, stat) pairs.

    Raises:
        SourceNotFoundError: If ``root`` does not exist.
        IOFault: If a directory cannot be listed or an entry cannot be stat'd.
    """
    root_str = os.fspath(root)
    patterns = tuple(ignore_patterns)

    directories: list[str] = []
    files: list[tuple[str, EntryStat]] = []

    # (absolute dir, relative dir) pairs still to be listed
    pending: list[tuple[str, str]] = [(root_str, "")]

    while pending:
        current, current_rel = pending.pop()
        try:
            with os.scandir(current) as it:
                entries = list(it)
        except OSError as e:
            if is_not_found(e):
                if not current_rel:
                    raise SourceNotFoundError(root_str) from e
                logger.debug("Directory vanished during walk: %s", current)
                continue
            raise wrap_os_error(e, current, "list") from e

        for entry in entries:
            rel = os.path.join(current_rel, entry.name) if current_rel else entry.name
            if is_ignored(rel, patterns):
                logger.debug("Ignoring %s", rel)
                continue

            try:
                entry_stat = EntryStat.from_stat(entry.stat(follow_symlinks=False))
            except OSError as e:
                if is_not_found(e):
                    logger.debug("Entry vanished during walk: %s", entry.path)
                    continue
                raise wrap_os_error(e, entry.path, "stat") from e

            if entry_stat.is_directory:
                directories.append(rel)
                pending.append((entry.path, rel))
            else:
                files.append((rel, entry_stat))

    return TreeListing(root=root_str, directories=tuple(directories), files=tuple(files))
