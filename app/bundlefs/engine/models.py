"""Engine data models.

This module defines the data structures passed between the engine
components: per-entry stats, tree listings, progress events and the
options accepted by the mirroring operation.
"""

import os
import stat
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum


class EntryKind(str, Enum):
    """Kind of a filesystem entry found during a walk.

    Attributes:
        FILE: Regular file (or any non-directory, non-symlink entry).
        DIRECTORY: Directory.
        SYMLINK: Symbolic link, never followed.
    """

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"


class Operation(str, Enum):
    """How ditto places files at the destination.

    Attributes:
        COPY: Stream the bytes into a new destination file.
        MOVE: Rename the source file into place.
    """

    COPY = "copy"
    MOVE = "move"


@dataclass(frozen=True, slots=True)
class EntryStat:
    """Stat information for one entry of a walk.

    Attributes:
        kind: Entry kind (file, directory, symlink).
        mode: Permission bits of the entry.
        size: Size in bytes as reported by lstat.
    """

    kind: EntryKind
    mode: int
    size: int

    @classmethod
    def from_stat(cls, st: os.stat_result) -> "EntryStat":
        """Build an EntryStat from an lstat result."""
        if stat.S_ISLNK(st.st_mode):
            kind = EntryKind.SYMLINK
        elif stat.S_ISDIR(st.st_mode):
            kind = EntryKind.DIRECTORY
        else:
            kind = EntryKind.FILE
        return cls(kind=kind, mode=stat.S_IMODE(st.st_mode), size=st.st_size)

    @property
    def is_directory(self) -> bool:
        return self.kind == EntryKind.DIRECTORY

    @property
    def is_symlink(self) -> bool:
        return self.kind == EntryKind.SYMLINK


@dataclass(frozen=True, slots=True)
class TreeListing:
    """Relative paths found under a root, split into directories and files.

    Files include symlinks. Paths use the OS separator and are relative
    to ``root``.

    Attributes:
        root: Root directory that was enumerated.
        directories: Relative paths of all directories.
        files: (relative path, stat) pairs for files and symlinks.
    """

    root: str
    directories: tuple[str, ...] = ()
    files: tuple[tuple[str, EntryStat], ...] = ()

    @property
    def file_count(self) -> int:
        return len(self.files)

    @property
    def all_paths(self) -> tuple[str, ...]:
        """Every relative path in the listing, directories first."""
        return (*self.directories, *(rel for rel, _ in self.files))


@dataclass(frozen=True, slots=True)
class ProgressEvent:
    """Completion state of a running operation.

    Attributes:
        percent: Completion percentage between 0.0 and 100.0.
        done: Number of completed entries.
        total: Number of entries the operation will process.
    """

    percent: float
    done: int = 0
    total: int = 0

    def __post_init__(self) -> None:
        """Validate progress data after initialization."""
        if not (0.0 <= self.percent <= 100.0):
            msg = f"Percent must be between 0.0 and 100.0, got {self.percent}"
            raise ValueError(msg)
        if self.done < 0 or self.total < 0:
            msg = f"Counts cannot be negative, got done={self.done} total={self.total}"
            raise ValueError(msg)

    @classmethod
    def of(cls, done: int, total: int) -> "ProgressEvent":
        """Build an event for ``done`` out of ``total`` entries."""
        percent = 100.0 if total == 0 else min(100.0, done * 100.0 / total)
        return cls(percent=percent, done=done, total=total)


ProgressCallback = Callable[[ProgressEvent], None]
SkipPredicate = Callable[[str], bool]


def _no_progress(event: ProgressEvent) -> None:
    _ = event


def _never_skip(relative_path: str) -> bool:
    _ = relative_path
    return False


@dataclass(frozen=True, slots=True)
class DittoOptions:
    """Options accepted by ditto.

    Attributes:
        on_progress: Called once per completed entry.
        should_skip: Given a relative path, returns True to leave it out.
        operation: Copy bytes or move files into place.
    """

    on_progress: ProgressCallback = field(default=_no_progress)
    should_skip: SkipPredicate = field(default=_never_skip)
    operation: Operation = Operation.COPY
