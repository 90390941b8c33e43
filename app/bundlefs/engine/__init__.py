"""File-tree synchronization and eviction engine.

This module provides existence probing, ignore-aware enumeration,
additive mirroring (ditto), idempotent recursive deletion (wipe) and
progress scaling for multi-phase installer workflows.
"""

from bundlefs.engine.engine import FileTreeEngine
from bundlefs.engine.enumerator import enumerate_tree, is_ignored
from bundlefs.engine.eraser import WipeResult, wipe
from bundlefs.engine.errors import (
    FileTreeError,
    IOFault,
    NotInitializedError,
    PermissionDeniedError,
    SourceNotFoundError,
)
from bundlefs.engine.files import mkdir, read_chunk, read_file, write_file
from bundlefs.engine.mirror import DittoResult, ditto
from bundlefs.engine.models import (
    DittoOptions,
    EntryKind,
    EntryStat,
    Operation,
    ProgressEvent,
    TreeListing,
)
from bundlefs.engine.probe import exists
from bundlefs.engine.progress import subprogress

__all__ = [
    "DittoOptions",
    "DittoResult",
    "EntryKind",
    "EntryStat",
    "FileTreeEngine",
    "FileTreeError",
    "IOFault",
    "NotInitializedError",
    "Operation",
    "PermissionDeniedError",
    "ProgressEvent",
    "SourceNotFoundError",
    "TreeListing",
    "WipeResult",
    "ditto",
    "enumerate_tree",
    "exists",
    "is_ignored",
    "mkdir",
    "read_chunk",
    "read_file",
    "subprogress",
    "wipe",
    "write_file",
]
