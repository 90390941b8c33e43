"""File-tree engine facade.

Binds the engine operations to one explicit EngineConfig so callers do
not have to pass it on every call.
"""

import os

from bundlefs.core.config import EngineConfig
from bundlefs.engine import eraser, files, mirror, probe
from bundlefs.engine.enumerator import enumerate_tree
from bundlefs.engine.eraser import WipeResult
from bundlefs.engine.mirror import DittoResult
from bundlefs.engine.models import DittoOptions, ProgressCallback, TreeListing
from bundlefs.engine.progress import subprogress

PathArg = str | os.PathLike[str]


class FileTreeEngine:
    """Mirrors and erases directory trees under a fixed configuration.

    Attributes:
        config: Pool size and ignore patterns applied to every call.
    """

    subprogress = staticmethod(subprogress)

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    def exists(self, path: PathArg) -> bool:
        return probe.exists(path)

    def enumerate(self, root: PathArg) -> TreeListing:
        return enumerate_tree(root, self.config.ignore_patterns)

    def wipe(self, path: PathArg, on_progress: ProgressCallback | None = None) -> WipeResult:
        return eraser.wipe(path, config=self.config, on_progress=on_progress)

    def ditto(self, src: PathArg, dst: PathArg, options: DittoOptions | None = None) -> DittoResult:
        return mirror.ditto(src, dst, options, config=self.config)

    def mkdir(self, path: PathArg) -> None:
        files.mkdir(path)

    def read_file(self, path: PathArg) -> str:
        return files.read_file(path)

    def write_file(self, path: PathArg, contents: str) -> None:
        files.write_file(path, contents)

    def read_chunk(self, path: PathArg, offset: int, length: int) -> bytes:
        return files.read_chunk(path, offset, length)
