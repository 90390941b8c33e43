"""Per-user install library.

Places downloaded bundles into per-game install directories and retires
obsolete installs, chaining the engine phases into one progress stream.
The library starts unloaded; using it before ``load`` is a programming
error and raises NotInitializedError.
"""

import logging
import os
from pathlib import Path

from bundlefs.engine.engine import FileTreeEngine
from bundlefs.engine.eraser import WipeResult
from bundlefs.engine.errors import NotInitializedError
from bundlefs.engine.mirror import DittoResult
from bundlefs.engine.models import DittoOptions, Operation, ProgressCallback, ProgressEvent
from bundlefs.engine.progress import subprogress

logger = logging.getLogger(__name__)

# Share of the install progress spent mirroring; the rest is cleanup
MIRROR_PHASE_END = 90.0


def _no_progress(event: ProgressEvent) -> None:
    _ = event


class InstallLibrary:
    """Install directories of one user.

    Attributes:
        engine: File-tree engine used for all disk work.
    """

    def __init__(self, engine: FileTreeEngine) -> None:
        self.engine = engine
        self._library_dir: Path | None = None

    @property
    def is_loaded(self) -> bool:
        return self._library_dir is not None

    @property
    def library_dir(self) -> Path:
        """Root of the loaded library.

        Raises:
            NotInitializedError: If no library is loaded.
        """
        if self._library_dir is None:
            raise NotInitializedError("Install library is not loaded; call load() first")
        return self._library_dir

    def load(self, base_dir: str | os.PathLike[str], user_id: int | str) -> Path:
        """Select and create the library directory for ``user_id``.

        Args:
            base_dir: Directory holding all user libraries.
            user_id: Owner of the library.

        Returns:
            Path to the library directory.
        """
        library_dir = Path(base_dir) / "users" / str(user_id)
        logger.info("Loading install library for user %s at %s", user_id, library_dir)
        self.engine.mkdir(library_dir)
        self._library_dir = library_dir
        return library_dir

    def unload(self) -> None:
        self._library_dir = None

    def install_dir(self, name: str) -> Path:
        """Install directory for ``name`` inside the library.

        Raises:
            NotInitializedError: If no library is loaded.
            ValueError: If ``name`` is not a single path component.
        """
        if not name or name in (".", "..") or os.sep in name or (os.altsep and os.altsep in name):
            msg = f"Invalid install name: {name!r}"
            raise ValueError(msg)
        return self.library_dir / "installs" / name

    def install(
        self,
        name: str,
        staging_dir: str | os.PathLike[str],
        *,
        on_progress: ProgressCallback | None = None,
        operation: Operation = Operation.MOVE,
    ) -> DittoResult:
        """Place a staged bundle into its install directory.

        The staged tree is mirrored into the install directory, then the
        staging directory is wiped.

        Args:
            name: Install name.
            staging_dir: Directory the bundle was extracted to.
            on_progress: Receives one continuous 0-100% stream.
            operation: Copy or move files out of the staging directory.

        Returns:
            DittoResult of the mirror phase.
        """
        destination = self.install_dir(name)
        report = on_progress or _no_progress

        logger.info("Installing %s from %s", name, staging_dir)
        result = self.engine.ditto(
            staging_dir,
            destination,
            DittoOptions(
                on_progress=subprogress(report, 0, MIRROR_PHASE_END),
                operation=operation,
            ),
        )
        self.engine.wipe(staging_dir, on_progress=subprogress(report, MIRROR_PHASE_END, 100))
        report(ProgressEvent(percent=100.0, done=result.files, total=result.files))
        return result

    def retire(self, name: str, *, on_progress: ProgressCallback | None = None) -> WipeResult:
        """Remove an obsolete install.

        Returns:
            WipeResult of the removal. Retiring a missing install is a no-op.
        """
        destination = self.install_dir(name)
        logger.info("Retiring %s at %s", name, destination)
        return self.engine.wipe(destination, on_progress=on_progress)

    def installed(self) -> list[str]:
        """Names of the installs currently present, sorted."""
        installs_root = self.library_dir / "installs"
        if not self.engine.exists(installs_root):
            return []
        return sorted(p.name for p in installs_root.iterdir() if p.is_dir() and not p.is_symlink())
