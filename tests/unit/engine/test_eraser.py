"""Unit tests for wipe.

Tests idempotence, depth ordering, symlink handling, progress reporting
and failure semantics of recursive deletion.
"""

import errno
import os
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest
from bundlefs.core.config import EngineConfig
from bundlefs.engine.eraser import WipeResult, wipe
from bundlefs.engine.errors import IOFault, PermissionDeniedError
from bundlefs.engine.models import ProgressEvent

MakeTree = Callable[[Path, dict[str, str | None]], Path]


class TestWipe:
    """Tests for wipe()."""

    def test_wipes_directory_tree(self, bundle_tree: Path) -> None:
        """A directory and everything beneath it is removed."""
        result = wipe(bundle_tree)

        assert not bundle_tree.exists()
        assert result.files_removed == 6
        # bin, data, data/levels, data/empty and the root itself
        assert result.dirs_removed == 5

    def test_missing_path_is_noop(self, tmp_path: Path) -> None:
        """Wiping a path that never existed succeeds."""
        result = wipe(tmp_path / "already-gone")

        assert result == WipeResult(path=str(tmp_path / "already-gone"))

    def test_idempotent(self, bundle_tree: Path) -> None:
        """A second wipe of the same path is a no-op."""
        wipe(bundle_tree)
        second = wipe(bundle_tree)

        assert second.files_removed == 0
        assert second.dirs_removed == 0
        assert not bundle_tree.exists()

    def test_wipes_single_file(self, tmp_path: Path) -> None:
        """A file is unlinked directly."""
        target = tmp_path / "file.txt"
        target.write_text("content")

        result = wipe(target)

        assert not target.exists()
        assert result.files_removed == 1

    def test_symlink_removed_not_target(self, tmp_path: Path, make_tree: MakeTree) -> None:
        """Wiping a symlink to a directory leaves the target alone."""
        make_tree(tmp_path, {"real/keep.txt": "keep", "alias": "->real"})

        wipe(tmp_path / "alias")

        assert not (tmp_path / "alias").is_symlink()
        assert (tmp_path / "real" / "keep.txt").read_text() == "keep"

    def test_symlink_inside_tree_not_followed(self, tmp_path: Path, make_tree: MakeTree) -> None:
        """Symlinks inside the wiped tree are unlinked, their targets survive."""
        make_tree(tmp_path, {"outside/keep.txt": "keep", "victim/alias": f"->{tmp_path / 'outside'}"})

        wipe(tmp_path / "victim")

        assert not (tmp_path / "victim").exists()
        assert (tmp_path / "outside" / "keep.txt").read_text() == "keep"

    def test_dangling_symlink(self, tmp_path: Path) -> None:
        """A dangling symlink is removed."""
        link = tmp_path / "dead"
        link.symlink_to(tmp_path / "nowhere")

        wipe(link)

        assert not link.is_symlink()

    def test_directories_removed_deepest_first(self, tmp_path: Path, make_tree: MakeTree) -> None:
        """a/b/c is removed strictly before a/b, which goes before a."""
        root = make_tree(tmp_path / "root", {"a/b/c/file": "x", "a/other": None})
        removed: list[str] = []
        real_rmdir = os.rmdir

        def recording_rmdir(path: str) -> None:
            removed.append(path)
            real_rmdir(path)

        with patch("bundlefs.engine.eraser.os.rmdir", side_effect=recording_rmdir):
            wipe(root)

        abc = str(root / "a" / "b" / "c")
        ab = str(root / "a" / "b")
        a = str(root / "a")
        assert removed.index(abc) < removed.index(ab) < removed.index(a)
        assert removed[-1] == str(root)

    def test_files_removed_before_directories(self, tmp_path: Path, make_tree: MakeTree) -> None:
        """Every unlink happens before the first rmdir."""
        root = make_tree(tmp_path / "root", {"a/1": "x", "a/b/2": "y", "3": "z"})
        calls: list[str] = []
        real_rmdir = os.rmdir
        real_unlink = os.unlink

        def recording_rmdir(path: str) -> None:
            calls.append("rmdir")
            real_rmdir(path)

        def recording_unlink(path: str) -> None:
            calls.append("unlink")
            real_unlink(path)

        with (
            patch("bundlefs.engine.eraser.os.rmdir", side_effect=recording_rmdir),
            patch("bundlefs.engine.eraser.os.unlink", side_effect=recording_unlink),
        ):
            wipe(root)

        assert calls == ["unlink"] * 3 + ["rmdir"] * 3

    def test_progress_monotonic(self, tmp_path: Path, make_tree: MakeTree) -> None:
        """Progress percentages never decrease and finish at done == total."""
        root = make_tree(tmp_path / "root", {f"d{i % 3}/f{i}": "x" for i in range(20)})
        events: list[ProgressEvent] = []

        wipe(root, config=EngineConfig(concurrency_limit=4), on_progress=events.append)

        percents = [e.percent for e in events]
        assert percents == sorted(percents)
        assert len(events) == 20
        assert events[-1].done == events[-1].total == 20

    def test_vanished_file_tolerated(self, tmp_path: Path, make_tree: MakeTree) -> None:
        """Files that disappear before unlink count as removed."""
        root = make_tree(tmp_path / "root", {"a": "x", "b": "y"})
        real_unlink = os.unlink

        def racing_unlink(path: str) -> None:
            real_unlink(path)
            if path.endswith("a"):
                raise FileNotFoundError(errno.ENOENT, "gone", path)

        with patch("bundlefs.engine.eraser.os.unlink", side_effect=racing_unlink):
            wipe(root)

        assert not root.exists()

    def test_permission_error_aborts(self, tmp_path: Path, make_tree: MakeTree) -> None:
        """A permission failure surfaces and the tree is left for a retry."""
        root = make_tree(tmp_path / "root", {"sub/file": "x"})

        with (
            patch(
                "bundlefs.engine.eraser.os.unlink",
                side_effect=PermissionError(errno.EACCES, "denied"),
            ),
            pytest.raises(PermissionDeniedError),
        ):
            wipe(root)

        assert (root / "sub" / "file").exists()

        # retrying once the fault is gone converges
        wipe(root)
        assert not root.exists()

    def test_rmdir_error_aborts(self, tmp_path: Path, make_tree: MakeTree) -> None:
        """A failing rmdir surfaces as IOFault after files are gone."""
        root = make_tree(tmp_path / "root", {"sub/file": "x"})

        with (
            patch("bundlefs.engine.eraser.os.rmdir", side_effect=OSError(errno.EBUSY, "busy")),
            pytest.raises(IOFault) as exc_info,
        ):
            wipe(root)

        assert exc_info.value.errno == errno.EBUSY
        assert not (root / "sub" / "file").exists()
        assert (root / "sub").is_dir()

    def test_stat_error_is_fatal(self, tmp_path: Path) -> None:
        """Stat failures other than not-found abort the wipe."""
        with (
            patch("bundlefs.engine.eraser.os.lstat", side_effect=OSError(errno.EIO, "I/O error")),
            pytest.raises(IOFault),
        ):
            wipe(tmp_path)
