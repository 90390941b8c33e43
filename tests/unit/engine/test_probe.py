"""Unit tests for the existence probe."""

import errno
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from bundlefs.engine.errors import IOFault, PermissionDeniedError
from bundlefs.engine.probe import exists


class TestExists:
    """Tests for exists()."""

    def test_existing_file(self, tmp_path: Path) -> None:
        """An existing file is reported as present."""
        target = tmp_path / "file.txt"
        target.write_text("content")

        assert exists(target) is True

    def test_existing_directory(self, tmp_path: Path) -> None:
        """An existing directory is reported as present."""
        assert exists(str(tmp_path)) is True

    def test_missing_path(self, tmp_path: Path) -> None:
        """A missing path is a plain False, not an error."""
        assert exists(tmp_path / "nope") is False

    def test_dangling_symlink(self, tmp_path: Path) -> None:
        """A symlink whose target is gone is reported as missing."""
        link = tmp_path / "dead"
        link.symlink_to(tmp_path / "gone")

        assert exists(link) is False

    def test_permission_error_raises(self, tmp_path: Path) -> None:
        """Permission failures surface as PermissionDeniedError."""
        with (
            patch("bundlefs.engine.probe.os.stat", side_effect=PermissionError(errno.EACCES, "denied")),
            pytest.raises(PermissionDeniedError) as exc_info,
        ):
            exists(tmp_path / "locked")

        assert exc_info.value.path == str(tmp_path / "locked")
        assert exc_info.value.errno == errno.EACCES

    def test_io_error_raises(self, tmp_path: Path) -> None:
        """Other OS failures surface as IOFault."""
        with (
            patch("bundlefs.engine.probe.os.stat", side_effect=OSError(errno.EIO, "I/O error")),
            pytest.raises(IOFault) as exc_info,
        ):
            exists(tmp_path / "broken")

        assert not isinstance(exc_info.value, PermissionDeniedError)
        assert exc_info.value.errno == errno.EIO

    def test_unreadable_path_raises(self, tmp_path: Path) -> None:
        """An existing path that fails the read check is a permission error."""
        target = tmp_path / "file.txt"
        target.write_text("content")

        with (
            patch("bundlefs.engine.probe.os.access", return_value=False),
            pytest.raises(PermissionDeniedError),
        ):
            exists(target)

    def test_path_vanishing_before_read_check(self, tmp_path: Path) -> None:
        """A path removed between the stat and the read check reports False."""
        target = tmp_path / "file.txt"
        target.write_text("content")

        def remove_then_deny(path: str, mode: int) -> bool:
            os.unlink(path)
            return False

        with patch("bundlefs.engine.probe.os.access", side_effect=remove_then_deny):
            assert exists(target) is False
