"""Unit tests for XDG path management.

Tests for the paths module that provides XDG-compliant directory paths.
"""

import os
from pathlib import Path
from unittest.mock import patch

from bundlefs.core.paths import APP_NAME, get_config_dir, get_data_dir, get_engine_config_path


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_default_config_dir(self) -> None:
        """get_config_dir returns default path when XDG_CONFIG_HOME not set."""
        with patch.dict(os.environ, {}, clear=True):
            os.environ.pop("XDG_CONFIG_HOME", None)

            result = get_config_dir()

        assert result == Path.home() / ".config" / APP_NAME

    def test_respects_xdg_config_home(self, tmp_path: Path) -> None:
        """get_config_dir respects XDG_CONFIG_HOME environment variable."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = get_config_dir()

        assert result == tmp_path / APP_NAME


class TestGetDataDir:
    """Tests for get_data_dir function."""

    def test_default_data_dir(self) -> None:
        """get_data_dir returns default path when XDG_DATA_HOME not set."""
        with patch.dict(os.environ, {}, clear=True):
            os.environ.pop("XDG_DATA_HOME", None)

            result = get_data_dir()

        assert result == Path.home() / ".local" / "share" / APP_NAME

    def test_respects_xdg_data_home(self, tmp_path: Path) -> None:
        """get_data_dir respects XDG_DATA_HOME environment variable."""
        with patch.dict(os.environ, {"XDG_DATA_HOME": str(tmp_path)}):
            result = get_data_dir()

        assert result == tmp_path / APP_NAME


def test_engine_config_path(tmp_path: Path) -> None:
    """The engine config lives in the config directory."""
    with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
        result = get_engine_config_path()

    assert result == tmp_path / APP_NAME / "engine.toml"
