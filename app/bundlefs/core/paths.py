"""XDG-compliant path management for bundlefs.

XDG defaults:
- Config: ~/.config/bundlefs/
- Data: ~/.local/share/bundlefs/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "bundlefs"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/bundlefs/ (or XDG_CONFIG_HOME/bundlefs/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_data_dir() -> Path:
    """Get the data directory path.

    The data directory is the default base for install libraries.

    Returns:
        Path to ~/.local/share/bundlefs/ (or XDG_DATA_HOME/bundlefs/).
    """
    return _get_xdg_dir("XDG_DATA_HOME", ".local/share")


def get_engine_config_path() -> Path:
    """Get the engine configuration file path.

    Returns:
        Path to ~/.config/bundlefs/engine.toml.
    """
    return get_config_dir() / "engine.toml"
