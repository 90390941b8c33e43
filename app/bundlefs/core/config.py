"""Engine configuration and settings.

This module provides the configuration model and I/O functions for the
file-tree engine. The configuration is an explicit value handed to the
engine at construction time; nothing in the engine reads it implicitly.

Configuration is stored in ~/.config/bundlefs/engine.toml
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from bundlefs.core.paths import get_engine_config_path

DEFAULT_CONCURRENCY_LIMIT = 8

# On macOS, trashes exist on dmg volumes but cannot be listed
DEFAULT_IGNORE_PATTERNS: tuple[str, ...] = ("**/.Trashes/**",)


class EngineConfig(BaseModel):
    """Configuration for the file-tree engine.

    Attributes:
        concurrency_limit: Maximum number of file-level I/O tasks in flight.
        ignore_patterns: Glob rules excluding matching paths from every walk.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    concurrency_limit: Annotated[
        int,
        Field(ge=1, le=256, description="Worker pool size for file-level I/O (1-256)"),
    ] = DEFAULT_CONCURRENCY_LIMIT
    ignore_patterns: Annotated[
        tuple[str, ...],
        Field(description="Glob rules excluded from enumeration"),
    ] = DEFAULT_IGNORE_PATTERNS

    @field_validator("ignore_patterns")
    @classmethod
    def validate_patterns(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Reject blank patterns, which would match nothing useful."""
        for pattern in v:
            if not pattern.strip():
                msg = "ignore_patterns cannot contain empty patterns"
                raise ValueError(msg)
        return v


class EngineConfigError(Exception):
    """Base exception for engine configuration errors."""


class EngineConfigNotFoundError(EngineConfigError):
    """Raised when the engine config file is not found."""


class EngineConfigParseError(EngineConfigError):
    """Raised when the engine config file cannot be parsed."""


def get_default_config() -> EngineConfig:
    """Create a default EngineConfig."""
    return EngineConfig()


def load_engine_config(path: Path | None = None) -> EngineConfig:
    """Load engine configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses default engine config path.

    Returns:
        Validated EngineConfig object.

    Raises:
        EngineConfigNotFoundError: If the config file doesn't exist.
        EngineConfigParseError: If the TOML syntax is invalid.
        EngineConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_engine_config_path()

    if not config_path.exists():
        raise EngineConfigNotFoundError(f"Engine config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise EngineConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise EngineConfigError(f"Failed to read engine config: {e}") from e

    try:
        return EngineConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise EngineConfigError(f"Invalid engine config content: {e}") from e


def load_or_default(path: Path | None = None) -> EngineConfig:
    """Load the engine config, falling back to defaults if no file exists.

    Raises:
        EngineConfigError: If the file exists but is invalid.
    """
    try:
        return load_engine_config(path)
    except EngineConfigNotFoundError:
        return get_default_config()


def save_engine_config(config: EngineConfig, path: Path | None = None) -> Path:
    """Save engine configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The EngineConfig object to save.
        path: Path to save the config. If None, uses default engine config path.

    Returns:
        Path where the config was saved.

    Raises:
        EngineConfigError: If the file cannot be written.
    """
    config_path = path or get_engine_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "concurrency_limit": config.concurrency_limit,
        "ignore_patterns": list(config.ignore_patterns),
    }

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise EngineConfigError(f"Failed to write engine config: {e}") from e

    return config_path
