"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from enum import Enum
from pathlib import Path

import typer

from bundlefs.core.config import EngineConfig, EngineConfigError, load_or_default
from bundlefs.engine.engine import FileTreeEngine
from bundlefs.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options for listings."""

    TABLE = "table"
    JSON = "json"


def get_engine(ctx: typer.Context, concurrency: int | None = None) -> FileTreeEngine:
    """Build an engine from the config selected on the command line.

    Args:
        ctx: Typer context carrying the global ``config_path`` option.
        concurrency: Optional override of the configured pool size.

    Returns:
        FileTreeEngine bound to the effective configuration.
    """
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    config_path: Path | None = obj.get("config_path")

    try:
        config = load_or_default(config_path)
    except EngineConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if concurrency is not None:
        try:
            config = EngineConfig(
                concurrency_limit=concurrency,
                ignore_patterns=config.ignore_patterns,
            )
        except ValueError as e:
            print_error(f"Invalid concurrency: {concurrency}")
            raise typer.Exit(code=1) from e

    return FileTreeEngine(config)
