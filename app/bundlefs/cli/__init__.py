"""CLI package for bundlefs.

This package contains the Typer application and all subcommands.
"""

from bundlefs.cli.main import app

__all__ = ["app"]
