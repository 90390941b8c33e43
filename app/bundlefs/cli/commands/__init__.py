"""CLI commands for bundlefs.

This package contains all subcommand implementations.
"""

from bundlefs.cli.commands import config, library, tree

__all__ = ["config", "library", "tree"]
