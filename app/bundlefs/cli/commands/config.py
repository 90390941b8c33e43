"""Engine configuration commands.

Provides commands to show the effective engine configuration and to
write a default configuration file.
"""

from typing import Annotated

import typer
from rich.table import Table

from bundlefs.core.config import (
    EngineConfigError,
    get_default_config,
    load_or_default,
    save_engine_config,
)
from bundlefs.core.paths import get_engine_config_path
from bundlefs.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show and initialize the engine configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective engine configuration."""
    config_path = ctx.obj.get("config_path") if isinstance(ctx.obj, dict) else None
    path = config_path or get_engine_config_path()

    try:
        config = load_or_default(path)
    except EngineConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    table = Table(title="Engine Configuration", show_lines=False)
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    table.add_row("config file", str(path) if path.exists() else f"{path} (defaults)")
    table.add_row("concurrency_limit", str(config.concurrency_limit))
    table.add_row("ignore_patterns", ", ".join(config.ignore_patterns) or "-")
    console.print(table)


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a default engine configuration file."""
    config_path = ctx.obj.get("config_path") if isinstance(ctx.obj, dict) else None
    path = config_path or get_engine_config_path()

    if path.exists() and not force:
        print_info(f"Config already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_engine_config(get_default_config(), path)
    except EngineConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Wrote default engine config to {saved}")
