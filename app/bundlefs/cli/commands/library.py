"""Install library commands.

Provides commands to install staged bundles into a user's library,
retire obsolete installs and list what is installed.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn

from bundlefs.cli.types import get_engine
from bundlefs.core.paths import get_data_dir
from bundlefs.engine.errors import FileTreeError
from bundlefs.engine.models import Operation, ProgressEvent
from bundlefs.installs.library import InstallLibrary
from bundlefs.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Install and retire bundles in a user library.",
    invoke_without_command=True,
    no_args_is_help=True,
)

UserOption = Annotated[str, typer.Option("--user", "-u", help="Library owner.")]
BaseDirOption = Annotated[
    Path | None,
    typer.Option("--base-dir", help="Directory holding user libraries."),
]


def _load_library(ctx: typer.Context, user: str, base_dir: Path | None) -> InstallLibrary:
    library = InstallLibrary(get_engine(ctx))
    try:
        library.load(base_dir or get_data_dir(), user)
    except FileTreeError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    return library


@app.command()
def install(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Install name.")],
    staging_dir: Annotated[Path, typer.Argument(help="Directory holding the extracted bundle.")],
    user: UserOption = "default",
    base_dir: BaseDirOption = None,
    copy: Annotated[
        bool,
        typer.Option("--copy", help="Copy instead of moving files out of the staging directory."),
    ] = False,
) -> None:
    """Install the bundle in STAGING_DIR as NAME."""
    library = _load_library(ctx, user, base_dir)

    with Progress(
        TextColumn("[info]{task.description}[/]"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
        transient=True,
        disable=bool(isinstance(ctx.obj, dict) and ctx.obj.get("quiet")),
    ) as progress:
        task = progress.add_task(f"Installing {name}", total=100.0)

        def on_progress(event: ProgressEvent) -> None:
            progress.update(task, completed=event.percent)

        try:
            result = library.install(
                name,
                staging_dir,
                on_progress=on_progress,
                operation=Operation.COPY if copy else Operation.MOVE,
            )
        except (FileTreeError, ValueError) as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e

    print_success(f"Installed {name} ({result.files} files) into {library.install_dir(name)}")


@app.command()
def retire(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Install name.")],
    user: UserOption = "default",
    base_dir: BaseDirOption = None,
) -> None:
    """Remove the install NAME."""
    library = _load_library(ctx, user, base_dir)

    try:
        result = library.retire(name)
    except (FileTreeError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if result.files_removed == 0 and result.dirs_removed == 0:
        print_info(f"{name} is not installed.")
        return
    print_success(f"Retired {name} (removed {result.files_removed} files)")


@app.command("list")
def list_installs(
    ctx: typer.Context,
    user: UserOption = "default",
    base_dir: BaseDirOption = None,
) -> None:
    """List installs in the library."""
    library = _load_library(ctx, user, base_dir)

    names = library.installed()
    if not names:
        print_info("No installs found.")
        return
    for name in names:
        console.print(name)
