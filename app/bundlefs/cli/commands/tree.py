"""Directory tree commands.

Provides commands to list, probe, mirror and erase directory trees.
"""

import json
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import typer
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn
from rich.table import Table

from bundlefs.cli.types import OutputFormat, get_engine
from bundlefs.engine.enumerator import is_ignored
from bundlefs.engine.errors import FileTreeError
from bundlefs.engine.models import DittoOptions, Operation, ProgressCallback, ProgressEvent, TreeListing
from bundlefs.utils.formatting import (
    console,
    format_size,
    print_error,
    print_info,
    print_success,
)

app = typer.Typer(
    help="List, mirror and erase directory trees.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command("ls")
def list_tree(
    ctx: typer.Context,
    root: Annotated[Path, typer.Argument(help="Directory to enumerate.")],
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-l",
            help="Limit number of results.",
        ),
    ] = None,
) -> None:
    """List every entry under ROOT."""
    engine = get_engine(ctx)

    try:
        listing = engine.enumerate(root)
    except FileTreeError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if output_format == OutputFormat.JSON:
        _print_json(listing, limit)
        return

    _print_table(listing, limit)

    total_size = sum(s.size for _, s in listing.files)
    console.print(
        f"\n[dim]{listing.file_count} files, {len(listing.directories)} directories "
        f"({format_size(total_size)} total)[/dim]"
    )


@app.command("exists")
def exists_cmd(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="Path to probe.", readable=False)],
) -> None:
    """Exit with 0 if PATH exists, 1 otherwise."""
    engine = get_engine(ctx)

    try:
        found = engine.exists(path)
    except FileTreeError as e:
        print_error(str(e))
        raise typer.Exit(code=2) from e

    if not found:
        print_info(f"Not found: {path}")
        raise typer.Exit(code=1)
    print_success(f"Exists: {path}")


@app.command("ditto")
def ditto_cmd(
    ctx: typer.Context,
    src: Annotated[Path, typer.Argument(help="Source file or directory.")],
    dst: Annotated[Path, typer.Argument(help="Destination path.")],
    move: Annotated[
        bool,
        typer.Option("--move", help="Rename files into place instead of copying."),
    ] = False,
    skip: Annotated[
        list[str] | None,
        typer.Option("--skip", "-s", help="Glob of relative paths to leave out (repeatable)."),
    ] = None,
    concurrency: Annotated[
        int | None,
        typer.Option("--concurrency", "-c", help="Override the worker pool size."),
    ] = None,
) -> None:
    """Mirror SRC into DST without removing anything from DST."""
    engine = get_engine(ctx, concurrency)
    skip_patterns = tuple(skip or ())
    quiet = _is_quiet(ctx)

    with _progress_bar("Mirroring", quiet) as on_progress:
        options = DittoOptions(
            on_progress=on_progress,
            should_skip=lambda rel: is_ignored(rel, skip_patterns),
            operation=Operation.MOVE if move else Operation.COPY,
        )
        try:
            result = engine.ditto(src, dst, options)
        except FileTreeError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e

    if result.skipped:
        print_info(f"Skipped {result.skipped} entries")
    verb = "Moved" if move else "Copied"
    print_success(f"{verb} {result.files} files and {result.directories} directories into {dst}")


@app.command("wipe")
def wipe_cmd(
    ctx: typer.Context,
    path: Annotated[Path, typer.Argument(help="Path to erase.", readable=False)],
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    concurrency: Annotated[
        int | None,
        typer.Option("--concurrency", "-c", help="Override the worker pool size."),
    ] = None,
) -> None:
    """Erase PATH and everything beneath it."""
    engine = get_engine(ctx, concurrency)

    # unreadable entries can still be removed, so only presence matters here
    if not os.path.lexists(path):
        print_info(f"Nothing to wipe: {path}")
        return

    if dry_run:
        print_info(f"Dry-run: would wipe {path}")
        return

    if not yes:
        confirmed = typer.confirm(f"Wipe {path} and everything beneath it?", default=False)
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    with _progress_bar("Wiping", _is_quiet(ctx)) as on_progress:
        try:
            result = engine.wipe(path, on_progress=on_progress)
        except FileTreeError as e:
            print_error(str(e))
            print_info("Wipe is safe to retry.")
            raise typer.Exit(code=1) from e

    print_success(
        f"Removed {result.files_removed} files & {result.dirs_removed} directories from {path}"
    )


# === Private helper functions ===


def _is_quiet(ctx: typer.Context) -> bool:
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    return bool(obj.get("quiet"))


@contextmanager
def _progress_bar(label: str, quiet: bool) -> Iterator[ProgressCallback]:
    """Yield a progress callback drawing a Rich progress bar."""
    if quiet:
        yield lambda event: None
        return

    with Progress(
        TextColumn("[info]{task.description}[/]"),
        BarColumn(),
        TaskProgressColumn(),
        TextColumn("[muted]{task.fields[counts]}[/]"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task(label, total=100.0, counts="")

        def on_progress(event: ProgressEvent) -> None:
            progress.update(task, completed=event.percent, counts=f"{event.done}/{event.total}")

        yield on_progress


def _print_table(listing: TreeListing, limit: int | None) -> None:
    """Display a listing as a Rich table."""
    table = Table(title=f"Contents of {listing.root}", show_lines=False)
    table.add_column("Path", style="bold")
    table.add_column("Type", width=10)
    table.add_column("Mode", width=6)
    table.add_column("Size", justify="right", width=10)

    rows: list[tuple[str, str, str, str]] = [(d, "directory", "-", "-") for d in sorted(listing.directories)]
    for rel, entry_stat in sorted(listing.files, key=lambda f: f[0]):
        rows.append((rel, entry_stat.kind.value, f"{entry_stat.mode:o}", format_size(entry_stat.size)))

    for row in rows[:limit] if limit else rows:
        table.add_row(*row)

    console.print(table)


def _print_json(listing: TreeListing, limit: int | None) -> None:
    """Display a listing as JSON."""
    data = [{"path": d, "kind": "directory"} for d in sorted(listing.directories)]
    data.extend(
        {
            "path": rel,
            "kind": entry_stat.kind.value,
            "mode": entry_stat.mode,
            "size": entry_stat.size,
        }
        for rel, entry_stat in sorted(listing.files, key=lambda f: f[0])
    )
    console.print_json(json.dumps(data[:limit] if limit else data))
