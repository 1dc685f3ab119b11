from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from session_logger.filesystem.archive_display import build_archive_tree

app = typer.Typer()
console = Console()


@app.command()
def archives(
    directory: Annotated[
        Path,
        typer.Argument(help="Root of the log tree."),
    ] = Path("logs"),
) -> None:
    """Show the archived sessions and the per-origin warning and error logs."""
    if not directory.is_dir():
        typer.echo(
            typer.style(f"Log directory {directory} does not exist.", fg=typer.colors.RED)
        )
        raise typer.Exit(1)

    console.print(build_archive_tree(directory))
