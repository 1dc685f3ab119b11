from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from session_logger.core.constants import FULL_DIR_NAME, LATEST_LOG_NAME
from session_logger.filesystem.rotation import rotate_latest

app = typer.Typer()
console = Console()


@app.command()
def rotate(
    directory: Annotated[
        Path,
        typer.Argument(help="Root of the log tree (the directory holding full/, warn/ and error/)."),
    ] = Path("logs"),
) -> None:
    """
    Archive the current "latest" log and start an empty one, as a logger
    start would.

    :param directory: Root of the log tree.
    :raises typer.Exit: If ``directory`` has no ``full/`` subdirectory.
    """
    full_dir = directory.joinpath(FULL_DIR_NAME)
    if not full_dir.is_dir():
        typer.echo(
            typer.style(f"No log directory found at {full_dir}.", fg=typer.colors.RED)
        )
        raise typer.Exit(1)

    archived = rotate_latest(full_dir)

    if archived is None:
        console.print(f"[yellow]Nothing archived, {LATEST_LOG_NAME} was empty or already archived.[/yellow]")
    else:
        console.print(f"[green]Previous session archived to {archived}[/green]")
