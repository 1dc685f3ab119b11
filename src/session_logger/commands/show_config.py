from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer

from session_logger.config.read_config import read_config, settings_from_config
from session_logger.core.constants import DEFAULT_CONFIG_NAME

app = typer.Typer()


@app.command()
def show_config(
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Path of the logger configuration file."),
    ] = Path(DEFAULT_CONFIG_NAME),
) -> None:
    """Print the settings the logger would start with, defaults included."""
    settings = settings_from_config(
        read_config(config, missing_ok=True),
        base_dir=config.parent,
    )
    typer.echo(json.dumps(settings, indent=4, ensure_ascii=False, default=str))
