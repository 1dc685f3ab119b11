"""
One-shot logging command.

Starts a logger from the configuration file, dispatches a single message
and stops again. Handy for shell scripts that want their output in the
same log tree as the application.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from session_logger.config.read_config import read_config, settings_from_config
from session_logger.core.constants import DEFAULT_CONFIG_NAME
from session_logger.core.dispatcher import SessionLogger

app = typer.Typer()


class SeverityChoice(str, Enum):
    info = "info"
    debug = "debug"
    warn = "warn"
    error = "error"


@app.command()
def emit(
    severity: Annotated[SeverityChoice, typer.Argument(help="Severity of the message.")],
    text: Annotated[str, typer.Argument(help="Message text.")],
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Path of the logger configuration file."),
    ] = Path(DEFAULT_CONFIG_NAME),
    origin: Annotated[
        str,
        typer.Option("--origin", help="Origin shown for debug messages and used to name warning archives."),
    ] = "shell",
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Show debug messages on the console."),
    ] = False,
    allow_exit: Annotated[
        bool,
        typer.Option(
            "--allow-exit",
            help="Allow error messages, which wait the shutdown delay and exit with the fatal status.",
        ),
    ] = False,
) -> None:
    """
    Log a single message to the console and the log tree.

    :param severity: info, debug, warn or error.
    :param text: Message text.
    :param config: Logger configuration file; defaults apply if it does not exist.
    :param origin: Origin of the message.
    :param debug: Force debug messages onto the console.
    :param allow_exit: Required for error messages.
    :raises typer.Exit: For error messages, with the fatal exit status.
    """
    if severity is SeverityChoice.error and not allow_exit:
        typer.echo(
            typer.style(
                "Error messages shut the logger down, pass --allow-exit to send one.",
                fg=typer.colors.RED,
            )
        )
        raise typer.Exit(1)

    settings = settings_from_config(
        read_config(config, missing_ok=True),
        base_dir=config.parent,
    )
    if debug:
        settings["debug_enabled"] = True

    session = SessionLogger()
    session.start(**settings)
    try:
        if severity is SeverityChoice.info:
            session.info(text)
        elif severity is SeverityChoice.debug:
            session.debug(origin, text)
        elif severity is SeverityChoice.warn:
            session.warn(text, origin=origin)
        else:
            signal = session.error(text)
            raise typer.Exit(signal.exit_code)
    finally:
        session.stop()
