from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional

import typer
import yaml

from session_logger.config.config_validator import validate_logger_config
from session_logger.core.constants import DEFAULT_NAME, default_log_directory

if TYPE_CHECKING:
    from session_logger.config.config_type_hint import LoggerConfig, StartSettings


def read_config(file_path: Path, /, *, missing_ok: bool = False) -> LoggerConfig:
    """
    Reads a logger configuration file and returns its content as a dictionary.

    :param file_path: The Path object of the configuration file.
    :param missing_ok: Return an empty configuration instead of exiting when
                       the file does not exist.
    :raises typer.Exit: If the file does not exist, cannot be parsed or is invalid.
    :return: A dictionary containing the configuration data.
    """
    if not file_path.exists():
        if missing_ok:
            return {}
        typer.echo(
            typer.style(
                f"Configuration file {file_path} does not exist.",
                fg=typer.colors.RED,
            )
        )
        raise typer.Exit(1)

    with open(file_path, encoding="utf-8") as file:
        try:
            config = yaml.safe_load(file)
        except yaml.YAMLError as e:
            typer.echo(
                typer.style(f"Error reading YAML file: {e}", fg=typer.colors.RED),
            )
            raise typer.Exit(1)

    errors = validate_logger_config(config)
    if errors:
        for error in errors:
            typer.echo(typer.style(f"{file_path}: {error}", fg=typer.colors.RED))
        raise typer.Exit(1)

    return config or {}


def settings_from_config(
    config: LoggerConfig,
    base_dir: Optional[Path] = None,
) -> StartSettings:
    """
    Fill in defaults and turn a configuration into ``SessionLogger.start`` arguments.

    :param config: A validated configuration, possibly empty.
    :param base_dir: Directory relative ``directory`` values are resolved against,
                     usually the one holding the config file.
    :return: Keyword arguments for ``SessionLogger.start``.
    """
    directory = config.get("directory")
    if directory is None:
        log_directory = default_log_directory()
    else:
        log_directory = Path(directory).expanduser()
        if not log_directory.is_absolute() and base_dir is not None:
            log_directory = base_dir.joinpath(log_directory)

    return {
        "name": config.get("name", DEFAULT_NAME),
        "debug_enabled": config.get("debug", False),
        "log_directory": log_directory,
        "force_styled_output": config.get("force_ansi", False),
    }
