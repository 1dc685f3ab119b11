from __future__ import annotations

from pathlib import Path
from typing import TypedDict

from typing_extensions import NotRequired


class LoggerConfig(TypedDict, total=False):
    """
    Contents of a ``logger-config.yml`` file.

    :param name: Display name of the logger.
    :param debug: Show DEBUG messages on the console.
    :param directory: Root of the log tree.
    :param force_ansi: Force styled output on consoles that do not report support.
    """

    name: NotRequired[str]
    debug: NotRequired[bool]
    directory: NotRequired[str]
    force_ansi: NotRequired[bool]


class StartSettings(TypedDict):
    """Keyword arguments for ``SessionLogger.start``, defaults filled in."""

    name: str
    debug_enabled: bool
    log_directory: Path
    force_styled_output: bool
