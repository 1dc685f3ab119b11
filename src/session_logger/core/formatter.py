"""
Console and file renderings of a :class:`Message`.

Both renderings are pure: they read the message and the values held by the
formatter (the logger's display name and the archive directory named in
the shutdown notice) and nothing else. The console rendering is a
:class:`rich.text.Text`; its ``plain`` value is exactly what gets printed
when the console cannot display styles.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple, Optional

from rich.text import Text

from session_logger.core.constants import (
    CONSOLE_TIME_FORMAT,
    FILE_TIME_FORMAT,
    SHUTDOWN_DELAY_SECONDS,
)
from session_logger.core.message import Message, Severity, short_name

if TYPE_CHECKING:
    from pathlib import Path

    from session_logger.core.message import Failure

WARN_SEPARATOR = "================================"
ERROR_BANNER = "##############################"
NO_DETAILS = "No details available."


class TagStyle(NamedTuple):
    """Rich styles for the ``[time][name][SEVERITY]`` header and the text after it."""

    time: str
    name: str
    severity: str
    body: str = ""


TAG_STYLES: dict[Severity, TagStyle] = {
    Severity.INFO: TagStyle("black on white", "cyan on white", "black on white"),
    Severity.DEBUG: TagStyle("black on white", "cyan on white", "magenta on white", "cyan"),
    Severity.WARN: TagStyle("black on white", "cyan on white", "yellow on white", "yellow"),
    Severity.ERROR: TagStyle("white on red", "white on red", "white on red", "white on red"),
}


class MessageFormatter:
    """
    Renders messages for the console and for log files.

    :param name: Display name of the logger, shown in every tag header.
    :param full_dir: Directory holding the session logs, named in the ERROR shutdown notice.
    :param shutdown_delay: Seconds announced in the ERROR shutdown notice.
    """

    def __init__(
        self,
        name: str,
        full_dir: Path,
        shutdown_delay: float = SHUTDOWN_DELAY_SECONDS,
    ) -> None:
        self.name = name
        self.full_dir = full_dir
        self.shutdown_delay = shutdown_delay

    # --- console ---

    def format_console(self, message: Message) -> Text:
        """
        Render ``message`` as styled console text, newline terminated.

        :param message: Message to render.
        :return: Styled text; ``Text.plain`` is the unstyled rendering.
        """
        style = TAG_STYLES.get(message.severity, TAG_STYLES[Severity.INFO])
        tags = self._console_tags(message, style)
        text = Text()

        if message.severity is Severity.WARN:
            for line in self._warn_lines(message, include_cause=False):
                text.append_text(tags)
                text.append(line, style=style.body)
                text.append("\n")
        elif message.severity is Severity.ERROR:
            for line in self._error_lines(message, include_cause=False):
                text.append_text(tags)
                text.append(line, style=style.body)
                text.append("\n")
        elif message.severity is Severity.DEBUG:
            text.append_text(tags)
            text.append(f"[{short_name(message.origin)}]", style=style.body)
            text.append(f" {_content(message)}")
            text.append("\n")
        else:
            text.append_text(tags)
            text.append(f" {_content(message)}", style=style.body)
            text.append("\n")

        return text

    def _console_tags(self, message: Message, style: TagStyle) -> Text:
        tags = Text()
        tags.append(f"[{message.timestamp.strftime(CONSOLE_TIME_FORMAT)}]", style=style.time)
        tags.append(f"[{self.name}]", style=style.name)
        tags.append(f"[{message.severity}]", style=style.severity)
        return tags

    # --- file ---

    def format_file(self, message: Message) -> str:
        """
        Render ``message`` as plain text for the log files, newline terminated.

        :param message: Message to render.
        :return: One or more lines, each starting with the tag header.
        """
        tags = (
            f"[{message.timestamp.strftime(FILE_TIME_FORMAT)}]"
            f"[{self.name}][{message.severity}]"
        )

        if message.severity is Severity.WARN:
            lines = self._warn_lines(message, include_cause=True)
        elif message.severity is Severity.ERROR:
            lines = self._error_lines(message, include_cause=True)
        elif message.severity is Severity.DEBUG:
            lines = [f"[{short_name(message.origin)}] {_content(message)}"]
        else:
            lines = [f" {_content(message)}"]

        return "".join(f"{tags}{line}\n" for line in lines)

    # --- shared block bodies ---

    def _warn_lines(self, message: Message, *, include_cause: bool) -> list[str]:
        body = _details(message, include_cause=include_cause)
        return [f" {line}" for line in (WARN_SEPARATOR, *body, WARN_SEPARATOR)]

    def _error_lines(self, message: Message, *, include_cause: bool) -> list[str]:
        body = _details(message, include_cause=include_cause)
        body.append(
            f"{self.name} is shutting down in {self.shutdown_delay:g} seconds. "
            f"Log saved to {self.full_dir}."
        )
        return [f"[!] {line} [!]" for line in (ERROR_BANNER, *body, ERROR_BANNER)]


def _content(message: Message) -> str:
    return message.content if message.content is not None else ""


def _details(message: Message, *, include_cause: bool) -> list[str]:
    lines = [f"Details: {message.content}" if message.content else f"Details: {NO_DETAILS}"]

    failure: Optional[Failure] = message.failure
    if failure is None:
        return lines

    lines.append(f"Message: {failure}")
    if include_cause:
        cause = failure.cause
        while cause is not None:
            lines.append(f"Cause: {cause}")
            cause = cause.cause
    lines.extend(str(frame) for frame in failure.frames)
    return lines
