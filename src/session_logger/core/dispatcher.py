"""
The logging facade.

:class:`SessionLogger` receives raw messages from anywhere in the process
and forwards them, formatted, to every place a user might look: the
console, the session log file, the per-origin warn/error archives and any
registered listeners. Each destination has different display capabilities,
which is why the same message is rendered twice.

Typical use::

    log = SessionLogger()
    log.start("MyApp", debug_enabled=True, log_directory=Path("logs"))
    log.info("Ready")
    try:
        ...
    except OSError as e:
        log.warn("Could not read cache", e)
    log.stop()
"""

from __future__ import annotations

import sys
import threading
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any, Callable, NoReturn, Optional, Union

from rich.console import Console

from session_logger.config.logging_config import logger
from session_logger.core.constants import (
    DEFAULT_NAME,
    ERROR_DIR_NAME,
    EXIT_STATUS,
    FULL_DIR_NAME,
    LATEST_LOG_NAME,
    LOG_SUFFIX,
    NO_EXCEPTION_NAME,
    SHUTDOWN_DELAY_SECONDS,
    WARN_DIR_NAME,
    default_log_directory,
)
from session_logger.core.exceptions import LoggerNotStartedError
from session_logger.core.formatter import MessageFormatter
from session_logger.core.listeners import Listener, ListenerRegistry
from session_logger.core.message import Failure, Message, Severity, origin_name
from session_logger.filesystem.rotation import rotate_latest, sanitize_filename
from session_logger.filesystem.sink_writer import SinkWriter, append_to_file

if TYPE_CHECKING:
    from rich.text import Text

FailureLike = Union[BaseException, Failure, None]


class LoggerState(Enum):
    NOT_STARTED = "not_started"
    STARTED = "started"
    STOPPED = "stopped"


@dataclass(frozen=True)
class FatalSignal:
    """
    Returned by :meth:`SessionLogger.error` once the error has been logged,
    the grace period has passed and listeners were notified.

    The owning application is expected to shut down, usually with
    ``signal.exit()``.
    """

    message: Message
    exit_code: int = EXIT_STATUS

    def exit(self) -> NoReturn:
        raise SystemExit(self.exit_code)


def archive_file_name(message: Message) -> str:
    """
    Name of the warn/error archive a message is appended to.

    Derived from the frame that raised, e.g. ``app.db.connect().log``, or
    from the origin when no failure is attached.
    """
    failure = message.failure
    if failure is None:
        name = message.origin or NO_EXCEPTION_NAME
    elif failure.frames:
        frame = failure.frames[0]
        name = f"{frame.module}.{frame.function}()"
    else:
        name = failure.type_name

    return (sanitize_filename(name) or NO_EXCEPTION_NAME) + LOG_SUFFIX


class SessionLogger:
    """
    Process-wide logger owning the session log, the console and the listeners.

    :param console: Rich console used for styled output.
    :param styled_output_supported: Whether the console can display styles.
                                    None asks ``console.is_terminal``.
    :param plain_stream: Stream used when styles are unavailable, ``sys.stdout`` by default.
    :param shutdown_delay: Seconds :meth:`error` waits before returning the fatal signal.
    :param exit_on_error: If True, :meth:`error` exits the process itself instead of
                          returning the fatal signal.
    :param sleep: Function used for the shutdown wait.
    """

    def __init__(
        self,
        *,
        console: Optional[Console] = None,
        styled_output_supported: Optional[bool] = None,
        plain_stream: Optional[IO[Any]] = None,
        shutdown_delay: float = SHUTDOWN_DELAY_SECONDS,
        exit_on_error: bool = False,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.console = console if console is not None else Console()
        self.styled_output_supported = styled_output_supported
        self.plain_stream = plain_stream
        self.shutdown_delay = shutdown_delay
        self.exit_on_error = exit_on_error
        self._sleep = sleep

        self.name = DEFAULT_NAME
        self.state = LoggerState.NOT_STARTED
        self.log_directory: Optional[Path] = None
        self.full_dir: Optional[Path] = None
        self.warn_dir: Optional[Path] = None
        self.error_dir: Optional[Path] = None
        self.latest_log: Optional[Path] = None
        self.formatter: Optional[MessageFormatter] = None

        self._debug_enabled = False
        self._styled = False
        self._sink = SinkWriter()
        self._plain_out: Optional[SinkWriter] = None

        self._lock = threading.RLock()
        self._print_lock = threading.Lock()

        self.any_listeners = ListenerRegistry("message")
        self.listeners: dict[Severity, ListenerRegistry] = {
            severity: ListenerRegistry(severity.value.lower()) for severity in Severity
        }

    # --- configuration flags ---

    @property
    def debug_enabled(self) -> bool:
        return self._debug_enabled

    def set_debug_enabled(self, enabled: bool) -> None:
        self._debug_enabled = enabled

    @property
    def styled_output(self) -> bool:
        return self._styled

    @property
    def is_started(self) -> bool:
        return self.state is LoggerState.STARTED

    # --- lifecycle ---

    def start(
        self,
        name: str = DEFAULT_NAME,
        debug_enabled: bool = False,
        log_directory: Optional[Path] = None,
        force_styled_output: bool = False,
    ) -> None:
        """
        Create the log directories, rotate the previous session's log and
        open the new one. Only the first call does anything.

        :param name: This logger's display name.
        :param debug_enabled: Whether DEBUG messages are shown on the console.
                              They are written to the log file either way.
        :param log_directory: Root of the log tree, ``./logs`` by default.
        :param force_styled_output: Force styled output even if the console
                                    does not seem to support it.
        """
        with self._lock:
            if self.state is not LoggerState.NOT_STARTED:
                return

            self.name = name
            self._debug_enabled = debug_enabled

            root = Path(log_directory) if log_directory is not None else default_log_directory()
            self.log_directory = root
            # Full logs are saved here (differentiated by date).
            self.full_dir = root.joinpath(FULL_DIR_NAME)
            # Only warnings and errors are saved here (differentiated by origin).
            self.warn_dir = root.joinpath(WARN_DIR_NAME)
            self.error_dir = root.joinpath(ERROR_DIR_NAME)
            self.latest_log = self.full_dir.joinpath(LATEST_LOG_NAME)

            for directory in (root, self.full_dir, self.warn_dir, self.error_dir):
                try:
                    directory.mkdir(parents=True, exist_ok=True)
                except OSError as e:
                    logger.error(f"Could not create log directory {directory}: {e}")

            rotate_latest(self.full_dir, self.latest_log)
            self._sink.open(self.latest_log)

            self.formatter = MessageFormatter(name, self.full_dir.absolute(), self.shutdown_delay)
            self.state = LoggerState.STARTED

            self._setup_console(force_styled_output)
            self.debug(self, f"Started Logger({name})")

    def _setup_console(self, force_styled_output: bool) -> None:
        supported = self.styled_output_supported
        if supported is None:
            supported = self.console.is_terminal

        self._styled = supported
        if not supported:
            self._plain_out = SinkWriter.wrap(
                self.plain_stream if self.plain_stream is not None else sys.stdout
            )
            if not force_styled_output:
                self.warn("Disabled styled/colored output, due to unsupported terminal.")

        if force_styled_output:
            forced = Console(force_terminal=True, file=self.console.file)
            if forced.color_system is not None:
                self.console = forced
                self._styled = True
                self.info("Forced terminal to use styled output.")
            else:
                self.warn("Failed to force terminal to use styled output.")

    def stop(self) -> None:
        """Log a last DEBUG line and close the session log. Repeated calls do nothing."""
        with self._lock:
            if self.state is not LoggerState.STARTED:
                return
            self.debug(self, f"Stopped {self.name}")
            self.state = LoggerState.STOPPED
            self._sink.close()
            if self._plain_out is not None:
                self._plain_out.flush()

    def __enter__(self) -> SessionLogger:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    # --- listeners ---

    def on_message(self, listener: Listener) -> Listener:
        """Register ``listener`` for every message; usable as a decorator."""
        return self.any_listeners.add(listener)

    def on_info(self, listener: Listener) -> Listener:
        return self.listeners[Severity.INFO].add(listener)

    def on_debug(self, listener: Listener) -> Listener:
        return self.listeners[Severity.DEBUG].add(listener)

    def on_warn(self, listener: Listener) -> Listener:
        return self.listeners[Severity.WARN].add(listener)

    def on_error(self, listener: Listener) -> Listener:
        return self.listeners[Severity.ERROR].add(listener)

    # --- dispatch ---

    def info(self, text: str) -> Message:
        with self._lock:
            message = Message(Severity.INFO, text)
            self._emit(message)
            self._notify(message)
        return message

    def debug(self, origin: Any, text: str) -> Message:
        """
        Log a developer message.

        It always reaches the log file and the listeners, but only shows on
        the console when debug output is enabled.

        :param origin: Class, object, module or name the message comes from.
        :param text: Message text.
        """
        with self._lock:
            message = Message(Severity.DEBUG, text, origin=origin_name(origin))
            self._emit(message, show_on_console=self._debug_enabled)
            self._notify(message)
        return message

    def warn(
        self,
        text: Union[str, BaseException, None] = None,
        failure: FailureLike = None,
        origin: Any = None,
    ) -> Message:
        """
        Log a recoverable problem.

        The message is also appended to ``warn/<name>.log``, named after the
        frame that raised ``failure``, or after ``origin`` without a failure.

        :param text: Details about the problem. An exception may be passed here instead.
        :param failure: The exception (or captured failure) behind the problem.
        :param origin: Class, object, module or name reporting the problem.
        """
        text, captured = _split_failure(text, failure)
        with self._lock:
            message = Message(Severity.WARN, text, origin=origin_name(origin), failure=captured)
            file_text = self._emit(message)
            self._archive(self.warn_dir, message, file_text)
            self._notify(message)
        return message

    def error(
        self,
        text: Union[str, BaseException, None] = None,
        failure: FailureLike = None,
    ) -> FatalSignal:
        """
        Log an error the program cannot recover from.

        After logging, the call blocks for ``shutdown_delay`` seconds so the
        message stays visible, notifies listeners and returns a
        :class:`FatalSignal` that the caller should act on by shutting down.

        :param text: Title of the error. An exception may be passed here instead.
        :param failure: The exception (or captured failure) behind the error.
        :return: The fatal signal carrying the exit status.
        """
        text, captured = _split_failure(text, failure)
        with self._lock:
            message = Message(Severity.ERROR, text, failure=captured)
            file_text = self._emit(message)
            self._archive(self.error_dir, message, file_text)
            self._wait_before_exit()
            self._notify(message)

        signal = FatalSignal(message)
        if self.exit_on_error:
            signal.exit()
        return signal

    def _emit(self, message: Message, *, show_on_console: bool = True) -> str:
        if self.state is LoggerState.NOT_STARTED or self.formatter is None:
            raise LoggerNotStartedError(
                f"{message.severity} message dispatched before the logger was started"
            )

        console_text = self.formatter.format_console(message)
        file_text = self.formatter.format_file(message)

        if show_on_console:
            self._print(console_text)
        self._sink.append(file_text)
        return file_text

    def _print(self, text: Text) -> None:
        with self._print_lock:
            if self._styled or self._plain_out is None:
                self.console.print(text, end="", soft_wrap=True, highlight=False)
            else:
                self._plain_out.append(text.plain)

    def _archive(self, directory: Optional[Path], message: Message, file_text: str) -> None:
        if directory is None:
            return
        append_to_file(directory.joinpath(archive_file_name(message)), file_text)

    def _wait_before_exit(self) -> None:
        deadline = time.monotonic() + self.shutdown_delay
        remaining = self.shutdown_delay
        while remaining > 0:
            try:
                self._sleep(remaining)
                break
            except KeyboardInterrupt:
                logger.warning("Interrupted while waiting to shut down, still waiting")
                remaining = deadline - time.monotonic()

    def _notify(self, message: Message) -> None:
        self.any_listeners.notify(message)
        self.listeners[message.severity].notify(message)


def _split_failure(
    text: Union[str, BaseException, None],
    failure: FailureLike,
) -> tuple[Optional[str], Optional[Failure]]:
    if isinstance(text, BaseException):
        if failure is None:
            failure = text
        text = None
    if isinstance(failure, BaseException):
        failure = Failure.from_exception(failure)
    return text, failure
