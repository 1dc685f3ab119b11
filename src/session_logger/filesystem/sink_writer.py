"""
Thread-safe text sinks for the session log and the plain console fallback.

Every write goes through one lock per sink, so callers never need their
own locking. I/O failures are reported on the diagnostics channel and
swallowed: a full disk must not take the host process down with it.
"""

from __future__ import annotations

import io
import threading
from typing import IO, TYPE_CHECKING, Any, Optional

from session_logger.config.logging_config import logger

if TYPE_CHECKING:
    from pathlib import Path


class SinkWriter:
    """
    Serialized writer over one open stream.

    Use :meth:`open` for a file owned by the writer, or :meth:`wrap` to
    write plain text to a stream owned by someone else (e.g. ``sys.stdout``).
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._stream: Optional[IO[Any]] = None
        self._owns_stream = False
        self._binary = False
        self._flush_each = False
        self.path: Optional[Path] = None

    @property
    def is_open(self) -> bool:
        return self._stream is not None

    def open(self, path: Path) -> bool:
        """
        Create or truncate ``path`` and direct subsequent appends to it.

        A previously opened stream is closed first.

        :param path: Target log file.
        :return: True if the file could be opened.
        """
        with self._lock:
            self._release()
            try:
                self._stream = open(path, "w", encoding="utf-8")
            except OSError as e:
                logger.error(f"Could not open log file {path}: {e}")
                return False

            self._owns_stream = True
            self._binary = False
            self._flush_each = False
            self.path = path
            return True

    @classmethod
    def wrap(cls, stream: IO[Any]) -> SinkWriter:
        """
        Build a plain-text writer over an arbitrary text or byte stream.

        The stream is flushed after every append and is never closed by the writer.

        :param stream: Destination stream, e.g. ``sys.stdout`` or an ``io.BytesIO``.
        :return: A writer bound to ``stream``.
        """
        writer = cls()
        writer._stream = stream
        writer._owns_stream = False
        writer._binary = isinstance(stream, (io.RawIOBase, io.BufferedIOBase))
        writer._flush_each = True
        return writer

    def append(self, text: str) -> None:
        """Write ``text`` as is; silently dropped once the writer is closed."""
        with self._lock:
            if self._stream is None:
                logger.debug("Dropped write to a closed sink")
                return
            try:
                if self._binary:
                    self._stream.write(text.encode("utf-8"))
                else:
                    self._stream.write(text)
                if self._flush_each:
                    self._stream.flush()
            except (OSError, ValueError) as e:
                # ValueError: the stream was closed under us
                logger.error(f"Failed to write to {self.path or self._stream!r}: {e}")

    def flush(self) -> None:
        with self._lock:
            if self._stream is None:
                return
            try:
                self._stream.flush()
            except (OSError, ValueError) as e:
                logger.error(f"Failed to flush {self.path or self._stream!r}: {e}")

    def close(self) -> None:
        """Flush and release the stream. Calling it again does nothing."""
        with self._lock:
            self._release()

    def _release(self) -> None:
        stream, self._stream = self._stream, None
        if stream is None:
            return
        try:
            stream.flush()
            if self._owns_stream:
                stream.close()
        except (OSError, ValueError) as e:
            logger.error(f"Failed to close {self.path or stream!r}: {e}")


def append_to_file(file_path: Path, text: str) -> bool:
    """
    Append ``text`` to ``file_path``, creating the file if needed.

    Used for the per-origin warn and error archives.

    :param file_path: The path of the file to write to.
    :param text: Already rendered log text.
    :return: True if the text was written.
    """
    try:
        with open(file_path, "a", encoding="utf-8") as f:
            f.write(text)
            f.flush()
    except (OSError, ValueError) as e:
        # ValueError: the name holds a character the OS rejects (e.g. NUL)
        logger.error(f"Error for file: {file_path.name}: {e}")
        return False
    return True
