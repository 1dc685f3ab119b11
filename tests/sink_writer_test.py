import io
import threading
from pathlib import Path

import pytest
from loguru import logger

from session_logger.filesystem.sink_writer import SinkWriter, append_to_file


@pytest.fixture
def diagnostics():
    """Collect what the package reports on its diagnostics channel."""
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{level}|{message}")
    yield messages
    logger.remove(handler_id)


def test_open_truncates_and_close_flushes(tmp_path: Path) -> None:
    log_file = tmp_path / "latest.log"
    log_file.write_text("previous session\n", encoding="utf-8")

    writer = SinkWriter()
    assert writer.open(log_file) is True
    writer.append("first\n")
    writer.append("second\n")
    writer.close()

    assert log_file.read_text(encoding="utf-8") == "first\nsecond\n"
    assert writer.is_open is False


def test_close_is_idempotent(tmp_path: Path) -> None:
    """Test closing twice and closing a writer that never opened anything."""
    SinkWriter().close()

    writer = SinkWriter()
    writer.open(tmp_path / "latest.log")
    writer.close()
    writer.close()


def test_append_after_close_is_dropped(tmp_path: Path, diagnostics: list[str]) -> None:
    log_file = tmp_path / "latest.log"
    writer = SinkWriter()
    writer.open(log_file)
    writer.close()

    writer.append("late\n")

    assert log_file.read_text(encoding="utf-8") == ""
    assert any("closed sink" in message for message in diagnostics)


def test_open_failure_is_reported(tmp_path: Path, diagnostics: list[str]) -> None:
    writer = SinkWriter()

    # A directory cannot be opened for writing
    assert writer.open(tmp_path) is False
    writer.append("ignored\n")
    writer.close()

    assert any(message.startswith("ERROR|Could not open log file") for message in diagnostics)


def test_wrap_text_stream_flushes_and_stays_open() -> None:
    stream = io.StringIO()
    writer = SinkWriter.wrap(stream)

    writer.append("plain line\n")
    writer.close()

    assert stream.getvalue() == "plain line\n"
    assert stream.closed is False


def test_wrap_byte_stream_encodes() -> None:
    stream = io.BytesIO()
    writer = SinkWriter.wrap(stream)

    writer.append("héllo\n")

    assert stream.getvalue() == "héllo\n".encode("utf-8")


def test_concurrent_appends_never_interleave(tmp_path: Path) -> None:
    """
    Test appending from several threads at once.

    Every line written must come out whole.
    """
    log_file = tmp_path / "latest.log"
    writer = SinkWriter()
    writer.open(log_file)

    def worker(index: int) -> None:
        for n in range(200):
            writer.append(f"thread-{index} line-{n} " + "x" * 50 + "\n")

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    writer.close()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 8 * 200
    assert all(line.startswith("thread-") and line.endswith("x" * 50) for line in lines)


def test_append_to_file_creates_and_appends(tmp_path: Path) -> None:
    target = tmp_path / "No Exception.log"

    assert append_to_file(target, "one\n") is True
    assert append_to_file(target, "two\n") is True

    assert target.read_text(encoding="utf-8") == "one\ntwo\n"


def test_append_to_file_failure_is_reported(tmp_path: Path, diagnostics: list[str]) -> None:
    target = tmp_path / "missing-dir" / "origin.log"

    assert append_to_file(target, "text\n") is False
    assert any("origin.log" in message for message in diagnostics)


def test_append_to_file_rejected_name_is_reported(tmp_path: Path, diagnostics: list[str]) -> None:
    """Test that a name the OS refuses (embedded NUL) is reported instead of raised."""
    target = tmp_path / "a\x00b.log"

    assert append_to_file(target, "text\n") is False
    assert any(message.startswith("ERROR|Error for file:") for message in diagnostics)
