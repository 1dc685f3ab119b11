from datetime import datetime

from session_logger.core.message import (
    Failure,
    Frame,
    Message,
    Severity,
    origin_name,
    short_name,
)


def _inner() -> None:
    raise ValueError("inner boom")


def _outer() -> None:
    _inner()


def _capture(func) -> BaseException:
    try:
        func()
    except Exception as e:
        return e
    raise AssertionError("expected an exception")


class Worker:
    def run(self) -> None:
        pass


def test_failure_frames_start_at_raising_frame() -> None:
    """
    Test that captured frames are ordered innermost first.

    The frame that raised must come first, followed by its callers.
    """
    failure = Failure.from_exception(_capture(_outer))

    assert failure.type_name == "ValueError"
    assert failure.message == "inner boom"
    assert str(failure) == "ValueError: inner boom"

    functions = [frame.function for frame in failure.frames]
    assert functions[:3] == ["_inner", "_outer", "_capture"]
    assert failure.frames[0].module == __name__


def test_failure_cause_chain() -> None:
    """Test explicit causes, implicit contexts and suppressed contexts."""

    def explicit() -> None:
        try:
            {}["missing"]
        except KeyError as e:
            raise RuntimeError("lookup failed") from e

    def implicit() -> None:
        try:
            1 / 0
        except ZeroDivisionError:
            raise OSError("disk")

    def suppressed() -> None:
        try:
            1 / 0
        except ZeroDivisionError:
            raise OSError("disk") from None

    failure = Failure.from_exception(_capture(explicit))
    assert failure.cause is not None
    assert failure.cause.type_name == "KeyError"
    assert failure.cause.cause is None

    failure = Failure.from_exception(_capture(implicit))
    assert failure.cause is not None
    assert failure.cause.type_name == "ZeroDivisionError"

    failure = Failure.from_exception(_capture(suppressed))
    assert failure.cause is None


def test_failure_of_unraised_exception_has_no_frames() -> None:
    failure = Failure.from_exception(ValueError())

    assert failure.frames == ()
    assert str(failure) == "ValueError"


def test_frame_str() -> None:
    frame = Frame(module="app.db", function="connect", filename="/srv/app/db.py", lineno=42)

    assert str(frame) == "app.db.connect(db.py:42)"


def test_origin_name() -> None:
    """Test the origin identifiers derived from what callers pass."""
    import json

    assert origin_name(None) is None
    assert origin_name("my.module") == "my.module"
    assert origin_name(json) == "json"
    assert origin_name(Worker) == f"{__name__}.Worker"
    assert origin_name(Worker()) == f"{__name__}.Worker"
    assert origin_name(Worker.run) == f"{__name__}.Worker.run"


def test_short_name() -> None:
    assert short_name("pkg.mod.Worker") == "Worker"
    assert short_name("Worker") == "Worker"
    assert short_name(None) == "?"


def test_message_timestamp_assigned_once() -> None:
    before = datetime.now()
    message = Message(Severity.INFO, "hello")
    after = datetime.now()

    assert before <= message.timestamp <= after
    assert message.content == "hello"
    assert message.failure is None
