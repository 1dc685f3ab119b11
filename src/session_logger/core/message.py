"""
Value types passed through the logging pipeline.

A :class:`Message` is created once per dispatch call and never mutated.
Failures are captured eagerly into :class:`Failure` snapshots so that a
message does not keep a live traceback (and every frame's locals) alive.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from types import ModuleType
from typing import Any, Optional


class Severity(Enum):
    INFO = "INFO"
    DEBUG = "DEBUG"
    WARN = "WARN"
    ERROR = "ERROR"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Frame:
    """One entry of a failure's trace."""

    module: str
    function: str
    filename: str
    lineno: int

    def __str__(self) -> str:
        return f"{self.module}.{self.function}({Path(self.filename).name}:{self.lineno})"


@dataclass(frozen=True)
class Failure:
    """
    Snapshot of an exception: type, message, cause chain and frames.

    :param type_name: Qualified name of the exception class.
    :param message: ``str(exc)``, may be empty.
    :param cause: The explicit cause, or the implicit context unless it was suppressed.
    :param frames: Trace frames, innermost (the raising frame) first.
    """

    type_name: str
    message: str
    cause: Optional[Failure] = None
    frames: tuple[Frame, ...] = ()

    def __str__(self) -> str:
        if self.message:
            return f"{self.type_name}: {self.message}"
        return self.type_name

    @classmethod
    def from_exception(cls, exc: BaseException) -> Failure:
        return cls._capture(exc, seen=set())

    @classmethod
    def _capture(cls, exc: BaseException, seen: set[int]) -> Failure:
        seen.add(id(exc))

        linked = exc.__cause__
        if linked is None and not exc.__suppress_context__:
            linked = exc.__context__

        cause = None
        # Context chains can loop back on themselves
        if linked is not None and id(linked) not in seen:
            cause = cls._capture(linked, seen)

        frames = [
            Frame(
                module=frame.f_globals.get("__name__", "<unknown>"),
                function=frame.f_code.co_name,
                filename=frame.f_code.co_filename,
                lineno=lineno,
            )
            for frame, lineno in traceback.walk_tb(exc.__traceback__)
        ]
        frames.reverse()

        return cls(
            type_name=type(exc).__qualname__,
            message=str(exc),
            cause=cause,
            frames=tuple(frames),
        )


def origin_name(origin: Any) -> Optional[str]:
    """
    Normalize whatever a caller passes as the origin of a message.

    Classes and functions give their qualified name, modules their dotted
    name, strings are kept as is and any other object is named by its class.
    """
    if origin is None:
        return None
    if isinstance(origin, str):
        return origin
    if isinstance(origin, ModuleType):
        return origin.__name__
    if isinstance(origin, type) or callable(origin):
        qualname = getattr(origin, "__qualname__", None)
        if qualname:
            return f"{origin.__module__}.{qualname}"
    return f"{type(origin).__module__}.{type(origin).__qualname__}"


def short_name(origin: Optional[str]) -> str:
    if not origin:
        return "?"
    return origin.rsplit(".", 1)[-1]


@dataclass(frozen=True)
class Message:
    severity: Severity
    content: Optional[str] = None
    origin: Optional[str] = None
    failure: Optional[Failure] = None
    timestamp: datetime = field(default_factory=datetime.now)
