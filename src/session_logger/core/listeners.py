"""Listener registries notified after a message has been printed and persisted."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Callable

from session_logger.config.logging_config import logger

if TYPE_CHECKING:
    from session_logger.core.message import Message

Listener = Callable[["Message"], None]


class ListenerRegistry:
    """
    Ordered, copy-on-write list of listeners.

    Every mutation swaps in a new tuple, so a notification pass keeps
    iterating the snapshot it started with even if listeners are added or
    removed meanwhile (including from inside a listener).
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._lock = threading.Lock()
        self._listeners: tuple[Listener, ...] = ()

    def add(self, listener: Listener) -> Listener:
        with self._lock:
            self._listeners = (*self._listeners, listener)
        return listener

    def remove(self, listener: Listener) -> bool:
        with self._lock:
            if listener not in self._listeners:
                return False
            items = list(self._listeners)
            items.remove(listener)
            self._listeners = tuple(items)
            return True

    def clear(self) -> None:
        with self._lock:
            self._listeners = ()

    def snapshot(self) -> tuple[Listener, ...]:
        return self._listeners

    def __len__(self) -> int:
        return len(self._listeners)

    def notify(self, message: Message) -> None:
        """
        Call every listener with ``message`` in registration order.

        A failing listener is reported and the remaining listeners still run.

        :param message: The dispatched message.
        """
        for listener in self._listeners:
            try:
                listener(message)
            except Exception as e:
                logger.exception(f"Listener {listener!r} on '{self.name}' failed: {e}")
