"""
Minimal event emitter for push-style stream objects.
"""
from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable, Dict, List

__all__ = ["EventEmitter", "Listener"]

Listener = Callable[..., Any]


class EventEmitter:
    """
    Synchronous named-event dispatch.

    Listeners run in registration order, inside the emit() call. A listener
    registered with once() is removed before it runs.
    """

    def __init__(self) -> None:
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)

    def on(self, event: str, listener: Listener) -> "EventEmitter":
        self._listeners[event].append(listener)
        return self

    def once(self, event: str, listener: Listener) -> "EventEmitter":
        def wrapper(*args: Any) -> Any:
            self.off(event, wrapper)
            return listener(*args)

        return self.on(event, wrapper)

    def off(self, event: str, listener: Listener) -> "EventEmitter":
        listeners = self._listeners.get(event)
        if listeners and listener in listeners:
            listeners.remove(listener)
        return self

    def emit(self, event: str, *args: Any) -> bool:
        """Call every listener of `event`; return True if there was any."""
        listeners = list(self._listeners.get(event, ()))
        for listener in listeners:
            listener(*args)
        return bool(listeners)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))
