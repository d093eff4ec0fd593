"""Synchronous event bus for the stylesheet pass."""

from __future__ import annotations

from typing import Any, Callable

Listener = Callable[[Any], None]


class EventBus:
    """Publish-subscribe bus; listeners run synchronously in registration order.

    ``subscribe`` and ``on_all`` return a callable that removes the listener
    again, so a caller can listen for the duration of one pass.
    """

    def __init__(self) -> None:
        self._listeners: dict[type, list[Listener]] = {}
        self._global_listeners: list[Listener] = []

    def subscribe(self, event_type: type, callback: Listener) -> Callable[[], None]:
        """Register *callback* for events of exactly *event_type*."""
        listeners = self._listeners.setdefault(event_type, [])
        listeners.append(callback)
        return lambda: _discard(listeners, callback)

    def on_all(self, callback: Listener) -> Callable[[], None]:
        """Register *callback* for every event."""
        self._global_listeners.append(callback)
        return lambda: _discard(self._global_listeners, callback)

    def emit(self, event: Any) -> None:
        for cb in list(self._global_listeners):
            cb(event)
        for cb in list(self._listeners.get(type(event), [])):
            cb(event)


class EventLog:
    """Listener that records the events it receives.

    Usage::

        log = EventLog()
        bus.on_all(log)
        shim_css(css, bus=bus)
        log.of_type(RuleEncapsulated)
    """

    def __init__(self) -> None:
        self.events: list[Any] = []

    def __call__(self, event: Any) -> None:
        self.events.append(event)

    def of_type(self, event_type: type) -> list[Any]:
        return [e for e in self.events if isinstance(e, event_type)]


def _discard(listeners: list[Listener], callback: Listener) -> None:
    if callback in listeners:
        listeners.remove(callback)
