"""A registry of one handler per event, called when the event is triggered."""

from __future__ import annotations

from typing import Any, Callable, Hashable

__all__ = ["EventHandler"]


def _key(event: Any) -> Hashable:
    return getattr(event, "identifier", event)


class EventHandler:
    """Maps events to handlers.

    An event is any hashable key; an object with an ``identifier`` attribute is
    keyed by that identifier. Listening again replaces the earlier handler.
    """

    def __init__(self) -> None:
        self._handlers: dict[Hashable, Callable[..., Any]] = {}

    def listen(self, event: Any, handler: Callable[..., Any]) -> None:
        """Register ``handler`` for ``event``."""
        if not callable(handler):
            raise TypeError("handler must be callable")
        self._handlers[_key(event)] = handler

    def trigger(self, event: Any, *args: Any) -> Any:
        """Call the handler for ``event`` with ``args``; return its result, or None."""
        handler = self._handlers.get(_key(event))
        if handler is None:
            return None
        return handler(*args)

    def __contains__(self, event: Any) -> bool:
        return _key(event) in self._handlers