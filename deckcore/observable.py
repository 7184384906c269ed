"""Typed publish/subscribe for deck events."""

from __future__ import annotations

from typing import Callable

from .models import DeckEvent, DeckEventName

Listener = Callable[[DeckEvent], None]


class DeckObservable:
    """Listener registry owned by a single deck controller.

    Listeners are called synchronously in registration order. The registry
    holds no policy about when events fire.
    """

    def __init__(self) -> None:
        self._listeners: dict[DeckEventName, list[Listener]] = {}

    def on(self, event_type: DeckEventName | str, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that unregisters it."""

        key = DeckEventName(event_type)
        self._listeners[key] = [*self._listeners.get(key, []), listener]

        def unsubscribe() -> None:
            self.off(key, listener)

        return unsubscribe

    def off(self, event_type: DeckEventName | str, listener: Listener) -> None:
        key = DeckEventName(event_type)
        self._listeners[key] = [existing for existing in self._listeners.get(key, []) if existing != listener]

    def emit(self, event: DeckEvent) -> None:
        # on/off replace the list, so listeners may unsubscribe mid-emit.
        for listener in self._listeners.get(event.type, ()):
            listener(event)

    def listener_count(self, event_type: DeckEventName | str) -> int:
        return len(self._listeners.get(DeckEventName(event_type), []))
