"""
Game event notifications.
Listeners (sound, animation, scorekeeping) subscribe to the events they need.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

Listener = Callable[[Dict[str, Any]], None]


class GameEvent(Enum):
    """Everything the turn controller announces."""
    MOVE_APPLIED = "game:move"
    GAME_WON = "game:win"
    GAME_DRAWN = "game:draw"
    GAME_RESTARTED = "game:restart"
    SQUARE_SELECTED = "game:square:select"
    BOT_THINKING = "game:bot:thinking"
    BOT_MOVED = "game:bot:move"


class EventBus:
    """
    Observer list keyed by event type.

    Listeners run in the order they subscribed. A listener that raises is
    logged and skipped; the others still get the event.
    """

    def __init__(self):
        self._listeners: Dict[GameEvent, List[Listener]] = {}

    def on(self, event: GameEvent, callback: Listener) -> Callable[[], None]:
        """
        Subscribe to an event.

        Args:
            event: Event type to listen for.
            callback: Called with the event's data dict.

        Returns:
            A function that removes this subscription.
        """
        callbacks = self._listeners.setdefault(event, [])
        callbacks.append(callback)

        def unsubscribe():
            if callback in callbacks:
                callbacks.remove(callback)

        return unsubscribe

    def once(self, event: GameEvent, callback: Listener) -> Callable[[], None]:
        """Subscribe for a single delivery."""
        def wrapper(data):
            unsubscribe()
            callback(data)

        unsubscribe = self.on(event, wrapper)
        return unsubscribe

    def emit(self, event: GameEvent, data: Dict[str, Any] = None):
        """
        Deliver an event to its listeners.

        Args:
            event: Event type.
            data: Payload passed to each listener.
        """
        data = data if data is not None else {}

        # Copy so listeners may unsubscribe while we iterate
        for callback in list(self._listeners.get(event, ())):
            try:
                callback(data)
            except Exception:
                logger.exception("Error in listener for %s", event.value)

    def remove(self, event: GameEvent, callback: Listener):
        """Remove every subscription of the callback to the event."""
        callbacks = self._listeners.get(event, [])
        while callback in callbacks:
            callbacks.remove(callback)

    def off(self, event: GameEvent):
        """Remove all listeners for an event type."""
        self._listeners.pop(event, None)

    def clear(self):
        """Remove all listeners."""
        self._listeners.clear()

    def event_types(self) -> List[GameEvent]:
        """Event types that have had listeners registered."""
        return list(self._listeners.keys())
