"""Event bus connecting the game core to whatever presents it.

One bus is created per game session and handed to the Game and its Players.
The core announces every state change on it; when a player is waiting for
a decision the notification carries the callbacks that resolve it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

STATE_CHANGED = "state-changed"


@dataclass(frozen=True)
class Decisions:
    """The decision callbacks currently on offer. Unoffered ones are None."""
    select_dice: Optional[Callable[[Any], bool]] = None
    select_category_to_add: Optional[Callable[[Any], bool]] = None
    select_category_to_cancel: Optional[Callable[[Any], bool]] = None

    @property
    def is_empty(self) -> bool:
        return (self.select_dice is None and self.select_category_to_add is None
                and self.select_category_to_cancel is None)


class EventBus:
    """Simple publish/subscribe bus.

    Listeners are only ever added, and are called in registration order with
    ``(event_name, payload)``; payload is None for a plain notification.
    """

    def __init__(self) -> None:
        self.listeners: list[tuple[str, Callable]] = []

    def on(self, event_name: str, callback: Callable) -> None:
        """Register a callback for an event name."""
        self.listeners.append((event_name, callback))

    def emit(self, event_name: str, payload: Decisions | None = None) -> None:
        """Call every listener registered for event_name."""
        for name, callback in list(self.listeners):
            if name == event_name:
                callback(event_name, payload)
