"""Game events and change notification."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable


class EventType(Enum):
    """Types of state changes."""

    GAME_STARTED = auto()
    CARD_DISCARDED = auto()
    MOVED_TO_FOUNDATION = auto()
    DROPPED_TO_STACK = auto()


@dataclass(frozen=True)
class GameEvent:
    """
    Immutable record of a state change.

    Listeners are not handed events; they re-read the engine. The history is
    kept for diagnostics and for the HTTP layer.
    """

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


# Listeners take no arguments
Listener = Callable[[], None]


class EventEmitter:
    """
    Records events and notifies listeners in registration order.

    Listeners cannot be removed and the same listener may be added twice.
    """

    def __init__(self) -> None:
        """Initialize the event emitter."""
        self._listeners: list[Listener] = []
        self._event_history: list[GameEvent] = []

    def subscribe(self, listener: Listener) -> None:
        """
        Register a listener.

        Args:
            listener: Zero-argument callable invoked after every change
        """
        self._listeners.append(listener)

    def emit(self, event: GameEvent) -> None:
        """
        Record an event and notify every listener once.

        Args:
            event: The event to record
        """
        self._event_history.append(event)
        for listener in self._listeners:
            listener()

    def emit_new(
        self,
        event_type: EventType,
        **data: Any,
    ) -> GameEvent:
        """
        Create and emit a new event.

        Args:
            event_type: Type of event
            **data: Event data

        Returns:
            The created event
        """
        event = GameEvent(event_type=event_type, data=data)
        self.emit(event)
        return event

    @property
    def history(self) -> list[GameEvent]:
        """Return the event history."""
        return self._event_history.copy()
