"""Game events for the presentation layer."""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable


class EventType(Enum):
    """Types of game events."""

    # Session events
    GAME_RESET = auto()
    RULES_CHANGED = auto()
    SETTINGS_CHANGED = auto()
    BET_CHANGED = auto()

    # Round events
    ROUND_STARTED = auto()
    ROUND_SETTLED = auto()

    # Card events
    CARD_DEALT = auto()
    SHOE_SHUFFLED = auto()

    # Player action events
    PLAYER_HIT = auto()
    PLAYER_STAND = auto()
    PLAYER_DOUBLE = auto()
    PLAYER_SPLIT = auto()
    PLAYER_BUSTS = auto()

    # Dealer events
    DEALER_HITS = auto()
    DEALER_BUSTS = auto()


@dataclass(frozen=True)
class GameEvent:
    """Immutable record of something that happened at the table."""

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.event_type.name}: {self.data}"


EventHandler = Callable[[GameEvent], None]


class EventEmitter:
    """
    Synchronous event emitter.

    Handlers subscribe to one event type or, with None, to every event.
    The most recent events are kept for inspection.
    """

    def __init__(self, history_size: int = 500) -> None:
        self._handlers: defaultdict[EventType | None, list[EventHandler]] = defaultdict(list)
        self._history: deque[GameEvent] = deque(maxlen=history_size)

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> Callable[[], None]:
        """
        Subscribe to events.

        Returns:
            A callable that removes the subscription
        """
        self._handlers[event_type].append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)

        return unsubscribe

    def emit(self, event_type: EventType, **data: Any) -> GameEvent:
        """Create an event and deliver it to type-specific, then catch-all handlers."""
        event = GameEvent(event_type=event_type, data=data)
        self._history.append(event)
        for handler in list(self._handlers.get(event_type, ())):
            handler(event)
        for handler in list(self._handlers.get(None, ())):
            handler(event)
        return event

    @property
    def history(self) -> list[GameEvent]:
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()
