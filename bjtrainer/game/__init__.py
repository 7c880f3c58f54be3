"""Round engine and state management."""

from bjtrainer.game.events import EventEmitter, EventType, GameEvent
from bjtrainer.game.state import Phase
from bjtrainer.game.engine import DecisionRecord, RoundSnapshot, TrainerGame

__all__ = [
    "EventEmitter",
    "EventType",
    "GameEvent",
    "Phase",
    "DecisionRecord",
    "RoundSnapshot",
    "TrainerGame",
]
