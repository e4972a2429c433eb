"""Game engine and state management."""

from core.game.engine import BlackjackGame, DealerStep, GameResult
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.log import ActionLogEntry
from core.game.state import GamePhase

__all__ = [
    "ActionLogEntry",
    "BlackjackGame",
    "DealerStep",
    "EventEmitter",
    "EventType",
    "GameEvent",
    "GamePhase",
    "GameResult",
]
