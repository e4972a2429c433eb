"""Per-decision action log."""

from dataclasses import dataclass, field
from datetime import datetime

from core.cards import Card
from core.strategy.actions import Action


@dataclass(frozen=True)
class ActionLogEntry:
    """One player decision, graded against basic strategy."""

    hand_id: str
    action: Action
    optimal_action: Action
    was_correct: bool
    hand_value_before: int
    hand_value_after: int
    card_dealt: Card | None = None
    explanation: str = ""
    timestamp: datetime = field(default_factory=datetime.now)
