"""Core blackjack trainer engine - 100% UI-agnostic."""

from core.cards import Card, Rank, Shoe, Suit
from core.errors import BlackjackError, DeckExhaustedError, InvalidRulesError
from core.hand import DealerHand, HandOutcome, PlayerHand, hand_value
from core.training import TrainingSession

__all__ = [
    "BlackjackError",
    "Card",
    "DealerHand",
    "DeckExhaustedError",
    "HandOutcome",
    "InvalidRulesError",
    "PlayerHand",
    "Rank",
    "Shoe",
    "Suit",
    "TrainingSession",
    "hand_value",
]
