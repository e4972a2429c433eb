"""Per-round game history records."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4

from core.game.engine import BlackjackGame
from core.game.log import ActionLogEntry
from core.hand import PlayerHand
from core.strategy.actions import Action


@dataclass(frozen=True)
class ActionHistoryEntry:
    """A logged decision, flattened for display and export."""

    action: Action
    optimal_action: Action
    was_correct: bool
    card_received: str | None
    hand_value_before: int
    hand_value_after: int
    reasoning: str

    @classmethod
    def from_log(cls, entry: ActionLogEntry) -> "ActionHistoryEntry":
        return cls(
            action=entry.action,
            optimal_action=entry.optimal_action,
            was_correct=entry.was_correct,
            card_received=str(entry.card_dealt) if entry.card_dealt else None,
            hand_value_before=entry.hand_value_before,
            hand_value_after=entry.hand_value_after,
            reasoning=entry.explanation,
        )


@dataclass(frozen=True)
class HandHistoryEntry:
    """Final state of one player hand."""

    hand_id: str
    hand_index: int
    final_cards: list[str]
    final_value: int
    was_soft: bool
    actions: list[ActionHistoryEntry]
    outcome: str
    was_split: bool
    was_doubled: bool
    was_surrendered: bool
    was_busted: bool
    was_blackjack: bool

    @classmethod
    def from_hand(cls, hand: PlayerHand, index: int) -> "HandHistoryEntry":
        return cls(
            hand_id=hand.id,
            hand_index=index,
            final_cards=[str(card) for card in hand.cards],
            final_value=hand.hand_value,
            was_soft=hand.is_soft,
            actions=[ActionHistoryEntry.from_log(entry) for entry in hand.action_log],
            outcome=hand.outcome.value if hand.outcome else "UNKNOWN",
            was_split=hand.split_from_pair,
            was_doubled=hand.doubled,
            was_surrendered=hand.surrendered,
            was_busted=hand.busted,
            was_blackjack=hand.is_blackjack,
        )


@dataclass(frozen=True)
class GameHistoryEntry:
    """
    Summary of a finished round.

    ``hand_accuracy`` is a percentage over the decisions made this round,
    0 when the round needed none (e.g. a dealt blackjack).
    """

    session_id: str
    initial_player_cards: list[str]
    initial_dealer_card: str
    player_hands: list[HandHistoryEntry]
    dealer_final_hand: list[str]
    dealer_final_value: int
    wins: int
    losses: int
    pushes: int
    surrenders: int
    blackjacks: int
    busts: int
    total_decisions: int
    correct_decisions: int
    hand_accuracy: float
    had_blackjack: bool
    had_splits: bool
    had_doubles: bool
    had_surrender: bool
    id: str = field(default_factory=lambda: f"game-{uuid4().hex[:12]}")
    timestamp: datetime = field(default_factory=datetime.now)


def _initial_player_cards(hands: list[PlayerHand]) -> list[str]:
    """Reconstruct the two dealt cards, even if the first hand was split."""
    first = hands[0]
    if first.split_from_pair and len(hands) > 1:
        return [str(first.cards[0]), str(hands[1].cards[0])]
    return [str(card) for card in first.cards[:2]]


def build_history_entry(game: BlackjackGame, session_id: str) -> GameHistoryEntry:
    """
    Build the history record for a finished round.

    Args:
        game: A game in the GAME_OVER phase
        session_id: Session the round belongs to

    Returns:
        The history entry

    Raises:
        ValueError: If the round has not been resolved
    """
    result = game.game_result
    if result is None:
        raise ValueError("Round is not over yet")

    hands = game.player_hands
    logs = [entry for hand in hands for entry in hand.action_log]
    correct = sum(1 for entry in logs if entry.was_correct)
    upcard = game.dealer_upcard

    return GameHistoryEntry(
        session_id=session_id,
        initial_player_cards=_initial_player_cards(hands),
        initial_dealer_card=str(upcard) if upcard else "",
        player_hands=[HandHistoryEntry.from_hand(hand, i) for i, hand in enumerate(hands)],
        dealer_final_hand=[str(card) for card in game.dealer_hand.cards],
        dealer_final_value=game.dealer_hand.hand_value,
        wins=result.wins,
        losses=result.losses,
        pushes=result.pushes,
        surrenders=result.surrenders,
        blackjacks=result.blackjacks,
        busts=result.busts,
        total_decisions=len(logs),
        correct_decisions=correct,
        hand_accuracy=correct / len(logs) * 100 if logs else 0.0,
        had_blackjack=any(hand.is_blackjack for hand in hands),
        had_splits=any(hand.split_from_pair for hand in hands),
        had_doubles=any(hand.doubled for hand in hands),
        had_surrender=any(hand.surrendered for hand in hands),
    )
