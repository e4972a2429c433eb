"""Basic strategy advisor: chart lookup, fallbacks and decision feedback."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, Mapping

from core.cards import Card
from core.hand import BLACKJACK, PlayerHand
from core.strategy.actions import (
    Action,
    StrategyAction,
    action_name,
    strategy_action_to_action,
)
from core.strategy.charts import STRATEGY_CHARTS, StrategyTable, TableType


class HandType(Enum):
    """How a hand is described in feedback and mistake tracking."""

    HARD = "HARD"
    SOFT = "SOFT"
    PAIR = "PAIR"

    def __str__(self) -> str:
        return self.value.lower()


# Substitutes for a chart action the player is not allowed to take, best first
FALLBACKS: Mapping[StrategyAction, tuple[Action, ...]] = {
    StrategyAction.D: (Action.HIT, Action.STAND),
    StrategyAction.P: (Action.HIT,),
    StrategyAction.R: (Action.STAND, Action.HIT),
    StrategyAction.S: (Action.STAND,),
    StrategyAction.H: (Action.HIT,),
}

SURRENDER_OTHERWISE = StrategyAction.H

HARD_MIN_ROW = 8
HARD_MAX_ROW = 17
SOFT_MIN_ROW = 13
SOFT_MAX_ROW = 20


def dealer_display_value(card: Card) -> int:
    """Return the upcard as charts print it: Ace = 1, tens and faces = 10."""
    if card.is_ace:
        return 1
    return min(card.value, 10)


def dealer_column_index(card: Card) -> int:
    """Map a dealer upcard to its chart column (2..10 -> 0..8, Ace -> 9)."""
    value = dealer_display_value(card)
    if value == 1:
        return 9
    return max(0, min(8, value - 2))


def hand_type(hand: PlayerHand) -> HandType:
    """Classify a hand for feedback, regardless of which actions are offered."""
    if hand.is_pair:
        return HandType.PAIR
    if hand.is_soft:
        return HandType.SOFT
    return HandType.HARD


def fallback_action(
    chart_action: StrategyAction,
    available_actions: Iterable[Action],
) -> Action:
    """
    Resolve a chart action the player cannot take.

    Walks the ordered substitutes for ``chart_action`` and returns the first
    one on offer, defaulting to HIT.
    """
    available = set(available_actions)
    for candidate in FALLBACKS.get(chart_action, (Action.HIT,)):
        if candidate in available:
            return candidate
    return Action.HIT


@dataclass(frozen=True)
class StrategyDecision:
    """Verdict on one player decision."""

    action: Action
    optimal_action: Action
    is_correct: bool
    explanation: str
    hand_type: HandType
    player_value: int
    dealer_upcard: int
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class StrategyCoordinates:
    """Position of a decision in the strategy charts."""

    table: TableType
    row: int
    col: int


class BasicStrategy:
    """
    Basic strategy lookup over the HARD, SOFT and PAIRS charts.

    Lookups are total: every hand resolves to some action, falling back
    through ``FALLBACKS`` when the charted play is not available.
    """

    def __init__(self, charts: Mapping[TableType, StrategyTable] | None = None) -> None:
        """
        Initialize the advisor.

        Args:
            charts: Strategy charts by table type. Uses the standard charts if None.
        """
        self._charts = charts or STRATEGY_CHARTS

    def classify(
        self,
        hand: PlayerHand,
        available_actions: Iterable[Action],
    ) -> TableType:
        """Pick the chart a hand is read from."""
        if hand.is_pair and Action.SPLIT in set(available_actions):
            return TableType.PAIRS
        if hand.is_soft:
            return TableType.SOFT
        return TableType.HARD

    def chart_action(
        self,
        table: TableType,
        hand: PlayerHand,
        dealer_upcard: Card,
    ) -> StrategyAction:
        """Read the raw chart action for a hand, before availability checks."""
        column = dealer_column_index(dealer_upcard)
        chart = self._charts[table]

        if table == TableType.PAIRS:
            row = chart.row_index(hand.cards[0].value)
        elif table == TableType.SOFT:
            total = hand.hand_value
            if total > SOFT_MAX_ROW:
                return StrategyAction.S
            if total < SOFT_MIN_ROW:
                return StrategyAction.H
            row = chart.row_index(total)
        else:
            total = max(HARD_MIN_ROW, min(HARD_MAX_ROW, hand.hand_value))
            row = chart.row_index(total)

        if row is None:
            return StrategyAction.H
        return chart.rows[row].actions[column]

    def get_action(
        self,
        hand: PlayerHand,
        dealer_upcard: Card,
        available_actions: Iterable[Action],
    ) -> Action:
        """
        Get the basic strategy action.

        Args:
            hand: The player hand being decided
            dealer_upcard: The dealer's face-up card
            available_actions: Actions the player may currently take

        Returns:
            The charted action, or its best available substitute
        """
        available = list(available_actions)
        table = self.classify(hand, available)
        code = self.chart_action(table, hand, dealer_upcard)

        # Surrender cells read "surrender, otherwise hit" (hard 15/16 vs 9, 10, A)
        if code == StrategyAction.R and Action.SURRENDER not in available:
            code = SURRENDER_OTHERWISE

        action = strategy_action_to_action(code)
        if action in available:
            return action
        return fallback_action(code, available)

    def evaluate(
        self,
        player_action: Action,
        hand: PlayerHand,
        dealer_upcard: Card,
        available_actions: Iterable[Action],
    ) -> StrategyDecision:
        """Grade ``player_action`` against the optimal play."""
        optimal = self.get_action(hand, dealer_upcard, available_actions)
        is_correct = player_action == optimal
        kind = hand_type(hand)
        dealer_value = dealer_display_value(dealer_upcard)

        return StrategyDecision(
            action=player_action,
            optimal_action=optimal,
            is_correct=is_correct,
            explanation=explain_decision(
                player_action, optimal, kind, hand.hand_value, dealer_value
            ),
            hand_type=kind,
            player_value=hand.hand_value,
            dealer_upcard=dealer_value,
        )

    def cell_coordinates(
        self,
        hand: PlayerHand,
        dealer_upcard: Card,
    ) -> StrategyCoordinates | None:
        """Locate the chart cell for a hand, or None if no chart covers it."""
        col = dealer_column_index(dealer_upcard)

        if hand.is_pair:
            row = self._charts[TableType.PAIRS].row_index(hand.cards[0].value)
            if row is not None:
                return StrategyCoordinates(TableType.PAIRS, row, col)

        total = hand.hand_value
        if hand.is_soft:
            # Soft 21 is a finished hand, not a chart cell
            if SOFT_MIN_ROW <= total <= SOFT_MAX_ROW:
                return StrategyCoordinates(TableType.SOFT, total - SOFT_MIN_ROW, col)
            return None

        if HARD_MIN_ROW <= total <= BLACKJACK:
            row = min(total, HARD_MAX_ROW) - HARD_MIN_ROW
            return StrategyCoordinates(TableType.HARD, row, col)
        return None


def explain_decision(
    player_action: Action,
    optimal_action: Action,
    kind: HandType,
    player_value: int,
    dealer_value: int,
) -> str:
    """Build the feedback sentence shown after a decision."""
    if player_action == optimal_action:
        return f"Correct! {action_name(player_action)} is the optimal strategy."
    return (
        f"Incorrect. {action_name(optimal_action)} would be the optimal strategy "
        f"for {kind} {player_value} vs dealer {dealer_value}."
    )


_default_strategy = BasicStrategy()


def optimal_action(
    hand: PlayerHand,
    dealer_upcard: Card,
    available_actions: Iterable[Action],
) -> Action:
    """Return the optimal available action using the standard charts."""
    return _default_strategy.get_action(hand, dealer_upcard, available_actions)


def evaluate_decision(
    player_action: Action,
    hand: PlayerHand,
    dealer_upcard: Card,
    available_actions: Iterable[Action],
) -> StrategyDecision:
    """Grade a decision using the standard charts."""
    return _default_strategy.evaluate(player_action, hand, dealer_upcard, available_actions)


def strategy_cell_coordinates(
    hand: PlayerHand,
    dealer_upcard: Card,
) -> StrategyCoordinates | None:
    """Locate the chart cell for a hand using the standard charts."""
    return _default_strategy.cell_coordinates(hand, dealer_upcard)
