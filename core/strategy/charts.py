"""
Basic strategy charts.

Single deck, dealer stands on soft 17, late surrender. Each row lists the
action against dealer upcards 2, 3, 4, 5, 6, 7, 8, 9, 10, A in that order.
"""

from dataclasses import dataclass
from enum import Enum

from core.strategy.actions import StrategyAction


class TableType(Enum):
    """The three strategy charts."""

    HARD = "HARD"
    SOFT = "SOFT"
    PAIRS = "PAIRS"


@dataclass(frozen=True)
class StrategyRow:
    """One chart row: a player hand against every dealer upcard."""

    player_value: int
    label: str
    actions: tuple[StrategyAction, ...]


@dataclass(frozen=True)
class StrategyTable:
    """A complete chart."""

    type: TableType
    title: str
    rows: tuple[StrategyRow, ...]

    def row_index(self, player_value: int) -> int | None:
        """Return the index of the row keyed by ``player_value``."""
        for index, row in enumerate(self.rows):
            if row.player_value == player_value:
                return index
        return None


H = StrategyAction.H
S = StrategyAction.S
D = StrategyAction.D
P = StrategyAction.P
R = StrategyAction.R

DEALER_UPCARDS = ("2", "3", "4", "5", "6", "7", "8", "9", "10", "A")

HARD_TOTALS_CHART = StrategyTable(
    type=TableType.HARD,
    title="Hard Totals",
    rows=(
        StrategyRow(8, "8 or less", (H, H, H, H, H, H, H, H, H, H)),
        StrategyRow(9, "9", (H, D, D, D, D, H, H, H, H, H)),
        StrategyRow(10, "10", (D, D, D, D, D, D, D, D, H, H)),
        StrategyRow(11, "11", (D, D, D, D, D, D, D, D, D, H)),
        StrategyRow(12, "12", (H, H, S, S, S, H, H, H, H, H)),
        StrategyRow(13, "13", (S, S, S, S, S, H, H, H, H, H)),
        StrategyRow(14, "14", (S, S, S, S, S, H, H, H, H, H)),
        StrategyRow(15, "15", (S, S, S, S, S, H, H, H, R, H)),
        StrategyRow(16, "16", (S, S, S, S, S, H, H, H, R, R)),
        StrategyRow(17, "17+", (S, S, S, S, S, S, S, S, S, S)),
    ),
)

# Rows are keyed by soft total: A,2 is soft 13 through A,9 at soft 20
SOFT_TOTALS_CHART = StrategyTable(
    type=TableType.SOFT,
    title="Soft Totals",
    rows=(
        StrategyRow(13, "A,2", (H, H, H, D, D, H, H, H, H, H)),
        StrategyRow(14, "A,3", (H, H, H, D, D, H, H, H, H, H)),
        StrategyRow(15, "A,4", (H, H, D, D, D, H, H, H, H, H)),
        StrategyRow(16, "A,5", (H, H, D, D, D, H, H, H, H, H)),
        StrategyRow(17, "A,6", (H, D, D, D, D, H, H, H, H, H)),
        StrategyRow(18, "A,7", (S, D, D, D, D, S, S, H, H, H)),
        StrategyRow(19, "A,8", (S, S, S, S, S, S, S, S, S, S)),
        StrategyRow(20, "A,9", (S, S, S, S, S, S, S, S, S, S)),
    ),
)

# Rows are keyed by the value of one card of the pair, Aces as 11
PAIRS_CHART = StrategyTable(
    type=TableType.PAIRS,
    title="Pair Splitting",
    rows=(
        StrategyRow(2, "2,2", (P, P, P, P, P, P, H, H, H, H)),
        StrategyRow(3, "3,3", (P, P, P, P, P, P, H, H, H, H)),
        StrategyRow(4, "4,4", (H, H, H, P, P, H, H, H, H, H)),
        StrategyRow(5, "5,5", (D, D, D, D, D, D, D, D, H, H)),
        StrategyRow(6, "6,6", (P, P, P, P, P, H, H, H, H, H)),
        StrategyRow(7, "7,7", (P, P, P, P, P, P, H, H, H, H)),
        StrategyRow(8, "8,8", (P, P, P, P, P, P, P, P, P, P)),
        StrategyRow(9, "9,9", (P, P, P, P, P, S, P, P, S, S)),
        StrategyRow(10, "10,10", (S, S, S, S, S, S, S, S, S, S)),
        StrategyRow(11, "A,A", (P, P, P, P, P, P, P, P, P, P)),
    ),
)

STRATEGY_CHARTS: dict[TableType, StrategyTable] = {
    TableType.HARD: HARD_TOTALS_CHART,
    TableType.SOFT: SOFT_TOTALS_CHART,
    TableType.PAIRS: PAIRS_CHART,
}

ACTION_DESCRIPTIONS: dict[StrategyAction, tuple[str, str]] = {
    H: ("Hit", "Take another card"),
    S: ("Stand", "Keep current total"),
    D: ("Double", "Double bet and take one card"),
    P: ("Split", "Split pair into two hands"),
    R: ("Surrender", "Forfeit half bet and end hand"),
}
