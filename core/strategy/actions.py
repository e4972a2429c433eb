"""Player actions and their strategy chart codes."""

from enum import Enum


class Action(Enum):
    """Possible player actions."""

    HIT = "HIT"
    STAND = "STAND"
    DOUBLE = "DOUBLE"
    SPLIT = "SPLIT"
    SURRENDER = "SURRENDER"

    def __str__(self) -> str:
        return self.value


class StrategyAction(Enum):
    """Single-letter action codes used in the strategy charts."""

    H = "H"
    S = "S"
    D = "D"
    P = "P"
    R = "R"

    def __str__(self) -> str:
        return self.value


_TO_STRATEGY = {
    Action.HIT: StrategyAction.H,
    Action.STAND: StrategyAction.S,
    Action.DOUBLE: StrategyAction.D,
    Action.SPLIT: StrategyAction.P,
    Action.SURRENDER: StrategyAction.R,
}

_FROM_STRATEGY = {code: action for action, code in _TO_STRATEGY.items()}

_ACTION_NAMES = {
    Action.HIT: "Hit",
    Action.STAND: "Stand",
    Action.DOUBLE: "Double Down",
    Action.SPLIT: "Split",
    Action.SURRENDER: "Surrender",
}


def action_to_strategy_action(action: Action) -> StrategyAction:
    """Convert a player action to its chart code."""
    return _TO_STRATEGY[action]


def strategy_action_to_action(code: StrategyAction) -> Action:
    """Convert a chart code to the player action it stands for."""
    return _FROM_STRATEGY[code]


def action_name(action: Action) -> str:
    """Return the display name of an action."""
    return _ACTION_NAMES[action]
