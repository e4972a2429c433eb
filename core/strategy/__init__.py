"""Strategy charts, rules and the basic strategy advisor."""

from core.strategy.rules import RuleSet
from core.strategy.actions import (
    Action,
    StrategyAction,
    action_name,
    action_to_strategy_action,
    strategy_action_to_action,
)
from core.strategy.charts import STRATEGY_CHARTS, StrategyTable, TableType
from core.strategy.basic import (
    BasicStrategy,
    HandType,
    StrategyCoordinates,
    StrategyDecision,
    evaluate_decision,
    optimal_action,
    strategy_cell_coordinates,
)

__all__ = [
    "RuleSet",
    "Action",
    "StrategyAction",
    "action_name",
    "action_to_strategy_action",
    "strategy_action_to_action",
    "STRATEGY_CHARTS",
    "StrategyTable",
    "TableType",
    "BasicStrategy",
    "HandType",
    "StrategyCoordinates",
    "StrategyDecision",
    "evaluate_decision",
    "optimal_action",
    "strategy_cell_coordinates",
]
