"""Tests for basic strategy charts, lookups and decision feedback."""

import pytest

from core.errors import InvalidRulesError
from core.strategy import (
    Action,
    BasicStrategy,
    HandType,
    RuleSet,
    StrategyAction,
    StrategyCoordinates,
    TableType,
    action_to_strategy_action,
    evaluate_decision,
    optimal_action,
    strategy_action_to_action,
    strategy_cell_coordinates,
)
from core.strategy.basic import dealer_column_index, dealer_display_value, fallback_action
from core.strategy.charts import HARD_TOTALS_CHART, PAIRS_CHART, SOFT_TOTALS_CHART
from tests.conftest import cards, player_hand

ALL_ACTIONS = [Action.HIT, Action.STAND, Action.DOUBLE, Action.SPLIT, Action.SURRENDER]
NO_SURRENDER = [Action.HIT, Action.STAND, Action.DOUBLE, Action.SPLIT]
HIT_STAND = [Action.HIT, Action.STAND]
DEALER_CARDS = ["2C", "3C", "4C", "5C", "6C", "7C", "8C", "9C", "10C", "AC"]


def upcard(code):
    return cards(code)[0]


class TestActionConversion:
    """Tests for action code conversion."""

    @pytest.mark.parametrize("action", list(Action))
    def test_round_trip(self, action):
        """Test every action survives a trip through its chart code."""
        assert strategy_action_to_action(action_to_strategy_action(action)) == action

    def test_codes(self):
        """Test chart codes."""
        assert action_to_strategy_action(Action.SURRENDER) == StrategyAction.R
        assert strategy_action_to_action(StrategyAction.P) == Action.SPLIT


class TestCharts:
    """Tests for chart shape and spot values."""

    def test_chart_shapes(self):
        """Test row counts and that every row has ten dealer columns."""
        assert len(HARD_TOTALS_CHART.rows) == 10
        assert len(SOFT_TOTALS_CHART.rows) == 8
        assert len(PAIRS_CHART.rows) == 10
        for chart in (HARD_TOTALS_CHART, SOFT_TOTALS_CHART, PAIRS_CHART):
            assert all(len(row.actions) == 10 for row in chart.rows)

    def test_row_index(self):
        """Test rows are found by player value."""
        assert HARD_TOTALS_CHART.row_index(8) == 0
        assert HARD_TOTALS_CHART.row_index(17) == 9
        assert SOFT_TOTALS_CHART.row_index(13) == 0
        assert PAIRS_CHART.row_index(11) == 9
        assert PAIRS_CHART.row_index(1) is None

    @pytest.mark.parametrize(
        "codes, dealer, expected",
        [
            (("5S", "4H"), "2C", Action.HIT),
            (("5S", "4H"), "3C", Action.DOUBLE),
            (("10S", "2H"), "4C", Action.STAND),
            (("10S", "2H"), "2C", Action.HIT),
            (("9S", "9H"), "7C", Action.STAND),
            (("9S", "9H"), "8C", Action.SPLIT),
            (("4S", "4H"), "5C", Action.SPLIT),
            (("5S", "5H"), "10C", Action.HIT),
            (("AS", "7H"), "2C", Action.STAND),
            (("AS", "7H"), "9C", Action.HIT),
            (("AS", "2H"), "5C", Action.DOUBLE),
            (("10S", "5H"), "10C", Action.SURRENDER),
            (("10S", "5H"), "AC", Action.HIT),
        ],
    )
    def test_spot_checks(self, codes, dealer, expected):
        """Test individual chart cells."""
        assert optimal_action(player_hand(*codes), upcard(dealer), ALL_ACTIONS) == expected


class TestDealerColumns:
    """Tests for upcard handling."""

    def test_column_index(self):
        """Test upcards map to columns 0..9."""
        assert [dealer_column_index(upcard(c)) for c in DEALER_CARDS] == list(range(10))
        assert dealer_column_index(upcard("KC")) == 8

    def test_display_value(self):
        """Test Ace shows as 1 and faces as 10."""
        assert dealer_display_value(upcard("AC")) == 1
        assert dealer_display_value(upcard("QC")) == 10
        assert dealer_display_value(upcard("7C")) == 7


class TestBasicStrategy:
    """Tests for BasicStrategy lookups."""

    @pytest.mark.parametrize("dealer", DEALER_CARDS)
    def test_hard_17_plus_always_stand(self, basic_strategy, dealer):
        """Test that hard 17+ always stands."""
        for codes in (("10S", "7H"), ("10S", "8H"), ("10S", "9H"), ("KS", "QH")):
            hand = player_hand(*codes)
            assert basic_strategy.get_action(hand, upcard(dealer), ALL_ACTIONS) == Action.STAND

    @pytest.mark.parametrize("dealer", DEALER_CARDS)
    def test_hard_8_or_less_always_hit(self, basic_strategy, dealer):
        """Test that totals below the chart clamp to the 8 row."""
        for codes in (("2S", "3H"), ("3S", "4H"), ("5S", "3H")):
            hand = player_hand(*codes)
            assert basic_strategy.get_action(hand, upcard(dealer), ALL_ACTIONS) == Action.HIT

    def test_hard_11_doubles_except_vs_ace(self, basic_strategy):
        """Test hard 11 doubles against 2..10 and hits against an Ace."""
        hand = player_hand("6S", "5H")
        for dealer in DEALER_CARDS[:-1]:
            assert basic_strategy.get_action(hand, upcard(dealer), ALL_ACTIONS) == Action.DOUBLE
        assert basic_strategy.get_action(hand, upcard("AC"), ALL_ACTIONS) == Action.HIT

    def test_surrender_16_vs_10(self, basic_strategy):
        """Test hard 16 vs 10 surrenders, and hits when surrender is gone."""
        hand = player_hand("10S", "6H")
        assert basic_strategy.get_action(hand, upcard("10C"), ALL_ACTIONS) == Action.SURRENDER
        assert basic_strategy.get_action(hand, upcard("10C"), NO_SURRENDER) == Action.HIT
        assert basic_strategy.get_action(hand, upcard("KC"), HIT_STAND) == Action.HIT

    def test_pair_8s_vs_6_splits(self, basic_strategy, pair_8s_hand):
        """Test that a pair of 8s vs 6 splits."""
        assert basic_strategy.get_action(pair_8s_hand, upcard("6C"), ALL_ACTIONS) == Action.SPLIT

    @pytest.mark.parametrize("dealer", DEALER_CARDS)
    def test_pair_10s_never_split(self, basic_strategy, dealer):
        """Test that a pair of 10s always stands."""
        hand = player_hand("10S", "10H")
        assert basic_strategy.get_action(hand, upcard(dealer), ALL_ACTIONS) == Action.STAND

    @pytest.mark.parametrize("dealer", DEALER_CARDS)
    def test_pair_aces_always_split(self, basic_strategy, dealer):
        """Test that a pair of Aces always splits."""
        hand = player_hand("AS", "AH")
        assert basic_strategy.get_action(hand, upcard(dealer), ALL_ACTIONS) == Action.SPLIT

    def test_pair_without_split_reads_totals(self, basic_strategy, pair_8s_hand):
        """Test a pair that cannot split is read as a hard total."""
        available = [Action.HIT, Action.STAND, Action.DOUBLE]
        assert basic_strategy.classify(pair_8s_hand, available) == TableType.HARD
        assert basic_strategy.get_action(pair_8s_hand, upcard("6C"), available) == Action.STAND
        assert basic_strategy.get_action(pair_8s_hand, upcard("10C"), available) == Action.HIT

    def test_soft_20_always_stand(self, basic_strategy):
        """Test that soft 20 (A-9) always stands."""
        hand = player_hand("AS", "9H")
        for dealer in DEALER_CARDS:
            assert basic_strategy.get_action(hand, upcard(dealer), ALL_ACTIONS) == Action.STAND

    def test_double_falls_back_to_hit(self, basic_strategy):
        """Test a three-card 11 hits when doubling is gone."""
        hand = player_hand("2S", "4H", "5C")
        assert basic_strategy.get_action(hand, upcard("6C"), HIT_STAND) == Action.HIT

    def test_soft_double_falls_back_to_hit(self, basic_strategy):
        """Test a three-card soft 18 vs 3 follows DOUBLE -> HIT."""
        hand = player_hand("AS", "2H", "5C")
        assert hand.is_soft and hand.hand_value == 18
        assert basic_strategy.get_action(hand, upcard("3C"), HIT_STAND) == Action.HIT

    def test_soft_21_stands(self, basic_strategy):
        """Test soft totals above the chart stand."""
        hand = player_hand("AS", "5H", "5C")
        assert basic_strategy.get_action(hand, upcard("10C"), HIT_STAND) == Action.STAND


class TestFallbackAction:
    """Tests for the ordered fallback policy."""

    def test_double(self):
        """Test DOUBLE prefers HIT, then STAND."""
        assert fallback_action(StrategyAction.D, HIT_STAND) == Action.HIT
        assert fallback_action(StrategyAction.D, [Action.STAND]) == Action.STAND

    def test_surrender(self):
        """Test SURRENDER prefers STAND, then HIT."""
        assert fallback_action(StrategyAction.R, HIT_STAND) == Action.STAND
        assert fallback_action(StrategyAction.R, [Action.HIT]) == Action.HIT

    def test_split(self):
        """Test SPLIT falls back to HIT."""
        assert fallback_action(StrategyAction.P, HIT_STAND) == Action.HIT

    def test_default_hit(self):
        """Test HIT is the default when no candidate is offered."""
        assert fallback_action(StrategyAction.S, [Action.HIT]) == Action.HIT
        assert fallback_action(StrategyAction.S, []) == Action.HIT


class TestEvaluateDecision:
    """Tests for decision grading."""

    def test_correct_decision(self):
        """Test grading the optimal play."""
        decision = evaluate_decision(
            Action.STAND, player_hand("10S", "9H"), upcard("6C"), ALL_ACTIONS
        )
        assert decision.is_correct
        assert decision.optimal_action == Action.STAND
        assert decision.hand_type == HandType.HARD
        assert decision.player_value == 19
        assert decision.dealer_upcard == 6
        assert decision.explanation == "Correct! Stand is the optimal strategy."

    def test_incorrect_decision(self):
        """Test grading a mistake explains the right play."""
        decision = evaluate_decision(
            Action.STAND, player_hand("AS", "2H"), upcard("AC"), ALL_ACTIONS
        )
        assert not decision.is_correct
        assert decision.optimal_action == Action.HIT
        assert decision.dealer_upcard == 1
        assert decision.explanation == (
            "Incorrect. Hit would be the optimal strategy for soft 13 vs dealer 1."
        )

    def test_pair_hand_type(self, pair_8s_hand):
        """Test pairs are reported as pairs."""
        decision = evaluate_decision(Action.SPLIT, pair_8s_hand, upcard("10C"), ALL_ACTIONS)
        assert decision.is_correct
        assert decision.hand_type == HandType.PAIR
        assert str(decision.hand_type) == "pair"
        assert "Double Down" not in decision.explanation


class TestStrategyCellCoordinates:
    """Tests for chart cell lookup."""

    @pytest.mark.parametrize(
        "codes",
        [("10S", "7H"), ("10S", "8H"), ("10S", "9H"), ("KS", "QH"), ("10S", "5H", "6C")],
    )
    def test_hard_terminal_row(self, codes):
        """Test hard 17..21 all map to the 17+ row."""
        coordinates = strategy_cell_coordinates(player_hand(*codes), upcard("6C"))
        assert coordinates == StrategyCoordinates(TableType.HARD, 9, 4)

    def test_hard_8(self):
        """Test hard 8 is the first row."""
        coordinates = strategy_cell_coordinates(player_hand("5S", "3H"), upcard("AC"))
        assert coordinates == StrategyCoordinates(TableType.HARD, 0, 9)

    def test_soft(self):
        """Test soft totals map to total - 13."""
        coordinates = strategy_cell_coordinates(player_hand("AS", "2H"), upcard("5C"))
        assert coordinates == StrategyCoordinates(TableType.SOFT, 0, 3)
        coordinates = strategy_cell_coordinates(player_hand("AS", "9H"), upcard("10C"))
        assert coordinates == StrategyCoordinates(TableType.SOFT, 7, 8)

    def test_pairs(self):
        """Test pairs map to the pairs chart."""
        coordinates = strategy_cell_coordinates(player_hand("AS", "AH"), upcard("2C"))
        assert coordinates == StrategyCoordinates(TableType.PAIRS, 9, 0)
        coordinates = strategy_cell_coordinates(player_hand("2S", "2H"), upcard("7C"))
        assert coordinates == StrategyCoordinates(TableType.PAIRS, 0, 5)

    @pytest.mark.parametrize(
        "codes",
        [("2S", "3H"), ("3S", "4H"), ("10S", "6H", "KC"), ("AS", "KH"), ("AS", "5H", "5C")],
    )
    def test_unrepresentable(self, codes):
        """Test totals below 8, busts and soft 21 have no cell."""
        assert strategy_cell_coordinates(player_hand(*codes), upcard("6C")) is None


class TestRuleSet:
    """Tests for RuleSet."""

    def test_defaults(self, rules):
        """Test default trainer rules."""
        assert rules.num_decks == 1
        assert rules.dealer_hits_soft_17
        assert rules.surrender_allowed
        assert rules.double_after_split
        assert rules.max_split_hands == 4

    def test_presets(self):
        """Test named presets."""
        assert RuleSet.vegas_strip().num_decks == 6
        assert not RuleSet.vegas_strip().dealer_hits_soft_17
        assert not RuleSet.no_surrender().surrender_allowed

    def test_invalid_rules_raise(self):
        """Test validation errors are ValueErrors."""
        with pytest.raises(InvalidRulesError):
            RuleSet(num_decks=0)
        with pytest.raises(ValueError):
            RuleSet(max_split_hands=0)
