"""Pytest fixtures for blackjack trainer tests."""

import pytest
from random import Random

from hypothesis import strategies as st

from core.cards import Card, Rank, Shoe, Suit
from core.game import BlackjackGame
from core.hand import DealerHand, PlayerHand
from core.statistics import SessionTracker, build_history_entry
from core.strategy import BasicStrategy, RuleSet
from core.training import TrainingSession


def cards(*codes: str) -> list[Card]:
    """Build cards from codes like 'AS', '10H', 'KD'."""
    return [Card.from_string(code) for code in codes]


def player_hand(*codes: str) -> PlayerHand:
    """Build a player hand from card codes."""
    return PlayerHand(id="hand-0", cards=cards(*codes))


def dealer_hand(*codes: str) -> DealerHand:
    """Build a dealer hand from card codes."""
    return DealerHand(cards=cards(*codes))


def stacked_shoe(*codes: str) -> Shoe:
    """
    A shoe dealing ``codes`` in order.

    The initial deal goes player, dealer, player, dealer, so the player's
    cards are codes 0 and 2 and the dealer's are 1 and 3.
    """
    return Shoe.stacked(cards(*codes))


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def shoe(rng):
    """A shuffled single-deck shoe."""
    s = Shoe(num_decks=1, rng=rng)
    s.shuffle()
    return s


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return PlayerHand(id="hand-0")


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return player_hand("AS", "KH")


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return player_hand("AS", "6H")


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return player_hand("10S", "6H")


@pytest.fixture
def pair_8s_hand():
    """A pair of 8s hand."""
    return player_hand("8S", "8H")


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return player_hand("10S", "6H", "KC")


@pytest.fixture
def rules():
    """Default ruleset."""
    return RuleSet()


@pytest.fixture
def no_surrender_rules():
    """Rules without surrender or double after split."""
    return RuleSet.no_surrender()


@pytest.fixture
def basic_strategy():
    """Basic strategy with the standard charts."""
    return BasicStrategy()


@pytest.fixture
def game(rng):
    """A new game instance."""
    return BlackjackGame(rng=rng)


@pytest.fixture
def tracker():
    """A fresh session tracker."""
    return SessionTracker()


@pytest.fixture
def history_entry():
    """Factory for history entries of a dealt-blackjack round."""

    def make():
        game = BlackjackGame()
        game.start_new_hand(stacked_shoe("AS", "KH", "KC", "9D"))
        return build_history_entry(game, "session-test")

    return make


@pytest.fixture
def training(rng):
    """A training session with default rules."""
    return TrainingSession(rng=rng)


# Hypothesis strategies for property-based testing
@st.composite
def card_strategy(draw):
    """Generate a random card."""
    rank = draw(st.sampled_from(list(Rank)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(rank, suit)


@st.composite
def hand_strategy(draw, min_cards=2, max_cards=5):
    """Generate a random player hand."""
    drawn = draw(st.lists(card_strategy(), min_size=min_cards, max_size=max_cards))
    return PlayerHand(id="hand-0", cards=drawn)
