"""Tests for cards, deck building, shuffling, dealing and the Shoe class."""

import pytest
from collections import Counter
from random import Random

from core.cards import Card, Rank, Shoe, Suit, build_deck, build_shoe, deal, shuffle
from tests.conftest import cards


class TestCard:
    """Tests for the Card class."""

    def test_card_creation(self):
        """Test creating a card."""
        card = Card(Rank.ACE, Suit.SPADES)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_card_immutability(self):
        """Test that cards are immutable."""
        card = Card(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_card_value(self):
        """Test card blackjack values."""
        assert Card(Rank.TWO, Suit.HEARTS).value == 2
        assert Card(Rank.TEN, Suit.HEARTS).value == 10
        assert Card(Rank.JACK, Suit.HEARTS).value == 10
        assert Card(Rank.QUEEN, Suit.HEARTS).value == 10
        assert Card(Rank.KING, Suit.HEARTS).value == 10
        assert Card(Rank.ACE, Suit.HEARTS).value == 11

    def test_card_is_ten_value(self):
        """Test ten-value detection."""
        for rank in (Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING):
            assert Card(rank, Suit.SPADES).is_ten_value
        assert not Card(Rank.NINE, Suit.SPADES).is_ten_value
        assert not Card(Rank.ACE, Suit.SPADES).is_ten_value

    def test_card_from_string(self):
        """Test creating cards from strings."""
        assert Card.from_string("AS") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_string("2H") == Card(Rank.TWO, Suit.HEARTS)
        assert Card.from_string("10D") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("kc") == Card(Rank.KING, Suit.CLUBS)
        assert Card.from_string("A♠") == Card(Rank.ACE, Suit.SPADES)

    def test_card_from_bad_string_raises(self):
        """Test that unknown ranks and suits are rejected."""
        with pytest.raises(ValueError):
            Card.from_string("1S")
        with pytest.raises(ValueError):
            Card.from_string("AX")
        with pytest.raises(ValueError):
            Card.from_string("A")

    def test_card_str(self):
        """Test string representation."""
        assert str(Card(Rank.ACE, Suit.SPADES)) == "A♠"
        assert str(Card(Rank.TEN, Suit.HEARTS)) == "10♥"


class TestDeckBuilding:
    """Tests for build_deck and build_shoe."""

    def test_deck_has_all_cards(self):
        """Test that a deck contains all 52 unique cards."""
        deck = build_deck()
        assert len(deck) == 52
        assert len(set(deck)) == 52

    @pytest.mark.parametrize("num_decks", [1, 2, 6, 8])
    def test_shoe_composition(self, num_decks):
        """Test that each rank appears 4n times and each suit 13n times."""
        shoe = build_shoe(num_decks, Random(7))
        assert len(shoe) == 52 * num_decks

        ranks = Counter(card.rank for card in shoe)
        suits = Counter(card.suit for card in shoe)
        assert all(ranks[rank] == 4 * num_decks for rank in Rank)
        assert all(suits[suit] == 13 * num_decks for suit in Suit)

    def test_invalid_deck_count_raises(self):
        """Test that a shoe needs at least one deck."""
        with pytest.raises(ValueError):
            build_shoe(0)


class TestShuffle:
    """Tests for shuffle."""

    def test_shuffle_is_permutation(self):
        """Test shuffling keeps the same multiset of cards."""
        deck = build_deck()
        shuffled = shuffle(deck, Random(42))
        assert Counter(shuffled) == Counter(deck)
        assert shuffled != deck

    def test_shuffle_does_not_mutate_input(self):
        """Test that the input sequence is left untouched."""
        deck = build_deck()
        before = list(deck)
        shuffle(deck, Random(42))
        assert deck == before

    def test_shuffle_reproducible_with_seed(self):
        """Test that equal seeds give equal orders."""
        deck = build_deck()
        assert shuffle(deck, Random(1)) == shuffle(deck, Random(1))


class TestDeal:
    """Tests for deal."""

    def test_deal_takes_from_front(self):
        """Test dealing returns the front cards and the rest."""
        deck = cards("AS", "KH", "2C", "3D")
        drawn, remaining = deal(deck, 2)
        assert drawn == cards("AS", "KH")
        assert remaining == cards("2C", "3D")

    def test_deal_short_deck(self):
        """Test dealing more cards than remain returns what is there."""
        drawn, remaining = deal(cards("AS"), 3)
        assert drawn == cards("AS")
        assert remaining == []

    def test_deal_empty_deck(self):
        """Test dealing from an empty deck never errors."""
        assert deal([], 2) == ([], [])


class TestShoe:
    """Tests for the Shoe class."""

    def test_new_shoe_is_empty(self):
        """Test a shoe holds no cards until shuffled."""
        shoe = Shoe(num_decks=2)
        assert len(shoe) == 0
        assert shoe.total_cards == 104

    def test_shuffle_fills_shoe(self, shoe):
        """Test shuffling loads a full shoe."""
        assert shoe.cards_remaining == 52

    def test_draw(self, shoe):
        """Test drawing from shoe."""
        card = shoe.draw()
        assert isinstance(card, Card)
        assert len(shoe) == 51

    def test_draw_empty_returns_none(self):
        """Test drawing from an empty shoe returns None."""
        assert Shoe().draw() is None

    def test_stacked_order(self):
        """Test a stacked shoe deals in the given order."""
        shoe = Shoe.stacked(cards("AS", "KH", "2C"))
        assert shoe.deal(2) == cards("AS", "KH")
        assert shoe.draw() == Card(Rank.TWO, Suit.CLUBS)
        assert shoe.draw() is None

    def test_invalid_decks_raises(self):
        """Test that invalid deck count raises error."""
        with pytest.raises(ValueError):
            Shoe(num_decks=0)
