"""Card values, deck construction, shuffling and dealing."""

from dataclasses import dataclass
from enum import Enum, auto
from random import Random
from typing import Iterator, Sequence


class Suit(Enum):
    """Card suits."""

    SPADES = auto()
    HEARTS = auto()
    DIAMONDS = auto()
    CLUBS = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.SPADES: "♠",
            Suit.HEARTS: "♥",
            Suit.DIAMONDS: "♦",
            Suit.CLUBS: "♣",
        }
        return symbols[self]


class Rank(Enum):
    """Card ranks with blackjack values."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        if self.value <= 10:
            return str(self.value)
        return {
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
            Rank.ACE: "A",
        }[self]

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10)."""
        if self.value <= 10:
            return self.value
        if self == Rank.ACE:
            return 11
        return 10  # Face cards

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE

    @property
    def is_ten_value(self) -> bool:
        """Check if this rank has a value of 10."""
        return self.blackjack_value == 10


_RANK_CODES = {
    "2": Rank.TWO,
    "3": Rank.THREE,
    "4": Rank.FOUR,
    "5": Rank.FIVE,
    "6": Rank.SIX,
    "7": Rank.SEVEN,
    "8": Rank.EIGHT,
    "9": Rank.NINE,
    "10": Rank.TEN,
    "T": Rank.TEN,
    "J": Rank.JACK,
    "Q": Rank.QUEEN,
    "K": Rank.KING,
    "A": Rank.ACE,
}

_SUIT_CODES = {
    "S": Suit.SPADES,
    "♠": Suit.SPADES,
    "H": Suit.HEARTS,
    "♥": Suit.HEARTS,
    "D": Suit.DIAMONDS,
    "♦": Suit.DIAMONDS,
    "C": Suit.CLUBS,
    "♣": Suit.CLUBS,
}


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        """Return the blackjack point value."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @property
    def is_ten_value(self) -> bool:
        """Check if this card has a value of 10."""
        return self.rank.is_ten_value

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Kh'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        if rank_str not in _RANK_CODES:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in _SUIT_CODES:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(_RANK_CODES[rank_str], _SUIT_CODES[suit_str])


def build_deck() -> list[Card]:
    """Return a standard 52-card deck in suit-major order."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def shuffle(cards: Sequence[Card], rng: Random | None = None) -> list[Card]:
    """
    Return a uniformly shuffled copy of ``cards``.

    ``Random.shuffle`` is an in-place Fisher-Yates pass; it runs on a copy so
    the caller's sequence is left untouched.
    """
    shuffled = list(cards)
    (rng or Random()).shuffle(shuffled)
    return shuffled


def build_shoe(num_decks: int = 1, rng: Random | None = None) -> list[Card]:
    """Return ``num_decks`` decks shuffled together."""
    if num_decks < 1:
        raise ValueError("Shoe must have at least 1 deck")
    cards = [card for _ in range(num_decks) for card in build_deck()]
    return shuffle(cards, rng)


def deal(cards: Sequence[Card], count: int) -> tuple[list[Card], list[Card]]:
    """
    Take up to ``count`` cards from the front of ``cards``.

    Returns:
        (drawn, remaining). ``drawn`` is shorter than ``count`` when the
        sequence runs out; callers must check its length.
    """
    count = max(count, 0)
    return list(cards[:count]), list(cards[count:])


class Shoe:
    """A shoe of one or more decks, dealt from the front."""

    def __init__(self, num_decks: int = 1, rng: Random | None = None) -> None:
        """
        Initialize an unshuffled, empty shoe.

        Args:
            num_decks: Number of decks combined on every shuffle
            rng: Random number generator for shuffling
        """
        if num_decks < 1:
            raise ValueError("Shoe must have at least 1 deck")

        self._num_decks = num_decks
        self._rng = rng or Random()
        self._cards: list[Card] = []

    @classmethod
    def stacked(cls, cards: Sequence[Card], num_decks: int = 1) -> "Shoe":
        """Create a shoe holding ``cards`` in the given dealing order."""
        shoe = cls(num_decks=num_decks)
        shoe._cards = list(cards)
        return shoe

    def shuffle(self) -> None:
        """Replace the contents with a freshly shuffled full shoe."""
        self._cards = build_shoe(self._num_decks, self._rng)

    def draw(self) -> Card | None:
        """Draw the front card, or None if the shoe is empty."""
        drawn, self._cards = deal(self._cards, 1)
        return drawn[0] if drawn else None

    def deal(self, count: int) -> list[Card]:
        """Draw up to ``count`` cards from the front."""
        drawn, self._cards = deal(self._cards, count)
        return drawn

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)

    @property
    def total_cards(self) -> int:
        """Return the number of cards in a full shoe."""
        return self._num_decks * 52

    @property
    def num_decks(self) -> int:
        """Return the number of decks in the shoe."""
        return self._num_decks

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)
