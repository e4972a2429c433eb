"""Hand valuation and player/dealer hands."""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Iterator, NamedTuple

from core.cards import Card

if TYPE_CHECKING:
    from core.game.log import ActionLogEntry


BLACKJACK = 21
DEALER_STANDS_ON = 17


class HandValue(NamedTuple):
    """Best total of a set of cards and whether an Ace still counts 11."""

    total: int
    is_soft: bool


def hand_value(cards: Iterable[Card]) -> HandValue:
    """
    Calculate the best hand value.

    Every Ace starts at 11; one at a time is dropped to 1 while the total is
    over 21. The hand is soft while at least one Ace is still worth 11.
    """
    total = 0
    aces = 0

    for card in cards:
        if card.is_ace:
            aces += 1
        total += card.value

    # Reduce aces from 11 to 1 as needed
    while total > BLACKJACK and aces > 0:
        total -= 10
        aces -= 1

    return HandValue(total, aces > 0 and total <= BLACKJACK)


def is_blackjack(cards: Iterable[Card]) -> bool:
    """Check for a natural: exactly two cards, an Ace and a ten-value card."""
    cards = list(cards)
    return (
        len(cards) == 2
        and any(card.is_ace for card in cards)
        and any(card.is_ten_value for card in cards)
    )


def is_busted(cards: Iterable[Card]) -> bool:
    """Check if the cards total more than 21."""
    return hand_value(cards).total > BLACKJACK


def is_pair(cards: Iterable[Card]) -> bool:
    """Check if the cards are exactly two of the same rank."""
    cards = list(cards)
    return len(cards) == 2 and cards[0].rank == cards[1].rank


class HandOutcome(Enum):
    """Result of a resolved player hand."""

    WIN = "WIN"
    LOSS = "LOSS"
    PUSH = "PUSH"
    BLACKJACK = "BLACKJACK"
    SURRENDER = "SURRENDER"

    def __str__(self) -> str:
        return self.value.title()


@dataclass
class PlayerHand:
    """
    A player hand and its decision log.

    Value, softness, bust and blackjack status are derived from ``cards`` on
    every read, so they can never drift from the cards actually held.
    """

    id: str
    cards: list[Card] = field(default_factory=list)
    stood: bool = False
    doubled: bool = False
    split_from_pair: bool = False
    surrendered: bool = False
    outcome: HandOutcome | None = None
    action_log: list["ActionLogEntry"] = field(default_factory=list)

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    @property
    def hand_value(self) -> int:
        """Return the best total."""
        return hand_value(self.cards).total

    @property
    def is_soft(self) -> bool:
        """Check if an Ace is still counted as 11."""
        return hand_value(self.cards).is_soft

    @property
    def busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return is_busted(self.cards)

    @property
    def is_blackjack(self) -> bool:
        """Check for Ace plus a ten-value card in exactly two cards."""
        return is_blackjack(self.cards)

    @property
    def is_pair(self) -> bool:
        """Check if the hand is a pair (two cards of same rank)."""
        return is_pair(self.cards)

    @property
    def is_finished(self) -> bool:
        """Check if no further decisions can be made on this hand."""
        return self.busted or self.stood or self.is_blackjack or self.surrendered

    @property
    def has_acted(self) -> bool:
        """Check if any decision has been logged against this hand."""
        return bool(self.action_log)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        value_str = f"({self.hand_value})"
        if self.is_soft:
            value_str = f"(soft {self.hand_value})"
        if self.is_blackjack:
            value_str = "(BLACKJACK)"
        if self.busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"


@dataclass
class DealerHand:
    """The dealer's hand. The second card stays hidden until dealer play."""

    cards: list[Card] = field(default_factory=list)
    hide_hole_card: bool = True

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    @property
    def hand_value(self) -> int:
        """Return the best total of all cards, hidden or not."""
        return hand_value(self.cards).total

    @property
    def is_soft(self) -> bool:
        """Check if an Ace is still counted as 11."""
        return hand_value(self.cards).is_soft

    @property
    def busted(self) -> bool:
        """Check if the dealer has busted."""
        return is_busted(self.cards)

    @property
    def is_blackjack(self) -> bool:
        """Check if the dealer holds a natural."""
        return is_blackjack(self.cards)

    @property
    def upcard(self) -> Card | None:
        """Return the face-up card."""
        return self.cards[0] if self.cards else None

    @property
    def visible_cards(self) -> list[Card]:
        """Return the cards a player is allowed to see."""
        if self.hide_hole_card:
            return self.cards[:1]
        return list(self.cards)

    @property
    def visible_value(self) -> int:
        """Return the total of the visible cards only."""
        return hand_value(self.visible_cards).total


def determine_hand_outcome(player_hand: PlayerHand, dealer_hand: DealerHand) -> HandOutcome:
    """
    Compare a finished player hand against the final dealer hand.

    Surrender and player bust are settled before anything the dealer holds.
    Naturals are compared next, then totals.
    """
    if player_hand.surrendered:
        return HandOutcome.SURRENDER

    # Player busts always loses
    if player_hand.busted:
        return HandOutcome.LOSS

    player_bj = player_hand.is_blackjack
    dealer_bj = dealer_hand.is_blackjack

    if player_bj and dealer_bj:
        return HandOutcome.PUSH
    if player_bj:
        return HandOutcome.BLACKJACK
    if dealer_bj:
        return HandOutcome.LOSS

    if dealer_hand.busted:
        return HandOutcome.WIN

    player_value = player_hand.hand_value
    dealer_value = dealer_hand.hand_value
    if player_value > dealer_value:
        return HandOutcome.WIN
    if dealer_value > player_value:
        return HandOutcome.LOSS
    return HandOutcome.PUSH
