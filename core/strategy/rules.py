"""Blackjack table rule variations."""

from dataclasses import dataclass

from core.errors import InvalidRulesError


@dataclass(frozen=True)
class RuleSet:
    """
    Table rules the game engine enforces.

    The strategy charts are fixed; these rules only decide which actions are
    offered and how the dealer plays.
    """

    # Deck configuration
    num_decks: int = 1

    # Dealer rules
    dealer_hits_soft_17: bool = True  # H17 vs S17

    # Late surrender as the first decision of an unsplit hand
    surrender_allowed: bool = True

    # Double down after splitting (DAS)
    double_after_split: bool = True

    # Maximum number of hands from splitting
    max_split_hands: int = 4

    def __post_init__(self) -> None:
        """Validate rule combinations."""
        if self.num_decks < 1 or self.num_decks > 8:
            raise InvalidRulesError("num_decks must be between 1 and 8")
        if self.max_split_hands < 1:
            raise InvalidRulesError("max_split_hands must be at least 1")

    @classmethod
    def single_deck(cls) -> "RuleSet":
        """Single deck trainer defaults (H17, late surrender, DAS)."""
        return cls(
            num_decks=1,
            dealer_hits_soft_17=True,
            surrender_allowed=True,
            double_after_split=True,
            max_split_hands=4,
        )

    @classmethod
    def vegas_strip(cls) -> "RuleSet":
        """Standard Vegas Strip rules."""
        return cls(
            num_decks=6,
            dealer_hits_soft_17=False,
            surrender_allowed=True,
            double_after_split=True,
            max_split_hands=4,
        )

    @classmethod
    def atlantic_city(cls) -> "RuleSet":
        """Atlantic City rules."""
        return cls(
            num_decks=8,
            dealer_hits_soft_17=False,
            surrender_allowed=True,
            double_after_split=True,
            max_split_hands=4,
        )

    @classmethod
    def no_surrender(cls) -> "RuleSet":
        """Single deck without surrender or double after split."""
        return cls(
            num_decks=1,
            dealer_hits_soft_17=True,
            surrender_allowed=False,
            double_after_split=False,
            max_split_hands=4,
        )
