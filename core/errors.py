"""Engine exceptions."""


class BlackjackError(Exception):
    """Base class for engine errors."""


class DeckExhaustedError(BlackjackError):
    """Raised when the shoe cannot supply the cards an initial deal needs."""

    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            f"Not enough cards to deal: need {required}, have {available}"
        )
        self.required = required
        self.available = available


class InvalidRulesError(BlackjackError, ValueError):
    """Raised when a rule set combination is not playable."""
