"""Game phase enumeration."""

from enum import Enum, auto


class GamePhase(Enum):
    """
    Game state machine phases.

    Flow: INITIAL → DEALING → PLAYER_TURN → DEALER_TURN → GAME_OVER, and back
    to INITIAL when a new hand is started.
    """

    # Idle, waiting for a hand to be dealt
    INITIAL = auto()

    # Cards being dealt
    DEALING = auto()

    # Player decisions
    PLAYER_TURN = auto()

    # Dealer plays
    DEALER_TURN = auto()

    # Hand resolved, result available
    GAME_OVER = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()

