"""Training session: a game wired to session analytics."""

import logging
from dataclasses import dataclass
from random import Random

from core.cards import Card, Shoe
from core.game.engine import BlackjackGame, DealerStep, GameResult
from core.game.events import EventType, GameEvent
from core.game.log import ActionLogEntry
from core.game.state import GamePhase
from core.hand import PlayerHand
from core.statistics.history import build_history_entry
from core.statistics.session import DecisionScenario, SessionTracker
from core.strategy.actions import Action
from core.strategy.basic import StrategyCoordinates
from core.strategy.rules import RuleSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableSnapshot:
    """What a player can see of the table at one moment."""

    phase: GamePhase
    player_hands: list[PlayerHand]
    current_hand_id: str | None
    dealer_cards: list[Card]
    dealer_value: int
    dealer_hole_hidden: bool
    available_actions: list[Action]
    last_action: ActionLogEntry | None
    game_result: GameResult | None
    dealer_steps: list[DealerStep]
    coordinates: StrategyCoordinates | None


class TrainingSession:
    """
    Plays hands and feeds every graded decision and result into a tracker.

    The game reports through events; this class is the only subscriber
    that turns them into statistics.
    """

    def __init__(
        self,
        rules: RuleSet | None = None,
        rng: Random | None = None,
        tracker: SessionTracker | None = None,
    ) -> None:
        self.game = BlackjackGame(rules=rules, rng=rng)
        self.tracker = tracker or SessionTracker()

        self.game.subscribe(self._on_decision, EventType.DECISION_EVALUATED)
        self.game.subscribe(self._on_round_ended, EventType.ROUND_ENDED)

    def start_new_hand(self, shoe: Shoe | None = None) -> bool:
        """Deal a new round. See ``BlackjackGame.start_new_hand``."""
        return self.game.start_new_hand(shoe)

    def act(self, action: Action) -> bool:
        """Apply a decision to the active hand."""
        return self.game.act(action)

    def snapshot(self) -> TableSnapshot:
        """Capture the visible table state."""
        game = self.game
        hand = game.current_hand
        upcard = game.dealer_upcard
        coordinates = None
        if hand is not None and upcard is not None:
            coordinates = game.strategy.cell_coordinates(hand, upcard)

        return TableSnapshot(
            phase=game.phase,
            player_hands=game.player_hands,
            current_hand_id=hand.id if hand else None,
            dealer_cards=game.dealer_hand.visible_cards,
            dealer_value=game.dealer_hand.visible_value,
            dealer_hole_hidden=game.dealer_hand.hide_hole_card,
            available_actions=game.available_actions,
            last_action=game.last_action,
            game_result=game.game_result,
            dealer_steps=game.dealer_steps,
            coordinates=coordinates,
        )

    def _on_decision(self, event: GameEvent) -> None:
        decision = event.data["decision"]
        self.tracker.record_decision(
            was_correct=decision.is_correct,
            player_action=decision.action,
            optimal_action=decision.optimal_action,
            scenario=DecisionScenario(
                player_value=decision.player_value,
                dealer_upcard=decision.dealer_upcard,
                table_type=str(decision.hand_type),
            ),
        )

    def _on_round_ended(self, event: GameEvent) -> None:
        result: GameResult = event.data["result"]
        entry = build_history_entry(self.game, self.tracker.current_session.session_id)
        self.tracker.add_history_entry(entry)
        self.tracker.record_game_result(result)
        level = self.tracker.update_skill_level()
        logger.debug("Recorded round %s, skill level %s", entry.id, level)
