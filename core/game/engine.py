"""Blackjack game engine with state machine."""

import logging
from dataclasses import dataclass, field
from random import Random
from typing import Callable, Iterable

from transitions import Machine

from core.cards import Card, Shoe
from core.errors import DeckExhaustedError
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.log import ActionLogEntry
from core.game.state import GamePhase
from core.hand import (
    DEALER_STANDS_ON,
    DealerHand,
    HandOutcome,
    PlayerHand,
    determine_hand_outcome,
)
from core.strategy.actions import Action
from core.strategy.basic import BasicStrategy
from core.strategy.rules import RuleSet

logger = logging.getLogger(__name__)

INITIAL_DEAL_CARDS = 4


@dataclass
class GameResult:
    """
    Outcome tally for one round.

    Each hand lands in exactly one outcome counter; a busted hand also
    counts towards ``busts``.
    """

    wins: int = 0
    losses: int = 0
    pushes: int = 0
    surrenders: int = 0
    blackjacks: int = 0
    busts: int = 0

    @classmethod
    def tally(cls, hands: Iterable[PlayerHand]) -> "GameResult":
        """Aggregate resolved hands into a result."""
        result = cls()
        for hand in hands:
            if hand.outcome == HandOutcome.WIN:
                result.wins += 1
            elif hand.outcome == HandOutcome.LOSS:
                result.losses += 1
            elif hand.outcome == HandOutcome.PUSH:
                result.pushes += 1
            elif hand.outcome == HandOutcome.SURRENDER:
                result.surrenders += 1
            elif hand.outcome == HandOutcome.BLACKJACK:
                result.blackjacks += 1
            if hand.busted:
                result.busts += 1
        return result

    @property
    def total_hands(self) -> int:
        """Return the number of hands counted."""
        return self.wins + self.losses + self.pushes + self.surrenders + self.blackjacks


@dataclass(frozen=True)
class DealerStep:
    """Snapshot of the dealer hand after one step of dealer play."""

    cards: tuple[Card, ...]
    hand_value: int
    is_soft: bool


class BlackjackGame:
    """
    Blackjack game engine using a state machine.

    This is the core game logic, completely UI-agnostic.
    Communication happens through events and return values only.
    """

    # State machine states
    STATES = [phase.name.lower() for phase in GamePhase]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "begin_deal", "source": "initial", "dest": "dealing"},
        {"trigger": "abort_deal", "source": "dealing", "dest": "initial"},
        {"trigger": "start_player_turn", "source": "dealing", "dest": "player_turn"},
        {"trigger": "player_action", "source": "player_turn", "dest": "player_turn"},
        {"trigger": "player_done", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "dealer_done", "source": "dealer_turn", "dest": "game_over"},
        {"trigger": "reset_table", "source": "*", "dest": "initial"},
    ]

    def __init__(
        self,
        rules: RuleSet | None = None,
        rng: Random | None = None,
        strategy: BasicStrategy | None = None,
    ) -> None:
        """
        Initialize a new blackjack game.

        Args:
            rules: Game rules (uses defaults if not provided)
            rng: Random number generator for reproducible games
            strategy: Advisor used to grade decisions
        """
        self.rules = rules or RuleSet()
        self._house_shoe = Shoe(num_decks=self.rules.num_decks, rng=rng)
        self.shoe = self._house_shoe
        self.strategy = strategy or BasicStrategy()

        self._player_hands: list[PlayerHand] = []
        self._current_hand_id: str | None = None
        self._hand_counter = 0
        self.dealer_hand = DealerHand()
        self._last_action: ActionLogEntry | None = None
        self._game_result: GameResult | None = None
        self._dealer_steps: list[DealerStep] = []
        self.events = EventEmitter()

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="initial",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def phase(self) -> GamePhase:
        """Get current game phase as enum."""
        return GamePhase[self._machine_state.upper()]  # type: ignore

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    # Queries

    @property
    def player_hands(self) -> list[PlayerHand]:
        """Return the player hands in play order."""
        return list(self._player_hands)

    @property
    def current_hand(self) -> PlayerHand | None:
        """Get the active hand, if the player is deciding."""
        if self.phase != GamePhase.PLAYER_TURN:
            return None
        return self._find_hand(self._current_hand_id)

    @property
    def dealer_upcard(self) -> Card | None:
        """Return the dealer's face-up card."""
        return self.dealer_hand.upcard

    @property
    def last_action(self) -> ActionLogEntry | None:
        """Return the most recent logged decision."""
        return self._last_action

    @property
    def game_result(self) -> GameResult | None:
        """Return the round tally once the game is over."""
        if self.phase != GamePhase.GAME_OVER:
            return None
        return self._game_result

    @property
    def dealer_steps(self) -> list[DealerStep]:
        """Return snapshots of dealer play, reveal first."""
        return list(self._dealer_steps)

    @property
    def available_actions(self) -> list[Action]:
        """
        Actions the player may take on the active hand.

        Returns:
            Legal actions in display order; empty outside the player turn
        """
        hand = self.current_hand
        if hand is None or hand.is_finished or hand.doubled:
            return []

        actions = [Action.HIT, Action.STAND]
        two_cards = len(hand.cards) == 2

        if two_cards and (not hand.split_from_pair or self.rules.double_after_split):
            actions.append(Action.DOUBLE)

        if hand.is_pair and len(self._player_hands) < self.rules.max_split_hands:
            actions.append(Action.SPLIT)

        if (
            self.rules.surrender_allowed
            and two_cards
            and not hand.has_acted
            and not hand.split_from_pair
            and len(self._player_hands) == 1
        ):
            actions.append(Action.SURRENDER)

        return actions

    # Commands

    def start_new_hand(self, shoe: Shoe | None = None) -> bool:
        """
        Shuffle a fresh shoe and deal a new round.

        Args:
            shoe: Shoe to deal this round from. The game's own shoe is
                reshuffled and used if None.

        Returns:
            True once the cards are dealt

        Raises:
            DeckExhaustedError: If the shoe cannot cover the initial deal
        """
        if self.phase != GamePhase.INITIAL:
            self.reset_table()

        self._player_hands = []
        self._current_hand_id = None
        self._hand_counter = 0
        self.dealer_hand = DealerHand()
        self._last_action = None
        self._game_result = None
        self._dealer_steps = []
        self.events.clear_history()

        self.begin_deal()

        # A supplied shoe serves this round only
        if shoe is None:
            self.shoe = self._house_shoe
            self.shoe.shuffle()
            self.events.emit_new(EventType.SHOE_SHUFFLED, cards=self.shoe.cards_remaining)
        else:
            self.shoe = shoe

        if self.shoe.cards_remaining < INITIAL_DEAL_CARDS:
            available = self.shoe.cards_remaining
            logger.warning("Shoe exhausted before the initial deal (%d cards left)", available)
            self.events.emit_new(
                EventType.DECK_EXHAUSTED,
                required=INITIAL_DEAL_CARDS,
                available=available,
            )
            self.abort_deal()
            raise DeckExhaustedError(INITIAL_DEAL_CARDS, available)

        player_hand = self._new_hand()
        self._player_hands.append(player_hand)
        self._current_hand_id = player_hand.id

        # Deal: player, dealer, player, dealer (face down)
        self._deal_card_to(player_hand)
        self._deal_card_to(self.dealer_hand)
        self._deal_card_to(player_hand)
        self._deal_card_to(self.dealer_hand, face_up=False)

        self.events.emit_new(
            EventType.ROUND_STARTED,
            player_value=player_hand.hand_value,
            dealer_upcard=str(self.dealer_upcard),
        )
        self.start_player_turn()

        if player_hand.is_blackjack:
            self.events.emit_new(EventType.PLAYER_BLACKJACK, hand_id=player_hand.id)
            self._advance()

        return True

    def act(self, action: Action) -> bool:
        """
        Apply a player decision to the active hand.

        The decision is graded against basic strategy before it is applied.

        Args:
            action: The decision to apply

        Returns:
            True if the action was legal and applied
        """
        available = self.available_actions
        hand = self.current_hand
        upcard = self.dealer_upcard

        if hand is None or upcard is None or action not in available:
            logger.debug("Rejected %s in phase %s", action, self.phase.name)
            self.events.emit_new(
                EventType.INVALID_ACTION,
                action=action.value,
                phase=self.phase.name,
                available=[a.value for a in available],
            )
            return False

        decision = self.strategy.evaluate(action, hand, upcard, available)
        value_before = hand.hand_value
        card_dealt: Card | None = None

        if action == Action.HIT:
            card_dealt = self._deal_card_to(hand)
            self.events.emit_new(EventType.PLAYER_HIT, hand_id=hand.id, hand_value=hand.hand_value)
        elif action == Action.STAND:
            hand.stood = True
            self.events.emit_new(EventType.PLAYER_STAND, hand_id=hand.id, hand_value=hand.hand_value)
        elif action == Action.DOUBLE:
            card_dealt = self._deal_card_to(hand)
            hand.doubled = True
            hand.stood = True
            self.events.emit_new(EventType.PLAYER_DOUBLE, hand_id=hand.id, hand_value=hand.hand_value)
        elif action == Action.SPLIT:
            card_dealt = self._split(hand)
        elif action == Action.SURRENDER:
            hand.surrendered = True
            hand.outcome = HandOutcome.SURRENDER
            self.events.emit_new(EventType.PLAYER_SURRENDER, hand_id=hand.id)

        entry = ActionLogEntry(
            hand_id=hand.id,
            action=action,
            optimal_action=decision.optimal_action,
            was_correct=decision.is_correct,
            hand_value_before=value_before,
            hand_value_after=hand.hand_value,
            card_dealt=card_dealt,
            explanation=decision.explanation,
            timestamp=decision.timestamp,
        )
        hand.action_log.append(entry)
        self._last_action = entry

        self.events.emit_new(EventType.DECISION_EVALUATED, entry=entry, decision=decision)

        if hand.busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, hand_id=hand.id, hand_value=hand.hand_value)

        if hand.is_finished:
            self._advance()
        else:
            self.player_action()  # Stay in player turn

        return True

    # Internals

    def _new_hand(self, cards: list[Card] | None = None) -> PlayerHand:
        """Create a player hand with the next stable id."""
        hand = PlayerHand(id=f"hand-{self._hand_counter}", cards=cards or [])
        self._hand_counter += 1
        return hand

    def _find_hand(self, hand_id: str | None) -> PlayerHand | None:
        for hand in self._player_hands:
            if hand.id == hand_id:
                return hand
        return None

    def _deal_card_to(self, hand: PlayerHand | DealerHand, face_up: bool = True) -> Card | None:
        """Deal one card to a hand. An empty shoe deals nothing."""
        card = self.shoe.draw()
        if card is None:
            logger.warning("Shoe exhausted mid-round, no card dealt")
            self.events.emit_new(EventType.DECK_EXHAUSTED, required=1, available=0)
            return None

        hand.add_card(card)
        is_dealer = hand is self.dealer_hand
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card) if face_up else "??",
            hand="dealer" if is_dealer else hand.id,  # type: ignore[union-attr]
            hand_value=hand.hand_value if face_up else None,
        )
        return card

    def _split(self, hand: PlayerHand) -> Card | None:
        """
        Split a pair into two one-card hands.

        The new hand is inserted right after the source. The source hand is
        topped up immediately; the new one when play reaches it.
        """
        second_card = hand.cards.pop()
        new_hand = self._new_hand([second_card])
        new_hand.split_from_pair = True
        hand.split_from_pair = True

        index = self._player_hands.index(hand)
        self._player_hands.insert(index + 1, new_hand)

        card = self._deal_card_to(hand)
        self.events.emit_new(
            EventType.PLAYER_SPLIT,
            hand_id=hand.id,
            new_hand_id=new_hand.id,
            hand_value=hand.hand_value,
        )
        if hand.is_blackjack:
            self.events.emit_new(EventType.PLAYER_BLACKJACK, hand_id=hand.id)
        return card

    def _advance(self) -> None:
        """Move to the next unfinished hand, or to the dealer when none remain."""
        while True:
            next_hand = next((h for h in self._player_hands if not h.is_finished), None)

            if next_hand is None:
                self._current_hand_id = None
                self.player_done()
                self._play_dealer()
                return

            self._current_hand_id = next_hand.id
            if len(next_hand.cards) < 2:
                self._deal_card_to(next_hand)
                # A split hand can be finished by its second card
                if next_hand.is_blackjack:
                    self.events.emit_new(EventType.PLAYER_BLACKJACK, hand_id=next_hand.id)
                    continue
            self.player_action()
            return

    def _snapshot_dealer(self) -> None:
        self._dealer_steps.append(
            DealerStep(
                cards=tuple(self.dealer_hand.cards),
                hand_value=self.dealer_hand.hand_value,
                is_soft=self.dealer_hand.is_soft,
            )
        )

    def _play_dealer(self) -> None:
        """Dealer reveals and plays out the hand."""
        self.dealer_hand.hide_hole_card = False
        hole_card = self.dealer_hand.cards[1] if len(self.dealer_hand.cards) > 1 else None
        self.events.emit_new(
            EventType.DEALER_REVEALS,
            card=str(hole_card) if hole_card else None,
            hand_value=self.dealer_hand.hand_value,
        )
        self._snapshot_dealer()

        while self.dealer_should_hit():
            if self._deal_card_to(self.dealer_hand) is None:
                break
            self.events.emit_new(EventType.DEALER_HITS, hand_value=self.dealer_hand.hand_value)
            self._snapshot_dealer()

        if self.dealer_hand.busted:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=self.dealer_hand.hand_value)
        else:
            self.events.emit_new(EventType.DEALER_STANDS, hand_value=self.dealer_hand.hand_value)

        self._resolve_round()

    def dealer_should_hit(self) -> bool:
        """Determine if the dealer must draw under the table rules."""
        value = self.dealer_hand.hand_value
        if value < DEALER_STANDS_ON:
            return True
        return (
            value == DEALER_STANDS_ON
            and self.dealer_hand.is_soft
            and self.rules.dealer_hits_soft_17
        )

    def _resolve_round(self) -> None:
        """Settle every hand against the final dealer hand."""
        for hand in self._player_hands:
            if hand.outcome is None:
                hand.outcome = determine_hand_outcome(hand, self.dealer_hand)
            self.events.emit_new(
                EventType.HAND_RESOLVED,
                hand_id=hand.id,
                outcome=hand.outcome.value,
                hand_value=hand.hand_value,
            )

        self._game_result = GameResult.tally(self._player_hands)
        self.dealer_done()

        logger.info(
            "Round over: %d hand(s), dealer %d, result %s",
            len(self._player_hands),
            self.dealer_hand.hand_value,
            self._game_result,
        )
        self.events.emit_new(EventType.ROUND_ENDED, result=self._game_result)
