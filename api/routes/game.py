"""Game API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from api.schemas import (
    ActionLogResponse,
    ActionRequest,
    CardResponse,
    CoordinatesResponse,
    DealerHandResponse,
    DealerStepResponse,
    GameResultResponse,
    GameStateResponse,
    HandResponse,
    SessionCreatedResponse,
)
from api.session import SessionEntry, get_session_store, require_session
from core.cards import Card
from core.errors import DeckExhaustedError
from core.game.log import ActionLogEntry
from core.hand import PlayerHand
from core.strategy.actions import Action
from core.training import TableSnapshot

logger = logging.getLogger(__name__)

router = APIRouter()

Session = Annotated[SessionEntry, Depends(require_session)]


def card_to_response(card: Card) -> CardResponse:
    """Convert a Card to CardResponse."""
    return CardResponse(
        rank=str(card.rank),
        suit=str(card.suit),
        value=card.value,
        code=str(card),
    )


def _log_to_response(entry: ActionLogEntry) -> ActionLogResponse:
    return ActionLogResponse(
        hand_id=entry.hand_id,
        action=entry.action,
        optimal_action=entry.optimal_action,
        was_correct=entry.was_correct,
        hand_value_before=entry.hand_value_before,
        hand_value_after=entry.hand_value_after,
        card_dealt=card_to_response(entry.card_dealt) if entry.card_dealt else None,
        explanation=entry.explanation,
        timestamp=entry.timestamp,
    )


def _hand_to_response(hand: PlayerHand) -> HandResponse:
    """Convert a PlayerHand to HandResponse."""
    return HandResponse(
        id=hand.id,
        cards=[card_to_response(c) for c in hand.cards],
        value=hand.hand_value,
        is_soft=hand.is_soft,
        is_blackjack=hand.is_blackjack,
        is_busted=hand.busted,
        stood=hand.stood,
        doubled=hand.doubled,
        split_from_pair=hand.split_from_pair,
        surrendered=hand.surrendered,
        outcome=hand.outcome.value if hand.outcome else None,
        action_log=[_log_to_response(e) for e in hand.action_log],
    )


def _game_state_response(snapshot: TableSnapshot) -> GameStateResponse:
    """Convert a table snapshot to response."""
    return GameStateResponse(
        phase=snapshot.phase.name,
        player_hands=[_hand_to_response(h) for h in snapshot.player_hands],
        current_hand_id=snapshot.current_hand_id,
        dealer_hand=DealerHandResponse(
            cards=[card_to_response(c) for c in snapshot.dealer_cards],
            value=snapshot.dealer_value,
            hole_card_hidden=snapshot.dealer_hole_hidden,
        ),
        available_actions=snapshot.available_actions,
        last_action=_log_to_response(snapshot.last_action) if snapshot.last_action else None,
        result=(
            GameResultResponse.model_validate(snapshot.game_result)
            if snapshot.game_result
            else None
        ),
        dealer_steps=[
            DealerStepResponse(
                cards=[card_to_response(c) for c in step.cards],
                value=step.hand_value,
                is_soft=step.is_soft,
            )
            for step in snapshot.dealer_steps
        ],
        coordinates=(
            CoordinatesResponse.model_validate(snapshot.coordinates)
            if snapshot.coordinates
            else None
        ),
    )


@router.post("/new")
async def new_game() -> SessionCreatedResponse:
    """Create a new training session."""
    session_id = get_session_store().create()
    return SessionCreatedResponse(session_id=session_id)


@router.get("/state")
async def get_state(session: Session) -> GameStateResponse:
    """Get current game state."""
    async with session.lock:
        return _game_state_response(session.training.snapshot())


@router.post("/deal")
async def deal(session: Session) -> GameStateResponse:
    """Shuffle a fresh shoe and deal a new hand."""
    async with session.lock:
        try:
            session.training.start_new_hand()
        except DeckExhaustedError as exc:
            logger.warning("Deal failed: %s", exc)
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return _game_state_response(session.training.snapshot())


@router.post("/action")
async def player_action(request: ActionRequest, session: Session) -> GameStateResponse:
    """Execute a player action."""
    action = Action(request.action.upper())

    async with session.lock:
        if not session.training.act(action):
            raise HTTPException(status_code=400, detail=f"Cannot {request.action} now")
        return _game_state_response(session.training.snapshot())
