"""Strategy lookup endpoints."""

from fastapi import APIRouter, HTTPException

from api.schemas import (
    ActionName,
    ChartResponse,
    ChartRowResponse,
    CoordinatesLookupResponse,
    CoordinatesResponse,
    EvaluateRequest,
    EvaluateResponse,
    OptimalActionResponse,
    StrategyQuery,
)
from core.cards import Card
from core.hand import PlayerHand
from core.strategy import (
    STRATEGY_CHARTS,
    Action,
    evaluate_decision,
    optimal_action,
    strategy_cell_coordinates,
)
from core.strategy.basic import hand_type
from core.strategy.charts import DEALER_UPCARDS

router = APIRouter()


def _parse_cards(codes: list[str]) -> list[Card]:
    try:
        return [Card.from_string(code) for code in codes]
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def _parse_query(query: StrategyQuery) -> tuple[PlayerHand, Card, list[Action]]:
    """Turn a query into a hand, an upcard and the actions on offer."""
    hand = PlayerHand(id="query", cards=_parse_cards(query.player_cards))
    upcard = _parse_cards([query.dealer_upcard])[0]
    return hand, upcard, _available(hand, query.available_actions)


def _available(hand: PlayerHand, names: list[ActionName] | None) -> list[Action]:
    """Use the given actions, or what a fresh hand of these cards would allow."""
    if names is not None:
        if not names:
            raise HTTPException(status_code=422, detail="available_actions cannot be empty")
        return [Action(name.upper()) for name in names]

    actions = [Action.HIT, Action.STAND]
    if len(hand.cards) == 2:
        actions.append(Action.DOUBLE)
        if hand.is_pair:
            actions.append(Action.SPLIT)
        actions.append(Action.SURRENDER)
    return actions


@router.post("/optimal")
async def get_optimal_action(query: StrategyQuery) -> OptimalActionResponse:
    """Return the basic strategy play for a hand."""
    hand, upcard, available = _parse_query(query)
    return OptimalActionResponse(
        action=optimal_action(hand, upcard, available),
        hand_type=str(hand_type(hand)),
        player_value=hand.hand_value,
        is_soft=hand.is_soft,
        available_actions=available,
    )


@router.post("/evaluate")
async def evaluate(request: EvaluateRequest) -> EvaluateResponse:
    """Grade a decision against basic strategy."""
    hand, upcard, available = _parse_query(request)
    action = Action(request.action.upper())
    if action not in available:
        raise HTTPException(status_code=400, detail=f"{request.action} is not available")

    decision = evaluate_decision(action, hand, upcard, available)
    return EvaluateResponse(
        action=decision.action,
        optimal_action=decision.optimal_action,
        is_correct=decision.is_correct,
        explanation=decision.explanation,
        player_value=decision.player_value,
        dealer_upcard=decision.dealer_upcard,
        hand_type=str(decision.hand_type),
    )


@router.post("/coordinates")
async def get_coordinates(query: StrategyQuery) -> CoordinatesLookupResponse:
    """Locate the chart cell for a hand."""
    hand, upcard, _ = _parse_query(query)
    coordinates = strategy_cell_coordinates(hand, upcard)
    return CoordinatesLookupResponse(
        coordinates=CoordinatesResponse.model_validate(coordinates) if coordinates else None
    )


@router.get("/charts")
async def get_charts() -> list[ChartResponse]:
    """Return the three strategy charts."""
    return [
        ChartResponse(
            type=table.type,
            title=table.title,
            dealer_upcards=list(DEALER_UPCARDS),
            rows=[
                ChartRowResponse(
                    player_value=row.player_value,
                    label=row.label,
                    actions=[code.value for code in row.actions],
                )
                for row in table.rows
            ],
        )
        for table in STRATEGY_CHARTS.values()
    ]
