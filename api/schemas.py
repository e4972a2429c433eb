"""Pydantic schemas for API requests and responses."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from core.strategy.actions import Action
from core.strategy.charts import TableType

ActionName = Literal["hit", "stand", "double", "split", "surrender"]


# Game schemas
class ActionRequest(BaseModel):
    """Request for player action."""

    action: ActionName


class SessionCreatedResponse(BaseModel):
    """A newly created training session."""

    session_id: str


class CardResponse(BaseModel):
    """Card representation."""

    rank: str
    suit: str
    value: int
    code: str


class ActionLogResponse(BaseModel):
    """A graded decision."""

    hand_id: str
    action: Action
    optimal_action: Action
    was_correct: bool
    hand_value_before: int
    hand_value_after: int
    card_dealt: CardResponse | None
    explanation: str
    timestamp: datetime


class HandResponse(BaseModel):
    """Player hand representation."""

    id: str
    cards: list[CardResponse]
    value: int
    is_soft: bool
    is_blackjack: bool
    is_busted: bool
    stood: bool
    doubled: bool
    split_from_pair: bool
    surrendered: bool
    outcome: str | None
    action_log: list[ActionLogResponse]


class DealerHandResponse(BaseModel):
    """Dealer hand as the player sees it."""

    cards: list[CardResponse]
    value: int
    hole_card_hidden: bool


class GameResultResponse(BaseModel):
    """Outcome tally for a finished round."""

    model_config = ConfigDict(from_attributes=True)

    wins: int
    losses: int
    pushes: int
    surrenders: int
    blackjacks: int
    busts: int


class DealerStepResponse(BaseModel):
    """Dealer hand after one step of dealer play."""

    cards: list[CardResponse]
    value: int
    is_soft: bool


class CoordinatesResponse(BaseModel):
    """Strategy chart cell."""

    model_config = ConfigDict(from_attributes=True)

    table: TableType
    row: int
    col: int


class GameStateResponse(BaseModel):
    """Current game state."""

    phase: str
    player_hands: list[HandResponse]
    current_hand_id: str | None
    dealer_hand: DealerHandResponse
    available_actions: list[Action]
    last_action: ActionLogResponse | None
    result: GameResultResponse | None
    dealer_steps: list[DealerStepResponse]
    coordinates: CoordinatesResponse | None


# Strategy schemas
class StrategyQuery(BaseModel):
    """A hand to look up in the strategy charts."""

    player_cards: list[str] = Field(..., min_length=1, description="Cards like 'AS', '10H', 'Kd'")
    dealer_upcard: str
    available_actions: list[ActionName] | None = Field(
        default=None,
        description="Actions on offer; inferred from the cards when omitted",
    )


class EvaluateRequest(StrategyQuery):
    """A decision to grade."""

    action: ActionName


class OptimalActionResponse(BaseModel):
    """Recommended play."""

    action: Action
    hand_type: str
    player_value: int
    is_soft: bool
    available_actions: list[Action]


class EvaluateResponse(BaseModel):
    """Graded decision."""

    model_config = ConfigDict(from_attributes=True)

    action: Action
    optimal_action: Action
    is_correct: bool
    explanation: str
    player_value: int
    dealer_upcard: int
    hand_type: str


class CoordinatesLookupResponse(BaseModel):
    """Chart cell for a hand, if any chart covers it."""

    coordinates: CoordinatesResponse | None


class ChartRowResponse(BaseModel):
    """One chart row."""

    player_value: int
    label: str
    actions: list[str]


class ChartResponse(BaseModel):
    """A full strategy chart."""

    type: TableType
    title: str
    dealer_upcards: list[str]
    rows: list[ChartRowResponse]


# Stats schemas
class SessionStatisticsResponse(BaseModel):
    """Counters for a session."""

    model_config = ConfigDict(from_attributes=True)

    session_id: str
    session_start: datetime
    session_end: datetime | None
    hands_played: int
    decisions_total: int
    decisions_correct: int
    accuracy: float
    wins: int
    losses: int
    pushes: int
    surrenders: int
    blackjacks: int
    busts: int
    recent_accuracy: list[float]
    improvement_trend: float


class SessionStatsResponse(BaseModel):
    """Current and all-time statistics."""

    session: SessionStatisticsResponse
    all_time: SessionStatisticsResponse
    skill_level: str
    tracking_enabled: bool
    max_history_entries: int


class MistakePatternResponse(BaseModel):
    """A repeated strategy error."""

    model_config = ConfigDict(from_attributes=True)

    scenario: str
    player_value: int
    dealer_upcard: int
    table_type: str
    player_action: Action
    correct_action: Action
    frequency: int
    last_occurrence: datetime


class ActionHistoryResponse(BaseModel):
    """A decision in the game history."""

    model_config = ConfigDict(from_attributes=True)

    action: Action
    optimal_action: Action
    was_correct: bool
    card_received: str | None
    hand_value_before: int
    hand_value_after: int
    reasoning: str


class HandHistoryResponse(BaseModel):
    """A player hand in the game history."""

    model_config = ConfigDict(from_attributes=True)

    hand_id: str
    hand_index: int
    final_cards: list[str]
    final_value: int
    was_soft: bool
    actions: list[ActionHistoryResponse]
    outcome: str
    was_split: bool
    was_doubled: bool
    was_surrendered: bool
    was_busted: bool
    was_blackjack: bool


class GameHistoryResponse(BaseModel):
    """A finished round."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    timestamp: datetime
    session_id: str
    initial_player_cards: list[str]
    initial_dealer_card: str
    player_hands: list[HandHistoryResponse]
    dealer_final_hand: list[str]
    dealer_final_value: int
    wins: int
    losses: int
    pushes: int
    surrenders: int
    blackjacks: int
    busts: int
    total_decisions: int
    correct_decisions: int
    hand_accuracy: float
    had_blackjack: bool
    had_splits: bool
    had_doubles: bool
    had_surrender: bool


class ExportSummaryResponse(BaseModel):
    """Headline export figures."""

    model_config = ConfigDict(from_attributes=True)

    total_hands: int
    overall_accuracy: float
    most_common_mistakes: list[MistakePatternResponse]
    improvement_areas: list[str]


class SessionExportResponse(BaseModel):
    """Full session export."""

    model_config = ConfigDict(from_attributes=True)

    export_date: datetime
    session_data: SessionStatisticsResponse
    game_history: list[GameHistoryResponse]
    mistake_patterns: list[MistakePatternResponse]
    summary: ExportSummaryResponse


class SettingsRequest(BaseModel):
    """Tracker preferences."""

    max_history_entries: int | None = Field(default=None, ge=0, le=1000)
    tracking_enabled: bool | None = None
