"""Session statistics endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query

from api.schemas import (
    GameHistoryResponse,
    MistakePatternResponse,
    SessionExportResponse,
    SessionStatisticsResponse,
    SessionStatsResponse,
    SettingsRequest,
)
from api.session import SessionEntry, require_session
from core.statistics.session import SessionTracker

router = APIRouter()

Session = Annotated[SessionEntry, Depends(require_session)]


def _stats_response(tracker: SessionTracker) -> SessionStatsResponse:
    return SessionStatsResponse(
        session=SessionStatisticsResponse.model_validate(tracker.current_session),
        all_time=SessionStatisticsResponse.model_validate(tracker.all_time_stats),
        skill_level=tracker.skill_level.value,
        tracking_enabled=tracker.tracking_enabled,
        max_history_entries=tracker.max_history_entries,
    )


@router.get("/session")
async def get_session_stats(session: Session) -> SessionStatsResponse:
    """Get session statistics."""
    async with session.lock:
        return _stats_response(session.training.tracker)


@router.get("/mistakes")
async def get_mistakes(
    session: Session,
    limit: Annotated[int | None, Query(ge=1)] = None,
) -> list[MistakePatternResponse]:
    """List mistake patterns, most frequent first."""
    async with session.lock:
        tracker = session.training.tracker
        patterns = tracker.most_common_mistakes(limit or len(tracker.mistake_patterns))
        return [MistakePatternResponse.model_validate(p) for p in patterns]


@router.delete("/mistakes")
async def clear_mistakes(session: Session) -> dict[str, int]:
    """Forget every mistake pattern."""
    async with session.lock:
        tracker = session.training.tracker
        cleared = len(tracker.mistake_patterns)
        tracker.clear_mistake_patterns()
        return {"cleared": cleared}


@router.delete("/mistakes/{scenario}")
async def remove_mistake(scenario: str, session: Session) -> dict[str, str]:
    """Forget one mistake pattern, e.g. ``16-10-hard``."""
    async with session.lock:
        if not session.training.tracker.remove_mistake_pattern(scenario):
            raise HTTPException(status_code=404, detail=f"No mistake pattern {scenario}")
        return {"removed": scenario}


@router.get("/history")
async def get_history(
    session: Session,
    limit: Annotated[int | None, Query(ge=1)] = None,
) -> list[GameHistoryResponse]:
    """List finished rounds, newest first."""
    async with session.lock:
        history = session.training.tracker.game_history
        if limit is not None:
            history = history[:limit]
        return [GameHistoryResponse.model_validate(entry) for entry in history]


@router.delete("/history")
async def clear_history(session: Session) -> dict[str, int]:
    """Forget the game history."""
    async with session.lock:
        tracker = session.training.tracker
        cleared = len(tracker.game_history)
        tracker.clear_history()
        return {"cleared": cleared}


@router.put("/settings")
async def update_settings(request: SettingsRequest, session: Session) -> SessionStatsResponse:
    """Change history size or turn tracking on and off."""
    async with session.lock:
        tracker = session.training.tracker
        if request.max_history_entries is not None:
            tracker.set_max_history_entries(request.max_history_entries)
        if request.tracking_enabled is not None:
            tracker.set_tracking_enabled(request.tracking_enabled)
        return _stats_response(tracker)


@router.post("/reset")
async def reset_session(session: Session) -> SessionStatsResponse:
    """Clear session counters, mistakes and skill level."""
    async with session.lock:
        tracker = session.training.tracker
        tracker.reset_session()
        return _stats_response(tracker)


@router.post("/end-session")
async def end_session(session: Session) -> SessionStatsResponse:
    """Archive the current session into the all-time totals."""
    async with session.lock:
        tracker = session.training.tracker
        tracker.end_current_session()
        return _stats_response(tracker)


@router.get("/export")
async def export_session(session: Session) -> SessionExportResponse:
    """Export session, history and mistakes with a summary."""
    async with session.lock:
        return SessionExportResponse.model_validate(session.training.tracker.export_data())
