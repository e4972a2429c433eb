"""Session statistics and game history."""

from core.statistics.history import (
    ActionHistoryEntry,
    GameHistoryEntry,
    HandHistoryEntry,
    build_history_entry,
)
from core.statistics.session import (
    DecisionScenario,
    ExportSummary,
    MistakePattern,
    SessionExport,
    SessionStatistics,
    SessionTracker,
    SkillLevel,
    classify_skill,
)

__all__ = [
    "ActionHistoryEntry",
    "DecisionScenario",
    "ExportSummary",
    "GameHistoryEntry",
    "HandHistoryEntry",
    "MistakePattern",
    "SessionExport",
    "SessionStatistics",
    "SessionTracker",
    "SkillLevel",
    "build_history_entry",
    "classify_skill",
]
