"""Session statistics, mistake patterns and skill assessment."""

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from uuid import uuid4

from core.game.engine import GameResult
from core.statistics.history import GameHistoryEntry
from core.strategy.actions import Action

logger = logging.getLogger(__name__)

DEFAULT_MAX_HISTORY_ENTRIES = 100
DEFAULT_SKILL_MIN_DECISIONS = 20

# Rolling accuracy window and the half of it compared for the trend
RECENT_ACCURACY_WINDOW = 10
TREND_WINDOW = 5

ADVANCED_ACCURACY = 90.0
INTERMEDIATE_ACCURACY = 75.0

_IMPROVEMENT_AREAS = {
    "hard": "Hard totals",
    "soft": "Soft totals",
    "pair": "Pair splitting",
}


class SkillLevel(Enum):
    """Player skill classification."""

    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"

    def __str__(self) -> str:
        return self.value.title()


def classify_skill(accuracy: float) -> SkillLevel:
    """Map an accuracy percentage to a skill level."""
    if accuracy >= ADVANCED_ACCURACY:
        return SkillLevel.ADVANCED
    if accuracy >= INTERMEDIATE_ACCURACY:
        return SkillLevel.INTERMEDIATE
    return SkillLevel.BEGINNER


def _new_session_id() -> str:
    return f"session-{uuid4().hex[:12]}"


@dataclass(frozen=True)
class DecisionScenario:
    """The situation a decision was made in."""

    player_value: int
    dealer_upcard: int
    table_type: str

    @property
    def key(self) -> str:
        """Return the mistake key, e.g. ``16-10-hard``."""
        return f"{self.player_value}-{self.dealer_upcard}-{self.table_type}"


@dataclass
class MistakePattern:
    """A repeated strategy error."""

    scenario: str
    player_value: int
    dealer_upcard: int
    table_type: str
    player_action: Action
    correct_action: Action
    frequency: int = 1
    last_occurrence: datetime = field(default_factory=datetime.now)


@dataclass
class SessionStatistics:
    """Counters for one training session."""

    session_id: str = field(default_factory=_new_session_id)
    session_start: datetime = field(default_factory=datetime.now)
    session_end: datetime | None = None

    hands_played: int = 0

    decisions_total: int = 0
    decisions_correct: int = 0
    accuracy: float = 0.0

    wins: int = 0
    losses: int = 0
    pushes: int = 0
    surrenders: int = 0
    blackjacks: int = 0
    busts: int = 0

    recent_accuracy: list[float] = field(default_factory=list)
    improvement_trend: float = 0.0

    def recompute_accuracy(self) -> None:
        """Recompute accuracy as a percentage; 0 with no decisions."""
        if self.decisions_total == 0:
            self.accuracy = 0.0
        else:
            self.accuracy = self.decisions_correct / self.decisions_total * 100


def _copy_statistics(stats: SessionStatistics) -> SessionStatistics:
    """Detach statistics from the tracker that keeps updating them."""
    return replace(stats, recent_accuracy=list(stats.recent_accuracy))


@dataclass(frozen=True)
class ExportSummary:
    """Headline figures for an export."""

    total_hands: int
    overall_accuracy: float
    most_common_mistakes: list[MistakePattern]
    improvement_areas: list[str]


@dataclass(frozen=True)
class SessionExport:
    """Everything a session tracker can export."""

    session_data: SessionStatistics
    game_history: list[GameHistoryEntry]
    mistake_patterns: list[MistakePattern]
    summary: ExportSummary
    export_date: datetime = field(default_factory=datetime.now)


class SessionTracker:
    """
    Tracks decisions, outcomes and mistakes across a training session.

    All recording calls are no-ops while ``tracking_enabled`` is False.
    """

    def __init__(
        self,
        max_history_entries: int = DEFAULT_MAX_HISTORY_ENTRIES,
        skill_min_decisions: int = DEFAULT_SKILL_MIN_DECISIONS,
    ) -> None:
        """
        Initialize the tracker.

        Args:
            max_history_entries: Number of game history entries kept
            skill_min_decisions: Decisions needed before the skill level moves
        """
        if max_history_entries < 0:
            raise ValueError("max_history_entries cannot be negative")

        self.current_session = SessionStatistics()
        self.all_time_stats = SessionStatistics()
        self.game_history: list[GameHistoryEntry] = []
        self.mistake_patterns: list[MistakePattern] = []
        self.skill_level = SkillLevel.BEGINNER
        self.max_history_entries = max_history_entries
        self.skill_min_decisions = skill_min_decisions
        self.tracking_enabled = True

    # Session lifecycle

    def start_new_session(self) -> SessionStatistics:
        """Replace the current session with a fresh one."""
        self.current_session = SessionStatistics()
        logger.info("Started session %s", self.current_session.session_id)
        return self.current_session

    def end_current_session(self) -> SessionStatistics:
        """
        Close the current session and fold it into the all-time totals.

        A fresh session is started afterwards so the same counters are never
        archived twice.

        Returns:
            The session that was closed
        """
        ended = self.current_session
        ended.session_end = datetime.now()

        totals = self.all_time_stats
        totals.hands_played += ended.hands_played
        totals.decisions_total += ended.decisions_total
        totals.decisions_correct += ended.decisions_correct
        totals.wins += ended.wins
        totals.losses += ended.losses
        totals.pushes += ended.pushes
        totals.surrenders += ended.surrenders
        totals.blackjacks += ended.blackjacks
        totals.busts += ended.busts
        totals.recompute_accuracy()

        logger.info(
            "Ended session %s: %d hands, %.1f%% accuracy",
            ended.session_id,
            ended.hands_played,
            ended.accuracy,
        )
        self.start_new_session()
        return ended

    def reset_session(self) -> None:
        """Clear the current session counters, mistakes and skill level."""
        self.current_session = SessionStatistics()
        self.mistake_patterns = []
        self.skill_level = SkillLevel.BEGINNER

    def reset_all_data(self) -> None:
        """Forget everything, including history and all-time totals."""
        self.reset_session()
        self.all_time_stats = SessionStatistics()
        self.game_history = []
        self.max_history_entries = DEFAULT_MAX_HISTORY_ENTRIES
        self.tracking_enabled = True

    # Recording

    def record_decision(
        self,
        was_correct: bool,
        player_action: Action,
        optimal_action: Action,
        scenario: DecisionScenario,
    ) -> None:
        """
        Count a decision and remember it if it was a mistake.

        Args:
            was_correct: Whether the player matched basic strategy
            player_action: What the player did
            optimal_action: What basic strategy recommends
            scenario: Hand value, dealer upcard and table type
        """
        if not self.tracking_enabled:
            return

        session = self.current_session
        session.decisions_total += 1
        if was_correct:
            session.decisions_correct += 1
        session.recompute_accuracy()

        if was_correct:
            return

        key = scenario.key
        pattern = self._find_pattern(key)
        if pattern is not None:
            pattern.frequency += 1
            pattern.last_occurrence = datetime.now()
            return

        self.mistake_patterns.append(
            MistakePattern(
                scenario=key,
                player_value=scenario.player_value,
                dealer_upcard=scenario.dealer_upcard,
                table_type=scenario.table_type,
                player_action=player_action,
                correct_action=optimal_action,
            )
        )

    def record_game_result(self, result: GameResult) -> None:
        """
        Count a finished round and update the rolling accuracy trend.

        The trend is the mean of the newest five samples minus the mean of
        the five before them, and only moves once the window is full.
        """
        if not self.tracking_enabled:
            return

        session = self.current_session
        session.hands_played += 1
        session.wins += result.wins
        session.losses += result.losses
        session.pushes += result.pushes
        session.surrenders += result.surrenders
        session.blackjacks += result.blackjacks
        session.busts += result.busts

        session.recent_accuracy.append(session.accuracy)
        if len(session.recent_accuracy) > RECENT_ACCURACY_WINDOW:
            session.recent_accuracy.pop(0)

        if len(session.recent_accuracy) >= RECENT_ACCURACY_WINDOW:
            recent = session.recent_accuracy[-TREND_WINDOW:]
            older = session.recent_accuracy[-2 * TREND_WINDOW:-TREND_WINDOW]
            session.improvement_trend = sum(recent) / len(recent) - sum(older) / len(older)

    def update_skill_level(self) -> SkillLevel:
        """
        Reclassify the player from current session accuracy.

        Below the minimum number of decisions the level is left alone. Above
        it the level always follows accuracy, so it can go down as well as up.
        """
        session = self.current_session
        if session.decisions_total >= self.skill_min_decisions:
            level = classify_skill(session.accuracy)
            if level != self.skill_level:
                logger.info("Skill level changed: %s -> %s", self.skill_level, level)
            self.skill_level = level
        return self.skill_level

    # Mistakes

    def _find_pattern(self, scenario: str) -> MistakePattern | None:
        for pattern in self.mistake_patterns:
            if pattern.scenario == scenario:
                return pattern
        return None

    def clear_mistake_patterns(self) -> None:
        """Forget every recorded mistake."""
        self.mistake_patterns = []

    def remove_mistake_pattern(self, scenario: str) -> bool:
        """
        Forget one mistake pattern.

        Returns:
            True if a pattern with that key existed
        """
        before = len(self.mistake_patterns)
        self.mistake_patterns = [p for p in self.mistake_patterns if p.scenario != scenario]
        return len(self.mistake_patterns) != before

    def most_common_mistakes(self, limit: int = 5) -> list[MistakePattern]:
        """Return the most frequent mistakes, most recent first on ties."""
        ranked = sorted(
            self.mistake_patterns,
            key=lambda p: (p.frequency, p.last_occurrence),
            reverse=True,
        )
        return ranked[:limit]

    def improvement_areas(self) -> list[str]:
        """Name the chart areas with mistakes, worst first."""
        weight: dict[str, int] = {}
        for pattern in self.mistake_patterns:
            weight[pattern.table_type] = weight.get(pattern.table_type, 0) + pattern.frequency
        ranked = sorted(weight, key=lambda table: weight[table], reverse=True)
        return [_IMPROVEMENT_AREAS.get(table, table.title()) for table in ranked]

    # History

    def add_history_entry(self, entry: GameHistoryEntry) -> None:
        """Add a round to the front of the history, dropping the oldest."""
        if not self.tracking_enabled:
            return
        self.game_history.insert(0, entry)
        del self.game_history[self.max_history_entries:]

    def clear_history(self) -> None:
        """Forget the game history."""
        self.game_history = []

    def set_max_history_entries(self, limit: int) -> None:
        """Change the history bound, trimming the oldest entries."""
        if limit < 0:
            raise ValueError("History limit cannot be negative")
        self.max_history_entries = limit
        del self.game_history[limit:]

    def set_tracking_enabled(self, enabled: bool) -> None:
        """Turn recording on or off."""
        self.tracking_enabled = enabled

    # Import / export

    def export_data(self) -> SessionExport:
        """Snapshot the session, history and mistakes with a summary."""
        session = _copy_statistics(self.current_session)
        return SessionExport(
            session_data=session,
            game_history=list(self.game_history),
            mistake_patterns=[replace(p) for p in self.mistake_patterns],
            summary=ExportSummary(
                total_hands=session.hands_played,
                overall_accuracy=session.accuracy,
                most_common_mistakes=[replace(p) for p in self.most_common_mistakes()],
                improvement_areas=self.improvement_areas(),
            ),
        )

    def import_data(
        self,
        game_history: list[GameHistoryEntry],
        mistake_patterns: list[MistakePattern],
        all_time_stats: SessionStatistics,
    ) -> None:
        """Restore previously exported history, mistakes and totals."""
        self.game_history = list(game_history)[: self.max_history_entries]
        self.mistake_patterns = [replace(p) for p in mistake_patterns]
        self.all_time_stats = _copy_statistics(all_time_stats)
