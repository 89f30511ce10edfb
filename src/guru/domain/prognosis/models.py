"""
Domain models for the approval prognosis.

These are pure data structures with no I/O or external dependencies.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class FlashcardStatus(str, Enum):
    """Review state of a single flashcard for a learner."""

    NOT_STARTED = "nao_iniciado"
    LEARNING = "aprendendo"
    REVIEWING = "revisando"
    MASTERED = "dominado"


class ActivityKind(str, Enum):
    """The record kinds the data source can be asked for."""

    EXAM_ATTEMPTS = "exam_attempts"
    WEEKLY_RESPONSES = "weekly_responses"
    FLASHCARD_STATES = "flashcard_states"
    READING_PROGRESS = "reading_progress"
    DISCIPLINE_STATS = "discipline_stats"


@dataclass(frozen=True)
class Enrollment:
    """
    The learner's active exam target.

    Attributes:
        difficulty_tier: Tier code of the target exam ("facil", "medio", "dificil").
        question_multiplier: Scales the base questions-answered goal.
    """

    difficulty_tier: str
    question_multiplier: float
    contest_id: str | None = None
    contest_name: str | None = None


# ---------- Activity records ----------


@dataclass(frozen=True)
class ExamAttempt:
    """
    A practice-exam attempt.

    Attributes:
        answers: Question id -> answer given.
        completed_at: When the attempt was finished (None if still open).
        score: Score obtained, used only for the score timeline.
    """

    answers: Mapping[str, Any]
    completed_at: datetime | None = None
    score: float | None = None


@dataclass(frozen=True)
class WeeklyResponse:
    """One answered weekly question."""

    created_at: datetime


@dataclass(frozen=True)
class FlashcardState:
    status: FlashcardStatus


@dataclass(frozen=True)
class ReadingProgress:
    """
    Reading progress on a single study guide.

    Attributes:
        percent_complete: 0-100.
        completed: Whether the guide was marked as finished.
    """

    percent_complete: float
    completed: bool = False


ActivityRecord = ExamAttempt | WeeklyResponse | FlashcardState | ReadingProgress


@dataclass(frozen=True)
class DisciplineStat:
    """Per-discipline performance figures maintained by the question subsystem."""

    discipline: str
    total_questions: int = 0
    correct_answers: int = 0
    average_score: float = 0.0
    study_minutes: int = 0


# ---------- Results ----------


@dataclass(frozen=True)
class SubMetrics:
    """The four normalized [0, 100] components of the readiness score."""

    questions_ratio: float
    flashcard_proficiency: float
    reading_progress: float
    study_consistency: float
    questions_answered: int = 0
    question_goal: int = 0


@dataclass(frozen=True)
class MetricsSnapshot:
    """
    The computed readiness of a learner.

    All numbers are rounded to two decimals and
    distance_to_goal == 100 - overall_score.
    """

    questions_answered: int
    question_goal: int
    questions_ratio: float
    flashcard_proficiency: float
    reading_progress: float
    study_consistency: float
    overall_score: float
    distance_to_goal: float
    time_estimate: str
    computed_at: datetime | None = None


@dataclass(frozen=True)
class Prognosis:
    distance_to_goal: float
    time_estimate: str
    recommendations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ScorePoint:
    """One completed exam attempt on the score timeline."""

    completed_at: datetime
    score: float | None


@dataclass(frozen=True)
class DetailedAnalysis:
    metrics: MetricsSnapshot
    discipline_stats: list[DisciplineStat] = field(default_factory=list)
    score_timeline: list[ScorePoint] = field(default_factory=list)
    strengths: list[str] = field(default_factory=list)
    weaknesses: list[str] = field(default_factory=list)
