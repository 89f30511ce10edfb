# Domain Prognosis Package
from .errors import (
    ActivitySourceUnavailable,
    CacheUnavailable,
    GuruError,
    LearnerNotFound,
    NoActiveEnrollment,
)
from .models import (
    ActivityKind,
    DetailedAnalysis,
    DisciplineStat,
    Enrollment,
    ExamAttempt,
    FlashcardState,
    FlashcardStatus,
    MetricsSnapshot,
    Prognosis,
    ReadingProgress,
    ScorePoint,
    SubMetrics,
    WeeklyResponse,
)
from .ports import ActivityDataSource, ResultCache

__all__ = [
    "ActivityDataSource",
    "ActivityKind",
    "ActivitySourceUnavailable",
    "CacheUnavailable",
    "DetailedAnalysis",
    "DisciplineStat",
    "Enrollment",
    "ExamAttempt",
    "FlashcardState",
    "FlashcardStatus",
    "GuruError",
    "LearnerNotFound",
    "MetricsSnapshot",
    "NoActiveEnrollment",
    "Prognosis",
    "ReadingProgress",
    "ResultCache",
    "ScorePoint",
    "SubMetrics",
    "WeeklyResponse",
]
