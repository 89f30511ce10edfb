"""
Ports (interfaces) for the prognosis engine.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from .models import (
    DisciplineStat,
    Enrollment,
    ExamAttempt,
    FlashcardState,
    MetricsSnapshot,
    ReadingProgress,
    WeeklyResponse,
)


class ActivityDataSource(ABC):
    """
    Port for reading a learner's activity records.

    Activity reads raise ActivitySourceUnavailable when the backing store
    cannot answer; every other exception is treated as a bug by callers.

    Implementations:
        - SqlActivityDataSource: Queries the platform's Postgres tables.
    """

    @abstractmethod
    async def learner_exists(self, learner_id: str) -> bool:
        pass

    @abstractmethod
    async def active_enrollment(self, learner_id: str) -> Enrollment | None:
        """
        Fetch the learner's active exam target.

        Returns:
            The Enrollment, or None if the learner has not selected one.
        """
        pass

    @abstractmethod
    async def exam_attempts(
        self, learner_id: str, since: datetime | None = None
    ) -> list[ExamAttempt]:
        """
        Fetch practice-exam attempts.

        Args:
            learner_id: The learner.
            since: If given, only attempts completed at or after this instant.
        """
        pass

    @abstractmethod
    async def weekly_responses(
        self, learner_id: str, since: datetime | None = None
    ) -> list[WeeklyResponse]:
        pass

    @abstractmethod
    async def flashcard_states(self, learner_id: str) -> list[FlashcardState]:
        pass

    @abstractmethod
    async def reading_progress(self, learner_id: str) -> list[ReadingProgress]:
        pass

    @abstractmethod
    async def discipline_stats(self, learner_id: str) -> list[DisciplineStat]:
        pass


class ResultCache(ABC):
    """
    Port for the per-learner snapshot cache.

    Implementations raise CacheUnavailable when they cannot serve.

    Implementations:
        - InMemoryResultCache: Process-local dict with lazy expiry.
    """

    @abstractmethod
    async def get(self, learner_id: str) -> MetricsSnapshot | None:
        """Return the cached snapshot, or None if absent or expired."""
        pass

    @abstractmethod
    async def put(
        self, learner_id: str, snapshot: MetricsSnapshot, ttl_minutes: float
    ) -> None:
        pass

    @abstractmethod
    async def invalidate(self, learner_id: str) -> None:
        """Drop the learner's entry. Invalidating a missing entry is a no-op."""
        pass

    @abstractmethod
    async def clear(self) -> None:
        pass
