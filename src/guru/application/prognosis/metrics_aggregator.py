"""
Metrics aggregator: turns raw activity records into the four sub-metrics.

Every activity kind is fetched independently. When a fetch fails with
ActivitySourceUnavailable, only the sub-metrics that depend on that kind
drop to 0; the rest of the computation carries on.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from datetime import date, datetime, timedelta, timezone
from typing import TypeVar

from guru.application.utils.numbers import clamp_score, round_half_up
from guru.domain.constants import (
    BASE_QUESTION_GOAL,
    CONSISTENCY_WINDOW_DAYS,
    FLASHCARD_STATUS_WEIGHTS,
)
from guru.domain.prognosis.errors import ActivitySourceUnavailable
from guru.domain.prognosis.models import (
    ActivityKind,
    Enrollment,
    ExamAttempt,
    FlashcardState,
    ReadingProgress,
    SubMetrics,
    WeeklyResponse,
)
from guru.domain.prognosis.ports import ActivityDataSource

logger = logging.getLogger(__name__)

T = TypeVar("T")

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(moment: datetime) -> datetime:
    """Naive timestamps coming from the database are stored in UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def question_goal(multiplier: float) -> int:
    return int(round_half_up(BASE_QUESTION_GOAL * multiplier))


def count_answered(attempts: Iterable[ExamAttempt], responses: Iterable[WeeklyResponse]) -> int:
    from_exams = sum(len(a.answers) for a in attempts)
    return from_exams + sum(1 for _ in responses)


def questions_ratio(answered: int, goal: int) -> float:
    if goal <= 0:
        return 0.0
    return clamp_score(answered / goal * 100)


def flashcard_proficiency(states: list[FlashcardState]) -> float:
    """
    Weighted average of card statuses.

    mastered=100, reviewing=70, learning=40, not started=0.
    """
    if not states:
        return 0.0
    points = sum(FLASHCARD_STATUS_WEIGHTS[s.status.value] for s in states)
    return clamp_score(points / len(states))


def reading_progress(progress: list[ReadingProgress]) -> float:
    if not progress:
        return 0.0
    total = sum(p.percent_complete for p in progress)
    return clamp_score(total / len(progress))


def active_days(
    attempts: Iterable[ExamAttempt],
    responses: Iterable[WeeklyResponse],
    since: datetime,
) -> set[date]:
    """Distinct UTC calendar days with at least one activity at or after `since`."""
    since = as_utc(since)
    moments = [a.completed_at for a in attempts if a.completed_at is not None]
    moments.extend(r.created_at for r in responses)

    days: set[date] = set()
    for moment in moments:
        moment = as_utc(moment)
        if moment >= since:
            days.add(moment.date())
    return days


def study_consistency(days: set[date]) -> float:
    return clamp_score(len(days) / CONSISTENCY_WINDOW_DAYS * 100)


class MetricsAggregator:
    """
    Computes SubMetrics for a learner from the ActivityDataSource.

    The clock is injectable so the consistency window can be pinned in tests.
    """

    def __init__(self, source: ActivityDataSource, clock: Clock | None = None):
        self._source = source
        self._clock = clock or utc_now

    def window_start(self) -> datetime:
        return as_utc(self._clock()) - timedelta(days=CONSISTENCY_WINDOW_DAYS)

    async def aggregate(
        self,
        learner_id: str,
        enrollment: Enrollment,
        log: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> SubMetrics:
        """
        Fetch every activity kind concurrently and compute the sub-metrics.

        Raises:
            Anything other than ActivitySourceUnavailable raised by the source.
        """
        log = log or logger

        attempts, responses, cards, reading = await asyncio.gather(
            self._fetch(ActivityKind.EXAM_ATTEMPTS, self._source.exam_attempts(learner_id), log),
            self._fetch(
                ActivityKind.WEEKLY_RESPONSES, self._source.weekly_responses(learner_id), log
            ),
            self._fetch(
                ActivityKind.FLASHCARD_STATES, self._source.flashcard_states(learner_id), log
            ),
            self._fetch(
                ActivityKind.READING_PROGRESS, self._source.reading_progress(learner_id), log
            ),
        )

        goal = question_goal(enrollment.question_multiplier)
        # An unavailable kind contributes nothing; the other one still counts.
        attempts = attempts or []
        responses = responses or []
        answered = count_answered(attempts, responses)
        ratio = questions_ratio(answered, goal)
        consistency = study_consistency(active_days(attempts, responses, self.window_start()))

        return SubMetrics(
            questions_ratio=ratio,
            flashcard_proficiency=flashcard_proficiency(cards) if cards is not None else 0.0,
            reading_progress=reading_progress(reading) if reading is not None else 0.0,
            study_consistency=consistency,
            questions_answered=answered,
            question_goal=goal,
        )

    async def _fetch(
        self,
        kind: ActivityKind,
        pending: Awaitable[list[T]],
        log: logging.Logger | logging.LoggerAdapter,
    ) -> list[T] | None:
        try:
            return await pending
        except ActivitySourceUnavailable as e:
            log.warning(f"Degrading {kind.value} to zero: {e}")
            return None
