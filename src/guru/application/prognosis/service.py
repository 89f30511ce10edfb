"""
Prognosis Service: the facade behind the HTTP routes and CLI commands.

Coordinates the cache, the activity data source and the pure scoring
components into the public prognosis operations.
"""

import asyncio
import logging
from collections.abc import Awaitable
from datetime import timedelta
from typing import TypeVar

from guru.application.utils.numbers import round2
from guru.domain.constants import CONSISTENCY_WINDOW_DAYS, SNAPSHOT_TTL_MINUTES
from guru.domain.prognosis.errors import (
    ActivitySourceUnavailable,
    CacheUnavailable,
    LearnerNotFound,
    NoActiveEnrollment,
)
from guru.domain.prognosis.models import (
    DetailedAnalysis,
    Enrollment,
    MetricsSnapshot,
    Prognosis,
    ScorePoint,
    SubMetrics,
)
from guru.domain.prognosis.ports import ActivityDataSource, ResultCache

from . import analysis
from .metrics_aggregator import Clock, MetricsAggregator, as_utc, utc_now
from .oplog import OperationLogger, operation
from .recommendations import RecommendationGenerator
from .scoring import ScoringEngine
from .time_estimator import TimeEstimator

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PrognosisService:
    """
    Application service for the approval prognosis.

    Follows Dependency Inversion: depends on the ActivityDataSource and
    ResultCache abstractions, never on concrete adapters. The cache is owned
    by the caller and passed in at construction time.
    """

    def __init__(
        self,
        source: ActivityDataSource,
        cache: ResultCache,
        *,
        aggregator: MetricsAggregator | None = None,
        scoring: ScoringEngine | None = None,
        estimator: TimeEstimator | None = None,
        recommender: RecommendationGenerator | None = None,
        ttl_minutes: float = SNAPSHOT_TTL_MINUTES,
        clock: Clock | None = None,
        log: logging.Logger | None = None,
    ):
        """
        Args:
            source: The port for reading learner activity.
            cache: The per-learner snapshot cache.
            ttl_minutes: Lifetime of a cached snapshot.
            clock: Returns "now"; injectable so the 30-day window can be pinned.
            log: Logger receiving operation start/end/error events.
        """
        self._source = source
        self._cache = cache
        self._clock = clock or utc_now
        self._aggregator = aggregator or MetricsAggregator(source, clock=self._clock)
        self._scoring = scoring or ScoringEngine()
        self._estimator = estimator or TimeEstimator()
        self._recommender = recommender or RecommendationGenerator()
        self._ttl_minutes = ttl_minutes
        self._logger = log or logger

    async def compute_metrics(self, learner_id: str) -> MetricsSnapshot:
        """
        Return the learner's snapshot, from the cache when fresh.

        Raises:
            LearnerNotFound: The learner id does not resolve.
            NoActiveEnrollment: The learner has not selected an exam target.
        """
        with operation(self._logger, "compute_metrics", learner_id) as log:
            cached = await self._cache_get(learner_id, log)
            if cached is not None:
                log.debug("cache hit")
                return cached
            return await self._compute_and_store(learner_id, log)

    async def compute_prognosis(self, learner_id: str) -> Prognosis:
        with operation(self._logger, "compute_prognosis", learner_id):
            metrics = await self.compute_metrics(learner_id)
            return Prognosis(
                distance_to_goal=metrics.distance_to_goal,
                time_estimate=metrics.time_estimate,
                recommendations=self._recommender.generate(metrics),
            )

    async def refresh(self, learner_id: str) -> None:
        """
        Drop the cached snapshot and recompute it.

        The recomputation never reads the cache, so a snapshot computed before
        this call cannot be handed back even if invalidation failed.
        """
        with operation(self._logger, "refresh", learner_id) as log:
            try:
                await self._cache.invalidate(learner_id)
            except CacheUnavailable as e:
                log.warning(f"cache invalidate failed, recomputing anyway: {e}")
            await self._compute_and_store(learner_id, log)
            log.info("metrics refreshed")

    async def detailed_analysis(self, learner_id: str) -> DetailedAnalysis:
        """
        Snapshot plus strengths, weaknesses, per-discipline stats and the
        score timeline of the last 30 days.
        """
        with operation(self._logger, "detailed_analysis", learner_id) as log:
            metrics = await self.compute_metrics(learner_id)
            since = as_utc(self._clock()) - timedelta(days=CONSISTENCY_WINDOW_DAYS)

            disciplines, recent = await asyncio.gather(
                self._optional(self._source.discipline_stats(learner_id), log),
                self._optional(self._source.exam_attempts(learner_id, since=since), log),
            )
            timeline = sorted(
                (
                    ScorePoint(completed_at=a.completed_at, score=a.score)
                    for a in recent
                    if a.completed_at is not None and as_utc(a.completed_at) >= since
                ),
                key=lambda p: as_utc(p.completed_at),
            )
            return DetailedAnalysis(
                metrics=metrics,
                discipline_stats=disciplines,
                score_timeline=timeline,
                strengths=analysis.strengths(metrics),
                weaknesses=analysis.weaknesses(metrics),
            )

    # ---------------------------------------------------------------------

    async def _compute_and_store(self, learner_id: str, log: OperationLogger) -> MetricsSnapshot:
        if not await self._source.learner_exists(learner_id):
            raise LearnerNotFound(learner_id)

        enrollment = await self._source.active_enrollment(learner_id)
        if enrollment is None:
            raise NoActiveEnrollment(learner_id)

        sub = await self._aggregator.aggregate(learner_id, enrollment, log=log)
        snapshot = self._build_snapshot(sub, enrollment)

        try:
            await self._cache.put(learner_id, snapshot, self._ttl_minutes)
        except CacheUnavailable as e:
            log.warning(f"cache write failed: {e}")
        return snapshot

    def _build_snapshot(self, sub: SubMetrics, enrollment: Enrollment) -> MetricsSnapshot:
        score = self._scoring.score(sub)
        return MetricsSnapshot(
            questions_answered=sub.questions_answered,
            question_goal=sub.question_goal,
            questions_ratio=round2(sub.questions_ratio),
            flashcard_proficiency=round2(sub.flashcard_proficiency),
            reading_progress=round2(sub.reading_progress),
            study_consistency=round2(sub.study_consistency),
            overall_score=score.overall,
            distance_to_goal=score.distance_to_goal,
            time_estimate=self._estimator.estimate(
                score.raw_overall, sub.study_consistency, enrollment.difficulty_tier
            ),
            computed_at=as_utc(self._clock()),
        )

    async def _cache_get(self, learner_id: str, log: OperationLogger) -> MetricsSnapshot | None:
        try:
            return await self._cache.get(learner_id)
        except CacheUnavailable as e:
            log.warning(f"cache read failed, recomputing: {e}")
            return None

    async def _optional(self, pending: Awaitable[list[T]], log: OperationLogger) -> list[T]:
        try:
            return await pending
        except ActivitySourceUnavailable as e:
            log.warning(f"{e}; leaving it out of the analysis")
            return []
