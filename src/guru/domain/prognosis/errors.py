"""Errors raised across the prognosis ports and services."""

from .models import ActivityKind


class GuruError(Exception):
    """Base class for every error the prognosis engine raises on purpose."""


class LearnerNotFound(GuruError):
    def __init__(self, learner_id: str):
        super().__init__(f"Learner '{learner_id}' not found")
        self.learner_id = learner_id


class NoActiveEnrollment(GuruError):
    def __init__(self, learner_id: str):
        super().__init__(
            f"Learner '{learner_id}' must select an exam target before a prognosis can be computed"
        )
        self.learner_id = learner_id


class ActivitySourceUnavailable(GuruError):
    """
    A single activity read failed.

    Recovered by the aggregator: the sub-metrics fed by this kind degrade to 0.
    """

    def __init__(self, kind: ActivityKind, reason: str = ""):
        message = f"Activity source '{kind.value}' unavailable"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.kind = kind


class CacheUnavailable(GuruError):
    """The result cache cannot serve; callers treat it as a miss."""
