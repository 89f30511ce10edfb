"""
Scoring engine: combines the four sub-metrics into the readiness score.

Pure computation, no I/O.
"""

from dataclasses import dataclass

from guru.application.utils.numbers import round2
from guru.domain.constants import (
    MAX_SCORE,
    WEIGHT_CONSISTENCY,
    WEIGHT_FLASHCARDS,
    WEIGHT_QUESTIONS,
    WEIGHT_READING,
)
from guru.domain.prognosis.models import SubMetrics


@dataclass(frozen=True)
class Score:
    """
    Attributes:
        overall: Readiness score rounded to two decimals.
        distance_to_goal: 100 minus the rounded overall score.
        raw_overall: Unrounded score, fed to the time estimator.
    """

    overall: float
    distance_to_goal: float
    raw_overall: float


class ScoringEngine:
    """
    Weighted sum of the sub-metrics.

    questions 40%, flashcards 25%, reading 20%, consistency 15%.
    """

    def overall(self, metrics: SubMetrics) -> float:
        total = (
            metrics.questions_ratio * WEIGHT_QUESTIONS
            + metrics.flashcard_proficiency * WEIGHT_FLASHCARDS
            + metrics.reading_progress * WEIGHT_READING
            + metrics.study_consistency * WEIGHT_CONSISTENCY
        )
        return max(0.0, min(total, MAX_SCORE))

    def distance_to_goal(self, overall: float) -> float:
        return round2(max(0.0, MAX_SCORE - overall))

    def score(self, metrics: SubMetrics) -> Score:
        raw = self.overall(metrics)
        overall = round2(raw)
        return Score(
            overall=overall,
            distance_to_goal=self.distance_to_goal(overall),
            raw_overall=raw,
        )
