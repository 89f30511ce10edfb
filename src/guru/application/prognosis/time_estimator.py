"""Maps a readiness score to a human-readable time-to-goal estimate."""

from guru.application.utils.numbers import round_half_up
from guru.domain.constants import (
    CONSISTENCY_THRESHOLD,
    CONSISTENT_FACTOR,
    DEFAULT_DIFFICULTY_FACTOR,
    DIFFICULTY_FACTORS,
    FALLBACK_WEEKS,
    INCONSISTENT_FACTOR,
    SCORE_BRACKET_WEEKS,
    WEEKS_PER_MONTH,
    WEEKS_PER_YEAR,
)


def _plural(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


class TimeEstimator:
    """
    Stateless estimator.

    base weeks (by score bracket) x difficulty factor x consistency factor,
    rounded to whole weeks and rendered in weeks, months or years.
    """

    def base_weeks(self, overall_score: float) -> int:
        for minimum, weeks in SCORE_BRACKET_WEEKS:
            if overall_score >= minimum:
                return weeks
        return FALLBACK_WEEKS

    def weeks(self, overall_score: float, consistency: float, difficulty_tier: str) -> int:
        difficulty = DIFFICULTY_FACTORS.get(difficulty_tier, DEFAULT_DIFFICULTY_FACTOR)
        consistent = consistency > CONSISTENCY_THRESHOLD
        regularity = CONSISTENT_FACTOR if consistent else INCONSISTENT_FACTOR
        return int(round_half_up(self.base_weeks(overall_score) * difficulty * regularity))

    def format_weeks(self, weeks: int) -> str:
        if weeks <= WEEKS_PER_MONTH:
            return _plural(weeks, "semana", "semanas")
        if weeks <= WEEKS_PER_YEAR:
            months = int(round_half_up(weeks / WEEKS_PER_MONTH))
            return _plural(months, "mês", "meses")
        years = int(round_half_up(weeks / WEEKS_PER_YEAR))
        return _plural(years, "ano", "anos")

    def estimate(self, overall_score: float, consistency: float, difficulty_tier: str) -> str:
        return self.format_weeks(self.weeks(overall_score, consistency, difficulty_tier))
