import pytest

from guru.application.prognosis.scoring import ScoringEngine
from guru.domain import constants
from guru.domain.prognosis.models import SubMetrics


@pytest.fixture
def engine():
    return ScoringEngine()


def test_weights_sum_to_one():
    total = (
        constants.WEIGHT_QUESTIONS
        + constants.WEIGHT_FLASHCARDS
        + constants.WEIGHT_READING
        + constants.WEIGHT_CONSISTENCY
    )
    assert total == pytest.approx(1.0)


def test_all_zero(engine):
    score = engine.score(SubMetrics(0, 0, 0, 0))
    assert score.overall == 0
    assert score.distance_to_goal == 100


def test_all_full(engine):
    score = engine.score(SubMetrics(100, 100, 100, 100))
    assert score.overall == pytest.approx(100)
    assert score.distance_to_goal == pytest.approx(0)


@pytest.mark.parametrize(
    "metrics, expected",
    [
        (SubMetrics(50, 0, 0, 0), 20.0),
        (SubMetrics(0, 77.5, 0, 0), 19.375),
        (SubMetrics(0, 0, 50, 0), 10.0),
        (SubMetrics(0, 0, 0, 100 / 30), 0.5),
        (SubMetrics(10, 20, 30, 40), 4 + 5 + 6 + 6),
    ],
)
def test_weighted_sum(engine, metrics, expected):
    assert engine.overall(metrics) == pytest.approx(expected)


def test_missing_metric_keeps_other_weights(engine):
    # Flashcards degraded to zero: the others are not re-weighted.
    score = engine.overall(SubMetrics(60, 0, 70, 90))
    assert score == pytest.approx(60 * 0.40 + 70 * 0.20 + 90 * 0.15)


def test_overall_is_capped(engine):
    assert engine.overall(SubMetrics(250, 250, 250, 250)) == 100


def test_score_is_rounded_and_distance_is_exact(engine):
    # 13.32 + 11.1 + 11.1 + 9.99 = 45.51
    score = engine.score(SubMetrics(33.3, 44.4, 55.5, 66.6))

    assert score.overall == 45.51
    assert score.raw_overall == pytest.approx(45.51)
    assert score.distance_to_goal == 54.49
    assert score.distance_to_goal == round(100 - score.overall, 2)


def test_distance_uses_the_rounded_score(engine):
    # 0.15 * 100 / 3 is 5 up to float error; rounding happens first
    score = engine.score(SubMetrics(0, 0, 0, 100 / 3))

    assert score.overall == 5.0
    assert score.distance_to_goal == 95.0


def test_referential_transparency(engine):
    metrics = SubMetrics(33.3, 44.4, 55.5, 66.6)
    assert engine.score(metrics) == engine.score(metrics)
