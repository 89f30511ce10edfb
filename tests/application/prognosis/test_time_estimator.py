import pytest

from guru.application.prognosis.time_estimator import TimeEstimator


@pytest.fixture
def estimator():
    return TimeEstimator()


@pytest.mark.parametrize(
    "score, weeks",
    [(100, 4), (80, 4), (79.99, 12), (60, 12), (40, 24), (20, 48), (19.99, 72), (0, 72)],
)
def test_score_brackets(estimator, score, weeks):
    assert estimator.base_weeks(score) == weeks


def test_nothing_done_on_medium_exam(estimator):
    # 72 weeks x 1.0 x 1.2 = 86.4 -> 86 weeks -> 2 years
    assert estimator.weeks(0, 0, "medio") == 86
    assert estimator.estimate(0, 0, "medio") == "2 anos"


def test_everything_done(estimator):
    # 4 x 1.0 x 0.9 = 3.6 -> 4 weeks
    assert estimator.estimate(100, 100, "medio") == "4 semanas"


@pytest.mark.parametrize(
    "score, consistency, tier, expected",
    [
        (85, 60, "facil", "3 semanas"),  # 4 x 0.8 x 0.9 = 2.88
        (65, 60, "medio", "3 meses"),  # 12 x 0.9 = 10.8 -> 11 weeks
        (45, 40, "medio", "7 meses"),  # 24 x 1.2 = 28.8 -> 29 weeks
        (10, 10, "dificil", "2 anos"),  # 72 x 1.3 x 1.2 = 112.32
        (30, 70, "dificil", "1 ano"),  # 48 x 1.3 x 0.9 = 56.16
    ],
)
def test_estimates(estimator, score, consistency, tier, expected):
    assert estimator.estimate(score, consistency, tier) == expected


def test_unknown_tier_uses_neutral_factor(estimator):
    assert estimator.weeks(65, 60, "inexistente") == estimator.weeks(65, 60, "medio")


def test_consistency_of_exactly_fifty_is_not_consistent(estimator):
    # 4 x 1.2 = 4.8 -> 5 weeks -> 1 month
    assert estimator.estimate(85, 50, "medio") == "1 mês"
    assert estimator.estimate(85, 50.01, "medio") == "4 semanas"


@pytest.mark.parametrize(
    "weeks, expected",
    [
        (1, "1 semana"),
        (4, "4 semanas"),
        (5, "1 mês"),
        (10, "3 meses"),  # 2.5 rounds up
        (52, "13 meses"),
        (53, "1 ano"),
        (78, "2 anos"),  # 1.5 rounds up
    ],
)
def test_format_weeks(estimator, weeks, expected):
    assert estimator.format_weeks(weeks) == expected
