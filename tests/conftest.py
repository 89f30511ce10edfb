from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from guru.domain.prognosis.models import (
    Enrollment,
    FlashcardState,
    FlashcardStatus,
    MetricsSnapshot,
)
from guru.domain.prognosis.ports import ActivityDataSource

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    """A clock pinned to NOW."""
    return lambda: NOW


@pytest.fixture
def source():
    """An ActivityDataSource for an enrolled learner with no activity at all."""
    repo = AsyncMock(spec=ActivityDataSource)
    repo.learner_exists.return_value = True
    repo.active_enrollment.return_value = Enrollment("medio", question_multiplier=1.0)
    repo.exam_attempts.return_value = []
    repo.weekly_responses.return_value = []
    repo.flashcard_states.return_value = []
    repo.reading_progress.return_value = []
    repo.discipline_stats.return_value = []
    return repo


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config files
    monkeypatch.setenv("HOME", str(home))
    return home


def days_ago(days: float, hours: float = 0) -> datetime:
    return NOW - timedelta(days=days, hours=hours)


def cards(**counts: int) -> list[FlashcardState]:
    """cards(mastered=2, learning=1) -> FlashcardState list."""
    states = []
    for name, count in counts.items():
        states += [FlashcardState(FlashcardStatus[name.upper()])] * count
    return states


def snapshot(
    questions: float = 0.0,
    flashcards: float = 0.0,
    reading: float = 0.0,
    consistency: float = 0.0,
    overall: float = 0.0,
    time_estimate: str = "2 anos",
) -> MetricsSnapshot:
    return MetricsSnapshot(
        questions_answered=0,
        question_goal=5000,
        questions_ratio=questions,
        flashcard_proficiency=flashcards,
        reading_progress=reading,
        study_consistency=consistency,
        overall_score=overall,
        distance_to_goal=round(100 - overall, 2),
        time_estimate=time_estimate,
        computed_at=NOW,
    )
