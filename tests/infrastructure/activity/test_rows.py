import logging
from datetime import datetime

import pytest

from guru.domain.prognosis.models import (
    ActivityKind,
    Enrollment,
    FlashcardState,
    FlashcardStatus,
    ReadingProgress,
)
from guru.infrastructure.adapters.activity.rows import parse_enrollment, parse_rows


def test_exam_answers_may_arrive_as_json_text():
    rows = [{"respostas": '{"q1": "A", "q2": "C"}', "concluido_em": None, "pontuacao": None}]

    [attempt] = parse_rows(ActivityKind.EXAM_ATTEMPTS, rows)

    assert attempt.answers == {"q1": "A", "q2": "C"}


def test_exam_answers_as_array_are_counted():
    rows = [{"respostas": '["A", "C", "B"]', "concluido_em": "2026-10-18T09:00:00Z"}]

    [attempt] = parse_rows(ActivityKind.EXAM_ATTEMPTS, rows)

    assert len(attempt.answers) == 3
    assert attempt.answers["1"] == "C"
    assert attempt.completed_at is not None


def test_exam_with_scalar_answers_is_dropped():
    assert parse_rows(ActivityKind.EXAM_ATTEMPTS, [{"respostas": "42"}]) == []


def test_exam_without_answers_counts_nothing():
    [attempt] = parse_rows(ActivityKind.EXAM_ATTEMPTS, [{"respostas": None}])
    assert attempt.answers == {}


def test_exam_timestamps_are_parsed():
    [attempt] = parse_rows(
        ActivityKind.EXAM_ATTEMPTS,
        [{"respostas": {}, "concluido_em": "2026-10-01T08:30:00+00:00", "pontuacao": 72.5}],
    )
    assert attempt.completed_at == datetime.fromisoformat("2026-10-01T08:30:00+00:00")
    assert attempt.score == 72.5


def test_flashcard_statuses():
    rows = [{"status": s} for s in ("dominado", "revisando", "aprendendo", "nao_iniciado")]

    states = parse_rows(ActivityKind.FLASHCARD_STATES, rows)

    assert states == [
        FlashcardState(FlashcardStatus.MASTERED),
        FlashcardState(FlashcardStatus.REVIEWING),
        FlashcardState(FlashcardStatus.LEARNING),
        FlashcardState(FlashcardStatus.NOT_STARTED),
    ]


def test_unknown_flashcard_status_is_dropped(caplog):
    rows = [{"status": "dominado"}, {"status": "esquecido"}]

    with caplog.at_level(logging.WARNING):
        states = parse_rows(ActivityKind.FLASHCARD_STATES, rows)

    assert len(states) == 1
    assert "Dropping invalid flashcard_states row" in caplog.text


@pytest.mark.parametrize("value", [-1, 100.5, "muito"])
def test_out_of_range_reading_is_dropped(value):
    assert parse_rows(ActivityKind.READING_PROGRESS, [{"percentual_progresso": value}]) == []


def test_missing_reading_progress_reads_as_zero():
    assert parse_rows(ActivityKind.READING_PROGRESS, [{"percentual_progresso": None}]) == [
        ReadingProgress(0.0, completed=False)
    ]


def test_weekly_response_needs_a_timestamp():
    rows = [{"criado_em": None}, {"criado_em": "2026-10-18T10:00:00Z"}]
    assert len(parse_rows(ActivityKind.WEEKLY_RESPONSES, rows)) == 1


def test_discipline_nulls_default_to_zero():
    [stat] = parse_rows(ActivityKind.DISCIPLINE_STATS, [{"disciplina": "Direito Constitucional"}])

    assert stat.discipline == "Direito Constitucional"
    assert stat.total_questions == 0
    assert stat.average_score == 0.0


def test_enrollment():
    row = {"id": "c1", "nome": "TRF", "nivel_dificuldade": "dificil", "multiplicador_questoes": 1.5}

    assert parse_enrollment(row) == Enrollment("dificil", 1.5, contest_id="c1", contest_name="TRF")


def test_missing_enrollment():
    assert parse_enrollment(None) is None


@pytest.mark.parametrize("multiplier", [0, -2, None])
def test_enrollment_with_bad_multiplier_is_rejected(multiplier):
    row = {"nivel_dificuldade": "medio", "multiplicador_questoes": multiplier}
    assert parse_enrollment(row) is None
