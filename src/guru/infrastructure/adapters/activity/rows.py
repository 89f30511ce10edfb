"""
Row parsing at the data-source boundary.

Every raw row is validated into a pydantic row model and then converted into
one of the domain activity variants. Rows that fail validation are dropped
and logged, never coerced.
"""

import json
import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from guru.domain.prognosis.models import (
    ActivityKind,
    DisciplineStat,
    Enrollment,
    ExamAttempt,
    FlashcardState,
    FlashcardStatus,
    ReadingProgress,
    WeeklyResponse,
)

logger = logging.getLogger(__name__)


class _Row(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class EnrollmentRow(_Row):
    id: str | None = None
    nome: str | None = None
    nivel_dificuldade: str
    multiplicador_questoes: float = Field(gt=0)

    def to_domain(self) -> Enrollment:
        return Enrollment(
            difficulty_tier=self.nivel_dificuldade,
            question_multiplier=self.multiplicador_questoes,
            contest_id=self.id,
            contest_name=self.nome,
        )


class ExamAttemptRow(_Row):
    respostas: dict[str, Any] | list[Any] | None = None
    concluido_em: datetime | None = None
    pontuacao: float | None = None

    @field_validator("respostas", mode="before")
    @classmethod
    def decode_answers(cls, v: Any) -> Any:
        if isinstance(v, (str, bytes)):
            return json.loads(v)
        return v

    def to_domain(self) -> ExamAttempt:
        answers = self.respostas or {}
        if isinstance(answers, list):
            # Array answers are keyed by position.
            answers = {str(i): answer for i, answer in enumerate(answers)}
        return ExamAttempt(
            answers=answers,
            completed_at=self.concluido_em,
            score=self.pontuacao,
        )


class WeeklyResponseRow(_Row):
    criado_em: datetime

    def to_domain(self) -> WeeklyResponse:
        return WeeklyResponse(created_at=self.criado_em)


class FlashcardRow(_Row):
    status: FlashcardStatus

    def to_domain(self) -> FlashcardState:
        return FlashcardState(status=self.status)


class ReadingRow(_Row):
    percentual_progresso: float | None = Field(default=None, ge=0, le=100)
    concluido: bool | None = None

    def to_domain(self) -> ReadingProgress:
        return ReadingProgress(
            percent_complete=self.percentual_progresso or 0.0,
            completed=bool(self.concluido),
        )


class DisciplineRow(_Row):
    disciplina: str
    total_questoes: int | None = None
    respostas_corretas: int | None = None
    pontuacao_media: float | None = None
    tempo_estudo_minutos: int | None = None

    def to_domain(self) -> DisciplineStat:
        return DisciplineStat(
            discipline=self.disciplina,
            total_questions=self.total_questoes or 0,
            correct_answers=self.respostas_corretas or 0,
            average_score=self.pontuacao_media or 0.0,
            study_minutes=self.tempo_estudo_minutos or 0,
        )


ROW_MODELS: dict[ActivityKind, type[_Row]] = {
    ActivityKind.EXAM_ATTEMPTS: ExamAttemptRow,
    ActivityKind.WEEKLY_RESPONSES: WeeklyResponseRow,
    ActivityKind.FLASHCARD_STATES: FlashcardRow,
    ActivityKind.READING_PROGRESS: ReadingRow,
    ActivityKind.DISCIPLINE_STATS: DisciplineRow,
}


def parse_row(model: type[_Row], row: Mapping[str, Any], label: str) -> Any | None:
    """Validate one row and convert it to its domain value, or None if invalid."""
    try:
        return model.model_validate(dict(row)).to_domain()
    except (ValidationError, ValueError) as e:
        logger.warning(f"Dropping invalid {label} row: {e}")
        return None


def parse_rows(kind: ActivityKind, rows: Iterable[Mapping[str, Any]]) -> list:
    model = ROW_MODELS[kind]
    parsed = (parse_row(model, row, kind.value) for row in rows)
    return [value for value in parsed if value is not None]


def parse_enrollment(row: Mapping[str, Any] | None) -> Enrollment | None:
    if row is None:
        return None
    return parse_row(EnrollmentRow, row, "enrollment")
