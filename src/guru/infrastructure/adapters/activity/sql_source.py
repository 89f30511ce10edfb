"""
SQL Activity Data Source: adapter for the platform Postgres database.

Implements ActivityDataSource with SQLAlchemy Core queries against the
platform's Postgres tables.
"""

import logging
from datetime import datetime

from sqlalchemy import Engine, Select, select
from sqlalchemy.exc import SQLAlchemyError

from guru.domain.prognosis.errors import ActivitySourceUnavailable
from guru.domain.prognosis.models import (
    ActivityKind,
    DisciplineStat,
    Enrollment,
    ExamAttempt,
    FlashcardState,
    ReadingProgress,
    WeeklyResponse,
)
from guru.domain.prognosis.ports import ActivityDataSource

from .rows import parse_enrollment, parse_rows
from .tables import (
    contest_preferences,
    contests,
    discipline_statistics,
    exam_progress,
    flashcard_progress,
    learners,
    study_guide_progress,
    weekly_answers,
)

logger = logging.getLogger(__name__)


class SqlActivityDataSource(ActivityDataSource):
    """
    Reads learner activity through a SQLAlchemy engine.

    Activity reads translate SQLAlchemyError into ActivitySourceUnavailable.
    Learner and enrollment lookups let database errors propagate, since
    nothing can be computed without them.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    async def learner_exists(self, learner_id: str) -> bool:
        query = select(learners.c.id).where(learners.c.id == learner_id).limit(1)
        with self.engine.connect() as conn:
            return conn.execute(query).first() is not None

    async def active_enrollment(self, learner_id: str) -> Enrollment | None:
        query = (
            select(
                contests.c.id,
                contests.c.nome,
                contests.c.nivel_dificuldade,
                contests.c.multiplicador_questoes,
            )
            .select_from(
                contest_preferences.join(
                    contests, contests.c.id == contest_preferences.c.concurso_id
                )
            )
            .where(contest_preferences.c.usuario_id == learner_id)
            .where(contest_preferences.c.ativo.is_(True))
            .order_by(contest_preferences.c.selecionado_em.desc())
            .limit(1)
        )
        with self.engine.connect() as conn:
            row = conn.execute(query).mappings().first()

        enrollment = parse_enrollment(row)
        if row is not None and enrollment is None:
            logger.error(f"Active enrollment of learner {learner_id} is malformed; ignoring it")
        return enrollment

    async def exam_attempts(
        self, learner_id: str, since: datetime | None = None
    ) -> list[ExamAttempt]:
        query = select(
            exam_progress.c.respostas,
            exam_progress.c.concluido_em,
            exam_progress.c.pontuacao,
        ).where(exam_progress.c.usuario_id == learner_id)
        if since is not None:
            query = query.where(exam_progress.c.concluido_em >= since)
        return self._read(ActivityKind.EXAM_ATTEMPTS, query)

    async def weekly_responses(
        self, learner_id: str, since: datetime | None = None
    ) -> list[WeeklyResponse]:
        query = select(weekly_answers.c.criado_em).where(weekly_answers.c.usuario_id == learner_id)
        if since is not None:
            query = query.where(weekly_answers.c.criado_em >= since)
        return self._read(ActivityKind.WEEKLY_RESPONSES, query)

    async def flashcard_states(self, learner_id: str) -> list[FlashcardState]:
        query = select(flashcard_progress.c.status).where(
            flashcard_progress.c.usuario_id == learner_id
        )
        return self._read(ActivityKind.FLASHCARD_STATES, query)

    async def reading_progress(self, learner_id: str) -> list[ReadingProgress]:
        query = select(
            study_guide_progress.c.percentual_progresso,
            study_guide_progress.c.concluido,
        ).where(study_guide_progress.c.usuario_id == learner_id)
        return self._read(ActivityKind.READING_PROGRESS, query)

    async def discipline_stats(self, learner_id: str) -> list[DisciplineStat]:
        query = (
            select(
                discipline_statistics.c.disciplina,
                discipline_statistics.c.total_questoes,
                discipline_statistics.c.respostas_corretas,
                discipline_statistics.c.pontuacao_media,
                discipline_statistics.c.tempo_estudo_minutos,
            )
            .where(discipline_statistics.c.usuario_id == learner_id)
            .order_by(discipline_statistics.c.disciplina)
        )
        return self._read(ActivityKind.DISCIPLINE_STATS, query)

    def _read(self, kind: ActivityKind, query: Select) -> list:
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(query).mappings().all()
        except SQLAlchemyError as e:
            raise ActivitySourceUnavailable(kind, str(e)) from e
        return parse_rows(kind, rows)
