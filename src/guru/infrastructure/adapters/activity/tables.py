"""
Table definitions for the platform tables the engine reads.

Only the columns the engine touches are declared. The tables are owned and
migrated by other subsystems; create_all() is only used by tests.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    Integer,
    MetaData,
    String,
    Table,
)

metadata = MetaData()

learners = Table(
    "usuarios",
    metadata,
    Column("id", String, primary_key=True),
)

contests = Table(
    "concursos",
    metadata,
    Column("id", String, primary_key=True),
    Column("nome", String),
    Column("nivel_dificuldade", String),
    Column("multiplicador_questoes", Float),
)

contest_preferences = Table(
    "preferencias_usuario_concurso",
    metadata,
    Column("id", String, primary_key=True),
    Column("usuario_id", String, index=True),
    Column("concurso_id", String),
    Column("ativo", Boolean),
    Column("selecionado_em", DateTime(timezone=True)),
)

exam_progress = Table(
    "progresso_usuario_simulado",
    metadata,
    Column("id", String, primary_key=True),
    Column("usuario_id", String, index=True),
    Column("respostas", JSON),
    Column("pontuacao", Float),
    Column("concluido_em", DateTime(timezone=True)),
)

weekly_answers = Table(
    "respostas_questoes_semanais",
    metadata,
    Column("id", String, primary_key=True),
    Column("usuario_id", String, index=True),
    Column("criado_em", DateTime(timezone=True)),
)

flashcard_progress = Table(
    "progresso_usuario_flashcard",
    metadata,
    Column("id", String, primary_key=True),
    Column("usuario_id", String, index=True),
    Column("status", String),
)

study_guide_progress = Table(
    "progresso_usuario_apostila",
    metadata,
    Column("id", String, primary_key=True),
    Column("usuario_id", String, index=True),
    Column("percentual_progresso", Float),
    Column("concluido", Boolean),
)

discipline_statistics = Table(
    "estatisticas_usuario_disciplina",
    metadata,
    Column("id", String, primary_key=True),
    Column("usuario_id", String, index=True),
    Column("disciplina", String),
    Column("total_questoes", Integer),
    Column("respostas_corretas", Integer),
    Column("pontuacao_media", Float),
    Column("tempo_estudo_minutos", Integer),
)
