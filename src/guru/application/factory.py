"""
Prognosis Service Factory
Centralizes the wiring of adapters into a PrognosisService.
"""

from sqlalchemy import Engine, create_engine

from guru.application.config import AppConfig
from guru.application.prognosis.service import PrognosisService
from guru.domain.prognosis.ports import ActivityDataSource, ResultCache
from guru.infrastructure.adapters.activity import SqlActivityDataSource
from guru.infrastructure.cache import InMemoryResultCache


def get_engine(config: AppConfig) -> Engine:
    return create_engine(config.database_url, echo=config.echo_sql, pool_pre_ping=True)


def get_activity_source(config: AppConfig, engine: Engine | None = None) -> ActivityDataSource:
    """
    Returns the ActivityDataSource implementation for the configured database.
    """
    return SqlActivityDataSource(engine or get_engine(config))


def build_prognosis_service(
    config: AppConfig,
    source: ActivityDataSource | None = None,
    cache: ResultCache | None = None,
) -> PrognosisService:
    """
    Returns a PrognosisService wired from config.

    The caller owns the cache lifecycle; a fresh in-memory cache is created
    when none is given.
    """
    return PrognosisService(
        source=source or get_activity_source(config),
        cache=cache or InMemoryResultCache(),
        ttl_minutes=config.cache_ttl_minutes,
    )
