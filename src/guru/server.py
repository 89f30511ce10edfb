import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Generic, TypeVar

from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel, ConfigDict

from guru.application.prognosis.service import PrognosisService
from guru.consts import VERSION
from guru.domain.prognosis.errors import LearnerNotFound, NoActiveEnrollment

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("guru.server")

T = TypeVar("T")


@asynccontextmanager
async def lifespan(app: FastAPI):
    from guru.application.config import resolve_config
    from guru.application.factory import build_prognosis_service, get_engine
    from guru.infrastructure.adapters.activity import SqlActivityDataSource
    from guru.infrastructure.cache import InMemoryResultCache

    # Startup
    logger.info(f"Guru Server v{VERSION} starting up...")
    config = resolve_config()
    engine = get_engine(config)
    cache = InMemoryResultCache()
    app.state.service = build_prognosis_service(
        config, source=SqlActivityDataSource(engine), cache=cache
    )
    yield
    # Shutdown
    logger.info("Guru Server shutting down...")
    await cache.clear()
    engine.dispose()


app = FastAPI(
    title="Guru Server",
    description="Approval prognosis for learners of the exam-preparation platform.",
    version=VERSION,
    lifespan=lifespan,
)


def get_service(request: Request) -> PrognosisService:
    return request.app.state.service


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    data: T | None = None
    message: str


class MetricsData(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    questions_answered: int
    question_goal: int
    questions_ratio: float
    flashcard_proficiency: float
    reading_progress: float
    study_consistency: float
    overall_score: float
    distance_to_goal: float
    time_estimate: str
    computed_at: datetime | None = None


class PrognosisData(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    distance_to_goal: float
    time_estimate: str
    recommendations: list[str]


class DisciplineData(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    discipline: str
    total_questions: int
    correct_answers: int
    average_score: float
    study_minutes: int


class ScorePointData(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    completed_at: datetime
    score: float | None


class AnalysisData(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    metrics: MetricsData
    discipline_stats: list[DisciplineData]
    score_timeline: list[ScorePointData]
    strengths: list[str]
    weaknesses: list[str]


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float


start_time = time.time()


def _http_error(learner_id: str, e: Exception) -> HTTPException:
    if isinstance(e, LearnerNotFound):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, NoActiveEnrollment):
        return HTTPException(status_code=409, detail=str(e))
    logger.error(f"Prognosis request for {learner_id} failed: {e}", exc_info=True)
    return HTTPException(status_code=500, detail="Internal error while computing the prognosis")


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Simple health check to verify server is reachable.
    """
    return HealthResponse(status="ok", version=VERSION, uptime_seconds=time.time() - start_time)


@app.get("/version")
async def get_version():
    return {"version": VERSION}


@app.get("/learners/{learner_id}/metrics", response_model=Envelope[MetricsData])
async def get_metrics(learner_id: str, service: PrognosisService = Depends(get_service)):
    try:
        snapshot = await service.compute_metrics(learner_id)
    except Exception as e:
        raise _http_error(learner_id, e) from e
    return Envelope[MetricsData](
        data=MetricsData.model_validate(snapshot), message="Métricas calculadas com sucesso"
    )


@app.get("/learners/{learner_id}/prognosis", response_model=Envelope[PrognosisData])
async def get_prognosis(learner_id: str, service: PrognosisService = Depends(get_service)):
    try:
        prognosis = await service.compute_prognosis(learner_id)
    except Exception as e:
        raise _http_error(learner_id, e) from e
    return Envelope[PrognosisData](
        data=PrognosisData.model_validate(prognosis), message="Prognóstico gerado com sucesso"
    )


@app.get("/learners/{learner_id}/analysis", response_model=Envelope[AnalysisData])
async def get_analysis(learner_id: str, service: PrognosisService = Depends(get_service)):
    """Snapshot with strengths, weaknesses, discipline stats and score timeline."""
    try:
        result = await service.detailed_analysis(learner_id)
    except Exception as e:
        raise _http_error(learner_id, e) from e
    return Envelope[AnalysisData](
        data=AnalysisData.model_validate(result), message="Análise detalhada gerada"
    )


@app.post("/learners/{learner_id}/refresh", response_model=Envelope[None])
async def refresh_metrics(learner_id: str, service: PrognosisService = Depends(get_service)):
    """
    Force recomputation of the learner's metrics, bypassing the cache.
    """
    try:
        await service.refresh(learner_id)
    except Exception as e:
        raise _http_error(learner_id, e) from e
    return Envelope[None](message="Métricas atualizadas")
