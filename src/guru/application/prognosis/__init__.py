# Application Prognosis Package
from .metrics_aggregator import MetricsAggregator
from .recommendations import RecommendationGenerator
from .scoring import ScoringEngine
from .service import PrognosisService
from .time_estimator import TimeEstimator

__all__ = [
    "MetricsAggregator",
    "ScoringEngine",
    "TimeEstimator",
    "RecommendationGenerator",
    "PrognosisService",
]
