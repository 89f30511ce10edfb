"""Strength and weakness labels for the detailed analysis."""

from guru.domain.constants import STRENGTH_THRESHOLD, WEAKNESS_THRESHOLD
from guru.domain.prognosis.models import MetricsSnapshot


def strengths(metrics: MetricsSnapshot) -> list[str]:
    points: list[str] = []
    if metrics.questions_ratio >= STRENGTH_THRESHOLD:
        points.append("Excelente progresso em resolução de questões")
    if metrics.flashcard_proficiency >= STRENGTH_THRESHOLD:
        points.append("Boa proficiência em memorização")
    if metrics.reading_progress >= STRENGTH_THRESHOLD:
        points.append("Bom progresso no estudo teórico")
    if metrics.study_consistency >= STRENGTH_THRESHOLD:
        points.append("Excelente consistência nos estudos")

    if not points:
        points.append("Continue se esforçando, você está no caminho certo!")
    return points


def weaknesses(metrics: MetricsSnapshot) -> list[str]:
    points: list[str] = []
    if metrics.questions_ratio < WEAKNESS_THRESHOLD:
        points.append("Precisa resolver mais questões")
    if metrics.flashcard_proficiency < WEAKNESS_THRESHOLD:
        points.append("Precisa melhorar a memorização")
    if metrics.reading_progress < WEAKNESS_THRESHOLD:
        points.append("Precisa dedicar mais tempo ao estudo teórico")
    if metrics.study_consistency < WEAKNESS_THRESHOLD:
        points.append("Precisa ser mais consistente nos estudos")
    return points
