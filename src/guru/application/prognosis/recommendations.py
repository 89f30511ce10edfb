"""
Recommendation generator.

Rule blocks run in a fixed order (questions, flashcards, reading,
consistency, overall) and the concatenation is cut at MAX_RECOMMENDATIONS.
Earlier blocks can therefore crowd out the overall-score block.
"""

from guru.domain.constants import MAX_RECOMMENDATIONS
from guru.domain.prognosis.models import MetricsSnapshot


class RecommendationGenerator:
    def __init__(self, limit: int = MAX_RECOMMENDATIONS):
        self.limit = limit

    def generate(self, metrics: MetricsSnapshot) -> list[str]:
        lines: list[str] = []
        lines += self._questions(metrics.questions_ratio)
        lines += self._flashcards(metrics.flashcard_proficiency)
        lines += self._reading(metrics.reading_progress)
        lines += self._consistency(metrics.study_consistency)
        lines += self._overall(metrics.overall_score)
        return lines[: self.limit]

    def _questions(self, ratio: float) -> list[str]:
        if ratio < 30:
            return [
                "Foque em resolver mais questões. Você está abaixo da meta necessária.",
                "Dedique pelo menos 2 horas diárias para resolução de questões.",
            ]
        if ratio < 60:
            return ["Continue resolvendo questões regularmente. Você está no caminho certo!"]
        return ["Excelente progresso em questões! Mantenha o ritmo."]

    def _flashcards(self, proficiency: float) -> list[str]:
        if proficiency < 40:
            return [
                "Dedique mais tempo aos flashcards para melhorar a memorização.",
                "Revise os flashcards diariamente, mesmo que por poucos minutos.",
            ]
        if proficiency < 70:
            return ["Bom progresso nos flashcards. Continue revisando regularmente."]
        return []

    def _reading(self, progress: float) -> list[str]:
        if progress < 50:
            return [
                "Aumente o tempo dedicado ao estudo teórico das apostilas.",
                "Estabeleça metas diárias de leitura para acelerar o progresso.",
            ]
        return []

    def _consistency(self, consistency: float) -> list[str]:
        if consistency < 50:
            return [
                "Melhore a consistência dos estudos. Estude um pouco todos os dias.",
                "Crie uma rotina de estudos e siga-a rigorosamente.",
            ]
        if consistency < 80:
            return ["Boa consistência! Tente manter a regularidade nos estudos."]
        return []

    def _overall(self, score: float) -> list[str]:
        if score < 40:
            return [
                "Você está no início da jornada. Foque em criar uma rotina sólida de estudos.",
                "Considere revisar seu plano de estudos para otimizar o tempo.",
            ]
        if score < 70:
            return [
                "Progresso satisfatório! Continue focado e disciplinado.",
                "Identifique suas matérias mais fracas e dedique mais tempo a elas.",
            ]
        return [
            "Excelente progresso! Você está muito próximo da aprovação.",
            "Mantenha o foco e a disciplina até o dia da prova.",
        ]
