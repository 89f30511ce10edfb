"""Centralized constants for the Guru scoring engine.

All magic numbers live here so every layer imports from a single source
of truth.
"""

# ---------- Questions ----------
BASE_QUESTION_GOAL = 5000

# ---------- Flashcards ----------
# Points per card status, averaged over every card the learner has touched.
FLASHCARD_STATUS_WEIGHTS = {
    "dominado": 100,
    "revisando": 70,
    "aprendendo": 40,
    "nao_iniciado": 0,
}

# ---------- Consistency ----------
CONSISTENCY_WINDOW_DAYS = 30

# ---------- Scoring ----------
WEIGHT_QUESTIONS = 0.40
WEIGHT_FLASHCARDS = 0.25
WEIGHT_READING = 0.20
WEIGHT_CONSISTENCY = 0.15

MAX_SCORE = 100.0

# ---------- Time Estimate ----------
# (minimum overall score, base weeks), checked top to bottom.
SCORE_BRACKET_WEEKS = [
    (80, 4),
    (60, 12),
    (40, 24),
    (20, 48),
]
FALLBACK_WEEKS = 72

DIFFICULTY_FACTORS = {
    "facil": 0.8,
    "medio": 1.0,
    "dificil": 1.3,
}
DEFAULT_DIFFICULTY_FACTOR = 1.0

CONSISTENCY_THRESHOLD = 50
CONSISTENT_FACTOR = 0.9
INCONSISTENT_FACTOR = 1.2

WEEKS_PER_MONTH = 4
WEEKS_PER_YEAR = 52

# ---------- Recommendations ----------
MAX_RECOMMENDATIONS = 5

# ---------- Analysis ----------
STRENGTH_THRESHOLD = 70
WEAKNESS_THRESHOLD = 50

# ---------- Cache ----------
SNAPSHOT_TTL_MINUTES = 30
