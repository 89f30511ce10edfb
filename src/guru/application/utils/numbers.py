"""Numeric helpers shared by the scoring components."""

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round with ties away from zero for positives (2.5 -> 3, 0.125 -> 0.13).

    The builtin round() uses banker's rounding, which would shift bracket
    boundaries such as 10 weeks / 4 = 2.5 months.
    """
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def round2(value: float) -> float:
    return round_half_up(value, 2)


def clamp_score(value: float, ceiling: float = 100.0) -> float:
    """Clamp a percentage into [0, ceiling]."""
    return max(0.0, min(value, ceiling))
