"""
Estimated one-rep max (e1RM) helpers.

Uses the Epley formula: e1RM = weight * (1 + reps / 30).
"""

from collections.abc import Sequence
from enum import Enum

from .rounding import round_to_increment


class E1RMTrend(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"
    INSUFFICIENT_DATA = "insufficient_data"


def calculate_e1rm(weight: float, reps: int) -> int | None:
    """
    Estimate a one-rep max from a submaximal set.

    Returns the estimate rounded to the nearest whole number, or ``None`` when
    fewer than 2 reps were completed (a single is already a max, not an estimate).
    """
    if reps < 2:
        return None
    return int(round_to_increment(weight * (1 + reps / 30), 1))


def is_new_pr(current_e1rm: float, previous_e1rms: Sequence[float]) -> bool:
    if not previous_e1rms:
        return True
    return current_e1rm > max(previous_e1rms)


def trend_direction(values: Sequence[float]) -> E1RMTrend:
    """Classify the last three values of a chronological series."""
    if len(values) < 3:
        return E1RMTrend.INSUFFICIENT_DATA
    a, b, c = values[-3:]
    if b > a and c > b:
        return E1RMTrend.INCREASING
    if b < a and c < b:
        return E1RMTrend.DECREASING
    return E1RMTrend.STABLE


def e1rm_trend(recent_e1rms: Sequence[float]) -> E1RMTrend:
    return trend_direction(recent_e1rms)
