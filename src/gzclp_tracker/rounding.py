"""Rounding and unit helpers shared by every engine module."""

import math

LBS_PER_KG = 2.20462


def _tidy(value: float) -> float:
    """Return an ``int`` for whole numbers so weights print as ``145`` not ``145.0``."""
    if value == 0:
        return 0
    if float(value).is_integer():
        return int(value)
    return value


def round_to_increment(value: float, increment: float) -> float:
    """
    Round ``value`` to the nearest multiple of ``increment``.

    Halves round away from zero (22.5 -> 25, -2.5 -> -5), unlike the built-in
    ``round`` which rounds halves to even.
    """
    if increment <= 0:
        raise ValueError("increment must be positive")
    steps = math.floor(abs(value) / increment + 0.5)
    return _tidy(math.copysign(steps * increment, value))


def round_to_nearest_5(value: float) -> float:
    return round_to_increment(value, 5)


def lbs_to_kg(lbs: float) -> float:
    return round(lbs / LBS_PER_KG, 1)


def kg_to_lbs(kg: float) -> float:
    return round(kg * LBS_PER_KG, 1)


def format_weight(weight: float) -> str:
    """Render a weight without a trailing ``.0`` (``145``, ``137.5``)."""
    return f"{_tidy(weight)}"
