"""
Barbell <-> dumbbell weight conversion.

Dumbbells need roughly 20% less total load than the barbell version of a lift
because of the extra stabilization demand.
"""

from .rounding import round_to_nearest_5

DUMBBELL_LOAD_FACTOR = 0.80
BARBELL_LOAD_FACTOR = 1.20


def barbell_to_dumbbell(barbell_weight: float) -> float:
    """
    Barbell weight -> dumbbell weight per hand.

    145 lb barbell -> 145 * 0.80 = 116, / 2 = 58 -> 60 lb per hand.
    """
    return round_to_nearest_5(barbell_weight * DUMBBELL_LOAD_FACTOR / 2)


def barbell_to_both_hands(barbell_weight: float) -> float:
    """Barbell weight -> one dumbbell held in both hands (goblet style)."""
    return round_to_nearest_5(barbell_weight * DUMBBELL_LOAD_FACTOR)


def dumbbell_to_barbell(dumbbell_per_hand: float) -> float:
    """Dumbbell weight per hand -> barbell equivalent (60 -> 145)."""
    return round_to_nearest_5(dumbbell_per_hand * 2 * BARBELL_LOAD_FACTOR)
