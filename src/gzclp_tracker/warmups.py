"""Warm-up ramp from an empty bar or light dumbbells up to the working weight."""

from .models import EquipmentProfile, Location, WarmUpSet
from .rounding import round_to_nearest_5

LIGHT_BARBELL_THRESHOLD = 95
MIN_DUMBBELL_WEIGHT = 5


def _percent_of(working_weight: float, fraction: float) -> float:
    return min(round_to_nearest_5(working_weight * fraction), working_weight)


def generate_warm_up_sets(
    working_weight: float, location: Location, equipment: EquipmentProfile
) -> list[WarmUpSet]:
    """
    Build the warm-up sets for one lift, lightest first.

    At home ``working_weight`` is the dumbbell weight per hand. No warm-up set
    is ever heavier than the working weight.
    """
    if location == Location.HOME:
        return [
            WarmUpSet(
                weight=max(round_to_nearest_5(working_weight * 0.4), MIN_DUMBBELL_WEIGHT),
                reps=10,
                label="Light",
            ),
            WarmUpSet(weight=_percent_of(working_weight, 0.7), reps=5, label="~70%"),
        ]

    # An empty bar heavier than the working weight is capped like every other set
    bar = min(equipment.bar_weight, working_weight)
    if working_weight <= LIGHT_BARBELL_THRESHOLD:
        return [
            WarmUpSet(weight=bar, reps=10, label="Empty bar"),
            WarmUpSet(weight=_percent_of(working_weight, 0.7), reps=5, label="~70%"),
        ]

    return [
        WarmUpSet(weight=bar, reps=10, label="Empty bar"),
        WarmUpSet(weight=_percent_of(working_weight, 0.5), reps=5, label="~50%"),
        WarmUpSet(weight=_percent_of(working_weight, 0.7), reps=3, label="~70%"),
        WarmUpSet(weight=_percent_of(working_weight, 0.85), reps=1, label="~85%"),
    ]
