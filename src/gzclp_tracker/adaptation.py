"""
Equipment adaptation: converts gym lifts to dumbbell equivalents for home
sessions and classifies whether the home equipment can handle the load.
"""

import logging

from .conversion import barbell_to_both_hands, barbell_to_dumbbell
from .exercises import dumbbell_alternative_for
from .models import (
    AdaptationStatus,
    ConfidenceLevel,
    EquipmentProfile,
    Exercise,
    ExerciseAdaptation,
    Grip,
)
from .rounding import format_weight

logger = logging.getLogger(__name__)

# Close biomechanical matches for their barbell counterparts
HIGH_CONFIDENCE_SUBSTITUTES = frozenset({"db_bench", "db_row", "db_shoulder_press"})
# Front-rack, balance or grip limited versions of the barbell lift
MEDIUM_CONFIDENCE_SUBSTITUTES = frozenset({"goblet_squat", "bulgarian_split_squat", "db_rdl"})

BORDERLINE_MARGIN = 10


def get_confidence_level(substitute_id: str, status: AdaptationStatus) -> ConfidenceLevel:
    """Confidence in a substitute; anything that exceeds the equipment is low."""
    if status == AdaptationStatus.EXCEEDS:
        return ConfidenceLevel.LOW
    if substitute_id in HIGH_CONFIDENCE_SUBSTITUTES:
        return ConfidenceLevel.HIGH
    if substitute_id in MEDIUM_CONFIDENCE_SUBSTITUTES:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.MEDIUM


def classify_load(dumbbell_weight: float, max_dumbbell_weight: float) -> AdaptationStatus:
    if dumbbell_weight <= max_dumbbell_weight:
        return AdaptationStatus.FITS
    if dumbbell_weight < max_dumbbell_weight + BORDERLINE_MARGIN:
        return AdaptationStatus.BORDERLINE
    return AdaptationStatus.EXCEEDS


def build_warning_message(
    exercise_name: str,
    prescribed_weight: float,
    substitute_name: str,
    dumbbell_weight: float,
    max_dumbbell_weight: float,
    status: AdaptationStatus,
    both_hands: bool,
) -> str | None:
    prescribed = format_weight(prescribed_weight)
    db = format_weight(dumbbell_weight)
    max_db = format_weight(max_dumbbell_weight)
    unit = "lbs" if both_hands else "lbs/hand"
    if status == AdaptationStatus.FITS:
        return f"{exercise_name} {prescribed} lbs → {substitute_name} {db} {unit} ✅"
    if status == AdaptationStatus.BORDERLINE:
        return (
            f"{exercise_name} at {prescribed} lbs → {substitute_name} {db} lb DBs "
            f"(your max is {max_db}). Close to limit."
        )
    if status == AdaptationStatus.EXCEEDS:
        return (
            f"⚠️ {exercise_name} at {prescribed} lbs → {substitute_name} needs "
            f"{db} lb DBs. Your max is {max_db} lbs."
        )
    return None


def adapt_exercise_for_home(
    exercise: Exercise,
    prescribed_weight: float,
    equipment: EquipmentProfile,
    substitute: Exercise | None,
) -> ExerciseAdaptation:
    """
    Adapt a single exercise for a home session.

    1. Exercises that do not need a gym are returned as-is (fits / high).
    2. Gym exercises without a known substitute keep the original exercise and
       weight (no_substitute / low).
    3. Otherwise the barbell weight is converted for the substitute and checked
       against the heaviest dumbbell available.

    Args:
        exercise: The programmed (gym) exercise
        prescribed_weight: Programmed barbell weight in lbs
        equipment: The user's home equipment profile
        substitute: Dumbbell alternative, or None when the exercise has none

    Returns:
        ExerciseAdaptation describing the adapted exercise and weight
    """
    if not exercise.requires_gym:
        return ExerciseAdaptation(
            original_exercise=exercise,
            original_weight=prescribed_weight,
            adapted_exercise=exercise,
            adapted_weight=prescribed_weight,
            status=AdaptationStatus.FITS,
            confidence=ConfidenceLevel.HIGH,
        )

    if substitute is None:
        logger.debug("No home substitute for %s", exercise.id)
        return ExerciseAdaptation(
            original_exercise=exercise,
            original_weight=prescribed_weight,
            adapted_exercise=exercise,
            adapted_weight=prescribed_weight,
            status=AdaptationStatus.NO_SUBSTITUTE,
            confidence=ConfidenceLevel.LOW,
        )

    both_hands = substitute.grip == Grip.BOTH_HANDS
    if both_hands:
        db_equiv = barbell_to_both_hands(prescribed_weight)
    else:
        db_equiv = barbell_to_dumbbell(prescribed_weight)

    status = classify_load(db_equiv, equipment.max_dumbbell_weight)
    confidence = get_confidence_level(substitute.id, status)
    logger.debug(
        "Adapted %s %s -> %s %s (%s, %s)",
        exercise.id,
        prescribed_weight,
        substitute.id,
        db_equiv,
        status.value,
        confidence.value,
    )

    return ExerciseAdaptation(
        original_exercise=exercise,
        original_weight=prescribed_weight,
        adapted_exercise=substitute,
        adapted_weight=db_equiv,
        status=status,
        confidence=confidence,
        warning_message=build_warning_message(
            exercise.name,
            prescribed_weight,
            substitute.name,
            db_equiv,
            equipment.max_dumbbell_weight,
            status,
            both_hands,
        ),
    )


def resolve_substitute(exercise: Exercise) -> Exercise | None:
    """The registry's dumbbell alternative for ``exercise``, if it has one."""
    return dumbbell_alternative_for(exercise)


def adapt_for_home(
    exercise: Exercise, prescribed_weight: float, equipment: EquipmentProfile
) -> ExerciseAdaptation:
    return adapt_exercise_for_home(
        exercise, prescribed_weight, equipment, resolve_substitute(exercise)
    )
