"""
Pain-based workout modifications and red-flag gating.

Only entries reported as ``pain`` change the plan; ``soreness`` is expected
after training and never produces a modification.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta

from .config import SETTINGS
from .models import (
    BodyRegion,
    ModificationAction,
    ModificationSource,
    PainSorenessEntry,
    PlannedExercise,
    RedFlagDismissal,
    Sensation,
    Tier,
    WorkoutModification,
)
from .rounding import round_to_nearest_5

logger = logging.getLogger(__name__)

LOWER_BACK_SUBSTITUTIONS: dict[str, tuple[str, ...]] = {
    "squat": ("goblet_squat", "box_squat"),
    "deadlift": ("db_rdl",),
    "ohp": ("db_shoulder_press",),
}


def format_region(region: BodyRegion) -> str:
    """``lower_back`` -> ``Lower Back``."""
    return " ".join(word.capitalize() for word in region.value.split("_"))


def _modification_for(
    entry: PainSorenessEntry, planned: PlannedExercise
) -> WorkoutModification | None:
    label = f"{format_region(entry.region)} pain ({entry.severity}/5)"
    weight = planned.weight
    suggestions: tuple[str, ...] = ()
    rest_day = False

    if entry.severity == 2:
        action = ModificationAction.REDUCE_WEIGHT
        modified = round_to_nearest_5(weight * 0.9)
        reason = f"{label} — reduced load 10%"
    elif entry.severity == 3:
        action = ModificationAction.REDUCE_WEIGHT
        modified = round_to_nearest_5(weight * 0.8)
        reason = f"{label} — reduced load 20%"
        if entry.region == BodyRegion.LOWER_BACK:
            suggestions = LOWER_BACK_SUBSTITUTIONS.get(planned.exercise.id, ())
    elif entry.severity == 4:
        if planned.tier == Tier.T1:
            action = ModificationAction.SKIP
            modified = 0
            reason = f"{label} — skip recommended"
        else:
            action = ModificationAction.REDUCE_WEIGHT
            modified = round_to_nearest_5(weight * 0.5)
            reason = f"{label} — reduced load 50%"
    elif entry.severity == 5:
        action = ModificationAction.SKIP
        modified = 0
        reason = f"{label} — skip recommended, consider rest day"
        rest_day = True
    else:
        # Severity 1 is informational only
        return None

    return WorkoutModification(
        exercise_id=planned.exercise.id,
        original_weight=weight,
        modified_weight=modified,
        reason=reason,
        action=action,
        source=ModificationSource.PAIN,
        user_accepted=False,
        substitution_suggestions=suggestions,
        suggest_rest_day=rest_day,
    )


def generate_modifications(
    pain_entries: Iterable[PainSorenessEntry], planned: Sequence[PlannedExercise]
) -> list[WorkoutModification]:
    """
    Build one modification per (pain entry, affected exercise) pair.

    An exercise is affected when its pain-sensitive regions include the
    entry's region. Acceptance is left to the caller (``user_accepted=False``).
    """
    modifications: list[WorkoutModification] = []
    for entry in pain_entries:
        if entry.sensation != Sensation.PAIN:
            continue
        logger.debug("Evaluating pain entry %r", entry)
        for item in planned:
            if entry.region not in item.exercise.pain_sensitive_regions:
                continue
            mod = _modification_for(entry, item)
            if mod is not None:
                modifications.append(mod)
    logger.debug("Generated %d pain modifications", len(modifications))
    return modifications


def should_show_red_flag(
    severity: int,
    region: BodyRegion,
    dismissals: Iterable[RedFlagDismissal],
    now: datetime,
) -> bool:
    """
    Decide whether the safety dialog should be shown for a pain report.

    Severity 5 always shows. Severity 4 shows unless the same region was
    dismissed within the suppression window. Lower severities never show.
    """
    if severity >= 5:
        return True
    if severity < 4:
        return False
    window = timedelta(days=SETTINGS.RED_FLAG_SUPPRESS_DAYS)
    for dismissal in dismissals:
        if dismissal.region == region and now - dismissal.dismissed_at < window:
            logger.debug(
                "Red flag for %s suppressed by dismissal at %s",
                region.value,
                dismissal.dismissed_at,
            )
            return False
    return True
