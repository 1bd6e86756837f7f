"""Accessory double progression: reps first, then load."""

import logging

from .models import (
    AccessoryAction,
    AccessoryProgressionResult,
    AccessoryRepRange,
    AccessoryState,
    PhaseMode,
    TrainingPhase,
)
from .rounding import format_weight, round_to_nearest_5

logger = logging.getLogger(__name__)

HIGH_REP_EXERCISES = frozenset({"face_pulls", "lateral_raises", "calf_raises"})
LOW_REP_EXERCISES = frozenset({"ab_rollout", "back_extensions"})

HIGH_REP_RANGE = AccessoryRepRange(min_reps=15, max_reps=20, sets=3)
LOW_REP_RANGE = AccessoryRepRange(min_reps=10, max_reps=12, sets=3)
DEFAULT_REP_RANGE = AccessoryRepRange(min_reps=12, max_reps=15, sets=3)

ACCESSORY_INCREMENT = 5
STUCK_SESSION_LIMIT = 3
DELOAD_FACTOR = 0.9

PHASE_ACCESSORY_CAPS: dict[PhaseMode, int] = {
    PhaseMode.CUTTING: 2,
    PhaseMode.MAINTAINING: 3,
    PhaseMode.BULKING: 4,
}


def get_accessory_rep_range(exercise_id: str) -> AccessoryRepRange:
    """Rep range for an accessory; unknown ids get the 12-15 default."""
    if exercise_id in HIGH_REP_EXERCISES:
        return HIGH_REP_RANGE
    if exercise_id in LOW_REP_EXERCISES:
        return LOW_REP_RANGE
    return DEFAULT_REP_RANGE


def evaluate_accessory_progression(
    state: AccessoryState, target_range: AccessoryRepRange, stuck_session_count: int
) -> AccessoryProgressionResult:
    """
    Double progression for one accessory.

    Topping the range on every set adds 5 lbs, and that check wins over the
    stuck deload. After 3+ stuck sessions the weight drops to 90%.
    Otherwise the weight is held.
    """
    reps = state.last_session_reps
    all_at_top = all(r >= target_range.max_reps for r in reps)
    any_below_min = any(r < target_range.min_reps for r in reps)

    if all_at_top:
        return AccessoryProgressionResult(
            new_weight=state.weight + ACCESSORY_INCREMENT,
            action=AccessoryAction.INCREASE,
            message=f"All sets at {target_range.max_reps}+ reps — adding 5 lbs",
        )

    if stuck_session_count >= STUCK_SESSION_LIMIT:
        deload = round_to_nearest_5(state.weight * DELOAD_FACTOR)
        logger.debug(
            "Accessory %s stuck %d sessions, deload %s -> %s",
            state.exercise_id,
            stuck_session_count,
            state.weight,
            deload,
        )
        return AccessoryProgressionResult(
            new_weight=deload,
            action=AccessoryAction.DELOAD,
            message=f"Stuck 3+ sessions — dropping to {format_weight(deload)} lbs and rebuilding",
        )

    if any_below_min:
        message = "Some sets below minimum reps — keep same weight"
    else:
        message = "Working toward top of rep range — keep same weight"
    return AccessoryProgressionResult(
        new_weight=state.weight, action=AccessoryAction.MAINTAIN, message=message
    )


def get_phase_accessory_cap(phase: TrainingPhase) -> int:
    return PHASE_ACCESSORY_CAPS[phase.mode]
