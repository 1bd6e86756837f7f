"""
GZCLP progression logic for training loads.

- T1: 5x3 -> 6x2 -> 10x1 -> reset at 85%
- T2: 3x10 -> 3x8 -> 3x6 -> reset at 85%
- T3: AMRAP driven, phase adjusted
- T2 auto-regulation: RPE driven load drops that freeze T2 progression

Every function returns a new state; inputs are never modified.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime

from .config import SETTINGS
from .e1rm import calculate_e1rm
from .models import (
    EquipmentProfile,
    LiftState,
    LiftType,
    Location,
    PhaseMode,
    ProgressionEffect,
    SetLog,
    SetStatus,
    T1Stage,
    T2AutoRegAction,
    T2AutoRegResult,
    T2Stage,
    T3ProgressionResult,
    Tier,
    TrainingPhase,
)
from .rounding import format_weight, round_to_nearest_5

logger = logging.getLogger(__name__)

# Accommodations for pain, run fatigue or equipment never count as a failure
FREEZE_STATUSES = frozenset(
    {SetStatus.SKIPPED_PAIN, SetStatus.REDUCED_RUN_FATIGUE, SetStatus.REDUCED_EQUIPMENT}
)

RESET_FACTOR = 0.85

T1_STAGE_CONFIG: dict[T1Stage, tuple[int, int]] = {
    T1Stage.FIVE_BY_THREE: (5, 3),
    T1Stage.SIX_BY_TWO: (6, 2),
    T1Stage.TEN_BY_ONE: (10, 1),
}
T1_NEXT_STAGE: dict[T1Stage, T1Stage | None] = {
    T1Stage.FIVE_BY_THREE: T1Stage.SIX_BY_TWO,
    T1Stage.SIX_BY_TWO: T1Stage.TEN_BY_ONE,
    T1Stage.TEN_BY_ONE: None,
}

T2_STAGE_CONFIG: dict[T2Stage, tuple[int, int]] = {
    T2Stage.THREE_BY_TEN: (3, 10),
    T2Stage.THREE_BY_EIGHT: (3, 8),
    T2Stage.THREE_BY_SIX: (3, 6),
}
T2_NEXT_STAGE: dict[T2Stage, T2Stage | None] = {
    T2Stage.THREE_BY_TEN: T2Stage.THREE_BY_EIGHT,
    T2Stage.THREE_BY_EIGHT: T2Stage.THREE_BY_SIX,
    T2Stage.THREE_BY_SIX: None,
}

T3_AMRAP_TARGET = 25
T3_TOTAL_TARGET = 50
T3_INCREMENT = 5

AUTOREG_THRESHOLDS: dict[PhaseMode, float] = {
    PhaseMode.CUTTING: 9.0,
    PhaseMode.MAINTAINING: 9.5,
    PhaseMode.BULKING: 10.0,
}


def t1_stage_scheme(stage: T1Stage) -> tuple[int, int]:
    """``(sets, reps)`` for a T1 stage; the last set is AMRAP."""
    return T1_STAGE_CONFIG[stage]


def t2_stage_scheme(stage: T2Stage) -> tuple[int, int]:
    return T2_STAGE_CONFIG[stage]


def get_increment(location: Location, equipment: EquipmentProfile, lift_type: LiftType) -> float:
    """
    Weight added after a passed session.

    Home sessions use the dumbbell increment, gym upper-body lifts the barbell
    increment and gym lower-body lifts twice the barbell increment.
    """
    if location == Location.HOME:
        return equipment.dumbbell_increment
    if lift_type == LiftType.UPPER:
        return equipment.barbell_increment
    return equipment.barbell_increment * 2


def has_freeze_status(sets: Iterable[SetLog]) -> bool:
    return any(s.status in FREEZE_STATUSES for s in sets)


def has_autoregulated_load_drop(sets: Iterable[SetLog]) -> bool:
    return any(s.status == SetStatus.AUTOREGULATED_LOAD_DROP for s in sets)


def is_pass(sets: Sequence[SetLog]) -> bool:
    """No failed set and every set reached its own target reps."""
    if any(s.status == SetStatus.FAILED for s in sets):
        return False
    return all(s.actual_reps >= s.target_reps for s in sets)


def evaluate_t1_progression(
    state: LiftState,
    sets: Sequence[SetLog],
    location: Location,
    equipment: EquipmentProfile,
    lift_type: LiftType,
) -> LiftState:
    """Apply one session's T1 sets to ``state``."""
    if has_freeze_status(sets):
        logger.debug("T1 %s frozen by accommodation status", state.exercise_id)
        return state

    if is_pass(sets):
        increment = get_increment(location, equipment, lift_type)
        logger.debug(
            "T1 %s passed at %s, +%s", state.exercise_id, state.t1_weight, increment
        )
        return state.model_copy(
            update={"t1_weight": state.t1_weight + increment, "t1_fail_count": 0}
        )

    next_stage = T1_NEXT_STAGE[state.t1_stage]
    if next_stage is None:
        reset_weight = round_to_nearest_5(state.t1_weight * RESET_FACTOR)
        logger.debug(
            "T1 %s reset %s -> %s", state.exercise_id, state.t1_weight, reset_weight
        )
        return state.model_copy(
            update={
                "t1_weight": reset_weight,
                "t1_stage": T1Stage.FIVE_BY_THREE,
                "t1_fail_count": 0,
                "t1_last_reset_weight": state.t1_weight,
            }
        )

    logger.debug(
        "T1 %s failed, stage %s -> %s",
        state.exercise_id,
        state.t1_stage.value,
        next_stage.value,
    )
    return state.model_copy(
        update={"t1_stage": next_stage, "t1_fail_count": state.t1_fail_count + 1}
    )


def evaluate_t2_progression(
    state: LiftState,
    sets: Sequence[SetLog],
    location: Location,
    equipment: EquipmentProfile,
    lift_type: LiftType,
) -> LiftState:
    """Apply one session's T2 sets to ``state``. An accepted auto-regulated drop also freezes."""
    if has_freeze_status(sets):
        logger.debug("T2 %s frozen by accommodation status", state.exercise_id)
        return state
    if has_autoregulated_load_drop(sets):
        logger.debug("T2 %s frozen by auto-regulated load drop", state.exercise_id)
        return state

    if is_pass(sets):
        increment = get_increment(location, equipment, lift_type)
        logger.debug(
            "T2 %s passed at %s, +%s", state.exercise_id, state.t2_weight, increment
        )
        return state.model_copy(
            update={"t2_weight": state.t2_weight + increment, "t2_fail_count": 0}
        )

    next_stage = T2_NEXT_STAGE[state.t2_stage]
    if next_stage is None:
        reset_weight = round_to_nearest_5(state.t2_weight * RESET_FACTOR)
        logger.debug(
            "T2 %s reset %s -> %s", state.exercise_id, state.t2_weight, reset_weight
        )
        return state.model_copy(
            update={
                "t2_weight": reset_weight,
                "t2_stage": T2Stage.THREE_BY_TEN,
                "t2_fail_count": 0,
                "t2_last_reset_weight": state.t2_weight,
            }
        )

    logger.debug(
        "T2 %s failed, stage %s -> %s",
        state.exercise_id,
        state.t2_stage.value,
        next_stage.value,
    )
    return state.model_copy(
        update={"t2_stage": next_stage, "t2_fail_count": state.t2_fail_count + 1}
    )


def _window(history: Sequence, value) -> tuple:
    return (tuple(history) + (value,))[-SETTINGS.TREND_WINDOW :]


def _amrap_set(sets: Sequence[SetLog]) -> SetLog | None:
    amraps = [s for s in sets if s.is_amrap]
    if amraps:
        return max(amraps, key=lambda s: s.set_number)
    return None


def _record_trends(state: LiftState, t1_sets: Sequence[SetLog], worked: Sequence[SetLog]) -> dict:
    update: dict = {}
    amrap = _amrap_set(t1_sets)
    if amrap is not None:
        update["recent_amrap_reps"] = _window(state.recent_amrap_reps, amrap.actual_reps)
        e1rm = calculate_e1rm(amrap.weight, amrap.actual_reps)
        if e1rm is not None:
            update["recent_e1rms"] = _window(state.recent_e1rms, e1rm)
    rpes = [s.rpe for s in worked if s.rpe is not None]
    if rpes:
        avg = round(sum(rpes) / len(rpes), 1)
        update["recent_avg_rpes"] = _window(state.recent_avg_rpes, avg)
    return update


def evaluate_session_progression(
    state: LiftState,
    sets: Sequence[SetLog],
    location: Location,
    equipment: EquipmentProfile,
    lift_type: LiftType,
    now: datetime,
) -> LiftState:
    """
    Evaluate every tier of one lift trained in a session.

    Sets for other exercises and warm-ups are ignored. T1 and T2 are judged
    independently; a tier that was not trained keeps its state and date.
    Trend windows are appended to and truncated to ``SETTINGS.TREND_WINDOW``;
    home sessions and sessions with a freeze status leave them untouched.
    """
    own = [s for s in sets if s.exercise_id == state.exercise_id and s.tier != Tier.WARMUP]
    t1_sets = [s for s in own if s.tier == Tier.T1]
    t2_sets = [s for s in own if s.tier == Tier.T2]
    if not t1_sets and not t2_sets:
        return state

    new_state = state
    if t1_sets:
        new_state = evaluate_t1_progression(new_state, t1_sets, location, equipment, lift_type)
    if t2_sets:
        new_state = evaluate_t2_progression(new_state, t2_sets, location, equipment, lift_type)

    if location == Location.HOME or has_freeze_status(own):
        # Dumbbell loads and accommodated sessions are not comparable to gym history
        logger.debug("Trends for %s not recorded for this session", state.exercise_id)
        update = {}
    else:
        update = _record_trends(new_state, t1_sets, t1_sets + t2_sets)
    if t1_sets:
        update["t1_last_workout_date"] = now
    if t2_sets:
        update["t2_last_workout_date"] = now
        if has_autoregulated_load_drop(t2_sets):
            update["t2_load_drop_count"] = new_state.t2_load_drop_count + 1
    return new_state.model_copy(update=update)


def evaluate_t3_progression(
    total_reps: int, amrap_last_set_reps: int, current_weight: float, phase: TrainingPhase
) -> T3ProgressionResult:
    """
    +5 lbs when the last AMRAP set reaches 25 reps. Outside a cut, 50 total
    reps across the sets also earns the increase.
    """
    amrap_trigger = amrap_last_set_reps >= T3_AMRAP_TARGET
    total_trigger = total_reps >= T3_TOTAL_TARGET
    if phase.mode == PhaseMode.CUTTING:
        increase = amrap_trigger
    else:
        increase = amrap_trigger or total_trigger
    if increase:
        return T3ProgressionResult(new_weight=current_weight + T3_INCREMENT, increased=True)
    return T3ProgressionResult(new_weight=current_weight, increased=False)


def evaluate_t2_autoregulation(
    set1_rpe: float | None, phase: TrainingPhase, prescribed_weight: float
) -> T2AutoRegResult:
    """Suggest a lighter load for T2 sets 2-3 when set 1 was too hard for the phase."""
    if set1_rpe is None:
        return T2AutoRegResult(action=T2AutoRegAction.CONTINUE)

    threshold = AUTOREG_THRESHOLDS[phase.mode]
    if set1_rpe < threshold:
        return T2AutoRegResult(action=T2AutoRegAction.CONTINUE)

    drop = 0.10 if set1_rpe >= 10 else 0.05
    reduced = round_to_nearest_5(prescribed_weight * (1 - drop))
    logger.debug(
        "T2 RPE %s >= %s (%s), suggesting %s", set1_rpe, threshold, phase.mode.value, reduced
    )
    return T2AutoRegResult(
        action=T2AutoRegAction.SUGGEST_DROP,
        reduced_weight=reduced,
        message=(
            f"Set 1 felt very hard (RPE {format_weight(set1_rpe)}). "
            f"Suggest dropping to {format_weight(reduced)} lbs for Sets 2-3."
        ),
        progression_effect=ProgressionEffect.FREEZE,
    )
