"""
Fatigue monitoring over the per-lift trend windows kept in ``LiftState``.

A lift shows a signal when the last three values of one of its windows move
the wrong way: e1RM or AMRAP reps falling, or average RPE rising. One lift
with signals is worth watching; two or more point to systemic fatigue and a
deload week.
"""

import logging
from collections.abc import Iterable, Sequence

from .e1rm import E1RMTrend, trend_direction
from .exercises import find_exercise
from .models import (
    DeloadWeek,
    FatigueAlert,
    FatigueAlertLevel,
    FatigueSignal,
    FatigueSignalType,
    LiftState,
)

logger = logging.getLogger(__name__)

SYSTEMIC_LIFT_COUNT = 2

DELOAD_WEEK = DeloadWeek(
    duration="1 week",
    t1="Keep current weight, 3 sets of 3, no AMRAP",
    t2="70% of current weight, 3 sets of 8",
    t3="2 sets, stop 3 reps short of failure",
    accessories="1 per session",
    rpe_target="6-7",
    return_plan="Resume pre-deload weights and stages the following week",
)


def trailing_run(values: Sequence[float], direction: E1RMTrend) -> int:
    """Number of consecutive steps at the end of ``values`` moving in ``direction``."""
    steps = 0
    for i in range(len(values) - 1, 0, -1):
        prev, cur = values[i - 1], values[i]
        if direction == E1RMTrend.DECREASING and cur < prev:
            steps += 1
        elif direction == E1RMTrend.INCREASING and cur > prev:
            steps += 1
        else:
            break
    return steps


def detect_fatigue_signals(state: LiftState) -> list[FatigueSignal]:
    checks = (
        (FatigueSignalType.E1RM_DECLINE, state.recent_e1rms, E1RMTrend.DECREASING),
        (FatigueSignalType.RPE_INCREASE, state.recent_avg_rpes, E1RMTrend.INCREASING),
        (FatigueSignalType.AMRAP_DECLINE, state.recent_amrap_reps, E1RMTrend.DECREASING),
    )
    signals = []
    for signal_type, values, bad_direction in checks:
        if trend_direction(values) != bad_direction:
            continue
        signals.append(
            FatigueSignal(
                type=signal_type,
                lift=state.exercise_id,
                consecutive_sessions=trailing_run(values, bad_direction),
            )
        )
    return signals


def _lift_name(exercise_id: str) -> str:
    exercise = find_exercise(exercise_id)
    return exercise.name if exercise is not None else exercise_id


def evaluate_fatigue(states: Iterable[LiftState]) -> FatigueAlert | None:
    """Combine signals across lifts into a single alert, or None when all is well."""
    signals: list[FatigueSignal] = []
    lifts: list[str] = []
    for state in states:
        found = detect_fatigue_signals(state)
        if found:
            signals.extend(found)
            lifts.append(state.exercise_id)

    if not signals:
        return None

    logger.debug("Fatigue signals on %s: %s", lifts, [s.type.value for s in signals])
    if len(lifts) >= SYSTEMIC_LIFT_COUNT:
        names = ", ".join(_lift_name(lift) for lift in lifts)
        return FatigueAlert(
            level=FatigueAlertLevel.SYSTEMIC,
            signals=tuple(signals),
            message=(
                f"Fatigue is showing on {len(lifts)} lifts ({names}). "
                "Take a deload week before pushing on."
            ),
            prescription=DELOAD_WEEK,
        )

    kinds = ", ".join(s.type.value.replace("_", " ") for s in signals)
    return FatigueAlert(
        level=FatigueAlertLevel.WATCH,
        signals=tuple(signals),
        message=(
            f"{_lift_name(lifts[0])} is trending down ({kinds}). "
            "Keep an eye on the next session."
        ),
    )
