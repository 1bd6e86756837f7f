"""
Per-lift recovery status, run interference and return-from-break advisories.

All functions take ``now`` explicitly; nothing here reads the clock.
"""

import logging
import math
from collections.abc import Iterable
from datetime import datetime

from .config import SETTINGS
from .models import (
    InactivityAlert,
    InactivityAlertLevel,
    InactivityPrescription,
    PhaseMode,
    RampUpSuggestion,
    RecoveryState,
    RecoveryStatus,
    RunLog,
    TrainingPhase,
)
from .rounding import format_weight, round_to_nearest_5

logger = logging.getLogger(__name__)

CUTTING_RECOVERY_BONUS_HOURS = 12
RUN_INTERFERENCE_HOURS = 24
RUN_INTERFERENCE_EFFORT = 3
RAMP_UP_FACTOR = 0.85

# Upper bounds (exclusive, in hours) before the cutting bonus is applied
_RECOVERY_BUCKETS: tuple[tuple[float, RecoveryStatus], ...] = (
    (48, RecoveryStatus.RECOVERING),
    (72, RecoveryStatus.READY),
    (120, RecoveryStatus.PRIMED),
    (168, RecoveryStatus.READY),
)

_RUN_DOWNGRADE = {
    RecoveryStatus.PRIMED: RecoveryStatus.READY,
    RecoveryStatus.READY: RecoveryStatus.RECOVERING,
}


def hours_between(earlier: datetime, later: datetime) -> float:
    return (later - earlier).total_seconds() / 3600


def get_most_recent(a: datetime | None, b: datetime | None) -> datetime | None:
    """The later of two optional dates, or None if both are missing."""
    if a is None:
        return b
    if b is None:
        return a
    return a if a >= b else b


def calculate_recovery_status(
    last_t1_date: datetime | None,
    last_t2_date: datetime | None,
    now: datetime,
    phase: TrainingPhase,
) -> RecoveryStatus:
    """
    Classify how recovered a lift is from the most recent of its T1/T2 sessions.

    <48h recovering, <72h ready, <120h primed, <168h ready (past peak),
    otherwise detraining. Cutting adds 12h to every boundary.
    """
    last_trained = get_most_recent(last_t1_date, last_t2_date)
    if last_trained is None:
        return RecoveryStatus.DETRAINING

    hours = hours_between(last_trained, now)
    bonus = CUTTING_RECOVERY_BONUS_HOURS if phase.mode == PhaseMode.CUTTING else 0
    for limit, status in _RECOVERY_BUCKETS:
        if hours < limit + bonus:
            return status
    return RecoveryStatus.DETRAINING


def get_recovery_state(
    exercise_id: str,
    last_t1_date: datetime | None,
    last_t2_date: datetime | None,
    now: datetime,
    phase: TrainingPhase,
) -> RecoveryState:
    def days_since(d: datetime | None) -> float:
        return math.inf if d is None else hours_between(d, now) / 24

    return RecoveryState(
        exercise_id=exercise_id,
        last_trained_as_t1=last_t1_date,
        last_trained_as_t2=last_t2_date,
        days_since_last_t1=days_since(last_t1_date),
        days_since_last_t2=days_since(last_t2_date),
        recovery_status=calculate_recovery_status(last_t1_date, last_t2_date, now, phase),
    )


def adjust_recovery_for_run(
    base_status: RecoveryStatus, recent_runs: Iterable[RunLog], now: datetime
) -> RecoveryStatus:
    """
    Downgrade primed -> ready and ready -> recovering after a run of effort 3+
    in the last 24h. Recovering and detraining are left as they are.
    """
    impactful = any(
        hours_between(run.date, now) <= RUN_INTERFERENCE_HOURS
        and run.perceived_effort >= RUN_INTERFERENCE_EFFORT
        for run in recent_runs
    )
    if not impactful:
        return base_status
    adjusted = _RUN_DOWNGRADE.get(base_status, base_status)
    if adjusted != base_status:
        logger.debug("Recent run downgrades %s -> %s", base_status.value, adjusted.value)
    return adjusted


def should_suggest_ramp_up(days_since_last_session: float) -> bool:
    return days_since_last_session >= SETTINGS.RAMP_UP_DAYS


def generate_ramp_up_suggestion(last_working_weight: float) -> RampUpSuggestion:
    """Restart at 85% of the last working weight after a long break."""
    weight = round_to_nearest_5(last_working_weight * RAMP_UP_FACTOR)
    return RampUpSuggestion(
        ramp_up_weight=weight,
        message=(
            "It's been a while since you trained this lift. "
            f"Start with {format_weight(weight)} lbs (85% of your last working weight) "
            "and work back up."
        ),
    )


def evaluate_inactivity(days_since_last_session: float) -> InactivityAlert | None:
    """Nudge the user back after a gap; 14+ days also prescribes the 85% ramp-up."""
    days = math.floor(days_since_last_session)
    if days_since_last_session >= SETTINGS.RAMP_UP_DAYS:
        return InactivityAlert(
            level=InactivityAlertLevel.DETRAINING,
            message=(
                f"{days} days since your last session. Strength starts to fade after two "
                "weeks off - restart at 85% and build back up."
            ),
            prescription=InactivityPrescription.RAMP_UP_85,
        )
    if days_since_last_session >= 10:
        return InactivityAlert(
            level=InactivityAlertLevel.URGENT,
            message=f"{days} days since your last session. Get a workout in this week.",
            prescription=InactivityPrescription.NORMAL_WORKOUT,
        )
    if days_since_last_session >= 7:
        return InactivityAlert(
            level=InactivityAlertLevel.GENTLE,
            message=f"{days} days since your last session. Your next workout is ready.",
            prescription=InactivityPrescription.NORMAL_WORKOUT,
        )
    return None
