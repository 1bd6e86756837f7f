"""Pre-workout advisory for lower-body sessions shortly after a run."""

import logging
from collections.abc import Iterable
from datetime import datetime

from .models import (
    PhaseMode,
    RunAdvisory,
    RunAdvisoryLevel,
    RunCategory,
    RunLog,
    RunSuggestedAction,
    TrainingPhase,
)
from .recovery import hours_between
from .templates import workout_has_lower_body

__all__ = ["evaluate_run_impact", "effort_threshold", "workout_has_lower_body"]

logger = logging.getLogger(__name__)

LOOKBACK_HOURS = 24
STRONG_REST_HOURS = 12
STRONG_REST_EFFORT = 4
LONG_RUN_MINUTES = 45

# Hard sessions interfere more, so they trip the advisory at a lower effort
_EFFORT_THRESHOLDS = {
    RunCategory.INTERVALS: 2,
    RunCategory.TEMPO: 2,
    RunCategory.EASY: 4,
}
DEFAULT_EFFORT_THRESHOLD = 3


def effort_threshold(category: RunCategory) -> int:
    return _EFFORT_THRESHOLDS.get(category, DEFAULT_EFFORT_THRESHOLD)


def evaluate_run_impact(
    recent_runs: Iterable[RunLog],
    next_workout_has_lower_body: bool,
    now: datetime,
    phase: TrainingPhase,
) -> RunAdvisory:
    """
    Judge the most recent run of the last 24h against the upcoming session.

    Upper-body sessions never get an advisory.
    """
    if not next_workout_has_lower_body:
        return RunAdvisory(level=RunAdvisoryLevel.NONE)

    within = [r for r in recent_runs if hours_between(r.date, now) <= LOOKBACK_HOURS]
    if not within:
        return RunAdvisory(level=RunAdvisoryLevel.NONE)

    run = max(within, key=lambda r: r.date)
    hours = hours_between(run.date, now)
    hours_label = round(hours)

    if hours <= STRONG_REST_HOURS and (
        run.perceived_effort >= STRONG_REST_EFFORT or run.duration_minutes >= LONG_RUN_MINUTES
    ):
        message = (
            f"High-effort run {hours_label}h ago. Lower body recovery is likely insufficient."
        )
        if (
            phase.mode == PhaseMode.CUTTING
            and run.category == RunCategory.LONG
            and run.duration_minutes >= LONG_RUN_MINUTES
        ):
            message += " Consider extra carbs before your session (glycogen depletion on a cut)."
        logger.debug("Run %.1fh ago -> strong rest advisory", hours)
        return RunAdvisory(
            level=RunAdvisoryLevel.STRONG_REST,
            message=message,
            suggested_action=RunSuggestedAction.REST,
        )

    if run.perceived_effort >= effort_threshold(run.category):
        logger.debug("Run %.1fh ago -> advisory", hours)
        return RunAdvisory(
            level=RunAdvisoryLevel.ADVISORY,
            message=(
                f"{run.category.value} run {hours_label}h ago (effort {run.perceived_effort}/5). "
                "Options: proceed, add extra warm-ups, or reduce T1 by 10%."
            ),
            suggested_action=RunSuggestedAction.EXTRA_WARMUPS,
        )

    return RunAdvisory(level=RunAdvisoryLevel.NONE)
