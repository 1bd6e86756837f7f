"""
Live workout cursor.

``WorkoutCursor`` tracks which exercise and set the lifter is on, the rest
countdown between sets and the ``SetLog`` records written so far. The host
owns the instance and drives it: it passes ``now`` into ``start`` and calls
``tick`` from whatever timer it runs.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from .errors import SessionStateError
from .models import Location, PhaseMode, SetLog, SetStatus, Tier, TrainingPhase
from .templates import WORKOUT_TEMPLATES

logger = logging.getLogger(__name__)

_REST_SECONDS = {
    Tier.T1: 180,
    Tier.T2: 120,
}
_CUTTING_REST_SECONDS = {
    Tier.T1: 210,
    Tier.T2: 150,
}
DEFAULT_REST_SECONDS = 60


def default_rest_seconds(tier: Tier, phase: TrainingPhase) -> int:
    """Rest between sets; heavy tiers rest longer, and longer still on a cut."""
    table = _CUTTING_REST_SECONDS if phase.mode == PhaseMode.CUTTING else _REST_SECONDS
    return table.get(tier, DEFAULT_REST_SECONDS)


@dataclass
class ExerciseSlot:
    """One exercise of the session as the cursor sees it."""

    exercise_id: str
    tier: Tier
    target_sets: int
    target_reps: int
    weight: float
    is_amrap: bool = False
    substitute_exercise_id: str | None = None
    original_weight: float | None = None
    completed_sets: int = 0
    load_dropped: bool = False
    # (weight, original_weight) as they were before the first accepted load drop
    pre_drop: tuple[float, float | None] | None = field(default=None, repr=False)

    @property
    def done(self) -> bool:
        return self.completed_sets >= self.target_sets

    def drop_load(self, reduced_weight: float) -> None:
        if self.pre_drop is None:
            self.pre_drop = (self.weight, self.original_weight)
        if self.original_weight is None:
            self.original_weight = self.weight
        self.weight = reduced_weight
        self.load_dropped = True

    def reset(self) -> None:
        """Back to the prescribed load with no sets done."""
        if self.pre_drop is not None:
            self.weight, self.original_weight = self.pre_drop
            self.pre_drop = None
        self.load_dropped = False
        self.completed_sets = 0


def slots_for_template(template_id: str, weights: dict[str, float]) -> list[ExerciseSlot]:
    """
    Build the cursor slots for a template; ``weights`` maps exercise id to load.

    Raises:
        KeyError: for an unknown template id or a missing weight
    """
    template = WORKOUT_TEMPLATES[template_id]
    return [
        ExerciseSlot(
            exercise_id=item.exercise_id,
            tier=item.tier,
            target_sets=item.sets,
            target_reps=item.reps,
            weight=weights[item.exercise_id],
            is_amrap=item.is_amrap,
        )
        for item in template.exercises
    ]


class WorkoutCursor:
    def __init__(
        self,
        exercises: Sequence[ExerciseSlot],
        phase: TrainingPhase,
        location: Location = Location.GYM,
        template_id: str = "",
    ):
        self.exercises = list(exercises)
        self.phase = phase
        self.location = location
        self.template_id = template_id
        self.exercise_index = 0
        self.started_at: datetime | None = None
        self.completed: list[SetLog] = []
        self.rest_active = False
        self.rest_remaining = 0
        self.rest_duration = 0

    # -- position -----------------------------------------------------------

    @property
    def started(self) -> bool:
        return self.started_at is not None

    @property
    def finished(self) -> bool:
        return self.exercise_index >= len(self.exercises)

    @property
    def current(self) -> ExerciseSlot | None:
        if self.finished:
            return None
        return self.exercises[self.exercise_index]

    @property
    def current_set_number(self) -> int:
        """1-based number of the next set to log."""
        slot = self.current
        return 0 if slot is None else slot.completed_sets + 1

    @property
    def is_last_set(self) -> bool:
        slot = self.current
        return slot is not None and slot.completed_sets + 1 >= slot.target_sets

    def _require_current(self) -> ExerciseSlot:
        if not self.started:
            raise SessionStateError("Workout has not been started")
        slot = self.current
        if slot is None:
            raise SessionStateError("No exercises left in this workout")
        return slot

    def start(self, now: datetime) -> None:
        self.started_at = now
        self.exercise_index = 0
        self.completed = []
        for slot in self.exercises:
            slot.reset()
        self.skip_rest()
        logger.debug("Workout %s started with %d exercises", self.template_id, len(self.exercises))

    def elapsed_seconds(self, now: datetime) -> float:
        if self.started_at is None:
            return 0
        return (now - self.started_at).total_seconds()

    # -- sets ----------------------------------------------------------------

    def log_set(
        self,
        actual_reps: int,
        rpe: float | None = None,
        status: SetStatus | None = None,
        completed_at: datetime | None = None,
    ) -> SetLog:
        """
        Record the current set. Sets logged after an accepted load drop are
        tagged ``autoregulated_load_drop`` unless an explicit status is given.
        Only the last set of an AMRAP exercise is flagged AMRAP.
        """
        slot = self._require_current()
        if status is None:
            if slot.load_dropped:
                status = SetStatus.AUTOREGULATED_LOAD_DROP
            else:
                status = SetStatus.COMPLETED
        record = SetLog(
            exercise_id=slot.exercise_id,
            tier=slot.tier,
            set_number=slot.completed_sets + 1,
            target_reps=slot.target_reps,
            actual_reps=actual_reps,
            weight=slot.weight,
            is_amrap=slot.is_amrap and self.is_last_set,
            status=status,
            rpe=rpe,
            is_substituted=slot.substitute_exercise_id is not None,
            substitute_exercise_id=slot.substitute_exercise_id,
            original_weight=slot.original_weight,
            location=self.location,
            completed_at=completed_at,
        )
        slot.completed_sets += 1
        self.completed.append(record)
        return record

    def skip_set(self) -> None:
        """Count the current set as done without a log entry."""
        slot = self._require_current()
        slot.completed_sets += 1

    def advance_set(self) -> None:
        """Move on to the next exercise once all sets of the current one are done."""
        slot = self._require_current()
        if slot.done:
            self.next_exercise()

    def next_exercise(self) -> None:
        if self.finished:
            raise SessionStateError("No exercises left in this workout")
        self.exercise_index += 1

    # -- rest timer ----------------------------------------------------------

    def start_rest(self, seconds: int | None = None) -> None:
        if seconds is None:
            slot = self.current
            tier = slot.tier if slot is not None else Tier.ACCESSORY
            seconds = default_rest_seconds(tier, self.phase)
        self.rest_active = True
        self.rest_remaining = seconds
        self.rest_duration = seconds

    def tick(self, seconds: int = 1) -> None:
        """Count the rest down. It keeps going below zero to show overtime."""
        if self.rest_active:
            self.rest_remaining -= seconds

    @property
    def rest_overtime(self) -> bool:
        return self.rest_active and self.rest_remaining <= 0

    def skip_rest(self) -> None:
        self.rest_active = False
        self.rest_remaining = 0
        self.rest_duration = 0

    def add_rest_time(self, seconds: int) -> None:
        self.rest_remaining += seconds
        self.rest_duration += seconds

    # -- loads ---------------------------------------------------------------

    def update_weight(self, exercise_index: int, weight: float) -> None:
        self.exercises[exercise_index].weight = weight

    def apply_load_drop(self, exercise_index: int, reduced_weight: float) -> None:
        """Accept an auto-regulation suggestion for the rest of that exercise."""
        slot = self.exercises[exercise_index]
        slot.drop_load(reduced_weight)
        logger.debug(
            "Load drop accepted for %s: %s -> %s",
            slot.exercise_id,
            slot.original_weight,
            reduced_weight,
        )

    def sets_for(self, exercise_id: str) -> list[SetLog]:
        return [s for s in self.completed if s.exercise_id == exercise_id]
