"""
Pydantic models shared by the progression and adaptation engine.

Value types are frozen: engine functions never mutate their inputs and always
hand back new instances (``model_copy(update=...)``). Enumerations are
``str`` enums so they serialize as their wire values.
"""

from __future__ import annotations

import enum
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class BodyRegion(str, enum.Enum):
    LOWER_BACK = "lower_back"
    UPPER_BACK = "upper_back"
    LEFT_SHOULDER = "left_shoulder"
    RIGHT_SHOULDER = "right_shoulder"
    LEFT_KNEE = "left_knee"
    RIGHT_KNEE = "right_knee"
    LEFT_HIP = "left_hip"
    RIGHT_HIP = "right_hip"
    LEFT_ELBOW = "left_elbow"
    RIGHT_ELBOW = "right_elbow"
    LEFT_WRIST = "left_wrist"
    RIGHT_WRIST = "right_wrist"
    NECK = "neck"
    LEFT_QUAD = "left_quad"
    RIGHT_QUAD = "right_quad"
    LEFT_HAMSTRING = "left_hamstring"
    RIGHT_HAMSTRING = "right_hamstring"
    CHEST = "chest"
    CORE = "core"


class ExerciseType(str, enum.Enum):
    BARBELL = "barbell"
    DUMBBELL = "dumbbell"
    CABLE = "cable"
    BODYWEIGHT = "bodyweight"


class MuscleGroup(str, enum.Enum):
    PUSH = "push"
    PULL = "pull"
    LEGS = "legs"
    CORE = "core"
    FULL_BODY = "full_body"


class Grip(str, enum.Enum):
    """How a dumbbell substitute is held: one bell per hand or one bell in both hands."""

    PER_HAND = "per_hand"
    BOTH_HANDS = "both_hands"


class T1Stage(str, enum.Enum):
    FIVE_BY_THREE = "5x3"
    SIX_BY_TWO = "6x2"
    TEN_BY_ONE = "10x1"


class T2Stage(str, enum.Enum):
    THREE_BY_TEN = "3x10"
    THREE_BY_EIGHT = "3x8"
    THREE_BY_SIX = "3x6"


class Tier(str, enum.Enum):
    T1 = "T1"
    T2 = "T2"
    T3 = "T3"
    ACCESSORY = "accessory"
    WARMUP = "warmup"


class SetStatus(str, enum.Enum):
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED_PAIN = "skipped_pain"
    REDUCED_RUN_FATIGUE = "reduced_run_fatigue"
    REDUCED_EQUIPMENT = "reduced_equipment"
    AUTOREGULATED_LOAD_DROP = "autoregulated_load_drop"


class Location(str, enum.Enum):
    GYM = "gym"
    HOME = "home"


class LiftType(str, enum.Enum):
    UPPER = "upper"
    LOWER = "lower"


class PhaseMode(str, enum.Enum):
    CUTTING = "cutting"
    MAINTAINING = "maintaining"
    BULKING = "bulking"


class Sensation(str, enum.Enum):
    SORENESS = "soreness"
    PAIN = "pain"


class RunType(str, enum.Enum):
    OUTDOOR = "outdoor"
    TREADMILL = "treadmill"
    TRAIL = "trail"


class RunCategory(str, enum.Enum):
    EASY = "easy"
    TEMPO = "tempo"
    INTERVALS = "intervals"
    LONG = "long"
    OTHER = "other"


class ModificationAction(str, enum.Enum):
    REDUCE_WEIGHT = "reduce_weight"
    SUBSTITUTE = "substitute"
    SKIP = "skip"


class ModificationSource(str, enum.Enum):
    PAIN = "pain"
    RUN_FATIGUE = "run_fatigue"
    EQUIPMENT_LIMIT = "equipment_limit"


class AdaptationStatus(str, enum.Enum):
    FITS = "fits"
    BORDERLINE = "borderline"
    EXCEEDS = "exceeds"
    NO_SUBSTITUTE = "no_substitute"


class ConfidenceLevel(str, enum.Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RecoveryStatus(str, enum.Enum):
    RECOVERING = "recovering"
    READY = "ready"
    PRIMED = "primed"
    DETRAINING = "detraining"


class T2AutoRegAction(str, enum.Enum):
    CONTINUE = "continue"
    SUGGEST_DROP = "suggest_drop"


class ProgressionEffect(str, enum.Enum):
    FREEZE = "freeze"
    NORMAL = "normal"


class AccessoryAction(str, enum.Enum):
    INCREASE = "increase"
    MAINTAIN = "maintain"
    DELOAD = "deload"


class VolumeRatioStatus(str, enum.Enum):
    OK = "ok"
    WARNING = "warning"


class RunAdvisoryLevel(str, enum.Enum):
    NONE = "none"
    ADVISORY = "advisory"
    STRONG_REST = "strong_rest"


class RunSuggestedAction(str, enum.Enum):
    PROCEED = "proceed"
    EXTRA_WARMUPS = "extra_warmups"
    REDUCE_10 = "reduce_10"
    REST = "rest"


class FatigueSignalType(str, enum.Enum):
    E1RM_DECLINE = "e1rm_decline"
    RPE_INCREASE = "rpe_increase"
    AMRAP_DECLINE = "amrap_decline"


class FatigueAlertLevel(str, enum.Enum):
    WATCH = "watch"
    SYSTEMIC = "systemic"


class InactivityAlertLevel(str, enum.Enum):
    GENTLE = "gentle"
    URGENT = "urgent"
    DETRAINING = "detraining"


class InactivityPrescription(str, enum.Enum):
    NORMAL_WORKOUT = "normal_workout"
    RAMP_UP_85 = "ramp_up_85"


# ---------------------------------------------------------------------------
# Inputs and state
# ---------------------------------------------------------------------------


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Exercise(_Frozen):
    """Static registry entry for a trainable movement."""

    id: str
    name: str
    type: ExerciseType
    muscle_group: MuscleGroup
    requires_gym: bool
    dumbbell_alternative: str | None = None
    barbell_equivalent: str | None = None
    grip: Grip = Grip.PER_HAND
    primary_muscles: tuple[BodyRegion, ...] = ()
    secondary_muscles: tuple[BodyRegion, ...] = ()
    pain_sensitive_regions: tuple[BodyRegion, ...] = ()


class EquipmentProfile(_Frozen):
    max_dumbbell_weight: float = 80
    dumbbell_increment: float = 5
    barbell_increment: float = 5
    bar_weight: float = 45
    available_plates: tuple[float, ...] = (45, 35, 25, 10, 5, 2.5)
    has_bench: bool = True
    has_resistance_bands: bool = False
    has_pull_up_bar: bool = False


class TrainingPhase(_Frozen):
    mode: PhaseMode
    daily_deficit: int | None = None
    protein_grams_per_day: int | None = None

    @model_validator(mode="after")
    def cutting_fields_only_when_cutting(self) -> TrainingPhase:
        if self.mode != PhaseMode.CUTTING and (
            self.daily_deficit is not None or self.protein_grams_per_day is not None
        ):
            raise ValueError("daily_deficit and protein_grams_per_day only apply when cutting")
        return self


class LiftState(_Frozen):
    """Per-exercise progression state. Produced and consumed only by ``progression``."""

    exercise_id: str
    t1_weight: float
    t1_stage: T1Stage = T1Stage.FIVE_BY_THREE
    t1_fail_count: int = 0
    t2_weight: float
    t2_stage: T2Stage = T2Stage.THREE_BY_TEN
    t2_fail_count: int = 0
    t1_last_reset_weight: float | None = None
    t2_last_reset_weight: float | None = None
    t1_last_workout_date: datetime | None = None
    t2_last_workout_date: datetime | None = None
    t2_load_drop_count: int = 0
    recent_e1rms: tuple[float, ...] = ()
    recent_avg_rpes: tuple[float, ...] = ()
    recent_amrap_reps: tuple[int, ...] = ()


class SetLog(_Frozen):
    """Immutable record of one completed or attempted set."""

    exercise_id: str
    tier: Tier
    set_number: int
    target_reps: int
    actual_reps: int
    weight: float
    is_amrap: bool = False
    status: SetStatus = SetStatus.COMPLETED
    rpe: float | None = None
    is_substituted: bool = False
    substitute_exercise_id: str | None = None
    original_weight: float | None = None
    location: Location = Location.GYM
    completed_at: datetime | None = None


class PainSorenessEntry(_Frozen):
    region: BodyRegion
    sensation: Sensation
    severity: int = Field(..., ge=1, le=5)
    date: datetime
    notes: str | None = None


class RunLog(_Frozen):
    date: datetime
    duration_minutes: float
    perceived_effort: int = Field(..., ge=1, le=5)
    category: RunCategory = RunCategory.OTHER
    type: RunType = RunType.OUTDOOR
    distance_miles: float | None = None
    notes: str = ""


class RedFlagDismissal(_Frozen):
    region: BodyRegion
    dismissed_at: datetime


class PlannedExercise(_Frozen):
    exercise: Exercise
    weight: float
    tier: Tier


class AccessoryState(_Frozen):
    exercise_id: str
    weight: float
    last_session_reps: tuple[int, ...] = ()


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class WorkoutModification(_Frozen):
    exercise_id: str
    original_weight: float
    modified_weight: float
    reason: str
    action: ModificationAction
    source: ModificationSource
    user_accepted: bool = False
    substitution_suggestions: tuple[str, ...] = ()
    suggest_rest_day: bool = False


class ExerciseAdaptation(_Frozen):
    original_exercise: Exercise
    original_weight: float
    adapted_exercise: Exercise
    adapted_weight: float
    status: AdaptationStatus
    confidence: ConfidenceLevel
    warning_message: str | None = None


class WarmUpSet(_Frozen):
    weight: float
    reps: int
    label: str


class T3ProgressionResult(_Frozen):
    new_weight: float
    increased: bool


class T2AutoRegResult(_Frozen):
    action: T2AutoRegAction
    reduced_weight: float | None = None
    message: str | None = None
    progression_effect: ProgressionEffect | None = None


class AccessoryRepRange(_Frozen):
    min_reps: int
    max_reps: int
    sets: int = 3


class AccessoryProgressionResult(_Frozen):
    new_weight: float
    action: AccessoryAction
    message: str


class VolumeRatioCheck(_Frozen):
    status: VolumeRatioStatus
    ratio: str
    ratio_value: float
    suggested_max_accessories: int
    message: str | None = None


class RecoveryState(_Frozen):
    exercise_id: str
    last_trained_as_t1: datetime | None
    last_trained_as_t2: datetime | None
    days_since_last_t1: float
    days_since_last_t2: float
    recovery_status: RecoveryStatus


class RampUpSuggestion(_Frozen):
    ramp_up_weight: float
    message: str


class RunAdvisory(_Frozen):
    level: RunAdvisoryLevel
    message: str = ""
    suggested_action: RunSuggestedAction | None = None


class FatigueSignal(_Frozen):
    type: FatigueSignalType
    lift: str
    consecutive_sessions: int


class DeloadWeek(_Frozen):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    duration: str
    t1: str
    t2: str
    t3: str
    accessories: str
    rpe_target: str
    return_plan: str = Field(..., alias="return")


class FatigueAlert(_Frozen):
    level: FatigueAlertLevel
    signals: tuple[FatigueSignal, ...]
    message: str | None = None
    prescription: DeloadWeek | None = None


class InactivityAlert(_Frozen):
    level: InactivityAlertLevel
    message: str
    prescription: InactivityPrescription


# ---------------------------------------------------------------------------
# Seed data
# ---------------------------------------------------------------------------


def initial_lift_state(exercise_id: str, t1_weight: float, t2_weight: float) -> LiftState:
    """Fresh state for a lift at profile initialization."""
    return LiftState(exercise_id=exercise_id, t1_weight=t1_weight, t2_weight=t2_weight)


INITIAL_LIFT_STATES: dict[str, LiftState] = {
    "squat": initial_lift_state("squat", 190, 135),
    "bench": initial_lift_state("bench", 145, 100),
    "deadlift": initial_lift_state("deadlift", 220, 155),
    "ohp": initial_lift_state("ohp", 85, 60),
}

DEFAULT_EQUIPMENT = EquipmentProfile()
