"""
GZCLP workout templates and rotation.

Four days rotate A1 -> B1 -> A2 -> B2: each pairs one lift at T1 with another
at T2, followed by a T3 pull.
"""

from dataclasses import dataclass

from .exercises import find_exercise
from .models import MuscleGroup, Tier


@dataclass(frozen=True)
class TemplateExercise:
    exercise_id: str
    tier: Tier
    sets: int
    reps: int
    is_amrap: bool


@dataclass(frozen=True)
class WorkoutTemplate:
    id: str
    name: str
    exercises: tuple[TemplateExercise, ...]

    def exercise_for(self, tier: Tier) -> TemplateExercise | None:
        for item in self.exercises:
            if item.tier == tier:
                return item
        return None


def _day(template_id: str, t1: str, t2: str, t3: str) -> WorkoutTemplate:
    return WorkoutTemplate(
        id=template_id,
        name=f"Workout {template_id}",
        exercises=(
            TemplateExercise(t1, Tier.T1, sets=5, reps=3, is_amrap=True),
            TemplateExercise(t2, Tier.T2, sets=3, reps=10, is_amrap=False),
            TemplateExercise(t3, Tier.T3, sets=3, reps=15, is_amrap=True),
        ),
    )


WORKOUT_TEMPLATES: dict[str, WorkoutTemplate] = {
    "A1": _day("A1", "squat", "bench", "lat_pulldown"),
    "B1": _day("B1", "ohp", "deadlift", "db_row"),
    "A2": _day("A2", "bench", "squat", "lat_pulldown"),
    "B2": _day("B2", "deadlift", "ohp", "db_row"),
}

WORKOUT_ROTATION: tuple[str, ...] = ("A1", "B1", "A2", "B2")

ACCESSORY_RECOMMENDATIONS: dict[str, tuple[str, ...]] = {
    "A1": ("face_pulls", "lateral_raises", "leg_curls", "ab_rollout"),
    "B1": ("bicep_curls", "oh_tricep_ext", "hip_thrust", "calf_raises"),
    "A2": ("face_pulls", "incline_db_fly", "leg_extensions", "ab_rollout"),
    "B2": ("bicep_curls", "lateral_raises", "back_extensions", "calf_raises"),
}

# Home-friendly replacements for gym-only accessories
HOME_ACCESSORY_ALTERNATIVES: dict[str, str] = {
    "face_pulls": "lateral_raises",
    "leg_curls": "hip_thrust",
    "leg_extensions": "calf_raises",
    "back_extensions": "ab_rollout",
}


def get_next_workout_id(current_id: str) -> str:
    """Next day in the rotation; unknown ids restart at A1."""
    if current_id not in WORKOUT_ROTATION:
        return WORKOUT_ROTATION[0]
    idx = WORKOUT_ROTATION.index(current_id)
    return WORKOUT_ROTATION[(idx + 1) % len(WORKOUT_ROTATION)]


def home_accessory(exercise_id: str) -> str:
    return HOME_ACCESSORY_ALTERNATIVES.get(exercise_id, exercise_id)


def workout_has_lower_body(template_id: str) -> bool:
    """True when the template's T1 lift is a leg movement or the deadlift."""
    template = WORKOUT_TEMPLATES.get(template_id)
    if template is None:
        return False
    t1 = template.exercise_for(Tier.T1)
    if t1 is None:
        return False
    exercise = find_exercise(t1.exercise_id)
    if exercise is None:
        return False
    return exercise.muscle_group == MuscleGroup.LEGS or exercise.id == "deadlift"
