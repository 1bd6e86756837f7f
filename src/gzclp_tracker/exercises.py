"""
Static exercise registry.

Loaded once from the packaged ``data/exercises.json`` at import time. The
barbell/dumbbell substitution links are checked here so callers can follow
them without re-deriving the reverse direction.
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from pydantic import TypeAdapter, ValidationError

from .errors import ExerciseNotFoundError, RegistryIntegrityError
from .models import Exercise

logger = logging.getLogger(__name__)

DATA_FILE = Path(__file__).parent / "data" / "exercises.json"

_EXERCISE_LIST = TypeAdapter(list[Exercise])


def validate_links(registry: Mapping[str, Exercise]) -> None:
    """
    Check that every substitution link points at a registered exercise and
    that the link is mirrored on the other side.

    Raises:
        RegistryIntegrityError: on the first broken link found
    """
    for exercise_id, exercise in registry.items():
        alt_id = exercise.dumbbell_alternative
        if alt_id is not None:
            alt = registry.get(alt_id)
            if alt is None:
                raise RegistryIntegrityError(
                    f"{exercise_id}: dumbbell alternative {alt_id!r} is not registered"
                )
            if alt.barbell_equivalent != exercise_id:
                raise RegistryIntegrityError(
                    f"{alt_id}: barbell_equivalent should be {exercise_id!r}, "
                    f"got {alt.barbell_equivalent!r}"
                )
        equiv_id = exercise.barbell_equivalent
        if equiv_id is not None:
            equiv = registry.get(equiv_id)
            if equiv is None:
                raise RegistryIntegrityError(
                    f"{exercise_id}: barbell equivalent {equiv_id!r} is not registered"
                )
            if equiv.dumbbell_alternative != exercise_id:
                raise RegistryIntegrityError(
                    f"{equiv_id}: dumbbell_alternative should be {exercise_id!r}, "
                    f"got {equiv.dumbbell_alternative!r}"
                )


def build_registry(exercises: list[Exercise]) -> Mapping[str, Exercise]:
    """Index exercises by id and validate their links. Returns a read-only mapping."""
    registry: dict[str, Exercise] = {}
    for exercise in exercises:
        if exercise.id in registry:
            raise RegistryIntegrityError(f"Duplicate exercise id: {exercise.id}")
        registry[exercise.id] = exercise
    validate_links(registry)
    return MappingProxyType(registry)


def load_registry(data_file: Path = DATA_FILE) -> Mapping[str, Exercise]:
    """Load and validate the exercise registry from a JSON file."""
    with open(data_file, encoding="utf-8") as f:
        raw = json.load(f)
    try:
        exercises = _EXERCISE_LIST.validate_python(raw)
    except ValidationError as e:
        raise RegistryIntegrityError(f"Invalid exercise data in {data_file}: {e}") from e
    registry = build_registry(exercises)
    logger.debug("Loaded %d exercises from %s", len(registry), data_file)
    return registry


EXERCISES: Mapping[str, Exercise] = load_registry()


def get_exercise(exercise_id: str) -> Exercise:
    """
    Resolve an exercise by id.

    Raises:
        ExerciseNotFoundError: if the id is not registered
    """
    exercise = EXERCISES.get(exercise_id)
    if exercise is None:
        raise ExerciseNotFoundError(exercise_id)
    return exercise


def find_exercise(exercise_id: str) -> Exercise | None:
    """Lenient lookup used where unknown ids fall back to defaults."""
    return EXERCISES.get(exercise_id)


def dumbbell_alternative_for(exercise: Exercise) -> Exercise | None:
    if exercise.dumbbell_alternative is None:
        return None
    return EXERCISES.get(exercise.dumbbell_alternative)
