"""
Exceptions raised by the engine.
"""


class GZCLPError(Exception):
    """Base class for engine errors."""


class ExerciseNotFoundError(GZCLPError, KeyError):
    """Raised when an exercise id is absent from the static registry."""

    def __init__(self, exercise_id: str):
        super().__init__(exercise_id)
        self.exercise_id = exercise_id

    def __str__(self) -> str:
        return f"Exercise not found: {self.exercise_id}"


class RegistryIntegrityError(GZCLPError):
    """Raised at load time when the exercise registry violates its invariants."""


class SessionStateError(GZCLPError):
    """Raised when a workout cursor operation does not fit its current state."""
