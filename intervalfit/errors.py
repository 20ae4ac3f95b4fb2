"""Exception types raised across IntervalFit."""


class IntervalFitError(Exception):
    """Base class for all IntervalFit errors."""


class ConfigurationError(IntervalFitError, ValueError):
    """A timer configuration was rejected (non-positive duration/count,
    unknown direction, wrong type)."""


class InvalidWorkoutError(IntervalFitError, ValueError):
    """Workout fields failed validation."""


class WorkoutNotFoundError(IntervalFitError, LookupError):
    def __init__(self, workout_id: int) -> None:
        super().__init__(f"Workout {workout_id} not found")
        self.workout_id = workout_id
