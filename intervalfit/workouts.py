"""Workout log: create, read, update and delete logged workouts.

Workouts finished on the interval timer are recorded through
``log_interval_workout``; everything else is entered by hand from the
History tab (``ui.workout_form``).
"""

from __future__ import annotations

import logging
import math
from datetime import datetime

from .database.db import get_session
from .database.models import Workout
from .errors import InvalidWorkoutError, WorkoutNotFoundError
from .timer.engine import TimerConfiguration

logger = logging.getLogger(__name__)

INTERVAL_EXERCISE_TYPE = "interval"
INTERVAL_EXERCISE_NAME = "Interval Timer"
DEFAULT_INTENSITY = 5
MIN_INTENSITY, MAX_INTENSITY = 1, 10

_UPDATABLE_FIELDS = frozenset({
    "exercise_type", "exercise_name", "duration", "intensity", "notes", "date",
})


def _validate(fields: dict) -> None:
    for key in ("exercise_type", "exercise_name"):
        if key in fields:
            value = fields[key]
            if not isinstance(value, str) or not value.strip():
                raise InvalidWorkoutError(f"{key} must be a non-empty string")
    if "duration" in fields:
        duration = fields["duration"]
        if isinstance(duration, bool) or not isinstance(duration, int) or duration < 1:
            raise InvalidWorkoutError("duration must be a whole number of minutes >= 1")
    if "intensity" in fields:
        intensity = fields["intensity"]
        if (
            isinstance(intensity, bool)
            or not isinstance(intensity, int)
            or not MIN_INTENSITY <= intensity <= MAX_INTENSITY
        ):
            raise InvalidWorkoutError(
                f"intensity must be between {MIN_INTENSITY} and {MAX_INTENSITY}"
            )


def log_workout(
    exercise_type: str,
    exercise_name: str,
    duration: int,
    intensity: int = DEFAULT_INTENSITY,
    notes: str | None = None,
    date: datetime | None = None,
) -> Workout:
    """Validate and store a workout.  Returns the detached record."""
    _validate({
        "exercise_type": exercise_type,
        "exercise_name": exercise_name,
        "duration": duration,
        "intensity": intensity,
    })
    with get_session() as db:
        record = Workout(
            exercise_type=exercise_type.strip(),
            exercise_name=exercise_name.strip(),
            duration=duration,
            intensity=intensity,
            notes=notes or None,
            date=date or datetime.now(),
        )
        db.add(record)
        db.flush()
        logger.info("Logged workout %d: %s", record.id, record.exercise_name)
        return record


def log_interval_workout(
    config: TimerConfiguration,
    intensity: int = DEFAULT_INTENSITY,
    *,
    seconds: int | None = None,
) -> Workout:
    """Record a finished interval-timer workout, rounded up to whole minutes.

    *seconds* is the time actually run; it defaults to the configured
    total.  The notes describe *config*, the configuration at completion.
    """
    if seconds is None:
        seconds = config.total_seconds
    minutes = max(1, math.ceil(seconds / 60))
    notes = (
        f"{config.interval_count} x {config.interval_duration}s "
        f"intervals, counting {config.count_direction.value}"
    )
    return log_workout(
        INTERVAL_EXERCISE_TYPE,
        INTERVAL_EXERCISE_NAME,
        minutes,
        intensity=intensity,
        notes=notes,
    )


def list_workouts(limit: int | None = None) -> list[Workout]:
    """All workouts, newest first."""
    with get_session() as db:
        query = db.query(Workout).order_by(Workout.date.desc(), Workout.id.desc())
        if limit is not None:
            query = query.limit(limit)
        return query.all()


def get_workout(workout_id: int) -> Workout:
    with get_session() as db:
        record = db.get(Workout, workout_id)
        if record is None:
            raise WorkoutNotFoundError(workout_id)
        return record


def update_workout(workout_id: int, **changes) -> Workout:
    """Apply a partial update.  Unknown field names are rejected."""
    unknown = set(changes) - _UPDATABLE_FIELDS
    if unknown:
        raise InvalidWorkoutError(f"cannot update: {', '.join(sorted(unknown))}")
    _validate(changes)
    with get_session() as db:
        record = db.get(Workout, workout_id)
        if record is None:
            raise WorkoutNotFoundError(workout_id)
        for key, value in changes.items():
            setattr(record, key, value)
        return record


def delete_workout(workout_id: int) -> None:
    with get_session() as db:
        record = db.get(Workout, workout_id)
        if record is None:
            raise WorkoutNotFoundError(workout_id)
        db.delete(record)
    logger.info("Deleted workout %d", workout_id)
