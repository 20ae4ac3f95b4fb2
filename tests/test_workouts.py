"""Tests for the workout log (create, read, update, delete)."""

from datetime import datetime, timedelta

import pytest

from intervalfit.database.db import get_session
from intervalfit.database.models import Workout
from intervalfit.errors import InvalidWorkoutError, WorkoutNotFoundError
from intervalfit.timer.engine import CountDirection, TimerConfiguration
from intervalfit.workouts import (
    INTERVAL_EXERCISE_NAME, INTERVAL_EXERCISE_TYPE,
    delete_workout, get_workout, list_workouts, log_interval_workout,
    log_workout, update_workout,
)


# ═══════════════════════════════════════════════════════════════════════════
#  CREATE
# ═══════════════════════════════════════════════════════════════════════════


class TestLogWorkout:

    def test_creates_record(self):
        w = log_workout("cardio", "Rowing", 20, intensity=7, notes="steady")
        assert w.id is not None
        with get_session() as db:
            stored = db.get(Workout, w.id)
            assert stored.exercise_name == "Rowing"
            assert stored.duration == 20
            assert stored.intensity == 7
            assert stored.notes == "steady"

    def test_defaults(self):
        w = log_workout("strength", "Squats", 15)
        assert w.intensity == 5
        assert w.notes is None
        assert isinstance(w.date, datetime)

    def test_names_are_stripped(self):
        w = log_workout("  cardio ", " Cycling  ", 30)
        assert w.exercise_type == "cardio"
        assert w.exercise_name == "Cycling"

    def test_explicit_date(self):
        when = datetime(2024, 3, 1, 7, 30)
        assert log_workout("cardio", "Run", 25, date=when).date == when

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_blank_name_rejected(self, name):
        with pytest.raises(InvalidWorkoutError):
            log_workout("cardio", name, 10)

    @pytest.mark.parametrize("duration", [0, -5, 2.5, True])
    def test_bad_duration_rejected(self, duration):
        with pytest.raises(InvalidWorkoutError, match="duration"):
            log_workout("cardio", "Run", duration)

    @pytest.mark.parametrize("intensity", [0, 11])
    def test_intensity_out_of_range_rejected(self, intensity):
        with pytest.raises(InvalidWorkoutError, match="intensity"):
            log_workout("cardio", "Run", 10, intensity=intensity)

    def test_rejected_workout_not_stored(self):
        with pytest.raises(InvalidWorkoutError):
            log_workout("cardio", "Run", 0)
        assert list_workouts() == []


class TestLogIntervalWorkout:

    def test_rounds_up_to_whole_minutes(self):
        config = TimerConfiguration(interval_duration=45, interval_count=3)
        w = log_interval_workout(config)
        assert w.duration == 3  # 135 s
        assert w.exercise_type == INTERVAL_EXERCISE_TYPE
        assert w.exercise_name == INTERVAL_EXERCISE_NAME

    def test_short_workout_counts_as_one_minute(self):
        config = TimerConfiguration(interval_duration=5, interval_count=2)
        assert log_interval_workout(config).duration == 1

    def test_seconds_run_override_configured_total(self):
        config = TimerConfiguration(interval_duration=30, interval_count=1)
        w = log_interval_workout(config, seconds=150)
        assert w.duration == 3
        assert w.notes == "1 x 30s intervals, counting down"

    def test_notes_describe_configuration(self):
        config = TimerConfiguration(
            interval_duration=60, interval_count=4,
            count_direction=CountDirection.UP,
        )
        w = log_interval_workout(config, intensity=8)
        assert w.notes == "4 x 60s intervals, counting up"
        assert w.intensity == 8


# ═══════════════════════════════════════════════════════════════════════════
#  READ
# ═══════════════════════════════════════════════════════════════════════════


class TestReadWorkouts:

    def test_empty(self):
        assert list_workouts() == []

    def test_newest_first(self):
        now = datetime.now()
        log_workout("cardio", "Old", 10, date=now - timedelta(days=2))
        log_workout("cardio", "New", 10, date=now)
        log_workout("cardio", "Middle", 10, date=now - timedelta(days=1))
        assert [w.exercise_name for w in list_workouts()] == ["New", "Middle", "Old"]

    def test_limit(self):
        for i in range(5):
            log_workout("cardio", f"Run {i}", 10)
        assert len(list_workouts(limit=2)) == 2

    def test_get_workout(self):
        w = log_workout("cardio", "Swim", 40)
        assert get_workout(w.id).exercise_name == "Swim"

    def test_get_missing_raises(self):
        with pytest.raises(WorkoutNotFoundError) as exc_info:
            get_workout(999)
        assert exc_info.value.workout_id == 999
        assert isinstance(exc_info.value, LookupError)


# ═══════════════════════════════════════════════════════════════════════════
#  UPDATE / DELETE
# ═══════════════════════════════════════════════════════════════════════════


class TestUpdateWorkout:

    def test_partial_update(self):
        w = log_workout("cardio", "Run", 10)
        updated = update_workout(w.id, duration=25, notes="hills")
        assert updated.duration == 25
        assert updated.notes == "hills"
        assert get_workout(w.id).exercise_name == "Run"

    def test_unknown_field_rejected(self):
        w = log_workout("cardio", "Run", 10)
        with pytest.raises(InvalidWorkoutError, match="calories"):
            update_workout(w.id, calories=300)

    def test_invalid_value_rejected(self):
        w = log_workout("cardio", "Run", 10)
        with pytest.raises(InvalidWorkoutError):
            update_workout(w.id, intensity=42)
        assert get_workout(w.id).intensity == 5

    def test_missing_raises(self):
        with pytest.raises(WorkoutNotFoundError):
            update_workout(12345, duration=5)


class TestDeleteWorkout:

    def test_delete(self):
        w = log_workout("cardio", "Run", 10)
        delete_workout(w.id)
        with pytest.raises(WorkoutNotFoundError):
            get_workout(w.id)

    def test_delete_missing_raises(self):
        with pytest.raises(WorkoutNotFoundError):
            delete_workout(77)
