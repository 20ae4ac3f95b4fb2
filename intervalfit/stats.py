"""Progress statistics over logged workouts.

Pure functions: they take workout records (anything with ``duration``,
``intensity`` and ``date`` attributes) and never touch the database.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Protocol


class _WorkoutLike(Protocol):
    duration: int
    intensity: int
    date: datetime


CALORIES_PER_MINUTE = 5  # moderate exercise at intensity 5


def format_time(seconds: int) -> str:
    """``125`` → ``"02:05"``.  Negative input shows as ``"00:00"``."""
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{secs:02d}"


def calories_burned(duration: int, intensity: int) -> int:
    """Rough estimate: 5 kcal/min at intensity 5, scaled linearly."""
    return round(duration * CALORIES_PER_MINUTE * (intensity / 5))


def total_duration(workouts: Iterable[_WorkoutLike]) -> int:
    return sum(w.duration for w in workouts)


def week_start(day: date) -> date:
    """Monday of the week containing *day*."""
    if isinstance(day, datetime):
        day = day.date()
    return day - timedelta(days=day.weekday())


def group_by_week(workouts: Iterable[_WorkoutLike]) -> "OrderedDict[date, list]":
    """Workouts keyed by the Monday of their week, newest week first."""
    grouped: dict[date, list] = {}
    for w in workouts:
        grouped.setdefault(week_start(w.date), []).append(w)
    return OrderedDict(sorted(grouped.items(), key=lambda kv: kv[0], reverse=True))


def current_streak(workouts: Iterable[_WorkoutLike], today: date | None = None) -> int:
    """Consecutive days with at least one workout, ending today.

    A streak still counts if the last workout was yesterday (today is not
    over yet).
    """
    today = today or date.today()
    days = {w.date.date() if isinstance(w.date, datetime) else w.date for w in workouts}
    cursor = today if today in days else today - timedelta(days=1)
    streak = 0
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


@dataclass(frozen=True)
class ProgressSummary:
    total_workouts: int
    total_minutes: int
    total_calories: int
    workouts_this_week: int
    streak_days: int


def summarize(workouts: Iterable[_WorkoutLike], today: date | None = None) -> ProgressSummary:
    workouts = list(workouts)
    today = today or date.today()
    this_week = week_start(today)
    return ProgressSummary(
        total_workouts=len(workouts),
        total_minutes=total_duration(workouts),
        total_calories=sum(calories_burned(w.duration, w.intensity) for w in workouts),
        workouts_this_week=sum(1 for w in workouts if week_start(w.date) == this_week),
        streak_days=current_streak(workouts, today),
    )
