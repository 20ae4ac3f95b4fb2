"""Timer package."""

from .clock import Clock, QtClock, ManualClock, TICK_INTERVAL_MS
from .engine import (
    IntervalTimerEngine,
    TimerConfiguration,
    TimerSnapshot,
    TimerState,
    CountDirection,
    DEFAULT_INTERVAL_DURATION,
    DEFAULT_INTERVAL_COUNT,
    DEFAULT_COUNT_DIRECTION,
)

__all__ = [
    "Clock",
    "QtClock",
    "ManualClock",
    "TICK_INTERVAL_MS",
    "IntervalTimerEngine",
    "TimerConfiguration",
    "TimerSnapshot",
    "TimerState",
    "CountDirection",
    "DEFAULT_INTERVAL_DURATION",
    "DEFAULT_INTERVAL_COUNT",
    "DEFAULT_COUNT_DIRECTION",
]
