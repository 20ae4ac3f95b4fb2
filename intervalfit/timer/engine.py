"""Interval timer state machine for IntervalFit.

States
------
STOPPED   Clock not ticking.  Progress is kept (a pause is just STOPPED
          with the interval and clock value preserved).
RUNNING   Clock ticking once per second.

Transitions
-----------
STOPPED → RUNNING   (start)
RUNNING → STOPPED   (pause)
Any     → STOPPED   (reset, progress rewound)
RUNNING → STOPPED   (final interval reaches its bound)

Counting
--------
DOWN   The clock value is the seconds remaining.  Each interval starts at
       ``interval_duration`` and completes on the tick that would take it
       below 1.
UP     The clock value is the seconds elapsed.  Each interval starts at 0
       and completes on the tick that would take it to
       ``interval_duration``.

Either way an interval lasts exactly ``interval_duration`` ticks.
``interval_completed(n)`` fires for intervals 1..count-1 and
``workout_completed()`` fires once for the last one.  Neither ever fires
from ``reset()`` or ``reconfigure()``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from PyQt6.QtCore import QObject, pyqtSignal

from ..errors import ConfigurationError
from .clock import Clock, QtClock

logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class TimerState(Enum):
    STOPPED = "stopped"
    RUNNING = "running"


class CountDirection(Enum):
    UP = "up"
    DOWN = "down"


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_INTERVAL_DURATION = 120  # seconds
DEFAULT_INTERVAL_COUNT = 4
DEFAULT_COUNT_DIRECTION = CountDirection.DOWN


# ── configuration ─────────────────────────────────────────────────────────


def _require_positive_int(name: str, value: object) -> None:
    # bool is an int subclass; True is not a duration
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(
            f"{name} must be an integer, got {type(value).__name__}"
        )
    if value < 1:
        raise ConfigurationError(f"{name} must be at least 1, got {value}")


@dataclass(frozen=True)
class TimerConfiguration:
    """Immutable settings for one run of the timer.

    ``count_direction`` accepts a ``CountDirection`` or its string value
    (``"up"`` / ``"down"``).  ``sound_enabled`` is carried for the
    presentation layer; the engine never reads it.
    """

    interval_duration: int = DEFAULT_INTERVAL_DURATION
    interval_count: int = DEFAULT_INTERVAL_COUNT
    count_direction: CountDirection = DEFAULT_COUNT_DIRECTION
    sound_enabled: bool = True

    def __post_init__(self) -> None:
        _require_positive_int("interval_duration", self.interval_duration)
        _require_positive_int("interval_count", self.interval_count)
        direction = self.count_direction
        if not isinstance(direction, CountDirection):
            try:
                direction = CountDirection(direction)
            except ValueError:
                raise ConfigurationError(
                    f"count_direction must be 'up' or 'down', got {direction!r}"
                ) from None
            object.__setattr__(self, "count_direction", direction)

    @property
    def total_seconds(self) -> int:
        return self.interval_duration * self.interval_count

    def to_dict(self) -> dict:
        return {
            "interval_duration": self.interval_duration,
            "interval_count": self.interval_count,
            "count_direction": self.count_direction.value,
            "sound_enabled": self.sound_enabled,
        }


@dataclass(frozen=True)
class TimerSnapshot:
    """Read-only view of the engine for rendering."""

    clock_value: int
    current_interval: int
    interval_count: int
    interval_duration: int
    running: bool
    count_direction: CountDirection
    finished: bool = False
    elapsed_seconds: int = field(init=False)
    remaining_seconds: int = field(init=False)

    def __post_init__(self) -> None:
        if self.count_direction == CountDirection.DOWN:
            remaining = self.clock_value
            elapsed = self.interval_duration - self.clock_value
        else:
            elapsed = self.clock_value
            remaining = self.interval_duration - self.clock_value
        object.__setattr__(self, "elapsed_seconds", max(0, elapsed))
        object.__setattr__(self, "remaining_seconds", max(0, remaining))

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the current interval."""
        if self.interval_duration <= 0:
            return 0.0
        return max(0.0, min(1.0, self.elapsed_seconds / self.interval_duration))


def _start_bound(direction: CountDirection, duration: int) -> int:
    """Clock value at the start of an interval."""
    if direction == CountDirection.DOWN:
        return duration
    return 0


def _end_bound(direction: CountDirection, duration: int) -> int:
    """Clock value once an interval has run out."""
    if direction == CountDirection.DOWN:
        return 0
    return duration


# ── engine ────────────────────────────────────────────────────────────────


class IntervalTimerEngine(QObject):
    """Multi-interval countdown / count-up timer.

    Signals
    -------
    tick(clock_value: int)
        Emitted after every processed clock tick.
    state_changed(new_state: TimerState)
        Emitted on STOPPED ↔ RUNNING transitions and on reset.
    interval_completed(interval: int)
        1-based index of the interval that just finished.  Never emitted
        for the last interval.
    workout_completed()
        Emitted once when the last interval finishes.
    configuration_changed(config: TimerConfiguration)
        Emitted after ``reconfigure()`` accepts a new configuration.
    """

    tick = pyqtSignal(int)
    state_changed = pyqtSignal(object)
    interval_completed = pyqtSignal(int)
    workout_completed = pyqtSignal()
    configuration_changed = pyqtSignal(object)

    def __init__(
        self,
        config: TimerConfiguration | None = None,
        parent: QObject | None = None,
        *,
        clock: Clock | None = None,
    ) -> None:
        super().__init__(parent)
        if config is None:
            config = TimerConfiguration()
        elif not isinstance(config, TimerConfiguration):
            raise ConfigurationError(
                f"expected TimerConfiguration, got {type(config).__name__}"
            )
        self._config: TimerConfiguration = config

        # ── run state ─────────────────────────────────────────────────
        self._state: TimerState = TimerState.STOPPED
        self._finished: bool = False
        # Direction of the interval in progress.  A direction change
        # while running is picked up at the next interval boundary.
        self._direction: CountDirection = config.count_direction
        self._interval: int = 1
        self._value: int = _start_bound(self._direction, config.interval_duration)
        # Ticks processed since the workout began; survives pause/finish.
        self._seconds_run: int = 0

        # ── clock ─────────────────────────────────────────────────────
        self._clock: Clock = clock if clock is not None else QtClock(self)
        self._clock.ticked.connect(self._on_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def configuration(self) -> TimerConfiguration:
        return self._config

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == TimerState.RUNNING

    @property
    def is_finished(self) -> bool:
        """True after the workout completed, until the next start/reset."""
        return self._finished

    @property
    def clock_value(self) -> int:
        """Seconds remaining (DOWN) or elapsed (UP) in this interval."""
        return self._value

    @property
    def current_interval(self) -> int:
        return self._interval

    @property
    def interval_count(self) -> int:
        return self._config.interval_count

    @property
    def interval_duration(self) -> int:
        return self._config.interval_duration

    @property
    def count_direction(self) -> CountDirection:
        return self._direction

    @property
    def workout_seconds(self) -> int:
        """Seconds actually run in the current (or just finished) workout."""
        return self._seconds_run

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def percent_complete(self) -> float:
        return self.snapshot().percent_complete

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            clock_value=self._value,
            current_interval=self._interval,
            interval_count=self._config.interval_count,
            interval_duration=self._config.interval_duration,
            running=self.is_running,
            count_direction=self._direction,
            finished=self._finished,
        )

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Start or resume.  No-op while already running."""
        if self.is_running:
            return
        if self._finished:
            # A completed workout starts over from interval 1.
            self._rewind()
        self._set_state(TimerState.RUNNING)
        self._clock.start()
        logger.debug(
            "Timer started: interval %d/%d, clock %ds",
            self._interval, self._config.interval_count, self._value,
        )

    def pause(self) -> None:
        """Stop the clock, keeping the current interval and time."""
        if not self.is_running:
            return
        self._clock.stop()
        self._set_state(TimerState.STOPPED)
        logger.debug(
            "Timer paused: interval %d/%d, clock %ds",
            self._interval, self._config.interval_count, self._value,
        )

    def reset(self) -> None:
        """Stop and rewind to the first interval.  Safe from any state."""
        self._clock.stop()
        self._rewind()
        self._state = TimerState.STOPPED
        self.state_changed.emit(TimerState.STOPPED)
        self.tick.emit(self._value)

    def reconfigure(self, config: TimerConfiguration) -> None:
        """Swap in a new configuration.

        Raises ``ConfigurationError`` (and changes nothing) if *config*
        is not a ``TimerConfiguration``.  The interval index is clamped to
        the new count.  While running, the clock value is kept as raw
        seconds (pulled back to the new duration if it is past it) and a
        direction change waits for the next interval; while stopped, the
        clock value jumps to the new start bound.
        """
        if not isinstance(config, TimerConfiguration):
            logger.warning("Rejected timer configuration %r", config)
            raise ConfigurationError(
                f"expected TimerConfiguration, got {type(config).__name__}"
            )

        self._config = config
        self._interval = min(self._interval, config.interval_count)
        if self.is_running:
            # Raw seconds are kept, only pulled back inside the new duration.
            self._value = min(self._value, config.interval_duration)
        else:
            self._direction = config.count_direction
            self._value = _start_bound(self._direction, config.interval_duration)
            self._finished = False
        self.tick.emit(self._value)

        logger.info(
            "Timer reconfigured: %ds x %d, counting %s",
            config.interval_duration, config.interval_count,
            config.count_direction.value,
        )
        self.configuration_changed.emit(config)

    def shutdown(self) -> None:
        """Release the clock.  Call when the owner discards the engine."""
        self._clock.stop()
        self._clock.ticked.disconnect(self._on_tick)
        self._state = TimerState.STOPPED

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        # A tick already queued when pause()/reset() ran must not count.
        if not self.is_running:
            return

        self._seconds_run += 1
        duration = self._config.interval_duration
        if self._direction == CountDirection.DOWN:
            interval_done = self._value <= 1
            if not interval_done:
                self._value -= 1
        else:
            interval_done = self._value + 1 >= duration
            if not interval_done:
                self._value += 1

        if not interval_done:
            self.tick.emit(self._value)
        elif self._interval < self._config.interval_count:
            self._advance_interval()
        else:
            self._finish_workout()

    def _advance_interval(self) -> None:
        completed = self._interval
        self._interval += 1
        self._direction = self._config.count_direction
        self._value = _start_bound(self._direction, self._config.interval_duration)
        logger.info(
            "Interval %d of %d complete", completed, self._config.interval_count,
        )
        self.tick.emit(self._value)
        self.interval_completed.emit(completed)

    def _finish_workout(self) -> None:
        self._clock.stop()
        self._value = _end_bound(self._direction, self._config.interval_duration)
        self._finished = True
        self._set_state(TimerState.STOPPED)
        logger.info("Workout complete: %d intervals", self._config.interval_count)
        self.tick.emit(self._value)
        self.workout_completed.emit()

    def _rewind(self) -> None:
        self._finished = False
        self._seconds_run = 0
        self._interval = 1
        self._direction = self._config.count_direction
        self._value = _start_bound(self._direction, self._config.interval_duration)

    def _set_state(self, new_state: TimerState) -> None:
        self._state = new_state
        self.state_changed.emit(new_state)
