"""Tick sources for the interval timer engine.

A clock emits ``ticked`` once per second while active.  The engine
subscribes with ``start()`` and cancels with ``stop()``; both are
idempotent, so there is never more than one live subscription.

``QtClock``      QTimer-backed, used by the running application.
``ManualClock``  Ticks only when ``advance()`` is called.  Used headless
                 and in tests.
"""

from __future__ import annotations

from PyQt6.QtCore import QObject, QTimer, pyqtSignal


TICK_INTERVAL_MS = 1000


class Clock(QObject):
    """Base tick source.  Subclasses implement start/stop/is_active."""

    ticked = pyqtSignal()

    @property
    def interval_ms(self) -> int:
        return TICK_INTERVAL_MS

    @property
    def is_active(self) -> bool:
        raise NotImplementedError

    def start(self) -> None:
        raise NotImplementedError

    def stop(self) -> None:
        raise NotImplementedError


class QtClock(Clock):
    """Repeating one-second QTimer."""

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self.ticked)

    @property
    def is_active(self) -> bool:
        return self._qt_timer.isActive()

    def start(self) -> None:
        # QTimer.start() on an active timer restarts the countdown, which
        # would stretch the current second.  Leave it alone instead.
        if self._qt_timer.isActive():
            return
        self._qt_timer.start()

    def stop(self) -> None:
        self._qt_timer.stop()


class ManualClock(Clock):
    """Clock driven explicitly by ``advance()``.

    Usage::

        clock = ManualClock()
        engine = IntervalTimerEngine(config, clock=clock)
        engine.start()
        clock.advance(3)   # three ticks
    """

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._active = False
        self.start_calls = 0
        self.stop_calls = 0

    @property
    def is_active(self) -> bool:
        return self._active

    def start(self) -> None:
        self.start_calls += 1
        self._active = True

    def stop(self) -> None:
        self.stop_calls += 1
        self._active = False

    def advance(self, count: int = 1) -> int:
        """Deliver up to *count* ticks.  Returns how many were delivered.

        Stops early if a tick handler stops the clock.
        """
        delivered = 0
        for _ in range(count):
            if not self._active:
                break
            self.ticked.emit()
            delivered += 1
        return delivered
