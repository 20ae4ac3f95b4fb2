"""Tests for the tick sources."""

from intervalfit.timer.clock import ManualClock, QtClock, TICK_INTERVAL_MS

from helpers import SignalCollector


class TestManualClock:

    def test_starts_inactive(self, clock):
        assert clock.is_active is False
        assert clock.start_calls == 0

    def test_interval_is_one_second(self, clock):
        assert clock.interval_ms == TICK_INTERVAL_MS == 1000

    def test_advance_emits_while_active(self, clock):
        c = SignalCollector()
        clock.ticked.connect(c)
        clock.start()
        assert clock.advance(3) == 3
        assert len(c) == 3

    def test_advance_while_stopped_delivers_nothing(self, clock):
        c = SignalCollector()
        clock.ticked.connect(c)
        assert clock.advance(5) == 0
        assert len(c) == 0

    def test_stop_inside_handler_halts_advance(self, clock):
        seen = []

        def handler():
            seen.append(1)
            if len(seen) == 2:
                clock.stop()

        clock.ticked.connect(handler)
        clock.start()
        assert clock.advance(10) == 2
        assert len(seen) == 2

    def test_start_and_stop_counted(self, clock):
        clock.start()
        clock.start()
        clock.stop()
        assert clock.start_calls == 2
        assert clock.stop_calls == 1
        assert clock.is_active is False


class TestQtClock:

    def test_start_and_stop(self, qapp):
        clock = QtClock()
        assert clock.is_active is False
        clock.start()
        assert clock.is_active is True
        clock.stop()
        assert clock.is_active is False

    def test_interval(self, qapp):
        assert QtClock().interval_ms == 1000

    def test_repeated_start_keeps_single_timer(self, qapp):
        clock = QtClock()
        clock.start()
        remaining = clock._qt_timer.remainingTime()
        clock.start()
        assert clock.is_active
        # restarting would push remaining time back up to the full second
        assert clock._qt_timer.remainingTime() <= remaining

    def test_stop_is_idempotent(self, qapp):
        clock = QtClock()
        clock.stop()
        clock.stop()
        assert clock.is_active is False
