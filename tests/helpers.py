"""Shared test helpers for IntervalFit."""

from intervalfit.timer.engine import IntervalTimerEngine


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


def run_ticks(engine: IntervalTimerEngine, count: int) -> None:
    """Call the tick handler directly, bypassing the clock."""
    for _ in range(count):
        engine._on_tick()


def run_workout(engine: IntervalTimerEngine) -> None:
    """Start and tick until the whole workout has finished."""
    engine.start()
    run_ticks(engine, engine.interval_duration * engine.interval_count)
