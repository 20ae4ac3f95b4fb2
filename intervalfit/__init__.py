"""IntervalFit: interval timer and workout log."""

__version__ = "0.1.0"
