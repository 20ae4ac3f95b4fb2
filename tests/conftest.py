"""Shared pytest fixtures for IntervalFit tests."""

import os
import sys
import tempfile

# Settings, the database and the sound cache resolve their paths at import
# time; keep them out of the real home directory.
os.environ.setdefault("INTERVALFIT_HOME", tempfile.mkdtemp(prefix="intervalfit-tests-"))
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from PyQt6.QtWidgets import QApplication

from intervalfit.database.db import configure_engine, init_db
from intervalfit.timer.clock import ManualClock
from intervalfit.timer.engine import (
    CountDirection, IntervalTimerEngine, TimerConfiguration,
)


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def clock(qapp):
    """Tick source driven by ``advance()``."""
    return ManualClock()


@pytest.fixture
def engine(clock):
    """Counting-down engine: 3 intervals of 5 seconds."""
    config = TimerConfiguration(
        interval_duration=5, interval_count=3, count_direction=CountDirection.DOWN,
    )
    return IntervalTimerEngine(config, clock=clock)


@pytest.fixture
def engine_up(clock):
    """Counting-up engine: 3 intervals of 5 seconds."""
    config = TimerConfiguration(
        interval_duration=5, interval_count=3, count_direction=CountDirection.UP,
    )
    return IntervalTimerEngine(config, clock=clock)


@pytest.fixture
def settings_path(tmp_path, monkeypatch):
    """Redirect settings persistence to a temp file."""
    path = tmp_path / "settings.json"
    monkeypatch.setattr("intervalfit.settings.SETTINGS_PATH", path)
    return path
