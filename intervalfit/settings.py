"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/IntervalFit/settings.json

Set ``INTERVALFIT_HOME`` to keep settings, the workout database and the
sound cache somewhere else.

Usage::

    settings = load_settings()
    settings.interval_count = 6
    save_settings(settings)
    engine.reconfigure(settings.timer_configuration())
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .errors import ConfigurationError
from .timer.engine import (
    TimerConfiguration,
    DEFAULT_INTERVAL_DURATION,
    DEFAULT_INTERVAL_COUNT,
    DEFAULT_COUNT_DIRECTION,
)

logger = logging.getLogger(__name__)


def _app_support_dir() -> Path:
    override = os.environ.get("INTERVALFIT_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / "Library" / "Application Support" / "IntervalFit"


APP_SUPPORT_DIR = _app_support_dir()
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"

_TIMER_FIELDS = (
    "interval_duration", "interval_count", "count_direction", "sound_enabled",
)


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    interval_duration: int = DEFAULT_INTERVAL_DURATION   # seconds
    interval_count: int = DEFAULT_INTERVAL_COUNT
    count_direction: str = DEFAULT_COUNT_DIRECTION.value  # "up" | "down"

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100

    # ── notifications ─────────────────────────────────────────────────
    notifications_enabled: bool = True

    # ── diagnostics ───────────────────────────────────────────────────
    log_level: str = "INFO"

    # ── window ────────────────────────────────────────────────────────
    window_width: int = 520
    window_height: int = 760

    def timer_configuration(self) -> TimerConfiguration:
        """Build the engine configuration.  Raises ``ConfigurationError``."""
        return TimerConfiguration(
            interval_duration=self.interval_duration,
            interval_count=self.interval_count,
            count_direction=self.count_direction,
            sound_enabled=self.sound_enabled,
        )

    def apply_timer_configuration(self, config: TimerConfiguration) -> None:
        self.interval_duration = config.interval_duration
        self.interval_count = config.interval_count
        self.count_direction = config.count_direction.value
        self.sound_enabled = config.sound_enabled


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    if not SETTINGS_PATH.exists():
        return Settings()
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", SETTINGS_PATH, exc)
        return Settings()
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: not a JSON object", SETTINGS_PATH)
        return Settings()

    # Only use keys that exist in the dataclass
    valid_keys = {f.name for f in fields(Settings)}
    settings = Settings(**{k: v for k, v in data.items() if k in valid_keys})

    try:
        settings.timer_configuration()
    except ConfigurationError as exc:
        logger.warning("Invalid timer settings (%s); using timer defaults", exc)
        defaults = Settings()
        for name in _TIMER_FIELDS:
            setattr(settings, name, getattr(defaults, name))
    return settings


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
