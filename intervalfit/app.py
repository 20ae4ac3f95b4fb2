"""Main application window for IntervalFit."""

from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QTabWidget, QStatusBar,
)
from sqlalchemy.exc import SQLAlchemyError

from .audio.sounds import SoundManager
from .errors import IntervalFitError
from .settings import Settings, load_settings, save_settings
from .stats import format_time
from .timer.clock import Clock
from .timer.engine import IntervalTimerEngine, TimerConfiguration, TimerState
from .ui.settings_dialog import SettingsDialog
from .ui.timer_widget import TimerWidget
from .ui.toast import Toast
from .ui.workout_history import WorkoutHistoryWidget
from .workouts import log_interval_workout

logger = logging.getLogger(__name__)


_STYLESHEET = """
QMainWindow, QDialog { background-color: #F9FAFB; }
QFrame#card { background-color: #FFFFFF; border-radius: 12px; }
QPushButton#primaryButton {
    background-color: #F97316; color: white; border: none;
    border-radius: 18px; padding: 8px 22px; font-weight: 600;
}
QPushButton#primaryButton:disabled { background-color: #FDBA74; }
QPushButton#secondaryButton {
    background-color: white; color: #1F2937; border: 1px solid #D1D5DB;
    border-radius: 18px; padding: 8px 22px;
}
QPushButton#secondaryButton:disabled { color: #9CA3AF; }
"""


class IntervalFitApp(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        clock: Clock | None = None,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("IntervalFit")
        self.setStyleSheet(_STYLESHEET)

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings if settings is not None else load_settings()
        self.resize(self._settings.window_width, self._settings.window_height)
        config = self._settings.timer_configuration()

        # ── engine + sound ────────────────────────────────────────────
        self._timer_engine = IntervalTimerEngine(config, self, clock=clock)
        self._sound_manager = SoundManager(parent=self, sounds_dir=sounds_dir)
        self._apply_sound_settings(config)

        # ── central widget ────────────────────────────────────────────
        central = QWidget()
        self.setCentralWidget(central)
        root_layout = QVBoxLayout(central)
        root_layout.setContentsMargins(16, 12, 16, 12)

        self._tabs = QTabWidget(central)
        root_layout.addWidget(self._tabs)

        self._timer_widget = TimerWidget(self._timer_engine, self._tabs)
        self._tabs.addTab(self._timer_widget, "Timer")

        self._history = WorkoutHistoryWidget(self._tabs)
        self._history.refresh()
        self._tabs.addTab(self._history, "History")

        # Toast overlays the tab content
        self._toast = Toast(central)

        self._status_bar = QStatusBar(self)
        self.setStatusBar(self._status_bar)
        self._status_bar.showMessage(self._describe(config))

        # ── menu + shortcuts ──────────────────────────────────────────
        self._build_menu_bar()

        # ── wire signals ──────────────────────────────────────────────
        self._timer_engine.state_changed.connect(self._on_state_changed)
        self._timer_engine.interval_completed.connect(self._on_interval_completed)
        self._timer_engine.workout_completed.connect(self._on_workout_completed)

    # ══════════════════════════════════════════════════════════════════
    #  PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def engine(self) -> IntervalTimerEngine:
        return self._timer_engine

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def toast(self) -> Toast:
        return self._toast

    @property
    def history(self) -> WorkoutHistoryWidget:
        return self._history

    # ══════════════════════════════════════════════════════════════════
    #  MENU
    # ══════════════════════════════════════════════════════════════════

    def _build_menu_bar(self) -> None:
        menu = self.menuBar().addMenu("&Timer")

        settings_action = QAction("Settings…", self)
        settings_action.setShortcut(QKeySequence("Ctrl+,"))
        settings_action.triggered.connect(self._open_settings)
        menu.addAction(settings_action)

        reset_action = QAction("Reset", self)
        reset_action.setShortcut(QKeySequence("Ctrl+R"))
        reset_action.triggered.connect(self._timer_engine.reset)
        menu.addAction(reset_action)

        log_menu = self.menuBar().addMenu("&Workouts")
        log_action = QAction("Log Workout…", self)
        log_action.setShortcut(QKeySequence("Ctrl+L"))
        log_action.triggered.connect(self._open_log_workout)
        log_menu.addAction(log_action)

    # ══════════════════════════════════════════════════════════════════
    #  ALERTS
    # ══════════════════════════════════════════════════════════════════

    def _play_sound(self, name: str) -> None:
        """Play a sound, gated by the configuration's sound flag."""
        if not self._timer_engine.configuration.sound_enabled:
            return
        self._sound_manager.play(name)

    def _notify(self, message: str) -> None:
        if self._settings.notifications_enabled:
            self._toast.show_message(message)
        self._status_bar.showMessage(message)

    # ══════════════════════════════════════════════════════════════════
    #  TIMER SIGNALS
    # ══════════════════════════════════════════════════════════════════

    def _on_state_changed(self, state: TimerState) -> None:
        if state == TimerState.RUNNING:
            self._play_sound("start")
            self._status_bar.showMessage("Go!")

    def _on_interval_completed(self, interval: int) -> None:
        self._notify(f"Interval {interval} complete! Starting next interval.")
        self._play_sound("interval_complete")

    def _on_workout_completed(self) -> None:
        self._notify("Workout complete!")
        self._play_sound("workout_complete")
        try:
            log_interval_workout(
                self._timer_engine.configuration,
                seconds=self._timer_engine.workout_seconds,
            )
        except (IntervalFitError, SQLAlchemyError):
            logger.exception("Could not log the finished workout")
            return
        self._history.refresh()

    # ══════════════════════════════════════════════════════════════════
    #  SETTINGS
    # ══════════════════════════════════════════════════════════════════

    def _open_settings(self) -> None:
        """Open the settings dialog; changes apply as they are made."""

        def _preview_click():
            self._sound_manager.set_volume(self._settings.sound_volume)
            self._sound_manager.play("click")

        dlg = SettingsDialog(
            self._settings,
            parent=self,
            sound_preview_callback=_preview_click,
        )
        dlg.configuration_changed.connect(self.apply_configuration)
        dlg.exec()

    def _open_log_workout(self) -> None:
        self._tabs.setCurrentWidget(self._history)
        self._history.open_log_dialog()

    def apply_configuration(self, config: TimerConfiguration) -> None:
        """Push a new timer configuration into the engine and sound."""
        self._timer_engine.reconfigure(config)
        self._apply_sound_settings(config)
        self._status_bar.showMessage(self._describe(config))

    def _apply_sound_settings(self, config: TimerConfiguration) -> None:
        self._sound_manager.set_volume(self._settings.sound_volume)
        self._sound_manager.set_enabled(config.sound_enabled)

    @staticmethod
    def _describe(config: TimerConfiguration) -> str:
        return (
            f"{config.interval_count} × {format_time(config.interval_duration)}, "
            f"counting {config.count_direction.value}"
        )

    # ══════════════════════════════════════════════════════════════════
    #  KEYBOARD / WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Space toggles start/pause, Escape resets."""
        key = event.key()
        if key == Qt.Key.Key_Space and not event.modifiers():
            self._timer_widget.toggle()
            event.accept()
            return
        if key == Qt.Key.Key_Escape:
            self._timer_engine.reset()
            event.accept()
            return
        super().keyPressEvent(event)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._timer_engine.shutdown()
        self._settings.window_width = self.width()
        self._settings.window_height = self.height()
        save_settings(self._settings)
        event.accept()
