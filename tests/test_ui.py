"""Tests for the widgets and the main window.

Covers:
- ProgressRing state and clamping
- TimerWidget labels and button states across a workout
- SettingsDialog population, live updates and emitted configuration
- Toast messages
- WorkoutHistoryWidget refresh
- IntervalFitApp wiring: alerts, workout logging, shortcuts, close
"""

from __future__ import annotations

import json
from datetime import datetime

import pytest
from PyQt6.QtCore import QEvent, Qt
from PyQt6.QtGui import QCloseEvent, QKeyEvent

from intervalfit.settings import Settings
from intervalfit.timer.clock import ManualClock
from intervalfit.timer.engine import (
    CountDirection, IntervalTimerEngine, TimerConfiguration, TimerState,
)
from intervalfit.workouts import list_workouts, log_workout

from helpers import SignalCollector, run_ticks


def _key(key: Qt.Key) -> QKeyEvent:
    return QKeyEvent(QEvent.Type.KeyPress, key, Qt.KeyboardModifier.NoModifier)


# ═══════════════════════════════════════════════════════════════════════
#  PROGRESS RING
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestProgressRing:
    def test_defaults(self):
        from intervalfit.ui.progress_ring import ProgressRing
        ring = ProgressRing()
        assert ring.percent == 0.0
        assert ring.state_label == "READY"

    def test_percent_clamped(self):
        from intervalfit.ui.progress_ring import ProgressRing
        ring = ProgressRing()
        ring.set_percent(1.7)
        assert ring.percent == 1.0
        ring.set_percent(-0.2)
        assert ring.percent == 0.0

    def test_text_setters(self):
        from intervalfit.ui.progress_ring import ProgressRing
        ring = ProgressRing()
        ring.set_time_text("01:30")
        ring.set_interval_text("Interval 2/4")
        ring.set_state_label("COUNTING DOWN")
        assert ring.time_text == "01:30"
        assert ring.interval_text == "Interval 2/4"
        assert ring.state_label == "COUNTING DOWN"

    def test_paints_without_error(self):
        from intervalfit.ui.progress_ring import ProgressRing
        ring = ProgressRing()
        ring.apply_state(TimerState.RUNNING)
        ring.set_percent(0.5)
        ring.resize(280, 280)
        assert not ring.grab().isNull()


# ═══════════════════════════════════════════════════════════════════════
#  TIMER WIDGET
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestTimerWidget:
    def _make(self, engine):
        from intervalfit.ui.timer_widget import TimerWidget
        return TimerWidget(engine)

    def test_initial_display(self, engine):
        w = self._make(engine)
        assert w.ring.time_text == "00:05"
        assert w.ring.interval_text == "Interval 1/3"
        assert w.ring.state_label == "READY"
        assert w._start_btn.isEnabled()
        assert not w._pause_btn.isEnabled()

    def test_running_display(self, engine):
        w = self._make(engine)
        engine.start()
        run_ticks(engine, 2)
        assert w.ring.time_text == "00:03"
        assert w.ring.state_label == "COUNTING DOWN"
        assert not w._start_btn.isEnabled()
        assert w._pause_btn.isEnabled()

    def test_counting_up_label(self, engine_up):
        w = self._make(engine_up)
        engine_up.start()
        assert w.ring.state_label == "COUNTING UP"

    def test_paused_display(self, engine):
        w = self._make(engine)
        engine.start()
        run_ticks(engine, 2)
        engine.pause()
        assert w.ring.state_label == "PAUSED"
        assert w._start_btn.text() == "Resume"

    def test_interval_text_advances(self, engine):
        w = self._make(engine)
        engine.start()
        run_ticks(engine, 5)
        assert w.ring.interval_text == "Interval 2/3"

    def test_finished_display(self, engine):
        w = self._make(engine)
        engine.start()
        run_ticks(engine, 15)
        assert w.ring.state_label == "DONE"
        assert w._start_btn.text() == "Start"
        assert w._start_btn.isEnabled()

    def test_buttons_drive_engine(self, engine):
        w = self._make(engine)
        w._start_btn.click()
        assert engine.is_running
        w._pause_btn.click()
        assert not engine.is_running
        run_ticks(engine, 1)
        w._reset_btn.click()
        assert engine.current_interval == 1

    def test_toggle(self, engine):
        w = self._make(engine)
        w.toggle()
        assert engine.is_running
        w.toggle()
        assert not engine.is_running

    def test_reconfigure_refreshes_display(self, engine):
        w = self._make(engine)
        engine.reconfigure(TimerConfiguration(interval_duration=90, interval_count=6))
        assert w.ring.time_text == "01:30"
        assert w.ring.interval_text == "Interval 1/6"


# ═══════════════════════════════════════════════════════════════════════
#  SETTINGS DIALOG
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp", "settings_path")
class TestSettingsDialog:
    def test_create(self):
        from intervalfit.ui.settings_dialog import SettingsDialog
        dlg = SettingsDialog(Settings())
        assert dlg.windowTitle() == "Timer Settings"

    def test_reflects_settings(self):
        from intervalfit.ui.settings_dialog import SettingsDialog
        s = Settings(interval_duration=3 * 60, interval_count=7,
                     count_direction="up", sound_volume=50)
        dlg = SettingsDialog(s)
        assert dlg._duration_spin.value() == 3
        assert dlg._count_spin.value() == 7
        assert dlg._direction_combo.currentData() == "up"
        assert dlg._vol_slider.value() == 50

    def test_duration_change_updates_settings_and_emits(self):
        from intervalfit.ui.settings_dialog import SettingsDialog
        s = Settings()
        dlg = SettingsDialog(s)
        c = SignalCollector()
        dlg.configuration_changed.connect(c)
        dlg._duration_spin.setValue(5)
        assert s.interval_duration == 300
        assert c.last.interval_duration == 300

    def test_count_change(self):
        from intervalfit.ui.settings_dialog import SettingsDialog
        s = Settings()
        dlg = SettingsDialog(s)
        dlg._count_spin.setValue(10)
        assert s.interval_count == 10

    def test_direction_change(self):
        from intervalfit.ui.settings_dialog import SettingsDialog
        s = Settings()
        dlg = SettingsDialog(s)
        c = SignalCollector()
        dlg.configuration_changed.connect(c)
        dlg._direction_combo.setCurrentIndex(dlg._direction_combo.findData("up"))
        assert s.count_direction == "up"
        assert c.last.count_direction == CountDirection.UP

    def test_sound_toggle(self):
        from intervalfit.ui.settings_dialog import SettingsDialog
        s = Settings()
        dlg = SettingsDialog(s)
        dlg._sound_cb.setChecked(False)
        assert s.sound_enabled is False

    def test_changes_saved_to_disk(self, settings_path):
        from intervalfit.ui.settings_dialog import SettingsDialog
        dlg = SettingsDialog(Settings())
        dlg._count_spin.setValue(9)
        assert json.loads(settings_path.read_text())["interval_count"] == 9

    def test_populate_does_not_emit(self):
        from intervalfit.ui.settings_dialog import SettingsDialog
        dlg = SettingsDialog(Settings())
        c = SignalCollector()
        dlg.configuration_changed.connect(c)
        dlg._populate()
        assert len(c) == 0

    def test_volume_slider_updates_label(self):
        from intervalfit.ui.settings_dialog import SettingsDialog
        s = Settings()
        dlg = SettingsDialog(s)
        dlg._vol_slider.setValue(85)
        assert dlg._vol_label.text() == "85%"
        assert s.sound_volume == 85

    def test_sound_preview_callback(self):
        from intervalfit.ui.settings_dialog import SettingsDialog
        calls: list[bool] = []
        dlg = SettingsDialog(Settings(), sound_preview_callback=lambda: calls.append(True))
        dlg._on_volume_released()
        assert len(calls) == 1


# ═══════════════════════════════════════════════════════════════════════
#  TOAST
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestToast:
    def test_hidden_until_shown(self):
        from intervalfit.ui.toast import Toast
        toast = Toast()
        assert not toast.isVisible()

    def test_show_message(self):
        from PyQt6.QtWidgets import QWidget
        from intervalfit.ui.toast import Toast
        parent = QWidget()
        parent.resize(400, 600)
        toast = Toast(parent)
        toast.show_message("Interval 1 complete! Starting next interval.")
        assert toast.message == "Interval 1 complete! Starting next interval."
        assert toast._dismiss_timer.isActive()

    def test_new_message_replaces_old(self):
        from intervalfit.ui.toast import Toast
        toast = Toast()
        toast.show_message("first")
        toast.show_message("second")
        assert toast.message == "second"

    def test_fade_out_hides(self):
        from intervalfit.ui.toast import Toast
        toast = Toast()
        toast.show_message("bye")
        toast._fade_out()
        toast._on_fade_finished()
        assert toast.isHidden()


# ═══════════════════════════════════════════════════════════════════════
#  WORKOUT HISTORY
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestWorkoutHistory:
    def test_empty(self):
        from intervalfit.ui.workout_history import WorkoutHistoryWidget
        w = WorkoutHistoryWidget()
        w.refresh()
        assert w.row_count == 0
        assert w.card_value("workouts") == "0"

    def test_shows_logged_workouts(self):
        from intervalfit.ui.workout_history import WorkoutHistoryWidget
        today = datetime.now()
        log_workout("cardio", "Run", 30, date=today)
        log_workout("strength", "Push-ups", 10, intensity=10, date=today)
        w = WorkoutHistoryWidget()
        w.refresh(today.date())
        assert w.row_count == 2
        assert w.card_value("workouts") == "2"
        assert w.card_value("minutes") == "40"
        assert w.card_value("calories") == str(150 + 100)
        assert w.card_value("streak") == "1"

    def test_recent_rows_capped(self):
        from intervalfit.ui.workout_history import RECENT_LIMIT, WorkoutHistoryWidget
        for i in range(RECENT_LIMIT + 3):
            log_workout("cardio", f"Run {i}", 5)
        w = WorkoutHistoryWidget()
        w.refresh()
        assert w.row_count == RECENT_LIMIT
        assert w.card_value("workouts") == str(RECENT_LIMIT + 3)

    def test_refresh_replaces_rows(self):
        from intervalfit.ui.workout_history import WorkoutHistoryWidget
        log_workout("cardio", "Run", 5)
        w = WorkoutHistoryWidget()
        w.refresh()
        w.refresh()
        assert w.row_count == 1

    def test_form_dialog_save_refreshes(self):
        from intervalfit.ui.workout_history import WorkoutHistoryWidget
        w = WorkoutHistoryWidget()
        w.refresh()
        changed = SignalCollector()
        w.workouts_changed.connect(changed)
        dlg = w.make_form_dialog()
        dlg._name_edit.setText("Rowing")
        dlg.save()
        assert w.row_count == 1
        assert w.card_value("workouts") == "1"
        assert len(changed) == 1

    def test_delete_button_removes_row(self):
        from PyQt6.QtWidgets import QPushButton
        from intervalfit.ui.workout_history import WorkoutHistoryWidget
        keep = log_workout("cardio", "Keep", 5, date=datetime(2024, 1, 1))
        log_workout("cardio", "Drop", 5, date=datetime(2024, 1, 2))
        w = WorkoutHistoryWidget()
        w.refresh()
        changed = SignalCollector()
        w.workouts_changed.connect(changed)
        w._row_widgets[0].findChild(QPushButton, "deleteButton").click()
        assert w.row_ids == [keep.id]
        assert [x.exercise_name for x in list_workouts()] == ["Keep"]
        assert len(changed) == 1

    def test_delete_missing_workout_refreshes(self):
        from intervalfit.ui.workout_history import WorkoutHistoryWidget
        w = WorkoutHistoryWidget()
        w.refresh()
        w.delete(4242)
        assert w.row_count == 0


# ═══════════════════════════════════════════════════════════════════════
#  WORKOUT FORM
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestWorkoutForm:
    def test_log_defaults(self):
        from intervalfit.ui.workout_form import WorkoutFormDialog
        dlg = WorkoutFormDialog()
        assert dlg.windowTitle() == "Log Workout"
        values = dlg.values()
        assert values["exercise_type"] == "cardio"
        assert values["duration"] == 30
        assert values["intensity"] == 5
        assert values["notes"] is None

    def test_save_logs_workout(self):
        from intervalfit.ui.workout_form import WorkoutFormDialog
        dlg = WorkoutFormDialog()
        saved = SignalCollector()
        dlg.workout_saved.connect(saved)
        dlg._type_combo.setCurrentIndex(dlg._type_combo.findData("strength"))
        dlg._name_edit.setText("Push-ups")
        dlg._duration_spin.setValue(12)
        dlg._intensity_spin.setValue(8)
        dlg._notes_edit.setPlainText("  felt strong ")
        assert dlg.save() is True
        workouts = list_workouts()
        assert len(workouts) == 1
        w = workouts[0]
        assert (w.exercise_type, w.exercise_name, w.duration, w.intensity) == (
            "strength", "Push-ups", 12, 8,
        )
        assert w.notes == "felt strong"
        assert saved.last.id == w.id

    def test_blank_name_shows_error(self):
        from intervalfit.ui.workout_form import WorkoutFormDialog
        dlg = WorkoutFormDialog()
        saved = SignalCollector()
        dlg.workout_saved.connect(saved)
        dlg._name_edit.setText("   ")
        assert dlg.save() is False
        assert "exercise_name" in dlg.error_text
        assert list_workouts() == []
        assert len(saved) == 0

    def test_error_cleared_after_successful_save(self):
        from intervalfit.ui.workout_form import WorkoutFormDialog
        dlg = WorkoutFormDialog()
        dlg.save()
        assert dlg.error_text
        dlg._name_edit.setText("Run")
        assert dlg.save() is True
        assert dlg.error_text == ""

    def test_edit_prefills_and_updates(self):
        from intervalfit.ui.workout_form import WorkoutFormDialog
        w = log_workout("yoga", "Flow", 45, intensity=3, notes="calm")
        dlg = WorkoutFormDialog(workout=w)
        assert dlg.windowTitle() == "Edit Workout"
        assert dlg.values() == {
            "exercise_type": "yoga", "exercise_name": "Flow",
            "duration": 45, "intensity": 3, "notes": "calm",
        }
        dlg._duration_spin.setValue(60)
        assert dlg.save() is True
        stored = list_workouts()
        assert len(stored) == 1
        assert stored[0].duration == 60

    def test_edit_keeps_unlisted_exercise_type(self):
        from intervalfit.ui.workout_form import WorkoutFormDialog
        w = log_workout("climbing", "Bouldering", 50)
        dlg = WorkoutFormDialog(workout=w)
        assert dlg.values()["exercise_type"] == "climbing"

    def test_edit_of_deleted_workout_shows_error(self):
        from intervalfit.ui.workout_form import WorkoutFormDialog
        from intervalfit.workouts import delete_workout
        w = log_workout("cardio", "Run", 10)
        dlg = WorkoutFormDialog(workout=w)
        delete_workout(w.id)
        assert dlg.save() is False
        assert "not found" in dlg.error_text


# ═══════════════════════════════════════════════════════════════════════
#  MAIN WINDOW
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp", "settings_path")
class TestIntervalFitApp:
    def _make_app(self, tmp_path, **overrides):
        from intervalfit.app import IntervalFitApp
        fields = {"interval_duration": 3, "interval_count": 2}
        fields.update(overrides)
        clock = ManualClock()
        window = IntervalFitApp(Settings(**fields), clock=clock, sounds_dir=tmp_path)
        return window, clock

    def test_engine_uses_settings(self, tmp_path):
        window, clock = self._make_app(tmp_path, count_direction="up")
        assert isinstance(window.engine, IntervalTimerEngine)
        assert window.engine.clock is clock
        assert window.engine.interval_duration == 3
        assert window.engine.count_direction == CountDirection.UP

    def test_interval_completion_shows_toast(self, tmp_path):
        window, clock = self._make_app(tmp_path)
        window.engine.start()
        clock.advance(3)
        assert window.toast.message == "Interval 1 complete! Starting next interval."

    def test_notifications_disabled(self, tmp_path):
        window, clock = self._make_app(tmp_path, notifications_enabled=False)
        window.engine.start()
        clock.advance(3)
        assert window.toast.message == ""

    def test_workout_completion_logs_workout(self, tmp_path):
        window, clock = self._make_app(tmp_path)
        window.engine.start()
        clock.advance(6)
        assert window.engine.is_finished
        assert window.toast.message == "Workout complete!"
        workouts = list_workouts()
        assert len(workouts) == 1
        assert workouts[0].notes == "2 x 3s intervals, counting down"
        assert window.history.card_value("workouts") == "1"

    def test_logged_minutes_follow_time_run(self, tmp_path):
        window, clock = self._make_app(tmp_path, interval_duration=120, interval_count=1)
        window.engine.start()
        clock.advance(100)
        window.apply_configuration(TimerConfiguration(interval_duration=30, interval_count=1))
        clock.advance(100)
        assert window.engine.is_finished
        assert window.engine.workout_seconds == 120
        assert list_workouts()[0].duration == 2

    def test_log_workout_action_switches_to_history(self, tmp_path, monkeypatch):
        from intervalfit.ui.workout_form import WorkoutFormDialog
        window, _ = self._make_app(tmp_path)
        opened = []
        monkeypatch.setattr(WorkoutFormDialog, "exec", lambda self: opened.append(self) or 0)
        window._open_log_workout()
        assert window._tabs.currentWidget() is window.history
        assert len(opened) == 1

    def test_pause_logs_nothing(self, tmp_path):
        window, clock = self._make_app(tmp_path)
        window.engine.start()
        clock.advance(4)
        window.engine.pause()
        assert list_workouts() == []

    def test_apply_configuration(self, tmp_path):
        window, _ = self._make_app(tmp_path)
        window.apply_configuration(
            TimerConfiguration(interval_duration=60, interval_count=5, sound_enabled=False)
        )
        assert window.engine.interval_count == 5
        assert window.engine.clock_value == 60
        assert window._sound_manager.enabled is False

    def test_space_toggles(self, tmp_path):
        window, _ = self._make_app(tmp_path)
        window.keyPressEvent(_key(Qt.Key.Key_Space))
        assert window.engine.is_running
        window.keyPressEvent(_key(Qt.Key.Key_Space))
        assert not window.engine.is_running

    def test_escape_resets(self, tmp_path):
        window, clock = self._make_app(tmp_path)
        window.engine.start()
        clock.advance(4)
        window.keyPressEvent(_key(Qt.Key.Key_Escape))
        assert not window.engine.is_running
        assert window.engine.current_interval == 1
        assert window.engine.clock_value == 3

    def test_close_stops_timer_and_saves(self, tmp_path, settings_path):
        window, clock = self._make_app(tmp_path)
        window.engine.start()
        window.closeEvent(QCloseEvent())
        assert not clock.is_active
        saved = json.loads(settings_path.read_text())
        assert saved["interval_duration"] == 3
        assert saved["window_width"] == window.width()
