"""Workout history widget: summary stats plus the most recent workouts.

Shown in the History tab.  ``refresh()`` reloads from the database; the
app calls it whenever a workout is logged.  Workouts can also be logged
by hand, edited or deleted from here.
"""

from __future__ import annotations

import logging
from datetime import date

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QLabel, QFrame, QSizePolicy,
    QPushButton,
)

from ..database.models import Workout
from ..errors import WorkoutNotFoundError
from ..stats import calories_burned, summarize
from ..workouts import delete_workout, list_workouts
from .workout_form import WorkoutFormDialog

logger = logging.getLogger(__name__)

RECENT_LIMIT = 10


class _StatCard(QFrame):
    """Small titled number."""

    def __init__(self, title: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("card")
        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 8, 12, 8)
        self._value = QLabel("0", self)
        self._value.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._value.setStyleSheet("font-size: 22px; font-weight: 700;")
        caption = QLabel(title, self)
        caption.setAlignment(Qt.AlignmentFlag.AlignCenter)
        caption.setStyleSheet("font-size: 11px; color: #6B7280;")
        layout.addWidget(self._value)
        layout.addWidget(caption)

    def set_value(self, text: str) -> None:
        self._value.setText(text)

    @property
    def value(self) -> str:
        return self._value.text()


class WorkoutHistoryWidget(QWidget):
    """Progress summary and recent workouts.

    Signals
    -------
    workouts_changed()
        Emitted after a workout is logged, edited or deleted here.
    """

    workouts_changed = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._row_widgets: list[QWidget] = []
        self._row_ids: list[int] = []
        self._build_ui()

    # ── build ─────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(8)

        grid = QGridLayout()
        grid.setSpacing(8)
        self._cards = {
            "workouts": _StatCard("Workouts", self),
            "minutes": _StatCard("Minutes", self),
            "calories": _StatCard("Calories", self),
            "streak": _StatCard("Day streak", self),
        }
        for i, card in enumerate(self._cards.values()):
            grid.addWidget(card, i // 2, i % 2)
        layout.addLayout(grid)

        header_row = QHBoxLayout()
        header = QLabel("Recent Workouts")
        header.setStyleSheet("font-size: 13px; font-weight: 600;")
        header_row.addWidget(header)
        header_row.addStretch()
        self._log_btn = QPushButton("Log Workout…", self)
        self._log_btn.setObjectName("primaryButton")
        self._log_btn.clicked.connect(self.open_log_dialog)
        header_row.addWidget(self._log_btn)
        layout.addLayout(header_row)

        self._rows_container = QVBoxLayout()
        self._rows_container.setSpacing(4)
        layout.addLayout(self._rows_container)

        self._empty_label = QLabel("No workouts logged yet.")
        self._empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._empty_label.setStyleSheet("font-size: 12px; color: #6B7280;")
        layout.addWidget(self._empty_label)
        layout.addStretch()

    # ── refresh ───────────────────────────────────────────────────────

    def refresh(self, today: date | None = None) -> None:
        """Reload workouts from the database."""
        for w in self._row_widgets:
            w.setParent(None)
            w.deleteLater()
        self._row_widgets.clear()
        self._row_ids.clear()

        workouts = list_workouts()
        summary = summarize(workouts, today)
        self._cards["workouts"].set_value(str(summary.total_workouts))
        self._cards["minutes"].set_value(str(summary.total_minutes))
        self._cards["calories"].set_value(str(summary.total_calories))
        self._cards["streak"].set_value(str(summary.streak_days))

        recent = workouts[:RECENT_LIMIT]
        self._empty_label.setVisible(not recent)
        for workout in recent:
            row = self._make_row(workout)
            self._rows_container.addWidget(row)
            self._row_widgets.append(row)
            self._row_ids.append(workout.id)

    @property
    def row_count(self) -> int:
        return len(self._row_widgets)

    @property
    def row_ids(self) -> list[int]:
        """Workout ids of the visible rows, top to bottom."""
        return list(self._row_ids)

    def card_value(self, key: str) -> str:
        return self._cards[key].value

    # ── log / edit / delete ───────────────────────────────────────────

    def make_form_dialog(self, workout: Workout | None = None) -> WorkoutFormDialog:
        """Form dialog wired to refresh this widget once it saves."""
        dlg = WorkoutFormDialog(self, workout=workout)
        dlg.workout_saved.connect(self._on_workout_saved)
        return dlg

    def open_log_dialog(self) -> None:
        self.make_form_dialog().exec()

    def open_edit_dialog(self, workout: Workout) -> None:
        self.make_form_dialog(workout).exec()

    def delete(self, workout_id: int) -> None:
        try:
            delete_workout(workout_id)
        except WorkoutNotFoundError:
            # Already gone; the refresh below drops the stale row.
            logger.warning("Workout %d was already deleted", workout_id)
        self.refresh()
        self.workouts_changed.emit()

    def _on_workout_saved(self, _workout: Workout) -> None:
        self.refresh()
        self.workouts_changed.emit()

    # ── row builder ───────────────────────────────────────────────────

    def _make_row(self, workout: Workout) -> QWidget:
        frame = QFrame(self)
        row = QHBoxLayout(frame)
        row.setContentsMargins(8, 4, 8, 4)
        row.setSpacing(8)

        name_lbl = QLabel(workout.exercise_name)
        name_lbl.setSizePolicy(
            QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Preferred,
        )
        detail_lbl = QLabel(
            f"{workout.duration}m · "
            f"{calories_burned(workout.duration, workout.intensity)} kcal"
        )
        detail_lbl.setStyleSheet("font-size: 12px; color: #6B7280;")
        date_lbl = QLabel(workout.date.strftime("%b %d"))
        date_lbl.setStyleSheet("font-size: 11px; color: #9CA3AF;")
        date_lbl.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)

        edit_btn = QPushButton("Edit", frame)
        edit_btn.setObjectName("editButton")
        edit_btn.clicked.connect(lambda _=False, w=workout: self.open_edit_dialog(w))
        delete_btn = QPushButton("Delete", frame)
        delete_btn.setObjectName("deleteButton")
        delete_btn.clicked.connect(lambda _=False, wid=workout.id: self.delete(wid))

        row.addWidget(name_lbl)
        row.addWidget(detail_lbl)
        row.addWidget(date_lbl)
        row.addWidget(edit_btn)
        row.addWidget(delete_btn)
        return frame
