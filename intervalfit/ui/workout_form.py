"""Dialog for logging a workout by hand, or editing a logged one.

Validation is left to ``intervalfit.workouts``; an ``InvalidWorkoutError``
is shown inline and the dialog stays open.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QLineEdit, QSpinBox, QComboBox, QPlainTextEdit, QPushButton,
    QWidget,
)

from ..database.models import Workout
from ..errors import InvalidWorkoutError, WorkoutNotFoundError
from ..workouts import (
    DEFAULT_INTENSITY, INTERVAL_EXERCISE_TYPE, MAX_INTENSITY, MIN_INTENSITY,
    log_workout, update_workout,
)

logger = logging.getLogger(__name__)

EXERCISE_TYPES = (
    ("cardio", "Cardio"),
    ("strength", "Strength Training"),
    ("hiit", "HIIT"),
    ("yoga", "Yoga"),
    (INTERVAL_EXERCISE_TYPE, "Interval Timer"),
    ("other", "Other"),
)
DEFAULT_DURATION_MINUTES = 30
DURATION_RANGE_MINUTES = (1, 600)


class WorkoutFormDialog(QDialog):
    """Modal form for one workout.

    Signals
    -------
    workout_saved(workout: Workout)
        Emitted with the stored record after a successful save.
    """

    workout_saved = pyqtSignal(object)

    def __init__(
        self,
        parent: QWidget | None = None,
        *,
        workout: Workout | None = None,
    ) -> None:
        super().__init__(parent)
        self._workout = workout
        self.setWindowTitle("Edit Workout" if workout is not None else "Log Workout")
        self.setMinimumWidth(360)
        self.setModal(True)

        self._build_ui()
        self._populate()

    # ══════════════════════════════════════════════════════════════════
    #  BUILD UI
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 20, 24, 20)
        root.setSpacing(14)

        form = QFormLayout()
        form.setHorizontalSpacing(20)
        form.setVerticalSpacing(10)

        self._type_combo = QComboBox()
        for value, label in EXERCISE_TYPES:
            self._type_combo.addItem(label, value)
        form.addRow("Exercise type:", self._type_combo)

        self._name_edit = QLineEdit()
        self._name_edit.setPlaceholderText("e.g. Running, Push-ups")
        form.addRow("Exercise name:", self._name_edit)

        self._duration_spin = QSpinBox()
        self._duration_spin.setRange(*DURATION_RANGE_MINUTES)
        self._duration_spin.setSuffix(" min")
        form.addRow("Duration:", self._duration_spin)

        self._intensity_spin = QSpinBox()
        self._intensity_spin.setRange(MIN_INTENSITY, MAX_INTENSITY)
        form.addRow("Intensity (1-10):", self._intensity_spin)

        self._notes_edit = QPlainTextEdit()
        self._notes_edit.setPlaceholderText("How did it go?")
        self._notes_edit.setFixedHeight(72)
        form.addRow("Notes:", self._notes_edit)

        root.addLayout(form)

        self._error_label = QLabel("")
        self._error_label.setWordWrap(True)
        self._error_label.setStyleSheet("font-size: 12px; color: #DC2626;")
        self._error_label.hide()
        root.addWidget(self._error_label)

        btn_row = QHBoxLayout()
        btn_row.addStretch()
        cancel_btn = QPushButton("Cancel")
        cancel_btn.setObjectName("secondaryButton")
        cancel_btn.clicked.connect(self.reject)
        self._save_btn = QPushButton("Save Workout")
        self._save_btn.setObjectName("primaryButton")
        self._save_btn.setDefault(True)
        self._save_btn.clicked.connect(self.save)
        btn_row.addWidget(cancel_btn)
        btn_row.addWidget(self._save_btn)
        root.addLayout(btn_row)

    def _populate(self) -> None:
        w = self._workout
        if w is None:
            self._type_combo.setCurrentIndex(0)
            self._duration_spin.setValue(DEFAULT_DURATION_MINUTES)
            self._intensity_spin.setValue(DEFAULT_INTENSITY)
            return
        index = self._type_combo.findData(w.exercise_type)
        if index < 0:
            self._type_combo.addItem(w.exercise_type.title(), w.exercise_type)
            index = self._type_combo.count() - 1
        self._type_combo.setCurrentIndex(index)
        self._name_edit.setText(w.exercise_name)
        self._duration_spin.setValue(w.duration)
        self._intensity_spin.setValue(w.intensity)
        self._notes_edit.setPlainText(w.notes or "")

    # ══════════════════════════════════════════════════════════════════
    #  SAVE
    # ══════════════════════════════════════════════════════════════════

    def values(self) -> dict:
        """Current form contents as ``log_workout`` keyword arguments."""
        return {
            "exercise_type": self._type_combo.currentData(),
            "exercise_name": self._name_edit.text(),
            "duration": self._duration_spin.value(),
            "intensity": self._intensity_spin.value(),
            "notes": self._notes_edit.toPlainText().strip() or None,
        }

    def save(self) -> bool:
        """Store the workout.  Returns False (dialog stays open) on error."""
        values = self.values()
        try:
            if self._workout is None:
                record = log_workout(**values)
            else:
                values["exercise_name"] = values["exercise_name"].strip()
                record = update_workout(self._workout.id, **values)
        except InvalidWorkoutError as exc:
            self.show_error(str(exc))
            return False
        except WorkoutNotFoundError as exc:
            logger.warning("Could not save workout: %s", exc)
            self.show_error(str(exc))
            return False

        self._error_label.hide()
        self.workout_saved.emit(record)
        self.accept()
        return True

    def show_error(self, message: str) -> None:
        self._error_label.setText(message)
        self._error_label.show()

    @property
    def error_text(self) -> str:
        return self._error_label.text() if not self._error_label.isHidden() else ""
