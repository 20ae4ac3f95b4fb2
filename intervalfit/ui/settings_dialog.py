"""Timer settings dialog for IntervalFit.

A modal dialog for interval duration, interval count, count direction
and sound.  Every change is saved to disk immediately and the resulting
timer configuration is emitted so the app can reconfigure the engine.
"""

from __future__ import annotations

import logging
from typing import Callable

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QSpinBox, QSlider, QCheckBox, QComboBox, QPushButton,
    QFrame, QWidget,
)

from ..errors import ConfigurationError
from ..settings import Settings, save_settings
from ..timer.engine import CountDirection

logger = logging.getLogger(__name__)

DURATION_RANGE_MINUTES = (1, 60)
COUNT_RANGE = (1, 20)


class SettingsDialog(QDialog):
    """Modal dialog for timer preferences.

    Signals
    -------
    configuration_changed(config: TimerConfiguration)
        Emitted after any timer or sound setting changes.
    """

    configuration_changed = pyqtSignal(object)

    def __init__(
        self,
        settings: Settings,
        parent: QWidget | None = None,
        *,
        sound_preview_callback: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Timer Settings")
        self.setMinimumWidth(380)
        self.setModal(True)

        self._settings = settings
        self._sound_preview = sound_preview_callback
        self._populating = False

        self._build_ui()
        self._populate()

    # ══════════════════════════════════════════════════════════════════
    #  BUILD UI
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 20, 24, 20)
        root.setSpacing(16)

        # ── Timer section ────────────────────────────────────────────
        root.addWidget(self._section_label("Timer"))
        timer_form = QFormLayout()
        timer_form.setHorizontalSpacing(20)
        timer_form.setVerticalSpacing(10)

        self._duration_spin = QSpinBox()
        self._duration_spin.setRange(*DURATION_RANGE_MINUTES)
        self._duration_spin.setSuffix(" min")
        self._duration_spin.valueChanged.connect(self._on_timer_changed)
        timer_form.addRow("Interval duration:", self._duration_spin)

        self._count_spin = QSpinBox()
        self._count_spin.setRange(*COUNT_RANGE)
        self._count_spin.valueChanged.connect(self._on_timer_changed)
        timer_form.addRow("Number of intervals:", self._count_spin)

        self._direction_combo = QComboBox()
        self._direction_combo.addItem("Count down", CountDirection.DOWN.value)
        self._direction_combo.addItem("Count up", CountDirection.UP.value)
        self._direction_combo.currentIndexChanged.connect(self._on_timer_changed)
        timer_form.addRow("Direction:", self._direction_combo)

        root.addLayout(timer_form)
        root.addWidget(self._separator())

        # ── Sound section ────────────────────────────────────────────
        root.addWidget(self._section_label("Sound"))
        snd_form = QFormLayout()
        snd_form.setHorizontalSpacing(20)
        snd_form.setVerticalSpacing(10)

        self._sound_cb = QCheckBox("Enable sound alerts")
        self._sound_cb.toggled.connect(self._on_timer_changed)
        snd_form.addRow("", self._sound_cb)

        vol_row = QHBoxLayout()
        vol_row.setSpacing(10)
        self._vol_slider = QSlider(Qt.Orientation.Horizontal)
        self._vol_slider.setRange(0, 100)
        self._vol_label = QLabel("70%")
        self._vol_label.setMinimumWidth(36)
        self._vol_slider.valueChanged.connect(self._on_volume_changed)
        self._vol_slider.sliderReleased.connect(self._on_volume_released)
        vol_row.addWidget(self._vol_slider)
        vol_row.addWidget(self._vol_label)
        vol_wrapper = QWidget()
        vol_wrapper.setLayout(vol_row)
        snd_form.addRow("Volume:", vol_wrapper)

        root.addLayout(snd_form)

        # ── close button ─────────────────────────────────────────────
        root.addStretch()
        btn_row = QHBoxLayout()
        btn_row.addStretch()
        close_btn = QPushButton("Close")
        close_btn.setObjectName("secondaryButton")
        close_btn.clicked.connect(self.accept)
        btn_row.addWidget(close_btn)
        root.addLayout(btn_row)

    @staticmethod
    def _section_label(text: str) -> QLabel:
        lbl = QLabel(text)
        lbl.setStyleSheet("font-size: 15px; font-weight: 700; margin-top: 4px;")
        return lbl

    @staticmethod
    def _separator() -> QFrame:
        line = QFrame()
        line.setFrameShape(QFrame.Shape.HLine)
        line.setFixedHeight(1)
        return line

    # ══════════════════════════════════════════════════════════════════
    #  POPULATE FROM SETTINGS
    # ══════════════════════════════════════════════════════════════════

    def _populate(self) -> None:
        s = self._settings
        self._populating = True
        try:
            lo, hi = DURATION_RANGE_MINUTES
            self._duration_spin.setValue(max(lo, min(hi, s.interval_duration // 60)))
            self._count_spin.setValue(s.interval_count)
            index = self._direction_combo.findData(s.count_direction)
            self._direction_combo.setCurrentIndex(max(0, index))
            self._sound_cb.setChecked(s.sound_enabled)
            self._vol_slider.setValue(s.sound_volume)
            self._vol_label.setText(f"{s.sound_volume}%")
        finally:
            self._populating = False

    # ══════════════════════════════════════════════════════════════════
    #  CHANGE HANDLERS (saved immediately)
    # ══════════════════════════════════════════════════════════════════

    def _on_timer_changed(self) -> None:
        if self._populating:
            return
        s = self._settings
        s.interval_duration = self._duration_spin.value() * 60
        s.interval_count = self._count_spin.value()
        s.count_direction = self._direction_combo.currentData()
        s.sound_enabled = self._sound_cb.isChecked()
        try:
            config = s.timer_configuration()
        except ConfigurationError:
            # Spin box ranges make this unreachable; log and keep the old one.
            logger.exception("Settings dialog produced an invalid configuration")
            return
        self._save()
        self.configuration_changed.emit(config)

    def _on_volume_changed(self, value: int) -> None:
        self._vol_label.setText(f"{value}%")
        if self._populating:
            return
        self._settings.sound_volume = value
        self._save()

    def _on_volume_released(self) -> None:
        """Play a click sound when the user releases the volume slider."""
        if self._sound_preview:
            self._sound_preview()

    def _save(self) -> None:
        save_settings(self._settings)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def settings(self) -> Settings:
        return self._settings
