"""Main timer display widget for the Timer tab.

Layout (top → bottom):
    - ProgressRing (time, state label, interval counter)
    - Start / Pause / Reset button row
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QFrame, QSizePolicy,
)

from ..stats import format_time
from ..timer.engine import IntervalTimerEngine, TimerState, CountDirection
from .progress_ring import ProgressRing


class TimerWidget(QWidget):
    """Passive view of an ``IntervalTimerEngine`` plus its controls."""

    def __init__(
        self, engine: IntervalTimerEngine, parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._build_ui()
        self._connect_signals()
        self._on_state_changed(engine.state)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 20, 24, 24)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        ring_row = QHBoxLayout()
        ring_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._ring = ProgressRing(card)
        self._ring.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
        self._ring.setFixedSize(280, 280)
        ring_row.addWidget(self._ring)
        layout.addLayout(ring_row)

        layout.addSpacing(12)

        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._start_btn = QPushButton("Start", card)
        self._start_btn.setObjectName("primaryButton")
        self._pause_btn = QPushButton("Pause", card)
        self._pause_btn.setObjectName("secondaryButton")
        self._reset_btn = QPushButton("Reset", card)
        self._reset_btn.setObjectName("secondaryButton")

        btn_row.addWidget(self._start_btn)
        btn_row.addWidget(self._pause_btn)
        btn_row.addWidget(self._reset_btn)
        layout.addLayout(btn_row)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_btn.clicked.connect(self._engine.start)
        self._pause_btn.clicked.connect(self._engine.pause)
        self._reset_btn.clicked.connect(self._engine.reset)

        self._engine.tick.connect(self._refresh_display)
        self._engine.state_changed.connect(self._on_state_changed)
        self._engine.configuration_changed.connect(
            lambda _config: self._refresh_display()
        )

    # ── slots ─────────────────────────────────────────────────────────────

    def toggle(self) -> None:
        """Start when stopped, pause when running (Space shortcut)."""
        if self._engine.is_running:
            self._engine.pause()
        else:
            self._engine.start()

    def _on_state_changed(self, state: TimerState) -> None:
        running = state == TimerState.RUNNING
        self._start_btn.setEnabled(not running)
        self._pause_btn.setEnabled(running)
        self._start_btn.setText("Resume" if self._is_paused_midway() else "Start")
        self._ring.apply_state(state)
        self._refresh_display()

    def _is_paused_midway(self) -> bool:
        snap = self._engine.snapshot()
        if snap.running or snap.finished:
            return False
        return snap.current_interval > 1 or snap.elapsed_seconds > 0

    def _refresh_display(self, *_args) -> None:
        snap = self._engine.snapshot()
        self._ring.set_time_text(format_time(snap.clock_value))
        self._ring.set_interval_text(
            f"Interval {snap.current_interval}/{snap.interval_count}"
        )
        if snap.finished:
            label = "DONE"
        elif snap.running:
            label = "COUNTING UP" if snap.count_direction == CountDirection.UP else "COUNTING DOWN"
        elif self._is_paused_midway():
            label = "PAUSED"
        else:
            label = "READY"
        self._ring.set_state_label(label)
        self._ring.set_percent(snap.percent_complete)

    # ── introspection (used by the app and tests) ─────────────────────────

    @property
    def ring(self) -> ProgressRing:
        return self._ring
