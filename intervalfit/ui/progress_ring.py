"""Circular progress ring widget rendered with QPainter.

- Fills clockwise as the current interval progresses.
- Orange while running, grey while stopped.
- Shows MM:SS in bold at the centre, a state label and "Interval i/n".
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, QRectF, QVariantAnimation, QEasingCurve
from PyQt6.QtGui import QPainter, QPen, QColor, QFont
from PyQt6.QtWidgets import QWidget

from ..timer.engine import TimerState


STATE_COLORS: dict[TimerState, str] = {
    TimerState.STOPPED: "#7A7A8E",
    TimerState.RUNNING: "#F97316",
}


class ProgressRing(QWidget):
    """Custom-painted circular timer ring."""

    RING_DIAMETER = 240
    RING_THICKNESS = 12

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumSize(self.RING_DIAMETER + 32, self.RING_DIAMETER + 32)

        self._percent: float = 0.0
        self._display_percent: float = 0.0
        self._time_text: str = "00:00"
        self._state_label: str = "READY"
        self._interval_text: str = "Interval 1/1"
        self._timer_state: TimerState = TimerState.STOPPED

        self._arc_color = QColor(STATE_COLORS[TimerState.STOPPED])
        self._track_color = QColor("#E6E6E6")
        self._text_color = QColor("#1F2937")
        self._muted_color = QColor("#6B7280")

        self._arc_anim = QVariantAnimation(self)
        self._arc_anim.setDuration(300)
        self._arc_anim.setEasingCurve(QEasingCurve.Type.OutCubic)
        self._arc_anim.valueChanged.connect(self._on_arc_anim)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC API
    # ══════════════════════════════════════════════════════════════════

    def set_percent(self, pct: float) -> None:
        """Update the arc fill (0..1). Animates when moving forward."""
        pct = max(0.0, min(1.0, pct))
        self._arc_anim.stop()
        if pct < self._percent:
            # New interval: snap back instead of sweeping backwards
            self._display_percent = pct
            self.update()
        else:
            self._arc_anim.setStartValue(self._display_percent)
            self._arc_anim.setEndValue(pct)
            self._arc_anim.start()
        self._percent = pct

    def set_time_text(self, text: str) -> None:
        self._time_text = text
        self.update()

    def set_state_label(self, text: str) -> None:
        self._state_label = text
        self.update()

    def set_interval_text(self, text: str) -> None:
        self._interval_text = text
        self.update()

    def apply_state(self, state: TimerState) -> None:
        self._timer_state = state
        self._arc_color = QColor(STATE_COLORS[state])
        self.update()

    @property
    def percent(self) -> float:
        return self._percent

    @property
    def time_text(self) -> str:
        return self._time_text

    @property
    def state_label(self) -> str:
        return self._state_label

    @property
    def interval_text(self) -> str:
        return self._interval_text

    # ══════════════════════════════════════════════════════════════════
    #  PAINTING
    # ══════════════════════════════════════════════════════════════════

    def _on_arc_anim(self, value: object) -> None:
        self._display_percent = float(value)  # type: ignore[arg-type]
        self.update()

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        w = self.width()
        h = self.height()
        cx, cy = w / 2, h / 2
        diameter = max(100, min(w, h) - 32)
        radius = diameter / 2
        ring_rect = QRectF(cx - radius, cy - radius, diameter, diameter)

        # ── background track ─────────────────────────────────────────
        track_pen = QPen(self._track_color, self.RING_THICKNESS)
        painter.setPen(track_pen)
        painter.drawEllipse(ring_rect)

        # ── progress arc ─────────────────────────────────────────────
        pct = self._display_percent
        if pct > 0.001:
            arc_pen = QPen(self._arc_color, self.RING_THICKNESS)
            arc_pen.setCapStyle(Qt.PenCapStyle.RoundCap)
            painter.setPen(arc_pen)
            # Qt arcs: start at 12 o'clock (90*16), go clockwise (negative)
            painter.drawArc(ring_rect, 90 * 16, -int(pct * 360 * 16))

        # ── centre text ──────────────────────────────────────────────
        time_font = QFont()
        time_font.setPixelSize(48)
        time_font.setWeight(QFont.Weight.Bold)
        painter.setFont(time_font)
        painter.setPen(self._text_color)
        time_rect = QRectF(ring_rect)
        time_rect.moveTop(time_rect.top() - 14)
        painter.drawText(time_rect, Qt.AlignmentFlag.AlignCenter, self._time_text)

        label_font = QFont()
        label_font.setPixelSize(12)
        label_font.setWeight(QFont.Weight.DemiBold)
        label_font.setLetterSpacing(QFont.SpacingType.AbsoluteSpacing, 2)
        painter.setFont(label_font)
        painter.setPen(self._arc_color)
        label_rect = QRectF(ring_rect)
        label_rect.moveTop(label_rect.top() + 28)
        painter.drawText(label_rect, Qt.AlignmentFlag.AlignCenter, self._state_label)

        interval_font = QFont()
        interval_font.setPixelSize(12)
        painter.setFont(interval_font)
        painter.setPen(self._muted_color)
        interval_rect = QRectF(ring_rect)
        interval_rect.moveTop(interval_rect.top() + 50)
        painter.drawText(interval_rect, Qt.AlignmentFlag.AlignCenter, self._interval_text)

        painter.end()
