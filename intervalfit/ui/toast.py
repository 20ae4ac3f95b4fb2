"""Floating notification shown when an interval or the workout finishes.

Usage::

    toast = Toast(parent_widget)
    toast.show_message("Interval 1 complete! Starting next interval.")
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, QTimer, QPropertyAnimation, QEasingCurve
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QGraphicsOpacityEffect,
)


class Toast(QWidget):
    """A transient message that fades in, holds, then fades out."""

    DISPLAY_MS = 3000
    FADE_IN_MS = 250
    FADE_OUT_MS = 600

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        self.setFixedWidth(340)
        self.hide()

        layout = QVBoxLayout(self)
        layout.setContentsMargins(18, 10, 18, 10)
        self._label = QLabel("", self)
        self._label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._label.setWordWrap(True)
        self._label.setStyleSheet(
            "font-size: 14px; font-weight: 600; color: #FFFFFF;"
            "background: transparent; border: none;"
        )
        layout.addWidget(self._label)
        self.setStyleSheet(
            "Toast { background-color: rgba(31, 41, 55, 220); border-radius: 10px; }"
        )

        self._opacity = QGraphicsOpacityEffect(self)
        self.setGraphicsEffect(self._opacity)
        self._opacity.setOpacity(0.0)

        self._fade_anim = QPropertyAnimation(self._opacity, b"opacity", self)
        self._fade_anim.finished.connect(self._on_fade_finished)
        self._fading_out = False

        self._dismiss_timer = QTimer(self)
        self._dismiss_timer.setSingleShot(True)
        self._dismiss_timer.timeout.connect(self._fade_out)

    # ── public API ───────────────────────────────────────────────────────

    def show_message(self, text: str, display_ms: int | None = None) -> None:
        """Show *text*; a new message replaces one still on screen."""
        self._label.setText(text)
        self.adjustSize()
        self._position()
        self.show()
        self.raise_()

        self._fading_out = False
        self._fade_anim.stop()
        self._fade_anim.setDuration(self.FADE_IN_MS)
        self._fade_anim.setStartValue(self._opacity.opacity())
        self._fade_anim.setEndValue(1.0)
        self._fade_anim.setEasingCurve(QEasingCurve.Type.OutCubic)
        self._fade_anim.start()

        self._dismiss_timer.start(display_ms or self.DISPLAY_MS)

    @property
    def message(self) -> str:
        return self._label.text()

    # ── internal ─────────────────────────────────────────────────────────

    def _fade_out(self) -> None:
        self._fading_out = True
        self._fade_anim.stop()
        self._fade_anim.setDuration(self.FADE_OUT_MS)
        self._fade_anim.setStartValue(self._opacity.opacity())
        self._fade_anim.setEndValue(0.0)
        self._fade_anim.setEasingCurve(QEasingCurve.Type.InCubic)
        self._fade_anim.start()

    def _on_fade_finished(self) -> None:
        if self._fading_out:
            self.hide()

    def _position(self) -> None:
        """Centre horizontally near the bottom of the parent widget."""
        parent = self.parentWidget()
        if parent is not None:
            x = (parent.width() - self.width()) // 2
            y = max(0, parent.height() - self.height() - 48)
            self.move(x, y)
