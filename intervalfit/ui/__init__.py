"""UI package."""

from .progress_ring import ProgressRing
from .settings_dialog import SettingsDialog
from .timer_widget import TimerWidget
from .toast import Toast
from .workout_form import WorkoutFormDialog
from .workout_history import WorkoutHistoryWidget

__all__ = [
    "ProgressRing",
    "SettingsDialog",
    "TimerWidget",
    "Toast",
    "WorkoutFormDialog",
    "WorkoutHistoryWidget",
]
