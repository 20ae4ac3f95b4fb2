"""Alert sound synthesis and playback using numpy + QSoundEffect.

All sounds are generated programmatically as WAV files using sine-wave
synthesis with ADSR envelopes.  Files are cached to disk so subsequent
app launches are instant.

Sound names
-----------
- ``start``             short rising two-note cue
- ``interval_complete`` digital-clock triple beep
- ``workout_complete``  longer ascending arpeggio
- ``click``             subtle button click
"""

from __future__ import annotations

import io
import wave
from pathlib import Path
from typing import Callable

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..settings import APP_SUPPORT_DIR


# ── paths ────────────────────────────────────────────────────────────────

SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SOUND_NAMES = (
    "start",
    "interval_complete",
    "workout_complete",
    "click",
)

SAMPLE_RATE = 44100


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _make_envelope(
    length: int,
    attack: int = 200,
    decay: int = 400,
    sustain_level: float = 0.7,
    release: int = 800,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.ones(length, dtype=np.float64)
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    d_end = min(a + decay, length)
    if decay > 0 and d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    s_end = max(length - release, d_end)
    if s_end > d_end:
        env[d_end:s_end] = sustain_level
    if release > 0 and s_end < length:
        env[s_end:] = np.linspace(sustain_level, 0.0, length - s_end)
    return env


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _silence(duration_s: float) -> np.ndarray:
    return np.zeros(int(SAMPLE_RATE * duration_s))


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_start_cue() -> bytes:
    """Start: two quick rising notes (A4→E5)."""
    parts: list[np.ndarray] = []
    for freq in (440.0, 659.25):
        tone = _sine(freq, 0.09) * 0.5
        env = _make_envelope(len(tone), attack=80, decay=150, sustain_level=0.4, release=250)
        parts.append(tone * env)
        parts.append(_silence(0.03))
    return _to_wav_bytes(np.concatenate(parts))


def _generate_beep() -> bytes:
    """Interval complete: three square-ish 2 kHz beeps, alarm-clock style."""
    beep_dur = 0.08
    tone = _sine(2000.0, beep_dur) + _sine(6000.0, beep_dur) / 3  # odd harmonic edge
    tone *= 0.35
    env = _make_envelope(len(tone), attack=40, decay=80, sustain_level=0.8, release=120)
    beep = tone * env
    gap = _silence(0.07)
    return _to_wav_bytes(np.concatenate([beep, gap, beep, gap, beep, _silence(0.05)]))


def _generate_finish() -> bytes:
    """Workout complete: bright arpeggio (C5→E5→G5→C6), last note held."""
    notes = [523.25, 659.25, 783.99, 1046.50]
    parts: list[np.ndarray] = []
    for freq in notes[:-1]:
        tone = _sine(freq, 0.11) * 0.5
        env = _make_envelope(len(tone), attack=60, decay=150, sustain_level=0.3, release=200)
        parts.append(tone * env)
        parts.append(_silence(0.025))
    last = notes[-1]
    tone = (_sine(last, 0.45) + _sine(last * 2, 0.45) * 0.15) * 0.5
    env = _make_envelope(len(tone), attack=80, decay=400, sustain_level=0.5, release=900)
    parts.append(tone * env)
    return _to_wav_bytes(np.concatenate(parts))


def _generate_click() -> bytes:
    """Button click: very short high tick."""
    duration = 0.015
    n_samples = int(SAMPLE_RATE * duration)
    tick = _sine(1200.0, duration) * 0.2
    env = _make_envelope(n_samples, attack=20, decay=50, sustain_level=0.0, release=n_samples - 70)
    # Pad with silence so QSoundEffect doesn't clip
    return _to_wav_bytes(np.concatenate([tick * env, _silence(0.03)]))


_GENERATORS: dict[str, Callable[[], bytes]] = {
    "start": _generate_start_cue,
    "interval_complete": _generate_beep,
    "workout_complete": _generate_finish,
    "click": _generate_click,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Manages sound synthesis, caching, and playback.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.set_enabled(config.sound_enabled)
        mgr.play("interval_complete")
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.7  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}

        self._ensure_wav_files()
        self._load_effects()

    # ── public API ────────────────────────────────────────────────────

    def set_volume(self, level: int) -> None:
        """Set volume (0-100).  Updates all loaded effects."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def play(self, name: str) -> bool:
        """Play a sound by name.  Returns False if disabled or unknown."""
        if not self._enabled:
            return False
        effect = self._effects.get(name)
        if effect is None:
            return False
        effect.play()
        return True

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        """Generate any missing WAV files to the cache directory."""
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for name, gen_fn in _GENERATORS.items():
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                path.write_bytes(gen_fn())

    def _load_effects(self) -> None:
        """Create QSoundEffect instances from cached WAV files."""
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if path.exists():
                effect = QSoundEffect(self)
                effect.setSource(QUrl.fromLocalFile(str(path)))
                effect.setVolume(self._volume)
                self._effects[name] = effect
