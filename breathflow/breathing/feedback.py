"""Observer-side feedback for breathing sessions.

Neither adapter talks to a vendor API.  Each one listens to a
``SessionController`` and emits a small, typed signal that a platform
layer (haptics engine, animation framework) can consume.  Toggles such
as "haptics off" or "reduced motion" are per-instance settings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from PyQt6.QtCore import QObject, pyqtSignal

from ..settings import Settings
from .technique import Phase

logger = logging.getLogger(__name__)


# ── haptics ───────────────────────────────────────────────────────────────


class HapticPulse(Enum):
    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"


PHASE_PULSES: dict[Phase, HapticPulse] = {
    Phase.INHALE: HapticPulse.LIGHT,
    Phase.EXHALE: HapticPulse.MEDIUM,
}
COMPLETION_PULSE = HapticPulse.HEAVY


class HapticFeedback(QObject):
    """Turns phase entries into fire-and-forget pulse requests.

    Hold phases are silent; the session end gets a heavy pulse.
    """

    pulse = pyqtSignal(object)

    def __init__(self, parent: QObject | None = None, *, enabled: bool = True) -> None:
        super().__init__(parent)
        self.enabled = enabled

    @classmethod
    def from_settings(
        cls, settings: Settings, parent: QObject | None = None
    ) -> HapticFeedback:
        return cls(parent, enabled=settings.haptics_enabled)

    def attach(self, controller) -> None:
        controller.phase_entered.connect(self.on_phase_entered)
        controller.session_completed.connect(self.on_session_completed)

    def on_phase_entered(self, phase: Phase, duration: int = 0) -> None:
        kind = PHASE_PULSES.get(phase)
        if kind is not None:
            self._emit(kind)

    def on_session_completed(self) -> None:
        self._emit(COMPLETION_PULSE)

    def _emit(self, kind: HapticPulse) -> None:
        if not self.enabled:
            return
        self.pulse.emit(kind)


# ── breathing circle animation ────────────────────────────────────────────


@dataclass(frozen=True)
class AnimationTarget:
    scale: float
    opacity: float
    duration_ms: int


EXPANDED_SCALE, EXPANDED_OPACITY = 1.2, 1.0
RESTING_SCALE, RESTING_OPACITY = 0.8, 0.6
SETTLE_MS = 500


class BreathCircle(QObject):
    """Computes where the breathing circle should animate to.

    Inhale grows the circle over the whole phase, exhale shrinks it, and
    hold leaves it where it is.  With ``reduced_motion`` every change is
    a jump cut (``duration_ms == 0``).

    ``progress`` fires on every phase entry, hold included, with the time
    the phase progress bar takes to drain.  It is not affected by
    ``reduced_motion``.
    """

    animate = pyqtSignal(object)
    progress = pyqtSignal(int)  # drain 1.0 -> 0.0 over this many ms

    def __init__(
        self, parent: QObject | None = None, *, reduced_motion: bool = False
    ) -> None:
        super().__init__(parent)
        self.reduced_motion = reduced_motion
        self._target = AnimationTarget(RESTING_SCALE, RESTING_OPACITY, 0)

    @classmethod
    def from_settings(
        cls, settings: Settings, parent: QObject | None = None
    ) -> BreathCircle:
        return cls(parent, reduced_motion=settings.reduced_motion)

    @property
    def target(self) -> AnimationTarget:
        """Last target emitted (resting before the first phase)."""
        return self._target

    def attach(self, controller) -> None:
        controller.phase_entered.connect(self.on_phase_entered)
        controller.session_completed.connect(self.settle)

    def on_phase_entered(self, phase: Phase, duration: int) -> None:
        self.progress.emit(duration * 1000)
        if phase == Phase.INHALE:
            self._move(EXPANDED_SCALE, EXPANDED_OPACITY, duration * 1000)
        elif phase == Phase.EXHALE:
            self._move(RESTING_SCALE, RESTING_OPACITY, duration * 1000)

    def settle(self) -> None:
        """Ease back to rest; call after ``stop()`` or on completion."""
        self._move(RESTING_SCALE, RESTING_OPACITY, SETTLE_MS)

    def _move(self, scale: float, opacity: float, duration_ms: int) -> None:
        if self.reduced_motion:
            duration_ms = 0
        self._target = AnimationTarget(scale, opacity, duration_ms)
        logger.debug("circle → scale %.1f opacity %.1f over %dms",
                     scale, opacity, duration_ms)
        self.animate.emit(self._target)
