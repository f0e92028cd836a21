"""Session controller: the single handle callers use for a breathing session."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal

from ..settings import Settings
from .feedback import BreathCircle, HapticFeedback
from .scheduler import PhaseScheduler, SessionState
from .technique import Phase, Technique, technique_by_key

logger = logging.getLogger(__name__)


class SessionController(QObject):
    """Owns one ``PhaseScheduler`` and forwards controls to it.

    The scheduler's signals are re-emitted under the same names, so UI,
    haptics and animation code only ever connect to the controller.
    """

    phase_entered = pyqtSignal(object, int)
    tick = pyqtSignal(int)
    session_completed = pyqtSignal()

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        settings: Settings | None = None,
    ) -> None:
        super().__init__(parent)
        self._settings = settings or Settings()

        self._scheduler = PhaseScheduler(
            self,
            grace_delay_ms=self._settings.grace_delay_ms,
            tick_interval_ms=self._settings.tick_interval_ms,
        )
        self._scheduler.phase_entered.connect(self.phase_entered)
        self._scheduler.tick.connect(self.tick)
        self._scheduler.session_completed.connect(self.session_completed)

        self._haptics = HapticFeedback.from_settings(self._settings, self)
        self._haptics.attach(self)
        self._circle = BreathCircle.from_settings(self._settings, self)
        self._circle.attach(self)

    # ── state (read-only) ─────────────────────────────────────────────

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def scheduler(self) -> PhaseScheduler:
        return self._scheduler

    @property
    def haptics(self) -> HapticFeedback:
        """Haptic adapter configured from ``settings.haptics_enabled``."""
        return self._haptics

    @property
    def circle(self) -> BreathCircle:
        """Circle animation adapter configured from ``settings.reduced_motion``."""
        return self._circle

    @property
    def is_playing(self) -> bool:
        return self._scheduler.is_playing

    @property
    def current_cycle(self) -> int:
        return self._scheduler.current_cycle

    @property
    def current_phase(self) -> Phase:
        return self._scheduler.current_phase

    @property
    def time_remaining(self) -> int:
        return self._scheduler.time_remaining

    @property
    def technique(self) -> Technique | None:
        return self._scheduler.technique

    @property
    def total_cycles(self) -> int:
        technique = self._scheduler.technique
        return technique.cycles if technique else 0

    @property
    def progress(self) -> float:
        """0.0 → 1.0 share of cycles completed."""
        total = self.total_cycles
        if total <= 0:
            return 0.0
        return max(0.0, min(1.0, self.current_cycle / total))

    def snapshot(self) -> SessionState:
        return self._scheduler.snapshot()

    # ── controls ──────────────────────────────────────────────────────

    def start(self, technique: Technique) -> None:
        self._scheduler.start(technique)

    def start_by_key(self, key: str | None = None) -> None:
        """Start a built-in technique; defaults to the configured one."""
        key = key or self._settings.default_technique
        technique = technique_by_key(key)
        if technique is None:
            raise KeyError(f"unknown breathing technique: {key!r}")
        logger.debug("starting built-in technique %s", key)
        self._scheduler.start(technique)

    def stop(self) -> None:
        self._scheduler.stop()

    def reset(self) -> None:
        self._scheduler.reset()
