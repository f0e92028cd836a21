"""Phase scheduler: the breathing session state machine.

Phases
------
PAUSE    Idle — before start, after stop, after completion.
INHALE   Counting down ``inhale_time``.
HOLD     Counting down ``hold_time`` (skipped when it is 0).
EXHALE   Counting down ``exhale_time``.

Transitions
-----------
PAUSE → INHALE                    (start)
INHALE → HOLD                     (countdown hits 0, hold_time > 0)
INHALE → EXHALE                   (countdown hits 0, hold_time == 0)
HOLD → EXHALE                     (countdown hits 0)
EXHALE → INHALE                   (countdown hits 0, more cycles left)
EXHALE → PAUSE                    (countdown hits 0, last cycle; after
                                   the grace delay, then session_completed)
Any → PAUSE                       (stop / reset)

Only one phase executes at a time.  Entering a phase takes a
single-flight guard that is held until that phase's countdown reaches
zero; a second entry attempt while the guard is held is dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .technique import Phase, Technique

logger = logging.getLogger(__name__)


# ── constants ─────────────────────────────────────────────────────────────

TICK_INTERVAL_MS = 1000
GRACE_DELAY_MS = 500  # keeps the final exhale visible before completion


# ── state ─────────────────────────────────────────────────────────────────


@dataclass
class SessionState:
    is_playing: bool = False
    current_cycle: int = 0
    current_phase: Phase = Phase.PAUSE
    time_remaining: int = 0


# ── scheduler ─────────────────────────────────────────────────────────────


class PhaseScheduler(QObject):
    """Drives a ``SessionState`` through a technique one tick at a time.

    Signals
    -------
    phase_entered(phase: Phase, duration_seconds: int)
        Emitted synchronously each time a phase is entered, including
        the first inhale inside ``start()``.
    tick(time_remaining: int)
        Emitted once per countdown interval with the decremented value.
    session_completed()
        Emitted once, ``grace_delay_ms`` after the last exhale ends.
    """

    phase_entered = pyqtSignal(object, int)
    tick = pyqtSignal(int)
    session_completed = pyqtSignal()

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        grace_delay_ms: int = GRACE_DELAY_MS,
        tick_interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)

        self._technique: Technique | None = None
        self._state = SessionState()

        # ── single-flight guard ───────────────────────────────────────
        self._executing: bool = False
        self._epoch: int = 0  # bumped by every phase entry and stop()

        # ── Qt timers ─────────────────────────────────────────────────
        self._countdown = QTimer(self)
        self._countdown.setInterval(tick_interval_ms)
        self._countdown.timeout.connect(self._on_tick)

        self._grace_timer = QTimer(self)
        self._grace_timer.setSingleShot(True)
        self._grace_timer.setInterval(grace_delay_ms)
        self._grace_timer.timeout.connect(self._on_grace_elapsed)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def is_playing(self) -> bool:
        return self._state.is_playing

    @property
    def current_cycle(self) -> int:
        return self._state.current_cycle

    @property
    def current_phase(self) -> Phase:
        return self._state.current_phase

    @property
    def time_remaining(self) -> int:
        return self._state.time_remaining

    @property
    def technique(self) -> Technique | None:
        """Technique of the current (or last) session."""
        return self._technique

    @property
    def is_counting_down(self) -> bool:
        return self._countdown.isActive()

    @property
    def is_completing(self) -> bool:
        """True during the grace delay after the final exhale."""
        return self._grace_timer.isActive()

    @property
    def grace_delay_ms(self) -> int:
        return self._grace_timer.interval()

    @property
    def tick_interval_ms(self) -> int:
        return self._countdown.interval()

    def snapshot(self) -> SessionState:
        """Copy of the current state; mutating it has no effect."""
        return replace(self._state)

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self, technique: Technique) -> None:
        """Begin a session at cycle 0, inhale.

        Raises ``ValidationError`` for an unusable technique.  Ignored
        while a phase is executing.
        """
        technique.validate()
        if self._executing:
            logger.debug(
                "start ignored: %s phase still executing",
                self._state.current_phase.value,
            )
            return

        self._grace_timer.stop()
        self._technique = technique
        self._state.is_playing = True
        self._state.current_cycle = 0
        logger.debug(
            "session started: %s (%d cycles)",
            technique.key or "custom", technique.cycles,
        )
        self._enter_phase(Phase.INHALE)

    def stop(self) -> None:
        """Halt the session.  Keeps ``current_cycle``; safe when idle."""
        self._countdown.stop()
        self._grace_timer.stop()
        self._executing = False
        self._epoch += 1

        if self._state.is_playing:
            logger.debug(
                "session stopped in %s at cycle %d",
                self._state.current_phase.value, self._state.current_cycle,
            )
        self._state.is_playing = False
        self._state.current_phase = Phase.PAUSE
        self._state.time_remaining = 0

    def reset(self) -> None:
        self.stop()
        self._state.current_cycle = 0

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — phase mechanics
    # ══════════════════════════════════════════════════════════════════

    def _enter_phase(self, phase: Phase) -> None:
        if self._executing:
            logger.debug(
                "entry into %s dropped: %s still executing",
                phase.value, self._state.current_phase.value,
            )
            return
        self._executing = True
        self._epoch += 1
        epoch = self._epoch

        duration = self._technique.duration_for(phase)
        self._state.current_phase = phase
        self._state.time_remaining = duration
        logger.debug(
            "entering %s for %ds (cycle %d)",
            phase.value, duration, self._state.current_cycle,
        )
        self.phase_entered.emit(phase, duration)

        # A slot may have stopped (or restarted) the session during emit.
        if epoch != self._epoch:
            return
        self._arm_countdown()

    def _arm_countdown(self) -> None:
        self._countdown.start()

    def _on_tick(self) -> None:
        if not self._executing:
            return
        self._state.time_remaining = max(0, self._state.time_remaining - 1)
        self.tick.emit(self._state.time_remaining)

        if self._state.time_remaining > 0 or not self._executing:
            return
        self._countdown.stop()
        self._executing = False
        self._advance()

    def _advance(self) -> None:
        """Apply the transition table to the phase that just ended."""
        phase = self._state.current_phase
        technique = self._technique

        if phase == Phase.INHALE:
            if technique.hold_time > 0:
                self._enter_phase(Phase.HOLD)
            else:
                self._enter_phase(Phase.EXHALE)
        elif phase == Phase.HOLD:
            self._enter_phase(Phase.EXHALE)
        elif phase == Phase.EXHALE:
            next_cycle = self._state.current_cycle + 1
            # Count the last cycle too so progress displays reach 100%.
            self._state.current_cycle = next_cycle
            if next_cycle < technique.cycles:
                self._enter_phase(Phase.INHALE)
            else:
                self._grace_timer.start()

    def _on_grace_elapsed(self) -> None:
        self._state.is_playing = False
        self._state.current_phase = Phase.PAUSE
        self._state.time_remaining = 0
        logger.debug(
            "session completed after %d cycles", self._state.current_cycle,
        )
        self.session_completed.emit()
