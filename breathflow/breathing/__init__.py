"""Breathing session package."""

from .technique import (
    Phase,
    Technique,
    ValidationError,
    BUILTIN_TECHNIQUES,
    technique_by_key,
    sos_technique,
)
from .scheduler import PhaseScheduler, SessionState, GRACE_DELAY_MS, TICK_INTERVAL_MS
from .session import SessionController
from .feedback import AnimationTarget, BreathCircle, HapticFeedback, HapticPulse

__all__ = [
    "Phase",
    "Technique",
    "ValidationError",
    "BUILTIN_TECHNIQUES",
    "technique_by_key",
    "sos_technique",
    "PhaseScheduler",
    "SessionState",
    "GRACE_DELAY_MS",
    "TICK_INTERVAL_MS",
    "SessionController",
    "AnimationTarget",
    "BreathCircle",
    "HapticFeedback",
    "HapticPulse",
]
