"""Breathing techniques: timing descriptors plus the built-in catalog.

A ``Technique`` is plain data.  Building one never fails; the scheduler
calls ``validate()`` when a session starts so a bad technique surfaces as
a ``ValidationError`` instead of a countdown that never moves.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# ── enums ─────────────────────────────────────────────────────────────────


class Phase(Enum):
    INHALE = "inhale"
    HOLD = "hold"
    EXHALE = "exhale"
    PAUSE = "pause"


class ValidationError(ValueError):
    """Raised when a technique cannot drive a session."""

    def __init__(self, field: str, value: object, reason: str) -> None:
        super().__init__(f"{field}={value!r}: {reason}")
        self.field = field
        self.value = value


# ── descriptor ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Technique:
    """Timing for one guided breathing exercise (all durations in seconds)."""

    inhale_time: int
    hold_time: int
    exhale_time: int
    cycles: int

    key: str = ""
    title: str = ""
    description: str = ""

    @property
    def cycle_seconds(self) -> int:
        """Length of one inhale → (hold) → exhale sequence."""
        return self.inhale_time + self.hold_time + self.exhale_time

    @property
    def total_seconds(self) -> int:
        return self.cycle_seconds * self.cycles

    def duration_for(self, phase: Phase) -> int:
        if phase == Phase.INHALE:
            return self.inhale_time
        if phase == Phase.HOLD:
            return self.hold_time
        if phase == Phase.EXHALE:
            return self.exhale_time
        return 0

    def validate(self) -> None:
        """Raise ``ValidationError`` for the first field that is unusable."""
        _require_int("inhale_time", self.inhale_time, minimum=1)
        _require_int("hold_time", self.hold_time, minimum=0)
        _require_int("exhale_time", self.exhale_time, minimum=1)
        _require_int("cycles", self.cycles, minimum=1)


def _require_int(field: str, value: object, *, minimum: int) -> None:
    # bool is an int subclass; True seconds is never intended
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(field, value, "must be an integer")
    if value < minimum:
        raise ValidationError(field, value, f"must be >= {minimum}")


# ── catalog ───────────────────────────────────────────────────────────────

BUILTIN_TECHNIQUES: tuple[Technique, ...] = (
    Technique(
        inhale_time=4, hold_time=7, exhale_time=8, cycles=4,
        key="4-7-8",
        title="4-7-8 Breathing",
        description=(
            "Breathe in for 4 seconds, hold for 7 and breathe out for 8. "
            "Helps reduce anxiety and fall asleep."
        ),
    ),
    Technique(
        inhale_time=4, hold_time=4, exhale_time=4, cycles=4,
        key="box",
        title="Box Breathing",
        description=(
            "Inhale, hold and exhale for 4 seconds each. "
            "Good for focus and balance."
        ),
    ),
    Technique(
        inhale_time=4, hold_time=4, exhale_time=4, cycles=4,
        key="deep",
        title="Deep Breathing",
        description=(
            "Slow nasal inhale expanding the belly, exhale through the "
            "mouth.  Calms the nervous system."
        ),
    ),
    Technique(
        inhale_time=4, hold_time=4, exhale_time=4, cycles=4,
        key="alternate",
        title="Alternate Nostril Breathing",
        description=(
            "Alternate the breath between nostrils.  A yoga technique "
            "for mental clarity."
        ),
    ),
)

_SOS_TECHNIQUE = Technique(
    inhale_time=4, hold_time=4, exhale_time=4, cycles=2,
    key="box-breathing",
    title="Box Breathing",
    description="A quick reset for hard moments: 4 seconds per step.",
)


def technique_by_key(key: str) -> Technique | None:
    for technique in BUILTIN_TECHNIQUES:
        if technique.key == key:
            return technique
    return None


def sos_technique() -> Technique:
    """Short box-breathing technique for emergency use."""
    return _SOS_TECHNIQUE
