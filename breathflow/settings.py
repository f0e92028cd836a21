"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/BreathFlow/settings.json

Usage::

    settings = load_settings()
    settings.reduced_motion = True
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "BreathFlow"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── session timing ────────────────────────────────────────────────
    grace_delay_ms: int = 500              # pause before session_completed
    tick_interval_ms: int = 1000
    default_technique: str = "4-7-8"

    # ── feedback ──────────────────────────────────────────────────────
    haptics_enabled: bool = True
    reduced_motion: bool = False


# ── value checks ──────────────────────────────────────────────────────────

_DEFAULTS = Settings()
_MINIMUMS: dict[str, int] = {
    "grace_delay_ms": 0,
    "tick_interval_ms": 1,
}


def _is_valid(name: str, value: object) -> bool:
    """True when *value* has the default's type and respects its minimum."""
    expected = type(getattr(_DEFAULTS, name))
    # bool is an int subclass; keep the two apart in both directions
    if isinstance(value, bool) != (expected is bool):
        return False
    if not isinstance(value, expected):
        return False
    return name not in _MINIMUMS or value >= _MINIMUMS[name]


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults.

    Values of the wrong type or out of range are dropped with a warning;
    the rest of the file still applies.
    """
    if not SETTINGS_PATH.exists():
        return Settings()
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
        # Only use keys that exist in the dataclass
        valid_keys = {f.name for f in fields(Settings)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
    except (OSError, ValueError, AttributeError) as exc:
        logger.warning("Ignoring unreadable settings at %s: %s", SETTINGS_PATH, exc)
        return Settings()

    for name, value in list(filtered.items()):
        if not _is_valid(name, value):
            logger.warning(
                "Ignoring unreadable settings value %s=%r in %s",
                name, value, SETTINGS_PATH,
            )
            del filtered[name]
    return Settings(**filtered)


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
