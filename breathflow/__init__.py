"""BreathFlow — guided breathing session engine."""

__version__ = "0.1.0"
