"""Shared pytest fixtures for BreathFlow tests."""

import sys
import pytest

from PyQt6.QtCore import QCoreApplication

from breathflow.breathing.scheduler import PhaseScheduler
from breathflow.breathing.session import SessionController
from breathflow.settings import Settings


@pytest.fixture(scope="session")
def qapp():
    """A single QCoreApplication instance shared across the entire test run."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    yield app


@pytest.fixture
def scheduler(qapp):
    """Fresh PhaseScheduler with default timing."""
    return PhaseScheduler(parent=None)


@pytest.fixture
def fast_scheduler(qapp):
    """PhaseScheduler with millisecond timers for real event-loop tests."""
    return PhaseScheduler(parent=None, grace_delay_ms=20, tick_interval_ms=5)


@pytest.fixture
def controller(qapp):
    """Fresh SessionController with default settings."""
    return SessionController(parent=None, settings=Settings())
