"""Shared test helpers for BreathFlow."""

from PyQt6.QtCore import QEventLoop, QTimer

from breathflow.breathing.scheduler import PhaseScheduler


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def __call__(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __len__(self):
        return len(self.items)

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


def finish_phase(scheduler: PhaseScheduler) -> None:
    """Tick the current phase down to zero, triggering its transition."""
    for _ in range(scheduler.time_remaining):
        scheduler._on_tick()


def finish_grace(scheduler: PhaseScheduler) -> None:
    """Fire the pending completion without waiting for the grace delay."""
    assert scheduler.is_completing
    scheduler._grace_timer.stop()
    scheduler._on_grace_elapsed()


def run_countdowns(scheduler: PhaseScheduler, limit: int = 10_000) -> None:
    """Tick until no countdown is armed (session end or grace delay)."""
    for _ in range(limit):
        if not scheduler.is_counting_down:
            return
        scheduler._on_tick()
    raise AssertionError("countdown never finished")


def run_event_loop(done_signal, timeout_ms: int = 3000) -> None:
    """Spin a real Qt event loop until *done_signal* fires or time runs out."""
    loop = QEventLoop()
    watchdog = QTimer()
    watchdog.setSingleShot(True)
    watchdog.timeout.connect(loop.quit)
    done_signal.connect(loop.quit)
    watchdog.start(timeout_ms)
    loop.exec()
    watchdog.stop()
    done_signal.disconnect(loop.quit)
