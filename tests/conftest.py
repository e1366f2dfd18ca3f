"""
Shared pytest fixtures for animated number tests.
"""
import os
import sys
from typing import Callable, List, Optional

import pytest

# Headless runs (CI) have no display server
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication  # noqa: E402


class ManualTimerHandle:
    """Handle returned by ManualScheduler."""

    def __init__(self, scheduler: "ManualScheduler", delay_ms: float,
                 callback: Callable[[], None]):
        self._scheduler = scheduler
        self.delay_ms = delay_ms
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    def is_active(self) -> bool:
        return not (self.cancelled or self.fired)


class ManualScheduler:
    """Scheduler whose callbacks only run when the test fires them."""

    def __init__(self):
        self.handles: List[ManualTimerHandle] = []

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> ManualTimerHandle:
        handle = ManualTimerHandle(self, delay_ms, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> List[ManualTimerHandle]:
        return [h for h in self.handles if h.is_active()]

    @property
    def delays(self) -> List[float]:
        return [h.delay_ms for h in self.handles]

    def fire_next(self) -> Optional[ManualTimerHandle]:
        """Fire the oldest pending callback; returns its handle or None."""
        pending = self.pending
        if not pending:
            return None
        handle = pending[0]
        handle.fired = True
        handle.callback()
        return handle

    def run_until_idle(self, limit: int = 10000) -> int:
        """Fire callbacks until nothing is pending; returns the number fired."""
        fired = 0
        while self.fire_next() is not None:
            fired += 1
            if fired >= limit:
                raise AssertionError(f"Scheduler still busy after {limit} callbacks")
        return fired


@pytest.fixture(scope='session')
def qt_app():
    """Create QApplication instance for tests."""
    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    yield app
    # Don't quit - causes issues with pytest


@pytest.fixture
def manual_scheduler():
    """Scheduler driven explicitly by the test."""
    return ManualScheduler()
