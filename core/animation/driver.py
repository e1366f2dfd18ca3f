"""
Timer-driven stepping of an AnimationEngine.

The engine only computes values; this module owns the waiting. A driver
keeps at most one scheduled step outstanding. Every scheduled step carries
the id of the run it was created for, so a step that fires after the run
was replaced or cancelled is ignored instead of corrupting the new run.

Timers come from a ``Scheduler``. ``QtScheduler`` uses single-shot QTimers
on the Qt event loop; tests inject a manual scheduler.
"""
from typing import Any, Callable, Optional, Protocol

from PySide6.QtCore import QMetaObject, QObject, QThread, QTimer, Qt, Signal

from core.animation.engine import AnimationEngine
from core.animation.errors import coerce_number
from core.animation.types import (
    FinishCallback,
    Formatter,
    NumberAnimationConfig,
    ProgressCallback,
    RunState,
)
from core.logging.logger import get_logger, is_verbose_logging

logger = get_logger(__name__)


class TimerHandle(Protocol):
    """Cancelable handle for one scheduled callback."""

    def cancel(self) -> None:
        ...

    def is_active(self) -> bool:
        ...


class Scheduler(Protocol):
    """Schedules a callback after a delay in milliseconds."""

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        ...


class QtTimerHandle:
    """Handle around a single-shot QTimer.

    The timer deletes itself after firing; a handle to a deleted timer
    simply reports inactive.
    """

    def __init__(self, timer: QTimer) -> None:
        self._timer: Optional[QTimer] = timer

    def cancel(self) -> None:
        timer = self._timer
        if timer is None:
            return
        self._timer = None
        try:
            # Timers can only be stopped from their owning thread
            if QThread.currentThread() is timer.thread():
                timer.stop()
                timer.deleteLater()
            else:
                QMetaObject.invokeMethod(timer, "stop", Qt.ConnectionType.QueuedConnection)
                QMetaObject.invokeMethod(timer, "deleteLater", Qt.ConnectionType.QueuedConnection)
        except RuntimeError:
            # Underlying C++ object already deleted
            logger.debug("[ANIM] Timer already deleted on cancel", exc_info=True)

    def is_active(self) -> bool:
        timer = self._timer
        if timer is None:
            return False
        try:
            return timer.isActive()
        except RuntimeError:
            return False


class QtScheduler:
    """Scheduler backed by single-shot QTimers parented to ``owner``."""

    def __init__(self, owner: Optional[QObject] = None) -> None:
        self._owner = owner if owner is not None else QObject()

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> QtTimerHandle:
        timer = QTimer(self._owner)
        timer.setSingleShot(True)
        timer.setTimerType(Qt.TimerType.PreciseTimer)
        timer.timeout.connect(callback)
        timer.timeout.connect(timer.deleteLater)
        timer.start(max(0, int(round(delay_ms))))
        return QtTimerHandle(timer)


class NumberAnimationDriver(QObject):
    """
    Drives an AnimationEngine on a scheduler until each run completes.

    Signals:
        value_changed(object): displayed value after every step
        finished(): a run reached its target; not emitted when a callback
            cancelled it mid-step or on_finish started the next run
        cancelled(): a run was cancelled through ``cancel()``
    """

    value_changed = Signal(object)
    finished = Signal()
    cancelled = Signal()

    def __init__(self, config: Optional[NumberAnimationConfig] = None, *,
                 formatter: Optional[Formatter] = None,
                 on_progress: Optional[ProgressCallback] = None,
                 on_finish: Optional[FinishCallback] = None,
                 initial: Any = None,
                 scheduler: Optional[Scheduler] = None,
                 parent: Optional[QObject] = None):
        """
        Initialize the driver.

        Args:
            config: Animation configuration
            formatter: Maps the numeric value to the displayed value
            on_progress: Called with (old_value, new_value) before each commit
            on_finish: Called once per run that reaches its target
            initial: Value before the first run
            scheduler: Timer source (QtScheduler if omitted)
            parent: Parent QObject
        """
        super().__init__(parent)
        self._engine = AnimationEngine(
            config,
            formatter=formatter,
            on_progress=on_progress,
            on_finish=on_finish,
            initial=initial,
        )
        self._scheduler: Scheduler = scheduler if scheduler is not None else QtScheduler(self)
        self._pending: Optional[TimerHandle] = None
        self._first_run = True

    @property
    def engine(self) -> AnimationEngine:
        return self._engine

    def animate_to(self, target: Any, start: Any = None) -> int:
        """
        Start a run towards ``target`` and schedule its first step.

        Args:
            target: Target value
            start: Start value; defaults to the current value

        Returns:
            The run id
        """
        if start is None:
            run_id = self._engine.retarget(target)
        else:
            run_id = self._engine.begin(start, target)
        self._cancel_pending()

        delay = self._engine.timing_delay()
        if self._first_run:
            delay += self._engine.config.start_delay
            self._first_run = False
        self._schedule_step(run_id, delay)
        return run_id

    def set_value(self, target: Any) -> Optional[int]:
        """
        Re-trigger the animation when the target changes.

        Returns:
            The new run id, or None if ``target`` equals the current target
        """
        value = coerce_number(target, "target")
        if self._engine.state != RunState.IDLE and value == self._engine.target_value:
            return None
        return self.animate_to(value)

    def cancel(self) -> bool:
        """
        Cancel the current run without moving to its target.

        Returns:
            True if a run was active
        """
        self._cancel_pending()
        was_active = self._engine.cancel()
        if was_active:
            self.cancelled.emit()
        return was_active

    def cleanup(self) -> None:
        """Stop everything for teardown; emits no signals."""
        self._cancel_pending()
        self._engine.cancel()
        logger.debug("[ANIM] Driver cleaned up (run %d)", self._engine.run_id)

    def is_running(self) -> bool:
        return self._engine.active

    def has_pending_step(self) -> bool:
        return self._pending is not None and self._pending.is_active()

    def _schedule_step(self, run_id: int, delay_ms: float) -> None:
        if is_verbose_logging():
            logger.debug("[ANIM] Run %d next step in %.1fms", run_id, delay_ms)
        self._pending = self._scheduler.schedule(
            delay_ms, lambda rid=run_id: self._on_step_due(rid)
        )

    def _cancel_pending(self) -> None:
        pending = self._pending
        self._pending = None
        if pending is not None:
            pending.cancel()

    def _on_step_due(self, run_id: int) -> None:
        """Timer callback: advance the run it was scheduled for."""
        if run_id != self._engine.run_id or not self._engine.active:
            logger.debug("[ANIM] Ignoring stale step for run %d", run_id)
            return
        self._pending = None

        result = self._engine.step()
        self.value_changed.emit(result.display_value)

        current_run = self._engine.run_id
        if not result.active:
            # Skip runs cancelled mid-step or replaced from on_finish
            if run_id == current_run and self._engine.state == RunState.COMPLETE:
                self.finished.emit()
                return

        # Callbacks may have started another run without scheduling it
        if self._pending is None and self._engine.active:
            self._schedule_step(current_run, self._engine.timing_delay())
