"""
Number animation engine.

Steps a numeric value from a start value towards a target value in discrete
increments. The engine is purely computational: it never waits or schedules
anything itself. A driver (see ``core.animation.driver``) calls ``step()``
after waiting ``timing_delay()`` milliseconds, until the step reports that
the run is no longer active.

A run always ends exactly on its target value. Overshooting steps are
clamped, and a zero-length run ends on its first step.
"""
from typing import Any, Optional

from core.animation.errors import coerce_number
from core.animation.timing import compute_delay, resolve_timing
from core.animation.types import (
    FinishCallback,
    Formatter,
    NumberAnimationConfig,
    ProgressCallback,
    RunState,
    StepResult,
    TimingCurve,
)
from core.logging.logger import get_logger, is_verbose_logging

logger = get_logger(__name__)


def _identity(value: float) -> Any:
    return value


class AnimationEngine:
    """
    State machine for a single animated number.

    Exactly one run is active at a time; ``begin()`` replaces the previous
    run instead of merging with it.
    """

    def __init__(self, config: Optional[NumberAnimationConfig] = None,
                 formatter: Optional[Formatter] = None,
                 on_progress: Optional[ProgressCallback] = None,
                 on_finish: Optional[FinishCallback] = None,
                 initial: Any = None):
        """
        Initialize the engine.

        Args:
            config: Engine-wide configuration (defaults if omitted)
            formatter: Maps the numeric value to the displayed value
            on_progress: Called with (old_value, new_value) before each commit
            on_finish: Called once when a run reaches its target
            initial: Value shown before the first run (0 if omitted)
        """
        self._config = config if config is not None else NumberAnimationConfig()
        self._timing_curve, self._timing_fn = resolve_timing(self._config.timing)
        self._formatter = formatter if formatter is not None else _identity
        self._on_progress = on_progress
        self._on_finish = on_finish

        value = coerce_number(initial, "initial") if initial is not None else 0.0
        self._start_value = value
        self._target_value = value
        self._current_value = value
        self._display_value = self._formatter(value)

        self._direction: Optional[bool] = None
        self._active = False
        self._state = RunState.IDLE
        self._finish_signalled = False
        self._run_id = 0

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> NumberAnimationConfig:
        return self._config

    @property
    def timing_curve(self) -> TimingCurve:
        return self._timing_curve

    @property
    def start_value(self) -> float:
        return self._start_value

    @property
    def target_value(self) -> float:
        return self._target_value

    @property
    def current_value(self) -> float:
        return self._current_value

    @property
    def display_value(self) -> Any:
        return self._display_value

    @property
    def direction(self) -> Optional[bool]:
        """True when increasing, False when decreasing, None before the first step."""
        return self._direction

    @property
    def active(self) -> bool:
        return self._active

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def run_id(self) -> int:
        """Identifier of the current run, incremented by every ``begin()``."""
        return self._run_id

    @property
    def progress(self) -> float:
        """Fraction of the run's original span covered so far (0.0 for empty runs)."""
        span = self._target_value - self._start_value
        if span == 0:
            return 0.0
        return (self._current_value - self._start_value) / span

    # ------------------------------------------------------------------
    # Run control
    # ------------------------------------------------------------------

    def begin(self, start: Any, target: Any) -> int:
        """
        Start a new run from ``start`` to ``target``.

        Any previous run is discarded.

        Returns:
            The new run id

        Raises:
            ValueError: If start or target is not numeric
        """
        start_value = coerce_number(start, "start")
        target_value = coerce_number(target, "target")

        self._run_id += 1
        self._start_value = start_value
        self._target_value = target_value
        self._current_value = start_value
        self._direction = None
        self._active = True
        self._state = RunState.RUNNING
        self._finish_signalled = False

        logger.debug(
            "[ANIM] Run %d started: %s -> %s (steps=%d, count_by=%s, timing=%s)",
            self._run_id,
            start_value,
            target_value,
            self._config.steps,
            self._config.count_by,
            self._timing_curve.value,
        )
        return self._run_id

    def retarget(self, target: Any) -> int:
        """Start a new run towards ``target`` from the current value."""
        return self.begin(self._current_value, target)

    def cancel(self) -> bool:
        """
        Stop the current run without moving to the target.

        Returns:
            True if a run was active
        """
        if not self._active:
            return False
        self._active = False
        self._state = RunState.CANCELLED
        logger.debug(
            "[ANIM] Run %d cancelled at %s (target=%s)",
            self._run_id,
            self._current_value,
            self._target_value,
        )
        return True

    def step(self) -> StepResult:
        """
        Advance the run by one step.

        Callbacks run before any state is written, so an exception from
        ``on_progress`` or the formatter leaves the run unchanged and
        propagates to the caller. If ``on_progress`` starts another run or
        cancels this one, the step is dropped.

        Returns:
            StepResult(display_value, active)
        """
        if not self._active:
            if self._state == RunState.COMPLETE:
                self._signal_finish()
            logger.debug("[ANIM] step() on inactive run %d (%s)", self._run_id, self._state.value)
            return StepResult(self._display_value, False)

        run_id = self._run_id
        raw_step = (self._target_value - self._start_value) / self._config.steps
        sign = 1 if raw_step >= 0 else -1
        magnitude = self._config.step_magnitude
        step_value = sign * magnitude if magnitude is not None else raw_step

        candidate = self._current_value + step_value
        direction = step_value > 0

        # Never move past the target
        finished = False
        if direction and candidate >= self._target_value:
            finished = True
        elif not direction and candidate <= self._target_value:
            finished = True
        elif candidate == self._current_value:
            # Step is below float resolution at this magnitude
            finished = True
        if finished:
            candidate = self._target_value

        previous = self._current_value
        if self._on_progress is not None:
            self._on_progress(previous, candidate)
        display = self._formatter(candidate)

        if run_id != self._run_id or not self._active:
            logger.debug("[ANIM] Run %d replaced or cancelled during step; dropping it", run_id)
            return StepResult(self._display_value, self._active)

        self._direction = direction
        self._current_value = candidate
        self._display_value = display

        if is_verbose_logging():
            logger.debug("[ANIM] Run %d step: %s -> %s", self._run_id, previous, candidate)

        if finished:
            self._active = False
            self._state = RunState.COMPLETE
            logger.debug("[ANIM] Run %d complete at %s", self._run_id, candidate)
            self._signal_finish()

        return StepResult(display, not finished)

    def timing_delay(self, progress: Optional[float] = None) -> float:
        """
        Delay in ms before the next ``step()``.

        Args:
            progress: Progress to evaluate the timing function at; defaults
                to the current run progress
        """
        if progress is None:
            progress = self.progress
        return compute_delay(self._timing_fn, self._config.interval, progress)

    def _signal_finish(self) -> None:
        """Invoke on_finish at most once per completed run."""
        if self._finish_signalled:
            return
        self._finish_signalled = True
        if self._on_finish is not None:
            self._on_finish()
