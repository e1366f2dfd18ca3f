"""Number animation framework."""

from .errors import AnimationError, ConfigurationError, coerce_number
from .types import (
    RunState,
    TimingCurve,
    NumberAnimationConfig,
    StepResult,
)
from .timing import TIMING_FUNCTIONS, get_timing_function, resolve_timing
from .engine import AnimationEngine
from .driver import NumberAnimationDriver, QtScheduler, QtTimerHandle, Scheduler, TimerHandle

__all__ = [
    # Errors
    'AnimationError',
    'ConfigurationError',
    'coerce_number',

    # Types
    'RunState',
    'TimingCurve',
    'NumberAnimationConfig',
    'StepResult',

    # Timing
    'TIMING_FUNCTIONS',
    'get_timing_function',
    'resolve_timing',

    # Engine / driver
    'AnimationEngine',
    'NumberAnimationDriver',
    'QtScheduler',
    'QtTimerHandle',
    'Scheduler',
    'TimerHandle',
]
