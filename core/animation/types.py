"""
Animation types, enums, and dataclasses.

Defines the core types used by the number animation engine.
"""
import math
from dataclasses import dataclass, fields
from enum import Enum
from numbers import Real
from typing import Any, Callable, Mapping, NamedTuple, Optional, Union

from core.animation.errors import ConfigurationError
from core.constants.timing import (
    DEFAULT_TIMING_CURVE,
    NUMBER_ANIMATION_INTERVAL_MS,
    NUMBER_ANIMATION_START_DELAY_MS,
    NUMBER_ANIMATION_STEPS,
)


class RunState(Enum):
    """State of the current animation run."""
    IDLE = "idle"              # No run has started yet
    RUNNING = "running"
    COMPLETE = "complete"      # Reached the target
    CANCELLED = "cancelled"    # Stopped before reaching the target


class TimingCurve(Enum):
    """
    Timing curves controlling the delay between two steps.

    Unlike easing curves these do not change the step size; they change how
    long the driver waits before the next step.
    """
    LINEAR = "linear"
    EASE_OUT = "easeOut"
    EASE_IN = "easeIn"

    # Caller supplied function, see NumberAnimationConfig.timing
    CUSTOM = "custom"


# Type aliases for callbacks
TimingFunction = Callable[[float, float], float]      # (interval, progress) -> delay
Formatter = Callable[[float], Any]
ProgressCallback = Callable[[float, float], None]     # (old_value, new_value)
FinishCallback = Callable[[], None]

TimingSpec = Union[str, TimingCurve, TimingFunction]


class StepResult(NamedTuple):
    """Outcome of a single engine step."""
    display_value: Any
    active: bool


# camelCase keys accepted by NumberAnimationConfig.from_mapping
_MAPPING_ALIASES = {
    "countBy": "count_by",
    "startDelay": "start_delay",
    "startAt": "start_delay",
}


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


@dataclass(frozen=True)
class NumberAnimationConfig:
    """Engine-wide configuration for number animations."""
    interval: float = NUMBER_ANIMATION_INTERVAL_MS     # Base delay unit (ms)
    steps: int = NUMBER_ANIMATION_STEPS                 # Step-count divisor
    count_by: Optional[float] = None                    # Fixed magnitude per step
    timing: TimingSpec = DEFAULT_TIMING_CURVE           # Curve name, enum or function
    start_delay: float = NUMBER_ANIMATION_START_DELAY_MS  # Delay before the first run (ms)

    def __post_init__(self):
        """Validate configuration values."""
        if not isinstance(self.steps, int) or isinstance(self.steps, bool):
            raise ConfigurationError(f"steps must be an integer, got {self.steps!r}")
        if self.steps <= 0:
            raise ConfigurationError(f"steps must be positive, got {self.steps}")

        if not _is_number(self.interval) or not math.isfinite(self.interval):
            raise ConfigurationError(f"interval must be a finite number, got {self.interval!r}")
        if self.interval < 0:
            raise ConfigurationError(f"interval must not be negative, got {self.interval}")

        if not _is_number(self.start_delay) or not math.isfinite(self.start_delay):
            raise ConfigurationError(f"start_delay must be a finite number, got {self.start_delay!r}")
        if self.start_delay < 0:
            raise ConfigurationError(f"start_delay must not be negative, got {self.start_delay}")

        if self.count_by is not None:
            if not _is_number(self.count_by) or not math.isfinite(self.count_by):
                raise ConfigurationError(f"count_by must be a finite number, got {self.count_by!r}")

        # Imported here, timing.py depends on this module
        from core.animation.timing import resolve_timing
        resolve_timing(self.timing)

    @property
    def step_magnitude(self) -> Optional[float]:
        """Fixed per-step magnitude, or None when sizing comes from ``steps``."""
        if self.count_by:
            return abs(self.count_by)
        return None

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "NumberAnimationConfig":
        """
        Build a config from a plain options mapping.

        Accepts both snake_case field names and the camelCase names used by
        widget option dictionaries (``countBy``, ``startDelay``, ``startAt``).

        Raises:
            ConfigurationError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in options.items():
            name = _MAPPING_ALIASES.get(key, key)
            if name not in known:
                raise ConfigurationError(f"Unknown animation option: {key!r}")
            kwargs[name] = value
        return cls(**kwargs)
