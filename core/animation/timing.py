"""
Timing functions for number animations.

A timing function decides how long the driver waits before the next step.
All functions take the base ``interval`` (ms) and the run ``progress`` in
range [0.0, 1.0] and return a delay in milliseconds.

- linear: constant cadence
- easeOut: the delay grows with progress, so the count slows down near the end
- easeIn: the delay shrinks with progress, so the count speeds up
"""
import math
from types import MappingProxyType
from typing import Mapping, Tuple

from core.animation.errors import ConfigurationError
from core.animation.types import TimingCurve, TimingFunction
from core.constants.timing import EASE_DELAY_SCALE
from core.logging.logger import get_logger

logger = get_logger(__name__)

HALF_RAD = math.pi / 2


def linear(interval: float, progress: float) -> float:
    """Constant delay regardless of progress."""
    return interval


def ease_out(interval: float, progress: float) -> float:
    """Delay grows with progress - decelerating count."""
    return interval * math.sin(HALF_RAD * progress) * EASE_DELAY_SCALE


def ease_in(interval: float, progress: float) -> float:
    """Delay shrinks with progress - accelerating count."""
    return interval * math.sin(HALF_RAD - HALF_RAD * progress) * EASE_DELAY_SCALE


# Timing function lookup table (read-only)
TIMING_FUNCTIONS: Mapping[TimingCurve, TimingFunction] = MappingProxyType({
    TimingCurve.LINEAR: linear,
    TimingCurve.EASE_OUT: ease_out,
    TimingCurve.EASE_IN: ease_in,
})

# String keys accepted in addition to the enum values
_CURVE_ALIASES: Mapping[str, TimingCurve] = MappingProxyType({
    "ease_out": TimingCurve.EASE_OUT,
    "ease_in": TimingCurve.EASE_IN,
})


def get_timing_function(curve: TimingCurve) -> TimingFunction:
    """
    Get the timing function for a given curve.

    Args:
        curve: Timing curve enum

    Returns:
        Function taking (interval, progress) and returning a delay in ms

    Raises:
        ConfigurationError: If the curve has no built-in function (CUSTOM)
    """
    if curve not in TIMING_FUNCTIONS:
        raise ConfigurationError(f"No built-in timing function for {curve}")
    return TIMING_FUNCTIONS[curve]


def resolve_timing(timing) -> Tuple[TimingCurve, TimingFunction]:
    """
    Resolve a timing selection to its curve and function.

    Args:
        timing: TimingCurve member, curve name ("linear", "easeOut",
            "easeIn", "ease_out", "ease_in") or a callable taking
            (interval, progress)

    Returns:
        (curve, function) - curve is TimingCurve.CUSTOM for callables

    Raises:
        ConfigurationError: For unknown names or unsupported types
    """
    if isinstance(timing, TimingCurve):
        return timing, get_timing_function(timing)

    if isinstance(timing, str):
        curve = _CURVE_ALIASES.get(timing)
        if curve is None:
            try:
                curve = TimingCurve(timing)
            except ValueError:
                raise ConfigurationError(f"Unknown timing curve: {timing!r}") from None
        return curve, get_timing_function(curve)

    if callable(timing):
        return TimingCurve.CUSTOM, timing

    raise ConfigurationError(
        f"timing must be a curve name, TimingCurve or callable, got {type(timing).__name__}"
    )


def compute_delay(timing_fn: TimingFunction, interval: float, progress: float) -> float:
    """
    Evaluate a timing function and sanitise its result.

    Built-in curves always return a finite, non-negative delay; custom
    functions may not, so negative or non-finite results are clamped to 0.
    """
    delay = float(timing_fn(interval, progress))
    if not math.isfinite(delay) or delay < 0.0:
        logger.warning(
            "[ANIM] Timing function returned unusable delay %r (progress=%.3f); using 0",
            delay,
            progress,
        )
        return 0.0
    return delay
