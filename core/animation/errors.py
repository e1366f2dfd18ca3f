"""
Error types and value coercion for number animations.

All failures in the animation core are programmer errors: they are raised
immediately and never retried.

Hierarchy
---------
- AnimationError: base for everything raised by ``core.animation``
- ConfigurationError: invalid steps/interval/count_by/start_delay or an
  unknown timing curve. Also a ``ValueError`` so generic callers that
  validate input with ``except ValueError`` keep working.

Non-numeric start/target values raise the builtin ``ValueError``.
Exceptions raised by user callbacks (formatter, on_progress, on_finish)
propagate unchanged.
"""
import math
from decimal import Decimal, InvalidOperation
from numbers import Real
from typing import Any

__all__ = [
    "AnimationError",
    "ConfigurationError",
    "coerce_number",
]


class AnimationError(Exception):
    """Base exception for the animation package."""


class ConfigurationError(AnimationError, ValueError):
    """Raised when an animation is configured with unusable options."""


def coerce_number(value: Any, name: str = "value") -> float:
    """
    Convert a caller supplied start/target value to a finite float.

    Numeric strings (``"42"``, ``" 3.5 "``) are accepted, mirroring how
    widget values often arrive from text inputs.

    Args:
        value: Number or numeric string
        name: Name used in the error message

    Returns:
        The value as a finite float

    Raises:
        ValueError: If the value is not numeric or not finite
    """
    if value is None or isinstance(value, bool):
        raise ValueError(f"{name} must be numeric, got {value!r}")

    if isinstance(value, (Real, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(Decimal(value.strip()))
        except (InvalidOperation, ValueError):
            raise ValueError(f"{name} must be numeric, got {value!r}") from None
    else:
        raise ValueError(f"{name} must be numeric, got {type(value).__name__}")

    if not math.isfinite(number):
        raise ValueError(f"{name} must be finite, got {value!r}")
    return number
