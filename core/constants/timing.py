"""Timing constants for number animations.

All timing values are in milliseconds unless otherwise noted.
These constants replace magic numbers in the animation engine, driver and
settings layer so defaults stay in one place.
"""

# =============================================================================
# Step Cadence
# =============================================================================

NUMBER_ANIMATION_INTERVAL_MS = 14
"""Base delay between two animation steps."""

NUMBER_ANIMATION_STEPS = 45
"""Default number of steps a run is divided into."""

NUMBER_ANIMATION_START_DELAY_MS = 0
"""Delay before the first run of a widget starts (mount delay)."""

# =============================================================================
# Timing Curves
# =============================================================================

EASE_DELAY_SCALE = 5.0
"""Multiplier applied by the easeIn/easeOut curves to the base interval."""

DEFAULT_TIMING_CURVE = "linear"
"""Timing curve used when none is configured."""

# =============================================================================
# Export all constants
# =============================================================================

__all__ = [
    "NUMBER_ANIMATION_INTERVAL_MS",
    "NUMBER_ANIMATION_STEPS",
    "NUMBER_ANIMATION_START_DELAY_MS",
    "EASE_DELAY_SCALE",
    "DEFAULT_TIMING_CURVE",
]
