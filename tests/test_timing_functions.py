"""Tests for number animation timing functions."""
import math

import pytest

from core.animation.errors import ConfigurationError
from core.animation.timing import (
    TIMING_FUNCTIONS,
    compute_delay,
    ease_in,
    ease_out,
    get_timing_function,
    linear,
    resolve_timing,
)
from core.animation.types import TimingCurve

SAMPLES = [i / 20 for i in range(21)]


def test_linear_is_constant():
    """Linear timing ignores progress."""
    assert {linear(14, p) for p in SAMPLES} == {14}


def test_ease_out_grows_with_progress():
    """easeOut delays never shrink as the run progresses."""
    delays = [ease_out(14, p) for p in SAMPLES]
    assert all(b >= a for a, b in zip(delays, delays[1:]))
    assert delays[0] == 0.0
    assert delays[-1] == pytest.approx(70.0)


def test_ease_in_shrinks_with_progress():
    """easeIn delays never grow as the run progresses."""
    delays = [ease_in(14, p) for p in SAMPLES]
    assert all(b <= a for a, b in zip(delays, delays[1:]))
    assert delays[0] == pytest.approx(70.0)
    assert delays[-1] == pytest.approx(0.0, abs=1e-9)


def test_ease_out_midpoint():
    assert ease_out(10, 0.5) == pytest.approx(10 * math.sin(math.pi / 4) * 5)


def test_table_is_read_only():
    with pytest.raises(TypeError):
        TIMING_FUNCTIONS[TimingCurve.LINEAR] = ease_in  # type: ignore[index]


def test_table_covers_named_curves():
    named = {c for c in TimingCurve if c != TimingCurve.CUSTOM}
    assert set(TIMING_FUNCTIONS) == named


@pytest.mark.parametrize("name,curve,fn", [
    ("linear", TimingCurve.LINEAR, linear),
    ("easeOut", TimingCurve.EASE_OUT, ease_out),
    ("easeIn", TimingCurve.EASE_IN, ease_in),
    ("ease_out", TimingCurve.EASE_OUT, ease_out),
    ("ease_in", TimingCurve.EASE_IN, ease_in),
])
def test_resolve_by_name(name, curve, fn):
    assert resolve_timing(name) == (curve, fn)


def test_resolve_by_enum():
    assert resolve_timing(TimingCurve.EASE_IN) == (TimingCurve.EASE_IN, ease_in)


def test_resolve_custom_function():
    def custom(interval, progress):
        return interval * 2

    curve, fn = resolve_timing(custom)
    assert curve == TimingCurve.CUSTOM
    assert fn is custom


@pytest.mark.parametrize("bad", ["bounce", "EaseOut", "", "custom"])
def test_unknown_name_raises(bad):
    """Unknown names fail loudly instead of falling back to linear."""
    with pytest.raises(ConfigurationError):
        resolve_timing(bad)


def test_custom_enum_without_function_raises():
    with pytest.raises(ConfigurationError):
        get_timing_function(TimingCurve.CUSTOM)
    with pytest.raises(ConfigurationError):
        resolve_timing(TimingCurve.CUSTOM)


@pytest.mark.parametrize("bad", [None, 3, 1.5, ["linear"]])
def test_unsupported_type_raises(bad):
    with pytest.raises(ConfigurationError):
        resolve_timing(bad)


def test_compute_delay_passes_valid_values():
    assert compute_delay(linear, 14, 0.3) == 14.0


@pytest.mark.parametrize("result", [-5.0, float("nan"), float("inf")])
def test_compute_delay_clamps_unusable_values(result):
    assert compute_delay(lambda interval, progress: result, 14, 0.5) == 0.0
