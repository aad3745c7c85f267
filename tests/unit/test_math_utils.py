"""Unit tests for clamping, interpolation, damping and seeded noise."""

import math

import numpy as np
import pytest

from motionblocks.utils.math.core import (
    clamp,
    clamp01,
    exp_damp,
    exp_damp_array,
    frame_seed,
    fract,
    lerp,
    rand01,
    safe_div,
)


class TestClamp:
    """Test clamp function."""

    def test_inside_range(self):
        """Values inside the range are returned unchanged."""
        assert clamp(0, 5, 10) == 5

    def test_below_range(self):
        """Values below the range snap to the minimum."""
        assert clamp(-2, -7, 2) == -2

    def test_above_range(self):
        """Values above the range snap to the maximum."""
        assert clamp(0, 12.5, 10) == 10

    def test_unit_interval(self):
        """clamp01 bounds values to [0, 1]."""
        assert clamp01(1.4) == 1
        assert clamp01(-0.2) == 0
        assert clamp01(0.25) == 0.25


class TestLerpAndFract:
    """Test lerp and fract functions."""

    def test_lerp_midpoint(self):
        """Halfway between two values."""
        assert lerp(0, 10, 0.5) == 5.0

    def test_lerp_extrapolates(self):
        """t is not clamped."""
        assert lerp(2, 4, 1.5) == 5.0

    def test_fract_positive(self):
        """Fractional part of a positive value."""
        assert fract(2.75) == pytest.approx(0.75)

    def test_fract_negative_wraps(self):
        """Negative inputs still give a value in [0, 1)."""
        assert fract(-0.25) == pytest.approx(0.75)


class TestRand01:
    """Test rand01 seeded noise."""

    def test_deterministic(self):
        """Same seed gives the same value."""
        assert rand01(42.0) == rand01(42.0)

    def test_range(self):
        """Values stay in [0, 1) across many seeds."""
        values = [rand01(frame_seed(f, 1.0, 0.5)) for f in range(500)]
        assert all(0 <= v < 1 for v in values)

    def test_varies_with_seed(self):
        """Neighbouring seeds give different values."""
        assert rand01(1.0) != rand01(2.0)

    def test_frame_seed(self):
        """frame_seed is frame * scale + offset."""
        assert frame_seed(10, 2.0, 0.5) == 20.5
        assert frame_seed(3) == 3.0


class TestExpDamp:
    """Test exponential damping."""

    def test_zero_dt_keeps_value(self):
        """No elapsed time, no movement."""
        assert exp_damp(0.0, 10.0, 5.0, 0.0) == 0.0

    def test_negative_dt_treated_as_zero(self):
        """Negative dt never moves away from the target."""
        assert exp_damp(3.0, 10.0, 5.0, -1.0) == 3.0

    def test_moves_toward_target(self):
        """Result lies strictly between current and target."""
        value = exp_damp(0.0, 10.0, 5.0, 1 / 30)
        assert 0.0 < value < 10.0

    def test_matches_closed_form(self):
        """current + (target - current) * (1 - exp(-rate * dt))."""
        expected = 10.0 * (1 - math.exp(-2.0 * 0.5))
        assert exp_damp(0.0, 10.0, 2.0, 0.5) == pytest.approx(expected)

    def test_frame_rate_independent(self):
        """Two half steps land where one full step does."""
        one = exp_damp(0.0, 10.0, 3.0, 0.2)
        two = exp_damp(exp_damp(0.0, 10.0, 3.0, 0.1), 10.0, 3.0, 0.1)
        assert one == pytest.approx(two)

    def test_array_version(self):
        """Vectorized damping matches the scalar version per component."""
        current = np.array([0.0, 5.0, -5.0])
        target = np.array([10.0, 5.0, 5.0])
        result = exp_damp_array(current, target, 4.0, 0.25)
        expected = [exp_damp(c, t, 4.0, 0.25) for c, t in zip(current, target)]
        np.testing.assert_array_almost_equal(result, expected)


class TestSafeDiv:
    """Test safe_div function."""

    def test_zero_denominator(self):
        """Denominator is floored at the minimum."""
        assert safe_div(5, 0) == 5.0

    def test_regular_division(self):
        """Denominators above the minimum divide normally."""
        assert safe_div(5, 10) == 0.5

    def test_custom_minimum(self):
        """A custom floor is honored."""
        assert safe_div(6, 1, minimum=3) == 2.0
