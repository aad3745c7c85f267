"""Pure functions for clamping, interpolation, damping and seeded noise.

Every template and the camera rig build on these helpers, so they stay free of
side effects and never consult wall-clock time. Pseudo-randomness is always a
function of an explicit seed (usually derived from the frame number), which
keeps re-evaluating a frame bit-identical.
"""

import math

import numpy as np

# Classic GLSL-style hash constants
RAND_SEED_SCALE = 12.9898
RAND_AMPLITUDE = 43758.5453123


def clamp(min_value: float, value: float, max_value: float) -> float:
    """Clamp ``value`` into ``[min_value, max_value]``.

    The argument order (min, value, max) mirrors the CSS ``clamp()`` reading
    order used throughout the templates.

    Args:
        min_value: Lower bound
        value: Value to clamp
        max_value: Upper bound

    Returns:
        Clamped value

    Examples:
        >>> clamp(0, 5, 10)
        5
        >>> clamp(-2, -7, 2)
        -2
        >>> clamp(0, 12.5, 10)
        10
    """
    return max(min_value, min(max_value, value))


def clamp01(value: float) -> float:
    """Clamp a value to the unit interval.

    Examples:
        >>> clamp01(1.4)
        1
        >>> clamp01(-0.2)
        0
        >>> clamp01(0.25)
        0.25
    """
    return min(1, max(0, value))


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between ``a`` and ``b`` (``t`` is not clamped).

    Examples:
        >>> lerp(0, 10, 0.5)
        5.0
        >>> lerp(2, 4, 1.5)
        5.0
    """
    return a + (b - a) * t


def fract(value: float) -> float:
    """Fractional part, always in ``[0, 1)`` (also for negative inputs).

    Examples:
        >>> fract(2.75)
        0.75
        >>> fract(-0.25)
        0.75
    """
    return value - math.floor(value)


def rand01(seed: float) -> float:
    """Deterministic pseudo-random value in ``[0, 1)`` for a numeric seed.

    Uses the ``fract(sin(seed * 12.9898) * 43758.5453)`` hash, so the same seed
    always yields the same value. Jitter effects pass a frame-derived seed here
    instead of calling a stateful random generator.

    Args:
        seed: Any finite number, typically ``frame * k + offset``

    Returns:
        Value in ``[0, 1)``

    Examples:
        >>> rand01(42.0) == rand01(42.0)
        True
        >>> 0 <= rand01(7.3) < 1
        True
    """
    return fract(math.sin(seed * RAND_SEED_SCALE) * RAND_AMPLITUDE)


def frame_seed(frame: float, scale: float = 1.0, offset: float = 0.0) -> float:
    """Build a jitter seed from a frame number (``frame * scale + offset``)."""
    return frame * scale + offset


def exp_damp(current: float, target: float, rate: float, dt: float) -> float:
    """Frame-rate independent exponential smoothing toward ``target``.

    ``current + (target - current) * (1 - exp(-rate * dt))``. A negative ``dt``
    is treated as zero, so the value never moves away from the target.

    Args:
        current: Current value
        target: Value to approach
        rate: Damping rate (lambda, per second); larger is snappier
        dt: Elapsed time in seconds

    Returns:
        New value between ``current`` and ``target``

    Examples:
        >>> exp_damp(0.0, 10.0, 5.0, 0.0)
        0.0
        >>> 0.0 < exp_damp(0.0, 10.0, 5.0, 1 / 30) < 10.0
        True
    """
    t = 1 - math.exp(-rate * max(0.0, dt))
    return current + (target - current) * t


def exp_damp_array(current: np.ndarray, target: np.ndarray, rate: float, dt: float) -> np.ndarray:
    """Vectorized :func:`exp_damp` for numpy arrays of equal shape.

    Examples:
        >>> import numpy as np
        >>> exp_damp_array(np.zeros(3), np.ones(3), 2.0, 0.0).tolist()
        [0.0, 0.0, 0.0]
    """
    t = 1 - math.exp(-rate * max(0.0, dt))
    current = np.asarray(current, dtype=float)
    return current + (np.asarray(target, dtype=float) - current) * t


def safe_div(numerator: float, denominator: float, minimum: float = 1.0) -> float:
    """Divide with the denominator floored at ``minimum`` (progress guards).

    Examples:
        >>> safe_div(5, 0)
        5.0
        >>> safe_div(5, 10)
        0.5
    """
    return numerator / max(minimum, denominator)
