"""Named easing curves mapping normalized time to normalized progress.

All curves clamp their input to ``[0, 1]`` first, return exactly 0 at ``t=0``
and exactly 1 at ``t=1``. ``ease_out_back`` is the only curve that leaves the
unit interval in between (it overshoots to produce a "pop").

Curves:
    linear: t
    ease_out_quad: 1 - (1 - t)^2
    ease_out_cubic: 1 - (1 - t)^3
    ease_in_out_cubic: cubic blend, symmetric about t = 0.5
    ease_in_expo: 2^(10t - 10), exactly 0 at t = 0
    ease_out_expo: 1 - 2^(-10t), exactly 1 at t = 1
    ease_out_back: overshooting ease-out with configurable overshoot
    ease_in_out_sine: -(cos(pi t) - 1) / 2
"""

import math
from enum import Enum
from typing import Callable

from motionblocks.utils.math.core import clamp01

__all__ = [
    'DEFAULT_BACK_OVERSHOOT',
    'EasingKind',
    'linear',
    'ease_out_quad',
    'ease_out_cubic',
    'ease_in_out_cubic',
    'ease_in_expo',
    'ease_out_expo',
    'ease_out_back',
    'ease_in_out_sine',
    'get_easing',
]

DEFAULT_BACK_OVERSHOOT = 1.35


def linear(t: float) -> float:
    """Identity curve.

    Examples:
        >>> linear(0.3)
        0.3
    """
    return clamp01(t)


def ease_out_quad(t: float) -> float:
    x = clamp01(t)
    return 1 - (1 - x) * (1 - x)


def ease_out_cubic(t: float) -> float:
    """Decelerating cubic.

    Examples:
        >>> ease_out_cubic(0.5)
        0.875
    """
    x = clamp01(t)
    return 1 - (1 - x) ** 3


def ease_in_out_cubic(t: float) -> float:
    """Cubic ease-in for the first half, ease-out for the second.

    Examples:
        >>> ease_in_out_cubic(0.5)
        0.5
        >>> ease_in_out_cubic(0.25) + ease_in_out_cubic(0.75)
        1.0
    """
    x = clamp01(t)
    if x < 0.5:
        return 4 * x * x * x
    return 1 - (-2 * x + 2) ** 3 / 2


def ease_in_expo(t: float) -> float:
    x = clamp01(t)
    if x == 0:
        return 0.0
    return 2 ** (10 * x - 10)


def ease_out_expo(t: float) -> float:
    """Exponential ease-out, special-cased to hit exactly 1 at ``t=1``.

    Examples:
        >>> ease_out_expo(1.0)
        1.0
        >>> ease_out_expo(0.0)
        0.0
    """
    x = clamp01(t)
    if x == 1:
        return 1.0
    return 1 - 2 ** (-10 * x)


def ease_out_back(t: float, overshoot: float = DEFAULT_BACK_OVERSHOOT) -> float:
    """Ease-out that shoots past 1 before settling.

    ``1 + (c + 1)(x - 1)^3 + c(x - 1)^2`` with ``c = overshoot``. The domain is
    clamped to ``[0, 1]``; the range is unconstrained in between.

    Args:
        t: Normalized time
        overshoot: How far the curve swings past the target (0 disables it)

    Returns:
        Eased progress; 0 at ``t=0`` and 1 at ``t=1``

    Examples:
        >>> ease_out_back(1.0, 1.7)
        1.0
        >>> ease_out_back(0.9, 1.7) > 1.0
        True
    """
    x = clamp01(t)
    c1 = overshoot
    c3 = c1 + 1
    return 1 + c3 * (x - 1) ** 3 + c1 * (x - 1) ** 2


def ease_in_out_sine(t: float) -> float:
    """Sinusoidal ease-in-out.

    Examples:
        >>> round(ease_in_out_sine(0.5), 6)
        0.5
    """
    x = clamp01(t)
    return -(math.cos(math.pi * x) - 1) / 2


class EasingKind(Enum):
    """Closed set of curves selectable from template props."""

    LINEAR = "linear"
    EASE_OUT_QUAD = "easeOutQuad"
    EASE_OUT_CUBIC = "easeOutCubic"
    EASE_IN_OUT_CUBIC = "easeInOutCubic"
    EASE_IN_EXPO = "easeInExpo"
    EASE_OUT_EXPO = "easeOutExpo"
    EASE_OUT_BACK = "easeOutBack"
    EASE_IN_OUT_SINE = "easeInOutSine"

    @property
    def function(self) -> Callable[[float], float]:
        return _EASING_FUNCTIONS[self]

    @staticmethod
    def from_string(name: str, default: "EasingKind" = None) -> "EasingKind":
        """Look up a curve by its prop name, falling back to ``default`` (linear)."""
        for kind in EasingKind:
            if kind.value == name:
                return kind
        return default or EasingKind.LINEAR


_EASING_FUNCTIONS = {
    EasingKind.LINEAR: linear,
    EasingKind.EASE_OUT_QUAD: ease_out_quad,
    EasingKind.EASE_OUT_CUBIC: ease_out_cubic,
    EasingKind.EASE_IN_OUT_CUBIC: ease_in_out_cubic,
    EasingKind.EASE_IN_EXPO: ease_in_expo,
    EasingKind.EASE_OUT_EXPO: ease_out_expo,
    EasingKind.EASE_OUT_BACK: ease_out_back,
    EasingKind.EASE_IN_OUT_SINE: ease_in_out_sine,
}


def get_easing(name: str) -> Callable[[float], float]:
    """Return the easing function registered under ``name`` (linear if unknown).

    Examples:
        >>> get_easing("easeOutCubic")(1.0)
        1.0
        >>> get_easing("nope") is linear
        True
    """
    return EasingKind.from_string(name).function
