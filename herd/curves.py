# herd/curves.py

"""Curve library used to shape normalized values.

A curve is any function mapping [0, 1] onto [0, 1]. Library curves are
standard easing functions; user-authored curves are keyframe curves evaluated
with cubic Hermite interpolation, or plain callables.
"""

import bisect
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Union

Curve = Callable[[float], float]


class CurveType(str, Enum):
    """Predefined shaping curves, plus CUSTOM for a user-authored curve."""

    LINEAR = "linear"
    EASE_IN = "ease_in"
    EASE_OUT = "ease_out"
    EASE_IN_OUT = "ease_in_out"
    SINE_IN = "sine_in"
    SINE_OUT = "sine_out"
    SINE_IN_OUT = "sine_in_out"
    QUADRATIC_IN = "quadratic_in"
    QUADRATIC_OUT = "quadratic_out"
    QUADRATIC_IN_OUT = "quadratic_in_out"
    CUBIC_IN = "cubic_in"
    CUBIC_OUT = "cubic_out"
    CUBIC_IN_OUT = "cubic_in_out"
    EXPONENTIAL_IN = "exponential_in"
    EXPONENTIAL_OUT = "exponential_out"
    EXPONENTIAL_IN_OUT = "exponential_in_out"
    CUSTOM = "custom"


@dataclass(frozen=True)
class Keyframe:
    time: float
    value: float
    in_tangent: float = 0.0
    out_tangent: float = 0.0


@dataclass(frozen=True)
class KeyframeCurve:
    """Piecewise cubic Hermite curve through a set of keyframes."""

    keyframes: tuple[Keyframe, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.keyframes:
            raise ValueError("A keyframe curve needs at least one keyframe")
        object.__setattr__(
            self, "keyframes", tuple(sorted(self.keyframes, key=lambda k: k.time))
        )

    @classmethod
    def linear(cls) -> "KeyframeCurve":
        return cls((Keyframe(0.0, 0.0, 1.0, 1.0), Keyframe(1.0, 1.0, 1.0, 1.0)))

    def __call__(self, t: float) -> float:
        keys = self.keyframes
        if t <= keys[0].time:
            return keys[0].value
        if t >= keys[-1].time:
            return keys[-1].value

        times = [k.time for k in keys]
        index = bisect.bisect_right(times, t)
        start, end = keys[index - 1], keys[index]

        span = end.time - start.time
        if span <= 0.0:
            return end.value
        s = (t - start.time) / span
        s2 = s * s
        s3 = s2 * s
        return (
            (2 * s3 - 3 * s2 + 1) * start.value
            + (s3 - 2 * s2 + s) * span * start.out_tangent
            + (-2 * s3 + 3 * s2) * end.value
            + (s3 - s2) * span * end.in_tangent
        )


def _ease_in(t: float) -> float:
    # First half of smoothstep, rescaled
    return 1.5 * t * t - 0.5 * t * t * t


def _exponential_in_out(t: float) -> float:
    if t <= 0.0:
        return 0.0
    if t >= 1.0:
        return 1.0
    if t < 0.5:
        return 2 ** (20 * t - 10) / 2
    return (2 - 2 ** (-20 * t + 10)) / 2


LIBRARY: dict[CurveType, Curve] = {
    CurveType.LINEAR: lambda t: t,
    CurveType.EASE_IN: _ease_in,
    CurveType.EASE_OUT: lambda t: 1 - _ease_in(1 - t),
    CurveType.EASE_IN_OUT: lambda t: t * t * (3 - 2 * t),
    CurveType.SINE_IN: lambda t: 1 - math.cos(t * math.pi / 2),
    CurveType.SINE_OUT: lambda t: math.sin(t * math.pi / 2),
    CurveType.SINE_IN_OUT: lambda t: -(math.cos(math.pi * t) - 1) / 2,
    CurveType.QUADRATIC_IN: lambda t: t * t,
    CurveType.QUADRATIC_OUT: lambda t: 1 - (1 - t) ** 2,
    CurveType.QUADRATIC_IN_OUT: lambda t: 2 * t * t if t < 0.5 else 1 - (-2 * t + 2) ** 2 / 2,
    CurveType.CUBIC_IN: lambda t: t ** 3,
    CurveType.CUBIC_OUT: lambda t: 1 - (1 - t) ** 3,
    CurveType.CUBIC_IN_OUT: lambda t: 4 * t ** 3 if t < 0.5 else 1 - (-2 * t + 2) ** 3 / 2,
    CurveType.EXPONENTIAL_IN: lambda t: 0.0 if t <= 0.0 else 2 ** (10 * t - 10),
    CurveType.EXPONENTIAL_OUT: lambda t: 1.0 if t >= 1.0 else 1 - 2 ** (-10 * t),
    CurveType.EXPONENTIAL_IN_OUT: _exponential_in_out,
}


def get_curve(curve_type: CurveType | str, custom: Optional[Curve] = None) -> Curve:
    """Resolve a curve selection into a callable.

    CUSTOM uses `custom` and falls back to linear when none is given.
    """
    curve_type = CurveType(curve_type)
    if curve_type == CurveType.CUSTOM:
        return custom if custom is not None else LIBRARY[CurveType.LINEAR]
    return LIBRARY[curve_type]


def sample(curve: Union[CurveType, str, Curve], t: float) -> float:
    """Evaluate a curve at t; input and output are clamped to [0, 1]."""
    if isinstance(curve, (CurveType, str)):
        curve = get_curve(curve)
    t = min(1.0, max(0.0, t))
    return min(1.0, max(0.0, float(curve(t))))
