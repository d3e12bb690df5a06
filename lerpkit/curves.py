"""
Easing curves.

A curve remaps linear progress ``t`` before the affine blend is applied.
Curves are only required to be defined over the unit domain; their range is
free, so overshooting curves such as :func:`ease_out_back` produce
extrapolated values.

Three kinds of curve are accepted wherever lerpkit takes a ``curve``:

- the name of a registered easing (``"ease_in_quad"``)
- any ``float -> float`` callable
- any object with an ``evaluate(t)`` method, e.g. :class:`KeyframeCurve`
"""
from __future__ import annotations

import math
import warnings
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple, Union

import numpy as np
from boundednumbers import BoundType, bound_type_to_np_function

from .errors import UnknownCurveError
from .types import CurveFn, CurveLike, EasingCurve


# =============================================================================
# Easing functions
# =============================================================================
def linear(t: float) -> float:
    return t


def smoothstep(t: float) -> float:
    return t * t * (3 - 2 * t)


def ease_in_quad(t: float) -> float:
    return t * t


def ease_out_quad(t: float) -> float:
    return t * (2 - t)


def ease_in_out_quad(t: float) -> float:
    if t < 0.5:
        return 2 * t * t
    return 1 - (-2 * t + 2) ** 2 / 2


def ease_in_cubic(t: float) -> float:
    return t ** 3


def ease_out_cubic(t: float) -> float:
    return 1 - (1 - t) ** 3


def ease_in_out_cubic(t: float) -> float:
    if t < 0.5:
        return 4 * t ** 3
    return 1 - (-2 * t + 2) ** 3 / 2


def ease_in_sine(t: float) -> float:
    return 1 - math.cos(t * math.pi / 2)


def ease_out_sine(t: float) -> float:
    return math.sin(t * math.pi / 2)


def ease_in_out_sine(t: float) -> float:
    return -(math.cos(math.pi * t) - 1) / 2


def ease_out_back(t: float) -> float:
    """Overshoots past 1 before settling."""
    c1 = 1.70158
    c3 = c1 + 1
    return 1 + c3 * (t - 1) ** 3 + c1 * (t - 1) ** 2


def ease_out_elastic(t: float) -> float:
    if t == 0 or t == 1:
        return t
    c4 = (2 * math.pi) / 3
    return 2 ** (-10 * t) * math.sin((t * 10 - 0.75) * c4) + 1


def ease_out_bounce(t: float) -> float:
    n1 = 7.5625
    d1 = 2.75
    if t < 1 / d1:
        return n1 * t * t
    if t < 2 / d1:
        t -= 1.5 / d1
        return n1 * t * t + 0.75
    if t < 2.5 / d1:
        t -= 2.25 / d1
        return n1 * t * t + 0.9375
    t -= 2.625 / d1
    return n1 * t * t + 0.984375


EASINGS: Dict[str, CurveFn] = {
    "linear": linear,
    "smoothstep": smoothstep,
    "ease_in_quad": ease_in_quad,
    "ease_out_quad": ease_out_quad,
    "ease_in_out_quad": ease_in_out_quad,
    "ease_in_cubic": ease_in_cubic,
    "ease_out_cubic": ease_out_cubic,
    "ease_in_out_cubic": ease_in_out_cubic,
    "ease_in_sine": ease_in_sine,
    "ease_out_sine": ease_out_sine,
    "ease_in_out_sine": ease_in_out_sine,
    "ease_out_back": ease_out_back,
    "ease_out_elastic": ease_out_elastic,
    "ease_out_bounce": ease_out_bounce,
}


# =============================================================================
# Curve wrappers
# =============================================================================
class Curve:
    """Adapts a ``float -> float`` callable to the :class:`EasingCurve` protocol."""

    __slots__ = ("_fn", "name")

    def __init__(self, fn: CurveFn, name: Optional[str] = None):
        if not callable(fn):
            raise TypeError(f"Curve function must be callable, got {type(fn).__name__}")
        self._fn = fn
        self.name = name if name is not None else getattr(fn, "__name__", None)

    @classmethod
    def linear(cls) -> Curve:
        return LINEAR

    def evaluate(self, t: float) -> float:
        return self._fn(t)

    def __call__(self, t: float) -> float:
        return self._fn(t)

    def __repr__(self):
        return f"Curve({self.name or self._fn!r})"


LINEAR = Curve(linear, "linear")


def get_curve(curve: CurveLike) -> EasingCurve:
    """
    Resolve anything accepted as a curve to an :class:`EasingCurve`.

    ``None`` resolves to the linear curve.
    """
    if curve is None:
        return LINEAR
    if isinstance(curve, str):
        try:
            return Curve(EASINGS[curve], curve)
        except KeyError:
            known = ", ".join(sorted(EASINGS))
            raise UnknownCurveError(f"Unknown easing curve {curve!r}; expected one of: {known}") from None
    if isinstance(curve, EasingCurve):
        return curve
    if callable(curve):
        return Curve(curve)
    raise TypeError(f"Cannot use {type(curve).__name__} as an easing curve")


# =============================================================================
# Keyframe curves
# =============================================================================
@dataclass(frozen=True)
class Keyframe:
    """A ``(time, value)`` point; tangents are slopes (value per unit time)."""

    time: float
    value: float
    in_tangent: Optional[float] = None
    out_tangent: Optional[float] = None


KeyframeLike = Union[Keyframe, Tuple[float, float], Tuple[float, float, float, float]]


def _to_keyframe(key: KeyframeLike) -> Keyframe:
    if isinstance(key, Keyframe):
        return key
    return Keyframe(*key)


class KeyframeCurve:
    """
    Piecewise curve through keyframes.

    Segments are linear unless the keyframes on either side carry tangents,
    in which case the segment is a cubic Hermite spline. Outside the keyframe
    span the time is wrapped according to ``pre_wrap`` (before the first key)
    and ``post_wrap`` (after the last key):

    - ``BoundType.CLAMP``  hold the end value
    - ``BoundType.CYCLIC`` loop over the span
    - ``BoundType.BOUNCE`` ping-pong over the span
    - ``BoundType.IGNORE`` extend the end segment linearly

    >>> curve = KeyframeCurve.linear(0.0, 0.0, 1.0, 1.0)
    >>> curve.evaluate(0.25)
    0.25
    """

    __slots__ = ("_keys", "_times", "pre_wrap", "post_wrap")

    def __init__(
        self,
        keys: Iterable[KeyframeLike],
        pre_wrap: BoundType = BoundType.CLAMP,
        post_wrap: BoundType = BoundType.CLAMP,
        warn_if_open: bool = False,
    ):
        keyframes = sorted((_to_keyframe(k) for k in keys), key=lambda k: k.time)
        if not keyframes:
            raise ValueError("KeyframeCurve needs at least one keyframe")
        times = np.array([k.time for k in keyframes], dtype=float)
        if np.any(np.diff(times) == 0):
            raise ValueError(f"Keyframe times must be unique, got {times.tolist()}")

        self._keys: List[Keyframe] = keyframes
        self._times = times
        self.pre_wrap = pre_wrap
        self.post_wrap = post_wrap

        if warn_if_open and not self._is_unit_curve():
            first, last = keyframes[0], keyframes[-1]
            warnings.warn(
                f"Easing curve runs from ({first.time}, {first.value}) to ({last.time}, {last.value}) "
                "instead of (0, 0) to (1, 1); interpolation will not start and end on its endpoints.",
                RuntimeWarning,
                stacklevel=2,
            )

    @classmethod
    def linear(
        cls, time_start: float = 0.0, value_start: float = 0.0,
        time_end: float = 1.0, value_end: float = 1.0,
    ) -> KeyframeCurve:
        """Straight line between two keyframes."""
        return cls([(time_start, value_start), (time_end, value_end)])

    @classmethod
    def ease_in_out(
        cls, time_start: float = 0.0, value_start: float = 0.0,
        time_end: float = 1.0, value_end: float = 1.0,
    ) -> KeyframeCurve:
        """S-curve with flat tangents at both keyframes."""
        return cls([
            Keyframe(time_start, value_start, 0.0, 0.0),
            Keyframe(time_end, value_end, 0.0, 0.0),
        ])

    @property
    def keys(self) -> Tuple[Keyframe, ...]:
        return tuple(self._keys)

    def _is_unit_curve(self) -> bool:
        first, last = self._keys[0], self._keys[-1]
        return (first.time, first.value, last.time, last.value) == (0, 0, 1, 1)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------
    def evaluate(self, t: float) -> float:
        keys = self._keys
        if len(keys) == 1:
            return keys[0].value

        t0, t1 = float(self._times[0]), float(self._times[-1])
        if t < t0 or t > t1:
            wrap = self.pre_wrap if t < t0 else self.post_wrap
            if wrap is BoundType.IGNORE:
                return self._extrapolate(t)
            span = t1 - t0
            u = bound_type_to_np_function[wrap](np.asarray((t - t0) / span, dtype=float), 0.0, 1.0)
            t = t0 + float(u) * span

        index = int(np.searchsorted(self._times, t, side="right")) - 1
        index = min(max(index, 0), len(keys) - 2)
        return self._evaluate_segment(keys[index], keys[index + 1], t)

    def __call__(self, t: float) -> float:
        return self.evaluate(t)

    @staticmethod
    def _evaluate_segment(k0: Keyframe, k1: Keyframe, t: float) -> float:
        dt = k1.time - k0.time
        s = (t - k0.time) / dt
        if k0.out_tangent is None and k1.in_tangent is None:
            return k0.value + (k1.value - k0.value) * s

        chord = (k1.value - k0.value) / dt
        m0 = (k0.out_tangent if k0.out_tangent is not None else chord) * dt
        m1 = (k1.in_tangent if k1.in_tangent is not None else chord) * dt
        s2 = s * s
        s3 = s2 * s
        return (
            (2 * s3 - 3 * s2 + 1) * k0.value
            + (s3 - 2 * s2 + s) * m0
            + (-2 * s3 + 3 * s2) * k1.value
            + (s3 - s2) * m1
        )

    def _extrapolate(self, t: float) -> float:
        keys = self._keys
        if t < keys[0].time:
            key, neighbour, tangent = keys[0], keys[1], keys[0].in_tangent
        else:
            key, neighbour, tangent = keys[-1], keys[-2], keys[-1].out_tangent
        if tangent is None:
            tangent = (neighbour.value - key.value) / (neighbour.time - key.time)
        return key.value + tangent * (t - key.time)

    def __repr__(self):
        points = ", ".join(f"({k.time}, {k.value})" for k in self._keys)
        return f"KeyframeCurve([{points}], pre_wrap={self.pre_wrap.name}, post_wrap={self.post_wrap.name})"

