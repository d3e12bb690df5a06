"""
lerpkit
=======

Interpolate between two values of any type, pointwise or over time.

Features
--------
- Affine interpolation ``start + (end - start) * t`` for any type with
  pluggable add / subtract / scale operations
- Operations derived automatically from a type's own operators, with
  ``a + (-b)`` as fallback subtraction
- Element-wise arithmetic for tuples, lists and numpy arrays
- Named easing functions and keyframe curves with clamp / loop / ping-pong
  wrapping
- A tick-driven driver for timed interpolation inside a game or UI loop

Pointwise Usage
---------------
>>> from lerpkit import interpolate, interpolate_eased
>>> interpolate(0.0, 10.0, 0.25)
2.5
>>> interpolate((0, 0), (10, 20), 0.5)
(5.0, 10.0)
>>> interpolate_eased(0.0, 10.0, 0.5, "ease_in_quad")
2.5

Timed Usage
-----------
>>> from lerpkit import InterpolationDriver
>>> values = []
>>> driver = InterpolationDriver(0.0, 10.0, 2.0, values.append)
>>> driver.run([0.5] * 4)
<DriverState.COMPLETED: 2>
>>> values
[0.0, 2.5, 5.0, 7.5, 10.0]

Custom Arithmetic
-----------------
>>> from lerpkit import Interpolator, InterpolationSpec
>>> spec = InterpolationSpec(
...     add=lambda a, b: a + b,
...     subtract=lambda a, b: a - b,
...     scale=lambda v, f: v * f,
... )
>>> Interpolator(spec, curve="smoothstep")(0.0, 1.0, 0.5)
0.5

Notes
-----
- ``t`` is never clamped unless an Interpolator is given a bound type
- Errors raised by user supplied operations, curves and output callbacks
  propagate unchanged
"""

from .errors import LerpkitError, MissingOperationError, InvalidDurationError, UnknownCurveError
from .operations import (
    InterpolationSpec,
    NUMERIC_SPEC, ARRAY_SPEC,
    default_spec, spec_for, sequence_spec,
    resolve_add, resolve_subtract, resolve_scale,
)
from .curves import (
    Curve, Keyframe, KeyframeCurve,
    EASINGS, LINEAR, get_curve,
)
from .interpolation import interpolate, interpolate_eased, Interpolator, get_builder
from .driver import DriverState, InterpolationSession, InterpolationDriver, interpolate_over_time

from boundednumbers import BoundType

__version__ = "1.0.0"

__all__ = [
    # Errors
    "LerpkitError", "MissingOperationError", "InvalidDurationError", "UnknownCurveError",

    # Operations
    "InterpolationSpec",
    "NUMERIC_SPEC", "ARRAY_SPEC",
    "default_spec", "spec_for", "sequence_spec",
    "resolve_add", "resolve_subtract", "resolve_scale",

    # Curves
    "Curve", "Keyframe", "KeyframeCurve",
    "EASINGS", "LINEAR", "get_curve",
    "BoundType",

    # Interpolation
    "interpolate", "interpolate_eased",
    "Interpolator", "get_builder",

    # Timed interpolation
    "DriverState", "InterpolationSession",
    "InterpolationDriver", "interpolate_over_time",
]
