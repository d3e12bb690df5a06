"""
Pointwise interpolation between two values of any type.

``interpolate`` applies the affine blend ``start + (end - start) * t`` using
the operations of an :class:`~lerpkit.operations.InterpolationSpec`;
``interpolate_eased`` remaps ``t`` through an easing curve first.
:class:`Interpolator` packages a spec, a curve and an optional bound on
``t`` into one reusable, immutable configuration.

``t`` is never clamped by the free functions: values outside ``[0, 1]``
extrapolate along the same line.
"""
from __future__ import annotations

import warnings
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Generic, List, Optional

import numpy as np
from boundednumbers import BoundType, bound_type_to_np_function

from .curves import LINEAR, get_curve
from .errors import MissingOperationError
from .operations import InterpolationSpec, default_spec, spec_for
from .types import T, AddFn, CurveLike, EasingCurve, OutputFn, ScaleFn, SubtractFn

if TYPE_CHECKING:
    from .driver import InterpolationDriver


def interpolate(start: T, end: T, t: float, spec: Optional[InterpolationSpec[T]] = None) -> T:
    """
    Blend ``start`` towards ``end`` by ``t``.

    Args:
        start: Value at ``t == 0``.
        end: Value at ``t == 1``.
        t: Progress; not clamped.
        spec: Arithmetic to use. Derived from ``type(start)`` when omitted.

    Returns:
        ``spec.add(spec.scale(spec.subtract(end, start), t), start)``
    """
    if spec is None:
        spec = spec_for(start)
    delta = spec.subtract(end, start)
    return spec.add(spec.scale(delta, t), start)


def interpolate_eased(
    start: T,
    end: T,
    t: float,
    curve: CurveLike = None,
    spec: Optional[InterpolationSpec[T]] = None,
) -> T:
    """``interpolate(start, end, curve.evaluate(t), spec)``."""
    return interpolate(start, end, get_curve(curve).evaluate(t), spec)


@dataclass(frozen=True)
class Interpolator(Generic[T]):
    """
    Reusable interpolation settings for one value type.

    Instances are immutable; the ``with_*`` methods return modified copies.

    >>> lerp = Interpolator.for_type(float).with_curve("ease_in_quad")
    >>> lerp(0.0, 10.0, 0.5)
    2.5
    """

    spec: InterpolationSpec[T]
    curve: EasingCurve = LINEAR
    bound_type: BoundType = BoundType.IGNORE

    def __post_init__(self) -> None:
        if self.spec is None:
            raise MissingOperationError("add/subtract/scale", detail="no InterpolationSpec supplied")
        if not isinstance(self.spec, InterpolationSpec):
            raise TypeError(f"spec must be an InterpolationSpec, got {type(self.spec).__name__}")
        object.__setattr__(self, "curve", get_curve(self.curve))

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def for_type(cls, type_: type, curve: CurveLike = None) -> Interpolator:
        """Interpolator using the native operators of ``type_``."""
        return cls(spec=default_spec(type_), curve=get_curve(curve))

    @classmethod
    def for_value(cls, value: Any, curve: CurveLike = None) -> Interpolator:
        return cls(spec=spec_for(value), curve=get_curve(curve))

    def with_add(self, add: AddFn) -> Interpolator[T]:
        return replace(self, spec=self.spec.with_operations(add=add))

    def with_subtract(self, subtract: SubtractFn) -> Interpolator[T]:
        return replace(self, spec=self.spec.with_operations(subtract=subtract))

    def with_scale(self, scale: ScaleFn) -> Interpolator[T]:
        return replace(self, spec=self.spec.with_operations(scale=scale))

    def with_curve(self, curve: CurveLike) -> Interpolator[T]:
        return replace(self, curve=get_curve(curve))

    def with_bound_type(self, bound_type: BoundType) -> Interpolator[T]:
        """Bound ``t`` into ``[0, 1]`` (clamp, cycle, bounce) before easing."""
        return replace(self, bound_type=bound_type)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------
    def progress(self, t: float) -> float:
        """
        Eased progress for linear progress ``t``.

        ``t`` already inside ``[0, 1]`` is never bounded, so both endpoints
        survive every bound type. Under ``CYCLIC`` whole cycles past 1 land on
        1, not 0.
        """
        if self.bound_type is not BoundType.IGNORE and not 0.0 <= t <= 1.0:
            fn = bound_type_to_np_function[self.bound_type]
            bounded = float(fn(np.asarray(t, dtype=float), 0.0, 1.0))
            if self.bound_type is BoundType.CYCLIC and t > 1.0 and bounded == 0.0:
                bounded = 1.0
            t = bounded
        return self.curve.evaluate(t)

    def interpolate(self, start: T, end: T, t: float) -> T:
        return interpolate(start, end, self.progress(t), self.spec)

    __call__ = interpolate

    def sample(self, start: T, end: T, count: int) -> List[T]:
        """``count`` values at evenly spaced progress from 0 to 1 inclusive."""
        if count < 2:
            raise ValueError(f"sample needs at least 2 points, got {count}")
        return [self.interpolate(start, end, float(t)) for t in np.linspace(0.0, 1.0, count)]

    def over_time(
        self,
        start: T,
        end: T,
        duration: float,
        output: OutputFn,
        emit_initial: bool = True,
    ) -> InterpolationDriver[T]:
        """
        Timed interpolation using this configuration.

        ``spec`` and ``curve`` carry over to the returned
        :class:`~lerpkit.driver.InterpolationDriver`. ``bound_type`` does not:
        driver progress is ``elapsed / duration`` below 1 and exactly 1 for
        the final output, so it never leaves ``[0, 1]``.
        """
        from .driver import InterpolationDriver  # local import to avoid cycles

        return InterpolationDriver(
            start, end, duration, output,
            curve=self.curve, spec=self.spec, emit_initial=emit_initial,
        )


def get_builder(type_: type) -> Interpolator:
    """
    Deprecated: use :meth:`Interpolator.for_type` instead.

    Returns an immutable :class:`Interpolator`; its ``with_*`` methods return
    new instances instead of mutating the builder in place.
    """
    warnings.warn(
        "get_builder is deprecated. Use lerpkit.Interpolator.for_type instead.",
        DeprecationWarning,
        stacklevel=2,
    )
    return Interpolator.for_type(type_)
