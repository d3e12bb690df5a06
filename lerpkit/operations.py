"""
Arithmetic used to interpolate arbitrary value types.

An :class:`InterpolationSpec` bundles the three operations the affine blend
``start + (end - start) * t`` needs. Specs can be written by hand or derived
from a type's own operators:

>>> from lerpkit.operations import default_spec, spec_for
>>> spec = default_spec(float)
>>> spec.add(spec.scale(spec.subtract(10.0, 0.0), 0.25), 0.0)
2.5
>>> spec_for((0, 0)).add((1, 2), (3, 4))   # element-wise, not concatenation
(4.0, 6.0)

Resolution order for subtraction:

1. the type's own ``-`` operator
2. ``a + (-b)`` when the type can only negate
3. otherwise :class:`~lerpkit.errors.MissingOperationError`
"""
from __future__ import annotations

import operator
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Any, Generic, Optional, Sequence

import numpy as np

from .errors import MissingOperationError
from .types import T, AddFn, NegateFn, ScaleFn, SubtractFn

_OPERATION_NAMES = ("add", "subtract", "scale")


@dataclass(frozen=True)
class InterpolationSpec(Generic[T]):
    """Immutable bundle of the add / subtract / scale operations for one value type."""

    add: AddFn
    subtract: SubtractFn
    scale: ScaleFn

    def __post_init__(self) -> None:
        for name in _OPERATION_NAMES:
            fn = getattr(self, name)
            if fn is None:
                raise MissingOperationError(name, detail="operation was not supplied")
            if not callable(fn):
                raise MissingOperationError(name, detail=f"{type(fn).__name__} object is not callable")

    @classmethod
    def from_negate(cls, add: AddFn, negate: NegateFn, scale: ScaleFn) -> InterpolationSpec[T]:
        """Build a spec for a type that can add and negate but has no subtraction."""
        if negate is None or not callable(negate):
            raise MissingOperationError("negate", detail="operation was not supplied")
        return cls(add=add, subtract=_subtract_via_negate(add, negate), scale=scale)

    def with_operations(
        self,
        add: Optional[AddFn] = None,
        subtract: Optional[SubtractFn] = None,
        scale: Optional[ScaleFn] = None,
    ) -> InterpolationSpec[T]:
        """Return a copy with the given operations replaced."""
        changes = {
            name: fn
            for name, fn in (("add", add), ("subtract", subtract), ("scale", scale))
            if fn is not None
        }
        return replace(self, **changes)


def _subtract_via_negate(add: AddFn, negate: NegateFn) -> SubtractFn:
    def subtract(a, b):
        return add(a, negate(b))
    return subtract


# ---------------------------------------------------------------------------
# Operator discovery
# ---------------------------------------------------------------------------
def _has_operator(type_: type, dunder: str) -> bool:
    return callable(getattr(type_, dunder, None))


def _check_interpolable(type_: type) -> None:
    if not isinstance(type_, type):
        raise TypeError(f"Expected a type, got {type_!r}")
    if issubclass(type_, bool):
        raise MissingOperationError("add", type_, "booleans cannot be interpolated")


def resolve_add(type_: type) -> AddFn:
    """Return the addition operator of ``type_``."""
    _check_interpolable(type_)
    if _has_operator(type_, "__add__"):
        return operator.add
    raise MissingOperationError("add", type_)


def resolve_subtract(type_: type) -> SubtractFn:
    """Return the subtraction operator of ``type_``, falling back to add + negate."""
    _check_interpolable(type_)
    if _has_operator(type_, "__sub__"):
        return operator.sub
    if _has_operator(type_, "__neg__"):
        return _subtract_via_negate(resolve_add(type_), operator.neg)
    raise MissingOperationError("subtract", type_, "no subtraction or negation operator")


def resolve_scale(type_: type) -> ScaleFn:
    """Return multiplication of ``type_`` by a float."""
    _check_interpolable(type_)
    if _has_operator(type_, "__mul__"):
        return operator.mul
    raise MissingOperationError("scale", type_, "no multiplication by float")


# ---------------------------------------------------------------------------
# Ready-made specs
# ---------------------------------------------------------------------------
NUMERIC_SPEC: InterpolationSpec = InterpolationSpec(
    add=operator.add, subtract=operator.sub, scale=operator.mul
)


def _as_float_array(value) -> np.ndarray:
    arr = np.asarray(value)
    # Fractional scaling must not truncate integer inputs
    if arr.dtype.kind in ("i", "u", "b"):
        arr = arr.astype(float)
    return arr


def _scale_array(value, fraction: float) -> np.ndarray:
    return np.multiply(_as_float_array(value), fraction)


ARRAY_SPEC: InterpolationSpec = InterpolationSpec(
    add=np.add, subtract=np.subtract, scale=_scale_array
)


def _make_sequence(seq_type: type, items: list) -> Sequence[Any]:
    if issubclass(seq_type, tuple) and hasattr(seq_type, "_fields"):
        return seq_type._make(items)
    return seq_type(items)


def _restore_nesting(template: Any, value: Any) -> Any:
    if isinstance(template, (tuple, list)) and isinstance(value, list):
        return _make_sequence(type(template), [_restore_nesting(t, v) for t, v in zip(template, value)])
    return value


def _rebuild_sequence(seq_type: type, template: Sequence[Any], arr: np.ndarray) -> Sequence[Any]:
    # inner levels keep the sequence types of the template
    items = arr.tolist()
    return _make_sequence(seq_type, [_restore_nesting(t, v) for t, v in zip(template, items)])


def sequence_spec(seq_type: type = tuple) -> InterpolationSpec:
    """
    Element-wise spec for tuples, lists and named tuples.

    Their native ``+`` concatenates, so the arithmetic runs on numpy arrays
    and the result is converted back to ``seq_type``. Nested tuples and
    lists keep their types at every level.
    """
    if not (isinstance(seq_type, type) and issubclass(seq_type, (tuple, list))):
        raise TypeError(f"sequence_spec expects a tuple or list type, got {seq_type!r}")

    def add(a, b):
        return _rebuild_sequence(seq_type, a, np.add(_as_float_array(a), _as_float_array(b)))

    def subtract(a, b):
        return _rebuild_sequence(seq_type, a, np.subtract(_as_float_array(a), _as_float_array(b)))

    def scale(v, fraction):
        return _rebuild_sequence(seq_type, v, _scale_array(v, fraction))

    return InterpolationSpec(add=add, subtract=subtract, scale=scale)


@lru_cache(maxsize=None)
def default_spec(type_: type) -> InterpolationSpec:
    """
    Derive an :class:`InterpolationSpec` from the operators ``type_`` defines.

    Raises:
        MissingOperationError: if addition, subtraction (or negation) or
            multiplication by a float cannot be found.
    """
    _check_interpolable(type_)
    if issubclass(type_, np.ndarray):
        return ARRAY_SPEC
    if issubclass(type_, (tuple, list)):
        return sequence_spec(type_)
    if type_ in (int, float):
        return NUMERIC_SPEC
    return InterpolationSpec(
        add=resolve_add(type_),
        subtract=resolve_subtract(type_),
        scale=resolve_scale(type_),
    )


def spec_for(value: Any) -> InterpolationSpec:
    """Spec for the runtime type of ``value``."""
    return default_spec(type(value))
