from __future__ import annotations
from typing import Callable, Protocol, TypeVar, Union, runtime_checkable

T = TypeVar("T")

AddFn = Callable[[T, T], T]
SubtractFn = Callable[[T, T], T]
NegateFn = Callable[[T], T]
ScaleFn = Callable[[T, float], T]
OutputFn = Callable[[T], None]
CurveFn = Callable[[float], float]


@runtime_checkable
class EasingCurve(Protocol):
    """Anything that remaps linear progress over the unit domain."""

    def evaluate(self, t: float) -> float:
        ...


CurveLike = Union[EasingCurve, CurveFn, str, None]
