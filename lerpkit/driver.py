"""
Timed interpolation advanced by an external tick.

The host calls :meth:`InterpolationDriver.tick` once per frame with the time
that has passed since the previous frame. While the accumulated time is
below ``duration`` every tick outputs the value at ``elapsed / duration``
(always ``< 1``); the tick that reaches or passes ``duration`` outputs the
value at ``t = 1`` exactly once, however far the accumulated time overshot,
and completes the driver.

States::

    PENDING --start()/tick()--> RUNNING --tick()--> COMPLETED
        \\                          \\
         `------- cancel() ---------`--> CANCELLED

A zero or negative duration completes immediately with only the final output.
Cancelling is silent: no further outputs, including the final one.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Generator, Generic, Iterable, Optional

from .curves import get_curve
from .errors import InvalidDurationError
from .interpolation import interpolate_eased
from .operations import InterpolationSpec, spec_for
from .types import T, CurveLike, OutputFn


class DriverState(IntEnum):
    """
    Lifecycle of an :class:`InterpolationDriver`.

    PENDING:   created, nothing emitted yet
    RUNNING:   emitting one value per tick
    COMPLETED: final value emitted
    CANCELLED: stopped early by the host
    """
    PENDING = 0
    RUNNING = 1
    COMPLETED = 2
    CANCELLED = 3


@dataclass
class InterpolationSession(Generic[T]):
    """Run-time record of one timed interpolation."""

    start: T
    end: T
    duration: float
    elapsed: float = 0.0

    @property
    def fraction(self) -> float:
        """Linear progress; 1.0 for durations that complete immediately."""
        if self.duration <= 0:
            return 1.0
        return self.elapsed / self.duration

    @property
    def is_complete(self) -> bool:
        return self.elapsed >= self.duration


class InterpolationDriver(Generic[T]):
    """
    Interpolates ``start`` to ``end`` over ``duration`` time units.

    Args:
        start: Value at the beginning.
        end: Value reported by the final output.
        duration: Total time; ``<= 0`` completes on the first advance.
        output: Called with each interpolated value.
        curve: Easing curve, name or callable; linear by default.
        spec: Arithmetic for the value type; derived from ``start`` when omitted.
        emit_initial: Output the value at ``t = 0`` when the driver starts.

    Raises:
        InvalidDurationError: if ``duration`` is NaN or infinite.
        MissingOperationError: if no spec is given and ``type(start)`` lacks
            the operators to derive one.

    Errors raised by the spec, the curve or ``output`` propagate unchanged.
    """

    __slots__ = ("session", "output", "curve", "spec", "emit_initial", "_state")

    def __init__(
        self,
        start: T,
        end: T,
        duration: float,
        output: OutputFn,
        curve: CurveLike = None,
        spec: Optional[InterpolationSpec[T]] = None,
        emit_initial: bool = True,
    ):
        duration = float(duration)
        if not math.isfinite(duration):
            raise InvalidDurationError(f"Duration must be a finite number, got {duration}")
        if not callable(output):
            raise TypeError(f"output must be callable, got {type(output).__name__}")

        self.session: InterpolationSession[T] = InterpolationSession(start, end, duration)
        self.output = output
        self.curve = get_curve(curve)
        self.spec = spec if spec is not None else spec_for(start)
        self.emit_initial = emit_initial
        self._state = DriverState.PENDING

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def state(self) -> DriverState:
        return self._state

    @property
    def is_active(self) -> bool:
        """True while further ticks are expected."""
        return self._state in (DriverState.PENDING, DriverState.RUNNING)

    @property
    def is_done(self) -> bool:
        return not self.is_active

    def value_at(self, t: float) -> T:
        return interpolate_eased(self.session.start, self.session.end, t, self.curve, self.spec)

    # ------------------------------------------------------------------
    # Advancing
    # ------------------------------------------------------------------
    def start(self) -> bool:
        """
        Begin the interpolation. Does nothing unless the driver is pending.

        Returns:
            Whether the driver still expects ticks.
        """
        if self._state is not DriverState.PENDING:
            return self.is_active
        if self.session.duration <= 0:
            self._finish()
            return False
        if self.emit_initial:
            self.output(self.value_at(0.0))
        self._state = DriverState.RUNNING
        return True

    def tick(self, delta_time: float) -> bool:
        """
        Advance by ``delta_time`` and emit one value.

        A pending driver is started first. Finished or cancelled drivers
        ignore ticks.

        Returns:
            Whether the driver still expects ticks.
        """
        if delta_time < 0:
            raise ValueError(f"delta_time must be non-negative, got {delta_time}")
        if self._state is DriverState.PENDING and not self.start():
            return False
        if self._state is not DriverState.RUNNING:
            return False

        session = self.session
        session.elapsed += delta_time
        if session.elapsed < session.duration:
            self.output(self.value_at(session.elapsed / session.duration))
            return True
        self._finish()
        return False

    def _finish(self) -> None:
        self.output(self.value_at(1.0))
        self._state = DriverState.COMPLETED

    def cancel(self) -> None:
        """Stop without emitting anything else."""
        if self.is_active:
            self._state = DriverState.CANCELLED

    def run(self, deltas: Iterable[float]) -> DriverState:
        """Tick through ``deltas`` until they run out or the driver finishes."""
        self.start()
        for delta_time in deltas:
            if not self.tick(delta_time):
                break
        return self._state

    def __repr__(self):
        s = self.session
        return (
            f"InterpolationDriver(start={s.start!r}, end={s.end!r}, duration={s.duration}, "
            f"elapsed={s.elapsed}, state={self._state.name})"
        )


def interpolate_over_time(
    start: T,
    end: T,
    duration: float,
    output: OutputFn,
    curve: CurveLike = None,
    spec: Optional[InterpolationSpec[T]] = None,
    emit_initial: bool = True,
) -> Generator[None, Optional[float], DriverState]:
    """
    Generator form of :class:`InterpolationDriver`.

    Prime it with ``next()`` (emits the value at ``t = 0`` unless
    ``emit_initial`` is false), then ``send()`` each frame's delta time. The
    generator returns once the final value has been emitted, so the last
    ``send()`` raises ``StopIteration``. Closing it early cancels the
    interpolation silently.

    >>> values = []
    >>> steps = interpolate_over_time(0.0, 10.0, 2.0, values.append)
    >>> next(steps)
    >>> for _ in range(3):
    ...     steps.send(0.5)
    >>> values
    [0.0, 2.5, 5.0, 7.5]
    """
    driver = InterpolationDriver(
        start, end, duration, output, curve=curve, spec=spec, emit_initial=emit_initial,
    )
    driver.start()
    try:
        while driver.is_active:
            delta_time = yield
            driver.tick(0.0 if delta_time is None else delta_time)
    except GeneratorExit:
        driver.cancel()
        raise
    return driver.state
