"""
Tests for the tick-driven timed interpolation.
"""
import math

import pytest

from lerpkit import (
    DriverState,
    InterpolationDriver,
    InterpolationSession,
    InvalidDurationError,
    MissingOperationError,
    interpolate_over_time,
)
from .samples import Tag, Vector2


def make_driver(start=0.0, end=10.0, duration=2.0, **kwargs):
    values = []
    driver = InterpolationDriver(start, end, duration, values.append, **kwargs)
    return driver, values


class TestScenario:
    """0 -> 10 over 2 seconds, ticked in half-second steps."""

    def test_tick_outputs(self):
        driver, values = make_driver(emit_initial=False)
        for _ in range(4):
            driver.tick(0.5)
        assert values == [2.5, 5.0, 7.5, 10.0]
        assert driver.state is DriverState.COMPLETED

    def test_with_initial_value(self):
        driver, values = make_driver()
        driver.run([0.5] * 4)
        assert values == [0.0, 2.5, 5.0, 7.5, 10.0]

    def test_extra_ticks_ignored(self):
        driver, values = make_driver(emit_initial=False)
        driver.run([0.5] * 10)
        assert values == [2.5, 5.0, 7.5, 10.0]
        assert driver.tick(0.5) is False
        assert len(values) == 4


class TestTicking:
    def test_pending_until_started(self):
        driver, values = make_driver()
        assert driver.state is DriverState.PENDING
        assert driver.is_active
        assert values == []

    def test_start_emits_initial(self):
        driver, values = make_driver()
        assert driver.start() is True
        assert driver.state is DriverState.RUNNING
        assert values == [0.0]

    def test_start_twice_is_noop(self):
        driver, values = make_driver()
        driver.start()
        driver.start()
        assert values == [0.0]

    def test_first_tick_starts_driver(self):
        driver, values = make_driver()
        assert driver.tick(0.5) is True
        assert values == [0.0, 2.5]

    @pytest.mark.parametrize("duration, delta", [(2.0, 0.5), (1.0, 0.3), (3.0, 0.7), (1.0, 0.25)])
    def test_output_count(self, duration, delta):
        driver, values = make_driver(duration=duration, emit_initial=False)
        ticks = 0
        while driver.tick(delta):
            ticks += 1
        # every tick but the last is non-terminal
        expected_non_terminal = math.ceil(duration / delta) - 1
        assert ticks == expected_non_terminal
        assert len(values) == expected_non_terminal + 1
        assert values[-1] == 10.0

    def test_non_terminal_fractions_below_one(self):
        fractions = []
        driver = InterpolationDriver(0.0, 1.0, 1.0, lambda v: None, curve=lambda t: fractions.append(t) or t)
        driver.run([0.3] * 5)
        assert fractions[-1] == 1.0
        assert all(0.0 <= f < 1.0 for f in fractions[:-1])

    def test_overshoot_still_ends_exactly(self):
        driver, values = make_driver(emit_initial=False)
        driver.tick(1.9)
        driver.tick(5.0)
        assert values == [pytest.approx(9.5), 10.0]
        assert driver.session.elapsed == pytest.approx(6.9)

    def test_irregular_last_fraction_preserved(self):
        fractions = []
        driver = InterpolationDriver(0.0, 1.0, 1.0, lambda v: None, curve=lambda t: fractions.append(t) or t,
                                     emit_initial=False)
        driver.run([0.1, 0.05, 2.0])
        assert fractions == [pytest.approx(0.1), pytest.approx(0.15), 1.0]

    def test_zero_delta(self):
        driver, values = make_driver(emit_initial=False)
        driver.tick(0.0)
        assert values == [0.0]
        assert driver.state is DriverState.RUNNING

    def test_negative_delta(self):
        driver, values = make_driver()
        with pytest.raises(ValueError, match="non-negative"):
            driver.tick(-0.1)
        assert values == []

    def test_curve_evaluated_at_one_for_final_output(self):
        driver, values = make_driver(curve=lambda t: 0.5 if t >= 1.0 else t, emit_initial=False)
        driver.run([1.0, 1.0])
        assert values == [5.0, 5.0]

    def test_eased(self):
        driver, values = make_driver(curve="ease_in_quad", emit_initial=False)
        driver.run([1.0, 1.0])
        assert values == [2.5, 10.0]

    def test_custom_type(self):
        driver, values = make_driver(Vector2(0, 0), Vector2(4, 8), 1.0, emit_initial=False)
        driver.run([0.25, 0.25, 0.25, 0.25])
        assert values == [Vector2(1, 2), Vector2(2, 4), Vector2(3, 6), Vector2(4, 8)]


class TestImmediateCompletion:
    """Zero and negative durations skip the loop and only emit the end value."""

    @pytest.mark.parametrize("duration", [0.0, -1.0])
    def test_single_output(self, duration):
        driver, values = make_driver(duration=duration)
        assert driver.tick(0.016) is False
        assert values == [10.0]
        assert driver.state is DriverState.COMPLETED

    def test_start_completes(self):
        driver, values = make_driver(duration=0)
        assert driver.start() is False
        assert values == [10.0]
        driver.tick(1.0)
        assert values == [10.0]

    @pytest.mark.parametrize("duration", [float("nan"), float("inf")])
    def test_non_finite_duration(self, duration):
        with pytest.raises(InvalidDurationError):
            make_driver(duration=duration)

    def test_invalid_duration_is_value_error(self):
        with pytest.raises(ValueError):
            make_driver(duration=float("nan"))


class TestCancellation:
    def test_cancel_mid_sequence(self):
        driver, values = make_driver(emit_initial=False)
        driver.tick(0.5)
        driver.cancel()
        assert driver.state is DriverState.CANCELLED
        assert driver.tick(0.5) is False
        driver.run([5.0])
        assert values == [2.5]

    def test_cancel_before_start(self):
        driver, values = make_driver()
        driver.cancel()
        assert driver.start() is False
        driver.tick(3.0)
        assert values == []

    def test_cancel_after_completion_is_noop(self):
        driver, values = make_driver(duration=0)
        driver.start()
        driver.cancel()
        assert driver.state is DriverState.COMPLETED
        assert driver.is_done


class TestErrors:
    def test_missing_operations_fail_at_construction(self):
        with pytest.raises(MissingOperationError):
            InterpolationDriver(Tag("a"), Tag("b"), 1.0, print)

    def test_output_must_be_callable(self):
        with pytest.raises(TypeError, match="output must be callable"):
            InterpolationDriver(0.0, 1.0, 1.0, None)

    def test_output_errors_propagate(self):
        def output(value):
            if value > 5:
                raise RuntimeError("sink full")

        driver = InterpolationDriver(0.0, 10.0, 2.0, output)
        driver.tick(0.5)
        with pytest.raises(RuntimeError, match="sink full"):
            driver.run([0.5] * 4)
        assert driver.state is DriverState.RUNNING

    def test_failed_final_output_does_not_complete(self):
        def output(value):
            raise RuntimeError("boom")

        driver = InterpolationDriver(0.0, 1.0, 0.0, output)
        with pytest.raises(RuntimeError):
            driver.start()
        assert driver.state is DriverState.PENDING


def test_session_fraction():
    session = InterpolationSession(0.0, 1.0, 2.0, elapsed=0.5)
    assert session.fraction == 0.25
    assert not session.is_complete
    session.elapsed = 2.0
    assert session.is_complete
    assert InterpolationSession(0.0, 1.0, 0.0).fraction == 1.0


def test_repr_shows_state():
    driver, _ = make_driver()
    assert "PENDING" in repr(driver)


class TestGenerator:
    """Coroutine form driven with send()."""

    def test_scenario(self):
        values = []
        steps = interpolate_over_time(0.0, 10.0, 2.0, values.append)
        next(steps)
        for _ in range(3):
            steps.send(0.5)
        with pytest.raises(StopIteration) as finished:
            steps.send(0.5)
        assert finished.value.value is DriverState.COMPLETED
        assert values == [0.0, 2.5, 5.0, 7.5, 10.0]

    def test_close_cancels_silently(self):
        values = []
        steps = interpolate_over_time(0.0, 10.0, 2.0, values.append)
        next(steps)
        steps.send(0.5)
        steps.close()
        assert values == [0.0, 2.5]

    def test_zero_duration(self):
        values = []
        steps = interpolate_over_time(0.0, 10.0, 0.0, values.append)
        with pytest.raises(StopIteration):
            next(steps)
        assert values == [10.0]

    def test_without_initial_value(self):
        values = []
        steps = interpolate_over_time(0.0, 10.0, 2.0, values.append, emit_initial=False)
        next(steps)
        assert values == []
        for _ in range(3):
            steps.send(0.5)
        with pytest.raises(StopIteration):
            steps.send(0.5)
        assert values == pytest.approx([2.5, 5.0, 7.5, 10.0])

    def test_none_delta_is_zero(self):
        values = []
        steps = interpolate_over_time(0.0, 10.0, 2.0, values.append, curve="linear")
        next(steps)
        next(steps)
        assert values == [0.0, 0.0]
