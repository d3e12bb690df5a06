"""Driving timed interpolations from a fixed-step or jittery frame loop.

Run directly with:
    python examples/animations.py
"""
import random

from lerpkit import DriverState, Interpolator, InterpolationDriver, interpolate_over_time


class Sprite:
    def __init__(self):
        self.position = (0.0, 0.0)
        self.opacity = 0.0

    def move_to(self, position):
        self.position = position

    def fade_to(self, opacity):
        self.opacity = opacity


def frame_loop(drivers, frame_time=1 / 60, jitter=0.0, max_frames=600):
    """Tick every driver once per frame until all are done."""
    rng = random.Random(7)
    frames = 0
    while any(d.is_active for d in drivers) and frames < max_frames:
        delta = max(0.0, frame_time + rng.uniform(-jitter, jitter))
        for driver in drivers:
            driver.tick(delta)
        frames += 1
    return frames


def slide_and_fade() -> None:
    sprite = Sprite()
    slide = Interpolator.for_value(sprite.position).with_curve("ease_in_out_cubic")
    drivers = [
        slide.over_time((0.0, 0.0), (320.0, 180.0), 0.5, sprite.move_to),
        InterpolationDriver(0.0, 1.0, 0.25, sprite.fade_to, curve="ease_out_quad"),
    ]
    frames = frame_loop(drivers, jitter=0.004)
    print(f"finished after {frames} frames at {sprite.position}, opacity {sprite.opacity}")


def interrupted_bounce() -> None:
    heights = []
    bounce = InterpolationDriver(100.0, 0.0, 1.0, heights.append, curve="ease_out_bounce")
    bounce.run([0.1] * 4)
    bounce.cancel()
    bounce.run([0.1] * 10)
    print(f"cancelled in state {bounce.state.name} after {len(heights)} outputs: {heights}")
    assert bounce.state is DriverState.CANCELLED


def coroutine_style() -> None:
    samples = []
    steps = interpolate_over_time(0.0, 1.0, 0.3, samples.append, curve="ease_out_back")
    next(steps)
    try:
        while True:
            steps.send(0.05)
    except StopIteration as done:
        print(f"coroutine returned {done.value.name}: {[round(s, 3) for s in samples]}")


if __name__ == "__main__":
    slide_and_fade()
    interrupted_bounce()
    coroutine_style()
