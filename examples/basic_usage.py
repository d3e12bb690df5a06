"""Basic lerpkit usage examples.

Run directly with:
    python examples/basic_usage.py
"""
import numpy as np

from lerpkit import (
    BoundType,
    InterpolationSpec,
    Interpolator,
    KeyframeCurve,
    interpolate,
    interpolate_eased,
)


def demonstrate_pointwise() -> None:
    # Plain numbers, tuples and arrays all resolve their own arithmetic.
    print("float:", interpolate(0.0, 10.0, 0.25))
    print("tuple:", interpolate((255, 0, 0), (0, 0, 255), 0.5))
    print("array:", interpolate(np.zeros(3), np.array([1.0, 2.0, 3.0]), 0.5))

    # Easing remaps t before blending; t outside [0, 1] extrapolates.
    print("eased:", interpolate_eased(0.0, 10.0, 0.5, "ease_out_cubic"))
    print("extrapolated:", interpolate(0.0, 10.0, 1.5))


def demonstrate_custom_spec() -> None:
    # Blend dictionaries of channel values key by key.
    spec = InterpolationSpec(
        add=lambda a, b: {k: a[k] + b[k] for k in a},
        subtract=lambda a, b: {k: a[k] - b[k] for k in a},
        scale=lambda v, f: {k: v[k] * f for k in v},
    )
    lerp = Interpolator(spec, curve="smoothstep")
    for value in lerp.sample({"volume": 0.0, "pan": -1.0}, {"volume": 1.0, "pan": 1.0}, 5):
        print("mix:", value)


def demonstrate_keyframes() -> None:
    # Rise to 1, dip, then settle; repeat forever after the last key.
    pulse = KeyframeCurve(
        [(0.0, 0.0), (0.4, 1.0), (0.7, 0.6), (1.0, 1.0)],
        post_wrap=BoundType.CYCLIC,
    )
    lerp = Interpolator.for_type(float).with_curve(pulse)
    print("pulse:", [round(lerp(0.0, 100.0, t), 1) for t in np.linspace(0.0, 2.0, 9)])


if __name__ == "__main__":
    demonstrate_pointwise()
    demonstrate_custom_spec()
    demonstrate_keyframes()
