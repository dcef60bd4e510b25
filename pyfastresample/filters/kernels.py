"""
Filter kernels for separable resampling.

A filter kernel is a scalar weight function with a bounded support radius.
Weights are only meaningful for ``|x| < radius`` but every kernel here returns
0 outside its support, so callers may evaluate it anywhere.

Available kernels:
- lanczos(a): windowed sinc, sharp but prone to ringing
- cubic(a): Mitchell-Netravali / Catmull-Rom family, radius 2
- hermite(): cubic Hermite basis, radius 1
- triangle(): tent filter, equivalent to bilinear interpolation

Author: B.G.
"""

import math
from dataclasses import dataclass
from typing import Callable

from ..errors import InvalidOptionError


@dataclass(frozen=True)
class FilterKernel:
    """A weight function over a bounded support radius."""

    weight: Callable[[float], float]
    radius: float
    name: str = "custom"

    def __call__(self, x):
        return self.weight(x)

    def __repr__(self):
        return f"FilterKernel(name={self.name!r}, radius={self.radius})"


def create_filter(weight, radius, name="custom"):
    """
    Wrap a weight function as a FilterKernel.

    Args:
        weight: Callable mapping a real offset to a real weight. Must return 0
                for ``|x| >= radius``.
        radius: Positive support radius.
        name: Label used in logs and reprs.

    Returns:
        FilterKernel
    """
    if not callable(weight):
        raise TypeError("weight must be callable")
    if not radius > 0:
        raise InvalidOptionError(f"filter radius must be > 0, got {radius}")
    return FilterKernel(weight=weight, radius=float(radius), name=name)


def lanczos(a=3):
    """
    Lanczos (windowed sinc) kernel of support radius ``a``.

    weight(x) = a sin(pi x) sin(pi x / a) / (pi x)^2 for 0 < |x| < a, 1 at 0.
    """
    a = float(a)

    def weight(x):
        if x == 0:
            return 1.0
        if x < 0:
            x = -x
        if x < a:
            x *= math.pi
            return a * math.sin(x) * math.sin(x / a) / (x * x)
        return 0.0

    return create_filter(weight, a, name=f"lanczos{a:g}")


def cubic(a=0.5):
    """
    Cubic convolution kernel (radius 2).

    The caller's ``a`` is negated internally, so ``cubic(0.5)`` is the
    Catmull-Rom spline.
    """
    p = -float(a)

    def weight(x):
        if x < 0:
            x = -x
        xx = x * x
        if x < 1:
            return (p + 2) * xx * x - (p + 3) * xx + 1
        if x < 2:
            return p * xx * x - 5 * p * xx + 8 * p * x - 4 * p
        return 0.0

    return create_filter(weight, 2.0, name=f"cubic{a:g}")


def _hermite_weight(x):
    if x < 0:
        x = -x
    if x < 1:
        return (2 * x - 3) * x * x + 1
    return 0.0


def _triangle_weight(x):
    if x < 0:
        x = -x
    if x < 1:
        return 1 - x
    return 0.0


def hermite():
    """Cubic Hermite kernel (radius 1)."""
    return create_filter(_hermite_weight, 1.0, name="hermite")


def triangle():
    """Tent kernel (radius 1), bilinear interpolation."""
    return create_filter(_triangle_weight, 1.0, name="triangle")


FILTERS = {
    "lanczos3": lanczos(3),
    "lanczos8": lanczos(8),
    "cubic": cubic(0.5),
    "hermite": hermite(),
    "triangle": triangle(),
}


def get_filter(spec):
    """
    Resolve a filter given as a FilterKernel or a preset name.

    Args:
        spec: FilterKernel instance or one of ``FILTERS`` keys.

    Returns:
        FilterKernel

    Raises:
        InvalidOptionError: Unknown preset name.
        TypeError: Unsupported argument type.
    """
    if isinstance(spec, FilterKernel):
        return spec
    if isinstance(spec, str):
        try:
            return FILTERS[spec.lower()]
        except KeyError:
            raise InvalidOptionError(
                f"unknown filter '{spec}', expected one of {sorted(FILTERS)}"
            ) from None
    raise TypeError("filter must be a FilterKernel or a preset name")


__all__ = [
    "FilterKernel",
    "create_filter",
    "lanczos",
    "cubic",
    "hermite",
    "triangle",
    "FILTERS",
    "get_filter",
]
