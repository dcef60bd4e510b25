"""
Filter kernels for PyFastResample.

Provides the kernel family used by the separable resampler together with a
preset table mirroring the common choices:

- lanczos3 / lanczos8: windowed sinc of radius 3 / 8
- cubic: Catmull-Rom cubic convolution (a = 0.5)
- hermite: cubic Hermite, smooth low-pass
- triangle: tent filter (bilinear)

Usage:
    import pyfastresample as pfr

    k = pfr.filters.lanczos(3)
    k(0.5)
    k = pfr.filters.get_filter("triangle")

Author: B.G.
"""

from .kernels import (
    FILTERS,
    FilterKernel,
    create_filter,
    cubic,
    get_filter,
    hermite,
    lanczos,
    triangle,
)

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
