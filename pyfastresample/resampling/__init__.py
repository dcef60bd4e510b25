"""
1D resampling module for PyFastResample.

Channel-agnostic separable resampling: the accessor/writer driven
``resample1d``, the mirror boundary policy, and per-axis contribution tables
used by the image resizer. Works on any numeric series, not only pixels.

Usage:
    import numpy as np
    import pyfastresample as pfr

    y = pfr.resampling.resample_array(np.sin(np.linspace(0, 6, 100)), 40,
                                      pfr.filters.lanczos(3), filter_scale=0.7)

Author: B.G.
"""

from .resample1d import (
    axis_contributions,
    axis_geometry,
    effective_scale,
    reflect_index,
    resample1d,
    resample_array,
)

__all__ = [
    "reflect_index",
    "axis_geometry",
    "effective_scale",
    "resample1d",
    "axis_contributions",
    "resample_array",
]
