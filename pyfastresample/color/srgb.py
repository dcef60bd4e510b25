"""
sRGB <-> linear light conversion.

Resampling in linear light avoids the darkening of high-contrast edges that
averaging gamma-encoded values produces. Only the sRGB transfer function is
handled; alpha samples are never converted.

Author: B.G.
"""

import numpy as np
import taichi as ti

from .. import constants as cte


def srgb_to_linear(c):
    """sRGB-encoded value in [0, 1] to linear light."""
    return ((c + 0.055) / 1.055) ** 2.4 if c > 0.04045 else c / 12.92


def linear_to_srgb(c):
    """Linear light value in [0, 1] to sRGB encoding."""
    return 1.055 * c ** (1 / 2.4) - 0.055 if c > 0.0031308 else 12.92 * c


def _build_linear_table():
    table = np.array([srgb_to_linear(i / 255) for i in range(256)], dtype=np.float64)
    table.flags.writeable = False
    return table


# 8-bit sRGB -> linear, built once at import and never modified
LINEAR = _build_linear_table()


def srgb_to_linear_array(values):
    """Vectorized ``srgb_to_linear`` over a NumPy array in [0, 1]."""
    v = np.asarray(values, dtype=np.float64)
    return np.where(v > 0.04045, ((v + 0.055) / 1.055) ** 2.4, v / 12.92)


def linear_to_srgb_array(values):
    """Vectorized ``linear_to_srgb``. Negative inputs take the linear segment."""
    v = np.asarray(values, dtype=np.float64)
    high = 1.055 * np.power(np.maximum(v, 0.0031308), 1 / 2.4) - 0.055
    return np.where(v > 0.0031308, high, 12.92 * v)


def linearize_pixels(data):
    """
    Convert an interleaved RGBA byte stream to linear light.

    Every 4th sample is alpha and is copied through as its raw 8-bit value.

    Args:
        data: uint8 array of length 4*n (or any shape whose last axis is
              channel-interleaved in the flattened order)

    Returns:
        numpy.ndarray: float array of the same length, colour channels in
        [0, 1], alpha in [0, 255]
    """
    flat = np.asarray(data, dtype=np.uint8).reshape(-1)
    if flat.size % cte.NCHANNELS:
        raise ValueError("RGBA stream length must be a multiple of 4")
    result = LINEAR[flat].astype(cte.FLOAT_TYPE_NP)
    alpha = slice(cte.ALPHA_CHANNEL, None, cte.NCHANNELS)
    result[alpha] = flat[alpha]
    return result


@ti.func
def linear_to_srgb_ti(c: cte.FLOAT_TYPE_TI) -> cte.FLOAT_TYPE_TI:
    res = 12.92 * c
    if c > 0.0031308:
        res = 1.055 * ti.pow(c, 1.0 / 2.4) - 0.055
    return res


__all__ = [
    "srgb_to_linear",
    "linear_to_srgb",
    "LINEAR",
    "srgb_to_linear_array",
    "linear_to_srgb_array",
    "linearize_pixels",
    "linear_to_srgb_ti",
]
