"""
Colour conversion module for PyFastResample.

sRGB transfer function in both directions, a 256-entry lookup table for
8-bit sRGB -> linear, and a helper linearizing whole RGBA streams while
leaving alpha untouched.

Author: B.G.
"""

from .srgb import (
    LINEAR,
    linear_to_srgb,
    linear_to_srgb_array,
    linear_to_srgb_ti,
    linearize_pixels,
    srgb_to_linear,
    srgb_to_linear_array,
)

__all__ = [
    "srgb_to_linear",
    "linear_to_srgb",
    "LINEAR",
    "srgb_to_linear_array",
    "linear_to_srgb_array",
    "linearize_pixels",
    "linear_to_srgb_ti",
]
