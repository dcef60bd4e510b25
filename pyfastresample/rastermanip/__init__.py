"""Image resizing module for PyFastResample.

Two entry points operating on RGBA pixel buffers:

- resize: high-quality separable filter resampling (any scale), optionally
  in linear light
- reduce: fast box-average downscaling with edge-aware sharpening

Both accept a PixelBuffer or a (height, width, 3|4) uint8 NumPy array and
return a freshly allocated PixelBuffer of the requested size. Heavy lifting
runs in taichi kernels with temporary fields drawn from the memory pool.

Author: B.G.
"""

from .options import DEFAULT_OPTIONS, ResizeOptions, resolve_options
from .pixelbuffer import PixelBuffer, as_pixel_buffer, fit_dimensions, quantize
from .reducing import box_average_kernel, box_bounds, reduce, sharpen_quantize_kernel
from .resizing import horizontal_pass_kernel, resize, resize_float, vertical_pass_kernel

__all__ = [
    "PixelBuffer",
    "as_pixel_buffer",
    "fit_dimensions",
    "quantize",
    "ResizeOptions",
    "DEFAULT_OPTIONS",
    "resolve_options",
    "resize",
    "resize_float",
    "horizontal_pass_kernel",
    "vertical_pass_kernel",
    "reduce",
    "box_average_kernel",
    "sharpen_quantize_kernel",
    "box_bounds",
]
