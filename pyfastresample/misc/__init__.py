"""
Miscellaneous Utilities for PyFastResample

Glue between image files / Pillow images and the PixelBuffer type.

Available Functions:
- image_to_buffer / buffer_to_image: Pillow image <-> PixelBuffer
- load_buffer / save_buffer: image or .npy file <-> PixelBuffer

Author: B.G.
"""

from .image_utils import buffer_to_image, image_to_buffer, load_buffer, save_buffer

# Export public API
__all__ = [
    "image_to_buffer",
    "buffer_to_image",
    "load_buffer",
    "save_buffer",
]
