"""
Image file utilities for PyFastResample.

Thin glue between pixel sources and the PixelBuffer type consumed by the
resampling code. Images are read and written with Pillow; ``.npy`` files hold
(height, width, 3|4) uint8 arrays. No colour conversion or scaling happens
here.

Dependencies:
- pillow: image decoding and encoding
- numpy: array storage

Author: B.G.
"""

import numpy as np
from PIL import Image

from ..rastermanip import PixelBuffer


def image_to_buffer(image):
    """
    Convert a Pillow image to a PixelBuffer.

    Any mode is converted to RGBA first, so grayscale and RGB images get an
    opaque alpha channel.
    """
    if not isinstance(image, Image.Image):
        raise TypeError("image must be a PIL.Image.Image")
    rgba = image.convert("RGBA")
    return PixelBuffer.from_array(np.asarray(rgba, dtype=np.uint8))


def buffer_to_image(buffer):
    """Convert a PixelBuffer to an RGBA Pillow image."""
    return Image.fromarray(buffer.to_array())


def load_buffer(path):
    """
    Load a PixelBuffer from an image file or a ``.npy`` array.

    Args:
        path (str): Input file

    Returns:
        PixelBuffer

    Raises:
        FileNotFoundError: If ``path`` does not exist
        ValueError: If a ``.npy`` array does not have an image shape
    """
    path = str(path)
    if path.endswith(".npy"):
        return PixelBuffer.from_array(np.load(path))
    with Image.open(path) as img:
        return image_to_buffer(img)


def save_buffer(buffer, path):
    """
    Save a PixelBuffer as an image file or a ``.npy`` array.

    The image format follows the file extension. Formats without alpha
    support (JPEG, ...) receive the RGB channels only.
    """
    path = str(path)
    if path.endswith(".npy"):
        np.save(path, buffer.to_array())
        return
    img = buffer_to_image(buffer)
    try:
        img.save(path)
    except OSError:
        # e.g. "cannot write mode RGBA as JPEG"
        img.convert("RGB").save(path)


__all__ = ["image_to_buffer", "buffer_to_image", "load_buffer", "save_buffer"]
