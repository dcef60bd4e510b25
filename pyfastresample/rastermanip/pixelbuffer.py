"""
Pixel buffer type shared by the resizer and the reducer.

A PixelBuffer is a row-major, channel-interleaved RGBA image with 8 bits per
sample. The resampling code only ever consumes and produces PixelBuffers;
conversion from and to image files or display surfaces lives in
``pyfastresample.misc``.

Author: B.G.
"""

from dataclasses import dataclass

import numpy as np

from .. import constants as cte
from ..errors import InvalidDimensionError, InvalidOptionError, check_dimensions


@dataclass
class PixelBuffer:
    """
    RGBA image with 8-bit samples.

    Attributes:
        width: Number of columns (> 0)
        height: Number of rows (> 0)
        data: Flat uint8 array of length ``width * height * 4``, row-major,
              channels interleaved as R, G, B, A
    """

    width: int
    height: int
    data: np.ndarray

    def __post_init__(self):
        check_dimensions(width=self.width, height=self.height)
        self.width = int(self.width)
        self.height = int(self.height)

        data = np.asarray(self.data)
        if data.dtype != np.uint8:
            if not np.issubdtype(data.dtype, np.integer):
                raise TypeError("pixel data must be an integer array")
            if data.size and (data.min() < 0 or data.max() > cte.MAX_SAMPLE):
                raise ValueError("pixel samples must lie in [0, 255]")
        data = np.ascontiguousarray(data, dtype=np.uint8).reshape(-1)

        expected = self.width * self.height * cte.NCHANNELS
        if data.size != expected:
            raise InvalidDimensionError(
                "data",
                data.size,
                f"pixel data has {data.size} samples, expected {expected} "
                f"for a {self.width}x{self.height} RGBA buffer",
            )
        self.data = data

    @classmethod
    def new(cls, width, height, fill=(0, 0, 0, 0)):
        """Allocate a buffer filled with one RGBA value."""
        check_dimensions(width=width, height=height)
        data = np.empty((int(height), int(width), cte.NCHANNELS), dtype=np.uint8)
        data[...] = np.asarray(fill, dtype=np.uint8)
        return cls(width, height, data.reshape(-1))

    @classmethod
    def from_array(cls, array):
        """
        Build a buffer from an (height, width, channels) array.

        Three-channel arrays get an opaque alpha channel, 2D arrays are treated
        as grayscale.
        """
        arr = np.asarray(array)
        if arr.ndim == 2:
            arr = np.repeat(arr[:, :, None], 3, axis=2)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise ValueError("Input array must have shape (height, width, 3|4)")
        if arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), cte.MAX_SAMPLE, dtype=arr.dtype)
            arr = np.concatenate([arr, alpha], axis=2)
        return cls(arr.shape[1], arr.shape[0], arr)

    def to_array(self):
        """View of the samples as a (height, width, 4) array."""
        return self.data.reshape(self.height, self.width, cte.NCHANNELS)

    @property
    def shape(self):
        return (self.height, self.width, cte.NCHANNELS)

    def pixel(self, x, y):
        """RGBA tuple at column ``x``, row ``y``."""
        o = (y * self.width + x) * cte.NCHANNELS
        return tuple(int(v) for v in self.data[o : o + cte.NCHANNELS])

    def copy(self):
        return PixelBuffer(self.width, self.height, self.data.copy())

    def __eq__(self, other):
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.data, other.data)
        )


def as_pixel_buffer(source):
    """Accept a PixelBuffer or a (height, width, 3|4) NumPy array."""
    if isinstance(source, PixelBuffer):
        return source
    if isinstance(source, np.ndarray):
        return PixelBuffer.from_array(source)
    raise TypeError("source must be a PixelBuffer or a numpy array")


def quantize(values, overflow=cte.DEFAULT_OVERFLOW):
    """
    Store floating samples as 8-bit values.

    Values are rounded to the nearest integer, ties to even, and then either
    clamped into [0, 255] (``"saturate"``) or reduced modulo 256 (``"wrap"``).

    Args:
        values: Array-like of floats
        overflow: ``"saturate"`` or ``"wrap"``

    Returns:
        numpy.ndarray: uint8 array of the same shape
    """
    check_overflow(overflow)
    q = np.rint(np.asarray(values, dtype=np.float64))
    if overflow == cte.OVERFLOW_SATURATE:
        q = np.clip(q, 0, cte.MAX_SAMPLE)
    else:
        q = np.mod(q, cte.MAX_SAMPLE + 1)
    return q.astype(np.uint8)


def check_overflow(overflow):
    if overflow not in cte.OVERFLOW_POLICIES:
        raise InvalidOptionError(
            f"overflow must be one of {cte.OVERFLOW_POLICIES}, got {overflow!r}"
        )


def fit_dimensions(width, height, dst_width=None, dst_height=None):
    """
    Complete a target size, keeping the aspect ratio for a missing side.

    Returns:
        tuple: (dst_width, dst_height), each at least 1
    """
    if dst_width is None and dst_height is None:
        raise InvalidOptionError("at least one of dst_width / dst_height is required")
    if dst_width is None:
        dst_width = max(1, int(round(width * dst_height / height)))
    elif dst_height is None:
        dst_height = max(1, int(round(height * dst_width / width)))
    return dst_width, dst_height


__all__ = [
    "PixelBuffer",
    "as_pixel_buffer",
    "quantize",
    "check_overflow",
    "fit_dimensions",
]
