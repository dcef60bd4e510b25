"""
PyFastResample: taichi-accelerated image resampling.

Subpackages:
- filters: Lanczos, cubic, Hermite and triangle kernels
- color: sRGB <-> linear light conversion
- resampling: generic 1D separable resampler and boundary reflection
- rastermanip: RGBA resize (filter based) and reduce (box average)
- misc: Pillow / .npy glue for PixelBuffer
- cli: command line entry points

Taichi must be initialised by the caller before resizing:

    import taichi as ti
    import pyfastresample as pfr

    ti.init(arch=ti.cpu)
    buf = pfr.misc.load_buffer("photo.png")
    out = pfr.rastermanip.resize(buf, 640, 480)
    pfr.misc.save_buffer(out, "photo_small.png")

Author: B.G.
"""

__version__ = "0.0.1"

from . import constants
from . import errors
from . import log
from . import pool
from . import filters
from . import color
from . import resampling
from . import rastermanip
from . import misc

from .errors import InvalidDimensionError, InvalidOptionError, ResampleError
from .rastermanip import PixelBuffer, ResizeOptions, reduce, resize

__all__ = [
    "__version__",
    "constants",
    "errors",
    "log",
    "pool",
    "filters",
    "color",
    "resampling",
    "rastermanip",
    "misc",
    "PixelBuffer",
    "ResizeOptions",
    "resize",
    "reduce",
    "ResampleError",
    "InvalidDimensionError",
    "InvalidOptionError",
]
