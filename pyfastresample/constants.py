"""
Global constants and call defaults for PyFastResample.

Numeric types used by the taichi kernels and the NumPy wrappers, together with
the default parameters of the resize and reduce entry points. These values are
read-only: per-call configuration goes through ``ResizeOptions`` or function
arguments, never through mutation of this module.

Author: B.G.
"""

import numpy as np
import taichi as ti

# Floating point type for intermediate (linear light) fields
FLOAT_TYPE_TI = ti.f32
FLOAT_TYPE_NP = np.float32

# Integer type for contribution table indices
INT_TYPE_TI = ti.i32
INT_TYPE_NP = np.int32

# Interleaved RGBA
NCHANNELS = 4
ALPHA_CHANNEL = 3
MAX_SAMPLE = 255

# Resizer defaults
DEFAULT_FILTER_NAME = "lanczos3"
DEFAULT_FILTER_SCALE = 0.7
DEFAULT_LINEARIZE = True
DEFAULT_SKIP_ALPHA = True

# Reducer default
DEFAULT_SHARP = 0.3

# 8-bit write-back policies
OVERFLOW_SATURATE = "saturate"
OVERFLOW_WRAP = "wrap"
OVERFLOW_POLICIES = (OVERFLOW_SATURATE, OVERFLOW_WRAP)
DEFAULT_OVERFLOW = OVERFLOW_SATURATE
