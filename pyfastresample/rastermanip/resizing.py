"""
Filter-based image resizing for PyFastResample.

Separable resampling of RGBA pixel buffers: a horizontal pass resamples every
source row into an intermediate (dst_width x src_height) float buffer, then a
vertical pass resamples every column of that buffer into the destination.
Colour channels are optionally processed in linear light.

Both passes run as taichi kernels over flat fields indexed as
``(row * width + col) * 4 + channel``. Kernel weights are precomputed once
per axis on the host (see ``pyfastresample.resampling.axis_contributions``),
so any Python FilterKernel can be used.

Resampled values are not clamped by default: filters with negative lobes
(Lanczos, cubic) overshoot around sharp edges. Use ``resize_float`` to obtain
those values unmodified.

Author: B.G.
"""

import numpy as np
import taichi as ti

from .. import constants as cte
from .. import pool
from ..color import linear_to_srgb_ti, linearize_pixels
from ..errors import check_dimensions
from ..log import logger
from ..resampling import axis_contributions
from .options import resolve_options
from .pixelbuffer import PixelBuffer, as_pixel_buffer, quantize


@ti.kernel
def horizontal_pass_kernel(
    source_field: ti.template(),
    linear_field: ti.template(),
    indices: ti.template(),
    weights: ti.template(),
    nx_src: ti.i32,
    ny_src: ti.i32,
    nx_dst: ti.i32,
    taps: ti.i32,
    nchannels: ti.i32,
):
    """
    Resample every source row to the destination width.

    Args:
        source_field: Source samples (ny_src * nx_src * 4 elements)
        linear_field: Intermediate output (ny_src * nx_dst * 4 elements)
        indices: Reflected source columns per destination column (nx_dst, taps)
        weights: Normalized weights matching ``indices``
        nx_src: Number of columns in the source
        ny_src: Number of rows in the source
        nx_dst: Number of columns in the destination
        taps: Contributions per destination column
        nchannels: Channels to process (3 skips alpha)
    """
    for row, i, ch in ti.ndrange(ny_src, nx_dst, nchannels):
        acc: cte.FLOAT_TYPE_TI = 0.0
        for t in range(taps):
            acc += source_field[(row * nx_src + indices[i, t]) * 4 + ch] * weights[i, t]
        linear_field[(row * nx_dst + i) * 4 + ch] = acc


@ti.kernel
def vertical_pass_kernel(
    linear_field: ti.template(),
    target_field: ti.template(),
    indices: ti.template(),
    weights: ti.template(),
    nx_dst: ti.i32,
    ny_dst: ti.i32,
    taps: ti.i32,
    nchannels: ti.i32,
    delinearize: ti.i32,
):
    """
    Resample every intermediate column to the destination height.

    Colour channels are converted back to sRGB in [0, 255] when
    ``delinearize`` is set; alpha is always written as accumulated.
    """
    for j, col, ch in ti.ndrange(ny_dst, nx_dst, nchannels):
        acc: cte.FLOAT_TYPE_TI = 0.0
        for t in range(taps):
            acc += linear_field[(indices[j, t] * nx_dst + col) * 4 + ch] * weights[j, t]
        if delinearize != 0 and ch < cte.ALPHA_CHANNEL:
            acc = 255.0 * linear_to_srgb_ti(acc)
        target_field[(j * nx_dst + col) * 4 + ch] = acc


def _upload_table(indices, weights):
    n, taps = indices.shape
    idx_field = pool.get_temp_field(cte.INT_TYPE_TI, (n, taps))
    idx_field.field.from_numpy(indices.astype(cte.INT_TYPE_NP))
    w_field = pool.get_temp_field(cte.FLOAT_TYPE_TI, (n, taps))
    w_field.field.from_numpy(weights.astype(cte.FLOAT_TYPE_NP))
    return idx_field, w_field, taps


def resize_float(source, dst_width, dst_height, options=None, **overrides):
    """
    Resize an RGBA image and return the unquantized result.

    Args:
        source: PixelBuffer or (height, width, 3|4) uint8 NumPy array
        dst_width: Destination width (>= 1)
        dst_height: Destination height (>= 1)
        options: ResizeOptions (defaults when None)
        **overrides: Individual ResizeOptions fields, e.g. ``linearize=False``

    Returns:
        numpy.ndarray: float64 array of shape (dst_height, dst_width, 4) on the
        [0, 255] scale. Values may fall outside that range unless
        ``clamp=True``. With ``skip_alpha`` the alpha plane is 255.

    Raises:
        InvalidDimensionError: A source or destination dimension is < 1
        InvalidOptionError: Invalid filter, filter_scale or overflow policy
    """
    opts = resolve_options(options, **overrides)
    src = as_pixel_buffer(source)
    check_dimensions(
        src_width=src.width,
        src_height=src.height,
        dst_width=dst_width,
        dst_height=dst_height,
    )
    nx_src, ny_src = src.width, src.height
    nx_dst, ny_dst = int(dst_width), int(dst_height)

    logger.debug(
        "resize %dx%d -> %dx%d filter=%s filter_scale=%g linearize=%s skip_alpha=%s",
        nx_src, ny_src, nx_dst, ny_dst, opts.filter.name, opts.filter_scale,
        opts.linearize, opts.skip_alpha,
    )

    idx_x, w_x = axis_contributions(nx_src, nx_dst, opts.filter, opts.filter_scale)
    idx_y, w_y = axis_contributions(ny_src, ny_dst, opts.filter, opts.filter_scale)

    if opts.linearize:
        data_np = linearize_pixels(src.data)
    else:
        data_np = src.data.astype(cte.FLOAT_TYPE_NP)

    nchannels = 3 if opts.skip_alpha else cte.NCHANNELS

    source_field = pool.get_temp_field(cte.FLOAT_TYPE_TI, (ny_src * nx_src * 4,))
    source_field.field.from_numpy(data_np)
    linear_field = pool.get_temp_field(cte.FLOAT_TYPE_TI, (ny_src * nx_dst * 4,))
    target_field = pool.get_temp_field(cte.FLOAT_TYPE_TI, (ny_dst * nx_dst * 4,))
    ix, wx, taps_x = _upload_table(idx_x, w_x)
    iy, wy, taps_y = _upload_table(idx_y, w_y)

    try:
        horizontal_pass_kernel(
            source_field.field,
            linear_field.field,
            ix.field,
            wx.field,
            nx_src,
            ny_src,
            nx_dst,
            taps_x,
            nchannels,
        )
        vertical_pass_kernel(
            linear_field.field,
            target_field.field,
            iy.field,
            wy.field,
            nx_dst,
            ny_dst,
            taps_y,
            nchannels,
            int(opts.linearize),
        )
        result = target_field.field.to_numpy().astype(np.float64)
    finally:
        for tmp in (source_field, linear_field, target_field, ix, wx, iy, wy):
            tmp.release()
    result = result.reshape(ny_dst, nx_dst, cte.NCHANNELS)

    if opts.skip_alpha:
        result[..., cte.ALPHA_CHANNEL] = cte.MAX_SAMPLE
    if opts.clamp:
        np.clip(result, 0, cte.MAX_SAMPLE, out=result)
    return result


def resize(source, dst_width, dst_height, options=None, raw=False, **overrides):
    """
    Resize an RGBA image with a separable filter.

    Args:
        source: PixelBuffer or (height, width, 3|4) uint8 NumPy array
        dst_width: Destination width (>= 1)
        dst_height: Destination height (>= 1)
        options: ResizeOptions (defaults when None)
        raw: If True, return the float array of ``resize_float`` instead of a
             PixelBuffer
        **overrides: Individual ResizeOptions fields

    Returns:
        PixelBuffer of size (dst_width, dst_height), or a float array if ``raw``

    Example:
        import pyfastresample as pfr

        small = pfr.rastermanip.resize(buf, 320, 240)
        sharp = pfr.rastermanip.resize(buf, 320, 240, filter="lanczos8")
        fast = pfr.rastermanip.resize(buf, 320, 240, filter="triangle",
                                      linearize=False)
    """
    opts = resolve_options(options, **overrides)
    result = resize_float(source, dst_width, dst_height, opts)
    if raw:
        return result
    return PixelBuffer(int(dst_width), int(dst_height), quantize(result, opts.overflow))


__all__ = [
    "horizontal_pass_kernel",
    "vertical_pass_kernel",
    "resize_float",
    "resize",
]
