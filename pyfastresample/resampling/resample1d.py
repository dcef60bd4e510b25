"""
Generic 1D separable resampling.

``resample1d`` is the reference routine: it walks the destination samples,
places each one at ``x = ratio * i`` in source coordinates and sums the
source samples under the (possibly widened) kernel. It is channel-agnostic and
drives any 1D series through an accessor/writer pair.

``axis_contributions`` performs the same walk once per axis and records, for
each destination sample, the reflected source indices and their normalized
weights. The 2D resizer feeds these tables to taichi kernels so the weights
are evaluated once per axis instead of once per row, column and channel.

Author: B.G.
"""

import math

import numpy as np

from .. import constants as cte
from ..errors import InvalidOptionError, check_dimensions


def reflect_index(j, n):
    """
    Mirror an out-of-range index back into [0, n) without repeating the edge.

    Negative indices map to ``(-j) mod n`` and indices past the end to
    ``(-j - 2) mod n``, so for n = 5: -1 -> 1, 5 -> 3, 6 -> 2.
    """
    if j < 0:
        return -j % n
    if j >= n:
        return (-j - 2) % n
    return j


def axis_geometry(source_count, dest_count):
    """
    Return ``(ratio, start)`` so that destination sample i sits at
    ``start + ratio * i`` in source coordinates.

    A single destination sample has no spacing; it is placed at the middle of
    the source axis and ``ratio`` is taken as the whole source extent.
    """
    if dest_count == 1:
        extent = source_count - 1
        return float(extent), extent / 2
    return (source_count - 1) / (dest_count - 1), 0.0


def effective_scale(ratio, filter_scale):
    """Kernel widening factor: ``ratio * filter_scale`` when downsampling, else 1."""
    return ratio * filter_scale if ratio > 1 else 1.0


def _check(source_count, dest_count, kernel, filter_scale):
    check_dimensions(source_count=source_count, dest_count=dest_count)
    if not filter_scale > 0:
        raise InvalidOptionError(f"filter_scale must be > 0, got {filter_scale}")
    if not kernel.radius > 0:
        raise InvalidOptionError(f"filter radius must be > 0, got {kernel.radius}")


def resample1d(source_count, dest_count, accessor, writer, kernel, filter_scale=1.0):
    """
    Resample a 1D series through an accessor/writer pair.

    Args:
        source_count: Number of source samples
        dest_count: Number of destination samples
        accessor: Callable ``int -> float``. Receives raw integer positions,
                  including out-of-range ones, and is responsible for the
                  boundary policy (see ``reflect_index``)
        writer: Callable ``(int, float) -> None`` receiving each destination sample
        kernel: FilterKernel
        filter_scale: Anti-aliasing factor applied to the kernel width when
                      downsampling (ignored when upsampling)

    Example:
        src = [0.0, 100.0]
        out = [None] * 3
        resample1d(2, 3, lambda j: src[reflect_index(j, 2)],
                   out.__setitem__, pfr.filters.triangle())
        # out == [0.0, 50.0, 100.0]
    """
    _check(source_count, dest_count, kernel, filter_scale)

    ratio, start = axis_geometry(source_count, dest_count)
    scale = effective_scale(ratio, filter_scale)
    r = kernel.radius * scale

    for i in range(dest_count):
        x = start + ratio * i
        acc = 0.0
        for j in range(math.ceil(x - r), math.floor(x + r) + 1):
            acc += accessor(j) * kernel((j - x) / scale)
        writer(i, acc / scale)


def axis_contributions(source_count, dest_count, kernel, filter_scale=1.0):
    """
    Precompute the resampling weights of one axis.

    Args:
        source_count: Number of source samples along the axis
        dest_count: Number of destination samples along the axis
        kernel: FilterKernel
        filter_scale: See ``resample1d``

    Returns:
        tuple: ``(indices, weights)`` arrays of shape (dest_count, taps).
        ``indices`` holds reflected source positions, ``weights`` the kernel
        weights already divided by the effective scale. Rows shorter than
        ``taps`` are padded with index 0 and weight 0.
    """
    _check(source_count, dest_count, kernel, filter_scale)

    ratio, start = axis_geometry(source_count, dest_count)
    scale = effective_scale(ratio, filter_scale)
    r = kernel.radius * scale

    rows = []
    for i in range(dest_count):
        x = start + ratio * i
        rows.append(
            [
                (reflect_index(j, source_count), kernel((j - x) / scale) / scale)
                for j in range(math.ceil(x - r), math.floor(x + r) + 1)
            ]
        )

    taps = max(1, max(len(row) for row in rows))
    indices = np.zeros((dest_count, taps), dtype=cte.INT_TYPE_NP)
    weights = np.zeros((dest_count, taps), dtype=np.float64)
    for i, row in enumerate(rows):
        for t, (j, w) in enumerate(row):
            indices[i, t] = j
            weights[i, t] = w
    return indices, weights


def resample_array(values, dest_count, kernel, filter_scale=1.0, axis=-1):
    """
    Resample a NumPy array along one axis.

    Boundary samples are reflected exactly as in ``resample1d``.

    Args:
        values: Array-like of numbers
        dest_count: Length of the output along ``axis``
        kernel: FilterKernel
        filter_scale: See ``resample1d``
        axis: Axis to resample (default: last)

    Returns:
        numpy.ndarray: float64 array, same shape as ``values`` except along ``axis``
    """
    data = np.moveaxis(np.asarray(values, dtype=np.float64), axis, -1)
    indices, weights = axis_contributions(data.shape[-1], dest_count, kernel, filter_scale)
    out = (data[..., indices] * weights).sum(axis=-1)
    return np.moveaxis(out, -1, axis)


__all__ = [
    "reflect_index",
    "axis_geometry",
    "effective_scale",
    "resample1d",
    "axis_contributions",
    "resample_array",
]
