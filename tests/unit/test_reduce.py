"""
Tests for the box-average reducer.

Author: B.G.
"""

import math

import numpy as np
import pytest
import taichi as ti

from pyfastresample import pool
from pyfastresample.errors import InvalidDimensionError, InvalidOptionError
from pyfastresample.rastermanip import PixelBuffer, box_bounds, reduce
from pyfastresample.rastermanip import reducing

# Initialize Taichi once for the entire test module
ti.init(arch=ti.cpu)


def _reference_reduce(src, w, h, sharp):
    """Row-major float64 reference; writes round half to even and saturate."""
    arr = src.to_array().astype(float)
    out = np.zeros((h, w, 4))
    xratio = src.width / w
    yratio = src.height / h
    for i in range(h):
        for j in range(w):
            x0, x1 = math.floor(xratio * j), math.floor(xratio * (j + 1))
            y0, y1 = math.floor(yratio * i), math.floor(yratio * (i + 1))
            avg = arr[y0:y1, x0:x1].reshape(-1, 4).mean(axis=0)
            for ch in range(4):
                v = avg[ch]
                if ch < 3 and i and j and sharp:
                    v = (v - sharp / 2 * (out[i, j - 1, ch] + out[i - 1, j, ch])) / (1 - sharp)
                out[i, j, ch] = min(max(np.rint(v), 0), 255)
    return out.astype(np.uint8)


@pytest.mark.parametrize("sharp", [0.0, 0.3, 0.9])
def test_uniform_image_is_unchanged(test_data_manager, sharp):
    src = test_data_manager.uniform(4, 4, (200, 100, 50, 255))
    out = reduce(src, 2, 2, sharp=sharp)
    assert (out.width, out.height) == (2, 2)
    for y in range(2):
        for x in range(2):
            assert out.pixel(x, y) == (200, 100, 50, 255)


def test_sharp_zero_is_plain_box_average(test_data_manager):
    src = test_data_manager.noise(8, 6)
    out = reduce(src, 4, 3, sharp=0)
    blocks = src.to_array().astype(float).reshape(3, 2, 4, 2, 4).mean(axis=(1, 3))
    np.testing.assert_array_equal(out.to_array(), np.rint(blocks).astype(np.uint8))


def test_first_pixel_is_never_sharpened(test_data_manager):
    src = test_data_manager.noise(8, 8, seed=3)
    plain = reduce(src, 4, 4, sharp=0)
    sharpened = reduce(src, 4, 4, sharp=0.5)
    assert sharpened.pixel(0, 0) == plain.pixel(0, 0)
    # first row and first column are not corrected either
    np.testing.assert_array_equal(sharpened.to_array()[0], plain.to_array()[0])
    np.testing.assert_array_equal(sharpened.to_array()[:, 0], plain.to_array()[:, 0])


def test_alpha_is_never_sharpened(test_data_manager):
    src = test_data_manager.noise(8, 8, seed=5)
    plain = reduce(src, 4, 4, sharp=0)
    sharpened = reduce(src, 4, 4, sharp=0.6)
    np.testing.assert_array_equal(sharpened.to_array()[..., 3], plain.to_array()[..., 3])


@pytest.mark.parametrize("sharp", [0.5, 0.75])
@pytest.mark.parametrize("seed", [11, 12])
def test_matches_row_major_reference(test_data_manager, sharp, seed):
    # 4x4 boxes and these strengths keep every intermediate exact in float32
    src = test_data_manager.noise(40, 32, seed=seed)
    out = reduce(src, 10, 8, sharp=sharp)
    ref = _reference_reduce(src, 10, 8, sharp)
    np.testing.assert_array_equal(out.to_array(), ref)


def test_box_average_ties_round_to_even():
    arr = np.zeros((1, 4, 4), dtype=np.uint8)
    arr[0, :, 0] = [2, 3, 3, 4]
    arr[0, :, 1] = [10, 11, 0, 1]
    arr[..., 3] = 255
    out = reduce(PixelBuffer.from_array(arr), 2, 1, sharp=0)
    # 2.5 -> 2, 3.5 -> 4, 10.5 -> 10, 0.5 -> 0
    assert out.pixel(0, 0) == (2, 10, 0, 255)
    assert out.pixel(1, 0) == (4, 0, 0, 255)


def test_sharpened_ties_round_to_even():
    # 2 * 100 - 0.5 * (103 + 100) = 98.5
    arr = np.full((4, 4, 4), 100, dtype=np.uint8)
    arr[2:, :2, 0] = 103
    arr[..., 3] = 255
    out = reduce(PixelBuffer.from_array(arr), 2, 2, sharp=0.5)
    assert out.pixel(0, 1)[0] == 103
    assert out.pixel(1, 1)[0] == 98


def test_changed_neighbour_changes_next_pixel():
    base = np.full((4, 4, 4), 100, dtype=np.uint8)
    base[..., 3] = 255
    changed = base.copy()
    # only the box of the left neighbour of destination (1, 1) differs
    changed[2:, :2, :3] = 120

    a = reduce(PixelBuffer.from_array(base), 2, 2, sharp=0.5)
    b = reduce(PixelBuffer.from_array(changed), 2, 2, sharp=0.5)
    assert a.pixel(1, 1) == (100, 100, 100, 255)
    assert b.pixel(0, 1) == (120, 120, 120, 255)
    # 2 * 100 - 0.5 * (120 + 100) = 90
    assert b.pixel(1, 1) == (90, 90, 90, 255)


def test_neighbour_is_read_after_quantization():
    arr = np.full((4, 4, 4), 100, dtype=np.uint8)
    arr[..., 3] = 255
    arr[:2, 2:, 0] = [[100, 101], [100, 101]]
    arr[2:, :2, 0] = [[120, 121], [120, 121]]
    out = reduce(PixelBuffer.from_array(arr), 2, 2, sharp=0.75)
    # top 100.5 and left 120.5 are stored as 100 and 120
    assert out.pixel(1, 0)[0] == 100
    assert out.pixel(0, 1)[0] == 120
    # 4 * 100 - 1.5 * (120 + 100) = 70, the unrounded neighbours would give 68.5
    assert out.pixel(1, 1)[0] == 70


def _quadrants():
    """4x4 image: three white 2x2 quadrants, bottom-right black and transparent."""
    arr = np.full((4, 4, 4), 255, dtype=np.uint8)
    arr[2:, 2:] = 0
    return PixelBuffer.from_array(arr)


def test_correction_reads_left_and_top_outputs():
    out = reduce(_quadrants(), 2, 2, sharp=0.3)
    assert out.pixel(0, 0) == (255, 255, 255, 255)
    assert out.pixel(1, 0) == (255, 255, 255, 255)
    assert out.pixel(0, 1) == (255, 255, 255, 255)
    # (0 - 0.15 * 510) / 0.7 = -109.3, saturated
    assert out.pixel(1, 1) == (0, 0, 0, 0)


def test_wrap_overflow_policy():
    out = reduce(_quadrants(), 2, 2, sharp=0.3, overflow="wrap")
    # rint(-109.3) = -109 -> 147 modulo 256; alpha is a plain average
    assert out.pixel(1, 1) == (147, 147, 147, 0)


def test_non_integer_ratio_boxes():
    assert list(box_bounds(5, 2)) == [0, 2, 5]
    assert list(box_bounds(4, 4)) == [0, 1, 2, 3, 4]

    arr = np.zeros((1, 5, 4), dtype=np.uint8)
    arr[0, :, 0] = [10, 20, 30, 40, 50]
    arr[..., 3] = 255
    out = reduce(PixelBuffer.from_array(arr), 2, 1, sharp=0.3)
    assert out.pixel(0, 0)[0] == 15
    assert out.pixel(1, 0)[0] == 40


def test_same_size_without_sharpening_is_identity(test_data_manager):
    src = test_data_manager.noise(5, 4)
    assert reduce(src, 5, 4, sharp=0) == src


def test_invalid_arguments(test_data_manager):
    src = test_data_manager.noise(4, 4)
    with pytest.raises(InvalidDimensionError):
        reduce(src, 0, 2)
    with pytest.raises(InvalidDimensionError):
        reduce(src, 8, 2)
    with pytest.raises(InvalidOptionError):
        reduce(src, 2, 2, sharp=1.0)
    with pytest.raises(InvalidOptionError):
        reduce(src, 2, 2, sharp=-0.1)
    with pytest.raises(InvalidOptionError):
        reduce(src, 2, 2, overflow="clip")


def test_fields_return_to_pool_when_a_kernel_fails(test_data_manager, monkeypatch):
    def failing_kernel(*args):
        raise RuntimeError("kernel failed")

    src = test_data_manager.noise(8, 8)
    pool.clear()
    monkeypatch.setattr(reducing, "sharpen_quantize_kernel", failing_kernel)
    with pytest.raises(RuntimeError):
        reduce(src, 4, 4)
    assert pool.taipool.n_free() == 5
