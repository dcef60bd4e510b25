"""
Pytest configuration and fixtures for PyFastResample test suite.

This file contains shared fixtures, test configuration, and utilities
used across the test suite.
"""
import os
import sys

import numpy as np
import pytest


def pytest_configure(config):
    """Configure pytest with custom settings."""
    # Add the package root to Python path for testing
    package_root = os.path.dirname(os.path.dirname(__file__))
    if package_root not in sys.path:
        sys.path.insert(0, package_root)

    for marker in ("unit", "integration", "importtest", "slow"):
        config.addinivalue_line("markers", f"{marker}: {marker} tests")


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers and ordering."""
    for item in items:
        # Mark import tests for easy selection
        if "import" in item.name.lower() or "test_imports.py" in str(item.fspath):
            item.add_marker("importtest")


class TestDataManager:
    """Helper class for building test images."""

    __test__ = False

    @staticmethod
    def uniform(width, height, rgba):
        from pyfastresample.rastermanip import PixelBuffer

        return PixelBuffer.new(width, height, fill=rgba)

    @staticmethod
    def gradient(width=16, height=12):
        """Smooth RGB gradient with opaque alpha."""
        from pyfastresample.rastermanip import PixelBuffer

        x = np.linspace(0, 255, width)
        y = np.linspace(0, 255, height)
        X, Y = np.meshgrid(x, y)
        arr = np.empty((height, width, 4), dtype=np.uint8)
        arr[..., 0] = X.astype(np.uint8)
        arr[..., 1] = Y.astype(np.uint8)
        arr[..., 2] = ((X + Y) / 2).astype(np.uint8)
        arr[..., 3] = 255
        return PixelBuffer.from_array(arr)

    @staticmethod
    def noise(width=10, height=8, seed=42):
        """Random RGBA image, reproducible."""
        from pyfastresample.rastermanip import PixelBuffer

        rng = np.random.default_rng(seed)
        arr = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
        return PixelBuffer.from_array(arr)

    @staticmethod
    def checkerboard(width=8, height=8):
        """Black and white 1-pixel checkerboard, a worst case for ringing."""
        from pyfastresample.rastermanip import PixelBuffer

        j, i = np.indices((height, width))
        v = np.where((i + j) % 2 == 0, 255, 0).astype(np.uint8)
        arr = np.stack([v, v, v, np.full_like(v, 255)], axis=2)
        return PixelBuffer.from_array(arr)


@pytest.fixture
def test_data_manager():
    """Provide access to test image creation utilities."""
    return TestDataManager()
