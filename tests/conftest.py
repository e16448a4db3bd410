"""
Test Configuration
==================

Pytest fixtures and test configuration for keyframe-mosaic.
"""

import numpy as np
import pytest

from keyframe_mosaic.models.frame import Frame


def _solid(cols: int, rows: int, color) -> np.ndarray:
    image = np.empty((rows, cols, 3), dtype=np.uint8)
    image[:] = color
    return image


@pytest.fixture
def solid_image():
    """Factory for (rows, cols, 3) uint8 images filled with one color."""
    return _solid


@pytest.fixture
def rng():
    """Provide a seeded random generator."""
    return np.random.default_rng(1234)


@pytest.fixture
def make_frame():
    """Factory for solid-color frames."""

    def _make(index: int = 0, cols: int = 10, rows: int = 10, color=(0, 0, 0)) -> Frame:
        return Frame(index=index, pixels=_solid(cols, rows, color))

    return _make


@pytest.fixture
def random_frame(rng):
    """Factory for random-noise frames."""

    def _make(index: int = 0, cols: int = 10, rows: int = 10, low: int = 0) -> Frame:
        pixels = rng.integers(low, 256, size=(rows, cols, 3), dtype=np.uint8)
        return Frame(index=index, pixels=pixels)

    return _make


@pytest.fixture
def black_frame(make_frame):
    """Provide a 10x10 all-black frame."""
    return make_frame(0, color=(0, 0, 0))


@pytest.fixture
def white_frame(make_frame):
    """Provide a 10x10 all-white frame."""
    return make_frame(1, color=(255, 255, 255))
