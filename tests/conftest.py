"""
Test configuration and fixtures for ArtDrop imaging tests.
"""
import numpy as np
import pytest


@pytest.fixture
def rng():
    """Seeded generator for deterministic clustering."""
    return np.random.default_rng(42)


@pytest.fixture
def make_canvas():
    """Factory for solid-color uint8 buffers of shape (height, width, channels)."""
    def _make(width, height, color=(255, 255, 255)):
        canvas = np.zeros((height, width, len(color)), dtype=np.uint8)
        canvas[:, :] = color
        return canvas
    return _make
