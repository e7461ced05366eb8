"""Shared pytest fixtures for distbake tests."""

import numpy as np
import pytest


def pad(image, radius):
    """Pad an unpadded image the way the rasterizer does"""
    return np.pad(np.asarray(image, dtype=np.uint8), radius, mode="edge")


@pytest.fixture
def disc_source():
    """Dark disc on a white background, padded for radius 4."""
    yy, xx = np.mgrid[0:40, 0:56]
    image = np.full((40, 56), 255, dtype=np.uint8)
    image[(xx - 28) ** 2 + (yy - 20) ** 2 < 12 ** 2] = 0
    return pad(image, 4)


@pytest.fixture
def random_source():
    """Noisy bilevel-ish image with both classes, padded for radius 3."""
    rng = np.random.default_rng(42)
    image = rng.integers(0, 256, size=(23, 31), dtype=np.uint8)
    image[rng.random((23, 31)) < 0.7] = 255
    return pad(image, 3)
