import math
from typing import Optional, Tuple

import numpy as np
from PIL import Image

# Default output is this many times smaller than the rasterized source.
DEFAULT_DOWNSCALE = 16


def invert(field: np.ndarray, negate: bool) -> np.ndarray:
    """Flip the field in place when `negate` is set. Must run before resample()."""
    if negate:
        np.subtract(255, field, out=field)
    return field


def image_size(long_edge: int, aspect: float) -> Tuple[int, int]:
    """(width, height) with the given long edge and width/height ratio"""
    if aspect < 1.0:
        width, height = long_edge * aspect, long_edge
    else:
        width, height = long_edge, long_edge / aspect
    return max(1, int(width)), max(1, int(height))


def target_size(field_size: Tuple[int, int], aspect: float, target_edge: Optional[int] = None) -> Tuple[int, int]:
    if target_edge is not None:
        return image_size(target_edge, aspect)

    width, height = field_size
    # Halves round up.
    return (
        max(1, math.floor(width / DEFAULT_DOWNSCALE + 0.5)),
        max(1, math.floor(height / DEFAULT_DOWNSCALE + 0.5)),
    )


def resample(field: np.ndarray, size: Tuple[int, int]) -> np.ndarray:
    """Resize to (width, height) with an antialiasing filter.

    The blur is wanted: smoothstep reconstruction in the shader relies on it.
    """
    img = Image.fromarray(field)
    scaled = img.resize(size, resample=Image.Resampling.BILINEAR)
    return np.array(scaled, dtype=np.uint8)
