import logging
from typing import Optional, Sequence

import numpy as np

from distbake.kernel import build_search_kernel, max_distance
from distbake.partition import resolve_thread_count, run_partitioned

logger = logging.getLogger(__name__)

# Samples darker than this are inside the shape.
THRESHOLD = 128

# Rows searched per numpy pass inside a worker; bounds temporary memory.
ROW_BLOCK = 64


def nearest_opposite_distance(source: np.ndarray, kernel: np.ndarray, x: int, y: int) -> float:
    """Distance from output pixel (x, y) to the closest sample of opposite class.

    `source` is padded by the kernel radius, so the neighbourhood of (x, y)
    starts at source[y, x]. Returns inf when the whole neighbourhood shares
    the centre's class.

    Scalar reference for signed_distance_rows(), which does the same search
    a block of rows at a time.
    """
    radius = kernel.shape[0] // 2
    inside = source[y + radius, x + radius] < THRESHOLD
    nearest = np.inf

    for j in range(kernel.shape[0]):
        for i in range(kernel.shape[1]):
            if i == radius and j == radius:
                continue
            if (source[y + j, x + i] < THRESHOLD) != inside:
                nearest = min(nearest, kernel[j, i])

    return float(nearest)


def signed_distance_rows(source: np.ndarray, kernel: np.ndarray, rows: Sequence[int], width: int) -> np.ndarray:
    """Signed, clamped distances for a set of output rows, shape (len(rows), width).

    Negative inside (dark samples, below 128), positive outside, limited to the
    search radius ceiling.
    """
    dim = kernel.shape[0]
    radius = dim // 2
    rows = np.asarray(rows, dtype=np.intp)

    inside = source[rows + radius, radius:radius + width] < THRESHOLD
    nearest = np.full(inside.shape, np.inf)

    for j in range(dim):
        band = source[rows + j] < THRESHOLD
        for i in range(dim):
            if i == radius and j == radius:
                continue
            differs = band[:, i:i + width] != inside
            np.minimum(nearest, kernel[j, i], out=nearest, where=differs)

    np.minimum(nearest, max_distance(radius), out=nearest)
    return np.where(inside, -nearest, nearest)


def encode_distance(signed, radius: int):
    """Map signed distances in [-maxDist, maxDist] to [0, 255], rounding half up"""
    value = (np.asarray(signed, dtype=np.float64) / max_distance(radius) + 1.0) * 0.5 * 255
    return np.clip(np.floor(value + 0.5), 0, 255).astype(np.uint8)


def generate_distance_field(source: np.ndarray, radius: int, threads: Optional[int] = None) -> np.ndarray:
    """Brute-force signed distance field of a padded bilevel buffer.

    The result has the unpadded size of `source` (2 * radius smaller on each
    axis) and does not depend on the number of threads used.
    """
    if radius < 1:
        raise ValueError(f"Search radius must be >= 1, got {radius}")
    if source.ndim != 2:
        raise ValueError("Source buffer must be 2D")

    height = source.shape[0] - 2 * radius
    width = source.shape[1] - 2 * radius
    if height < 1 or width < 1:
        raise ValueError(f"Source buffer {source.shape} is too small for padding {radius}")

    source = np.ascontiguousarray(source, dtype=np.uint8).view()
    source.setflags(write=False)
    kernel = build_search_kernel(radius)
    threads = resolve_thread_count(threads)
    field = np.empty((height, width), dtype=np.uint8)

    def work(rows: range) -> None:
        for start in range(0, len(rows), ROW_BLOCK):
            block = rows[start:start + ROW_BLOCK]
            field[block.start:block.stop:block.step] = encode_distance(
                signed_distance_rows(source, kernel, block, width), radius
            )

    logger.info("Using %d threads", threads)
    run_partitioned(height, threads, work)
    return field
