import math

import numpy as np


def build_search_kernel(radius: int) -> np.ndarray:
    """Distance from the kernel centre to every offset within `radius`.

    Cell [j, i] holds sqrt((i - r)^2 + (j - r)^2). The table is returned
    read-only so it can be handed to every worker by reference.
    """
    offsets = np.arange(-radius, radius + 1, dtype=np.float64)
    kernel = np.sqrt(offsets[np.newaxis, :] ** 2 + offsets[:, np.newaxis] ** 2)
    kernel.setflags(write=False)
    return kernel


def max_distance(radius: int) -> float:
    """Clamp ceiling for searches that find no boundary"""
    return math.sqrt(2 * radius * radius)
