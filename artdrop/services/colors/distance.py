"""
Color distance metric shared by clustering and background matching.

``ciede2000`` keeps the name the metric has always been published under, but
it is plain Euclidean distance in RGB space, not the CIE Delta E 2000 formula.
Cluster assignment and dominant-color counts depend on these exact numbers,
so the behavior is kept and the honest name ``euclidean_rgb_distance`` is
exported alongside it.
"""

import math
from typing import Sequence

import numpy as np


def euclidean_rgb_distance(rgb1: Sequence[float], rgb2: Sequence[float]) -> float:
    """Return sqrt(dr^2 + dg^2 + db^2) between two RGB colors."""
    dr = float(rgb1[0]) - float(rgb2[0])
    dg = float(rgb1[1]) - float(rgb2[1])
    db = float(rgb1[2]) - float(rgb2[2])
    return math.sqrt(dr * dr + dg * dg + db * db)


# Historical name; see module docstring.
ciede2000 = euclidean_rgb_distance


def pairwise_distances(pixels: np.ndarray, centers: np.ndarray) -> np.ndarray:
    """
    Euclidean RGB distance from every pixel to every center.

    Args:
        pixels: Array of shape (N, 3+)
        centers: Array of shape (K, 3+)

    Returns:
        Float64 array of shape (N, K)
    """
    pixels_f = np.asarray(pixels, dtype=np.float64)[:, :3]
    centers_f = np.asarray(centers, dtype=np.float64)[:, :3]

    # Broadcasting: (N, 1, 3) - (1, K, 3) -> (N, K, 3) -> (N, K)
    diff = pixels_f[:, None, :] - centers_f[None, :, :]
    return np.sqrt(np.sum(diff * diff, axis=2))
