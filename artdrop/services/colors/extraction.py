"""
Palette extraction via k-means clustering.

This module implements the palette extractor: a small, fixed-budget k-means
over RGB pixels whose result is ordered lightest first. Cost is
O(KMEANS_ITERATIONS x pixel_count x k) and scales with whatever buffer the
caller hands in; downsample large images first (see ``pipeline``).
"""

from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
from loguru import logger

from artdrop.config import config
from artdrop.errors import InvalidInput
from artdrop.services.colors.distance import pairwise_distances
from artdrop.services.colors.space import perceived_brightness, rgb_to_hex

KMEANS_ITERATIONS = 10

RandomSource = Union[None, int, np.random.Generator]


def as_rgb_rows(pixels: Union[np.ndarray, Sequence[Sequence[int]]]) -> np.ndarray:
    """
    Flatten a pixel buffer or pixel list into an (N, 3) int64 array.

    Accepts (N, C) lists/arrays or (H, W, C) buffers with C >= 3; any alpha
    channel is dropped.

    Raises:
        InvalidInput: If the pixels do not carry at least three channels
    """
    arr = np.asarray(pixels)
    if arr.size == 0:
        return np.empty((0, 3), dtype=np.int64)

    if arr.ndim < 2 or arr.shape[-1] < 3:
        raise InvalidInput(f"Expected pixels with at least 3 channels, got shape {arr.shape}")

    return arr.reshape(-1, arr.shape[-1])[:, :3].astype(np.int64)


def distinct_colors(rows: np.ndarray) -> np.ndarray:
    """Unique RGB rows in first-seen order."""
    _, first_index = np.unique(rows, axis=0, return_index=True)
    return rows[np.sort(first_index)]


def _init_centroids(rows: np.ndarray, k: int, rng: np.random.Generator) -> np.ndarray:
    """
    Pick min(k, distinct colors) starting centroids.

    Pixels are visited in a random order and the first k distinct colors met
    become seeds, so frequent colors are proportionally more likely to seed
    a cluster and no color seeds two.
    """
    shuffled = rows[rng.permutation(len(rows))]
    return distinct_colors(shuffled)[:k].astype(np.float64)


def kmeans(
    rows: np.ndarray,
    k: int,
    rng: RandomSource = None,
    iterations: int = KMEANS_ITERATIONS,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Run fixed-iteration k-means over RGB rows.

    Each iteration assigns every pixel to its nearest centroid (the lowest
    centroid index wins ties) and only then recomputes each non-empty cluster
    as its channel mean rounded half up. Empty clusters keep their centroid.

    Args:
        rows: (N, 3) pixel array, N > 0
        k: Requested cluster count
        rng: numpy Generator, seed, or None for an unseeded generator
        iterations: Number of assign/update rounds

    Returns:
        Tuple of (centroids (K', 3) int64, labels (N,) int64) with K' <= k
    """
    generator = np.random.default_rng(rng)
    centroids = _init_centroids(rows, k, generator)
    labels = np.zeros(len(rows), dtype=np.int64)

    for iteration in range(iterations):
        # np.argmin returns the first minimum on ties
        labels = np.argmin(pairwise_distances(rows, centroids), axis=1)

        for idx in range(len(centroids)):
            members = rows[labels == idx]
            if len(members) > 0:
                centroids[idx] = np.floor(members.mean(axis=0) + 0.5)

        logger.debug(f"k-means iteration {iteration + 1}/{iterations}: "
                     f"cluster sizes {np.bincount(labels, minlength=len(centroids)).tolist()}")

    return centroids.astype(np.int64), labels


def extract_palette(
    pixels: Union[np.ndarray, Sequence[Sequence[int]]],
    k: Optional[int] = None,
    rng: RandomSource = None,
) -> List[str]:
    """
    Cluster pixels into an ordered color palette.

    Args:
        pixels: Pixel list or buffer (alpha ignored)
        k: Number of clusters (default ``config.PALETTE_K``); fewer colors
           are returned when the input has fewer distinct colors
        rng: numpy Generator or seed for the random centroid initialization

    Returns:
        Hex colors sorted by non-increasing perceived brightness; empty for
        empty input

    Raises:
        InvalidInput: If k is outside [1, 64] or pixels are malformed
    """
    if k is None:
        k = config.PALETTE_K
    if not config.validate_cluster_count(k):
        raise InvalidInput(f"Cluster count must be within [1, 64], got {k}")

    rows = as_rgb_rows(pixels)
    if len(rows) == 0:
        logger.debug("extract_palette called with no pixels, returning empty palette")
        return []

    logger.info(f"Starting clustering with k={k}, {len(rows)} pixels")
    centroids, _ = kmeans(rows, k, rng)

    # sorted() is stable, so equal-brightness centroids keep cluster order
    ordered = sorted(centroids.tolist(), key=lambda c: -perceived_brightness(c))
    palette = [rgb_to_hex(c) for c in ordered]

    logger.info(f"Clustering successful: {palette}")
    return palette
