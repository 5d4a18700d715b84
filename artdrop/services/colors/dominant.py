"""
Dominant color resolution against an extracted palette.
"""

from typing import List, Sequence, Union

import numpy as np
from loguru import logger

from artdrop.services.colors.distance import pairwise_distances
from artdrop.services.colors.extraction import as_rgb_rows
from artdrop.services.colors.space import hex_to_rgb

DEFAULT_DOMINANT = "#000000"


def palette_counts(
    pixels: Union[np.ndarray, Sequence[Sequence[int]]],
    palette: List[str],
) -> np.ndarray:
    """
    Count how many pixels sit nearest to each palette entry.

    Distances are measured against the hex-decoded palette colors, so this
    is independent of the clustering pass that produced the palette.
    """
    if not palette:
        return np.zeros(0, dtype=np.int64)

    rows = as_rgb_rows(pixels)
    if len(rows) == 0:
        return np.zeros(len(palette), dtype=np.int64)

    centers = np.array([hex_to_rgb(color) for color in palette], dtype=np.int64)
    nearest = np.argmin(pairwise_distances(rows, centers), axis=1)
    return np.bincount(nearest, minlength=len(palette))


def find_dominant(
    pixels: Union[np.ndarray, Sequence[Sequence[int]]],
    palette: List[str],
) -> str:
    """
    Return the palette entry that the most pixels are closest to.

    Ties go to the entry that appears first in the palette. An empty palette
    yields ``#000000``.
    """
    if not palette:
        return DEFAULT_DOMINANT

    counts = palette_counts(pixels, palette)
    dominant = palette[int(np.argmax(counts))]

    logger.debug(f"Dominant color {dominant} from counts {counts.tolist()}")
    return dominant
