"""
Image palette pipeline.

Downsamples a decoded buffer, clusters it and resolves the dominant color.
Any failure degrades to a fixed grayscale palette instead of raising.
"""

from typing import Optional

import numpy as np
from loguru import logger

from artdrop.config import config
from artdrop.schemas import ImagePalette
from artdrop.services.colors.dominant import find_dominant
from artdrop.services.colors.extraction import RandomSource, as_rgb_rows, extract_palette
from artdrop.services.imaging import resize_to_fit
from artdrop.utils.ids import generate_operation_id
from artdrop.utils.logging import performance_monitor


def default_image_palette() -> ImagePalette:
    """The palette reported when an image cannot be analysed."""
    return ImagePalette(palette=list(config.DEFAULT_PALETTE), dominant=config.DEFAULT_DOMINANT)


def extract_image_palette(
    pixels: np.ndarray,
    k: Optional[int] = None,
    rng: RandomSource = None,
    max_edge: Optional[int] = None,
) -> ImagePalette:
    """
    Extract a palette and dominant color from a decoded image buffer.

    Args:
        pixels: (H, W, 3|4) uint8 buffer
        k: Cluster count (default ``config.IMAGE_PALETTE_K``)
        rng: numpy Generator or seed for clustering initialization
        max_edge: Longest edge to downsample to before clustering
                  (default ``config.PALETTE_MAX_EDGE``)

    Returns:
        ImagePalette; the default grayscale palette on any failure
    """
    if k is None:
        k = config.IMAGE_PALETTE_K
    if max_edge is None:
        max_edge = config.PALETTE_MAX_EDGE

    operation_id = generate_operation_id("pal")

    try:
        with performance_monitor("image_palette", operation_id=operation_id, k=k):
            small = resize_to_fit(pixels, max_edge)
            rows = as_rgb_rows(small)

            palette = extract_palette(rows, k, rng)
            dominant = find_dominant(rows, palette)

        return ImagePalette(palette=palette, dominant=dominant)

    except Exception as e:
        logger.bind(operation_id=operation_id).error(f"Error extracting palette: {e}")
        return default_image_palette()
