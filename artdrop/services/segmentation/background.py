"""
ArtDrop Background Separation
Corner-sampled heuristic background removal and matte composition.

The heuristic is the last-resort engine; see ``pipeline`` for the fallback
order across segmentation engines.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

import cv2
import numpy as np
from loguru import logger

from artdrop.config import config
from artdrop.errors import InvalidInput
from artdrop.services.imaging import ensure_pixel_buffer
from artdrop.services.segmentation.crop import background_similarity, find_background_color

HEURISTIC_PROVIDER = "heuristic"

# Box blur radius applied along the mask boundary
EDGE_BLUR_RADIUS = 1


@dataclass
class BackgroundRemoval:
    """Mask and matte produced by one segmentation provider."""
    mask: np.ndarray  # (H, W) uint8, 255 foreground, 0 background
    matte: np.ndarray  # (H, W, 4) uint8 RGBA, background fully transparent
    provider: str
    fallback_used: bool = False
    background_color: Optional[Tuple[int, ...]] = None

    @property
    def mask_area_ratio(self) -> float:
        return calculate_mask_area_ratio(self.mask)


def calculate_mask_area_ratio(mask: np.ndarray) -> float:
    """
    Calculate the ratio of mask area to total image area.

    Args:
        mask: Binary mask

    Returns:
        Ratio between 0.0 and 1.0
    """
    total_pixels = mask.shape[0] * mask.shape[1]
    mask_pixels = np.count_nonzero(mask > 0)
    return mask_pixels / total_pixels if total_pixels > 0 else 0.0


def compose_matte(pixels: np.ndarray, mask: np.ndarray) -> np.ndarray:
    """
    Build an RGBA matte from a pixel buffer and a binary mask.

    Background pixels become (0, 0, 0, 0); foreground pixels keep their color
    and alpha. A radius-1 box blur is then applied only along the mask
    boundary to soften the cut edge.

    Raises:
        InvalidInput: If the mask and buffer dimensions differ
    """
    pixels = ensure_pixel_buffer(pixels)
    if pixels.shape[:2] != mask.shape[:2]:
        raise InvalidInput("Image and mask dimensions must match")

    height, width = pixels.shape[:2]
    matte = np.zeros((height, width, 4), dtype=np.uint8)
    foreground = mask > 0

    matte[:, :, :3] = pixels[:, :, :3]
    matte[:, :, 3] = pixels[:, :, 3] if pixels.shape[2] == 4 else 255
    matte[~foreground] = 0

    # Boundary band: pixels whose 3x3 neighbourhood mixes foreground and background
    size = 2 * EDGE_BLUR_RADIUS + 1
    kernel = np.ones((size, size), np.uint8)
    binary = np.where(foreground, 255, 0).astype(np.uint8)
    edge_band = cv2.dilate(binary, kernel) != cv2.erode(binary, kernel)

    if np.any(edge_band):
        blurred = cv2.blur(matte, (size, size))
        matte[edge_band] = blurred[edge_band]

    return matte


def heuristic_mask(
    pixels: np.ndarray,
    tolerance: Optional[float] = None,
) -> Tuple[np.ndarray, Tuple[int, ...]]:
    """
    Binary foreground mask from the corner-sampled background estimate.

    Only RGB is compared; alpha is ignored when matching.

    Returns:
        Tuple of (mask, background color)
    """
    if tolerance is None:
        tolerance = config.BG_TOLERANCE
    if not config.validate_tolerance(tolerance):
        raise InvalidInput(f"Tolerance must be within [0, 255], got {tolerance}")

    pixels = ensure_pixel_buffer(pixels)
    background = find_background_color(pixels)

    is_background = background_similarity(pixels, background, tolerance, include_alpha=False)
    mask = np.where(is_background, 0, 255).astype(np.uint8)
    return mask, background


def remove_background(
    pixels: np.ndarray,
    tolerance: Optional[float] = None,
) -> BackgroundRemoval:
    """
    Remove the background with the corner-sampling heuristic.

    Args:
        pixels: (H, W, 3|4) uint8 buffer
        tolerance: Per-channel RGB tolerance (default ``config.BG_TOLERANCE``)

    Returns:
        BackgroundRemoval tagged with provider ``"heuristic"``
    """
    mask, background = heuristic_mask(pixels, tolerance)
    matte = compose_matte(pixels, mask)

    result = BackgroundRemoval(
        mask=mask,
        matte=matte,
        provider=HEURISTIC_PROVIDER,
        background_color=background,
    )
    logger.debug(f"Heuristic background removal kept {result.mask_area_ratio:.3f} of the image "
                 f"(background={background})")
    return result
