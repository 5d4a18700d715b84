"""
Image statistics classification.

Buckets an image into brightness, saturation, warmth and contrast classes
from per-channel means and standard deviations. Saturation and contrast are
both read off the same statistic (mean channel stdev) with different cut
points.
"""

import math
from typing import Sequence, Tuple, Union

import numpy as np
from loguru import logger

from artdrop.schemas import ColorAnalysis

# Bucket thresholds
BRIGHTNESS_DARK_LT = 85
BRIGHTNESS_LIGHT_GT = 170
SATURATION_LOW_LT = 30
SATURATION_HIGH_GT = 60
WARMTH_COOL_LT = 0.9
WARMTH_WARM_GT = 1.1
CONTRAST_LOW_LT = 40
CONTRAST_HIGH_GT = 80


def _bucket(value: float, low_lt: float, high_gt: float, labels: Tuple[str, str, str]) -> str:
    low, mid, high = labels
    if value < low_lt:
        return low
    if value > high_gt:
        return high
    return mid


def _warmth(red_mean: float, blue_mean: float) -> str:
    if blue_mean == 0:
        # red/0 is an infinitely warm ratio; 0/0 carries no information
        return "warm" if red_mean > 0 else "neutral"
    return _bucket(red_mean / blue_mean, WARMTH_COOL_LT, WARMTH_WARM_GT, ("cool", "neutral", "warm"))


def analyze_colors(means: Sequence[float], stdevs: Sequence[float]) -> ColorAnalysis:
    """
    Classify an image from its per-channel statistics.

    Args:
        means: Per-channel means, red/green/blue first
        stdevs: Per-channel standard deviations, same order

    Returns:
        ColorAnalysis buckets; the neutral default
        ``{medium, medium, neutral, medium}`` when the statistics are unusable
    """
    try:
        r_mean, g_mean, b_mean = (float(v) for v in list(means)[:3])
        r_std, g_std, b_std = (float(v) for v in list(stdevs)[:3])

        values = (r_mean, g_mean, b_mean, r_std, g_std, b_std)
        if not all(math.isfinite(v) for v in values):
            raise ValueError(f"Non-finite channel statistics: {values}")

        brightness = (r_mean + g_mean + b_mean) / 3
        spread = (r_std + g_std + b_std) / 3

        return ColorAnalysis(
            brightness=_bucket(brightness, BRIGHTNESS_DARK_LT, BRIGHTNESS_LIGHT_GT, ("dark", "medium", "light")),
            saturation=_bucket(spread, SATURATION_LOW_LT, SATURATION_HIGH_GT, ("low", "medium", "high")),
            warmth=_warmth(r_mean, b_mean),
            contrast=_bucket(spread, CONTRAST_LOW_LT, CONTRAST_HIGH_GT, ("low", "medium", "high")),
        )

    except (TypeError, ValueError) as e:
        logger.warning(f"Could not classify channel statistics, using neutral default: {e}")
        return ColorAnalysis()


def channel_statistics(buffer: Union[np.ndarray, Sequence[Sequence[int]]]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Per-channel population mean and standard deviation over R, G and B.

    Args:
        buffer: (H, W, C) or (N, C) pixels with C >= 3; alpha is ignored

    Returns:
        Tuple of (means, stdevs), each a float64 array of length 3

    Raises:
        ValueError: If the buffer is empty or has fewer than 3 channels
    """
    arr = np.asarray(buffer, dtype=np.float64)
    if arr.size == 0 or arr.ndim < 2 or arr.shape[-1] < 3:
        raise ValueError(f"Cannot compute channel statistics for shape {arr.shape}")

    rows = arr.reshape(-1, arr.shape[-1])[:, :3]
    return rows.mean(axis=0), rows.std(axis=0)


def analyze_image_colors(buffer: Union[np.ndarray, Sequence[Sequence[int]]]) -> ColorAnalysis:
    """
    Compute channel statistics for a buffer and classify them.

    Never raises for unreadable buffers; those get the neutral default.
    """
    try:
        means, stdevs = channel_statistics(buffer)
    except (TypeError, ValueError) as e:
        logger.warning(f"Error analyzing colors, using neutral default: {e}")
        return ColorAnalysis()

    return analyze_colors(means, stdevs)
