"""
ArtDrop Colors Module

Color space conversions, palette extraction, dominant color resolution,
harmony generation, naming and image statistics.
"""

from .space import (
    HSL,
    adjust_brightness,
    contrast_ratio,
    hex_to_rgb,
    hsl_to_rgb,
    perceived_brightness,
    relative_luminance,
    rgb_to_hex,
    rgb_to_hsl,
)
from .distance import ciede2000, euclidean_rgb_distance
from .extraction import extract_palette
from .dominant import find_dominant
from .harmony import color_harmony
from .naming import get_color_name
from .statistics import analyze_colors, analyze_image_colors, channel_statistics
from .pipeline import extract_image_palette

__all__ = [
    "HSL",
    "adjust_brightness",
    "analyze_colors",
    "analyze_image_colors",
    "channel_statistics",
    "ciede2000",
    "color_harmony",
    "contrast_ratio",
    "euclidean_rgb_distance",
    "extract_image_palette",
    "extract_palette",
    "find_dominant",
    "get_color_name",
    "hex_to_rgb",
    "hsl_to_rgb",
    "perceived_brightness",
    "relative_luminance",
    "rgb_to_hex",
    "rgb_to_hsl",
]
