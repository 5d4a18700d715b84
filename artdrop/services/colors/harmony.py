"""
ArtDrop Color Harmony

Derives complementary, analogous, triadic and split-complementary companions
of a base color by rotating its hue while keeping saturation and lightness.
"""

from typing import Dict, List, Tuple

from artdrop.schemas import ColorHarmony
from artdrop.services.colors.space import HSL, hex_to_rgb, hsl_to_rgb, rgb_to_hex, rgb_to_hsl

# Hue offsets in degrees for each harmony category
HARMONY_ROTATIONS: Dict[str, Tuple[int, ...]] = {
    "complementary": (180,),
    "analogous": (30, -30),
    "triadic": (120, 240),
    "split_complementary": (150, 210),
}


def rotate_hue(hsl: HSL, degrees: int) -> HSL:
    """
    Rotate hue by specified degrees.

    Args:
        hsl: Original color
        degrees: Rotation in degrees (can be negative)

    Returns:
        Color with hue wrapped into [0, 360) and S/L unchanged
    """
    return HSL(h=(hsl.h + degrees) % 360, s=hsl.s, l=hsl.l)


def get_hue_separation(h1: float, h2: float) -> float:
    """
    Calculate the minimum angular separation between two hues.

    Args:
        h1: First hue in degrees
        h2: Second hue in degrees

    Returns:
        Minimum separation in degrees [0, 180]
    """
    diff = abs(h1 - h2) % 360
    return min(diff, 360 - diff)


def _rotated_hexes(base: HSL, category: str) -> List[str]:
    return [rgb_to_hex(hsl_to_rgb(rotate_hue(base, d))) for d in HARMONY_ROTATIONS[category]]


def color_harmony(base_hex: str) -> ColorHarmony:
    """
    Generate harmony suggestions for a base color.

    Args:
        base_hex: Base color as ``#rrggbb`` (``#`` optional, any case)

    Returns:
        ColorHarmony with one complementary color and pairs for the other
        categories

    Raises:
        InvalidInput: If base_hex is not a valid hex color
    """
    base = rgb_to_hsl(hex_to_rgb(base_hex))

    return ColorHarmony(
        complementary=_rotated_hexes(base, "complementary")[0],
        analogous=_rotated_hexes(base, "analogous"),
        triadic=_rotated_hexes(base, "triadic"),
        split_complementary=_rotated_hexes(base, "split_complementary"),
    )
