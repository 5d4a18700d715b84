"""
Basic color naming from HSL hue buckets.
"""

from artdrop.services.colors.space import hex_to_rgb, rgb_to_hsl

# Upper hue bound (exclusive) for each chromatic name, in wheel order
HUE_NAMES = [
    (15, "red"),
    (45, "orange"),
    (70, "yellow"),
    (150, "green"),
    (200, "cyan"),
    (260, "blue"),
    (290, "purple"),
    (345, "magenta"),
]


def get_color_name(hex_color: str) -> str:
    """
    Name a hex color.

    Low-saturation colors (s < 10) are black, white or gray by lightness;
    everything else is named by hue, with red wrapping around 0 degrees.

    Raises:
        InvalidInput: If hex_color is not a valid hex color
    """
    hsl = rgb_to_hsl(hex_to_rgb(hex_color))

    if hsl.s < 10:
        if hsl.l < 20:
            return "black"
        if hsl.l > 80:
            return "white"
        return "gray"

    for upper, name in HUE_NAMES:
        if hsl.h < upper:
            return name

    # 345 <= h < 360
    return "red"
