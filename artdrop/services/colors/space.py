"""
Color space conversions.

RGB, HSL and hex conversions plus the WCAG luminance/contrast helpers used
across the imaging core. Hex strings are always emitted as lowercase
``#rrggbb``; every rounding step rounds halves up.
"""

import colorsys
import math
import re
from typing import NamedTuple, Sequence, Tuple

from artdrop.errors import InvalidInput

RGB = Tuple[int, int, int]

_HEX_RE = re.compile(r"^#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$", re.IGNORECASE)


class HSL(NamedTuple):
    """Hue in degrees [0, 360), saturation and lightness in percent [0, 100]."""
    h: int
    s: int
    l: int


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return int(math.floor(value + 0.5))


def _clamp_channel(value: float) -> int:
    return max(0, min(255, round_half_up(value)))


def rgb_to_hex(rgb: Sequence[float]) -> str:
    """
    Convert an RGB triple to a hex color string.

    Args:
        rgb: Red, green and blue intensities in [0, 255]; floats are rounded

    Returns:
        Lowercase ``#rrggbb`` string
    """
    r, g, b = (_clamp_channel(float(c)) for c in rgb[:3])
    return f"#{r:02x}{g:02x}{b:02x}"


def hex_to_rgb(hex_color: str) -> RGB:
    """
    Convert a hex color string to an RGB tuple.

    Accepts exactly six hex digits, optionally ``#``-prefixed, in any case.

    Raises:
        InvalidInput: If the string is not a six-digit hex color
    """
    if not isinstance(hex_color, str):
        raise InvalidInput(f"Invalid hex color: {hex_color!r}")

    match = _HEX_RE.fullmatch(hex_color)
    if match is None:
        raise InvalidInput(f"Invalid hex color: {hex_color!r}")

    r, g, b = (int(part, 16) for part in match.groups())
    return r, g, b


def normalize_hex(hex_color: str) -> str:
    """Return the canonical lowercase ``#rrggbb`` form of a hex color."""
    return rgb_to_hex(hex_to_rgb(hex_color))


def rgb_to_hsl(rgb: Sequence[float]) -> HSL:
    """
    Convert RGB to integer HSL.

    Hue follows the six-way max-channel branch (red, then green, then blue
    wins when channels tie for the maximum); saturation divides by
    ``2 - max - min`` once lightness passes 50%.

    Args:
        rgb: Red, green and blue intensities in [0, 255]

    Returns:
        HSL with hue in [0, 360) and saturation/lightness in [0, 100]
    """
    r, g, b = (float(c) for c in rgb[:3])
    mx = max(r, g, b)
    mn = min(r, g, b)
    d = mx - mn

    # Each component is one division of exact numerators, so .5 ties stay exact
    lightness = 100 * (mx + mn) / 510
    if d == 0:
        return HSL(h=0, s=0, l=round_half_up(lightness))

    if mx + mn > 255:
        saturation = 100 * d / (510 - mx - mn)
    else:
        saturation = 100 * d / (mx + mn)

    if mx == r:
        hue = (60 * (g - b) + (360 * d if g < b else 0)) / d
    elif mx == g:
        hue = (60 * (b - r) + 120 * d) / d
    else:
        hue = (60 * (r - g) + 240 * d) / d

    return HSL(
        h=round_half_up(hue) % 360,
        s=round_half_up(saturation),
        l=round_half_up(lightness),
    )


def hsl_to_rgb(hsl: Sequence[float]) -> RGB:
    """
    Convert HSL back to an RGB tuple.

    Hue wraps modulo 360; saturation and lightness are clamped to [0, 100].
    """
    h, s, l = hsl
    h_unit = (float(h) % 360) / 360.0
    s_unit = max(0.0, min(100.0, float(s))) / 100.0
    l_unit = max(0.0, min(100.0, float(l))) / 100.0

    r, g, b = colorsys.hls_to_rgb(h_unit, l_unit, s_unit)
    return _clamp_channel(r * 255), _clamp_channel(g * 255), _clamp_channel(b * 255)


def perceived_brightness(rgb: Sequence[float]) -> float:
    """Luma (0.299r + 0.587g + 0.114b) used to order palettes."""
    r, g, b = rgb[:3]
    return 0.299 * r + 0.587 * g + 0.114 * b


def _linearize(channel: float) -> float:
    c = channel / 255.0
    if c <= 0.03928:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(rgb: Sequence[float]) -> float:
    """WCAG relative luminance of an sRGB color, in [0, 1]."""
    r, g, b = (_linearize(float(c)) for c in rgb[:3])
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(color_a: str, color_b: str) -> float:
    """
    WCAG contrast ratio between two hex colors.

    Symmetric in its arguments and always within [1, 21].
    """
    lum_a = relative_luminance(hex_to_rgb(color_a))
    lum_b = relative_luminance(hex_to_rgb(color_b))
    brightest = max(lum_a, lum_b)
    darkest = min(lum_a, lum_b)
    return (brightest + 0.05) / (darkest + 0.05)


def adjust_brightness(hex_color: str, delta: float) -> str:
    """
    Shift a color's HSL lightness by ``delta`` percentage points.

    The result lightness is clamped to [0, 100].
    """
    hsl = rgb_to_hsl(hex_to_rgb(hex_color))
    lightness = max(0.0, min(100.0, hsl.l + delta))
    return rgb_to_hex(hsl_to_rgb((hsl.h, hsl.s, lightness)))
