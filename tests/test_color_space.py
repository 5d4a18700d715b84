"""
Unit tests for color space conversions, luminance and contrast.
"""

import itertools
import math
from fractions import Fraction

import pytest

from artdrop.errors import InvalidInput
from artdrop.services.colors.space import (
    HSL, adjust_brightness, contrast_ratio, hex_to_rgb, hsl_to_rgb,
    normalize_hex, perceived_brightness, relative_luminance, rgb_to_hex,
    rgb_to_hsl, round_half_up
)
from artdrop.services.colors.distance import ciede2000, euclidean_rgb_distance, pairwise_distances

GRID = list(range(0, 256, 15))  # 0, 15, ..., 255


def _exact_hsl(rgb):
    """Six-way branch HSL in exact rational arithmetic, rounded half up."""
    r, g, b = (Fraction(c) for c in rgb)
    mx, mn = max(r, g, b), min(r, g, b)
    d = mx - mn
    lightness = (mx + mn) / 510
    hue = saturation = Fraction(0)

    if d != 0:
        saturation = d / (510 - mx - mn) if lightness > Fraction(1, 2) else d / (mx + mn)
        if mx == r:
            hue = 60 * (g - b) / d + (360 if g < b else 0)
        elif mx == g:
            hue = 60 * (b - r) / d + 120
        else:
            hue = 60 * (r - g) / d + 240

    half = Fraction(1, 2)
    return (
        math.floor(hue + half) % 360,
        math.floor(100 * saturation + half),
        math.floor(100 * lightness + half),
    )


class TestHexConversions:
    """Test RGB <-> hex conversions."""

    def test_rgb_to_hex_basic_colors(self):
        """Test hex output for primaries, black, white and a mixed color."""
        assert rgb_to_hex((255, 0, 0)) == "#ff0000"
        assert rgb_to_hex((0, 255, 0)) == "#00ff00"
        assert rgb_to_hex((0, 0, 255)) == "#0000ff"
        assert rgb_to_hex((0, 0, 0)) == "#000000"
        assert rgb_to_hex((255, 255, 255)) == "#ffffff"
        assert rgb_to_hex((31, 78, 121)) == "#1f4e79"

    def test_rgb_to_hex_rounds_float_channels(self):
        """Test that float channels round halves up."""
        assert rgb_to_hex((254.5, 0.4, 9.5)) == "#ff000a"

    def test_hex_to_rgb_accepts_optional_hash_and_any_case(self):
        """Test parsing with and without '#' in mixed case."""
        assert hex_to_rgb("#FF8000") == (255, 128, 0)
        assert hex_to_rgb("ff8000") == (255, 128, 0)
        assert hex_to_rgb("#1F4e79") == (31, 78, 121)

    @pytest.mark.parametrize("bad", ["#ff00", "#gggggg", "ff00000", "", "##ff0000", "#ff 000", "#ff0000\n"])
    def test_hex_to_rgb_rejects_malformed(self, bad):
        """Test that malformed hex strings raise InvalidInput."""
        with pytest.raises(InvalidInput):
            hex_to_rgb(bad)

    def test_hex_to_rgb_rejects_non_string(self):
        """Test that non-string input raises InvalidInput."""
        with pytest.raises(InvalidInput):
            hex_to_rgb(None)

    def test_invalid_input_is_a_value_error(self):
        """Test that InvalidInput can be caught as ValueError."""
        with pytest.raises(ValueError):
            hex_to_rgb("nope")

    def test_hex_round_trip_over_grid(self):
        """Test hex round trip over a stepped RGB grid."""
        for rgb in itertools.product(GRID, repeat=3):
            assert hex_to_rgb(rgb_to_hex(rgb)) == rgb

    def test_hex_round_trip_all_grays(self):
        """Test hex round trip for every gray level."""
        for v in range(256):
            assert hex_to_rgb(rgb_to_hex((v, v, v))) == (v, v, v)

    def test_normalize_hex(self):
        """Test canonical lowercase hex form."""
        assert normalize_hex("ABCDEF") == "#abcdef"


class TestHslConversions:
    """Test RGB <-> HSL conversions."""

    def test_primary_colors(self):
        """Test HSL of the three primaries."""
        assert rgb_to_hsl((255, 0, 0)) == HSL(0, 100, 50)
        assert rgb_to_hsl((0, 255, 0)) == HSL(120, 100, 50)
        assert rgb_to_hsl((0, 0, 255)) == HSL(240, 100, 50)

    def test_achromatic_colors(self):
        """Test HSL of white, black and mid gray."""
        assert rgb_to_hsl((255, 255, 255)) == HSL(0, 0, 100)
        assert rgb_to_hsl((0, 0, 0)) == HSL(0, 0, 0)
        assert rgb_to_hsl((128, 128, 128)) == HSL(0, 0, 50)

    def test_red_max_with_green_below_blue_wraps_hue(self):
        """Test hue wraparound on the red-max branch when g < b."""
        assert rgb_to_hsl((255, 0, 128)).h == 330

    def test_half_degree_hues_round_up(self):
        """Test that exact half-degree hues round up."""
        assert rgb_to_hsl((0, 21, 40)) == HSL(209, 100, 8)
        assert rgb_to_hsl((0, 33, 120)) == HSL(224, 100, 24)

    def test_saturation_branch_above_half_lightness(self):
        """Test the 2 - max - min saturation divisor for light colors."""
        # d = 100, 510 - 255 - 155 = 100 -> 100%
        assert rgb_to_hsl((255, 155, 155)) == HSL(0, 100, 80)

    def test_matches_branch_formula_over_grid(self):
        """Test rgb_to_hsl against exact branch-formula arithmetic."""
        grid = itertools.product(range(0, 256, 15), range(0, 256, 15), range(0, 256, 5))
        for rgb in grid:
            assert tuple(rgb_to_hsl(rgb)) == _exact_hsl(rgb), rgb

    def test_matches_branch_formula_near_ties(self):
        """Test dark blues where hue, saturation and lightness land near .5."""
        for rgb in itertools.product(range(0, 8), range(0, 64), range(1, 128, 3)):
            assert tuple(rgb_to_hsl(rgb)) == _exact_hsl(rgb), rgb

    def test_hue_is_always_below_360(self):
        """Test that hue stays within [0, 360)."""
        for rgb in itertools.product(GRID, repeat=3):
            assert 0 <= rgb_to_hsl(rgb).h < 360

    def test_hsl_to_rgb_primaries(self):
        """Test RGB of primary HSL values."""
        assert hsl_to_rgb((0, 100, 50)) == (255, 0, 0)
        assert hsl_to_rgb((120, 100, 50)) == (0, 255, 0)
        assert hsl_to_rgb((240, 100, 50)) == (0, 0, 255)
        assert hsl_to_rgb((0, 0, 100)) == (255, 255, 255)

    def test_hsl_to_rgb_wraps_hue(self):
        """Test that out-of-range hues wrap modulo 360."""
        assert hsl_to_rgb((360, 100, 50)) == hsl_to_rgb((0, 100, 50))
        assert hsl_to_rgb((-120, 100, 50)) == hsl_to_rgb((240, 100, 50))

    def test_hsl_round_trip_grays_within_one(self):
        """Test gray round trips within one level."""
        for v in range(256):
            back = hsl_to_rgb(rgb_to_hsl((v, v, v)))
            assert all(abs(a - b) <= 1 for a, b in zip(back, (v, v, v)))

    def test_hsl_round_trip_primaries_and_secondaries_exact(self):
        """Test exact round trips for primaries and secondaries."""
        for rgb in [(255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 0), (0, 255, 255), (255, 0, 255)]:
            assert hsl_to_rgb(rgb_to_hsl(rgb)) == rgb

    def test_hsl_round_trip_quantization_bound(self):
        """Test round-trip drift stays within the integer HSL quantization bound."""
        # Whole-degree hue and whole-percent S/L bound the drift to a few levels
        for rgb in itertools.product(GRID, repeat=3):
            back = hsl_to_rgb(rgb_to_hsl(rgb))
            assert all(abs(a - b) <= 6 for a, b in zip(back, rgb)), (rgb, back)


class TestLuminanceAndContrast:
    """Test WCAG luminance and contrast ratio."""

    def test_relative_luminance_extremes(self):
        """Test luminance of black and white."""
        assert relative_luminance((0, 0, 0)) == 0.0
        assert relative_luminance((255, 255, 255)) == pytest.approx(1.0)

    def test_contrast_black_white_is_21(self):
        """Test the maximum contrast ratio."""
        assert contrast_ratio("#000000", "#ffffff") == pytest.approx(21.0)

    def test_contrast_is_symmetric(self):
        """Test that argument order does not matter."""
        assert contrast_ratio("#336699", "#ffcc00") == pytest.approx(contrast_ratio("#ffcc00", "#336699"))

    def test_contrast_with_self_is_one(self):
        """Test that a color has contrast 1 with itself."""
        for hex_color in ["#000000", "#ffffff", "#336699", "#ff0000"]:
            assert contrast_ratio(hex_color, hex_color) == 1.0

    def test_contrast_bounds_over_grid(self):
        """Test that contrast ratios stay within [1, 21]."""
        colors = [rgb_to_hex(rgb) for rgb in itertools.product(range(0, 256, 51), repeat=3)]
        for a in colors[::7]:
            for b in colors:
                ratio = contrast_ratio(a, b)
                assert 1.0 <= ratio <= 21.0 + 1e-9

    def test_perceived_brightness_orders_green_above_red(self):
        """Test the luma weights rank green above red."""
        assert perceived_brightness((0, 255, 0)) > perceived_brightness((255, 0, 0))


class TestAdjustBrightness:
    """Test HSL lightness adjustment."""

    def test_lighten_and_darken(self):
        """Test lightening to white and darkening to black."""
        assert adjust_brightness("#808080", 50) == "#ffffff"
        assert adjust_brightness("#808080", -50) == "#000000"

    def test_clamps_to_range(self):
        """Test lightness clamping at 0 and 100."""
        assert adjust_brightness("#ffffff", 30) == "#ffffff"
        assert adjust_brightness("#000000", -30) == "#000000"

    def test_zero_delta_keeps_primaries(self):
        """Test that a zero delta leaves a primary unchanged."""
        assert adjust_brightness("#ff0000", 0) == "#ff0000"


class TestDistance:
    """Test the Euclidean RGB distance kept under its historical name."""

    def test_ciede2000_is_euclidean(self):
        """Test that ciede2000 is the Euclidean RGB distance."""
        assert ciede2000 is euclidean_rgb_distance
        assert ciede2000((0, 0, 0), (3, 4, 0)) == 5.0

    def test_symmetric_and_zero_on_identity(self):
        """Test symmetry and zero self-distance."""
        assert euclidean_rgb_distance((10, 20, 30), (40, 50, 60)) == euclidean_rgb_distance((40, 50, 60), (10, 20, 30))
        assert euclidean_rgb_distance((10, 20, 30), (10, 20, 30)) == 0.0

    def test_pairwise_matches_scalar(self):
        """Test the vectorised distances against the scalar form."""
        pixels = [(0, 0, 0), (255, 128, 7), (12, 34, 56)]
        centers = [(255, 255, 255), (0, 0, 0)]
        matrix = pairwise_distances(pixels, centers)
        assert matrix.shape == (3, 2)
        for i, p in enumerate(pixels):
            for j, c in enumerate(centers):
                assert matrix[i, j] == pytest.approx(euclidean_rgb_distance(p, c))


def test_round_half_up():
    """Test that halves round up rather than to even."""
    assert round_half_up(0.5) == 1
    assert round_half_up(1.5) == 2
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
