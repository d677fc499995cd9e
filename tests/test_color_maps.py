"""
Tests for climate palettes and height-to-color banding.
"""

import numpy as np
import pytest

from planet_generator.color_maps import COLOR_NAMES, PALETTES, get_palette


def _strictly_between(color, low, high):
    channels_inside = all(min(a, b) <= c <= max(a, b) for c, a, b in zip(color, low, high))
    return channels_inside and tuple(color) != tuple(low) and tuple(color) != tuple(high)


class TestPaletteSelection:
    """Climate picks and interpolates two neighbouring palettes."""

    def test_extremes_are_pure_palettes(self):
        """Climate 0 and 1 return the first and last palettes unchanged."""
        icy = get_palette(0.0)
        verdant = get_palette(1.0)
        for name in COLOR_NAMES:
            assert icy.colors[name] == PALETTES[0][name]
            assert verdant.colors[name] == PALETTES[-1][name]

    def test_out_of_range_climate_is_clamped(self):
        """Climate outside [0, 1] behaves like the nearest bound."""
        assert get_palette(-3.0).colors == get_palette(0.0).colors
        assert get_palette(7.5).colors == get_palette(1.0).colors

    def test_atmosphere_tint_is_discrete(self):
        """The atmosphere tint comes from the lower palette without blending."""
        assert get_palette(0.0).atmosphere_color == 0x87CEEB
        assert get_palette(0.5).atmosphere_color == 0x87CEEB
        assert get_palette(0.7).atmosphere_color == 0xFFA500
        assert get_palette(1.0).atmosphere_color == 0x90EE90

    def test_continuity(self):
        """A small climate step moves every anchor color by a small amount."""
        epsilon = 1e-3
        for climate in np.linspace(0.0, 1.0 - epsilon, 97):
            a = get_palette(climate).colors
            b = get_palette(climate + epsilon).colors
            for name in COLOR_NAMES:
                assert max(abs(x - y) for x, y in zip(a[name], b[name])) <= 2


class TestHeightBanding:
    """Heights are banded relative to sea level."""

    def test_deep_ocean_below_seventy_percent_of_sea_level(self):
        """Everything below 0.7 * sea level is the deep ocean color."""
        palette = get_palette(0.4)
        assert palette.color_at(0.3, 0.5) == palette.colors["deep_ocean"]
        assert palette.color_at(0.0, 0.5) == palette.colors["deep_ocean"]

    def test_water_band_interpolates(self):
        """Between 0.7 * sea level and sea level the color blends deep to shallow."""
        palette = get_palette(1 / 3)
        color = palette.color_at(0.4, 0.5)
        assert _strictly_between(color, palette.colors["deep_ocean"], palette.colors["shallow_water"])

    def test_polar_above_peak_band(self):
        """Heights beyond sea level + 0.9 use the polar color."""
        palette = get_palette(0.5)
        assert palette.color_at(0.95, 0.5) == palette.colors["polar"]

    @pytest.mark.parametrize("height, lower, upper", [
        (0.52, "shallow_water", "beach"),
        (0.7, "beach", "lowland"),
        (0.9, "lowland", "highland"),
    ])
    def test_land_bands(self, height, lower, upper):
        """Land bands blend between their two anchor colors."""
        palette = get_palette(0.4)
        color = palette.color_at(height, 0.5)
        low, high = palette.colors[lower], palette.colors[upper]
        assert all(min(a, b) <= c <= max(a, b) for c, a, b in zip(color, low, high))

    def test_band_start_uses_lower_color(self):
        """Exactly at sea level the color is the shallow water anchor."""
        palette = get_palette(0.4)
        assert palette.color_at(0.5, 0.5) == palette.colors["shallow_water"]

    def test_zero_sea_level(self):
        """With no water every height maps to a land band without error."""
        palette = get_palette(0.4)
        assert palette.color_at(0.0, 0.0) == palette.colors["shallow_water"]
        assert palette.color_at(1.0, 0.0) == palette.colors["polar"]


class TestVectorizedBanding:
    """color_at_array reproduces color_at element by element."""

    def test_array_matches_scalar(self):
        """Every element of the array mapping equals the scalar mapping."""
        rng = np.random.default_rng(3)
        heights = rng.random((8, 16))
        for climate, sea_level in [(0.1, 0.6), (0.55, 0.4), (0.95, 0.0), (0.3, 1.0)]:
            palette = get_palette(climate)
            rgb = palette.color_at_array(heights, sea_level)
            assert rgb.shape == (8, 16, 3)
            assert rgb.dtype == np.uint8
            for (row, col), height in np.ndenumerate(heights):
                assert tuple(int(c) for c in rgb[row, col]) == palette.color_at(height, sea_level)
