# planet_generator/color_maps.py

"""
================================================================================
CLIMATE PALETTE MAPPING
================================================================================
This module contains the climate palettes and the functions that turn a
climate scalar and a terrain height into an RGB color.

It is a pure, stateless utility with no rendering dependencies, so the same
mapping is used for single-point lookups and for whole textures.
================================================================================
"""
import math

import numpy as np

from . import config as DEFAULTS

# --- Anchor Color Names ---
# Ordered from the deepest water to the highest terrain.
COLOR_NAMES = (
    "deep_ocean",
    "shallow_water",
    "beach",
    "lowland",
    "highland",
    "mountain",
    "peak",
    "polar",
)

# --- Climate Palettes ---
# Ordered from the coldest to the most verdant climate. A climate value of 0.0
# selects the first palette, 1.0 the last; anything in between interpolates
# between two neighbours.
PALETTES = [
    {   # Icy
        "deep_ocean": (25, 25, 112),
        "shallow_water": (65, 105, 225),
        "beach": (176, 196, 222),
        "lowland": (230, 230, 250),
        "highland": (255, 250, 240),
        "mountain": (248, 248, 255),
        "peak": (255, 255, 255),
        "polar": (255, 255, 255),
        "atmosphere_color": 0x87CEEB,
    },
    {   # Temperate
        "deep_ocean": (25, 25, 112),
        "shallow_water": (65, 105, 225),
        "beach": (238, 203, 173),
        "lowland": (34, 139, 34),
        "highland": (107, 142, 35),
        "mountain": (160, 82, 45),
        "peak": (139, 69, 19),
        "polar": (255, 255, 255),
        "atmosphere_color": 0x87CEEB,
    },
    {   # Arid
        "deep_ocean": (25, 25, 112),
        "shallow_water": (65, 105, 225),
        "beach": (244, 164, 96),
        "lowland": (210, 180, 140),
        "highland": (205, 133, 63),
        "mountain": (160, 82, 45),
        "peak": (139, 69, 19),
        "polar": (255, 228, 181),
        "atmosphere_color": 0xFFA500,
    },
    {   # Verdant
        "deep_ocean": (0, 100, 100),
        "shallow_water": (0, 150, 150),
        "beach": (238, 203, 173),
        "lowland": (0, 100, 0),
        "highland": (34, 139, 34),
        "mountain": (107, 142, 35),
        "peak": (85, 107, 47),
        "polar": (144, 238, 144),
        "atmosphere_color": 0x90EE90,
    },
]

# --- Land Height Bands ---
# (start offset above sea level, end offset above sea level, lower color, upper color)
LAND_BANDS = (
    (0.0, DEFAULTS.BEACH_BAND_TOP, "shallow_water", "beach"),
    (DEFAULTS.BEACH_BAND_TOP, DEFAULTS.LOWLAND_BAND_TOP, "beach", "lowland"),
    (DEFAULTS.LOWLAND_BAND_TOP, DEFAULTS.HIGHLAND_BAND_TOP, "lowland", "highland"),
    (DEFAULTS.HIGHLAND_BAND_TOP, DEFAULTS.MOUNTAIN_BAND_TOP, "highland", "mountain"),
    (DEFAULTS.MOUNTAIN_BAND_TOP, DEFAULTS.PEAK_BAND_TOP, "mountain", "peak"),
)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _lerp_color(color1: tuple, color2: tuple, t: float) -> tuple:
    """Linearly interpolates between two RGB colors, rounding to integers."""
    return tuple(_round_half_up(c1 + (c2 - c1) * t) for c1, c2 in zip(color1, color2))


def _lerp_color_array(color1: tuple, color2: tuple, t: np.ndarray) -> np.ndarray:
    """Vectorized _lerp_color. Returns an array of shape t.shape + (3,)."""
    c1 = np.array(color1, dtype=np.float64)
    c2 = np.array(color2, dtype=np.float64)
    t = t[..., np.newaxis]
    return np.floor(c1 + (c2 - c1) * t + 0.5)


def _water_band(sea_level: float) -> tuple[float, float]:
    """Returns (deep ocean top, width of the deep-to-shallow band)."""
    deep_top = sea_level * DEFAULTS.DEEP_OCEAN_FRACTION
    span = sea_level - deep_top
    # A zero-width band is never selected, the width only has to be non-zero.
    return deep_top, span if span > 0 else 1.0


class ColorPalette:
    """
    A continuous palette for one climate value: the eight interpolated anchor
    colors, a discrete atmosphere tint, and the height banding policy.
    """

    def __init__(self, colors: dict, atmosphere_color: int):
        self.colors = colors
        self.atmosphere_color = atmosphere_color

    def color_at(self, height: float, sea_level: float) -> tuple:
        """
        Maps a terrain height to an RGB tuple using the seven-band policy
        relative to sea level.
        """
        sea_level = min(1.0, max(0.0, sea_level))
        colors = self.colors
        deep_top, water_span = _water_band(sea_level)

        if height < deep_top:
            return colors["deep_ocean"]
        if height < sea_level:
            factor = (height - deep_top) / water_span
            return _lerp_color(colors["deep_ocean"], colors["shallow_water"], factor)

        for start, end, lower, upper in LAND_BANDS:
            if height < sea_level + end:
                factor = (height - sea_level - start) / (end - start)
                return _lerp_color(colors[lower], colors[upper], factor)

        return colors["polar"]

    def color_at_array(self, heights: np.ndarray, sea_level: float) -> np.ndarray:
        """
        Vectorized color_at. Returns a uint8 array of shape heights.shape + (3,)
        with exactly the values color_at would produce per element.
        """
        heights = np.asarray(heights, dtype=np.float64)
        sea_level = min(1.0, max(0.0, sea_level))
        colors = self.colors
        deep_top, water_span = _water_band(sea_level)

        conditions = [heights < deep_top, heights < sea_level]
        choices = [
            np.broadcast_to(np.array(colors["deep_ocean"], dtype=np.float64), heights.shape + (3,)),
            _lerp_color_array(colors["deep_ocean"], colors["shallow_water"], (heights - deep_top) / water_span),
        ]
        for start, end, lower, upper in LAND_BANDS:
            conditions.append(heights < sea_level + end)
            factor = (heights - sea_level - start) / (end - start)
            choices.append(_lerp_color_array(colors[lower], colors[upper], factor))

        # np.select needs the conditions in the same shape as the RGB choices.
        rgb_shape = heights.shape + (3,)
        conditions = [np.broadcast_to(c[..., np.newaxis], rgb_shape) for c in conditions]
        conditions.append(np.ones(rgb_shape, dtype=bool))
        choices.append(np.broadcast_to(np.array(colors["polar"], dtype=np.float64), rgb_shape))
        result = np.select(conditions, choices)
        return np.clip(result, 0, 255).astype(np.uint8)


def get_palette(climate: float) -> ColorPalette:
    """
    Builds the continuous palette for a climate value in [0, 1]. Out-of-range
    values are clamped. The atmosphere tint is taken from the lower palette
    without interpolation.
    """
    climate = min(1.0, max(0.0, climate))
    scaled_climate = climate * (len(PALETTES) - 1)
    index = int(math.floor(scaled_climate))
    fraction = scaled_climate - index

    if index >= len(PALETTES) - 1:
        palette1 = palette2 = PALETTES[-1]
    else:
        palette1 = PALETTES[index]
        palette2 = PALETTES[index + 1]

    colors = {
        name: _lerp_color(palette1[name], palette2[name], fraction)
        for name in COLOR_NAMES
    }
    return ColorPalette(colors, palette1["atmosphere_color"])
