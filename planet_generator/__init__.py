# planet_generator/__init__.py

from .color_maps import ColorPalette, get_palette
from .generator import PlanetGenerator
from .noise import NoiseGenerator
from .parameters import EvolvedParameters, PlanetParameters, TemporalSettings
from .stats import calculate_planet_stats

__all__ = [
    "ColorPalette",
    "get_palette",
    "PlanetGenerator",
    "NoiseGenerator",
    "EvolvedParameters",
    "PlanetParameters",
    "TemporalSettings",
    "calculate_planet_stats",
]
