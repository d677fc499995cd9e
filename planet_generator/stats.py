# planet_generator/stats.py

"""
================================================================================
PLANET SUMMARY STATISTICS
================================================================================
Human-readable summary of a planet for a status panel: land/water coverage
estimated by sampling the real height field, plus descriptive buckets for the
climate, terrain, atmosphere and cloud knobs.
================================================================================
"""
import numpy as np

from . import config as DEFAULTS
from .parameters import PlanetParameters

# --- Descriptive Buckets ---
# (exclusive upper bound, label). The first matching row wins; the last label
# is used for anything above every bound.
CLIMATE_TYPES = [
    (0.2, "Frozen Arctic"),
    (0.4, "Cold Temperate"),
    (0.6, "Temperate"),
    (0.8, "Warm Arid"),
    (None, "Tropical Verdant"),
]
TERRAIN_COMPLEXITY = [
    (0.25, "Low"),
    (0.5, "Medium"),
    (0.75, "High"),
    (None, "Extreme"),
]
ATMOSPHERIC_CONDITIONS = [
    (0.25, "Thin"),
    (0.5, "Normal"),
    (0.75, "Dense"),
    (None, "Thick"),
]
CLOUD_COVERAGE = [
    (0.2, "Clear"),
    (0.4, "Light"),
    (0.6, "Moderate"),
    (0.8, "Heavy"),
    (None, "Overcast"),
]
APPROXIMATE_SIZE = [
    (0.3, "Small (Mars-like)"),
    (0.7, "Medium (Earth-like)"),
    (None, "Large (Super-Earth)"),
]


def _bucket(value: float, table: list) -> str:
    for upper, label in table:
        if upper is None or value < upper:
            return label
    return table[-1][1]


def random_sphere_points(count: int, rng: np.random.Generator):
    """Uniformly distributed points on the unit sphere."""
    phi = np.arccos(2 * rng.random(count) - 1)
    theta = rng.random(count) * 2 * np.pi
    x = np.sin(phi) * np.cos(theta)
    y = np.sin(phi) * np.sin(theta)
    z = np.cos(phi)
    return x, y, z


def estimate_land_fraction(generator, params: PlanetParameters, samples: int = DEFAULTS.PLANET_STATS_SAMPLES,
                           rng: np.random.Generator = None) -> float:
    """Monte-Carlo estimate of the fraction of the surface above sea level."""
    rng = rng if rng is not None else np.random.default_rng()
    x, y, z = random_sphere_points(samples, rng)
    heights = generator.height_field(params, x, y, z)
    return float(np.count_nonzero(heights >= params.sea_level)) / samples


def calculate_planet_stats(generator, params: PlanetParameters, samples: int = DEFAULTS.PLANET_STATS_SAMPLES,
                           rng: np.random.Generator = None) -> dict:
    """
    Summarizes a planet.

    Args:
        generator (PlanetGenerator): Supplies the terrain height field.
        params (PlanetParameters): The planet to describe.
        samples (int): Number of surface points used for the coverage estimate.
        rng (np.random.Generator, optional): Source of randomness for sampling.

    Returns:
        dict: land/water percentages (rounded integers) and descriptive labels.
    """
    land_percentage = estimate_land_fraction(generator, params, samples, rng) * 100
    complexity_score = (params.coastline_complexity + params.mountain_density) / 2

    return {
        "land_percentage": int(round(land_percentage)),
        "water_percentage": int(round(100 - land_percentage)),
        "climate_type": _bucket(params.climate, CLIMATE_TYPES),
        "terrain_complexity": _bucket(complexity_score, TERRAIN_COMPLEXITY),
        "atmospheric_conditions": _bucket(params.atmosphere, ATMOSPHERIC_CONDITIONS),
        "cloud_coverage": _bucket(params.clouds, CLOUD_COVERAGE),
        "approximate_size": _bucket(params.atmosphere, APPROXIMATE_SIZE),
    }
