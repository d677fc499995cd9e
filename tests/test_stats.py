"""
Tests for the descriptive planet statistics.
"""

import numpy as np
import pytest

from planet_generator import PlanetParameters, calculate_planet_stats
from planet_generator.stats import random_sphere_points


class TestSampling:
    """Sphere sampling helpers."""

    def test_points_on_unit_sphere(self, rng):
        """Sampled points have unit length."""
        x, y, z = random_sphere_points(500, rng)
        assert np.allclose(x * x + y * y + z * z, 1.0)


class TestPlanetStats:
    """calculate_planet_stats summarizes a planet."""

    def test_percentages_sum_to_hundred(self, generator, params, rng):
        """Land and water percentages are complementary integers."""
        stats = calculate_planet_stats(generator, params, samples=1000, rng=rng)
        assert 0 <= stats["land_percentage"] <= 100
        assert stats["land_percentage"] + stats["water_percentage"] == 100

    def test_all_water_planet(self, generator, rng):
        """A land/water ratio of 0 puts sea level above every height."""
        stats = calculate_planet_stats(generator, PlanetParameters(land_water_ratio=0.0), samples=500, rng=rng)
        assert stats["water_percentage"] == 100

    def test_all_land_planet(self, generator, rng):
        """A land/water ratio of 1 puts sea level at zero."""
        stats = calculate_planet_stats(generator, PlanetParameters(land_water_ratio=1.0), samples=500, rng=rng)
        assert stats["land_percentage"] == 100

    def test_seeded_rng_is_reproducible(self, generator, params):
        """The same RNG seed gives the same estimate."""
        a = calculate_planet_stats(generator, params, samples=300, rng=np.random.default_rng(5))
        b = calculate_planet_stats(generator, params, samples=300, rng=np.random.default_rng(5))
        assert a == b

    @pytest.mark.parametrize("climate, label", [
        (0.1, "Frozen Arctic"),
        (0.3, "Cold Temperate"),
        (0.5, "Temperate"),
        (0.7, "Warm Arid"),
        (0.9, "Tropical Verdant"),
    ])
    def test_climate_type(self, generator, rng, climate, label):
        """Climate is bucketed in steps of 0.2."""
        stats = calculate_planet_stats(generator, PlanetParameters(climate=climate), samples=10, rng=rng)
        assert stats["climate_type"] == label

    def test_descriptive_buckets(self, generator, rng):
        """Terrain, atmosphere, clouds and size labels follow their knobs."""
        params = PlanetParameters(coastline_complexity=0.9, mountain_density=0.9, atmosphere=0.1, clouds=0.5)
        stats = calculate_planet_stats(generator, params, samples=10, rng=rng)
        assert stats["terrain_complexity"] == "Extreme"
        assert stats["atmospheric_conditions"] == "Thin"
        assert stats["cloud_coverage"] == "Moderate"
        assert stats["approximate_size"] == "Small (Mars-like)"
