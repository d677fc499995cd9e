"""
Tests for terrain, cloud, ring and moon synthesis.

Covers:
- Per-point sampling ranges and the height regression fixture
- Texture shapes and dtypes
- Texels equal to the corresponding single-point samples
"""

import subprocess
import sys
from pathlib import Path

import numpy as np
import pytest

from planet_generator import PlanetGenerator, PlanetParameters
from planet_generator.generator import uv_to_sphere


class TestCoordinates:
    """Texture coordinates map onto the unit sphere."""

    def test_uv_origin_is_north_pole(self):
        """v = 0 is the +Z pole."""
        x, y, z = uv_to_sphere(0.0, 0.0)
        assert (float(x), float(y), float(z)) == pytest.approx((0.0, 0.0, 1.0))

    def test_equator(self):
        """u = 0, v = 0.5 lands on +X."""
        x, y, z = uv_to_sphere(0.0, 0.5)
        assert (float(x), float(y), float(z)) == pytest.approx((1.0, 0.0, 0.0))

    def test_grid_points_on_unit_sphere(self, generator):
        """Every grid point has unit length."""
        x, y, z = generator.get_sphere_grid(32, 16)
        assert np.allclose(x * x + y * y + z * z, 1.0)


class TestPointSampling:
    """Single-point samples are deterministic and bounded."""

    def test_height_regression_fixture(self, params):
        """Seed 42 reproduces the same height at (1, 0, 0) in separate generators."""
        a = PlanetGenerator().generate_height(params, (1.0, 0.0, 0.0))
        b = PlanetGenerator().generate_height(params, (1.0, 0.0, 0.0))
        assert a == b
        assert 0.0 <= a <= 1.0

    def test_height_fixture_stable_across_processes(self, params):
        """A fresh interpreter computes the bit-identical seed 42 height at (1, 0, 0)."""
        script = (
            "from planet_generator import PlanetGenerator, PlanetParameters\n"
            "params = PlanetParameters(seed=42, land_water_ratio=0.4, coastline_complexity=0.5, mountain_density=0.3)\n"
            "print(repr(PlanetGenerator().generate_height(params, (1.0, 0.0, 0.0))))\n"
        )
        result = subprocess.run(
            [sys.executable, "-c", script],
            capture_output=True, text=True, check=True, cwd=Path(__file__).resolve().parents[1],
        )
        assert float(result.stdout.strip()) == PlanetGenerator().generate_height(params, (1.0, 0.0, 0.0))

    def test_height_fixture_recipe(self, generator, params):
        """At (1, 0, 0) the coastline octaves hit lattice points, leaving only the mountain octaves."""
        noise = generator.get_noise(params.seed)
        assert noise.sample(3.0, 0.0, 0.0) == 0.0
        assert noise.sample(6.0, 0.0, 0.0) == 0.0
        mountains = (noise.sample(0.3 * 16.0 + 4.0, 0.0, 0.0) * 0.15 * 0.3
                     + noise.sample(0.3 * 32.0 + 8.0, 0.0, 0.0) * 0.1 * 0.3)
        assert generator.generate_height(params, (1.0, 0.0, 0.0)) == pytest.approx((mountains + 1) / 2)

    def test_random_heights_and_clouds_in_range(self, generator, rng):
        """Heights and cloud densities stay in [0, 1] for random inputs."""
        for _ in range(20):
            params = PlanetParameters(
                seed=float(rng.integers(0, 100_000)),
                coastline_complexity=rng.random(),
                mountain_density=rng.random(),
                clouds=rng.random(),
            )
            x, y, z = uv_to_sphere(rng.random(500), rng.random(500))
            heights = generator.height_field(params, x, y, z)
            clouds = generator.cloud_field(params, x, y, z)
            assert np.all((heights >= 0.0) & (heights <= 1.0))
            assert np.all((clouds >= 0.0) & (clouds <= 1.0))

    def test_no_clouds_parameter(self, generator, params):
        """With clouds = 0 the density is zero everywhere."""
        clear = params.replace(clouds=0.0)
        assert generator.generate_cloud_density(clear, (0.0, 1.0, 0.0)) == 0.0

    def test_flat_planet_ignores_mountain_octaves(self, generator, params):
        """Mountain density 0 removes the high-frequency octaves."""
        flat = params.replace(mountain_density=0.0)
        noise = generator.get_noise(flat.seed)
        point = (0.3, 0.4, np.sqrt(1 - 0.25))
        expected = 0.0
        for scale, weight in [(0.5 * 4 + 1, 0.4), (0.5 * 8 + 2, 0.25)]:
            expected += noise.sample(point[0] * scale, point[1] * scale, point[2] * scale) * weight
        expected = min(1.0, max(0.0, (expected + 1) / 2))
        assert generator.generate_height(flat, point) == pytest.approx(expected)

    def test_ring_outside_annulus_is_transparent(self, generator, params):
        """Ring texels outside radius 0.4 to 0.9 are (0, 0, 0, 0)."""
        assert generator.generate_ring_texel(params, (0.2, 1.0)) == (0, 0, 0, 0)
        assert generator.generate_ring_texel(params, (0.95, 1.0)) == (0, 0, 0, 0)

    def test_ring_tint_depends_on_climate(self, generator, params):
        """Cold planets get the cold ring tint, warm planets the warm one."""
        cold = generator.generate_ring_texel(params.replace(climate=0.2, ring_density=1.0), (0.6, 0.3))
        warm = generator.generate_ring_texel(params.replace(climate=0.8, ring_density=1.0), (0.6, 0.3))
        assert cold[3] == warm[3]
        assert warm[0] >= cold[0]

    def test_moon_brightness_range(self, generator, params):
        """Moon gray level lies in floor(0.3 * 255) .. floor(0.7 * 255)."""
        for point in [(1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)]:
            gray = generator.generate_moon_brightness(params, point)
            assert 76 <= gray <= 178

    def test_noise_generators_cached_per_seed(self, generator):
        """The same seed reuses one noise generator."""
        assert generator.get_noise(42) is generator.get_noise(42.5)
        assert generator.get_noise(42) is not generator.get_noise(1042)


class TestTextures:
    """Full textures have the documented shapes and match point sampling."""

    def test_default_texture_shapes(self, params):
        """Textures default to the configured resolutions."""
        generator = PlanetGenerator({
            'planet_texture_size': (64, 32),
            'cloud_texture_size': (64, 32),
            'ring_texture_size': (32, 32),
            'moon_texture_size': (16, 8),
        })
        assert generator.generate_planet_texture(params).shape == (32, 64, 3)
        assert generator.generate_cloud_texture(params).shape == (32, 64, 4)
        assert generator.generate_ring_texture(params).shape == (32, 32, 4)
        assert generator.generate_moon_texture(params).shape == (8, 16, 3)
        assert generator.generate_height_map(params).shape == (32, 64)

    def test_explicit_size(self, generator, params):
        """An explicit width and height override the defaults."""
        texture = generator.generate_planet_texture(params, 40, 20)
        assert texture.shape == (20, 40, 3)
        assert texture.dtype == np.uint8

    def test_planet_texel_matches_point_color(self, generator, params):
        """Each planet texel equals the palette color of its sphere point."""
        width, height = 24, 12
        texture = generator.generate_planet_texture(params, width, height)
        x, y, z = generator.get_sphere_grid(width, height)
        for py, px in [(0, 0), (3, 7), (6, 12), (11, 23)]:
            point = (x[py, px], y[py, px], z[py, px])
            assert tuple(int(c) for c in texture[py, px]) == generator.generate_color(params, point)

    def test_cloud_texel_matches_point_density(self, generator, params):
        """Cloud alpha equals the rounded point density scaled to a byte."""
        width, height = 24, 12
        texture = generator.generate_cloud_texture(params, width, height)
        x, y, z = generator.get_sphere_grid(width, height)
        assert np.all(texture[..., :3] == 255)
        for py, px in [(1, 1), (5, 9), (10, 20)]:
            density = generator.generate_cloud_density(params, (x[py, px], y[py, px], z[py, px]))
            assert texture[py, px, 3] == int(np.floor(density * 255 + 0.5))

    def test_ring_texel_matches_point_sample(self, generator, params):
        """Ring texels equal generate_ring_texel at their polar coordinate."""
        width = height = 32
        texture = generator.generate_ring_texture(params, width, height)
        radius, angle = generator.get_polar_grid(width, height)
        for py, px in [(16, 16), (16, 26), (4, 10), (0, 0), (22, 5)]:
            expected = generator.generate_ring_texel(params, (radius[py, px], angle[py, px]))
            assert tuple(int(c) for c in texture[py, px]) == expected

    def test_ring_center_transparent(self, generator, params):
        """The ring texture center lies inside the hole."""
        texture = generator.generate_ring_texture(params, 32, 32)
        assert tuple(texture[16, 16]) == (0, 0, 0, 0)

    def test_moon_texture_is_gray(self, generator, params):
        """All three moon channels are equal."""
        texture = generator.generate_moon_texture(params, 16, 8)
        assert np.array_equal(texture[..., 0], texture[..., 1])
        assert np.array_equal(texture[..., 1], texture[..., 2])

    def test_textures_deterministic(self, params):
        """Two generators produce identical textures for the same parameters."""
        a = PlanetGenerator().generate_planet_texture(params, 32, 16)
        b = PlanetGenerator().generate_planet_texture(params, 32, 16)
        assert np.array_equal(a, b)
