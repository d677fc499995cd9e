# planet_generator/generator.py

"""
================================================================================
PLANET SURFACE GENERATOR
================================================================================
This module contains the PlanetGenerator class, responsible for sampling the
planet's height field, its cloud layer, its ring system and its moon, either
one point at a time or as whole texture buffers.

Data Contract:
---------------
- Inputs (on initialization):
    - config (dict): Optional overrides for the defaults in `config.py`
      (seed offsets, octave recipes, texture sizes).
    - logger: A configured Python logging object for runtime messages.
- Inputs (per call):
    - params (PlanetParameters): base or evolved planet parameters.
    - A point on the unit sphere (x, y, z), or a polar (radius, angle) pair
      for the ring plane.
- Outputs (from methods):
    - Heights and densities in [0, 1], RGBA tuples, or uint8 NumPy textures.
- Side Effects: Logs messages using the provided logger.
- Invariants: Given the same parameters, every output is deterministic.
  Textures are regenerated from scratch on every call and each texel equals
  the corresponding single-point sample.
================================================================================
"""

import logging
import time

import numpy as np

from . import config as DEFAULTS
from .color_maps import get_palette
from .noise import NoiseGenerator, seed_to_int
from .parameters import PlanetParameters


def uv_to_sphere(u, v):
    """
    Converts texture coordinates to a point on the unit sphere.
    theta = u * 2pi runs around the equator, phi = v * pi from pole to pole.
    Works on scalars and NumPy arrays alike.
    """
    theta = np.asarray(u, dtype=np.float64) * np.pi * 2
    phi = np.asarray(v, dtype=np.float64) * np.pi
    x = np.sin(phi) * np.cos(theta)
    y = np.sin(phi) * np.sin(theta)
    z = np.cos(phi)
    return x, y, z


def _round_channel(values):
    """Rounds color channel values half-up into the 0..255 byte range."""
    return np.clip(np.floor(np.asarray(values, dtype=np.float64) + 0.5), 0, 255)


class PlanetGenerator:
    """
    Generates the raw surface data for a procedurally generated planet.
    This class is backend-only and does not handle any visualization.
    """

    def __init__(self, config: dict = None, logger: logging.Logger = None):
        """
        Initializes the planet generator.

        Args:
            config (dict, optional): User-defined parameters to override defaults.
            logger (logging.Logger, optional): The logger instance for all output.
        """
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.user_config = config or {}

        # --- Consolidate Configuration ---
        self.settings = {
            'cloud_seed_offset': self.user_config.get('cloud_seed_offset', DEFAULTS.CLOUD_SEED_OFFSET),
            'ring_seed_offset': self.user_config.get('ring_seed_offset', DEFAULTS.RING_SEED_OFFSET),
            'moon_seed_offset': self.user_config.get('moon_seed_offset', DEFAULTS.MOON_SEED_OFFSET),

            'terrain_octaves': self.user_config.get('terrain_octaves', DEFAULTS.TERRAIN_OCTAVES),

            'cloud_octave_frequencies': self.user_config.get('cloud_octave_frequencies', DEFAULTS.CLOUD_OCTAVE_FREQUENCIES),
            'cloud_octave_weights': self.user_config.get('cloud_octave_weights', DEFAULTS.CLOUD_OCTAVE_WEIGHTS),
            'cloud_density_bias': self.user_config.get('cloud_density_bias', DEFAULTS.CLOUD_DENSITY_BIAS),
            'cloud_density_gain': self.user_config.get('cloud_density_gain', DEFAULTS.CLOUD_DENSITY_GAIN),

            'ring_inner_radius': self.user_config.get('ring_inner_radius', DEFAULTS.RING_INNER_RADIUS),
            'ring_outer_radius': self.user_config.get('ring_outer_radius', DEFAULTS.RING_OUTER_RADIUS),
            'ring_angular_frequency': self.user_config.get('ring_angular_frequency', DEFAULTS.RING_ANGULAR_FREQUENCY),
            'ring_radial_frequency': self.user_config.get('ring_radial_frequency', DEFAULTS.RING_RADIAL_FREQUENCY),
            'ring_cold_tint': self.user_config.get('ring_cold_tint', DEFAULTS.RING_COLD_TINT),
            'ring_warm_tint': self.user_config.get('ring_warm_tint', DEFAULTS.RING_WARM_TINT),
            'ring_tint_climate_split': self.user_config.get('ring_tint_climate_split', DEFAULTS.RING_TINT_CLIMATE_SPLIT),

            'moon_octave_frequencies': self.user_config.get('moon_octave_frequencies', DEFAULTS.MOON_OCTAVE_FREQUENCIES),
            'moon_octave_weights': self.user_config.get('moon_octave_weights', DEFAULTS.MOON_OCTAVE_WEIGHTS),
            'moon_min_brightness': self.user_config.get('moon_min_brightness', DEFAULTS.MOON_MIN_BRIGHTNESS),
            'moon_brightness_range': self.user_config.get('moon_brightness_range', DEFAULTS.MOON_BRIGHTNESS_RANGE),

            'planet_texture_size': self.user_config.get('planet_texture_size', DEFAULTS.PLANET_TEXTURE_SIZE),
            'cloud_texture_size': self.user_config.get('cloud_texture_size', DEFAULTS.CLOUD_TEXTURE_SIZE),
            'ring_texture_size': self.user_config.get('ring_texture_size', DEFAULTS.RING_TEXTURE_SIZE),
            'moon_texture_size': self.user_config.get('moon_texture_size', DEFAULTS.MOON_TEXTURE_SIZE),
        }

        # One noise generator per distinct seed, built on first use.
        self._noise_generators = {}

        self.logger.info("PlanetGenerator initialized.")

    # --- Noise Channels ---
    def get_noise(self, seed) -> NoiseGenerator:
        """Returns the (cached) noise generator for a seed."""
        key = seed_to_int(seed)
        generator = self._noise_generators.get(key)
        if generator is None:
            self.logger.debug(f"Building permutation table for seed {key}.")
            generator = NoiseGenerator(seed)
            self._noise_generators[key] = generator
        return generator

    # --- Field Recipes (scalars or arrays) ---
    def height_field(self, params: PlanetParameters, x, y, z):
        """Weighted sum of the terrain octaves, normalized from [-1, 1] to [0, 1]."""
        noise = self.get_noise(params.seed)
        height = 0.0
        for knob, multiplier, base, weight, scaled in self.settings['terrain_octaves']:
            knob_value = getattr(params, knob)
            scale = knob_value * multiplier + base
            contribution = noise.sample_array(x * scale, y * scale, z * scale) * weight
            if scaled:
                contribution = contribution * knob_value
            height = height + contribution
        return np.clip((height + 1) / 2, 0.0, 1.0)

    def cloud_field(self, params: PlanetParameters, x, y, z):
        """Cloud density in [0, 1], already scaled by the clouds parameter."""
        noise = self.get_noise(params.seed + self.settings['cloud_seed_offset'])
        density = 0.0
        for frequency, weight in zip(self.settings['cloud_octave_frequencies'], self.settings['cloud_octave_weights']):
            density = density + noise.sample_array(x * frequency, y * frequency, z * frequency) * weight
        density = np.maximum(0.0, (density + self.settings['cloud_density_bias']) * self.settings['cloud_density_gain'])
        return np.minimum(1.0, density * params.clouds)

    def moon_field(self, params: PlanetParameters, x, y, z):
        """Moon height in [0, 1] from the lower-octave spherical recipe."""
        noise = self.get_noise(params.seed + self.settings['moon_seed_offset'])
        height = 0.0
        for frequency, weight in zip(self.settings['moon_octave_frequencies'], self.settings['moon_octave_weights']):
            height = height + noise.sample_array(x * frequency, y * frequency, z * frequency) * weight
        return np.clip((height + 1) / 2, 0.0, 1.0)

    def ring_field(self, params: PlanetParameters, radius, angle):
        """
        Returns (r, g, b, a) channel arrays, unrounded, for polar coordinates
        on the ring plane. Texels outside the annulus are fully transparent.
        """
        radius = np.asarray(radius, dtype=np.float64)
        angle = np.asarray(angle, dtype=np.float64)
        noise = self.get_noise(params.seed + self.settings['ring_seed_offset'])

        angular = self.settings['ring_angular_frequency']
        ring_noise = noise.sample_array(
            np.cos(angle) * angular,
            np.sin(angle) * angular,
            radius * self.settings['ring_radial_frequency'],
        )
        density = (ring_noise + 1) / 2 * params.ring_density

        if params.climate < self.settings['ring_tint_climate_split']:
            tint = self.settings['ring_cold_tint']
        else:
            tint = self.settings['ring_warm_tint']

        inside = (radius >= self.settings['ring_inner_radius']) & (radius <= self.settings['ring_outer_radius'])
        density = np.where(inside, density, 0.0)
        return tint[0] * density, tint[1] * density, tint[2] * density, density * 255

    def _moon_gray(self, moon_height):
        brightness = self.settings['moon_min_brightness'] + moon_height * self.settings['moon_brightness_range']
        return np.floor(brightness * 255)

    # --- Single-Point Sampling ---
    def generate_height(self, params: PlanetParameters, point) -> float:
        """Terrain height in [0, 1] at a point on the unit sphere."""
        x, y, z = point
        return float(self.height_field(params, x, y, z))

    def generate_cloud_density(self, params: PlanetParameters, point) -> float:
        """Cloud density in [0, 1] at a point on the unit sphere."""
        x, y, z = point
        return float(self.cloud_field(params, x, y, z))

    def generate_ring_texel(self, params: PlanetParameters, polar_coord) -> tuple:
        """
        RGBA byte tuple for a (radius, angle) coordinate on the ring plane.
        The radius is normalized so that 1.0 is the texture's half-width.
        """
        radius, angle = polar_coord
        channels = self.ring_field(params, radius, angle)
        return tuple(int(c) for c in _round_channel(channels))

    def generate_moon_height(self, params: PlanetParameters, point) -> float:
        """Moon surface height in [0, 1] at a point on the unit sphere."""
        x, y, z = point
        return float(self.moon_field(params, x, y, z))

    def generate_moon_brightness(self, params: PlanetParameters, point) -> int:
        """Grayscale byte for the moon surface at a point on the unit sphere."""
        return int(self._moon_gray(self.generate_moon_height(params, point)))

    def generate_color(self, params: PlanetParameters, point) -> tuple:
        """Palette color of the terrain at a point on the unit sphere."""
        palette = get_palette(params.climate)
        return palette.color_at(self.generate_height(params, point), params.sea_level)

    # --- Coordinate Grids ---
    def get_sphere_grid(self, width: int, height: int):
        """
        Unit-sphere coordinates for every texel of an equirectangular texture.
        Pixel (px, py) maps to u = px / width, v = py / height.
        """
        u = np.arange(width, dtype=np.float64) / width
        v = np.arange(height, dtype=np.float64) / height
        u_grid, v_grid = np.meshgrid(u, v)
        return uv_to_sphere(u_grid, v_grid)

    def get_polar_grid(self, width: int, height: int):
        """Normalized radius and angle for every texel of a square ring texture."""
        center_x = width / 2
        center_y = height / 2
        px, py = np.meshgrid(np.arange(width, dtype=np.float64), np.arange(height, dtype=np.float64))
        dx = px - center_x
        dy = py - center_y
        radius = np.sqrt(dx * dx + dy * dy) / center_x
        angle = np.arctan2(dy, dx)
        return radius, angle

    # --- Full Textures ---
    def _texture_size(self, key: str, width: int, height: int) -> tuple:
        default_width, default_height = self.settings[key]
        return (width or default_width, height or default_height)

    def generate_height_map(self, params: PlanetParameters, width: int = None, height: int = None) -> np.ndarray:
        """Float height field of shape (height, width)."""
        width, height = self._texture_size('planet_texture_size', width, height)
        x, y, z = self.get_sphere_grid(width, height)
        return self.height_field(params, x, y, z)

    def generate_planet_texture(self, params: PlanetParameters, width: int = None, height: int = None) -> np.ndarray:
        """Palette-colored uint8 texture of shape (height, width, 3)."""
        start_time = time.perf_counter()
        heights = self.generate_height_map(params, width, height)
        palette = get_palette(params.climate)
        texture = palette.color_at_array(heights, params.sea_level)
        self.logger.info(
            f"Generated planet texture {texture.shape[1]}x{texture.shape[0]} "
            f"in {time.perf_counter() - start_time:.2f}s."
        )
        return texture

    def generate_cloud_texture(self, params: PlanetParameters, width: int = None, height: int = None) -> np.ndarray:
        """White uint8 RGBA texture whose alpha carries the cloud density."""
        start_time = time.perf_counter()
        width, height = self._texture_size('cloud_texture_size', width, height)
        x, y, z = self.get_sphere_grid(width, height)
        density = self.cloud_field(params, x, y, z)

        texture = np.full((height, width, 4), 255, dtype=np.uint8)
        texture[..., 3] = _round_channel(density * 255).astype(np.uint8)
        self.logger.info(f"Generated cloud texture {width}x{height} in {time.perf_counter() - start_time:.2f}s.")
        return texture

    def generate_ring_texture(self, params: PlanetParameters, width: int = None, height: int = None) -> np.ndarray:
        """uint8 RGBA ring texture; transparent outside the annulus."""
        start_time = time.perf_counter()
        width, height = self._texture_size('ring_texture_size', width, height)
        radius, angle = self.get_polar_grid(width, height)
        channels = self.ring_field(params, radius, angle)

        texture = np.stack([_round_channel(c) for c in channels], axis=-1).astype(np.uint8)
        self.logger.info(f"Generated ring texture {width}x{height} in {time.perf_counter() - start_time:.2f}s.")
        return texture

    def generate_moon_texture(self, params: PlanetParameters, width: int = None, height: int = None) -> np.ndarray:
        """Grayscale moon texture as uint8 RGB of shape (height, width, 3)."""
        start_time = time.perf_counter()
        width, height = self._texture_size('moon_texture_size', width, height)
        x, y, z = self.get_sphere_grid(width, height)
        gray = self._moon_gray(self.moon_field(params, x, y, z)).astype(np.uint8)

        texture = np.repeat(gray[..., np.newaxis], 3, axis=-1)
        self.logger.info(f"Generated moon texture {width}x{height} in {time.perf_counter() - start_time:.2f}s.")
        return texture
