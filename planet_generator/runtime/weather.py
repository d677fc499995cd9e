# planet_generator/runtime/weather.py

"""
================================================================================
WEATHER AND STORM SIMULATOR
================================================================================
Maintains a population of transient storm systems around the planet and
answers point queries for ambient weather. A global wind lattice and a
temperature lattice are computed once at construction and only read after.

Data Contract:
---------------
- Inputs (on initialization):
    - seed (int): Master planet seed. Weather noise uses its own offset channel.
    - config (dict): Optional overrides for spawn and lifecycle constants.
    - rng (np.random.Generator): Optional source of randomness for spawns and
      statistics. Defaults to an unseeded generator.
- Public Methods:
    - update(delta_seconds, time_speed): Ages, moves, fades and spawns storms.
    - spawn_storm(storm_type): Adds a single storm immediately.
    - sample_weather(position): Weather reading at a 3D point.
    - temperature_at(position): Nearest temperature lattice cell.
    - get_active_storms(): Snapshot copy of the live storms.
    - get_weather_stats(): Randomized summary for a status panel.
    - reset(): Clears storms and the internal clock.
- Invariants: Every storm is removed once its age reaches its lifespan. All
  weather sample channels except pressure lie in [0, 1].
================================================================================
"""
import dataclasses
import itertools
import logging
import math

import numpy as np

from .. import config as DEFAULTS
from ..noise import NoiseGenerator
from ..parameters import clamp

logger = logging.getLogger(__name__)

# --- Weather Sampling Channels ---
# (spatial frequency, time advection rate, z offset)
CLOUD_CHANNEL = (3.0, 0.01, 0.0)
STORM_CHANNEL = (8.0, 0.02, 1.0)
WIND_CHANNEL = (5.0, 0.015, 2.0)

FALLBACK_TEMPERATURE = 0.5
FALLBACK_DIRECTION = np.array([1.0, 0.0, 0.0])


@dataclasses.dataclass
class StormSystem:
    """A single transient storm. Intensity follows a lifecycle envelope of peak_intensity."""
    id: int
    position: tuple
    radius: float
    peak_intensity: float
    storm_type: str
    lifespan: float
    intensity: float = 0.0
    rotation: float = 0.0
    age: float = 0.0


def _normalize(vector: np.ndarray) -> np.ndarray:
    length = float(np.linalg.norm(vector))
    if length == 0.0 or not math.isfinite(length):
        return FALLBACK_DIRECTION.copy()
    return vector / length


def lifecycle_envelope(age: float, lifespan: float,
                       growth_fraction: float = DEFAULTS.STORM_GROWTH_FRACTION,
                       decay_start_fraction: float = DEFAULTS.STORM_DECAY_START_FRACTION) -> float:
    """
    Linear ramp up to 1 over the growth phase, flat until decay starts, then a
    linear ramp back down to 0 at the end of the lifespan.
    """
    if lifespan <= 0:
        return 0.0
    growth_end = lifespan * growth_fraction
    decay_start = lifespan * decay_start_fraction
    if age < growth_end:
        return age / growth_end
    if age > decay_start:
        decay_span = lifespan - decay_start
        # No decay phase: the storm simply ends at its lifespan.
        if decay_span <= 0:
            return 0.0
        return max(0.0, (lifespan - age) / decay_span)
    return 1.0


class WeatherSimulator:
    """
    Simulates the storm population and ambient weather for one planet seed.
    """

    def __init__(self, seed: int, config: dict = None, rng: np.random.Generator = None):
        self.user_config = config or {}
        self.settings = {
            'seed_offset': self.user_config.get('weather_seed_offset', DEFAULTS.WEATHER_SEED_OFFSET),
            'wind_step': self.user_config.get('wind_lattice_step_degrees', DEFAULTS.WIND_LATTICE_STEP_DEGREES),
            'temperature_step': self.user_config.get('temperature_lattice_step_degrees', DEFAULTS.TEMPERATURE_LATTICE_STEP_DEGREES),
            'coriolis_strength': self.user_config.get('coriolis_strength', DEFAULTS.CORIOLIS_STRENGTH),
            'trade_wind_strength': self.user_config.get('trade_wind_strength', DEFAULTS.TRADE_WIND_STRENGTH),
            'spawn_probability': self.user_config.get('storm_spawn_probability', DEFAULTS.STORM_SPAWN_PROBABILITY),
            'intensity_floor': self.user_config.get('storm_intensity_floor', DEFAULTS.STORM_INTENSITY_FLOOR),
            'growth_fraction': self.user_config.get('storm_growth_fraction', DEFAULTS.STORM_GROWTH_FRACTION),
            'decay_start_fraction': self.user_config.get('storm_decay_start_fraction', DEFAULTS.STORM_DECAY_START_FRACTION),
            'drift_rate': self.user_config.get('storm_drift_rate', DEFAULTS.STORM_DRIFT_RATE),
            'stats_samples': self.user_config.get('weather_stats_samples', DEFAULTS.WEATHER_STATS_SAMPLES),
            'stats_radius': self.user_config.get('weather_stats_radius', DEFAULTS.WEATHER_STATS_RADIUS),
        }

        self.seed = seed
        self.rng = rng if rng is not None else np.random.default_rng()
        self.noise = NoiseGenerator(seed + self.settings['seed_offset'])
        self.current_time = 0.0
        self._storms = []
        self._storm_ids = itertools.count()

        self.wind_field = self._build_wind_field()
        self.temperature_map = self._build_temperature_map()

        logger.info(f"WeatherSimulator initialized for seed {seed}. "
                    f"Wind lattice {self.wind_field.shape[:2]}, temperature lattice {self.temperature_map.shape}.")

    # --- Lattices ---
    def _build_wind_field(self) -> np.ndarray:
        """Normalized wind direction per (latitude, longitude) bucket, latitude -90..90."""
        step = self.settings['wind_step']
        latitudes = range(-90, 91, step)
        longitudes = range(-180, 181, step)
        field = np.zeros((len(latitudes), len(longitudes), 3))

        for i, lat in enumerate(latitudes):
            lat_rad = math.radians(lat)
            coriolis = math.sin(lat_rad) * self.settings['coriolis_strength']
            trade_winds = math.cos(lat_rad * 3) * self.settings['trade_wind_strength']
            for j, lon in enumerate(longitudes):
                vector = np.array([
                    trade_winds + self.noise.sample(lon * 0.01, lat * 0.01, 0) * 0.4,
                    coriolis,
                    self.noise.sample(lon * 0.02, lat * 0.02, 1) * 0.3,
                ])
                field[i, j] = _normalize(vector)
        return field

    def _build_temperature_map(self) -> np.ndarray:
        """Temperature in [0, 1] per cell, indexed by latitude 0..180 and longitude 0..360."""
        step = self.settings['temperature_step']
        latitudes = range(0, 180, step)
        longitudes = range(0, 360, step)
        temperatures = np.zeros((len(latitudes), len(longitudes)))

        for i, lat in enumerate(latitudes):
            lat_norm = (lat - 90) / 90
            base_temperature = math.cos(lat_norm * math.pi * 0.5)
            for j, lon in enumerate(longitudes):
                variation = self.noise.sample(lon * 0.02, lat * 0.02, 2) * 0.3
                temperatures[i, j] = clamp(base_temperature + variation)
        return temperatures

    @staticmethod
    def _lat_lon(position) -> tuple:
        """Latitude in [-90, 90] and longitude in [-180, 180] of a direction."""
        x, y, z = _normalize(np.asarray(position, dtype=np.float64))
        lat = math.degrees(math.asin(min(1.0, max(-1.0, y))))
        lon = math.degrees(math.atan2(z, x))
        return lat, lon

    def wind_at(self, position) -> np.ndarray:
        """Wind direction of the lattice bucket containing a position."""
        lat, lon = self._lat_lon(position)
        step = self.settings['wind_step']
        rows, cols = self.wind_field.shape[:2]
        i = min(rows - 1, max(0, int(round((lat + 90) / step))))
        j = min(cols - 1, max(0, int(round((lon + 180) / step))))
        return self.wind_field[i, j]

    def temperature_at(self, position) -> float:
        """
        Looks up the temperature cell for a position. The position is
        normalized first; a lookup outside the lattice yields 0.5.
        """
        lat, lon = self._lat_lon(position)
        step = self.settings['temperature_step']
        lat_index = int((lat + 90) // step)
        lon_index = int((lon + 180) // step)
        rows, cols = self.temperature_map.shape
        if 0 <= lat_index < rows and 0 <= lon_index < cols:
            return float(self.temperature_map[lat_index, lon_index])
        return FALLBACK_TEMPERATURE

    # --- Simulation ---
    def update(self, delta_seconds: float, time_speed: float = 1.0):
        """
        Advances every storm by one frame and rolls for a new one.

        Args:
            delta_seconds (float): Real time elapsed since the last frame.
            time_speed (float): Multiplier applied to ageing and rotation.
        """
        scaled_delta = delta_seconds * time_speed
        self.current_time += scaled_delta

        growth_fraction = self.settings['growth_fraction']
        survivors = []
        for storm in self._storms:
            storm.age += scaled_delta
            storm.rotation += scaled_delta * storm.intensity

            wind = self.wind_at(storm.position)
            drift = wind * delta_seconds * self.settings['drift_rate']
            storm.position = tuple(float(c) for c in np.asarray(storm.position) + drift)

            envelope = lifecycle_envelope(storm.age, storm.lifespan, growth_fraction,
                                          self.settings['decay_start_fraction'])
            storm.intensity = storm.peak_intensity * envelope

            if storm.age >= storm.lifespan:
                logger.debug(f"Storm {storm.id} ({storm.storm_type}) expired.")
                continue
            if storm.age >= storm.lifespan * growth_fraction and storm.intensity < self.settings['intensity_floor']:
                logger.debug(f"Storm {storm.id} ({storm.storm_type}) dissipated.")
                continue
            survivors.append(storm)
        self._storms = survivors

        if self.rng.random() < self.settings['spawn_probability']:
            self.spawn_storm()

    def spawn_storm(self, storm_type: str = None) -> StormSystem:
        """
        Creates one storm at a random position around the planet. The type is
        chosen uniformly unless given.

        Raises:
            ValueError: If storm_type is not a known storm type.
        """
        if storm_type is None:
            storm_type = DEFAULTS.STORM_TYPES[int(self.rng.integers(len(DEFAULTS.STORM_TYPES)))]
        elif storm_type not in DEFAULTS.STORM_TYPES:
            raise ValueError(f"Unknown storm type '{storm_type}'. Expected one of {DEFAULTS.STORM_TYPES}.")

        r = self.rng.random(7)
        x = (r[0] - 0.5) * 2
        y = (r[1] - 0.5) * 2
        z = (r[2] - 0.5) * DEFAULTS.STORM_SPAWN_ALTITUDE_JITTER + DEFAULTS.STORM_SPAWN_ALTITUDE
        radius = 0.1 + r[3] * 0.3
        intensity = 0.5 + r[4] * 0.5
        lifespan = 50 + r[5] * 200

        if storm_type == "cyclone":
            radius *= 1.5
            lifespan *= 2
            intensity = min(1.0, intensity * 1.2)
        elif storm_type == "dust":
            radius *= 2
            intensity *= 0.8
            z = DEFAULTS.DUST_STORM_ALTITUDE
        elif storm_type == "aurora":
            radius *= 0.5
            z = DEFAULTS.AURORA_ALTITUDE
            x = DEFAULTS.AURORA_POLE_OFFSET if r[6] > 0.5 else -DEFAULTS.AURORA_POLE_OFFSET

        storm = StormSystem(
            id=next(self._storm_ids),
            position=(float(x), float(y), float(z)),
            radius=float(radius),
            peak_intensity=float(intensity),
            storm_type=storm_type,
            lifespan=float(lifespan),
        )
        self._storms.append(storm)
        logger.debug(f"Spawned {storm_type} storm {storm.id} lasting {storm.lifespan:.1f}.")
        return storm

    # --- Queries ---
    def _storm_influence(self, point: np.ndarray) -> float:
        influence = 0.0
        for storm in self._storms:
            distance = float(np.linalg.norm(point - np.asarray(storm.position)))
            if distance < storm.radius:
                influence = max(influence, (1 - distance / storm.radius) * storm.intensity)
        return influence

    def _channel(self, point: np.ndarray, channel: tuple) -> float:
        frequency, rate, z_offset = channel
        advection = self.current_time * rate
        return self.noise.sample(
            point[0] * frequency + advection,
            point[1] * frequency + advection,
            point[2] * frequency + z_offset,
        )

    def sample_weather(self, position) -> dict:
        """
        Weather reading at a point: three time-advected noise channels plus the
        strongest nearby storm. Pressure is the only unclamped channel.
        """
        point = np.asarray(position, dtype=np.float64)
        cloud_noise = self._channel(point, CLOUD_CHANNEL)
        storm_noise = self._channel(point, STORM_CHANNEL)
        wind_noise = self._channel(point, WIND_CHANNEL)
        influence = self._storm_influence(point)

        return {
            "cloud_density": clamp((cloud_noise + 1) / 2 + influence * 0.3),
            "storm_intensity": clamp((storm_noise + 1) / 2 + influence),
            "wind_speed": clamp((wind_noise + 1) / 2 + influence * 0.4),
            "precipitation": clamp(influence * 0.8 + (cloud_noise + 1) / 4),
            "temperature": self.temperature_at(point),
            "pressure": 0.5 + (cloud_noise + storm_noise) * 0.25 + influence * 0.2,
        }

    def get_active_storms(self) -> list:
        return [dataclasses.replace(storm) for storm in self._storms]

    def get_weather_stats(self) -> dict:
        """
        Randomized summary over points on the weather shell. Not deterministic
        across calls.
        """
        samples = self.settings['stats_samples']
        radius = self.settings['stats_radius']
        total_cloud_cover = 0.0
        total_wind_speed = 0.0
        min_temperature, max_temperature = 1.0, 0.0

        for _ in range(samples):
            direction = np.array([
                (self.rng.random() - 0.5) * 2,
                (self.rng.random() - 0.5) * 2,
                radius,
            ])
            weather = self.sample_weather(_normalize(direction) * radius)
            total_cloud_cover += weather["cloud_density"]
            total_wind_speed += weather["wind_speed"]
            min_temperature = min(min_temperature, weather["temperature"])
            max_temperature = max(max_temperature, weather["temperature"])

        return {
            "active_storms": len(self._storms),
            "average_cloud_cover": total_cloud_cover / samples,
            "global_wind_speed": total_wind_speed / samples,
            "temperature_range": (min_temperature, max_temperature),
        }

    def reset(self):
        """Clears all storms and the clock. The lattices are kept."""
        self._storms = []
        self.current_time = 0.0
        logger.info("Weather reset.")
