# planet_generator/runtime/temporal.py

"""
================================================================================
TEMPORAL EVOLUTION ENGINE
================================================================================
This module advances a simulated clock and derives an "evolved" copy of a
planet's parameters for the current simulated moment: mountain building and
erosion, coastline smoothing, ocean level cycles, climatic drift, atmospheric
change and seasonal weather.

Data Contract:
---------------
- Inputs (on initialization):
    - base_parameters (PlanetParameters): The source of truth, never mutated.
    - config (dict): Optional overrides for the seed offsets and history size.
- Public Methods:
    - tick(delta_seconds, temporal_settings): Advances the clock while running.
    - get_evolved_parameters(temporal_settings): Evolved copy for the current time.
    - get_temporal_effects(temporal_settings): Boolean visual effect flags.
    - fast_forward / rewind / reset_time: Clock control.
    - save_snapshot / get_history / get_visualization_data: Display history.
- Side Effects: None beyond the clock and the snapshot history.
- Invariants: get_evolved_parameters is a pure function of the base
  parameters, the current time and the settings. Calling it twice without an
  intervening tick returns identical results. Every evolved ratio is clamped.
================================================================================
"""
import logging
import math
from collections import deque

from .. import config as DEFAULTS
from ..noise import NoiseGenerator
from ..parameters import EvolvedParameters, PlanetParameters, TemporalSettings, clamp
from .clock import SimulatedClock

logger = logging.getLogger(__name__)

# --- Evolution Rates (simulated years -> noise coordinate) ---
MOUNTAIN_CYCLE_RATE = 0.001
COASTLINE_CYCLE_RATE = 0.0005
OCEAN_CYCLE_RATE = 0.0008
CLIMATE_CYCLE_RATE = 0.0002
ATMOSPHERE_CYCLE_RATE = 0.0001
SEASONAL_CYCLE_RATE = 0.01
WEATHER_NOISE_RATE = 0.02

# --- Evolution Amplitudes ---
GEOLOGICAL_SCALE = 10.0
MOUNTAIN_CYCLE_AMPLITUDE = 0.3
EROSION_SMOOTHING = 0.4
COASTLINE_NOISE_AMPLITUDE = 0.2
OCEAN_CYCLE_AMPLITUDE = 0.3
CLIMATE_SHIFT_AMPLITUDE = 0.5
CLIMATE_SHIFT_OFFSET_SCALE = 5.0
ATMOSPHERE_EVOLUTION_AMPLITUDE = 0.4
ATMOSPHERE_EVOLUTION_OFFSET_SCALE = 3.0
SEASONAL_AMPLITUDE = 0.3
WEATHER_NOISE_AMPLITUDE = 0.4
WEATHER_NOISE_OFFSET_SCALE = 2.0
SEASONAL_ATMOSPHERE_FRACTION = 0.1

# --- Temporal Effects ---
# flag -> (noise rate, fixed noise offset, threshold)
EFFECT_THRESHOLDS = {
    "auroras": (0.03, 1.0, 0.7),
    "meteor_showers": (0.02, 2.0, 0.8),
    "solar_flares": (0.01, 3.0, 0.85),
    "lightning_storms": (0.05, 4.0, 0.6),
    "dust_storms": (0.04, 5.0, 0.7),
}
LIGHTNING_MIN_WEATHER_CYCLE = 0.5
DUST_STORM_MIN_WEATHER_CYCLE = 0.3
POLAR_ICE_MIN_GEOLOGICAL_TIME = 0.3
POLAR_ICE_MAX_CLIMATE = 0.6

# --- Display Labels ---
# (exclusive upper bound in years, epoch name). First match wins.
EPOCHS = [
    (1e3, "Present Era"),
    (1e4, "Recent Holocene"),
    (1e5, "Pleistocene"),
    (1e6, "Quaternary"),
    (1e7, "Neogene"),
    (1e8, "Paleogene"),
    (5e8, "Mesozoic"),
    (None, "Paleozoic"),
]


def _format_amount(value: float) -> str:
    """One decimal at most, without a trailing '.0'."""
    return f"{value:.1f}".rstrip("0").rstrip(".")


def time_description(time: float) -> str:
    """Buckets a simulated time into years, K years, M years or B years."""
    if time < 100:
        return f"{math.floor(time)} years"
    if time < 100_000:
        return f"{math.floor(time / 1_000)}K years"
    if time < 1_000_000:
        return f"{_format_amount(math.floor(time / 10_000) / 10)}M years"
    return f"{_format_amount(math.floor(time / 100_000_000) / 10)}B years"


def epoch_name(time: float) -> str:
    """Names the geological era for a simulated time."""
    for upper, name in EPOCHS:
        if upper is None or time < upper:
            return name
    return EPOCHS[-1][1]


class TemporalEvolution:
    """
    Owns the simulated clock for one planet and derives its evolved parameters.
    """

    def __init__(self, base_parameters: PlanetParameters, config: dict = None):
        self.user_config = config or {}
        self.settings = {
            'temporal_seed_offset': self.user_config.get('temporal_seed_offset', DEFAULTS.TEMPORAL_SEED_OFFSET),
            'temporal_weather_seed_offset': self.user_config.get('temporal_weather_seed_offset', DEFAULTS.TEMPORAL_WEATHER_SEED_OFFSET),
            'history_limit': self.user_config.get('temporal_history_limit', DEFAULTS.TEMPORAL_HISTORY_LIMIT),
            'visualization_samples': self.user_config.get('temporal_visualization_samples', DEFAULTS.TEMPORAL_VISUALIZATION_SAMPLES),
            'max_time_years': self.user_config.get('temporal_max_time_years', DEFAULTS.TEMPORAL_MAX_TIME_YEARS),
            'full_erosion_years': self.user_config.get('temporal_full_erosion_years', DEFAULTS.TEMPORAL_FULL_EROSION_YEARS),
        }

        self.base_parameters = base_parameters
        self.clock = SimulatedClock(time_scale=base_parameters.time_speed)

        seed = base_parameters.seed
        self._temporal_noise = NoiseGenerator(seed + self.settings['temporal_seed_offset'])
        self._weather_noise = NoiseGenerator(seed + self.settings['temporal_weather_seed_offset'])
        self._history = deque(maxlen=self.settings['history_limit'])

        logger.info(f"TemporalEvolution initialized for seed {seed}.")

    # --- Clock Control ---
    @property
    def current_time(self) -> float:
        return self.clock.current_time

    @property
    def is_paused(self) -> bool:
        return self.clock.is_paused

    def tick(self, delta_seconds: float, temporal_settings: TemporalSettings = None):
        """
        Advances the simulated clock by delta_seconds * time_speed while running.
        When settings are given, their speed and pause state are applied first.
        """
        if temporal_settings is not None:
            self.clock.set_speed(temporal_settings.time_speed)
            if temporal_settings.is_paused:
                self.clock.pause()
            else:
                self.clock.resume()
        self.clock.update(delta_seconds)

    def pause(self):
        self.clock.pause()

    def resume(self):
        self.clock.resume()

    def fast_forward(self, amount: float = DEFAULTS.FAST_FORWARD_YEARS):
        self.clock.fast_forward(amount)
        logger.info(f"Fast-forwarded {amount} years to {time_description(self.current_time)}.")

    def rewind(self, amount: float):
        self.clock.rewind(amount)

    def reset_time(self):
        """Back to year zero; the recorded history is discarded."""
        self.clock.reset()
        self._history.clear()
        logger.info("Temporal clock reset.")

    # --- Evolution ---
    def get_evolved_parameters(self, temporal_settings: TemporalSettings) -> EvolvedParameters:
        """
        Derives the parameters for the current simulated time. Mountains,
        coastline and ocean are each one perturbation of the base value; the
        seasonal atmosphere term is layered on top of the evolved atmosphere.
        """
        base = self.base_parameters
        time = self.current_time
        noise = self._temporal_noise.sample
        changes = {}

        if temporal_settings.geological_time > 0:
            geo_scale = temporal_settings.geological_time * GEOLOGICAL_SCALE

            mountain_cycle = noise(time * MOUNTAIN_CYCLE_RATE, 0, geo_scale) * MOUNTAIN_CYCLE_AMPLITUDE
            changes['mountain_density'] = clamp(
                base.mountain_density + mountain_cycle * temporal_settings.tectonic_activity
            )

            coastline_smoothing = temporal_settings.erosion_level ** 2 * EROSION_SMOOTHING
            changes['coastline_complexity'] = clamp(
                base.coastline_complexity - coastline_smoothing
                + noise(time * COASTLINE_CYCLE_RATE, geo_scale, 0) * COASTLINE_NOISE_AMPLITUDE
            )

            ocean_cycle = noise(time * OCEAN_CYCLE_RATE, geo_scale * 2, 0) * OCEAN_CYCLE_AMPLITUDE
            changes['land_water_ratio'] = clamp(
                base.land_water_ratio + ocean_cycle + temporal_settings.ocean_level
            )

        if temporal_settings.climatic_shift > 0:
            shift = temporal_settings.climatic_shift
            climate_noise = noise(time * CLIMATE_CYCLE_RATE, shift * CLIMATE_SHIFT_OFFSET_SCALE, 0)
            changes['climate'] = clamp(base.climate + climate_noise * shift * CLIMATE_SHIFT_AMPLITUDE)

        atmosphere = base.atmosphere
        if temporal_settings.atmospheric_evolution > 0:
            evolution = temporal_settings.atmospheric_evolution
            atmosphere_noise = noise(time * ATMOSPHERE_CYCLE_RATE, 0, evolution * ATMOSPHERE_EVOLUTION_OFFSET_SCALE)
            atmosphere = clamp(base.atmosphere + atmosphere_noise * evolution * ATMOSPHERE_EVOLUTION_AMPLITUDE)
            changes['atmosphere'] = atmosphere

        if temporal_settings.weather_cycle > 0:
            cycle = temporal_settings.weather_cycle
            seasonal_cycle = math.sin(time * SEASONAL_CYCLE_RATE * cycle) * SEASONAL_AMPLITUDE
            weather_noise = self._weather_noise.sample(
                time * WEATHER_NOISE_RATE, cycle * WEATHER_NOISE_OFFSET_SCALE, 0
            ) * WEATHER_NOISE_AMPLITUDE
            changes['clouds'] = clamp(base.clouds + seasonal_cycle + weather_noise * cycle)
            changes['atmosphere'] = clamp(atmosphere + seasonal_cycle * SEASONAL_ATMOSPHERE_FRACTION)

        return base.replace(**changes)

    def get_temporal_effects(self, temporal_settings: TemporalSettings) -> dict:
        """
        Per-frame visual effect flags. Auroras, meteor showers and solar flares
        follow show_temporal_effects; lightning and dust storms follow the
        weather cycle instead.
        """
        time = self.current_time
        show = temporal_settings.show_temporal_effects
        weather_cycle = temporal_settings.weather_cycle

        def triggered(flag):
            rate, offset, threshold = EFFECT_THRESHOLDS[flag]
            return self._weather_noise.sample(time * rate, offset, 0) > threshold

        return {
            "auroras": show and triggered("auroras"),
            "meteor_showers": show and triggered("meteor_showers"),
            "solar_flares": show and triggered("solar_flares"),
            "lightning_storms": weather_cycle > LIGHTNING_MIN_WEATHER_CYCLE and triggered("lightning_storms"),
            "dust_storms": weather_cycle > DUST_STORM_MIN_WEATHER_CYCLE and triggered("dust_storms"),
            "polar_ice_caps": (
                temporal_settings.geological_time > POLAR_ICE_MIN_GEOLOGICAL_TIME
                and self.base_parameters.climate < POLAR_ICE_MAX_CLIMATE
            ),
        }

    # --- Display ---
    def get_time_description(self) -> str:
        return time_description(self.current_time)

    def get_epoch_name(self) -> str:
        return epoch_name(self.current_time)

    def save_snapshot(self, temporal_settings: TemporalSettings = None):
        """
        Records the terrain and climate fields at the current time. With
        settings, the evolved values are recorded; otherwise the base values.
        The oldest entries are dropped beyond the history limit.
        """
        if temporal_settings is not None:
            source = self.get_evolved_parameters(temporal_settings)
        else:
            source = self.base_parameters
        self._history.append({
            "land_water_ratio": source.land_water_ratio,
            "mountain_density": source.mountain_density,
            "coastline_complexity": source.coastline_complexity,
            "climate": source.climate,
            "atmosphere": source.atmosphere,
            "clouds": source.clouds,
            "timestamp": self.current_time,
        })

    def get_history(self) -> list:
        return [dict(snapshot) for snapshot in self._history]

    def get_visualization_data(self) -> dict:
        """Progress bars and sampled history curves for a timeline display."""
        time = self.current_time
        base = self.base_parameters
        noise = self._temporal_noise.sample
        samples = self.settings['visualization_samples']

        climate_history = []
        mountain_history = []
        ocean_history = []
        for i in range(samples):
            historical_time = time * i / samples
            climate_history.append(base.climate + noise(historical_time * CLIMATE_CYCLE_RATE, 1, 0) * 0.3)
            mountain_history.append(base.mountain_density + noise(historical_time * MOUNTAIN_CYCLE_RATE, 2, 0) * 0.4)
            ocean_history.append(base.land_water_ratio + noise(historical_time * OCEAN_CYCLE_RATE, 3, 0) * 0.3)

        return {
            "time_progress": min(1.0, time / self.settings['max_time_years']),
            "erosion_progress": min(1.0, time / self.settings['full_erosion_years']),
            "climate_history": climate_history,
            "mountain_history": mountain_history,
            "ocean_history": ocean_history,
        }
