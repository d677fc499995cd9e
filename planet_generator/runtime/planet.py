# planet_generator/runtime/planet.py

"""
================================================================================
PLANET RUNTIME
================================================================================
This module provides the user-facing `Planet` class, the single owner of all
simulation state for one planet. It composes the surface generator, the
temporal evolution engine and the weather simulator, and is driven once per
frame by an animation loop.

Data Contract:
---------------
- Inputs (on initialization):
    - parameters (PlanetParameters): The base snapshot. Never mutated.
    - config (dict): Optional overrides forwarded to every component.
    - rng (np.random.Generator): Optional randomness for weather and stats.
- Public Methods:
    - update(delta_seconds, temporal_settings): One frame of simulation.
    - effective_parameters(temporal_settings): Evolved or base parameters.
    - set_parameters(parameters): Replaces the base snapshot.
    - fast_forward(amount) / reset_time(): Clock controls.
    - regenerate_textures(temporal_settings): Texture buffers for the renderer.
    - status(): Overlay payload.
    - stats(temporal_settings): Descriptive planet statistics.
- Side Effects: Logs lifecycle events.
================================================================================
"""
import logging

import numpy as np

from .. import config as DEFAULTS
from ..generator import PlanetGenerator
from ..parameters import PlanetParameters, TemporalSettings
from ..stats import calculate_planet_stats
from .temporal import TemporalEvolution
from .weather import WeatherSimulator


class Planet:
    """
    The main runtime class for a planet. Handles time, evolution, weather and
    texture regeneration.
    """
    def __init__(self, parameters: PlanetParameters = None, config: dict = None,
                 rng: np.random.Generator = None):
        self.logger = logging.getLogger(__name__)
        self.config = config or {}
        self.rng = rng if rng is not None else np.random.default_rng()
        self.parameters = parameters if parameters is not None else PlanetParameters()

        # --- Core Components (Composition) ---
        self.generator = PlanetGenerator(self.config, logger=logging.getLogger("planet_generator.generator"))
        self.temporal = TemporalEvolution(self.parameters, self.config)
        self.weather = WeatherSimulator(self.parameters.seed, self.config, rng=self.rng)

        self.logger.info(f"Planet initialized with seed {self.parameters.seed}.")

    @property
    def has_rings(self) -> bool:
        return self.parameters.has_rings

    @property
    def has_moon(self) -> bool:
        return self.parameters.has_moon

    @property
    def current_time(self) -> float:
        return self.temporal.current_time

    def _settings(self, temporal_settings: TemporalSettings = None) -> TemporalSettings:
        if temporal_settings is None:
            return TemporalSettings.from_parameters(self.parameters)
        return temporal_settings

    def update(self, delta_seconds: float, temporal_settings: TemporalSettings = None):
        """
        Advances the planet by one frame. The weather only moves while the
        clock is running.

        Args:
            delta_seconds (float): The real time elapsed since the last frame.
            temporal_settings (TemporalSettings, optional): Current control knobs.
                Derived from the base parameters when omitted.
        """
        settings = self._settings(temporal_settings)
        self.temporal.tick(delta_seconds, settings)
        if not settings.is_paused:
            self.weather.update(delta_seconds, settings.time_speed)

    def effective_parameters(self, temporal_settings: TemporalSettings = None) -> PlanetParameters:
        """The parameters the renderer should use right now."""
        settings = self._settings(temporal_settings)
        if settings.geological_time > 0:
            return self.temporal.get_evolved_parameters(settings)
        return self.parameters

    def set_parameters(self, parameters: PlanetParameters):
        """
        Replaces the base snapshot. A new seed discards all simulation state;
        otherwise the simulated time carries over and storms are kept.
        """
        if parameters.seed != self.parameters.seed:
            self.logger.info(f"Seed changed from {self.parameters.seed} to {parameters.seed}. Rebuilding simulation.")
            self.parameters = parameters
            self.temporal = TemporalEvolution(parameters, self.config)
            self.weather = WeatherSimulator(parameters.seed, self.config, rng=self.rng)
            return

        current_time = self.temporal.current_time
        self.parameters = parameters
        self.temporal = TemporalEvolution(parameters, self.config)
        self.temporal.clock.fast_forward(current_time)
        self.logger.debug("Base parameters replaced; simulated time preserved.")

    def fast_forward(self, amount: float = DEFAULTS.FAST_FORWARD_YEARS):
        self.temporal.fast_forward(amount)

    def reset_time(self):
        """Resets the clock, the history and the weather together."""
        self.temporal.reset_time()
        self.weather.reset()

    def regenerate_textures(self, temporal_settings: TemporalSettings = None) -> dict:
        """
        Synthesizes fresh texture buffers from the effective parameters.

        Returns:
            dict: 'planet' and 'clouds' always; 'rings' and 'moon' when enabled.
        """
        params = self.effective_parameters(temporal_settings)
        textures = {
            "planet": self.generator.generate_planet_texture(params),
            "clouds": self.generator.generate_cloud_texture(params),
        }
        if params.has_rings:
            textures["rings"] = self.generator.generate_ring_texture(params)
        if params.has_moon:
            textures["moon"] = self.generator.generate_moon_texture(params)
        self.logger.info(f"Regenerated textures: {', '.join(textures)}.")
        return textures

    def status(self) -> dict:
        """Overlay payload for the status display."""
        weather_stats = self.weather.get_weather_stats()
        return {
            "time_description": self.temporal.get_time_description(),
            "epoch": self.temporal.get_epoch_name(),
            "active_storms": weather_stats["active_storms"],
            "average_cloud_cover": weather_stats["average_cloud_cover"],
            "global_wind_speed": weather_stats["global_wind_speed"],
        }

    def stats(self, temporal_settings: TemporalSettings = None) -> dict:
        return calculate_planet_stats(self.generator, self.effective_parameters(temporal_settings), rng=self.rng)
