# planet_generator/parameters.py

"""
================================================================================
PLANET PARAMETERS
================================================================================
Immutable parameter snapshots handed to the generator by the control layer.

Data Contract:
---------------
- PlanetParameters: the base description of a planet. Every scalar is clamped
  into its declared range on construction, so downstream code never has to
  validate its input.
- TemporalSettings: the knobs that drive the temporal evolution engine.
- Side Effects: None. Both types are frozen; derive new values with
  `dataclasses.replace` or the `replace` helper.
================================================================================
"""
import re
from dataclasses import dataclass, fields, replace as dataclass_replace

from . import config as DEFAULTS

# --- Declared Ranges ---
# Fields not listed here are ratios in [0, 1].
PARAMETER_BOUNDS = {
    "ocean_level": (-0.5, 0.5),
    "time_speed": (0.1, 10.0),
}
# Fields that are not clamped at all.
UNBOUNDED_FIELDS = {"seed", "has_rings", "has_moon", "is_paused", "show_temporal_effects"}

_CAMEL_CASE_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clamps a scalar into [low, high]."""
    return min(high, max(low, value))


def _to_snake_case(key: str) -> str:
    return _CAMEL_CASE_BOUNDARY.sub("_", key).lower()


def _clamp_fields(instance):
    for f in fields(instance):
        if f.name in UNBOUNDED_FIELDS:
            continue
        low, high = PARAMETER_BOUNDS.get(f.name, (0.0, 1.0))
        # Frozen dataclass, so bypass __setattr__ while normalizing.
        object.__setattr__(instance, f.name, clamp(float(getattr(instance, f.name)), low, high))


def _from_dict(cls, data: dict):
    known = {f.name for f in fields(cls)}
    values = {}
    for key, value in data.items():
        name = _to_snake_case(key)
        if name in known:
            values[name] = value
    return cls(**values)


@dataclass(frozen=True)
class PlanetParameters:
    """The base parameter snapshot for one planet."""
    seed: float = DEFAULTS.DEFAULT_SEED
    land_water_ratio: float = 0.4
    coastline_complexity: float = 0.5
    mountain_density: float = 0.3
    climate: float = 0.5
    atmosphere: float = 0.4
    clouds: float = 0.6
    tectonic_activity: float = 0.5
    ocean_level: float = 0.0
    atmospheric_evolution: float = 0.0
    geological_time: float = 0.0
    weather_cycle: float = 0.0
    climatic_shift: float = 0.0
    erosion_level: float = 0.0
    time_speed: float = 1.0
    ring_density: float = 0.5
    moon_size: float = 0.3
    has_rings: bool = False
    has_moon: bool = False

    def __post_init__(self):
        _clamp_fields(self)

    @property
    def sea_level(self) -> float:
        """Height separating water from land, always derived from the current ratio."""
        return 1.0 - self.land_water_ratio

    @classmethod
    def from_dict(cls, data: dict) -> "PlanetParameters":
        """
        Builds parameters from a control-layer dictionary. Accepts camelCase or
        snake_case keys and ignores keys it does not know.
        """
        return _from_dict(cls, data)

    def replace(self, **changes) -> "PlanetParameters":
        return dataclass_replace(self, **changes)


# Evolved parameters are a time-dependent PlanetParameters, never the source of truth.
EvolvedParameters = PlanetParameters


@dataclass(frozen=True)
class TemporalSettings:
    """Controls for the temporal evolution engine and the weather simulator."""
    geological_time: float = 0.0
    weather_cycle: float = 0.0
    climatic_shift: float = 0.0
    erosion_level: float = 0.0
    time_speed: float = 1.0
    is_paused: bool = False
    show_temporal_effects: bool = True
    tectonic_activity: float = 0.5
    ocean_level: float = 0.0
    atmospheric_evolution: float = 0.0

    def __post_init__(self):
        _clamp_fields(self)

    @classmethod
    def from_dict(cls, data: dict) -> "TemporalSettings":
        return _from_dict(cls, data)

    @classmethod
    def from_parameters(cls, params: PlanetParameters, is_paused: bool = False,
                        show_temporal_effects: bool = True) -> "TemporalSettings":
        """Extracts the temporal knobs carried by a PlanetParameters snapshot."""
        return cls(
            geological_time=params.geological_time,
            weather_cycle=params.weather_cycle,
            climatic_shift=params.climatic_shift,
            erosion_level=params.erosion_level,
            time_speed=params.time_speed,
            is_paused=is_paused,
            show_temporal_effects=show_temporal_effects,
            tectonic_activity=params.tectonic_activity,
            ocean_level=params.ocean_level,
            atmospheric_evolution=params.atmospheric_evolution,
        )

    def replace(self, **changes) -> "TemporalSettings":
        return dataclass_replace(self, **changes)
