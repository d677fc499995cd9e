# planet_generator/runtime/__init__.py

# This file makes the 'runtime' directory a Python package and defines its public API.

from .planet import Planet
from .clock import SimulatedClock
from .temporal import TemporalEvolution, epoch_name, time_description
from .weather import StormSystem, WeatherSimulator

__all__ = [
    "Planet",
    "SimulatedClock",
    "TemporalEvolution",
    "epoch_name",
    "time_description",
    "StormSystem",
    "WeatherSimulator",
]
