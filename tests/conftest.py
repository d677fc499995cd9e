"""Shared fixtures for the planet generator tests."""

import numpy as np
import pytest

from planet_generator import PlanetGenerator, PlanetParameters


@pytest.fixture
def generator():
    return PlanetGenerator()


@pytest.fixture
def params():
    return PlanetParameters(seed=42, land_water_ratio=0.4, coastline_complexity=0.5, mountain_density=0.3)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
