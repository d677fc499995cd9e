# planet_generator/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the planet
generator. These values are used if they are not explicitly provided by the
caller's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC PLANET.
Instead, pass a configuration dictionary to the component that needs it.
================================================================================
"""

# --- Noise Generation ---
DEFAULT_SEED = 1337
# Offsets added to the master seed so each channel gets its own permutation
# table. Deterministic, and far enough apart that channels are uncorrelated.
CLOUD_SEED_OFFSET = 1000
RING_SEED_OFFSET = 2000
MOON_SEED_OFFSET = 3000
TEMPORAL_SEED_OFFSET = 50000
TEMPORAL_WEATHER_SEED_OFFSET = 60000
WEATHER_SEED_OFFSET = 70000

# Size of the Perlin permutation table before it is doubled.
PERMUTATION_TABLE_SIZE = 256

# --- Terrain Octaves ---
# (driving knob, frequency multiplier, frequency base, weight, weight scaled by knob)
# Octave frequency is knob * multiplier + base. The first two octaves follow
# coastline complexity; the last two follow mountain density, and their weight
# is scaled by it as well so flat planets lose their high-frequency relief.
TERRAIN_OCTAVES = [
    ("coastline_complexity", 4.0, 1.0, 0.4, False),
    ("coastline_complexity", 8.0, 2.0, 0.25, False),
    ("mountain_density", 16.0, 4.0, 0.15, True),
    ("mountain_density", 32.0, 8.0, 0.1, True),
]

# --- Clouds ---
CLOUD_OCTAVE_FREQUENCIES = [3.0, 6.0, 12.0, 24.0]
CLOUD_OCTAVE_WEIGHTS = [0.5, 0.25, 0.125, 0.0625]
CLOUD_DENSITY_BIAS = 0.3
CLOUD_DENSITY_GAIN = 1.5

# --- Rings ---
# Normalized radii of the visible annulus. Everything outside is transparent.
RING_INNER_RADIUS = 0.4
RING_OUTER_RADIUS = 0.9
RING_ANGULAR_FREQUENCY = 10.0
RING_RADIAL_FREQUENCY = 20.0
RING_COLD_TINT = (150, 130, 100)
RING_WARM_TINT = (180, 160, 140)
# Climate at or above which the warm tint is used.
RING_TINT_CLIMATE_SPLIT = 0.5

# --- Moon ---
MOON_OCTAVE_FREQUENCIES = [4.0, 8.0, 16.0]
MOON_OCTAVE_WEIGHTS = [0.5, 0.25, 0.125]
MOON_MIN_BRIGHTNESS = 0.3
MOON_BRIGHTNESS_RANGE = 0.4

# --- Texture Resolutions (width, height) ---
# These are only defaults for the full-texture helpers; the sampling functions
# are resolution independent.
PLANET_TEXTURE_SIZE = (1024, 512)
CLOUD_TEXTURE_SIZE = (1024, 512)
RING_TEXTURE_SIZE = (512, 512)
MOON_TEXTURE_SIZE = (256, 128)

# --- Palette Height Bands ---
# Offsets above sea level at which each land band ends. The water bands are
# defined relative to sea level itself (DEEP_OCEAN_FRACTION * sea_level).
DEEP_OCEAN_FRACTION = 0.7
BEACH_BAND_TOP = 0.05
LOWLAND_BAND_TOP = 0.3
HIGHLAND_BAND_TOP = 0.5
MOUNTAIN_BAND_TOP = 0.7
PEAK_BAND_TOP = 0.9

# --- Temporal Evolution ---
TEMPORAL_HISTORY_LIMIT = 100
TEMPORAL_VISUALIZATION_SAMPLES = 50
# Simulated years after which the visualization progress bars saturate.
TEMPORAL_MAX_TIME_YEARS = 1_000_000_000
TEMPORAL_FULL_EROSION_YEARS = 100_000_000
# Default jump used by the fast-forward control.
FAST_FORWARD_YEARS = 1_000_000

# --- Weather ---
WIND_LATTICE_STEP_DEGREES = 10
TEMPERATURE_LATTICE_STEP_DEGREES = 5
CORIOLIS_STRENGTH = 0.8
TRADE_WIND_STRENGTH = 0.6
# Probability, per update, that a single new storm is spawned.
STORM_SPAWN_PROBABILITY = 0.02
# Storms fade out and are removed below this intensity.
STORM_INTENSITY_FLOOR = 0.1
# Fraction of a storm's lifespan spent growing, and at which it starts decaying.
STORM_GROWTH_FRACTION = 0.2
STORM_DECAY_START_FRACTION = 0.8
# Distance a storm drifts per second of real time along the local wind.
STORM_DRIFT_RATE = 0.01
STORM_TYPES = ("thunderstorm", "cyclone", "dust", "aurora")
# Spawn volume: x and y in [-1, 1], z around the planet shell.
STORM_SPAWN_ALTITUDE = 1.6
STORM_SPAWN_ALTITUDE_JITTER = 0.2
DUST_STORM_ALTITUDE = 1.55
AURORA_ALTITUDE = 2.0
AURORA_POLE_OFFSET = 1.2
# Number of random surface points used for the ambient weather summary.
WEATHER_STATS_SAMPLES = 100
WEATHER_STATS_RADIUS = 1.6

# --- Planet Statistics ---
PLANET_STATS_SAMPLES = 1000
