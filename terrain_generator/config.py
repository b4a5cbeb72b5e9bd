# terrain_generator/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the terrain
generator. These values are used if they are not explicitly provided by the
user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC WORLD.
Instead, pass a configuration dictionary to the TerrainGenerator instance.
================================================================================
"""

# --- Noise Generation ---
# Offsets added to the world seed for each layer, so every layer gets its own
# permutation table while staying reproducible from the single world seed.
CONTINENT_SEED_OFFSET = 0
HEIGHT_SEED_OFFSET = 10000
MOISTURE_SEED_OFFSET = 20000
DETAIL_SEED_OFFSET = 30000
RIVER_SEED_OFFSET = 40000
LAKE_SEED_OFFSET = 50000
LAVA_SEED_OFFSET = 60000

# Linear congruential generator used to shuffle the permutation tables.
# (Numerical Recipes constants, modulus 2**32.)
LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS_MASK = 0xFFFFFFFF

# --- Sea Level ---
# Normalized height below which a tile is standing water.
WATER_LEVEL = 0.32

# --- Cache & Chunks ---
DEFAULT_INITIAL_CACHE_SIZE = 1500
CHUNK_SIZE = 20
# The budget is the visible area times this factor, so panning by a little
# does not immediately evict what was just on screen.
CACHE_BUFFER_FACTOR = 1.5
# The budget never drops below this many full chunks.
MIN_CACHE_CHUNKS = 4

# --- Layer Options ---
# Each dictionary is one option group. A user config may override any key of
# any group, e.g. {"river": {"river_density": 1.2}}.

CONTINENT_OPTIONS = {
    "scale": 0.0006,
    "threshold": 0.47,
    "edge_scale": 0.002,
    "edge_amount": 0.3,
    "sharpness": 12.0,
}

HEIGHT_OPTIONS = {
    "scale": 0.004,
    "octaves": 4,
    "persistence": 0.55,
    "lacunarity": 2.0,
    "continent_influence": 0.65,
    # Low-frequency regional layer, adds asymmetric variance between regions.
    "regional_scale": 0.0015,
    "regional_influence": 0.2,
    # Ridged layer that raises mountain ranges where it crosses the threshold.
    "mountain_scale": 0.003,
    "mountain_octaves": 4,
    "mountain_threshold": 0.7,
    "mountain_strength": 0.35,
    "height_bias": 0.05,
    "peak_exponent": 1.15,
    # Fine jitter from the detail layer, +/- detail_amplitude / 2.
    "detail_scale": 0.04,
    "detail_octaves": 2,
    "detail_amplitude": 0.08,
}

MOISTURE_OPTIONS = {
    "scale": 0.006,
    "octaves": 3,
    "persistence": 0.5,
    "lacunarity": 2.0,
    "region_scale": 0.0015,
    "moisture_influence": 0.4,
    "water_radius": 7,
    # Water this far below sea level counts as "large" water.
    "large_water_depth": 0.1,
    "large_water_multiplier": 1.5,
    # Fraction of the maximum possible neighbourhood weight that saturates
    # the proximity boost.
    "water_saturation": 0.4,
    "water_boost": 0.35,
    # Fixed upwind direction (dx, dy). Identical for every seed.
    "rain_shadow_direction": (-1, 0),
    "rain_shadow_distance": 12,
    "rain_shadow_step": 2,
    "rain_shadow_strength": 2.0,
    "rain_shadow_floor": 0.4,
    "moisture_contrast": 1.3,
}

RIVER_OPTIONS = {
    "scale": 0.0025,
    "octaves": 3,
    "lacunarity": 2.2,
    "snowline": 0.95,
    # Weight of the valley term, 1 - ridged channel noise.
    "ridge_sharpness": 2.2,
    "river_density": 1.6,
    "river_threshold": 1.5,
    "river_width": 1.2,
    "flow_directionality": 0.85,
    # Gradient magnitude 1 / flow_sensitivity counts as fully flowing.
    "flow_sensitivity": 40.0,
    "arterial_scale": 0.001,
    "arterial_threshold": 0.62,
    "arterial_channel": 0.5,
    "arterial_bonus": 0.3,
    "branch_scale": 0.008,
    "branch_threshold": 0.7,
    "mountain_source_height": 0.82,
    "mountain_source_gradient": 0.025,
    "flat_gradient": 0.002,
    "weak_channel": 0.3,
    # Height above sea level past which a river must have somewhere lower to go.
    "uphill_margin": 0.05,
    "water_radius": 4,
    "ocean_depth": 0.08,
    "ocean_pull": 1.5,
    "water_network_saturation": 6.0,
    "water_relaxation": 0.1,
    "mountain_relaxation": 0.1,
    # River values below this band are streams and get thinned.
    "stream_band": 0.4,
}

LAKE_OPTIONS = {
    "scale": 0.0015,
    "shape_scale": 0.003,
    "lake_threshold": 0.5,
    "lake_rescale": 4.0,
    "min_height": 0.35,
    "max_height": 0.65,
    "min_river_influence": 0.25,
    "on_river": 0.3,
    "lake_smoothness": 0.7,
    "pond_scale": 0.02,
    "pond_threshold": 0.72,
    "pond_rescale": 3.0,
    "pond_min_height": 0.5,
    "pond_max_height": 0.68,
    "pond_cap": 0.6,
    "pond_river_radius": 2,
    "pond_river_limit": 0.05,
}

CAPILLARY_OPTIONS = {
    "scale": 0.03,
    "network_scale": 0.008,
    "water_radius": 5,
    "min_height_above_water": 0.02,
    "max_height": 0.85,
    "threshold": 0.6,
    "rescale": 0.05,
    "cap": 0.02,
    # Evaluated only when both river and lake values are below this gate.
    "gate": 0.05,
}

LAVA_OPTIONS = {
    "scale": 0.002,
    "lava_threshold": 0.66,
    "min_height": 0.75,
    "lava_concentration": 0.7,
    "flow_intensity": 0.9,
}

SCORCHED_OPTIONS = {
    "scale": 0.01,
    "river_limit": 0.1,
    "lake_limit": 0.1,
    "min_height": 0.7,
    "noise_threshold": 0.7,
    "scorched_frequency": 0.6,
}

CLIFF_OPTIONS = {
    "cliff_slope": 0.06,
    "high_cliff_slope": 0.1,
    "high_cliff_height": 0.6,
}

# --- Rarity ---
RARITY_OPTIONS = {
    "height_weight": 12.0,
    "moisture_weight": 10.0,
    "extremity_exponent": 2.5,
    "slope_baseline": 0.08,
    "slope_weight": 100.0,
    "lava_weight": 10.0,
    "scorched_weight": 6.0,
    "cliff_bonus": 4.0,
}

# Ordered from least to most rare; a score at or above a threshold earns the
# tier. The first tier has no threshold.
RARITY_TIERS = ("common", "uncommon", "rare", "epic", "legendary", "mythic")
RARITY_THRESHOLDS = (4.0, 8.0, 13.0, 18.0, 25.0)

OPTION_GROUPS = {
    "continent": CONTINENT_OPTIONS,
    "height": HEIGHT_OPTIONS,
    "moisture": MOISTURE_OPTIONS,
    "river": RIVER_OPTIONS,
    "lake": LAKE_OPTIONS,
    "capillary": CAPILLARY_OPTIONS,
    "lava": LAVA_OPTIONS,
    "scorched": SCORCHED_OPTIONS,
    "cliff": CLIFF_OPTIONS,
    "rarity": RARITY_OPTIONS,
}
