# terrain_generator/generator.py

"""
================================================================================
CORE TERRAIN GENERATOR
================================================================================
This module contains the TerrainGenerator class, which owns one NoiseField per
layer, wires the layer pipeline together and serves fully computed tiles from
a bounded cache.

Data Contract:
---------------
- Inputs (on initialization):
    - world_seed (int): Required. Every layer derives its own seed from it by
      adding a fixed offset.
    - initial_cache_size (int): Tile budget until update_cache_size is called.
    - config (dict, optional): Option-group overrides, e.g.
      {"river": {"river_density": 1.2}, "water_level": 0.3}.
    - logger (logging.Logger, optional): Logger for runtime messages.
- Outputs (from methods):
    - get_terrain_data(x, y) -> TileResult.
- Side Effects: Mutates the tile cache. Logs messages using the logger.
- Invariants: Given the same seed and configuration, the output is
  deterministic for every coordinate, with or without cache clears.
================================================================================
"""

import logging
import numbers

from . import config as DEFAULTS
from .biomes import BiomeClassifier
from .cache import TerrainCache
from .fields import ContinentField, HeightField, MoistureField, classify_cliff, measure_slope
from .hydrology import HydrologyNetwork
from .noise import NoiseField
from .tile import TileResult
from .volcanic import VolcanicField

LAYER_SEED_OFFSETS = {
    "continent": DEFAULTS.CONTINENT_SEED_OFFSET,
    "height": DEFAULTS.HEIGHT_SEED_OFFSET,
    "moisture": DEFAULTS.MOISTURE_SEED_OFFSET,
    "detail": DEFAULTS.DETAIL_SEED_OFFSET,
    "river": DEFAULTS.RIVER_SEED_OFFSET,
    "lake": DEFAULTS.LAKE_SEED_OFFSET,
    "lava": DEFAULTS.LAVA_SEED_OFFSET,
}


def merge_settings(user_config: dict = None) -> dict:
    """
    Merges a user configuration over the defaults in config.py.

    Raises:
        ValueError: If the configuration names an unknown option group or an
            unknown option inside a group.
    """
    user_config = user_config or {}
    settings = {
        "water_level": user_config.get("water_level", DEFAULTS.WATER_LEVEL),
    }
    for group, defaults in DEFAULTS.OPTION_GROUPS.items():
        overrides = user_config.get(group, {})
        unknown = set(overrides) - set(defaults)
        if unknown:
            raise ValueError(f"Unknown option(s) in '{group}' config: {', '.join(sorted(unknown))}")
        settings[group] = {**defaults, **overrides}

    unknown_groups = set(user_config) - set(settings)
    if unknown_groups:
        raise ValueError(f"Unknown config key(s): {', '.join(sorted(unknown_groups))}")
    return settings


class _TileSampler:
    """
    HeightSource and WaterSource for a single tile computation.

    Neighbour heights and river values are pure, so they are memoized here for
    the duration of one tile. The sampler never reads or writes the tile cache.
    """

    def __init__(self, generator: "TerrainGenerator"):
        self._height_field = generator.height_field
        self._hydrology = generator.hydrology
        self._heights = {}
        self._rivers = {}

    def height_at(self, x: int, y: int) -> float:
        key = (x, y)
        height = self._heights.get(key)
        if height is None:
            height = self._height_field.height_at(x, y)
            self._heights[key] = height
        return height

    def river_value(self, x: int, y: int) -> float:
        key = (x, y)
        river = self._rivers.get(key)
        if river is None:
            river = self._hydrology.river_value(x, y, self)
            self._rivers[key] = river
        return river


class TerrainGenerator:
    """
    Generates terrain tiles for an infinite, seeded world.
    Callers own their instance; there is no module-level generator.
    """

    def __init__(
        self, world_seed: int, initial_cache_size: int = DEFAULTS.DEFAULT_INITIAL_CACHE_SIZE,
        config: dict = None, logger: logging.Logger = None
    ):
        """
        Initializes the terrain generator.

        Args:
            world_seed (int): The world seed. Must be supplied explicitly.
            initial_cache_size (int): Starting tile budget for the cache.
            config (dict, optional): Option-group overrides.
            logger (logging.Logger, optional): The logger for all output.

        Raises:
            ValueError: If world_seed is None or the config has unknown keys.
            TypeError: If world_seed is not an integer.
        """
        if world_seed is None:
            raise ValueError("A world seed is required to generate terrain.")
        if isinstance(world_seed, bool) or not isinstance(world_seed, numbers.Integral):
            raise TypeError(f"World seed must be an integer, got {type(world_seed).__name__}")

        self.logger = logger or logging.getLogger(__name__)
        self.logger.info("TerrainGenerator initializing...")

        # --- Consolidate Configuration ---
        self.settings = merge_settings(config)
        self.seed = int(world_seed)
        water_level = self.settings["water_level"]

        # --- Initialize Noise ---
        self.layer_seeds = {layer: self.seed + offset for layer, offset in LAYER_SEED_OFFSETS.items()}
        for layer, layer_seed in self.layer_seeds.items():
            self.logger.debug(f"Layer '{layer}' seeded with {layer_seed}")

        self.continent_noise = NoiseField(self.layer_seeds["continent"])
        self.height_noise = NoiseField(self.layer_seeds["height"])
        self.moisture_noise = NoiseField(self.layer_seeds["moisture"])
        self.detail_noise = NoiseField(self.layer_seeds["detail"])
        self.river_noise = NoiseField(self.layer_seeds["river"])
        self.lake_noise = NoiseField(self.layer_seeds["lake"])
        self.lava_noise = NoiseField(self.layer_seeds["lava"])

        # --- Wire the Layer Pipeline ---
        self.continent_field = ContinentField(self.continent_noise, self.settings["continent"])
        self.height_field = HeightField(
            self.continent_field, self.height_noise, self.detail_noise, self.settings["height"]
        )
        self.moisture_field = MoistureField(self.moisture_noise, self.settings["moisture"], water_level)
        self.hydrology = HydrologyNetwork(
            self.river_noise, self.lake_noise,
            self.settings["river"], self.settings["lake"], self.settings["capillary"],
            water_level
        )
        self.volcanic = VolcanicField(
            self.lava_noise, self.settings["lava"], self.settings["scorched"], water_level
        )
        self.classifier = BiomeClassifier(water_level, self.settings["rarity"])

        self.cache = TerrainCache(initial_cache_size)

        self.logger.info(
            f"TerrainGenerator initialized with seed: {self.seed} "
            f"(cache budget: {self.cache.max_size} tiles)"
        )

    # --- HeightSource ---

    def height_at(self, x: int, y: int) -> float:
        """Terrain height at (x, y), computed without touching the tile cache."""
        return self.height_field.height_at(x, y)

    # --- Tiles ---

    def get_terrain_data(self, x: int, y: int) -> TileResult:
        """Returns the tile at (x, y), computing and caching it on a miss."""
        cached = self.cache.get(x, y)
        if cached is not None:
            return cached

        tile = self._compute_tile(x, y)
        evicted = self.cache.put(x, y, tile)
        if evicted:
            self.logger.debug(f"Tile cache over budget, trimmed {evicted} oldest entries.")
        return tile

    def _compute_tile(self, x: int, y: int) -> TileResult:
        sampler = _TileSampler(self)
        s = self.settings

        continent = self.continent_field.value_at(x, y)
        height = sampler.height_at(x, y)
        moisture = self.moisture_field.moisture_at(x, y, sampler)

        slope = measure_slope(sampler, x, y)
        is_cliff, is_high_cliff = classify_cliff(slope, height, s["cliff"])

        river = sampler.river_value(x, y)
        lake = self.hydrology.lake_value(x, y, sampler, sampler)

        gate = s["capillary"]["gate"]
        capillary = 0.0
        if river < gate and lake < gate:
            capillary = self.hydrology.capillary_value(x, y, sampler, sampler)

        lava = self.volcanic.lava_value(x, y, sampler)
        scorched = self.volcanic.scorched_value(x, y, sampler, lava, river, lake)

        biome = self.classifier.describe(
            height, moisture, continent, slope,
            river=river, lake=lake, capillary=capillary,
            lava=lava, scorched=scorched,
            is_cliff=is_cliff, is_high_cliff=is_high_cliff,
        )

        return TileResult(
            height=height,
            moisture=moisture,
            continent=continent,
            slope=slope,
            river_value=river,
            lake_value=lake,
            capillary_value=capillary,
            lava_value=lava,
            scorched_value=scorched,
            is_cliff=is_cliff,
            is_high_cliff=is_high_cliff,
            biome=biome,
        )

    # --- Cache Management ---

    @property
    def max_cache_size(self) -> int:
        return self.cache.max_size

    @property
    def cache_size(self) -> int:
        return len(self.cache)

    def update_cache_size(self, visible_cols: int, visible_rows: int, chunk_size: int = DEFAULTS.CHUNK_SIZE) -> int:
        """
        Resizes the cache budget to the visible area plus a buffer, never less
        than a few full chunks. Returns the new budget.
        """
        budget = max(
            int(visible_cols * visible_rows * DEFAULTS.CACHE_BUFFER_FACTOR),
            DEFAULTS.MIN_CACHE_CHUNKS * chunk_size * chunk_size,
        )
        evicted = self.cache.resize(budget)
        self.logger.debug(
            f"Cache budget set to {budget} tiles for a {visible_cols}x{visible_rows} view"
            + (f", trimmed {evicted} entries." if evicted else ".")
        )
        return budget

    def clear_chunk_from_cache(self, chunk_x: int, chunk_y: int, chunk_size: int = DEFAULTS.CHUNK_SIZE) -> int:
        """Forces every tile of the chunk to be recomputed on next access."""
        removed = self.cache.clear_chunk(chunk_x, chunk_y, chunk_size)
        self.logger.debug(f"Invalidated chunk ({chunk_x}, {chunk_y}): {removed} cached tiles removed.")
        return removed

    def clear_cache(self) -> None:
        self.cache.clear()
        self.logger.debug("Tile cache cleared.")
