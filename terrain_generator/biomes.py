# terrain_generator/biomes.py

"""
================================================================================
BIOME CLASSIFIER
================================================================================
Turns the computed layer values of a tile into a biome identifier and a
rarity tier.

Classification is a strict first-match decision table. The order of the rules
is part of the contract:

    1. Lava tiers            6. Capillary streams / rivulets
    2. Ocean, sea, shallows  7. Scorched land tiers
    3. Lakes and ponds       8. High cliff, then cliff
    4. Rivers                9. Coastal beaches
    5. Streams              10. Height bands, each split by moisture

Rarity is scored independently afterwards and never influences which rule
matched.

Data Contract:
---------------
- Inputs: layer values in [0, 1], slope >= 0, cliff flags.
- Outputs: `Biome` members from `classify`, `BiomeInfo` records from
  `describe` (exact serialized name, hex color, rarity tier).
- Side Effects: None.
================================================================================
"""

import bisect

from . import config as DEFAULTS
from .color_maps import Biome
from .tile import BiomeInfo

# (minimum height, ((minimum moisture, biome), ...), fallback biome).
# Bands are checked top down; a tile belongs to the first band whose minimum
# height it exceeds. Inside a band the first moisture floor it exceeds wins.
HEIGHT_BANDS = (
    (0.92, (
        (0.85, Biome.SNOW_CAPPED_PEAKS),
        (0.70, Biome.SNOW_CAP),
        (0.55, Biome.ALPINE),
        (0.40, Biome.MOUNTAIN),
        (0.25, Biome.DRY_MOUNTAIN),
        (0.12, Biome.JAGGED_PEAKS),
    ), Biome.DESERT_MOUNTAINS),
    (0.80, (
        (0.85, Biome.GLACIER),
        (0.72, Biome.FROZEN_FOREST),
        (0.60, Biome.HIGHLAND_FOREST),
        (0.45, Biome.HIGHLAND),
        (0.30, Biome.ROCKY_HIGHLAND),
    ), Biome.MESA),
    (0.68, (
        (0.80, Biome.CLOUD_FOREST),
        (0.65, Biome.MONTANE_FOREST),
        (0.50, Biome.UPLAND_MEADOW),
        (0.35, Biome.MOORLAND),
        (0.20, Biome.STEPPE),
    ), Biome.COLD_DESERT),
    (0.56, (
        (0.75, Biome.TROPICAL_RAINFOREST),
        (0.62, Biome.TEMPERATE_FOREST),
        (0.48, Biome.WOODLAND),
        (0.35, Biome.SHRUBLAND),
        (0.22, Biome.DRY_SHRUBLAND),
        (0.12, Biome.SCRUBLAND),
    ), Biome.BADLANDS),
    (0.45, (
        (0.75, Biome.SWAMP),
        (0.60, Biome.MARSH),
        (0.45, Biome.GRASSLAND),
        (0.32, Biome.SAVANNA),
        (0.20, Biome.DESERT_SCRUB),
        (0.12, Biome.ROCKY_DESERT),
    ), Biome.STONY_DESERT),
    (-1.0, (
        (0.75, Biome.BOG),
        (0.60, Biome.WETLAND),
        (0.45, Biome.PLAINS),
        (0.30, Biome.DRY_PLAINS),
        (0.18, Biome.SANDY_DESERT),
        (0.08, Biome.DESERT),
    ), Biome.BARREN_DESERT),
)

# Water-feature thresholds used by the decision table.
LAKE_MIN = 0.25
POND_MIN = 0.1
MOUNTAIN_LAKE_HEIGHT = 0.6
RIVER_MIN = 0.4
STREAM_MIN = 0.15
MOUNTAIN_RIVER_HEIGHT = 0.7
RIVULET_MIN = 0.01
SCORCHED_MIN = 0.1
DEEP_OCEAN_CONTINENT = 0.12
OCEAN_CONTINENT = 0.25
SEA_DEPTH = 0.1
BEACH_HEIGHT = 0.05


def _pick(value: float, tiers, fallback: Biome) -> Biome:
    for floor, biome in tiers:
        if value > floor:
            return biome
    return fallback


class BiomeClassifier:

    def __init__(self, water_level: float = DEFAULTS.WATER_LEVEL, rarity_options: dict = None):
        self.water_level = water_level
        self.rarity = dict(DEFAULTS.RARITY_OPTIONS)
        if rarity_options:
            self.rarity.update(rarity_options)

    def classify(
        self, height: float, moisture: float, continent: float,
        river: float = 0.0, lake: float = 0.0, capillary: float = 0.0,
        lava: float = 0.0, scorched: float = 0.0,
        is_cliff: bool = False, is_high_cliff: bool = False
    ) -> Biome:
        if lava > 0:
            return _pick(lava, (
                (0.8, Biome.ACTIVE_VOLCANO),
                (0.6, Biome.LAVA_FLOW),
                (0.4, Biome.VOLCANIC_ROCK),
            ), Biome.VOLCANIC_SOIL)

        if continent < DEEP_OCEAN_CONTINENT:
            return Biome.DEEP_OCEAN
        if continent < OCEAN_CONTINENT:
            return Biome.OCEAN
        if height < self.water_level:
            return Biome.SEA if height < self.water_level - SEA_DEPTH else Biome.SHALLOWS

        if lake > LAKE_MIN:
            return Biome.MOUNTAIN_LAKE if height > MOUNTAIN_LAKE_HEIGHT else Biome.LAKE
        if lake > POND_MIN:
            return Biome.POND

        if river > RIVER_MIN:
            return Biome.MOUNTAIN_RIVER if height > MOUNTAIN_RIVER_HEIGHT else Biome.RIVER
        if river > STREAM_MIN:
            return Biome.STREAM

        if capillary > 0:
            return Biome.RIVULET if capillary > RIVULET_MIN else Biome.CAPILLARY_STREAM

        if scorched > SCORCHED_MIN:
            return _pick(scorched, (
                (0.6, Biome.ASHLANDS),
                (0.3, Biome.SCORCHED_LAND),
            ), Biome.CHARRED_EARTH)

        if is_high_cliff:
            return Biome.HIGH_CLIFF
        if is_cliff:
            return Biome.CLIFF

        if height < self.water_level + BEACH_HEIGHT:
            return _pick(moisture, (
                (0.65, Biome.ROCKY_SHORE),
                (0.4, Biome.PEBBLE_BEACH),
            ), Biome.SANDY_BEACH)

        for min_height, tiers, fallback in HEIGHT_BANDS:
            if height > min_height:
                return _pick(moisture, tiers, fallback)
        return Biome.UNKNOWN

    def score_rarity(
        self, height: float, moisture: float, slope: float,
        lava: float = 0.0, scorched: float = 0.0, is_cliff: bool = False
    ) -> float:
        """Additive score of how far the tile's parameters sit from the average."""
        o = self.rarity
        exponent = o["extremity_exponent"]
        score = (abs(height - 0.5) * 2) ** exponent * o["height_weight"]
        score += (abs(moisture - 0.5) * 2) ** exponent * o["moisture_weight"]
        score += max(0.0, slope - o["slope_baseline"]) * o["slope_weight"]
        score += lava * o["lava_weight"]
        score += scorched * o["scorched_weight"]
        if is_cliff:
            score += o["cliff_bonus"]
        return score

    @staticmethod
    def rarity_tier(score: float) -> str:
        return DEFAULTS.RARITY_TIERS[bisect.bisect_right(DEFAULTS.RARITY_THRESHOLDS, score)]

    def describe(
        self, height: float, moisture: float, continent: float, slope: float,
        river: float = 0.0, lake: float = 0.0, capillary: float = 0.0,
        lava: float = 0.0, scorched: float = 0.0,
        is_cliff: bool = False, is_high_cliff: bool = False
    ) -> BiomeInfo:
        biome = self.classify(
            height, moisture, continent, river, lake, capillary,
            lava, scorched, is_cliff, is_high_cliff
        )
        score = self.score_rarity(height, moisture, slope, lava, scorched, is_cliff or is_high_cliff)
        return BiomeInfo(name=biome.label, color=biome.color, rarity=self.rarity_tier(score))
