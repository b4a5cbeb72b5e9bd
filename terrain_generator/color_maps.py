# terrain_generator/color_maps.py

"""
================================================================================
BIOME IDENTIFIERS, COLORS AND METADATA
================================================================================
This module contains the fixed set of biome identifiers and the side tables
that map each identifier to its display color and descriptive metadata.

The classifier works with `Biome` members only. The exact lowercase name
strings (`Biome.label`) are produced at the serialization boundary, so they
stay compatible with existing tile snapshots.
================================================================================
"""
from enum import IntEnum
from typing import NamedTuple


class BiomeCategory:
    WATER_DEEP = "water_deep"
    WATER_SHALLOW = "water_shallow"
    WATER_FRESH = "water_fresh"
    VOLCANIC = "volcanic"
    COASTAL = "coastal"
    CLIFFS = "cliffs"
    LOWLANDS = "lowlands"
    MIDLANDS = "midlands"
    HIGHLANDS = "highlands"
    MOUNTAINS = "mountains"
    UNKNOWN = "unknown"


class Biome(IntEnum):
    UNKNOWN = 0

    # Volcanic
    ACTIVE_VOLCANO = 1
    LAVA_FLOW = 2
    VOLCANIC_ROCK = 3
    VOLCANIC_SOIL = 4

    # Salt water
    DEEP_OCEAN = 5
    OCEAN = 6
    SEA = 7
    SHALLOWS = 8

    # Fresh water
    MOUNTAIN_LAKE = 9
    LAKE = 10
    POND = 11
    MOUNTAIN_RIVER = 12
    RIVER = 13
    STREAM = 14
    RIVULET = 15
    CAPILLARY_STREAM = 16

    # Scorched land
    ASHLANDS = 17
    SCORCHED_LAND = 18
    CHARRED_EARTH = 19

    # Cliffs
    HIGH_CLIFF = 20
    CLIFF = 21

    # Coast
    ROCKY_SHORE = 22
    PEBBLE_BEACH = 23
    SANDY_BEACH = 24

    # Peaks
    SNOW_CAPPED_PEAKS = 25
    SNOW_CAP = 26
    ALPINE = 27
    MOUNTAIN = 28
    DRY_MOUNTAIN = 29
    JAGGED_PEAKS = 30
    DESERT_MOUNTAINS = 31

    # Highlands
    GLACIER = 32
    FROZEN_FOREST = 33
    HIGHLAND_FOREST = 34
    HIGHLAND = 35
    ROCKY_HIGHLAND = 36
    MESA = 37

    # Uplands
    CLOUD_FOREST = 38
    MONTANE_FOREST = 39
    UPLAND_MEADOW = 40
    MOORLAND = 41
    STEPPE = 42
    COLD_DESERT = 43

    # Midlands
    TROPICAL_RAINFOREST = 44
    TEMPERATE_FOREST = 45
    WOODLAND = 46
    SHRUBLAND = 47
    DRY_SHRUBLAND = 48
    SCRUBLAND = 49
    BADLANDS = 50

    # Lowlands
    SWAMP = 51
    MARSH = 52
    GRASSLAND = 53
    SAVANNA = 54
    DESERT_SCRUB = 55
    ROCKY_DESERT = 56
    STONY_DESERT = 57

    # Basins
    BOG = 58
    WETLAND = 59
    PLAINS = 60
    DRY_PLAINS = 61
    SANDY_DESERT = 62
    DESERT = 63
    BARREN_DESERT = 64

    @property
    def label(self) -> str:
        """The serialized biome name, e.g. 'sandy_beach'."""
        return self.name.lower()

    @property
    def color(self) -> str:
        return BIOME_TABLE[self].color


class BiomeRecord(NamedTuple):
    display_name: str
    color: str
    category: str
    resources: tuple[str, ...]


C = BiomeCategory

BIOME_TABLE = {
    Biome.UNKNOWN: BiomeRecord("Unknown", "#808080", C.UNKNOWN, ("Unknown",)),

    Biome.ACTIVE_VOLCANO: BiomeRecord("Active Volcano", "#8b0000", C.VOLCANIC, ("Obsidian", "Sulfur", "Fire Crystals")),
    Biome.LAVA_FLOW: BiomeRecord("Lava Flow", "#cf3a00", C.VOLCANIC, ("Obsidian", "Basalt")),
    Biome.VOLCANIC_ROCK: BiomeRecord("Volcanic Rock", "#5a4a45", C.VOLCANIC, ("Basalt", "Volcanic Glass")),
    Biome.VOLCANIC_SOIL: BiomeRecord("Volcanic Soil", "#6b4f3f", C.VOLCANIC, ("Fertile Ash", "Sulfur")),

    Biome.DEEP_OCEAN: BiomeRecord("Deep Ocean", "#000080", C.WATER_DEEP, ("Fish", "Salt")),
    Biome.OCEAN: BiomeRecord("Ocean", "#0066cc", C.WATER_SHALLOW, ("Fish", "Salt", "Seaweed")),
    Biome.SEA: BiomeRecord("Sea", "#1a5fa8", C.WATER_SHALLOW, ("Fish", "Seaweed")),
    Biome.SHALLOWS: BiomeRecord("Shallows", "#5d99b8", C.WATER_SHALLOW, ("Shellfish", "Seaweed", "Sand")),

    Biome.MOUNTAIN_LAKE: BiomeRecord("Mountain Lake", "#3f7fbf", C.WATER_FRESH, ("Pure Water", "Trout")),
    Biome.LAKE: BiomeRecord("Lake", "#4a91d6", C.WATER_FRESH, ("Fresh Water", "Lake Fish", "Clay")),
    Biome.POND: BiomeRecord("Pond", "#6aa6d9", C.WATER_FRESH, ("Fresh Water", "Reeds")),
    Biome.MOUNTAIN_RIVER: BiomeRecord("Mountain River", "#5fa3d9", C.WATER_FRESH, ("Fresh Water", "Pebbles", "Trout")),
    Biome.RIVER: BiomeRecord("River", "#4a91d6", C.WATER_FRESH, ("Fresh Water", "Clay", "River Fish")),
    Biome.STREAM: BiomeRecord("Stream", "#a3c7e8", C.WATER_FRESH, ("Fresh Water", "Small Fish", "Pebbles")),
    Biome.RIVULET: BiomeRecord("Rivulet", "#b7d6ee", C.WATER_FRESH, ("Fresh Water", "Pebbles")),
    Biome.CAPILLARY_STREAM: BiomeRecord("Capillary Stream", "#c9e1f2", C.WATER_FRESH, ("Fresh Water",)),

    Biome.ASHLANDS: BiomeRecord("Ashlands", "#4a4240", C.VOLCANIC, ("Ash", "Sulfur")),
    Biome.SCORCHED_LAND: BiomeRecord("Scorched Land", "#6e5446", C.VOLCANIC, ("Charcoal", "Ash")),
    Biome.CHARRED_EARTH: BiomeRecord("Charred Earth", "#7f6a5c", C.VOLCANIC, ("Charcoal",)),

    Biome.HIGH_CLIFF: BiomeRecord("High Cliff", "#5f5a55", C.CLIFFS, ("Stone", "Bird Eggs", "Rare Minerals")),
    Biome.CLIFF: BiomeRecord("Cliff", "#7a736b", C.CLIFFS, ("Stone", "Bird Eggs")),

    Biome.ROCKY_SHORE: BiomeRecord("Rocky Shore", "#9e9e83", C.COASTAL, ("Rocks", "Shellfish")),
    Biome.PEBBLE_BEACH: BiomeRecord("Pebble Beach", "#d9c8a5", C.COASTAL, ("Stones", "Clay")),
    Biome.SANDY_BEACH: BiomeRecord("Sandy Beach", "#f5e6c9", C.COASTAL, ("Sand", "Shells", "Coconuts")),

    Biome.SNOW_CAPPED_PEAKS: BiomeRecord("Snow-Capped Peaks", "#f4f8fb", C.MOUNTAINS, ("Ice", "Crystal", "Pure Water")),
    Biome.SNOW_CAP: BiomeRecord("Snow Cap", "#ffffff", C.MOUNTAINS, ("Snow", "Crystal")),
    Biome.ALPINE: BiomeRecord("Alpine", "#e0e0e0", C.MOUNTAINS, ("Ice", "Rare Herbs")),
    Biome.MOUNTAIN: BiomeRecord("Mountain", "#7d7d7d", C.MOUNTAINS, ("Stone", "Iron", "Gems")),
    Biome.DRY_MOUNTAIN: BiomeRecord("Dry Mountain", "#8b6b4c", C.MOUNTAINS, ("Stone", "Copper", "Gold")),
    Biome.JAGGED_PEAKS: BiomeRecord("Jagged Peaks", "#a8a8a8", C.MOUNTAINS, ("Stone", "Rare Minerals", "Crystals")),
    Biome.DESERT_MOUNTAINS: BiomeRecord("Desert Mountains", "#9c6b4f", C.MOUNTAINS, ("Stone", "Gold", "Minerals")),

    Biome.GLACIER: BiomeRecord("Glacier", "#c9eeff", C.HIGHLANDS, ("Ice", "Pure Water")),
    Biome.FROZEN_FOREST: BiomeRecord("Frozen Forest", "#a4c4d4", C.HIGHLANDS, ("Frost Wood", "Winter Berries", "Fur")),
    Biome.HIGHLAND_FOREST: BiomeRecord("Highland Forest", "#1d6d53", C.HIGHLANDS, ("Wood", "Game", "Herbs")),
    Biome.HIGHLAND: BiomeRecord("Highland", "#5d784c", C.HIGHLANDS, ("Stone", "Berries", "Game")),
    Biome.ROCKY_HIGHLAND: BiomeRecord("Rocky Highland", "#787c60", C.HIGHLANDS, ("Stone", "Ore")),
    Biome.MESA: BiomeRecord("Mesa", "#9e6b54", C.HIGHLANDS, ("Red Clay", "Minerals")),

    Biome.CLOUD_FOREST: BiomeRecord("Cloud Forest", "#2b6b4f", C.HIGHLANDS, ("Hardwood", "Orchids", "Medicinal Plants")),
    Biome.MONTANE_FOREST: BiomeRecord("Montane Forest", "#2f5d3a", C.HIGHLANDS, ("Wood", "Game", "Resin")),
    Biome.UPLAND_MEADOW: BiomeRecord("Upland Meadow", "#8fb865", C.HIGHLANDS, ("Herbs", "Wool", "Honey")),
    Biome.MOORLAND: BiomeRecord("Moorland", "#7a7a52", C.HIGHLANDS, ("Peat", "Heather")),
    Biome.STEPPE: BiomeRecord("Steppe", "#b5ad74", C.HIGHLANDS, ("Grain", "Horses")),
    Biome.COLD_DESERT: BiomeRecord("Cold Desert", "#cfc3a0", C.HIGHLANDS, ("Stone", "Salt")),

    Biome.TROPICAL_RAINFOREST: BiomeRecord("Tropical Rainforest", "#0e6e1e", C.MIDLANDS, ("Exotic Wood", "Fruits", "Medicinal Plants")),
    Biome.TEMPERATE_FOREST: BiomeRecord("Temperate Forest", "#147235", C.MIDLANDS, ("Wood", "Game", "Berries")),
    Biome.WOODLAND: BiomeRecord("Woodland", "#448d37", C.MIDLANDS, ("Wood", "Game")),
    Biome.SHRUBLAND: BiomeRecord("Shrubland", "#8d9c4c", C.MIDLANDS, ("Herbs", "Berries")),
    Biome.DRY_SHRUBLAND: BiomeRecord("Dry Shrubland", "#a8a76c", C.MIDLANDS, ("Herbs", "Fiber")),
    Biome.SCRUBLAND: BiomeRecord("Scrubland", "#b9a77c", C.MIDLANDS, ("Fiber", "Stone")),
    Biome.BADLANDS: BiomeRecord("Badlands", "#9c7450", C.MIDLANDS, ("Clay", "Minerals")),

    Biome.SWAMP: BiomeRecord("Swamp", "#2f4d2a", C.LOWLANDS, ("Peat", "Reeds", "Medicinal Plants")),
    Biome.MARSH: BiomeRecord("Marsh", "#3d6d38", C.LOWLANDS, ("Reeds", "Waterfowl")),
    Biome.GRASSLAND: BiomeRecord("Grassland", "#68a246", C.LOWLANDS, ("Grain", "Game")),
    Biome.SAVANNA: BiomeRecord("Savanna", "#c4b257", C.LOWLANDS, ("Grain", "Game", "Fiber")),
    Biome.DESERT_SCRUB: BiomeRecord("Desert Scrub", "#d1ba70", C.LOWLANDS, ("Fiber", "Cactus")),
    Biome.ROCKY_DESERT: BiomeRecord("Rocky Desert", "#bfa678", C.LOWLANDS, ("Stone", "Minerals")),
    Biome.STONY_DESERT: BiomeRecord("Stony Desert", "#c79b68", C.LOWLANDS, ("Stone", "Salt")),

    Biome.BOG: BiomeRecord("Bog", "#4f5d40", C.LOWLANDS, ("Peat", "Bog Iron")),
    Biome.WETLAND: BiomeRecord("Wetland", "#517d46", C.LOWLANDS, ("Reeds", "Waterfowl", "Clay")),
    Biome.PLAINS: BiomeRecord("Plains", "#7db356", C.LOWLANDS, ("Grain", "Livestock")),
    Biome.DRY_PLAINS: BiomeRecord("Dry Plains", "#c3be6a", C.LOWLANDS, ("Grain", "Fiber")),
    Biome.SANDY_DESERT: BiomeRecord("Sandy Desert", "#e8dec6", C.LOWLANDS, ("Sand", "Glass")),
    Biome.DESERT: BiomeRecord("Desert", "#e3d59e", C.LOWLANDS, ("Sand", "Rare Herbs")),
    Biome.BARREN_DESERT: BiomeRecord("Barren Desert", "#eeddbb", C.LOWLANDS, ("Sand",)),
}

_BIOMES_BY_LABEL = {biome.label: biome for biome in Biome}


def get_biome_by_name(name: str) -> Biome:
    """Looks up a biome by its serialized name, falling back to UNKNOWN."""
    return _BIOMES_BY_LABEL.get(name, Biome.UNKNOWN)


def get_biome_record(name: str) -> BiomeRecord:
    return BIOME_TABLE[get_biome_by_name(name)]


def get_biome_resources(name: str) -> list[str]:
    return list(get_biome_record(name).resources)
