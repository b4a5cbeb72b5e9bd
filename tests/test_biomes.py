import re

import pytest

from terrain_generator import config as DEFAULTS
from terrain_generator.biomes import BiomeClassifier, HEIGHT_BANDS
from terrain_generator.color_maps import (
    BIOME_TABLE, Biome, get_biome_by_name, get_biome_record, get_biome_resources,
)

LAND = dict(height=0.6, moisture=0.5, continent=0.9)


@pytest.fixture
def classifier():
    return BiomeClassifier()


def test_lava_beats_everything(classifier):
    biome = classifier.classify(
        height=0.9, moisture=0.5, continent=0.05, river=0.9, lake=0.9,
        lava=0.9, scorched=0.9, is_cliff=True, is_high_cliff=True
    )
    assert biome is Biome.ACTIVE_VOLCANO


@pytest.mark.parametrize("lava, expected", [
    (0.9, Biome.ACTIVE_VOLCANO),
    (0.7, Biome.LAVA_FLOW),
    (0.5, Biome.VOLCANIC_ROCK),
    (0.2, Biome.VOLCANIC_SOIL),
])
def test_lava_tiers(classifier, lava, expected):
    assert classifier.classify(**LAND, lava=lava) is expected


def test_salt_water(classifier):
    assert classifier.classify(0.5, 0.5, 0.05) is Biome.DEEP_OCEAN
    assert classifier.classify(0.5, 0.5, 0.2) is Biome.OCEAN
    assert classifier.classify(0.1, 0.5, 0.6) is Biome.SEA
    assert classifier.classify(0.3, 0.5, 0.6) is Biome.SHALLOWS


def test_ocean_beats_fresh_water(classifier):
    assert classifier.classify(0.5, 0.5, 0.05, river=0.9, lake=0.9) is Biome.DEEP_OCEAN


def test_lakes_before_rivers(classifier):
    assert classifier.classify(**LAND, lake=0.5, river=0.9) is Biome.LAKE
    assert classifier.classify(0.7, 0.5, 0.9, lake=0.5, river=0.9) is Biome.MOUNTAIN_LAKE
    assert classifier.classify(**LAND, lake=0.15, river=0.9) is Biome.POND


def test_rivers_and_streams(classifier):
    assert classifier.classify(**LAND, river=0.5) is Biome.RIVER
    assert classifier.classify(0.75, 0.5, 0.9, river=0.5) is Biome.MOUNTAIN_RIVER
    assert classifier.classify(**LAND, river=0.2) is Biome.STREAM
    assert classifier.classify(**LAND, river=0.2, capillary=0.02) is Biome.STREAM


def test_capillary_streams(classifier):
    assert classifier.classify(**LAND, capillary=0.015) is Biome.RIVULET
    assert classifier.classify(**LAND, capillary=0.005) is Biome.CAPILLARY_STREAM
    assert classifier.classify(**LAND, capillary=0.005, scorched=0.9) is Biome.CAPILLARY_STREAM


def test_scorched_tiers(classifier):
    assert classifier.classify(**LAND, scorched=0.7) is Biome.ASHLANDS
    assert classifier.classify(**LAND, scorched=0.4) is Biome.SCORCHED_LAND
    assert classifier.classify(**LAND, scorched=0.2) is Biome.CHARRED_EARTH
    assert classifier.classify(**LAND, scorched=0.4, is_cliff=True) is Biome.SCORCHED_LAND


def test_high_cliff_before_cliff(classifier):
    assert classifier.classify(**LAND, is_cliff=True, is_high_cliff=True) is Biome.HIGH_CLIFF
    assert classifier.classify(**LAND, is_cliff=True) is Biome.CLIFF


def test_coast(classifier):
    beach = DEFAULTS.WATER_LEVEL + 0.02
    assert classifier.classify(beach, 0.2, 0.9) is Biome.SANDY_BEACH
    assert classifier.classify(beach, 0.5, 0.9) is Biome.PEBBLE_BEACH
    assert classifier.classify(beach, 0.8, 0.9) is Biome.ROCKY_SHORE


@pytest.mark.parametrize("height, moisture, expected", [
    (0.95, 0.9, Biome.SNOW_CAPPED_PEAKS),
    (0.95, 0.05, Biome.DESERT_MOUNTAINS),
    (0.85, 0.9, Biome.GLACIER),
    (0.85, 0.1, Biome.MESA),
    (0.7, 0.7, Biome.MONTANE_FOREST),
    (0.6, 0.8, Biome.TROPICAL_RAINFOREST),
    (0.6, 0.05, Biome.BADLANDS),
    (0.5, 0.5, Biome.GRASSLAND),
    (0.4, 0.5, Biome.PLAINS),
    (0.4, 0.01, Biome.BARREN_DESERT),
])
def test_height_bands(classifier, height, moisture, expected):
    assert classifier.classify(height, moisture, 0.9) is expected


def test_every_band_has_six_or_seven_biomes():
    for _, tiers, fallback in HEIGHT_BANDS:
        assert 6 <= len(tiers) + 1 <= 7
        assert fallback not in [biome for _, biome in tiers]


@pytest.mark.parametrize("score, tier", [
    (0.0, "common"),
    (3.99, "common"),
    (4.0, "uncommon"),
    (8.0, "rare"),
    (13.0, "epic"),
    (18.0, "legendary"),
    (25.0, "mythic"),
    (100.0, "mythic"),
])
def test_rarity_tiers(score, tier):
    assert BiomeClassifier.rarity_tier(score) == tier


def test_rarity_score(classifier):
    assert classifier.score_rarity(0.5, 0.5, 0.0) == 0.0
    extreme = classifier.score_rarity(1.0, 0.0, 0.0)
    assert extreme == pytest.approx(22.0)
    assert classifier.rarity_tier(extreme) == "legendary"
    assert classifier.rarity_tier(classifier.score_rarity(1.0, 0.0, 0.0, is_cliff=True)) == "mythic"
    # Slope only counts above the baseline.
    assert classifier.score_rarity(0.5, 0.5, 0.05) == 0.0
    assert classifier.score_rarity(0.5, 0.5, 0.18) == pytest.approx(10.0)


def test_rarity_does_not_change_the_biome(classifier):
    flat = classifier.describe(0.6, 0.5, 0.9, slope=0.0)
    steep = classifier.describe(0.6, 0.5, 0.9, slope=0.3)
    assert flat.name == steep.name
    assert flat.rarity == "common"
    assert steep.rarity == "legendary"


def test_describe_uses_serialized_names_and_colors(classifier):
    info = classifier.describe(DEFAULTS.WATER_LEVEL + 0.02, 0.2, 0.9, slope=0.0)
    assert info.name == "sandy_beach"
    assert info.color == "#f5e6c9"
    assert info.rarity in DEFAULTS.RARITY_TIERS


def test_biome_table_is_complete():
    hex_color = re.compile(r"^#[0-9a-f]{6}$")
    for biome in Biome:
        record = BIOME_TABLE[biome]
        assert hex_color.match(record.color)
        assert record.display_name
        assert record.resources


def test_biome_lookup_by_name():
    assert get_biome_by_name("mountain_river") is Biome.MOUNTAIN_RIVER
    assert get_biome_by_name("not_a_biome") is Biome.UNKNOWN
    assert get_biome_record("lake").category == "water_fresh"
    assert "Fresh Water" in get_biome_resources("stream")
    assert get_biome_resources("not_a_biome") == ["Unknown"]
