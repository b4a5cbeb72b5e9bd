import random

import pytest

from terrain_generator import config as DEFAULTS
from terrain_generator.biomes import STREAM_MIN
from terrain_generator.hydrology import HydrologyNetwork
from terrain_generator.noise import NoiseField


class ConstantHeights:
    def __init__(self, height):
        self.height = height

    def height_at(self, x, y):
        return self.height


class PitHeights:
    """A single tile at `low`, everything else at `high`."""

    def __init__(self, low, high):
        self.low = low
        self.high = high

    def height_at(self, x, y):
        return self.low if (x, y) == (0, 0) else self.high


class PlaneHeights:
    def __init__(self, base, step):
        self.base = base
        self.step = step

    def height_at(self, x, y):
        return self.base + self.step * x


class ConstantRivers:
    def __init__(self, value):
        self.value = value

    def river_value(self, x, y):
        return self.value


class FixedNoise:
    """Every fBM query returns the same value."""

    def __init__(self, value):
        self.value = value

    def get_fbm(self, x, y, **options):
        return self.value


def make_hydrology(river_noise):
    return HydrologyNetwork(
        river_noise, NoiseField(50000),
        DEFAULTS.RIVER_OPTIONS, DEFAULTS.LAKE_OPTIONS, DEFAULTS.CAPILLARY_OPTIONS,
        DEFAULTS.WATER_LEVEL,
    )


@pytest.fixture
def hydrology():
    return make_hydrology(NoiseField(40000))


def test_surface_flow_points_downhill(hydrology):
    gx, gy, magnitude, drop = hydrology.surface_flow(0, 0, PlaneHeights(0.5, 0.01))
    assert gx < 0
    assert gy == pytest.approx(0.0)
    assert magnitude == pytest.approx(abs(gx))
    assert drop == pytest.approx(0.01)


def test_no_rivers_above_snowline(hydrology):
    for x in range(-50, 50, 5):
        assert hydrology.river_value(x, 0, ConstantHeights(0.97)) == 0.0


def test_rivers_follow_valleys_not_ridges():
    slope = PlaneHeights(0.5, 0.01)
    valley = make_hydrology(FixedNoise(0.1)).river_value(0, 0, slope)
    ridge = make_hydrology(FixedNoise(0.9)).river_value(0, 0, slope)
    assert valley > 0.0
    assert ridge == 0.0


def test_no_rivers_below_water_level():
    # Deepest possible valley, surrounded by water on every side.
    hydrology = make_hydrology(FixedNoise(0.0))
    for height in (0.05, 0.2, DEFAULTS.WATER_LEVEL - 0.001):
        assert hydrology.river_value(0, 0, ConstantHeights(height)) == 0.0


def test_no_river_in_a_pit(hydrology):
    # Every neighbour is higher, so the water has nowhere to go.
    assert hydrology.river_value(0, 0, PitHeights(0.6, 0.7)) == 0.0


def test_no_uphill_rivers(wet_generator):
    """Away from the coast every river tile has a strictly lower neighbour, or is a mountain source."""
    hydrology = wet_generator.hydrology
    margin = wet_generator.settings["river"]["uphill_margin"]
    water_level = wet_generator.settings["water_level"]
    rng = random.Random(99)
    rivers = 0
    for _ in range(600):
        x = rng.randint(-20_000, 20_000)
        y = rng.randint(-20_000, 20_000)
        tile = wet_generator.get_terrain_data(x, y)
        if tile.river_value <= 0:
            continue
        rivers += 1
        if tile.height <= water_level + margin:
            continue
        neighbours = [
            wet_generator.height_at(x + dx, y + dy)
            for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)
        ]
        assert min(neighbours) < tile.height or hydrology.is_mountain_source(x, y, wet_generator)
    assert rivers > 0


def test_stream_width_is_narrower_than_river_width(hydrology):
    height = 0.5
    stream = hydrology.river_width_modifier(height, 0.1, is_arterial=False, mountain_source=False)
    river = hydrology.river_width_modifier(height, 1.0, is_arterial=False, mountain_source=False)
    arterial = hydrology.river_width_modifier(height, 1.0, is_arterial=True, mountain_source=False)
    mountain = hydrology.river_width_modifier(height, 1.0, is_arterial=False, mountain_source=True)
    assert stream < river < arterial
    assert mountain < river


def test_stream_band_reduction_is_40_to_60_percent(hydrology):
    full = hydrology.river_width_modifier(0.5, 1.0, False, False)
    for raw in (0.001, 0.05, 0.2, 0.4):
        reduced = hydrology.river_width_modifier(0.5, raw, False, False)
        assert 0.4 * full - 1e-9 <= reduced <= 0.6 * full + 1e-9


def test_capillary_values_stay_below_streams(hydrology):
    cap = DEFAULTS.CAPILLARY_OPTIONS["cap"]
    assert cap < STREAM_MIN
    heights = PlaneHeights(0.36, 0.0005)
    for x in range(-200, 200, 3):
        for y in range(-30, 30, 6):
            assert 0.0 <= hydrology.capillary_value(x, y, heights) <= cap


def test_no_capillary_under_water_or_on_peaks(hydrology):
    assert hydrology.capillary_value(3, 3, ConstantHeights(0.1)) == 0.0
    assert hydrology.capillary_value(3, 3, ConstantHeights(0.9)) == 0.0


def test_capillaries_are_drawn_toward_rivers():
    # Channel score just under the threshold on dry, level ground.
    hydrology = make_hydrology(FixedNoise(0.75))
    land = ConstantHeights(0.5)
    cap = DEFAULTS.CAPILLARY_OPTIONS["cap"]
    assert hydrology.capillary_value(0, 0, land) == 0.0
    assert hydrology.capillary_value(0, 0, land, ConstantRivers(0.0)) == 0.0
    near_river = hydrology.capillary_value(0, 0, land, ConstantRivers(0.5))
    assert 0.0 < near_river <= cap


def test_lake_value_outside_height_bands(hydrology):
    for x in range(0, 400, 20):
        assert hydrology.lake_value(x, x, ConstantHeights(0.9), ConstantRivers(0.0)) == 0.0
        assert hydrology.lake_value(x, x, ConstantHeights(0.2), ConstantRivers(0.0)) == 0.0


def test_lakes_avoid_sitting_on_rivers(hydrology):
    flat = ConstantHeights(0.55)
    dry = ConstantRivers(0.0)
    flooded = ConstantRivers(1.0)
    for x in range(-3000, 3000, 61):
        on_river = hydrology.lake_value(x, 2 * x, flat, flooded)
        assert on_river <= hydrology.lake_value(x, 2 * x, flat, dry)
        assert 0.0 <= on_river <= 1.0


def test_ponds_are_suppressed_near_rivers(hydrology):
    # Above the basin-lake band only ponds can form.
    flat = ConstantHeights(0.67)
    for x in range(-3000, 3000, 37):
        assert hydrology.lake_value(x, x, flat, ConstantRivers(0.5)) == 0.0
        assert hydrology.lake_value(x, x, flat, ConstantRivers(0.0)) <= DEFAULTS.LAKE_OPTIONS["pond_cap"]
