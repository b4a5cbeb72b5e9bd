import pytest

from terrain_generator import config as DEFAULTS
from terrain_generator.fields import (
    ContinentField, HeightField, MoistureField, classify_cliff, measure_slope,
)
from terrain_generator.noise import NoiseField


class ConstantHeights:
    def __init__(self, height):
        self.height = height

    def height_at(self, x, y):
        return self.height


class PlaneHeights:
    """Height rising by `step` per tile along x."""

    def __init__(self, base, step):
        self.base = base
        self.step = step

    def height_at(self, x, y):
        return self.base + self.step * x


@pytest.fixture
def moisture_field():
    return MoistureField(NoiseField(20000), DEFAULTS.MOISTURE_OPTIONS, DEFAULTS.WATER_LEVEL)


def test_continent_in_open_unit_interval():
    continent = ContinentField(NoiseField(1), DEFAULTS.CONTINENT_OPTIONS)
    for x in range(-5000, 5000, 250):
        assert 0.0 < continent.value_at(x, x // 2) < 1.0


def test_height_in_unit_interval_and_pure():
    continent = ContinentField(NoiseField(1), DEFAULTS.CONTINENT_OPTIONS)
    heights = HeightField(continent, NoiseField(10001), NoiseField(30001), DEFAULTS.HEIGHT_OPTIONS)
    for x in range(-3000, 3000, 150):
        h = heights.height_at(x, -x)
        assert 0.0 <= h <= 1.0
        assert heights.height_at(x, -x) == h


def test_water_proximity_factor(moisture_field):
    boost = DEFAULTS.MOISTURE_OPTIONS["water_boost"]
    assert moisture_field.water_proximity_factor(0, 0, ConstantHeights(0.9)) == 1.0
    assert moisture_field.water_proximity_factor(0, 0, ConstantHeights(0.0)) == pytest.approx(1.0 + boost)


def test_rain_shadow_factor(moisture_field):
    assert moisture_field.rain_shadow_factor(0, 0, 0.5, ConstantHeights(0.5)) == 1.0
    # Upwind is -x; terrain rising toward -x casts a shadow, floored.
    steep = PlaneHeights(0.5, -0.2)
    assert moisture_field.rain_shadow_factor(0, 0, 0.5, steep) == DEFAULTS.MOISTURE_OPTIONS["rain_shadow_floor"]
    # Terrain falling away upwind casts none.
    assert moisture_field.rain_shadow_factor(0, 0, 0.5, PlaneHeights(0.5, 0.01)) == 1.0


def test_elevation_factor(moisture_field):
    wl = DEFAULTS.WATER_LEVEL
    assert moisture_field.elevation_factor(0.9) == 0.8
    assert moisture_field.elevation_factor(0.6) == 1.1
    assert moisture_field.elevation_factor(wl + 0.01) == 1.2
    assert moisture_field.elevation_factor(0.45) == 1.0


def test_moisture_in_unit_interval(moisture_field):
    for heights in (ConstantHeights(0.0), ConstantHeights(0.5), PlaneHeights(0.4, 0.001)):
        for x in range(-1000, 1000, 125):
            assert 0.0 <= moisture_field.moisture_at(x, 3 * x, heights) <= 1.0


def test_measure_slope():
    assert measure_slope(ConstantHeights(0.4), 5, 5) == 0.0
    # dx = h(x+1) - h(x-1) = 2 * step
    assert measure_slope(PlaneHeights(0.4, 0.05), 0, 0) == pytest.approx(0.05)


def test_classify_cliff():
    options = DEFAULTS.CLIFF_OPTIONS
    assert classify_cliff(0.01, 0.9, options) == (False, False)
    assert classify_cliff(0.08, 0.9, options) == (True, False)
    assert classify_cliff(0.2, 0.9, options) == (True, True)
    assert classify_cliff(0.2, 0.4, options) == (True, False)
