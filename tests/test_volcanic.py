import pytest

from terrain_generator import config as DEFAULTS
from terrain_generator.noise import NoiseField
from terrain_generator.volcanic import VolcanicField


class ConstantHeights:
    def __init__(self, height):
        self.height = height

    def height_at(self, x, y):
        return self.height


@pytest.fixture
def volcanic():
    return VolcanicField(
        NoiseField(60000), DEFAULTS.LAVA_OPTIONS, DEFAULTS.SCORCHED_OPTIONS, DEFAULTS.WATER_LEVEL
    )


def test_no_lava_below_min_height(volcanic):
    low = ConstantHeights(DEFAULTS.LAVA_OPTIONS["min_height"] - 0.01)
    for x in range(-5000, 5000, 97):
        assert volcanic.lava_value(x, -x, low) == 0.0


def test_lava_in_unit_interval(volcanic):
    high = ConstantHeights(0.95)
    for x in range(-5000, 5000, 97):
        assert 0.0 <= volcanic.lava_value(x, x, high) <= 1.0


def test_scorched_never_on_rivers(volcanic):
    high = ConstantHeights(0.9)
    assert volcanic.scorched_value(0, 0, high, lava=1.0, river=0.11, lake=0.0) == 0.0


def test_scorched_never_on_standing_water(volcanic):
    assert volcanic.scorched_value(0, 0, ConstantHeights(0.1), lava=1.0, river=0.0, lake=0.0) == 0.0
    assert volcanic.scorched_value(0, 0, ConstantHeights(0.9), lava=1.0, river=0.0, lake=0.5) == 0.0


def test_scorched_around_lava(volcanic):
    frequency = DEFAULTS.SCORCHED_OPTIONS["scorched_frequency"]
    value = volcanic.scorched_value(0, 0, ConstantHeights(0.9), lava=1.0, river=0.0, lake=0.0)
    assert value == pytest.approx(min(1.0, frequency))


def test_no_scorching_on_low_ground_without_lava(volcanic):
    low = ConstantHeights(DEFAULTS.SCORCHED_OPTIONS["min_height"] - 0.05)
    for x in range(-2000, 2000, 41):
        assert volcanic.scorched_value(x, x, low, lava=0.0, river=0.0, lake=0.0) == 0.0


def test_scorched_in_unit_interval(volcanic):
    high = ConstantHeights(0.99)
    for x in range(-2000, 2000, 41):
        assert 0.0 <= volcanic.scorched_value(x, -x, high, lava=0.0, river=0.0, lake=0.0) <= 1.0
