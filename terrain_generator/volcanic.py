# terrain_generator/volcanic.py

"""
Lava and scorched-land layers. Both are height-gated and read heights through
a HeightSource. Scorched land never overlaps flowing or standing water.
"""

from .fields import HeightSource
from .noise import NoiseField


class VolcanicField:

    def __init__(self, lava_noise: NoiseField, lava_options: dict, scorched_options: dict, water_level: float):
        self.lava_noise = lava_noise
        self.lava = lava_options
        self.scorched = scorched_options
        self.water_level = water_level

    def lava_value(self, x: int, y: int, heights: HeightSource) -> float:
        o = self.lava
        if heights.height_at(x, y) < o["min_height"]:
            return 0.0

        volcanic = self.lava_noise.get_fbm(
            x * 2 + 7000, y * 2 + 7000,
            scale=o["scale"], octaves=3, persistence=0.7, lacunarity=2.2
        )
        if volcanic <= o["lava_threshold"]:
            return 0.0

        pattern = self.lava_noise.get_fbm(
            x * 4 + 8000, y * 4 + 8000, scale=o["scale"] * 3, octaves=2, persistence=0.5
        )
        intensity = pattern ** o["lava_concentration"]
        return min(1.0, intensity * 2 * o["flow_intensity"])

    def scorched_value(
        self, x: int, y: int, heights: HeightSource,
        lava: float, river: float, lake: float
    ) -> float:
        o = self.scorched
        if river > o["river_limit"]:
            return 0.0

        height = heights.height_at(x, y)
        if height < self.water_level or lake > o["lake_limit"]:
            return 0.0

        if lava > 0:
            scorched = 0.5 + 0.5 * lava
        elif height > o["min_height"]:
            ash = self.lava_noise.get_fbm(x + 13000, y + 13000, scale=o["scale"], octaves=2, persistence=0.5)
            threshold = o["noise_threshold"]
            if ash <= threshold:
                return 0.0
            altitude = (height - o["min_height"]) / (1 - o["min_height"])
            scorched = (ash - threshold) / (1 - threshold) + altitude * 0.5
        else:
            return 0.0

        return min(1.0, scorched * o["scorched_frequency"])
