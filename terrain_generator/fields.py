# terrain_generator/fields.py

"""
================================================================================
CONTINENT, HEIGHT AND MOISTURE FIELDS
================================================================================
The elevation and climate layers of the pipeline. Each field is a pure
function of (x, y) once constructed from its NoiseField(s) and options.

Data Contract:
---------------
- ContinentField.value_at(x, y) -> (0, 1), near 0 deep ocean, near 1 interior.
- HeightField.height_at(x, y) -> [0, 1]. Implements HeightSource.
- MoistureField.moisture_at(x, y, heights) -> [0, 1]. Reads neighbour heights
  through the given HeightSource, never through the tile cache.
- measure_slope / classify_cliff: local gradient and cliff flags.
- Side Effects: None.
================================================================================
"""

import math
from typing import Protocol

from .noise import NoiseField


class HeightSource(Protocol):
    """Anything that can report the terrain height at an arbitrary tile."""

    def height_at(self, x: int, y: int) -> float: ...


def _clamp01(value: float) -> float:
    return min(1.0, max(0.0, value))


class ContinentField:
    """Large-scale landmass mask with sigmoid-sharpened coastlines."""

    def __init__(self, noise: NoiseField, options: dict):
        self.noise = noise
        self.options = options

    def value_at(self, x: int, y: int) -> float:
        o = self.options
        base = self.noise.get_fbm(x, y, scale=o["scale"], octaves=3, persistence=0.5, lacunarity=2.0)
        edge = self.noise.get_fbm(
            x + 1000, y + 1000,
            scale=o["edge_scale"], octaves=2, persistence=0.6, lacunarity=2.0
        )
        amount = o["edge_amount"]
        combined = base + edge * amount - amount / 2
        return 1.0 / (1.0 + math.exp(-o["sharpness"] * (combined - o["threshold"])))


class HeightField:
    """
    Elevation in [0, 1]: continent blend, regional variance, ridged mountain
    boost, bias, peak sharpening and fine detail jitter.

    This is the single authority for height. The generator hands it (or a
    memoizing wrapper around it) to the hydrology and volcanic layers, so a
    neighbour's height always matches what that neighbour's own tile stores.
    """

    def __init__(self, continent: ContinentField, height_noise: NoiseField, detail_noise: NoiseField, options: dict):
        self.continent = continent
        self.height_noise = height_noise
        self.detail_noise = detail_noise
        self.options = options

    def height_at(self, x: int, y: int) -> float:
        o = self.options
        continent = self.continent.value_at(x, y)
        base = self.height_noise.get_fbm(
            x, y,
            scale=o["scale"], octaves=o["octaves"],
            persistence=o["persistence"], lacunarity=o["lacunarity"]
        )

        influence = o["continent_influence"]
        height = base * (1 - influence) + continent * influence

        regional = self.height_noise.get_fbm(
            x + 25000, y + 25000, scale=o["regional_scale"], octaves=2, persistence=0.5
        )
        height += (regional - 0.5) * o["regional_influence"]

        mountain = self.height_noise.get_fbm(
            x + 15000, y + 15000,
            scale=o["mountain_scale"], octaves=o["mountain_octaves"],
            persistence=0.5, lacunarity=2.0, ridged=True
        )
        threshold = o["mountain_threshold"]
        if mountain > threshold:
            # Mountains only rise out of land, scaled by how continental it is.
            excess = (mountain - threshold) / (1 - threshold)
            height += excess * o["mountain_strength"] * continent

        height = _clamp01(height + o["height_bias"])
        height = height ** o["peak_exponent"]

        detail = self.detail_noise.get_fbm(
            x, y, scale=o["detail_scale"], octaves=o["detail_octaves"], persistence=0.5
        )
        amplitude = o["detail_amplitude"]
        return _clamp01(height + detail * amplitude - amplitude / 2)


class MoistureField:
    """Noise moisture shaped by nearby water, rain shadow and elevation."""

    def __init__(self, noise: NoiseField, options: dict, water_level: float):
        self.noise = noise
        self.options = options
        self.water_level = water_level

        radius = options["water_radius"]
        self._water_offsets = []
        max_weight = 0.0
        for dy in range(-radius, radius + 1):
            for dx in range(-radius, radius + 1):
                dist = math.sqrt(dx * dx + dy * dy)
                if dist == 0 or dist > radius:
                    continue
                weight = (radius - dist) ** 2
                self._water_offsets.append((dx, dy, weight))
                max_weight += weight * options["large_water_multiplier"]
        self._water_saturation = max_weight * options["water_saturation"]

    def moisture_at(self, x: int, y: int, heights: HeightSource) -> float:
        o = self.options
        moisture = self.noise.get_fbm(
            x, y,
            scale=o["scale"], octaves=o["octaves"],
            persistence=o["persistence"], lacunarity=o["lacunarity"]
        )
        region = self.noise.get_fbm(
            x + 2000, y + 2000, scale=o["region_scale"], octaves=2, persistence=0.5
        )
        moisture += (region - 0.5) * o["moisture_influence"]

        height = heights.height_at(x, y)
        moisture *= self.water_proximity_factor(x, y, heights)
        moisture *= self.rain_shadow_factor(x, y, height, heights)
        moisture *= self.elevation_factor(height)

        return _clamp01(moisture) ** o["moisture_contrast"]

    def water_proximity_factor(self, x: int, y: int, heights: HeightSource) -> float:
        """>= 1.0; grows with the amount of water within the scan radius."""
        o = self.options
        large_water = self.water_level - o["large_water_depth"]
        accumulated = 0.0
        for dx, dy, weight in self._water_offsets:
            neighbour = heights.height_at(x + dx, y + dy)
            if neighbour < self.water_level:
                if neighbour < large_water:
                    weight *= o["large_water_multiplier"]
                accumulated += weight

        proximity = min(1.0, accumulated / self._water_saturation)
        return 1.0 + o["water_boost"] * proximity

    def rain_shadow_factor(self, x: int, y: int, height: float, heights: HeightSource) -> float:
        """In [rain_shadow_floor, 1]; lower behind terrain that rises upwind."""
        o = self.options
        ux, uy = o["rain_shadow_direction"]
        step = o["rain_shadow_step"]
        max_excess = 0.0
        for distance in range(step, o["rain_shadow_distance"] + 1, step):
            upwind = heights.height_at(x + ux * distance, y + uy * distance)
            max_excess = max(max_excess, upwind - height)
        return max(o["rain_shadow_floor"], 1.0 - max_excess * o["rain_shadow_strength"])

    def elevation_factor(self, height: float) -> float:
        if height > 0.8:
            return 0.8
        if 0.5 <= height <= 0.7:
            return 1.1
        if self.water_level <= height < self.water_level + 0.05:
            return 1.2
        return 1.0


def measure_slope(heights: HeightSource, x: int, y: int) -> float:
    """Central-difference gradient magnitude from the four cardinal neighbours."""
    dx = heights.height_at(x + 1, y) - heights.height_at(x - 1, y)
    dy = heights.height_at(x, y - 1) - heights.height_at(x, y + 1)
    return math.sqrt(dx * dx + dy * dy) * 0.5


def classify_cliff(slope: float, height: float, options: dict) -> tuple[bool, bool]:
    """Returns (is_cliff, is_high_cliff). A high cliff is always also a cliff."""
    is_cliff = slope > options["cliff_slope"]
    is_high_cliff = is_cliff and slope > options["high_cliff_slope"] and height > options["high_cliff_height"]
    return is_cliff, is_high_cliff
