# terrain_generator/hydrology.py

"""
================================================================================
HYDROLOGY NETWORK
================================================================================
Derives the three fresh-water channels of a tile, in order:

1. River value     - the valleys of a ridged noise field, steered by the height
                     gradient and pulled toward nearby standing water. Rivers
                     only run on land and never flow uphill: away from the
                     coast a river tile always has a strictly lower
                     neighbour, unless it is a mountain source.
2. Lake value      - basin lakes in flat depressions near (not on) rivers, and
                     small ponds kept clear of any river.
3. Capillary value - hair-thin streams, only where no river or lake claims the
                     tile, capped so they always render thinner than streams.

Data Contract:
---------------
- Inputs: a HeightSource for every height query (never the tile cache) and,
  for lakes and capillaries, a WaterSource for river lookups at neighbouring
  tiles.
- Outputs: floats in [0, 1]; capillary values never exceed the configured cap.
- Side Effects: None.
================================================================================
"""

import math
from typing import Protocol

from .fields import HeightSource
from .noise import NoiseField

# (dx, dy, weight): cardinals count more than diagonals in the flow gradient.
_FLOW_NEIGHBOURS = (
    (0, -1, 0.6), (0, 1, 0.6), (1, 0, 0.6), (-1, 0, 0.6),
    (1, -1, 0.2), (-1, -1, 0.2), (1, 1, 0.2), (-1, 1, 0.2),
)
_CARDINALS = ((0, -1), (0, 1), (1, 0), (-1, 0))


class WaterSource(Protocol):
    """Anything that can report the river value at an arbitrary tile."""

    def river_value(self, x: int, y: int) -> float: ...


def _disk_offsets(radius: int) -> list[tuple[int, int, float]]:
    """(dx, dy, distance) for every cell of the disk except the centre, nearest first."""
    offsets = []
    for dy in range(-radius, radius + 1):
        for dx in range(-radius, radius + 1):
            dist = math.sqrt(dx * dx + dy * dy)
            if 0 < dist <= radius:
                offsets.append((dx, dy, dist))
    offsets.sort(key=lambda o: o[2])
    return offsets


class HydrologyNetwork:

    def __init__(
        self, river_noise: NoiseField, lake_noise: NoiseField,
        river_options: dict, lake_options: dict, capillary_options: dict,
        water_level: float
    ):
        self.river_noise = river_noise
        self.lake_noise = lake_noise
        self.river = river_options
        self.lake = lake_options
        self.capillary = capillary_options
        self.water_level = water_level

        self._river_scan = _disk_offsets(river_options["water_radius"])
        self._capillary_scan = _disk_offsets(capillary_options["water_radius"])

    # --- Rivers ---

    def surface_flow(self, x: int, y: int, heights: HeightSource) -> tuple[float, float, float, float]:
        """
        Returns (gx, gy, magnitude, height_drop) for the tile. (gx, gy) points
        downhill; height_drop is the tile's height minus its lowest neighbour
        among all eight.
        """
        height = heights.height_at(x, y)
        gx = 0.0
        gy = 0.0
        lowest = math.inf
        for dx, dy, weight in _FLOW_NEIGHBOURS:
            neighbour = heights.height_at(x + dx, y + dy)
            drop = height - neighbour
            gx += weight * drop * dx
            gy += weight * drop * dy
            lowest = min(lowest, neighbour)
        gx *= 0.5
        gy *= 0.5
        return gx, gy, math.hypot(gx, gy), height - lowest

    def is_mountain_source(self, x: int, y: int, heights: HeightSource) -> bool:
        """High, steep tiles where rivers may spring regardless of local drops."""
        o = self.river
        if heights.height_at(x, y) <= o["mountain_source_height"]:
            return False
        _, _, magnitude, _ = self.surface_flow(x, y, heights)
        return magnitude > o["mountain_source_gradient"]

    def river_value(self, x: int, y: int, heights: HeightSource) -> float:
        o = self.river
        height = heights.height_at(x, y)

        # No rivers above the snowline, and none out at sea.
        if height > o["snowline"] or height < self.water_level:
            return 0.0

        ridge = self.river_noise.get_fbm(
            x + 5000, y + 5000,
            scale=o["scale"], octaves=o["octaves"], persistence=0.5,
            lacunarity=o["lacunarity"], ridged=True
        )
        # High in the valleys between ridge lines.
        valley = 1.0 - ridge

        gx, gy, magnitude, height_drop = self.surface_flow(x, y, heights)
        mountain_source = (
            height > o["mountain_source_height"] and magnitude > o["mountain_source_gradient"]
        )

        if (magnitude < o["flat_gradient"] and valley < o["weak_channel"]
                and height_drop <= 0 and not mountain_source):
            return 0.0

        # Rivers cannot flow uphill.
        if height_drop <= 0 and height > self.water_level + o["uphill_margin"] and not mountain_source:
            return 0.0

        water_dx, water_dy, water_proximity = self._water_attraction(x, y, heights)

        # Blend the downhill direction with the pull of nearby water.
        if magnitude > 0:
            flow_x = gx / magnitude
            flow_y = gy / magnitude
        else:
            flow_x = flow_y = 0.0
        blend = 0.5 * water_proximity
        flow_x = flow_x * (1 - blend) + water_dx * blend
        flow_y = flow_y * (1 - blend) + water_dy * blend
        alignment = max(0.0, flow_x * water_dx + flow_y * water_dy)

        flow_factor = min(1.0, magnitude * o["flow_sensitivity"])

        value = valley * o["ridge_sharpness"]
        value += water_proximity * 0.25 * (1 + alignment)
        value += min(1.0, max(0.0, height_drop) * 20) * o["flow_directionality"] * 0.3
        if mountain_source:
            value += 0.2

        if flow_factor > 0.3 or mountain_source:
            branch = self.river_noise.get_fbm(
                x + 6000, y + 6000, scale=o["branch_scale"], octaves=2, persistence=0.5, ridged=True
            )
            value += max(0.0, branch - o["branch_threshold"]) * 0.8

        arterial = self.river_noise.get_fbm(
            x * 0.4 + 8000, y * 0.4 + 8000,
            scale=o["arterial_scale"], octaves=2, persistence=0.6, lacunarity=1.6
        )
        is_arterial = arterial > o["arterial_threshold"] and valley > o["arterial_channel"]
        if is_arterial:
            value += o["arterial_bonus"] * valley

        value *= 0.7 + 0.3 * flow_factor
        value *= o["river_density"]

        threshold = o["river_threshold"]
        if water_proximity > 0.3:
            threshold -= o["water_relaxation"]
        if mountain_source:
            threshold -= o["mountain_relaxation"]

        if value <= threshold:
            return 0.0

        raw = value - threshold
        width = self.river_width_modifier(height, raw, is_arterial, mountain_source)
        return min(1.0, raw * width)

    def _water_attraction(self, x: int, y: int, heights: HeightSource) -> tuple[float, float, float]:
        """Unit vector toward nearby standing water and a [0, 1] proximity weight."""
        o = self.river
        radius = o["water_radius"]
        ocean_level = self.water_level - o["ocean_depth"]
        wx = 0.0
        wy = 0.0
        network = 0.0
        for dx, dy, dist in self._river_scan:
            neighbour = heights.height_at(x + dx, y + dy)
            if neighbour >= self.water_level:
                continue
            pull = (radius + 1 - dist) / (radius + 1)
            if neighbour < ocean_level:
                pull *= o["ocean_pull"]
            wx += dx / dist * pull
            wy += dy / dist * pull
            network += pull

        length = math.hypot(wx, wy)
        if length > 0:
            wx /= length
            wy /= length
        return wx, wy, min(1.0, network / o["water_network_saturation"])

    def river_width_modifier(self, height: float, raw_value: float, is_arterial: bool, mountain_source: bool) -> float:
        """
        Width multiplier for a river that crossed its threshold by `raw_value`.

        Three tiers: narrow mountain rivers, standard rivers and wide arterial
        rivers, all widening downstream. Values that would still land in the
        stream band are cut by 40-60%, so a stream is always thinner than a
        standard river at the same place.
        """
        o = self.river
        width = o["river_width"] * ((1.0 - height) * 0.5 + 0.5)
        if mountain_source or height > 0.7:
            width *= 0.7
        elif is_arterial:
            width *= 1.5

        band = o["stream_band"]
        scaled = raw_value * width
        if scaled < band:
            reduction = 0.4 + 0.2 * (1.0 - scaled / band)
            width *= 1.0 - reduction
        return width

    # --- Lakes ---

    def _flatness(self, x: int, y: int, height: float, heights: HeightSource) -> tuple[float, bool]:
        """Returns (flatness, is_depression) from the four cardinal neighbours."""
        cardinals = [heights.height_at(x + dx, y + dy) for dx, dy in _CARDINALS]
        average_slope = sum(abs(c - height) for c in cardinals) / len(cardinals)
        return max(0.0, 1.0 - average_slope * 10), height < min(cardinals)

    def lake_value(self, x: int, y: int, heights: HeightSource, water: WaterSource) -> float:
        o = self.lake
        height = heights.height_at(x, y)

        lake = 0.0
        if o["min_height"] <= height <= o["max_height"]:
            lake = self._basin_lake_value(x, y, height, heights, water)

        pond = 0.0
        if o["pond_min_height"] <= height <= o["pond_max_height"]:
            pond = self._pond_value(x, y, height, heights, water)

        return min(1.0, max(lake, pond))

    def _basin_lake_value(self, x: int, y: int, height: float, heights: HeightSource, water: WaterSource) -> float:
        o = self.lake
        flatness, is_depression = self._flatness(x, y, height, heights)
        if flatness <= 0:
            return 0.0

        distribution = self.lake_noise.get_fbm(x + 3000, y + 3000, scale=o["scale"], octaves=2, persistence=0.5)
        shape = self.lake_noise.get_fbm(x + 4000, y + 4000, scale=o["shape_scale"], octaves=1, persistence=0.3)

        smoothness = o["lake_smoothness"]
        score = (
            (shape * smoothness + (1 - smoothness))
            * (1.4 if is_depression else 1.0)
            * flatness
            * distribution
        )

        threshold = o["lake_threshold"]
        # River influence raises the score by at most 1.3x.
        if score * 1.3 <= threshold:
            return 0.0

        if water.river_value(x, y) > o["on_river"]:
            score *= 0.6
        elif max(water.river_value(x + dx, y + dy) for dx, dy in _CARDINALS) > o["min_river_influence"]:
            score *= 1.3
        else:
            score *= 0.9

        if score <= threshold:
            return 0.0
        return min(1.0, (score - threshold) * o["lake_rescale"])

    def _pond_value(self, x: int, y: int, height: float, heights: HeightSource, water: WaterSource) -> float:
        o = self.lake
        pond_noise = self.lake_noise.get_fbm(x + 9000, y + 9000, scale=o["pond_scale"], octaves=2, persistence=0.5)
        if pond_noise <= o["pond_threshold"]:
            return 0.0

        radius = o["pond_river_radius"]
        for dy in range(-radius, radius + 1):
            for dx in range(-radius, radius + 1):
                if water.river_value(x + dx, y + dy) > o["pond_river_limit"]:
                    return 0.0

        flatness, _ = self._flatness(x, y, height, heights)
        return min(o["pond_cap"], (pond_noise - o["pond_threshold"]) * o["pond_rescale"] * flatness)

    # --- Capillary streams ---

    def capillary_value(self, x: int, y: int, heights: HeightSource, water: WaterSource = None) -> float:
        """
        Hair-thin stream value, capped at `cap`. Streams are drawn toward the
        nearest water within `water_radius`: tiles under water level and, when
        `water` is given, river tiles.
        """
        o = self.capillary
        height = heights.height_at(x, y)
        if height < self.water_level + o["min_height_above_water"] or height > o["max_height"]:
            return 0.0

        channel = self.river_noise.get_fbm(
            x + 11000, y + 11000, scale=o["scale"], octaves=2, persistence=0.5, ridged=True
        )
        network = self.river_noise.get_fbm(
            x + 12000, y + 12000, scale=o["network_scale"], octaves=2, persistence=0.5
        )
        score = channel ** 3 * (0.5 + network)

        threshold = o["threshold"]
        radius = o["water_radius"]
        # The proximity bonus never exceeds 0.3.
        if score + 0.3 <= threshold:
            return 0.0

        for dx, dy, dist in self._capillary_scan:
            nx, ny = x + dx, y + dy
            is_water = heights.height_at(nx, ny) < self.water_level
            if not is_water and water is not None:
                is_water = water.river_value(nx, ny) > 0
            if not is_water:
                continue
            # Nearest water found; favour channels that run downhill toward it.
            gx = heights.height_at(x - 1, y) - heights.height_at(x + 1, y)
            gy = heights.height_at(x, y - 1) - heights.height_at(x, y + 1)
            magnitude = math.hypot(gx, gy)
            alignment = 0.0
            if magnitude > 0:
                alignment = max(0.0, (gx * dx + gy * dy) / (magnitude * dist))
            score += (radius + 1 - dist) / (radius + 1) * 0.2 * (0.5 + alignment)
            break

        if score <= threshold:
            return 0.0
        return min(o["cap"], (score - threshold) * o["rescale"])
