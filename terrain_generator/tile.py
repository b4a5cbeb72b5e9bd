# terrain_generator/tile.py

"""Immutable per-tile records produced by the generator and held in the cache."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BiomeInfo:
    name: str
    color: str
    rarity: str

    def to_dict(self) -> dict:
        return {"name": self.name, "color": self.color, "rarity": self.rarity}


@dataclass(frozen=True)
class TileResult:
    height: float
    moisture: float
    continent: float
    slope: float
    river_value: float
    lake_value: float
    capillary_value: float
    lava_value: float
    scorched_value: float
    is_cliff: bool
    is_high_cliff: bool
    biome: BiomeInfo

    @property
    def color(self) -> str:
        return self.biome.color

    def to_dict(self) -> dict:
        """Serializes with the camelCase field names of the tile snapshot format."""
        return {
            "height": self.height,
            "moisture": self.moisture,
            "continent": self.continent,
            "slope": self.slope,
            "riverValue": self.river_value,
            "lakeValue": self.lake_value,
            "capillaryValue": self.capillary_value,
            "lavaValue": self.lava_value,
            "scorchedValue": self.scorched_value,
            "isCliff": self.is_cliff,
            "isHighCliff": self.is_high_cliff,
            "biome": self.biome.to_dict(),
            "color": self.color,
        }
