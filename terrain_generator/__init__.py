# terrain_generator/__init__.py

# This file makes the 'terrain_generator' directory a Python package.
# It also defines the public API of the package.

from .generator import TerrainGenerator
from .tile import TileResult, BiomeInfo
from .color_maps import Biome, get_biome_by_name, get_biome_resources
from .cache import TerrainCache, get_chunk_key, get_chunk_bounds
from .noise import NoiseField

__all__ = [
    "TerrainGenerator",
    "TileResult",
    "BiomeInfo",
    "Biome",
    "get_biome_by_name",
    "get_biome_resources",
    "TerrainCache",
    "get_chunk_key",
    "get_chunk_bounds",
    "NoiseField",
]
