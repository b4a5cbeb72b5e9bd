import random

import pytest

from terrain_generator import TerrainGenerator

SEED = 8675309
SAMPLE_COUNT = 10_000


@pytest.fixture
def generator():
    return TerrainGenerator(SEED)


@pytest.fixture(scope="session")
def wet_generator():
    """A world with a low river threshold, so rivers are common in small samples."""
    return TerrainGenerator(SEED, config={"river": {"river_threshold": 1.0}})


@pytest.fixture(scope="session")
def sampled_tiles():
    """10,000 tiles at pseudo-random coordinates, as (x, y, tile) triples."""
    gen = TerrainGenerator(SEED)
    rng = random.Random(1234)
    samples = []
    for _ in range(SAMPLE_COUNT):
        x = rng.randint(-50_000, 50_000)
        y = rng.randint(-50_000, 50_000)
        samples.append((x, y, gen.get_terrain_data(x, y)))
    return samples
