# terrain_generator/survey.py

"""
================================================================================
REGION SURVEY SCRIPT
================================================================================
A command-line tool that samples a rectangular region of a world chunk by
chunk and reports what it contains: biome counts, rarity tiers, water and
volcanic features, and the dominant biome of every chunk.

Chunks are processed in parallel, one TerrainGenerator per worker process.

Usage:
    terrain-survey --seed 8675309 --origin -200 -200 --size 400 400
    python -m terrain_generator.survey --config path/to/config.json --output report.json
================================================================================
"""
import os
import sys
import json
import logging
import argparse
import time
import collections
import multiprocessing

import numpy as np
from tqdm import tqdm

from . import config as DEFAULTS
from .cache import get_chunk_key
from .generator import TerrainGenerator

FEATURE_KEYS = ("river", "lake", "capillary", "lava", "scorched", "cliff", "high_cliff")

# --- Global variables for worker processes ---
worker_generator = None


def init_worker(seed, world_params, chunk_size):
    """Initializes the generator for each worker process."""
    global worker_generator

    worker_logger = logging.getLogger(f"Worker-{os.getpid()}")
    worker_generator = TerrainGenerator(seed, config=world_params, logger=worker_logger)
    # Every tile is visited once, so the budget only needs to cover a chunk.
    worker_generator.update_cache_size(chunk_size, chunk_size, chunk_size)


def process_chunk(task):
    """
    Samples every tile of one chunk that lies inside the surveyed region.
    Returns only the tallies, never the tiles themselves.
    """
    cx, cy, min_x, min_y, max_x, max_y = task
    biomes = collections.Counter()
    rarities = collections.Counter()
    features = collections.Counter()

    for y in range(min_y, max_y + 1):
        for x in range(min_x, max_x + 1):
            tile = worker_generator.get_terrain_data(x, y)
            biomes[tile.biome.name] += 1
            rarities[tile.biome.rarity] += 1
            if tile.river_value > 0:
                features["river"] += 1
            if tile.lake_value > 0:
                features["lake"] += 1
            if tile.capillary_value > 0:
                features["capillary"] += 1
            if tile.lava_value > 0:
                features["lava"] += 1
            if tile.scorched_value > 0:
                features["scorched"] += 1
            if tile.is_cliff:
                features["cliff"] += 1
            if tile.is_high_cliff:
                features["high_cliff"] += 1

    dominant = biomes.most_common(1)[0][0] if biomes else None
    return {
        'cx': cx, 'cy': cy,
        'biomes': dict(biomes), 'rarities': dict(rarities), 'features': dict(features),
        'dominant': dominant,
    }


def build_tasks(origin_x: int, origin_y: int, width: int, height: int, chunk_size: int) -> list:
    """Chunk-aligned tasks covering the region, each clipped to the region."""
    end_x = origin_x + width - 1
    end_y = origin_y + height - 1
    first_cx, first_cy = get_chunk_key(origin_x, origin_y, chunk_size)
    last_cx, last_cy = get_chunk_key(end_x, end_y, chunk_size)

    tasks = []
    for cy in range(first_cy, last_cy + 1):
        for cx in range(first_cx, last_cx + 1):
            tasks.append((
                cx, cy,
                max(origin_x, cx * chunk_size), max(origin_y, cy * chunk_size),
                min(end_x, (cx + 1) * chunk_size - 1), min(end_y, (cy + 1) * chunk_size - 1),
            ))
    return tasks


def load_world_params(config_path: str) -> dict:
    with open(config_path, 'r') as f:
        config = json.load(f)
    return config.get('world_generation_parameters', {})


# --- Main Survey Function ---
def survey_region(seed, world_params, origin, size, chunk_size, num_workers, logger) -> dict:
    """Surveys the region and returns the aggregated report."""
    origin_x, origin_y = origin
    width, height = size
    tasks = build_tasks(origin_x, origin_y, width, height, chunk_size)
    first_cx, first_cy = tasks[0][0], tasks[0][1]
    last_cx, last_cy = tasks[-1][0], tasks[-1][1]

    manifest = np.empty((last_cy - first_cy + 1, last_cx - first_cx + 1), dtype=object)
    biomes = collections.Counter()
    rarities = collections.Counter()
    features = collections.Counter({key: 0 for key in FEATURE_KEYS})

    logger.info(
        f"Surveying {width}x{height} tiles at ({origin_x}, {origin_y}) "
        f"in {len(tasks)} chunks of {chunk_size}x{chunk_size}..."
    )
    start_time = time.perf_counter()

    init_args = (seed, world_params, chunk_size)
    if num_workers == 1:
        init_worker(*init_args)
        results_iterator = map(process_chunk, tasks)
        pool = None
    else:
        logger.info(f"Using {num_workers} worker processes.")
        pool = multiprocessing.Pool(processes=num_workers, initializer=init_worker, initargs=init_args)
        results_iterator = pool.imap_unordered(process_chunk, tasks)

    try:
        for result in tqdm(results_iterator, total=len(tasks), desc="Surveying Chunks"):
            manifest[result['cy'] - first_cy, result['cx'] - first_cx] = result['dominant']
            biomes.update(result['biomes'])
            rarities.update(result['rarities'])
            features.update(result['features'])
    finally:
        if pool is not None:
            pool.close()
            pool.join()

    elapsed = time.perf_counter() - start_time
    total_tiles = width * height
    logger.info(f"Survey complete! {total_tiles} tiles in {elapsed:.2f} seconds.")

    return {
        'seed': seed,
        'origin': [origin_x, origin_y],
        'size': [width, height],
        'chunk_size': chunk_size,
        'first_chunk': [first_cx, first_cy],
        'tiles': total_tiles,
        'biomes': dict(biomes.most_common()),
        'rarities': {tier: rarities.get(tier, 0) for tier in DEFAULTS.RARITY_TIERS},
        'features': dict(features),
        'dominant_biomes': manifest.tolist(),
        'elapsed_seconds': round(elapsed, 3),
    }


def log_summary(report: dict, logger: logging.Logger) -> None:
    tiles = report['tiles']
    logger.info("--- Biomes ---")
    for name, count in list(report['biomes'].items())[:10]:
        logger.info(f"  - {name}: {count} ({100.0 * count / tiles:.1f}%)")
    logger.info("--- Rarity ---")
    for tier, count in report['rarities'].items():
        logger.info(f"  - {tier}: {count}")
    logger.info("--- Features ---")
    for feature, count in report['features'].items():
        logger.info(f"  - {feature}: {count}")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Survey a region of an infinite seeded terrain world.")
    parser.add_argument("--seed", type=int, default=None, help="World seed. Overrides the seed in --config.")
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON file whose 'world_generation_parameters' object holds the seed and option overrides."
    )
    parser.add_argument("--origin", type=int, nargs=2, default=(0, 0), metavar=("X", "Y"), help="Top-left tile of the region.")
    parser.add_argument("--size", type=int, nargs=2, default=(100, 100), metavar=("W", "H"), help="Region size in tiles.")
    parser.add_argument("--chunk-size", type=int, default=DEFAULTS.CHUNK_SIZE, help="Chunk edge length in tiles.")
    parser.add_argument(
        "--workers", type=int, default=max(1, multiprocessing.cpu_count() - 1),
        help="Number of worker processes. 1 runs in-process."
    )
    parser.add_argument("--output", type=str, default=None, help="Write the JSON report to this path.")
    parser.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    # 1. --- Setup Logging ---
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    logger = logging.getLogger("Survey")

    # 2. --- Load Configuration ---
    world_params = {}
    if args.config:
        logger.info(f"Loading configuration from: {args.config}")
        try:
            world_params = dict(load_world_params(args.config))
        except (FileNotFoundError, json.JSONDecodeError) as e:
            logger.critical(f"Failed to load or parse config file: {e}")
            return 1

    config_seed = world_params.pop('seed', None)
    seed = args.seed if args.seed is not None else config_seed
    if seed is None:
        logger.critical("No world seed given. Pass --seed or set 'seed' in the config file.")
        return 1

    if args.size[0] < 1 or args.size[1] < 1 or args.chunk_size < 1 or args.workers < 1:
        logger.critical("--size, --chunk-size and --workers must all be positive.")
        return 1

    # 3. --- Validate the world before spawning workers ---
    try:
        TerrainGenerator(seed, config=world_params, logger=logger)
    except (ValueError, TypeError) as e:
        logger.critical(f"Invalid world configuration: {e}")
        return 1

    # 4. --- Survey ---
    report = survey_region(
        seed, world_params, tuple(args.origin), tuple(args.size),
        args.chunk_size, args.workers, logger
    )
    log_summary(report, logger)

    # 5. --- Finalization ---
    if args.output:
        output_dir = os.path.dirname(args.output)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
        with open(args.output, 'w') as f:
            json.dump(report, f, indent=2)
        logger.info(f"Survey report saved to: {args.output}")

    return 0


# --- Command-Line Interface ---
if __name__ == "__main__":
    sys.exit(main())
