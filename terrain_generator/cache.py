# terrain_generator/cache.py

"""
Bounded tile cache and chunk helpers.

Entries are keyed by the (x, y) tuple. Python dicts keep insertion order, so
trimming drops the oldest entries first (FIFO, not LRU).
"""

import itertools
import math
import threading

from . import config as DEFAULTS


def get_chunk_key(x: int, y: int, chunk_size: int = DEFAULTS.CHUNK_SIZE) -> tuple[int, int]:
    """The chunk containing tile (x, y). Floors, so negative tiles map correctly."""
    return math.floor(x / chunk_size), math.floor(y / chunk_size)


def get_chunk_bounds(chunk_x: int, chunk_y: int, chunk_size: int = DEFAULTS.CHUNK_SIZE) -> tuple[int, int, int, int]:
    """(min_x, min_y, max_x, max_y) of a chunk, inclusive on both ends."""
    min_x = chunk_x * chunk_size
    min_y = chunk_y * chunk_size
    return min_x, min_y, min_x + chunk_size - 1, min_y + chunk_size - 1


class TerrainCache:

    def __init__(self, max_size: int = DEFAULTS.DEFAULT_INITIAL_CACHE_SIZE):
        if max_size < 1:
            raise ValueError(f"Cache size must be positive, got {max_size}")
        self.max_size = int(max_size)
        self._entries = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key) -> bool:
        return key in self._entries

    def get(self, x: int, y: int):
        return self._entries.get((x, y))

    def put(self, x: int, y: int, value) -> int:
        """Stores a tile. Returns the number of entries evicted to stay in budget."""
        with self._lock:
            self._entries[(x, y)] = value
            if len(self._entries) > self.max_size:
                return self.trim()
            return 0

    def trim(self) -> int:
        """Drops the oldest entries until the cache holds half its budget."""
        with self._lock:
            excess = len(self._entries) - self.max_size // 2
            if excess <= 0:
                return 0
            stale = list(itertools.islice(self._entries, excess))
            for key in stale:
                del self._entries[key]
            return len(stale)

    def resize(self, max_size: int) -> int:
        """Sets a new budget, trimming immediately if the cache is now over it."""
        with self._lock:
            self.max_size = max(1, int(max_size))
            if len(self._entries) > self.max_size:
                return self.trim()
            return 0

    def clear_chunk(self, chunk_x: int, chunk_y: int, chunk_size: int = DEFAULTS.CHUNK_SIZE) -> int:
        """Removes every cached tile inside the chunk. Returns the number removed."""
        min_x, min_y, max_x, max_y = get_chunk_bounds(chunk_x, chunk_y, chunk_size)
        with self._lock:
            if chunk_size * chunk_size < len(self._entries):
                candidates = [
                    (x, y)
                    for y in range(min_y, max_y + 1)
                    for x in range(min_x, max_x + 1)
                ]
            else:
                candidates = list(self._entries)

            removed = 0
            for key in candidates:
                x, y = key
                if min_x <= x <= max_x and min_y <= y <= max_y and key in self._entries:
                    del self._entries[key]
                    removed += 1
            return removed

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
