# terrain_generator/noise.py

"""
================================================================================
NOISE GENERATION UTILITIES
================================================================================
This module provides seeded 2D simplex noise and its fractal compositions
(fBM and ridged fBM). The kernels are pure functions of their inputs and are
JIT-compiled with Numba; `NoiseField` binds them to one seeded permutation
table.

Data Contract:
---------------
- Inputs:
    - seed: An integer that fixes the permutation table.
    - x, y: Coordinates (any real numbers, positive or negative).
    - scale, octaves, persistence, lacunarity, amplitude, frequency, ridged:
      Standard fractal noise parameters.
- Outputs:
    - noise_2d: a float in [-1, 1].
    - get_fbm / get_noise: a float in [0, 1].
- Side Effects: None.
- Invariants: Every permutation lookup is masked with `& 255` before use, so
  the table index is always in [0, 511] for any integer lattice cell.
================================================================================
"""

import math

import numpy as np
from numba import njit

from . import config as DEFAULTS

# Skew and unskew factors for the 2D simplex grid.
_F2 = 0.5 * (math.sqrt(3.0) - 1.0)
_G2 = (3.0 - math.sqrt(3.0)) / 6.0

# The 12 classic gradient directions, projected onto the xy plane.
_GRADIENT_VECTORS = np.array([
    [1.0, 1.0], [-1.0, 1.0], [1.0, -1.0], [-1.0, -1.0],
    [1.0, 0.0], [-1.0, 0.0], [1.0, 0.0], [-1.0, 0.0],
    [0.0, 1.0], [0.0, -1.0], [0.0, 1.0], [0.0, -1.0],
])


def build_permutation_tables(seed: int) -> tuple[np.ndarray, np.ndarray]:
    """
    Builds the 512-entry permutation table and its `mod 12` companion.

    The values 0..255 are shuffled with a Fisher-Yates pass driven by a
    linear congruential generator seeded from `seed`, then duplicated so that
    `perm[i + perm[j]]` never needs a second wrap.
    """
    p = np.arange(256, dtype=np.int64)
    state = int(seed) & DEFAULTS.LCG_MODULUS_MASK

    for n in range(255, 0, -1):
        state = (DEFAULTS.LCG_MULTIPLIER * state + DEFAULTS.LCG_INCREMENT) & DEFAULTS.LCG_MODULUS_MASK
        # Use the high bits; the low bits of an LCG have short periods.
        q = (state * (n + 1)) >> 32
        p[n], p[q] = p[q], p[n]

    perm = np.concatenate([p, p])
    return perm, perm % 12


@njit
def simplex_2d(perm, perm_mod12, x, y):
    """2D simplex noise in [-1, 1] for one point."""
    # Skew the input space to find the simplex cell.
    s = (x + y) * _F2
    i = int(np.floor(x + s))
    j = int(np.floor(y + s))

    t = (i + j) * _G2
    x0 = x - (i - t)
    y0 = y - (j - t)

    # Lower or upper triangle of the cell.
    if x0 > y0:
        i1 = 1
        j1 = 0
    else:
        i1 = 0
        j1 = 1

    x1 = x0 - i1 + _G2
    y1 = y0 - j1 + _G2
    x2 = x0 - 1.0 + 2.0 * _G2
    y2 = y0 - 1.0 + 2.0 * _G2

    ii = i & 255
    jj = j & 255

    n0 = 0.0
    n1 = 0.0
    n2 = 0.0

    t0 = 0.5 - x0 * x0 - y0 * y0
    if t0 >= 0.0:
        gi0 = perm_mod12[ii + perm[jj]]
        t0 *= t0
        n0 = t0 * t0 * (_GRADIENT_VECTORS[gi0, 0] * x0 + _GRADIENT_VECTORS[gi0, 1] * y0)

    t1 = 0.5 - x1 * x1 - y1 * y1
    if t1 >= 0.0:
        gi1 = perm_mod12[((ii + i1) & 255) + perm[(jj + j1) & 255]]
        t1 *= t1
        n1 = t1 * t1 * (_GRADIENT_VECTORS[gi1, 0] * x1 + _GRADIENT_VECTORS[gi1, 1] * y1)

    t2 = 0.5 - x2 * x2 - y2 * y2
    if t2 >= 0.0:
        gi2 = perm_mod12[((ii + 1) & 255) + perm[(jj + 1) & 255]]
        t2 *= t2
        n2 = t2 * t2 * (_GRADIENT_VECTORS[gi2, 0] * x2 + _GRADIENT_VECTORS[gi2, 1] * y2)

    value = 70.0 * (n0 + n1 + n2)
    return min(1.0, max(-1.0, value))


@njit
def fbm_2d(perm, perm_mod12, x, y, scale, octaves, persistence, lacunarity, amplitude, frequency, ridged):
    """
    Fractal Brownian motion over `simplex_2d`, normalized to [0, 1].
    Ridged octaves use (1 - |n|)^2, which peaks sharply along the noise's
    zero crossings.
    """
    value = 0.0
    max_value = 0.0
    amp = amplitude
    freq = frequency

    for _ in range(octaves):
        n = simplex_2d(perm, perm_mod12, x * freq * scale, y * freq * scale)
        if ridged:
            octave_value = 1.0 - abs(n)
            octave_value *= octave_value
        else:
            octave_value = n * 0.5 + 0.5

        value += amp * octave_value
        max_value += amp
        amp *= persistence
        freq *= lacunarity

    if max_value <= 0.0:
        return 0.0
    return min(1.0, max(0.0, value / max_value))


class NoiseField:
    """One seeded noise layer. Immutable once constructed."""

    def __init__(self, seed: int):
        self.seed = seed
        self._perm, self._perm_mod12 = build_permutation_tables(seed)

    @property
    def permutation_table(self) -> np.ndarray:
        return self._perm

    def noise_2d(self, x: float, y: float) -> float:
        return float(simplex_2d(self._perm, self._perm_mod12, float(x), float(y)))

    def get_fbm(
        self, x: float, y: float,
        scale: float = 0.005, octaves: int = 6, persistence: float = 0.5,
        lacunarity: float = 2.0, amplitude: float = 1.0, frequency: float = 1.0,
        ridged: bool = False
    ) -> float:
        return float(fbm_2d(
            self._perm, self._perm_mod12, float(x), float(y),
            float(scale), int(octaves), float(persistence), float(lacunarity),
            float(amplitude), float(frequency), bool(ridged)
        ))

    def get_noise(self, x: float, y: float, **options) -> float:
        """Alias for `get_fbm` with the same defaults."""
        return self.get_fbm(x, y, **options)
