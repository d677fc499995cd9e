# planet_generator/noise.py

"""
================================================================================
NOISE GENERATION UTILITIES
================================================================================
This module provides seeded 3D Perlin (gradient) noise. The kernels are pure,
stateless functions of a permutation table and a coordinate; the
NoiseGenerator class only holds the table built once for a given seed.

Data Contract:
---------------
- Inputs:
    - seed: Any real number. The table is keyed by floor(seed) mod 2**32.
    - x, y, z: Scalars or NumPy arrays (broadcast together).
- Outputs:
    - Noise values in the closed range [-1, 1], with the shape of the
      broadcast inputs.
- Side Effects: None.
- Invariants: Identical seed and coordinates always produce identical values,
  across calls and across generator instances. The scalar and array paths
  share one kernel, so they agree bit-for-bit.
================================================================================
"""

import numpy as np
from numba import njit

from . import config as DEFAULTS


@njit
def _lerp(a, b, x):
    "Linear interpolation."
    return a + x * (b - a)


@njit
def _fade(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6 - 15) + 10)


@njit
def _gradient(h, x, y, z):
    """Dot product between one of the 12 cube-edge gradients and (x, y, z)."""
    h = h & 15
    u = x if h < 8 else y
    if h < 4:
        v = y
    elif h == 12 or h == 14:
        v = x
    else:
        v = z
    if h & 1:
        u = -u
    if h & 2:
        v = -v
    return u + v


@njit
def perlin_noise_3d(p, x, y, z):
    """
    Sample 3D Perlin noise at a single point using a doubled permutation table.
    JIT-compiled with Numba; the result is clamped to [-1, 1].
    """
    x_floor = np.floor(x)
    y_floor = np.floor(y)
    z_floor = np.floor(z)

    xi = int(x_floor) & 255
    yi = int(y_floor) & 255
    zi = int(z_floor) & 255

    xf = x - x_floor
    yf = y - y_floor
    zf = z - z_floor

    u = _fade(xf)
    v = _fade(yf)
    w = _fade(zf)

    a = p[xi] + yi
    aa = p[a] + zi
    ab = p[a + 1] + zi
    b = p[xi + 1] + yi
    ba = p[b] + zi
    bb = p[b + 1] + zi

    x1 = _lerp(_gradient(p[aa], xf, yf, zf), _gradient(p[ba], xf - 1, yf, zf), u)
    x2 = _lerp(_gradient(p[ab], xf, yf - 1, zf), _gradient(p[bb], xf - 1, yf - 1, zf), u)
    y1 = _lerp(x1, x2, v)

    x1 = _lerp(_gradient(p[aa + 1], xf, yf, zf - 1), _gradient(p[ba + 1], xf - 1, yf, zf - 1), u)
    x2 = _lerp(_gradient(p[ab + 1], xf, yf - 1, zf - 1), _gradient(p[bb + 1], xf - 1, yf - 1, zf - 1), u)
    y2 = _lerp(x1, x2, v)

    value = _lerp(y1, y2, w)
    return min(1.0, max(-1.0, value))


@njit
def perlin_noise_3d_array(p, xs, ys, zs):
    """
    Sample 3D Perlin noise for flat coordinate arrays of equal length.
    Every element is independent, so texture synthesis is one call per octave.
    """
    n = xs.shape[0]
    out = np.empty(n)
    for i in range(n):
        out[i] = perlin_noise_3d(p, xs[i], ys[i], zs[i])
    return out


def seed_to_int(seed) -> int:
    """Maps any real seed onto the unsigned 32-bit range used by the RNG."""
    return int(np.floor(seed)) % (2 ** 32)


def create_permutation_table(seed) -> np.ndarray:
    """
    Builds the doubled (512 entry) permutation table for a seed. The doubling
    lets the kernels index p[p[i] + j] without wrapping.
    """
    p = np.arange(DEFAULTS.PERMUTATION_TABLE_SIZE, dtype=np.int64)
    rng = np.random.default_rng(seed_to_int(seed))
    rng.shuffle(p)
    return np.stack([p, p]).flatten()


class NoiseGenerator:
    """
    Deterministic 3D noise keyed by a seed. Construct once per seed and reuse;
    sampling never mutates the generator.
    """

    def __init__(self, seed):
        self.seed = seed
        self._p = create_permutation_table(seed)

    @property
    def permutation_table(self) -> np.ndarray:
        return self._p

    def sample(self, x: float, y: float, z: float) -> float:
        """Samples a single point. Returns a float in [-1, 1]."""
        return float(perlin_noise_3d(self._p, float(x), float(y), float(z)))

    def sample_array(self, x, y, z) -> np.ndarray:
        """
        Samples noise for scalars or arrays of any (broadcastable) shape.
        Returns an array with the broadcast shape.
        """
        xs, ys, zs = np.broadcast_arrays(
            np.asarray(x, dtype=np.float64),
            np.asarray(y, dtype=np.float64),
            np.asarray(z, dtype=np.float64),
        )
        shape = xs.shape
        values = perlin_noise_3d_array(
            self._p,
            np.ascontiguousarray(xs).ravel(),
            np.ascontiguousarray(ys).ravel(),
            np.ascontiguousarray(zs).ravel(),
        )
        return values.reshape(shape)
