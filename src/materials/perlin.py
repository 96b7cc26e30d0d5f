# materials/perlin.py
import math
from typing import Optional
import numpy as np
from core.vector import Vector3

POINT_COUNT = 256


class Perlin:
    """
    3D gradient noise with trilinear Hermite smoothing.

    Tables are drawn from numpy's default_rng(seed), so two Perlin objects
    built with the same seed produce the same noise.
    """
    def __init__(self, seed: Optional[int] = None):
        rng = np.random.default_rng(seed)
        vectors = rng.uniform(-1.0, 1.0, size=(POINT_COUNT, 3))
        vectors /= np.linalg.norm(vectors, axis=1, keepdims=True)
        # Plain lists: per-sample lookups are much faster than numpy indexing.
        self.random_vectors = vectors.tolist()
        self.perm_x = rng.permutation(POINT_COUNT).tolist()
        self.perm_y = rng.permutation(POINT_COUNT).tolist()
        self.perm_z = rng.permutation(POINT_COUNT).tolist()

    def noise(self, p: Vector3) -> float:
        fx, fy, fz = math.floor(p.x), math.floor(p.y), math.floor(p.z)
        u, v, w = p.x - fx, p.y - fy, p.z - fz
        i, j, k = int(fx), int(fy), int(fz)

        uu = u * u * (3 - 2 * u)
        vv = v * v * (3 - 2 * v)
        ww = w * w * (3 - 2 * w)

        accumulator = 0.0
        for di in range(2):
            px = self.perm_x[(i + di) & 255]
            wi = di * uu + (1 - di) * (1 - uu)
            for dj in range(2):
                py = self.perm_y[(j + dj) & 255]
                wj = dj * vv + (1 - dj) * (1 - vv)
                for dk in range(2):
                    g = self.random_vectors[px ^ py ^ self.perm_z[(k + dk) & 255]]
                    wk = dk * ww + (1 - dk) * (1 - ww)
                    accumulator += wi * wj * wk * (
                        g[0] * (u - di) + g[1] * (v - dj) + g[2] * (w - dk))
        return accumulator

    def turb(self, p: Vector3, depth: int = 7) -> float:
        """Sum of depth octaves of noise with halving weights, as a magnitude."""
        accumulator = 0.0
        temp_p = p
        weight = 1.0
        for _ in range(depth):
            accumulator += weight * self.noise(temp_p)
            weight *= 0.5
            temp_p = temp_p * 2.0
        return abs(accumulator)
