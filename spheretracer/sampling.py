"""
Seedable random source for Monte-Carlo sampling.

A single RandomSource is passed explicitly to the camera (lens sampling),
the materials (scatter directions) and the render loop (pixel jitter), so
a fixed seed reproduces an image exactly.
"""

from __future__ import annotations
from typing import Optional

import numpy as np

from .vec3 import Vec3


class RandomSource:
    """Uniform random generator wrapping ``numpy.random.Generator``."""

    def __init__(self, seed: Optional[int] = None):
        """Create a random source.

        Args:
            seed: Seed for reproducible output (None = fresh OS entropy)
        """
        self.seed = seed
        self._seed_seq = np.random.SeedSequence(seed)
        self._rng = np.random.default_rng(self._seed_seq)

    @classmethod
    def _from_seed_sequence(cls, seed_seq: np.random.SeedSequence) -> RandomSource:
        source = cls.__new__(cls)
        source.seed = None
        source._seed_seq = seed_seq
        source._rng = np.random.default_rng(seed_seq)
        return source

    def spawn(self, n: int) -> list[RandomSource]:
        """Derive ``n`` statistically independent sources, one per worker."""
        return [RandomSource._from_seed_sequence(s) for s in self._seed_seq.spawn(n)]

    def random(self) -> float:
        """Uniform scalar in [0, 1)."""
        return float(self._rng.random())

    def uniform(self, min_val: float, max_val: float) -> float:
        """Uniform scalar in [min_val, max_val)."""
        return min_val + (max_val - min_val) * self.random()

    def vector(self, min_val: float = 0.0, max_val: float = 1.0) -> Vec3:
        """Vector with each component uniform in [min_val, max_val)."""
        return Vec3.from_array(self._rng.uniform(min_val, max_val, 3))

    def in_unit_sphere(self) -> Vec3:
        """Point strictly inside the unit sphere, by rejection sampling."""
        while True:
            p = self.vector(-1.0, 1.0)
            if p.length_squared() < 1:
                return p

    def unit_vector(self) -> Vec3:
        """Random direction, uniform on the unit sphere."""
        while True:
            p = self.in_unit_sphere()
            # The sample at the exact centre has no direction
            if not p.near_zero():
                return p.normalize()

    def in_unit_disk(self) -> Vec3:
        """Point strictly inside the unit disk in the z=0 plane."""
        while True:
            x, y = self._rng.uniform(-1.0, 1.0, 2)
            if x * x + y * y < 1:
                return Vec3(x, y, 0.0)

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed})"
