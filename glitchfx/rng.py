"""Seeded random stream feeding the distortion sampler and resample jitter."""

from __future__ import annotations

import numpy as np


class RandomStream:
    """Thin wrapper around a numpy Generator with the draws the effect needs.

    Seeded exactly once. When no seed is given, one is drawn from OS entropy
    and kept on `.seed` so the run can be reproduced later.
    """

    def __init__(self, seed: int | None = None):
        if seed is None:
            seed = int(np.random.SeedSequence().generate_state(1)[0])
        self.seed = int(seed)
        self._rng = np.random.default_rng(self.seed)

    def next_float(self) -> float:
        """Uniform float in [0, 1)."""
        return float(self._rng.random())

    def next_float_range(self, lo: float, hi: float) -> float:
        return lo + (hi - lo) * self.next_float()

    def next_int_range(self, lo: int, hi: int) -> int:
        """Uniform int in [lo, hi)."""
        return int(self._rng.integers(lo, hi))
