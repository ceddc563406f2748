"""Seeded random source backed by numpy's ``Generator``.

Useful for reproducible sampling in tests and load experiments: two sources
constructed with the same seed make the same sequence of emit decisions.
"""

from __future__ import annotations

import threading

import numpy as np

from sdk_diagnostics.sampling.base import RandomSource


class SeededRandomSource(RandomSource):
    """Reproducible uniform draws from ``np.random.default_rng(seed)``.

    Args:
        seed: Optional RNG seed. ``None`` seeds from OS entropy.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._seed = seed
        self._rng = np.random.default_rng(seed)
        # numpy Generators are not thread-safe.
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        """Return ``'seeded'``."""
        return "seeded"

    @property
    def seed(self) -> int | None:
        return self._seed

    def random(self) -> float:
        with self._lock:
            return float(self._rng.random())

    def close(self) -> None:
        """No-op; no resources to release."""
