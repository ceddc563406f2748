"""System random source using ``os.urandom()``.

This is the default source. It needs no seeding and is safe to share between
threads, which suits a process-wide diagnostics instance.
"""

from __future__ import annotations

import os

from sdk_diagnostics.sampling.base import RandomSource

# 53 random bits fill a float64 mantissa exactly.
_MANTISSA_BITS = 53


class SystemRandomSource(RandomSource):
    """``os.urandom()`` wrapper producing uniform floats in ``[0, 1)``."""

    @property
    def name(self) -> str:
        """Return ``'system'``."""
        return "system"

    def random(self) -> float:
        """Return a float in ``[0, 1)`` built from 53 bits of OS entropy."""
        bits = int.from_bytes(os.urandom(8), "big") >> (64 - _MANTISSA_BITS)
        return bits / (1 << _MANTISSA_BITS)

    def close(self) -> None:
        """No-op; no resources to release."""
