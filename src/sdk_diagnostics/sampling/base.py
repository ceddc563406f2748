"""Abstract base class for sampling random sources.

The sampling policy never calls a random number generator directly; it asks
a ``RandomSource`` for one uniform draw per decision. Injecting the source
lets tests force deterministic emit / no-emit outcomes and lets an SDK plug
in its own generator. Subclasses must implement ``name``, ``random()`` and
``close()``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class RandomSource(ABC):
    """Abstract base for uniform random draws in ``[0, 1)``."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable source identifier (e.g., ``'system'``, ``'seeded'``)."""

    @abstractmethod
    def random(self) -> float:
        """Return one float drawn uniformly from ``[0, 1)``."""

    @abstractmethod
    def close(self) -> None:
        """Release resources held by the source."""

    def health_check(self) -> dict[str, Any]:
        """Return a status dictionary for this source.

        Returns:
            Dictionary with at least ``'source'`` and ``'healthy'`` keys.
        """
        return {"source": self.name, "healthy": True}
