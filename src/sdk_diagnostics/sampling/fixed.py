"""Constant random source for deterministic sampling decisions.

A draw of ``0.0`` makes every non-zero rate emit; a draw just below ``1.0``
makes every rate below the maximum skip emission.
"""

from __future__ import annotations

from sdk_diagnostics.sampling.base import RandomSource


class FixedRandomSource(RandomSource):
    """Always returns the same value.

    Args:
        value: The draw to return, in ``[0, 1)``.

    Raises:
        ValueError: If *value* is outside ``[0, 1)``.
    """

    def __init__(self, value: float = 0.0) -> None:
        if not 0.0 <= value < 1.0:
            raise ValueError(f"Fixed draw must be in [0, 1), got {value!r}")
        self._value = value

    @property
    def name(self) -> str:
        """Return ``'fixed'``."""
        return "fixed"

    def random(self) -> float:
        return self._value

    def close(self) -> None:
        """No-op; no resources to release."""
