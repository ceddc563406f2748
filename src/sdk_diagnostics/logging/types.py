"""Data types for the diagnostics event-logging seam."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sdk_diagnostics.markers.types import Context, Marker


@dataclass(frozen=True, slots=True)
class DiagnosticsEvent:
    """One emission: every marker buffered for a context, in recording order.

    Attributes:
        context: Context the markers were buffered under.
        markers: Markers in insertion order.
    """

    context: Context
    markers: tuple[Marker, ...]

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation ``{context, markers}``."""
        return {
            "context": self.context.value,
            "markers": [marker.to_dict() for marker in self.markers],
        }
