"""Marker subsystem for sdk-diagnostics.

Provides the marker data model, per-operation payload schemas, the bounded
per-context marker store, and the typed builder that records markers.
"""

from sdk_diagnostics.markers.builder import ActionBuilder, MarkerBuilder, StepBuilder
from sdk_diagnostics.markers.store import ContextState, MarkerStore
from sdk_diagnostics.markers.types import (
    MAX_MARKER_COUNT,
    Action,
    Context,
    DiagnosticsType,
    Marker,
    MarkerKey,
    Step,
)

__all__ = [
    "MAX_MARKER_COUNT",
    "Action",
    "ActionBuilder",
    "Context",
    "ContextState",
    "DiagnosticsType",
    "Marker",
    "MarkerBuilder",
    "MarkerKey",
    "MarkerStore",
    "Step",
]
