"""Event logger seam and a reference implementation.

The SDK's real event logger (batching, transport) lives outside this package
and only has to implement :class:`DiagnosticsEventLogger`. The bundled
:class:`LoggingEventLogger` writes events to the ``"sdk_diagnostics"`` logger
using the standard ``logging`` module, and can keep them in memory for
post-hoc analysis.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from collections import Counter
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sdk_diagnostics.config import DiagnosticsOptions
    from sdk_diagnostics.logging.types import DiagnosticsEvent

logger = logging.getLogger("sdk_diagnostics")


class DiagnosticsEventLogger(ABC):
    """Receives diagnostics events.

    ``log_diagnostics_event`` is fire-and-forget from the caller's point of
    view: it should enqueue or write the event and return promptly.
    """

    @abstractmethod
    def log_diagnostics_event(self, event: DiagnosticsEvent) -> None:
        """Submit one diagnostics event."""


class LoggingEventLogger(DiagnosticsEventLogger):
    """Writes diagnostics events to the ``"sdk_diagnostics"`` logger.

    Log levels:
        ``"none"``: No logging output. Events are still stored if
        ``diagnostic_mode=True``.

        ``"summary"``: One line per event with the context, marker count,
        first and last marker keys and the time span they cover.

        ``"full"``: Full JSON dump of the event.

    Diagnostic mode stores all events in memory for analysis via
    ``get_diagnostic_data()`` and ``get_summary_stats()``.
    """

    def __init__(self, options: DiagnosticsOptions) -> None:
        """Initialize the logger from options.

        Args:
            options: Options providing ``log_level`` and ``diagnostic_mode``.
        """
        self._log_level = options.log_level
        self._diagnostic_mode = options.diagnostic_mode
        self._events: list[DiagnosticsEvent] = []

    def log_diagnostics_event(self, event: DiagnosticsEvent) -> None:
        if self._diagnostic_mode:
            self._events.append(event)

        if self._log_level == "none":
            return

        if self._log_level == "summary":
            markers = event.markers
            if markers:
                span_ms = markers[-1].timestamp - markers[0].timestamp
                first, last = markers[0].key.value, markers[-1].key.value
            else:
                span_ms, first, last = 0, "-", "-"
            logger.info(
                "diagnostics context=%s markers=%d first=%s last=%s span=%dms",
                event.context.value,
                len(markers),
                first,
                last,
                span_ms,
            )
        elif self._log_level == "full":
            logger.info("diagnostics_event: %s", json.dumps(event.to_dict(), default=str))

    def get_diagnostic_data(self) -> list[DiagnosticsEvent]:
        """Return all stored events (requires ``diagnostic_mode=True``)."""
        return list(self._events)

    def get_summary_stats(self) -> dict[str, Any]:
        """Compute summary statistics over all stored events.

        Returns:
            Dictionary with aggregate stats, or empty dict if no events.
        """
        if not self._events:
            return {}

        n = len(self._events)
        marker_counts = [len(e.markers) for e in self._events]
        per_context = Counter(e.context.value for e in self._events)
        return {
            "total_events": n,
            "events_per_context": dict(per_context),
            "total_markers": sum(marker_counts),
            "mean_markers": sum(marker_counts) / n,
            "max_markers": max(marker_counts),
        }
