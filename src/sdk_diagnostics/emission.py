"""Emission of buffered markers to the event logger.

At the end of a logical unit of work the owning code asks the controller to
flush one context. The sampling policy decides whether the buffered markers
are forwarded; either way the buffer is reset, so sampling governs emission
but never memory reclamation.

The one exception: when API-call diagnostics are disabled, flushing the
``api_call`` context returns immediately and leaves that buffer untouched.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sdk_diagnostics.logging.types import DiagnosticsEvent
from sdk_diagnostics.markers.types import Context

if TYPE_CHECKING:
    from sdk_diagnostics.logging.logger import DiagnosticsEventLogger
    from sdk_diagnostics.markers.store import MarkerStore
    from sdk_diagnostics.markers.types import DiagnosticsType
    from sdk_diagnostics.sampling.policy import SamplingPolicy

logger = logging.getLogger("sdk_diagnostics")


class EmissionController:
    """Flushes a context's markers through the sampling policy.

    Args:
        store: Marker buffers to drain.
        policy: Sampling decision per diagnostics type.
        event_logger: Receives emitted events.
    """

    def __init__(
        self,
        store: MarkerStore,
        policy: SamplingPolicy,
        event_logger: DiagnosticsEventLogger,
    ) -> None:
        self._store = store
        self._policy = policy
        self._event_logger = event_logger

    def log_diagnostics(
        self,
        context: Context | str,
        diagnostics_type: DiagnosticsType | str | None = None,
    ) -> bool:
        """Emit (subject to sampling) and clear the markers for *context*.

        Args:
            context: Context whose buffer is flushed.
            diagnostics_type: Sampling key. ``None`` always emits.

        Returns:
            ``True`` if an event was handed to the event logger.

        Raises:
            UnknownDiagnosticsTypeError: If *diagnostics_type* is not a known type.
        """
        ctx = Context(context)
        if self._store.is_disabled(ctx):
            return False

        should_log = True if diagnostics_type is None else self._policy.should_log(diagnostics_type)
        markers = self._store.drain(ctx)

        if not should_log:
            logger.debug("Diagnostics for %s sampled out (%d markers)", ctx.value, len(markers))
            return False

        try:
            self._event_logger.log_diagnostics_event(DiagnosticsEvent(context=ctx, markers=markers))
        except Exception:  # Intentional: emission failures must not reach the SDK caller
            logger.warning("Event logger failed to accept diagnostics for %s", ctx.value, exc_info=True)
            return False
        return True
