"""Event-logging subsystem for sdk-diagnostics.

Provides the immutable emitted-event type, the abstract event-logger seam the
SDK implements, and a stdlib-logging reference logger.
"""

from sdk_diagnostics.logging.logger import DiagnosticsEventLogger, LoggingEventLogger
from sdk_diagnostics.logging.types import DiagnosticsEvent

__all__ = [
    "DiagnosticsEvent",
    "DiagnosticsEventLogger",
    "LoggingEventLogger",
]
