"""sdk-diagnostics: sampled timing markers for SDK-internal operations.

Records the start and end of internal operations (initialization, config
sync, event logging, API calls, client-response generation) into bounded
per-context buffers, and forwards them to an event logger subject to a
per-type sampling rate.
"""

from __future__ import annotations

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("sdk-diagnostics")
except PackageNotFoundError:
    __version__ = "0.0.0"

from sdk_diagnostics.config import DiagnosticsOptions, resolve_options
from sdk_diagnostics.diagnostics import Diagnostics, format_network_error, initialize
from sdk_diagnostics.exceptions import (
    ConfigValidationError,
    DiagnosticsError,
    MarkerPayloadError,
    UnknownDiagnosticsTypeError,
)
from sdk_diagnostics.logging import DiagnosticsEvent, DiagnosticsEventLogger, LoggingEventLogger
from sdk_diagnostics.markers import MAX_MARKER_COUNT, Context, DiagnosticsType, Marker
from sdk_diagnostics.sampling import MAX_SAMPLING_RATE, SamplingRates

__all__ = [
    "MAX_MARKER_COUNT",
    "MAX_SAMPLING_RATE",
    "ConfigValidationError",
    "Context",
    "Diagnostics",
    "DiagnosticsError",
    "DiagnosticsEvent",
    "DiagnosticsEventLogger",
    "DiagnosticsOptions",
    "DiagnosticsType",
    "LoggingEventLogger",
    "Marker",
    "MarkerPayloadError",
    "SamplingRates",
    "UnknownDiagnosticsTypeError",
    "__version__",
    "format_network_error",
    "initialize",
    "resolve_options",
]
