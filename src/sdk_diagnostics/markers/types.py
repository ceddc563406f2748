"""Data types for the marker subsystem."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

MAX_MARKER_COUNT = 26
"""Hard capacity of each per-context marker buffer."""


class Context(str, Enum):
    """Operation category a marker is buffered and flushed under."""

    INITIALIZE = "initialize"
    CONFIG_SYNC = "config_sync"
    EVENT_LOGGING = "event_logging"
    API_CALL = "api_call"
    GET_CLIENT_INITIALIZE_RESPONSE = "get_client_initialize_response"


class MarkerKey(str, Enum):
    """Identifier of the tracked operation."""

    OVERALL = "overall"
    DOWNLOAD_CONFIG_SPECS = "download_config_specs"
    BOOTSTRAP = "bootstrap"
    GET_ID_LIST = "get_id_list"
    GET_ID_LIST_SOURCES = "get_id_list_sources"
    GET_CONFIG = "get_config"
    GET_EXPERIMENT = "get_experiment"
    CHECK_GATE = "check_gate"
    GET_LAYER = "get_layer"
    GET_CLIENT_INITIALIZE_RESPONSE = "get_client_initialize_response"


class Step(str, Enum):
    PROCESS = "process"
    NETWORK_REQUEST = "network_request"


class Action(str, Enum):
    START = "start"
    END = "end"


class DiagnosticsType(str, Enum):
    """Emission-decision key, each mapped to one sampling rate."""

    ID_LIST = "id_list"
    CONFIG_SPEC = "config_spec"
    INITIALIZE = "initialize"
    API_CALL = "api_call"
    GET_CLIENT_INITIALIZE_RESPONSE = "get_client_initialize_response"


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


@dataclass(frozen=True, slots=True)
class Marker:
    """Immutable record of one operation's start or end.

    Attributes:
        key: Operation identifier.
        action: ``start`` or ``end``.
        timestamp: Wall-clock creation time (milliseconds since epoch).
        step: Sub-step of the operation, if it has one.
        data: Operation-specific payload, keyed by wire name
            (``statusCode``, ``markerID``, ...). Read-only at every depth:
            nested mappings (such as ``error``) are frozen too, and lists
            become tuples.
    """

    key: MarkerKey
    action: Action
    timestamp: int
    step: Step | None = None
    data: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Frozen dataclass: bypass __setattr__ to freeze the payload mapping.
        object.__setattr__(self, "data", _freeze(self.data))

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation handed to the event logger."""
        out: dict[str, Any] = {
            "key": self.key.value,
            "action": self.action.value,
            "timestamp": self.timestamp,
        }
        if self.step is not None:
            out["step"] = self.step.value
        out.update(_thaw(self.data))
        return out
