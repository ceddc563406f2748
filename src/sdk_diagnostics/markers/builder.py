"""Typed builder surface for recording markers.

``MarkerBuilder`` exposes one entry per tracked operation. Operations with
sub-steps expose ``process`` / ``network_request`` entries, each with
``start`` and ``end``::

    diagnostics.mark.overall.start()
    diagnostics.mark.get_id_list.network_request.start(url=url, marker_id=mid)
    diagnostics.mark.get_id_list.network_request.end(
        success=True, status_code=200, marker_id=mid
    )

    api_mark = diagnostics.mark.api_call("checkGate")
    if api_mark is not None:
        api_mark.start(marker_id=mid)

Payloads are validated against the schema for the exact
``(operation, step, action)`` when the marker is built.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from typing import Any, Protocol

from sdk_diagnostics.markers.payloads import build_payload
from sdk_diagnostics.markers.types import Action, Context, Marker, MarkerKey, Step


class MarkerSink(Protocol):
    """Where built markers go; ``context=None`` means the current default."""

    def add_marker(self, marker: Marker, override_context: Context | str | None = None) -> Any: ...


def now_ms() -> int:
    """Wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


_API_CALL_KEYS: Mapping[str, MarkerKey] = {
    "getConfig": MarkerKey.GET_CONFIG,
    "getExperiment": MarkerKey.GET_EXPERIMENT,
    "checkGate": MarkerKey.CHECK_GATE,
    "getLayer": MarkerKey.GET_LAYER,
    "get_config": MarkerKey.GET_CONFIG,
    "get_experiment": MarkerKey.GET_EXPERIMENT,
    "check_gate": MarkerKey.CHECK_GATE,
    "get_layer": MarkerKey.GET_LAYER,
}


class ActionBuilder:
    """``start`` / ``end`` pair for one operation (and step)."""

    __slots__ = ("_clock", "_default_context", "_sink", "key", "step")

    def __init__(
        self,
        key: MarkerKey,
        step: Step | None,
        sink: MarkerSink,
        clock: Callable[[], int] = now_ms,
        default_context: Context | None = None,
    ) -> None:
        self.key = key
        self.step = step
        self._sink = sink
        self._clock = clock
        self._default_context = default_context

    def start(
        self,
        payload: Mapping[str, Any] | None = None,
        /,
        context: Context | str | None = None,
        **fields: Any,
    ) -> None:
        """Record the start of the operation."""
        self._record(Action.START, payload, context, fields)

    def end(
        self,
        payload: Mapping[str, Any] | None = None,
        /,
        context: Context | str | None = None,
        **fields: Any,
    ) -> None:
        """Record the end of the operation."""
        self._record(Action.END, payload, context, fields)

    def _record(
        self,
        action: Action,
        payload: Mapping[str, Any] | None,
        context: Context | str | None,
        fields: dict[str, Any],
    ) -> None:
        merged = {**(payload or {}), **fields}
        data = build_payload(self.key, self.step, action, merged)
        marker = Marker(
            key=self.key,
            action=action,
            timestamp=self._clock(),
            step=self.step,
            data=data,
        )
        self._sink.add_marker(marker, context if context is not None else self._default_context)


class StepBuilder:
    """Per-step action builders for operations split into sub-steps.

    ``network_request`` is ``None`` for operations that never make a network
    request of their own (``bootstrap``); check it before use.
    """

    __slots__ = ("network_request", "process")

    def __init__(self, process: ActionBuilder, network_request: ActionBuilder | None = None) -> None:
        self.process = process
        self.network_request = network_request


class MarkerBuilder:
    """Factory surface with one entry per tracked operation.

    ``bootstrap`` exposes only ``process``: its ``network_request`` is ``None``
    because no payload schema exists for a bootstrap network request.

    Args:
        sink: Receives every built marker (normally the owning ``Diagnostics``).
        clock: Millisecond timestamp source.
        default_context: Override applied when a call passes no context.
            ``None`` defers to the sink's current context.
    """

    def __init__(
        self,
        sink: MarkerSink,
        clock: Callable[[], int] = now_ms,
        default_context: Context | str | None = None,
    ) -> None:
        self._sink = sink
        self._clock = clock
        self._default_context = Context(default_context) if default_context is not None else None

        self.overall = self._action(MarkerKey.OVERALL)
        self.download_config_specs = self._steps(MarkerKey.DOWNLOAD_CONFIG_SPECS)
        self.bootstrap = StepBuilder(self._action(MarkerKey.BOOTSTRAP, Step.PROCESS))
        self.get_id_list = self._steps(MarkerKey.GET_ID_LIST)
        self.get_id_list_sources = self._steps(MarkerKey.GET_ID_LIST_SOURCES)
        self.get_client_initialize_response = self._action(
            MarkerKey.GET_CLIENT_INITIALIZE_RESPONSE, Step.PROCESS
        )

    def api_call(self, tag: str) -> ActionBuilder | None:
        """Return the builder for an API-call tag, or ``None`` if unknown."""
        key = _API_CALL_KEYS.get(tag)
        if key is None:
            return None
        return self._action(key)

    def bind(self, context: Context | str) -> MarkerBuilder:
        """Return a builder whose markers default to *context*."""
        return MarkerBuilder(self._sink, self._clock, default_context=context)

    def _action(self, key: MarkerKey, step: Step | None = None) -> ActionBuilder:
        return ActionBuilder(key, step, self._sink, self._clock, self._default_context)

    def _steps(self, key: MarkerKey) -> StepBuilder:
        return StepBuilder(
            process=self._action(key, Step.PROCESS),
            network_request=self._action(key, Step.NETWORK_REQUEST),
        )
