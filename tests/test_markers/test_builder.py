"""Tests for MarkerBuilder."""

from __future__ import annotations

import pytest

from sdk_diagnostics.exceptions import MarkerPayloadError
from sdk_diagnostics.markers.builder import ActionBuilder, MarkerBuilder, now_ms
from sdk_diagnostics.markers.types import Action, Context, Marker, MarkerKey, Step


class _Sink:
    """Captures (marker, context) pairs."""

    def __init__(self) -> None:
        self.calls: list[tuple[Marker, Context | str | None]] = []

    def add_marker(self, marker: Marker, override_context: Context | str | None = None) -> None:
        self.calls.append((marker, override_context))


@pytest.fixture
def sink() -> _Sink:
    return _Sink()


@pytest.fixture
def builder(sink: _Sink) -> MarkerBuilder:
    return MarkerBuilder(sink, clock=lambda: 42)


class TestMarkerBuilder:
    def test_overall_start_end(self, builder: MarkerBuilder, sink: _Sink) -> None:
        builder.overall.start({})
        builder.overall.end({"success": True})
        (start, start_ctx), (end, end_ctx) = sink.calls
        assert start.key is MarkerKey.OVERALL
        assert start.action is Action.START
        assert start.step is None
        assert end.action is Action.END
        assert dict(end.data) == {"success": True}
        assert start_ctx is None and end_ctx is None

    def test_keyword_payload(self, builder: MarkerBuilder, sink: _Sink) -> None:
        builder.get_id_list.process.start(marker_id="m1")
        marker, _ = sink.calls[0]
        assert marker.step is Step.PROCESS
        assert dict(marker.data) == {"markerID": "m1"}

    def test_mapping_and_keywords_merge(self, builder: MarkerBuilder, sink: _Sink) -> None:
        builder.get_id_list.network_request.start({"url": "https://x"}, marker_id="m1")
        marker, _ = sink.calls[0]
        assert dict(marker.data) == {"url": "https://x", "markerID": "m1"}

    def test_timestamp_from_clock(self, builder: MarkerBuilder, sink: _Sink) -> None:
        builder.overall.start()
        assert sink.calls[0][0].timestamp == 42

    def test_context_override_forwarded(self, builder: MarkerBuilder, sink: _Sink) -> None:
        builder.download_config_specs.network_request.start(context="config_sync")
        assert sink.calls[0][1] == "config_sync"

    def test_invalid_payload_raises_before_sink(self, builder: MarkerBuilder, sink: _Sink) -> None:
        with pytest.raises(MarkerPayloadError):
            builder.bootstrap.process.end(success=True, url="https://x")
        assert sink.calls == []

    def test_bootstrap_has_only_process(self, builder: MarkerBuilder, sink: _Sink) -> None:
        assert builder.bootstrap.network_request is None
        builder.bootstrap.process.start()
        builder.bootstrap.process.end(success=True)
        assert [m.step for m, _ in sink.calls] == [Step.PROCESS, Step.PROCESS]

    def test_get_client_initialize_response_is_process_step(
        self, builder: MarkerBuilder, sink: _Sink
    ) -> None:
        builder.get_client_initialize_response.start(marker_id="m")
        marker, _ = sink.calls[0]
        assert marker.key is MarkerKey.GET_CLIENT_INITIALIZE_RESPONSE
        assert marker.step is Step.PROCESS

    @pytest.mark.parametrize(
        ("tag", "key"),
        [
            ("getConfig", MarkerKey.GET_CONFIG),
            ("getExperiment", MarkerKey.GET_EXPERIMENT),
            ("checkGate", MarkerKey.CHECK_GATE),
            ("getLayer", MarkerKey.GET_LAYER),
            ("check_gate", MarkerKey.CHECK_GATE),
        ],
    )
    def test_api_call_tags(self, builder: MarkerBuilder, tag: str, key: MarkerKey) -> None:
        api_mark = builder.api_call(tag)
        assert isinstance(api_mark, ActionBuilder)
        assert api_mark.key is key
        assert api_mark.step is None

    def test_unknown_api_call_tag_is_none(self, builder: MarkerBuilder) -> None:
        assert builder.api_call("getFeatureFlag") is None

    def test_bind_sets_default_context(self, builder: MarkerBuilder, sink: _Sink) -> None:
        bound = builder.bind("api_call")
        bound.api_call("getConfig").start(marker_id="m")
        assert sink.calls[0][1] is Context.API_CALL

    def test_explicit_context_beats_binding(self, builder: MarkerBuilder, sink: _Sink) -> None:
        bound = builder.bind(Context.API_CALL)
        bound.overall.start(context=Context.INITIALIZE)
        assert sink.calls[0][1] is Context.INITIALIZE


def test_now_ms_is_milliseconds() -> None:
    # Any time after 2001-09-09 has 13 digits in milliseconds.
    assert len(str(now_ms())) == 13
