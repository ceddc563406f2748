"""Tests for the per-operation payload schemas."""

from __future__ import annotations

import pytest

from sdk_diagnostics.exceptions import MarkerPayloadError
from sdk_diagnostics.markers.payloads import SCHEMAS, build_payload
from sdk_diagnostics.markers.types import Action, MarkerKey, Step

START, END = Action.START, Action.END
PROCESS, NETWORK = Step.PROCESS, Step.NETWORK_REQUEST


class TestSchemaCoverage:
    def test_every_api_call_key_has_start_and_end(self) -> None:
        for key in (
            MarkerKey.GET_CONFIG,
            MarkerKey.GET_EXPERIMENT,
            MarkerKey.CHECK_GATE,
            MarkerKey.GET_LAYER,
        ):
            assert (key, None, START) in SCHEMAS
            assert (key, None, END) in SCHEMAS

    def test_bootstrap_has_no_network_request(self) -> None:
        assert (MarkerKey.BOOTSTRAP, NETWORK, START) not in SCHEMAS

    def test_missing_combination_raises(self) -> None:
        with pytest.raises(MarkerPayloadError, match="No payload schema"):
            build_payload(MarkerKey.OVERALL, PROCESS, START, {})


class TestOverall:
    def test_start_is_empty(self) -> None:
        assert build_payload(MarkerKey.OVERALL, None, START, {}) == {}

    def test_start_rejects_fields(self) -> None:
        with pytest.raises(MarkerPayloadError):
            build_payload(MarkerKey.OVERALL, None, START, {"success": True})

    def test_end_requires_success(self) -> None:
        with pytest.raises(MarkerPayloadError):
            build_payload(MarkerKey.OVERALL, None, END, {})

    def test_end_with_timeout_reason(self) -> None:
        data = build_payload(MarkerKey.OVERALL, None, END, {"success": False, "reason": "timeout"})
        assert data == {"success": False, "reason": "timeout"}

    def test_end_rejects_other_reason(self) -> None:
        with pytest.raises(MarkerPayloadError):
            build_payload(MarkerKey.OVERALL, None, END, {"success": False, "reason": "crash"})

    def test_success_must_be_bool(self) -> None:
        with pytest.raises(MarkerPayloadError):
            build_payload(MarkerKey.OVERALL, None, END, {"success": 1})


class TestDownloadConfigSpecs:
    def test_network_end_optional_fields_omitted(self) -> None:
        data = build_payload(MarkerKey.DOWNLOAD_CONFIG_SPECS, NETWORK, END, {"success": True})
        assert data == {"success": True}

    def test_network_end_uses_wire_names(self) -> None:
        data = build_payload(
            MarkerKey.DOWNLOAD_CONFIG_SPECS,
            NETWORK,
            END,
            {
                "success": False,
                "status_code": 500,
                "sdk_region": "az-westus-2",
                "error": {"name": "Error", "message": "boom", "code": None},
            },
        )
        assert data == {
            "success": False,
            "statusCode": 500,
            "sdkRegion": "az-westus-2",
            "error": {"name": "Error", "message": "boom", "code": None},
        }

    def test_wire_names_accepted_on_input(self) -> None:
        data = build_payload(
            MarkerKey.DOWNLOAD_CONFIG_SPECS, NETWORK, END, {"success": True, "statusCode": 200}
        )
        assert data == {"success": True, "statusCode": 200}

    def test_explicit_null_region_kept(self) -> None:
        data = build_payload(
            MarkerKey.DOWNLOAD_CONFIG_SPECS, NETWORK, END, {"success": True, "sdk_region": None}
        )
        assert data == {"success": True, "sdkRegion": None}

    def test_process_end_rejects_status_code(self) -> None:
        with pytest.raises(MarkerPayloadError):
            build_payload(
                MarkerKey.DOWNLOAD_CONFIG_SPECS, PROCESS, END, {"success": True, "status_code": 200}
            )


class TestGetIDList:
    def test_process_start_requires_marker_id(self) -> None:
        with pytest.raises(MarkerPayloadError):
            build_payload(MarkerKey.GET_ID_LIST, PROCESS, START, {})
        data = build_payload(MarkerKey.GET_ID_LIST, PROCESS, START, {"marker_id": "m1"})
        assert data == {"markerID": "m1"}

    def test_network_start_requires_url(self) -> None:
        with pytest.raises(MarkerPayloadError):
            build_payload(MarkerKey.GET_ID_LIST, NETWORK, START, {"marker_id": "m1"})

    def test_network_end_rejects_error_field(self) -> None:
        with pytest.raises(MarkerPayloadError):
            build_payload(
                MarkerKey.GET_ID_LIST,
                NETWORK,
                END,
                {"success": False, "marker_id": "m1", "error": {}},
            )

    def test_network_end(self) -> None:
        data = build_payload(
            MarkerKey.GET_ID_LIST,
            NETWORK,
            END,
            {"success": True, "status_code": 200, "marker_id": "m1"},
        )
        assert data == {"success": True, "statusCode": 200, "markerID": "m1"}


class TestGetIDListSources:
    def test_process_start_requires_count(self) -> None:
        data = build_payload(MarkerKey.GET_ID_LIST_SOURCES, PROCESS, START, {"id_list_count": 3})
        assert data == {"idListCount": 3}

    def test_count_must_be_int(self) -> None:
        with pytest.raises(MarkerPayloadError):
            build_payload(MarkerKey.GET_ID_LIST_SOURCES, PROCESS, START, {"id_list_count": "3"})


class TestApiCall:
    def test_end_requires_config_name(self) -> None:
        with pytest.raises(MarkerPayloadError):
            build_payload(MarkerKey.CHECK_GATE, None, END, {"marker_id": "m", "success": True})

    def test_end(self) -> None:
        data = build_payload(
            MarkerKey.GET_LAYER,
            None,
            END,
            {"marker_id": "m", "success": True, "config_name": "layer_a"},
        )
        assert data == {"markerID": "m", "success": True, "configName": "layer_a"}


class TestGetClientInitializeResponse:
    def test_process_end(self) -> None:
        data = build_payload(
            MarkerKey.GET_CLIENT_INITIALIZE_RESPONSE,
            PROCESS,
            END,
            {"marker_id": "m", "success": True},
        )
        assert data == {"success": True, "markerID": "m"}
