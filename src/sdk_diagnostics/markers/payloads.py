"""Per-operation payload schemas for markers.

Each tracked operation accepts a fixed set of payload fields, which differs
by step and by action. Every ``(key, step, action)`` combination has its own
pydantic model here; models forbid extra fields, so a caller cannot attach a
field that is not meaningful for the marker being recorded.

Attribute names are snake_case; the wire names handed to the event logger are
the camelCase aliases. Either spelling is accepted on input.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sdk_diagnostics.exceptions import MarkerPayloadError
from sdk_diagnostics.markers.types import Action, MarkerKey, Step


class MarkerPayload(BaseModel):
    """Base for all payload schemas: frozen, closed, alias-aware."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
        strict=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Return only the fields the caller set, under their wire names."""
        return self.model_dump(by_alias=True, exclude_unset=True)


# --- Shared shapes ---


class EmptyPayload(MarkerPayload):
    """Start markers that carry no data."""


class SuccessPayload(MarkerPayload):
    success: bool


class NetworkResultPayload(MarkerPayload):
    """End of a config-specs or id-list-sources network request."""

    success: bool
    sdk_region: str | None = Field(default=None, alias="sdkRegion")
    status_code: int | None = Field(default=None, alias="statusCode")
    error: dict[str, Any] | None = None


class MarkerIDPayload(MarkerPayload):
    marker_id: str = Field(alias="markerID")


class MarkerIDSuccessPayload(MarkerPayload):
    success: bool
    marker_id: str = Field(alias="markerID")


# --- overall ---


class OverallEndPayload(MarkerPayload):
    success: bool
    reason: Literal["timeout"] | None = None


# --- get_id_list ---


class IDListRequestStartPayload(MarkerPayload):
    url: str
    marker_id: str = Field(alias="markerID")


class IDListRequestEndPayload(MarkerPayload):
    success: bool
    status_code: int | None = Field(default=None, alias="statusCode")
    sdk_region: str | None = Field(default=None, alias="sdkRegion")
    marker_id: str = Field(alias="markerID")


# --- get_id_list_sources ---


class IDListSourcesProcessStartPayload(MarkerPayload):
    id_list_count: int = Field(alias="idListCount")


# --- api_call ---


class ApiCallEndPayload(MarkerPayload):
    marker_id: str = Field(alias="markerID")
    success: bool
    config_name: str = Field(alias="configName")


_START, _END = Action.START, Action.END
_PROCESS, _NETWORK = Step.PROCESS, Step.NETWORK_REQUEST

SCHEMAS: Mapping[tuple[MarkerKey, Step | None, Action], type[MarkerPayload]] = {
    (MarkerKey.OVERALL, None, _START): EmptyPayload,
    (MarkerKey.OVERALL, None, _END): OverallEndPayload,
    (MarkerKey.DOWNLOAD_CONFIG_SPECS, _PROCESS, _START): EmptyPayload,
    (MarkerKey.DOWNLOAD_CONFIG_SPECS, _PROCESS, _END): SuccessPayload,
    (MarkerKey.DOWNLOAD_CONFIG_SPECS, _NETWORK, _START): EmptyPayload,
    (MarkerKey.DOWNLOAD_CONFIG_SPECS, _NETWORK, _END): NetworkResultPayload,
    (MarkerKey.BOOTSTRAP, _PROCESS, _START): EmptyPayload,
    (MarkerKey.BOOTSTRAP, _PROCESS, _END): SuccessPayload,
    (MarkerKey.GET_ID_LIST, _PROCESS, _START): MarkerIDPayload,
    (MarkerKey.GET_ID_LIST, _PROCESS, _END): MarkerIDSuccessPayload,
    (MarkerKey.GET_ID_LIST, _NETWORK, _START): IDListRequestStartPayload,
    (MarkerKey.GET_ID_LIST, _NETWORK, _END): IDListRequestEndPayload,
    (MarkerKey.GET_ID_LIST_SOURCES, _PROCESS, _START): IDListSourcesProcessStartPayload,
    (MarkerKey.GET_ID_LIST_SOURCES, _PROCESS, _END): SuccessPayload,
    (MarkerKey.GET_ID_LIST_SOURCES, _NETWORK, _START): EmptyPayload,
    (MarkerKey.GET_ID_LIST_SOURCES, _NETWORK, _END): NetworkResultPayload,
    (MarkerKey.GET_CLIENT_INITIALIZE_RESPONSE, _PROCESS, _START): MarkerIDPayload,
    (MarkerKey.GET_CLIENT_INITIALIZE_RESPONSE, _PROCESS, _END): MarkerIDSuccessPayload,
    **{
        (key, None, action): schema
        for key in (
            MarkerKey.GET_CONFIG,
            MarkerKey.GET_EXPERIMENT,
            MarkerKey.CHECK_GATE,
            MarkerKey.GET_LAYER,
        )
        for action, schema in ((_START, MarkerIDPayload), (_END, ApiCallEndPayload))
    },
}


def build_payload(
    key: MarkerKey,
    step: Step | None,
    action: Action,
    fields: Mapping[str, Any],
) -> dict[str, Any]:
    """Validate *fields* against the schema for ``(key, step, action)``.

    Args:
        key: Operation being recorded.
        step: Sub-step, or ``None`` for operations without steps.
        action: ``start`` or ``end``.
        fields: Caller-supplied payload, by attribute or wire name.

    Returns:
        The wire-named payload containing only the fields that were set.

    Raises:
        MarkerPayloadError: If no schema exists for the combination or the
            payload does not validate.
    """
    schema = SCHEMAS.get((key, step, action))
    if schema is None:
        step_name = step.value if step is not None else "-"
        raise MarkerPayloadError(
            f"No payload schema for key={key.value} step={step_name} action={action.value}"
        )
    try:
        return schema.model_validate(dict(fields)).to_wire()
    except ValidationError as exc:
        raise MarkerPayloadError(
            f"Invalid {action.value} payload for {key.value}: {exc}"
        ) from exc
