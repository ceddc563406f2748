"""Configuration system for sdk-diagnostics.

Uses pydantic-settings for declarative, layered configuration:
init kwargs -> environment variables (SDK_DIAG_*) -> .env file -> field defaults.

A ``Diagnostics`` instance reads its options exactly once at construction.
Overrides are applied via resolve_options() which creates a new options
instance without mutating the defaults.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from sdk_diagnostics.exceptions import ConfigValidationError
from sdk_diagnostics.markers.types import MAX_MARKER_COUNT


class DiagnosticsOptions(BaseSettings):
    """Options for a diagnostics instance.

    Resolution order: init kwargs -> env vars (SDK_DIAG_*) -> .env file -> defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="SDK_DIAG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Core ---

    disable_diagnostics: bool = Field(
        default=False,
        description="Drop all api_call markers and skip api_call emission",
    )
    max_marker_count: int = Field(
        default=MAX_MARKER_COUNT,
        ge=0,
        le=MAX_MARKER_COUNT,
        description="Per-context marker buffer capacity (at most MAX_MARKER_COUNT)",
    )

    # --- Sampling randomness ---

    random_source_type: str = Field(
        default="system",
        description="Random source used for sampling draws: 'system', 'seeded', 'fixed'",
    )
    random_seed: int | None = Field(
        default=None,
        description="Seed for the 'seeded' random source (None = nondeterministic)",
    )

    # --- Logging ---

    log_level: Literal["none", "summary", "full"] = Field(
        default="summary",
        description="LoggingEventLogger verbosity: 'none', 'summary', 'full'",
    )
    diagnostic_mode: bool = Field(
        default=False,
        description="Keep every emitted event in memory for analysis",
    )


_ALL_FIELDS: frozenset[str] = frozenset(DiagnosticsOptions.model_fields.keys())


def resolve_options(
    defaults: DiagnosticsOptions,
    overrides: dict[str, Any] | None,
) -> DiagnosticsOptions:
    """Create a new options instance merging defaults with overrides.

    Args:
        defaults: The base options, usually loaded from the environment.
        overrides: Field name -> value pairs to apply on top.

    Returns:
        A new DiagnosticsOptions with overrides applied, or *defaults*
        itself when there is nothing to override.

    Raises:
        ConfigValidationError: If a key is unknown or a value fails validation.
    """
    if not overrides:
        return defaults

    unknown = sorted(set(overrides) - _ALL_FIELDS)
    if unknown:
        raise ConfigValidationError(f"Unknown diagnostics option(s): {', '.join(unknown)}")

    # model_copy(update=...) skips validation; model_validate runs it.
    merged = defaults.model_dump()
    merged.update(overrides)
    try:
        return DiagnosticsOptions.model_validate(merged)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc
