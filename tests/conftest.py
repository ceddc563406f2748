"""Shared pytest fixtures for sdk-diagnostics tests.

Provides isolated options objects, a recording event logger, deterministic
random sources and ready-made diagnostics instances used across test modules.
"""

from __future__ import annotations

import itertools

import pytest

from sdk_diagnostics.config import DiagnosticsOptions
from sdk_diagnostics.diagnostics import Diagnostics
from sdk_diagnostics.logging.logger import DiagnosticsEventLogger
from sdk_diagnostics.logging.types import DiagnosticsEvent
from sdk_diagnostics.sampling.fixed import FixedRandomSource


class RecordingEventLogger(DiagnosticsEventLogger):
    """Event logger that keeps every submitted event."""

    def __init__(self) -> None:
        self.events: list[DiagnosticsEvent] = []

    def log_diagnostics_event(self, event: DiagnosticsEvent) -> None:
        self.events.append(event)


@pytest.fixture
def default_options() -> DiagnosticsOptions:
    """Return options with all defaults, ignoring any local .env file."""
    return DiagnosticsOptions(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def disabled_options() -> DiagnosticsOptions:
    """Return options with API-call diagnostics disabled."""
    return DiagnosticsOptions(_env_file=None, disable_diagnostics=True)  # type: ignore[call-arg]


@pytest.fixture
def event_logger() -> RecordingEventLogger:
    return RecordingEventLogger()


@pytest.fixture
def always_draw_low() -> FixedRandomSource:
    """Draw of 0.0: every non-zero rate emits."""
    return FixedRandomSource(0.0)


@pytest.fixture
def ticking_clock():
    """Clock returning 1000, 1001, 1002, ... milliseconds."""
    counter = itertools.count(1000)
    return lambda: next(counter)


@pytest.fixture
def diagnostics(
    event_logger: RecordingEventLogger,
    default_options: DiagnosticsOptions,
    always_draw_low: FixedRandomSource,
    ticking_clock,
) -> Diagnostics:
    """Diagnostics instance with deterministic sampling and timestamps."""
    return Diagnostics(
        event_logger,
        default_options,
        random_source=always_draw_low,
        clock=ticking_clock,
    )


@pytest.fixture
def disabled_diagnostics(
    event_logger: RecordingEventLogger,
    disabled_options: DiagnosticsOptions,
    always_draw_low: FixedRandomSource,
    ticking_clock,
) -> Diagnostics:
    """Diagnostics instance with API-call diagnostics disabled."""
    return Diagnostics(
        event_logger,
        disabled_options,
        random_source=always_draw_low,
        clock=ticking_clock,
    )
