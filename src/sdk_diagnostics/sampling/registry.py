"""Lookup of built-in random sources by the name used in options.

``DiagnosticsOptions.random_source_type`` selects one of the sources below;
an SDK that needs anything else passes its own ``RandomSource`` instance to
``Diagnostics`` directly.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from sdk_diagnostics.exceptions import ConfigValidationError
from sdk_diagnostics.sampling.fixed import FixedRandomSource
from sdk_diagnostics.sampling.seeded import SeededRandomSource
from sdk_diagnostics.sampling.system import SystemRandomSource

if TYPE_CHECKING:
    from sdk_diagnostics.config import DiagnosticsOptions
    from sdk_diagnostics.sampling.base import RandomSource

RANDOM_SOURCES: Mapping[str, type[RandomSource]] = {
    "system": SystemRandomSource,
    "seeded": SeededRandomSource,
    "fixed": FixedRandomSource,
}


def build_random_source(options: DiagnosticsOptions) -> RandomSource:
    """Instantiate the source named by ``options.random_source_type``.

    Only the seeded source takes ``options.random_seed``; the fixed source
    built this way always draws ``0.0``.

    Raises:
        ConfigValidationError: If the name is not a built-in source.
    """
    name = options.random_source_type
    source_cls = RANDOM_SOURCES.get(name)
    if source_cls is None:
        available = ", ".join(sorted(RANDOM_SOURCES))
        raise ConfigValidationError(f"Unknown random source: {name!r}. Available: {available}")
    if source_cls is SeededRandomSource:
        return SeededRandomSource(seed=options.random_seed)
    return source_cls()
