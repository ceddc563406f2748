"""Sampling subsystem for sdk-diagnostics.

Re-exports the random-source ABC, the built-in sources and their lookup, and the
sampling policy::

    from sdk_diagnostics.sampling import SamplingPolicy, SeededRandomSource
"""

from sdk_diagnostics.sampling.base import RandomSource
from sdk_diagnostics.sampling.fixed import FixedRandomSource
from sdk_diagnostics.sampling.policy import MAX_SAMPLING_RATE, SamplingPolicy, SamplingRates
from sdk_diagnostics.sampling.registry import RANDOM_SOURCES, build_random_source
from sdk_diagnostics.sampling.seeded import SeededRandomSource
from sdk_diagnostics.sampling.system import SystemRandomSource

__all__ = [
    "MAX_SAMPLING_RATE",
    "RANDOM_SOURCES",
    "FixedRandomSource",
    "RandomSource",
    "SamplingPolicy",
    "SamplingRates",
    "SeededRandomSource",
    "SystemRandomSource",
    "build_random_source",
]
