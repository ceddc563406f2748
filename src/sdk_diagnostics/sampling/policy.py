"""Per-type sampling policy for diagnostics emission.

Six named rates, each an integer out of ``MAX_SAMPLING_RATE``, decide how
often a context's buffered markers are forwarded to the event logger. Rates
are updated from untrusted remote configuration, so updates are validated per
field: a malformed field keeps its previous value and never invalidates the
rest of the update.
"""

from __future__ import annotations

import dataclasses
import logging
import math
import threading
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sdk_diagnostics.exceptions import UnknownDiagnosticsTypeError
from sdk_diagnostics.markers.types import DiagnosticsType
from sdk_diagnostics.sampling.system import SystemRandomSource

if TYPE_CHECKING:
    from sdk_diagnostics.sampling.base import RandomSource

logger = logging.getLogger("sdk_diagnostics")

MAX_SAMPLING_RATE = 10000


@dataclass(frozen=True, slots=True)
class SamplingRates:
    """Immutable rate-set. Each rate is out of ``MAX_SAMPLING_RATE``.

    Attributes:
        dcs: Config-spec download diagnostics.
        log: Event-logging diagnostics.
        idlist: ID-list sync diagnostics.
        initialize: Initialization diagnostics (always emitted by default).
        api_call: Per-call API diagnostics.
        gcir: Client-initialize-response diagnostics.
    """

    dcs: float = 0
    log: float = 0
    idlist: float = 0
    initialize: float = MAX_SAMPLING_RATE
    api_call: float = 0
    gcir: float = 0

    def as_dict(self) -> dict[str, float]:
        return dataclasses.asdict(self)


_RATE_FIELDS: tuple[str, ...] = tuple(f.name for f in dataclasses.fields(SamplingRates))

_TYPE_TO_RATE: Mapping[DiagnosticsType, str] = {
    DiagnosticsType.ID_LIST: "idlist",
    DiagnosticsType.CONFIG_SPEC: "dcs",
    DiagnosticsType.INITIALIZE: "initialize",
    DiagnosticsType.API_CALL: "api_call",
    DiagnosticsType.GET_CLIENT_INITIALIZE_RESPONSE: "gcir",
}


def _clamp_rate(value: Any) -> float | None:
    """Return *value* clamped to ``[0, MAX_SAMPLING_RATE]``, or None if not numeric."""
    # bool is an int subclass but never a rate.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if math.isnan(value):
        return None
    if value < 0:
        return 0
    if value > MAX_SAMPLING_RATE:
        return MAX_SAMPLING_RATE
    return value


class SamplingPolicy:
    """Decides, per diagnostics type, whether buffered markers are emitted.

    Args:
        random_source: Source of uniform draws. Defaults to the system source.
        rates: Initial rate-set. Defaults to :class:`SamplingRates` defaults.
    """

    def __init__(
        self,
        random_source: RandomSource | None = None,
        rates: SamplingRates | None = None,
    ) -> None:
        self._random_source = random_source if random_source is not None else SystemRandomSource()
        self._rates = rates if rates is not None else SamplingRates()
        self._lock = threading.Lock()

    @property
    def rates(self) -> SamplingRates:
        """Snapshot of the current rate-set."""
        with self._lock:
            return self._rates

    @property
    def random_source(self) -> RandomSource:
        return self._random_source

    def update_sampling_rates(self, obj: Any) -> None:
        """Apply a partial rate update.

        Non-mapping input is ignored. For each of the six rates, a numeric
        value is clamped to ``[0, MAX_SAMPLING_RATE]`` and stored; a missing or
        non-numeric value leaves the current rate unchanged. The resulting
        rate-set replaces the old one atomically.
        """
        if not isinstance(obj, Mapping):
            return

        with self._lock:
            changes: dict[str, float] = {}
            for field_name in _RATE_FIELDS:
                clamped = _clamp_rate(obj.get(field_name))
                if clamped is not None:
                    changes[field_name] = clamped
            if changes:
                self._rates = dataclasses.replace(self._rates, **changes)
                logger.debug("Updated diagnostics sampling rates: %s", changes)

    def should_log(self, diagnostics_type: DiagnosticsType | str) -> bool:
        """Draw once and decide whether to emit for *diagnostics_type*.

        Returns:
            ``True`` iff ``draw * MAX_SAMPLING_RATE`` is below the type's rate.

        Raises:
            UnknownDiagnosticsTypeError: If *diagnostics_type* is not one of
                the known diagnostics types.
        """
        try:
            rate_name = _TYPE_TO_RATE[DiagnosticsType(diagnostics_type)]
        except ValueError:
            raise UnknownDiagnosticsTypeError(
                f"Unknown diagnostics type: {diagnostics_type!r}"
            ) from None

        draw = self._random_source.random() * MAX_SAMPLING_RATE
        return draw < getattr(self.rates, rate_name)
