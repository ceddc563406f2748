"""The diagnostics instance: the SDK-facing surface of this package.

One :class:`Diagnostics` is created during SDK startup and passed to the code
that records markers; there is no module-level singleton. Typical use::

    diagnostics = initialize(event_logger, options)

    diagnostics.set_context("initialize")
    diagnostics.mark.overall.start()
    ...
    diagnostics.mark.overall.end(success=True)
    diagnostics.log_diagnostics("initialize", type="initialize")

Code that runs concurrently with other operations can avoid the shared
default context by recording through a bound scope::

    mark = diagnostics.scope("api_call")
    mark.api_call("checkGate").start(marker_id=mid)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from sdk_diagnostics.config import DiagnosticsOptions
from sdk_diagnostics.emission import EmissionController
from sdk_diagnostics.markers.builder import MarkerBuilder, now_ms
from sdk_diagnostics.markers.store import ContextState, MarkerStore
from sdk_diagnostics.sampling.policy import SamplingPolicy
from sdk_diagnostics.sampling.registry import build_random_source

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from sdk_diagnostics.logging.logger import DiagnosticsEventLogger
    from sdk_diagnostics.markers.types import Context, DiagnosticsType, Marker
    from sdk_diagnostics.sampling.base import RandomSource
    from sdk_diagnostics.sampling.policy import SamplingRates

logger = logging.getLogger("sdk_diagnostics")

# Scalars (bool included, via int) are never treated as error objects.
_SCALAR_TYPES = (str, bytes, bytearray, int, float, complex)


class Diagnostics:
    """Owns the marker buffers, default context and sampling rates for one SDK.

    Args:
        event_logger: Receives emitted diagnostics events.
        options: Diagnostics options. Read once; later changes to the object
            have no effect. Defaults to ``DiagnosticsOptions()``.
        random_source: Source for sampling draws. Defaults to the source
            named by ``options.random_source_type``.
        clock: Millisecond timestamp source for markers.
        markers: Optional initial buffer contents, keyed by context.
    """

    def __init__(
        self,
        event_logger: DiagnosticsEventLogger,
        options: DiagnosticsOptions | None = None,
        *,
        random_source: RandomSource | None = None,
        clock: Callable[[], int] = now_ms,
        markers: Mapping[Context | str, Iterable[Marker]] | None = None,
    ) -> None:
        options = options if options is not None else DiagnosticsOptions()
        self._disable_api_call = options.disable_diagnostics
        self._event_logger = event_logger
        self._context = ContextState()
        self._store = MarkerStore(
            disable_api_call=self._disable_api_call,
            max_marker_count=options.max_marker_count,
            markers=markers,
        )
        if random_source is None:
            random_source = build_random_source(options)
        self._policy = SamplingPolicy(random_source)
        self._emission = EmissionController(self._store, self._policy, event_logger)
        self.mark = MarkerBuilder(self, clock)
        logger.debug(
            "Diagnostics initialized (api_call disabled=%s, random_source=%s)",
            self._disable_api_call,
            random_source.name,
        )

    @property
    def disable_api_call(self) -> bool:
        return self._disable_api_call

    @property
    def context(self) -> Context:
        """Default context for markers recorded without an override."""
        return self._context.current

    def set_context(self, context: Context | str) -> None:
        self._context.set_context(context)

    def scope(self, context: Context | str) -> MarkerBuilder:
        """Return a marker builder bound to *context*.

        Markers recorded through it go to *context* regardless of the shared
        default; an explicit ``context=`` on a call still wins.
        """
        return self.mark.bind(context)

    def add_marker(self, marker: Marker, override_context: Context | str | None = None) -> None:
        """Buffer *marker* under *override_context*, or the current context."""
        context = override_context if override_context is not None else self._context.current
        self._store.add_marker(marker, context)

    def get_marker(self, context: Context | str) -> tuple[Marker, ...]:
        return self._store.get_marker(context)

    def get_marker_count(self, context: Context | str) -> int:
        return self._store.get_marker_count(context)

    def clear_marker(self, context: Context | str) -> None:
        self._store.clear_marker(context)

    @property
    def sampling_rates(self) -> SamplingRates:
        return self._policy.rates

    def set_sampling_rate(self, sampling_rate: Any) -> None:
        """Apply a (possibly partial, possibly malformed) sampling-rate update."""
        self._policy.update_sampling_rates(sampling_rate)

    def log_diagnostics(
        self,
        context: Context | str,
        type: DiagnosticsType | str | None = None,  # noqa: A002
    ) -> bool:
        """Flush *context*: emit if sampled in, then clear its buffer.

        Returns:
            ``True`` if an event was handed to the event logger.
        """
        return self._emission.log_diagnostics(context, type)

    def close(self) -> None:
        """Release the random source. Call on SDK shutdown."""
        self._policy.random_source.close()


def initialize(
    event_logger: DiagnosticsEventLogger,
    options: DiagnosticsOptions | None = None,
    **kwargs: Any,
) -> Diagnostics:
    """Create the diagnostics instance for an SDK.

    Args:
        event_logger: Receives emitted diagnostics events.
        options: Diagnostics options; read once.
        **kwargs: Passed through to :class:`Diagnostics`.

    Returns:
        A new, independent :class:`Diagnostics`.
    """
    return Diagnostics(event_logger, options, **kwargs)


def _pick(err: object, field: str) -> Any:
    if isinstance(err, Mapping):
        return err.get(field)
    return getattr(err, field, None)


def format_network_error(err: object) -> dict[str, Any] | None:
    """Reduce an arbitrary raised value to ``{code, name, message}``.

    Mappings contribute their keys and other objects their attributes; each
    field is ``None`` when absent. Exceptions always have a name (their class
    name) and a message (``str(err)``) unless they define their own.

    Returns:
        The reduced error, or ``None`` when *err* is ``None`` or a scalar.
    """
    if err is None or isinstance(err, _SCALAR_TYPES):
        return None

    formatted = {
        "code": _pick(err, "code"),
        "name": _pick(err, "name"),
        "message": _pick(err, "message"),
    }
    if isinstance(err, BaseException):
        if formatted["name"] is None:
            formatted["name"] = type(err).__name__
        if formatted["message"] is None:
            formatted["message"] = str(err)
    return formatted
