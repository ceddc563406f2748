"""Context-scoped marker buffers and the current default context.

``MarkerStore`` keeps one bounded list per :class:`Context`. Each list has
its own lock; operations on different contexts never contend. Additions that
cannot be accepted (disabled context, full buffer) are dropped silently so
that diagnostics never block or fail the operation being measured.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from sdk_diagnostics.markers.types import MAX_MARKER_COUNT, Context

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from sdk_diagnostics.markers.types import Marker

logger = logging.getLogger("sdk_diagnostics")


class ContextState:
    """Holds the default context used when a marker has no override."""

    def __init__(self, initial: Context | str = Context.INITIALIZE) -> None:
        self._lock = threading.Lock()
        self._context = Context(initial)

    @property
    def current(self) -> Context:
        with self._lock:
            return self._context

    def set_context(self, context: Context | str) -> None:
        """Replace the default context for subsequent marker additions.

        Raises:
            ValueError: If *context* is not one of the known contexts.
        """
        ctx = Context(context)
        with self._lock:
            self._context = ctx


class MarkerStore:
    """One bounded, ordered marker list per context.

    Args:
        disable_api_call: When true, markers for ``api_call`` are discarded.
        max_marker_count: Capacity of each list, never above ``MAX_MARKER_COUNT``.
            Appends beyond it are dropped.
        markers: Optional initial contents, keyed by context.
    """

    def __init__(
        self,
        disable_api_call: bool = False,
        max_marker_count: int = MAX_MARKER_COUNT,
        markers: Mapping[Context | str, Iterable[Marker]] | None = None,
    ) -> None:
        self._disable_api_call = disable_api_call
        self._max_marker_count = min(max_marker_count, MAX_MARKER_COUNT)
        self._markers: dict[Context, list[Marker]] = {ctx: [] for ctx in Context}
        self._locks: dict[Context, threading.Lock] = {ctx: threading.Lock() for ctx in Context}
        for ctx, seeded in (markers or {}).items():
            self._markers[Context(ctx)] = list(seeded)[: self._max_marker_count]

    @property
    def disable_api_call(self) -> bool:
        return self._disable_api_call

    @property
    def max_marker_count(self) -> int:
        return self._max_marker_count

    def is_disabled(self, context: Context | str) -> bool:
        """Whether markers for *context* are discarded by configuration."""
        return self._disable_api_call and Context(context) is Context.API_CALL

    def add_marker(self, marker: Marker, context: Context | str) -> bool:
        """Append *marker* to the list for *context*.

        Returns:
            ``True`` if the marker was stored, ``False`` if it was dropped.
        """
        ctx = Context(context)
        if self.is_disabled(ctx):
            return False
        with self._locks[ctx]:
            bucket = self._markers[ctx]
            if len(bucket) >= self._max_marker_count:
                logger.debug(
                    "Marker buffer for %s is full (%d), dropping %s/%s",
                    ctx.value,
                    self._max_marker_count,
                    marker.key.value,
                    marker.action.value,
                )
                return False
            bucket.append(marker)
            return True

    def get_marker(self, context: Context | str) -> tuple[Marker, ...]:
        ctx = Context(context)
        with self._locks[ctx]:
            return tuple(self._markers[ctx])

    def get_marker_count(self, context: Context | str) -> int:
        ctx = Context(context)
        with self._locks[ctx]:
            return len(self._markers[ctx])

    def clear_marker(self, context: Context | str) -> None:
        ctx = Context(context)
        with self._locks[ctx]:
            self._markers[ctx] = []

    def drain(self, context: Context | str) -> tuple[Marker, ...]:
        """Return the markers for *context* and clear its list in one step."""
        ctx = Context(context)
        with self._locks[ctx]:
            drained = tuple(self._markers[ctx])
            self._markers[ctx] = []
            return drained
