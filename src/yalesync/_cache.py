"""Time-based call cache collapsing bursts of panel state reads."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from yalesync._constants import CACHE_WINDOW_S
from yalesync.models.states import ObservedState


@dataclass
class CallCache:
    """Last fetch of a single panel (monotonic seconds)."""

    last_fetch: float | None = None
    last_value: ObservedState | None = None


@dataclass(frozen=True, slots=True)
class CachedRead:
    """Result of :meth:`StateThrottle.get_state`.

    ``from_cache`` only affects logging; the value is equally valid.
    """

    value: ObservedState
    from_cache: bool


class StateThrottle:
    """Serve the last fetched state when asked again within the window.

    A HomeKit client usually asks for current and target state back to
    back; both reads are answered by one remote call.  The cache holds a
    single entry and is not safe for concurrent writers, callers
    serialise access.
    """

    def __init__(
        self,
        fetch: Callable[[], Awaitable[ObservedState]],
        *,
        window: float = CACHE_WINDOW_S,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._fetch = fetch
        self._window = window
        self._clock = clock
        self._cache = CallCache()

    @property
    def cache(self) -> CallCache:
        return self._cache

    def is_fresh(self, now: float) -> bool:
        last = self._cache.last_fetch
        return last is not None and self._cache.last_value is not None and now - last <= self._window

    async def get_state(self, now: float | None = None) -> CachedRead:
        """Return the panel state, fetching only when the cache is stale."""
        if now is None:
            now = self._clock()
        if self.is_fresh(now):
            assert self._cache.last_value is not None  # noqa: S101
            return CachedRead(value=self._cache.last_value, from_cache=True)

        value = await self._fetch()
        self._cache.last_fetch = now
        self._cache.last_value = value
        return CachedRead(value=value, from_cache=False)

    def store(self, value: ObservedState, now: float | None = None) -> None:
        """Record a state confirmed by a successful set-state call."""
        self._cache.last_fetch = self._clock() if now is None else now
        self._cache.last_value = value

    def invalidate(self) -> None:
        self._cache = CallCache()
