"""Security system accessory backed by a Yale Sync panel.

:class:`AlarmAccessory` is what the host calls into.  Its three public
coroutines (:meth:`~AlarmAccessory.get_current_state`,
:meth:`~AlarmAccessory.get_target_state` and
:meth:`~AlarmAccessory.set_target_state`) only ever raise
:class:`~yalesync.exceptions.YaleServiceUnavailableError`.  The lifecycle
uses :meth:`~AlarmAccessory.refresh`, which lets the internal error types
through so it can decide what is fatal.

Current and target state are kept equal: Yale only reports settled modes,
so every read pushes the same value to both characteristics.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

from yalesync._cache import StateThrottle
from yalesync._constants import DEFAULT_NAME
from yalesync._network import ConnectivityGate
from yalesync.exceptions import YaleError, YaleHostError, YaleServiceUnavailableError
from yalesync.host import AccessoryHost
from yalesync.models.panel import PanelContext
from yalesync.models.states import Characteristic, ObservedState, PanelState
from yalesync.session import PanelSession
from yalesync.translate import to_native, to_observed

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class AlarmAccessory:
    """One panel exposed as a HomeKit security system.

    All reads and writes are serialised by a per-accessory lock so the
    panel context and the call cache never see interleaved updates.
    """

    def __init__(
        self,
        accessory_id: str,
        context: PanelContext,
        session: PanelSession,
        host: AccessoryHost,
        *,
        gate: ConnectivityGate | None = None,
        display_name: str = DEFAULT_NAME,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._accessory_id = accessory_id
        self._context = context
        self._session = session
        self._host = host
        self._gate = gate if gate is not None else ConnectivityGate()
        self._display_name = display_name
        self._clock = clock
        self._lock = asyncio.Lock()
        self._throttle = StateThrottle(self._fetch_observed, clock=clock)

    @property
    def accessory_id(self) -> str:
        return self._accessory_id

    @property
    def display_name(self) -> str:
        return self._display_name

    @property
    def context(self) -> PanelContext:
        return self._context

    @property
    def state(self) -> PanelState:
        """Last known good panel state."""
        return self._context.state

    @property
    def throttle(self) -> StateThrottle:
        return self._throttle

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _fetch_observed(self) -> ObservedState:
        state = await self._session.fetch_state()
        if state != self._context.state:
            self._context.state = state
            self._store_context()
        return to_observed(state)

    def _store_context(self) -> None:
        try:
            self._host.store_context(self._accessory_id, self._context.model_dump(mode="json"))
        except Exception as exc:
            raise YaleHostError(f"Host failed to store context: {exc}") from exc

    def _push(self, characteristic: Characteristic, value: ObservedState) -> None:
        try:
            self._host.update_characteristic(self._accessory_id, characteristic, value)
        except Exception as exc:
            raise YaleHostError(f"Host rejected {characteristic} update: {exc}") from exc

    async def _external(self, action: str, fn: Callable[[], Awaitable[T]]) -> T:
        try:
            return await fn()
        except YaleServiceUnavailableError as exc:
            _logger.warning("Failed to %s: %s", action, exc)
            raise
        except YaleError as exc:
            _logger.warning("Failed to %s: %s", action, exc)
            raise YaleServiceUnavailableError(f"Failed to {action}") from exc

    # ------------------------------------------------------------------
    # Read path
    # ------------------------------------------------------------------

    async def refresh(self, area: str = "current", *, verbose: bool = False) -> ObservedState:
        """Read the panel state and push it to both characteristics.

        Raises the internal error types; use :meth:`get_current_state`
        for the host-facing variant.
        """
        async with self._lock:
            if not await self._gate.is_reachable():
                raise YaleServiceUnavailableError(f"Unable to reach Yale servers ({self._gate.hostname})")

            read = await self._throttle.get_state(self._clock())
            if read.from_cache:
                _logger.debug("Using cached value for %s state", area)
            log = _logger.info if verbose else _logger.debug
            log("Got %s state: %s", area, read.value.name)

            self._push(Characteristic.SECURITY_SYSTEM_CURRENT_STATE, read.value)
            self._push(Characteristic.SECURITY_SYSTEM_TARGET_STATE, read.value)
            return read.value

    async def get_current_state(self) -> ObservedState:
        return await self._external("get current state", lambda: self.refresh("current"))

    async def get_target_state(self) -> ObservedState:
        return await self._external("get target state", lambda: self.refresh("target"))

    # ------------------------------------------------------------------
    # Write path
    # ------------------------------------------------------------------

    async def _set_target_state(self, value: ObservedState | int) -> ObservedState:
        state = to_native(value)
        async with self._lock:
            previous = self._context.state
            _logger.info("Setting panel to %s (%s)", state, value)
            await self._session.set_state(state)

            # Only a confirmed state is committed.
            observed = to_observed(state)
            self._context.state = state
            self._throttle.store(observed, self._clock())
            self._store_context()
            _logger.info("Panel changed from %s to %s", previous, state)

            self._push(Characteristic.SECURITY_SYSTEM_CURRENT_STATE, observed)
            return observed

    async def set_target_state(self, value: ObservedState | int) -> ObservedState:
        """Switch the panel to the mode matching *value*.

        Returns the state now displayed as current.
        """
        return await self._external("set target state", lambda: self._set_target_state(value))
