"""Panel session: the single handle on the remote alarm client."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Protocol, TypeVar

from yalesync._constants import DEFAULT_REQUEST_TIMEOUT
from yalesync.exceptions import YaleError, YaleRemoteError
from yalesync.models.panel import Panel
from yalesync.models.states import PanelState
from yalesync.translate import parse_panel_state

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class AlarmClient(Protocol):
    """Structural interface of the Yale Sync alarm client.

    Authentication and token refresh are the client's business; this
    library only relies on the three calls below.
    """

    async def get_panel_state(self) -> Any:
        ...

    async def panel(self) -> Any:
        ...

    async def set_panel_state(self, state: PanelState) -> Any:
        ...


def _field(obj: Any, *names: str) -> Any:
    for name in names:
        if isinstance(obj, Mapping):
            if name in obj:
                return obj[name]
        elif hasattr(obj, name):
            return getattr(obj, name)
    return None


class PanelSession:
    """Fetch and set the panel state through an :class:`AlarmClient`.

    The session holds no cache and never retries: one failed call is
    surfaced immediately as :class:`YaleRemoteError`.

    Parameters
    ----------
    client : AlarmClient
        Authenticated alarm client.
    request_timeout : float or None
        Upper bound in seconds for a single remote call.  ``None`` or
        ``0`` waits for as long as the client does.
    """

    def __init__(self, client: AlarmClient, *, request_timeout: float | None = DEFAULT_REQUEST_TIMEOUT) -> None:
        self._client = client
        self._request_timeout = request_timeout if request_timeout else None

    @property
    def client(self) -> AlarmClient:
        return self._client

    async def _call(self, operation: str, fn: Callable[[], Awaitable[T]]) -> T:
        try:
            if self._request_timeout is None:
                return await fn()
            return await asyncio.wait_for(fn(), self._request_timeout)
        except YaleError:
            raise
        except TimeoutError as exc:
            if self._request_timeout is None:
                raise YaleRemoteError(f"{operation} timed out: {exc}", operation=operation) from exc
            raise YaleRemoteError(
                f"{operation} timed out after {self._request_timeout:.1f}s",
                operation=operation,
            ) from exc
        except Exception as exc:
            raise YaleRemoteError(f"{operation} failed: {exc}", operation=operation) from exc

    async def fetch_state(self) -> PanelState:
        """Return the panel mode currently reported by Yale."""
        raw = await self._call("get_panel_state", self._client.get_panel_state)
        state = parse_panel_state(raw)
        _logger.debug("Fetched panel state %s", state)
        return state

    async def set_state(self, state: PanelState) -> None:
        """Ask Yale to switch the panel to *state*.

        Callers update their own context and cache once this returns.
        """
        await self._call("set_panel_state", lambda: self._client.set_panel_state(state))
        _logger.debug("Panel state set to %s", state)

    async def discover_panel(self) -> Panel | None:
        """Return the account's panel, or ``None`` if there is none.

        The panel state is fetched first because the client only learns
        about the panel from that call.
        """
        await self._call("get_panel_state", self._client.get_panel_state)
        raw = await self._call("panel", self._client.panel)
        if raw is None:
            return None

        identifier = _field(raw, "identifier", "id")
        if not identifier:
            return None
        state = parse_panel_state(_field(raw, "state", "mode"))
        return Panel(identifier=str(identifier), state=state)
