"""Connectivity gate queried before every remote read.

The probe is a name resolution of the Yale API host.  Only a definitive
"host not found" answer counts as offline; any other resolver failure
(timeouts, temporary failures, odd resolver errors) is reported as
reachable so a flaky resolver does not take the accessory offline.
"""

from __future__ import annotations

import asyncio
import logging
import socket

from aiohttp.abc import AbstractResolver
from aiohttp.resolver import ThreadedResolver

from yalesync._constants import API_HOSTNAME, DEFAULT_PROBE_TIMEOUT

_logger = logging.getLogger(__name__)

_HOST_NOT_FOUND_ERRNOS: frozenset[int] = frozenset(
    code for code in (getattr(socket, "EAI_NONAME", None), getattr(socket, "EAI_NODATA", None)) if code is not None
)


def is_host_not_found(exc: BaseException) -> bool:
    """Return ``True`` when *exc* is a resolver answer of "no such host"."""
    return isinstance(exc, socket.gaierror) and exc.errno in _HOST_NOT_FOUND_ERRNOS


class ConnectivityGate:
    """Bounded-time reachability probe for the Yale API host."""

    def __init__(
        self,
        *,
        hostname: str = API_HOSTNAME,
        timeout: float = DEFAULT_PROBE_TIMEOUT,
        resolver: AbstractResolver | None = None,
    ) -> None:
        self._hostname = hostname
        self._timeout = timeout
        self._resolver = resolver
        self._owns_resolver = resolver is None

    @property
    def hostname(self) -> str:
        return self._hostname

    def _get_resolver(self) -> AbstractResolver:
        # ThreadedResolver binds to the running loop, so it is created lazily.
        if self._resolver is None:
            self._resolver = ThreadedResolver()
        return self._resolver

    async def _probe(self) -> None:
        resolver = self._get_resolver()
        await asyncio.wait_for(resolver.resolve(self._hostname, 443), self._timeout)

    async def is_reachable(self) -> bool:
        """Return whether the Yale API host currently resolves."""
        try:
            await self._probe()
        except TimeoutError:
            _logger.debug("Resolving %s timed out after %.1fs; assuming reachable", self._hostname, self._timeout)
            return True
        except OSError as exc:
            if is_host_not_found(exc):
                _logger.debug("Host %s not found: %s", self._hostname, exc)
                return False
            _logger.debug("Resolving %s failed (%s); assuming reachable", self._hostname, exc)
            return True
        return True

    async def describe(self) -> str | None:
        """Describe the current resolution failure, or ``None`` if it resolves."""
        try:
            await self._probe()
        except TimeoutError:
            return f"timed out resolving {self._hostname} after {self._timeout:.1f}s"
        except OSError as exc:
            kind = "host not found" if is_host_not_found(exc) else "resolver error"
            return f"{kind} for {self._hostname}: {exc}"
        return None

    async def close(self) -> None:
        if self._owns_resolver and self._resolver is not None:
            await self._resolver.close()
            self._resolver = None
