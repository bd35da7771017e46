from __future__ import annotations

import asyncio
import socket
from typing import Any

import pytest

from yalesync._network import ConnectivityGate, is_host_not_found


class _FakeResolver:
    def __init__(self, exc: BaseException | None = None, delay: float = 0.0) -> None:
        self._exc = exc
        self._delay = delay
        self.calls: list[str] = []
        self.closed = False

    async def resolve(self, host: str, port: int = 0, family: int = socket.AF_INET) -> list[dict[str, Any]]:
        self.calls.append(host)
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._exc is not None:
            raise self._exc
        return [{"hostname": host, "host": "192.0.2.10", "port": port, "family": family}]

    async def close(self) -> None:
        self.closed = True


def _gaierror(code: int) -> socket.gaierror:
    return socket.gaierror(code, "resolver says no")


@pytest.mark.asyncio
async def test_resolving_host_is_reachable() -> None:
    resolver = _FakeResolver()
    gate = ConnectivityGate(resolver=resolver)  # type: ignore[arg-type]

    assert await gate.is_reachable() is True
    assert await gate.describe() is None
    assert resolver.calls == ["mob.yalehomesystem.co.uk", "mob.yalehomesystem.co.uk"]


@pytest.mark.asyncio
async def test_host_not_found_is_unreachable() -> None:
    gate = ConnectivityGate(resolver=_FakeResolver(_gaierror(socket.EAI_NONAME)))  # type: ignore[arg-type]

    assert await gate.is_reachable() is False
    description = await gate.describe()
    assert description is not None
    assert description.startswith("host not found")


@pytest.mark.asyncio
async def test_temporary_resolver_failure_counts_as_reachable() -> None:
    gate = ConnectivityGate(resolver=_FakeResolver(_gaierror(socket.EAI_AGAIN)))  # type: ignore[arg-type]

    assert await gate.is_reachable() is True


@pytest.mark.asyncio
async def test_other_os_error_counts_as_reachable() -> None:
    gate = ConnectivityGate(resolver=_FakeResolver(OSError("network is down")))  # type: ignore[arg-type]

    assert await gate.is_reachable() is True


@pytest.mark.asyncio
async def test_probe_timeout_counts_as_reachable() -> None:
    gate = ConnectivityGate(resolver=_FakeResolver(delay=1.0), timeout=0.01)  # type: ignore[arg-type]

    assert await gate.is_reachable() is True
    description = await gate.describe()
    assert description is not None
    assert "timed out" in description


@pytest.mark.asyncio
async def test_injected_resolver_is_not_closed_by_gate() -> None:
    resolver = _FakeResolver()
    gate = ConnectivityGate(resolver=resolver)  # type: ignore[arg-type]

    await gate.close()

    assert resolver.closed is False


def test_is_host_not_found_only_matches_gaierror() -> None:
    assert is_host_not_found(_gaierror(socket.EAI_NONAME)) is True
    assert is_host_not_found(_gaierror(socket.EAI_AGAIN)) is False
    assert is_host_not_found(OSError(socket.EAI_NONAME, "not a gaierror")) is False
