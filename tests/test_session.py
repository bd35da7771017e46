from __future__ import annotations

import asyncio
from typing import Any

import pytest

from yalesync.exceptions import YaleRemoteError, YaleUnrecognizedStateError
from yalesync.models.states import PanelState
from yalesync.session import PanelSession


@pytest.mark.asyncio
async def test_fetch_state_returns_native_state(client: Any) -> None:
    client.mode = "home"
    session = PanelSession(client)

    assert await session.fetch_state() == PanelState.HOME
    assert client.calls == {"get_panel_state": 1}


@pytest.mark.asyncio
async def test_fetch_state_wraps_client_failure(client: Any) -> None:
    client.fail_get_on_call = 1
    session = PanelSession(client)

    with pytest.raises(YaleRemoteError) as exc_info:
        await session.fetch_state()

    exc = exc_info.value
    assert exc.operation == "get_panel_state"
    assert isinstance(exc.__cause__, ConnectionError)
    # No retry inside the session.
    assert client.calls["get_panel_state"] == 1


@pytest.mark.asyncio
async def test_fetch_state_rejects_unknown_mode(client: Any) -> None:
    client.mode = "part_arm"
    session = PanelSession(client)

    with pytest.raises(YaleUnrecognizedStateError) as exc_info:
        await session.fetch_state()
    assert exc_info.value.value == "part_arm"


@pytest.mark.asyncio
async def test_set_state_forwards_to_client(client: Any) -> None:
    session = PanelSession(client)

    await session.set_state(PanelState.DISARMED)

    assert client.mode == "disarm"


@pytest.mark.asyncio
async def test_set_state_wraps_client_failure(client: Any) -> None:
    client.fail_set = True
    session = PanelSession(client)

    with pytest.raises(YaleRemoteError) as exc_info:
        await session.set_state(PanelState.HOME)
    assert exc_info.value.operation == "set_panel_state"


@pytest.mark.asyncio
async def test_hung_call_times_out_as_remote_error() -> None:
    class _HangingClient:
        async def get_panel_state(self) -> str:
            await asyncio.sleep(10)
            return "arm"

        async def panel(self) -> None:
            return None

        async def set_panel_state(self, state: PanelState) -> None:
            return None

    session = PanelSession(_HangingClient(), request_timeout=0.01)

    with pytest.raises(YaleRemoteError, match="timed out"):
        await session.fetch_state()


@pytest.mark.asyncio
async def test_discover_panel_primes_state_then_reads_panel(client: Any) -> None:
    session = PanelSession(client)

    panel = await session.discover_panel()

    assert panel is not None
    assert panel.identifier == "00:11:22:33:44:55"
    assert panel.state == PanelState.ARMED
    assert client.calls == {"get_panel_state": 1, "panel": 1}


@pytest.mark.asyncio
async def test_discover_panel_accepts_attribute_objects(client: Any) -> None:
    class _PanelObj:
        identifier = "AA:BB"
        state = "disarm"

    async def _panel() -> _PanelObj:
        return _PanelObj()

    client.panel = _panel
    panel = await PanelSession(client).discover_panel()

    assert panel is not None
    assert panel.identifier == "AA:BB"
    assert panel.state == PanelState.DISARMED


@pytest.mark.asyncio
async def test_discover_panel_returns_none_without_panel(client: Any) -> None:
    client.has_panel = False

    assert await PanelSession(client).discover_panel() is None


@pytest.mark.asyncio
async def test_client_timeout_without_request_timeout_is_remote_error(client: Any) -> None:
    async def _timeout() -> str:
        raise asyncio.TimeoutError("read timed out")

    client.get_panel_state = _timeout
    session = PanelSession(client, request_timeout=0)

    with pytest.raises(YaleRemoteError, match="timed out") as exc_info:
        await session.fetch_state()
    assert exc_info.value.operation == "get_panel_state"
    assert isinstance(exc_info.value.__cause__, TimeoutError)
