from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from yalesync.models.panel import AccessoryInformation
from yalesync.models.states import Characteristic, ObservedState, PanelState


@dataclass
class FakeAlarmClient:
    """In-memory stand-in for the Yale Sync alarm client."""

    identifier: str = "00:11:22:33:44:55"
    mode: str = "arm"
    calls: dict[str, int] = field(default_factory=dict)
    fail_get_on_call: int | None = None
    fail_set: bool = False
    has_panel: bool = True

    def _record(self, name: str) -> int:
        self.calls[name] = self.calls.get(name, 0) + 1
        return self.calls[name]

    async def get_panel_state(self) -> str:
        count = self._record("get_panel_state")
        if self.fail_get_on_call is not None and count >= self.fail_get_on_call:
            raise ConnectionError("connection reset by peer")
        return self.mode

    async def panel(self) -> dict[str, Any] | None:
        self._record("panel")
        if not self.has_panel:
            return None
        return {"identifier": self.identifier, "state": self.mode}

    async def set_panel_state(self, state: PanelState) -> bool:
        self._record("set_panel_state")
        if self.fail_set:
            raise ConnectionError("request rejected")
        self.mode = state.value
        return True


@dataclass
class FakeHost:
    """Records everything the engine hands to the accessory host."""

    stored: dict[str, dict[str, Any]] = field(default_factory=dict)
    registered: list[tuple[str, str]] = field(default_factory=list)
    updates: list[tuple[str, Characteristic, ObservedState]] = field(default_factory=list)
    information: dict[str, AccessoryInformation] = field(default_factory=dict)

    def restore_context(self, accessory_id: str) -> Mapping[str, Any] | None:
        return self.stored.get(accessory_id)

    def register_accessory(self, accessory_id: str, display_name: str, context: Mapping[str, Any]) -> None:
        self.registered.append((accessory_id, display_name))
        self.stored[accessory_id] = dict(context)

    def store_context(self, accessory_id: str, context: Mapping[str, Any]) -> None:
        self.stored[accessory_id] = dict(context)

    def set_accessory_information(self, accessory_id: str, information: AccessoryInformation) -> None:
        self.information[accessory_id] = information

    def update_characteristic(self, accessory_id: str, characteristic: Characteristic, value: ObservedState) -> None:
        self.updates.append((accessory_id, characteristic, value))


class FakeGate:
    def __init__(self, reachable: bool = True) -> None:
        self.reachable = reachable
        self.hostname = "mob.yalehomesystem.co.uk"
        self.probes = 0

    async def is_reachable(self) -> bool:
        self.probes += 1
        return self.reachable

    async def describe(self) -> str | None:
        return None if self.reachable else "host not found"

    async def close(self) -> None:
        return None


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def client() -> FakeAlarmClient:
    return FakeAlarmClient()


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def gate() -> FakeGate:
    return FakeGate()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
