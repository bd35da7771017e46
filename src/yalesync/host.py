"""Accessory host interface.

The host (a HomeKit bridge or similar) owns accessory registration and
persistence.  This library only needs a storage slot per accessory, a
place to publish the accessory's identity and a way to push
characteristic values.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from yalesync.models.panel import AccessoryInformation
from yalesync.models.states import Characteristic, ObservedState


class AccessoryHost(Protocol):
    def restore_context(self, accessory_id: str) -> Mapping[str, Any] | None:
        """Return the stored context of a previously registered accessory."""
        ...

    def register_accessory(self, accessory_id: str, display_name: str, context: Mapping[str, Any]) -> None:
        ...

    def store_context(self, accessory_id: str, context: Mapping[str, Any]) -> None:
        ...

    def set_accessory_information(self, accessory_id: str, information: AccessoryInformation) -> None:
        """Publish name, manufacturer, model and serial number."""
        ...

    def update_characteristic(self, accessory_id: str, characteristic: Characteristic, value: ObservedState) -> None:
        ...
