"""Panel models shared by the session, accessory and lifecycle layers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from yalesync._constants import MANUFACTURER, MODEL, PANEL_KIND
from yalesync.models.states import ObservedState, PanelState


class Panel(BaseModel):
    """A panel as reported by the alarm client on discovery."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    identifier: str = Field(validation_alias=AliasChoices("identifier", "id", "device_id"))
    """Stable remote device id (usually the panel MAC address)."""
    state: PanelState
    """Panel mode at discovery time."""

    @field_validator("identifier")
    @classmethod
    def _normalize_identifier(cls, value: str) -> str:
        identifier = value.strip()
        if not identifier:
            raise ValueError("identifier must be non-empty")
        return identifier


class PanelContext(BaseModel):
    """Per-accessory record kept in the host's storage slot.

    Owned by the accessory's synchronisation step; only the read path and
    a confirmed set-state mutate :attr:`state`.
    """

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        populate_by_name=True,
    )

    identifier: str = Field(validation_alias=AliasChoices("identifier", "id"))
    kind: str = Field(default=PANEL_KIND, validation_alias=AliasChoices("kind", "type"))
    state: PanelState


@dataclass
class LoggerContext:
    """Debounce state for lifecycle notifications.

    ``last_updated`` is a monotonic timestamp; ``last_value`` is ``None``
    until the first notification so the first tick always reports a change.
    """

    last_updated: float
    last_value: ObservedState | None = None


class StateNotification(BaseModel):
    """Emitted by the lifecycle on a state change or a heartbeat."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    value: ObservedState
    changed: bool
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class AccessoryInformation(BaseModel):
    """Identity shown by the host for the panel accessory."""

    model_config = ConfigDict(frozen=True)

    name: str
    manufacturer: str = MANUFACTURER
    model: str = MODEL
    serial_number: str
