"""Translation between Yale panel states and HomeKit security-system states.

The forward direction is one-to-one.  The reverse direction is
many-to-one: both ``STAY_ARM`` and ``NIGHT_ARM`` collapse to the panel's
``HOME`` mode, which is why ``to_native(to_observed(s)) == s`` holds but
the opposite round trip does not.
"""

from __future__ import annotations

from typing import Any

from yalesync.exceptions import YaleUnrecognizedStateError
from yalesync.models.states import ObservedState, PanelState

_TO_OBSERVED: dict[PanelState, ObservedState] = {
    PanelState.ARMED: ObservedState.AWAY_ARM,
    PanelState.HOME: ObservedState.NIGHT_ARM,
    PanelState.DISARMED: ObservedState.DISARMED,
}

_TO_NATIVE: dict[ObservedState, PanelState] = {
    ObservedState.AWAY_ARM: PanelState.ARMED,
    ObservedState.STAY_ARM: PanelState.HOME,
    ObservedState.NIGHT_ARM: PanelState.HOME,
    ObservedState.DISARMED: PanelState.DISARMED,
}


def to_observed(state: PanelState) -> ObservedState:
    """Convert a panel state to the value displayed by the host."""
    return _TO_OBSERVED[state]


def to_native(value: ObservedState | int) -> PanelState:
    """Convert a requested HomeKit state to the panel mode to send.

    Raises :class:`YaleUnrecognizedStateError` for any value outside the
    recognised set instead of guessing a mode.
    """
    if isinstance(value, bool):
        raise YaleUnrecognizedStateError(f"Unknown state: {value!r}", value=value)
    try:
        observed = ObservedState(value)
    except ValueError as exc:
        raise YaleUnrecognizedStateError(f"Unknown state: {value!r}", value=value) from exc
    return _TO_NATIVE[observed]


def parse_panel_state(raw: Any) -> PanelState:
    """Validate a panel state reported by the alarm client.

    The remote service is not under our control and may introduce new
    modes; those are rejected rather than mapped to a known one.
    """
    if isinstance(raw, PanelState):
        return raw
    if isinstance(raw, str):
        try:
            return PanelState(raw.strip().lower())
        except ValueError:
            pass
    raise YaleUnrecognizedStateError(f"Unrecognised panel state: {raw!r}", value=raw)
