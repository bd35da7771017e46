"""State enumerations on both sides of the translation.

:class:`PanelState` is what the Yale Sync service reports for a panel.
:class:`ObservedState` is the HomeKit security-system value space exposed
to the accessory host.  The two have the same cardinality for the states
this library produces, but are distinct types and never compared directly.
"""

from __future__ import annotations

import enum
from enum import StrEnum


class PanelState(StrEnum):
    """Native panel mode as reported by the Yale Sync API."""

    ARMED = "arm"
    HOME = "home"
    DISARMED = "disarm"


class ObservedState(enum.IntEnum):
    """HomeKit ``SecuritySystemCurrentState`` / ``TargetState`` values.

    ``STAY_ARM`` is never produced from a panel state; it is only accepted
    as a requested target and treated like ``NIGHT_ARM``.
    """

    STAY_ARM = 0
    AWAY_ARM = 1
    NIGHT_ARM = 2
    DISARMED = 3


class Characteristic(StrEnum):
    """Characteristics of the security system service pushed to the host."""

    SECURITY_SYSTEM_CURRENT_STATE = "SecuritySystemCurrentState"
    SECURITY_SYSTEM_TARGET_STATE = "SecuritySystemTargetState"
