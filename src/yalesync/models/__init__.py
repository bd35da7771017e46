"""Data models for yalesync."""

from yalesync.models.panel import AccessoryInformation, LoggerContext, Panel, PanelContext, StateNotification
from yalesync.models.states import Characteristic, ObservedState, PanelState

__all__ = [
    "AccessoryInformation",
    "Characteristic",
    "LoggerContext",
    "ObservedState",
    "Panel",
    "PanelContext",
    "PanelState",
    "StateNotification",
]
