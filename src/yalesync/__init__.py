"""yalesync - Async state synchronisation for Yale Sync alarm panels."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("yalesync")
except PackageNotFoundError:
    __version__ = "0+local"
from yalesync._cache import CachedRead, StateThrottle
from yalesync._network import ConnectivityGate
from yalesync.accessory import AlarmAccessory
from yalesync.config import YaleConfig
from yalesync.exceptions import (
    YaleConfigError,
    YaleError,
    YaleHostError,
    YaleRemoteError,
    YaleServiceUnavailableError,
    YaleUnrecognizedStateError,
)
from yalesync.host import AccessoryHost
from yalesync.lifecycle import Lifecycle
from yalesync.models import (
    AccessoryInformation,
    Characteristic,
    LoggerContext,
    ObservedState,
    Panel,
    PanelContext,
    PanelState,
    StateNotification,
)
from yalesync.platform import YalePlatform, panel_uuid
from yalesync.session import AlarmClient, PanelSession
from yalesync.translate import parse_panel_state, to_native, to_observed

__all__ = [
    "__version__",
    "AccessoryHost",
    "AccessoryInformation",
    "AlarmAccessory",
    "AlarmClient",
    "CachedRead",
    "Characteristic",
    "ConnectivityGate",
    "Lifecycle",
    "LoggerContext",
    "ObservedState",
    "Panel",
    "PanelContext",
    "PanelSession",
    "PanelState",
    "StateNotification",
    "StateThrottle",
    "YaleConfig",
    "YaleConfigError",
    "YaleError",
    "YaleHostError",
    "YalePlatform",
    "YaleRemoteError",
    "YaleServiceUnavailableError",
    "YaleUnrecognizedStateError",
    "panel_uuid",
    "parse_panel_state",
    "to_native",
    "to_observed",
]
