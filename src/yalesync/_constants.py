"""Internal constants shared across the library."""

#: Hostname of the Yale Sync cloud API, probed before every remote read.
API_HOSTNAME = "mob.yalehomesystem.co.uk"

MANUFACTURER = "Yale"
MODEL = "Yale IA-320"
PANEL_KIND = "panel"
DEFAULT_NAME = "Yale Sync Alarm"

# ------------------------------------------------------------------
# Timing (seconds)
# ------------------------------------------------------------------

#: Reads closer together than this are served from the call cache.
CACHE_WINDOW_S: float = 1.0

#: Maximum silence between "no change" heartbeat notifications.
LOG_HEARTBEAT_S: float = 10 * 60

MIN_REFRESH_INTERVAL: int = 5
DEFAULT_REFRESH_INTERVAL: int = 5
DEFAULT_PROBE_TIMEOUT: float = 5.0
DEFAULT_REQUEST_TIMEOUT: float = 30.0
