"""Engine configuration for yalesync."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from typing import Any

from yalesync._constants import (
    DEFAULT_NAME,
    DEFAULT_PROBE_TIMEOUT,
    DEFAULT_REFRESH_INTERVAL,
    DEFAULT_REQUEST_TIMEOUT,
    MIN_REFRESH_INTERVAL,
)
from yalesync.exceptions import YaleConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


# Host config keys (camelCase) to field names.
_HOST_KEY_MAP: dict[str, str] = {
    "backgroundRefresh": "background_refresh",
    "refreshInterval": "refresh_interval",
    "probeTimeout": "probe_timeout",
    "requestTimeout": "request_timeout",
}


@dataclasses.dataclass(frozen=True)
class YaleConfig:
    """Engine configuration.

    Parameters
    ----------
    username : str
        Yale Sync account username.
    password : str
        Yale Sync account password.
    name : str
        Display name of the panel accessory.
    background_refresh : bool
        Poll the panel in the background.  When disabled the lifecycle
        runs once and stops.
    refresh_interval : int
        Seconds between background polls.  At least 5 when background
        refresh is enabled.
    probe_timeout : float
        Upper bound in seconds for the connectivity probe.
    request_timeout : float
        Upper bound in seconds for one alarm client call.  ``0`` waits
        indefinitely.
    """

    username: str
    password: str
    name: str = DEFAULT_NAME
    background_refresh: bool = True
    refresh_interval: int = DEFAULT_REFRESH_INTERVAL
    probe_timeout: float = DEFAULT_PROBE_TIMEOUT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @classmethod
    def decode(cls, raw: Mapping[str, Any]) -> YaleConfig:
        """Build a configuration from the host's config mapping.

        Missing values take their defaults; camelCase keys are accepted.
        Unknown keys are ignored.  The result is not validated.
        """
        field_names = {f.name for f in dataclasses.fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in raw.items():
            name = _HOST_KEY_MAP.get(key, key)
            if name in field_names and value is not None:
                kwargs[name] = value
        kwargs.setdefault("username", "")
        kwargs.setdefault("password", "")
        return cls(**kwargs)

    @classmethod
    def from_env(cls, **overrides: Any) -> YaleConfig:
        """Create configuration from ``YALE_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        kwargs: dict[str, Any] = {
            "username": env.get("YALE_USERNAME", ""),
            "password": env.get("YALE_PASSWORD", ""),
        }
        name_env = env.get("YALE_NAME")
        if name_env is not None:
            kwargs["name"] = name_env
        kwargs["background_refresh"] = _env_bool(env.get("YALE_BACKGROUND_REFRESH"), True)

        interval_env = env.get("YALE_REFRESH_INTERVAL")
        if interval_env is not None and "refresh_interval" not in overrides:
            kwargs["refresh_interval"] = int(interval_env)

        probe_env = env.get("YALE_PROBE_TIMEOUT")
        if probe_env is not None and "probe_timeout" not in overrides:
            kwargs["probe_timeout"] = float(probe_env)

        timeout_env = env.get("YALE_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            kwargs["request_timeout"] = float(timeout_env)

        kwargs.update(overrides)
        return cls(**kwargs)

    def validate(self) -> str | None:
        """Return the first configuration problem, or ``None`` if valid."""
        if not str(self.name or "").strip():
            return "The name is required"
        if not str(self.username or "").strip():
            return "The username is required"
        if not str(self.password or "").strip():
            return "The password is required"
        if self.background_refresh and (
            isinstance(self.refresh_interval, bool)
            or not isinstance(self.refresh_interval, int)
            or self.refresh_interval < MIN_REFRESH_INTERVAL
        ):
            return f"The refresh interval is required and must be at least {MIN_REFRESH_INTERVAL} seconds"
        if self.probe_timeout <= 0:
            return "The probe timeout must be positive"
        if self.request_timeout < 0:
            return "The request timeout must not be negative"
        return None

    def ensure_valid(self) -> YaleConfig:
        """Return ``self`` or raise :class:`YaleConfigError`."""
        error = self.validate()
        if error is not None:
            raise YaleConfigError(error)
        return self
