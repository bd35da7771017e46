"""Custom exception hierarchy for yalesync."""

from __future__ import annotations

from typing import Any


class YaleError(Exception):
    """Base exception for all yalesync errors."""


class YaleConfigError(YaleError):
    """Invalid or missing configuration."""


class YaleServiceUnavailableError(YaleError):
    """The Yale service cannot be used right now.

    Raised when the connectivity gate reports the API host as unreachable
    or when no session is available.  It is also the only error the
    external read/write paths of an accessory ever raise: every other
    :class:`YaleError` is converted into this one before it reaches the
    host.
    """


class YaleRemoteError(YaleError):
    """The alarm client failed (transport, protocol or timeout)."""

    def __init__(self, message: str, *, operation: str = "") -> None:
        self.operation = operation
        super().__init__(message)


class YaleUnrecognizedStateError(YaleError):
    """A state value outside the recognised set was received.

    The value is never coerced to a default; callers surface it as a
    service failure instead.
    """

    def __init__(self, message: str, *, value: Any = None) -> None:
        self.value = value
        super().__init__(message)


class YaleHostError(YaleError):
    """The accessory host failed to store a context or accept a value."""
