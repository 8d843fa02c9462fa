"""Error types raised by the Cosmic Watch core."""

from __future__ import annotations


class CosmicWatchError(RuntimeError):
    """Base class for all Cosmic Watch failures."""


class InvalidRecord(CosmicWatchError, ValueError):
    """Raised when an asteroid record has no resolvable identifier."""

    def __init__(self, message: str, *, record: object | None = None) -> None:
        super().__init__(message)
        self.record = record


class RemoteUnavailable(CosmicWatchError):
    """Raised when a call to the remote asteroid store or auth service fails."""

    def __init__(
        self,
        operation: str,
        message: str,
        *,
        status_code: int | None = None,
    ) -> None:
        detail = f"{operation} failed: {message}"
        if status_code is not None:
            detail = f"{operation} failed with HTTP {status_code}: {message}"
        super().__init__(detail)
        self.operation = operation
        self.status_code = status_code


class Unauthenticated(CosmicWatchError):
    """Raised when a watchlist write is attempted without an active session."""


class AuthenticationFailed(CosmicWatchError):
    """Raised when the auth service rejects a login or registration."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ConfigError(CosmicWatchError):
    """Raised when the settings file cannot be read or is malformed."""


__all__ = [
    "AuthenticationFailed",
    "ConfigError",
    "CosmicWatchError",
    "InvalidRecord",
    "RemoteUnavailable",
    "Unauthenticated",
]
