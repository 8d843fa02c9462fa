"""Near-earth-object feed normalization and watchlist reconciliation."""

from __future__ import annotations

from cosmicwatch.errors import (
    AuthenticationFailed,
    ConfigError,
    CosmicWatchError,
    InvalidRecord,
    RemoteUnavailable,
    Unauthenticated,
)
from cosmicwatch.models import AlertRecord, AsteroidRecord, RecordShape, UserSession, WatchlistEntry
from cosmicwatch.normalize import normalize, normalize_many
from cosmicwatch.watchlist import Watchlist, WatchlistReconciler, contains

__all__ = [
    "AlertRecord",
    "AsteroidRecord",
    "AuthenticationFailed",
    "ConfigError",
    "CosmicWatchError",
    "InvalidRecord",
    "RecordShape",
    "RemoteUnavailable",
    "Unauthenticated",
    "UserSession",
    "Watchlist",
    "WatchlistEntry",
    "WatchlistReconciler",
    "contains",
    "normalize",
    "normalize_many",
]
