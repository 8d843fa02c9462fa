"""Remote asteroid store client for the Cosmic Watch backend."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol
from urllib.parse import quote

import requests

from cosmicwatch.errors import RemoteUnavailable
from cosmicwatch.fetchers.http import JsonClient
from cosmicwatch.models import AsteroidRecord


class AsteroidStore(Protocol):
    """Operations the core needs from the remote asteroid store."""

    def get_feed(self) -> list[Any]: ...

    def get_alerts(self) -> list[Any]: ...

    def fetch_fresh(self) -> Any: ...

    def get_watchlist(self, token: str) -> list[Any]: ...

    def add_to_watchlist(self, token: str, asteroid: Mapping[str, Any]) -> Any: ...

    def remove_from_watchlist(self, token: str, asteroid_id: str) -> Any: ...


def _list_field(operation: str, payload: Any, key: str) -> list[Any]:
    if payload is None:
        return []
    if isinstance(payload, list):
        return payload
    if not isinstance(payload, dict):
        raise RemoteUnavailable(operation, f"unexpected response type {type(payload).__name__}")
    value = payload.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise RemoteUnavailable(operation, f"'{key}' is not a list")
    return value


class HttpAsteroidStore:
    """REST/JSON binding of the asteroid store.

    Unauthenticated reads hit ``/data``, ``/alerts`` and ``/fetch``; the
    watchlist lives under ``/wishlist`` and requires a bearer token.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 15.0,
        http: requests.Session | None = None,
    ) -> None:
        self._client = JsonClient(base_url, timeout=timeout, http=http)

    @property
    def base_url(self) -> str:
        return self._client.base_url

    def get_feed(self) -> list[Any]:
        payload = self._client.request("feed", "GET", "/data")
        return _list_field("feed", payload, "asteroids")

    def get_alerts(self) -> list[Any]:
        payload = self._client.request("alerts", "GET", "/alerts")
        return _list_field("alerts", payload, "items")

    def fetch_fresh(self) -> Any:
        return self._client.request("fetch-fresh", "GET", "/fetch")

    def get_watchlist(self, token: str) -> list[Any]:
        payload = self._client.request("watchlist", "GET", "/wishlist", token=token)
        return _list_field("watchlist", payload, "wishlist")

    def add_to_watchlist(self, token: str, asteroid: Mapping[str, Any]) -> Any:
        body = asteroid.payload if isinstance(asteroid, AsteroidRecord) else dict(asteroid)
        return self._client.request(
            "watchlist-add", "POST", "/wishlist", token=token, body={"asteroid": body}
        )

    def remove_from_watchlist(self, token: str, asteroid_id: str) -> Any:
        path = f"/wishlist/{quote(str(asteroid_id), safe='')}"
        return self._client.request("watchlist-remove", "DELETE", path, token=token)

    def close(self) -> None:
        self._client.close()


__all__ = ["AsteroidStore", "HttpAsteroidStore"]
