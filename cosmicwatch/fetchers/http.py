"""Shared JSON-over-HTTP plumbing for the remote store and auth clients."""

from __future__ import annotations

import logging
from typing import Any

import requests

from cosmicwatch.errors import RemoteUnavailable

_LOGGER = logging.getLogger(__name__)

USER_AGENT = "cosmic-watch/1.0"


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def error_message(response: Any) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        for key in ("message", "error", "detail"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    text = (getattr(response, "text", "") or "").strip()
    return text[:200] or getattr(response, "reason", None) or "request failed"


class JsonClient:
    """Thin wrapper that turns every transport or status failure into RemoteUnavailable."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 15.0,
        http: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = http or requests.Session()

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def send(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        token: str | None = None,
        body: dict[str, Any] | None = None,
    ) -> requests.Response:
        headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
        if token:
            headers.update(bearer(token))
        url = self.url(path)
        _LOGGER.debug("%s: %s %s", operation, method, url)
        try:
            return self._http.request(
                method,
                url,
                headers=headers,
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise RemoteUnavailable(operation, str(exc)) from exc

    def request(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        token: str | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (``None`` when empty)."""

        response = self.send(operation, method, path, token=token, body=body)
        if not response.ok:
            raise RemoteUnavailable(
                operation, error_message(response), status_code=response.status_code
            )
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise RemoteUnavailable(
                operation, "response was not valid JSON", status_code=response.status_code
            ) from exc

    def close(self) -> None:
        self._http.close()


__all__ = ["JsonClient", "USER_AGENT", "bearer", "error_message"]
