"""Login, registration and logout against the Cosmic Watch auth service."""

from __future__ import annotations

import logging
from typing import Any

import requests

from cosmicwatch.errors import AuthenticationFailed, RemoteUnavailable
from cosmicwatch.fetchers.http import JsonClient, error_message
from cosmicwatch.models import UserSession
from cosmicwatch.session import SessionProvider

_LOGGER = logging.getLogger(__name__)


def _credentials(email: str, password: str) -> dict[str, str]:
    email = (email or "").strip()
    if not email:
        raise ValueError("email must not be empty")
    if not password:
        raise ValueError("password must not be empty")
    return {"email": email, "password": password}


class AuthClient:
    def __init__(
        self,
        base_url: str,
        sessions: SessionProvider,
        *,
        timeout: float = 15.0,
        http: requests.Session | None = None,
    ) -> None:
        self._client = JsonClient(base_url, timeout=timeout, http=http)
        self.sessions = sessions

    def _post(self, operation: str, path: str, body: dict[str, str]) -> dict[str, Any]:
        response = self._client.send(operation, "POST", path, body=body)
        if 400 <= response.status_code < 500:
            raise AuthenticationFailed(error_message(response), status_code=response.status_code)
        if not response.ok:
            raise RemoteUnavailable(
                operation, error_message(response), status_code=response.status_code
            )
        try:
            payload = response.json() if response.content else {}
        except ValueError as exc:
            raise RemoteUnavailable(operation, "response was not valid JSON") from exc
        if not isinstance(payload, dict):
            raise RemoteUnavailable(operation, "unexpected response shape")
        return payload

    def login(self, email: str, password: str) -> UserSession:
        """Authenticate and persist the returned session when it carries a token."""

        payload = self._post("login", "/login", _credentials(email, password))
        token = payload.get("token")
        if not isinstance(token, str) or not token:
            raise AuthenticationFailed(str(payload.get("message") or "login returned no token"))
        payload.setdefault("email", email.strip())
        user = UserSession.from_dict(payload)
        self.sessions.persist(user)
        _LOGGER.info("Logged in as %s", user.email)
        return user

    def register(self, email: str, password: str) -> dict[str, Any]:
        """Create an account. Registration does not start a session."""

        return self._post("register", "/register", _credentials(email, password))

    def logout(self) -> None:
        self.sessions.clear()

    def current_user(self) -> UserSession | None:
        return self.sessions.current_user()


__all__ = ["AuthClient"]
