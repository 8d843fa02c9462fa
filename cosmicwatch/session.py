"""Session provider interface with in-memory and JSON file implementations."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

from cosmicwatch.models import UserSession

_LOGGER = logging.getLogger(__name__)


class SessionProvider(Protocol):
    """Where the authenticated user is kept between calls."""

    def current_user(self) -> UserSession | None: ...

    def persist(self, user: UserSession) -> None: ...

    def clear(self) -> None: ...


class InMemorySessionProvider:
    """Holds the session for the lifetime of the process (and in tests)."""

    def __init__(self, user: UserSession | None = None) -> None:
        self._user = user

    def current_user(self) -> UserSession | None:
        return self._user

    def persist(self, user: UserSession) -> None:
        self._user = user

    def clear(self) -> None:
        self._user = None


class FileSessionProvider:
    """Stores the session payload as JSON on disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def current_user(self) -> UserSession | None:
        if not self.path.exists():
            return None
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
            return UserSession.from_dict(payload)
        except (OSError, ValueError, AttributeError) as exc:
            _LOGGER.warning("Ignoring unreadable session file %s: %s", self.path, exc)
            return None

    def persist(self, user: UserSession) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as handle:
            json.dump(user.to_dict(), handle)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


__all__ = ["FileSessionProvider", "InMemorySessionProvider", "SessionProvider"]
