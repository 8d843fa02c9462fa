"""Canonical data models for asteroid records, alerts and user sessions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

RiskLevel = Literal["High", "Medium", "Low"]
RISK_LEVELS: tuple[str, ...] = ("High", "Medium", "Low")

# Numeric fields are resolved but never parsed, so upstream strings survive.
Measure = float | int | str


class RecordShape(str, Enum):
    """Which upstream representation a record was resolved from."""

    FLAT = "flat"
    UPSTREAM = "upstream"
    MIXED = "mixed"


@dataclass(slots=True, frozen=True)
class AsteroidRecord:
    """Single normalized view of an asteroid used by rendering and storage."""

    id: str
    name: str
    diameter_m: Measure | None = None
    closest_approach_km: Measure | None = None
    closest_approach_date: str | None = None
    relative_velocity_kph: Measure | None = None
    hazardous: bool = False
    reference_url: str | None = None
    risk_level: RiskLevel | None = None
    shape: RecordShape = field(default=RecordShape.FLAT, compare=False)
    payload: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)


@dataclass(slots=True, frozen=True)
class WatchlistEntry:
    """A watchlisted asteroid together with its self-contained stored payload."""

    record: AsteroidRecord
    payload: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def id(self) -> str:
        return self.record.id

    @property
    def name(self) -> str:
        return self.record.name


@dataclass(slots=True, frozen=True)
class AlertRecord:
    """Read-only close-approach alert served by the remote store."""

    name: str
    closest_approach_date: str | None = None
    closest_approach_km: Measure | None = None


@dataclass(slots=True)
class UserSession:
    """Authenticated user as returned by the auth service."""

    token: str
    email: str | None = None
    user_id: str | None = None
    payload: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data = dict(self.payload)
        data["token"] = self.token
        if self.email is not None:
            data["email"] = self.email
        if self.user_id is not None:
            data["user_id"] = self.user_id
        return data

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> UserSession:
        token = payload.get("token")
        if not isinstance(token, str) or not token:
            raise ValueError("session payload has no token")
        user = payload.get("user")
        nested = user if isinstance(user, dict) else {}
        email = payload.get("email") or nested.get("email")
        user_id = payload.get("user_id") or payload.get("_id") or nested.get("id") or nested.get("_id")
        return cls(
            token=token,
            email=str(email) if email is not None else None,
            user_id=str(user_id) if user_id is not None else None,
            payload=dict(payload),
        )


__all__ = [
    "AlertRecord",
    "AsteroidRecord",
    "Measure",
    "RISK_LEVELS",
    "RecordShape",
    "RiskLevel",
    "UserSession",
    "WatchlistEntry",
]
