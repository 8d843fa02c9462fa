"""Resolve flat and raw NeoWs asteroid payloads into canonical records."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from cosmicwatch.errors import InvalidRecord
from cosmicwatch.models import (
    RISK_LEVELS,
    AlertRecord,
    AsteroidRecord,
    RecordShape,
    WatchlistEntry,
)

_LOGGER = logging.getLogger(__name__)

_FLAT_KEYS = frozenset(
    {
        "diameter_m",
        "closest_approach_km",
        "closest_approach_date",
        "relative_velocity_kph",
        "hazardous",
        "nasaUrl",
        "riskLevel",
    }
)
_UPSTREAM_KEYS = frozenset(
    {
        "estimated_diameter",
        "close_approach_data",
        "is_potentially_hazardous_asteroid",
        "neo_reference_id",
    }
)


@dataclass(slots=True)
class NormalizedBatch:
    """Records that normalized cleanly plus the positions that were skipped."""

    records: list[AsteroidRecord] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)


def _dig(value: Any, *path: str | int) -> Any:
    current = value
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, (list, tuple)) or len(current) <= step:
                return None
            current = current[step]
        else:
            if not isinstance(current, Mapping):
                return None
            current = current.get(step)
        if current is None:
            return None
    return current


def _first(raw: Mapping[str, Any], *candidates: tuple[str | int, ...]) -> Any:
    for path in candidates:
        value = _dig(raw, *path)
        if value is not None:
            return value
    return None


def _coerce_id(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def resolve_id(raw: Any) -> str | None:
    """Return the canonical string id of ``raw`` or ``None`` if it has none."""

    if isinstance(raw, AsteroidRecord):
        return raw.id
    if not isinstance(raw, Mapping):
        return None
    return _coerce_id(raw.get("id")) or _coerce_id(raw.get("neo_reference_id"))


def detect_shape(raw: Mapping[str, Any]) -> RecordShape:
    keys = set(raw.keys())
    has_flat = bool(keys & _FLAT_KEYS)
    has_upstream = bool(keys & _UPSTREAM_KEYS)
    if has_flat and has_upstream:
        return RecordShape.MIXED
    if has_upstream:
        return RecordShape.UPSTREAM
    return RecordShape.FLAT


def _resolve_diameter(raw: Mapping[str, Any]) -> Any:
    return _first(
        raw,
        ("diameter_m",),
        ("estimated_diameter", "meters", "estimated_diameter_max"),
    )


def _resolve_distance(raw: Mapping[str, Any]) -> Any:
    return _first(
        raw,
        ("closest_approach_km",),
        ("close_approach_data", 0, "miss_distance", "kilometers"),
    )


def _resolve_date(raw: Mapping[str, Any]) -> str | None:
    value = _first(
        raw,
        ("closest_approach_date",),
        ("close_approach_data", 0, "close_approach_date"),
    )
    return str(value) if value is not None else None


def _resolve_velocity(raw: Mapping[str, Any]) -> Any:
    return _first(
        raw,
        ("relative_velocity_kph",),
        ("close_approach_data", 0, "relative_velocity", "kilometers_per_hour"),
    )


def _resolve_url(raw: Mapping[str, Any]) -> str | None:
    value = _first(raw, ("nasa_jpl_url",), ("nasaUrl",))
    if value is None:
        return None
    text = str(value).strip()
    return text or None


_TRUE_STRINGS = frozenset({"true", "yes", "y", "1"})


def _resolve_hazardous(raw: Mapping[str, Any]) -> bool:
    value = _first(raw, ("hazardous",), ("is_potentially_hazardous_asteroid",))
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    if isinstance(value, (int, float)):
        return value != 0
    return False


def _resolve_risk(raw: Mapping[str, Any]) -> Any:
    value = _first(raw, ("riskLevel",), ("risk_level",))
    if value is None:
        return None
    label = str(value).strip().capitalize()
    if label not in RISK_LEVELS:
        _LOGGER.debug("Ignoring unknown risk level %r", value)
        return None
    return label


def _resolve_name(raw: Mapping[str, Any], fallback: str) -> str:
    value = _first(raw, ("name",), ("designation",))
    if value is None:
        return fallback
    text = str(value).strip()
    return text or fallback


def normalize(raw: Mapping[str, Any]) -> AsteroidRecord:
    """Resolve a flat or raw NeoWs asteroid payload into an :class:`AsteroidRecord`.

    Every field prefers its flat key and falls back to the nested NeoWs path.
    Missing values resolve to ``None`` (``False`` for ``hazardous``). Numeric
    values are passed through unparsed. Raises :class:`InvalidRecord` when the
    payload carries neither ``id`` nor ``neo_reference_id``.
    """

    if not isinstance(raw, Mapping):
        raise InvalidRecord(f"expected a mapping, got {type(raw).__name__}", record=raw)
    asteroid_id = resolve_id(raw)
    if asteroid_id is None:
        raise InvalidRecord("record has neither 'id' nor 'neo_reference_id'", record=raw)

    return AsteroidRecord(
        id=asteroid_id,
        name=_resolve_name(raw, asteroid_id),
        diameter_m=_resolve_diameter(raw),
        closest_approach_km=_resolve_distance(raw),
        closest_approach_date=_resolve_date(raw),
        relative_velocity_kph=_resolve_velocity(raw),
        hazardous=_resolve_hazardous(raw),
        reference_url=_resolve_url(raw),
        risk_level=_resolve_risk(raw),
        shape=detect_shape(raw),
        payload=dict(raw),
    )


def normalize_many(raws: Iterable[Any] | None) -> NormalizedBatch:
    """Normalize a batch, skipping records without an identifier."""

    batch = NormalizedBatch()
    for index, raw in enumerate(raws or ()):
        try:
            batch.records.append(normalize(raw))
        except InvalidRecord as exc:
            _LOGGER.warning("Skipping asteroid record %d: %s", index, exc)
            batch.skipped.append(index)
    return batch


def watchlist_payload(
    asteroid: Mapping[str, Any] | AsteroidRecord,
    extra: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build the self-contained payload stored for a watchlisted asteroid.

    The asteroid payload is merged with any fields returned by the store and
    the flat convenience fields are resolved once on the merged result.
    """

    source = asteroid.payload if isinstance(asteroid, AsteroidRecord) else asteroid
    merged: dict[str, Any] = dict(source)
    if extra:
        merged.update(extra)
    asteroid_id = resolve_id(merged)
    if asteroid_id is None and isinstance(asteroid, AsteroidRecord):
        asteroid_id = asteroid.id
    if asteroid_id is None:
        raise InvalidRecord("watchlist entry has no identifier", record=source)
    merged.update(
        {
            "id": asteroid_id,
            "diameter_m": _resolve_diameter(merged),
            "closest_approach_km": _resolve_distance(merged),
            "closest_approach_date": _resolve_date(merged),
            "nasa_jpl_url": _resolve_url(merged),
        }
    )
    return merged


def to_watchlist_entry(
    asteroid: Mapping[str, Any] | AsteroidRecord,
    extra: Mapping[str, Any] | None = None,
) -> WatchlistEntry:
    payload = watchlist_payload(asteroid, extra)
    return WatchlistEntry(record=normalize(payload), payload=payload)


def normalize_alert(raw: Mapping[str, Any]) -> AlertRecord:
    if not isinstance(raw, Mapping):
        raise InvalidRecord(f"expected a mapping, got {type(raw).__name__}", record=raw)
    return AlertRecord(
        name=_resolve_name(raw, resolve_id(raw) or "Unknown object"),
        closest_approach_date=_resolve_date(raw),
        closest_approach_km=_resolve_distance(raw),
    )


def normalize_alerts(raws: Iterable[Any] | None) -> list[AlertRecord]:
    alerts: list[AlertRecord] = []
    for index, raw in enumerate(raws or ()):
        try:
            alerts.append(normalize_alert(raw))
        except InvalidRecord as exc:
            _LOGGER.warning("Skipping alert %d: %s", index, exc)
    return alerts


__all__ = [
    "NormalizedBatch",
    "detect_shape",
    "normalize",
    "normalize_alert",
    "normalize_alerts",
    "normalize_many",
    "resolve_id",
    "to_watchlist_entry",
    "watchlist_payload",
]
