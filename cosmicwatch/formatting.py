"""Display strings for resolved asteroid values."""

from __future__ import annotations

import math
from typing import Any

from cosmicwatch.models import AsteroidRecord

NOT_AVAILABLE = "N/A"


def _coerce_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().replace(",", "")
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def format_diameter(value: Any) -> str:
    number = _coerce_float(value)
    if number is None:
        return NOT_AVAILABLE
    return f"{number:.2f} m"


def format_distance(value: Any) -> str:
    number = _coerce_float(value)
    if number is None:
        return NOT_AVAILABLE
    if number.is_integer():
        return f"{int(number):,} km"
    return f"{number:,.3f}".rstrip("0").rstrip(".") + " km"


def format_velocity(value: Any) -> str:
    number = _coerce_float(value)
    if number is None:
        return NOT_AVAILABLE
    return f"{number:,.2f} km/h"


def format_date(value: str | None) -> str:
    return value or NOT_AVAILABLE


def hazard_label(record: AsteroidRecord) -> str:
    return "Yes" if record.hazardous else "No"


def risk_badge(record: AsteroidRecord) -> str | None:
    if record.risk_level is None:
        return None
    return f"{record.risk_level} Risk"


__all__ = [
    "NOT_AVAILABLE",
    "format_date",
    "format_diameter",
    "format_distance",
    "format_velocity",
    "hazard_label",
    "risk_badge",
]
