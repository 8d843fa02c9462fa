from __future__ import annotations

from cosmicwatch.formatting import (
    NOT_AVAILABLE,
    format_date,
    format_diameter,
    format_distance,
    format_velocity,
    hazard_label,
    risk_badge,
)
from cosmicwatch.normalize import normalize


def test_format_diameter() -> None:
    assert format_diameter(340.5) == "340.50 m"
    assert format_diameter("485.3331752235") == "485.33 m"
    assert format_diameter(None) == NOT_AVAILABLE
    assert format_diameter("unknown") == NOT_AVAILABLE


def test_format_distance_uses_thousands_separators() -> None:
    assert format_distance("45290298.225725659") == "45,290,298.226 km"
    assert format_distance(31000) == "31,000 km"
    assert format_distance("31000") == "31,000 km"
    assert format_distance(float("nan")) == NOT_AVAILABLE
    assert format_distance(True) == NOT_AVAILABLE


def test_format_velocity_and_date() -> None:
    assert format_velocity("65260.5699103704") == "65,260.57 km/h"
    assert format_velocity(None) == NOT_AVAILABLE
    assert format_date("2029-04-13") == "2029-04-13"
    assert format_date(None) == NOT_AVAILABLE


def test_labels() -> None:
    record = normalize(
        {"id": "A1", "name": "Apophis", "hazardous": True, "riskLevel": "High", "diameter_m": 340.5}
    )
    assert hazard_label(record) == "Yes"
    assert risk_badge(record) == "High Risk"

    calm = normalize({"id": "E3", "name": "Eros"})
    assert hazard_label(calm) == "No"
    assert risk_badge(calm) is None
