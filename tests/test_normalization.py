from __future__ import annotations

from datetime import UTC, datetime

import pytest

from pysmarthelp.ingestion.normalize import parse_timestamp, safe_bool, safe_float, safe_str, safe_str_list


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, None), ("", None), ("12.5", 12.5), (3, 3.0), (True, None), ("nan", None), ("abc", None)],
)
def test_safe_float(value: object, expected: float | None) -> None:
    assert safe_float(value) == expected


def test_safe_str_collapses_integer_floats() -> None:
    assert safe_str(5.0) == "5"
    assert safe_str("  x ") == "x"
    assert safe_str("   ") is None


def test_safe_str_list_accepts_scalars() -> None:
    assert safe_str_list("billing") == ["billing"]
    assert safe_str_list(None) == []


@pytest.mark.parametrize(("value", "expected"), [("yes", True), ("OFF", False), (0, False), ("maybe", False)])
def test_safe_bool(value: object, expected: bool) -> None:
    assert safe_bool(value) is expected


def test_parse_timestamp_variants() -> None:
    expected = datetime(2026, 1, 1, tzinfo=UTC)
    assert parse_timestamp("2026-01-01T00:00:00Z") == expected
    assert parse_timestamp("2026-01-01") == expected
    assert parse_timestamp(1_767_225_600) == expected
    assert parse_timestamp(1_767_225_600_000) == expected
    assert parse_timestamp("soon") is None
