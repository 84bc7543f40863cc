"""
Tests of gencore.dates
"""

from __future__ import annotations

import pytest

from gencore.dates import (
    UNKNOWN_DATE,
    add_days,
    add_months,
    format_display,
    parse_display,
    parse_flexible,
    parse_iso,
    same_calendar_day_prior_year,
    sub_days,
)
from gencore.errors import InvalidFormat


@pytest.mark.parametrize(
    "display",
    (
        pytest.param("01-01-2024", id="new-year"),
        pytest.param("29-02-2024", id="leap-day"),
        pytest.param("31-12-1999", id="year-end"),
        pytest.param("18-12-2025", id="plain"),
    ),
)
def test_display_round_trip(display):
    assert format_display(parse_flexible(display)) == display


@pytest.mark.parametrize(
    "raw, exp",
    (
        pytest.param("29-02-2024", "2024-02-29", id="display-leap"),
        pytest.param("2024-02-29", "2024-02-29", id="iso-leap"),
        pytest.param("  05-06-2025 ", "2025-06-05", id="whitespace"),
        pytest.param("2025-06-05", "2025-06-05", id="iso"),
    ),
)
def test_parse_flexible(raw, exp):
    assert parse_flexible(raw) == exp


@pytest.mark.parametrize(
    "raw",
    (
        pytest.param("31-02-2024", id="feb-31"),
        pytest.param("29-02-2023", id="non-leap-feb-29"),
        pytest.param("31-04-2024", id="april-31"),
        pytest.param("2023-02-29", id="iso-non-leap"),
        pytest.param("2024-13-01", id="month-13"),
        pytest.param("00-01-2024", id="day-0"),
        pytest.param("1-1-2024", id="short"),
        pytest.param("2024/01/01", id="slashes"),
        pytest.param("", id="empty"),
        pytest.param("xx", id="junk"),
        pytest.param(None, id="none"),
        pytest.param(20240101, id="int"),
    ),
)
def test_parse_flexible_rejects(raw):
    with pytest.raises(InvalidFormat):
        parse_flexible(raw)


def test_parse_display_only_accepts_display():
    with pytest.raises(InvalidFormat):
        parse_display("2024-01-01")


def test_parse_iso_only_accepts_iso():
    assert parse_iso("2024-01-31") == "2024-01-31"
    with pytest.raises(InvalidFormat):
        parse_iso("31-01-2024")


@pytest.mark.parametrize("raw", ("", "2024-1-01", None, "abc"))
def test_format_display_unknown(raw):
    assert format_display(raw) == UNKNOWN_DATE


@pytest.mark.parametrize(
    "iso, n, exp",
    (
        pytest.param("2024-01-31", 1, "2024-02-01", id="month-boundary"),
        pytest.param("2023-12-31", 1, "2024-01-01", id="year-boundary"),
        pytest.param("2024-02-28", 1, "2024-02-29", id="leap"),
        pytest.param("2023-02-28", 1, "2023-03-01", id="non-leap"),
        pytest.param("2024-03-01", -1, "2024-02-29", id="negative"),
        pytest.param("2024-03-01", 0, "2024-03-01", id="zero"),
        pytest.param("2025-01-15", 365, "2026-01-15", id="year"),
    ),
)
def test_add_days(iso, n, exp):
    assert add_days(iso, n) == exp
    assert sub_days(exp, n) == iso


def test_same_calendar_day_prior_year():
    assert same_calendar_day_prior_year("2024-01-15") == "2023-01-15"
    # Leap day maps to a date that does not exist; lookups simply miss.
    assert same_calendar_day_prior_year("2024-02-29") == "2023-02-29"


@pytest.mark.parametrize(
    "ym, delta, exp",
    (
        ("2024-03", -1, "2024-02"),
        ("2024-01", -1, "2023-12"),
        ("2023-12", 1, "2024-01"),
        ("2024-05", -17, "2022-12"),
    ),
)
def test_add_months(ym, delta, exp):
    assert add_months(ym, delta) == exp


def test_iso_order_is_calendar_order():
    keys = ["2024-10-01", "2024-02-29", "2023-12-31", "2024-09-30"]
    assert sorted(keys) == ["2023-12-31", "2024-02-29", "2024-09-30", "2024-10-01"]


@pytest.mark.parametrize(
    "raw",
    (
        pytest.param("٢٠٢٤-01-15", id="arabic-indic-year"),
        pytest.param("2024-０1-15", id="fullwidth-month"),
        pytest.param("2024-01-15\n", id="trailing-newline"),
    ),
)
def test_parse_iso_rejects_non_canonical(raw):
    with pytest.raises(InvalidFormat):
        parse_iso(raw)
    assert format_display(raw) == UNKNOWN_DATE


@pytest.mark.parametrize("raw", ("١٥-01-2024", "15-01-2024\n"))
def test_parse_display_rejects_non_canonical(raw):
    with pytest.raises(InvalidFormat):
        parse_display(raw)


def test_parse_iso_returns_canonical_key():
    assert parse_iso("0999-12-31") == "0999-12-31"
