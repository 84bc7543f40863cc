"""
Tests of gencore.csv_codec
"""

from __future__ import annotations

import datetime as dt

import pytest

from gencore.csv_codec import export_filename, parse_csv, sample_csv, serialize_csv
from gencore.store import Observation


def test_parse_with_header_and_bad_row():
    res = parse_csv("date,generation_gwh\n18-12-2025,4140\nxx,abc\n19-12-2025,4215")
    assert res.records == [Observation("2025-12-18", 4140.0), Observation("2025-12-19", 4215.0)]
    assert res.errors == ["Row 2: invalid date 'xx' (expected DD-MM-YYYY)"]


@pytest.mark.parametrize(
    "header",
    (
        pytest.param("Date,Generation", id="gen"),
        pytest.param("DATE,GWh", id="gwh"),
        pytest.param(" date , generation_gwh ", id="spaces"),
    ),
)
def test_header_detection(header):
    res = parse_csv(f"{header}\n01-01-2025,5")
    assert res.records == [Observation("2025-01-01", 5.0)]
    assert res.errors == []


def test_header_like_row_without_gen_is_data():
    res = parse_csv("date,value\n01-01-2025,5")
    assert res.errors == ["Row 1: invalid date 'date' (expected DD-MM-YYYY)"]
    assert len(res.records) == 1


def test_short_and_blank_lines_are_ignored():
    res = parse_csv("\n\n01-01-2025,5\r\njunk\n   \n2025-01-02,6\n")
    assert [r.date for r in res.records] == ["2025-01-01", "2025-01-02"]
    assert res.errors == []


def test_row_numbers_count_kept_rows():
    res = parse_csv("date,generation_gwh\nnoise\n01-01-2025,-1\n02-01-2025,inf\n31-02-2024,3")
    assert res.records == []
    assert res.errors == [
        "Row 1: invalid generation '-1' (expected non-negative number)",
        "Row 2: invalid generation 'inf' (expected non-negative number)",
        "Row 3: invalid date '31-02-2024' (expected DD-MM-YYYY)",
    ]


def test_extra_columns_are_ignored():
    res = parse_csv("01-01-2025,5,comment")
    assert res.records == [Observation("2025-01-01", 5.0)]


def test_serialize():
    text = serialize_csv([Observation("2025-12-18", 4140.0), Observation("2025-12-19", 4215.5)])
    assert text == "date,generation_gwh\n18-12-2025,4140\n19-12-2025,4215.5"


def test_serialize_then_parse_keeps_records():
    records = parse_csv(sample_csv()).records
    assert parse_csv(serialize_csv(records)).records == records


def test_export_filename():
    assert export_filename(dt.date(2025, 12, 20)) == "india_generation_2025-12-20.csv"


def test_blank_generation_imports_as_zero():
    res = parse_csv("18-12-2025,\n19-12-2025, ,x")
    assert res.records == [Observation("2025-12-18", 0.0), Observation("2025-12-19", 0.0)]
    assert res.errors == []


def test_non_ascii_digit_dates_are_row_errors():
    res = parse_csv("٢٠٢٤-01-15,5\n2024-01-16,6")
    assert res.records == [Observation("2024-01-16", 6.0)]
    assert res.errors == ["Row 1: invalid date '٢٠٢٤-01-15' (expected DD-MM-YYYY)"]
