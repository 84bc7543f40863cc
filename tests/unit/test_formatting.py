"""
Tests of gencore.formatting
"""

import math

import pytest

from gencore.formatting import format_number, format_pct, round2


@pytest.mark.parametrize(
    "value, exp",
    (
        (1.005, 1.01),
        (2.675, 2.68),
        (-0.125, -0.13),
        (300, 300.0),
        (None, None),
        (math.nan, None),
        (math.inf, None),
    ),
)
def test_round2(value, exp):
    assert round2(value) == exp


def test_format_number():
    assert format_number(1234567.891) == "1,234,567.89"
    assert format_number(None) == "—"


def test_format_pct():
    assert format_pct(25) == "+25.00%"
    assert format_pct(-3.456) == "-3.46%"
    assert format_pct(0) == "0.00%"
    assert format_pct(None) == "—"
