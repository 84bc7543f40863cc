from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

import pandas as pd

MISSING = "—"


def round_half_up(value: object, ndigits: int = 0) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    if isinstance(value, float) and math.isinf(value):
        return None
    q = Decimal(10) ** -ndigits
    return float(Decimal(str(value)).quantize(q, rounding=ROUND_HALF_UP))


def round2(value: object) -> Optional[float]:
    return round_half_up(value, 2)


def format_number(value: object, decimals: int = 2) -> str:
    rounded = round_half_up(value, decimals)
    if rounded is None:
        return MISSING
    return f"{rounded:,.{decimals}f}"


def format_pct(value: object, decimals: int = 2) -> str:
    rounded = round_half_up(value, decimals)
    if rounded is None:
        return MISSING
    sign = "+" if rounded > 0 else ""
    return f"{sign}{rounded:,.{decimals}f}%"
