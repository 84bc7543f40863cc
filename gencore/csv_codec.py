from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional

from gencore.dates import format_display, parse_flexible, today_iso
from gencore.errors import InvalidFormat
from gencore.store import Observation

CSV_HEADER = "date,generation_gwh"
EXPORT_PREFIX = "india_generation_"


@dataclass(frozen=True)
class CsvParseResult:
    records: List[Observation] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def _split_rows(text: str) -> List[List[str]]:
    rows: List[List[str]] = []
    for line in re.split(r"\r?\n", text):
        line = line.strip()
        if not line:
            continue
        cols = [c.strip() for c in line.split(",")]
        if len(cols) >= 2:
            rows.append(cols)
    return rows


def _is_header(row: List[str]) -> bool:
    h0 = row[0].lower()
    h1 = row[1].lower()
    return "date" in h0 and ("gen" in h1 or "gwh" in h1)


def _parse_generation(raw: str) -> Optional[float]:
    cleaned = raw.replace(",", "").strip()
    if not cleaned:
        # A blank cell imports as zero.
        return 0.0
    try:
        value = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


def parse_csv(text: str) -> CsvParseResult:
    """Parse ``date,generation_gwh`` text into records plus per-row error messages.

    Rows with fewer than two columns are ignored. Row numbers in messages count
    the rows that remain after the optional header is dropped.
    """
    rows = _split_rows(text or "")
    if rows and _is_header(rows[0]):
        rows = rows[1:]

    records: List[Observation] = []
    errors: List[str] = []
    for i, row in enumerate(rows, start=1):
        d_raw, g_raw = row[0], row[1]
        try:
            iso = parse_flexible(d_raw)
        except InvalidFormat:
            errors.append(f"Row {i}: invalid date '{d_raw}' (expected DD-MM-YYYY)")
            continue
        value = _parse_generation(g_raw)
        if value is None:
            errors.append(f"Row {i}: invalid generation '{g_raw}' (expected non-negative number)")
            continue
        records.append(Observation(date=iso, value=value))
    return CsvParseResult(records=records, errors=errors)


def _format_value(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def serialize_csv(records: Iterable[Observation]) -> str:
    lines = [CSV_HEADER]
    lines.extend(f"{format_display(r.date)},{_format_value(r.value)}" for r in records)
    return "\n".join(lines)


def export_filename(today: Optional[date] = None) -> str:
    return f"{EXPORT_PREFIX}{today_iso(today)}.csv"


def sample_csv() -> str:
    return "\n".join([CSV_HEADER, "18-12-2025,4140", "19-12-2025,4215", "20-12-2025,4198"])
