from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from gencore.dates import parse_flexible
from gencore.errors import InvalidFormat
from gencore.settings import DEFAULT_MONTHLY_WINDOW, DEFAULT_RANGE_DAYS, MAX_RANGE_DAYS, MIN_RANGE_DAYS, clamp

FREQUENCY_OPTIONS = ("daily", "rolling30")
MAX_MONTHLY_WINDOW = 240


@dataclass(frozen=True)
class SeriesFilters:
    from_iso: Optional[str] = None
    to_iso: Optional[str] = None
    range_days: int = DEFAULT_RANGE_DAYS
    frequency: str = "daily"
    monthly_window: int = DEFAULT_MONTHLY_WINDOW
    show_units: bool = True
    show_prev_year: bool = True
    show_yoy: bool = True
    show_mom: bool = True


def _as_iso_or_none(value: object) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None
    try:
        return parse_flexible(s)
    except InvalidFormat:
        return None


def _as_int(value: object, default: int) -> int:
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default


def normalize_filters(raw: dict, *, default_range_days: int = DEFAULT_RANGE_DAYS) -> SeriesFilters:
    range_days = clamp(_as_int(raw.get("range_days"), default_range_days), MIN_RANGE_DAYS, MAX_RANGE_DAYS)
    monthly_window = clamp(_as_int(raw.get("monthly_window"), DEFAULT_MONTHLY_WINDOW), 1, MAX_MONTHLY_WINDOW)

    frequency = str(raw.get("frequency") or "daily").strip().lower()
    if frequency not in FREQUENCY_OPTIONS:
        frequency = "daily"

    return SeriesFilters(
        from_iso=_as_iso_or_none(raw.get("from_iso")),
        to_iso=_as_iso_or_none(raw.get("to_iso")),
        range_days=range_days,
        frequency=frequency,
        monthly_window=monthly_window,
        show_units=bool(raw.get("show_units", True)),
        show_prev_year=bool(raw.get("show_prev_year", True)),
        show_yoy=bool(raw.get("show_yoy", True)),
        show_mom=bool(raw.get("show_mom", True)),
    )
