"""Calendar date keys.

Dates travel as ISO strings (``YYYY-MM-DD``), which sort lexicographically in
calendar order. ``DD-MM-YYYY`` is the display/input shape.
"""

from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Optional

from gencore.errors import InvalidFormat

# ASCII digits only; always matched with fullmatch.
DISPLAY_RE = re.compile(r"[0-9]{2}-[0-9]{2}-[0-9]{4}")
ISO_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
MONTH_RE = re.compile(r"[0-9]{4}-[0-9]{2}")

UNKNOWN_DATE = "—"


def _build(year: int, month: int, day: int, raw: object, expected: str) -> str:
    try:
        d = date(year, month, day)
    except ValueError:
        raise InvalidFormat(raw, expected) from None
    return d.isoformat()


def parse_display(s: object) -> str:
    """Parse ``DD-MM-YYYY`` into an ISO key, rejecting impossible dates like 31-02-2024."""
    if not isinstance(s, str) or not DISPLAY_RE.fullmatch(s):
        raise InvalidFormat(s, "DD-MM-YYYY")
    dd, mm, yyyy = (int(x) for x in s.split("-"))
    return _build(yyyy, mm, dd, s, "DD-MM-YYYY")


def parse_iso(s: object) -> str:
    if not isinstance(s, str) or not ISO_RE.fullmatch(s):
        raise InvalidFormat(s, "YYYY-MM-DD")
    yyyy, mm, dd = (int(x) for x in s.split("-"))
    return _build(yyyy, mm, dd, s, "YYYY-MM-DD")


def parse_flexible(s: object) -> str:
    if not isinstance(s, str):
        raise InvalidFormat(s)
    t = s.strip()
    if DISPLAY_RE.fullmatch(t):
        return parse_display(t)
    if ISO_RE.fullmatch(t):
        return parse_iso(t)
    raise InvalidFormat(s)


def is_iso(s: object) -> bool:
    try:
        parse_iso(s)
    except InvalidFormat:
        return False
    return True


def format_display(iso: object) -> str:
    """ISO -> ``DD-MM-YYYY``; malformed input gives the ``UNKNOWN_DATE`` marker."""
    if not isinstance(iso, str) or not ISO_RE.fullmatch(iso):
        return UNKNOWN_DATE
    y, m, d = iso.split("-")
    return f"{d}-{m}-{y}"


def to_date(iso: str) -> date:
    return date.fromisoformat(parse_iso(iso))


def add_days(iso: str, n: int) -> str:
    return (to_date(iso) + timedelta(days=int(n))).isoformat()


def sub_days(iso: str, n: int) -> str:
    return add_days(iso, -int(n))


def same_calendar_day_prior_year(iso: str) -> str:
    # Plain year substitution: 2024-02-29 -> 2023-02-29, which never matches a key.
    return f"{int(iso[:4]) - 1:04d}{iso[4:]}"


def month_key(iso: str) -> str:
    return iso[:7]


def add_months(ym: str, delta: int) -> str:
    if not MONTH_RE.fullmatch(ym):
        raise InvalidFormat(ym, "YYYY-MM")
    index = int(ym[:4]) * 12 + int(ym[5:7]) - 1 + int(delta)
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def same_month_prior_year(ym: str) -> str:
    return f"{int(ym[:4]) - 1:04d}{ym[4:]}"


def today_iso(today: Optional[date] = None) -> str:
    return (today or date.today()).isoformat()


def to_display_input(today: Optional[date] = None) -> str:
    return format_display(today_iso(today))
