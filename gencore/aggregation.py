"""Daily, rolling-30 and monthly views over an observation store.

All functions are pure reads of an ``ObservationStore`` snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Optional, Tuple

import pandas as pd

from gencore.dates import (
    add_months,
    format_display,
    parse_iso,
    same_calendar_day_prior_year,
    same_month_prior_year,
    sub_days,
)
from gencore.errors import NoData
from gencore.formatting import round2
from gencore.settings import DEFAULT_RANGE_DAYS, MAX_RANGE_DAYS, MIN_RANGE_DAYS, clamp
from gencore.store import ObservationStore

Frequency = Literal["daily", "rolling30"]
FREQUENCIES: Tuple[str, ...] = ("daily", "rolling30")

ROLLING_WINDOW_DAYS = 30
# Fixed day offset for the prior-year rolling window; ignores leap days.
PRIOR_YEAR_OFFSET_DAYS = 365


@dataclass(frozen=True)
class AggregatedPoint:
    label: str
    units: Optional[float]
    prev_year_units: Optional[float]
    yoy_pct: Optional[float]
    mom_pct: Optional[float] = None


@dataclass(frozen=True)
class MonthlyRecord:
    month: str
    total_gwh: float
    max_day: int
    yoy_pct: Optional[float]
    mom_pct: Optional[float]


def _metric_value(value: object) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    return float(value)


def growth_pct(curr: Optional[float], prev: Optional[float]) -> Optional[float]:
    """Percentage change from ``prev`` to ``curr``; ``None`` when ``prev`` is missing or zero."""
    if curr is None or prev is None or prev == 0:
        return None
    return (curr - prev) / prev * 100


def resolve_window(
    store: ObservationStore,
    from_iso: Optional[str] = None,
    to_iso: Optional[str] = None,
    range_days: int = DEFAULT_RANGE_DAYS,
) -> Tuple[str, str]:
    """Return an ordered ``(from, to)`` pair.

    ``to`` defaults to the latest stored date and ``from`` to ``to`` minus
    ``range_days`` (clamped to 7..3650). Reversed bounds are swapped.
    """
    to_key = parse_iso(to_iso) if to_iso else store.latest_date()
    if to_key is None:
        raise NoData()
    if from_iso:
        from_key = parse_iso(from_iso)
    else:
        from_key = sub_days(to_key, clamp(int(range_days), MIN_RANGE_DAYS, MAX_RANGE_DAYS))
    if from_key > to_key:
        from_key, to_key = to_key, from_key
    return from_key, to_key


def daily_points(store: ObservationStore, from_iso: str, to_iso: str) -> List[AggregatedPoint]:
    points: List[AggregatedPoint] = []
    for obs in store.sorted_entries():
        if obs.date < from_iso or obs.date > to_iso:
            continue
        prev = store.lookup(same_calendar_day_prior_year(obs.date))
        points.append(
            AggregatedPoint(
                label=format_display(obs.date),
                units=round2(obs.value),
                prev_year_units=round2(prev),
                yoy_pct=round2(growth_pct(obs.value, prev)),
                mom_pct=None,
            )
        )
    return points


def rolling_sums(store: ObservationStore, from_iso: str, to_iso: str) -> pd.DataFrame:
    """Trailing 30-day sums for each calendar day in ``[from_iso, to_iso]``.

    Missing days are skipped rather than counted as zero; a window with no
    observations at all yields NaN. ``prior_sum`` is the same window ending
    365 days earlier.
    """
    days = pd.date_range(from_iso, to_iso, freq="D")
    lead = ROLLING_WINDOW_DAYS - 1 + PRIOR_YEAR_OFFSET_DAYS
    calendar = pd.date_range(pd.Timestamp(from_iso) - pd.Timedelta(days=lead), to_iso, freq="D")
    dense = store.to_series().reindex(calendar)
    sums = dense.rolling(ROLLING_WINDOW_DAYS, min_periods=1).sum()
    prior = sums.shift(PRIOR_YEAR_OFFSET_DAYS)
    return pd.DataFrame({"current_sum": sums.reindex(days), "prior_sum": prior.reindex(days)}, index=days)


def rolling30_points(store: ObservationStore, from_iso: str, to_iso: str) -> List[AggregatedPoint]:
    sums = rolling_sums(store, from_iso, to_iso)
    points: List[AggregatedPoint] = []
    for day, row in sums.iterrows():
        current = _metric_value(row["current_sum"])
        prior = _metric_value(row["prior_sum"])
        points.append(
            AggregatedPoint(
                label=format_display(day.date().isoformat()),
                units=round2(current),
                prev_year_units=round2(prior),
                yoy_pct=round2(growth_pct(current, prior)),
                mom_pct=None,
            )
        )
    return points


def aggregate(
    store: ObservationStore,
    from_iso: Optional[str] = None,
    to_iso: Optional[str] = None,
    frequency: Frequency = "daily",
    range_days: int = DEFAULT_RANGE_DAYS,
) -> List[AggregatedPoint]:
    if frequency not in FREQUENCIES:
        raise ValueError(f"Unknown frequency {frequency!r}; expected one of {FREQUENCIES}")
    start, end = resolve_window(store, from_iso, to_iso, range_days)
    if frequency == "rolling30":
        return rolling30_points(store, start, end)
    return daily_points(store, start, end)


# ---------------- Monthly rollup ----------------
def _month_frame(store: ObservationStore) -> pd.DataFrame:
    df = store.to_frame()
    df["month"] = df["date"].str.slice(0, 7)
    df["day"] = df["date"].str.slice(8, 10).astype(int)
    return df


def sum_month_up_to_day(df: pd.DataFrame, month: str, day_limit: int) -> Optional[float]:
    """Sum of ``month``'s values on days ``1..day_limit``; ``None`` if none of those days exist."""
    rows = df[(df["month"] == month) & (df["day"] <= day_limit)]
    if rows.empty:
        return None
    return float(rows["generation_gwh"].sum())


def monthly_rollup(store: ObservationStore) -> List[MonthlyRecord]:
    """Monthly totals with month-to-date comparable MoM and YoY growth.

    A month observed up to day ``k`` is compared against days ``1..k`` of the
    previous month (MoM) and of the same month a year earlier (YoY).
    """
    if not len(store):
        return []
    df = _month_frame(store)
    grouped = (
        df.groupby("month")
        .agg(total_gwh=("generation_gwh", "sum"), max_day=("day", "max"))
        .reset_index()
        .sort_values("month")
    )

    out: List[MonthlyRecord] = []
    for r in grouped.itertuples(index=False):
        total = float(r.total_gwh)
        max_day = int(r.max_day)
        prev_month = sum_month_up_to_day(df, add_months(r.month, -1), max_day)
        prev_year = sum_month_up_to_day(df, same_month_prior_year(r.month), max_day)
        out.append(
            MonthlyRecord(
                month=r.month,
                total_gwh=total,
                max_day=max_day,
                yoy_pct=round2(growth_pct(total, prev_year)),
                mom_pct=round2(growth_pct(total, prev_month)),
            )
        )
    return out


def window_months(
    records: List[MonthlyRecord],
    *,
    last_n: Optional[int] = None,
    from_month: Optional[str] = None,
    to_month: Optional[str] = None,
) -> List[MonthlyRecord]:
    out = [
        r
        for r in records
        if (from_month is None or r.month >= from_month) and (to_month is None or r.month <= to_month)
    ]
    if last_n is not None:
        out = out[max(0, len(out) - int(last_n)):]
    return out
