from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

import pandas as pd

from gencore.aggregation import monthly_rollup, window_months
from gencore.charts import monthly_bar_chart, to_vega_spec
from gencore.filters import SeriesFilters
from gencore.formatting import format_number, format_pct, round2
from gencore.store import ObservationStore


def compute_monthly(filters: SeriesFilters, store: ObservationStore) -> Dict[str, Any]:
    records = window_months(monthly_rollup(store), last_n=filters.monthly_window)
    if not records:
        return {"filters": asdict(filters), "empty": True, "months": [], "table": [], "charts": {}}

    months = [
        {
            "month": r.month,
            "total_units": round2(r.total_gwh),
            "max_day": r.max_day,
            "yoy_pct": r.yoy_pct,
            "mom_pct": r.mom_pct,
        }
        for r in records
    ]
    # Table reads newest month first.
    table = [
        {
            "month": m["month"],
            "total": format_number(m["total_units"]),
            "mom": format_pct(m["mom_pct"]),
            "yoy": format_pct(m["yoy_pct"]),
        }
        for m in reversed(months)
    ]
    chart = monthly_bar_chart(pd.DataFrame(months))
    return {
        "filters": asdict(filters),
        "empty": False,
        "months": months,
        "table": table,
        "charts": {"monthly_totals": to_vega_spec(chart)},
    }
