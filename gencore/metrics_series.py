from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

import pandas as pd

from gencore.aggregation import aggregate, resolve_window
from gencore.charts import series_chart, to_vega_spec
from gencore.dates import format_display
from gencore.errors import NoData
from gencore.filters import SeriesFilters
from gencore.store import ObservationStore


def compute_series(filters: SeriesFilters, store: ObservationStore) -> Dict[str, Any]:
    try:
        start, end = resolve_window(store, filters.from_iso, filters.to_iso, filters.range_days)
    except NoData:
        return {"filters": asdict(filters), "empty": True, "window": None, "points": [], "charts": {}}

    points = aggregate(store, start, end, frequency=filters.frequency)  # type: ignore[arg-type]
    records = [asdict(p) for p in points]

    charts: Dict[str, Any] = {}
    totals = [c for c, shown in (("units", filters.show_units), ("prev_year_units", filters.show_prev_year)) if shown]
    pcts = [c for c, shown in (("yoy_pct", filters.show_yoy), ("mom_pct", filters.show_mom)) if shown]
    if records and (totals or pcts):
        df = pd.DataFrame(records)
        charts["series"] = to_vega_spec(series_chart(df, totals, pcts))

    return {
        "filters": asdict(filters),
        "empty": False,
        "window": {
            "from_iso": start,
            "to_iso": end,
            "from_label": format_display(start),
            "to_label": format_display(end),
            "frequency": filters.frequency,
        },
        "points": records,
        "charts": charts,
    }
