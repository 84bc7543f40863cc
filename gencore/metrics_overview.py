from __future__ import annotations

from typing import Any, Dict

from gencore.dates import format_display
from gencore.formatting import round2
from gencore.store import ObservationStore


def compute_overview(store: ObservationStore) -> Dict[str, Any]:
    latest = store.latest_date()
    first = store.first_date()
    return {
        "empty": latest is None,
        "records": len(store),
        "first_day": format_display(first) if first else None,
        "latest_day": format_display(latest) if latest else None,
        "latest_units": round2(store.lookup(latest)) if latest else None,
    }
