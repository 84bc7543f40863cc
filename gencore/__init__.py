"""Core (UI-agnostic) generation dashboard logic.

This package contains:
- date key parsing and arithmetic
- the observation store and its persistence
- CSV import/export
- the aggregation engine (daily, rolling-30, monthly rollups with growth)
- page compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
