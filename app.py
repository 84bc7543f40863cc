import altair as alt
import pandas as pd
import streamlit as st
from contextlib import contextmanager
from typing import Optional

from gencore.charts import monthly_bar_chart, series_chart
from gencore.csv_codec import export_filename, serialize_csv
from gencore.dates import parse_flexible, to_display_input
from gencore.errors import GenerationDataError
from gencore.filters import SeriesFilters
from gencore.metrics_monthly import compute_monthly
from gencore.metrics_overview import compute_overview
from gencore.metrics_series import compute_series
from gencore.persistence import FileBlobStore, GenerationRepository, import_csv
from gencore.settings import MAX_RANGE_DAYS, MIN_RANGE_DAYS, configure_logging, load_settings

alt.data_transformers.disable_max_rows()


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .card {border: 1px solid #e2e8f0;border-radius: 16px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-header {display: flex;justify-content: space-between;align-items: center;margin-bottom: 8px;}
        .card-title {font-weight: 600;font-size: 0.95rem;color: #1e293b;}
        .card-actions {font-size: 0.9rem;color: #475569;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str, actions: Optional[str] = None):
    container = st.container()
    container.markdown(
        f"""
        <div class="card">
          <div class="card-header">
            <div class="card-title">{title}</div>
            <div class="card-actions">{actions or ""}</div>
          </div>
        """,
        unsafe_allow_html=True,
    )
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


@st.cache_resource
def get_repository() -> GenerationRepository:
    settings = load_settings()
    configure_logging(settings.log_level)
    return GenerationRepository(FileBlobStore(settings.data_dir), settings.storage_key)


def show_flash():
    msg = st.session_state.pop("_flash_msg", None)
    errors = st.session_state.pop("_flash_errors", None)
    if msg:
        st.success(msg)
    if errors:
        st.error("\n".join(f"- {e}" for e in errors))


# ---------- UI setup ----------
st.set_page_config(page_title="India Electricity Generation Dashboard", layout="wide")
inject_base_styles()
settings = load_settings()
repo = get_repository()

top_left, top_right = st.columns([8, 2])
with top_left:
    st.title("India Electricity Generation Dashboard")
    st.caption("Daily generation + monthly totals + YoY/MoM.")
with top_right:
    snapshot = repo.snapshot()
    st.download_button(
        "Export CSV",
        data=serialize_csv(snapshot.sorted_entries()).encode("utf-8"),
        file_name=export_filename(),
        mime="text/csv",
        disabled=not len(snapshot),
    )

col_form, col_stats, col_chart = st.columns([1, 1, 2])

with col_form:
    with card("Add / Update a day"):
        with st.form("add_day", clear_on_submit=False):
            date_raw = st.text_input("Date (DD-MM-YYYY)", value=to_display_input())
            value_raw = st.text_input("Generation (units / MU)", value="")
            submitted = st.form_submit_button("Save")
        if submitted:
            try:
                iso = parse_flexible(date_raw)
                repo.insert(iso, value_raw.replace(",", "").strip())
                st.session_state["_flash_msg"] = f"Saved {date_raw.strip()}."
            except GenerationDataError as exc:
                st.session_state["_flash_errors"] = [str(exc)]
            st.rerun()

        upload = st.file_uploader("Import CSV", type=["csv"])
        if upload is not None and st.session_state.get("_last_upload") != upload.file_id:
            st.session_state["_last_upload"] = upload.file_id
            try:
                text = upload.getvalue().decode("utf-8-sig")
            except UnicodeDecodeError:
                st.session_state["_flash_errors"] = ["Could not read CSV."]
            else:
                summary = import_csv(repo, text, max_errors=settings.max_import_errors)
                st.session_state["_flash_msg"] = summary.message
                st.session_state["_flash_errors"] = summary.errors
            st.rerun()

        if not len(repo.snapshot()) and st.button("Load sample data"):
            repo.load_sample()
            st.session_state["_flash_msg"] = "Loaded sample data."
            st.rerun()

        show_flash()

store = repo.snapshot()

with col_stats:
    with card("Quick stats"):
        overview = compute_overview(store)
        if overview["empty"]:
            st.info("No data yet. Add your first daily datapoint or import a CSV.")
        else:
            s1, s2 = st.columns(2)
            s1.metric("Records", f"{overview['records']}")
            s2.metric("Latest day", overview["latest_day"])

with col_chart:
    with card("Charts"):
        if not len(store):
            st.write("Add data to see charts.")
        else:
            c1, c2, c3 = st.columns(3)
            frequency = c1.selectbox(
                "Frequency",
                options=["daily", "rolling30"],
                format_func=lambda f: {"daily": "Daily", "rolling30": "Last 30 Days Rolling Sum"}[f],
            )
            range_days = c2.number_input(
                "Range (days)", min_value=MIN_RANGE_DAYS, max_value=MAX_RANGE_DAYS, value=settings.default_range_days
            )
            window = c3.date_input("From / To (optional)", value=())
            t1, t2, t3, t4 = st.columns(4)
            filters = SeriesFilters(
                from_iso=window[0].isoformat() if len(window) >= 1 else None,
                to_iso=window[1].isoformat() if len(window) >= 2 else None,
                range_days=int(range_days),
                frequency=frequency,
                monthly_window=settings.monthly_window,
                show_units=t1.checkbox("Total Current", value=True),
                show_prev_year=t2.checkbox("Total (previous year)", value=True),
                show_yoy=t3.checkbox("YoY %", value=True),
                show_mom=t4.checkbox("MoM %", value=True),
            )
            payload = compute_series(filters, store)
            points = pd.DataFrame(payload["points"])
            totals = [c for c, on in (("units", filters.show_units), ("prev_year_units", filters.show_prev_year)) if on]
            pcts = [c for c, on in (("yoy_pct", filters.show_yoy), ("mom_pct", filters.show_mom)) if on]
            if points.empty:
                st.write("No observations in the selected range.")
            elif totals or pcts:
                st.altair_chart(series_chart(points, totals, pcts), use_container_width=True)

monthly = compute_monthly(SeriesFilters(monthly_window=settings.monthly_window), store)
col_bar, col_table = st.columns(2)
with col_bar:
    with card("Monthly totals + growth"):
        if monthly["empty"]:
            st.write("Add data to see monthly totals and growth.")
        else:
            st.altair_chart(monthly_bar_chart(pd.DataFrame(monthly["months"])), use_container_width=True)
with col_table:
    with card(f"Monthly table (last {settings.monthly_window} months)"):
        if monthly["empty"]:
            st.write("Add data to see the monthly table.")
        else:
            table = pd.DataFrame(monthly["table"]).rename(
                columns={"month": "Month", "total": "Total (units)", "mom": "MoM%", "yoy": "YoY%"}
            )
            st.dataframe(table, hide_index=True, use_container_width=True)
