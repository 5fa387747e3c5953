import pandas as pd
import streamlit as st
from pydantic import ValidationError

from autolytiq.calculators import nz
from autolytiq.income import (
    calculate_gig_income,
    calculate_income_by_type,
    calculate_inflation_impact,
    calculate_reliable_income,
    calculate_total_annual,
    suggested_stability,
)
from autolytiq.models import IncomeStream
from autolytiq.presets import DEFAULT_CONFIG, STABILITY_LABELS
from ui.state import load_page_state, save_page_state

PAGE = "gig"

STREAM_EDITOR_COLUMNS = ["name", "amount", "frequency", "type", "stability_rating"]


def _cell(row, key):
    value = row.get(key)
    return None if value is None or pd.isna(value) else value


def streams_from_rows(rows):
    """Turn editor rows into :class:`IncomeStream` objects, skipping bad rows."""
    streams = []
    for i, row in enumerate(rows):
        income_type = _cell(row, "type") or "other"
        rating = _cell(row, "stability_rating")
        rating = suggested_stability(income_type) if rating is None else int(rating)
        try:
            streams.append(
                IncomeStream(
                    id=str(i),
                    name=str(_cell(row, "name") or ""),
                    amount=nz(_cell(row, "amount")),
                    frequency=_cell(row, "frequency") or "monthly",
                    type=income_type,
                    stability_rating=rating,
                )
            )
        except ValidationError:
            st.warning(f"Row {i + 1} skipped: check frequency, type and rating (1-5).")
    return streams


def render_gig_view(config=DEFAULT_CONFIG):
    """Gig income after expenses and self-employment tax."""
    st.header("Gig Worker Income")
    saved = load_page_state(PAGE)

    ids = [p.id for p in config.gig_platforms]
    platform_id = saved.get("platform_id", config.default_gig_platform)
    platform_id = st.selectbox(
        "Platform",
        ids,
        index=ids.index(platform_id) if platform_id in ids else len(ids) - 1,
        format_func=lambda p: f"{config.gig_platform(p).name} ({config.gig_platform(p).expense_rate:.0%} expenses)",
        key="gig_platform",
    )
    gross = st.number_input("Gross Annual Earnings", min_value=0.0, value=float(saved.get("gross_annual", 0.0)), step=1000.0, key="gig_gross")
    custom = st.checkbox("Custom expense rate", value=saved.get("custom_expense_rate") is not None, key="gig_custom")
    custom_rate = None
    if custom:
        pct = st.number_input(
            "Expense Rate %",
            min_value=0.0,
            max_value=100.0,
            value=float((saved.get("custom_expense_rate") or config.gig_platform(platform_id).expense_rate) * 100),
            key="gig_rate",
        )
        custom_rate = pct / 100
    track_hours = st.checkbox("I track my hours", value=saved.get("hours_per_week") is not None, key="gig_track")
    hours = None
    if track_hours:
        hours = st.number_input("Hours per Week", min_value=0.0, value=float(saved.get("hours_per_week") or 40.0), key="gig_hours")

    res = calculate_gig_income(gross, platform_id, custom_rate, hours, config)
    st.caption(f"True Net Income: ${res.true_net_income:,.2f}")
    st.caption(
        f"Expenses: ${res.expenses:,.2f} • SE Tax: ${res.self_employment_tax:,.2f} • "
        f"Est. Income Tax: ${res.estimated_income_tax:,.2f}"
    )
    st.caption(f"Quarterly Tax Set-Aside: ${res.quarterly_tax_set_aside:,.2f}")
    st.caption(f"What Lenders See: ${res.lender_visible_income:,.2f}")
    if res.effective_hourly_rate is not None:
        st.caption(f"Effective Hourly Rate: ${res.effective_hourly_rate:,.2f}")

    st.subheader("Income Streams")
    rows = saved.get("streams") or [{"name": "Gig work", "amount": round(res.gross_monthly, 2), "frequency": "monthly", "type": "gig", "stability_rating": 2}]
    edited = st.data_editor(
        pd.DataFrame(rows, columns=STREAM_EDITOR_COLUMNS),
        num_rows="dynamic",
        hide_index=True,
        key="gig_streams",
    )
    stream_rows = edited.to_dict("records")
    streams = streams_from_rows(stream_rows)
    total = calculate_total_annual(streams)
    st.caption(f"Total Annual: ${total:,.0f} • Reliable Annual: ${calculate_reliable_income(streams):,.0f}")
    for income_type, amount in calculate_income_by_type(streams).items():
        st.caption(f"{income_type}: ${amount:,.0f}/yr")
    for s in streams:
        st.caption(f"{s.name or s.type}: {STABILITY_LABELS[s.stability_rating]}")

    if total > 0:
        with st.expander("Inflation impact"):
            proj = calculate_inflation_impact(total)
            st.dataframe(pd.DataFrame([p.model_dump() for p in proj]), hide_index=True)

    save_page_state(
        PAGE,
        {
            "platform_id": platform_id,
            "gross_annual": gross,
            "custom_expense_rate": custom_rate,
            "hours_per_week": hours,
            "streams": [s.model_dump(include=set(STREAM_EDITOR_COLUMNS)) for s in streams],
        },
    )
