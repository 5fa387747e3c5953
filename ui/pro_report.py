import os
import tempfile

import streamlit as st

from autolytiq.exceptions import ReportExportError
from autolytiq.models import IncomeResults
from autolytiq.presets import DEFAULT_CONFIG
from autolytiq.report import generate_pro_report_sections
from export.email_html import render_pro_report_html
from export.pdf_export import build_pro_report_pdf
from ui.state import load_page_state, save_page_state

PAGE = "pro_report"

BASE_EMAIL_HTML = """<html><body>
<h2>Your Income Results</h2>
<p>Annual income: ${annual}</p>
<!-- Footer -->
</body></html>"""


def _pdf_bytes(sections) -> bytes:
    fd, path = tempfile.mkstemp(suffix=".pdf")
    os.close(fd)
    try:
        build_pro_report_pdf(path, sections)
        with open(path, "rb") as f:
            return f.read()
    finally:
        os.remove(path)


def render_pro_report_view(config=DEFAULT_CONFIG):
    """Stability score, approval readiness, leverage moves and 30-day plan."""
    st.header("Pro Income Report")
    saved = load_page_state(PAGE)
    annual = st.number_input("Annual Income", min_value=0.0, value=float(saved.get("annual_income", 0.0)), step=1000.0, key="pro_income")
    known = st.checkbox("I know how many days I've worked", value=saved.get("days_worked") is not None, key="pro_known_days")
    days = None
    if known:
        days = int(st.number_input("Days Worked", min_value=0, value=int(saved.get("days_worked") or 0), step=1, key="pro_days"))

    results = IncomeResults.from_annual(annual, days)
    sections = generate_pro_report_sections(results, config)
    s = sections.stability
    st.caption(f"Income Stability Score: {s.score}")
    st.progress(s.score / 100)
    st.caption(f"{s.rating}: {s.explanation}")

    r = sections.approval_readiness
    st.subheader("Approval Readiness")
    st.write(r.overall)
    for label, text in (
        ("Credit Cards", r.credit_cards),
        ("Personal Loans", r.personal_loans),
        ("Auto Loans", r.auto_loans),
        ("Mortgage", r.mortgage),
    ):
        st.caption(f"{label}: {text}")

    st.subheader("Top 3 Leverage Moves")
    for i, move in enumerate(sections.leverage_moves, start=1):
        st.caption(f"{i}. {move}")

    st.subheader("30-Day Action Plan")
    for i, items in enumerate(sections.thirty_day_plan.weeks(), start=1):
        st.markdown(f"**Week {i}**")
        for item in items:
            st.caption(f"• {item}")

    for tip in sections.expanded_tips:
        with st.expander(tip.title):
            st.write(tip.description)
            for item in tip.action_items:
                st.caption(f"• {item}")

    c1, c2 = st.columns(2)
    with c1:
        html_doc = render_pro_report_html(sections, BASE_EMAIL_HTML.format(annual=f"{annual:,.0f}"))
        st.download_button("Download email HTML", html_doc, file_name="pro_report.html", mime="text/html")
    with c2:
        if st.button("Build PDF", key="pro_build_pdf"):
            try:
                st.session_state["pro_pdf"] = _pdf_bytes(sections)
            except ReportExportError as exc:
                st.error(str(exc))
        if st.session_state.get("pro_pdf"):
            st.download_button("Download PDF", st.session_state["pro_pdf"], file_name="pro_report.pdf", mime="application/pdf")

    save_page_state(PAGE, {"annual_income": annual, "days_worked": days})
