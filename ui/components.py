import streamlit as st

from autolytiq.models import Scenarios

VERDICT_BADGES = {
    "comfortable": "🟢 Comfortable",
    "tight": "🟡 Tight",
    "risky": "🔴 Risky",
}


def render_verdict(verdict: str, explanation: str) -> None:
    st.subheader(VERDICT_BADGES.get(verdict, verdict.title()))
    st.caption(f"Verdict: {verdict}")
    st.write(explanation)


def render_stress_drivers(drivers) -> None:
    """List drivers in the order given (highest impact first)."""
    st.markdown("**What's driving this verdict**")
    for d in drivers:
        st.caption(f"{d.label} [{d.impact}] {d.value}: {d.explanation}")


def render_scenarios(scenarios: Scenarios) -> None:
    st.markdown("**What if...**")
    cols = st.columns(3)
    items = [
        ("Income drops 10%", scenarios.income_drops_10),
        ("Insurance costs more", scenarios.higher_insurance),
        ("Longer term", scenarios.longer_term),
    ]
    for col, (title, s) in zip(cols, items):
        with col:
            st.markdown(f"*{title}*")
            sign = "+" if s.delta >= 0 else "-"
            st.caption(f"{VERDICT_BADGES[s.verdict]} • ${s.monthly_payment:,.2f}/mo ({sign}${abs(s.delta):,.2f})")
            st.caption(s.explanation)
