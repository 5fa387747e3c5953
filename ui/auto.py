import pandas as pd
import streamlit as st

from autolytiq.auto import calculate_auto_payment, estimate_insurance
from autolytiq.calculators import calculate_loan_estimates, calculate_payment_approvals, max_vehicle_price
from autolytiq.models import AutoPaymentInputs
from autolytiq.presets import DEFAULT_CONFIG
from ui.components import render_scenarios, render_stress_drivers, render_verdict
from ui.state import load_page_state, save_page_state

PAGE = "auto"


def render_auto_view(config=DEFAULT_CONFIG):
    """Auto loan payment, verdict, drivers and what-ifs."""
    st.header("Auto Payment Calculator")
    saved = load_page_state(PAGE)
    defaults = AutoPaymentInputs()

    c1, c2 = st.columns(2)
    with c1:
        price = st.number_input(
            "Vehicle Price", min_value=0.0, value=float(saved.get("vehicle_price", defaults.vehicle_price)), step=500.0, key="auto_price"
        )
        down = st.number_input(
            "Down Payment", min_value=0.0, value=float(saved.get("down_payment", defaults.down_payment)), step=500.0, key="auto_down"
        )
        tier_ids = [t.id for t in config.credit_tiers]
        tier_id = saved.get("credit_tier_id", defaults.credit_tier_id)
        tier_id = st.selectbox(
            "Credit Tier",
            tier_ids,
            index=tier_ids.index(tier_id) if tier_id in tier_ids else 0,
            format_func=lambda t: f"{config.credit_tier(t).name} ({config.credit_tier(t).range}) • {config.credit_tier(t).apr:.2f}%",
            key="auto_tier",
        )
        terms = config.term_options["auto"]
        term = int(saved.get("term_months", defaults.term_months))
        term = st.selectbox("Term (months)", terms, index=terms.index(term) if term in terms else 0, key="auto_term")
    with c2:
        income = st.number_input(
            "Monthly Gross Income", min_value=0.0, value=float(saved.get("monthly_gross_income", 0.0)), step=100.0, key="auto_income"
        )
        obligations = st.number_input(
            "Existing Monthly Debts", min_value=0.0, value=float(saved.get("fixed_obligations", 0.0)), step=50.0, key="auto_debts"
        )
        estimate = st.checkbox("Estimate insurance from price", value=bool(saved.get("estimate_insurance", True)), key="auto_est_ins")
        insurance = None
        if not estimate:
            saved_insurance = saved.get("insurance_monthly")
            if saved_insurance is None:
                saved_insurance = estimate_insurance(price, config)
            insurance = st.number_input(
                "Monthly Insurance",
                min_value=0.0,
                value=float(saved_insurance),
                step=10.0,
                key="auto_ins",
            )

    inputs = AutoPaymentInputs(
        vehicle_price=price,
        down_payment=down,
        credit_tier_id=tier_id,
        term_months=term,
        monthly_gross_income=income,
        fixed_obligations=obligations,
        insurance_monthly=insurance,
    )
    res = calculate_auto_payment(inputs, config)

    st.caption(f"Monthly Payment: ${res.monthly_payment:,.2f}")
    st.caption(
        f"Loan Amount: ${res.loan_amount:,.0f} • APR: {res.interest_rate:.2f}% • "
        f"Insurance: ${res.insurance_monthly:,.0f}/mo • Total Interest: ${res.total_interest:,.0f}"
    )
    st.caption(f"PTI: {res.payment_to_income_ratio*100:.1f}% • DTI: {res.debt_to_income_ratio*100:.1f}%")
    if income > 0:
        st.caption(f"Left each month after car costs: ${res.remaining_after_payment:,.0f}")
    render_verdict(res.verdict, res.verdict_explanation)
    render_stress_drivers(res.stress_drivers)
    render_scenarios(res.scenarios)

    if income > 0:
        with st.expander("What can I afford?"):
            st.caption(
                f"Max vehicle price at this rate and term: "
                f"${max_vehicle_price(income, res.interest_rate, term, down, config=config):,.0f}"
            )
            approvals = calculate_payment_approvals(income)
            st.dataframe(pd.DataFrame([a.model_dump() for a in approvals]), hide_index=True)
            standard = next(a for a in approvals if a.pti_type == "Standard")
            estimates = calculate_loan_estimates(standard.max_payment, term, config)
            st.dataframe(pd.DataFrame([e.model_dump() for e in estimates]), hide_index=True)

    save_page_state(
        PAGE,
        {
            "vehicle_price": price,
            "down_payment": down,
            "credit_tier_id": tier_id,
            "term_months": term,
            "monthly_gross_income": income,
            "fixed_obligations": obligations,
            "estimate_insurance": estimate,
            "insurance_monthly": insurance,
        },
    )
