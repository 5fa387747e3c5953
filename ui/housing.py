import streamlit as st

from autolytiq.calculators import amortization_schedule
from autolytiq.housing import (
    calculate_dti,
    calculate_max_home_price,
    calculate_mortgage,
    calculate_rent_affordability,
    calculate_rent_vs_buy,
)
from autolytiq.models import MortgageInputs
from autolytiq.presets import DEFAULT_CONFIG
from ui.components import render_scenarios, render_stress_drivers, render_verdict
from ui.state import load_page_state, save_page_state

PAGE = "housing"


def render_mortgage_section(saved, config=DEFAULT_CONFIG):
    st.subheader("Mortgage")
    d = MortgageInputs()
    c1, c2, c3 = st.columns(3)
    with c1:
        price = st.number_input("Home Price", min_value=0.0, value=float(saved.get("home_price", d.home_price)), step=5000.0, key="mtg_price")
        down_pct = st.number_input(
            "Down Payment %", min_value=0.0, max_value=100.0, value=float(saved.get("down_payment_pct", d.down_payment_pct)), key="mtg_down"
        )
        rate = st.number_input("Rate %", min_value=0.0, value=float(saved.get("interest_rate", d.interest_rate)), step=0.125, key="mtg_rate")
    with c2:
        years_options = [t // 12 for t in config.term_options["mortgage"]]
        years = int(saved.get("term_years", d.term_years))
        years = st.selectbox("Term (years)", years_options, index=years_options.index(years) if years in years_options else len(years_options) - 1, key="mtg_term")
        tax_rate = st.number_input(
            "Property Tax Rate %", min_value=0.0, value=float(saved.get("property_tax_rate_pct", d.property_tax_rate_pct)), key="mtg_tax"
        )
        hoi = st.number_input("Annual Insurance", min_value=0.0, value=float(saved.get("annual_insurance", d.annual_insurance)), key="mtg_hoi")
    with c3:
        hoa = st.number_input("HOA (monthly)", min_value=0.0, value=float(saved.get("hoa_monthly", d.hoa_monthly)), key="mtg_hoa")
        income = st.number_input("Monthly Gross Income", min_value=0.0, value=float(saved.get("monthly_gross_income", 0.0)), key="mtg_income")
        debts = st.number_input("Other Monthly Debts", min_value=0.0, value=float(saved.get("other_debts", 0.0)), key="mtg_debts")

    inputs = MortgageInputs(
        home_price=price,
        down_payment_pct=down_pct,
        interest_rate=rate,
        term_years=years,
        property_tax_rate_pct=tax_rate,
        annual_insurance=hoi,
        hoa_monthly=hoa,
        monthly_gross_income=income,
        other_debts=debts,
    )
    res = calculate_mortgage(inputs, config)
    p = res.piti
    st.caption(f"Monthly P&I: ${p.principal_interest:,.2f}")
    st.caption(
        f"Taxes: ${p.property_tax:,.2f} • Insurance: ${p.insurance:,.2f} • PMI: ${p.pmi:,.2f} • HOA: ${p.hoa:,.2f}"
    )
    st.caption(f"Total PITI: ${p.total_monthly:,.2f}")
    st.caption(f"FE DTI: {res.front_end_ratio*100:.2f}% • BE DTI: {res.back_end_ratio*100:.2f}%")
    render_verdict(res.verdict, res.verdict_explanation)
    if income > 0:
        q = calculate_dti(income, p.total_monthly, debts, config)
        st.caption(f"Qualification: {q.qualification}")
    render_stress_drivers(res.stress_drivers)
    render_scenarios(res.scenarios)

    with st.expander("Amortization schedule"):
        sched = amortization_schedule(res.loan_amount, rate, years * 12)
        if not sched.empty:
            st.line_chart(sched.set_index("Month")[["Balance", "CumulativeInterest"]])
            st.dataframe(sched, hide_index=True)

    return {
        "home_price": price,
        "down_payment_pct": down_pct,
        "interest_rate": rate,
        "term_years": years,
        "property_tax_rate_pct": tax_rate,
        "annual_insurance": hoi,
        "hoa_monthly": hoa,
        "monthly_gross_income": income,
        "other_debts": debts,
    }


def render_rent_section(saved, income, config=DEFAULT_CONFIG):
    st.subheader("Rent")
    rent = st.number_input("Current or Target Rent", min_value=0.0, value=float(saved.get("rent", 0.0)), step=50.0, key="rent_amt")
    res = calculate_rent_affordability(income, rent if rent > 0 else None, config=config)
    st.caption(f"30% rule: ${res.max_rent_30:,.0f}/mo • Conservative 25%: ${res.max_rent_25:,.0f}/mo")
    if res.verdict is not None:
        st.caption(f"Rent is {res.rent_percent:.1f}% of income • Verdict: {res.verdict}")
    return {"rent": rent}


def render_housing_view(config=DEFAULT_CONFIG):
    """Mortgage PITI, rent affordability and max home price."""
    st.header("Housing Affordability")
    saved = load_page_state(PAGE)
    values = render_mortgage_section(saved, config)
    values.update(render_rent_section(saved, values["monthly_gross_income"], config))

    mx = calculate_max_home_price(
        values["monthly_gross_income"],
        values["down_payment_pct"],
        values["interest_rate"],
        values["term_years"],
        config,
    )
    st.caption(
        f"Max home price at {config.housing.max_front_end_pct:.0f}% front-end: ${mx.estimated_max_price:,.0f} "
        f"(housing budget ${mx.max_housing_payment:,.0f}/mo)"
    )
    render_rent_vs_buy_section(values, config)
    save_page_state(PAGE, values)


def render_rent_vs_buy_section(values, config=DEFAULT_CONFIG):
    if values["rent"] <= 0:
        return
    frame, year = calculate_rent_vs_buy(
        values["rent"],
        values["home_price"],
        values["down_payment_pct"],
        values["interest_rate"],
        values["term_years"],
        values["property_tax_rate_pct"],
        config=config,
    )
    if frame.empty:
        return
    if year is None:
        st.caption(f"Rent vs Buy: renting stays ahead for all {len(frame)} years")
    else:
        st.caption(f"Rent vs Buy: buying pulls ahead in year {year}")
    with st.expander("Rent vs buy projection"):
        st.line_chart(frame.set_index("Year")[["NetWorthBuying", "NetWorthRenting"]])
        st.dataframe(frame, hide_index=True)
