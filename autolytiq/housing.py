"""Mortgage and rent affordability.

PITI is built from the shared amortization primitive plus tax, insurance,
PMI and HOA; the result is classified with the ``mortgage`` thresholds
(front-end housing ratio as the payment ratio, back-end as DTI).  The rent
vs buy projection reuses the same primitive and schedule.
"""
from __future__ import annotations

import logging
from typing import Optional, Tuple

import pandas as pd

from autolytiq.calculators import (
    amortization_schedule,
    classify_affordability,
    dti,
    evaluate_affordability,
    explain_verdict,
    monthly_payment,
    nz,
    principal_from_payment,
)
from autolytiq.drivers import analyze_stress_drivers
from autolytiq.models import (
    AffordabilityInputs,
    DtiAnalysis,
    LoanInputs,
    MaxHomePrice,
    MortgageInputs,
    MortgageResult,
    PitiBreakdown,
    RentAffordability,
)
from autolytiq.presets import DEFAULT_CONFIG, EngineConfig
from autolytiq.scenarios import project_scenarios

logger = logging.getLogger(__name__)

RENT_VS_BUY_COLUMNS = [
    "Year",
    "MonthlyRent",
    "RentCumulative",
    "BuyCumulative",
    "HomeValue",
    "LoanBalance",
    "HomeEquity",
    "NetWorthBuying",
    "NetWorthRenting",
]


def mortgage_affordability_inputs(inputs: MortgageInputs, config: EngineConfig = DEFAULT_CONFIG) -> AffordabilityInputs:
    """Translate mortgage form values into the generic pipeline inputs."""

    price = nz(inputs.home_price)
    down_pct = min(max(nz(inputs.down_payment_pct), 0.0), 100.0)
    loan_amount = price - price * down_pct / 100
    housing = config.housing
    pmi = 0.0
    if down_pct < housing.pmi_down_payment_cutoff_pct:
        pmi = loan_amount * housing.pmi_annual_pct / 100 / 12
    property_tax = price * nz(inputs.property_tax_rate_pct) / 100 / 12
    return AffordabilityInputs(
        domain="mortgage",
        loan=LoanInputs(
            principal=loan_amount,
            annual_rate_pct=nz(inputs.interest_rate),
            term_months=int(inputs.term_years) * 12,
        ),
        monthly_gross_income=nz(inputs.monthly_gross_income),
        fixed_obligations=nz(inputs.other_debts),
        insurance_monthly=nz(inputs.annual_insurance) / 12,
        other_housing_costs=property_tax + pmi + nz(inputs.hoa_monthly),
    )


def calculate_mortgage(inputs: MortgageInputs, config: EngineConfig = DEFAULT_CONFIG) -> MortgageResult:
    """Full PITI breakdown with verdict, stress drivers and scenarios."""

    affordability = mortgage_affordability_inputs(inputs, config)
    installment, total, result = evaluate_affordability(affordability, config)
    price = nz(inputs.home_price)
    loan_amount = affordability.loan.principal
    months = affordability.loan.term_months
    hoa = nz(inputs.hoa_monthly)
    property_tax = price * nz(inputs.property_tax_rate_pct) / 100 / 12
    pmi = affordability.other_housing_costs - property_tax - hoa
    total_payments = installment * months
    logger.debug(
        "Mortgage calculated",
        extra={"loan_amount": loan_amount, "term_months": months, "pmi": round(pmi, 2), "verdict": result.verdict},
    )

    return MortgageResult(
        home_price=price,
        down_payment=round(price - loan_amount, 2),
        down_payment_pct=nz(inputs.down_payment_pct),
        loan_amount=round(loan_amount, 2),
        interest_rate=nz(inputs.interest_rate),
        term_years=int(inputs.term_years),
        piti=PitiBreakdown(
            principal_interest=round(installment, 2),
            property_tax=round(property_tax, 2),
            insurance=round(affordability.insurance_monthly, 2),
            pmi=round(pmi, 2),
            hoa=round(hoa, 2),
            total_monthly=round(total, 2),
        ),
        total_payments=round(total_payments, 2),
        total_interest=round(max(total_payments - loan_amount, 0.0), 2),
        front_end_ratio=result.payment_to_income_ratio,
        back_end_ratio=result.debt_to_income_ratio,
        verdict=result.verdict,
        verdict_explanation=explain_verdict(result, config.thresholds_for("mortgage"), inputs.monthly_gross_income),
        stress_drivers=analyze_stress_drivers(affordability, result.verdict, config),
        scenarios=project_scenarios(affordability, config),
    )


def calculate_dti(monthly_income, housing_payment, other_debts, config: EngineConfig = DEFAULT_CONFIG) -> DtiAnalysis:
    """Front/back-end DTI in percent with a lender-style qualification label."""

    fe, be = dti(housing_payment, nz(housing_payment) + nz(other_debts), monthly_income)
    fe_pct = fe * 100
    be_pct = be * 100
    housing = config.housing
    if nz(monthly_income) <= 0:
        qualification = housing.qualification_fallback
        affordable = False
    else:
        excellent_fe, excellent_be, _ = housing.qualification_bands[0]
        affordable = fe_pct <= excellent_fe and be_pct <= excellent_be
        qualification = housing.qualification_fallback
        for fe_max, be_max, label in housing.qualification_bands:
            if fe_pct <= fe_max and be_pct <= be_max:
                qualification = label
                break
    return DtiAnalysis(
        monthly_income=nz(monthly_income),
        housing_payment=round(nz(housing_payment), 2),
        other_debts=round(nz(other_debts), 2),
        front_end_dti=round(fe_pct, 1),
        back_end_dti=round(be_pct, 1),
        is_affordable=affordable,
        qualification=qualification,
    )


def calculate_rent_affordability(
    monthly_income,
    current_rent: Optional[float] = None,
    other_debts=0.0,
    config: EngineConfig = DEFAULT_CONFIG,
) -> RentAffordability:
    """30% and 25% rent ceilings; verdict only when a rent is supplied."""

    inc = max(nz(monthly_income), 0.0)
    housing = config.housing
    max_30 = round(inc * housing.rent_max_pct / 100)
    max_25 = round(inc * housing.rent_conservative_pct / 100)
    if current_rent is None:
        return RentAffordability(monthly_income=inc, max_rent_30=max_30, max_rent_25=max_25)
    rent = nz(current_rent)
    result = classify_affordability(rent, inc, other_debts, config.thresholds_for("rent"))
    return RentAffordability(
        monthly_income=inc,
        max_rent_30=max_30,
        max_rent_25=max_25,
        current_rent=rent,
        rent_percent=result.payment_to_income_ratio * 100,
        is_affordable=inc > 0 and rent <= max_30,
        verdict=result.verdict,
    )


def calculate_max_home_price(
    monthly_income,
    down_payment_pct=20.0,
    interest_rate=6.75,
    term_years: int = 30,
    config: EngineConfig = DEFAULT_CONFIG,
) -> MaxHomePrice:
    """Highest price whose housing payment stays at the front-end ceiling.

    A fixed share of the housing budget is assumed to go to principal and
    interest; the rest covers tax and insurance.
    """

    inc = max(nz(monthly_income), 0.0)
    housing = config.housing
    max_housing = inc * housing.max_front_end_pct / 100
    max_loan = principal_from_payment(max_housing * housing.pi_share_of_housing, interest_rate, int(term_years) * 12)
    down_share = min(max(nz(down_payment_pct), 0.0), 99.0) / 100
    max_price = max_loan / (1 - down_share)
    return MaxHomePrice(
        monthly_income=inc,
        max_housing_payment=round(max_housing),
        estimated_max_price=round(max_price),
        down_payment_pct=nz(down_payment_pct),
        interest_rate=nz(interest_rate),
        term_years=int(term_years),
    )


def calculate_rent_vs_buy(
    monthly_rent,
    home_price,
    down_payment_pct=20.0,
    interest_rate=6.75,
    term_years: int = 30,
    property_tax_rate_pct=1.2,
    rent_increase_pct: Optional[float] = None,
    appreciation_pct: Optional[float] = None,
    maintenance_pct: Optional[float] = None,
    investment_return_pct: Optional[float] = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Tuple[pd.DataFrame, Optional[int]]:
    """Year-by-year net worth of renting versus buying the same home.

    Buying pays the down payment and closing costs up front, then P&I,
    property tax, maintenance and insurance; its net worth is home equity
    less selling costs.  Renting invests the down payment instead, plus
    any month where owning would have cost more than rent.  Rates left as
    ``None`` come from ``config.housing``.

    Returns the yearly frame and the first year buying comes out ahead, or
    ``None`` when it never does within the projection.
    """

    housing = config.housing
    rent = nz(monthly_rent)
    price = nz(home_price)
    if rent <= 0 or price <= 0:
        return pd.DataFrame(columns=RENT_VS_BUY_COLUMNS), None

    def pct(value, default):
        return (default if value is None else nz(value)) / 100

    rent_growth = pct(rent_increase_pct, housing.rent_increase_pct)
    appreciation = pct(appreciation_pct, housing.appreciation_pct)
    maintenance = pct(maintenance_pct, housing.maintenance_pct)
    invest_return = pct(investment_return_pct, housing.investment_return_pct)
    tax = nz(property_tax_rate_pct) / 100
    insurance = housing.homeowner_insurance_pct / 100

    down = price * min(max(nz(down_payment_pct), 0.0), 100.0) / 100
    loan_amount = price - down
    months = int(term_years) * 12
    pi = monthly_payment(loan_amount, interest_rate, months)
    schedule = amortization_schedule(loan_amount, interest_rate, months)
    balances = dict(zip(schedule["Month"].tolist(), schedule["Balance"].tolist()))

    rent_cumulative = 0.0
    buy_cumulative = down + price * housing.closing_cost_pct / 100
    investment = down
    home_value = price
    breakeven = None
    rows = []
    for year in range(1, housing.projection_years + 1):
        paid_months = min(max(months - (year - 1) * 12, 0), 12)
        rent_cumulative += rent * 12

        investment *= 1 + invest_return
        owning_monthly = pi * paid_months / 12 + home_value * (tax + maintenance) / 12
        investment += max(owning_monthly - rent, 0.0) * 12 * (1 + invest_return / 2)

        buy_cumulative += pi * paid_months + home_value * (tax + maintenance + insurance)
        home_value *= 1 + appreciation
        balance = balances.get(year * 12, 0.0) if year * 12 <= months else 0.0
        equity = home_value - balance
        net_buying = equity - home_value * housing.selling_cost_pct / 100

        rows.append(
            [year, rent, rent_cumulative, buy_cumulative, home_value, balance, equity, net_buying, investment]
        )
        if breakeven is None and net_buying > investment:
            breakeven = year
        rent *= 1 + rent_growth

    logger.debug("Rent vs buy projected", extra={"home_price": price, "breakeven_year": breakeven})
    return pd.DataFrame(rows, columns=RENT_VS_BUY_COLUMNS), breakeven
