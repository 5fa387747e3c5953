"""Shared loan and ratio calculations.

Every calculator page (auto, mortgage, rent, the PTI desk tool) goes through
the single amortization primitive and the generic verdict classifier here so
the core formula cannot drift between pages.
"""
from __future__ import annotations

import logging
import math
from typing import List, Optional, Tuple

import pandas as pd

from autolytiq.models import (
    AffordabilityInputs,
    AffordabilityResult,
    LoanEstimate,
    PaymentApproval,
)
from autolytiq.presets import DEFAULT_CONFIG, PTI_RATIOS, EngineConfig, VerdictThresholds

logger = logging.getLogger(__name__)


def nz(x, default=0.0):
    """Return a finite float for ``x`` or a fallback value.

    Form fields arrive as ``None`` when left blank and a bad division upstream
    can leave ``NaN`` or ``inf`` behind; neither may reach a result.
    """

    try:
        if x is None:
            return default
        value = float(x)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(value):
        return default
    return value


def _annuity(r, n) -> Optional[float]:
    """``1 - (1 + r) ** -n``, or ``None`` where it is undefined or not finite."""

    if r <= -1:
        return None
    try:
        value = 1 - (1 + r) ** (-n)
    except OverflowError:
        return None
    return value if math.isfinite(value) else None


def monthly_payment(principal, annual_rate_pct, term_months):
    """Calculate the fully amortizing monthly payment for a loan.

    ``principal`` is the starting loan amount, ``annual_rate_pct`` is the
    nominal yearly interest rate (e.g. ``7.99`` for 7.99%), and ``term_months``
    is the number of monthly installments.  A zero rate divides the principal
    evenly across the term.
    """

    L = nz(principal)
    r = nz(annual_rate_pct) / 100 / 12
    n = int(nz(term_months))
    if n <= 0 or L <= 0:
        return 0.0
    if abs(r) < 1e-12:
        return L / n
    factor = _annuity(r, n)
    if factor is None:
        return 0.0
    return (r * L) / factor


def principal_from_payment(payment, annual_rate_pct, term_months):
    """Reverse amortization to find the loan amount for a given payment.

    Used for "how much car/house can I afford": given a payment target, rate
    and term, return the largest principal that payment retires.
    """

    P = nz(payment)
    r = nz(annual_rate_pct) / 100 / 12
    n = int(nz(term_months))
    if n <= 0 or P <= 0:
        return 0.0
    if abs(r) < 1e-12:
        return P * n
    factor = _annuity(r, n)
    if factor is None:
        return 0.0
    principal = P * factor / r
    return principal if math.isfinite(principal) else 0.0


def amortization_schedule(principal, annual_rate_pct, term_months) -> pd.DataFrame:
    """Month-by-month split of each payment into principal and interest.

    The final row absorbs floating point drift so the closing balance is
    exactly zero.
    """

    columns = [
        "Month",
        "Payment",
        "Principal",
        "Interest",
        "Balance",
        "CumulativeInterest",
        "CumulativePrincipal",
    ]
    L = nz(principal)
    n = int(nz(term_months))
    if L <= 0 or n <= 0:
        return pd.DataFrame(columns=columns)
    pmt = monthly_payment(L, annual_rate_pct, n)
    r = nz(annual_rate_pct) / 100 / 12
    rows = []
    balance = L
    cum_interest = 0.0
    cum_principal = 0.0
    for month in range(1, n + 1):
        interest = balance * r
        principal_part = pmt - interest
        if month == n:
            principal_part = balance
        balance -= principal_part
        cum_interest += interest
        cum_principal += principal_part
        rows.append(
            [
                month,
                interest + principal_part,
                principal_part,
                interest,
                0.0 if month == n else max(balance, 0.0),
                cum_interest,
                cum_principal,
            ]
        )
    return pd.DataFrame(rows, columns=columns)


def dti(front_payment, all_payments, total_income):
    """Return payment-to-income and debt-to-income ratios as fractions."""

    inc = nz(total_income)
    pti = 0.0 if inc <= 0 else nz(front_payment) / inc
    be = 0.0 if inc <= 0 else nz(all_payments) / inc
    return pti, be


def classify_affordability(
    payment,
    monthly_gross_income,
    fixed_obligations,
    thresholds: VerdictThresholds,
) -> AffordabilityResult:
    """Map a payment against income to ``comfortable``, ``tight`` or ``risky``.

    Thresholds are percentages supplied by the caller.  A ratio equal to a
    cut off lands in the worse tier, and missing income is treated as risky
    with both ratios reported as ``0``.
    """

    pmt = nz(payment)
    pti, ratio = dti(pmt, pmt + nz(fixed_obligations), monthly_gross_income)
    pti_pct = pti * 100
    dti_pct = ratio * 100
    if nz(monthly_gross_income) <= 0:
        verdict = "risky"
    elif pti_pct >= thresholds.pti_risky or dti_pct >= thresholds.dti_risky:
        verdict = "risky"
    elif pti_pct < thresholds.pti_comfortable and dti_pct < thresholds.dti_comfortable:
        verdict = "comfortable"
    else:
        verdict = "tight"
    return AffordabilityResult(
        verdict=verdict,
        payment_to_income_ratio=pti,
        debt_to_income_ratio=ratio,
    )


def explain_verdict(result: AffordabilityResult, thresholds: VerdictThresholds, monthly_gross_income) -> str:
    """One-sentence explanation naming the ratio that drove the verdict."""

    if nz(monthly_gross_income) <= 0:
        return "Enter your monthly income to see how this payment fits your budget."
    pti_pct = result.payment_to_income_ratio * 100
    dti_pct = result.debt_to_income_ratio * 100
    if result.verdict == "risky":
        if pti_pct >= thresholds.pti_risky:
            return (
                f"This payment consumes {pti_pct:.0f}% of your gross income, beyond the "
                f"recommended {thresholds.pti_risky:.0f}% maximum."
            )
        return (
            f"Your total debt obligations would reach {dti_pct:.0f}% of income, "
            "leaving little cushion for emergencies."
        )
    if result.verdict == "tight":
        if pti_pct >= thresholds.pti_comfortable:
            return (
                f"This payment is {pti_pct:.0f}% of your income. Workable, but it leaves "
                "limited margin if expenses rise."
            )
        return (
            f"Your total debt-to-income of {dti_pct:.0f}% is manageable but approaching "
            "limits most lenders prefer."
        )
    return (
        f"This payment is {pti_pct:.0f}% of your income with a healthy "
        f"{100 - dti_pct:.0f}% margin for savings and unexpected expenses."
    )


def evaluate_affordability(
    inputs: AffordabilityInputs,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Tuple[float, float, AffordabilityResult]:
    """Run the amortization -> classifier pipeline for one set of inputs.

    Returns ``(installment, total_monthly_cost, result)`` where the total adds
    insurance and any other housing costs to the loan installment.
    """

    loan = inputs.loan
    installment = monthly_payment(loan.principal, loan.annual_rate_pct, loan.term_months)
    total = installment + nz(inputs.insurance_monthly) + nz(inputs.other_housing_costs)
    result = classify_affordability(
        total,
        inputs.monthly_gross_income,
        inputs.fixed_obligations,
        config.thresholds_for(inputs.domain),
    )
    logger.debug(
        "Affordability evaluated",
        extra={
            "domain": inputs.domain,
            "monthly_cost": round(total, 2),
            "verdict": result.verdict,
        },
    )
    return installment, total, result


def calculate_payment_approvals(monthly_income) -> List[PaymentApproval]:
    """Maximum monthly auto payment at the conservative/standard/aggressive PTI."""

    inc = max(nz(monthly_income), 0.0)
    return [
        PaymentApproval(
            pti_type=name,
            ratio=ratio,
            max_payment=round(inc * ratio, 2),
            description=description,
        )
        for name, (ratio, description) in PTI_RATIOS.items()
    ]


def calculate_loan_estimates(
    monthly_payment_amt,
    term_months: int = 60,
    config: EngineConfig = DEFAULT_CONFIG,
) -> List[LoanEstimate]:
    """What a fixed monthly payment buys at each credit tier's typical APR."""

    pmt = nz(monthly_payment_amt)
    total_cost = pmt * term_months if pmt > 0 else 0.0
    estimates = []
    for tier in config.credit_tiers:
        loan = round(principal_from_payment(pmt, tier.apr, term_months))
        estimates.append(
            LoanEstimate(
                tier_id=tier.id,
                tier_name=tier.name,
                apr=tier.apr,
                loan_amount=loan,
                total_interest=round(total_cost - loan, 2),
                total_cost=round(total_cost, 2),
            )
        )
    return estimates


def max_vehicle_price(
    monthly_income,
    annual_rate_pct,
    term_months,
    down_payment=0.0,
    pti_pct: Optional[float] = None,
    config: EngineConfig = DEFAULT_CONFIG,
):
    """Highest vehicle price whose payment stays at ``pti_pct`` of income.

    ``pti_pct`` defaults to the auto "risky" cut off, i.e. the most a payment
    can be before the verdict turns risky.
    """

    if pti_pct is None:
        pti_pct = config.thresholds_for("auto").pti_risky
    max_pmt = max(nz(monthly_income), 0.0) * nz(pti_pct) / 100
    return principal_from_payment(max_pmt, annual_rate_pct, term_months) + max(nz(down_payment), 0.0)
