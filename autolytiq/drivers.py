"""Stress driver analysis.

Explains a verdict by resetting one input at a time to a typical reference
value and rerunning the pipeline.  A factor whose reset alone moves the
verdict is ``high`` impact; one that moves the debt-to-income ratio by at
least the configured shift is ``medium``; anything else is ``low``.  Income
is probed the other way, by applying the scenario income drop.  The verdict
itself is never changed here.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from autolytiq.calculators import evaluate_affordability, monthly_payment, nz
from autolytiq.models import (
    IMPACT_ORDER,
    AffordabilityInputs,
    StressDriver,
    verdict_rank,
)
from autolytiq.presets import DEFAULT_CONFIG, EngineConfig

logger = logging.getLogger(__name__)


def _with_loan(inputs: AffordabilityInputs, **changes) -> AffordabilityInputs:
    return inputs.model_copy(update={"loan": inputs.loan.model_copy(update=changes)})


def _impact(reset: Optional[AffordabilityInputs], verdict, base_dti, shift_pct, config) -> str:
    if reset is None:
        return "low"
    _, _, isolated = evaluate_affordability(reset, config)
    if verdict_rank(verdict) != verdict_rank(isolated.verdict):
        return "high"
    if abs(base_dti - isolated.debt_to_income_ratio) * 100 >= shift_pct:
        return "medium"
    return "low"


def analyze_stress_drivers(
    inputs: AffordabilityInputs,
    verdict: str,
    config: EngineConfig = DEFAULT_CONFIG,
) -> List[StressDriver]:
    """Rank rate, term, down payment, insurance, obligations and income by influence.

    Drivers come back highest impact first; equal tiers keep that order.
    Rate, term and down payment need a loan balance, down payment also needs
    ``purchase_price``, and income is skipped when there is none.
    """

    ref = config.reference_for(inputs.domain)
    base_installment, _, base = evaluate_affordability(inputs, config)
    base_dti = base.debt_to_income_ratio
    loan = inputs.loan
    income = nz(inputs.monthly_gross_income)
    drivers: List[StressDriver] = []

    def add(driver_id, label, reset, explanation, value):
        drivers.append(
            StressDriver(
                id=driver_id,
                label=label,
                impact=_impact(reset, verdict, base_dti, ref.medium_shift_pct, config),
                explanation=explanation,
                value=value,
            )
        )

    if nz(loan.principal) > 0:
        rate = nz(loan.annual_rate_pct)
        if rate > ref.apr:
            ref_pmt = monthly_payment(loan.principal, ref.apr, loan.term_months)
            add(
                "interest_rate",
                "Interest Rate",
                _with_loan(inputs, annual_rate_pct=ref.apr),
                f"Your {rate:.2f}% APR is above the typical {ref.apr:.2f}%. At the typical rate "
                f"the payment would be ${ref_pmt:,.0f}/month, ${base_installment - ref_pmt:,.0f} less.",
                f"{rate:.2f}% APR",
            )
        else:
            add(
                "interest_rate",
                "Interest Rate",
                None,
                f"Your {rate:.2f}% APR is at or below the typical {ref.apr:.2f}% and is not adding pressure.",
                f"{rate:.2f}% APR",
            )

        term = int(loan.term_months)
        ref_term_pmt = monthly_payment(loan.principal, loan.annual_rate_pct, ref.term_months)
        if term < ref.term_months:
            add(
                "term_length",
                "Term Length",
                _with_loan(inputs, term_months=ref.term_months),
                f"The {term}-month term raises the payment by ${base_installment - ref_term_pmt:,.0f}/month "
                f"compared with a typical {ref.term_months}-month term.",
                f"{term} mo",
            )
        elif term > ref.term_months:
            extra_interest = base_installment * term - ref_term_pmt * ref.term_months
            add(
                "term_length",
                "Term Length Illusion",
                None,
                f"The {term}-month term saves ${ref_term_pmt - base_installment:,.0f}/month but costs "
                f"${extra_interest:,.0f} more in total interest than {ref.term_months} months.",
                f"+${extra_interest:,.0f} total",
            )
        else:
            add(
                "term_length",
                "Term Length",
                None,
                f"A {term}-month term is typical for this loan.",
                f"{term} mo",
            )

        price = nz(inputs.purchase_price)
        if price > 0:
            down = max(price - nz(loan.principal), 0.0)
            down_pct = down / price * 100
            recommended_pct = config.auto.recommended_down_pct
            if down_pct < recommended_pct:
                reset_principal = price * (1 - recommended_pct / 100)
                extra_down = nz(loan.principal) - reset_principal
                savings = base_installment - monthly_payment(reset_principal, loan.annual_rate_pct, loan.term_months)
                add(
                    "down_payment",
                    "Down Payment Leverage",
                    _with_loan(inputs, principal=reset_principal),
                    f"Putting {recommended_pct:.0f}% down (${extra_down:,.0f} more) would lower the "
                    f"payment by ${savings:,.0f}/month.",
                    f"{down_pct:.0f}% down",
                )
            else:
                add(
                    "down_payment",
                    "Down Payment Leverage",
                    None,
                    f"A {down_pct:.0f}% down payment meets the recommended {recommended_pct:.0f}%.",
                    f"{down_pct:.0f}% down",
                )

    insurance = nz(inputs.insurance_monthly)
    if insurance > ref.insurance_monthly:
        add(
            "insurance",
            "Insurance Estimate",
            inputs.model_copy(update={"insurance_monthly": ref.insurance_monthly}),
            f"Insurance of ${insurance:,.0f}/month is ${insurance - ref.insurance_monthly:,.0f} above "
            f"the typical ${ref.insurance_monthly:,.0f}.",
            f"${insurance:,.0f}/mo",
        )
    else:
        add(
            "insurance",
            "Insurance Estimate",
            None,
            f"Insurance of ${insurance:,.0f}/month is within the typical range.",
            f"${insurance:,.0f}/mo",
        )

    obligations = nz(inputs.fixed_obligations)
    typical_obligations = income * ref.obligations_pct / 100
    if obligations > typical_obligations:
        obligations_pct = obligations / income * 100 if income > 0 else 0.0
        add(
            "existing_obligations",
            "Existing Obligations",
            inputs.model_copy(update={"fixed_obligations": typical_obligations}),
            f"Existing debts of ${obligations:,.0f}/month take {obligations_pct:.0f}% of income "
            f"before this payment, above the typical {ref.obligations_pct:.0f}%.",
            f"${obligations:,.0f}/mo",
        )
    else:
        add(
            "existing_obligations",
            "Existing Obligations",
            None,
            f"Existing debts of ${obligations:,.0f}/month are within the typical "
            f"{ref.obligations_pct:.0f}% of income.",
            f"${obligations:,.0f}/mo",
        )

    if income > 0:
        factor = config.scenarios.income_factor
        stressed_inputs = inputs.model_copy(update={"monthly_gross_income": income * factor})
        _, _, stressed = evaluate_affordability(stressed_inputs, config)
        stressed_pct = stressed.payment_to_income_ratio * 100
        add(
            "income_volatility",
            "Income Volatility",
            stressed_inputs,
            f"A {(1 - factor) * 100:.0f}% income drop would put this payment at {stressed_pct:.0f}% "
            f"of income, a {stressed.verdict} result.",
            f"{stressed_pct:.0f}% stressed",
        )

    ranked = sorted(drivers, key=lambda d: IMPACT_ORDER.index(d.impact))
    logger.debug(
        "Stress drivers ranked",
        extra={"domain": inputs.domain, "verdict": verdict, "drivers": [d.id for d in ranked]},
    )
    return ranked
