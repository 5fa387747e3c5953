"""Auto payment calculator: payment, comfort verdict, stress drivers."""
from __future__ import annotations

import logging

from autolytiq.calculators import evaluate_affordability, explain_verdict, nz
from autolytiq.drivers import analyze_stress_drivers
from autolytiq.models import AffordabilityInputs, AutoPaymentInputs, AutoPaymentResult, LoanInputs
from autolytiq.presets import DEFAULT_CONFIG, EngineConfig
from autolytiq.scenarios import project_scenarios

logger = logging.getLogger(__name__)


def estimate_insurance(vehicle_price, config: EngineConfig = DEFAULT_CONFIG) -> float:
    """Monthly insurance estimate from vehicle value (~$150/mo for a $50k car)."""

    return round(max(nz(vehicle_price), 0.0) * config.auto.insurance_rate)


def calculate_auto_payment(inputs: AutoPaymentInputs, config: EngineConfig = DEFAULT_CONFIG) -> AutoPaymentResult:
    """Produce the payment, verdict, stress drivers and scenarios for a car loan.

    The classified monthly cost is the loan installment plus insurance.  When
    no APR override is given the credit tier's typical rate applies; unknown
    tier ids fall back to the configured default tier.
    """

    tier = config.credit_tier(inputs.credit_tier_id)
    if tier.id != inputs.credit_tier_id:
        logger.info("Unknown credit tier, using default", extra={"credit_tier_id": inputs.credit_tier_id, "fallback": tier.id})
    rate = tier.apr if inputs.interest_rate is None else nz(inputs.interest_rate)

    price = nz(inputs.vehicle_price)
    down = nz(inputs.down_payment)
    loan_amount = max(price - down, 0.0)
    insurance = estimate_insurance(price, config) if inputs.insurance_monthly is None else nz(inputs.insurance_monthly)
    term = int(inputs.term_months)

    affordability = AffordabilityInputs(
        domain="auto",
        loan=LoanInputs(principal=loan_amount, annual_rate_pct=rate, term_months=term),
        purchase_price=price,
        monthly_gross_income=nz(inputs.monthly_gross_income),
        fixed_obligations=nz(inputs.fixed_obligations),
        insurance_monthly=insurance,
    )
    installment, total, result = evaluate_affordability(affordability, config)
    thresholds = config.thresholds_for("auto")

    total_paid = installment * term if term > 0 else 0.0
    if inputs.monthly_net_income is None:
        spendable = nz(inputs.monthly_gross_income) * config.auto.net_income_share
    else:
        spendable = nz(inputs.monthly_net_income)
    remaining = spendable - nz(inputs.fixed_obligations) - total

    logger.debug(
        "Auto payment calculated",
        extra={"loan_amount": loan_amount, "rate": rate, "term_months": term, "verdict": result.verdict},
    )
    return AutoPaymentResult(
        loan_amount=round(loan_amount, 2),
        interest_rate=rate,
        monthly_payment=round(installment, 2),
        insurance_monthly=round(insurance, 2),
        total_interest=round(max(total_paid - loan_amount, 0.0), 2),
        total_cost=round(total_paid + down, 2),
        verdict=result.verdict,
        verdict_explanation=explain_verdict(result, thresholds, inputs.monthly_gross_income),
        payment_to_income_ratio=result.payment_to_income_ratio,
        debt_to_income_ratio=result.debt_to_income_ratio,
        remaining_after_payment=round(remaining, 2),
        stress_drivers=analyze_stress_drivers(affordability, result.verdict, config),
        scenarios=project_scenarios(affordability, config),
    )
