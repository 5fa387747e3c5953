"""What-if scenarios for an affordability check.

Each scenario copies the baseline inputs, applies exactly one change and
reruns the full pipeline.  Scenarios never feed into each other and never
touch the baseline.
"""
from __future__ import annotations

import logging
from typing import Optional

from autolytiq.calculators import evaluate_affordability, nz
from autolytiq.models import AffordabilityInputs, ScenarioResult, Scenarios
from autolytiq.presets import DEFAULT_CONFIG, EngineConfig

logger = logging.getLogger(__name__)

_VERDICT_TAIL = {
    "risky": "This would be unsustainable.",
    "tight": "Manageable but strained.",
    "comfortable": "Still workable.",
}


def _unchanged(base_total, base_verdict, explanation) -> ScenarioResult:
    return ScenarioResult(
        monthly_payment=round(base_total, 2),
        verdict=base_verdict,
        delta=0.0,
        explanation=explanation,
        applied=False,
    )


def income_drop_scenario(inputs: AffordabilityInputs, config: EngineConfig = DEFAULT_CONFIG) -> ScenarioResult:
    _, base_total, base = evaluate_affordability(inputs, config)
    income = nz(inputs.monthly_gross_income)
    if income <= 0:
        return _unchanged(base_total, base.verdict, "Enter your income to see how a pay cut would change this.")
    factor = config.scenarios.income_factor
    perturbed = inputs.model_copy(update={"monthly_gross_income": income * factor})
    _, total, result = evaluate_affordability(perturbed, config)
    drop_pct = (1 - factor) * 100
    return ScenarioResult(
        monthly_payment=round(total, 2),
        verdict=result.verdict,
        delta=round(total - base_total, 2),
        explanation=(
            f"With {drop_pct:.0f}% less income, this payment becomes "
            f"{result.payment_to_income_ratio * 100:.0f}% of your earnings. {_VERDICT_TAIL[result.verdict]}"
        ),
    )


def higher_insurance_scenario(inputs: AffordabilityInputs, config: EngineConfig = DEFAULT_CONFIG) -> ScenarioResult:
    _, base_total, base = evaluate_affordability(inputs, config)
    insurance = nz(inputs.insurance_monthly)
    if insurance <= 0:
        return _unchanged(base_total, base.verdict, "No insurance cost is included, so there is nothing to scale up.")
    higher = insurance * config.scenarios.insurance_multiplier
    perturbed = inputs.model_copy(update={"insurance_monthly": higher})
    _, total, result = evaluate_affordability(perturbed, config)
    return ScenarioResult(
        monthly_payment=round(total, 2),
        verdict=result.verdict,
        delta=round(total - base_total, 2),
        explanation=(
            f"If insurance runs ${higher:,.0f}/month instead of ${insurance:,.0f}, your true cost is "
            f"${total:,.0f}/month ({result.payment_to_income_ratio * 100:.0f}% of income)."
        ),
    )


def next_longer_term(term_months: int, options) -> Optional[int]:
    longer = [t for t in options if t > term_months]
    return min(longer) if longer else None


def longer_term_scenario(inputs: AffordabilityInputs, config: EngineConfig = DEFAULT_CONFIG) -> ScenarioResult:
    base_installment, base_total, base = evaluate_affordability(inputs, config)
    loan = inputs.loan
    term = int(loan.term_months)
    extended = next_longer_term(term, config.term_options.get(inputs.domain, []))
    if nz(loan.principal) <= 0:
        return _unchanged(base_total, base.verdict, "There is no loan balance, so a longer term changes nothing.")
    if extended is None:
        logger.info("Longer term scenario not applicable", extra={"domain": inputs.domain, "term_months": term})
        return _unchanged(
            base_total,
            base.verdict,
            f"{term} months is already the longest available term; no further change is possible.",
        )
    perturbed = inputs.model_copy(update={"loan": loan.model_copy(update={"term_months": extended})})
    installment, total, result = evaluate_affordability(perturbed, config)
    extra_interest = installment * extended - base_installment * term
    return ScenarioResult(
        monthly_payment=round(total, 2),
        verdict=result.verdict,
        delta=round(total - base_total, 2),
        explanation=(
            f"Extending to {extended} months drops the payment to ${installment:,.0f} but adds "
            f"${extra_interest:,.0f} in total interest."
        ),
    )


def project_scenarios(inputs: AffordabilityInputs, config: EngineConfig = DEFAULT_CONFIG) -> Scenarios:
    """Income -10%, higher insurance and next longer term, each from baseline."""

    return Scenarios(
        income_drops_10=income_drop_scenario(inputs, config),
        higher_insurance=higher_insurance_scenario(inputs, config),
        longer_term=longer_term_scenario(inputs, config),
    )
