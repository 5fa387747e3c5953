"""Pro Report assembly: stability score plus income-band narratives."""
from __future__ import annotations

import logging
from typing import List, Optional

from autolytiq import narratives
from autolytiq.calculators import nz
from autolytiq.models import (
    ApprovalReadiness,
    ExpandedTip,
    IncomeResults,
    ProReportSections,
    StabilityScore,
    ThirtyDayPlan,
)
from autolytiq.presets import DEFAULT_CONFIG, EngineConfig, RatingBand

logger = logging.getLogger(__name__)


def stability_rating(score, config: EngineConfig = DEFAULT_CONFIG) -> RatingBand:
    for band in config.stability.ratings:
        if score >= band.min_score:
            return band
    return config.stability.ratings[-1]


def score_stability(
    annual_income,
    days_of_history: Optional[int] = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> StabilityScore:
    """Score income stability from 0 to 100.

    Starts at the configured base, adds the income band adjustment and,
    when a history length is known, the history band adjustment.  ``None``
    means the history is unknown and is skipped; ``0`` days is a known
    (very short) history.
    """

    cfg = config.stability
    income = nz(annual_income)
    score = cfg.base_score

    for minimum, adjustment in cfg.income_bands:
        if income >= minimum:
            score += adjustment
            break
    else:
        if income < cfg.low_income_floor:
            score += cfg.low_income_penalty

    if days_of_history is not None:
        days = nz(days_of_history)
        for minimum, adjustment in cfg.history_bands:
            if days >= minimum:
                score += adjustment
                break
        else:
            if days < cfg.short_history_floor:
                score += cfg.short_history_penalty

    score = max(0, min(100, int(score)))
    band = stability_rating(score, config)
    return StabilityScore(score=score, rating=band.rating, explanation=band.explanation)


def approval_readiness(annual_income, config: EngineConfig = DEFAULT_CONFIG) -> ApprovalReadiness:
    income = nz(annual_income)
    monthly = income / 12
    auto_pti = config.thresholds_for("auto").pti_risky
    housing_pct = config.thresholds_for("mortgage").pti_comfortable
    values = {
        "auto_pti": auto_pti,
        "max_auto_payment": round(monthly * auto_pti / 100),
        "housing_pct": housing_pct,
        "max_housing": round(monthly * housing_pct / 100),
    }
    return ApprovalReadiness(
        overall=narratives.pick_band(narratives.OVERALL, income),
        credit_cards=narratives.pick_band(narratives.CREDIT_CARDS, income),
        personal_loans=narratives.pick_band(narratives.PERSONAL_LOANS, income),
        auto_loans=narratives.pick_band(narratives.AUTO_LOANS, income).format(**values),
        mortgage=narratives.pick_band(narratives.MORTGAGE, income).format(**values),
    )


def leverage_moves(annual_income) -> List[str]:
    return list(narratives.pick_band(narratives.LEVERAGE_MOVES, nz(annual_income)))


def thirty_day_plan(annual_income) -> ThirtyDayPlan:
    return narratives.pick_band(narratives.THIRTY_DAY_PLANS, nz(annual_income))


def expanded_tips(annual_income) -> List[ExpandedTip]:
    return list(narratives.pick_band(narratives.EXPANDED_TIPS, nz(annual_income))) + list(narratives.UNIVERSAL_TIPS)


def generate_pro_report_sections(results: IncomeResults, config: EngineConfig = DEFAULT_CONFIG) -> ProReportSections:
    """Compose every Pro Report section for one income result."""

    income = results.annual_income
    sections = ProReportSections(
        stability=score_stability(income, results.days_worked, config),
        approval_readiness=approval_readiness(income, config),
        leverage_moves=leverage_moves(income),
        thirty_day_plan=thirty_day_plan(income),
        expanded_tips=expanded_tips(income),
    )
    logger.debug(
        "Pro report assembled",
        extra={"stability_score": sections.stability.score, "rating": sections.stability.rating},
    )
    return sections
