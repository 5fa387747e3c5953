"""Income utilities: gig/self-employment decomposition, income streams, inflation."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from autolytiq.calculators import nz
from autolytiq.models import GigIncomeResult, IncomeStream, InflationProjection
from autolytiq.presets import (
    DEFAULT_CONFIG,
    PERIODS_PER_YEAR,
    STABILITY_WEIGHTS,
    SUGGESTED_STABILITY,
    EngineConfig,
    TaxBracket,
)

logger = logging.getLogger(__name__)

STREAM_COLUMNS = ["id", "name", "type", "frequency", "stability_rating", "annual", "weight", "reliable"]


def _cents(x) -> float:
    return round(nz(x), 2)


def estimate_federal_tax(taxable_income, brackets: Sequence[TaxBracket]) -> float:
    """Progressive tax over ``taxable_income`` using the bracket table."""

    remaining = max(nz(taxable_income), 0.0)
    tax = 0.0
    lower = 0.0
    for bracket in brackets:
        if remaining <= 0:
            break
        width = remaining if bracket.limit is None else max(bracket.limit - lower, 0.0)
        taxed = min(remaining, width)
        tax += taxed * bracket.rate
        remaining -= taxed
        if bracket.limit is not None:
            lower = bracket.limit
    return tax


def calculate_gig_income(
    gross_annual,
    platform_id: str = "other",
    custom_expense_rate: Optional[float] = None,
    hours_per_week: Optional[float] = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> GigIncomeResult:
    """Break gross gig earnings into expenses, taxes and take-home pay.

    Parameters
    ----------
    gross_annual:
        Yearly earnings reported by the platform.
    platform_id:
        Key into the configured platform table; unknown ids fall back to the
        default platform's expense rate.
    custom_expense_rate:
        Fraction of gross spent on expenses, overriding the platform default.
    hours_per_week:
        Optional hours worked. ``None`` leaves the hourly rate absent; a value
        of ``0`` yields an hourly rate of ``0``.

    Every component is rounded to cents before the next one is derived so
    ``true_net_income == gross - expenses - se_tax - income_tax`` holds to
    the cent whenever take-home pay is positive.
    """

    tax = config.tax
    platform = config.gig_platform(platform_id)
    if platform.id != platform_id:
        logger.info("Unknown gig platform, using default", extra={"platform_id": platform_id, "fallback": platform.id})
    rate = platform.expense_rate if custom_expense_rate is None else nz(custom_expense_rate)

    gross = _cents(gross_annual)
    expenses = _cents(gross * rate)
    net = _cents(gross - expenses)
    se_tax = _cents(max(net, 0.0) * tax.se_taxable_portion * tax.se_tax_rate)
    adjusted = net - se_tax * tax.se_deductible_share
    taxable = max(0.0, adjusted - tax.standard_deduction)
    income_tax = _cents(estimate_federal_tax(taxable, tax.brackets))
    true_net = _cents(max(0.0, net - se_tax - income_tax))

    hourly = None
    if hours_per_week is not None:
        hours = nz(hours_per_week)
        hourly = _cents(true_net / (hours * tax.weeks_per_year)) if hours > 0 else 0.0

    result = GigIncomeResult(
        platform_id=platform.id,
        gross_annual=gross,
        gross_monthly=_cents(gross / 12),
        expense_rate=rate,
        expenses=expenses,
        net_before_tax=net,
        self_employment_tax=se_tax,
        estimated_income_tax=income_tax,
        true_net_income=true_net,
        quarterly_tax_set_aside=_cents((se_tax + income_tax) / tax.quarters),
        lender_visible_income=_cents(true_net * tax.lender_discount),
        effective_hourly_rate=hourly,
    )
    logger.debug("Gig income decomposed", extra={"platform_id": platform.id, "true_net_income": true_net})
    return result


def to_annual(amount, frequency: str) -> float:
    return nz(amount) * PERIODS_PER_YEAR.get(frequency, 12)


def from_annual(annual, frequency: str) -> float:
    return nz(annual) / PERIODS_PER_YEAR.get(frequency, 12)


def suggested_stability(income_type: str) -> int:
    return SUGGESTED_STABILITY.get(income_type, 3)


def streams_frame(streams: Iterable[IncomeStream]) -> pd.DataFrame:
    """One row per stream with annualized and stability-weighted amounts."""

    rows = []
    for s in streams:
        annual = to_annual(s.amount, s.frequency)
        weight = STABILITY_WEIGHTS.get(s.stability_rating, 0.8)
        rows.append([s.id, s.name, s.type, s.frequency, s.stability_rating, annual, weight, annual * weight])
    if not rows:
        return pd.DataFrame(columns=STREAM_COLUMNS)
    return pd.DataFrame(rows, columns=STREAM_COLUMNS)


def calculate_total_annual(streams: Iterable[IncomeStream]) -> float:
    df = streams_frame(streams)
    return float(df["annual"].sum()) if not df.empty else 0.0


def calculate_reliable_income(streams: Iterable[IncomeStream]) -> float:
    """Annual income discounted by each stream's stability weight."""

    df = streams_frame(streams)
    return float(df["reliable"].sum()) if not df.empty else 0.0


def calculate_income_by_type(streams: Iterable[IncomeStream]) -> Dict[str, float]:
    df = streams_frame(streams)
    if df.empty:
        return {}
    return {k: float(v) for k, v in df.groupby("type", sort=False)["annual"].sum().items()}


def calculate_inflation_impact(
    annual_income,
    inflation_rate: float = 0.03,
    years: Sequence[int] = (1, 3, 5, 10),
) -> List[InflationProjection]:
    """Purchasing power of a flat income after compounding inflation."""

    income = max(nz(annual_income), 0.0)
    out = []
    for year in years:
        factor = (1 + inflation_rate) ** year
        power = income / factor
        out.append(
            InflationProjection(
                year=year,
                purchasing_power=round(power),
                percent_loss=round((1 - 1 / factor) * 100, 1),
                raise_needed=round(income * factor - income),
            )
        )
    return out
