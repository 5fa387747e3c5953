"""Configuration tables for every calculator.

Nothing in the calculation modules hardcodes a rate, threshold or band;
they all read from an :class:`EngineConfig`.  ``DEFAULT_CONFIG`` carries the
values the site ships with, and :func:`load_config` overlays a JSON file on
top of it so numbers can change without touching calculation code.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from autolytiq.exceptions import ConfigurationError

DISCLAIMER = (
    "These calculators use common rules of thumb (payment-to-income, 28/36 housing ratios, "
    "simplified self-employment and federal income tax estimates). "
    "Results are estimates only and are not tax, lending or credit advice; "
    "lender overlays, credit history and actual tax law prevail."
)


class PresetModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class VerdictThresholds(PresetModel):
    """Percent-of-gross-income cut offs for the three verdict tiers.

    Ratios below both ``*_comfortable`` values are comfortable, ratios at or
    above either ``*_risky`` value are risky, everything else is tight.
    """

    pti_comfortable: float
    pti_risky: float
    dti_comfortable: float
    dti_risky: float


class CreditTier(PresetModel):
    id: str
    name: str
    range: str
    apr: float


class StressReference(PresetModel):
    """Typical values the stress driver analyzer compares inputs against."""

    apr: float
    term_months: int
    insurance_monthly: float
    obligations_pct: float = 10.0
    medium_shift_pct: float = 2.0


class ScenarioConfig(PresetModel):
    income_factor: float = 0.9
    insurance_multiplier: float = 1.5


class GigPlatform(PresetModel):
    id: str
    name: str
    expense_rate: float
    description: str


class TaxBracket(PresetModel):
    # ``None`` marks the open top bracket.
    limit: Optional[float]
    rate: float


class TaxConfig(PresetModel):
    se_tax_rate: float = 0.153
    se_taxable_portion: float = 0.9235
    se_deductible_share: float = 0.5
    standard_deduction: float = 14600.0
    brackets: List[TaxBracket] = Field(
        default_factory=lambda: [
            TaxBracket(limit=11600, rate=0.10),
            TaxBracket(limit=47150, rate=0.12),
            TaxBracket(limit=100525, rate=0.22),
            TaxBracket(limit=191950, rate=0.24),
            TaxBracket(limit=243725, rate=0.32),
            TaxBracket(limit=609350, rate=0.35),
            TaxBracket(limit=None, rate=0.37),
        ]
    )
    lender_discount: float = 0.75
    weeks_per_year: int = 52
    quarters: int = 4


class RatingBand(PresetModel):
    min_score: float
    rating: str
    explanation: str


class StabilityConfig(PresetModel):
    base_score: int = 50
    # (minimum annual income, adjustment), checked top down.
    income_bands: List[Tuple[float, int]] = [(150000, 20), (100000, 15), (75000, 10), (50000, 5)]
    low_income_floor: float = 30000
    low_income_penalty: int = -10
    history_bands: List[Tuple[int, int]] = [(365, 15), (180, 10), (90, 5)]
    short_history_floor: int = 30
    short_history_penalty: int = -10
    ratings: List[RatingBand] = Field(
        default_factory=lambda: [
            RatingBand(
                min_score=85,
                rating="Excellent",
                explanation="Your income shows strong consistency and reliability. Lenders and landlords will view this favorably.",
            ),
            RatingBand(
                min_score=70,
                rating="Good",
                explanation="Your income appears stable with good earning potential. You're in a solid position for most financial applications.",
            ),
            RatingBand(
                min_score=55,
                rating="Moderate",
                explanation="Your income is in a reasonable range. Building a longer track record will improve your financial profile.",
            ),
            RatingBand(
                min_score=40,
                rating="Developing",
                explanation="Your income is establishing a pattern. Consider ways to increase consistency or add supplementary income.",
            ),
            RatingBand(
                min_score=float("-inf"),
                rating="Building",
                explanation="Your income is in the early stages of establishing a track record. Focus on consistency and growth opportunities.",
            ),
        ]
    )


class HousingDefaults(PresetModel):
    pmi_annual_pct: float = 0.5
    pmi_down_payment_cutoff_pct: float = 20.0
    max_front_end_pct: float = 28.0
    pi_share_of_housing: float = 0.80
    rent_max_pct: float = 30.0
    rent_conservative_pct: float = 25.0
    # (front-end max, back-end max, label), checked top down.
    qualification_bands: List[Tuple[float, float, str]] = [
        (28.0, 36.0, "Excellent - Well within guidelines"),
        (31.0, 43.0, "Good - May qualify with compensating factors"),
        (36.0, 50.0, "Fair - FHA/VA loans may be available"),
    ]
    qualification_fallback: str = "At risk - May not qualify for most loans"
    # Rent vs buy projection, percent per year unless noted.
    rent_increase_pct: float = 3.0
    appreciation_pct: float = 3.0
    maintenance_pct: float = 1.0
    homeowner_insurance_pct: float = 0.5
    investment_return_pct: float = 7.0
    closing_cost_pct: float = 3.0  # of price, once
    selling_cost_pct: float = 6.0  # of value at sale
    projection_years: int = 30


class AutoDefaults(PresetModel):
    # Monthly insurance estimate as a fraction of vehicle price.
    insurance_rate: float = 0.003
    net_income_share: float = 0.75
    recommended_down_pct: float = 20.0


CREDIT_TIERS = [
    CreditTier(id="excellent", name="Excellent", range="750+", apr=5.99),
    CreditTier(id="good", name="Good", range="700-749", apr=8.49),
    CreditTier(id="fair", name="Fair", range="650-699", apr=12.99),
    CreditTier(id="poor", name="Poor", range="550-649", apr=18.99),
]

GIG_PLATFORMS = [
    GigPlatform(id="uber", name="Uber", expense_rate=0.30, description="Rideshare driver"),
    GigPlatform(id="lyft", name="Lyft", expense_rate=0.30, description="Rideshare driver"),
    GigPlatform(id="doordash", name="DoorDash", expense_rate=0.25, description="Food delivery"),
    GigPlatform(id="instacart", name="Instacart", expense_rate=0.25, description="Grocery delivery"),
    GigPlatform(id="upwork", name="Upwork", expense_rate=0.10, description="Freelance work"),
    GigPlatform(id="other", name="Other", expense_rate=0.20, description="Custom gig work"),
]

PTI_RATIOS = {
    "Conservative": (0.08, "Low risk, easier approval"),
    "Standard": (0.12, "Typical auto loan guideline"),
    "Aggressive": (0.15, "Maximum most lenders approve"),
}

STABILITY_WEIGHTS = {5: 1.00, 4: 0.90, 3: 0.80, 2: 0.65, 1: 0.50}
STABILITY_LABELS = {5: "Very Stable", 4: "Stable", 3: "Moderate", 2: "Variable", 1: "Very Variable"}
SUGGESTED_STABILITY = {"w2": 5, "rental": 4, "freelance": 3, "side-hustle": 2, "gig": 2, "other": 3}
PERIODS_PER_YEAR = {"weekly": 52, "biweekly": 26, "monthly": 12, "annually": 1}


class EngineConfig(PresetModel):
    thresholds: Dict[str, VerdictThresholds] = Field(
        default_factory=lambda: {
            "auto": VerdictThresholds(pti_comfortable=8.0, pti_risky=12.0, dti_comfortable=36.0, dti_risky=43.0),
            "mortgage": VerdictThresholds(pti_comfortable=28.0, pti_risky=36.0, dti_comfortable=36.0, dti_risky=43.0),
            "rent": VerdictThresholds(pti_comfortable=25.0, pti_risky=30.0, dti_comfortable=36.0, dti_risky=43.0),
        }
    )
    stress_reference: Dict[str, StressReference] = Field(
        default_factory=lambda: {
            "auto": StressReference(apr=8.49, term_months=60, insurance_monthly=150.0),
            "mortgage": StressReference(apr=6.75, term_months=360, insurance_monthly=100.0),
        }
    )
    term_options: Dict[str, List[int]] = Field(
        default_factory=lambda: {
            "auto": [36, 48, 60, 72, 84],
            "mortgage": [180, 240, 360],
        }
    )
    scenarios: ScenarioConfig = ScenarioConfig()
    credit_tiers: List[CreditTier] = Field(default_factory=lambda: list(CREDIT_TIERS))
    default_credit_tier: str = "good"
    gig_platforms: List[GigPlatform] = Field(default_factory=lambda: list(GIG_PLATFORMS))
    default_gig_platform: str = "other"
    tax: TaxConfig = TaxConfig()
    stability: StabilityConfig = StabilityConfig()
    housing: HousingDefaults = HousingDefaults()
    auto: AutoDefaults = AutoDefaults()

    def thresholds_for(self, domain: str) -> VerdictThresholds:
        try:
            return self.thresholds[domain]
        except KeyError:
            raise ConfigurationError(f"No verdict thresholds configured for domain {domain!r}") from None

    def reference_for(self, domain: str) -> StressReference:
        # Rent has no loan; it borrows the mortgage reference values.
        ref = self.stress_reference.get(domain) or self.stress_reference.get("mortgage")
        if ref is None:
            raise ConfigurationError(f"No stress reference configured for domain {domain!r}")
        return ref

    def credit_tier(self, tier_id: str) -> CreditTier:
        for tier in self.credit_tiers:
            if tier.id == tier_id:
                return tier
        for tier in self.credit_tiers:
            if tier.id == self.default_credit_tier:
                return tier
        return self.credit_tiers[0]

    def gig_platform(self, platform_id: str) -> GigPlatform:
        for platform in self.gig_platforms:
            if platform.id == platform_id:
                return platform
        for platform in self.gig_platforms:
            if platform.id == self.default_gig_platform:
                return platform
        return self.gig_platforms[-1]


DEFAULT_CONFIG = EngineConfig()


def load_config(path: Union[str, Path]) -> EngineConfig:
    """Overlay the JSON document at ``path`` on ``DEFAULT_CONFIG``.

    Top-level keys replace the default section wholesale, so a file only
    needs the sections it changes.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            overrides = json.load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Config file not found: {path}") from None
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Config file {path} is not valid JSON: {exc}") from exc
    if not isinstance(overrides, dict):
        raise ConfigurationError(f"Config file {path} must contain a JSON object")
    data = DEFAULT_CONFIG.model_dump()
    data.update(overrides)
    try:
        return EngineConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration in {path}: {exc}") from exc
