from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

VerdictLevel = Literal["comfortable", "tight", "risky"]
ImpactTier = Literal["high", "medium", "low"]
Domain = Literal["auto", "mortgage", "rent"]
Frequency = Literal["weekly", "biweekly", "monthly", "annually"]
IncomeType = Literal["w2", "freelance", "gig", "rental", "side-hustle", "other"]

# Best to worst; index doubles as severity rank.
VERDICT_ORDER = ("comfortable", "tight", "risky")
IMPACT_ORDER = ("high", "medium", "low")


def verdict_rank(verdict: str) -> int:
    return VERDICT_ORDER.index(verdict)


class ValueModel(BaseModel):
    """Immutable result or input record."""

    model_config = ConfigDict(frozen=True)


class LoanInputs(ValueModel):
    principal: float = 0.0
    annual_rate_pct: float = 0.0
    term_months: int = 60


class AffordabilityInputs(ValueModel):
    """Everything needed to rerun the payment -> verdict pipeline.

    ``other_housing_costs`` carries property tax, HOA and PMI for mortgage
    checks and stays ``0`` for auto loans.  ``purchase_price`` is the price
    the loan finances; the down payment is whatever the loan does not cover.
    Leave it at ``0`` when there is no down payment to weigh.
    """

    domain: Domain = "auto"
    loan: LoanInputs = LoanInputs()
    purchase_price: float = 0.0
    monthly_gross_income: float = 0.0
    fixed_obligations: float = 0.0
    insurance_monthly: float = 0.0
    other_housing_costs: float = 0.0


class AffordabilityResult(ValueModel):
    verdict: VerdictLevel
    payment_to_income_ratio: float
    debt_to_income_ratio: float


class StressDriver(ValueModel):
    id: str
    label: str
    impact: ImpactTier
    explanation: str
    value: str


class ScenarioResult(ValueModel):
    monthly_payment: float
    verdict: VerdictLevel
    delta: float
    explanation: str
    applied: bool = True


class Scenarios(ValueModel):
    income_drops_10: ScenarioResult
    higher_insurance: ScenarioResult
    longer_term: ScenarioResult


class AutoPaymentInputs(ValueModel):
    vehicle_price: float = 35000.0
    down_payment: float = 5000.0
    credit_tier_id: str = "good"
    term_months: int = 60
    interest_rate: Optional[float] = None
    monthly_gross_income: float = 0.0
    monthly_net_income: Optional[float] = None
    fixed_obligations: float = 0.0
    insurance_monthly: Optional[float] = None


class AutoPaymentResult(ValueModel):
    loan_amount: float
    interest_rate: float
    monthly_payment: float
    insurance_monthly: float
    total_interest: float
    total_cost: float
    verdict: VerdictLevel
    verdict_explanation: str
    payment_to_income_ratio: float
    debt_to_income_ratio: float
    remaining_after_payment: float
    stress_drivers: List[StressDriver]
    scenarios: Scenarios


class MortgageInputs(ValueModel):
    home_price: float = 400000.0
    down_payment_pct: float = 20.0
    interest_rate: float = 6.75
    term_years: int = 30
    property_tax_rate_pct: float = 1.2
    annual_insurance: float = 1500.0
    hoa_monthly: float = 0.0
    monthly_gross_income: float = 0.0
    other_debts: float = 0.0


class PitiBreakdown(ValueModel):
    principal_interest: float
    property_tax: float
    insurance: float
    pmi: float
    hoa: float
    total_monthly: float


class MortgageResult(ValueModel):
    home_price: float
    down_payment: float
    down_payment_pct: float
    loan_amount: float
    interest_rate: float
    term_years: int
    piti: PitiBreakdown
    total_payments: float
    total_interest: float
    front_end_ratio: float
    back_end_ratio: float
    verdict: VerdictLevel
    verdict_explanation: str
    stress_drivers: List[StressDriver]
    scenarios: Scenarios


class DtiAnalysis(ValueModel):
    monthly_income: float
    housing_payment: float
    other_debts: float
    front_end_dti: float
    back_end_dti: float
    is_affordable: bool
    qualification: str


class RentAffordability(ValueModel):
    monthly_income: float
    max_rent_30: float
    max_rent_25: float
    current_rent: Optional[float] = None
    rent_percent: Optional[float] = None
    is_affordable: Optional[bool] = None
    verdict: Optional[VerdictLevel] = None


class MaxHomePrice(ValueModel):
    monthly_income: float
    max_housing_payment: float
    estimated_max_price: float
    down_payment_pct: float
    interest_rate: float
    term_years: int


class PaymentApproval(ValueModel):
    pti_type: str
    ratio: float
    max_payment: float
    description: str


class LoanEstimate(ValueModel):
    tier_id: str
    tier_name: str
    apr: float
    loan_amount: float
    total_interest: float
    total_cost: float


class GigIncomeResult(ValueModel):
    platform_id: str
    gross_annual: float
    gross_monthly: float
    expense_rate: float
    expenses: float
    net_before_tax: float
    self_employment_tax: float
    estimated_income_tax: float
    true_net_income: float
    quarterly_tax_set_aside: float
    lender_visible_income: float
    # None means hours were not supplied; 0.0 means zero hours were.
    effective_hourly_rate: Optional[float] = None


class IncomeStream(ValueModel):
    id: str
    name: str = ""
    amount: float = 0.0
    frequency: Frequency = "monthly"
    type: IncomeType = "w2"
    stability_rating: int = Field(default=3, ge=1, le=5)


class InflationProjection(ValueModel):
    year: int
    purchasing_power: float
    percent_loss: float
    raise_needed: float


class IncomeResults(ValueModel):
    annual_income: float
    monthly_income: float
    weekly_income: float
    daily_income: float
    days_worked: Optional[int] = None

    @classmethod
    def from_annual(cls, annual_income: float, days_worked: Optional[int] = None) -> "IncomeResults":
        return cls(
            annual_income=annual_income,
            monthly_income=annual_income / 12,
            weekly_income=annual_income / 52,
            daily_income=annual_income / 365,
            days_worked=days_worked,
        )


class StabilityScore(ValueModel):
    score: int
    rating: str
    explanation: str


class ApprovalReadiness(ValueModel):
    overall: str
    credit_cards: str
    personal_loans: str
    auto_loans: str
    mortgage: str


class ThirtyDayPlan(ValueModel):
    week1: List[str]
    week2: List[str]
    week3: List[str]
    week4: List[str]

    def weeks(self) -> List[List[str]]:
        return [self.week1, self.week2, self.week3, self.week4]


class ExpandedTip(ValueModel):
    title: str
    description: str
    action_items: List[str]


class ProReportSections(ValueModel):
    stability: StabilityScore
    approval_readiness: ApprovalReadiness
    leverage_moves: List[str]
    thirty_day_plan: ThirtyDayPlan
    expanded_tips: List[ExpandedTip]
