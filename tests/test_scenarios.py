import pytest

from autolytiq.calculators import evaluate_affordability, monthly_payment
from autolytiq.models import AffordabilityInputs, LoanInputs, verdict_rank
from autolytiq.scenarios import next_longer_term, project_scenarios


def baseline(term=60, insurance=100.0, income=6000.0):
    return AffordabilityInputs(
        domain="auto",
        loan=LoanInputs(principal=30000, annual_rate_pct=8.49, term_months=term),
        monthly_gross_income=income,
        fixed_obligations=300,
        insurance_monthly=insurance,
    )


def test_each_scenario_starts_from_baseline():
    inputs = baseline()
    base_installment, base_total, base = evaluate_affordability(inputs)
    s = project_scenarios(inputs)

    # income cut leaves the payment alone
    assert s.income_drops_10.monthly_payment == pytest.approx(round(base_total, 2))
    assert s.income_drops_10.delta == 0
    assert verdict_rank(s.income_drops_10.verdict) >= verdict_rank(base.verdict)

    # insurance scenario keeps baseline term and income
    assert s.higher_insurance.monthly_payment == pytest.approx(round(base_installment + 150, 2))
    assert s.higher_insurance.delta == pytest.approx(50, abs=0.01)

    # longer term keeps baseline insurance
    expected = monthly_payment(30000, 8.49, 72) + 100
    assert s.longer_term.monthly_payment == pytest.approx(round(expected, 2))
    assert s.longer_term.delta < 0
    assert "72 months" in s.longer_term.explanation
    assert all(x.applied for x in (s.income_drops_10, s.higher_insurance, s.longer_term))


def test_baseline_untouched():
    inputs = baseline()
    snapshot = inputs.model_copy()
    project_scenarios(inputs)
    assert inputs == snapshot


def test_longest_term_returns_baseline():
    inputs = baseline(term=84)
    _, base_total, base = evaluate_affordability(inputs)
    longer = project_scenarios(inputs).longer_term
    assert longer.applied is False
    assert longer.verdict == base.verdict
    assert longer.delta == 0
    assert longer.monthly_payment == pytest.approx(round(base_total, 2))
    assert "longest" in longer.explanation


def test_no_insurance_cannot_scale():
    s = project_scenarios(baseline(insurance=0))
    assert s.higher_insurance.applied is False
    assert s.higher_insurance.delta == 0


def test_zero_income_scenario_is_well_formed():
    s = project_scenarios(baseline(income=0))
    assert s.income_drops_10.applied is False
    assert s.income_drops_10.verdict == "risky"


def test_income_drop_can_worsen_verdict():
    # $615 + $100 on $6,500 is just under 12%; 10% less income pushes it over.
    inputs = baseline(income=6500)
    inputs = inputs.model_copy(update={"fixed_obligations": 0})
    base = evaluate_affordability(inputs)[2]
    drop = project_scenarios(inputs).income_drops_10
    assert base.verdict == "tight"
    assert drop.verdict == "risky"


def test_next_longer_term():
    assert next_longer_term(60, [36, 48, 60, 72, 84]) == 72
    assert next_longer_term(66, [84, 72, 36]) == 72
    assert next_longer_term(84, [36, 48, 60, 72, 84]) is None
    assert next_longer_term(360, [180, 240, 360]) is None
