import pytest

from autolytiq.calculators import classify_affordability, evaluate_affordability, explain_verdict
from autolytiq.models import AffordabilityInputs, LoanInputs, verdict_rank
from autolytiq.presets import DEFAULT_CONFIG, VerdictThresholds

AUTO_10_14 = VerdictThresholds(pti_comfortable=10, pti_risky=14, dti_comfortable=36, dti_risky=43)


def test_twelve_percent_payment_is_tight():
    res = classify_affordability(600, 5000, 0, AUTO_10_14)
    assert res.verdict == "tight"
    assert res.payment_to_income_ratio == pytest.approx(0.12)
    assert res.debt_to_income_ratio == pytest.approx(0.12)


def test_comfortable_and_risky():
    assert classify_affordability(300, 5000, 0, AUTO_10_14).verdict == "comfortable"
    assert classify_affordability(900, 5000, 0, AUTO_10_14).verdict == "risky"


def test_ties_land_in_worse_tier():
    t = VerdictThresholds(pti_comfortable=12.5, pti_risky=25, dti_comfortable=37.5, dti_risky=50)
    assert classify_affordability(128, 1024, 0, t).verdict == "tight"
    assert classify_affordability(256, 1024, 0, t).verdict == "risky"
    # DTI alone at the risky cut off
    assert classify_affordability(0, 1024, 512, t).verdict == "risky"
    assert classify_affordability(0, 1024, 384, t).verdict == "tight"


def test_obligations_drive_dti():
    res = classify_affordability(300, 5000, 1700, AUTO_10_14)
    assert res.payment_to_income_ratio == pytest.approx(0.06)
    assert res.debt_to_income_ratio == pytest.approx(0.40)
    assert res.verdict == "tight"


def test_missing_income_is_risky_with_zero_ratios():
    for income in (0, -100, None, float("nan")):
        res = classify_affordability(600, income, 200, AUTO_10_14)
        assert res.verdict == "risky"
        assert res.payment_to_income_ratio == 0
        assert res.debt_to_income_ratio == 0


def test_more_payment_never_improves_verdict():
    ranks = [verdict_rank(classify_affordability(p, 5000, 400, AUTO_10_14).verdict) for p in range(0, 3000, 25)]
    assert ranks == sorted(ranks)
    assert ranks[0] == 0 and ranks[-1] == 2


def test_evaluate_adds_insurance_and_housing_costs():
    inputs = AffordabilityInputs(
        domain="mortgage",
        loan=LoanInputs(principal=0),
        monthly_gross_income=10000,
        insurance_monthly=100,
        other_housing_costs=400,
    )
    installment, total, res = evaluate_affordability(inputs)
    assert installment == 0
    assert total == pytest.approx(500)
    assert res.verdict == "comfortable"


def test_explanation_names_driving_ratio():
    thresholds = DEFAULT_CONFIG.thresholds_for("auto")
    risky = classify_affordability(1000, 5000, 0, thresholds)
    assert "20%" in explain_verdict(risky, thresholds, 5000)
    debt_heavy = classify_affordability(300, 5000, 2000, thresholds)
    assert debt_heavy.verdict == "risky"
    assert "total debt obligations" in explain_verdict(debt_heavy, thresholds, 5000)
    assert "Enter your monthly income" in explain_verdict(risky, thresholds, 0)
