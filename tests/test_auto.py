import pytest

from autolytiq.auto import calculate_auto_payment, estimate_insurance
from autolytiq.calculators import monthly_payment
from autolytiq.models import AutoPaymentInputs


def test_defaults_use_good_tier_and_estimated_insurance():
    res = calculate_auto_payment(AutoPaymentInputs(monthly_gross_income=6000))
    assert res.loan_amount == 30000
    assert res.interest_rate == 8.49
    assert res.insurance_monthly == 105
    pmt = monthly_payment(30000, 8.49, 60)
    assert res.monthly_payment == pytest.approx(round(pmt, 2))
    assert res.total_interest == pytest.approx(pmt * 60 - 30000, abs=0.01)
    assert res.total_cost == pytest.approx(pmt * 60 + 5000, abs=0.01)
    assert res.payment_to_income_ratio == pytest.approx((pmt + 105) / 6000)
    assert res.remaining_after_payment == pytest.approx(6000 * 0.75 - pmt - 105, abs=0.01)
    assert {d.id for d in res.stress_drivers} == {
        "interest_rate",
        "term_length",
        "down_payment",
        "insurance",
        "existing_obligations",
        "income_volatility",
    }


def test_rate_override_and_unknown_tier():
    res = calculate_auto_payment(AutoPaymentInputs(credit_tier_id="platinum", interest_rate=0, monthly_gross_income=6000))
    assert res.interest_rate == 0
    assert res.monthly_payment == pytest.approx(500)
    assert res.total_interest == 0
    tier = calculate_auto_payment(AutoPaymentInputs(credit_tier_id="platinum", monthly_gross_income=6000))
    assert tier.interest_rate == 8.49


def test_net_income_and_explicit_insurance():
    res = calculate_auto_payment(
        AutoPaymentInputs(
            vehicle_price=20000,
            down_payment=20000,
            monthly_gross_income=5000,
            monthly_net_income=3800,
            fixed_obligations=300,
            insurance_monthly=0,
        )
    )
    assert res.loan_amount == 0
    assert res.monthly_payment == 0
    assert res.remaining_after_payment == pytest.approx(3500)
    assert res.verdict == "comfortable"
    assert [d.id for d in res.stress_drivers] == ["insurance", "existing_obligations", "income_volatility"]
    assert res.scenarios.longer_term.applied is False


def test_down_payment_above_price_is_no_loan():
    res = calculate_auto_payment(AutoPaymentInputs(vehicle_price=10000, down_payment=15000, monthly_gross_income=4000))
    assert res.loan_amount == 0


def test_zero_income_is_risky():
    res = calculate_auto_payment(AutoPaymentInputs())
    assert res.verdict == "risky"
    assert res.payment_to_income_ratio == 0
    assert res.debt_to_income_ratio == 0
    assert "Enter your monthly income" in res.verdict_explanation


def test_expensive_car_on_modest_income():
    res = calculate_auto_payment(
        AutoPaymentInputs(vehicle_price=60000, down_payment=0, credit_tier_id="poor", term_months=48, monthly_gross_income=5000)
    )
    assert res.verdict == "risky"
    assert res.stress_drivers[0].impact in ("high", "medium")
    assert res.scenarios.longer_term.monthly_payment < res.monthly_payment + res.insurance_monthly


def test_no_money_down_adds_down_payment_driver():
    res = calculate_auto_payment(AutoPaymentInputs(vehicle_price=40000, down_payment=0, monthly_gross_income=6000))
    down = next(d for d in res.stress_drivers if d.id == "down_payment")
    assert down.value == "0% down"
    assert down.impact == "medium"


def test_estimate_insurance():
    assert estimate_insurance(50000) == 150
    assert estimate_insurance(-1) == 0
