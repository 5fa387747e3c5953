import math

import pytest

from autolytiq.calculators import (
    amortization_schedule,
    calculate_loan_estimates,
    calculate_payment_approvals,
    dti,
    max_vehicle_price,
    monthly_payment,
    nz,
    principal_from_payment,
)


@pytest.mark.parametrize(
    "principal,rate,term",
    [
        (30000, 7.99, 60),
        (400000, 6.5, 360),
        (1500, 24.0, 12),
        (25000, 0.0, 48),
        (500000, 0.0, 480),
        (500000, 0.01, 480),
        (500000, 30.0, 480),
    ],
)
def test_amortization_inverse_roundtrip(principal, rate, term):
    pmt = monthly_payment(principal, rate, term)
    back = principal_from_payment(pmt, rate, term)
    assert back == pytest.approx(principal, abs=1e-6)


def test_zero_rate_is_straight_line():
    assert monthly_payment(12000, 0, 48) == 12000 / 48
    assert principal_from_payment(250, 0, 48) == 250 * 48


def test_known_payments():
    assert monthly_payment(30000, 7.99, 60) == pytest.approx(608.15, abs=0.05)
    assert monthly_payment(200000, 6.0, 360) == pytest.approx(1199.10, abs=0.01)


def test_degenerate_inputs_return_zero():
    assert monthly_payment(30000, 5.0, 0) == 0.0
    assert monthly_payment(0, 5.0, 60) == 0.0
    assert monthly_payment(None, None, None) == 0.0
    assert principal_from_payment(0, 5.0, 60) == 0.0
    assert principal_from_payment(500, 5.0, 0) == 0.0


@pytest.mark.parametrize("rate", [-1200.0, -5000.0, -1199.0])
def test_extreme_negative_rates_stay_finite(rate):
    pmt = monthly_payment(30000, rate, 480)
    principal = principal_from_payment(600, rate, 480)
    assert math.isfinite(pmt) and pmt >= 0
    assert math.isfinite(principal) and principal >= 0


def test_nz_guards_non_finite():
    assert nz(None) == 0.0
    assert nz(float("nan"), 1.0) == 1.0
    assert nz(float("inf")) == 0.0
    assert nz("abc") == 0.0
    assert nz("12.5") == 12.5


def test_dti_zero_income():
    assert dti(500, 900, 0) == (0.0, 0.0)
    fe, be = dti(500, 1000, 4000)
    assert fe == pytest.approx(0.125)
    assert be == pytest.approx(0.25)


def test_amortization_schedule_closes_at_zero():
    sched = amortization_schedule(30000, 7.99, 60)
    assert len(sched) == 60
    assert sched["Balance"].iloc[-1] == 0.0
    assert sched["Principal"].sum() == pytest.approx(30000)
    pmt = monthly_payment(30000, 7.99, 60)
    assert sched["CumulativeInterest"].iloc[-1] == pytest.approx(pmt * 60 - 30000, abs=0.01)
    assert (sched["Balance"].diff().dropna() < 0).all()


def test_amortization_schedule_empty_for_no_loan():
    sched = amortization_schedule(0, 5.0, 60)
    assert sched.empty
    assert "Balance" in sched.columns


def test_payment_approvals():
    approvals = {a.pti_type: a for a in calculate_payment_approvals(5000)}
    assert approvals["Conservative"].max_payment == pytest.approx(400)
    assert approvals["Standard"].max_payment == pytest.approx(600)
    assert approvals["Aggressive"].max_payment == pytest.approx(750)
    assert all(a.max_payment == 0 for a in calculate_payment_approvals(-100))


def test_loan_estimates_better_credit_buys_more():
    estimates = calculate_loan_estimates(500, 60)
    assert [e.tier_id for e in estimates] == ["excellent", "good", "fair", "poor"]
    amounts = [e.loan_amount for e in estimates]
    assert amounts == sorted(amounts, reverse=True)
    for e in estimates:
        assert e.total_cost == pytest.approx(30000)
        assert e.total_interest == pytest.approx(30000 - e.loan_amount)


def test_max_vehicle_price_uses_auto_risky_cutoff():
    # 12% of $5,000 = $600/month for 60 months at 0% plus the down payment.
    assert max_vehicle_price(5000, 0, 60, down_payment=1000) == pytest.approx(37000)
    assert max_vehicle_price(5000, 0, 60, pti_pct=8) == pytest.approx(24000)
    assert max_vehicle_price(0, 7.0, 60) == 0.0
    assert not math.isnan(max_vehicle_price(float("nan"), 7.0, 60))
