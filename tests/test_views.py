import pytest
from streamlit.testing.v1 import AppTest

from autolytiq.calculators import monthly_payment
from autolytiq.housing import calculate_rent_vs_buy
from autolytiq.income import calculate_gig_income


@pytest.fixture(autouse=True)
def isolated_state(tmp_path, monkeypatch):
    monkeypatch.setenv("AUTOLYTIQ_STATE_FILE", str(tmp_path / "state.json"))


def auto_app():
    from ui.auto import render_auto_view

    render_auto_view()


def housing_app():
    from ui.housing import render_housing_view

    render_housing_view()


def gig_app():
    from ui.gig import render_gig_view

    render_gig_view()


def pro_app():
    from ui.pro_report import render_pro_report_view

    render_pro_report_view()


def caption(at, prefix):
    return next(c.value for c in at.caption if c.value.startswith(prefix))


def test_auto_view_updates_payment_and_verdict():
    at = AppTest.from_function(auto_app)
    at.run()
    assert not at.exception
    expected = monthly_payment(30000, 8.49, 60)
    assert caption(at, "Monthly Payment") == f"Monthly Payment: ${expected:,.2f}"
    assert caption(at, "Verdict") == "Verdict: risky"

    next(w for w in at.number_input if w.label == "Monthly Gross Income").set_value(20000.0)
    at.run()
    assert caption(at, "Verdict") == "Verdict: comfortable"


def test_auto_view_restores_saved_inputs():
    at = AppTest.from_function(auto_app)
    at.run()
    next(w for w in at.number_input if w.label == "Vehicle Price").set_value(45000.0)
    at.run()

    again = AppTest.from_function(auto_app)
    again.run()
    price = next(w for w in again.number_input if w.label == "Vehicle Price")
    assert price.value == 45000.0


def test_auto_view_keeps_saved_zero_insurance():
    at = AppTest.from_function(auto_app)
    at.run()
    next(w for w in at.checkbox if w.label == "Estimate insurance from price").uncheck()
    at.run()
    next(w for w in at.number_input if w.label == "Monthly Insurance").set_value(0.0)
    at.run()

    again = AppTest.from_function(auto_app)
    again.run()
    insurance = next(w for w in again.number_input if w.label == "Monthly Insurance")
    assert insurance.value == 0.0


def test_housing_view_shows_piti():
    at = AppTest.from_function(housing_app)
    at.run()
    assert not at.exception
    expected = monthly_payment(320000, 6.75, 360)
    assert caption(at, "Monthly P&I") == f"Monthly P&I: ${expected:,.2f}"

    next(w for w in at.number_input if w.label == "Rate %").set_value(5.0)
    at.run()
    expected = monthly_payment(320000, 5.0, 360)
    assert caption(at, "Monthly P&I") == f"Monthly P&I: ${expected:,.2f}"


def test_housing_view_rent_vs_buy_after_rent_entered():
    at = AppTest.from_function(housing_app)
    at.run()
    assert not any(c.value.startswith("Rent vs Buy") for c in at.caption)

    next(w for w in at.number_input if w.label == "Current or Target Rent").set_value(2500.0)
    at.run()
    assert not at.exception
    _, year = calculate_rent_vs_buy(2500, 400000, 20, 6.75, 30, 1.2)
    if year is None:
        expected = "Rent vs Buy: renting stays ahead for all 30 years"
    else:
        expected = f"Rent vs Buy: buying pulls ahead in year {year}"
    assert caption(at, "Rent vs Buy") == expected


def test_gig_view_hourly_rate_only_when_tracked():
    at = AppTest.from_function(gig_app)
    at.run()
    assert not at.exception
    at.selectbox[0].set_value("uber")
    next(w for w in at.number_input if w.label == "Gross Annual Earnings").set_value(50000.0)
    at.run()
    res = calculate_gig_income(50000, "uber")
    assert caption(at, "True Net Income") == f"True Net Income: ${res.true_net_income:,.2f}"
    assert not any(c.value.startswith("Effective Hourly Rate") for c in at.caption)

    next(w for w in at.checkbox if w.label == "I track my hours").check()
    at.run()
    assert caption(at, "Effective Hourly Rate").startswith("Effective Hourly Rate: $")


def test_pro_report_view_scores_income():
    at = AppTest.from_function(pro_app)
    at.run()
    assert not at.exception
    next(w for w in at.number_input if w.label == "Annual Income").set_value(60000.0)
    at.run()
    assert caption(at, "Income Stability Score") == "Income Stability Score: 55"
    assert any(c.value.startswith("Auto Loans: Following the 12% rule") for c in at.caption)
