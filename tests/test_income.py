import pytest

from autolytiq.income import (
    calculate_gig_income,
    calculate_income_by_type,
    calculate_inflation_impact,
    calculate_reliable_income,
    calculate_total_annual,
    estimate_federal_tax,
    from_annual,
    streams_frame,
    suggested_stability,
    to_annual,
)
from autolytiq.models import IncomeStream
from autolytiq.presets import DEFAULT_CONFIG, TaxBracket


def test_rideshare_fifty_thousand():
    res = calculate_gig_income(50000, "uber")
    assert res.expense_rate == 0.30
    assert res.expenses == pytest.approx(15000)
    assert res.net_before_tax == pytest.approx(35000)
    assert res.self_employment_tax == pytest.approx(35000 * 0.9235 * 0.153, abs=0.01)
    assert res.estimated_income_tax == pytest.approx(1919.28, abs=0.01)
    assert res.true_net_income == pytest.approx(28135.38, abs=0.01)
    assert 20000 < res.true_net_income < 35000
    assert res.quarterly_tax_set_aside == pytest.approx((res.self_employment_tax + res.estimated_income_tax) / 4, abs=0.01)
    assert res.lender_visible_income == pytest.approx(res.true_net_income * 0.75, abs=0.01)


@pytest.mark.parametrize("gross", [0, 1234.56, 18000, 50000, 87500.5, 250000, 1200000])
@pytest.mark.parametrize("platform", ["uber", "doordash", "upwork", "other"])
def test_take_home_is_gross_less_costs(gross, platform):
    res = calculate_gig_income(gross, platform)
    expected = res.gross_annual - res.expenses - res.self_employment_tax - res.estimated_income_tax
    assert res.true_net_income == pytest.approx(round(expected, 2), abs=0.005)


def test_hourly_rate_absent_vs_zero():
    assert calculate_gig_income(40000, "upwork").effective_hourly_rate is None
    assert calculate_gig_income(40000, "upwork", hours_per_week=0).effective_hourly_rate == 0.0
    res = calculate_gig_income(40000, "upwork", hours_per_week=40)
    assert res.effective_hourly_rate == pytest.approx(res.true_net_income / (40 * 52), abs=0.01)


def test_unknown_platform_falls_back_to_default():
    res = calculate_gig_income(30000, "spaceship-delivery")
    assert res.platform_id == "other"
    assert res.expense_rate == pytest.approx(0.20)


def test_custom_expense_rate_overrides_platform():
    res = calculate_gig_income(30000, "uber", custom_expense_rate=0.05)
    assert res.expense_rate == 0.05
    assert res.expenses == pytest.approx(1500)


def test_tax_constants_come_from_config():
    cfg = DEFAULT_CONFIG.model_copy(update={"tax": DEFAULT_CONFIG.tax.model_copy(update={"se_tax_rate": 0.0})})
    res = calculate_gig_income(50000, "uber", config=cfg)
    assert res.self_employment_tax == 0


def test_zero_gross():
    res = calculate_gig_income(0)
    assert res.true_net_income == 0
    assert res.quarterly_tax_set_aside == 0


def test_progressive_tax():
    brackets = DEFAULT_CONFIG.tax.brackets
    assert estimate_federal_tax(0, brackets) == 0
    assert estimate_federal_tax(-500, brackets) == 0
    assert estimate_federal_tax(10000, brackets) == pytest.approx(1000)
    assert estimate_federal_tax(20000, brackets) == pytest.approx(1160 + 8400 * 0.12)
    flat = [TaxBracket(limit=None, rate=0.2)]
    assert estimate_federal_tax(1000, flat) == pytest.approx(200)


def test_frequency_conversion():
    assert to_annual(100, "weekly") == 5200
    assert to_annual(1000, "biweekly") == 26000
    assert to_annual(5000, "annually") == 5000
    assert from_annual(52000, "weekly") == 1000
    assert from_annual(12000, "monthly") == 1000


def test_income_stream_totals():
    streams = [
        IncomeStream(id="1", name="Job", amount=4000, frequency="monthly", type="w2", stability_rating=5),
        IncomeStream(id="2", name="Deliveries", amount=200, frequency="weekly", type="gig", stability_rating=2),
        IncomeStream(id="3", name="Rides", amount=100, frequency="weekly", type="gig", stability_rating=2),
    ]
    assert calculate_total_annual(streams) == pytest.approx(48000 + 10400 + 5200)
    assert calculate_reliable_income(streams) == pytest.approx(48000 + 15600 * 0.65)
    assert calculate_income_by_type(streams) == {"w2": pytest.approx(48000), "gig": pytest.approx(15600)}
    assert list(streams_frame(streams)["annual"]) == [48000, 10400, 5200]


def test_empty_streams():
    assert calculate_total_annual([]) == 0.0
    assert calculate_reliable_income([]) == 0.0
    assert calculate_income_by_type([]) == {}
    assert streams_frame([]).empty


def test_suggested_stability():
    assert suggested_stability("w2") == 5
    assert suggested_stability("gig") == 2
    assert suggested_stability("unknown") == 3


def test_inflation_impact():
    proj = calculate_inflation_impact(100000)
    assert [p.year for p in proj] == [1, 3, 5, 10]
    first = proj[0]
    assert first.purchasing_power == 97087
    assert first.percent_loss == pytest.approx(2.9)
    assert first.raise_needed == 3000
    powers = [p.purchasing_power for p in proj]
    assert powers == sorted(powers, reverse=True)
