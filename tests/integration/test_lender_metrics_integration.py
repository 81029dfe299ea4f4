import pytest

from rental_engine.engine.metrics import capital_structure, derive_kpis, evaluate_targets
from rental_engine.engine.simulator import simulate
from rental_engine.engine.types import PropertyConfig, Strategy

BASE = PropertyConfig()


def test_year_one_kpis_match_yearly_row():
    res = simulate(BASE, years=20)
    y1 = res.yearly.iloc[0]
    k = derive_kpis(res.yearly, BASE)

    assert k.annual_noi == pytest.approx(res.monthly["NOI_AfterPlatform"].iloc[:12].sum())
    assert k.cap_rate == pytest.approx(y1["NOI_AfterPlatform"] / BASE.price * 100)
    assert k.gross_yield == pytest.approx(y1["Revenue"] / BASE.price * 100)
    assert k.mortgage_debt_service == pytest.approx(12 * res.monthly["MortgagePayment"].iloc[0])
    assert k.dscr == pytest.approx(y1["NOI_AfterPlatform"] / y1["MortgagePayment"])
    # HELOC interest makes the all-debt view stricter
    assert k.total_dscr < k.dscr


def test_fully_heloc_funded_deal_has_no_cash_on_cash():
    res = simulate(BASE, years=1)
    k = derive_kpis(res.yearly, BASE)
    assert capital_structure(BASE).cash_portion == pytest.approx(0.0)
    assert k.cash_on_cash is None
    assert evaluate_targets(k)["cash_on_cash"] is False


def test_cash_funded_deal_cash_on_cash_uses_accounting_profit():
    cfg = BASE.with_updates(heloc_funding_percent=0.0, ltr_monthly_rent=5_000.0)
    res = simulate(cfg, years=1, strategy=Strategy.LTR)
    k = derive_kpis(res.yearly, cfg)
    assert k.cash_invested == pytest.approx(107_500.0)
    assert k.cash_on_cash == pytest.approx(res.yearly.iloc[0]["CashFlowAfterDebt"] / 107_500.0 * 100)
    assert k.total_dscr == pytest.approx(k.dscr)


def test_later_year_kpis():
    res = simulate(BASE, years=5)
    k1 = derive_kpis(res.yearly, BASE, year=1)
    k5 = derive_kpis(res.yearly, BASE, year=5)
    assert k5.year == 5
    assert k5.annual_revenue > k1.annual_revenue
