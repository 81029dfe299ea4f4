from dataclasses import replace

from rental_engine.engine.metrics import DealKPIs, InvestmentTargets, evaluate_targets

GOOD = DealKPIs(
    year=1, annual_noi=40_000.0, annual_revenue=80_000.0, annual_profit=12_000.0,
    annual_surplus=9_000.0, mortgage_debt_service=30_000.0, heloc_interest=1_000.0,
    cash_invested=100_000.0, heloc_funding=0.0,
    cap_rate=8.0, gross_yield=16.0, cash_on_cash=12.0, dscr=1.33, total_dscr=1.29,
)


def test_default_targets():
    t = InvestmentTargets()
    assert (t.min_cap_rate, t.min_coc, t.min_dscr) == (6.0, 10.0, 1.25)


def test_deal_meeting_every_target():
    checks = evaluate_targets(GOOD)
    assert checks == {"cap_rate": True, "cash_on_cash": True, "dscr": True, "meets_all": True}


def test_dscr_judged_on_all_debt():
    k = replace(GOOD, dscr=1.5, total_dscr=1.2)
    checks = evaluate_targets(k)
    assert checks["dscr"] is False
    assert checks["meets_all"] is False


def test_undefined_ratio_never_passes():
    k = replace(GOOD, cash_on_cash=None)
    assert evaluate_targets(k)["cash_on_cash"] is False
    assert evaluate_targets(k, InvestmentTargets(min_coc=-100.0))["cash_on_cash"] is False


def test_targets_from_engine_keys():
    t = InvestmentTargets.from_dict({"minCapRate": 7.5, "minDSCR": 1.4})
    assert t.min_cap_rate == 7.5
    assert t.min_coc == 10.0
    assert t.min_dscr == 1.4
    assert evaluate_targets(GOOD, t)["cap_rate"] is True
    assert evaluate_targets(GOOD, t)["dscr"] is False
