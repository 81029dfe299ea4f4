import numpy as np
import pandas as pd
import pytest

from rental_engine.engine.aggregation import AVERAGE_FIELDS, FLOW_FIELDS, STOCK_FIELDS, aggregate_to_yearly
from rental_engine.engine.debt import pmt
from rental_engine.engine.simulator import calculate_monthly_projections, simulate
from rental_engine.engine.types import PropertyConfig, Strategy

BASE = PropertyConfig()

# Scenario straight from the underwriting worksheet: 20% down, no HELOC, STR.
WORKSHEET = PropertyConfig(
    price=500_000, down_payment_percent=20, mortgage_rate=6.5, heloc_funding_percent=0,
    adr=300, occupancy_percent=70, mgmt_fee_percent=20, maintenance_percent=5,
    host_fee_percent=15.5, property_tax_monthly=400, fixed_opex_monthly=250, hoa_monthly=0,
    cleaning_fee_income=1200, cleaning_expense=1100, annual_appreciation_rate=3,
    annual_rent_growth_rate=3, annual_expense_inflation_rate=2,
)


@pytest.mark.parametrize("years", [1, 5, 20])
@pytest.mark.parametrize("strategy", list(Strategy))
def test_length_is_years_times_twelve(years, strategy):
    rows = calculate_monthly_projections(BASE, years=years, strategy=strategy)
    assert len(rows) == years * 12
    assert rows[0]["Period"] == "2026-01"
    assert rows[-1]["Period"] == f"{2026 + years - 1}-12"


def test_yearly_flows_sum_to_monthly_blocks():
    res = simulate(BASE, years=20)
    assert len(res.yearly) == 20
    for i, yr in res.yearly.iterrows():
        block = res.monthly.iloc[i * 12:(i + 1) * 12]
        for f in FLOW_FIELDS:
            assert yr[f] == pytest.approx(block[f].sum(), rel=1e-12, abs=1e-6), f
        for f in AVERAGE_FIELDS:
            assert yr[f] == pytest.approx(block[f].mean()), f
    for f in FLOW_FIELDS:
        assert res.yearly[f].sum() == pytest.approx(res.monthly[f].sum(), rel=1e-12, abs=1e-6)


def test_stock_fields_carried_from_last_month():
    res = simulate(BASE, years=10, strategy=Strategy.MTR)
    for i, yr in res.yearly.iterrows():
        last = res.monthly.iloc[i * 12 + 11]
        for f in STOCK_FIELDS:
            assert yr[f] == last[f], f
        assert yr["Period"] == f"Year {i + 1}"
    for f in STOCK_FIELDS:
        assert res.yearly.iloc[-1][f] == res.monthly.iloc[-1][f]


def test_short_final_block():
    monthly = simulate(BASE, years=3).monthly.iloc[:30]
    yearly = aggregate_to_yearly(monthly)
    assert list(yearly["Months"]) == [12, 12, 6]
    tail = monthly.iloc[24:]
    assert yearly.iloc[2]["Revenue"] == pytest.approx(tail["Revenue"].sum())
    assert yearly.iloc[2]["ADR"] == pytest.approx(tail["ADR"].mean())
    assert yearly.iloc[2]["MortgageBalance"] == tail.iloc[-1]["MortgageBalance"]


def test_aggregation_is_idempotent_and_accepts_rows():
    rows = calculate_monthly_projections(BASE, years=2)
    a = aggregate_to_yearly(rows)
    b = aggregate_to_yearly(pd.DataFrame(rows))
    pd.testing.assert_frame_equal(a, b)
    pd.testing.assert_frame_equal(a, aggregate_to_yearly(rows))
    assert aggregate_to_yearly([]).empty


def test_mortgage_balance_monotone_and_retired_at_360():
    df = simulate(BASE, years=35).monthly
    bal = df["MortgageBalance"].to_numpy()
    assert np.all(np.diff(bal) <= 1e-9)
    assert bal[359] == pytest.approx(0.0, abs=0.01)
    after = df.iloc[361:]
    assert np.allclose(after["MortgagePrincipal"], 0.0)
    assert np.allclose(after["MortgageInterest"], 0.0)
    # payment is fixed at start and never recomputed
    assert (df["MortgagePayment"] == pmt(6.5, 360, 400_000.0)).all()


def test_appreciation_round_trip():
    for strategy in Strategy:
        df = simulate(BASE.with_updates(adr=50.0, ltr_monthly_rent=10.0), years=2, strategy=strategy).monthly
        assert df.iloc[0]["PropertyValue"] == pytest.approx(500_000.0)
        assert df.iloc[12]["PropertyValue"] == pytest.approx(500_000.0 * (1 + 3 / 100 / 12) ** 12)


def test_strategy_isolation_ltr_revenue():
    cfg = BASE.with_updates(ltr_monthly_rent=3000.0, annual_rent_growth_rate=0.0)
    df = simulate(cfg, years=2, strategy=Strategy.LTR).monthly
    assert (df["Revenue"] == 3000.0).all()
    grown = simulate(BASE, years=2, strategy=Strategy.LTR).monthly
    assert (grown["Revenue"].iloc[:12] == 3000.0).all()
    assert grown["Revenue"].iloc[12] == pytest.approx(3090.0)


def test_debt_state_independent_of_strategy():
    frames = [simulate(BASE, years=3, strategy=s).monthly for s in Strategy]
    for f in ("MortgagePayment", "MortgageInterest", "MortgageBalance", "PropertyValue"):
        assert np.allclose(frames[0][f], frames[1][f])
        assert np.allclose(frames[0][f], frames[2][f])


def test_worksheet_scenario():
    df = simulate(WORKSHEET, years=1, strategy=Strategy.STR).monthly
    assert len(df) == 12
    assert df.iloc[0]["Occupancy"] == pytest.approx(66.5)
    assert df.iloc[0]["ADR"] == pytest.approx(300.0)
    assert df.iloc[11]["MortgageBalance"] < 400_000.0


def test_net_cash_identity_every_month():
    df = simulate(BASE, years=5).monthly
    surplus = df["CashFlowAfterMortgage"] >= 0
    assert np.allclose(df.loc[surplus, "NetCashToOwner"] + df.loc[surplus, "HelocPrincipalPaydown"],
                       df.loc[surplus, "CashFlowAfterMortgage"])
    assert (df.loc[~surplus, "NetCashToOwner"] == 0.0).all()
    assert np.allclose(df["CumulativeNetCash"], df["NetCashToOwner"].cumsum())
    assert np.allclose(df["CumulativeCashFlowAfterDebt"], df["CashFlowAfterDebt"].cumsum())
    # accounting profit exceeds the owner's cash by the principal paid down
    profit_gap = df["CashFlowAfterDebt"] - df["CashFlowAfterMortgage"]
    assert np.allclose(profit_gap, df["MortgagePrincipal"])
