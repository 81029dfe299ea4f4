# Pure, side-effect-free deal metrics over one projected year.

from dataclasses import dataclass
from typing import Dict, Optional

import pandas as pd

from .types import PropertyConfig

MIN_CASH_INVESTED = 1000.0


@dataclass(frozen=True)
class CapitalStructure:
    down_payment: float
    loan_amount: float
    total_upfront: float
    heloc_portion: float
    cash_portion: float


@dataclass(frozen=True)
class DealKPIs:
    year: int
    annual_noi: float
    annual_revenue: float
    annual_profit: float  # accounting profit (principal excluded)
    annual_surplus: float  # net cash actually distributed
    mortgage_debt_service: float
    heloc_interest: float
    cash_invested: float
    heloc_funding: float
    cap_rate: Optional[float]
    gross_yield: Optional[float]
    cash_on_cash: Optional[float]
    dscr: Optional[float]
    total_dscr: Optional[float]


@dataclass(frozen=True)
class InvestmentTargets:
    min_cap_rate: float = 6.0
    min_coc: float = 10.0
    min_dscr: float = 1.25

    @classmethod
    def from_dict(cls, data: Dict[str, float]) -> "InvestmentTargets":
        return cls(
            min_cap_rate=float(data.get("minCapRate", cls.min_cap_rate)),
            min_coc=float(data.get("minCoC", cls.min_coc)),
            min_dscr=float(data.get("minDSCR", cls.min_dscr)),
        )


def capital_structure(config: PropertyConfig) -> CapitalStructure:
    total = config.down_payment + config.loan_costs + config.furnishings_cost + config.upgrade_cost
    heloc = total * config.heloc_funding_percent / 100
    return CapitalStructure(
        down_payment=config.down_payment,
        loan_amount=config.loan_amount,
        total_upfront=total,
        heloc_portion=heloc,
        cash_portion=total - heloc,
    )


def cap_rate(annual_noi: float, price: float) -> Optional[float]:
    """Cap rate (%) = annual NOI / price * 100. None if price<=0."""
    if price <= 0:
        return None
    return annual_noi / price * 100


def gross_yield(annual_revenue: float, price: float) -> Optional[float]:
    """Gross yield (%) = annual revenue / price * 100. None if price<=0."""
    if price <= 0:
        return None
    return annual_revenue / price * 100


def cash_on_cash(annual_cash_flow: float, cash_portion: float) -> Optional[float]:
    """
    Cash-on-cash (%) = annual cash flow / cash invested * 100.
    None below $1000 invested, where a leveraged return stops being a meaningful ratio.
    """
    if cash_portion < MIN_CASH_INVESTED:
        return None
    return annual_cash_flow / cash_portion * 100


def dscr(noi: float, debt_service: float) -> Optional[float]:
    """Debt Service Coverage Ratio = NOI / DS. None if DS<=0."""
    if debt_service <= 0:
        return None
    return noi / debt_service


def total_dscr(noi: float, mortgage_debt_service: float, heloc_interest: float) -> Optional[float]:
    """All-debt coverage: NOI / (mortgage DS + HELOC interest)."""
    return dscr(noi, mortgage_debt_service + heloc_interest)


def derive_kpis(yearly: pd.DataFrame, config: PropertyConfig, year: int = 1) -> DealKPIs:
    """KPIs for `year` (1-based) of an aggregated projection.

    A year outside the projection yields NaN amounts and None ratios.
    """
    cap = capital_structure(config)
    if not 1 <= year <= len(yearly):
        nan = float("nan")
        return DealKPIs(
            year=year,
            annual_noi=nan,
            annual_revenue=nan,
            annual_profit=nan,
            annual_surplus=nan,
            mortgage_debt_service=nan,
            heloc_interest=nan,
            cash_invested=cap.cash_portion,
            heloc_funding=cap.heloc_portion,
            cap_rate=None,
            gross_yield=None,
            cash_on_cash=None,
            dscr=None,
            total_dscr=None,
        )
    row = yearly.iloc[year - 1]

    noi = float(row["NOI_AfterPlatform"])
    revenue = float(row["Revenue"])
    profit = float(row["CashFlowAfterDebt"])
    ds = float(row["MortgagePayment"])
    heloc_int = float(row["HelocInterest"])

    return DealKPIs(
        year=year,
        annual_noi=noi,
        annual_revenue=revenue,
        annual_profit=profit,
        annual_surplus=float(row["NetCashToOwner"]),
        mortgage_debt_service=ds,
        heloc_interest=heloc_int,
        cash_invested=cap.cash_portion,
        heloc_funding=cap.heloc_portion,
        cap_rate=cap_rate(noi, config.price),
        gross_yield=gross_yield(revenue, config.price),
        cash_on_cash=cash_on_cash(profit, cap.cash_portion),
        dscr=dscr(noi, ds),
        total_dscr=total_dscr(noi, ds, heloc_int),
    )


def _meets(value: Optional[float], minimum: float) -> bool:
    return value is not None and value >= minimum


def evaluate_targets(kpis: DealKPIs, targets: InvestmentTargets = InvestmentTargets()) -> Dict[str, bool]:
    """Pass/fail per target; coverage is judged on total DSCR (HELOC interest included)."""
    checks = {
        "cap_rate": _meets(kpis.cap_rate, targets.min_cap_rate),
        "cash_on_cash": _meets(kpis.cash_on_cash, targets.min_coc),
        "dscr": _meets(kpis.total_dscr, targets.min_dscr),
    }
    checks["meets_all"] = all(checks.values())
    return checks
