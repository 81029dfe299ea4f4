# Break-even queries over a monthly projection. No I/O side effects.

from typing import Optional

import pandas as pd

CUM_CASH_COL = "CumulativeNetCash"
HELOC_COL = "HelocBalance"


def _first_index(mask: pd.Series) -> Optional[int]:
    if not mask.any():
        return None
    return int(mask.to_numpy().argmax())


def cash_flow_breakeven_month(df: pd.DataFrame) -> Optional[int]:
    """0-based index of the first month with cumulative net cash >= 0, else None."""
    return _first_index(df[CUM_CASH_COL].astype(float) >= 0)


def heloc_payoff_month(df: pd.DataFrame) -> Optional[int]:
    """0-based index of the first month the HELOC balance is retired, else None."""
    return _first_index(df[HELOC_COL].astype(float) <= 0)


def has_heloc(df: pd.DataFrame) -> bool:
    return not df.empty and float(df[HELOC_COL].iloc[0]) > 0


def breakeven_month(df: pd.DataFrame) -> Optional[int]:
    """
    HELOC-financed deals are not even until the line that funded entry is paid off;
    otherwise break-even is the first month cumulative cash turns non-negative.
    """
    if has_heloc(df):
        return heloc_payoff_month(df)
    return cash_flow_breakeven_month(df)


def format_timespan(months: int) -> str:
    years, rem = divmod(int(months), 12)
    if years and rem:
        return f"{years}y {rem}m"
    if years:
        return f"{years}y"
    return f"{rem}m"


def describe_breakeven(index: Optional[int], horizon_months: int) -> str:
    if index is None:
        return f">{horizon_months // 12}Y"
    if index == 0:
        return "Immediate"
    return format_timespan(index + 1)


def equity_curve(df: pd.DataFrame) -> pd.DataFrame:
    """Copy of `df` with Equity = property value less mortgage and HELOC balances."""
    out = df.copy()
    out["Equity"] = out["PropertyValue"] - out["MortgageBalance"] - out[HELOC_COL]
    return out
