from typing import Iterable, Union

import numpy as np
import pandas as pd

MONTHS_PER_YEAR = 12

FLOW_FIELDS = [
    "Revenue", "MgmtFee", "Maintenance", "FixedOpex", "PropertyTax", "HOA",
    "CleaningFeeIncome", "CleaningExpense", "HostFee", "Turns",
    "NOI_PrePlatform", "NOI_AfterPlatform",
    "MortgagePayment", "MortgageInterest", "MortgagePrincipal",
    "HelocInterest", "HelocPrincipalPaydown",
    "CashFlowAfterMortgage", "CashFlowAfterDebt", "NetCashToOwner",
]
AVERAGE_FIELDS = ["Occupancy", "ADR"]
STOCK_FIELDS = [
    "MortgageBalance", "HelocBalance", "CumulativeNetCash",
    "CumulativeCashFlowAfterDebt", "PropertyValue",
]

YEARLY_COLUMNS = ["Period", "Year", "Months"] + FLOW_FIELDS + AVERAGE_FIELDS + STOCK_FIELDS


def aggregate_to_yearly(monthly: Union[pd.DataFrame, Iterable[dict]]) -> pd.DataFrame:
    """
    Roll monthly rows into consecutive 12-month blocks, oldest first.

    Flow fields are summed, ADR/Occupancy averaged over the months present,
    balances and running totals taken from the block's last month. A horizon
    that is not a whole number of years yields a short final block.
    """
    df = monthly if isinstance(monthly, pd.DataFrame) else pd.DataFrame(list(monthly))
    n = len(df)
    if n == 0:
        return pd.DataFrame(columns=YEARLY_COLUMNS)

    starts = np.arange(0, n, MONTHS_PER_YEAR)
    ends = np.minimum(starts + MONTHS_PER_YEAR, n) - 1
    counts = ends - starts + 1

    # reduceat keeps NaN/inf visible instead of skipping them like groupby().sum()
    flows = np.add.reduceat(df[FLOW_FIELDS].to_numpy(dtype=float), starts, axis=0)
    averages = np.add.reduceat(df[AVERAGE_FIELDS].to_numpy(dtype=float), starts, axis=0) / counts[:, None]
    stocks = df[STOCK_FIELDS].to_numpy(dtype=float)[ends]

    yearly = pd.DataFrame(np.hstack([flows, averages, stocks]),
                          columns=FLOW_FIELDS + AVERAGE_FIELDS + STOCK_FIELDS)
    years = np.arange(1, len(starts) + 1)
    yearly.insert(0, "Period", [f"Year {y}" for y in years])
    yearly.insert(1, "Year", years)
    yearly.insert(2, "Months", counts)
    return yearly[YEARLY_COLUMNS]
