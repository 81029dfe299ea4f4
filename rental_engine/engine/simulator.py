import logging
from typing import List

import pandas as pd

from .aggregation import aggregate_to_yearly
from .debt import MORTGAGE_TERM_MONTHS, amortize_one_month, pmt
from .expenses import calculate_expenses, net_operating_income
from .heloc import opening_heloc_balance, settle_heloc_month
from .revenue import calculate_revenue, growth_factor
from .types import ProjectionState, PropertyConfig, SimulationResult, Strategy

logger = logging.getLogger(__name__)

DEFAULT_YEARS = 20
DEFAULT_START_YEAR = 2026

MONTHLY_COLUMNS = [
    "Period", "Year", "Month", "Revenue", "MgmtFee", "Maintenance", "FixedOpex",
    "PropertyTax", "HOA", "CleaningFeeIncome", "CleaningExpense", "HostFee",
    "Occupancy", "ADR", "Turns", "NOI_PrePlatform", "NOI_AfterPlatform",
    "MortgagePayment", "MortgageInterest", "MortgagePrincipal", "MortgageBalance",
    "HelocInterest", "HelocPrincipalPaydown", "HelocBalance",
    "CashFlowAfterMortgage", "CashFlowAfterDebt", "NetCashToOwner",
    "CumulativeNetCash", "CumulativeCashFlowAfterDebt", "PropertyValue",
]


def calculate_monthly_projections(
    config: PropertyConfig,
    years: int = DEFAULT_YEARS,
    strategy: Strategy | str = Strategy.STR,
    start_year: int = DEFAULT_START_YEAR,
) -> List[dict]:
    """
    Project `years * 12` months of operations and debt service for one strategy.

    The first simulated month is January of `start_year`. Amenity effects must
    already be folded into `config` (see amenities.build_effective_config).
    Inputs are not validated: degenerate values flow through as extreme numbers.
    """
    strategy = Strategy(strategy)
    total_months = years * 12
    logger.debug("Projecting %d months (%s, price=%.2f)", total_months, strategy.value, config.price)

    # === Fixed at simulation start ===
    mortgage_payment = pmt(config.mortgage_rate, MORTGAGE_TERM_MONTHS, config.loan_amount)
    monthly_appreciation = 1 + config.annual_appreciation_rate / 100 / 12

    # === State ===
    state = ProjectionState(
        mortgage_balance=config.loan_amount,
        heloc_balance=opening_heloc_balance(config),
    )

    rows = []
    for m in range(total_months):
        year_index, month_index = divmod(m, 12)
        rent_growth = growth_factor(config.annual_rent_growth_rate, year_index)
        expense_growth = growth_factor(config.annual_expense_inflation_rate, year_index)

        model = calculate_revenue(config, strategy, month_index, rent_growth, expense_growth)
        exp = calculate_expenses(config, model, expense_growth)
        noi_pre, noi_after = net_operating_income(model, exp)

        # Mortgage
        interest, principal, state.mortgage_balance = amortize_one_month(
            state.mortgage_balance, mortgage_payment, config.mortgage_rate
        )

        # HELOC + owner distribution
        heloc = settle_heloc_month(
            state.heloc_balance, noi_after, mortgage_payment,
            config.heloc_rate, config.heloc_paydown_percent,
        )
        state.heloc_balance = heloc.balance

        # Accounting profit: principal is equity build-up, not an expense
        profit = noi_after - interest - heloc.interest
        state.cumulative_net_cash += heloc.net_cash_to_owner
        state.cumulative_cash_flow_after_debt += profit

        rows.append({
            "Period": f"{start_year + year_index}-{month_index + 1:02d}",
            "Year": year_index + 1,
            "Month": month_index + 1,
            "Revenue": model.revenue,
            "MgmtFee": exp["mgmt"],
            "Maintenance": exp["maintenance"],
            "FixedOpex": exp["opex"],
            "PropertyTax": exp["tax"],
            "HOA": exp["hoa"],
            "CleaningFeeIncome": model.cleaning_income,
            "CleaningExpense": model.cleaning_expense,
            "HostFee": exp["host_fee"],
            "Occupancy": model.occupancy * 100,
            "ADR": model.rate,
            "Turns": model.turns,
            "NOI_PrePlatform": noi_pre,
            "NOI_AfterPlatform": noi_after,
            "MortgagePayment": mortgage_payment,
            "MortgageInterest": interest,
            "MortgagePrincipal": principal,
            "MortgageBalance": state.mortgage_balance,
            "HelocInterest": heloc.interest,
            "HelocPrincipalPaydown": heloc.principal_paydown,
            "HelocBalance": state.heloc_balance,
            "CashFlowAfterMortgage": heloc.cash_flow_after_mortgage,
            "CashFlowAfterDebt": profit,
            "NetCashToOwner": heloc.net_cash_to_owner,
            "CumulativeNetCash": state.cumulative_net_cash,
            "CumulativeCashFlowAfterDebt": state.cumulative_cash_flow_after_debt,
            "PropertyValue": config.price * monthly_appreciation ** m,
        })

    logger.debug("Projection done: end mortgage=%.2f heloc=%.2f",
                 state.mortgage_balance, state.heloc_balance)
    return rows


def simulate(
    config: PropertyConfig,
    years: int = DEFAULT_YEARS,
    strategy: Strategy | str = Strategy.STR,
    start_year: int = DEFAULT_START_YEAR,
) -> SimulationResult:
    rows = calculate_monthly_projections(config, years, strategy, start_year)
    monthly_df = pd.DataFrame(rows, columns=MONTHLY_COLUMNS)
    return SimulationResult(monthly=monthly_df, yearly=aggregate_to_yearly(monthly_df))
