from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Dict

import pandas as pd


class Strategy(str, Enum):
    STR = "STR"
    MTR = "MTR"
    LTR = "LTR"


# engine-file (camelCase) key -> PropertyConfig attribute
CONFIG_KEYS = {
    "price": "price",
    "downPaymentPercent": "down_payment_percent",
    "loanCosts": "loan_costs",
    "upgradeCost": "upgrade_cost",
    "furnishingsCost": "furnishings_cost",
    "mortgageRate": "mortgage_rate",
    "helocRate": "heloc_rate",
    "helocFundingPercent": "heloc_funding_percent",
    "helocPaydownPercent": "heloc_paydown_percent",
    "adr": "adr",
    "occupancyPercent": "occupancy_percent",
    "mtrMonthlyRent": "mtr_monthly_rent",
    "ltrMonthlyRent": "ltr_monthly_rent",
    "expectedMonthlyRevenue": "expected_monthly_revenue",
    "mgmtFeePercent": "mgmt_fee_percent",
    "maintenancePercent": "maintenance_percent",
    "hostFeePercent": "host_fee_percent",
    "cleaningFeeIncome": "cleaning_fee_income",
    "cleaningExpense": "cleaning_expense",
    "propertyTaxMonthly": "property_tax_monthly",
    "annualPropertyTaxRate": "annual_property_tax_rate",
    "fixedOpexMonthly": "fixed_opex_monthly",
    "hoaMonthly": "hoa_monthly",
    "annualAppreciationRate": "annual_appreciation_rate",
    "annualRentGrowthRate": "annual_rent_growth_rate",
    "annualExpenseInflationRate": "annual_expense_inflation_rate",
}


@dataclass(frozen=True)
class PropertyConfig:
    """Inputs for one projection run. Percent fields are whole percents (6.5 == 6.5%)."""

    # Acquisition
    price: float = 500_000.0
    down_payment_percent: float = 20.0
    loan_costs: float = 7_500.0
    upgrade_cost: float = 0.0
    furnishings_cost: float = 0.0

    # Debt
    mortgage_rate: float = 6.5
    heloc_rate: float = 7.5
    heloc_funding_percent: float = 100.0
    heloc_paydown_percent: float = 100.0

    # Revenue
    adr: float = 300.0
    occupancy_percent: float = 70.0
    mtr_monthly_rent: float = 4_500.0
    ltr_monthly_rent: float = 3_000.0
    expected_monthly_revenue: float = 6_500.0

    # Operating costs
    mgmt_fee_percent: float = 20.0
    maintenance_percent: float = 5.0
    host_fee_percent: float = 15.5
    cleaning_fee_income: float = 1_200.0
    cleaning_expense: float = 1_100.0
    property_tax_monthly: float = 400.0
    annual_property_tax_rate: float = 1.2
    fixed_opex_monthly: float = 250.0
    hoa_monthly: float = 0.0

    # Growth
    annual_appreciation_rate: float = 3.0
    annual_rent_growth_rate: float = 3.0
    annual_expense_inflation_rate: float = 2.0

    @property
    def down_payment(self) -> float:
        return self.price * self.down_payment_percent / 100

    @property
    def loan_amount(self) -> float:
        return self.price - self.down_payment

    @property
    def total_upfront_capital(self) -> float:
        return self.down_payment + self.upgrade_cost + self.loan_costs + self.furnishings_cost

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PropertyConfig":
        """Build from engine-file keys (camelCase) or attribute names; unknown keys are ignored."""
        names = {f.name for f in fields(cls)}
        kwargs = {}
        for k, v in data.items():
            attr = CONFIG_KEYS.get(k, k)
            if attr in names:
                kwargs[attr] = float(v)
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, float]:
        return {k: getattr(self, attr) for k, attr in CONFIG_KEYS.items()}

    def with_updates(self, **changes: float) -> "PropertyConfig":
        return replace(self, **changes)


@dataclass
class ProjectionState:
    """Balances carried from one simulated month to the next."""
    mortgage_balance: float
    heloc_balance: float
    cumulative_net_cash: float = 0.0
    cumulative_cash_flow_after_debt: float = 0.0


@dataclass
class SimulationResult:
    monthly: pd.DataFrame
    yearly: pd.DataFrame
