from dataclasses import dataclass

from .seasonality import seasonal_factors
from .types import PropertyConfig, Strategy

DAYS_IN_MONTH = 30.42
AVG_STAY_NIGHTS = 3.8
STR_OCCUPANCY_CEILING = 0.98

MTR_OCCUPANCY = 0.90
MTR_MGMT_CAP = 15.0
MTR_PLATFORM_FEE = 3.0
MTR_TURNS = 0.33
MTR_CLEANING_BASE = 200.0

LTR_OCCUPANCY = 0.95
LTR_MGMT_CAP = 10.0
LTR_TURNS = 0.08
LTR_OPEX_BASE = 100.0


@dataclass(frozen=True)
class RevenueModel:
    """Strategy-specific intermediate values fed into the shared expense pipeline."""
    revenue: float
    occupancy: float  # fraction actually applied
    rate: float
    turns: float
    cleaning_income: float
    cleaning_expense: float
    mgmt_pct: float
    host_fee_pct: float
    opex: float


def base_occupancy(config: PropertyConfig) -> float:
    occ = config.occupancy_percent
    return occ / 100 if occ > 1 else occ


def short_term_model(config: PropertyConfig, month_index: int,
                     rent_growth: float, expense_growth: float) -> RevenueModel:
    adr_mult, occ_mult = seasonal_factors(month_index)
    occupancy = min(STR_OCCUPANCY_CEILING, base_occupancy(config) * occ_mult)
    rate = config.adr * rent_growth * adr_mult
    nights = DAYS_IN_MONTH * occupancy
    turns = nights / AVG_STAY_NIGHTS
    return RevenueModel(
        revenue=rate * nights,
        occupancy=occupancy,
        rate=rate,
        turns=turns,
        cleaning_income=config.cleaning_fee_income * expense_growth * turns,
        cleaning_expense=config.cleaning_expense * expense_growth * turns,
        mgmt_pct=config.mgmt_fee_percent,
        host_fee_pct=config.host_fee_percent,
        opex=config.fixed_opex_monthly * expense_growth,
    )


def medium_term_model(config: PropertyConfig, month_index: int,
                      rent_growth: float, expense_growth: float) -> RevenueModel:
    revenue = config.mtr_monthly_rent * rent_growth
    return RevenueModel(
        revenue=revenue,
        occupancy=MTR_OCCUPANCY,
        # display only, never feeds an expense line
        rate=revenue / (DAYS_IN_MONTH * MTR_OCCUPANCY),
        turns=MTR_TURNS,
        cleaning_income=0.0,
        cleaning_expense=MTR_CLEANING_BASE * expense_growth * MTR_TURNS,
        mgmt_pct=min(MTR_MGMT_CAP, config.mgmt_fee_percent),
        host_fee_pct=MTR_PLATFORM_FEE,
        opex=config.fixed_opex_monthly * expense_growth,
    )


def long_term_model(config: PropertyConfig, month_index: int,
                    rent_growth: float, expense_growth: float) -> RevenueModel:
    revenue = config.ltr_monthly_rent * rent_growth
    return RevenueModel(
        revenue=revenue,
        occupancy=LTR_OCCUPANCY,
        rate=revenue / (DAYS_IN_MONTH * LTR_OCCUPANCY),
        turns=LTR_TURNS,
        cleaning_income=0.0,
        cleaning_expense=0.0,
        mgmt_pct=min(LTR_MGMT_CAP, config.mgmt_fee_percent),
        host_fee_pct=0.0,
        opex=LTR_OPEX_BASE * expense_growth,
    )


REVENUE_MODELS = {
    Strategy.STR: short_term_model,
    Strategy.MTR: medium_term_model,
    Strategy.LTR: long_term_model,
}


def growth_factor(annual_rate_pct: float, year_index: int) -> float:
    """Annual compounding: every month of a simulated year shares one factor."""
    return (1 + annual_rate_pct / 100) ** year_index


def calculate_revenue(config: PropertyConfig, strategy: Strategy, month_index: int,
                      rent_growth: float, expense_growth: float) -> RevenueModel:
    return REVENUE_MODELS[Strategy(strategy)](config, month_index, rent_growth, expense_growth)
