"""
Scenario helpers for the rental underwriting UI.

These wrap the engine so the Streamlit app, the CLI and tests share one way of
turning an engine file into projections: apply overrides, fold in amenities,
simulate, and summarise year 1 against the investment targets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from rental_engine.engine.amenities import build_effective_config
from rental_engine.engine.breakeven import (
    breakeven_month,
    cash_flow_breakeven_month,
    has_heloc,
    heloc_payoff_month,
)
from rental_engine.engine.config import EngineSettings
from rental_engine.engine.metrics import derive_kpis, evaluate_targets
from rental_engine.engine.simulator import simulate
from rental_engine.engine.types import PropertyConfig, Strategy


@dataclass
class ScenarioParams:
    """High-level knobs for a single scenario.

    - `strategy` / `years`: default to the engine file's projection block
    - `amenities`: replaces the engine file's selection when given
    - `overrides`: PropertyConfig attribute -> value
    """

    name: str = "Base case"
    strategy: Optional[Strategy] = None
    years: Optional[int] = None
    amenities: Optional[List[str]] = None
    overrides: Dict[str, float] = field(default_factory=dict)

    def effective_config(self, settings: EngineSettings) -> PropertyConfig:
        base = settings.property.with_updates(**self.overrides) if self.overrides else settings.property
        selected = settings.selected_amenities if self.amenities is None else self.amenities
        return build_effective_config(base, selected, self.resolve_strategy(settings), settings.amenities)

    def resolve_strategy(self, settings: EngineSettings) -> Strategy:
        return Strategy(self.strategy) if self.strategy else settings.strategy


def run_scenario(
    settings: EngineSettings,
    params: ScenarioParams,
) -> Tuple[pd.DataFrame, pd.DataFrame, PropertyConfig]:
    """Return (monthly_df, yearly_df, effective_config) for one scenario."""
    config = params.effective_config(settings)
    result = simulate(
        config,
        years=params.years or settings.years,
        strategy=params.resolve_strategy(settings),
        start_year=settings.start_year,
    )
    return result.monthly, result.yearly, config


def summarize_scenario(
    monthly_df: pd.DataFrame,
    yearly_df: pd.DataFrame,
    config: PropertyConfig,
    settings: EngineSettings,
) -> Dict[str, Any]:
    """Year-1 KPIs, target checks and break-even points as a flat dict."""
    if yearly_df.empty:
        return {"months": 0}

    kpis = derive_kpis(yearly_df, config)
    checks = evaluate_targets(kpis, settings.targets)
    last = monthly_df.iloc[-1]
    return {
        "months": len(monthly_df),
        "cap_rate": kpis.cap_rate,
        "gross_yield": kpis.gross_yield,
        "cash_on_cash": kpis.cash_on_cash,
        "dscr": kpis.dscr,
        "total_dscr": kpis.total_dscr,
        "annual_noi": kpis.annual_noi,
        "annual_profit": kpis.annual_profit,
        "annual_surplus": kpis.annual_surplus,
        "cash_invested": kpis.cash_invested,
        "heloc_funding": kpis.heloc_funding,
        "meets_targets": checks["meets_all"],
        "has_heloc": has_heloc(monthly_df),
        "breakeven_month": breakeven_month(monthly_df),
        "cash_flow_breakeven_month": cash_flow_breakeven_month(monthly_df),
        "heloc_payoff_month": heloc_payoff_month(monthly_df),
        "end_cumulative_net_cash": float(last["CumulativeNetCash"]),
        "end_equity": float(last["PropertyValue"] - last["MortgageBalance"] - last["HelocBalance"]),
    }


def compare_strategies(settings: EngineSettings, years: Optional[int] = None) -> pd.DataFrame:
    """One summary row per rental strategy, same property and amenity selection."""
    rows = []
    for strategy in Strategy:
        monthly, yearly, config = run_scenario(settings, ScenarioParams(strategy=strategy, years=years))
        rows.append({"strategy": strategy.value, **summarize_scenario(monthly, yearly, config, settings)})
    return pd.DataFrame(rows)


__all__ = [
    "ScenarioParams",
    "run_scenario",
    "summarize_scenario",
    "compare_strategies",
]
