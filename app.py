"""
Streamlit UI for the rental underwriting engine.

- Loads an engine JSON (default `engines/DEFAULT_PROPERTY_V1.json`)
- Lets the user pick strategy, horizon and amenities
- Runs the projection through `ui.scenarios`
- Renders KPIs, break-even points and the monthly / yearly tables
"""

from __future__ import annotations

from pathlib import Path
from typing import Tuple

import pandas as pd
import streamlit as st

from rental_engine.engine.config import EngineConfigError, EngineSettings, load_settings
from rental_engine.engine.types import Strategy
from ui import diagnostics_panel
from ui.scenarios import ScenarioParams, run_scenario, summarize_scenario

# ---------------------------------------------------------------------------
# Paths / constants
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parent
DEFAULT_ENGINE_PATH = PROJECT_ROOT / "engines" / "DEFAULT_PROPERTY_V1.json"


# ---------------------------------------------------------------------------
# Engine loading
# ---------------------------------------------------------------------------

@st.cache_data(show_spinner=False)
def _load_settings_cached(path_str: str) -> EngineSettings:
    """Streamlit-cached wrapper around `load_settings` (hashable string path)."""
    return load_settings(Path(path_str))


# ---------------------------------------------------------------------------
# Simulation plumbing
# ---------------------------------------------------------------------------

@st.cache_data(show_spinner=False)
def run_model(
    path_str: str,
    strategy: str,
    years: int,
    amenities: Tuple[str, ...],
) -> Tuple[pd.DataFrame, pd.DataFrame, dict]:
    """Recompute from scratch whenever (engine, strategy, horizon, amenities) changes."""
    settings = _load_settings_cached(path_str)
    params = ScenarioParams(strategy=Strategy(strategy), years=years, amenities=list(amenities))
    monthly_df, yearly_df, config = run_scenario(settings, params)
    summary = summarize_scenario(monthly_df, yearly_df, config, settings)
    return monthly_df, yearly_df, summary


# ---------------------------------------------------------------------------
# UI helpers
# ---------------------------------------------------------------------------

def _render_kpi_row(summary: dict) -> None:
    cards = diagnostics_panel.kpi_cards(summary)
    for col, (label, value) in zip(st.columns(len(cards)), cards):
        col.metric(label, value)


def scenario_panel() -> None:
    st.title("Rental Underwriting")

    with st.sidebar:
        st.header("Engine / Scenario")

        engine_path = st.text_input(
            "Engine JSON path",
            value=str(DEFAULT_ENGINE_PATH),
            help="Path to a valid engine JSON.",
        )
        try:
            settings = _load_settings_cached(engine_path)
        except EngineConfigError as exc:
            st.error(str(exc))
            st.stop()

        strategies = [s.value for s in Strategy]
        strategy = st.radio(
            "Strategy", strategies,
            index=strategies.index(settings.strategy.value), horizontal=True,
        )
        years = st.slider("Horizon (years)", min_value=1, max_value=30, value=settings.years)
        amenities = st.multiselect(
            "Amenities",
            options=list(settings.amenities),
            default=[a for a in settings.selected_amenities if a in settings.amenities],
            format_func=lambda a: settings.amenities[a].name,
        )

    monthly_df, yearly_df, summary = run_model(engine_path, strategy, years, tuple(amenities))

    _render_kpi_row(summary)

    st.subheader("Yearly projection")
    st.dataframe(yearly_df.round(2), use_container_width=True, height=300)

    st.subheader("Monthly projection")
    st.dataframe(monthly_df.round(2), use_container_width=True, height=400)

    diagnostics_panel.render(st, monthly_df, summary, settings.targets)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main() -> None:
    st.set_page_config(page_title="Rental Underwriting", layout="wide")
    scenario_panel()


if __name__ == "__main__":
    main()
