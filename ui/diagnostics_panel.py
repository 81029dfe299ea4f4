# ui/diagnostics_panel.py
import pandas as pd

from rental_engine.engine.breakeven import describe_breakeven, equity_curve
from rental_engine.engine.metrics import InvestmentTargets


def _fmt_pct(x):
    return "N/A" if x is None else f"{x:.2f}%"


def _fmt_ratio(x):
    return "N/A" if x is None else f"{x:.2f}"


def kpi_cards(summary: dict) -> list[tuple[str, str]]:
    """(label, value) pairs for the KPI strip; undefined ratios read N/A."""
    return [
        ("Cap Rate", _fmt_pct(summary["cap_rate"])),
        ("Cash-on-Cash", _fmt_pct(summary["cash_on_cash"])),
        ("Gross Yield", _fmt_pct(summary["gross_yield"])),
        ("DSCR (mortgage)", _fmt_ratio(summary["dscr"])),
        ("DSCR (all debt)", _fmt_ratio(summary["total_dscr"])),
    ]


def target_rows(summary: dict, targets: InvestmentTargets) -> pd.DataFrame:
    return pd.DataFrame([
        {"Metric": "Cap Rate", "Target": f">= {targets.min_cap_rate:.2f}%",
         "Actual": _fmt_pct(summary["cap_rate"])},
        {"Metric": "Cash-on-Cash", "Target": f">= {targets.min_coc:.2f}%",
         "Actual": _fmt_pct(summary["cash_on_cash"])},
        {"Metric": "DSCR (all debt)", "Target": f">= {targets.min_dscr:.2f}",
         "Actual": _fmt_ratio(summary["total_dscr"])},
    ])


def render(st, monthly_df: pd.DataFrame, summary: dict, targets: InvestmentTargets):
    st.header("Diagnostics")

    horizon = len(monthly_df)
    cols = st.columns(3 if summary["has_heloc"] else 2)
    cols[0].metric("Break-Even", describe_breakeven(summary["cash_flow_breakeven_month"], horizon))
    cols[1].metric("Total Cash (end)", f"{summary['end_cumulative_net_cash']:,.0f}")
    if summary["has_heloc"]:
        cols[2].metric("HELOC Payoff", describe_breakeven(summary["heloc_payoff_month"], horizon))

    st.subheader("Investment targets")
    st.dataframe(target_rows(summary, targets), use_container_width=True, hide_index=True)
    if summary["meets_targets"]:
        st.success("Deal meets all investment targets.")
    else:
        st.warning("Deal misses at least one investment target.")

    st.subheader("Equity build-up")
    eq = equity_curve(monthly_df).set_index("Period")
    st.line_chart(eq[["PropertyValue", "Equity", "CumulativeNetCash"]])
