#!/usr/bin/env python3
import argparse
import logging
import sys
from pathlib import Path

from rental_engine.engine.amenities import build_effective_config
from rental_engine.engine.breakeven import breakeven_month, describe_breakeven
from rental_engine.engine.config import EngineConfigError, load_settings
from rental_engine.engine.metrics import derive_kpis, evaluate_targets
from rental_engine.engine.simulator import simulate
from rental_engine.engine.types import Strategy

logger = logging.getLogger("rental_engine")


def _pct(x):
    return "N/A" if x is None else f"{x:.2f}%"


def _ratio(x):
    return "N/A" if x is None else f"{x:.2f}x"


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Project rental cash flows and deal KPIs.")
    parser.add_argument("--engine", type=Path, required=True)
    parser.add_argument("--years", type=int, default=None, help="Override projection.years")
    parser.add_argument("--strategy", choices=[s.value for s in Strategy], default=None)
    parser.add_argument("--out-prefix", type=str, default="out/PROJECTION")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        settings = load_settings(args.engine)
    except EngineConfigError as exc:
        logger.error("%s", exc)
        return 2

    strategy = Strategy(args.strategy) if args.strategy else settings.strategy
    years = settings.years if args.years is None else args.years
    if years < 1:
        logger.error("--years must be at least 1, got %d", years)
        return 2

    config = build_effective_config(
        settings.property, settings.selected_amenities, strategy, settings.amenities
    )
    result = simulate(config, years=years, strategy=strategy, start_year=settings.start_year)

    out = Path(args.out_prefix)
    out.parent.mkdir(parents=True, exist_ok=True)
    result.monthly.round(2).to_csv(out.with_name(out.name + "_Monthly.csv"), index=False)
    result.yearly.round(2).to_csv(out.with_name(out.name + "_YearOverYear.csv"), index=False)

    kpis = derive_kpis(result.yearly, config)
    checks = evaluate_targets(kpis, settings.targets)
    logger.info(
        "Year 1 %s: NOI %.0f | cap %s | CoC %s | DSCR %s | total DSCR %s",
        strategy.value, kpis.annual_noi, _pct(kpis.cap_rate), _pct(kpis.cash_on_cash),
        _ratio(kpis.dscr), _ratio(kpis.total_dscr),
    )
    logger.info("Break-even: %s | meets targets: %s",
                describe_breakeven(breakeven_month(result.monthly), years * 12),
                checks["meets_all"])
    logger.info("Wrote %s_Monthly.csv and %s_YearOverYear.csv", out, out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
