import pytest

from rental_engine.engine.amenities import DEFAULT_AMENITIES, Amenity, build_effective_config
from rental_engine.engine.types import PropertyConfig, Strategy

CFG = PropertyConfig(upgrade_cost=999.0, furnishings_cost=999.0)


def test_str_hot_tub_lifts_adr_and_occupancy():
    eff = build_effective_config(CFG, ["hottub"], Strategy.STR)
    assert eff.adr == pytest.approx(345.0)
    # 6 * (75 - 70) / 40
    assert eff.occupancy_percent == pytest.approx(70.75)
    assert eff.upgrade_cost == 8_500.0
    assert eff.furnishings_cost == 0.0


def test_costs_split_between_furnishings_and_upgrades():
    eff = build_effective_config(CFG, ["furnishings", "sauna", "ev"], Strategy.STR)
    assert eff.furnishings_cost == 25_000.0
    assert eff.upgrade_cost == 8_000.0


def test_occupancy_never_exceeds_ceiling():
    eff = build_effective_config(CFG.with_updates(occupancy_percent=80), ["deck"], Strategy.STR)
    assert eff.occupancy_percent == 75.0
    eff = build_effective_config(CFG, list(DEFAULT_AMENITIES), Strategy.STR)
    assert eff.occupancy_percent <= 75.0


def test_mtr_and_ltr_rent_lifts():
    mtr = build_effective_config(CFG, ["hottub"], Strategy.MTR)
    assert mtr.mtr_monthly_rent == pytest.approx(4_950.0)
    assert mtr.adr == CFG.adr
    assert mtr.occupancy_percent == CFG.occupancy_percent
    ltr = build_effective_config(CFG, ["hottub"], "LTR")
    assert ltr.ltr_monthly_rent == pytest.approx(3_135.0)


def test_unknown_amenity_ignored(caplog):
    eff = build_effective_config(CFG, ["moat"], Strategy.STR)
    assert eff.adr == CFG.adr
    assert eff.upgrade_cost == 0.0
    assert "moat" in caplog.text


def test_custom_catalogue_and_input_untouched():
    catalogue = {"pool": Amenity("pool", "Pool", 40_000.0, 60.0, 0.0)}
    eff = build_effective_config(CFG, ["pool"], Strategy.STR, catalogue)
    assert eff.adr == pytest.approx(360.0)
    assert CFG.adr == 300.0
    assert CFG.upgrade_cost == 999.0
