import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional

from .types import PropertyConfig, Strategy

logger = logging.getLogger(__name__)

FURNISHINGS_ID = "furnishings"
STR_OCCUPANCY_CEILING = 75.0
OCC_ROOM_SCALE = 40.0
MTR_RENT_PER_ADR_DOLLAR = 10.0
LTR_RENT_PER_ADR_DOLLAR = 3.0


@dataclass(frozen=True)
class Amenity:
    id: str
    name: str
    cost: float
    adr_boost: float = 0.0
    occ_boost: float = 0.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Amenity":
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", data["id"])),
            cost=float(data.get("cost", 0.0)),
            adr_boost=float(data.get("adrBoost", 0.0)),
            occ_boost=float(data.get("occBoost", 0.0)),
        )


DEFAULT_AMENITIES = {
    a.id: a for a in (
        Amenity(FURNISHINGS_ID, "Initial Furnishings", 25_000.0),
        Amenity("hottub", "Hot Tub", 8_500.0, 45.0, 6.0),
        Amenity("sauna", "Cedar Sauna", 6_500.0, 25.0, 4.0),
        Amenity("gameroom", "Game Room", 4_000.0, 20.0, 3.0),
        Amenity("deck", "Luxury Deck", 12_000.0, 35.0, 5.0),
        Amenity("ev", "EV Charger", 1_500.0, 5.0, 2.0),
    )
}


def boosted_occupancy(current: float, occ_boost: float) -> float:
    """Occupancy lift shrinks as the listing approaches the ceiling."""
    room = STR_OCCUPANCY_CEILING - current
    effective = occ_boost * (room / OCC_ROOM_SCALE)
    return min(STR_OCCUPANCY_CEILING, current + max(0.0, effective))


def build_effective_config(
    config: PropertyConfig,
    amenity_ids: Iterable[str],
    strategy: Strategy | str = Strategy.STR,
    catalogue: Optional[Mapping[str, Amenity]] = None,
) -> PropertyConfig:
    """
    Fold selected amenities into a new configuration before projecting.

    Amenity spend replaces the configured furnishings/upgrade costs; revenue
    lifts depend on the strategy. `config` itself is left untouched.
    """
    strategy = Strategy(strategy)
    catalogue = DEFAULT_AMENITIES if catalogue is None else catalogue

    adr = config.adr
    occ = config.occupancy_percent
    mtr_rent = config.mtr_monthly_rent
    ltr_rent = config.ltr_monthly_rent
    upgrade_cost = furnishings_cost = 0.0

    for amenity_id in amenity_ids:
        am = catalogue.get(amenity_id)
        if am is None:
            logger.warning("Unknown amenity %r ignored", amenity_id)
            continue

        if am.id == FURNISHINGS_ID:
            furnishings_cost += am.cost
        else:
            upgrade_cost += am.cost

        if strategy is Strategy.STR:
            adr += am.adr_boost
            occ = boosted_occupancy(occ, am.occ_boost)
        elif strategy is Strategy.MTR:
            mtr_rent += am.adr_boost * MTR_RENT_PER_ADR_DOLLAR
        else:
            ltr_rent += am.adr_boost * LTR_RENT_PER_ADR_DOLLAR

    return config.with_updates(
        adr=adr,
        occupancy_percent=occ,
        mtr_monthly_rent=mtr_rent,
        ltr_monthly_rent=ltr_rent,
        upgrade_cost=upgrade_cost,
        furnishings_cost=furnishings_cost,
    )
