import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from jsonschema import Draft202012Validator

from .amenities import DEFAULT_AMENITIES, Amenity
from .metrics import InvestmentTargets
from .simulator import DEFAULT_START_YEAR, DEFAULT_YEARS
from .types import PropertyConfig, Strategy

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "schema" / "engine_v1.json"


class EngineConfigError(ValueError):
    """Engine file could not be read or does not match the schema."""


@dataclass
class EngineSettings:
    property: PropertyConfig
    strategy: Strategy = Strategy.STR
    years: int = DEFAULT_YEARS
    start_year: int = DEFAULT_START_YEAR
    amenities: Dict[str, Amenity] = field(default_factory=lambda: dict(DEFAULT_AMENITIES))
    selected_amenities: List[str] = field(default_factory=list)
    targets: InvestmentTargets = field(default_factory=InvestmentTargets)


def load_schema(path: Path = SCHEMA_PATH) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_engine_config(path: Path) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise EngineConfigError(f"Cannot read engine file {path}: {exc}") from exc


def validate_engine(engine: Dict[str, Any], schema: Dict[str, Any] | None = None) -> None:
    """Raise EngineConfigError listing every schema violation."""
    validator = Draft202012Validator(schema if schema is not None else load_schema())
    errors = sorted(validator.iter_errors(engine), key=lambda e: list(e.absolute_path))
    if errors:
        detail = "; ".join(
            f"{'/'.join(str(p) for p in e.absolute_path) or '<root>'}: {e.message}" for e in errors
        )
        raise EngineConfigError(f"Invalid engine config: {detail}")


def settings_from_engine(engine: Dict[str, Any]) -> EngineSettings:
    validate_engine(engine)
    projection = engine.get("projection", {})

    catalogue = dict(DEFAULT_AMENITIES)
    for item in engine.get("amenities", []):
        am = Amenity.from_dict(item)
        catalogue[am.id] = am

    settings = EngineSettings(
        property=PropertyConfig.from_dict(engine["property"]),
        strategy=Strategy(projection.get("strategy", Strategy.STR.value)),
        years=int(projection.get("years", DEFAULT_YEARS)),
        start_year=int(projection.get("startYear", DEFAULT_START_YEAR)),
        amenities=catalogue,
        selected_amenities=list(engine.get("selectedAmenities", [])),
        targets=InvestmentTargets.from_dict(engine.get("targets", {})),
    )
    logger.info("Loaded engine v%s: %s, %d years, %d amenities selected",
                engine.get("version", "?"), settings.strategy.value, settings.years,
                len(settings.selected_amenities))
    return settings


def load_settings(path: Path) -> EngineSettings:
    return settings_from_engine(load_engine_config(path))
