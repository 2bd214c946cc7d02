"""YAML / JSON scenario files."""

import json
import logging
from dataclasses import fields
from pathlib import Path

import yaml

from propcalc.params import OngoingExpenses, PropertyData

logger = logging.getLogger(__name__)

TOP_LEVEL_KEYS = {
    "property_value",
    "deposit",
    "first_home_buyer",
    "is_living_here",
    "property_type",
    "is_brand_new",
    "state",
    "weekly_rent",
    "rental_growth",
    "strata_fees",
    "capital_growth",
    "rebate",
    "start_year",
    "projection_years",
}
LOAN_KEYS = {"is_interest_only", "term", "interest", "include_stamp_duty"}
ONGOING_KEYS = {f.name for f in fields(OngoingExpenses)}


class ConfigError(ValueError):
    """A scenario file could not be read or has the wrong shape."""


def _pick(data: dict, allowed: set[str], section: str) -> dict:
    unknown = set(data) - allowed
    if unknown:
        logger.debug("Ignoring unknown %s keys: %s", section, ", ".join(sorted(unknown)))
    return {k: v for k, v in data.items() if k in allowed}


def _section(data: dict, key: str) -> dict:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{key}' must be a mapping, got {type(value).__name__}")
    return value


def dict_to_input(data: dict | None) -> dict:
    """Reduce a loaded document to the keys the calculator understands."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Scenario must be a mapping, got {type(data).__name__}")

    result = _pick(data, TOP_LEVEL_KEYS, "scenario")
    if "loan" in data:
        result["loan"] = _pick(_section(data, "loan"), LOAN_KEYS, "loan")
    if "expenses" in data:
        expenses = _section(data, "expenses")
        picked = {}
        if "one_time" in expenses:
            picked["one_time"] = expenses["one_time"]
        if "ongoing" in expenses:
            picked["ongoing"] = _pick(_section(expenses, "ongoing"), ONGOING_KEYS, "ongoing expense")
        result["expenses"] = picked
    return result


def parse_config_text(text: str, fmt: str = "yaml") -> dict:
    """Parse scenario text (pasted or uploaded) in ``"yaml"`` or ``"json"``."""
    try:
        data = json.loads(text) if fmt == "json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Could not parse scenario: {exc}") from exc
    return dict_to_input(data)


def load_config(path: str | Path) -> dict:
    """Load a partial scenario from a YAML or JSON file."""
    path = Path(path)
    try:
        text = path.read_text()
    except OSError as exc:
        raise ConfigError(f"Could not read {path}: {exc}") from exc

    fmt = "json" if path.suffix == ".json" else "yaml"
    try:
        data = parse_config_text(text, fmt)
    except ConfigError as exc:
        raise ConfigError(f"{path}: {exc}") from exc
    logger.debug("Loaded scenario from %s", path)
    return data


def params_to_dict(data: PropertyData) -> dict:
    """Serialisable inputs of a calculated scenario."""
    return data.as_partial()


def dump_config(data: PropertyData) -> str:
    return yaml.safe_dump(params_to_dict(data), default_flow_style=False, sort_keys=False)
