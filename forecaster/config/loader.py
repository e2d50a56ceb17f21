"""YAML config loader with runtime get/set."""

import json
from pathlib import Path
from typing import Any

import yaml

from forecaster.config.schema import ForecastConfig


def load_config(path: str | Path) -> ForecastConfig:
    """Load and validate config from a YAML file. An empty file gives defaults."""
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return ForecastConfig(**raw)


def get_config_value(config: ForecastConfig, key: str) -> Any:
    """Get a config value by field name or alias, e.g. 'maxDailiesToShow'."""
    name = _field_name(key)
    return getattr(config, name)


def set_config_value(config: ForecastConfig, key: str, value: Any) -> ForecastConfig:
    """Set a config value and re-validate. Returns a new ForecastConfig."""
    data = json.loads(config.model_dump_json())
    name = _field_name(key)
    old_value = data.get(name)
    if isinstance(old_value, bool) and isinstance(value, str):
        value = value.strip().lower() in ("1", "true", "yes", "on")
    elif isinstance(old_value, list) and isinstance(value, str):
        value = [v.strip() for v in value.split(",")]
    data[name] = value
    return ForecastConfig(**data)


def _field_name(key: str) -> str:
    fields = ForecastConfig.model_fields
    if key in fields:
        return key
    for name, info in fields.items():
        if info.alias == key:
            return name
    raise KeyError(f"Config key not found: {key}")
