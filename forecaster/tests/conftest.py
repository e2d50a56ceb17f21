"""Shared test fixtures."""

import json
from datetime import datetime
from pathlib import Path

import pytest
import yaml

from forecaster.config.schema import ForecastConfig

FIXTURE_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def now() -> datetime:
    """Wednesday 2026-02-11, 9:30am Eastern."""
    return datetime.fromisoformat("2026-02-11T09:30:00-05:00")


@pytest.fixture
def hourly_doc() -> dict:
    with open(FIXTURE_DIR / "hourly_forecast.json") as f:
        return json.load(f)


@pytest.fixture
def daily_doc() -> dict:
    with open(FIXTURE_DIR / "daily_forecast.json") as f:
        return json.load(f)


@pytest.fixture
def grid_doc() -> dict:
    with open(FIXTURE_DIR / "grid_data.json") as f:
        return json.load(f)


@pytest.fixture
def default_config() -> ForecastConfig:
    return ForecastConfig()


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "units": "metric",
        "maxDailiesToShow": "5",
        "showPrecipitationStartStop": True,
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
