"""Build a WeatherSnapshot from the three NWS point-forecast documents.

Numeric fields are parsed here, once, so the rest of the pipeline works with
typed values. An unparseable temperature keeps its raw string.
"""

import logging
from typing import Any

from forecaster.convert.units import parse_number
from forecaster.ingest.timestamps import parse_instant, parse_valid_time
from forecaster.models.forecast import (
    GridSeries,
    PeriodRecord,
    TimeSeriesRecord,
    WeatherSnapshot,
)

logger = logging.getLogger(__name__)


def build_snapshot(
    hourly_doc: Any, daily_doc: Any, grid_doc: Any
) -> WeatherSnapshot:
    """Parse the hourly forecast, daily forecast and gridpoint documents."""
    hourly = parse_periods(hourly_doc)
    daily = parse_periods(daily_doc)
    grid = parse_grid(grid_doc)
    logger.debug(
        "Snapshot built: %d hourly, %d daily, %d grid series",
        len(hourly), len(daily), len(grid),
    )
    return WeatherSnapshot(hourly=hourly, daily=daily, grid=grid)


def _properties(doc: Any) -> dict:
    """Accept either a full GeoJSON response or its properties object."""
    if not isinstance(doc, dict):
        return {}
    props = doc.get("properties", doc)
    return props if isinstance(props, dict) else {}


def _unwrap(value: Any) -> Any:
    """NWS wraps some quantities as {"unitCode": ..., "value": ...}."""
    if isinstance(value, dict):
        return value.get("value")
    return value


def parse_periods(doc: Any) -> list[PeriodRecord]:
    periods = _properties(doc).get("periods")
    if not isinstance(periods, list):
        logger.warning("Forecast document has no periods list")
        return []

    parsed: list[PeriodRecord] = []
    for p in periods:
        if not isinstance(p, dict):
            continue
        parsed.append(_parse_period(p))
    return parsed


def _parse_period(p: dict) -> PeriodRecord:
    raw_temp = p.get("temperature")
    temperature = _unwrap(raw_temp)
    num = parse_number(temperature)
    if num is not None:
        temperature = num

    return PeriodRecord(
        start_time=parse_instant(p["startTime"]) if p.get("startTime") else None,
        end_time=parse_instant(p["endTime"]) if p.get("endTime") else None,
        name=p.get("name") or "",
        is_daytime=p.get("isDaytime"),
        temperature=temperature,
        temperature_unit=p.get("temperatureUnit"),
        wind_speed=p.get("windSpeed"),
        wind_direction=p.get("windDirection"),
        icon=p.get("icon"),
        probability_of_precipitation=parse_number(
            _unwrap(p.get("probabilityOfPrecipitation"))
        ),
        relative_humidity=parse_number(_unwrap(p.get("relativeHumidity"))),
        short_forecast=p.get("shortForecast") or "",
        detailed_forecast=p.get("detailedForecast") or "",
    )


def parse_grid(doc: Any) -> dict[str, GridSeries]:
    """Collect every gridpoint parameter shaped like {uom, values: [...]}."""
    grid: dict[str, GridSeries] = {}
    for key, series in _properties(doc).items():
        if not isinstance(series, dict) or not isinstance(series.get("values"), list):
            continue
        records = [
            parse_record(entry)
            for entry in series["values"]
            if isinstance(entry, dict)
        ]
        grid[key] = GridSeries(unit_code=series.get("uom"), records=records)
    if not grid:
        logger.warning("Gridpoint document has no value series")
    return grid


def parse_record(entry: dict) -> TimeSeriesRecord:
    start, duration = parse_valid_time(entry.get("validTime"))
    return TimeSeriesRecord(start=start, duration=duration, value=entry.get("value"))
