"""Per-period augmentation from gridpoint data.

Records are never mutated; each step returns new PeriodRecords. The order is
fixed: trim hourly, augment hourly, then augment daily (daily highs and lows
read the augmented hourly temperatures).
"""

import logging
from dataclasses import replace
from datetime import datetime

from forecaster.convert.units import convert_if_needed
from forecaster.derive.feels_like import calculate_feels_like
from forecaster.derive.min_max import (
    daily_min_max_from_hourly,
    reconcile_max,
    reconcile_min,
)
from forecaster.ingest.timestamps import hour_start
from forecaster.models.common import Units
from forecaster.models.forecast import GridSeries, PeriodRecord, WeatherSnapshot
from forecaster.series.matcher import (
    accumulate_value_for_timestamp,
    find_value_for_timestamp,
    find_value_for_timestamp_matching_day,
)

logger = logging.getLogger(__name__)

GRID_MIN_TEMPERATURE = "minTemperature"
GRID_MAX_TEMPERATURE = "maxTemperature"
GRID_RAIN = "quantitativePrecipitation"
GRID_SNOW = "iceAccumulation"
GRID_WIND_GUST = "windGust"


def _series(grid: dict[str, GridSeries], key: str) -> GridSeries | None:
    series = grid.get(key) if isinstance(grid, dict) else None
    if series is None:
        logger.debug("Grid series %s not available", key)
    return series


def grid_value_within_duration(grid, start: datetime | None, key: str, units: Units):
    series = _series(grid, key)
    if series is None:
        return None
    value = find_value_for_timestamp(start, series.records)
    return convert_if_needed(value, series.unit_code, units)


def grid_value_matching_day(grid, start: datetime | None, key: str, units: Units):
    series = _series(grid, key)
    if series is None:
        return None
    value = find_value_for_timestamp_matching_day(start, series.records)
    return convert_if_needed(value, series.unit_code, units)


def accumulate_grid_value(grid, start: datetime | None, key: str, units: Units):
    series = _series(grid, key)
    if series is None:
        return None
    value = accumulate_value_for_timestamp(start, series.records)
    return convert_if_needed(value, series.unit_code, units)


def trim_hourly(hourly: list[PeriodRecord], now: datetime) -> list[PeriodRecord]:
    """Drop hours before the current hour. Kept whole if no hour qualifies."""
    boundary = hour_start(now)
    for i, period in enumerate(hourly):
        if period is None or period.start_time is None:
            continue
        if period.start_time >= boundary:
            return hourly[i:]
    return hourly


def augment_hourly(
    hourly: list[PeriodRecord], grid: dict[str, GridSeries], units: Units
) -> list[PeriodRecord]:
    augmented: list[PeriodRecord] = []
    for period in hourly:
        if period is None:
            continue
        start = period.start_time
        temperature = convert_if_needed(
            period.temperature, period.temperature_unit, units
        )
        wind_gust = grid_value_within_duration(grid, start, GRID_WIND_GUST, units)
        augmented.append(
            replace(
                period,
                temperature=temperature,
                snow_accumulation=grid_value_within_duration(grid, start, GRID_SNOW, units),
                rain_accumulation=grid_value_within_duration(grid, start, GRID_RAIN, units),
                wind_gust=wind_gust,
                feels_like=calculate_feels_like(
                    temperature, wind_gust, period.relative_humidity, units
                ),
            )
        )
    return augmented


def augment_daily(
    daily: list[PeriodRecord],
    hourly: list[PeriodRecord],
    grid: dict[str, GridSeries],
    units: Units,
) -> list[PeriodRecord]:
    augmented: list[PeriodRecord] = []
    for period in daily:
        if period is None:
            continue
        start = period.start_time
        hourly_min, hourly_max = daily_min_max_from_hourly(start, hourly)
        grid_max = grid_value_matching_day(grid, start, GRID_MAX_TEMPERATURE, units)
        grid_min = grid_value_matching_day(grid, start, GRID_MIN_TEMPERATURE, units)

        augmented.append(
            replace(
                period,
                temperature=convert_if_needed(
                    period.temperature, period.temperature_unit, units
                ),
                max_temperature=reconcile_max(hourly_max, grid_max),
                min_temperature=reconcile_min(hourly_min, grid_min),
                snow_accumulation=accumulate_grid_value(grid, start, GRID_SNOW, units),
                rain_accumulation=accumulate_grid_value(grid, start, GRID_RAIN, units),
            )
        )
    return augmented


def augment_snapshot(
    snapshot: WeatherSnapshot, now: datetime, units: Units
) -> WeatherSnapshot:
    """Return a new snapshot with trimmed, augmented hourly and daily periods."""
    hourly = augment_hourly(trim_hourly(snapshot.hourly, now), snapshot.grid, units)
    daily = augment_daily(snapshot.daily, hourly, snapshot.grid, units)
    return WeatherSnapshot(hourly=hourly, daily=daily, grid=snapshot.grid)
