"""Weather snapshot models built from the NWS point-forecast documents."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta

Value = float | str | None


@dataclass(frozen=True)
class TimeSeriesRecord:
    """One grid value in effect over [start, start + duration).

    ``start`` or ``duration`` is None when the upstream validTime could not
    be parsed.
    """

    start: datetime | None
    duration: timedelta | None
    value: Value


@dataclass(frozen=True)
class GridSeries:
    unit_code: str | None
    records: list[TimeSeriesRecord] = field(default_factory=list)


@dataclass(frozen=True)
class PeriodRecord:
    start_time: datetime | None
    end_time: datetime | None = None
    name: str = ""
    is_daytime: bool | None = None
    temperature: Value = None
    temperature_unit: str | None = None
    wind_speed: str | None = None
    wind_direction: str | None = None
    icon: str | None = None
    probability_of_precipitation: float | None = None
    relative_humidity: float | None = None
    short_forecast: str = ""
    detailed_forecast: str = ""

    # Filled in by augmentation
    feels_like: Value = None
    rain_accumulation: Value = None
    snow_accumulation: Value = None
    wind_gust: Value = None
    min_temperature: Value = None
    max_temperature: Value = None


@dataclass(frozen=True)
class WeatherSnapshot:
    hourly: list[PeriodRecord] = field(default_factory=list)
    daily: list[PeriodRecord] = field(default_factory=list)
    grid: dict[str, GridSeries] = field(default_factory=dict)
