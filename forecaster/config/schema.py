"""Pydantic v2 configuration schema for the forecast display.

The camelCase option names used in display config files are accepted as
aliases. Integer options are coerced once here and never re-validated.
"""

import math
import re

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from forecaster.models.common import Units

DEFAULT_LABEL_DAYS = ["Sun", "Mon", "Tue", "Wed", "Thur", "Fri", "Sat"]

_INT_PREFIX = re.compile(r"^\s*[+-]?\d+")


def coerce_int(value: object) -> int | None:
    """Truncate to int, or None when the value has no integer reading.

    Strings use their leading integer, so "15.7" gives 15.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    m = _INT_PREFIX.match(str(value))
    return int(m.group(0)) if m else None


class ForecastConfig(BaseModel):
    model_config = {"extra": "forbid", "populate_by_name": True}

    units: Units = Units.IMPERIAL

    hourly_forecast_interval: int = Field(default=3, alias="hourlyForecastInterval")
    max_hourlies_to_show: int = Field(default=3, alias="maxHourliesToShow")
    max_dailies_to_show: int = Field(default=3, alias="maxDailiesToShow")
    include_today_in_daily_forecast: bool = Field(
        default=False, alias="includeTodayInDailyForecast"
    )
    show_hourly_forecast: bool = Field(default=True, alias="showHourlyForecast")
    show_daily_forecast: bool = Field(default=True, alias="showDailyForecast")

    concise: bool = True
    show_precipitation_start_stop: bool = Field(
        default=False, alias="showPrecipitationStartStop"
    )

    label_time_format: str = Field(default="%-I %p", alias="label_timeFormat")
    label_days: list[str] = Field(
        default_factory=lambda: list(DEFAULT_LABEL_DAYS), min_length=7, max_length=7
    )
    label_high: str = "H"
    label_low: str = "L"
    label_gust: str = "max"

    @field_validator(
        "hourly_forecast_interval",
        "max_hourlies_to_show",
        "max_dailies_to_show",
        mode="before",
    )
    @classmethod
    def _coerce_or_default(cls, value: object, info: ValidationInfo) -> int:
        coerced = coerce_int(value)
        if coerced is None:
            return cls.model_fields[info.field_name].default
        return coerced
