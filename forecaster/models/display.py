"""Display-ready forecast models. Every field is pre-formatted for output."""

from dataclasses import dataclass, field
from enum import StrEnum


class PrecipitationChangeType(StrEnum):
    START = "start"
    STOP = "stop"


class PrecipitationKind(StrEnum):
    RAIN = "rain"
    SNOW = "snow"


@dataclass(frozen=True)
class PrecipitationChange:
    type: PrecipitationChangeType
    precip_type: PrecipitationKind
    time: str
    message: str


@dataclass(frozen=True)
class TemperatureRange:
    high: str
    low: str


@dataclass(frozen=True)
class PrecipitationDisplay:
    pop: str
    accumulation: str | None = None
    accumulation_type: str | None = None  # "snow" | "rain"


@dataclass(frozen=True)
class WindDisplay:
    wind_speed: str
    wind_gust: str | None = None


@dataclass(frozen=True)
class CurrentConditions:
    temperature: str
    feels_like: str
    icon: str | None
    temp_range: TemperatureRange
    precipitation: PrecipitationDisplay
    wind: WindDisplay


@dataclass(frozen=True)
class HourlyItem:
    time: str
    icon: str | None
    temperature: str
    precipitation: PrecipitationDisplay
    wind: WindDisplay


@dataclass(frozen=True)
class DailyItem:
    day: str
    icon: str | None
    temp_range: TemperatureRange
    precipitation: PrecipitationDisplay
    wind: WindDisplay


@dataclass(frozen=True)
class DisplayForecast:
    currently: CurrentConditions
    summary: str
    precipitation_change: PrecipitationChange | None = None
    hourly: list[HourlyItem] = field(default_factory=list)
    daily: list[DailyItem] = field(default_factory=list)
