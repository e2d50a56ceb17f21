"""String formatting for display items and whole-forecast output."""

import json
import math
from dataclasses import asdict

from forecaster.convert.units import format_number, parse_number, round_half_up
from forecaster.models.common import Units
from forecaster.models.display import (
    DisplayForecast,
    PrecipitationDisplay,
    TemperatureRange,
    WindDisplay,
)

PLACEHOLDER = "--"


def _display_number(value) -> int | None:
    """Rounded number for display, or None when value is not strictly numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        num = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(num):
        return None
    return int(round_half_up(num))


def format_temperature(value) -> str:
    rounded = _display_number(value)
    return f"{PLACEHOLDER if rounded is None else rounded}°"


def format_hi_low_temperature(
    high,
    low,
    *,
    concise: bool = True,
    label_high: str = "H",
    label_low: str = "L",
) -> TemperatureRange:
    """High/low pair. A missing or non-numeric side renders as "--°"."""
    high_str = format_temperature(high)
    low_str = format_temperature(low)
    if not concise:
        high_str = f"{label_high} {high_str}"
        low_str = f"{label_low} {low_str}"
    return TemperatureRange(high=high_str, low=low_str)


def _pop_text(value) -> str:
    if value is None:
        return "null"
    if isinstance(value, float) and value == int(value):
        return str(int(value))
    return str(value)


def _amount_text(value) -> str:
    """Converted amounts are already strings; raw grid sums are floats."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return format_number(float(value))
    return str(value)


def format_precipitation(
    percent_chance, rain_accumulation, snow_accumulation, units: Units = Units.IMPERIAL
) -> PrecipitationDisplay:
    """Chance of precipitation plus the accumulation, snow taking precedence."""
    unit = "in" if units == Units.IMPERIAL else "mm"
    pop = f"{_pop_text(percent_chance)}%"

    snow = parse_number(snow_accumulation)
    rain = parse_number(rain_accumulation)
    if snow is not None and snow > 0:
        return PrecipitationDisplay(
            pop=pop,
            accumulation=f"{_amount_text(snow_accumulation)} {unit}",
            accumulation_type="snow",
        )
    if rain is not None and rain > 0:
        return PrecipitationDisplay(
            pop=pop,
            accumulation=f"{_amount_text(rain_accumulation)} {unit}",
            accumulation_type="rain",
        )
    return PrecipitationDisplay(pop=pop)


def format_wind(
    speed,
    bearing,
    gust,
    *,
    concise: bool = True,
    label_gust: str = "max",
    units: Units = Units.IMPERIAL,
) -> WindDisplay:
    """Wind speed; bearing and gust are only shown when not concise."""
    if speed is None:
        speed = PLACEHOLDER
    if concise:
        return WindDisplay(wind_speed=f"{speed}")
    gust_unit = "mph" if units == Units.IMPERIAL else "km/h"
    wind_gust = f" ({label_gust} {gust} {gust_unit})" if gust else None
    return WindDisplay(wind_speed=f"{speed} {bearing}", wind_gust=wind_gust)


def format_forecast_text(f: DisplayForecast) -> str:
    """Plain text rendering for the terminal."""
    c = f.currently
    header = f"=== Now: {c.temperature} (feels like {c.feels_like})"
    if c.icon:
        header += f" {c.icon}"
    lines = [
        f"{header} ===",
        f"High {c.temp_range.high} / Low {c.temp_range.low} | "
        f"Wind {c.wind.wind_speed}{c.wind.wind_gust or ''}",
    ]
    if c.precipitation.accumulation:
        lines.append(
            f"Precipitation: {c.precipitation.accumulation} "
            f"({c.precipitation.accumulation_type})"
        )
    if f.summary:
        lines.append(f.summary)
    if f.precipitation_change is not None:
        lines.append(f.precipitation_change.message)

    if f.hourly:
        lines.append("Hourly:")
        for h in f.hourly:
            lines.append(
                f"  {h.time:>6} {h.temperature:>5} {h.precipitation.pop:>5} "
                f"{h.wind.wind_speed} {h.icon or ''}".rstrip()
            )
    if f.daily:
        lines.append("Daily:")
        for d in f.daily:
            lines.append(
                f"  {d.day:>4} {d.temp_range.high:>5} {d.temp_range.low:>5} "
                f"{d.precipitation.pop:>5} {d.icon or ''}".rstrip()
            )
    return "\n".join(lines)


def format_forecast_json(f: DisplayForecast) -> str:
    """JSON rendering for programmatic consumption."""
    return json.dumps(asdict(f), indent=2)
