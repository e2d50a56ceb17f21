"""Unit conversions between the upstream grid units and the display system.

Every function tolerates the string-typed numbers common in the NWS feed.
Non-numeric temperatures pass through untouched while non-numeric distances
and speeds come back as NaN; callers rely on that difference.
"""

import math
import re

from forecaster.models.common import Units

MM_PER_INCH = 25.4
KMH_PER_MPH = 1.609344

# Leading numeric prefix, e.g. "12 mph" -> 12
_NUMBER_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(value: object) -> float | None:
    """Parse a number or numeric-looking string. Returns None when not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    m = _NUMBER_PREFIX.match(str(value))
    if m is None:
        return None
    num = float(m.group(0))
    return num if math.isfinite(num) else None


def round_half_up(value: float, ndigits: int = 0) -> float:
    scale = 10**ndigits
    return math.floor(value * scale + 0.5) / scale


def format_number(value: float) -> str:
    """Stringify a number, dropping the decimal part of integral values."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == int(value):
        return str(int(value))
    return repr(value)


def convert_temperature(value, to_celsius: bool):
    """F -> C (one decimal) when to_celsius, else C -> F (integer)."""
    if value is None:
        return value
    num = parse_number(value)
    if num is None:
        return value

    if to_celsius:
        return format_number(round_half_up((num - 32) * 5 / 9, 1))
    return format_number(round_half_up(num * 9 / 5 + 32))


def convert_distance(value, to_imperial: bool):
    """mm -> in when to_imperial, else in -> mm. Two decimals."""
    if value is None:
        return value
    num = parse_number(value)
    if num is None:
        return math.nan

    final = num / MM_PER_INCH if to_imperial else num * MM_PER_INCH
    return format_number(round_half_up(final, 2))


def convert_speed(value, to_imperial: bool):
    """km/h -> mph when to_imperial, else mph -> km/h. Integer."""
    if value is None:
        return value
    num = parse_number(value)
    if num is None:
        return math.nan

    final = num / KMH_PER_MPH if to_imperial else num * KMH_PER_MPH
    return format_number(round_half_up(final))


def normalize_unit_code(unit_code: str | None) -> str | None:
    if unit_code is None:
        return None
    return unit_code.removeprefix("wmoUnit:")


def convert_if_needed(value, unit_code: str | None, units: Units):
    """Convert a raw grid value into the display system.

    Unknown unit codes, and codes already in the display system, return the
    value as-is (not stringified).
    """
    code = normalize_unit_code(unit_code)
    if code in ("degC", "C") and units == Units.IMPERIAL:
        return convert_temperature(value, to_celsius=False)
    if code in ("degF", "F") and units == Units.METRIC:
        return convert_temperature(value, to_celsius=True)
    if code == "in" and units == Units.METRIC:
        return convert_distance(value, to_imperial=False)
    if code == "mm" and units == Units.IMPERIAL:
        return convert_distance(value, to_imperial=True)
    if code == "km_h-1" and units == Units.IMPERIAL:
        return convert_speed(value, to_imperial=True)
    return value
