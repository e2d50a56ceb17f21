"""Apparent ("feels like") temperature from wind chill or heat index.

Formulas work in Fahrenheit and mph regardless of the display system; inputs
and the result are in display units.
"""

from forecaster.convert.units import KMH_PER_MPH, parse_number, round_half_up
from forecaster.models.common import Units

DEFAULT_HUMIDITY = 50.0

WIND_CHILL_MAX_TEMP_F = 50.0
WIND_CHILL_MIN_WIND_MPH = 3.0
HEAT_INDEX_MIN_TEMP_F = 80.0
HEAT_INDEX_MIN_HUMIDITY = 40.0


def wind_chill_f(temp_f: float, wind_mph: float) -> float:
    """NWS wind chill."""
    v = wind_mph**0.16
    return 35.74 + 0.6215 * temp_f - 35.75 * v + 0.4275 * temp_f * v


def heat_index_f(temp_f: float, humidity: float) -> float:
    """Rothfusz regression with the NWS coefficients."""
    t, r = temp_f, humidity
    return (
        -42.379
        + 2.04901523 * t
        + 10.14333127 * r
        - 0.22475541 * t * r
        - 0.00683783 * t * t
        - 0.05481717 * r * r
        + 0.00122874 * t * t * r
        + 0.00085282 * t * r * r
        - 0.00000199 * t * t * r * r
    )


def calculate_feels_like(temp, wind, humidity, units: Units = Units.IMPERIAL):
    """Feels-like temperature in display units, rounded to one decimal.

    A non-numeric temperature is returned unchanged. Missing wind counts as
    calm and missing humidity as 50%.
    """
    t = parse_number(temp)
    if t is None:
        return temp
    v = parse_number(wind)
    if v is None:
        v = 0.0
    h = parse_number(humidity)
    if h is None:
        h = DEFAULT_HUMIDITY

    metric = units == Units.METRIC
    temp_f = t * 9 / 5 + 32 if metric else t
    wind_mph = v / KMH_PER_MPH if metric else v

    feels_f = temp_f
    if temp_f <= WIND_CHILL_MAX_TEMP_F and wind_mph >= WIND_CHILL_MIN_WIND_MPH:
        feels_f = wind_chill_f(temp_f, wind_mph)
    elif temp_f >= HEAT_INDEX_MIN_TEMP_F and h >= HEAT_INDEX_MIN_HUMIDITY:
        feels_f = heat_index_f(temp_f, h)

    feels = (feels_f - 32) * 5 / 9 if metric else feels_f
    return round_half_up(feels, 1)
