"""Daily high/low reconciliation between hourly periods and grid series.

The grid min/max series is often sparse (two or three days) while hourly
periods cover a shorter horizon more densely. Taking the more extreme of the
two never reports a value milder than either source.
"""

from collections.abc import Callable, Sequence
from datetime import datetime

from forecaster.convert.units import format_number, parse_number
from forecaster.models.forecast import PeriodRecord


def daily_min_max_from_hourly(
    daily_start: datetime | None, hourly: Sequence[PeriodRecord] | None
) -> tuple[float | None, float | None]:
    """Min and max numeric hourly temperature on daily_start's calendar day."""
    if daily_start is None or not isinstance(hourly, (list, tuple)):
        return None, None

    target_date = daily_start.date()
    low: float | None = None
    high: float | None = None
    for period in hourly:
        if period is None or period.start_time is None:
            continue
        if period.start_time.date() != target_date:
            continue
        temp = parse_number(period.temperature)
        if temp is None:
            continue
        if low is None or temp < low:
            low = temp
        if high is None or temp > high:
            high = temp
    return low, high


def _reconcile(
    hourly_value: float | None,
    grid_value,
    pick: Callable[[float, float], float],
) -> str | None:
    grid_num = parse_number(grid_value)
    if hourly_value is not None and grid_num is not None:
        return format_number(pick(hourly_value, grid_num))
    if hourly_value is not None:
        return format_number(hourly_value)
    if grid_num is not None:
        return format_number(grid_num)
    if isinstance(grid_value, str) and grid_value:
        # Non-numeric grid value, kept verbatim
        return grid_value
    return None


def reconcile_max(hourly_max: float | None, grid_max) -> str | None:
    return _reconcile(hourly_max, grid_max, max)


def reconcile_min(hourly_min: float | None, grid_min) -> str | None:
    return _reconcile(hourly_min, grid_min, min)
