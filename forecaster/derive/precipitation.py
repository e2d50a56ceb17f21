"""Detect when precipitation starts or stops within the next day of hourlies."""

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta

from forecaster.ingest.icons import icon_name
from forecaster.models.common import local_now
from forecaster.models.display import (
    PrecipitationChange,
    PrecipitationChangeType,
    PrecipitationKind,
)
from forecaster.models.forecast import PeriodRecord

logger = logging.getLogger(__name__)

LOOKAHEAD_HOURS = 24
DEFAULT_TIME_FORMAT = "%-I %p"

FROZEN_MARKERS = ("snow", "sleet", "freezing", "ice", "blizzard")
RAIN_MARKERS = ("rain", "showers", "thunder", "tsra")


def classify_condition(name: str | None) -> PrecipitationKind | None:
    """Precipitation kind for a condition name, or None if dry.

    Sleet, freezing rain and ice count as snow.
    """
    if not name:
        return None
    lower = name.lower()
    if any(m in lower for m in FROZEN_MARKERS):
        return PrecipitationKind.SNOW
    if any(m in lower for m in RAIN_MARKERS):
        return PrecipitationKind.RAIN
    return None


def _kind_for(period: PeriodRecord | None) -> PrecipitationKind | None:
    if period is None:
        return None
    return classify_condition(icon_name(period.icon))


def _stop_instant(
    last_wet: PeriodRecord | None, next_period: PeriodRecord
) -> datetime | None:
    """End of the last wet period: endTime, else start + 1h, else next start."""
    if last_wet is not None and last_wet.end_time is not None:
        return last_wet.end_time
    if last_wet is not None and last_wet.start_time is not None:
        return last_wet.start_time + timedelta(hours=1)
    return next_period.start_time


def _describe(when: datetime, now: datetime, time_format: str) -> tuple[str, str]:
    """Formatted time plus " tomorrow" when when falls on a later day."""
    time_str = when.strftime(time_format)
    is_tomorrow = when.date() != now.astimezone(when.tzinfo).date()
    return time_str, " tomorrow" if is_tomorrow else ""


def detect_precipitation_change(
    hourly: Sequence[PeriodRecord] | None,
    *,
    now: datetime | None = None,
    time_format: str = DEFAULT_TIME_FORMAT,
    enabled: bool = True,
) -> PrecipitationChange | None:
    """First future start or stop of precipitation, compared to hour 0.

    Only hours 1..23 are scanned. Candidates at or before now are skipped.
    """
    if not enabled or not isinstance(hourly, (list, tuple)) or len(hourly) < 2:
        return None
    if now is None:
        now = local_now()
    elif now.tzinfo is None:
        now = now.astimezone()

    current_kind = _kind_for(hourly[0])

    for i in range(1, min(len(hourly), LOOKAHEAD_HOURS)):
        future = hourly[i]
        if future is None:
            continue
        future_kind = _kind_for(future)

        if current_kind is None and future_kind is not None:
            start = future.start_time
            if start is None or start <= now:
                continue
            time_str, suffix = _describe(start, now, time_format)
            return PrecipitationChange(
                type=PrecipitationChangeType.START,
                precip_type=future_kind,
                time=time_str,
                message=f"{future_kind.value.capitalize()} expected at {time_str}{suffix}",
            )

        if current_kind is not None and future_kind is None:
            stop = _stop_instant(hourly[i - 1], future)
            if stop is None or stop <= now:
                continue
            time_str, suffix = _describe(stop, now, time_format)
            return PrecipitationChange(
                type=PrecipitationChangeType.STOP,
                precip_type=current_kind,
                time=time_str,
                message=f"{current_kind.value.capitalize()} ending by {time_str}{suffix}",
            )

    logger.debug("No precipitation change within %d hours", LOOKAHEAD_HOURS)
    return None
