"""Parsing for NWS instants, ISO-8601 durations and validTime intervals."""

import re
from datetime import UTC, datetime, timedelta

# PnYnMnWnDTnHnMnS; years and months are approximated as 365 and 30 days
_DURATION_PATTERN = re.compile(
    r"^P(?!$)"
    r"(?:(?P<years>\d+(?:\.\d+)?)Y)?"
    r"(?:(?P<months>\d+(?:\.\d+)?)M)?"
    r"(?:(?P<weeks>\d+(?:\.\d+)?)W)?"
    r"(?:(?P<days>\d+(?:\.\d+)?)D)?"
    r"(?:T(?=\d)"
    r"(?:(?P<hours>\d+(?:\.\d+)?)H)?"
    r"(?:(?P<minutes>\d+(?:\.\d+)?)M)?"
    r"(?:(?P<seconds>\d+(?:\.\d+)?)S)?"
    r")?$",
    re.IGNORECASE,
)


def parse_instant(value: object) -> datetime | None:
    """Parse an ISO instant, keeping its own UTC offset. Naive values are UTC."""
    if isinstance(value, datetime):
        dt = value
    else:
        try:
            dt = datetime.fromisoformat(str(value).strip())
        except (ValueError, TypeError):
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def parse_duration(text: str | None) -> timedelta | None:
    """Parse an ISO-8601 duration such as "PT3H" or "P1DT6H"."""
    if not text:
        return None
    m = _DURATION_PATTERN.match(text.strip())
    if m is None:
        return None
    parts = {k: float(v) for k, v in m.groupdict().items() if v is not None}
    return timedelta(
        days=parts.get("years", 0) * 365
        + parts.get("months", 0) * 30
        + parts.get("weeks", 0) * 7
        + parts.get("days", 0),
        hours=parts.get("hours", 0),
        minutes=parts.get("minutes", 0),
        seconds=parts.get("seconds", 0),
    )


def parse_valid_time(valid_time: object) -> tuple[datetime | None, timedelta | None]:
    """Split "<start>/<duration>" into its parsed parts.

    Either part is None when missing or unparseable. Only duration-style
    ends (starting with "P") are recognized.
    """
    if not isinstance(valid_time, str) or not valid_time:
        return None, None
    parts = valid_time.split("/")
    start = parse_instant(parts[0])
    duration = None
    if len(parts) == 2 and parts[1][:1].upper() == "P":
        duration = parse_duration(parts[1])
    return start, duration


def day_start(dt: datetime) -> datetime:
    """Midnight of dt's calendar day, in dt's own offset."""
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def hour_start(dt: datetime) -> datetime:
    return dt.replace(minute=0, second=0, microsecond=0)
