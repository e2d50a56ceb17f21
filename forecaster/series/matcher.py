"""Lookups over gridpoint time series.

Each record is valid over the half-open window [start, start + duration).
Bad input (unparseable targets, malformed records, non-list series) means
"no data" and yields None; nothing here raises.
"""

from collections.abc import Iterable
from datetime import datetime, timedelta
from typing import Any

from forecaster.convert.units import parse_number
from forecaster.ingest.snapshot import parse_record
from forecaster.ingest.timestamps import day_start, parse_instant
from forecaster.models.forecast import TimeSeriesRecord

ONE_DAY = timedelta(days=1)


def _records(records: Any) -> Iterable[TimeSeriesRecord]:
    """Yield usable records, accepting raw {"validTime", "value"} dicts too."""
    if not isinstance(records, (list, tuple)):
        return
    for entry in records:
        if isinstance(entry, TimeSeriesRecord):
            yield entry
        elif isinstance(entry, dict) and entry.get("validTime"):
            yield parse_record(entry)


def _target(target: Any) -> datetime | None:
    if target is None or target == "":
        return None
    return parse_instant(target)


def _has_window(record: TimeSeriesRecord) -> bool:
    return (
        record.start is not None
        and record.duration is not None
        and record.duration > timedelta(0)
    )


def find_value_for_timestamp(target: Any, records: Any) -> Any:
    """Value of the first record whose validity window contains target."""
    when = _target(target)
    if when is None:
        return None
    for record in _records(records):
        if not _has_window(record):
            continue
        if record.start <= when < record.start + record.duration:
            return record.value
    return None


def find_value_for_timestamp_matching_day(target: Any, records: Any) -> Any:
    """Value of the first record starting on target's calendar day.

    Dates are compared as each instant reads in its own UTC offset, not as
    elapsed time.
    """
    when = _target(target)
    if when is None:
        return None
    target_date = when.date()
    for record in _records(records):
        if not _has_window(record):
            continue
        if record.start.date() == target_date:
            return record.value
    return None


def accumulate_value_for_timestamp(target: Any, records: Any) -> float | None:
    """Sum the numeric values of every record starting on target's day.

    Returns None when nothing matched, so a day that sums to 0 stays
    distinguishable from a day with no data.
    """
    when = _target(target)
    if when is None:
        return None
    target_midnight = day_start(when)

    total = 0.0
    found = False
    for record in _records(records):
        if record.start is None:
            continue
        # Same day as seen from the record's own offset
        record_midnight = day_start(record.start)
        if not record_midnight <= target_midnight < record_midnight + ONE_DAY:
            continue
        num = parse_number(record.value)
        if num is None:
            continue
        total += num
        found = True
    return total if found else None
