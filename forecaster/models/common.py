"""Common types and helpers shared across models."""

from datetime import datetime
from enum import StrEnum


class Units(StrEnum):
    IMPERIAL = "imperial"
    METRIC = "metric"


def local_now() -> datetime:
    return datetime.now().astimezone()
