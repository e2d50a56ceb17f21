"""Tests for precipitation start/stop detection."""

from datetime import datetime, timedelta

import pytest

from forecaster.derive.precipitation import classify_condition, detect_precipitation_change
from forecaster.models.display import PrecipitationChangeType, PrecipitationKind
from forecaster.models.forecast import PeriodRecord

NOW = datetime.fromisoformat("2026-02-11T09:30:00-05:00")
HOUR_START = datetime.fromisoformat("2026-02-11T09:00:00-05:00")


def _hour(offset: int, code: str | None, with_end: bool = True) -> PeriodRecord:
    start = HOUR_START + timedelta(hours=offset)
    return PeriodRecord(
        start_time=start,
        end_time=start + timedelta(hours=1) if with_end else None,
        icon=f"https://api.weather.gov/icons/land/day/{code}?size=small" if code else None,
    )


def _detect(hourly, **kwargs):
    return detect_precipitation_change(hourly, now=NOW, time_format="%H:%M", **kwargs)


class TestClassifyCondition:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("rain", PrecipitationKind.RAIN),
            ("thunderstorm", PrecipitationKind.RAIN),
            ("snow", PrecipitationKind.SNOW),
            ("SNOW", PrecipitationKind.SNOW),
            ("sleet", PrecipitationKind.SNOW),
            ("Freezing rain", PrecipitationKind.SNOW),
            ("clear-day", None),
            ("cloudy", None),
            (None, None),
        ],
    )
    def test_kinds(self, name, expected):
        assert classify_condition(name) == expected


class TestGuards:
    def test_disabled(self):
        hourly = [_hour(0, "skc"), _hour(1, "rain")]
        assert _detect(hourly, enabled=False) is None

    def test_not_a_list(self):
        assert _detect(None) is None

    def test_too_short(self):
        assert _detect([]) is None
        assert _detect([_hour(0, "rain")]) is None


class TestStart:
    def test_rain_start(self):
        result = _detect([_hour(0, "skc"), _hour(1, "skc"), _hour(2, "rain")])
        assert result is not None
        assert result.type == PrecipitationChangeType.START
        assert result.precip_type == PrecipitationKind.RAIN
        assert result.time == "11:00"
        assert result.message == "Rain expected at 11:00"

    def test_showers_and_thunder_are_rain(self):
        assert _detect([_hour(0, "sct"), _hour(1, "rain_showers")]).precip_type == "rain"
        assert _detect([_hour(0, "bkn"), _hour(1, "tsra")]).precip_type == "rain"

    def test_snow_start(self):
        result = _detect([_hour(0, "ovc"), _hour(1, "snow")])
        assert result.precip_type == PrecipitationKind.SNOW
        assert result.message == "Snow expected at 10:00"

    def test_blizzard_is_snow(self):
        assert _detect([_hour(0, "ovc"), _hour(1, "blizzard")]).precip_type == "snow"

    def test_sleet_reported_as_snow(self):
        result = _detect([_hour(0, "skc"), _hour(1, "sleet")])
        assert result.precip_type == PrecipitationKind.SNOW
        assert result.message == "Snow expected at 10:00"

    def test_freezing_rain_reported_as_snow(self):
        assert _detect([_hour(0, "ovc"), _hour(1, "fzra")]).precip_type == "snow"

    def test_start_in_past_skipped(self):
        # The wet hour starts at 9:00, before now (9:30)
        early = [_hour(-1, "skc"), _hour(0, "rain")]
        assert _detect(early) is None

    def test_tomorrow_suffix(self):
        hourly = [_hour(i, "skc") for i in range(16)] + [_hour(16, "rain")]
        result = _detect(hourly)
        assert result.time == "01:00"
        assert result.message == "Rain expected at 01:00 tomorrow"

    def test_missing_start_time_skipped(self):
        hourly = [
            PeriodRecord(start_time=None, icon="https://api.weather.gov/icons/land/day/skc"),
            PeriodRecord(start_time=None, icon="https://api.weather.gov/icons/land/day/rain"),
        ]
        assert _detect(hourly) is None


class TestStop:
    def test_rain_stop_uses_end_time(self):
        result = _detect([_hour(0, "rain"), _hour(1, "rain"), _hour(2, "sct")])
        assert result.type == PrecipitationChangeType.STOP
        assert result.precip_type == PrecipitationKind.RAIN
        assert result.message == "Rain ending by 11:00"

    def test_snow_stop(self):
        result = _detect([_hour(0, "snow"), _hour(1, "ovc")])
        assert result.message == "Snow ending by 10:00"

    def test_freezing_rain_stop_reported_as_snow(self):
        result = _detect([_hour(0, "fzra"), _hour(1, "fzra"), _hour(2, "skc")])
        assert result.precip_type == PrecipitationKind.SNOW
        assert result.message == "Snow ending by 11:00"

    def test_stop_falls_back_to_start_plus_hour(self):
        hourly = [_hour(0, "rain", with_end=False), _hour(1, "rain", with_end=False), _hour(2, "skc")]
        result = _detect(hourly)
        assert result.time == "11:00"

    def test_stop_falls_back_to_next_start(self):
        hourly = [
            _hour(0, "rain"),
            PeriodRecord(start_time=None, icon="https://api.weather.gov/icons/land/day/rain"),
            _hour(2, "skc"),
        ]
        result = _detect(hourly)
        assert result.type == PrecipitationChangeType.STOP
        assert result.time == "11:00"


class TestNoChange:
    def test_precipitation_continues(self):
        assert _detect([_hour(0, "rain"), _hour(1, "rain"), _hour(2, "rain")]) is None

    def test_dry_continues(self):
        assert _detect([_hour(0, "skc"), _hour(1, "skc"), _hour(2, "sct")]) is None

    def test_missing_icons(self):
        assert _detect([_hour(0, None), _hour(1, None)]) is None

    def test_only_first_event_reported(self):
        hourly = [_hour(0, "skc"), _hour(1, "rain"), _hour(2, "skc"), _hour(3, "snow")]
        result = _detect(hourly)
        assert result.type == PrecipitationChangeType.START
        assert result.time == "10:00"

    def test_beyond_24_hours_ignored(self):
        hourly = [_hour(i, "skc") for i in range(25)] + [_hour(i, "rain") for i in range(25, 30)]
        assert _detect(hourly) is None

    def test_index_23_is_last_scanned(self):
        hourly = [_hour(i, "skc") for i in range(23)] + [_hour(23, "rain")]
        result = _detect(hourly)
        assert result is not None
        assert result.message.endswith("tomorrow")
