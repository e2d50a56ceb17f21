"""Tests for parsing the NWS documents into a WeatherSnapshot."""

import logging
from datetime import datetime, timedelta

from forecaster.ingest.snapshot import build_snapshot, parse_grid, parse_periods, parse_record


class TestBuildSnapshot:
    def test_fixture_documents(self, hourly_doc, daily_doc, grid_doc):
        snapshot = build_snapshot(hourly_doc, daily_doc, grid_doc)
        assert len(snapshot.hourly) == 10
        assert len(snapshot.daily) == 7
        assert "maxTemperature" in snapshot.grid
        assert "windGust" in snapshot.grid

    def test_hourly_fields(self, hourly_doc, daily_doc, grid_doc):
        first = build_snapshot(hourly_doc, daily_doc, grid_doc).hourly[0]
        assert first.start_time == datetime.fromisoformat("2026-02-11T08:00:00-05:00")
        assert first.end_time == datetime.fromisoformat("2026-02-11T09:00:00-05:00")
        assert first.temperature == 30
        assert first.temperature_unit == "F"
        assert first.probability_of_precipitation == 10
        assert first.relative_humidity == 82
        assert first.wind_speed == "10 mph"
        assert first.wind_direction == "NW"
        assert first.short_forecast == "Cloudy"

    def test_daily_fields(self, hourly_doc, daily_doc, grid_doc):
        daily = build_snapshot(hourly_doc, daily_doc, grid_doc).daily
        assert daily[0].name == "Today"
        assert daily[0].is_daytime is True
        assert daily[0].short_forecast == "Snow Likely"
        assert daily[4].probability_of_precipitation is None

    def test_augmented_fields_start_empty(self, hourly_doc, daily_doc, grid_doc):
        first = build_snapshot(hourly_doc, daily_doc, grid_doc).hourly[0]
        assert first.feels_like is None
        assert first.wind_gust is None
        assert first.rain_accumulation is None

    def test_missing_documents(self, caplog):
        with caplog.at_level(logging.WARNING):
            snapshot = build_snapshot(None, {}, "junk")
        assert snapshot.hourly == []
        assert snapshot.daily == []
        assert snapshot.grid == {}
        assert "no periods" in caplog.text


class TestParsePeriods:
    def test_accepts_properties_object(self):
        doc = {"periods": [{"startTime": "2026-02-11T08:00:00-05:00", "temperature": 30}]}
        assert len(parse_periods(doc)) == 1

    def test_skips_non_dict_periods(self):
        doc = {"properties": {"periods": [None, "x", {"temperature": 5}]}}
        periods = parse_periods(doc)
        assert len(periods) == 1
        assert periods[0].start_time is None

    def test_string_temperature_parsed(self):
        doc = {"periods": [{"temperature": "72"}]}
        assert parse_periods(doc)[0].temperature == 72.0

    def test_unparseable_temperature_kept(self):
        doc = {"periods": [{"temperature": "n/a"}]}
        assert parse_periods(doc)[0].temperature == "n/a"

    def test_wrapped_temperature(self):
        doc = {"periods": [{"temperature": {"unitCode": "wmoUnit:degC", "value": 4.4}}]}
        assert parse_periods(doc)[0].temperature == 4.4

    def test_bad_start_time(self):
        doc = {"periods": [{"startTime": "soon"}]}
        assert parse_periods(doc)[0].start_time is None


class TestParseGrid:
    def test_series_only(self, grid_doc):
        grid = parse_grid(grid_doc)
        assert "elevation" not in grid
        assert "updateTime" not in grid
        assert grid["maxTemperature"].unit_code == "wmoUnit:degC"
        assert len(grid["quantitativePrecipitation"].records) == 3

    def test_record_parsed(self, grid_doc):
        record = parse_grid(grid_doc)["maxTemperature"].records[0]
        assert record.start == datetime.fromisoformat("2026-02-11T07:00:00-05:00")
        assert record.duration == timedelta(hours=12)
        assert record.value == 4.4

    def test_empty(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_grid({"properties": {}}) == {}
        assert "no value series" in caplog.text


class TestParseRecord:
    def test_missing_valid_time(self):
        record = parse_record({"value": 3})
        assert record.start is None
        assert record.duration is None
        assert record.value == 3
