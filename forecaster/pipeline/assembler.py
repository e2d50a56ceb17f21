"""Forecast assembler: one refresh cycle from raw documents to display forecast."""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any

from forecaster.config.schema import ForecastConfig
from forecaster.derive.precipitation import detect_precipitation_change
from forecaster.ingest.icons import icon_name
from forecaster.ingest.snapshot import build_snapshot
from forecaster.models.common import local_now
from forecaster.models.display import (
    CurrentConditions,
    DailyItem,
    DisplayForecast,
    HourlyItem,
)
from forecaster.models.forecast import PeriodRecord, WeatherSnapshot
from forecaster.pipeline.augment import augment_snapshot
from forecaster.reporting.formatters import (
    format_hi_low_temperature,
    format_precipitation,
    format_temperature,
    format_wind,
)

logger = logging.getLogger(__name__)

UpdateListener = Callable[[dict[str, Any]], None]

_EMPTY_PERIOD = PeriodRecord(start_time=None)


class ForecastAssembler:
    def __init__(self, config: ForecastConfig | None = None):
        self.config = config or ForecastConfig()
        self._listeners: list[UpdateListener] = []

    def add_listener(self, callback: UpdateListener) -> None:
        """Register a callback receiving the raw documents after each refresh."""
        self._listeners.append(callback)

    def refresh(
        self,
        hourly_doc: Any,
        daily_doc: Any,
        grid_doc: Any,
        now: datetime | None = None,
    ) -> DisplayForecast:
        """Build a fresh snapshot from the documents and assemble it."""
        snapshot = build_snapshot(hourly_doc, daily_doc, grid_doc)
        forecast = self.assemble(snapshot, now=now)

        payload = {"hourly": hourly_doc, "daily": daily_doc, "grid": grid_doc}
        for callback in self._listeners:
            try:
                callback(payload)
            except Exception:
                logger.exception("Forecast update listener failed")
        return forecast

    def assemble(
        self, snapshot: WeatherSnapshot, now: datetime | None = None
    ) -> DisplayForecast:
        """Augment the snapshot and format it for display."""
        if now is None:
            now = local_now()
        elif now.tzinfo is None:
            now = now.astimezone()

        cfg = self.config
        augmented = augment_snapshot(snapshot, now, cfg.units)
        hourly, daily = augmented.hourly, augmented.daily
        if not hourly:
            logger.warning("No hourly periods available, current conditions will be blank")
        if not daily:
            logger.warning("No daily periods available, summary will be blank")

        hourlies = self._sample_hourly(hourly) if cfg.show_hourly_forecast else []
        dailies = self._select_daily(daily, now) if cfg.show_daily_forecast else []

        precipitation_change = detect_precipitation_change(
            hourly,
            now=now,
            time_format=cfg.label_time_format,
            enabled=cfg.show_precipitation_start_stop,
        )

        return DisplayForecast(
            currently=self._current_conditions(hourly, daily),
            summary=self._summary(daily),
            precipitation_change=precipitation_change,
            hourly=hourlies,
            daily=dailies,
        )

    def _summary(self, daily: list[PeriodRecord]) -> str:
        if not daily:
            return ""
        if self.config.concise:
            return daily[0].short_forecast
        return daily[0].detailed_forecast

    def _current_conditions(
        self, hourly: list[PeriodRecord], daily: list[PeriodRecord]
    ) -> CurrentConditions:
        now_hour = hourly[0] if hourly else _EMPTY_PERIOD
        today = daily[0] if daily else _EMPTY_PERIOD
        return CurrentConditions(
            temperature=format_temperature(now_hour.temperature),
            feels_like=format_temperature(now_hour.feels_like),
            icon=icon_name(now_hour.icon),
            temp_range=self._temp_range(today),
            precipitation=format_precipitation(
                None,
                now_hour.rain_accumulation,
                now_hour.snow_accumulation,
                self.config.units,
            ),
            wind=self._wind(now_hour),
        )

    def _sample_hourly(self, hourly: list[PeriodRecord]) -> list[HourlyItem]:
        """Every Nth hour starting at index N, up to the configured count."""
        cfg = self.config
        items: list[HourlyItem] = []
        index = cfg.hourly_forecast_interval
        while len(items) < cfg.max_hourlies_to_show:
            if index < 0 or index >= len(hourly):
                break
            items.append(self._hourly_item(hourly[index]))
            index += cfg.hourly_forecast_interval
        return items

    def _select_daily(
        self, daily: list[PeriodRecord], now: datetime
    ) -> list[DailyItem]:
        """Daily items from tomorrow (or today), skipping repeated days."""
        cfg = self.config
        if cfg.include_today_in_daily_forecast:
            first = 0
        else:
            first = _first_tomorrow_index(daily, now)
            if first is None:
                logger.debug("No daily period falls on tomorrow")
                return []

        items: list[DailyItem] = []
        previous_date = None
        for period in daily[first:]:
            if len(items) >= cfg.max_dailies_to_show:
                break
            entry_date = period.start_time.date() if period.start_time else None
            # Day/night periods share a date; keep the first of each run.
            # Undated periods have nothing to compare and are always kept.
            if entry_date is not None and entry_date == previous_date:
                continue
            previous_date = entry_date
            items.append(self._daily_item(period))
        return items

    def _hourly_item(self, period: PeriodRecord) -> HourlyItem:
        time_str = (
            period.start_time.strftime(self.config.label_time_format)
            if period.start_time
            else ""
        )
        return HourlyItem(
            time=time_str,
            icon=icon_name(period.icon),
            temperature=format_temperature(period.temperature),
            precipitation=self._precipitation(period),
            wind=self._wind(period),
        )

    def _daily_item(self, period: PeriodRecord) -> DailyItem:
        day = ""
        if period.start_time is not None:
            # label_days starts on Sunday, weekday() on Monday
            day = self.config.label_days[(period.start_time.weekday() + 1) % 7]
        return DailyItem(
            day=day,
            icon=icon_name(period.icon),
            temp_range=self._temp_range(period),
            precipitation=self._precipitation(period),
            wind=self._wind(period),
        )

    def _temp_range(self, period: PeriodRecord):
        cfg = self.config
        return format_hi_low_temperature(
            period.max_temperature,
            period.min_temperature,
            concise=cfg.concise,
            label_high=cfg.label_high,
            label_low=cfg.label_low,
        )

    def _precipitation(self, period: PeriodRecord):
        return format_precipitation(
            period.probability_of_precipitation,
            period.rain_accumulation,
            period.snow_accumulation,
            self.config.units,
        )

    def _wind(self, period: PeriodRecord):
        cfg = self.config
        return format_wind(
            period.wind_speed,
            period.wind_direction,
            period.wind_gust,
            concise=cfg.concise,
            label_gust=cfg.label_gust,
            units=cfg.units,
        )


def _first_tomorrow_index(daily: list[PeriodRecord], now: datetime) -> int | None:
    for i, period in enumerate(daily):
        start = period.start_time
        if start is None:
            continue
        tomorrow = (now.astimezone(start.tzinfo) + timedelta(days=1)).date()
        if start.date() == tomorrow:
            return i
    return None
