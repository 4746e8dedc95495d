from __future__ import annotations

import logging
from datetime import date, datetime, timedelta

from salon_calendar.application.utils.calendar_dates import week_span_label, weekday_label
from salon_calendar.domain.entities.booking import BookingRecord
from salon_calendar.domain.entities.grid import (
    DAY_GRID,
    WEEK_GRID,
    GridConfig,
    GridPlacement,
    GridPosition,
    TimeSlot,
    WeekDay,
)


class CalendarGridPositioner:
    """
    Map bookings onto a fixed-hour calendar column.

    Positions are absolute: bookings outside the grid hours get a negative or
    past-the-end top, and overlapping bookings are placed independently.
    """

    def __init__(self, config: GridConfig = DAY_GRID) -> None:
        self._config = config
        self._logger = logging.getLogger(__name__)

    @classmethod
    def for_day(cls, config: GridConfig | None = None) -> CalendarGridPositioner:
        return cls(config or DAY_GRID)

    @classmethod
    def for_week(cls, config: GridConfig | None = None) -> CalendarGridPositioner:
        return cls(config or WEEK_GRID)

    @property
    def config(self) -> GridConfig:
        return self._config

    @property
    def grid_height_px(self) -> float:
        return (self._config.end_hour - self._config.start_hour) * self._config.hour_height_px

    def position(self, booking: BookingRecord) -> GridPosition:
        hours, minutes = booking.time_of_day
        offset_minutes = hours * 60 + minutes - self._config.start_hour * 60
        top = (offset_minutes / 60) * self._config.hour_height_px

        duration = self._config.default_duration_minutes
        if self._config.use_booking_duration and booking.duration_minutes:
            duration = booking.duration_minutes
        height = max((duration / 60) * self._config.hour_height_px, self._config.min_height_px)
        return GridPosition(top=top, height=height)

    def layout_day(self, bookings: list[BookingRecord], selected_date: date) -> list[GridPlacement]:
        day_bookings = sorted(
            (b for b in bookings if b.booking_date == selected_date),
            key=lambda b: b.time_of_day,
        )
        return [self._place(booking, column=0) for booking in day_bookings]

    def layout_week(self, bookings: list[BookingRecord], week_start: date) -> list[GridPlacement]:
        placements: list[GridPlacement] = []
        for booking in bookings:
            column = (booking.booking_date - week_start).days
            if 0 <= column <= 6:
                placements.append(self._place(booking, column=column))
        placements.sort(key=lambda p: (p.column, p.booking.time_of_day))
        self._logger.debug(
            "Week grid laid out",
            extra={"week_start": week_start.isoformat(), "count": len(placements)},
        )
        return placements

    def time_slots(self) -> list[TimeSlot]:
        """Hour rows shown in the time column."""
        return [
            TimeSlot(
                hour=hour,
                label=f"{hour:02d}:00",
                top=(hour - self._config.start_hour) * self._config.hour_height_px,
            )
            for hour in range(self._config.start_hour, self._config.end_hour)
        ]

    def current_time_offset(self, reference_now: datetime) -> float | None:
        """Scroll offset for the current hour, or None outside grid hours."""
        hour = reference_now.hour
        if self._config.start_hour <= hour < self._config.end_hour:
            return (hour - self._config.start_hour) * self._config.hour_height_px
        return None

    def _place(self, booking: BookingRecord, column: int) -> GridPlacement:
        position = self.position(booking)
        return GridPlacement(booking=booking, top=position.top, height=position.height, column=column)


def week_days(week_start: date, reference_now: datetime | None = None) -> list[WeekDay]:
    today = reference_now.date() if reference_now is not None else None
    days: list[WeekDay] = []
    for offset in range(7):
        day = week_start + timedelta(days=offset)
        days.append(
            WeekDay(
                date=day,
                date_string=day.isoformat(),
                label=weekday_label(day),
                is_today=day == today,
            )
        )
    return days


def week_label(week_start: date) -> str:
    return week_span_label(week_start)


def shift_week(week_start: date, direction: str) -> date:
    """Move a week window by one week. direction is "prev" or "next"."""
    return week_start + timedelta(days=7 * _step(direction))


def shift_day(day: date, direction: str) -> date:
    return day + timedelta(days=_step(direction))


def _step(direction: str) -> int:
    if direction == "next":
        return 1
    if direction == "prev":
        return -1
    raise ValueError(f"direction must be 'prev' or 'next', got {direction!r}")
