"""
Tests for day/week time-grid positioning.
"""

from __future__ import annotations

from datetime import date, datetime

import pytest

from salon_calendar.application.use_cases.calendar_grid import (
    CalendarGridPositioner,
    shift_day,
    shift_week,
    week_days,
    week_label,
)
from salon_calendar.domain.entities.booking import BookingRecord, BookingStatus
from salon_calendar.domain.entities.grid import GridConfig
from salon_calendar.domain.exceptions import MalformedTimeError


def test_week_grid_position_for_half_past_two(make_booking):
    grid = CalendarGridPositioner.for_week()
    position = grid.position(make_booking(1, "2024-06-12", "14:30"))

    assert position.top == 390
    assert position.height == 60


def test_day_grid_uses_larger_hours(make_booking):
    grid = CalendarGridPositioner.for_day()
    position = grid.position(make_booking(1, "2024-06-12", "09:15"))

    assert position.top == 100
    assert position.height == 80


def test_minimum_height_applies_to_short_durations(make_booking):
    grid = CalendarGridPositioner(GridConfig(hour_height_px=60, min_height_px=40, default_duration_minutes=15))

    assert grid.position(make_booking(1, "2024-06-12", "10:00")).height == 40


def test_booking_duration_is_ignored_unless_enabled(make_booking):
    booking = make_booking(1, "2024-06-12", "10:00", duration_minutes=120)

    assert CalendarGridPositioner.for_week().position(booking).height == 60
    grid = CalendarGridPositioner(GridConfig(hour_height_px=60, min_height_px=40, use_booking_duration=True))
    assert grid.position(booking).height == 120


def test_out_of_range_times_are_not_clipped(make_booking):
    grid = CalendarGridPositioner.for_week()

    assert grid.position(make_booking(1, "2024-06-12", "07:00")).top == -60
    assert grid.position(make_booking(2, "2024-06-12", "21:00")).top == 780
    assert grid.grid_height_px == 720


def test_later_time_is_lower_on_the_grid(make_booking):
    grid = CalendarGridPositioner.for_day()
    earlier = grid.position(make_booking(1, "2024-06-12", "10:59"))
    later = grid.position(make_booking(2, "2024-06-12", "11:00"))

    assert earlier.top < later.top


def test_overlapping_bookings_get_identical_positions(make_booking):
    grid = CalendarGridPositioner.for_day()
    placements = grid.layout_day(
        [make_booking(1, "2024-06-12", "10:00"), make_booking(2, "2024-06-12", "10:00")],
        date(2024, 6, 12),
    )

    assert placements[0].top == placements[1].top


def test_layout_day_filters_and_sorts(make_booking):
    bookings = [
        make_booking(1, "2024-06-12", "16:00"),
        make_booking(2, "2024-06-13", "09:00"),
        make_booking(3, "2024-06-12", "09:30"),
    ]

    placements = CalendarGridPositioner.for_day().layout_day(bookings, date(2024, 6, 12))

    assert [p.booking.id for p in placements] == [3, 1]
    assert all(p.column == 0 for p in placements)


def test_layout_week_columns(make_booking):
    bookings = [
        make_booking(1, "2024-06-09", "09:00"),
        make_booking(2, "2024-06-15", "09:00"),
        make_booking(3, "2024-06-16", "09:00"),  # next week
        make_booking(4, "2024-06-12", "14:30"),
    ]

    placements = CalendarGridPositioner.for_week().layout_week(bookings, date(2024, 6, 9))

    assert [(p.booking.id, p.column) for p in placements] == [(1, 0), (4, 3), (2, 6)]
    assert placements[1].top == 390


def test_malformed_time_fails_fast():
    with pytest.raises(MalformedTimeError):
        BookingRecord(id=1, booking_date=date(2024, 6, 12), booking_time="9am", status=BookingStatus.pending)


def test_time_slots_cover_grid_hours():
    slots = CalendarGridPositioner.for_day().time_slots()

    assert [s.label for s in slots][:2] == ["08:00", "09:00"]
    assert slots[-1].label == "19:00"
    assert slots[-1].top == 11 * 80


def test_current_time_offset():
    grid = CalendarGridPositioner.for_day()

    assert grid.current_time_offset(datetime(2024, 6, 12, 10, 45)) == 160
    assert grid.current_time_offset(datetime(2024, 6, 12, 20, 0)) is None
    assert grid.current_time_offset(datetime(2024, 6, 12, 7, 59)) is None


def test_week_days_and_navigation(reference_now):
    days = week_days(date(2024, 6, 9), reference_now)

    assert [d.label for d in days] == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
    assert [d.is_today for d in days].index(True) == 3
    assert days[0].date_string == "2024-06-09"
    assert week_label(date(2024, 6, 30)) == "Jun 30 - Jul 6"
    assert shift_week(date(2024, 6, 9), "next") == date(2024, 6, 16)
    assert shift_week(date(2024, 6, 9), "prev") == date(2024, 6, 2)
    assert shift_day(date(2024, 6, 30), "next") == date(2024, 7, 1)
    with pytest.raises(ValueError):
        shift_day(date(2024, 6, 30), "sideways")


def test_layout_is_idempotent(make_booking):
    bookings = [
        make_booking(1, "2024-06-12", "16:00"),
        make_booking(2, "2024-06-10", "09:00"),
        make_booking(3, "2024-06-12", "09:30"),
    ]
    week_grid = CalendarGridPositioner.for_week()
    day_grid = CalendarGridPositioner.for_day()

    assert week_grid.layout_week(bookings, date(2024, 6, 9)) == week_grid.layout_week(bookings, date(2024, 6, 9))
    assert day_grid.layout_day(bookings, date(2024, 6, 12)) == day_grid.layout_day(bookings, date(2024, 6, 12))
