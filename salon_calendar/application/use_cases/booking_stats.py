from __future__ import annotations

from datetime import datetime

from salon_calendar.application.use_cases.filter_composer import in_current_week
from salon_calendar.application.utils.calendar_dates import anchor_dates
from salon_calendar.domain.entities.booking import BookingRecord
from salon_calendar.domain.entities.booking_stats import BookingStats, EmployeeLoad


def summarize(bookings: list[BookingRecord], reference_now: datetime) -> BookingStats:
    """Counts shown in the stats bar above the booking list."""
    anchors = anchor_dates(reference_now)
    return BookingStats(
        today_count=sum(1 for b in bookings if b.booking_date == anchors.today),
        pending_count=sum(1 for b in bookings if b.is_pending),
        week_total=sum(1 for b in bookings if in_current_week(b, anchors)),
    )


def employee_load(bookings: list[BookingRecord], reference_now: datetime) -> dict[int, EmployeeLoad]:
    """Per-employee today/week counts for the team selector."""
    anchors = anchor_dates(reference_now)
    counts: dict[int, tuple[int, int]] = {}
    for booking in bookings:
        if booking.employee_id is None:
            continue
        today, week = counts.get(booking.employee_id, (0, 0))
        if booking.booking_date == anchors.today:
            today += 1
        if in_current_week(booking, anchors):
            week += 1
        counts[booking.employee_id] = (today, week)
    return {employee_id: EmployeeLoad(today=t, week=w) for employee_id, (t, w) in counts.items()}
