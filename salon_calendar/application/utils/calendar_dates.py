from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from salon_calendar.domain.exceptions import MalformedDateError

MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
# Sunday-first, matching the week layout of the calendar views
WEEKDAY_ABBREVIATIONS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


@dataclass(frozen=True)
class AnchorDates:
    today: date
    tomorrow: date
    week_start: date

    @property
    def week_end(self) -> date:
        return self.week_start + timedelta(days=6)


def parse_booking_date(value: str | date) -> date:
    """Parse a YYYY-MM-DD booking date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).strip(), "%Y-%m-%d").date()
    except ValueError as e:
        raise MalformedDateError(f"booking_date must follow YYYY-MM-DD format, got {value!r}") from e


def sunday_offset(day: date) -> int:
    """Days since the most recent Sunday (0 for Sunday, 6 for Saturday)."""
    return (day.weekday() + 1) % 7


def week_start_of(day: date) -> date:
    return day - timedelta(days=sunday_offset(day))


def anchor_dates(reference_now: datetime) -> AnchorDates:
    today = reference_now.date() if isinstance(reference_now, datetime) else reference_now
    return AnchorDates(
        today=today,
        tomorrow=today + timedelta(days=1),
        week_start=week_start_of(today),
    )


def short_date_label(day: date) -> str:
    """Format as "Jun 9"."""
    return f"{MONTH_ABBREVIATIONS[day.month - 1]} {day.day}"


def week_span_label(week_start: date) -> str:
    """Format a Sunday-start week as "Jun 9 - Jun 15"."""
    return f"{short_date_label(week_start)} - {short_date_label(week_start + timedelta(days=6))}"


def weekday_label(day: date) -> str:
    return WEEKDAY_ABBREVIATIONS[sunday_offset(day)]
