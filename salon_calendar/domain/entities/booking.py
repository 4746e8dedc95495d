from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum

from salon_calendar.domain.exceptions import MalformedTimeError, UnknownStatusError

_CLOCK_PATTERN = re.compile(r"([0-9]{2}):([0-9]{2})")


class BookingStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"

    @classmethod
    def parse(cls, value: BookingStatus | str) -> BookingStatus:
        """Coerce a raw status string. Only the exact lowercase values are accepted."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError as e:
            raise UnknownStatusError(f"Unknown booking status: {value!r}") from e


def parse_clock_time(value: str) -> tuple[int, int]:
    """Parse a zero-padded HH:MM string. Returns (hours, minutes)."""
    match = _CLOCK_PATTERN.fullmatch(value) if isinstance(value, str) else None
    if not match:
        raise MalformedTimeError(f"booking_time must follow HH:MM format, got {value!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise MalformedTimeError(f"booking_time out of range: {value!r}")
    return hours, minutes


@dataclass(frozen=True)
class BookingRecord:
    id: int
    booking_date: date
    booking_time: str  # HH:MM, local time
    status: BookingStatus
    employee_id: int | None = None
    place_id: int | None = None
    # Display-only fields, never reasoned over by the engine
    customer_name: str = ""
    customer_email: str | None = None
    customer_phone: str | None = None
    service_name: str = ""
    employee_name: str | None = None
    total_price: float | None = None
    duration_minutes: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.status, BookingStatus):
            raise UnknownStatusError(f"Unknown booking status: {self.status!r}")
        parse_clock_time(self.booking_time)

    @property
    def time_of_day(self) -> tuple[int, int]:
        return parse_clock_time(self.booking_time)

    @property
    def starts_at(self) -> datetime:
        hours, minutes = self.time_of_day
        return datetime.combine(self.booking_date, time(hours, minutes))

    @property
    def is_pending(self) -> bool:
        return self.status is BookingStatus.pending
