from __future__ import annotations

from datetime import datetime

import pytest

from salon_calendar.application.utils.calendar_dates import parse_booking_date
from salon_calendar.domain.entities.booking import BookingRecord, BookingStatus
from salon_calendar.domain.entities.employee import Employee

# Wednesday; its week starts on Sunday 2024-06-09
REFERENCE_NOW = datetime(2024, 6, 12, 10, 0)


@pytest.fixture
def reference_now() -> datetime:
    return REFERENCE_NOW


@pytest.fixture
def make_booking():
    def _make(
        booking_id: int,
        booking_date: str,
        booking_time: str = "10:00",
        status: str = "confirmed",
        employee_id: int | None = None,
        **extra,
    ) -> BookingRecord:
        return BookingRecord(
            id=booking_id,
            booking_date=parse_booking_date(booking_date),
            booking_time=booking_time,
            status=BookingStatus(status),
            employee_id=employee_id,
            **extra,
        )

    return _make


@pytest.fixture
def employees() -> dict[int, Employee]:
    return {
        1: Employee(id=1, name="Ana", color="#3b82f6"),
        2: Employee(id=2, name="Marco", color="#a855f7"),
        3: Employee(id=3, name="Lucia", color=None),
    }
