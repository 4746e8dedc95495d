from __future__ import annotations

import logging
import re
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from salon_calendar.application.utils.calendar_dates import parse_booking_date
from salon_calendar.domain.entities.booking import BookingRecord, BookingStatus
from salon_calendar.domain.entities.employee import Employee
from salon_calendar.domain.exceptions import BookingDataError

logger = logging.getLogger(__name__)

_TIME_WITH_SECONDS = re.compile(r"([0-9]{2}:[0-9]{2}):[0-5][0-9]")


class BookingPayload(BaseModel):
    """Booking row as returned by the owner bookings endpoint."""

    model_config = ConfigDict(extra="ignore")

    id: int
    booking_date: str
    booking_time: str
    status: str
    employee_id: int | None = None
    place_id: int | None = Field(default=None, validation_alias=AliasChoices("place_id", "salon_id"))
    customer_name: str = ""
    customer_email: str | None = None
    customer_phone: str | None = None
    service_name: str = ""
    employee_name: str | None = None
    total_price: float | None = None
    duration_minutes: int | None = Field(default=None, validation_alias=AliasChoices("duration_minutes", "duration"))

    @field_validator("booking_time", mode="before")
    @classmethod
    def _strip_seconds(cls, value: Any) -> Any:
        # The API may serialize times as HH:MM:SS; anything else is left for the entity to reject
        if isinstance(value, str):
            match = _TIME_WITH_SECONDS.fullmatch(value)
            if match:
                return match.group(1)
        return value

    def to_entity(self) -> BookingRecord:
        return BookingRecord(
            id=self.id,
            booking_date=parse_booking_date(self.booking_date),
            booking_time=self.booking_time,
            status=BookingStatus.parse(self.status),
            employee_id=self.employee_id,
            place_id=self.place_id,
            customer_name=self.customer_name,
            customer_email=self.customer_email,
            customer_phone=self.customer_phone,
            service_name=self.service_name,
            employee_name=self.employee_name,
            total_price=self.total_price,
            duration_minutes=self.duration_minutes,
        )


class EmployeePayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    color_code: str | None = None
    photo_url: str | None = None

    def to_entity(self) -> Employee:
        return Employee(id=self.id, name=self.name, color=self.color_code or None, photo_url=self.photo_url)


def ingest_bookings(rows: list[dict[str, Any]]) -> list[BookingRecord]:
    """Validate raw API rows into booking records. Fails on the first bad row."""
    bookings: list[BookingRecord] = []
    for row in rows:
        try:
            bookings.append(BookingPayload.model_validate(row).to_entity())
        except ValidationError as e:
            raise BookingDataError(f"Invalid booking row {row.get('id')!r}: {e}") from e
        except BookingDataError as e:
            logger.warning("Rejected booking row", extra={"booking_id": row.get("id"), "error": str(e)})
            raise
    return bookings


def ingest_employees(rows: list[dict[str, Any]]) -> dict[int, Employee]:
    try:
        employees = [EmployeePayload.model_validate(row).to_entity() for row in rows]
    except ValidationError as e:
        raise BookingDataError(f"Invalid employee row: {e}") from e
    return {employee.id: employee for employee in employees}
