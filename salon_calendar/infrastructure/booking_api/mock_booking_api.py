from __future__ import annotations

import copy
import logging
from datetime import date, timedelta
from typing import Any

from salon_calendar.application.exceptions import BookingApiError
from salon_calendar.application.ports.booking_api import BookingApiPort


class MockBookingApi(BookingApiPort):
    def __init__(
        self,
        bookings: list[dict[str, Any]] | None = None,
        employees: dict[int, list[dict[str, Any]]] | None = None,
    ) -> None:
        self._bookings: dict[int, dict[str, Any]] = {row["id"]: dict(row) for row in bookings or []}
        self._employees: dict[int, list[dict[str, Any]]] = dict(employees or {})
        self._logger = logging.getLogger(__name__)

    @classmethod
    def demo(cls, today: date, place_id: int = 1) -> MockBookingApi:
        """A small salon with three employees and a week of bookings around `today`."""
        employees = [
            {"id": 1, "name": "Ana", "color_code": "#3b82f6", "photo_url": None},
            {"id": 2, "name": "Marco", "color_code": "#a855f7", "photo_url": None},
            {"id": 3, "name": "Lucia", "color_code": None, "photo_url": None},
        ]
        plan = [
            (0, "09:00", "confirmed", 1, "Haircut"),
            (0, "10:30", "pending", 2, "Beard trim"),
            (0, "17:15", "confirmed", 3, "Colour"),
            (1, "11:00", "pending", 1, "Manicure"),
            (2, "12:00", "confirmed", 2, "Haircut"),
            (-1, "16:00", "completed", 1, "Facial"),
            (8, "09:30", "pending", None, "Haircut"),
            (15, "14:00", "cancelled", 3, "Pedicure"),
        ]
        bookings = [
            {
                "id": index + 1,
                "place_id": place_id,
                "booking_date": (today + timedelta(days=day_offset)).isoformat(),
                "booking_time": booking_time,
                "status": status,
                "employee_id": employee_id,
                "customer_name": f"Customer {index + 1}",
                "service_name": service_name,
                "duration": 60,
            }
            for index, (day_offset, booking_time, status, employee_id, service_name) in enumerate(plan)
        ]
        return cls(bookings=bookings, employees={place_id: employees})

    def list_place_bookings(
        self,
        place_id: int,
        date_from: date | None = None,
        date_to: date | None = None,
        status: str | None = None,
        employee_id: int | None = None,
    ) -> list[dict[str, Any]]:
        rows = []
        for row in self._bookings.values():
            if row.get("place_id") != place_id:
                continue
            if date_from and row["booking_date"] < date_from.isoformat():
                continue
            if date_to and row["booking_date"] > date_to.isoformat():
                continue
            if status and row["status"] != status:
                continue
            if employee_id and row.get("employee_id") != employee_id:
                continue
            rows.append(copy.deepcopy(row))
        return rows

    def list_place_employees(self, place_id: int) -> list[dict[str, Any]]:
        return copy.deepcopy(self._employees.get(place_id, []))

    def update_booking_status(self, booking_id: int, status: str) -> None:
        row = self._get(booking_id)
        row["status"] = status
        self._logger.info("Mock booking status updated", extra={"booking_id": booking_id, "status": status})

    def cancel_booking(self, booking_id: int) -> None:
        row = self._get(booking_id)
        row["status"] = "cancelled"
        self._logger.info("Mock booking cancelled", extra={"booking_id": booking_id})

    def _get(self, booking_id: int) -> dict[str, Any]:
        if booking_id not in self._bookings:
            raise BookingApiError(f"Booking {booking_id} does not exist")
        return self._bookings[booking_id]
