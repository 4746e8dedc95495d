from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Mapping

from salon_calendar.domain.entities.booking import BookingRecord, BookingStatus
from salon_calendar.domain.entities.employee import Employee
from salon_calendar.domain.entities.month_marking import DateMarking, DotMarker, MarkerMode

STATUS_COLORS: dict[str, str] = {
    BookingStatus.pending.value: "#f59e0b",
    BookingStatus.confirmed.value: "#10b981",
    BookingStatus.cancelled.value: "#ef4444",
    BookingStatus.completed.value: "#6b7280",
}
PLACEHOLDER_COLOR = "#9ca3af"
SELECTED_DAY_COLOR = "#000000"


def status_color(status: BookingStatus | str) -> str:
    """Dot colour for a status. Display-only: unknown values get the placeholder."""
    key = status.value if isinstance(status, BookingStatus) else str(status)
    return STATUS_COLORS.get(key, PLACEHOLDER_COLOR)


def resolve_marker_mode(selected_employee_ids: Iterable[int] | None) -> MarkerMode:
    if selected_employee_ids is not None and len(set(selected_employee_ids)) > 1:
        return MarkerMode.employee
    return MarkerMode.status


def legend() -> list[tuple[BookingStatus, str]]:
    return [(status, STATUS_COLORS[status.value]) for status in BookingStatus]


def bookings_on(bookings: list[BookingRecord], day: date) -> list[BookingRecord]:
    """Cards listed under the month grid for the selected day, in input order."""
    return [booking for booking in bookings if booking.booking_date == day]


class MonthMarkerAggregator:
    """Reduce bookings to coloured dots per calendar date."""

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def dot_color(
        self,
        booking: BookingRecord,
        mode: MarkerMode,
        employees: Mapping[int, Employee] | None = None,
    ) -> str:
        if mode is MarkerMode.employee and booking.employee_id is not None and employees:
            employee = employees.get(booking.employee_id)
            if employee is not None and employee.color:
                return employee.color
        return status_color(booking.status)

    def aggregate(
        self,
        bookings: list[BookingRecord],
        selected_date: date | None = None,
        employees: Mapping[int, Employee] | None = None,
        selected_employee_ids: Iterable[int] | None = None,
    ) -> dict[str, DateMarking]:
        mode = resolve_marker_mode(selected_employee_ids)
        dots_by_date: dict[str, list[DotMarker]] = {}
        if selected_date is not None:
            dots_by_date[selected_date.isoformat()] = []

        for booking in bookings:
            color = self.dot_color(booking, mode, employees)
            dots_by_date.setdefault(booking.booking_date.isoformat(), []).append(
                DotMarker(color=color, selected_color=color)
            )

        selected_key = selected_date.isoformat() if selected_date is not None else None
        markings = {
            date_key: DateMarking(
                dots=tuple(dots),
                selected=date_key == selected_key,
                selected_color=SELECTED_DAY_COLOR if date_key == selected_key else None,
            )
            for date_key, dots in dots_by_date.items()
        }
        self._logger.debug(
            "Month markers aggregated",
            extra={"count": len(bookings), "mode": mode.value, "dates": len(markings)},
        )
        return markings
