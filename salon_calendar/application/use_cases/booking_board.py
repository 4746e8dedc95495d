from __future__ import annotations

import logging
from dataclasses import dataclass, field

from salon_calendar.application.dto.booking_payload import ingest_bookings, ingest_employees
from salon_calendar.application.exceptions import BookingNotFoundError
from salon_calendar.application.ports.booking_api import BookingApiPort
from salon_calendar.application.use_cases.status_transition import StatusTransition
from salon_calendar.domain.entities.booking import BookingRecord, BookingStatus
from salon_calendar.domain.entities.employee import Employee
from salon_calendar.domain.entities.status_change import StatusChange


@dataclass(frozen=True)
class BoardSnapshot:
    """Bookings and employees of one place, as last fetched."""

    place_id: int
    bookings: list[BookingRecord] = field(default_factory=list)
    employees: dict[int, Employee] = field(default_factory=dict)

    def find(self, booking_id: int) -> BookingRecord:
        for booking in self.bookings:
            if booking.id == booking_id:
                return booking
        raise BookingNotFoundError(f"Booking {booking_id} not found for place {self.place_id}")


class BookingBoardUseCase:
    """Fetch snapshots from the booking API and push validated status changes back."""

    def __init__(self, api: BookingApiPort, transition: StatusTransition | None = None) -> None:
        self._api = api
        self._transition = transition or StatusTransition()
        self._logger = logging.getLogger(__name__)

    @property
    def transition(self) -> StatusTransition:
        return self._transition

    def load_snapshot(self, place_id: int) -> BoardSnapshot:
        bookings = ingest_bookings(self._api.list_place_bookings(place_id))
        employees = ingest_employees(self._api.list_place_employees(place_id))
        self._logger.info("Board snapshot loaded", extra={"place_id": place_id, "count": len(bookings)})
        return BoardSnapshot(place_id=place_id, bookings=bookings, employees=employees)

    def commit_status_change(self, booking: BookingRecord, target: BookingStatus | str) -> StatusChange:
        change = self._transition.change_status(booking, target)
        self._persist(change)
        return change

    def accept(self, booking: BookingRecord) -> StatusChange:
        change = self._transition.accept(booking)
        self._persist(change)
        return change

    def decline(self, booking: BookingRecord) -> StatusChange:
        change = self._transition.decline(booking)
        self._persist(change)
        return change

    def _persist(self, change: StatusChange) -> None:
        if change.new_status is BookingStatus.cancelled:
            self._api.cancel_booking(change.booking_id)
        else:
            self._api.update_booking_status(change.booking_id, change.new_status.value)
