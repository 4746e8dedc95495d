from __future__ import annotations

import logging
from dataclasses import replace
from types import MappingProxyType
from typing import Mapping

from salon_calendar.application.exceptions import BookingNotFoundError, InvalidTransitionError
from salon_calendar.domain.entities.booking import BookingRecord, BookingStatus
from salon_calendar.domain.entities.status_change import StatusChange


def _permissive_table() -> Mapping[BookingStatus, frozenset[BookingStatus]]:
    statuses = frozenset(BookingStatus)
    return MappingProxyType({status: statuses - {status} for status in BookingStatus})


# Any status may move to any other status. Tighten a row here to restrict
# the picker without touching call sites.
TRANSITION_TABLE: Mapping[BookingStatus, frozenset[BookingStatus]] = _permissive_table()


class StatusTransition:
    """Validate status changes against a transition table."""

    def __init__(self, table: Mapping[BookingStatus, frozenset[BookingStatus]] | None = None) -> None:
        self._table = table if table is not None else TRANSITION_TABLE
        self._logger = logging.getLogger(__name__)

    @property
    def table(self) -> Mapping[BookingStatus, frozenset[BookingStatus]]:
        return self._table

    def is_allowed(self, current: BookingStatus | str, target: BookingStatus | str) -> bool:
        current_status = BookingStatus.parse(current)
        target_status = BookingStatus.parse(target)
        if current_status is target_status:
            return False
        return target_status in self._table.get(current_status, frozenset())

    def allowed_targets(self, current: BookingStatus | str) -> list[BookingStatus]:
        """Status picker options, in enum order."""
        allowed = self._table.get(BookingStatus.parse(current), frozenset())
        return [status for status in BookingStatus if status in allowed]

    def change_status(self, booking: BookingRecord, target: BookingStatus | str) -> StatusChange:
        target_status = BookingStatus.parse(target)
        if target_status is booking.status:
            raise InvalidTransitionError(
                f"Booking {booking.id} is already {booking.status.value}"
            )
        if target_status not in self._table.get(booking.status, frozenset()):
            raise InvalidTransitionError(
                f"Booking {booking.id} cannot move from {booking.status.value} to {target_status.value}"
            )

        self._logger.info(
            "Status change accepted",
            extra={
                "booking_id": booking.id,
                "status": booking.status.value,
                "target_status": target_status.value,
            },
        )
        return StatusChange(
            booking_id=booking.id,
            previous_status=booking.status,
            new_status=target_status,
        )

    def accept(self, booking: BookingRecord) -> StatusChange:
        self._require_pending(booking, "accepted")
        return self.change_status(booking, BookingStatus.confirmed)

    def decline(self, booking: BookingRecord) -> StatusChange:
        self._require_pending(booking, "declined")
        return self.change_status(booking, BookingStatus.cancelled)

    def _require_pending(self, booking: BookingRecord, action: str) -> None:
        if not booking.is_pending:
            raise InvalidTransitionError(
                f"Only pending bookings can be {action}; booking {booking.id} is {booking.status.value}"
            )


def apply_status_change(bookings: list[BookingRecord], change: StatusChange) -> list[BookingRecord]:
    """Return a copy of the list with the changed booking replaced."""
    updated: list[BookingRecord] = []
    found = False
    for booking in bookings:
        if booking.id == change.booking_id:
            updated.append(replace(booking, status=change.new_status))
            found = True
        else:
            updated.append(booking)
    if not found:
        raise BookingNotFoundError(f"Booking {change.booking_id} not found")
    return updated
