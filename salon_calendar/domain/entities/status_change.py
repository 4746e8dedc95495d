from __future__ import annotations

from dataclasses import dataclass

from salon_calendar.domain.entities.booking import BookingStatus


@dataclass(frozen=True)
class StatusChange:
    booking_id: int
    previous_status: BookingStatus
    new_status: BookingStatus
