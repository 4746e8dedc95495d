from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Any


class BookingApiPort(ABC):
    @abstractmethod
    def list_place_bookings(
        self,
        place_id: int,
        date_from: date | None = None,
        date_to: date | None = None,
        status: str | None = None,
        employee_id: int | None = None,
    ) -> list[dict[str, Any]]:
        """Fetch raw booking rows for a place."""
        raise NotImplementedError

    @abstractmethod
    def list_place_employees(self, place_id: int) -> list[dict[str, Any]]:
        """Fetch raw employee rows (id, name, color_code, photo_url) for a place."""
        raise NotImplementedError

    @abstractmethod
    def update_booking_status(self, booking_id: int, status: str) -> None:
        """Persist a new status for a booking."""
        raise NotImplementedError

    @abstractmethod
    def cancel_booking(self, booking_id: int) -> None:
        """Cancel (decline) a booking."""
        raise NotImplementedError
