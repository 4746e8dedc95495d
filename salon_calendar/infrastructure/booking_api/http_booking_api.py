from __future__ import annotations

import logging
from datetime import date
from typing import Any

import httpx

from salon_calendar.application.exceptions import BookingApiError
from salon_calendar.application.ports.booking_api import BookingApiPort
from salon_calendar.core.config import settings


class HttpBookingApi(BookingApiPort):
    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = (base_url or settings.BOOKING_API_BASE_URL).rstrip("/")
        self._token = token if token is not None else settings.BOOKING_API_TOKEN
        self._client = client or httpx.Client(timeout=settings.BOOKING_API_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

        if not self._token:
            raise ValueError("BOOKING_API_TOKEN is required for the booking API")

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._token}"}

    def _request(self, method: str, path: str, params: dict[str, Any] | None = None, json: Any = None) -> Any:
        url = f"{self._base_url}{path}"
        try:
            response = self._client.request(method, url, params=params, json=json, headers=self._headers())
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            self._logger.error(
                "Booking API request failed",
                extra={"status": e.response.status_code, "path": path, "error": e.response.text},
            )
            raise BookingApiError(f"{method} {path} failed with status {e.response.status_code}") from e
        except httpx.HTTPError as e:
            self._logger.error("Booking API unreachable", extra={"path": path, "error": str(e)})
            raise BookingApiError(f"{method} {path} failed: {e}") from e

        if not response.content:
            return None
        return response.json()

    def list_place_bookings(
        self,
        place_id: int,
        date_from: date | None = None,
        date_to: date | None = None,
        status: str | None = None,
        employee_id: int | None = None,
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {}
        if date_from:
            params["date_from"] = date_from.isoformat()
        if date_to:
            params["date_to"] = date_to.isoformat()
        if status:
            params["status_filter"] = status
        if employee_id:
            params["employee_id"] = employee_id

        data = self._request("GET", f"/owner/bookings/places/{place_id}/bookings", params=params)
        rows = data if isinstance(data, list) else []
        self._logger.info("Bookings fetched", extra={"place_id": place_id, "count": len(rows)})
        return rows

    def list_place_employees(self, place_id: int) -> list[dict[str, Any]]:
        data = self._request("GET", f"/owner/places/{place_id}/employees")
        return data if isinstance(data, list) else []

    def update_booking_status(self, booking_id: int, status: str) -> None:
        self._request("PUT", f"/owner/bookings/{booking_id}", json={"status": status})
        self._logger.info("Booking status updated", extra={"booking_id": booking_id, "status": status})

    def cancel_booking(self, booking_id: int) -> None:
        self._request("PUT", f"/owner/bookings/{booking_id}/cancel")
        self._logger.info("Booking cancelled", extra={"booking_id": booking_id})
