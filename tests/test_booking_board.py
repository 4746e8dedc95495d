"""
Tests for loading board snapshots and persisting status changes through the booking API port.
"""

from __future__ import annotations

from datetime import date

import pytest

from salon_calendar.application.exceptions import (
    BookingApiError,
    BookingNotFoundError,
    InvalidTransitionError,
)
from salon_calendar.application.use_cases.booking_board import BookingBoardUseCase
from salon_calendar.domain.entities.booking import BookingStatus
from salon_calendar.domain.exceptions import BookingDataError
from salon_calendar.infrastructure.booking_api.mock_booking_api import MockBookingApi


def _api(*rows):
    return MockBookingApi(
        bookings=list(rows),
        employees={1: [{"id": 1, "name": "Ana", "color_code": "#3b82f6"}]},
    )


def _row(booking_id, status="pending", place_id=1):
    return {
        "id": booking_id,
        "place_id": place_id,
        "booking_date": "2024-06-12",
        "booking_time": "10:00:00",
        "status": status,
        "employee_id": 1,
    }


def test_load_snapshot_filters_by_place():
    board = BookingBoardUseCase(_api(_row(1), _row(2, place_id=2)))

    snapshot = board.load_snapshot(1)

    assert [b.id for b in snapshot.bookings] == [1]
    assert snapshot.employees[1].name == "Ana"
    assert snapshot.find(1).booking_time == "10:00"
    with pytest.raises(BookingNotFoundError):
        snapshot.find(2)


def test_accept_persists_confirmed_status():
    api = _api(_row(1))
    board = BookingBoardUseCase(api)
    booking = board.load_snapshot(1).find(1)

    change = board.accept(booking)

    assert change.new_status is BookingStatus.confirmed
    assert board.load_snapshot(1).find(1).status is BookingStatus.confirmed


def test_decline_goes_through_cancel_endpoint(monkeypatch):
    api = _api(_row(1))
    calls = []
    monkeypatch.setattr(api, "cancel_booking", lambda booking_id: calls.append(booking_id))
    board = BookingBoardUseCase(api)

    board.decline(board.load_snapshot(1).find(1))

    assert calls == [1]


def test_rejected_transition_does_not_call_api():
    api = _api(_row(1, status="confirmed"))
    board = BookingBoardUseCase(api)
    booking = board.load_snapshot(1).find(1)

    with pytest.raises(InvalidTransitionError):
        board.commit_status_change(booking, "confirmed")
    with pytest.raises(InvalidTransitionError):
        board.accept(booking)

    assert board.load_snapshot(1).find(1).status is BookingStatus.confirmed


def test_generic_change_to_completed():
    board = BookingBoardUseCase(_api(_row(1, status="confirmed")))

    change = board.commit_status_change(board.load_snapshot(1).find(1), "completed")

    assert change.previous_status is BookingStatus.confirmed
    assert board.load_snapshot(1).find(1).status is BookingStatus.completed


def test_bad_row_fails_the_whole_snapshot():
    board = BookingBoardUseCase(_api(_row(1), {**_row(2), "status": "no_show"}))

    with pytest.raises(BookingDataError):
        board.load_snapshot(1)


def test_api_error_on_missing_booking():
    api = _api(_row(1))

    with pytest.raises(BookingApiError):
        api.update_booking_status(99, "confirmed")


def test_demo_api_loads_cleanly():
    board = BookingBoardUseCase(MockBookingApi.demo(date(2024, 6, 12)))

    snapshot = board.load_snapshot(1)

    assert len(snapshot.bookings) == 8
    assert set(snapshot.employees) == {1, 2, 3}
    assert snapshot.find(1).booking_date == date(2024, 6, 12)
