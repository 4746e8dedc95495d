"""
Tests for composing scope, category and employee filters.
"""

from __future__ import annotations

from datetime import datetime

from salon_calendar.application.use_cases.filter_composer import FilterComposer
from salon_calendar.domain.entities.booking_filter import (
    BookingFilter,
    BookingScope,
    EmployeeSelection,
    FilterCategory,
)


def _ids(bookings):
    return [b.id for b in bookings]


def test_today_category_with_empty_selection(make_booking, reference_now):
    bookings = [
        make_booking(1, "2024-06-11"),
        make_booking(2, "2024-06-12"),
        make_booking(3, "2024-06-13"),
    ]

    result = FilterComposer().apply(bookings, BookingFilter(category=FilterCategory.today), reference_now)

    assert _ids(result) == [2]


def test_empty_selection_keeps_everything(make_booking, reference_now):
    bookings = [
        make_booking(1, "2024-06-12", employee_id=1),
        make_booking(2, "2024-06-12", employee_id=None),
        make_booking(3, "2024-06-13", employee_id=2),
    ]

    result = FilterComposer().apply(bookings, BookingFilter(), reference_now)

    assert sorted(_ids(result)) == [1, 2, 3]


def test_selection_keeps_only_selected_employees(make_booking, reference_now):
    bookings = [
        make_booking(1, "2024-06-12", employee_id=1),
        make_booking(2, "2024-06-12", employee_id=None),
        make_booking(3, "2024-06-13", employee_id=2),
        make_booking(4, "2024-06-14", employee_id=3),
    ]
    booking_filter = BookingFilter(selection=EmployeeSelection(frozenset({1, 3})))

    assert _ids(FilterComposer().apply(bookings, booking_filter, reference_now)) == [1, 4]


def test_employee_category_without_selection_is_a_no_op(make_booking, reference_now):
    bookings = [make_booking(1, "2024-06-12", employee_id=1), make_booking(2, "2024-06-13")]

    result = FilterComposer().apply(bookings, BookingFilter(category=FilterCategory.employee), reference_now)

    assert _ids(result) == [1, 2]


def test_pending_category(make_booking, reference_now):
    bookings = [
        make_booking(1, "2024-06-12", status="confirmed"),
        make_booking(2, "2024-06-20", status="pending"),
        make_booking(3, "2024-06-12", status="pending"),
    ]

    result = FilterComposer().apply(bookings, BookingFilter(category=FilterCategory.pending), reference_now)

    assert _ids(result) == [3, 2]


def test_week_category_is_current_sunday_week(make_booking, reference_now):
    bookings = [
        make_booking(1, "2024-06-08"),
        make_booking(2, "2024-06-09"),
        make_booking(3, "2024-06-15"),
        make_booking(4, "2024-06-16"),
    ]

    result = FilterComposer().apply(bookings, BookingFilter(category=FilterCategory.week), reference_now)

    assert _ids(result) == [2, 3]


def test_upcoming_scope_drops_past_and_cancelled(make_booking, reference_now):
    bookings = [
        make_booking(1, "2024-06-12", "09:59"),
        make_booking(2, "2024-06-12", "10:00"),
        make_booking(3, "2024-06-13", "09:00", status="cancelled"),
        make_booking(4, "2024-06-14", "09:00"),
    ]

    result = FilterComposer().apply(bookings, BookingFilter(scope=BookingScope.upcoming), reference_now)

    assert _ids(result) == [2, 4]


def test_past_scope_is_the_complement(make_booking, reference_now):
    bookings = [
        make_booking(1, "2024-06-12", "09:59"),
        make_booking(2, "2024-06-12", "10:00"),
        make_booking(3, "2024-06-13", "09:00", status="cancelled"),
    ]

    result = FilterComposer().apply(bookings, BookingFilter(scope=BookingScope.past), reference_now)

    assert _ids(result) == [1, 3]


def test_filters_are_conjunctive(make_booking, reference_now):
    bookings = [
        make_booking(1, "2024-06-12", "11:00", status="pending", employee_id=1),
        make_booking(2, "2024-06-12", "12:00", status="pending", employee_id=2),
        make_booking(3, "2024-06-12", "08:00", status="pending", employee_id=1),  # already started
        make_booking(4, "2024-06-13", "12:00", status="pending", employee_id=1),
    ]
    booking_filter = BookingFilter(
        category=FilterCategory.today,
        selection=EmployeeSelection(frozenset({1})),
        scope=BookingScope.upcoming,
    )

    assert _ids(FilterComposer().apply(bookings, booking_filter, reference_now)) == [1]


def test_pending_sorts_first_then_chronological(make_booking, reference_now):
    bookings = [
        make_booking(1, "2024-06-12", "09:00", status="confirmed"),
        make_booking(2, "2024-06-20", "18:00", status="pending"),
        make_booking(3, "2024-06-11", "12:00", status="completed"),
        make_booking(4, "2024-06-13", "08:00", status="pending"),
        make_booking(5, "2024-06-12", "08:30", status="confirmed"),
    ]

    result = FilterComposer().apply(bookings, BookingFilter(), reference_now)

    assert _ids(result) == [4, 2, 3, 5, 1]


def test_compose_returns_reusable_predicate(make_booking):
    predicate = FilterComposer().compose(
        BookingFilter(category=FilterCategory.today),
        datetime(2024, 6, 12, 0, 0),
    )

    assert predicate(make_booking(1, "2024-06-12")) is True
    assert predicate(make_booking(2, "2024-06-13")) is False


def test_employee_selection_operations():
    selection = EmployeeSelection()

    selection = selection.toggle(1).toggle(2)
    assert selection.comparison_active is True
    selection = selection.toggle(1)
    assert 1 not in selection
    assert len(selection) == 1
    assert selection.comparison_active is False
    assert len(selection.select_all([1, 2, 3])) == 3
    assert len(selection.clear()) == 0
