from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from salon_calendar.application.utils.calendar_dates import AnchorDates, anchor_dates
from salon_calendar.domain.entities.booking import BookingRecord, BookingStatus
from salon_calendar.domain.entities.booking_filter import (
    BookingFilter,
    BookingScope,
    EmployeeSelection,
    FilterCategory,
)

BookingPredicate = Callable[[BookingRecord], bool]


def pending_first_key(booking: BookingRecord) -> tuple:
    return (0 if booking.is_pending else 1, booking.booking_date, booking.booking_time)


def is_upcoming(booking: BookingRecord, reference_now: datetime) -> bool:
    return booking.starts_at >= reference_now and booking.status is not BookingStatus.cancelled


def is_past(booking: BookingRecord, reference_now: datetime) -> bool:
    return booking.starts_at < reference_now or booking.status is BookingStatus.cancelled


def in_current_week(booking: BookingRecord, anchors: AnchorDates) -> bool:
    return anchors.week_start <= booking.booking_date <= anchors.week_end


class FilterComposer:
    """
    Compose scope, category and employee-selection filters into one predicate.

    Order is scope -> category -> employee selection, all conjunctive. The
    result is re-sorted with pending bookings first, then by date and time.
    """

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def scope_predicate(self, scope: BookingScope, reference_now: datetime) -> BookingPredicate | None:
        if scope is BookingScope.upcoming:
            return lambda booking: is_upcoming(booking, reference_now)
        if scope is BookingScope.past:
            return lambda booking: is_past(booking, reference_now)
        return None

    def category_predicate(
        self,
        category: FilterCategory,
        reference_now: datetime,
    ) -> BookingPredicate | None:
        if category is FilterCategory.pending:
            return lambda booking: booking.is_pending
        if category is FilterCategory.today:
            today = anchor_dates(reference_now).today
            return lambda booking: booking.booking_date == today
        if category is FilterCategory.week:
            anchors = anchor_dates(reference_now)
            return lambda booking: in_current_week(booking, anchors)
        # "all" and "employee" restrict nothing here; the employee selection does the work
        return None

    def selection_predicate(self, selection: EmployeeSelection) -> BookingPredicate | None:
        if not selection.employee_ids:
            return None
        employee_ids = selection.employee_ids
        return lambda booking: booking.employee_id is not None and booking.employee_id in employee_ids

    def compose(self, booking_filter: BookingFilter, reference_now: datetime) -> BookingPredicate:
        predicates = [
            predicate
            for predicate in (
                self.scope_predicate(booking_filter.scope, reference_now),
                self.category_predicate(booking_filter.category, reference_now),
                self.selection_predicate(booking_filter.selection),
            )
            if predicate is not None
        ]

        def combined(booking: BookingRecord) -> bool:
            return all(predicate(booking) for predicate in predicates)

        return combined

    def apply(
        self,
        bookings: list[BookingRecord],
        booking_filter: BookingFilter,
        reference_now: datetime,
    ) -> list[BookingRecord]:
        predicate = self.compose(booking_filter, reference_now)
        result = sorted((b for b in bookings if predicate(b)), key=pending_first_key)
        self._logger.debug(
            "Bookings filtered",
            extra={
                "count": len(result),
                "category": booking_filter.category.value,
                "scope": booking_filter.scope.value,
            },
        )
        return result
