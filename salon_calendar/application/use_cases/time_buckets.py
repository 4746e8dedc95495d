from __future__ import annotations

import logging
from datetime import datetime

from salon_calendar.application.utils.calendar_dates import anchor_dates, week_span_label, week_start_of
from salon_calendar.domain.entities.booking import BookingRecord
from salon_calendar.domain.entities.booking_group import BookingGroup, BucketKind

BUCKET_LABELS = {
    BucketKind.today: "Today",
    BucketKind.tomorrow: "Tomorrow",
    BucketKind.this_week: "This Week",
}


def chronological_key(booking: BookingRecord) -> tuple:
    # HH:MM is zero-padded, so string order is time order
    return (booking.booking_date, booking.booking_time)


class TimeBucketGrouper:
    """Partition bookings into today / tomorrow / this week / later-by-week groups."""

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def classify(self, booking: BookingRecord, reference_now: datetime) -> BucketKind | None:
        """Return the bucket for a booking, or None when it falls outside every bucket."""
        anchors = anchor_dates(reference_now)
        return self._classify(booking, anchors.today, anchors.tomorrow, anchors.week_start)

    def group(self, bookings: list[BookingRecord], reference_now: datetime) -> list[BookingGroup]:
        anchors = anchor_dates(reference_now)

        today_bookings: list[BookingRecord] = []
        tomorrow_bookings: list[BookingRecord] = []
        this_week_bookings: list[BookingRecord] = []
        later_by_week: dict = {}
        skipped = 0

        for booking in bookings:
            kind = self._classify(booking, anchors.today, anchors.tomorrow, anchors.week_start)
            if kind is BucketKind.today:
                today_bookings.append(booking)
            elif kind is BucketKind.tomorrow:
                tomorrow_bookings.append(booking)
            elif kind is BucketKind.this_week:
                this_week_bookings.append(booking)
            elif kind is BucketKind.later:
                later_by_week.setdefault(week_start_of(booking.booking_date), []).append(booking)
            else:
                skipped += 1

        groups: list[BookingGroup] = []
        for kind, anchor, members in (
            (BucketKind.today, anchors.today, today_bookings),
            (BucketKind.tomorrow, anchors.tomorrow, tomorrow_bookings),
            (BucketKind.this_week, anchors.week_start, this_week_bookings),
        ):
            if members:
                groups.append(
                    BookingGroup(
                        kind=kind,
                        label=BUCKET_LABELS[kind],
                        anchor_date=anchor,
                        bookings=tuple(sorted(members, key=chronological_key)),
                    )
                )

        for week_start in sorted(later_by_week):
            groups.append(
                BookingGroup(
                    kind=BucketKind.later,
                    label=week_span_label(week_start),
                    anchor_date=week_start,
                    bookings=tuple(sorted(later_by_week[week_start], key=chronological_key)),
                )
            )

        self._logger.debug(
            "Bookings grouped",
            extra={"count": len(bookings), "groups": len(groups), "skipped": skipped},
        )
        return groups

    @staticmethod
    def _classify(booking, today, tomorrow, week_start) -> BucketKind | None:
        booking_date = booking.booking_date
        if booking_date == today:
            return BucketKind.today
        if booking_date == tomorrow:
            return BucketKind.tomorrow
        if week_start <= booking_date < today:
            return BucketKind.this_week
        if booking_date > tomorrow:
            return BucketKind.later
        return None
