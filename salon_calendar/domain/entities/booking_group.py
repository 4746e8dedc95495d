from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from salon_calendar.domain.entities.booking import BookingRecord


class BucketKind(str, Enum):
    today = "today"
    tomorrow = "tomorrow"
    this_week = "this_week"
    later = "later"


@dataclass(frozen=True)
class BookingGroup:
    kind: BucketKind
    label: str
    anchor_date: date  # today, tomorrow, current week start, or the later week's Sunday
    bookings: tuple[BookingRecord, ...]
