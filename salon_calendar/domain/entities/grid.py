from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from salon_calendar.domain.entities.booking import BookingRecord


@dataclass(frozen=True)
class GridConfig:
    hour_height_px: float
    min_height_px: float
    start_hour: int = 8
    end_hour: int = 20  # exclusive
    default_duration_minutes: int = 60
    use_booking_duration: bool = False


@dataclass(frozen=True)
class GridPosition:
    top: float
    height: float


@dataclass(frozen=True)
class GridPlacement:
    booking: BookingRecord
    top: float
    height: float
    column: int = 0  # day offset from the week start; always 0 in the day grid


@dataclass(frozen=True)
class TimeSlot:
    hour: int
    label: str  # "08:00"
    top: float


@dataclass(frozen=True)
class WeekDay:
    date: date
    date_string: str
    label: str  # "Sun", "Mon", ...
    is_today: bool


DAY_GRID = GridConfig(hour_height_px=80, min_height_px=60)
WEEK_GRID = GridConfig(hour_height_px=60, min_height_px=40)
