from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BookingStats:
    today_count: int
    pending_count: int
    week_total: int


@dataclass(frozen=True)
class EmployeeLoad:
    today: int = 0
    week: int = 0
