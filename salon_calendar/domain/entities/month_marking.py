from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MarkerMode(str, Enum):
    status = "status"
    employee = "employee"


@dataclass(frozen=True)
class DotMarker:
    color: str
    selected_color: str


@dataclass(frozen=True)
class DateMarking:
    dots: tuple[DotMarker, ...] = ()
    selected: bool = False
    selected_color: str | None = None

    @property
    def marked(self) -> bool:
        return bool(self.dots)
