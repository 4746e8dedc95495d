from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class FilterCategory(str, Enum):
    all = "all"
    pending = "pending"
    today = "today"
    week = "week"
    employee = "employee"


class BookingScope(str, Enum):
    any = "any"
    upcoming = "upcoming"  # starts at or after now and not cancelled
    past = "past"  # started before now, or cancelled


@dataclass(frozen=True)
class EmployeeSelection:
    """Employees picked for the team view. Empty means "everyone"."""

    employee_ids: frozenset[int] = frozenset()

    def toggle(self, employee_id: int) -> EmployeeSelection:
        if employee_id in self.employee_ids:
            return EmployeeSelection(self.employee_ids - {employee_id})
        return EmployeeSelection(self.employee_ids | {employee_id})

    def select_all(self, employee_ids: list[int] | set[int] | frozenset[int]) -> EmployeeSelection:
        return EmployeeSelection(frozenset(employee_ids))

    def clear(self) -> EmployeeSelection:
        return EmployeeSelection()

    @property
    def comparison_active(self) -> bool:
        """Two or more employees selected: views colour by employee instead of status."""
        return len(self.employee_ids) > 1

    def __contains__(self, employee_id: object) -> bool:
        return employee_id in self.employee_ids

    def __len__(self) -> int:
        return len(self.employee_ids)


@dataclass(frozen=True)
class BookingFilter:
    category: FilterCategory = FilterCategory.all
    selection: EmployeeSelection = field(default_factory=EmployeeSelection)
    scope: BookingScope = BookingScope.any
