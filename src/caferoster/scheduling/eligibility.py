"""Eligibility filtering for shift assignment.

This module tracks each employee's running totals during a generation pass
and decides which employees may take a given shift, respecting availability,
position requirements, the weekly working-day cap and double-booking rules.
"""

from dataclasses import dataclass, field
from typing import Optional

from caferoster.domain.models import Employee, RosterEntry, Shift, Weekday
from caferoster.domain.policies import DefaultStaffingPolicy, StaffingPolicy
from caferoster.scheduling.availability_index import AvailabilityIndex
from caferoster.scheduling.conflict_detector import conflicts


@dataclass
class EmployeeWeeklyState:
    """Tracks an employee's assignments during one generation pass.

    Attributes:
        employee_id: ID of the employee.
        shift_count: Shifts assigned so far this run.
        days_worked: Days the employee is assigned on so far this run.
        minutes_assigned: Raw shift minutes assigned so far this run.
    """

    employee_id: str
    shift_count: int = 0
    days_worked: set[Weekday] = field(default_factory=set)
    minutes_assigned: int = 0

    @property
    def hours_assigned(self) -> float:
        return self.minutes_assigned / 60.0

    @property
    def days_count(self) -> int:
        return len(self.days_worked)

    def works_on(self, day: Weekday) -> bool:
        return day in self.days_worked

    def add_shift(self, shift: Shift) -> None:
        """Record a shift being assigned."""
        self.shift_count += 1
        self.days_worked.add(shift.day)
        self.minutes_assigned += shift.interval.duration_minutes


class EligibilityFilter:
    """Computes which employees can be assigned to a shift.

    An employee is eligible only if all of these hold:
    - They are available that day and their window contains the shift
    - They hold the shift's required position, if it has one
    - They are below the weekly working-day cap
    - They have no other assignment that day in this run
    - The shift does not overlap anything they already hold
    """

    def __init__(
        self,
        availability_index: AvailabilityIndex,
        staffing_policy: Optional[StaffingPolicy] = None,
    ):
        self.availability_index = availability_index
        self.staffing_policy = staffing_policy or DefaultStaffingPolicy()

    def is_eligible(
        self,
        employee: Employee,
        shift: Shift,
        committed: list[RosterEntry],
        state: EmployeeWeeklyState,
    ) -> bool:
        """Check a single employee against every hard constraint."""
        if not self.availability_index.can_cover(employee.id, shift.day, shift.interval):
            return False

        if not matches_position(employee, shift):
            return False

        if state.days_count >= self.staffing_policy.max_working_days():
            return False

        # One shift per day, even when the shifts would not overlap
        if state.works_on(shift.day):
            return False

        if conflicts(employee.id, shift.day, shift.interval, committed):
            return False

        return True

    def eligible_employees(
        self,
        shift: Shift,
        employees: list[Employee],
        committed: list[RosterEntry],
        states: dict[str, EmployeeWeeklyState],
    ) -> list[Employee]:
        """Get the employees who can take ``shift``, in input order.

        Args:
            shift: Shift being filled.
            employees: All employees, in the caller's order.
            committed: Entries assigned so far this run.
            states: Running state per employee ID.

        Returns:
            Eligible employees in the same relative order as ``employees``.
        """
        eligible = []
        for employee in employees:
            state = states.get(employee.id) or EmployeeWeeklyState(employee.id)
            if self.is_eligible(employee, shift, committed, state):
                eligible.append(employee)
        return eligible


def matches_position(employee: Employee, shift: Shift) -> bool:
    """Check if the employee satisfies the shift's position requirement."""
    return shift.required_position is None or employee.position is shift.required_position
