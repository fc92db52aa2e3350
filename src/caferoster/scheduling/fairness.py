"""Fairness ranking among eligible employees.

Decides which of several eligible employees gets a shift first, so hours
are spread towards each employee's weekly target.
"""

from typing import Optional

from caferoster.domain.models import Employee
from caferoster.domain.policies import DefaultStaffingPolicy, StaffingPolicy
from caferoster.scheduling.eligibility import EmployeeWeeklyState


class FairnessRanker:
    """Orders eligible employees by assignment priority.

    Keys, compared in order:
    1. Hours deficit against the weekly target (larger first)
    2. Shifts assigned so far this run (fewer first)
    3. Position seniority (more senior first)

    The sort is stable, so employees tied on all three keep their input
    order. There is no randomness: the same input always ranks the same way.
    """

    def __init__(self, staffing_policy: Optional[StaffingPolicy] = None):
        self.staffing_policy = staffing_policy or DefaultStaffingPolicy()

    def minutes_deficit(self, employee: Employee, state: EmployeeWeeklyState) -> int:
        """Minutes still needed to reach the employee's weekly target."""
        target = round(self.staffing_policy.target_hours(employee.position) * 60)
        return target - state.minutes_assigned

    def hours_deficit(self, employee: Employee, state: EmployeeWeeklyState) -> float:
        """Hours still needed to reach the employee's weekly target."""
        return self.minutes_deficit(employee, state) / 60.0

    def priority_key(
        self,
        employee: Employee,
        state: EmployeeWeeklyState,
    ) -> tuple[int, int, int]:
        # Whole minutes, so equal hours always tie regardless of summation order
        return (
            -self.minutes_deficit(employee, state),
            state.shift_count,
            employee.position.rank,
        )

    def rank(
        self,
        eligible: list[Employee],
        states: dict[str, EmployeeWeeklyState],
    ) -> list[Employee]:
        """Sort eligible employees, highest assignment priority first.

        Args:
            eligible: Employees who passed the eligibility filter.
            states: Running state per employee ID.

        Returns:
            A new list in priority order.
        """
        return sorted(
            eligible,
            key=lambda e: self.priority_key(
                e, states.get(e.id) or EmployeeWeeklyState(e.id)
            ),
        )
