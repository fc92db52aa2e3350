"""Greedy roster generation.

This module implements the roster assignment engine:
1. Order shifts so the hardest to fill pick first
2. Filter employees who can take each shift
3. Rank them for fairness
4. Assign up to the shift's minimum headcount

The pass is a single deterministic greedy sweep without backtracking. An
early assignment can starve a later shift of staff; such shifts are left
understaffed rather than treated as errors.
"""

import logging
from typing import Iterable, Optional

from caferoster.domain.models import (
    Availability,
    CoverageSummary,
    Employee,
    RosterEntry,
    Shift,
    ShiftCoverage,
)
from caferoster.domain.policies import DefaultStaffingPolicy, StaffingPolicy
from caferoster.scheduling.availability_index import AvailabilityIndex
from caferoster.scheduling.eligibility import EligibilityFilter, EmployeeWeeklyState
from caferoster.scheduling.fairness import FairnessRanker

logger = logging.getLogger(__name__)


def shift_priority_order(shifts: Iterable[Shift]) -> list[Shift]:
    """Sort shifts by fill priority.

    Shifts with a required position come before open shifts; within each
    group, higher minimum headcount comes first. Equal shifts keep their
    input order.
    """
    return sorted(
        shifts,
        key=lambda s: (s.required_position is None, -s.min_staff_count),
    )


class RosterGenerator:
    """Generates a full weekly roster from employees, shifts and availability.

    Each call builds a fresh roster from scratch; nothing from a previous
    roster or a previous call is carried over. The caller is responsible for
    persisting the result as a full replacement of the stored roster.

    Example:
        >>> generator = RosterGenerator()
        >>> roster = generator.generate_roster(employees, shifts, availabilities)
    """

    def __init__(self, staffing_policy: Optional[StaffingPolicy] = None):
        self.staffing_policy = staffing_policy or DefaultStaffingPolicy()
        self.ranker = FairnessRanker(self.staffing_policy)

    def generate_roster(
        self,
        employees: list[Employee],
        shifts: list[Shift],
        availabilities: Iterable[Availability],
    ) -> list[RosterEntry]:
        """Generate roster entries for every shift.

        Args:
            employees: All employees, in a stable order (used for tie-breaks).
            shifts: Concrete shifts to fill.
            availabilities: Availability records for the week.

        Returns:
            The complete list of entries for this run.
        """
        roster, _ = self._run(employees, shifts, availabilities)
        return roster

    def generate_roster_with_stats(
        self,
        employees: list[Employee],
        shifts: list[Shift],
        availabilities: Iterable[Availability],
    ) -> tuple[list[RosterEntry], dict]:
        """Generate a roster and return statistics.

        Returns:
            Tuple of (roster, stats_dict).
        """
        roster, states = self._run(employees, shifts, availabilities)
        stats = self._calculate_stats(roster, shifts, states)
        return roster, stats

    def _run(
        self,
        employees: list[Employee],
        shifts: list[Shift],
        availabilities: Iterable[Availability],
    ) -> tuple[list[RosterEntry], dict[str, EmployeeWeeklyState]]:
        eligibility = EligibilityFilter(
            AvailabilityIndex(availabilities), self.staffing_policy
        )
        states = {e.id: EmployeeWeeklyState(e.id) for e in employees}
        roster: list[RosterEntry] = []

        for shift in shift_priority_order(shifts):
            eligible = eligibility.eligible_employees(shift, employees, roster, states)
            ranked = self.ranker.rank(eligible, states)
            chosen = ranked[: shift.min_staff_count]

            for employee in chosen:
                roster.append(
                    RosterEntry.for_shift(
                        shift, employee.id, entry_id=f"{shift.id}:{employee.id}"
                    )
                )
                states[employee.id].add_shift(shift)

            logger.debug(
                "Shift %s (%s %s): %d eligible, assigned %s",
                shift.id,
                shift.day.value,
                shift.interval,
                len(eligible),
                [e.id for e in chosen],
            )
            if len(chosen) < shift.min_staff_count:
                logger.info(
                    "Shift %s (%s %s) understaffed: %d/%d",
                    shift.name,
                    shift.day.value,
                    shift.interval,
                    len(chosen),
                    shift.min_staff_count,
                )

        return roster, states

    def _calculate_stats(
        self,
        roster: list[RosterEntry],
        shifts: list[Shift],
        states: dict[str, EmployeeWeeklyState],
    ) -> dict:
        """Calculate roster statistics."""
        coverage = ShiftCoverage.calculate(shifts, roster)
        summary = CoverageSummary.from_coverage(coverage)

        return {
            "total_shifts": summary.total,
            "fully_staffed": summary.fully_staffed,
            "partially_staffed": summary.partially_staffed,
            "unstaffed": summary.unstaffed,
            "total_entries": len(roster),
            "coverage": coverage,
            "hours_per_employee": {
                eid: state.hours_assigned for eid, state in states.items()
            },
            "days_per_employee": {
                eid: state.days_count for eid, state in states.items()
            },
        }


def generate_roster(
    employees: list[Employee],
    shifts: list[Shift],
    availabilities: Iterable[Availability],
    staffing_policy: Optional[StaffingPolicy] = None,
) -> list[RosterEntry]:
    """Generate a roster with a one-off :class:`RosterGenerator`."""
    return RosterGenerator(staffing_policy).generate_roster(
        employees, shifts, availabilities
    )
