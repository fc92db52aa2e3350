"""Worked-hours totals for payroll-style reporting.

Each roster entry counts its raw length minus an unpaid break, and the
results are bucketed per employee into Monday-Saturday and Sunday totals.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from caferoster.domain.models import Employee, RosterEntry, Weekday
from caferoster.domain.policies import BreakPolicy, DefaultBreakPolicy


@dataclass
class HoursTotals:
    """Counted minutes for one employee, split into pay buckets.

    Attributes:
        weekday_minutes: Counted minutes Monday through Saturday.
        sunday_minutes: Counted minutes on Sunday.
    """

    weekday_minutes: int = 0
    sunday_minutes: int = 0

    @property
    def weekday_hours(self) -> float:
        return self.weekday_minutes / 60.0

    @property
    def sunday_hours(self) -> float:
        return self.sunday_minutes / 60.0

    @property
    def total_hours(self) -> float:
        return (self.weekday_minutes + self.sunday_minutes) / 60.0

    def add(self, day: Weekday, minutes: int) -> None:
        if day.is_sunday:
            self.sunday_minutes += minutes
        else:
            self.weekday_minutes += minutes


@dataclass
class EmployeeHoursRow:
    """One employee's line in the weekly report.

    Attributes:
        employee: The employee.
        shifts_by_day: ``HH:MM-HH:MM`` labels of the entries held each day.
        totals: Counted hours in each pay bucket.
    """

    employee: Employee
    shifts_by_day: dict[Weekday, list[str]] = field(default_factory=dict)
    totals: HoursTotals = field(default_factory=HoursTotals)

    def day_label(self, day: Weekday, off_label: str = "OFF") -> str:
        """Shifts held on ``day`` joined for display, or ``off_label``."""
        shifts = self.shifts_by_day.get(day)
        return ", ".join(shifts) if shifts else off_label


@dataclass
class WeeklyHoursReport:
    """Weekly roster grid with hour totals and a grand-total row.

    Attributes:
        rows: One row per employee, most senior first.
        day_minutes: Counted minutes per weekday summed over all employees.
        grand_totals: Counted minutes per pay bucket summed over all employees.
    """

    rows: list[EmployeeHoursRow] = field(default_factory=list)
    day_minutes: dict[Weekday, int] = field(
        default_factory=lambda: {day: 0 for day in Weekday}
    )
    grand_totals: HoursTotals = field(default_factory=HoursTotals)

    def day_hours(self, day: Weekday) -> float:
        return self.day_minutes.get(day, 0) / 60.0


class HoursAggregator:
    """Computes counted hours from a finished roster.

    Example:
        >>> aggregator = HoursAggregator()
        >>> totals = aggregator.compute_hours_totals(roster)
        >>> totals["E001"].weekday_hours
        7.75
    """

    def __init__(self, break_policy: Optional[BreakPolicy] = None):
        self.break_policy = break_policy or DefaultBreakPolicy()

    def counted_minutes(self, entry: RosterEntry) -> int:
        """Paid minutes for one entry after the break deduction."""
        return self.break_policy.counted_minutes(entry.duration_minutes)

    def counted_hours(self, entry: RosterEntry) -> float:
        return self.counted_minutes(entry) / 60.0

    def compute_hours_totals(
        self,
        roster: Iterable[RosterEntry],
        employees: Optional[Iterable[Employee]] = None,
    ) -> dict[str, HoursTotals]:
        """Total counted hours per employee.

        Args:
            roster: Entries to total.
            employees: If given, entries for employees not in this list are
                skipped and every listed employee gets a (possibly zero) total.

        Returns:
            Dict mapping employee ID to their totals.
        """
        known: Optional[set[str]] = None
        totals: dict[str, HoursTotals] = {}
        if employees is not None:
            known = set()
            for employee in employees:
                known.add(employee.id)
                totals[employee.id] = HoursTotals()

        for entry in roster:
            if known is not None and entry.employee_id not in known:
                continue
            bucket = totals.setdefault(entry.employee_id, HoursTotals())
            bucket.add(entry.day, self.counted_minutes(entry))

        return totals

    def build_report(
        self,
        roster: list[RosterEntry],
        employees: list[Employee],
    ) -> WeeklyHoursReport:
        """Build the weekly grid for every employee.

        Entries whose employee is not in ``employees`` are left out of both
        the rows and the grand totals.
        """
        report = WeeklyHoursReport()
        rows_by_id: dict[str, EmployeeHoursRow] = {}

        for employee in sorted(employees, key=lambda e: e.position.rank):
            row = EmployeeHoursRow(employee=employee)
            rows_by_id[employee.id] = row
            report.rows.append(row)

        for entry in sorted(roster, key=lambda e: (e.day.index, e.interval.start_minutes)):
            row = rows_by_id.get(entry.employee_id)
            if row is None:
                continue
            minutes = self.counted_minutes(entry)
            row.shifts_by_day.setdefault(entry.day, []).append(str(entry.interval))
            row.totals.add(entry.day, minutes)
            report.day_minutes[entry.day] += minutes
            report.grand_totals.add(entry.day, minutes)

        return report


def compute_hours_totals(
    roster: Iterable[RosterEntry],
    break_policy: Optional[BreakPolicy] = None,
    employees: Optional[Iterable[Employee]] = None,
) -> dict[str, HoursTotals]:
    """Total counted hours per employee with a one-off :class:`HoursAggregator`.

    See :meth:`HoursAggregator.compute_hours_totals` for how ``employees``
    filters the result.
    """
    return HoursAggregator(break_policy).compute_hours_totals(roster, employees)
