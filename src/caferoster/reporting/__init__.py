"""Hours totals and weekly reports over a finished roster."""

from caferoster.reporting.hours import (
    EmployeeHoursRow,
    HoursAggregator,
    HoursTotals,
    WeeklyHoursReport,
    compute_hours_totals,
)

__all__ = [
    "EmployeeHoursRow",
    "HoursAggregator",
    "HoursTotals",
    "WeeklyHoursReport",
    "compute_hours_totals",
]
