"""Double-booking detection against committed roster entries."""

from typing import Iterable

from caferoster.domain.models import RosterEntry, TimeInterval, Weekday


def conflicts(
    employee_id: str,
    day: Weekday,
    interval: TimeInterval,
    committed: Iterable[RosterEntry],
) -> bool:
    """Check if a proposed assignment overlaps one the employee already holds.

    Args:
        employee_id: Employee being considered.
        day: Day of the proposed assignment.
        interval: Working time of the proposed assignment.
        committed: Entries assigned so far.

    Returns:
        True if any committed entry for the same employee and day overlaps
        ``interval``.
    """
    for entry in committed:
        if (
            entry.employee_id == employee_id
            and entry.day == day
            and entry.interval.overlaps(interval)
        ):
            return True
    return False


def find_conflicts(
    employee_id: str,
    day: Weekday,
    interval: TimeInterval,
    committed: Iterable[RosterEntry],
) -> list[RosterEntry]:
    """Get every committed entry that a proposed assignment would overlap."""
    return [
        entry
        for entry in committed
        if entry.employee_id == employee_id
        and entry.day == day
        and entry.interval.overlaps(interval)
    ]
