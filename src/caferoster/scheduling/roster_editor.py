"""Manual edits to an existing roster.

Each operation validates its own input and returns a new roster list; the
roster passed in is never modified.
"""

import logging
from typing import Optional

from caferoster.domain.models import (
    Employee,
    IneligibleEmployeeError,
    RosterEntry,
    Shift,
    UnknownReferenceError,
)
from caferoster.scheduling.conflict_detector import conflicts
from caferoster.scheduling.eligibility import matches_position

logger = logging.getLogger(__name__)


class RosterEditor:
    """Applies operator edits to a generated roster.

    Adding an employee re-checks position and double-booking against the
    live roster, but not availability or the working-day cap. Swapping two
    entries is not re-checked at all: it is treated as an operator override.

    Example:
        >>> editor = RosterEditor(employees, shifts)
        >>> roster = editor.add(roster, "morning-bar", "E002")
    """

    def __init__(self, employees: list[Employee], shifts: list[Shift]):
        self.employees = list(employees)
        self.shifts_map = {s.id: s for s in shifts}

    def get_shift(self, shift_id: str) -> Shift:
        shift = self.shifts_map.get(shift_id)
        if shift is None:
            raise UnknownReferenceError(f"Unknown shift ID: {shift_id}")
        return shift

    def swap(
        self,
        roster: list[RosterEntry],
        entry_a: RosterEntry,
        entry_b: RosterEntry,
    ) -> list[RosterEntry]:
        """Exchange the employees of two entries.

        Only ``employee_id`` changes; shift, day and times stay with each
        entry.
        """
        ids = {e.id for e in roster}
        for entry in (entry_a, entry_b):
            if entry.id not in ids:
                raise UnknownReferenceError(f"Entry {entry.id} is not in the roster")

        employee_a = _current_employee(roster, entry_a.id)
        employee_b = _current_employee(roster, entry_b.id)

        updated = []
        for entry in roster:
            if entry.id == entry_a.id:
                updated.append(_with_employee(entry, employee_b))
            elif entry.id == entry_b.id:
                updated.append(_with_employee(entry, employee_a))
            else:
                updated.append(entry)

        logger.debug("Swapped %s and %s on entries %s/%s",
                     employee_a, employee_b, entry_a.id, entry_b.id)
        return updated

    def remove(self, roster: list[RosterEntry], entry: RosterEntry) -> list[RosterEntry]:
        """Remove one entry from the roster."""
        updated = [e for e in roster if e.id != entry.id]
        if len(updated) == len(roster):
            raise UnknownReferenceError(f"Entry {entry.id} is not in the roster")
        logger.debug("Removed entry %s (%s from %s)", entry.id, entry.employee_id, entry.shift_id)
        return updated

    def add(
        self,
        roster: list[RosterEntry],
        shift_id: str,
        employee_id: str,
        entry_id: Optional[str] = None,
    ) -> list[RosterEntry]:
        """Add an employee to a shift.

        Raises:
            UnknownReferenceError: If the shift does not exist.
            IneligibleEmployeeError: If the employee is not a valid candidate.
        """
        shift = self.get_shift(shift_id)
        candidates = {e.id for e in self.eligible_candidates(roster, shift_id)}
        if employee_id not in candidates:
            raise IneligibleEmployeeError(
                f"Employee {employee_id} cannot be added to shift {shift_id}"
            )

        entry = RosterEntry.for_shift(shift, employee_id, entry_id=entry_id)
        logger.debug("Added %s to shift %s", employee_id, shift_id)
        return [*roster, entry]

    def eligible_candidates(
        self,
        roster: list[RosterEntry],
        shift_id: str,
    ) -> list[Employee]:
        """Get employees who may be added to a shift.

        Excludes employees already on the shift, employees without the
        required position, and employees with an overlapping entry that day.
        """
        shift = self.get_shift(shift_id)
        assigned = {e.employee_id for e in roster if e.shift_id == shift_id}
        others = [e for e in roster if e.shift_id != shift_id]

        candidates = []
        for employee in self.employees:
            if employee.id in assigned:
                continue
            if not matches_position(employee, shift):
                continue
            if conflicts(employee.id, shift.day, shift.interval, others):
                continue
            candidates.append(employee)
        return candidates


def _current_employee(roster: list[RosterEntry], entry_id: str) -> str:
    for entry in roster:
        if entry.id == entry_id:
            return entry.employee_id
    raise UnknownReferenceError(f"Entry {entry_id} is not in the roster")


def _with_employee(entry: RosterEntry, employee_id: str) -> RosterEntry:
    return RosterEntry(
        shift_id=entry.shift_id,
        employee_id=employee_id,
        day=entry.day,
        interval=entry.interval,
        id=entry.id,
    )
