"""Repository interface for roster data and an in-memory implementation.

The roster engine never talks to storage directly; the service layer reads
inputs from a repository and writes the generated roster back as a full
replacement.
"""

import dataclasses
import logging
from abc import ABC, abstractmethod
from typing import Callable, Iterable, Optional

from caferoster.domain.models import (
    Availability,
    Employee,
    RosterEntry,
    Shift,
    Weekday,
)

logger = logging.getLogger(__name__)

EMPLOYEES = "employees"
SHIFTS = "shifts"
AVAILABILITIES = "availabilities"
ROSTER = "roster"

ChangeCallback = Callable[[str], None]


class RosterRepository(ABC):
    """Abstract base class for roster data storage."""

    @abstractmethod
    def list_employees(self) -> list[Employee]:
        pass

    @abstractmethod
    def list_shifts(self) -> list[Shift]:
        pass

    @abstractmethod
    def list_availabilities(self) -> list[Availability]:
        pass

    @abstractmethod
    def list_roster(self) -> list[RosterEntry]:
        pass

    @abstractmethod
    def replace_roster(self, entries: Iterable[RosterEntry]) -> None:
        """Replace the stored roster with ``entries`` in one step."""
        pass

    @abstractmethod
    def save_employee(self, employee: Employee) -> None:
        pass

    @abstractmethod
    def delete_employee(self, employee_id: str) -> None:
        """Delete an employee with their availability and roster entries."""
        pass

    @abstractmethod
    def save_shift(self, shift: Shift) -> None:
        pass

    @abstractmethod
    def delete_shift(self, shift_id: str) -> None:
        """Delete a shift and the roster entries assigned to it."""
        pass

    @abstractmethod
    def upsert_availability(
        self,
        employee_id: str,
        day: Weekday,
        **changes,
    ) -> Availability:
        """Create or update the single record for ``(employee_id, day)``."""
        pass

    @abstractmethod
    def save_roster_entry(self, entry: RosterEntry) -> None:
        pass

    @abstractmethod
    def delete_roster_entry(self, entry_id: str) -> None:
        pass

    @abstractmethod
    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        """Register a callback receiving the name of each changed collection.

        Returns:
            A function that removes the subscription.
        """
        pass


class InMemoryRepository(RosterRepository):
    """Repository holding everything in dicts, keyed by ID.

    Insertion order is preserved, so listing returns records in the order
    they were first saved.
    """

    def __init__(
        self,
        employees: Iterable[Employee] = (),
        shifts: Iterable[Shift] = (),
        availabilities: Iterable[Availability] = (),
        roster: Iterable[RosterEntry] = (),
    ):
        self._employees: dict[str, Employee] = {e.id: e for e in employees}
        self._shifts: dict[str, Shift] = {s.id: s for s in shifts}
        self._availabilities: dict[tuple[str, Weekday], Availability] = {
            a.key: a for a in availabilities
        }
        self._roster: dict[str, RosterEntry] = {e.id: e for e in roster}
        self._subscribers: list[ChangeCallback] = []

    def list_employees(self) -> list[Employee]:
        return list(self._employees.values())

    def list_shifts(self) -> list[Shift]:
        return list(self._shifts.values())

    def list_availabilities(self) -> list[Availability]:
        return list(self._availabilities.values())

    def list_roster(self) -> list[RosterEntry]:
        return list(self._roster.values())

    def get_employee(self, employee_id: str) -> Optional[Employee]:
        return self._employees.get(employee_id)

    def get_shift(self, shift_id: str) -> Optional[Shift]:
        return self._shifts.get(shift_id)

    def replace_roster(self, entries: Iterable[RosterEntry]) -> None:
        self._roster = {e.id: e for e in entries}
        logger.info("Roster replaced with %d entries", len(self._roster))
        self._notify(ROSTER)

    def save_employee(self, employee: Employee) -> None:
        self._employees[employee.id] = employee
        self._notify(EMPLOYEES)

    def delete_employee(self, employee_id: str) -> None:
        if self._employees.pop(employee_id, None) is None:
            return
        self._availabilities = {
            key: a for key, a in self._availabilities.items() if a.employee_id != employee_id
        }
        removed = [e.id for e in self._roster.values() if e.employee_id == employee_id]
        for entry_id in removed:
            del self._roster[entry_id]
        logger.debug(
            "Deleted employee %s with %d roster entries", employee_id, len(removed)
        )
        self._notify(EMPLOYEES)
        self._notify(AVAILABILITIES)
        self._notify(ROSTER)

    def save_shift(self, shift: Shift) -> None:
        self._shifts[shift.id] = shift
        self._notify(SHIFTS)

    def delete_shift(self, shift_id: str) -> None:
        if self._shifts.pop(shift_id, None) is None:
            return
        self._roster = {k: e for k, e in self._roster.items() if e.shift_id != shift_id}
        self._notify(SHIFTS)
        self._notify(ROSTER)

    def upsert_availability(
        self,
        employee_id: str,
        day: Weekday,
        **changes,
    ) -> Availability:
        existing = self._availabilities.get((employee_id, day))
        if existing is None:
            record = Availability(employee_id=employee_id, day=day, **changes)
        else:
            record = dataclasses.replace(existing, **changes)
        self._availabilities[record.key] = record
        self._notify(AVAILABILITIES)
        return record

    def save_roster_entry(self, entry: RosterEntry) -> None:
        self._roster[entry.id] = entry
        self._notify(ROSTER)

    def delete_roster_entry(self, entry_id: str) -> None:
        if self._roster.pop(entry_id, None) is not None:
            self._notify(ROSTER)

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, collection: str) -> None:
        for callback in list(self._subscribers):
            callback(collection)
