"""Availability lookup keyed by employee and weekday."""

from typing import Iterable, Optional

from caferoster.domain.models import Availability, TimeInterval, Weekday


class AvailabilityIndex:
    """Answers availability questions in constant time.

    Records are keyed by ``(employee_id, day)``. Adding a record for a pair
    that already has one replaces it, so there is never more than one record
    per pair. An employee with no record for a day is unavailable that day.

    Example:
        >>> index = AvailabilityIndex(availabilities)
        >>> index.is_available("E001", Weekday.MONDAY)
        True
    """

    def __init__(self, availabilities: Iterable[Availability] = ()):
        self._records: dict[tuple[str, Weekday], Availability] = {}
        for availability in availabilities:
            self.add(availability)

    def add(self, availability: Availability) -> None:
        """Insert a record, replacing any existing one for the same pair."""
        self._records[availability.key] = availability

    def get(self, employee_id: str, day: Weekday) -> Optional[Availability]:
        return self._records.get((employee_id, day))

    def is_available(self, employee_id: str, day: Weekday) -> bool:
        record = self.get(employee_id, day)
        return record is not None and record.is_available

    def window_for(self, employee_id: str, day: Weekday) -> Optional[TimeInterval]:
        """Get the window an employee can work on a day, if they can work at all."""
        record = self.get(employee_id, day)
        if record is None or not record.is_available:
            return None
        return record.window

    def can_cover(self, employee_id: str, day: Weekday, interval: TimeInterval) -> bool:
        """Check if the employee's window for the day contains ``interval``."""
        window = self.window_for(employee_id, day)
        return window is not None and window.contains(interval)
