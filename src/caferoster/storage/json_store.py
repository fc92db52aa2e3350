"""JSON file storage for roster data.

The document has four top-level lists::

    {
      "employees": [{"id", "name", "position", "email", "phone"}],
      "shifts": [{"id", "name", "day", "start_time", "end_time",
                  "required_position", "min_staff_count"}],
      "availabilities": [{"employee_id", "day", "start_time", "end_time",
                          "is_available"}],
      "roster": [{"id", "shift_id", "employee_id", "day",
                  "start_time", "end_time"}]
    }

Times are ``HH:MM``. A shift whose day is ``"Everyday"`` is expanded into
seven shifts when loaded.
"""

import json
import logging
from pathlib import Path
from typing import Any, Union

from caferoster.domain.models import (
    Availability,
    Employee,
    Position,
    RosterEntry,
    Shift,
    ShiftTemplate,
    TimeInterval,
    Weekday,
)
from caferoster.storage.repository import InMemoryRepository

logger = logging.getLogger(__name__)


def employee_from_dict(data: dict[str, Any]) -> Employee:
    return Employee(
        id=str(data["id"]),
        name=data["name"],
        position=Position.parse(data["position"]),
        email=data.get("email"),
        phone=data.get("phone"),
    )


def employee_to_dict(employee: Employee) -> dict[str, Any]:
    return {
        "id": employee.id,
        "name": employee.name,
        "position": employee.position.slug,
        "email": employee.email,
        "phone": employee.phone,
    }


def shifts_from_dict(data: dict[str, Any]) -> list[Shift]:
    """Load one authored shift, expanding ``"Everyday"`` into seven."""
    required = data.get("required_position")
    template = ShiftTemplate(
        id=str(data["id"]) if data.get("id") is not None else None,
        name=data["name"],
        day=data["day"],
        start_time=data["start_time"],
        end_time=data["end_time"],
        required_position=Position.parse(required) if required else None,
        min_staff_count=int(data.get("min_staff_count", 1)),
    )
    return template.expand()


def shift_to_dict(shift: Shift) -> dict[str, Any]:
    return {
        "id": shift.id,
        "name": shift.name,
        "day": shift.day.value,
        "start_time": shift.interval.start_text,
        "end_time": shift.interval.end_text,
        "required_position": (
            shift.required_position.slug if shift.required_position else None
        ),
        "min_staff_count": shift.min_staff_count,
    }


def availability_from_dict(data: dict[str, Any]) -> Availability:
    return Availability(
        employee_id=str(data["employee_id"]),
        day=Weekday.parse(data["day"]),
        window=TimeInterval.parse(
            data.get("start_time", "09:00"), data.get("end_time", "17:00")
        ),
        is_available=bool(data.get("is_available", False)),
    )


def availability_to_dict(availability: Availability) -> dict[str, Any]:
    return {
        "employee_id": availability.employee_id,
        "day": availability.day.value,
        "start_time": availability.window.start_text,
        "end_time": availability.window.end_text,
        "is_available": availability.is_available,
    }


def entry_from_dict(data: dict[str, Any]) -> RosterEntry:
    kwargs = {"id": str(data["id"])} if data.get("id") is not None else {}
    return RosterEntry(
        shift_id=str(data["shift_id"]),
        employee_id=str(data["employee_id"]),
        day=Weekday.parse(data["day"]),
        interval=TimeInterval.parse(data["start_time"], data["end_time"]),
        **kwargs,
    )


def entry_to_dict(entry: RosterEntry) -> dict[str, Any]:
    return {
        "id": entry.id,
        "shift_id": entry.shift_id,
        "employee_id": entry.employee_id,
        "day": entry.day.value,
        "start_time": entry.interval.start_text,
        "end_time": entry.interval.end_text,
    }


class JsonFileRepository(InMemoryRepository):
    """Repository backed by a JSON document on disk.

    The file is read once on construction and rewritten after every change
    when ``autosave`` is set; otherwise call :meth:`save` explicitly.

    Example:
        >>> repo = JsonFileRepository("cafe.json")
        >>> repo.list_employees()
    """

    def __init__(self, path: Union[str, Path], autosave: bool = True):
        self.path = Path(path)
        self.autosave = autosave

        data: dict[str, Any] = {}
        if self.path.exists():
            data = json.loads(self.path.read_text(encoding="utf-8"))

        shifts: list[Shift] = []
        for item in data.get("shifts", []):
            shifts.extend(shifts_from_dict(item))

        super().__init__(
            employees=[employee_from_dict(d) for d in data.get("employees", [])],
            shifts=shifts,
            availabilities=[availability_from_dict(d) for d in data.get("availabilities", [])],
            roster=[entry_from_dict(d) for d in data.get("roster", [])],
        )
        logger.debug(
            "Loaded %s: %d employees, %d shifts, %d availability records, %d entries",
            self.path,
            len(self._employees),
            len(self._shifts),
            len(self._availabilities),
            len(self._roster),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "employees": [employee_to_dict(e) for e in self.list_employees()],
            "shifts": [shift_to_dict(s) for s in self.list_shifts()],
            "availabilities": [availability_to_dict(a) for a in self.list_availabilities()],
            "roster": [entry_to_dict(e) for e in self.list_roster()],
        }

    def save(self) -> None:
        """Write the current state back to the file."""
        self.path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        logger.debug("Wrote %s", self.path)

    def _notify(self, collection: str) -> None:
        if self.autosave:
            self.save()
        super()._notify(collection)
