"""Validation module for verifying roster correctness.

This module provides a single source of truth for roster constraints.
Generated rosters should always pass; manually edited rosters may not (a
swap is not re-checked), and validation is how those violations surface.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from caferoster.domain.models import (
    Availability,
    Employee,
    RosterEntry,
    Shift,
    ShiftCoverage,
    Weekday,
)
from caferoster.domain.policies import DefaultStaffingPolicy, StaffingPolicy
from caferoster.scheduling.availability_index import AvailabilityIndex
from caferoster.scheduling.conflict_detector import find_conflicts


class ValidationErrorType(Enum):
    """Types of validation errors."""

    MULTIPLE_SHIFTS_SAME_DAY = "multiple_shifts_same_day"
    OVERLAPPING_ENTRIES = "overlapping_entries"
    POSITION_MISMATCH = "position_mismatch"
    MAX_WORKING_DAYS_EXCEEDED = "max_working_days_exceeded"
    EMPLOYEE_UNAVAILABLE = "employee_unavailable"
    OUTSIDE_AVAILABILITY = "outside_availability"


@dataclass
class ValidationError:
    """A single validation error."""

    error_type: ValidationErrorType
    message: str
    employee_id: Optional[str] = None
    day: Optional[Weekday] = None
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [f"[{self.error_type.value}]"]
        if self.employee_id:
            parts.append(f"Employee {self.employee_id}:")
        parts.append(self.message)
        if self.day is not None:
            parts.append(f"({self.day.value})")
        return " ".join(parts)


@dataclass
class ValidationResult:
    """Result of validating a roster."""

    is_valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, error: ValidationError) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(warning)

    def errors_of_type(self, error_type: ValidationErrorType) -> list[ValidationError]:
        return [e for e in self.errors if e.error_type == error_type]


class RosterValidator:
    """Validates rosters against all constraints.

    Example:
        >>> validator = RosterValidator()
        >>> result = validator.validate(roster, employees, shifts, availabilities)
        >>> if not result.is_valid:
        ...     for error in result.errors:
        ...         print(error)
    """

    def __init__(self, staffing_policy: Optional[StaffingPolicy] = None):
        self.staffing_policy = staffing_policy or DefaultStaffingPolicy()

    def validate(
        self,
        roster: list[RosterEntry],
        employees: list[Employee],
        shifts: list[Shift],
        availabilities: Iterable[Availability],
    ) -> ValidationResult:
        """Validate a complete roster.

        Args:
            roster: Entries to check.
            employees: Known employees.
            shifts: Known shifts.
            availabilities: Availability records for the week.

        Returns:
            ValidationResult with is_valid flag and any errors.
        """
        result = ValidationResult(is_valid=True)
        employees_map = {e.id: e for e in employees}
        shifts_map = {s.id: s for s in shifts}
        index = AvailabilityIndex(availabilities)

        resolved = []
        for entry in roster:
            if entry.employee_id not in employees_map:
                result.add_warning(
                    f"Entry {entry.id} references unknown employee {entry.employee_id}"
                )
                continue
            resolved.append(entry)
            employee = employees_map[entry.employee_id]

            shift = shifts_map.get(entry.shift_id)
            if shift is None:
                result.add_warning(
                    f"Entry {entry.id} references unknown shift {entry.shift_id}"
                )
            else:
                self._validate_position(entry, employee, shift, result)

            self._validate_availability(entry, index, result)

        self._validate_days(resolved, result)
        self._validate_coverage(roster, shifts, result)

        return result

    def _validate_position(
        self,
        entry: RosterEntry,
        employee: Employee,
        shift: Shift,
        result: ValidationResult,
    ) -> None:
        if shift.required_position is None:
            return
        if employee.position is not shift.required_position:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.POSITION_MISMATCH,
                    message=(
                        f"Shift {shift.name} requires {shift.required_position.label}, "
                        f"employee is {employee.position.label}"
                    ),
                    employee_id=employee.id,
                    day=entry.day,
                )
            )

    def _validate_availability(
        self,
        entry: RosterEntry,
        index: AvailabilityIndex,
        result: ValidationResult,
    ) -> None:
        window = index.window_for(entry.employee_id, entry.day)
        if window is None:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.EMPLOYEE_UNAVAILABLE,
                    message="Employee is not available this day",
                    employee_id=entry.employee_id,
                    day=entry.day,
                )
            )
        elif not window.contains(entry.interval):
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.OUTSIDE_AVAILABILITY,
                    message=f"Entry {entry.interval} is outside availability {window}",
                    employee_id=entry.employee_id,
                    day=entry.day,
                    details={"entry_id": entry.id},
                )
            )

    def _validate_days(
        self,
        roster: list[RosterEntry],
        result: ValidationResult,
    ) -> None:
        """Check same-day, overlap and working-day limits per employee."""
        by_employee: dict[str, list[RosterEntry]] = {}
        for entry in roster:
            by_employee.setdefault(entry.employee_id, []).append(entry)

        max_days = self.staffing_policy.max_working_days()

        for employee_id, entries in by_employee.items():
            by_day: dict[Weekday, list[RosterEntry]] = {}
            for entry in entries:
                by_day.setdefault(entry.day, []).append(entry)

            for day, day_entries in by_day.items():
                if len(day_entries) > 1:
                    result.add_error(
                        ValidationError(
                            error_type=ValidationErrorType.MULTIPLE_SHIFTS_SAME_DAY,
                            message=f"{len(day_entries)} entries on one day",
                            employee_id=employee_id,
                            day=day,
                        )
                    )
                for i, entry in enumerate(day_entries):
                    overlapping = find_conflicts(
                        employee_id, day, entry.interval, day_entries[i + 1:]
                    )
                    for other in overlapping:
                        result.add_error(
                            ValidationError(
                                error_type=ValidationErrorType.OVERLAPPING_ENTRIES,
                                message=f"{entry.interval} overlaps {other.interval}",
                                employee_id=employee_id,
                                day=day,
                                details={"entry_ids": [entry.id, other.id]},
                            )
                        )

            if len(by_day) > max_days:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.MAX_WORKING_DAYS_EXCEEDED,
                        message=f"Works {len(by_day)} days, max {max_days}",
                        employee_id=employee_id,
                        details={"days": len(by_day), "max_days": max_days},
                    )
                )

    def _validate_coverage(
        self,
        roster: list[RosterEntry],
        shifts: list[Shift],
        result: ValidationResult,
    ) -> None:
        """Warn about shifts below their minimum headcount."""
        shifts_map = {s.id: s for s in shifts}
        for coverage in ShiftCoverage.calculate(shifts, roster):
            if coverage.shortfall:
                shift = shifts_map[coverage.shift_id]
                result.add_warning(
                    f"Shift {shift.name} ({shift.day.value} {shift.interval}) "
                    f"has {coverage.assigned}/{coverage.required} staff"
                )
