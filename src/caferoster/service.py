"""Roster service tying storage to the roster engine.

This module provides the high-level RosterService class that reads inputs
from a repository, runs generation or a manual edit, and writes the result
back. Generation and edits share one lock so they never interleave on the
stored roster.
"""

import logging
import threading
from typing import Optional

from caferoster.domain.models import (
    CoverageSummary,
    Employee,
    RosterEntry,
    ShiftCoverage,
)
from caferoster.domain.policies import (
    BreakPolicy,
    DefaultBreakPolicy,
    DefaultStaffingPolicy,
    StaffingPolicy,
)
from caferoster.reporting.hours import HoursAggregator, HoursTotals, WeeklyHoursReport
from caferoster.scheduling.roster_editor import RosterEditor
from caferoster.scheduling.roster_generator import RosterGenerator
from caferoster.storage.repository import RosterRepository
from caferoster.validation.validator import RosterValidator, ValidationResult

logger = logging.getLogger(__name__)


class RosterService:
    """Roster operations over a repository.

    Example:
        >>> service = RosterService(InMemoryRepository(employees, shifts, availabilities))
        >>> roster = service.generate()
        >>> roster = service.swap(roster[0], roster[1])
    """

    def __init__(
        self,
        repository: RosterRepository,
        staffing_policy: Optional[StaffingPolicy] = None,
        break_policy: Optional[BreakPolicy] = None,
    ):
        """Initialize the service with storage and policies.

        Args:
            repository: Where employees, shifts, availability and the roster live.
            staffing_policy: Policy for working-day caps and weekly targets.
            break_policy: Policy for break deductions in hour totals.
        """
        self.repository = repository
        self.staffing_policy = staffing_policy or DefaultStaffingPolicy()
        self.break_policy = break_policy or DefaultBreakPolicy()

        self.generator = RosterGenerator(self.staffing_policy)
        self.aggregator = HoursAggregator(self.break_policy)
        self.validator = RosterValidator(self.staffing_policy)

        self._lock = threading.Lock()

    def generate(self) -> list[RosterEntry]:
        """Generate a fresh roster and replace the stored one with it.

        Manual edits made to the previous roster are discarded.
        """
        roster, _ = self.generate_with_stats()
        return roster

    def generate_with_stats(self) -> tuple[list[RosterEntry], dict]:
        with self._lock:
            employees = self.repository.list_employees()
            shifts = self.repository.list_shifts()
            availabilities = self.repository.list_availabilities()

            roster, stats = self.generator.generate_roster_with_stats(
                employees, shifts, availabilities
            )
            self.repository.replace_roster(roster)

        logger.info(
            "Generated %d entries for %d shifts (%d full, %d partial, %d unstaffed)",
            stats["total_entries"],
            stats["total_shifts"],
            stats["fully_staffed"],
            stats["partially_staffed"],
            stats["unstaffed"],
        )
        return roster, stats

    def swap(self, entry_a: RosterEntry, entry_b: RosterEntry) -> list[RosterEntry]:
        """Exchange the employees of two stored entries."""
        with self._lock:
            editor = self._editor()
            roster = editor.swap(self.repository.list_roster(), entry_a, entry_b)
            self._store_changed(roster, {entry_a.id, entry_b.id})
        return roster

    def remove(self, entry: RosterEntry) -> list[RosterEntry]:
        """Remove a stored entry."""
        with self._lock:
            roster = self._editor().remove(self.repository.list_roster(), entry)
            self.repository.delete_roster_entry(entry.id)
        return roster

    def add(self, shift_id: str, employee_id: str) -> list[RosterEntry]:
        """Add an employee to a shift, if they are a valid candidate."""
        with self._lock:
            current = self.repository.list_roster()
            roster = self._editor().add(current, shift_id, employee_id)
            self.repository.save_roster_entry(roster[-1])
        return roster

    def eligible_candidates(self, shift_id: str) -> list[Employee]:
        """Employees who may be added to a shift in the stored roster."""
        return self._editor().eligible_candidates(self.repository.list_roster(), shift_id)

    def hours_totals(self) -> dict[str, HoursTotals]:
        return self.aggregator.compute_hours_totals(
            self.repository.list_roster(), self.repository.list_employees()
        )

    def hours_report(self) -> WeeklyHoursReport:
        return self.aggregator.build_report(
            self.repository.list_roster(), self.repository.list_employees()
        )

    def coverage(self) -> tuple[list[ShiftCoverage], CoverageSummary]:
        coverage = ShiftCoverage.calculate(
            self.repository.list_shifts(), self.repository.list_roster()
        )
        return coverage, CoverageSummary.from_coverage(coverage)

    def validate(self) -> ValidationResult:
        return self.validator.validate(
            self.repository.list_roster(),
            self.repository.list_employees(),
            self.repository.list_shifts(),
            self.repository.list_availabilities(),
        )

    def _editor(self) -> RosterEditor:
        return RosterEditor(self.repository.list_employees(), self.repository.list_shifts())

    def _store_changed(self, roster: list[RosterEntry], entry_ids: set[str]) -> None:
        for entry in roster:
            if entry.id in entry_ids:
                self.repository.save_roster_entry(entry)
