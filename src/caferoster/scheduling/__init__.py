"""Roster engine for assigning staff to shifts."""

from caferoster.scheduling.availability_index import AvailabilityIndex
from caferoster.scheduling.conflict_detector import conflicts, find_conflicts
from caferoster.scheduling.eligibility import (
    EligibilityFilter,
    EmployeeWeeklyState,
    matches_position,
)
from caferoster.scheduling.fairness import FairnessRanker
from caferoster.scheduling.roster_editor import RosterEditor
from caferoster.scheduling.roster_generator import (
    RosterGenerator,
    generate_roster,
    shift_priority_order,
)

__all__ = [
    # Engine
    "RosterGenerator",
    "generate_roster",
    "shift_priority_order",
    # Manual edits
    "RosterEditor",
    # Building blocks
    "AvailabilityIndex",
    "EligibilityFilter",
    "EmployeeWeeklyState",
    "FairnessRanker",
    "conflicts",
    "find_conflicts",
    "matches_position",
]
