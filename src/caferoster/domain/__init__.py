"""Domain models and business rules for rostering."""

from caferoster.domain.models import (
    EVERY_DAY,
    POSITION_LABELS,
    Availability,
    CoverageStatus,
    CoverageSummary,
    Employee,
    IneligibleEmployeeError,
    InvalidIntervalError,
    Position,
    RosterEntry,
    Shift,
    ShiftCoverage,
    ShiftTemplate,
    TimeInterval,
    UnknownReferenceError,
    Weekday,
    format_clock,
    parse_clock,
)
from caferoster.domain.policies import (
    BreakPolicy,
    DefaultBreakPolicy,
    DefaultStaffingPolicy,
    StaffingPolicy,
)

__all__ = [
    # Models
    "Availability",
    "CoverageStatus",
    "CoverageSummary",
    "Employee",
    "EVERY_DAY",
    "Position",
    "POSITION_LABELS",
    "RosterEntry",
    "Shift",
    "ShiftCoverage",
    "ShiftTemplate",
    "TimeInterval",
    "Weekday",
    "format_clock",
    "parse_clock",
    # Errors
    "IneligibleEmployeeError",
    "InvalidIntervalError",
    "UnknownReferenceError",
    # Policies
    "BreakPolicy",
    "DefaultBreakPolicy",
    "DefaultStaffingPolicy",
    "StaffingPolicy",
]
