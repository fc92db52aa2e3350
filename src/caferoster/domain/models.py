"""Domain models for the roster system.

This module contains the core data structures used throughout the roster
engine, including employees, positions, shifts, availability records and
roster entries.
"""

import uuid
from dataclasses import dataclass, field
from datetime import time
from enum import Enum
from typing import Optional, Union

MINUTES_PER_DAY = 24 * 60

EVERY_DAY = "Everyday"


class InvalidIntervalError(ValueError):
    """Raised when a time interval ends at or before its start."""


class UnknownReferenceError(LookupError):
    """Raised when an edit refers to a shift, employee or entry that does not exist."""


class IneligibleEmployeeError(ValueError):
    """Raised when a manual add targets an employee who cannot take the shift."""


class Weekday(Enum):
    """Days of the scheduling week, Monday first."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @classmethod
    def parse(cls, value: Union[str, "Weekday"]) -> "Weekday":
        """Parse a weekday name, case-insensitively."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for day in cls:
            if day.value.lower() == text or day.value[:3].lower() == text:
                return day
        raise ValueError(f"Unknown weekday: {value!r}")

    @property
    def index(self) -> int:
        """Zero-based position in the week (Monday = 0)."""
        return list(Weekday).index(self)

    @property
    def is_sunday(self) -> bool:
        return self is Weekday.SUNDAY


class Position(Enum):
    """Employee positions, from most to least senior.

    The value is the position's seniority rank: 1 is the most senior.
    """

    MANAGER = 1
    ASSISTANT_MANAGER = 2
    HEAD_BARISTA = 3
    SENIOR_STAFF = 4
    REGULAR_STAFF = 5
    PART_TIME_STAFF = 6

    @property
    def rank(self) -> int:
        """Seniority rank (lower is more senior)."""
        return self.value

    @property
    def slug(self) -> str:
        """Machine label, e.g. ``head-barista``."""
        return self.name.lower().replace("_", "-")

    @property
    def label(self) -> str:
        """Display label, e.g. ``Head Barista``."""
        return POSITION_LABELS[self]

    def is_senior_to(self, other: "Position") -> bool:
        return self.rank < other.rank

    @classmethod
    def parse(cls, value: Union[str, "Position"]) -> "Position":
        """Parse a position from its slug, display label, or legacy label.

        Legacy labels carry the rank as a numeric prefix (``3head-barista``);
        the prefix is checked against the rank table rather than trusted.
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        prefix = ""
        while text and text[0].isdigit():
            prefix += text[0]
            text = text[1:]
        text = text.replace(" ", "-").replace("_", "-")
        for position in cls:
            if position.slug == text:
                if prefix and int(prefix) != position.rank:
                    raise ValueError(f"Rank prefix does not match position: {value!r}")
                return position
        raise ValueError(f"Unknown position: {value!r}")


POSITION_LABELS = {
    Position.MANAGER: "Manager",
    Position.ASSISTANT_MANAGER: "Assistant Manager",
    Position.HEAD_BARISTA: "Head Barista",
    Position.SENIOR_STAFF: "Senior Staff",
    Position.REGULAR_STAFF: "Regular Staff",
    Position.PART_TIME_STAFF: "Part-time Staff",
}


def parse_clock(value: Union[str, time]) -> int:
    """Convert ``HH:MM`` (or a time object) to minutes since midnight."""
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    try:
        hours_text, minutes_text = str(value).strip().split(":")[:2]
        hours, minutes = int(hours_text), int(minutes_text)
    except ValueError:
        raise ValueError(f"Invalid time of day: {value!r}") from None
    if not (0 <= hours <= 24 and 0 <= minutes < 60):
        raise ValueError(f"Invalid time of day: {value!r}")
    return hours * 60 + minutes


def format_clock(minutes: int) -> str:
    """Format minutes since midnight as ``HH:MM``."""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


@dataclass(frozen=True)
class TimeInterval:
    """A half-open time-of-day range [start, end) within a single day.

    Attributes:
        start_minutes: Minutes from midnight when the interval starts.
        end_minutes: Minutes from midnight when the interval ends (exclusive).
    """

    start_minutes: int
    end_minutes: int

    def __post_init__(self):
        if not (0 <= self.start_minutes <= MINUTES_PER_DAY):
            raise InvalidIntervalError(f"Start out of range: {self.start_minutes}")
        if not (0 <= self.end_minutes <= MINUTES_PER_DAY):
            raise InvalidIntervalError(f"End out of range: {self.end_minutes}")
        if self.end_minutes <= self.start_minutes:
            raise InvalidIntervalError(
                f"Interval must end after it starts "
                f"({format_clock(self.start_minutes)}-{format_clock(self.end_minutes)})"
            )

    @classmethod
    def parse(cls, start: Union[str, time], end: Union[str, time]) -> "TimeInterval":
        """Create an interval from ``HH:MM`` strings or time objects."""
        return cls(parse_clock(start), parse_clock(end))

    @property
    def duration_minutes(self) -> int:
        return self.end_minutes - self.start_minutes

    @property
    def duration_hours(self) -> float:
        return self.duration_minutes / 60.0

    @property
    def start_text(self) -> str:
        return format_clock(self.start_minutes)

    @property
    def end_text(self) -> str:
        return format_clock(self.end_minutes)

    def contains(self, inner: "TimeInterval") -> bool:
        """Check if ``inner`` lies entirely within this interval."""
        return (
            inner.start_minutes >= self.start_minutes
            and inner.end_minutes <= self.end_minutes
        )

    def overlaps(self, other: "TimeInterval") -> bool:
        """Check if this interval overlaps another.

        Intervals that only touch (one ends as the other begins) do not overlap.
        """
        return (
            self.start_minutes < other.end_minutes
            and other.start_minutes < self.end_minutes
        )

    def __str__(self) -> str:
        return f"{self.start_text}-{self.end_text}"


@dataclass
class Employee:
    """A member of staff who can be rostered.

    Attributes:
        id: Unique identifier for the employee.
        name: Display name.
        position: Position held; drives seniority and position-matched shifts.
        email: Optional contact address.
        phone: Optional contact number.
    """

    id: str
    name: str
    position: Position
    email: Optional[str] = None
    phone: Optional[str] = None


@dataclass
class Shift:
    """A staffing requirement on one concrete weekday.

    Attributes:
        id: Unique identifier for the shift.
        name: Display name (e.g. "Morning Bar").
        day: Weekday the shift runs on.
        interval: Start and end time of the shift.
        required_position: Position required to work it, or None for any.
        min_staff_count: Target headcount for full coverage.
    """

    id: str
    name: str
    day: Weekday
    interval: TimeInterval
    required_position: Optional[Position] = None
    min_staff_count: int = 1

    def __post_init__(self):
        if self.min_staff_count < 1:
            raise ValueError(
                f"Shift {self.id} must require at least one staff member"
            )

    @property
    def duration_hours(self) -> float:
        return self.interval.duration_hours


@dataclass
class ShiftTemplate:
    """Shift as authored, before expansion into concrete shifts.

    ``day`` is either a weekday name or ``"Everyday"``; the latter expands
    into one shift per weekday.
    """

    name: str
    day: str
    start_time: str
    end_time: str
    required_position: Optional[Position] = None
    min_staff_count: int = 1
    id: Optional[str] = None

    @property
    def is_every_day(self) -> bool:
        return self.day.strip().lower() == EVERY_DAY.lower()

    def expand(self) -> list[Shift]:
        """Expand the template into concrete shifts."""
        interval = TimeInterval.parse(self.start_time, self.end_time)
        days = list(Weekday) if self.is_every_day else [Weekday.parse(self.day)]

        shifts = []
        for day in days:
            if self.id is None:
                shift_id = uuid.uuid4().hex
            elif self.is_every_day:
                shift_id = f"{self.id}-{day.value.lower()}"
            else:
                shift_id = self.id
            shifts.append(
                Shift(
                    id=shift_id,
                    name=self.name,
                    day=day,
                    interval=interval,
                    required_position=self.required_position,
                    min_staff_count=self.min_staff_count,
                )
            )
        return shifts


@dataclass
class Availability:
    """An employee's declared availability for one weekday.

    Attributes:
        employee_id: ID of the employee.
        day: Weekday the record applies to.
        window: Time range the employee can work.
        is_available: If False, the employee cannot work that day at all.
    """

    employee_id: str
    day: Weekday
    window: TimeInterval = field(
        default_factory=lambda: TimeInterval.parse("09:00", "17:00")
    )
    is_available: bool = False

    @property
    def key(self) -> tuple[str, Weekday]:
        return (self.employee_id, self.day)


@dataclass(frozen=True)
class RosterEntry:
    """A single employee-to-shift assignment.

    Day and times are copied from the shift at assignment time, so a later
    change to the shift does not rewrite the roster.

    Attributes:
        shift_id: ID of the shift.
        employee_id: ID of the assigned employee.
        day: Weekday of the assignment.
        interval: Working time of the assignment.
        id: Unique identifier of the entry.
    """

    shift_id: str
    employee_id: str
    day: Weekday
    interval: TimeInterval
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @classmethod
    def for_shift(
        cls,
        shift: Shift,
        employee_id: str,
        entry_id: Optional[str] = None,
    ) -> "RosterEntry":
        """Create an entry copying the shift's day and times."""
        kwargs = {"id": entry_id} if entry_id is not None else {}
        return cls(
            shift_id=shift.id,
            employee_id=employee_id,
            day=shift.day,
            interval=shift.interval,
            **kwargs,
        )

    @property
    def duration_minutes(self) -> int:
        return self.interval.duration_minutes


class CoverageStatus(Enum):
    """Staffing state of a shift relative to its minimum headcount."""

    UNSTAFFED = "unstaffed"
    PARTIAL = "partial"
    FULL = "full"


@dataclass
class ShiftCoverage:
    """Assigned headcount versus required headcount for one shift."""

    shift_id: str
    assigned: int
    required: int

    @property
    def status(self) -> CoverageStatus:
        if self.assigned >= self.required:
            return CoverageStatus.FULL
        if self.assigned > 0:
            return CoverageStatus.PARTIAL
        return CoverageStatus.UNSTAFFED

    @property
    def shortfall(self) -> int:
        return max(0, self.required - self.assigned)

    @classmethod
    def calculate(
        cls,
        shifts: list[Shift],
        roster: list[RosterEntry],
    ) -> list["ShiftCoverage"]:
        """Calculate coverage for each shift from a roster."""
        counts: dict[str, int] = {}
        for entry in roster:
            counts[entry.shift_id] = counts.get(entry.shift_id, 0) + 1
        return [
            cls(shift_id=s.id, assigned=counts.get(s.id, 0), required=s.min_staff_count)
            for s in shifts
        ]


@dataclass
class CoverageSummary:
    """Aggregate coverage counts across all shifts."""

    total: int = 0
    fully_staffed: int = 0
    partially_staffed: int = 0
    unstaffed: int = 0

    @classmethod
    def from_coverage(cls, coverage: list[ShiftCoverage]) -> "CoverageSummary":
        summary = cls(total=len(coverage))
        for item in coverage:
            if item.status is CoverageStatus.FULL:
                summary.fully_staffed += 1
            elif item.status is CoverageStatus.PARTIAL:
                summary.partially_staffed += 1
            else:
                summary.unstaffed += 1
        return summary
