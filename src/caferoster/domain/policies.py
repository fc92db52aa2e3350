"""Policy definitions for roster rules.

This module contains configurable policies that define business rules for
staffing limits, weekly hour targets and break deductions. Policies are kept
separate from the roster engine to allow independent testing and easy
modification.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from caferoster.domain.models import Position


class StaffingPolicy(ABC):
    """Abstract base class for staffing limit policies."""

    @abstractmethod
    def max_working_days(self) -> int:
        """Maximum distinct days an employee may work per week."""
        pass

    @abstractmethod
    def target_hours(self, position: Position) -> float:
        """Weekly hours an employee in ``position`` should be brought up to."""
        pass


class BreakPolicy(ABC):
    """Abstract base class for unpaid break deduction policies."""

    @abstractmethod
    def break_minutes(self, raw_minutes: int) -> int:
        """Get the break deduction for a shift of ``raw_minutes``."""
        pass

    @abstractmethod
    def counted_minutes(self, raw_minutes: int) -> int:
        """Get the paid minutes for a shift of ``raw_minutes``."""
        pass


@dataclass
class DefaultStaffingPolicy(StaffingPolicy):
    """Default staffing policy implementation.

    - At most 5 working days per week, regardless of shift count
    - Part-time staff target 20 hours per week
    - Every other position targets 37.5 hours per week
    """

    max_days: int = 5
    part_time_target_hours: float = 20.0
    full_time_target_hours: float = 37.5

    def max_working_days(self) -> int:
        return self.max_days

    def target_hours(self, position: Position) -> float:
        if position is Position.PART_TIME_STAFF:
            return self.part_time_target_hours
        return self.full_time_target_hours


@dataclass
class DefaultBreakPolicy(BreakPolicy):
    """Default break policy implementation.

    Break deduction based on shift length:
    - Shift > 8 hours (480 min): 30 minutes
    - Otherwise: 15 minutes

    The deduction applies to every shift, so a shift shorter than its
    deduction counts negative unless ``clamp_at_zero`` is set.
    """

    long_shift_threshold: int = 480  # 8 hours
    long_shift_break: int = 30
    short_shift_break: int = 15
    clamp_at_zero: bool = False

    def break_minutes(self, raw_minutes: int) -> int:
        if raw_minutes > self.long_shift_threshold:
            return self.long_shift_break
        return self.short_shift_break

    def counted_minutes(self, raw_minutes: int) -> int:
        counted = raw_minutes - self.break_minutes(raw_minutes)
        if self.clamp_at_zero:
            return max(0, counted)
        return counted
