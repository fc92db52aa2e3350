"""Tests for domain models."""

from datetime import time

import pytest

from caferoster.domain.models import (
    Availability,
    CoverageStatus,
    CoverageSummary,
    InvalidIntervalError,
    Position,
    RosterEntry,
    Shift,
    ShiftCoverage,
    ShiftTemplate,
    TimeInterval,
    Weekday,
    format_clock,
    parse_clock,
)


class TestTimeInterval:
    """Tests for TimeInterval."""

    def test_parse_strings(self):
        interval = TimeInterval.parse("09:00", "17:30")
        assert interval.start_minutes == 540
        assert interval.end_minutes == 1050
        assert interval.duration_minutes == 510
        assert interval.duration_hours == 8.5

    def test_parse_time_objects(self):
        interval = TimeInterval.parse(time(6, 15), time(14, 45))
        assert str(interval) == "06:15-14:45"

    def test_end_before_start_rejected(self):
        """Intervals must not wrap past midnight."""
        with pytest.raises(InvalidIntervalError):
            TimeInterval.parse("22:00", "02:00")

    def test_zero_length_rejected(self):
        with pytest.raises(InvalidIntervalError):
            TimeInterval.parse("09:00", "09:00")

    def test_invalid_interval_is_value_error(self):
        with pytest.raises(ValueError):
            TimeInterval(600, 500)

    def test_contains(self):
        outer = TimeInterval.parse("09:00", "17:00")
        assert outer.contains(TimeInterval.parse("09:00", "17:00")) is True
        assert outer.contains(TimeInterval.parse("10:00", "12:00")) is True
        assert outer.contains(TimeInterval.parse("08:59", "12:00")) is False
        assert outer.contains(TimeInterval.parse("12:00", "17:01")) is False

    def test_overlaps(self):
        a = TimeInterval.parse("09:00", "13:00")
        assert a.overlaps(TimeInterval.parse("12:00", "15:00")) is True
        assert a.overlaps(TimeInterval.parse("10:00", "11:00")) is True
        assert a.overlaps(TimeInterval.parse("07:00", "18:00")) is True

    def test_touching_intervals_do_not_overlap(self):
        """A shift ending exactly when another begins is not a conflict."""
        a = TimeInterval.parse("09:00", "13:00")
        b = TimeInterval.parse("13:00", "17:00")
        assert a.overlaps(b) is False
        assert b.overlaps(a) is False


class TestClockHelpers:
    def test_parse_clock(self):
        assert parse_clock("00:00") == 0
        assert parse_clock("07:05") == 425
        assert parse_clock("24:00") == 1440

    def test_parse_clock_invalid(self):
        with pytest.raises(ValueError):
            parse_clock("9am")
        with pytest.raises(ValueError):
            parse_clock("12:75")

    def test_format_clock(self):
        assert format_clock(425) == "07:05"


class TestPosition:
    """Tests for the position rank table."""

    def test_ranks_are_strictly_ordered(self):
        ranks = [p.rank for p in Position]
        assert ranks == sorted(ranks)
        assert len(set(ranks)) == len(ranks)

    def test_manager_is_most_senior(self):
        assert Position.MANAGER.is_senior_to(Position.ASSISTANT_MANAGER)
        assert Position.REGULAR_STAFF.is_senior_to(Position.PART_TIME_STAFF)
        assert not Position.PART_TIME_STAFF.is_senior_to(Position.MANAGER)

    @pytest.mark.parametrize(
        "label",
        ["head-barista", "Head Barista", "3head-barista", "HEAD_BARISTA"],
    )
    def test_parse_accepts_all_label_styles(self, label):
        assert Position.parse(label) is Position.HEAD_BARISTA

    def test_parse_rejects_wrong_rank_prefix(self):
        with pytest.raises(ValueError):
            Position.parse("1head-barista")

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            Position.parse("dishwasher")

    def test_slug_and_label(self):
        assert Position.PART_TIME_STAFF.slug == "part-time-staff"
        assert Position.PART_TIME_STAFF.label == "Part-time Staff"


class TestWeekday:
    def test_parse(self):
        assert Weekday.parse("monday") is Weekday.MONDAY
        assert Weekday.parse("Sun") is Weekday.SUNDAY

    def test_everyday_is_not_a_weekday(self):
        with pytest.raises(ValueError):
            Weekday.parse("Everyday")

    def test_index(self):
        assert Weekday.MONDAY.index == 0
        assert Weekday.SUNDAY.index == 6


class TestShiftTemplate:
    """Tests for expanding authored shifts."""

    def test_single_day(self):
        template = ShiftTemplate("Morning", "Tuesday", "07:00", "12:00", id="m")
        shifts = template.expand()
        assert len(shifts) == 1
        assert shifts[0].id == "m"
        assert shifts[0].day is Weekday.TUESDAY

    def test_every_day_expands_to_seven_concrete_shifts(self):
        template = ShiftTemplate(
            "Close", "Everyday", "15:00", "21:00",
            required_position=Position.SENIOR_STAFF, min_staff_count=2, id="close",
        )
        shifts = template.expand()

        assert [s.day for s in shifts] == list(Weekday)
        assert len({s.id for s in shifts}) == 7
        assert shifts[0].id == "close-monday"
        for shift in shifts:
            assert shift.required_position is Position.SENIOR_STAFF
            assert shift.min_staff_count == 2
            assert str(shift.interval) == "15:00-21:00"

    def test_generated_ids_are_unique(self):
        shifts = ShiftTemplate("Any", "Everyday", "09:00", "10:00").expand()
        assert len({s.id for s in shifts}) == 7

    def test_invalid_times_rejected(self):
        with pytest.raises(InvalidIntervalError):
            ShiftTemplate("Bad", "Monday", "17:00", "09:00").expand()


class TestShift:
    def test_min_staff_must_be_positive(self):
        with pytest.raises(ValueError):
            Shift(
                id="s", name="s", day=Weekday.MONDAY,
                interval=TimeInterval.parse("09:00", "10:00"), min_staff_count=0,
            )


class TestAvailability:
    def test_defaults_match_new_record(self):
        """A fresh record is 09:00-17:00 and not available."""
        record = Availability(employee_id="E1", day=Weekday.MONDAY)
        assert str(record.window) == "09:00-17:00"
        assert record.is_available is False
        assert record.key == ("E1", Weekday.MONDAY)


class TestRosterEntry:
    def test_for_shift_copies_day_and_times(self):
        shift = Shift(
            id="s1", name="Morning", day=Weekday.FRIDAY,
            interval=TimeInterval.parse("07:00", "12:00"),
        )
        entry = RosterEntry.for_shift(shift, "E1", entry_id="x")
        assert entry.id == "x"
        assert entry.shift_id == "s1"
        assert entry.day is Weekday.FRIDAY
        assert entry.interval == shift.interval

    def test_entries_get_unique_ids_by_default(self):
        interval = TimeInterval.parse("07:00", "12:00")
        a = RosterEntry("s", "E1", Weekday.MONDAY, interval)
        b = RosterEntry("s", "E1", Weekday.MONDAY, interval)
        assert a.id != b.id


class TestCoverage:
    def _shift(self, shift_id: str, min_staff: int) -> Shift:
        return Shift(
            id=shift_id, name=shift_id, day=Weekday.MONDAY,
            interval=TimeInterval.parse("09:00", "12:00"), min_staff_count=min_staff,
        )

    def test_status(self):
        assert ShiftCoverage("s", 0, 2).status is CoverageStatus.UNSTAFFED
        assert ShiftCoverage("s", 1, 2).status is CoverageStatus.PARTIAL
        assert ShiftCoverage("s", 2, 2).status is CoverageStatus.FULL
        assert ShiftCoverage("s", 3, 2).status is CoverageStatus.FULL

    def test_calculate_and_summary(self):
        shifts = [self._shift("a", 1), self._shift("b", 2), self._shift("c", 1)]
        roster = [
            RosterEntry.for_shift(shifts[0], "E1"),
            RosterEntry.for_shift(shifts[1], "E2"),
        ]
        coverage = ShiftCoverage.calculate(shifts, roster)
        assert [c.assigned for c in coverage] == [1, 1, 0]
        assert coverage[1].shortfall == 1

        summary = CoverageSummary.from_coverage(coverage)
        assert summary.total == 3
        assert summary.fully_staffed == 1
        assert summary.partially_staffed == 1
        assert summary.unstaffed == 1
