"""Tests for availability lookup."""

from caferoster.domain.models import Availability, TimeInterval, Weekday
from caferoster.scheduling.availability_index import AvailabilityIndex


def make_availability(
    employee_id: str,
    day: Weekday,
    start: str = "09:00",
    end: str = "17:00",
    is_available: bool = True,
) -> Availability:
    return Availability(
        employee_id=employee_id,
        day=day,
        window=TimeInterval.parse(start, end),
        is_available=is_available,
    )


class TestAvailabilityIndex:
    """Tests for AvailabilityIndex."""

    def test_missing_record_means_unavailable(self):
        index = AvailabilityIndex()
        assert index.is_available("E1", Weekday.MONDAY) is False
        assert index.window_for("E1", Weekday.MONDAY) is None
        assert index.get("E1", Weekday.MONDAY) is None

    def test_available_record(self):
        index = AvailabilityIndex([make_availability("E1", Weekday.MONDAY)])
        assert index.is_available("E1", Weekday.MONDAY) is True
        assert str(index.window_for("E1", Weekday.MONDAY)) == "09:00-17:00"
        assert index.is_available("E1", Weekday.TUESDAY) is False

    def test_unavailable_record_has_no_window(self):
        index = AvailabilityIndex(
            [make_availability("E1", Weekday.MONDAY, is_available=False)]
        )
        assert index.is_available("E1", Weekday.MONDAY) is False
        assert index.window_for("E1", Weekday.MONDAY) is None

    def test_one_record_per_pair(self):
        """Adding a second record for the same pair replaces the first."""
        index = AvailabilityIndex([
            make_availability("E1", Weekday.MONDAY, "09:00", "12:00"),
            make_availability("E1", Weekday.MONDAY, "06:00", "20:00"),
        ])
        assert index.get("E1", Weekday.MONDAY).window == TimeInterval.parse("06:00", "20:00")
        assert str(index.window_for("E1", Weekday.MONDAY)) == "06:00-20:00"

    def test_can_cover(self):
        index = AvailabilityIndex([make_availability("E1", Weekday.MONDAY)])
        assert index.can_cover("E1", Weekday.MONDAY, TimeInterval.parse("09:00", "17:00"))
        assert index.can_cover("E1", Weekday.MONDAY, TimeInterval.parse("10:00", "12:00"))
        assert not index.can_cover("E1", Weekday.MONDAY, TimeInterval.parse("08:00", "12:00"))
        assert not index.can_cover("E1", Weekday.TUESDAY, TimeInterval.parse("10:00", "12:00"))
