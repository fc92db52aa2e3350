"""Tests for repositories and JSON persistence."""

import json

import pytest

from caferoster.domain.models import (
    Availability,
    Employee,
    Position,
    RosterEntry,
    Shift,
    TimeInterval,
    Weekday,
)
from caferoster.storage.json_store import (
    JsonFileRepository,
    employee_from_dict,
    shifts_from_dict,
)
from caferoster.storage.repository import (
    AVAILABILITIES,
    EMPLOYEES,
    ROSTER,
    SHIFTS,
    InMemoryRepository,
)


def make_shift(shift_id: str, day: Weekday = Weekday.MONDAY) -> Shift:
    return Shift(
        id=shift_id,
        name=shift_id,
        day=day,
        interval=TimeInterval.parse("09:00", "17:00"),
    )


@pytest.fixture
def repository():
    employees = [
        Employee(id="E1", name="Alice", position=Position.REGULAR_STAFF),
        Employee(id="E2", name="Bob", position=Position.SENIOR_STAFF),
    ]
    shifts = [make_shift("mon"), make_shift("tue", Weekday.TUESDAY)]
    availabilities = [
        Availability("E1", Weekday.MONDAY, TimeInterval.parse("06:00", "22:00"), True),
        Availability("E2", Weekday.MONDAY, TimeInterval.parse("06:00", "22:00"), True),
    ]
    roster = [
        RosterEntry.for_shift(shifts[0], "E1", entry_id="r1"),
        RosterEntry.for_shift(shifts[1], "E1", entry_id="r2"),
        RosterEntry.for_shift(shifts[0], "E2", entry_id="r3"),
    ]
    return InMemoryRepository(employees, shifts, availabilities, roster)


class TestInMemoryRepository:
    """Tests for InMemoryRepository."""

    def test_listing_keeps_insertion_order(self, repository):
        assert [e.id for e in repository.list_employees()] == ["E1", "E2"]
        assert [s.id for s in repository.list_shifts()] == ["mon", "tue"]
        assert [e.id for e in repository.list_roster()] == ["r1", "r2", "r3"]

    def test_replace_roster(self, repository):
        entry = RosterEntry.for_shift(make_shift("mon"), "E2", entry_id="new")
        repository.replace_roster([entry])
        assert repository.list_roster() == [entry]

    def test_delete_employee_cascades(self, repository):
        repository.delete_employee("E1")

        assert repository.get_employee("E1") is None
        assert [a.employee_id for a in repository.list_availabilities()] == ["E2"]
        assert [e.id for e in repository.list_roster()] == ["r3"]

    def test_delete_unknown_employee_is_noop(self, repository):
        repository.delete_employee("ghost")
        assert len(repository.list_employees()) == 2

    def test_delete_shift_cascades(self, repository):
        repository.delete_shift("mon")

        assert repository.get_shift("mon") is None
        assert [e.id for e in repository.list_roster()] == ["r2"]

    def test_upsert_availability_creates_default_record(self, repository):
        record = repository.upsert_availability("E2", Weekday.FRIDAY)

        assert record.is_available is False
        assert str(record.window) == "09:00-17:00"

    def test_upsert_availability_updates_in_place(self, repository):
        repository.upsert_availability("E1", Weekday.MONDAY, is_available=False)
        record = repository.upsert_availability(
            "E1", Weekday.MONDAY, window=TimeInterval.parse("10:00", "14:00")
        )

        records = [a for a in repository.list_availabilities() if a.key == record.key]
        assert len(records) == 1
        assert records[0].is_available is False
        assert str(records[0].window) == "10:00-14:00"

    def test_save_and_delete_roster_entry(self, repository):
        entry = RosterEntry.for_shift(make_shift("tue", Weekday.TUESDAY), "E2", entry_id="r4")
        repository.save_roster_entry(entry)
        assert repository.list_roster()[-1] == entry

        repository.delete_roster_entry("r4")
        assert "r4" not in {e.id for e in repository.list_roster()}

    def test_subscribe_and_unsubscribe(self, repository):
        changes = []
        unsubscribe = repository.subscribe(changes.append)

        repository.save_shift(make_shift("wed", Weekday.WEDNESDAY))
        repository.delete_employee("E2")
        unsubscribe()
        repository.save_employee(Employee(id="E3", name="Cy", position=Position.MANAGER))

        assert changes == [SHIFTS, EMPLOYEES, AVAILABILITIES, ROSTER]


class TestJsonCodecs:
    def test_employee_legacy_position(self):
        employee = employee_from_dict(
            {"id": 7, "name": "Max", "position": "1manager"}
        )
        assert employee.id == "7"
        assert employee.position is Position.MANAGER
        assert employee.email is None

    def test_everyday_shift_expands(self):
        shifts = shifts_from_dict({
            "id": "close",
            "name": "Close",
            "day": "Everyday",
            "start_time": "15:00",
            "end_time": "21:00",
            "required_position": "senior-staff",
            "min_staff_count": 2,
        })
        assert len(shifts) == 7
        assert {s.day for s in shifts} == set(Weekday)
        assert all(s.required_position is Position.SENIOR_STAFF for s in shifts)

    def test_shift_without_position(self):
        shifts = shifts_from_dict({
            "id": "s",
            "name": "Open",
            "day": "Monday",
            "start_time": "09:00",
            "end_time": "12:00",
        })
        assert shifts[0].required_position is None
        assert shifts[0].min_staff_count == 1


class TestJsonFileRepository:
    """Tests for JsonFileRepository."""

    @pytest.fixture
    def data_file(self, tmp_path):
        path = tmp_path / "cafe.json"
        path.write_text(json.dumps({
            "employees": [
                {"id": "E1", "name": "Alice", "position": "regular-staff"},
                {"id": "M1", "name": "Max", "position": "Manager"},
            ],
            "shifts": [
                {"id": "open", "name": "Opening", "day": "Everyday",
                 "start_time": "06:30", "end_time": "14:30",
                 "required_position": "manager"},
                {"id": "sat", "name": "Rush", "day": "Saturday",
                 "start_time": "09:00", "end_time": "13:00", "min_staff_count": 2},
            ],
            "availabilities": [
                {"employee_id": "M1", "day": "Monday",
                 "start_time": "06:00", "end_time": "15:00", "is_available": True},
                {"employee_id": "E1", "day": "Saturday", "is_available": True},
            ],
            "roster": [],
        }))
        return path

    def test_load(self, data_file):
        repo = JsonFileRepository(data_file)

        assert len(repo.list_employees()) == 2
        assert len(repo.list_shifts()) == 8
        assert repo.get_shift("open-monday").required_position is Position.MANAGER
        assert repo.get_shift("sat").min_staff_count == 2
        defaults = [a for a in repo.list_availabilities() if a.employee_id == "E1"][0]
        assert str(defaults.window) == "09:00-17:00"

    def test_missing_file_starts_empty(self, tmp_path):
        repo = JsonFileRepository(tmp_path / "new.json")
        assert repo.list_employees() == []
        assert repo.list_roster() == []

    def test_autosave_round_trip(self, data_file):
        repo = JsonFileRepository(data_file)
        shift = repo.get_shift("open-monday")
        repo.save_roster_entry(RosterEntry.for_shift(shift, "M1", entry_id="x"))

        reloaded = JsonFileRepository(data_file)

        assert [e.id for e in reloaded.list_roster()] == ["x"]
        entry = reloaded.list_roster()[0]
        assert entry.day is Weekday.MONDAY
        assert str(entry.interval) == "06:30-14:30"
        assert [s.id for s in reloaded.list_shifts()] == [s.id for s in repo.list_shifts()]

    def test_without_autosave_file_is_untouched(self, data_file):
        before = data_file.read_text()
        repo = JsonFileRepository(data_file, autosave=False)
        repo.delete_employee("E1")

        assert data_file.read_text() == before

        repo.save()
        saved = json.loads(data_file.read_text())
        assert [e["id"] for e in saved["employees"]] == ["M1"]
        assert all(a["employee_id"] != "E1" for a in saved["availabilities"])

    def test_invalid_position_raises(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({
            "employees": [{"id": "E1", "name": "A", "position": "dishwasher"}]
        }))
        with pytest.raises(ValueError):
            JsonFileRepository(path)
