"""Tests for the file-backed key-value storage and the persistence gateway."""

import json

import pytest

from planner_store import CalendarEvent, SummaryKey, WeeklySummary, YearlyPlan
from storage import EVENTS_KEY, SUMMARIES_KEY, FileStorage, yearly_plan_key


class TestFileStorage:
    def test_missing_key_is_none(self, storage):
        assert storage.get_item("nothing") is None

    def test_set_get_remove(self, storage):
        storage.set_item("k", "value ✓")
        assert storage.get_item("k") == "value ✓"
        assert storage.keys() == ["k"]
        storage.remove_item("k")
        assert storage.get_item("k") is None
        storage.remove_item("k")

    def test_write_leaves_no_temp_files(self, storage):
        storage.set_item("k", "1")
        storage.set_item("k", "2")
        assert [p.name for p in storage.directory.iterdir()] == ["k.json"]

    @pytest.mark.parametrize("key", ["", "../escape", "a/b", "sp ace"])
    def test_rejects_unsafe_keys(self, storage, key):
        with pytest.raises(ValueError):
            storage.get_item(key)

    def test_keys_of_missing_directory(self, tmp_path):
        assert FileStorage(tmp_path / "absent").keys() == []


class TestRoundTrip:
    def test_events(self, gateway):
        events = [
            CalendarEvent(id="a", date="2024-05-01", title="Team sync", time="09:00"),
            CalendarEvent(id="b", date="2024-05-02", title="Gym", completed=True),
        ]
        gateway.save_events(events)
        assert gateway.load_events() == events

    def test_summaries(self, gateway):
        summaries = [
            WeeklySummary(key=SummaryKey(2024, 4, 0), content="Shipped v1"),
            WeeklySummary(key=SummaryKey(2024, 4, 1), content=""),
        ]
        gateway.save_summaries(summaries)
        assert gateway.load_summaries() == summaries

    def test_yearly_plan(self, gateway):
        plan = YearlyPlan(year=2024, goals="g", work="w", life="l", other="o")
        gateway.save_yearly_plan(2024, plan)
        assert gateway.load_yearly_plan(2024) == plan

    def test_empty_collections(self, gateway):
        gateway.save_events([])
        gateway.save_summaries([])
        assert gateway.load_events() == []
        assert gateway.load_summaries() == []


class TestLayout:
    def test_keys_and_encoding(self, gateway, storage):
        gateway.save_events([CalendarEvent(id="a", date="2024-05-01", title="t")])
        gateway.save_summaries([WeeklySummary(key=SummaryKey(2024, 4, 2), content="c")])
        gateway.save_yearly_plan(2024, YearlyPlan(year=2024, goals="g"))

        assert json.loads(storage.get_item(EVENTS_KEY)) == [
            {"id": "a", "date": "2024-05-01", "title": "t", "completed": False}
        ]
        assert json.loads(storage.get_item(SUMMARIES_KEY)) == [
            {"id": "2024-4-2", "year": 2024, "weekIndex": 2, "content": "c"}
        ]
        assert json.loads(storage.get_item(yearly_plan_key(2024))) == {
            "year": 2024, "goals": "g", "work": "", "life": "", "other": "",
        }

    def test_non_ascii_is_written_verbatim(self, gateway, storage):
        gateway.save_yearly_plan(2024, YearlyPlan(year=2024, goals="跑马拉松"))
        assert "跑马拉松" in storage.get_item(yearly_plan_key(2024))


class TestCorruptData:
    @pytest.mark.parametrize("raw", ["{not json", "", "null", "42", '{"a": 1}'])
    def test_corrupt_collections_load_empty(self, gateway, storage, raw):
        storage.set_item(EVENTS_KEY, raw)
        storage.set_item(SUMMARIES_KEY, raw)
        assert gateway.load_events() == []
        assert gateway.load_summaries() == []

    @pytest.mark.parametrize("raw", ["{not json", "[]", "null", '"text"'])
    def test_corrupt_yearly_plan_loads_default(self, gateway, storage, raw):
        storage.set_item(yearly_plan_key(2024), raw)
        assert gateway.load_yearly_plan(2024) == YearlyPlan(year=2024)

    def test_undecodable_bytes_load_empty(self, gateway, storage):
        storage.directory.mkdir(parents=True)
        (storage.directory / f"{EVENTS_KEY}.json").write_bytes(b"\xff\xfe\x00garbage")
        assert gateway.load_events() == []

    def test_invalid_records_are_skipped(self, gateway, storage):
        storage.set_item(EVENTS_KEY, json.dumps([
            {"id": "ok", "date": "2024-05-01", "title": "kept"},
            {"id": "no-title", "date": "2024-05-01"},
            {"id": "bad-date", "date": "May 1", "title": "x"},
            {"id": "ok", "date": "2024-05-02", "title": "duplicate id"},
            "not an object",
        ]))
        storage.set_item(SUMMARIES_KEY, json.dumps([
            {"id": "2024-4-0", "year": 2024, "weekIndex": 0, "content": "kept"},
            {"id": "garbage", "content": "dropped"},
            {"year": 2024},
        ]))
        assert [e.title for e in gateway.load_events()] == ["kept"]
        assert [s.content for s in gateway.load_summaries()] == ["kept"]

    def test_plan_fields_of_wrong_type_are_empty(self, gateway, storage):
        storage.set_item(yearly_plan_key(2024), json.dumps(
            {"year": 1999, "goals": "g", "work": 5, "life": None}
        ))
        assert gateway.load_yearly_plan(2024) == YearlyPlan(year=2024, goals="g")
