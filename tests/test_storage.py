"""Tests for the persistence adapters."""

import json

import pytest

from organizer.errors import PersistenceReadError
from organizer.services import ActivityStore, JsonFileStorage, MemoryStorage
from organizer.services.storage import STORAGE_KEY


RECORDS = [
    {
        "id": "b",
        "name": "Second",
        "category": "Home",
        "priority": "low",
        "notes": "",
        "completed": True,
        "createdAt": "2025-01-15T09:00:00Z",
        "completedAt": "2025-01-15T10:00:00Z",
    },
    {
        "id": "a",
        "name": "First",
        "category": "Work",
        "priority": "urgent",
        "notes": "call back",
        "completed": False,
        "createdAt": "2025-01-15T08:00:00Z",
        "completedAt": None,
    },
]


def test_memory_storage_round_trip():
    storage = MemoryStorage()
    assert storage.load() == []

    storage.save(RECORDS)
    assert storage.load() == RECORDS
    assert isinstance(storage.slots[STORAGE_KEY], str)


def test_memory_storage_rejects_bad_json():
    storage = MemoryStorage(slots={STORAGE_KEY: "[{"})
    with pytest.raises(PersistenceReadError):
        storage.load()


def test_file_storage_missing_file(tmp_path):
    assert JsonFileStorage(tmp_path / "nope.json").load() == []


def test_file_storage_empty_file(tmp_path):
    path = tmp_path / "activities.json"
    path.write_text("")
    assert JsonFileStorage(path).load() == []


def test_file_storage_round_trip(tmp_path):
    path = tmp_path / "nested" / "activities.json"
    storage = JsonFileStorage(path)

    storage.save(RECORDS)

    assert storage.load() == RECORDS
    assert json.loads(path.read_text()) == {STORAGE_KEY: RECORDS}


def test_file_storage_leaves_no_temp_files(tmp_path):
    storage = JsonFileStorage(tmp_path / "activities.json")
    storage.save(RECORDS)
    storage.save(RECORDS[:1])

    assert [p.name for p in tmp_path.iterdir()] == ["activities.json"]


def test_file_storage_keeps_other_keys(tmp_path):
    path = tmp_path / "activities.json"
    path.write_text(json.dumps({"theme": "dark"}))

    JsonFileStorage(path).save(RECORDS)

    document = json.loads(path.read_text())
    assert document["theme"] == "dark"
    assert document[STORAGE_KEY] == RECORDS


def test_file_storage_overwrites_corrupt_file_on_save(tmp_path):
    path = tmp_path / "activities.json"
    path.write_text("not json at all")
    storage = JsonFileStorage(path)

    storage.save(RECORDS)
    assert storage.load() == RECORDS


@pytest.mark.parametrize(
    "content",
    [
        "{broken",
        "[1, 2]",
        json.dumps({STORAGE_KEY: {"id": "a"}}),
        json.dumps({STORAGE_KEY: ["a", "b"]}),
    ],
)
def test_file_storage_corrupt_content(tmp_path, content):
    path = tmp_path / "activities.json"
    path.write_text(content)

    with pytest.raises(PersistenceReadError):
        JsonFileStorage(path).load()


def test_store_round_trip_through_file(tmp_path, clock, make_input):
    path = tmp_path / "activities.json"
    store = ActivityStore(JsonFileStorage(path), clock=clock)
    store.create(make_input(name="One", category="Work", priority="urgent", notes="first"))
    second = store.create(make_input(name="Two", category="Home", priority="low"))
    store.toggle_completion(second.id)

    reloaded = ActivityStore(JsonFileStorage(path), clock=clock)

    assert [a.model_dump() for a in reloaded.list_activities()] == [
        a.model_dump() for a in store.list_activities()
    ]


def test_persisted_field_names(tmp_path, clock, make_input):
    path = tmp_path / "activities.json"
    store = ActivityStore(JsonFileStorage(path), clock=clock)
    store.create(make_input())

    record = json.loads(path.read_text())[STORAGE_KEY][0]
    assert set(record) == {
        "id", "name", "category", "priority", "notes", "completed", "createdAt", "completedAt",
    }
    assert record["completedAt"] is None
    assert record["createdAt"].startswith("2025-01-15T08:30:01")


def test_file_storage_invalid_utf8(tmp_path):
    path = tmp_path / "activities.json"
    path.write_bytes(b"\xff\xfe\x00garbage")

    with pytest.raises(PersistenceReadError):
        JsonFileStorage(path).load()


def test_store_starts_empty_on_invalid_utf8_and_saves_over_it(tmp_path, clock, make_input):
    path = tmp_path / "activities.json"
    path.write_bytes(b"\xff\xfe\x00garbage")

    store = ActivityStore(JsonFileStorage(path), clock=clock)
    assert len(store) == 0

    created = store.create(make_input(name="Fresh start"))
    assert [a.id for a in ActivityStore(JsonFileStorage(path), clock=clock).list_activities()] == [created.id]
