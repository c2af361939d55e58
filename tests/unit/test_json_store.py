from __future__ import annotations

import json
from pathlib import Path

import pytest

from bday_alert.models.birthday_record import BirthdayRecord
from bday_alert.store.json_store import JsonFileStore, StoreError


def test_missing_file_is_empty(tmp_path: Path):
    """Test missing store reads as empty."""
    store = JsonFileStore(tmp_path / "none.json")
    assert store.load() == []
    assert store.load_unit_subscriptions() == set()


def test_save_and_load_records(tmp_path: Path):
    """Test records survive a save/load cycle."""
    store = JsonFileStore(tmp_path / "state" / "birthdays.json")
    records = [
        BirthdayRecord("Mario", "Rossi", 15, 3, unit="E/G", year=2010),
        BirthdayRecord("Anna", "Verdi", 0, 0),
    ]
    store.save(records)
    assert store.load() == records


def test_persisted_layout(tmp_path: Path):
    """Test JSON document layout on disk."""
    path = tmp_path / "b.json"
    store = JsonFileStore(path)
    store.save([BirthdayRecord("Anna", "Verdi", 2, 1)])
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["birthdays"] == [{"given_name": "Anna", "surname": "Verdi", "day": 2, "month": 1}]


def test_subscriptions_and_records_are_independent(tmp_path: Path):
    """Test saving one key keeps the other."""
    store = JsonFileStore(tmp_path / "b.json")
    store.save_unit_subscriptions({"E/G", "L/C"})
    store.save([BirthdayRecord("Anna", "Verdi", 2, 1)])
    assert store.load_unit_subscriptions() == {"E/G", "L/C"}
    store.save_unit_subscriptions(set())
    assert len(store.load()) == 1
    assert store.load_unit_subscriptions() == set()


def test_save_replaces_whole_sequence(tmp_path: Path):
    """Test save replaces the previous sequence."""
    store = JsonFileStore(tmp_path / "b.json")
    store.save([BirthdayRecord("Anna", "Verdi", 2, 1), BirthdayRecord("Mario", "Rossi", 3, 4)])
    store.save([BirthdayRecord("Luca", "Bianchi", 5, 6)])
    assert [r.given_name for r in store.load()] == ["Luca"]
    assert [p.name for p in tmp_path.iterdir()] == ["b.json"]


def test_malformed_json_raises(tmp_path: Path):
    """Test malformed JSON raises StoreError."""
    path = tmp_path / "b.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StoreError):
        JsonFileStore(path).load()


def test_invalid_record_raises(tmp_path: Path):
    """Test invalid stored record raises StoreError."""
    path = tmp_path / "b.json"
    path.write_text(json.dumps({"birthdays": [{"given_name": "A", "day": 40, "month": 1}]}), encoding="utf-8")
    with pytest.raises(StoreError, match="position 0"):
        JsonFileStore(path).load()


def test_wrong_top_level_type_raises(tmp_path: Path):
    """Test non-object document raises StoreError."""
    path = tmp_path / "b.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(StoreError):
        JsonFileStore(path).load()
