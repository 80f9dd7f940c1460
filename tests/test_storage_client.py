"""Tests for the key-value storage collaborators."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from backend.db.storage_client import (
    CorruptPayloadError,
    InMemoryStorage,
    JsonFileStorage,
    StorageError,
    StorageQuotaExceededError,
    StorageSettings,
)


def _file_storage(tmp_path: Path, **overrides: object) -> JsonFileStorage:
    settings = StorageSettings(directory=str(tmp_path / "data"), prefix="test_")
    for name, value in overrides.items():
        setattr(settings, name, value)
    return JsonFileStorage(settings)


def test_in_memory_distinguishes_absent_from_empty() -> None:
    storage = InMemoryStorage()

    assert storage.load("transactions") is None
    storage.save("transactions", [])
    assert storage.load("transactions") == []


def test_in_memory_returns_copies() -> None:
    storage = InMemoryStorage()
    value = [{"id": "1"}]
    storage.save("transactions", value)

    value[0]["id"] = "changed"
    loaded = storage.load("transactions")
    loaded.append({"id": "2"})

    assert storage.load("transactions") == [{"id": "1"}]


def test_in_memory_corrupt_payload_raises() -> None:
    storage = InMemoryStorage()
    storage.write_raw("transactions", "[{")

    with pytest.raises(CorruptPayloadError):
        storage.load("transactions")


def test_in_memory_rejects_unserializable_values() -> None:
    with pytest.raises(StorageError):
        InMemoryStorage().save("transactions", {"when": object()})


def test_in_memory_clear_and_keys() -> None:
    storage = InMemoryStorage({"auth": {"token": "x"}, "transactions": []})

    storage.clear("auth")
    storage.clear("never-written")

    assert storage.keys() == ["transactions"]


def test_file_storage_round_trip_uses_prefixed_file(tmp_path: Path) -> None:
    storage = _file_storage(tmp_path)

    storage.save("transactions", [{"id": "1", "amount": "10"}])

    path = tmp_path / "data" / "test_transactions.json"
    assert json.loads(path.read_text(encoding="utf-8")) == [{"id": "1", "amount": "10"}]
    assert storage.load("transactions") == [{"id": "1", "amount": "10"}]
    assert storage.keys() == ["transactions"]


def test_file_storage_absent_key_loads_none(tmp_path: Path) -> None:
    storage = _file_storage(tmp_path)

    assert storage.load("transactions") is None
    assert storage.keys() == []


def test_file_storage_quota_keeps_previous_value(tmp_path: Path) -> None:
    storage = _file_storage(tmp_path, max_bytes=32)
    storage.save("transactions", [1])

    with pytest.raises(StorageQuotaExceededError):
        storage.save("transactions", ["x" * 64])

    assert storage.load("transactions") == [1]


def test_file_storage_leaves_no_temp_files(tmp_path: Path) -> None:
    storage = _file_storage(tmp_path)

    storage.save("transactions", [1, 2, 3])
    storage.save("transactions", [4])

    assert sorted(path.name for path in (tmp_path / "data").iterdir()) == ["test_transactions.json"]


def test_file_storage_corrupt_payload_raises(tmp_path: Path) -> None:
    storage = _file_storage(tmp_path)
    (tmp_path / "data").mkdir()
    (tmp_path / "data" / "test_transactions.json").write_text("{oops", encoding="utf-8")

    with pytest.raises(CorruptPayloadError):
        storage.load("transactions")


def test_file_storage_clear_is_idempotent(tmp_path: Path) -> None:
    storage = _file_storage(tmp_path)
    storage.save("auth", {"token": "x"})

    storage.clear("auth")
    storage.clear("auth")

    assert storage.load("auth") is None


def test_file_storage_non_utf8_payload_is_corrupt(tmp_path: Path) -> None:
    storage = _file_storage(tmp_path)
    (tmp_path / "data").mkdir()
    (tmp_path / "data" / "test_transactions.json").write_bytes(b"\xff\xfe[not utf8")

    with pytest.raises(CorruptPayloadError):
        storage.load("transactions")
