from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path

import pytest

from campusflow.core.exceptions import PersistenceError, StructuralImportError
from campusflow.core.registry.models import Category, CategoryType, Settings, Snapshot, Task, ViewDate
from campusflow.core.registry.storage import FileByteStore, RegistryStorage


def _snapshot() -> Snapshot:
    return Snapshot(
        settings=Settings(
            capacity=6.5,
            categories=[
                Category(id="academic", label="Academic", color="blue", type=CategoryType.WORK),
                Category(id="social", label="Social", color="pink", type=CategoryType.LIFE),
            ],
        ),
        tasks=[
            Task(id="rec_1", title="Study Math", date="2024-03-01", duration=1.5, category="academic",
                 created_at="2024-03-01T00:00:00.000Z", updated_at="2024-03-01T00:00:00.000Z"),
            Task(id="rec_2", title="Dinner", date="2024-03-02", duration=2.0, category="social",
                 status="canceled", cancel_reason="Friend was sick", urgent=True, notes="café"),
        ],
        view_date=ViewDate(month=2, year=2024),
    )


def test_save_then_load(storage, memory_store) -> None:
    assert storage.save(_snapshot()) is True
    assert "campus_flow_registry" in memory_store.data
    assert storage.load() == _snapshot().to_dict()


def test_load_absent_is_none(storage) -> None:
    assert storage.load() is None


def test_load_corrupt_is_none(storage, memory_store, caplog: pytest.LogCaptureFixture) -> None:
    memory_store.data["campus_flow_registry"] = "{not json"
    with caplog.at_level(logging.WARNING):
        assert storage.load() is None
    assert "corrupted" in caplog.text


def test_load_non_object_is_none(storage, memory_store) -> None:
    memory_store.data["campus_flow_registry"] = "[1, 2]"
    assert storage.load() is None


def test_save_failure_is_logged_not_raised(storage, memory_store, caplog: pytest.LogCaptureFixture) -> None:
    memory_store.fail_writes = True
    with caplog.at_level(logging.ERROR):
        assert storage.save(_snapshot()) is False
    assert "quota exceeded" in caplog.text


def test_read_failure_is_treated_as_no_data(storage, memory_store) -> None:
    memory_store.fail_reads = True
    assert storage.load() is None


def test_export_filename_and_format(storage) -> None:
    blob = storage.export_snapshot(_snapshot(), today=date(2024, 3, 5))
    assert blob.filename == "campus-flow-export-2024-03-05.json"
    assert blob.media_type == "application/json"
    assert blob.text.startswith('{\n  "settings"')
    assert blob.content == blob.text.encode("utf-8")


def test_export_does_not_touch_store(storage, memory_store) -> None:
    storage.export_snapshot(_snapshot())
    assert memory_store.writes == 0


def test_export_import_round_trip(storage) -> None:
    snap = _snapshot()
    result = storage.import_snapshot(storage.export_snapshot(snap).text)
    assert result.success
    assert result.error is None
    assert result.data == snap.to_dict()
    assert Snapshot.from_dict(result.data) == snap


def test_import_accepts_bytes(storage) -> None:
    result = storage.import_snapshot(b'{"tasks": []}')
    assert result.success and result.data == {"tasks": []}


def test_import_defers_record_validation(storage) -> None:
    result = storage.import_snapshot(json.dumps({"tasks": [{"title": "  bad  ", "duration": 0.1}]}))
    assert result.success


@pytest.mark.parametrize(
    "payload",
    ['{"settings": {}}', '{"tasks": {}}', '{"tasks": "x"}', "[]", '"tasks"', "null", "42"],
)
def test_import_structural_failures(storage, payload: str) -> None:
    result = storage.import_snapshot(payload)
    assert not result.success
    assert result.data is None
    assert isinstance(result.error, StructuralImportError)
    assert result.message == "Invalid registry format: Missing mandatory 'tasks' array."


@pytest.mark.parametrize("payload", ["{broken", "", b"\xff\xfe"])
def test_import_unparsable_input(storage, payload) -> None:
    result = storage.import_snapshot(payload)
    assert not result.success
    assert isinstance(result.error, StructuralImportError)


def test_clear_is_idempotent(storage, memory_store) -> None:
    storage.save(_snapshot())
    assert storage.clear() is True
    assert storage.load() is None
    assert storage.clear() is True


def test_file_byte_store(tmp_path: Path) -> None:
    store = FileByteStore(tmp_path / "store")
    assert store.read("k") is None
    store.write("k", '{"tasks": []}')
    assert (tmp_path / "store" / "k.json").read_text(encoding="utf-8") == '{"tasks": []}'
    assert store.read("k") == '{"tasks": []}'
    store.remove("k")
    store.remove("k")
    assert store.read("k") is None


def test_file_byte_store_write_failure(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = FileByteStore(blocker / "store")
    with pytest.raises(PersistenceError):
        store.write("k", "{}")


def test_from_config_uses_home_store(isolated_home: Path) -> None:
    storage = RegistryStorage.from_config()
    storage.save(_snapshot())
    assert (isolated_home / "store" / "campus_flow_registry.json").exists()


def test_export_write_to(tmp_path: Path, storage) -> None:
    blob = storage.export_snapshot(_snapshot(), today=date(2024, 1, 2))
    path = blob.write_to(tmp_path / "exports")
    assert path.name == "campus-flow-export-2024-01-02.json"
    assert json.loads(path.read_text(encoding="utf-8"))["settings"]["capacity"] == 6.5
