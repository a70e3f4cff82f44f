from __future__ import annotations

import json

import pytest

from campusflow.core.registry.models import (
    Category,
    CategoryType,
    Settings,
    Snapshot,
    Task,
    ViewDate,
    parse_category_type,
)
from campusflow.core.registry.seed import SeedError, file_seed_source, parse_seed


def test_task_wire_keys_are_camel_case() -> None:
    t = Task(id="rec_1", title="Read", date="2024-03-01", duration=0.5, category="academic", cancel_reason="x")
    data = t.to_dict()
    assert data["cancelReason"] == "x"
    assert set(data) >= {"id", "title", "date", "time", "duration", "category", "status", "urgent",
                         "cancelReason", "notes", "createdAt", "updatedAt"}
    assert Task.from_dict(data) == t


def test_task_from_dict_defaults_and_aliases() -> None:
    t = Task.from_dict({"id": "x", "name": "Legacy", "date": "2024-01-01", "duration": "1.5",
                        "category": "social", "cancel_reason": "because"}, default_time="07:30")
    assert t.title == "Legacy"
    assert t.duration == 1.5
    assert t.time == "07:30"
    assert t.status == "planned"
    assert t.cancel_reason == "because"
    assert t.urgent is False


def test_is_open() -> None:
    base = dict(id="x", title="t", date="2024-01-01", duration=1, category="c")
    assert Task(**base).is_open
    assert not Task(**base, status="completed").is_open
    assert not Task(**base, status="canceled").is_open


def test_category_type_is_closed_with_work_fallback() -> None:
    assert parse_category_type("life") is CategoryType.LIFE
    assert parse_category_type("LIFE") is CategoryType.LIFE
    assert parse_category_type("hobby") is CategoryType.WORK
    assert parse_category_type(None) is CategoryType.WORK


def test_settings_find_category_by_id_then_label() -> None:
    s = Settings(categories=[Category(id="a", label="b"), Category(id="b", label="Bee")])
    assert s.find_category("b").label == "Bee"
    assert s.find_category("Bee").id == "b"
    assert s.find_category("zzz") is None


def test_settings_from_dict_falls_back_to_defaults() -> None:
    defaults = Settings(capacity=7, categories=[Category(id="a", label="A")])
    s = Settings.from_dict({"capacity": -1}, defaults=defaults)
    assert s.capacity == 7
    assert s.categories == defaults.categories


@pytest.mark.parametrize("capacity", [10**400, "inf", float("nan"), "1e400"])
def test_settings_from_dict_rejects_unbounded_capacity(capacity) -> None:
    defaults = Settings(capacity=7)
    assert Settings.from_dict({"capacity": capacity}, defaults=defaults).capacity == 7


def test_task_from_dict_tolerates_oversized_duration() -> None:
    assert Task.from_dict({"title": "T", "duration": 10**400}).duration == 0.0
    assert Task.from_dict({"title": "T", "duration": "1e400"}).duration == float("inf")


def test_view_date_from_dict_tolerates_oversized_numbers() -> None:
    assert ViewDate.from_dict({"month": float("inf"), "year": 2024}) == ViewDate.current()


def test_view_date_shift_wraps() -> None:
    assert ViewDate(month=0, year=2024).shifted(-1) == ViewDate(month=11, year=2023)
    assert ViewDate(month=11, year=2024).shifted(1) == ViewDate(month=0, year=2025)
    assert ViewDate(month=5, year=2024).shifted(14) == ViewDate(month=7, year=2025)


def test_snapshot_round_trip() -> None:
    snap = Snapshot(
        settings=Settings(capacity=6, categories=[Category(id="a", label="A", type=CategoryType.LIFE)]),
        tasks=[Task(id="1", title="T", date="2024-01-01", duration=1, category="a")],
        view_date=ViewDate(month=3, year=2024),
    )
    assert Snapshot.from_dict(json.loads(json.dumps(snap.to_dict()))) == snap


def test_snapshot_skips_non_object_tasks() -> None:
    snap = Snapshot.from_dict({"tasks": [1, "x", {"id": "ok", "title": "T"}]})
    assert [t.id for t in snap.tasks] == ["ok"]


def test_bundled_seed_is_valid() -> None:
    seed = file_seed_source()()
    assert seed.daily_capacity == 8
    assert len(seed.tasks) == 5
    canceled = [t for t in seed.tasks if t["status"] == "canceled"]
    assert canceled and len(canceled[0]["cancelReason"].strip()) >= 5


@pytest.mark.parametrize("capacity", [10**400, "1e400", -3, 0])
def test_seed_capacity_outside_range_is_ignored(capacity) -> None:
    assert parse_seed({"tasks": [], "dailyCapacity": capacity}).daily_capacity is None


def test_seed_contract_errors(tmp_path) -> None:
    with pytest.raises(SeedError):
        parse_seed([])
    with pytest.raises(SeedError):
        parse_seed({"tasks": {}})
    with pytest.raises(SeedError):
        file_seed_source(tmp_path / "missing.json")()
