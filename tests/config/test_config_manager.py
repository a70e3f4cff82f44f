from __future__ import annotations

import logging
from pathlib import Path

import pytest

from campusflow.core.config import (
    ConfigManager,
    LoggingConfig,
    RegistryConfig,
    SearchConfig,
    StorageConfig,
    TimeConfig,
    clear_all_caches,
    get_cached_config,
    is_cached,
)
from campusflow.core.exceptions import ConfigError
from campusflow.core.logging import LOG_FORMAT, configure_logging, reset_logging_for_tests
from campusflow.core.utils.time import utc_timestamp
from helpers.io_utils import write_user_config


def test_bundled_defaults(isolated_home: Path) -> None:
    reg = RegistryConfig()
    assert reg.home == isolated_home.resolve()
    assert reg.capacity == 8
    assert reg.default_time == "09:00"
    assert reg.fallback_label == "General"
    assert reg.burnout_threshold == 75
    assert [c.id for c in reg.categories] == ["academic", "professional", "social", "self-care"]
    assert reg.seed_enabled is True
    assert reg.seed_path is None

    storage = StorageConfig()
    assert storage.key == "campus_flow_registry"
    assert storage.directory == (isolated_home / "store").resolve()
    assert storage.export_prefix == "campus-flow-export"
    assert storage.export_indent == 2

    assert SearchConfig().case_insensitive is True
    assert SearchConfig().separator == " "
    assert LoggingConfig().level == "WARNING"
    assert LoggingConfig().path is None


def test_deep_merge_basic_dict_and_arrays(isolated_home: Path) -> None:
    mgr = ConfigManager(isolated_home)
    base = {"a": {"x": 1, "y": [1, 2]}, "b": [1, 2, 3], "c": 1}
    override = {"a": {"y": ["+", 3, 4]}, "b": ["=", 9], "c": 2, "d": "new"}
    merged = mgr.deep_merge(base, override)
    assert merged["a"]["y"] == [1, 2, 3, 4]
    assert merged["b"] == [9]
    assert merged["c"] == 2
    assert merged["d"] == "new"


def test_user_config_overlays_bundled(isolated_home: Path) -> None:
    write_user_config(isolated_home, "registry", {"registry": {"capacity": 6, "seed": {"enabled": False}}})
    reg = RegistryConfig()
    assert reg.capacity == 6
    assert reg.seed_enabled is False
    # Untouched keys keep bundled values.
    assert reg.default_time == "09:00"


def test_user_categories_append(isolated_home: Path) -> None:
    write_user_config(
        isolated_home,
        "registry",
        {"registry": {"categories": ["+", {"id": "sport", "label": "Sport", "type": "life"}]}},
    )
    ids = [c.id for c in RegistryConfig().categories]
    assert ids[-1] == "sport"
    assert len(ids) == 5


def test_env_overrides(isolated_home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CAMPUSFLOW_registry__capacity", "5.5")
    monkeypatch.setenv("CAMPUSFLOW_search__caseInsensitive", "false")
    monkeypatch.setenv("CAMPUSFLOW_storage__export__prefix", "backup")
    assert RegistryConfig().capacity == 5.5
    assert SearchConfig().case_insensitive is False
    assert StorageConfig().export_prefix == "backup"


def test_home_variable_is_not_an_override(isolated_home: Path) -> None:
    cfg = ConfigManager().load_config()
    assert "home" not in cfg


def test_env_coercion(isolated_home: Path) -> None:
    mgr = ConfigManager(isolated_home)
    assert mgr._coerce_type("true") is True
    assert mgr._coerce_type("12") == 12
    assert mgr._coerce_type("1.5") == 1.5
    assert mgr._coerce_type('["a", "b"]') == ["a", "b"]
    assert mgr._coerce_type(" text ") == "text"


def test_invalid_yaml_fails_closed(isolated_home: Path) -> None:
    path = isolated_home / "config" / "broken.yaml"
    path.parent.mkdir(parents=True)
    path.write_text("registry: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        RegistryConfig()


@pytest.mark.parametrize("capacity", [0, -3, "lots"])
def test_invalid_capacity_is_config_error(isolated_home: Path, capacity) -> None:
    write_user_config(isolated_home, "registry", {"registry": {"capacity": capacity}})
    with pytest.raises(ConfigError):
        RegistryConfig().capacity


def test_duplicate_category_ids_rejected(isolated_home: Path) -> None:
    write_user_config(
        isolated_home,
        "registry",
        {"registry": {"categories": [{"id": "a", "label": "A"}, {"id": "a", "label": "B"}]}},
    )
    with pytest.raises(ConfigError):
        RegistryConfig().categories


def test_relative_paths_resolve_against_home(isolated_home: Path) -> None:
    write_user_config(isolated_home, "paths", {"registry": {"seed": {"path": "my-seed.json"}},
                                               "storage": {"directory": "data"}})
    assert RegistryConfig().seed_path == isolated_home.resolve() / "my-seed.json"
    assert StorageConfig().directory == (isolated_home / "data").resolve()


def test_cache_invalidates_on_change(isolated_home: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    get_cached_config()
    assert is_cached()
    monkeypatch.setenv("CAMPUSFLOW_registry__capacity", "3")
    assert not is_cached()
    assert get_cached_config()["registry"]["capacity"] == 3
    clear_all_caches()
    assert not is_cached()


def test_explicit_home_argument(tmp_path: Path) -> None:
    other = tmp_path / "other"
    write_user_config(other, "registry", {"registry": {"capacity": 2}})
    assert RegistryConfig(home=other).capacity == 2
    assert RegistryConfig().capacity == 8


def test_timestamp_format(isolated_home: Path) -> None:
    ts = utc_timestamp()
    assert ts.endswith("Z")
    assert len(ts.split(".")[-1]) == 4  # milliseconds + Z
    assert TimeConfig().timespec == "milliseconds"


def test_configure_logging_to_file(tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "campusflow.log"
    handler = configure_logging("INFO", log_path)
    try:
        assert isinstance(handler, logging.FileHandler)
        assert handler.formatter._fmt == LOG_FORMAT
        logging.getLogger("campusflow.test").info("hello from test")
        handler.flush()
        assert "INFO campusflow.test: hello from test" in log_path.read_text(encoding="utf-8")
    finally:
        reset_logging_for_tests()


def test_configure_logging_replaces_previous_handler() -> None:
    first = configure_logging("WARNING")
    second = configure_logging("DEBUG")
    try:
        root = logging.getLogger()
        assert first not in root.handlers
        assert second in root.handlers
    finally:
        reset_logging_for_tests()
    assert second not in logging.getLogger().handlers
