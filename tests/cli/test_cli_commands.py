from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest

from campusflow.cli._dispatcher import build_parser, cli_name, discover_commands, discover_domains, main
from campusflow.cli.task.search import mark_matches
from campusflow.core.registry.search import compile as compile_search
from helpers.io_utils import write_json, write_user_config

ADD_ARGS = ["task", "add", "--title", "Study Math", "--date", "2024-03-01", "--duration", "1.5", "--category", "academic"]


def _json_out(capsys: pytest.CaptureFixture[str]) -> dict:
    return json.loads(capsys.readouterr().out)


@pytest.fixture
def unseeded(isolated_home: Path) -> Path:
    write_user_config(isolated_home, "registry", {"registry": {"seed": {"enabled": False}}})
    return isolated_home


def test_discovers_domains_and_commands() -> None:
    assert set(discover_domains()) >= {"task", "registry", "settings"}
    assert set(discover_commands("task")) >= {"add", "update", "delete", "list", "show", "search"}
    assert "import_" in discover_commands("registry")
    assert cli_name("import_") == "import"


def test_help_without_domain(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 0
    assert "task" in capsys.readouterr().out


def test_import_command_is_exposed_without_underscore() -> None:
    args = build_parser().parse_args(["registry", "import", "x.json"])
    assert args.file == "x.json"


def test_first_run_seeds(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["task", "list", "--json"]) == 0
    out = _json_out(capsys)
    assert out["count"] == 5


def test_add_show_update_delete(unseeded: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(ADD_ARGS + ["--json"]) == 0
    created = _json_out(capsys)["task"]
    assert created["title"] == "Study Math"
    assert created["time"] == "09:00"
    task_id = created["id"]

    assert main(["task", "show", task_id]) == 0
    text = capsys.readouterr().out
    assert "Study Math" in text and "1h 30m" in text and "Academic" in text

    assert main(["task", "update", task_id, "--status", "completed", "--json"]) == 0
    assert _json_out(capsys)["task"]["status"] == "completed"

    assert main(["task", "delete", task_id, "--json"]) == 0
    assert _json_out(capsys)["deleted"] is True

    assert main(["task", "list", "--json"]) == 0
    assert _json_out(capsys)["count"] == 0


def test_add_rejects_invalid_title(unseeded: Path, capsys: pytest.CaptureFixture[str]) -> None:
    args = list(ADD_ARGS)
    args[args.index("Study Math")] = "Gym Gym"
    assert main(args) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error: Duplicate words detected.")


def test_add_invalid_json_error(unseeded: Path, capsys: pytest.CaptureFixture[str]) -> None:
    args = list(ADD_ARGS)
    args[args.index("1.5")] = "1.3"
    assert main(args + ["--json"]) == 1
    err = json.loads(capsys.readouterr().err)
    assert err["error"] == "task_add_error"
    assert err["codes"] == {"duration": "DurationInvalid"}


def test_cancel_requires_reason(unseeded: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(ADD_ARGS + ["--json"])
    task_id = _json_out(capsys)["task"]["id"]
    assert main(["task", "update", task_id, "--status", "canceled"]) == 1
    assert "justification" in capsys.readouterr().err
    assert main(["task", "update", task_id, "--status", "canceled", "--cancel-reason", "Felt sick"]) == 0


def test_update_unknown_id(unseeded: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["task", "update", "rec_nope", "--title", "X"]) == 1
    assert "Task rec_nope not found" in capsys.readouterr().err


def test_delete_unknown_id_is_success(unseeded: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["task", "delete", "rec_nope", "--json"]) == 0
    assert _json_out(capsys)["deleted"] is False


def test_search(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["task", "search", "run", "--json"]) == 0
    out = _json_out(capsys)
    assert out["valid"] is True
    assert [t["title"] for t in out["tasks"]] == ["Evening Run"]

    assert main(["task", "search", "[", "--json"]) == 0
    out = _json_out(capsys)
    assert out["valid"] is False
    assert out["count"] == 5

    assert main(["task", "search", "run", "--case-sensitive", "--json"]) == 0
    assert _json_out(capsys)["count"] == 0


def test_search_text_marks_matches(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["task", "search", "run"]) == 0
    out = capsys.readouterr().out
    assert "Evening *Run*" in out


def test_mark_matches() -> None:
    assert mark_matches("Study Math mama", compile_search("ma")) == "Study *Ma*th *ma**ma*"
    assert mark_matches("Study", None) == "Study"


def test_export_import_round_trip(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out_dir = tmp_path / "exports"
    assert main(["registry", "export", "--out", str(out_dir), "--json"]) == 0
    exported = _json_out(capsys)
    assert exported["filename"] == f"campus-flow-export-{date.today().isoformat()}.json"
    path = Path(exported["path"])
    assert json.loads(path.read_text(encoding="utf-8"))["tasks"]

    assert main(["registry", "wipe", "--yes"]) == 0
    capsys.readouterr()
    assert main(["registry", "import", str(path), "--json"]) == 0
    assert _json_out(capsys)["tasks"] == 5


def test_import_structural_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    bad = tmp_path / "bad.json"
    write_json(bad, {"settings": {}})
    assert main(["registry", "import", str(bad)]) == 1
    assert "Missing mandatory 'tasks' array" in capsys.readouterr().err


def test_import_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["registry", "import", str(tmp_path / "nope.json")]) == 1
    assert capsys.readouterr().err.startswith("Error: Cannot read")


def test_wipe_requires_confirmation(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["registry", "wipe"]) == 1
    assert "--yes" in capsys.readouterr().err


def test_stats(unseeded: Path, capsys: pytest.CaptureFixture[str]) -> None:
    today = date.today().isoformat()
    main(["task", "add", "--title", "Deep work", "--date", today, "--duration", "9",
          "--category", "professional", "--urgent", "--json"])
    capsys.readouterr()
    assert main(["registry", "stats", "--json"]) == 0
    stats = _json_out(capsys)
    assert stats["today"]["hours"] == 9
    assert stats["today"]["percent"] == 100
    assert stats["today"]["overloaded"] is True
    assert stats["urgent"] == 1
    assert stats["balance"]["burnoutRisk"] is True
    assert stats["planner"]["upcoming"] == 1


def test_capacity(unseeded: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["settings", "capacity", "6", "--json"]) == 0
    assert _json_out(capsys)["capacity"] == 6
    assert main(["settings", "capacity", "-1"]) == 1
    assert "positive" in capsys.readouterr().err


def test_month_navigation(unseeded: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["settings", "month", "12", "--json"]) == 0
    view = _json_out(capsys)["viewDate"]
    today = date.today()
    assert view == {"month": today.month - 1, "year": today.year + 1}


def test_home_flag(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    other = tmp_path / "elsewhere"
    write_user_config(other, "registry", {"registry": {"seed": {"enabled": False}}})
    assert main(ADD_ARGS + ["--home", str(other), "--json"]) == 0
    capsys.readouterr()
    assert (other / "store" / "campus_flow_registry.json").exists()
