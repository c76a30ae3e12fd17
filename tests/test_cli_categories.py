"""CLI tests for category and auto-categorization commands."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from click.testing import CliRunner

from categorium.cli import cli


def _env_with_home(tmp_path: Path) -> dict[str, Any]:
    env = dict(os.environ)
    env["HOME"] = str(tmp_path)
    for key in list(env):
        if key.startswith("CATEGORIUM__"):
            del env[key]
    return env


def _collection(tmp_path: Path) -> Path:
    root = tmp_path / "collection"
    root.mkdir()
    (root / "Arijit Singh - Tum Hi Ho.mp3").write_bytes(b"")
    (root / "Vacation.jpg").write_bytes(b"")
    return root


def _manifest(tmp_path: Path) -> Path:
    manifest = tmp_path / "files.json"
    manifest.write_text(
        json.dumps(
            [
                {
                    "id": "1",
                    "name": "Arijit Singh - Tum Hi Ho.mp3",
                    "type": "audio",
                    "created_at": "2020-01-01T00:00:00Z",
                },
                {
                    "id": "2",
                    "name": "Vacation.jpg",
                    "tags": ["travel"],
                    "type": "image",
                    "created_at": "2021-06-01T00:00:00Z",
                },
            ]
        ),
        encoding="utf-8",
    )
    return manifest


def _invoke_json(runner: CliRunner, args: list[str], env: dict[str, Any]) -> dict[str, Any]:
    result = runner.invoke(cli, [*args, "--json"], env=env)
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


def test_auto_by_artist_persists_categories(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)
    root = _collection(tmp_path)

    payload = _invoke_json(runner, ["auto", str(root), "--by", "artist"], env)

    created = payload["reports"][0]["created"]
    assert [item["name"] for item in created] == ["Arijit Singh"]
    assert created[0]["rules"] == ["arijit singh"]
    assert created[0]["count"] == 1

    listed = _invoke_json(runner, ["categories", "list", str(root)], env)
    assert [item["name"] for item in listed["categories"]] == ["Arijit Singh"]
    assert (root / ".categorium" / "categories.json").exists()


def test_auto_with_manifest_by_type_and_date(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)
    root = _collection(tmp_path)
    manifest = _manifest(tmp_path)

    payload = _invoke_json(
        runner,
        ["auto", str(root), "--registry", str(manifest), "--by", "type", "--by", "date"],
        env,
    )

    by_type, by_date = payload["reports"]
    assert [(c["name"], c["count"]) for c in by_type["created"]] == [("Images", 1), ("Audio", 1)]
    assert [(c["name"], c["rules"]) for c in by_date["created"]] == [
        ("Year 2020", [2020]),
        ("Year 2021", [2021]),
    ]


def test_auto_rerun_duplicates_unless_deduped(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)
    root = _collection(tmp_path)

    _invoke_json(runner, ["auto", str(root), "--by", "type"], env)
    _invoke_json(runner, ["auto", str(root), "--by", "type"], env)
    deduped = _invoke_json(runner, ["auto", str(root), "--by", "type", "--dedupe"], env)

    listed = _invoke_json(runner, ["categories", "list", str(root)], env)
    names = [item["name"] for item in listed["categories"]]
    assert names.count("Images") == 2
    assert deduped["reports"][0]["created"] == []
    assert deduped["reports"][0]["skipped"] == ["Images", "Audio"]


def test_categories_add_update_show_delete(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)
    root = _collection(tmp_path)
    manifest = _manifest(tmp_path)
    common = ["--registry", str(manifest)]

    added = _invoke_json(
        runner,
        [
            "categories",
            "add",
            str(root),
            "Trips",
            "--icon",
            "location",
            "--color",
            "#14b8a6",
            "--term",
            "",
            "--term",
            "travel",
            *common,
        ],
        env,
    )
    category = added["category"]
    assert category["rules"] == ["travel"]
    assert category["count"] == 1

    updated = _invoke_json(
        runner,
        ["categories", "update", str(root), category["id"], "--name", "Holidays", *common],
        env,
    )
    assert updated["category"]["name"] == "Holidays"
    assert updated["category"]["count"] == 1

    shown = _invoke_json(runner, ["categories", "show", str(root), category["id"], *common], env)
    assert [item["name"] for item in shown["files"]] == ["Vacation.jpg"]

    result = runner.invoke(cli, ["categories", "delete", str(root), category["id"]], env=env)
    assert result.exit_code == 0, result.output

    listed = _invoke_json(runner, ["categories", "list", str(root)], env)
    assert listed["categories"] == []


def test_categories_add_zero_match_and_blank_name(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)
    root = _collection(tmp_path)

    created = _invoke_json(
        runner, ["categories", "add", str(root), "Nothing", "--term", "zzz-nonexistent"], env
    )
    assert created["category"]["count"] == 0
    assert created["category"]["icon"] == "folder"

    blank = _invoke_json(runner, ["categories", "add", str(root), "   "], env)
    assert blank["category"] is None

    listed = _invoke_json(runner, ["categories", "list", str(root)], env)
    assert [item["name"] for item in listed["categories"]] == ["Nothing"]


def test_categories_add_rejects_unknown_icon(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)
    root = _collection(tmp_path)

    result = runner.invoke(
        cli, ["categories", "add", str(root), "Odd", "--icon", "unicorn"], env=env
    )

    assert result.exit_code != 0
    assert "Unknown icon" in result.output


def test_delete_unknown_category_fails_unless_missing_ok(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)
    root = _collection(tmp_path)

    failed = runner.invoke(cli, ["categories", "delete", str(root), "missing"], env=env)
    tolerated = runner.invoke(
        cli, ["categories", "delete", str(root), "missing", "--missing-ok"], env=env
    )

    assert failed.exit_code != 0
    assert "No category with id" in failed.output
    assert tolerated.exit_code == 0


def test_update_unknown_category_emits_json_error(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)
    root = _collection(tmp_path)

    result = runner.invoke(
        cli, ["categories", "update", str(root), "missing", "--name", "x", "--json"], env=env
    )

    assert result.exit_code == 1
    assert json.loads(result.output)["error"]["code"] == "not_found"


def test_auto_reports_invalid_file_type_config_cleanly(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)
    root = _collection(tmp_path)
    config_path = tmp_path / ".categorium" / "config.yaml"
    config_path.parent.mkdir()
    config_path.write_text(
        "strategies:\n"
        "  file_types:\n"
        "    - {type: image, name: '', icon: image, color: '#10b981'}\n",
        encoding="utf-8",
    )

    result = runner.invoke(cli, ["auto", str(root), "--by", "type"], env=env)

    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "Invalid configuration values" in result.output
    assert "strategies.file_types.0.name" in result.output
