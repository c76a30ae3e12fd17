"""Tests for the file registry loaders."""

from __future__ import annotations

import json
from datetime import timezone
from pathlib import Path

import pytest

from categorium.registry import FileKind, FileRegistry, RegistryError, detect_kind


def test_detect_kind_by_extension() -> None:
    assert detect_kind(Path("clip.mp4")) is FileKind.VIDEO
    assert detect_kind(Path("photo.JPG")) is FileKind.IMAGE
    assert detect_kind(Path("song.mp3")) is FileKind.AUDIO
    assert detect_kind(Path("notes.txt")) is FileKind.DOCUMENT
    assert detect_kind(Path("report.pdf")) is FileKind.DOCUMENT
    assert detect_kind(Path("backup.zip")) is FileKind.ARCHIVE
    assert detect_kind(Path("blob.unknownext")) is FileKind.OTHER


def test_scan_builds_sorted_records(tmp_path: Path) -> None:
    (tmp_path / "b.mp3").write_bytes(b"")
    (tmp_path / "a.jpg").write_bytes(b"")
    (tmp_path / ".hidden.txt").write_text("x", encoding="utf-8")
    nested = tmp_path / "travel"
    nested.mkdir()
    (nested / "beach.png").write_bytes(b"")

    flat = FileRegistry.scan(tmp_path)
    deep = FileRegistry.scan(tmp_path, recursive=True)

    assert [record.id for record in flat.list_files()] == ["a.jpg", "b.mp3"]
    assert [record.id for record in deep.list_files()] == ["a.jpg", "b.mp3", "travel/beach.png"]
    beach = deep.list_files()[-1]
    assert beach.tags == ("travel",)
    assert beach.type is FileKind.IMAGE
    assert beach.created_at.tzinfo == timezone.utc


def test_scan_missing_root_is_empty(tmp_path: Path) -> None:
    assert len(FileRegistry.scan(tmp_path / "missing")) == 0


def test_from_manifest_json(tmp_path: Path) -> None:
    manifest = tmp_path / "files.json"
    manifest.write_text(
        json.dumps(
            [
                {
                    "id": "1",
                    "name": "Vacation.jpg",
                    "tags": ["travel"],
                    "type": "image",
                    "created_at": "2021-06-01T00:00:00",
                }
            ]
        ),
        encoding="utf-8",
    )

    registry = FileRegistry.from_manifest(manifest)
    record = registry.list_files()[0]

    assert record.tags == ("travel",)
    assert record.type is FileKind.IMAGE
    assert record.created_year == 2021
    assert record.created_at.tzinfo == timezone.utc


def test_from_manifest_yaml_mapping(tmp_path: Path) -> None:
    manifest = tmp_path / "files.yaml"
    manifest.write_text(
        "files:\n"
        "  - id: a\n"
        "    name: Arijit Singh - Tum Hi Ho.mp3\n"
        "    type: audio\n"
        "    created_at: 2020-01-01T00:00:00Z\n",
        encoding="utf-8",
    )

    registry = FileRegistry.from_manifest(manifest)

    assert [record.name for record in registry] == ["Arijit Singh - Tum Hi Ho.mp3"]


@pytest.mark.parametrize(
    "content",
    ["{not json", json.dumps({"files": "nope"}), json.dumps([{"name": "missing id"}])],
)
def test_from_manifest_invalid_raises(tmp_path: Path, content: str) -> None:
    manifest = tmp_path / "files.json"
    manifest.write_text(content, encoding="utf-8")

    with pytest.raises(RegistryError):
        FileRegistry.from_manifest(manifest)


def test_records_are_immutable(tmp_path: Path) -> None:
    (tmp_path / "a.jpg").write_bytes(b"")
    record = FileRegistry.scan(tmp_path).list_files()[0]

    with pytest.raises(Exception):
        record.name = "changed"  # type: ignore[misc]
