"""Tests for the auto-categorization strategies."""

from __future__ import annotations

from datetime import datetime, timezone

from categorium.categories.strategies import (
    by_artist,
    by_date,
    by_file_type,
    by_genre,
    capitalize_first,
    title_words,
)
from categorium.config.models import FileTypeCategory, StrategySettings
from categorium.registry.models import FileKind, FileRecord


def _file(
    name: str,
    *,
    tags: tuple[str, ...] = (),
    kind: FileKind = FileKind.AUDIO,
    created: str = "2020-01-01T00:00:00+00:00",
) -> FileRecord:
    return FileRecord(
        id=name, name=name, tags=tags, type=kind, created_at=datetime.fromisoformat(created)
    )


def test_name_helpers() -> None:
    assert title_words("rahat fateh ali khan") == "Rahat Fateh Ali Khan"
    assert title_words("b praak") == "B Praak"
    assert capitalize_first("hip hop") == "Hip hop"


def test_by_artist_detects_names_and_counts_tags() -> None:
    files = [
        _file("Arijit Singh - Tum Hi Ho.mp3"),
        _file("Channa Mereya.mp3", tags=("Arijit Singh",)),
        _file("Atif Aslam - Tere Bin.mp3"),
    ]

    specs = by_artist(files, StrategySettings())

    assert [spec.name for spec in specs] == ["Arijit Singh", "Atif Aslam"]
    assert specs[0].rule_values() == ["arijit singh"]
    assert specs[0].count == 2
    assert specs[0].icon == "music"
    assert specs[0].color == "#3b82f6"
    assert specs[1].count == 1


def test_by_artist_ignores_tags_for_detection() -> None:
    files = [_file("untitled.mp3", tags=("shreya ghoshal",))]

    assert by_artist(files, StrategySettings()) == []


def test_by_artist_reads_configured_list_case_insensitively() -> None:
    settings = StrategySettings(artists=["Nina Simone"])

    specs = by_artist([_file("nina simone - feeling good.flac")], settings)

    assert [spec.name for spec in specs] == ["Nina Simone"]
    assert specs[0].rule_values() == ["nina simone"]


def test_by_genre_uses_name_substring_or_exact_tag() -> None:
    files = [
        _file("Late Night Jazz.mp3"),
        _file("track01.mp3", tags=("Hip Hop",)),
        _file("track02.mp3", tags=("hip hop classics",)),
    ]

    specs = by_genre(files, StrategySettings())

    assert [spec.name for spec in specs] == ["Jazz", "Hip hop"]
    hip_hop = next(spec for spec in specs if spec.name == "Hip hop")
    assert hip_hop.count == 2
    assert hip_hop.color == "#10b981"


def test_by_file_type_gates_on_nonzero_count() -> None:
    files = [
        _file("a.jpg", kind=FileKind.IMAGE),
        _file("b.mp3", kind=FileKind.AUDIO),
        _file("c.png", kind=FileKind.IMAGE),
        _file("d.bin", kind=FileKind.OTHER),
    ]

    specs = by_file_type(files, StrategySettings())

    assert [(spec.name, spec.count) for spec in specs] == [("Images", 2), ("Audio", 1)]
    assert specs[0].rule_values() == ["image"]
    assert specs[0].rules[0].kind == "type"


def test_by_date_groups_by_utc_year_in_first_seen_order() -> None:
    files = [
        _file("a", created="2021-06-01T00:00:00+00:00"),
        _file("b", created="2020-01-01T00:00:00+00:00"),
        _file("c", created="2021-12-31T22:00:00-05:00"),
    ]

    specs = by_date(files, StrategySettings())

    assert [(spec.name, spec.count) for spec in specs] == [
        ("Year 2021", 1),
        ("Year 2020", 1),
        ("Year 2022", 1),
    ]
    assert specs[0].rule_values() == [2021]
    assert specs[0].icon == "calendar"
    assert specs[0].color == "#06b6d4"


def test_strategies_emit_nothing_for_empty_registry() -> None:
    settings = StrategySettings()

    for strategy in (by_artist, by_genre, by_file_type, by_date):
        assert strategy([], settings) == []


def test_by_file_type_leaves_validation_to_the_commit() -> None:
    unnamed = FileTypeCategory.model_construct(
        type=FileKind.IMAGE, name="", icon="image", color="#10b981"
    )
    settings = StrategySettings(file_types=[unnamed])

    drafts = by_file_type([_file("a.jpg", kind=FileKind.IMAGE)], settings)

    assert [(draft.name, draft.count) for draft in drafts] == [("", 1)]
