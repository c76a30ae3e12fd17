"""Tests for the rule matcher."""

from datetime import datetime, timezone

import pytest

from categorium.categories.matcher import (
    as_rules,
    count_matches,
    filter_blank_terms,
    matches,
    matching_files,
    rule_matches,
)
from categorium.categories.models import TextRule, TypeRule, YearRule
from categorium.registry.models import FileKind, FileRecord


def _file(
    name: str, tags: tuple[str, ...] = (), kind: FileKind = FileKind.OTHER, year: int = 2020
) -> FileRecord:
    return FileRecord(
        id=name,
        name=name,
        tags=tags,
        type=kind,
        created_at=datetime(year, 6, 1, tzinfo=timezone.utc),
    )


def test_text_rule_matches_name_case_insensitively() -> None:
    file = _file("Arijit Singh - Tum Hi Ho.mp3")

    assert matches(file, as_rules(["ARIJIT"]))
    assert matches(file, as_rules(["tum hi"]))
    assert not matches(file, as_rules(["shreya"]))


def test_text_rule_matches_tag_substring() -> None:
    file = _file("IMG_0001.jpg", tags=("Travel", "Beach"))

    assert matches(file, as_rules(["trav"]))
    assert matches(file, as_rules(["beach"]))
    assert not matches(file, as_rules(["mountain"]))


def test_or_semantics_across_rules() -> None:
    file = _file("rock anthem.mp3")
    hit, miss = as_rules(["rock"]), as_rules(["jazz"])

    assert matches(file, hit + miss) == (matches(file, hit) or matches(file, miss))
    assert matches(file, miss + hit)
    assert not matches(file, miss + as_rules(["blues"]))


def test_empty_rules_match_nothing() -> None:
    files = [_file("a.mp3"), _file("b.jpg")]

    assert not matches(files[0], [])
    assert count_matches(files, []) == 0


@pytest.mark.parametrize("blank", ["", "   ", "\t"])
def test_blank_text_rule_never_matches(blank: str) -> None:
    assert not rule_matches(_file("anything.txt"), TextRule(value=blank))


def test_year_and_type_rules_dispatch_on_kind() -> None:
    file = _file("clip.mp4", kind=FileKind.VIDEO, year=2021)

    assert rule_matches(file, YearRule(value=2021))
    assert not rule_matches(file, YearRule(value=2020))
    assert rule_matches(file, TypeRule(value=FileKind.VIDEO))
    assert not rule_matches(file, TypeRule(value=FileKind.IMAGE))


def test_year_rule_uses_utc_year() -> None:
    file = FileRecord(
        id="late",
        name="late.txt",
        created_at=datetime.fromisoformat("2020-12-31T23:30:00-05:00"),
    )

    assert file.created_year == 2021
    assert matches(file, [YearRule(value=2021)])


def test_primitive_rules_are_coerced() -> None:
    rules = as_rules(["rock", 2020])

    assert rules == [TextRule(value="rock"), YearRule(value=2020)]


def test_matches_is_deterministic() -> None:
    file = _file("Party Mix.mp3", tags=("dance",))
    rules = as_rules(["dance", "pop"])

    assert {matches(file, rules) for _ in range(5)} == {True}


def test_matching_files_preserves_order() -> None:
    files = [_file("b rock.mp3"), _file("a.mp3"), _file("c rock.mp3")]

    assert [f.name for f in matching_files(files, as_rules(["rock"]))] == [
        "b rock.mp3",
        "c rock.mp3",
    ]


def test_filter_blank_terms_keeps_order() -> None:
    assert filter_blank_terms(["", "  ", "rock", " pop "]) == ["rock", " pop "]


def test_count_and_matching_files_accept_primitive_rules() -> None:
    files = [
        _file("Rock Anthem.mp3", year=2019),
        _file("a.jpg", kind=FileKind.IMAGE, year=2020),
        _file("notes.txt", year=2021),
    ]

    assert count_matches(files, ["rock", 2020]) == 2
    assert [file.name for file in matching_files(files, ("rock", 2020))] == [
        "Rock Anthem.mp3",
        "a.jpg",
    ]
    assert count_matches(files, [TypeRule(value=FileKind.IMAGE)]) == 1
