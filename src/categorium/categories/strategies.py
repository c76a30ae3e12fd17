"""Automatic category generation strategies.

Each strategy reads an ordered sequence of file records and returns the
category drafts it would create. Drafts are not validated here: names,
icons, and colours come from configuration, and the engine validates and
commits each draft separately so one bad entry cannot sink the others.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Sequence

from categorium.config.models import FileTypeCategory, StrategySettings
from categorium.registry.models import FileRecord

from .matcher import count_matches
from .models import CategoryDraft, TextRule, TypeRule, YearRule

Strategy = Callable[[Sequence[FileRecord], StrategySettings], list[CategoryDraft]]


def title_words(value: str) -> str:
    """Capitalize the first character of every space-separated word."""
    return " ".join(word[:1].upper() + word[1:] for word in value.split(" "))


def capitalize_first(value: str) -> str:
    """Capitalize only the first character of ``value``."""
    return value[:1].upper() + value[1:]


def _keywords(values: Iterable[str]) -> list[str]:
    normalized = [value.strip().lower() for value in values]
    return [value for value in dict.fromkeys(normalized) if value]


def by_artist(files: Sequence[FileRecord], settings: StrategySettings) -> list[CategoryDraft]:
    """Emit one category per known artist found in any file name.

    Detection looks at names only; the count also considers tags.
    """
    artists = _keywords(settings.artists)
    detected: dict[str, None] = {}
    for file in files:
        name = file.name.lower()
        for artist in artists:
            if artist in name:
                detected.setdefault(artist, None)

    drafts = []
    for artist in detected:
        rules = [TextRule(value=artist)]
        drafts.append(
            CategoryDraft(
                name=title_words(artist),
                icon="music",
                color=settings.accents.artist,
                rules=rules,
                count=count_matches(files, rules),
            )
        )
    return drafts


def by_genre(files: Sequence[FileRecord], settings: StrategySettings) -> list[CategoryDraft]:
    """Emit one category per genre keyword found in a name or equal to a tag."""
    genres = _keywords(settings.genres)
    detected: dict[str, None] = {}
    for file in files:
        name = file.name.lower()
        tags = {tag.lower() for tag in file.tags}
        for genre in genres:
            if genre in name or genre in tags:
                detected.setdefault(genre, None)

    drafts = []
    for genre in detected:
        rules = [TextRule(value=genre)]
        drafts.append(
            CategoryDraft(
                name=capitalize_first(genre),
                icon="music",
                color=settings.accents.genre,
                rules=rules,
                count=count_matches(files, rules),
            )
        )
    return drafts


def by_file_type(files: Sequence[FileRecord], settings: StrategySettings) -> list[CategoryDraft]:
    """Emit a category for each configured file type that has at least one file."""
    drafts = []
    for entry in settings.file_types:
        draft = _file_type_draft(files, entry)
        if draft is not None:
            drafts.append(draft)
    return drafts


def _file_type_draft(
    files: Sequence[FileRecord], entry: FileTypeCategory
) -> CategoryDraft | None:
    rules = [TypeRule(value=entry.type)]
    count = count_matches(files, rules)
    if count == 0:
        return None
    return CategoryDraft(
        name=entry.name, icon=entry.icon, color=entry.color, rules=rules, count=count
    )


def by_date(files: Sequence[FileRecord], settings: StrategySettings) -> list[CategoryDraft]:
    """Emit one ``Year {year}`` category per distinct UTC creation year."""
    years: Dict[int, int] = {}
    for file in files:
        year = file.created_year
        years[year] = years.get(year, 0) + 1

    return [
        CategoryDraft(
            name=f"Year {year}",
            icon="calendar",
            color=settings.accents.date,
            rules=[YearRule(value=year)],
            count=count,
        )
        for year, count in years.items()
    ]


STRATEGIES: Dict[str, Strategy] = {
    "artist": by_artist,
    "genre": by_genre,
    "type": by_file_type,
    "date": by_date,
}


__all__ = [
    "STRATEGIES",
    "Strategy",
    "by_artist",
    "by_genre",
    "by_file_type",
    "by_date",
    "title_words",
    "capitalize_first",
]
