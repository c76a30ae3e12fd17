"""Rule matching shared by manual and automatic category creation.

A file belongs to a category when any of the category's rules matches it.
Text rules compare case-insensitively against the file name and each tag,
year rules against the UTC creation year, and type rules against the file
kind. An empty rule sequence matches nothing.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from pydantic import TypeAdapter

from categorium.registry.models import FileRecord

from .models import AnyRule, Rule, TextRule, TypeRule, YearRule, coerce_rules

_RULES_ADAPTER: TypeAdapter[list[AnyRule]] = TypeAdapter(list[Rule])


def as_rules(rules: Iterable[AnyRule | str | int]) -> list[AnyRule]:
    """Normalize primitives (``str`` and ``int``) into tagged rules."""
    return _RULES_ADAPTER.validate_python(coerce_rules(list(rules)))


def filter_blank_terms(terms: Iterable[str]) -> list[str]:
    """Drop blank and whitespace-only search terms, preserving order."""
    return [term for term in terms if term.strip()]


def rule_matches(file: FileRecord, rule: AnyRule) -> bool:
    """Return whether a single rule matches ``file``."""
    if isinstance(rule, TextRule):
        if not rule.value.strip():
            return False
        needle = rule.value.lower()
        if needle in file.name.lower():
            return True
        return any(needle in tag.lower() for tag in file.tags)
    if isinstance(rule, YearRule):
        return file.created_year == rule.value
    if isinstance(rule, TypeRule):
        return file.type == rule.value
    raise TypeError(f"Unsupported rule type: {type(rule).__name__}")


def matches(file: FileRecord, rules: Sequence[AnyRule]) -> bool:
    """Return whether any rule in ``rules`` matches ``file``."""
    return any(rule_matches(file, rule) for rule in rules)


def matching_files(
    files: Iterable[FileRecord], rules: Iterable[AnyRule | str | int]
) -> list[FileRecord]:
    """Return the files matched by ``rules`` in their original order.

    ``rules`` may mix tagged rules and primitives; they are normalized once.
    """
    normalized = as_rules(rules)
    return [file for file in files if matches(file, normalized)]


def count_matches(files: Iterable[FileRecord], rules: Iterable[AnyRule | str | int]) -> int:
    """Return how many files are matched by ``rules``, normalized like :func:`matching_files`."""
    normalized = as_rules(rules)
    return sum(1 for file in files if matches(file, normalized))


__all__ = [
    "as_rules",
    "filter_blank_terms",
    "rule_matches",
    "matches",
    "matching_files",
    "count_matches",
]
