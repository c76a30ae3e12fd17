"""Optional policy that suppresses repeated strategy output."""

from __future__ import annotations

from typing import Iterable, Tuple

from .models import Category, CategoryDraft, CategorySpec, rule_value

CategoryKey = Tuple[str, Tuple[Tuple[str, object], ...]]


def category_key(item: Category | CategorySpec | CategoryDraft) -> CategoryKey:
    """Return the ``(name, rules)`` identity used for deduplication."""
    return item.name, tuple((rule.kind, rule_value(rule)) for rule in item.rules)


def dedupe_drafts(
    existing: Iterable[Category],
    drafts: Iterable[CategoryDraft],
) -> tuple[list[CategoryDraft], list[CategoryDraft]]:
    """Split ``drafts`` into new and already-present entries.

    A draft is already present when a stored category, or an earlier draft in
    the same batch, has the same name and rules.

    Returns:
        tuple[list[CategoryDraft], list[CategoryDraft]]: Drafts to commit and drafts skipped.
    """
    seen = {category_key(category) for category in existing}
    keep: list[CategoryDraft] = []
    skipped: list[CategoryDraft] = []
    for draft in drafts:
        key = category_key(draft)
        if key in seen:
            skipped.append(draft)
            continue
        seen.add(key)
        keep.append(draft)
    return keep, skipped


__all__ = ["CategoryKey", "category_key", "dedupe_drafts"]
