"""In-memory category store with lifetime-unique ids."""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Iterable, Iterator, Mapping, Tuple

from pydantic import ValidationError

from .errors import CategoryNotFoundError, CategoryValidationError
from .models import Category, CategoryDraft, CategorySpec, CategoryUpdate

LOGGER = logging.getLogger(__name__)


class CategoryStore:
    """Own the ordered collection of categories.

    Insertion order is display order. Every mutation, including id
    assignment, runs under one lock, so concurrent ``add`` calls never share
    an id. Ids of deleted categories are never handed out again.
    """

    def __init__(self, categories: Iterable[Category] = ()) -> None:
        """Initialize the store, optionally with previously persisted categories.

        Args:
            categories: Existing categories; their ids and order are kept.

        Raises:
            CategoryValidationError: If two existing categories share an id.
        """
        self._lock = threading.Lock()
        self._categories: dict[str, Category] = {}
        self._issued: set[str] = set()
        for category in categories:
            if category.id in self._issued:
                raise CategoryValidationError(f"Duplicate category id {category.id!r}")
            self._categories[category.id] = category
            self._issued.add(category.id)

    def add(self, spec: CategorySpec | Mapping[str, object]) -> Category:
        """Store a new category built from ``spec`` and return it.

        Args:
            spec: Category fields. ``count`` defaults to 0 when absent.

        Returns:
            Category: The stored category with its fresh id.

        Raises:
            CategoryValidationError: If the spec fields are invalid.
        """
        spec = coerce_spec(spec)
        with self._lock:
            category_id = self._new_id()
            try:
                category = Category(
                    id=category_id,
                    name=spec.name,
                    icon=spec.icon,
                    color=spec.color,
                    count=spec.count or 0,
                    rules=list(spec.rules),
                )
            except ValidationError as exc:
                raise CategoryValidationError(f"Invalid category: {exc}") from exc
            self._issued.add(category_id)
            self._categories[category_id] = category

        LOGGER.debug(
            "Added category %s (%s) with count=%d", category.id, category.name, category.count
        )
        return category

    def update(self, category_id: str, partial: CategoryUpdate | Mapping[str, object]) -> Category:
        """Merge the provided fields into an existing category.

        The stored ``count`` is left as is.

        Args:
            category_id: Identifier of the category to update.
            partial: Fields to replace; unset fields are kept.

        Returns:
            Category: The updated category.

        Raises:
            CategoryNotFoundError: If no category has ``category_id``.
            CategoryValidationError: If the update fields are invalid.
        """
        if not isinstance(partial, CategoryUpdate):
            try:
                partial = CategoryUpdate.model_validate(dict(partial))
            except ValidationError as exc:
                raise CategoryValidationError(f"Invalid category update: {exc}") from exc

        changes = {
            key: value
            for key, value in partial.model_dump(exclude_unset=True).items()
            if value is not None
        }
        with self._lock:
            current = self._categories.get(category_id)
            if current is None:
                raise CategoryNotFoundError(category_id)
            merged = current.model_dump()
            merged.update(changes)
            try:
                updated = Category.model_validate(merged)
            except ValidationError as exc:
                raise CategoryValidationError(f"Invalid category update: {exc}") from exc
            self._categories[category_id] = updated

        LOGGER.debug("Updated category %s fields=%s", category_id, sorted(changes))
        return updated

    def delete(self, category_id: str) -> None:
        """Remove a category.

        Raises:
            CategoryNotFoundError: If no category has ``category_id``.
        """
        with self._lock:
            if self._categories.pop(category_id, None) is None:
                raise CategoryNotFoundError(category_id)
        LOGGER.debug("Deleted category %s", category_id)

    def discard(self, category_id: str) -> bool:
        """Remove a category if present; unknown ids are ignored.

        Returns:
            bool: True when a category was removed.
        """
        with self._lock:
            removed = self._categories.pop(category_id, None) is not None
        if removed:
            LOGGER.debug("Discarded category %s", category_id)
        return removed

    def get(self, category_id: str) -> Category:
        """Return the category with ``category_id``.

        Raises:
            CategoryNotFoundError: If no category has ``category_id``.
        """
        try:
            return self._categories[category_id]
        except KeyError:
            raise CategoryNotFoundError(category_id) from None

    def list(self) -> Tuple[Category, ...]:
        """Return all categories in insertion order."""
        with self._lock:
            return tuple(self._categories.values())

    def __len__(self) -> int:
        return len(self._categories)

    def __iter__(self) -> Iterator[Category]:
        return iter(self.list())

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._categories

    def _new_id(self) -> str:
        while True:
            candidate = uuid.uuid4().hex
            if candidate not in self._issued:
                return candidate


def coerce_spec(spec: CategorySpec | CategoryDraft | Mapping[str, object]) -> CategorySpec:
    """Validate a mapping or strategy draft into a :class:`CategorySpec`.

    Raises:
        CategoryValidationError: If the fields are invalid.
    """
    if isinstance(spec, CategorySpec):
        return spec
    fields = spec.fields() if isinstance(spec, CategoryDraft) else dict(spec)
    try:
        return CategorySpec.model_validate(fields)
    except ValidationError as exc:
        raise CategoryValidationError(f"Invalid category: {exc}") from exc


__all__ = ["CategoryStore", "coerce_spec"]
