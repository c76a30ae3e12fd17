"""Category engine tying the registry, store, and strategies together.

The engine is the API surface consumed by front ends. It reads files only
through :meth:`FileRegistry.list_files` and routes every mutation through
its :class:`CategoryStore`.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional, Sequence, Tuple

from categorium.config.models import AutoSettings, StrategySettings
from categorium.registry import FileRegistry
from categorium.registry.models import FileRecord

from .builder import build_manual_category
from .dedupe import dedupe_drafts
from .errors import CategoryError
from .matcher import count_matches, matching_files
from .models import (
    Category,
    CategorizationReport,
    CategoryDraft,
    CategorySpec,
    CategoryUpdate,
)
from .store import CategoryStore, coerce_spec
from .strategies import STRATEGIES

LOGGER = logging.getLogger(__name__)

_AUTO_TOGGLES = (
    ("artist", "by_artist"),
    ("genre", "by_genre"),
    ("type", "by_file_type"),
    ("date", "by_date"),
)


class CategoryEngine:
    """Create, edit, and auto-generate categories over a file registry."""

    def __init__(
        self,
        registry: FileRegistry,
        store: Optional[CategoryStore] = None,
        *,
        strategies: Optional[StrategySettings] = None,
        auto: Optional[AutoSettings] = None,
    ) -> None:
        self.registry = registry
        self.store = store if store is not None else CategoryStore()
        self.strategies = strategies if strategies is not None else StrategySettings()
        self.auto = auto if auto is not None else AutoSettings()

    # ------------------------------------------------------------------ #
    # Store operations                                                   #
    # ------------------------------------------------------------------ #

    def add_category(
        self, spec: CategorySpec | CategoryDraft | Mapping[str, object]
    ) -> Category:
        """Commit ``spec`` to the store.

        The stored ``count`` is always the number of registry files matched by
        the spec's rules at this moment; a count carried by the spec is
        replaced.

        Raises:
            CategoryValidationError: If the spec fields are invalid.
        """
        spec = coerce_spec(spec)
        count = count_matches(self.registry.list_files(), spec.rules)
        if spec.count is not None and spec.count != count:
            LOGGER.debug(
                "Replacing supplied count %d with %d for %r", spec.count, count, spec.name
            )
        return self.store.add(spec.model_copy(update={"count": count}))

    def update_category(
        self, category_id: str, partial: CategoryUpdate | Mapping[str, object]
    ) -> Category:
        """Merge ``partial`` into a category without recomputing its count."""
        return self.store.update(category_id, partial)

    def delete_category(self, category_id: str, *, missing_ok: bool = False) -> None:
        """Delete a category.

        Args:
            category_id: Identifier of the category to remove.
            missing_ok: Ignore unknown ids instead of raising.

        Raises:
            CategoryNotFoundError: If the id is unknown and ``missing_ok`` is False.
        """
        if missing_ok:
            self.store.discard(category_id)
            return
        self.store.delete(category_id)

    def list_categories(self) -> Tuple[Category, ...]:
        """Return categories in insertion order."""
        return self.store.list()

    def files_in_category(self, category_id: str) -> list[FileRecord]:
        """Return the registry files currently matched by a category's rules."""
        category = self.store.get(category_id)
        return matching_files(self.registry.list_files(), category.rules)

    # ------------------------------------------------------------------ #
    # Manual creation                                                    #
    # ------------------------------------------------------------------ #

    def create_manual_category(
        self,
        name: str,
        icon: str,
        color: str,
        search_terms: Iterable[str],
    ) -> Optional[Category]:
        """Build and commit a category from user input.

        Returns:
            Optional[Category]: The new category, or None when ``name`` is blank.
        """
        spec = build_manual_category(name, icon, color, search_terms)
        if spec is None:
            return None
        return self.add_category(spec)

    # ------------------------------------------------------------------ #
    # Automatic creation                                                 #
    # ------------------------------------------------------------------ #

    def auto_categorize_by_singers(
        self, *, dedupe: Optional[bool] = None
    ) -> CategorizationReport:
        """Create one category per known artist found in file names."""
        return self.run_strategy("artist", dedupe=dedupe)

    def auto_categorize_by_genre(self, *, dedupe: Optional[bool] = None) -> CategorizationReport:
        """Create one category per genre keyword found in names or tags."""
        return self.run_strategy("genre", dedupe=dedupe)

    def auto_categorize_by_file_type(
        self, *, dedupe: Optional[bool] = None
    ) -> CategorizationReport:
        """Create a category for each file type present in the registry."""
        return self.run_strategy("type", dedupe=dedupe)

    def auto_categorize_by_date(self, *, dedupe: Optional[bool] = None) -> CategorizationReport:
        """Create one category per creation year present in the registry."""
        return self.run_strategy("date", dedupe=dedupe)

    def auto_categorize(
        self,
        strategies: Optional[Sequence[str]] = None,
        *,
        dedupe: Optional[bool] = None,
    ) -> list[CategorizationReport]:
        """Run several strategies in order.

        Args:
            strategies: Strategy keys to run. Defaults to those enabled in the
                ``auto`` settings, in artist, genre, type, date order.
            dedupe: Override the configured dedupe policy.

        Returns:
            list[CategorizationReport]: One report per strategy run.
        """
        if strategies is None:
            strategies = [key for key, toggle in _AUTO_TOGGLES if getattr(self.auto, toggle)]
        return [self.run_strategy(key, dedupe=dedupe) for key in strategies]

    def run_strategy(self, key: str, *, dedupe: Optional[bool] = None) -> CategorizationReport:
        """Run one strategy and commit each emitted draft independently.

        Each draft is validated as part of its own commit. A draft that fails
        is recorded in the report's ``errors`` and does not stop the rest.

        Args:
            key: Strategy key (``artist``, ``genre``, ``type``, or ``date``).
            dedupe: Override the configured dedupe policy.

        Returns:
            CategorizationReport: Created, skipped, and failed entries.

        Raises:
            KeyError: If ``key`` is not a known strategy.
        """
        try:
            strategy = STRATEGIES[key]
        except KeyError:
            known = ", ".join(sorted(STRATEGIES))
            raise KeyError(f"Unknown strategy {key!r}; expected one of {known}") from None

        files = self.registry.list_files()
        drafts = strategy(files, self.strategies)
        report = CategorizationReport(strategy=key)

        use_dedupe = self.auto.dedupe if dedupe is None else dedupe
        if use_dedupe:
            drafts, report.skipped = dedupe_drafts(self.store.list(), drafts)

        for draft in drafts:
            try:
                report.created.append(self.add_category(draft))
            except CategoryError as exc:
                LOGGER.warning("Failed to create category %r: %s", draft.name, exc)
                report.errors.append(f"{draft.name or '<blank>'}: {exc}")

        LOGGER.info(
            "Strategy %s created %d categories (%d skipped, %d errors) from %d files",
            key,
            len(report.created),
            len(report.skipped),
            len(report.errors),
            len(files),
        )
        return report


__all__ = ["CategoryEngine"]
