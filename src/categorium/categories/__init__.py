"""Category management and auto-categorization."""

from .builder import build_manual_category
from .dedupe import dedupe_drafts
from .engine import CategoryEngine
from .errors import CategoryError, CategoryNotFoundError, CategoryValidationError
from .matcher import count_matches, filter_blank_terms, matches, matching_files
from .models import (
    CategorizationReport,
    Category,
    CategoryDraft,
    CategorySpec,
    CategoryUpdate,
    TextRule,
    TypeRule,
    YearRule,
)
from .store import CategoryStore
from .strategies import STRATEGIES

__all__ = [
    "STRATEGIES",
    "CategorizationReport",
    "Category",
    "CategoryDraft",
    "CategoryEngine",
    "CategoryError",
    "CategoryNotFoundError",
    "CategorySpec",
    "CategoryStore",
    "CategoryUpdate",
    "CategoryValidationError",
    "TextRule",
    "TypeRule",
    "YearRule",
    "build_manual_category",
    "count_matches",
    "dedupe_drafts",
    "filter_blank_terms",
    "matches",
    "matching_files",
]
