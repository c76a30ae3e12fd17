"""Category management errors."""


class CategoryError(Exception):
    """Base exception for category store operations."""


class CategoryNotFoundError(CategoryError):
    """Raised when an update or delete references an unknown category id."""

    def __init__(self, category_id: str) -> None:
        super().__init__(f"No category with id {category_id!r}")
        self.category_id = category_id


class CategoryValidationError(CategoryError):
    """Raised when category fields fail validation."""
