"""Persisted category state for a collection."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, Field

from categorium.categories.models import Category


class CategoryState(BaseModel):
    """Categories saved for one collection root, in display order."""

    root: str
    categories: List[Category] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


__all__ = ["CategoryState"]
