"""File registry data models."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FileKind(str, Enum):
    """Coarse file type used by the file-type strategy."""

    VIDEO = "video"
    IMAGE = "image"
    AUDIO = "audio"
    DOCUMENT = "document"
    ARCHIVE = "archive"
    OTHER = "other"


class FileRecord(BaseModel):
    """Read-only metadata describing one file in the registry.

    Attributes:
        id: Stable identifier of the file within its registry.
        name: Display name, usually the file name with extension.
        tags: Free-form tags attached to the file.
        type: Coarse file type.
        created_at: Creation timestamp; naive values are treated as UTC.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    tags: Tuple[str, ...] = Field(default_factory=tuple)
    type: FileKind = FileKind.OTHER
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def created_year(self) -> int:
        """Return the calendar year of ``created_at`` in UTC."""
        return self.created_at.astimezone(timezone.utc).year


__all__ = ["FileKind", "FileRecord"]
