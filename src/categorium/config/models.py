"""Configuration models describing Categorium settings."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from categorium.registry.models import FileKind

HEX_COLOR_PATTERN = r"^#[0-9a-fA-F]{6}$"

DEFAULT_ARTISTS = [
    "arijit singh",
    "shreya ghoshal",
    "rahat fateh ali khan",
    "atif aslam",
    "kishore kumar",
    "lata mangeshkar",
    "mohd rafi",
    "sonu nigam",
    "armaan malik",
    "neha kakkar",
    "honey singh",
    "badshah",
    "guru randhawa",
    "diljit dosanjh",
    "hardy sandhu",
    "b praak",
]

DEFAULT_GENRES = [
    "bollywood",
    "punjabi",
    "classical",
    "rock",
    "pop",
    "jazz",
    "hip hop",
    "electronic",
    "folk",
    "devotional",
    "ghazal",
    "qawwali",
    "sufi",
    "romantic",
    "sad",
    "party",
    "dance",
]

DEFAULT_ICONS = [
    "folder",
    "music",
    "video",
    "image",
    "document",
    "archive",
    "star",
    "heart",
    "user",
    "calendar",
    "clock",
    "location",
    "palette",
    "camera",
    "mic",
    "monitor",
    "smartphone",
    "tag",
]

DEFAULT_COLORS = [
    "#3b82f6",
    "#ef4444",
    "#10b981",
    "#f59e0b",
    "#8b5cf6",
    "#ec4899",
    "#06b6d4",
    "#84cc16",
    "#f97316",
    "#6366f1",
    "#14b8a6",
    "#eab308",
    "#a855f7",
    "#f43f5e",
    "#0ea5e9",
    "#22c55e",
]


class CategoriumBaseModel(BaseModel):
    """Shared configuration for Categorium Pydantic models."""

    model_config = ConfigDict(extra="forbid")


class FileTypeCategory(CategoriumBaseModel):
    """One entry of the file-type strategy table.

    Attributes:
        type: File kind counted by exact equality.
        name: Display name of the emitted category.
        icon: Symbolic icon name.
        color: Hex colour of the emitted category.
    """

    type: FileKind
    name: str
    icon: str
    color: str = Field(pattern=HEX_COLOR_PATTERN)

    @field_validator("name", "icon")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


def _default_file_types() -> List[FileTypeCategory]:
    return [
        FileTypeCategory(type=FileKind.VIDEO, name="Videos", icon="video", color="#ef4444"),
        FileTypeCategory(type=FileKind.IMAGE, name="Images", icon="image", color="#10b981"),
        FileTypeCategory(type=FileKind.AUDIO, name="Audio", icon="music", color="#f59e0b"),
        FileTypeCategory(
            type=FileKind.DOCUMENT, name="Documents", icon="document", color="#6366f1"
        ),
        FileTypeCategory(type=FileKind.ARCHIVE, name="Archives", icon="archive", color="#8b5cf6"),
    ]


class AccentColors(CategoriumBaseModel):
    """Fixed colours applied by the keyword and date strategies.

    Attributes:
        artist: Colour of artist categories.
        genre: Colour of genre categories.
        date: Colour of year categories.
    """

    artist: str = Field(default="#3b82f6", pattern=HEX_COLOR_PATTERN)
    genre: str = Field(default="#10b981", pattern=HEX_COLOR_PATTERN)
    date: str = Field(default="#06b6d4", pattern=HEX_COLOR_PATTERN)


class StrategySettings(CategoriumBaseModel):
    """Reference data consumed by the auto-categorization strategies.

    Attributes:
        artists: Known artist names scanned for in file names.
        genres: Genre keywords scanned for in names and tags.
        file_types: Ordered file-type table for the file-type strategy.
        accents: Colours used by the artist, genre, and date strategies.
    """

    artists: List[str] = Field(default_factory=lambda: list(DEFAULT_ARTISTS))
    genres: List[str] = Field(default_factory=lambda: list(DEFAULT_GENRES))
    file_types: List[FileTypeCategory] = Field(default_factory=_default_file_types)
    accents: AccentColors = Field(default_factory=AccentColors)


class AutoSettings(CategoriumBaseModel):
    """Toggles for the combined auto-categorization run.

    Attributes:
        by_artist: Whether the artist strategy runs.
        by_genre: Whether the genre strategy runs.
        by_file_type: Whether the file-type strategy runs.
        by_date: Whether the date strategy runs.
        dedupe: Whether specs already present in the store are skipped.
    """

    by_artist: bool = True
    by_genre: bool = True
    by_file_type: bool = True
    by_date: bool = True
    dedupe: bool = False


class PaletteSettings(CategoriumBaseModel):
    """Icons and colours offered for manually created categories."""

    icons: List[str] = Field(default_factory=lambda: list(DEFAULT_ICONS))
    colors: List[str] = Field(default_factory=lambda: list(DEFAULT_COLORS))
    default_icon: str = "folder"
    default_color: str = Field(default="#3b82f6", pattern=HEX_COLOR_PATTERN)


class LoggingSettings(CategoriumBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
        max_size_mb: Maximum log size before rotation.
        backup_count: Number of historical log files to retain.
    """

    level: str = "WARNING"
    max_size_mb: int = 10
    backup_count: int = 5


class CLIOptions(CategoriumBaseModel):
    """CLI behavior defaults.

    Attributes:
        quiet_default: Whether commands suppress non-error output by default.
    """

    quiet_default: bool = False


class CategoriumConfig(CategoriumBaseModel):
    """Top-level configuration struct for Categorium.

    Attributes:
        strategies: Strategy reference data.
        auto: Combined-run toggles.
        palette: Manual category icon and colour choices.
        logging: Logging configuration.
        cli: CLI presentation defaults.
    """

    strategies: StrategySettings = Field(default_factory=StrategySettings)
    auto: AutoSettings = Field(default_factory=AutoSettings)
    palette: PaletteSettings = Field(default_factory=PaletteSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)


__all__ = [
    "HEX_COLOR_PATTERN",
    "DEFAULT_ARTISTS",
    "DEFAULT_GENRES",
    "DEFAULT_ICONS",
    "DEFAULT_COLORS",
    "CategoriumBaseModel",
    "FileTypeCategory",
    "AccentColors",
    "StrategySettings",
    "AutoSettings",
    "PaletteSettings",
    "LoggingSettings",
    "CLIOptions",
    "CategoriumConfig",
]
