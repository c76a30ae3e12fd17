"""Build registry records from a directory tree."""

from __future__ import annotations

import mimetypes
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Iterator

from .models import FileKind, FileRecord

ARCHIVE_SUFFIXES = frozenset(
    {".zip", ".rar", ".7z", ".tar", ".gz", ".tgz", ".bz2", ".xz", ".zst", ".iso"}
)
DOCUMENT_MIME_TYPES = frozenset(
    {
        "application/pdf",
        "application/msword",
        "application/rtf",
        "application/vnd.ms-excel",
        "application/vnd.ms-powerpoint",
        "application/vnd.oasis.opendocument.text",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "application/vnd.openxmlformats-officedocument.presentationml.presentation",
        "application/epub+zip",
    }
)


def _is_hidden(path: Path) -> bool:
    return any(part.startswith(".") for part in path.parts if part not in (".", ".."))


def detect_kind(path: Path) -> FileKind:
    """Return the coarse file kind for ``path`` based on its extension."""
    if path.suffix.lower() in ARCHIVE_SUFFIXES:
        return FileKind.ARCHIVE

    mime, _ = mimetypes.guess_type(path.name)
    if mime is None:
        return FileKind.OTHER
    if mime.startswith("video/"):
        return FileKind.VIDEO
    if mime.startswith("image/"):
        return FileKind.IMAGE
    if mime.startswith("audio/"):
        return FileKind.AUDIO
    if mime.startswith("text/") or mime in DOCUMENT_MIME_TYPES:
        return FileKind.DOCUMENT
    return FileKind.OTHER


class DirectoryScanner:
    """Discover files within a directory tree and describe them as records."""

    def __init__(self, *, recursive: bool, include_hidden: bool = False) -> None:
        self.recursive = recursive
        self.include_hidden = include_hidden

    def scan(self, root: Path) -> Iterator[FileRecord]:
        """Yield one record per regular file under ``root`` in sorted path order."""
        root = root.expanduser().resolve()
        if not root.exists():
            return

        for path in sorted(self._iter_paths(root)):
            if not path.is_file():
                continue
            relative = path.relative_to(root)
            if not self.include_hidden and _is_hidden(relative):
                continue
            try:
                stat = path.stat()
            except OSError:
                continue

            yield FileRecord(
                id=relative.as_posix(),
                name=path.name,
                tags=tuple(relative.parent.parts),
                type=detect_kind(path),
                created_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            )

    def _iter_paths(self, root: Path) -> Iterable[Path]:
        if self.recursive:
            yield from root.rglob("*")
        else:
            yield from root.iterdir()


__all__ = ["ARCHIVE_SUFFIXES", "DirectoryScanner", "detect_kind"]
