"""Read-only file registry consumed by the category engine."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Iterator, Tuple

import yaml
from pydantic import ValidationError

from .discovery import DirectoryScanner, detect_kind
from .errors import RegistryError
from .models import FileKind, FileRecord


class FileRegistry:
    """Ordered, immutable snapshot of file records."""

    def __init__(self, records: Iterable[FileRecord] = ()) -> None:
        self._records: Tuple[FileRecord, ...] = tuple(records)

    def list_files(self) -> Tuple[FileRecord, ...]:
        """Return every record in registry order."""
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[FileRecord]:
        return iter(self._records)

    @classmethod
    def scan(
        cls,
        root: Path,
        *,
        recursive: bool = False,
        include_hidden: bool = False,
    ) -> "FileRegistry":
        """Build a registry from the files found under ``root``.

        Args:
            root: Directory to scan.
            recursive: Whether to descend into subdirectories.
            include_hidden: Whether dot-files and dot-directories are included.

        Returns:
            FileRegistry: Registry ordered by relative path.
        """
        scanner = DirectoryScanner(recursive=recursive, include_hidden=include_hidden)
        return cls(scanner.scan(root))

    @classmethod
    def from_manifest(cls, path: Path) -> "FileRegistry":
        """Load records from a JSON or YAML manifest.

        The manifest is either a list of records or a mapping with a ``files`` list.

        Args:
            path: Manifest file location.

        Returns:
            FileRegistry: Registry in manifest order.

        Raises:
            RegistryError: If the manifest cannot be read or validated.
        """
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise RegistryError(f"Unable to read manifest {path}: {exc}") from exc

        try:
            if path.suffix.lower() == ".json":
                raw: Any = json.loads(text)
            else:
                raw = yaml.safe_load(text)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise RegistryError(f"Invalid manifest {path}: {exc}") from exc

        if isinstance(raw, dict):
            raw = raw.get("files")
        if not isinstance(raw, list):
            raise RegistryError(f"Manifest {path} must contain a list of files.")

        try:
            return cls(FileRecord.model_validate(entry) for entry in raw)
        except ValidationError as exc:
            raise RegistryError(f"Invalid file record in {path}: {exc}") from exc


__all__ = [
    "DirectoryScanner",
    "FileKind",
    "FileRecord",
    "FileRegistry",
    "RegistryError",
    "detect_kind",
]
