"""State persistence helpers for Categorium."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from .errors import MissingStateError, StateError
from .models import CategoryState

DEFAULT_STATE_DIRNAME = ".categorium"
STATE_FILENAME = "categories.json"
LOG_FILENAME = "categorium.log"


class StateRepository:
    """Manage the persistence of a collection's categories."""

    def __init__(self, base_dirname: str = DEFAULT_STATE_DIRNAME) -> None:
        """Initialize the repository with an optional base directory name.

        Args:
            base_dirname: Name of the directory that stores collection state.
        """
        self._base_dirname = base_dirname

    @property
    def base_dirname(self) -> str:
        """Return the directory name used for collection metadata."""
        return self._base_dirname

    def load(self, root: Path) -> CategoryState:
        """Load category state for the given root.

        Args:
            root: Root path of the collection.

        Returns:
            CategoryState: Deserialized state for the collection.

        Raises:
            MissingStateError: If no state file is present.
            StateError: If stored data cannot be parsed.
        """
        state_path = self.state_path(root)
        if not state_path.exists():
            raise MissingStateError(f"No category state found at {state_path}")

        try:
            data = json.loads(state_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise StateError(f"Invalid category state data: {exc}") from exc

        try:
            return CategoryState.model_validate(data)
        except ValidationError as exc:
            raise StateError(f"Invalid category state data: {exc}") from exc

    def load_or_create(self, root: Path) -> CategoryState:
        """Load state for ``root``, returning an empty state when none exists."""
        try:
            return self.load(root)
        except MissingStateError:
            return CategoryState(root=str(root))

    def save(self, root: Path, state: CategoryState) -> None:
        """Persist category state for the given root.

        Args:
            root: Root path of the collection.
            state: State model to serialize to disk.
        """
        self.initialize(root)
        state.updated_at = datetime.now(timezone.utc)
        if state.created_at.tzinfo is None:
            state.created_at = state.created_at.replace(tzinfo=timezone.utc)
        payload = state.model_dump(mode="json")
        self.state_path(root).write_text(
            json.dumps(payload, indent=2, sort_keys=False), encoding="utf-8"
        )

    def initialize(self, root: Path) -> Path:
        """Create the state directory for a collection and return it."""
        directory = self.state_dir(root)
        directory.mkdir(parents=True, exist_ok=True)
        return directory

    def state_dir(self, root: Path) -> Path:
        """Return the path to the state directory for a collection."""
        return root / self._base_dirname

    def state_path(self, root: Path) -> Path:
        """Return the path of the categories file for a collection."""
        return self.state_dir(root) / STATE_FILENAME

    def log_path(self, root: Path) -> Path:
        """Return the path of the log file for a collection."""
        return self.state_dir(root) / LOG_FILENAME


__all__ = [
    "StateRepository",
    "DEFAULT_STATE_DIRNAME",
    "STATE_FILENAME",
    "LOG_FILENAME",
    "CategoryState",
    "StateError",
    "MissingStateError",
]
