"""State store — JSON persistence for the rotation cursor.

Stores a single record ``{"lastIndex": <int>}``. The record is always read
and written whole. A missing, unreadable, or malformed file is a fresh
start (``lastIndex = -1``), never an error.

Concurrent runs against the same file are not guarded; the last writer
wins.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from docaudit.models.document import RotationState

logger = logging.getLogger(__name__)

LAST_INDEX_KEY = "lastIndex"


class CursorStateStore:
    """JSON file-based cursor persistence.

    Usage:
        store = CursorStateStore(Path(".github/state/doc-review-state.json"))
        state = store.load()
        state.last_index = 3
        store.save(state)
    """

    def __init__(self, storage_path: Path) -> None:
        self._path = storage_path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> RotationState:
        """Read the cursor, defaulting to a fresh start on any failure."""
        if not self._path.exists():
            return RotationState()
        try:
            with self._path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Error loading state from %s: %s", self._path, exc)
            return RotationState()

        last_index = data.get(LAST_INDEX_KEY) if isinstance(data, dict) else None
        if not isinstance(last_index, int) or isinstance(last_index, bool):
            logger.warning(
                "Ignoring malformed state in %s: %r", self._path, data,
            )
            return RotationState()
        return RotationState(last_index=last_index)

    def save(self, state: RotationState) -> None:
        """Write the cursor record."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("w", encoding="utf-8") as f:
            json.dump({LAST_INDEX_KEY: state.last_index}, f, indent=2)
            f.write("\n")
