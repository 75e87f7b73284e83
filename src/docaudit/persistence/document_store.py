"""Document store — directory listing and document read/write.

Lists the top-level documents of one directory, sorted by name so the
rotation order is stable. Listing, read and write failures are fatal: they
mean the environment is broken and there is no safe fallback.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol

from docaudit.errors import (
    DocumentListingError,
    DocumentReadError,
    DocumentWriteError,
    NoDocumentsError,
)

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    """Where the rotation reads and writes documents."""

    def list_documents(self) -> list[str]:
        ...

    def read(self, name: str) -> str:
        ...

    def write(self, name: str, content: str) -> None:
        ...

    def relative_path(self, name: str) -> str:
        ...


class FileDocumentStore:
    """Documents stored as files in a single directory.

    Paths reported to the proposal platform are relative to ``repo_root``
    and use forward slashes, e.g. ``docs/setup.md``.
    """

    def __init__(
        self,
        docs_dir: Path,
        repo_root: Path,
        extension: str = ".md",
    ) -> None:
        self._docs_dir = docs_dir
        self._repo_root = repo_root
        self._extension = extension

    @property
    def docs_dir(self) -> Path:
        return self._docs_dir

    def list_documents(self) -> list[str]:
        """Return sorted document file names.

        Raises NoDocumentsError if the directory holds no documents and
        DocumentListingError if it cannot be listed.
        """
        try:
            names = sorted(
                entry.name for entry in self._docs_dir.iterdir()
                if entry.is_file() and entry.name.endswith(self._extension)
            )
        except OSError as exc:
            raise DocumentListingError(
                f"Cannot list documents in {self._docs_dir}: {exc}"
            ) from exc
        if not names:
            raise NoDocumentsError(
                f"No {self._extension} files found in {self._docs_dir}"
            )
        return names

    def read(self, name: str) -> str:
        """Return the document text with its line endings untouched."""
        try:
            with (self._docs_dir / name).open("r", encoding="utf-8", newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentReadError(f"Cannot read {name}: {exc}") from exc

    def write(self, name: str, content: str) -> None:
        try:
            with (self._docs_dir / name).open("w", encoding="utf-8", newline="") as f:
                f.write(content)
        except OSError as exc:
            raise DocumentWriteError(f"Cannot write {name}: {exc}") from exc

    def relative_path(self, name: str) -> str:
        """Path of ``name`` relative to the repository root.

        Symlinks are not resolved, so a docs directory linked from outside
        the repository still reports ``docs/<name>``.
        """
        path = Path(os.path.abspath(self._docs_dir / name))
        root = Path(os.path.abspath(self._repo_root))
        try:
            return path.relative_to(root).as_posix()
        except ValueError:
            logger.warning("%s is outside %s; using its absolute path", path, root)
            return path.as_posix()
