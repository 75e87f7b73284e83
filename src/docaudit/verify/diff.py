"""Modified-document source backed by ``git diff``.

Lists documents changed on the current branch relative to the base branch
(three-dot diff against ``origin/<base>``). If git fails, the error is
logged and no documents are reported.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class GitDiffSource:
    """Lists modified documents under ``docs_prefix`` with ``extension``."""

    def __init__(
        self,
        base_branch: str = "main",
        repo_root: Optional[Path] = None,
        docs_prefix: str = "docs/",
        extension: str = ".md",
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ) -> None:
        self._base = base_branch
        self._repo_root = repo_root
        self._prefix = docs_prefix if docs_prefix.endswith("/") else docs_prefix + "/"
        self._extension = extension
        self._runner = runner

    def modified_documents(self) -> list[str]:
        try:
            self._git("fetch", "origin", self._base)
            output = self._git("diff", "--name-only", f"origin/{self._base}...HEAD")
        except (OSError, subprocess.SubprocessError) as exc:
            logger.error("Error getting modified files: %s", exc)
            return []

        return [
            line.strip() for line in output.splitlines()
            if line.strip().startswith(self._prefix)
            and line.strip().endswith(self._extension)
        ]

    def _git(self, *args: str) -> str:
        result = self._runner(
            ["git", *args],
            capture_output=True,
            text=True,
            check=True,
            cwd=self._repo_root,
        )
        return result.stdout
