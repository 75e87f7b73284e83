"""Review-date verifier — gate for change proposals that touch documents.

Every modified document must carry a front-matter block whose review date
is exactly today's ``yyyy-mm-dd`` literal. The comparison is on the string,
not on calendar distance, so a date one day old fails just like one a year
old. Deleted documents are skipped.

Only the front-matter block counts here: a document still on the legacy
marker line is reported as missing front matter, which is what moves it
to the authoritative format.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Iterable

from docaudit.errors import DocumentReadError
from docaudit.metadata.codec import REVIEWED_KEY, format_date, parse
from docaudit.models.document import (
    MetadataKind,
    Problem,
    ProblemKind,
    VerificationResult,
)

logger = logging.getLogger(__name__)


class ReviewDateVerifier:
    """Checks modified documents for a review date bumped to today.

    Usage:
        verifier = ReviewDateVerifier(repo_root)
        result = verifier.check_all(["docs/setup.md"], date.today())
        if not result.ok:
            for problem in result.problems:
                print(problem.path, problem.kind.value, problem.detail)
    """

    def __init__(self, repo_root: Path, reviewed_key: str = REVIEWED_KEY) -> None:
        self._repo_root = repo_root
        self._key = reviewed_key

    def check_all(self, modified_paths: Iterable[str], today: date) -> VerificationResult:
        expected = format_date(today)
        problems: list[Problem] = []
        checked: list[str] = []
        skipped: list[str] = []

        for path in modified_paths:
            full_path = self._repo_root / path
            if not full_path.exists():
                logger.info("%s was deleted, skipping", path)
                skipped.append(path)
                continue

            checked.append(path)
            problem = self._check_one(path, full_path, expected)
            if problem is not None:
                problems.append(problem)

        return VerificationResult(problems=problems, checked=checked, skipped=skipped)

    def _check_one(self, path: str, full_path: Path, expected: str) -> Problem | None:
        try:
            content = full_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentReadError(f"Cannot read {path}: {exc}") from exc

        parsed = parse(content)
        if parsed.kind != MetadataKind.BLOCK:
            return Problem(
                path=path,
                kind=ProblemKind.MISSING_FRONT_MATTER,
                detail=(
                    f"Missing front matter. Please add front matter with "
                    f"{self._key}: {expected}"
                ),
            )

        actual = parsed.fields.get(self._key)
        if not actual:
            return Problem(
                path=path,
                kind=ProblemKind.MISSING_REVIEWED_AT,
                detail=(
                    f"Missing {self._key} field in front matter. "
                    f"Please add {self._key}: {expected}"
                ),
            )

        if actual != expected:
            return Problem(
                path=path,
                kind=ProblemKind.STALE_OR_MISMATCHED_DATE,
                detail=f"{self._key} is {actual}, but should be {expected}",
            )

        return None
