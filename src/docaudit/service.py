"""Rotation service — drives one auditor run.

One run walks the sorted document list in round-robin order, starting
after the persisted cursor, and stops at the first stale document that has
no open proposal. That document's metadata is rewritten to today, a
reviewer is drawn from the pool, and a decision record is returned for the
proposal collaborator to act on. At most one document is acted on per run.

Run states:
  Start     -> list documents, load cursor
  Scanning  -> at most one pass over the list; fresh or already-proposed
               documents advance the cursor and are skipped
  Found     -> rewrite, persist, assign, emit needs_review=true
  Exhausted -> persist cursor, emit needs_review=false

The cursor is saved after every advance, so a run that dies mid-scan
resumes from the last document it finished checking.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any, Optional

from docaudit.errors import NoDocumentsError, ProposalPlatformError
from docaudit.metadata.codec import format_date, read_review_date, write
from docaudit.models.document import (
    ProposalRequest,
    ReviewDecision,
    RotationState,
    Selection,
)
from docaudit.persistence.document_store import DocumentStore
from docaudit.persistence.state_store import CursorStateStore
from docaudit.policy.resolver import AuditorConfig
from docaudit.proposals.guard import DuplicateGuard
from docaudit.proposals.platform import ProposalPlatform
from docaudit.review.selector import choose_assignee
from docaudit.rotation.cursor import select_next
from docaudit.staleness.engine import StalenessEvaluator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceResult:
    """Result of a service operation."""
    success: bool
    errors: list[str] = field(default_factory=list)
    data: dict[str, Any] = field(default_factory=dict)


class RotationService:
    """Round-robin freshness audit over a document directory.

    Usage:
        config = AuditorConfig.from_policy(resolver, repo_root)
        service = RotationService(
            config,
            documents=FileDocumentStore(config.docs_dir, config.repo_root),
            state_store=CursorStateStore(config.state_path),
            platform=GhCliPlatform(),
        )
        decision = service.run()

    Without a platform the duplicate check is skipped and every stale
    document is eligible.
    """

    def __init__(
        self,
        config: AuditorConfig,
        documents: DocumentStore,
        state_store: CursorStateStore,
        platform: Optional[ProposalPlatform] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._config = config
        self._documents = documents
        self._state_store = state_store
        self._platform = platform
        self._guard = DuplicateGuard(platform) if platform is not None else None
        self._evaluator = StalenessEvaluator(config.freshness_window)
        self._rng = rng or random.Random()

    # ------------------------------------------------------------------
    # Rotation
    # ------------------------------------------------------------------

    def run(self) -> ReviewDecision:
        """Execute one rotation run and return its decision.

        Raises DocumentListingError, DocumentReadError, DocumentWriteError
        or NoAssigneesError on fatal conditions. Cursor advances saved
        before the failure are kept.
        """
        try:
            files = self._documents.list_documents()
        except NoDocumentsError as exc:
            logger.info("%s; nothing to review", exc)
            return ReviewDecision(needs_review=False)

        logger.info("Found %d document(s): %s", len(files), ", ".join(files))

        state = self._state_store.load()
        logger.info("Last processed index: %d", state.last_index)

        today = self._config.current_date()

        for _ in range(len(files)):
            selection = select_next(files, state.last_index)
            if selection is None:
                break

            content = self._documents.read(selection.file)
            review_date = read_review_date(content, self._config.reviewed_key)
            logger.info(
                "Checking %s (index %d): review date %s",
                selection.file,
                selection.index,
                format_date(review_date) if review_date else "not found",
            )

            if not self._evaluator.is_stale(review_date, today):
                logger.info("%s is up to date, moving on", selection.file)
                self._advance(state, selection.index)
                continue

            file_path = self._documents.relative_path(selection.file)
            if self._guard is not None and self._guard.has_open_proposal(file_path):
                logger.info("Skipping %s: open proposal already exists", file_path)
                self._advance(state, selection.index)
                continue

            return self._mark_for_review(selection, content, file_path, state)

        logger.info("All documents are up to date, no review needed")
        self._state_store.save(state)
        logger.info("Cursor left at lastIndex=%d", state.last_index)
        return ReviewDecision(needs_review=False)

    def _advance(self, state: RotationState, index: int) -> None:
        state.last_index = index
        self._state_store.save(state)

    def _mark_for_review(
        self,
        selection: Selection,
        content: str,
        file_path: str,
        state: RotationState,
    ) -> ReviewDecision:
        """Rewrite a stale document and assign it.

        The assignee is drawn before the file is touched, so an empty pool
        aborts the run without leaving a rewritten document behind.
        """
        logger.info("%s needs review", file_path)
        assignee = choose_assignee(self._config.assignees, self._rng)

        today = self._config.current_date()
        updated = write(
            content,
            today,
            target_format=self._config.target_format,
            key=self._config.reviewed_key,
        )
        self._documents.write(selection.file, updated)
        logger.info("Updated review date of %s to %s", file_path, format_date(today))
        logger.info("Selected assignee: %s", assignee)

        self._advance(state, selection.index)
        logger.info("Cursor saved at lastIndex=%d", selection.index)

        return ReviewDecision(
            needs_review=True,
            file_path=file_path,
            assignee=assignee,
        )

    # ------------------------------------------------------------------
    # Proposals
    # ------------------------------------------------------------------

    def build_proposal(
        self,
        decision: ReviewDecision,
        head_branch: Optional[str] = None,
    ) -> ProposalRequest:
        """Compose the change proposal for a positive decision."""
        if not decision.needs_review or not decision.file_path or not decision.assignee:
            raise ValueError("Decision does not call for a review proposal")

        today = format_date(self._config.current_date())
        if head_branch is None:
            stem = PurePosixPath(decision.file_path).stem
            head_branch = f"{self._config.branch_prefix}{stem}-{today}"

        body = (
            f"Scheduled review of `{decision.file_path}`.\n\n"
            f"The review date was older than {self._config.freshness_window.days} days "
            f"(or missing) and has been set to {today}.\n\n"
            f"@{decision.assignee}: please read the document, fix anything out of "
            f"date, and merge when it is accurate."
        )
        return ProposalRequest(
            title=self._config.title_template.format(file_path=decision.file_path),
            body=body,
            head_branch=head_branch,
            base_branch=self._config.base_branch,
            assignee=decision.assignee,
            labels=list(self._config.labels),
        )

    def open_proposal(
        self,
        decision: ReviewDecision,
        head_branch: Optional[str] = None,
    ) -> ServiceResult:
        """Open the change proposal for a decision on the platform."""
        if self._platform is None:
            return ServiceResult(success=False, errors=["No proposal platform configured"])
        try:
            request = self.build_proposal(decision, head_branch)
        except ValueError as exc:
            return ServiceResult(success=False, errors=[str(exc)])
        try:
            url = self._platform.create_proposal(request)
        except ProposalPlatformError as exc:
            logger.error("Failed to open proposal for %s: %s", decision.file_path, exc)
            return ServiceResult(success=False, errors=[str(exc)])
        return ServiceResult(
            success=True,
            data={"url": url, "head_branch": request.head_branch},
        )
