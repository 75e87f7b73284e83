"""Duplicate guard — skips documents that already have an open proposal.

Fails open: if the platform query fails, the failure is logged and the
document is treated as having no open proposal, so a broken platform
never stalls the rotation.
"""

from __future__ import annotations

import logging

from docaudit.errors import ProposalPlatformError
from docaudit.proposals.platform import ProposalPlatform

logger = logging.getLogger(__name__)


class DuplicateGuard:
    """Answers "is this document already covered by an open proposal?"."""

    def __init__(self, platform: ProposalPlatform) -> None:
        self._platform = platform

    def has_open_proposal(self, path: str) -> bool:
        try:
            proposals = self._platform.query_open_proposals()
        except ProposalPlatformError as exc:
            logger.error("Error checking for existing proposals: %s", exc)
            return False
        except Exception:
            logger.exception("Unexpected error checking for existing proposals")
            return False

        for proposal in proposals:
            if path in proposal.files:
                logger.info(
                    "Found existing proposal #%d that includes %s",
                    proposal.number, path,
                )
                return True
        return False
