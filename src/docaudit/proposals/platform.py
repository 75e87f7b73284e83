"""Change-proposal platform capability.

The rotation engine depends only on this narrow interface. Any platform
that can list open proposals with their files and open a new one can back
it; the ``gh`` CLI implementation lives in ``docaudit.proposals.gh_cli``.
"""

from __future__ import annotations

from typing import Protocol

from docaudit.models.document import OpenProposal, ProposalRequest


class ProposalPlatform(Protocol):
    """Capability interface for the change-proposal platform.

    Implementations raise ProposalPlatformError when a call fails.
    """

    def query_open_proposals(self) -> list[OpenProposal]:
        ...

    def create_proposal(self, request: ProposalRequest) -> str:
        """Open a proposal and return its URL or identifier."""
        ...
