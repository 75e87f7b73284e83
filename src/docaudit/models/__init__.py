"""Data models — metadata variants, rotation state, decisions, findings."""

from docaudit.models.document import (
    MetadataFormat,
    MetadataKind,
    OpenProposal,
    ParsedMetadata,
    Problem,
    ProblemKind,
    ProposalRequest,
    ReviewDecision,
    RotationState,
    Selection,
    VerificationResult,
)

__all__ = [
    "MetadataFormat",
    "MetadataKind",
    "OpenProposal",
    "ParsedMetadata",
    "Problem",
    "ProblemKind",
    "ProposalRequest",
    "ReviewDecision",
    "RotationState",
    "Selection",
    "VerificationResult",
]
