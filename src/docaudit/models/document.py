"""Document metadata, rotation state, decision, and verification models.

Every value crossing a component boundary is one of these types. The
orchestrator sees only the unified ParsedMetadata shape; which of the two
on-disk formats produced it is recorded in ``kind`` for the codec's use.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class MetadataKind(str, enum.Enum):
    """Which metadata representation a document carries."""
    BLOCK = "block"
    MARKER = "marker"
    NONE = "none"


class MetadataFormat(str, enum.Enum):
    """Format emitted when a document has no metadata yet."""
    BLOCK = "block"
    MARKER = "marker"


class ProblemKind(str, enum.Enum):
    """Reasons the verifier rejects a modified document."""
    MISSING_FRONT_MATTER = "MissingFrontMatter"
    MISSING_REVIEWED_AT = "MissingReviewedAt"
    STALE_OR_MISMATCHED_DATE = "StaleOrMismatchedDate"


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ParsedMetadata:
    """Result of parsing a document's leading metadata.

    ``fields`` preserves the block's key order. ``block_lines`` holds the
    raw lines between the delimiters so a rewrite can keep them verbatim.
    ``marker_date`` is the raw date literal of a legacy marker line.
    """
    kind: MetadataKind
    fields: dict[str, str] = field(default_factory=dict)
    body: str = ""
    block_lines: tuple[str, ...] = ()
    marker_date: Optional[str] = None

    @property
    def present(self) -> bool:
        return self.kind != MetadataKind.NONE


@dataclass
class RotationState:
    """Persisted round-robin cursor. -1 means nothing processed yet."""
    last_index: int = -1


@dataclass(frozen=True)
class Selection:
    """A rotation candidate: file name and its index in the sorted list."""
    file: str
    index: int


@dataclass(frozen=True)
class ReviewDecision:
    """Outcome of one rotation run, consumed by the proposal collaborator."""
    needs_review: bool
    file_path: Optional[str] = None
    assignee: Optional[str] = None

    def to_outputs(self) -> dict[str, str]:
        """Render as step outputs. Booleans become lowercase strings."""
        outputs = {"needs_review": "true" if self.needs_review else "false"}
        if self.needs_review:
            outputs["file_path"] = self.file_path or ""
            outputs["assignee"] = self.assignee or ""
        return outputs


@dataclass(frozen=True)
class ProposalRequest:
    """Everything the platform needs to open a change proposal."""
    title: str
    body: str
    head_branch: str
    base_branch: str
    assignee: str
    labels: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class OpenProposal:
    """An open change proposal and the files it touches."""
    number: int
    files: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Problem:
    """A single verifier finding for one document."""
    path: str
    kind: ProblemKind
    detail: str = ""


@dataclass(frozen=True)
class VerificationResult:
    """Result of checking a set of modified documents."""
    problems: list[Problem]
    checked: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return len(self.problems) == 0

