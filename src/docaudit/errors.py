"""Exception taxonomy for the auditor.

Recoverable conditions (empty document set) are raised and handled inside
the service. Configuration and I/O errors propagate to the entry point,
which maps them to a non-zero exit status.
"""

from __future__ import annotations


class DocAuditError(Exception):
    """Base class for all auditor errors."""


class NoDocumentsError(DocAuditError):
    """The document directory contains no candidate documents."""


class NoAssigneesError(DocAuditError):
    """The assignee pool is empty after trimming blank entries."""


class DocumentListingError(DocAuditError):
    """The document directory could not be listed."""


class DocumentReadError(DocAuditError):
    """A candidate document could not be read."""


class DocumentWriteError(DocAuditError):
    """A rewritten document could not be saved."""


class ProposalPlatformError(DocAuditError):
    """A call to the change-proposal platform failed."""


class PolicyError(DocAuditError):
    """The policy file is missing, malformed, or incomplete."""
