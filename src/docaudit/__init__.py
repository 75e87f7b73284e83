"""docaudit — scheduled documentation-freshness auditor.

Rotates through a documentation directory, rewrites review metadata on
stale documents, and verifies review dates at change-proposal time.
"""

__version__ = "0.1.0"
