"""Verify module — review-date gate for modified documents."""

from docaudit.verify.checker import ReviewDateVerifier
from docaudit.verify.diff import GitDiffSource

__all__ = ["GitDiffSource", "ReviewDateVerifier"]
