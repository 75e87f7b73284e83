"""Proposals module — platform capability, gh CLI backend, duplicate guard."""

from docaudit.proposals.gh_cli import GhCliPlatform
from docaudit.proposals.guard import DuplicateGuard
from docaudit.proposals.platform import ProposalPlatform

__all__ = ["DuplicateGuard", "GhCliPlatform", "ProposalPlatform"]
