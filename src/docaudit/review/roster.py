"""Assignee pool — the configured reviewers a document can be assigned to.

The pool is supplied externally, usually as a comma-separated
``TEAM_MEMBERS`` value. Identifiers are canonicalised by stripping
whitespace; blank entries are dropped. Order is preserved and duplicates
are kept, so a reviewer listed twice is twice as likely to be chosen.
"""

from __future__ import annotations

from typing import Iterable


class AssigneePool:
    """Ordered list of reviewer identifiers.

    An empty pool is valid to construct; it only becomes an error when an
    assignment is actually needed (see ``choose_assignee``).
    """

    def __init__(self, members: Iterable[str] = ()) -> None:
        self._members: list[str] = [
            m.strip() for m in members if m is not None and m.strip()
        ]

    @classmethod
    def from_csv(cls, value: str | None) -> AssigneePool:
        """Parse a comma-separated member list such as ``" a, b ,,c"``."""
        if not value:
            return cls()
        return cls(value.split(","))

    def members(self) -> list[str]:
        return list(self._members)

    @property
    def count(self) -> int:
        return len(self._members)

    def __bool__(self) -> bool:
        return bool(self._members)
