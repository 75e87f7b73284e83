"""Review module — assignee pool and random assignee selection."""

from docaudit.review.roster import AssigneePool
from docaudit.review.selector import choose_assignee

__all__ = ["AssigneePool", "choose_assignee"]
