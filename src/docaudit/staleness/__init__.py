"""Staleness module — fixed-window review freshness."""

from docaudit.staleness.engine import DEFAULT_WINDOW, StalenessEvaluator, is_stale

__all__ = ["DEFAULT_WINDOW", "StalenessEvaluator", "is_stale"]
