"""Staleness evaluator — decides whether a document is due for review.

Pure computation. A document is stale when it has no review date or when
more than the freshness window has elapsed since it. Exactly one window
elapsed is still fresh.

Calendar dates are treated as midnight UTC and naive datetimes as UTC, so
the boundary is deterministic regardless of the host timezone. No DST or
leap-second handling beyond that.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union

DEFAULT_WINDOW = timedelta(days=30)

DateLike = Union[date, datetime]


def _as_utc(value: DateLike) -> datetime:
    """Normalise a date or datetime to an aware UTC datetime."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


def is_stale(
    review_date: Optional[DateLike],
    now: DateLike,
    window: timedelta = DEFAULT_WINDOW,
) -> bool:
    """Return True if a review is due."""
    if review_date is None:
        return True
    return _as_utc(now) - _as_utc(review_date) > window


class StalenessEvaluator:
    """Applies a fixed freshness window.

    Usage:
        evaluator = StalenessEvaluator(timedelta(days=30))
        if evaluator.is_stale(review_date, today):
            ...
    """

    def __init__(self, window: timedelta = DEFAULT_WINDOW) -> None:
        if window < timedelta(0):
            raise ValueError(f"Freshness window must be non-negative, got {window}")
        self._window = window

    @property
    def window(self) -> timedelta:
        return self._window

    def is_stale(self, review_date: Optional[DateLike], now: DateLike) -> bool:
        return is_stale(review_date, now, self._window)
