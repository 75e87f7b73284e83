"""Tests for the staleness evaluator — proves the 30-day boundary is exact."""

import pytest
from datetime import date, datetime, timedelta, timezone

from docaudit.staleness.engine import DEFAULT_WINDOW, StalenessEvaluator, is_stale


NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


class TestIsStale:
    def test_missing_date_is_stale(self) -> None:
        assert is_stale(None, NOW)
        assert is_stale(None, date(2000, 1, 1))

    def test_today_is_fresh(self) -> None:
        assert not is_stale(NOW, NOW)
        assert not is_stale(date(2025, 6, 1), date(2025, 6, 1))

    def test_within_window_is_fresh(self) -> None:
        assert not is_stale(NOW - timedelta(days=15), NOW)

    def test_exactly_thirty_days_is_fresh(self) -> None:
        assert not is_stale(NOW - timedelta(days=30), NOW)

    def test_thirty_days_and_one_millisecond_is_stale(self) -> None:
        assert is_stale(NOW - timedelta(days=30, milliseconds=1), NOW)

    def test_calendar_dates(self) -> None:
        today = date(2025, 6, 1)
        assert not is_stale(date(2025, 5, 2), today)  # 30 days
        assert is_stale(date(2025, 5, 1), today)      # 31 days

    def test_date_treated_as_midnight_utc(self) -> None:
        just_after = datetime(2025, 6, 1, 0, 0, 0, 1000, tzinfo=timezone.utc)
        assert is_stale(date(2025, 5, 2), just_after)

    def test_naive_datetime_treated_as_utc(self) -> None:
        naive_now = datetime(2025, 6, 1, 12, 0)
        assert not is_stale(naive_now - timedelta(days=30), NOW)

    def test_future_date_is_fresh(self) -> None:
        assert not is_stale(date(2025, 7, 1), date(2025, 6, 1))

    def test_default_window(self) -> None:
        assert DEFAULT_WINDOW == timedelta(days=30)


class TestStalenessEvaluator:
    def test_custom_window(self) -> None:
        evaluator = StalenessEvaluator(timedelta(days=7))
        assert evaluator.is_stale(date(2025, 5, 24), date(2025, 6, 1))
        assert not evaluator.is_stale(date(2025, 5, 25), date(2025, 6, 1))

    def test_negative_window_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            StalenessEvaluator(timedelta(days=-1))

    def test_window_exposed(self) -> None:
        assert StalenessEvaluator().window == DEFAULT_WINDOW
