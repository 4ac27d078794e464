"""
Unit tests for streak detection.

Tests the linear streak scan, ranking of streaks, the current streak at the
end of a range and milestone tracking.
"""

from datetime import date
from unittest.mock import patch

import pytest

from nitya.models.analytics import Streak
from nitya.models.criteria import HoursCriterion, ProductivityCriterion
from nitya.services.analytics.streaks import (
    build_streak_report,
    calculate_current_streak,
    detect_streaks,
    get_milestones,
)


@pytest.fixture
def criterion():
    return ProductivityCriterion()


class TestDetectStreaks:
    """Tests for detect_streaks."""

    def test_sample_pattern(self, make_days, criterion):
        """8, 5, gap, 2 → a two-day streak then a one-day streak."""
        streaks = detect_streaks(make_days("2024-01-01", [8, 5, None, 2]), criterion)

        assert streaks == [
            Streak(length=2, start_date=date(2024, 1, 1), end_date=date(2024, 1, 2)),
            Streak(length=1, start_date=date(2024, 1, 4), end_date=date(2024, 1, 4)),
        ]

    def test_no_tracked_days(self, make_days, criterion):
        assert detect_streaks(make_days("2024-01-01", [None, None]), criterion) == []

    def test_empty_sequence(self, criterion):
        assert detect_streaks([], criterion) == []

    def test_whole_range_tracked(self, make_days, criterion):
        streaks = detect_streaks(make_days("2024-01-30", [5, 5, 5, 5]), criterion)

        assert len(streaks) == 1
        assert streaks[0].length == 4
        assert streaks[0].start_date == date(2024, 1, 30)
        assert streaks[0].end_date == date(2024, 2, 2)

    def test_ranked_longest_first_ties_in_order(self, make_days, criterion):
        records = make_days("2024-01-01", [1, None, 5, 5, None, 7, 7, None, 3, 3, 3])
        streaks = detect_streaks(records, criterion)

        assert [s.length for s in streaks] == [3, 2, 2, 1]
        assert [s.start_date.day for s in streaks] == [9, 3, 6, 1]

    def test_hours_criterion(self, make_day):
        records = [
            make_day("2024-01-01", score=9),
            make_day("2024-01-02", direct_hours=2),
            make_day("2024-01-03", assignments=[("Math", [], 1)]),
        ]
        streaks = detect_streaks(records, HoursCriterion(max_hours_per_day=8))

        assert streaks == [Streak(length=2, start_date=date(2024, 1, 2), end_date=date(2024, 1, 3))]

    def test_lengths_bounded_by_tracked_days(self, make_days, criterion):
        records = make_days("2024-01-01", [3, None, 4, 4, None, None, 9, 1, 2, None])
        tracked = sum(1 for r in records if criterion.is_tracked(r))

        assert sum(s.length for s in detect_streaks(records, criterion)) <= tracked


class TestCurrentStreak:
    """Tests for calculate_current_streak."""

    def test_ends_on_last_day(self, make_days, criterion):
        assert calculate_current_streak(make_days("2024-01-01", [8, 5, None, 2]), criterion) == 1

    def test_trailing_untracked_days_skipped(self, make_days, criterion):
        """Today and yesterday not logged yet: the run before still counts."""
        records = make_days("2024-01-01", [4, None, 6, 6, 6, None, None])
        assert calculate_current_streak(records, criterion) == 3

    def test_nothing_tracked(self, make_days, criterion):
        assert calculate_current_streak(make_days("2024-01-01", [None, None]), criterion) == 0

    def test_never_longer_than_longest(self, make_days, criterion):
        records = make_days("2024-01-01", [5, 5, 5, None, 5, 5])
        report = build_streak_report(records, criterion)

        assert report.current_streak == 2
        assert report.longest.length >= report.current_streak


class TestMilestones:
    """Tests for streak milestones."""

    @patch("nitya.services.analytics.streaks.settings")
    def test_reached_and_next(self, mock_settings):
        mock_settings.STREAK_MILESTONES = [30, 3, 7]

        assert get_milestones(longest=8, current=2) == ([3, 7], 3)
        assert get_milestones(longest=8, current=7) == ([3, 7], 30)

    @patch("nitya.services.analytics.streaks.settings")
    def test_all_passed(self, mock_settings):
        mock_settings.STREAK_MILESTONES = [3, 7]

        assert get_milestones(longest=10, current=10) == ([3, 7], None)


class TestStreakReport:
    """Tests for build_streak_report."""

    def test_longest_and_second_longest(self, make_days, criterion):
        records = make_days("2024-01-01", [5, None, 5, 5, 5, None, 5, 5])
        report = build_streak_report(records, criterion)

        assert report.longest.length == 3
        assert report.second_longest.length == 2
        assert report.second_longest.start_date == date(2024, 1, 7)
        assert report.current_streak == 2
        assert len(report.streaks) == 3

    def test_empty(self, criterion):
        report = build_streak_report([], criterion)

        assert report.streaks == []
        assert report.longest is None
        assert report.second_longest is None
        assert report.current_streak == 0
        assert report.milestones_reached == []
