"""
Progress Analytics Service

Runs the full analytics pipeline for one goal's log:

    sparse log + date range → DayRecord[] → {summary, rollups, streaks}

The service holds nothing but the success criterion. Every call recomputes
from its arguments, and "today" is always passed in, so identical inputs
give identical (equal) reports.

Usage:
    from nitya.services.analytics import AnalyticsService
    from nitya.models.criteria import HoursCriterion

    service = AnalyticsService(HoursCriterion(max_hours_per_day=8))
    report = service.build_report_for_preset(log, "lastweek", today="2024-01-10")
    report.summary.completion_rate
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from nitya.models.analytics import AnalyticsReport, DateRange, DayRecord
from nitya.models.criteria import BaseCriterion, ProductivityCriterion, parse_criterion
from nitya.services.analytics.aggregation import (
    calculate_subject_stats,
    calculate_summary,
    calculate_topic_stats,
)
from nitya.services.analytics.date_range import (
    DateLike,
    get_dates_in_range,
    resolve_preset,
)
from nitya.services.analytics.projector import project_day_records
from nitya.services.analytics.streaks import build_streak_report

logger = logging.getLogger(__name__)


class AnalyticsService:
    """
    Service computing progress analytics for a sparse day log.

    Stateless apart from the success criterion it measures against.
    """

    def __init__(self, criterion: Optional[Any] = None):
        """
        Initialize the analytics service.

        Args:
            criterion: Success criterion instance or its stored form
                (e.g. {"type": "hours", "maxHours": 8}). Defaults to productivity.
        """
        self.criterion: BaseCriterion = (
            parse_criterion(criterion) if criterion is not None else ProductivityCriterion()
        )

    def get_day_records(
        self, log: Optional[Mapping[str, Any]], start_date: DateLike, end_date: DateLike
    ) -> list[DayRecord]:
        """Project the log onto every day from start_date to end_date (inclusive)."""
        return project_day_records(get_dates_in_range(start_date, end_date), log)

    def build_report(
        self, log: Optional[Mapping[str, Any]], date_range: DateRange
    ) -> AnalyticsReport:
        """
        Build the full analytics report for a date range.

        Args:
            log: Sparse mapping of ISO date to raw day entry.
            date_range: Inclusive range to analyze.

        Returns:
            AnalyticsReport with summary, subject/topic rollups and streaks.
            An inverted or invalid range yields an empty, zeroed report.
        """
        records = self.get_day_records(log, date_range.start_date, date_range.end_date)
        streak_report = build_streak_report(records, self.criterion)

        logger.debug(
            f"Building report for {date_range.label or 'range'} "
            f"{date_range.start_date}..{date_range.end_date} ({len(records)} days)"
        )

        return AnalyticsReport(
            date_range=date_range,
            criterion=self.criterion,
            summary=calculate_summary(records, self.criterion, streak_report),
            subject_stats=calculate_subject_stats(records),
            topic_stats=calculate_topic_stats(records),
            streaks=streak_report.streaks,
            streak_report=streak_report,
        )

    def build_report_for_preset(
        self, log: Optional[Mapping[str, Any]], preset_id: Optional[str], today: DateLike
    ) -> AnalyticsReport:
        """
        Build the report for a named preset such as "lastweek".

        Args:
            log: Sparse mapping of ISO date to raw day entry.
            preset_id: Range preset identifier, or None for the default preset.
            today: Reference date the preset ends on.
        """
        return self.build_report(log, resolve_preset(preset_id, today))
