"""
Progress Analytics Services

Pure, synchronous computations over a sparse day log.

Modules:
- date_range: ISO date sequences and named range presets
- projector: sparse log → dense DayRecord sequence
- aggregation: summary statistics and subject/topic rollups
- streaks: consecutive-day streak detection
- service: one-call pipeline producing an AnalyticsReport

Usage:
    from nitya.services.analytics import AnalyticsService, resolve_preset
"""

from nitya.services.analytics.aggregation import (
    calculate_subject_stats,
    calculate_summary,
    calculate_topic_stats,
)
from nitya.services.analytics.date_range import (
    get_dates_in_range,
    get_day_name,
    list_presets,
    resolve_preset,
)
from nitya.services.analytics.projector import project_day_records
from nitya.services.analytics.service import AnalyticsService
from nitya.services.analytics.streaks import (
    build_streak_report,
    calculate_current_streak,
    detect_streaks,
)

__all__ = [
    "AnalyticsService",
    "build_streak_report",
    "calculate_current_streak",
    "calculate_subject_stats",
    "calculate_summary",
    "calculate_topic_stats",
    "detect_streaks",
    "get_dates_in_range",
    "get_day_name",
    "list_presets",
    "project_day_records",
    "resolve_preset",
]
