"""Pydantic models for the analytics engine."""

from nitya.models.analytics import (
    AnalyticsReport,
    AnalyticsSummary,
    DateRange,
    DayRecord,
    RangePreset,
    Streak,
    StreakReport,
    SubjectAssignment,
    SubjectStat,
    TopicStat,
)
from nitya.models.criteria import (
    BaseCriterion,
    HoursCriterion,
    ProductivityCriterion,
    SuccessCriterion,
    parse_criterion,
)

__all__ = [
    "AnalyticsReport",
    "AnalyticsSummary",
    "DateRange",
    "DayRecord",
    "RangePreset",
    "Streak",
    "StreakReport",
    "SubjectAssignment",
    "SubjectStat",
    "TopicStat",
    "BaseCriterion",
    "HoursCriterion",
    "ProductivityCriterion",
    "SuccessCriterion",
    "parse_criterion",
]
