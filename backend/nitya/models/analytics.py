"""
Progress Analytics Models (Pydantic)

Value objects produced by the analytics engine:
- DayRecord: one normalized day of the log
- SubjectStat / TopicStat: rollups over a date range
- Streak / StreakReport: consecutive-day runs of tracked days
- AnalyticsSummary: range-bounded summary statistics
- AnalyticsReport: everything above for one (log, range, criterion) call

ARCHITECTURE NOTE:
    None of these models has a lifecycle beyond the call that produced it.
    They are frozen and rebuilt from the sparse log every time.

    Data flows: sparse log + range → DayRecord[] → {aggregation, streaks} → report
"""

import datetime
from typing import Optional

from pydantic import Field, computed_field, model_validator

from nitya.models.base import ValueModel
from nitya.models.criteria import MAX_SCORE, MIN_SCORE, SuccessCriterion


# ===========================================
# Day Models
# ===========================================


class SubjectAssignment(ValueModel):
    """
    Time logged against one subject on a given day.

    Topics are kept in first-seen order without duplicates. A topic can only
    be attached to a named subject.
    """

    subject: str = ""
    topics: tuple[str, ...] = ()
    hours: float = Field(default=0.0, ge=0)

    @model_validator(mode="after")
    def _topics_require_subject(self) -> "SubjectAssignment":
        if self.topics and not self.subject:
            raise ValueError("topics require a non-empty subject")
        return self


class DayRecord(ValueModel):
    """
    One calendar day of the log, normalized.

    Days missing from the log are represented with no score, no subject
    assignments and zero hours. Total hours come from the subject assignments
    when any were logged; the directly entered hours are only used when the
    assignments add up to zero.
    """

    date: datetime.date
    day_name: str
    score: Optional[int] = Field(default=None, ge=MIN_SCORE, le=MAX_SCORE)
    subject_assignments: tuple[SubjectAssignment, ...] = ()
    direct_hours: float = Field(default=0.0, ge=0)

    @computed_field
    @property
    def total_hours(self) -> float:
        """Hours logged for the day."""
        assigned = sum(a.hours for a in self.subject_assignments)
        return assigned if assigned > 0 else self.direct_hours

    @property
    def has_score(self) -> bool:
        return self.score is not None


class DateRange(ValueModel):
    """Inclusive ISO date window with a display label."""

    start_date: str
    end_date: str
    label: str = "Custom Range"


class RangePreset(ValueModel):
    """
    Named date range relative to "today".

    Spans either `days` days ending today (inclusive) or `months` calendar
    months back from today.
    """

    id: str
    label: str
    days: Optional[int] = Field(default=None, ge=1)
    months: Optional[int] = Field(default=None, ge=1)

    @model_validator(mode="after")
    def _exactly_one_span(self) -> "RangePreset":
        if (self.days is None) == (self.months is None):
            raise ValueError("preset needs exactly one of days or months")
        return self


# ===========================================
# Rollup Models
# ===========================================


class TopicStat(ValueModel):
    """
    Aggregated activity for one topic of a subject.

    Hours of a multi-topic assignment are split evenly across its topics, so
    total_hours is an approximation rather than a measured allocation.
    """

    name: str
    subject: str
    total_days: int  # Distinct days, not occurrences
    total_hours: float
    average_score: float
    total_score: int


class SubjectStat(ValueModel):
    """
    Aggregated activity for one subject.

    The day's single score is credited to every subject touched that day.
    """

    name: str
    total_days: int  # Distinct days, not occurrences
    total_hours: float
    average_score: float
    total_score: int
    topics: list[TopicStat] = Field(default_factory=list)


# ===========================================
# Streak Models
# ===========================================


class Streak(ValueModel):
    """A maximal run of consecutive tracked days."""

    length: int = Field(..., ge=1)
    start_date: datetime.date
    end_date: datetime.date


class StreakReport(ValueModel):
    """
    Streak information for a date range.

    Streaks are ranked by length (longest first, ties in calendar order).
    Milestones are gamification markers such as 7 or 30 days.
    """

    streaks: list[Streak] = Field(default_factory=list)
    longest: Optional[Streak] = None
    second_longest: Optional[Streak] = None
    current_streak: int = 0
    milestones_reached: list[int] = Field(default_factory=list)
    next_milestone: Optional[int] = None


# ===========================================
# Summary Models
# ===========================================


class AnalyticsSummary(ValueModel):
    """
    Range-bounded summary statistics.

    Score statistics cover score-bearing days and hours statistics cover
    hours-bearing days, whichever criterion is active. days_with_data, the
    best/worst day and the streaks follow the active criterion.
    """

    total_days: int
    days_with_data: int
    average_score: float
    total_score: int
    total_hours: float
    average_hours_per_day: float
    # Rating buckets (score >= 7, 4-6, 1-3)
    high_productivity_days: int
    medium_productivity_days: int
    low_productivity_days: int
    # Hours buckets (>= 80%, 40-80%, < 40% of the daily cap)
    high_hours_days: int
    medium_hours_days: int
    low_hours_days: int
    best_day: Optional[DayRecord] = None
    worst_day: Optional[DayRecord] = None
    longest_streak: Optional[Streak] = None
    second_longest_streak: Optional[Streak] = None
    current_streak: int = 0

    @computed_field
    @property
    def completion_rate(self) -> int:
        """Percentage of days in the range with data."""
        if self.total_days == 0:
            return 0
        return round(self.days_with_data / self.total_days * 100)


class AnalyticsReport(ValueModel):
    """Full analytics output for one log, date range and criterion."""

    date_range: DateRange
    criterion: SuccessCriterion
    summary: AnalyticsSummary
    subject_stats: list[SubjectStat] = Field(default_factory=list)
    topic_stats: list[TopicStat] = Field(default_factory=list)
    streaks: list[Streak] = Field(default_factory=list)
    streak_report: StreakReport
