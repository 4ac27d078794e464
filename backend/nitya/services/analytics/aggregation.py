"""
Aggregation Engine

Computes range-bounded summary statistics and per-subject / per-topic
rollups from projected day records.

Responsibilities:
- Summary: tracked days, score and hours totals/averages, intensity buckets,
  best and worst day
- Subject rollup: distinct days, hours and scores per subject
- Topic rollup: the same per (subject, topic) pair

Attribution rules (kept as-is from the tracking app, both approximations):
- A day's single score is credited to every subject and topic touched that
  day, even when several subjects were logged.
- An assignment's hours are split evenly across its topics before being
  summed into each topic's total.

Usage:
    from nitya.services.analytics.aggregation import (
        calculate_summary,
        calculate_subject_stats,
        calculate_topic_stats,
    )

    summary = calculate_summary(records, criterion)
    subjects = calculate_subject_stats(records)
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from nitya.config import settings
from nitya.enums.analytics import IntensityBucket
from nitya.models.analytics import (
    AnalyticsSummary,
    DayRecord,
    StreakReport,
    SubjectStat,
    TopicStat,
)
from nitya.models.criteria import (
    BaseCriterion,
    HoursCriterion,
    hours_bucket,
    score_bucket,
)

logger = logging.getLogger(__name__)


def _round1(value: float) -> float:
    return round(value, 1)


def _count_buckets(buckets: list[Optional[IntensityBucket]]) -> dict[IntensityBucket, int]:
    counts = {bucket: 0 for bucket in IntensityBucket}
    for bucket in buckets:
        if bucket is not None:
            counts[bucket] += 1
    return counts


def pick_best_and_worst(
    records: Sequence[DayRecord], criterion: BaseCriterion
) -> tuple[Optional[DayRecord], Optional[DayRecord]]:
    """
    Pick the best and worst tracked day.

    Tracked days are ranked by the criterion's rank value (score or hours)
    with a stable descending sort: the best day is the first-logged of the
    top-ranked days, the worst day the last-logged of the bottom-ranked ones.

    Returns:
        (best_day, worst_day), both None when no day is tracked.
    """
    tracked = [r for r in records if criterion.is_tracked(r)]
    if not tracked:
        return None, None

    ranked = sorted(tracked, key=criterion.rank_value, reverse=True)
    return ranked[0], ranked[-1]


def calculate_summary(
    records: Sequence[DayRecord],
    criterion: BaseCriterion,
    streak_report: Optional[StreakReport] = None,
) -> AnalyticsSummary:
    """
    Calculate the overall analytics summary.

    Args:
        records: Projected day records for the range.
        criterion: Active success criterion.
        streak_report: Streaks for the same records, if already computed.

    Returns:
        AnalyticsSummary. An empty range yields a zeroed summary.
    """
    streak_report = streak_report or StreakReport()

    tracked = [r for r in records if criterion.is_tracked(r)]
    scored = [r for r in records if r.has_score]
    with_hours = [r for r in records if r.total_hours > 0]

    total_score = sum(r.score for r in scored)
    average_score = _round1(total_score / len(scored)) if scored else 0.0

    total_hours = round(sum(r.total_hours for r in records), 2)
    average_hours = _round1(total_hours / len(with_hours)) if with_hours else 0.0

    # Hours buckets need a daily cap even when productivity is the criterion
    max_hours = (
        criterion.max_hours_per_day
        if isinstance(criterion, HoursCriterion)
        else settings.DEFAULT_MAX_HOURS
    )
    rating_counts = _count_buckets([score_bucket(r.score) for r in scored])
    hours_counts = _count_buckets([hours_bucket(r.total_hours, max_hours) for r in with_hours])

    best_day, worst_day = pick_best_and_worst(records, criterion)

    logger.debug(
        f"Summary ({criterion.criterion_type.value}): {len(records)} days, "
        f"{len(tracked)} tracked, {len(scored)} scored, {len(with_hours)} with hours"
    )

    return AnalyticsSummary(
        total_days=len(records),
        days_with_data=len(tracked),
        average_score=average_score,
        total_score=total_score,
        total_hours=total_hours,
        average_hours_per_day=average_hours,
        high_productivity_days=rating_counts[IntensityBucket.HIGH],
        medium_productivity_days=rating_counts[IntensityBucket.MEDIUM],
        low_productivity_days=rating_counts[IntensityBucket.LOW],
        high_hours_days=hours_counts[IntensityBucket.HIGH],
        medium_hours_days=hours_counts[IntensityBucket.MEDIUM],
        low_hours_days=hours_counts[IntensityBucket.LOW],
        best_day=best_day,
        worst_day=worst_day,
        longest_streak=streak_report.longest,
        second_longest_streak=streak_report.second_longest,
        current_streak=streak_report.current_streak,
    )


# ===========================================
# Subject / Topic Rollups
# ===========================================


@dataclass
class _Accumulator:
    """Running totals for one subject or (subject, topic) pair."""

    days: set[date] = field(default_factory=set)
    hours: float = 0.0
    # Score per distinct day, so a subject logged twice in a day counts once
    scores: dict[date, int] = field(default_factory=dict)

    def add(self, record: DayRecord, hours: float) -> None:
        self.days.add(record.date)
        self.hours += hours
        if record.score is not None:
            self.scores[record.date] = record.score

    @property
    def total_score(self) -> int:
        return sum(self.scores.values())

    @property
    def average_score(self) -> float:
        return _round1(self.total_score / len(self.scores)) if self.scores else 0.0


def _rollup_sort_key(stat) -> tuple[float, int]:
    # Python's sort is stable: equal keys keep first-seen order
    return (-stat.total_hours, -stat.total_days)


def _accumulate(
    records: Sequence[DayRecord],
) -> tuple[dict[str, _Accumulator], dict[tuple[str, str], _Accumulator]]:
    subjects: dict[str, _Accumulator] = {}
    topics: dict[tuple[str, str], _Accumulator] = {}

    for record in records:
        for assignment in record.subject_assignments:
            if not assignment.subject:
                continue

            subjects.setdefault(assignment.subject, _Accumulator()).add(
                record, assignment.hours
            )

            if not assignment.topics:
                continue
            hours_per_topic = assignment.hours / len(assignment.topics)
            for topic in assignment.topics:
                topics.setdefault((assignment.subject, topic), _Accumulator()).add(
                    record, hours_per_topic
                )

    return subjects, topics


def _topic_stat(subject: str, topic: str, acc: _Accumulator) -> TopicStat:
    return TopicStat(
        name=topic,
        subject=subject,
        total_days=len(acc.days),
        total_hours=round(acc.hours, 2),
        average_score=acc.average_score,
        total_score=acc.total_score,
    )


def calculate_topic_stats(records: Sequence[DayRecord]) -> list[TopicStat]:
    """
    Calculate per-topic statistics across all subjects.

    Topics are keyed by (subject, topic), so the same topic name under two
    subjects yields two entries.

    Returns:
        TopicStat list sorted by total hours, then total days, descending.
    """
    _, topics = _accumulate(records)
    stats = [_topic_stat(subject, topic, acc) for (subject, topic), acc in topics.items()]
    stats.sort(key=_rollup_sort_key)
    return stats


def calculate_subject_stats(records: Sequence[DayRecord]) -> list[SubjectStat]:
    """
    Calculate per-subject statistics with nested topic breakdowns.

    Returns:
        SubjectStat list sorted by total hours, then total days, descending.
        Each subject's topics follow the same ordering.
    """
    subjects, topics = _accumulate(records)

    stats = []
    for name, acc in subjects.items():
        subject_topics = [
            _topic_stat(subject, topic, topic_acc)
            for (subject, topic), topic_acc in topics.items()
            if subject == name
        ]
        subject_topics.sort(key=_rollup_sort_key)

        stats.append(
            SubjectStat(
                name=name,
                total_days=len(acc.days),
                total_hours=round(acc.hours, 2),
                average_score=acc.average_score,
                total_score=acc.total_score,
                topics=subject_topics,
            )
        )

    stats.sort(key=_rollup_sort_key)
    logger.debug(f"Rolled up {len(stats)} subjects and {len(topics)} topics")
    return stats
