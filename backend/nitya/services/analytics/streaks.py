"""
Streak Detection

Finds maximal runs of consecutive tracked days in a projected date sequence.

The projected sequence is gap-free by construction (one record per calendar
day), so consecutive records are consecutive days and the scan never needs
date arithmetic.

Responsibilities:
- Detect every streak, ranked by length
- Current streak: the run at the end of the range, ignoring trailing
  untracked days
- Milestones reached and the next milestone to aim for

Usage:
    from nitya.services.analytics.streaks import detect_streaks, build_streak_report

    streaks = detect_streaks(records, criterion)
    report = build_streak_report(records, criterion)
"""

import logging
from collections.abc import Sequence
from typing import Optional

from nitya.config import settings
from nitya.models.analytics import DayRecord, Streak, StreakReport
from nitya.models.criteria import BaseCriterion

logger = logging.getLogger(__name__)


def detect_streaks(records: Sequence[DayRecord], criterion: BaseCriterion) -> list[Streak]:
    """
    Find all streaks of tracked days.

    Single linear scan: a tracked day extends the open streak (or opens one),
    an untracked day closes it.

    Args:
        records: Date-contiguous projected records.
        criterion: Decides which days are tracked.

    Returns:
        Streaks sorted by length, longest first; equal lengths stay in
        calendar order.
    """
    streaks: list[Streak] = []
    open_start: Optional[DayRecord] = None
    open_end: Optional[DayRecord] = None
    length = 0

    for record in records:
        if criterion.is_tracked(record):
            if open_start is None:
                open_start = record
                length = 0
            open_end = record
            length += 1
        elif open_start is not None:
            streaks.append(
                Streak(length=length, start_date=open_start.date, end_date=open_end.date)
            )
            open_start = open_end = None

    if open_start is not None:
        streaks.append(
            Streak(length=length, start_date=open_start.date, end_date=open_end.date)
        )

    streaks.sort(key=lambda s: s.length, reverse=True)
    return streaks


def calculate_current_streak(records: Sequence[DayRecord], criterion: BaseCriterion) -> int:
    """
    Length of the streak in progress at the end of the range.

    Scans backwards from the last day. Trailing untracked days before the
    first tracked one are skipped (today may simply not be logged yet); after
    that, the first untracked day ends the count.

    Returns:
        Number of consecutive tracked days, 0 if none.
    """
    current = 0
    for record in reversed(records):
        if criterion.is_tracked(record):
            current += 1
        elif current > 0:
            break
    return current


def get_milestones(longest: int, current: int) -> tuple[list[int], Optional[int]]:
    """
    Milestones reached by the longest streak and the next one above current.

    Returns:
        (milestones_reached, next_milestone); next_milestone is None once
        every milestone has been passed.
    """
    milestones = sorted(settings.STREAK_MILESTONES)
    reached = [m for m in milestones if longest >= m]
    next_milestone = next((m for m in milestones if m > current), None)
    return reached, next_milestone


def build_streak_report(records: Sequence[DayRecord], criterion: BaseCriterion) -> StreakReport:
    """
    Get detailed streak information for a range.

    Args:
        records: Date-contiguous projected records.
        criterion: Decides which days are tracked.

    Returns:
        StreakReport with ranked streaks, current streak and milestones.
    """
    streaks = detect_streaks(records, criterion)
    current = calculate_current_streak(records, criterion)

    longest = streaks[0] if streaks else None
    second_longest = streaks[1] if len(streaks) > 1 else None
    reached, next_milestone = get_milestones(longest.length if longest else 0, current)

    logger.debug(
        f"Found {len(streaks)} streaks "
        f"(longest={longest.length if longest else 0}, current={current})"
    )

    return StreakReport(
        streaks=streaks,
        longest=longest,
        second_longest=second_longest,
        current_streak=current,
        milestones_reached=reached,
        next_milestone=next_milestone,
    )
