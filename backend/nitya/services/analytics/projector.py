"""
Day Record Projection

Maps the sparse, date-keyed log onto a dense date sequence, producing one
normalized DayRecord per date. Raw entries come straight from storage and
may be partial, legacy-shaped or corrupt; every field is defaulted on its own
so one bad value never rejects the whole day, let alone the whole range.

Raw entry shape (all keys optional):
    {
        "status": 8,                      # 1-10 rating ("score" also accepted)
        "subjects": [
            {"subject": "Math", "topics": ["Algebra"], "hours": 2.5},
        ],
        "directHours": 3,                 # used only if subject hours sum to 0
        "subject": "Math",                # legacy single subject
        "topic": "Algebra",               # legacy single topic
    }

Usage:
    from nitya.services.analytics.projector import project_day_records

    records = project_day_records(["2024-01-01", "2024-01-02"], log)
"""

import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any, Optional

from pydantic import BaseModel

from nitya.models.analytics import DayRecord, SubjectAssignment
from nitya.models.criteria import MAX_SCORE, MIN_SCORE
from nitya.services.analytics.date_range import get_day_name, parse_iso_date

logger = logging.getLogger(__name__)


def _first_present(entry: Mapping[str, Any], *keys: str) -> Any:
    """Value of the first key present in the entry, else None."""
    for key in keys:
        if key in entry:
            return entry[key]
    return None


def coerce_score(value: Any) -> Optional[int]:
    """
    Normalize a raw productivity rating.

    Integral numbers (and numeric strings) within 1-10 are kept. Zero, blanks
    and None mean "no rating"; anything else is dropped.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            value = float(value)
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    try:
        if not math.isfinite(value):
            return None
    except OverflowError:
        return None
    if value != int(value):
        return None

    score = int(value)
    if not MIN_SCORE <= score <= MAX_SCORE:
        return None
    return score


def coerce_hours(value: Any) -> float:
    """Normalize a raw hours value: non-negative finite number, else 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        hours = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(hours) or hours < 0:
        return 0.0
    return hours


def coerce_topics(value: Any) -> tuple[str, ...]:
    """Normalize raw topics to unique, non-empty strings in first-seen order."""
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple, set, frozenset)):
        return ()

    topics: list[str] = []
    for topic in value:
        if isinstance(topic, str) and topic.strip() and topic.strip() not in topics:
            topics.append(topic.strip())
    return tuple(topics)


def coerce_assignment(raw: Any) -> Optional[SubjectAssignment]:
    """
    Normalize one raw subject assignment.

    Topics are dropped when the subject is empty, since a topic only has
    meaning within a subject.
    """
    if not isinstance(raw, Mapping):
        return None

    subject = raw.get("subject")
    subject = subject.strip() if isinstance(subject, str) else ""
    topics = coerce_topics(raw.get("topics")) if subject else ()

    return SubjectAssignment(
        subject=subject,
        topics=topics,
        hours=coerce_hours(raw.get("hours")),
    )


def coerce_assignments(entry: Mapping[str, Any]) -> tuple[SubjectAssignment, ...]:
    """
    Extract subject assignments from a raw entry.

    Falls back to the legacy single subject/topic fields when the entry has
    no usable subjects list.
    """
    raw_subjects = entry.get("subjects")
    assignments: list[SubjectAssignment] = []

    if isinstance(raw_subjects, (list, tuple)):
        for raw in raw_subjects:
            assignment = coerce_assignment(raw)
            if assignment is not None:
                assignments.append(assignment)

    if not assignments:
        legacy_subject = entry.get("subject")
        if isinstance(legacy_subject, str) and legacy_subject.strip():
            legacy = coerce_assignment(
                {"subject": legacy_subject, "topics": entry.get("topic")}
            )
            assignments.append(legacy)

    return tuple(assignments)


def _as_mapping(iso: str, raw: Any) -> Optional[Mapping[str, Any]]:
    """Raw entry as a mapping, or None when it cannot be read."""
    if raw is None:
        return None
    if isinstance(raw, BaseModel):
        return raw.model_dump()
    if isinstance(raw, Mapping):
        return raw
    logger.warning(f"Ignoring unreadable log entry for {iso}: {type(raw).__name__}")
    return None


def project_day(iso: str, raw: Any = None) -> DayRecord:
    """
    Build the DayRecord for one date.

    Args:
        iso: ISO date of the record.
        raw: Raw log entry for that date, or None when absent.

    Returns:
        Normalized DayRecord. Absent or unreadable entries produce a record
        with no score, no assignments and zero hours.
    """
    day = parse_iso_date(iso)
    entry = _as_mapping(iso, raw)

    if entry is None:
        return DayRecord(date=day, day_name=get_day_name(day))

    raw_score = _first_present(entry, "status", "score")
    score = coerce_score(raw_score)
    if raw_score not in (None, 0, "") and score is None:
        logger.warning(f"Dropping invalid score {raw_score!r} for {iso}")

    raw_hours = _first_present(entry, "directHours", "direct_hours")
    direct_hours = coerce_hours(raw_hours)
    if raw_hours not in (None, 0) and direct_hours == 0:
        logger.warning(f"Dropping invalid direct hours {raw_hours!r} for {iso}")

    return DayRecord(
        date=day,
        day_name=get_day_name(day),
        score=score,
        subject_assignments=coerce_assignments(entry),
        direct_hours=direct_hours,
    )


def project_day_records(
    dates: Sequence[str],
    log: Optional[Mapping[str, Any]],
) -> list[DayRecord]:
    """
    Get day-wise records for a resolved date sequence.

    Args:
        dates: Ordered ISO dates (from get_dates_in_range).
        log: Sparse mapping of ISO date to raw day entry.

    Returns:
        One DayRecord per date, in sequence order.
    """
    log = log or {}
    records = [project_day(iso, log.get(iso)) for iso in dates]

    logger.debug(
        f"Projected {len(records)} days "
        f"({sum(1 for iso in dates if iso in log)} with log entries)"
    )
    return records
