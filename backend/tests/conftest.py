"""
Shared Test Fixtures and Configuration

This module provides pytest fixtures used across the unit tests.
"""

import sys
from datetime import date
from pathlib import Path
from typing import Any, Callable, Optional

import pytest
from dotenv import load_dotenv

# Add the backend directory to the path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load .env file from project root BEFORE any fixtures run
_project_root = Path(__file__).parent.parent.parent
_env_file = _project_root / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

from nitya.models.analytics import DayRecord, SubjectAssignment  # noqa: E402
from nitya.services.analytics.date_range import get_day_name  # noqa: E402


# ============================================================================
# Sample Logs
# ============================================================================


@pytest.fixture
def sample_log() -> dict[str, Any]:
    """
    Four-day productivity log with a gap on 2024-01-03.

    One high, one medium and one low day.
    """
    return {
        "2024-01-01": {"status": 8},
        "2024-01-02": {"status": 5},
        "2024-01-04": {"status": 2},
    }


@pytest.fixture
def subject_log() -> dict[str, Any]:
    """
    Log with multi-subject days, legacy entries and direct hours.

    - 01-01: Math (Algebra, Geometry) 4h + Physics (Optics) 2h, score 8
    - 01-02: Math (Algebra) 6h, score 5
    - 01-03: legacy Physics / Mechanics, score 6
    - 01-04: direct hours only (3h), no score
    """
    return {
        "2024-01-01": {
            "status": 8,
            "subjects": [
                {"subject": "Math", "topics": ["Algebra", "Geometry"], "hours": 4},
                {"subject": "Physics", "topics": ["Optics"], "hours": 2},
            ],
        },
        "2024-01-02": {
            "status": 5,
            "subjects": [{"subject": "Math", "topics": ["Algebra"], "hours": 6}],
        },
        "2024-01-03": {"status": 6, "subject": "Physics", "topic": "Mechanics"},
        "2024-01-04": {"directHours": 3},
    }


# ============================================================================
# Record Factories
# ============================================================================


@pytest.fixture
def make_day() -> Callable[..., DayRecord]:
    """
    Factory for DayRecord instances.

    Usage:
        make_day("2024-01-01", score=8, assignments=[("Math", ["Algebra"], 2)])
    """

    def _make(
        iso: str,
        score: Optional[int] = None,
        assignments: Optional[list[tuple[str, list[str], float]]] = None,
        direct_hours: float = 0.0,
    ) -> DayRecord:
        day = date.fromisoformat(iso)
        return DayRecord(
            date=day,
            day_name=get_day_name(day),
            score=score,
            subject_assignments=tuple(
                SubjectAssignment(subject=subject, topics=tuple(topics), hours=hours)
                for subject, topics, hours in (assignments or [])
            ),
            direct_hours=direct_hours,
        )

    return _make


@pytest.fixture
def make_days(make_day) -> Callable[..., list[DayRecord]]:
    """
    Factory for a contiguous run of records starting at a date.

    Usage:
        make_days("2024-01-01", scores=[8, None, 3])
    """

    def _make(start: str, scores: list[Optional[int]]) -> list[DayRecord]:
        first = date.fromisoformat(start)
        return [
            make_day(date.fromordinal(first.toordinal() + i).isoformat(), score=score)
            for i, score in enumerate(scores)
        ]

    return _make
