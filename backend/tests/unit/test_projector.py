"""
Unit tests for day record projection.

Tests that the sparse log is mapped onto a dense date sequence and that
malformed fields are defaulted one by one instead of failing the day.
"""

from datetime import date

import pytest

from nitya.services.analytics.date_range import get_dates_in_range
from nitya.services.analytics.projector import (
    coerce_hours,
    coerce_score,
    coerce_topics,
    project_day,
    project_day_records,
)


class TestProjectDayRecords:
    """Tests for project_day_records."""

    def test_one_record_per_date(self, sample_log):
        dates = get_dates_in_range("2023-12-30", "2024-01-06")
        records = project_day_records(dates, sample_log)

        assert len(records) == len(dates)
        assert [r.date.isoformat() for r in records] == dates

    def test_missing_dates_have_no_data(self, sample_log):
        records = project_day_records(get_dates_in_range("2024-01-01", "2024-01-04"), sample_log)
        gap = records[2]

        assert gap.date == date(2024, 1, 3)
        assert gap.score is None
        assert gap.subject_assignments == ()
        assert gap.total_hours == 0

    def test_empty_log(self):
        records = project_day_records(["2024-01-01"], None)
        assert records[0].score is None

    def test_empty_sequence(self, sample_log):
        assert project_day_records([], sample_log) == []

    def test_day_name(self, sample_log):
        records = project_day_records(["2024-01-01"], sample_log)
        assert records[0].day_name == "Mon"


class TestScoreDefaulting:
    """Tests for score normalization."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (8, 8),
            (1, 1),
            (10, 10),
            ("7", 7),
            (6.0, 6),
            (0, None),
            (None, None),
            ("", None),
            (11, None),
            (-3, None),
            (7.5, None),
            ("high", None),
            (True, None),
            (float("nan"), None),
            (10**400, None),
            ("1e400", None),
            ([7], None),
        ],
    )
    def test_coerce_score(self, raw, expected):
        assert coerce_score(raw) == expected

    def test_score_key_alias(self):
        assert project_day("2024-01-01", {"score": 4}).score == 4

    def test_invalid_score_keeps_other_fields(self):
        """A corrupt score does not discard the day's hours."""
        record = project_day(
            "2024-01-01",
            {"status": "??", "subjects": [{"subject": "Math", "topics": [], "hours": 2}]},
        )
        assert record.score is None
        assert record.total_hours == 2

    def test_oversized_numbers_do_not_fail_the_range(self):
        """Integers too large for a float are dropped like any other bad value."""
        log = {
            "2024-01-01": {"status": 10**400, "directHours": 10**400},
            "2024-01-02": {"status": 6, "subjects": [{"subject": "Math", "hours": 10**400}]},
        }
        records = project_day_records(["2024-01-01", "2024-01-02"], log)

        assert records[0].score is None
        assert records[0].total_hours == 0
        assert records[1].score == 6
        assert records[1].subject_assignments[0].hours == 0


class TestHoursDefaulting:
    """Tests for hours normalization and total hours."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (2, 2.0),
            (1.5, 1.5),
            ("3", 3.0),
            (None, 0.0),
            (-1, 0.0),
            ("abc", 0.0),
            (True, 0.0),
            (10**400, 0.0),
            (float("inf"), 0.0),
        ],
    )
    def test_coerce_hours(self, raw, expected):
        assert coerce_hours(raw) == expected

    def test_assignment_hours_win_over_direct_hours(self):
        record = project_day(
            "2024-01-01",
            {"subjects": [{"subject": "Math", "hours": 2}], "directHours": 5},
        )
        assert record.total_hours == 2

    def test_direct_hours_used_when_assignments_are_zero(self):
        record = project_day(
            "2024-01-01",
            {"subjects": [{"subject": "Math", "hours": 0}], "directHours": 5},
        )
        assert record.total_hours == 5

    def test_direct_hours_snake_case(self):
        assert project_day("2024-01-01", {"direct_hours": 1.5}).total_hours == 1.5

    def test_total_hours_sums_assignments(self):
        record = project_day(
            "2024-01-01",
            {
                "subjects": [
                    {"subject": "Math", "hours": 2},
                    {"subject": "Physics", "hours": 1.5},
                    {"subject": "Chem", "hours": "bad"},
                ]
            },
        )
        assert record.total_hours == 3.5


class TestAssignmentDefaulting:
    """Tests for subject assignment normalization."""

    def test_topics_deduplicated_in_order(self):
        assert coerce_topics(["B", "A", "B", " ", 3, "A "]) == ("B", "A")

    def test_single_topic_string(self):
        assert coerce_topics("Algebra") == ("Algebra",)

    def test_topics_dropped_without_subject(self):
        """A topic only has meaning inside a named subject."""
        record = project_day(
            "2024-01-01",
            {"subjects": [{"subject": "", "topics": ["Algebra"], "hours": 2}]},
        )
        assignment = record.subject_assignments[0]

        assert assignment.subject == ""
        assert assignment.topics == ()
        assert record.total_hours == 2

    def test_non_mapping_assignments_skipped(self):
        record = project_day(
            "2024-01-01",
            {"subjects": ["Math", None, {"subject": "Physics", "hours": 1}]},
        )
        assert [a.subject for a in record.subject_assignments] == ["Physics"]

    def test_legacy_subject_and_topic(self):
        record = project_day("2024-01-01", {"status": 6, "subject": "Physics", "topic": "Mechanics"})
        assignment = record.subject_assignments[0]

        assert assignment.subject == "Physics"
        assert assignment.topics == ("Mechanics",)
        assert assignment.hours == 0

    def test_legacy_fields_ignored_when_subjects_present(self):
        record = project_day(
            "2024-01-01",
            {"subject": "Old", "subjects": [{"subject": "New", "hours": 1}]},
        )
        assert [a.subject for a in record.subject_assignments] == ["New"]

    def test_unreadable_entry_is_treated_as_absent(self):
        record = project_day("2024-01-01", "corrupt")
        assert record.score is None
        assert record.total_hours == 0
