# tests/test_report.py

import math
from datetime import datetime, timezone

import pytest

from gradevue.api.demo import DEMO_CREDENTIALS, demo_gradebook
from gradevue.gradebook.models import Assignment, Course, Gradebook
from gradevue.gradebook.report import SUMMARY_COLUMNS, course_summary, dashboard_stats

AFTER_TERM = datetime(2025, 1, 15, tzinfo=timezone.utc)


def test_course_summary(sample_gradebook):
    df = course_summary(sample_gradebook)

    assert list(df.columns) == SUMMARY_COLUMNS
    assert list(df.index) == ["course-0", "course-1"]
    assert df.loc["course-0", "letter"] == "B"
    assert df.loc["course-0", "gpa_points"] == 3.0
    assert df.loc["course-1", "assignments"] == 2


def test_course_summary_ungraded_course_is_nan():
    gradebook = Gradebook(courses=(Course("course-0", "Study Hall", 7),))

    df = course_summary(gradebook)

    assert math.isnan(df.loc["course-0", "grade"])
    assert df.loc["course-0", "letter"] == "N/A"


def test_course_summary_empty():
    df = course_summary(Gradebook())

    assert df.empty
    assert list(df.columns) == SUMMARY_COLUMNS


def test_dashboard_stats(sample_gradebook):
    stats = dashboard_stats(sample_gradebook)

    assert stats["average_grade"] == pytest.approx(80.0)
    assert stats["average_letter"] == "B-"
    # 85 -> B (3.0), 75 -> C (2.0)
    assert stats["gpa"] == pytest.approx(2.5)
    assert stats["course_count"] == 2
    assert stats["missing_assignments"] == 0


def test_dashboard_stats_no_courses():
    stats = dashboard_stats(Gradebook())

    assert stats["average_grade"] == 0.0
    assert stats["average_letter"] == "N/A"
    assert stats["gpa"] == 0.0
    assert stats["course_count"] == 0
    assert stats["missing_assignments"] == 0


def test_missing_assignments_counted():
    course = Course(
        "course-0",
        "Physics",
        1,
        assignments=(
            Assignment("Lab", score="Missing"),
            Assignment("Test", score="Not Graded", due_date="12/10/2024", points_possible=100),
            Assignment("Quiz", score="Not Graded", due_date="1/30/2025", points_possible=20),
        ),
    )

    df = course_summary(Gradebook(courses=(course,)), AFTER_TERM)

    assert df.loc["course-0", "missing"] == 2


def test_demo_gradebook():
    gradebook = demo_gradebook()

    assert DEMO_CREDENTIALS.is_demo
    assert len(gradebook.courses) == 6
    assert gradebook.courses[0].name == "AP Calculus BC"
    assert gradebook.courses[0].categories[0].weight == 40
    assert gradebook.reporting_period.name == "Fall Semester 2024"
    assert gradebook.student_info.name == "Alex Johnson"

    unit_test = gradebook.courses[0].assignments[3]
    assert unit_test.points_earned is None
    assert unit_test.points_possible == 100.0
