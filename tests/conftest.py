# tests/conftest.py

from datetime import datetime, timezone

import pytest

from gradevue.gradebook.models import (
    Assignment,
    Category,
    Course,
    Credentials,
    Gradebook,
)
from gradevue.session.session import GradeSession
from gradevue.session.store import SessionStore

FIXED_NOW = datetime(2024, 12, 12, 15, 30, tzinfo=timezone.utc)


@pytest.fixture
def raw_gradebook():
    return {
        "Gradebook": {
            "ReportingPeriod": {
                "_GradePeriod": "Semester 1",
                "_StartDate": "8/26/2024",
                "_EndDate": "12/20/2024",
            },
            "ReportingPeriods": {
                "ReportPeriod": [
                    {"_Index": "0", "_GradePeriod": "Semester 1", "_StartDate": "8/26/2024", "_EndDate": "12/20/2024"},
                    {"_Index": "1", "_GradePeriod": "Semester 2", "_StartDate": "1/6/2025", "_EndDate": "6/6/2025"},
                ]
            },
            "Courses": {
                "Course": [
                    {
                        "_Period": "1",
                        "_Title": "AP Calculus BC",
                        "_Room": "201",
                        "_Staff": "Ms. Rodriguez",
                        "Marks": {
                            "Mark": {
                                "_CalculatedScoreString": "A-",
                                "_CalculatedScoreRaw": "92.5",
                                "GradeCalculationSummary": {
                                    "AssignmentGradeCalc": [
                                        {"_Type": "Tests", "_Weight": "50%", "_Points": "95.00", "_PointsPossible": "100.00", "_CalculatedMark": "95"},
                                        {"_Type": "Homework", "_Weight": "50%", "_Points": "19.00", "_PointsPossible": "20.00", "_CalculatedMark": "95"},
                                        {"_Type": "TOTAL", "_Weight": "100%", "_Points": "114.00", "_PointsPossible": "120.00", "_CalculatedMark": "95"},
                                    ]
                                },
                                "Assignments": {
                                    "Assignment": [
                                        {
                                            "_Measure": "Unit 5 Test",
                                            "_Type": "Tests",
                                            "_Date": "11/29/2024",
                                            "_DueDate": "12/6/2024",
                                            "_Score": "95 out of 100.0000",
                                            "_ScoreType": "Raw Score",
                                            "_Points": "95.00 / 100.0000",
                                            "_Notes": "",
                                        },
                                        {
                                            "_Measure": "Homework Set 12",
                                            "_Type": "Homework",
                                            "_Date": "12/3/2024",
                                            "_DueDate": "12/7/2024",
                                            "_Score": "19 out of 20.0000",
                                            "_Points": "19.00 / 20.0000",
                                            "_Point": "19",
                                            "_PointPossible": "20",
                                        },
                                        {
                                            "_Measure": "Unit 6 Test",
                                            "_Type": "Tests",
                                            "_Date": "12/10/2024",
                                            "_DueDate": "12/15/2024",
                                            "_Score": "Not Graded",
                                            "_Points": "100.0000 Points Possible",
                                        },
                                    ]
                                },
                            }
                        },
                    },
                    {
                        "@Period": "2",
                        "@Title": "English 11",
                        "@Staff": "Mr. Thompson",
                        "Marks": {
                            "Mark": {
                                "@ScoreString": "B",
                                "@ScoreRaw": "84",
                                "Assignments": {
                                    "Assignment": {
                                        "@Measure": "Hamlet Essay",
                                        "@Type": "Essays",
                                        "@Score": "84 out of 100",
                                        "@Points": "84 / 100",
                                        "@Notes": "Good analysis",
                                    }
                                },
                            }
                        },
                    },
                ]
            },
        }
    }


@pytest.fixture
def raw_student_info():
    return {
        "StudentInfo": {
            "FormattedName": "Alex Johnson",
            "PermID": "123456",
            "Grade": "11",
            "CurrentSchool": "Westview High School",
            "EMail": "alex.johnson@student.westview.edu",
            "CounselorName": {"#text": "Ms. Williams"},
        }
    }


@pytest.fixture
def weighted_course():
    return Course(
        id="course-0",
        name="AP Chemistry",
        period=1,
        grade=85.0,
        letter_grade="B",
        assignments=(
            Assignment("Test 1", "Tests", score="90 out of 100", points_earned=90, points_possible=100),
            Assignment("HW 1", "HW", score="80 out of 100", points_earned=80, points_possible=100),
        ),
        categories=(Category("Tests", weight=50), Category("HW", weight=50)),
    )


@pytest.fixture
def simple_course():
    return Course(
        id="course-1",
        name="Physics",
        period=2,
        grade=75.0,
        letter_grade="C",
        assignments=(
            Assignment("Lab 1", "Labs", score="10 out of 10", points_earned=10, points_possible=10),
            Assignment("Lab 2", "Labs", score="5 out of 10", points_earned=5, points_possible=10),
        ),
    )


@pytest.fixture
def sample_gradebook(weighted_course, simple_course):
    return Gradebook(courses=(weighted_course, simple_course))


@pytest.fixture
def credentials():
    return Credentials("https://student.district.org", "student01", "hunter2")


@pytest.fixture
def store(tmp_path):
    return SessionStore(path=str(tmp_path / "session.json"))


@pytest.fixture
def session(store):
    return GradeSession(store=store, clock=lambda: FIXED_NOW)
