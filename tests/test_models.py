# tests/test_models.py

import pytest

from gradevue.gradebook.models import (
    Assignment,
    Course,
    Credentials,
    Gradebook,
    GradeChange,
    ReportingPeriod,
    StudentInfo,
)


def test_assignment_percentage():
    assert Assignment("Quiz", points_earned=8, points_possible=10).percentage == 80.0
    assert Assignment("Quiz", points_possible=10).percentage is None
    assert Assignment("Bonus", points_earned=2, points_possible=0).percentage is None


def test_assignment_is_missing_from_notes():
    assert Assignment("Lab", score="0 out of 10", notes="Missing work").is_missing()


def test_graded_assignment_is_never_missing_by_date():
    assignment = Assignment(
        "Lab", score="7 out of 10", due_date="1/1/2020", points_earned=7, points_possible=10
    )

    assert not assignment.is_missing()


def test_unparseable_due_date_is_not_missing():
    assert not Assignment("Lab", due_date="someday").is_missing()


def test_hypothetical_assignment_to_dict():
    data = Assignment("Final", is_hypothetical=True, hypothetical_id="h1").to_dict()

    assert data["isHypothetical"] is True
    assert data["hypotheticalId"] == "h1"
    assert "isHypothetical" not in Assignment("Final").to_dict()


def test_gradebook_round_trip(sample_gradebook):
    gradebook = Gradebook(
        courses=sample_gradebook.courses,
        reporting_period=ReportingPeriod("Semester 1", "8/26/2024", "12/20/2024", index=0),
        student_info=StudentInfo(name="Alex Johnson", student_id="123456"),
    )

    assert Gradebook.from_dict(gradebook.to_dict()) == gradebook


def test_gradebook_course_lookup(sample_gradebook):
    assert sample_gradebook.course("course-1").name == "Physics"
    assert sample_gradebook.course("course-9") is None


def test_grade_change_to_dict():
    change = GradeChange("course-0", "Chemistry", None, 91.0, "N/A", "A-", "2024-12-12T15:30:00+00:00")

    assert change.to_dict()["previousGrade"] is None
    assert GradeChange.from_dict(change.to_dict()) == change


def test_credentials_repr_masks_password(credentials):
    assert "hunter2" not in repr(credentials)
    assert not credentials.is_demo


def test_course_from_dict_rejects_non_string_letter_grade(simple_course):
    data = simple_course.to_dict()
    data["letterGrade"] = 5

    with pytest.raises(TypeError):
        Course.from_dict(data)


def test_course_from_dict_defaults_missing_letter_grade(simple_course):
    data = simple_course.to_dict()
    del data["letterGrade"]

    assert Course.from_dict(data).letter_grade == "N/A"
