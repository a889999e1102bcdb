# tests/test_parser.py

from datetime import datetime, timezone

import pytest

from gradevue.errors import MalformedUpstreamData
from gradevue.gradebook.grade_math import simple_course_grade
from gradevue.parser.fields import (
    get_list,
    get_text,
    has_ungraded_marker,
    is_ungraded,
    points_from_strings,
    to_float,
)
from gradevue.parser.parse import GradebookParser, parse_gradebook


def test_parse_courses(raw_gradebook):
    gradebook = parse_gradebook(raw_gradebook)

    assert [c.id for c in gradebook.courses] == ["course-0", "course-1"]

    calculus = gradebook.courses[0]
    assert calculus.name == "AP Calculus BC"
    assert calculus.period == 1
    assert calculus.teacher == "Ms. Rodriguez"
    assert calculus.room == "201"
    assert calculus.grade == 92.5
    assert calculus.letter_grade == "A-"


def test_parse_accepts_at_prefixed_attributes(raw_gradebook):
    english = parse_gradebook(raw_gradebook).courses[1]

    assert english.name == "English 11"
    assert english.teacher == "Mr. Thompson"
    assert english.grade == 84.0
    assert english.letter_grade == "B"
    assert english.categories is None
    assert len(english.assignments) == 1
    assert english.assignments[0].notes == "Good analysis"


def test_parse_assignments(raw_gradebook):
    test, homework, ungraded = parse_gradebook(raw_gradebook).courses[0].assignments

    assert test.name == "Unit 5 Test"
    assert test.type == "Tests"
    assert test.due_date == "12/6/2024"
    assert test.score_type == "Raw Score"
    assert (test.points_earned, test.points_possible) == (95.0, 100.0)

    assert (homework.points_earned, homework.points_possible) == (19.0, 20.0)

    assert ungraded.score == "Not Graded"
    assert ungraded.points_earned is None
    assert ungraded.points_possible == 100.0
    assert not ungraded.counts_toward_grade


def test_parse_categories_drop_total_row(raw_gradebook):
    categories = parse_gradebook(raw_gradebook).courses[0].categories

    assert [c.name for c in categories] == ["Tests", "Homework"]
    assert categories[0].weight == 50.0
    assert categories[0].score == 95.0
    assert categories[0].points == "95/100"
    assert categories[1].points == "19/20"


def test_parse_reporting_periods(raw_gradebook):
    gradebook = parse_gradebook(raw_gradebook)

    assert gradebook.reporting_period.name == "Semester 1"
    assert gradebook.reporting_period.start_date == "8/26/2024"
    assert [p.name for p in gradebook.reporting_periods] == ["Semester 1", "Semester 2"]
    assert [p.index for p in gradebook.reporting_periods] == [0, 1]


def test_parse_student_info(raw_gradebook, raw_student_info):
    info = parse_gradebook(raw_gradebook, raw_student_info).student_info

    assert info.name == "Alex Johnson"
    assert info.student_id == "123456"
    assert info.school == "Westview High School"
    assert info.counselor == "Ms. Williams"
    assert info.phone == ""


def test_parse_without_wrapper(raw_gradebook):
    gradebook = parse_gradebook(raw_gradebook["Gradebook"])

    assert len(gradebook.courses) == 2


def test_parse_single_course_object():
    raw = {"Courses": {"Course": {"_Title": "Chemistry", "Marks": {}}}}

    course = parse_gradebook(raw).courses[0]

    assert course.id == "course-0"
    assert course.period == 1
    assert course.teacher == "Unknown Teacher"
    assert course.grade is None
    assert course.letter_grade == "N/A"
    assert course.assignments == ()
    assert course.categories is None


@pytest.mark.parametrize("raw", [None, "", [], {"Courses": None}, {"Courses": {"Course": []}}])
def test_parse_empty_or_garbage_payload(raw):
    gradebook = parse_gradebook(raw)

    assert gradebook.courses == ()
    assert gradebook.reporting_period.name == "Current Term"
    assert gradebook.student_info is None


def test_corrupt_course_is_skipped(raw_gradebook):
    courses = raw_gradebook["Gradebook"]["Courses"]["Course"]
    courses.insert(0, "not a course")

    parser = GradebookParser(raw_gradebook)
    gradebook = parser.parse()

    assert [c.name for c in gradebook.courses] == ["AP Calculus BC", "English 11"]
    # ids stay positional, so the skipped slot is not reused
    assert [c.id for c in gradebook.courses] == ["course-1", "course-2"]
    assert any("skipping course 0" in w for w in parser.warnings)


def test_garbage_numbers_fall_back():
    raw = {
        "Courses": {
            "Course": {
                "_Title": "Art",
                "_Period": "first",
                "Marks": {
                    "Mark": {
                        "_CalculatedScoreRaw": "NaN",
                        "_CalculatedScoreString": "",
                        "GradeCalculationSummary": {
                            "AssignmentGradeCalc": {"_Type": "Projects", "_Weight": "lots", "_CalculatedMark": "inf"}
                        },
                        "Assignments": {
                            "Assignment": {"_Measure": "Sketch", "_Point": "abc", "_PointPossible": "10", "_Score": "7 out of 10"}
                        },
                    }
                },
            }
        }
    }

    parser = GradebookParser(raw)
    course = parser.parse().courses[0]

    assert course.period == 1
    assert course.grade is None
    assert course.letter_grade == "N/A"
    assert course.categories[0].weight == 0.0
    assert course.categories[0].score == 0.0
    assert course.assignments[0].points_earned == 7.0
    assert course.assignments[0].points_possible == 10.0
    assert len(parser.warnings) == 5


def test_missing_assignment_detection(raw_gradebook):
    ungraded = parse_gradebook(raw_gradebook).courses[0].assignments[2]

    assert not ungraded.is_missing(datetime(2024, 12, 12, tzinfo=timezone.utc))
    assert ungraded.is_missing(datetime(2025, 1, 10, tzinfo=timezone.utc))
    assert ungraded.is_missing(datetime(2025, 1, 10))


def test_get_list_normalizes_singletons():
    assert get_list({"A": {"B": {"x": 1}}}, "A", "B") == [{"x": 1}]
    assert get_list({"A": {"B": [{"x": 1}, None]}}, "A", "B") == [{"x": 1}]
    assert get_list({"A": None}, "A", "B") == []


def test_get_text_prefers_first_non_empty():
    raw = {"_Title": "", "@Name": "Chemistry"}

    assert get_text(raw, "Title", "Name") == "Chemistry"
    assert get_text(raw, "Room", default="TBD") == "TBD"


def test_to_float():
    assert to_float("92.5") == 92.5
    assert to_float(" 50% ") == 50.0
    assert to_float("1,200") == 1200.0
    assert to_float("") is None
    assert to_float(None) is None

    with pytest.raises(MalformedUpstreamData):
        to_float("abc")

    with pytest.raises(MalformedUpstreamData):
        to_float("inf")


@pytest.mark.parametrize(
    "score, points, expected",
    [
        ("95 out of 100", "", (95.0, 100.0)),
        ("", "8 / 10", (8.0, 10.0)),
        ("Not Graded", "0/100", (None, 100.0)),
        ("Not Graded", "25 Points Possible", (None, 25.0)),
        ("Missing", "", (None, None)),
        ("", "", (None, None)),
        ("N/A", "0/10", (None, 10.0)),
    ],
)
def test_points_from_strings(score, points, expected):
    assert points_from_strings(score, points) == expected


def test_is_ungraded():
    assert is_ungraded("Not Graded")
    assert is_ungraded("N/A")
    assert is_ungraded("")
    assert not is_ungraded("95 out of 100")


def test_has_ungraded_marker():
    assert has_ungraded_marker("Not Graded")
    assert has_ungraded_marker(" n/a ")
    assert has_ungraded_marker("Not Due")
    assert not has_ungraded_marker("")
    assert not has_ungraded_marker("95 out of 100")


def test_points_string_without_score_keeps_earned_points():
    raw = {
        "Courses": {
            "Course": {
                "_Title": "Biology",
                "Marks": {"Mark": {"Assignments": {"Assignment": {"_Measure": "Lab", "_Points": "8 / 10"}}}},
            }
        }
    }

    course = parse_gradebook(raw).courses[0]
    lab = course.assignments[0]

    assert (lab.points_earned, lab.points_possible) == (8.0, 10.0)
    assert lab.score == "8 out of 10"
    assert lab.is_graded
    assert lab.counts_toward_grade
    assert simple_course_grade(course.assignments) == pytest.approx(80.0)


def test_assignment_without_score_or_points_is_not_graded():
    raw = {"Courses": {"Course": {"Marks": {"Mark": {"Assignments": {"Assignment": {"_Measure": "Essay"}}}}}}}

    essay = parse_gradebook(raw).courses[0].assignments[0]

    assert essay.score == "Not Graded"
    assert essay.points_earned is None
    assert not essay.is_graded
