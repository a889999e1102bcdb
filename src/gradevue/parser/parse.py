from dataclasses import dataclass, field
from typing import Any, List, Optional

from gradevue.errors import MalformedUpstreamData
from gradevue.gradebook.models import (
    Assignment,
    Category,
    Course,
    Gradebook,
    ReportingPeriod,
    StudentInfo,
)
from gradevue.logging.config import logger_parser
from gradevue.utils import format_number
from gradevue.parser.fields import (
    get_list,
    get_node,
    get_text,
    points_from_strings,
    to_float,
    to_int,
)

# Errors that a malformed course or assignment can raise while being read.
PARSE_ERRORS = (MalformedUpstreamData, AttributeError, KeyError, TypeError, ValueError)


@dataclass
class GradebookParser:
    """
    Normalizes a raw StudentVue gradebook payload into a canonical Gradebook.

    Parsing never raises. A field that cannot be read is replaced by a safe
    default, and a course or assignment that cannot be read at all is skipped;
    either way the problem is logged and recorded in ``warnings``.

    Attributes:
        raw_gradebook (Any): The ``Gradebook`` payload, optionally still wrapped
            in a ``{"Gradebook": ...}`` envelope.
        raw_student_info (Any): The optional ``StudentInfo`` payload.
        warnings (List[str]): Messages for every default substituted during parsing.
    """

    raw_gradebook: Any
    raw_student_info: Any = None
    warnings: List[str] = field(default_factory=list)

    def parse(self) -> Gradebook:
        """
        Main method to parse the payloads into a Gradebook.

        Returns:
            Gradebook: The canonical gradebook. An unreadable payload yields an
                empty gradebook with the default reporting period.
        """
        raw = self.raw_gradebook
        if isinstance(raw, dict) and get_node(raw, "Gradebook") is not None:
            raw = get_node(raw, "Gradebook")

        if not isinstance(raw, dict):
            self._warn(f"gradebook payload is not an object: {type(raw).__name__}")
            raw = {}

        return Gradebook(
            courses=self._parse_courses(raw),
            reporting_period=self._parse_reporting_period(get_node(raw, "ReportingPeriod")),
            reporting_periods=self._parse_reporting_periods(raw),
            student_info=self._parse_student_info(self.raw_student_info),
        )

    # === courses ===

    def _parse_courses(self, raw: dict) -> tuple:
        courses = []
        for index, raw_course in enumerate(get_list(raw, "Courses", "Course")):
            try:
                courses.append(self._parse_course(raw_course, index))
            except PARSE_ERRORS as e:
                self._warn(f"skipping course {index}: {e}")
        return tuple(courses)

    def _parse_course(self, raw: dict, index: int) -> Course:
        """
        Parses a single course.

        The course id is positional (``course-{index}``), so it is only stable
        as long as the upstream course order does not change between refreshes.
        """
        if not isinstance(raw, dict):
            raise MalformedUpstreamData(f"course is not an object: {raw!r}")

        marks = get_list(raw, "Marks", "Mark")
        mark = marks[0] if marks else {}

        grade = self._float_or_default(mark, "CalculatedScoreRaw", None)
        if grade is None:
            grade = self._float_or_default(mark, "ScoreRaw", None)

        letter_grade = get_text(
            mark, "CalculatedScoreString", "ScoreString", default="N/A"
        )

        period = self._int_or_default(raw, "Period", None)

        return Course(
            id=f"course-{index}",
            name=get_text(raw, "Title", "CourseName", default="Unknown Course"),
            period=period if period is not None else index + 1,
            teacher=get_text(raw, "Staff", "Teacher", default="Unknown Teacher"),
            room=get_text(raw, "Room"),
            grade=grade,
            letter_grade=letter_grade,
            assignments=self._parse_assignments(mark),
            categories=self._parse_categories(mark),
        )

    # === assignments ===

    def _parse_assignments(self, mark: dict) -> tuple:
        assignments = []
        for raw in get_list(mark, "Assignments", "Assignment"):
            try:
                assignments.append(self._parse_assignment(raw))
            except PARSE_ERRORS as e:
                self._warn(f"skipping assignment: {e}")
        return tuple(assignments)

    def _parse_assignment(self, raw: dict) -> Assignment:
        """
        Parses a single assignment.

        Numeric ``Point`` / ``PointPossible`` attributes win when both are
        present; otherwise the missing values are derived from the display strings.
        """
        if not isinstance(raw, dict):
            raise MalformedUpstreamData(f"assignment is not an object: {raw!r}")

        score = get_text(raw, "Score")
        points = get_text(raw, "Points")

        earned = self._float_or_default(raw, "Point", None)
        possible = self._float_or_default(raw, "PointPossible", None)

        if earned is None or possible is None:
            derived_earned, derived_possible = points_from_strings(score, points)
            if earned is None:
                earned = derived_earned
            if possible is None:
                possible = derived_possible

        # A blank score with usable points is shown the way a scored assignment is.
        if not score:
            if earned is not None and possible is not None:
                score = f"{format_number(earned)} out of {format_number(possible)}"
            else:
                score = "Not Graded"

        return Assignment(
            name=get_text(raw, "Measure", "Name", default="Untitled Assignment"),
            type=get_text(raw, "Type", default="Assignment"),
            date=get_text(raw, "Date"),
            due_date=get_text(raw, "DueDate"),
            score=score,
            points=points,
            points_earned=earned,
            points_possible=possible,
            notes=get_text(raw, "Notes"),
            description=get_text(raw, "MeasureDescription", "Description"),
            score_type=get_text(raw, "ScoreType"),
        )

    # === categories ===

    def _parse_categories(self, mark: dict) -> Optional[tuple]:
        raw_categories = get_list(mark, "GradeCalculationSummary", "AssignmentGradeCalc")
        if not raw_categories:
            return None

        categories = []
        for raw in raw_categories:
            name = get_text(raw, "Type", default="Category")
            # The summary closes with a TOTAL row that is not a category.
            if name.upper() == "TOTAL":
                continue

            earned = self._float_or_default(raw, "PointsEarned", None)
            if earned is None:
                earned = self._float_or_default(raw, "Points", None)
            possible = self._float_or_default(raw, "PointsPossible", None)

            points = ""
            if earned is not None or possible is not None:
                points = f"{format_number(earned or 0)}/{format_number(possible or 0)}"

            categories.append(
                Category(
                    name=name,
                    weight=self._float_or_default(raw, "Weight", 0.0),
                    score=self._float_or_default(raw, "CalculatedMark", 0.0),
                    points=points,
                )
            )

        return tuple(categories) or None

    # === term metadata ===

    def _parse_reporting_period(self, raw: Any, index: Optional[int] = None) -> ReportingPeriod:
        if not isinstance(raw, dict):
            return ReportingPeriod()

        if index is None:
            index = self._int_or_default(raw, "Index", None)

        return ReportingPeriod(
            name=get_text(raw, "GradePeriod", "Name", default="Current Term"),
            start_date=get_text(raw, "StartDate"),
            end_date=get_text(raw, "EndDate"),
            index=index,
        )

    def _parse_reporting_periods(self, raw: dict) -> tuple:
        return tuple(
            self._parse_reporting_period(period)
            for period in get_list(raw, "ReportingPeriods", "ReportPeriod")
            if isinstance(period, dict)
        )

    def _parse_student_info(self, raw: Any) -> Optional[StudentInfo]:
        if raw is None:
            return None
        if isinstance(raw, dict) and get_node(raw, "StudentInfo") is not None:
            raw = get_node(raw, "StudentInfo")
        if not isinstance(raw, dict):
            self._warn("student info payload is not an object")
            return None

        return StudentInfo(
            name=get_text(raw, "FormattedName", "NickName"),
            student_id=get_text(raw, "PermID", "StudentID"),
            grade=get_text(raw, "Grade"),
            school=get_text(raw, "CurrentSchool"),
            email=get_text(raw, "EMail"),
            phone=get_text(raw, "Phone"),
            address=get_text(raw, "Address"),
            birth_date=get_text(raw, "BirthDate"),
            counselor=get_text(raw, "CounselorName"),
            photo=get_text(raw, "Photo", "Base64Photo"),
        )

    # === coercion with defaults ===

    def _float_or_default(self, raw: Any, name: str, default: Optional[float]) -> Optional[float]:
        try:
            value = to_float(get_node(raw, name))
        except MalformedUpstreamData as e:
            self._warn(f"{name}: {e}")
            return default
        return default if value is None else value

    def _int_or_default(self, raw: Any, name: str, default: Optional[int]) -> Optional[int]:
        try:
            value = to_int(get_node(raw, name))
        except MalformedUpstreamData as e:
            self._warn(f"{name}: {e}")
            return default
        return default if value is None else value

    def _warn(self, message: str) -> None:
        self.warnings.append(message)
        logger_parser.warning(message)


def parse_gradebook(raw_gradebook: Any, raw_student_info: Any = None) -> Gradebook:
    """
    Parses raw StudentVue payloads into a canonical Gradebook.

    Args:
        raw_gradebook (Any): The ``Gradebook`` payload.
        raw_student_info (Any, optional): The ``StudentInfo`` payload.

    Returns:
        Gradebook: The canonical gradebook. Never raises for malformed input.
    """
    gradebook = GradebookParser(raw_gradebook, raw_student_info).parse()
    logger_parser.info(f"Parsed {len(gradebook.courses)} courses")
    return gradebook
