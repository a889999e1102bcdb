"""
Canonical gradebook model.

Every payload that reaches gradevue is normalized into these dataclasses by the
parser, so the rest of the package only ever sees typed, unambiguous values.
All records are frozen: derived gradebooks are built with ``dataclasses.replace``
and unchanged records are shared by reference.

Serialization uses the camelCase keys of the dashboard's JSON shape
(``letterGrade``, ``pointsEarned``, ...) so persisted sessions stay readable
by the web client.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from gradevue.utils import parse_date

UNGRADED_SCORES = ("", "not graded", "n/a", "not due")


@dataclass(frozen=True)
class Assignment:
    name: str
    type: str = "Assignment"
    date: str = ""
    due_date: str = ""
    score: str = "Not Graded"
    points: str = ""
    points_earned: Optional[float] = None
    points_possible: Optional[float] = None
    notes: str = ""
    description: str = ""
    score_type: str = ""
    is_hypothetical: bool = False
    hypothetical_id: Optional[str] = None

    @property
    def is_graded(self) -> bool:
        return self.score.strip().lower() not in UNGRADED_SCORES

    @property
    def counts_toward_grade(self) -> bool:
        """True when the assignment carries usable earned and possible points."""
        return (
            self.points_earned is not None
            and self.points_possible is not None
            and self.points_possible > 0
        )

    @property
    def percentage(self) -> Optional[float]:
        if not self.counts_toward_grade:
            return None
        return self.points_earned / self.points_possible * 100

    def is_missing(self, now: Optional[datetime] = None) -> bool:
        """
        Determines whether the assignment should be flagged as missing.

        An assignment is missing when its score text or notes mention "missing",
        or when it is ungraded, has no earned points, and its due date has passed.

        Args:
            now (datetime, optional): The reference time. Defaults to the current time.

        Returns:
            bool: True if the assignment is missing.
        """
        if "missing" in self.score.lower() or "missing" in self.notes.lower():
            return True

        if self.is_graded or (self.points_earned or 0) != 0:
            return False

        due = parse_date(self.due_date)
        if due is None:
            return False

        if now is None:
            now = datetime.now(timezone.utc) if due.tzinfo else datetime.now()
        elif due.tzinfo is None and now.tzinfo is not None:
            due = due.replace(tzinfo=now.tzinfo)
        elif due.tzinfo is not None and now.tzinfo is None:
            now = now.replace(tzinfo=due.tzinfo)

        return due < now

    def to_dict(self) -> dict:
        data = {
            "name": self.name,
            "type": self.type,
            "date": self.date,
            "dueDate": self.due_date,
            "score": self.score,
            "scoreType": self.score_type,
            "points": self.points,
            "pointsEarned": self.points_earned,
            "pointsPossible": self.points_possible,
            "notes": self.notes,
            "description": self.description,
        }
        if self.is_hypothetical:
            data["isHypothetical"] = True
            data["hypotheticalId"] = self.hypothetical_id
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Assignment:
        return cls(
            name=_text(data, "name"),
            type=_text(data, "type", "Assignment"),
            date=_text(data, "date", ""),
            due_date=_text(data, "dueDate", ""),
            score=_text(data, "score", "Not Graded"),
            points=_text(data, "points", ""),
            points_earned=_optional_float(data.get("pointsEarned")),
            points_possible=_optional_float(data.get("pointsPossible")),
            notes=_text(data, "notes", ""),
            description=_text(data, "description", ""),
            score_type=_text(data, "scoreType", ""),
            is_hypothetical=bool(data.get("isHypothetical", False)),
            hypothetical_id=data.get("hypotheticalId"),
        )


@dataclass(frozen=True)
class Category:
    name: str
    weight: float = 0.0
    score: float = 0.0
    points: str = ""

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "weight": self.weight,
            "score": self.score,
            "points": self.points,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Category:
        return cls(
            name=_text(data, "name"),
            weight=float(data.get("weight", 0.0)),
            score=float(data.get("score", 0.0)),
            points=_text(data, "points", ""),
        )


@dataclass(frozen=True)
class Course:
    id: str
    name: str
    period: int
    teacher: str = "Unknown Teacher"
    room: str = ""
    grade: Optional[float] = None
    letter_grade: str = "N/A"
    assignments: Tuple[Assignment, ...] = ()
    categories: Optional[Tuple[Category, ...]] = None

    @property
    def uses_categories(self) -> bool:
        return bool(self.categories)

    def missing_assignments(self, now: Optional[datetime] = None) -> Tuple[Assignment, ...]:
        return tuple(a for a in self.assignments if a.is_missing(now))

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "period": self.period,
            "teacher": self.teacher,
            "room": self.room,
            "grade": self.grade,
            "letterGrade": self.letter_grade,
            "assignments": [a.to_dict() for a in self.assignments],
        }
        if self.categories is not None:
            data["categories"] = [c.to_dict() for c in self.categories]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Course:
        categories = data.get("categories")
        return cls(
            id=_text(data, "id"),
            name=_text(data, "name"),
            period=int(data["period"]),
            teacher=_text(data, "teacher", "Unknown Teacher"),
            room=_text(data, "room", ""),
            grade=_optional_float(data.get("grade")),
            letter_grade=_text(data, "letterGrade", "N/A"),
            assignments=tuple(
                Assignment.from_dict(a) for a in data.get("assignments", [])
            ),
            categories=(
                tuple(Category.from_dict(c) for c in categories)
                if categories is not None
                else None
            ),
        )


@dataclass(frozen=True)
class ReportingPeriod:
    name: str = "Current Term"
    start_date: str = ""
    end_date: str = ""
    index: Optional[int] = None

    def to_dict(self) -> dict:
        data = {
            "name": self.name,
            "startDate": self.start_date,
            "endDate": self.end_date,
        }
        if self.index is not None:
            data["index"] = self.index
        return data

    @classmethod
    def from_dict(cls, data: dict) -> ReportingPeriod:
        index = data.get("index")
        return cls(
            name=_text(data, "name", "Current Term"),
            start_date=_text(data, "startDate", ""),
            end_date=_text(data, "endDate", ""),
            index=int(index) if index is not None else None,
        )


@dataclass(frozen=True)
class StudentInfo:
    name: str = ""
    student_id: str = ""
    grade: str = ""
    school: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    birth_date: str = ""
    counselor: str = ""
    photo: str = ""

    _keys = {
        "name": "name",
        "student_id": "studentId",
        "grade": "grade",
        "school": "school",
        "email": "email",
        "phone": "phone",
        "address": "address",
        "birth_date": "birthDate",
        "counselor": "counselor",
        "photo": "photo",
    }

    def to_dict(self) -> dict:
        return {key: getattr(self, attr) for attr, key in self._keys.items()}

    @classmethod
    def from_dict(cls, data: dict) -> StudentInfo:
        return cls(
            **{attr: str(data.get(key) or "") for attr, key in cls._keys.items()}
        )


@dataclass(frozen=True)
class Gradebook:
    courses: Tuple[Course, ...] = ()
    reporting_period: ReportingPeriod = field(default_factory=ReportingPeriod)
    reporting_periods: Tuple[ReportingPeriod, ...] = ()
    student_info: Optional[StudentInfo] = None

    def course(self, course_id: str) -> Optional[Course]:
        for course in self.courses:
            if course.id == course_id:
                return course
        return None

    def to_dict(self) -> dict:
        return {
            "courses": [c.to_dict() for c in self.courses],
            "reportingPeriod": self.reporting_period.to_dict(),
            "reportingPeriods": [p.to_dict() for p in self.reporting_periods],
            "studentInfo": (
                self.student_info.to_dict() if self.student_info is not None else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Gradebook:
        reporting_period = data.get("reportingPeriod")
        student_info = data.get("studentInfo")
        return cls(
            courses=tuple(Course.from_dict(c) for c in data.get("courses", [])),
            reporting_period=(
                ReportingPeriod.from_dict(reporting_period)
                if reporting_period
                else ReportingPeriod()
            ),
            reporting_periods=tuple(
                ReportingPeriod.from_dict(p) for p in data.get("reportingPeriods", [])
            ),
            student_info=(
                StudentInfo.from_dict(student_info) if student_info else None
            ),
        )


# === hypothetical overrides ===


@dataclass(frozen=True)
class ScoreOverride:
    points_earned: float
    points_possible: float


@dataclass(frozen=True)
class HypotheticalAssignment:
    id: str
    name: str
    type: str
    points_earned: float
    points_possible: float


@dataclass(frozen=True)
class CourseOverrides:
    """
    Simulated edits for one course.

    Attributes:
        modified_assignments (Dict[int, ScoreOverride]): Replacement scores keyed
            by the index of the assignment in the course's assignment list.
        added_assignments (Tuple[HypotheticalAssignment, ...]): Synthetic
            assignments appended after the real ones, in insertion order.
    """

    modified_assignments: Dict[int, ScoreOverride] = field(default_factory=dict)
    added_assignments: Tuple[HypotheticalAssignment, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.modified_assignments and not self.added_assignments


# === change tracking ===


@dataclass(frozen=True)
class GradeChange:
    course_id: str
    course_name: str
    previous_grade: Optional[float]
    new_grade: Optional[float]
    previous_letter: Optional[str]
    new_letter: Optional[str]
    timestamp: str

    def to_dict(self) -> dict:
        return {
            "courseId": self.course_id,
            "courseName": self.course_name,
            "previousGrade": self.previous_grade,
            "newGrade": self.new_grade,
            "previousLetter": self.previous_letter,
            "newLetter": self.new_letter,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> GradeChange:
        return cls(
            course_id=data["courseId"],
            course_name=data["courseName"],
            previous_grade=_optional_float(data.get("previousGrade")),
            new_grade=_optional_float(data.get("newGrade")),
            previous_letter=data.get("previousLetter"),
            new_letter=data.get("newLetter"),
            timestamp=data["timestamp"],
        )


@dataclass(frozen=True)
class Credentials:
    district: str
    username: str
    password: str

    @property
    def is_demo(self) -> bool:
        return self.district == "demo"

    def to_dict(self) -> dict:
        return {
            "district": self.district,
            "username": self.username,
            "password": self.password,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Credentials:
        return cls(
            district=data["district"],
            username=data["username"],
            password=data["password"],
        )

    def __repr__(self) -> str:
        return f"Credentials({self.district}, {self.username[:3]}***)"


def _optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    return float(value)


def _text(data: dict, key: str, default: Optional[str] = None) -> str:
    """Reads a string field, rejecting other types so malformed records fail on load."""
    value = data[key] if default is None else data.get(key, default)
    if value is None:
        value = default
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string, got {type(value).__name__}")
    return value
