"""
What-if recalculation.

The engine derives a hypothetical gradebook from the canonical one and a set
of per-course overrides. It is pure: the base gradebook is never mutated, and
courses without overrides are carried over by reference.
"""

from dataclasses import replace
from typing import Mapping, Optional

from gradevue.gradebook.grade_math import (
    category_breakdown,
    course_grade,
    letter_from_percentage,
)
from gradevue.gradebook.models import (
    Assignment,
    Course,
    CourseOverrides,
    Gradebook,
    HypotheticalAssignment,
    ScoreOverride,
)
from gradevue.logging.config import logger_session
from gradevue.utils import format_number


def score_strings(points_earned: float, points_possible: float) -> tuple:
    """Builds the ``(score, points)`` display strings for a simulated score."""
    earned = format_number(points_earned)
    possible = format_number(points_possible)
    return f"{earned} out of {possible}", f"{earned} / {possible}"


def _override_assignment(assignment: Assignment, override: ScoreOverride) -> Assignment:
    score, points = score_strings(override.points_earned, override.points_possible)
    return replace(
        assignment,
        score=score,
        points=points,
        points_earned=override.points_earned,
        points_possible=override.points_possible,
    )


def _to_assignment(hypothetical: HypotheticalAssignment) -> Assignment:
    score, points = score_strings(hypothetical.points_earned, hypothetical.points_possible)
    return Assignment(
        name=hypothetical.name,
        type=hypothetical.type,
        score=score,
        points=points,
        points_earned=hypothetical.points_earned,
        points_possible=hypothetical.points_possible,
        is_hypothetical=True,
        hypothetical_id=hypothetical.id,
    )


def apply_course_overrides(course: Course, overrides: Optional[CourseOverrides]) -> Course:
    """
    Applies one course's overrides and recomputes its grade.

    Args:
        course (Course): The canonical course.
        overrides (Optional[CourseOverrides]): The simulated edits for the course.

    Returns:
        Course: ``course`` itself when there is nothing to apply, otherwise a
            new course with edited assignments, grade, letter and categories.
    """
    if overrides is None or overrides.is_empty:
        return course

    assignments = list(course.assignments)

    for index, override in overrides.modified_assignments.items():
        if not 0 <= index < len(assignments):
            logger_session.debug(
                f"Ignoring override for assignment {index} of {course.id}: out of range"
            )
            continue
        assignments[index] = _override_assignment(assignments[index], override)

    assignments.extend(_to_assignment(a) for a in overrides.added_assignments)

    grade = course_grade(course, assignments)
    categories = course.categories
    if course.uses_categories:
        categories = category_breakdown(assignments, course.categories)

    return replace(
        course,
        assignments=tuple(assignments),
        grade=grade,
        letter_grade=letter_from_percentage(grade),
        categories=categories,
    )


def apply_overrides(
    base: Gradebook, overrides_by_course_id: Mapping[str, CourseOverrides]
) -> Gradebook:
    """
    Derives the hypothetical view of a gradebook.

    Args:
        base (Gradebook): The canonical gradebook. It is not modified.
        overrides_by_course_id (Mapping[str, CourseOverrides]): Simulated edits
            keyed by course id. Entries for unknown course ids are ignored.

    Returns:
        Gradebook: A gradebook in which every course with a non-empty override
            entry has been recalculated. Returns ``base`` itself when no
            course changed.

    Example:
        >>> overrides = {"course-0": CourseOverrides({0: ScoreOverride(100, 100)})}
        >>> apply_overrides(gradebook, overrides).courses[0].grade
        100.0
    """
    if not overrides_by_course_id:
        return base

    courses = tuple(
        apply_course_overrides(course, overrides_by_course_id.get(course.id))
        for course in base.courses
    )

    if all(new is old for new, old in zip(courses, base.courses)):
        return base

    return replace(base, courses=courses)
