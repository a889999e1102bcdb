import math
from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

import numpy as np

from gradevue.gradebook.grading_config import grade_config
from gradevue.gradebook.models import Assignment, Category, Course, Gradebook
from gradevue.utils import format_number


def letter_from_percentage(pct: Optional[float]) -> str:
    """Gets the letter grade corresponding to a percentage.

    Args:
        pct (Optional[float]): The percentage to convert. Values above 100 (extra
            credit) and below 0 are valid.

    Returns:
        str: The letter grade from the grading config's ``grade_ranges``, or
            ``"N/A"`` when the percentage is None or NaN.

    Example:
        >>> letter_from_percentage(85.0)
        'B'
        >>> letter_from_percentage(None)
        'N/A'
    """
    if pct is None or math.isnan(pct):
        return grade_config.ungraded_letter
    for low, high, letter in grade_config.grade_ranges:
        # the top band is open-ended, so an infinite percentage still lands in it
        if low <= pct < high or pct == high == np.inf:
            return letter
    return "F"


def points_from_letter(letter: Optional[str]) -> float:
    """Gets the GPA points for a letter grade on a 4.0 scale.

    Args:
        letter (Optional[str]): The letter grade, e.g. ``"B+"``. Case and
            surrounding whitespace are ignored.

    Returns:
        float: The grade points, or 0.0 for an unrecognized letter.
    """
    if not letter:
        return 0.0
    return grade_config.letter_points.get(letter.strip().upper(), 0.0)


def match_category(
    assignment_type: str, categories: Sequence[Category]
) -> Optional[Category]:
    """Finds the category an assignment belongs to.

    An assignment matches a category when either name contains the other,
    compared case-insensitively. Categories are checked in course order and the
    first match wins. An assignment that matches nothing is assigned to the
    first category of the course, not to an "uncategorized" bucket.

    Args:
        assignment_type (str): The assignment's free-form type label.
        categories (Sequence[Category]): The course's categories in course order.

    Returns:
        Optional[Category]: The matched category, or None if there are no categories.
    """
    if not categories:
        return None
    return categories[_match_category_index(assignment_type, categories)]


def _match_category_index(assignment_type: str, categories: Sequence[Category]) -> int:
    kind = (assignment_type or "").lower()
    for index, category in enumerate(categories):
        name = category.name.lower()
        if name in kind or kind in name:
            return index
    return 0


def _category_totals(assignments: Iterable[Assignment], categories: Sequence[Category]):
    """Sums earned and possible points per category index."""
    earned = defaultdict(float)
    possible = defaultdict(float)

    for assignment in assignments:
        if not assignment.counts_toward_grade:
            continue
        index = _match_category_index(assignment.type, categories)
        earned[index] += assignment.points_earned
        possible[index] += assignment.points_possible

    return earned, possible


def weighted_course_grade(
    assignments: Iterable[Assignment],
    categories: Sequence[Category],
    fallback: Optional[float] = None,
) -> Optional[float]:
    """Computes a category-weighted course grade.

    Each category's percentage is its earned points over its possible points.
    Categories without possible points are skipped entirely, and the final
    grade is normalized by the weight actually used rather than by 100.

    Args:
        assignments (Iterable[Assignment]): The course's assignments.
        categories (Sequence[Category]): The course's weighted categories.
        fallback (Optional[float]): Returned unchanged when no category has
            possible points, typically the course's last known grade.

    Returns:
        Optional[float]: The weighted percentage, or ``fallback``.

    Example:
        >>> tests = Category("Tests", weight=50)
        >>> homework = Category("HW", weight=50)
        >>> weighted_course_grade(
        ...     [Assignment("T1", "Tests", points_earned=90, points_possible=100),
        ...      Assignment("H1", "HW", points_earned=80, points_possible=100)],
        ...     [tests, homework],
        ... )
        85.0
    """
    categories = list(categories)
    if not categories:
        return fallback

    earned, possible = _category_totals(assignments, categories)

    used = [i for i in range(len(categories)) if possible[i] > 0]
    if not used:
        return fallback

    percents = np.array([earned[i] / possible[i] * 100 for i in used])
    weights = np.array([categories[i].weight for i in used], dtype=float)

    if weights.sum() <= 0:
        return fallback

    return float(np.dot(percents, weights) / weights.sum())


def simple_course_grade(assignments: Iterable[Assignment]) -> Optional[float]:
    """Computes an unweighted course grade from total points.

    Args:
        assignments (Iterable[Assignment]): The course's assignments.

    Returns:
        Optional[float]: Total earned over total possible as a percentage,
            counting only assignments with possible points, or None if there are none.
    """
    counted = [a for a in assignments if a.counts_toward_grade]
    if not counted:
        return None

    earned = np.array([a.points_earned for a in counted], dtype=float)
    possible = np.array([a.points_possible for a in counted], dtype=float)
    return float(earned.sum() / possible.sum() * 100)


def course_grade(course: Course, assignments: Iterable[Assignment]) -> Optional[float]:
    """Recomputes a course's grade from an assignment list.

    Courses with categories use :func:`weighted_course_grade`, falling back to
    the course's current grade; all others use :func:`simple_course_grade`.
    """
    if course.uses_categories:
        return weighted_course_grade(assignments, course.categories, course.grade)
    return simple_course_grade(assignments)


def category_breakdown(
    assignments: Iterable[Assignment], categories: Sequence[Category]
) -> tuple:
    """Recomputes each category's score and points display from assignments.

    Categories that receive no possible points keep their upstream values.

    Returns:
        tuple[Category, ...]: The categories in course order.
    """
    categories = list(categories)
    earned, possible = _category_totals(assignments, categories)

    updated = []
    for i, category in enumerate(categories):
        if possible[i] > 0:
            category = Category(
                name=category.name,
                weight=category.weight,
                score=earned[i] / possible[i] * 100,
                points=f"{format_number(earned[i])}/{format_number(possible[i])}",
            )
        updated.append(category)
    return tuple(updated)


# === GPA ===


@dataclass
class GPAEntry:
    course_name: str
    letter_grade: str
    credits: float = 1.0
    is_ap: bool = False
    is_honors: bool = False

    @property
    def grade_points(self) -> float:
        return points_from_letter(self.letter_grade)


@dataclass
class GPAResult:
    unweighted: float
    weighted: float
    total_credits: float


def calculate_gpa(entries: Sequence[GPAEntry]) -> GPAResult:
    """Calculates credit-weighted unweighted and weighted GPAs.

    The weighted scale adds the AP bonus to AP courses, or the Honors bonus to
    Honors courses. AP takes precedence when a course is flagged as both.

    Args:
        entries (Sequence[GPAEntry]): One entry per course.

    Returns:
        GPAResult: Both GPAs and the total credits; all zeros if there are no credits.
    """
    total_credits = sum(entry.credits for entry in entries)
    if total_credits <= 0:
        return GPAResult(unweighted=0.0, weighted=0.0, total_credits=0.0)

    unweighted_points = 0.0
    weighted_points = 0.0
    for entry in entries:
        bonus = 0.0
        if entry.is_ap:
            bonus = grade_config.ap_bonus
        elif entry.is_honors:
            bonus = grade_config.honors_bonus

        unweighted_points += entry.grade_points * entry.credits
        weighted_points += (entry.grade_points + bonus) * entry.credits

    return GPAResult(
        unweighted=unweighted_points / total_credits,
        weighted=weighted_points / total_credits,
        total_credits=total_credits,
    )


def gpa_entries_from_gradebook(gradebook: Gradebook) -> list:
    """Builds one GPA entry per course, inferring AP and Honors from the course name."""
    entries = []
    for course in gradebook.courses:
        name = course.name.lower()
        entries.append(
            GPAEntry(
                course_name=course.name,
                letter_grade=course.letter_grade,
                is_ap=name.startswith("ap ") or " ap " in name,
                is_honors="honors" in name or "hon " in name,
            )
        )
    return entries
