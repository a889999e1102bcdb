from datetime import datetime
from typing import Optional

import numpy as np
import pandas as pd

from gradevue.gradebook.grade_math import (
    letter_from_percentage,
    points_from_letter,
)
from gradevue.gradebook.models import Gradebook

SUMMARY_COLUMNS = [
    "period",
    "course",
    "teacher",
    "grade",
    "letter",
    "gpa_points",
    "assignments",
    "missing",
    "hypothetical",
]


def course_summary(gradebook: Gradebook, now: Optional[datetime] = None) -> pd.DataFrame:
    """Builds a one-row-per-course summary table of a gradebook.

    Args:
        gradebook (Gradebook): The canonical or hypothetical gradebook.
        now (datetime, optional): Reference time for missing-assignment detection.

    Returns:
        pd.DataFrame: Columns ``period``, ``course``, ``teacher``, ``grade``
            (NaN when ungraded), ``letter``, ``gpa_points``, ``assignments``,
            ``missing`` and ``hypothetical`` (count of simulated assignments),
            indexed by course id in upstream order.

    Example:
        >>> course_summary(gradebook).loc["course-0", "letter"]
        'A-'
    """
    rows = []
    for course in gradebook.courses:
        rows.append(
            {
                "id": course.id,
                "period": course.period,
                "course": course.name,
                "teacher": course.teacher,
                "grade": np.nan if course.grade is None else course.grade,
                "letter": course.letter_grade,
                "gpa_points": points_from_letter(course.letter_grade),
                "assignments": len(course.assignments),
                "missing": len(course.missing_assignments(now)),
                "hypothetical": sum(a.is_hypothetical for a in course.assignments),
            }
        )

    if not rows:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    return pd.DataFrame(rows).set_index("id")[SUMMARY_COLUMNS]


def dashboard_stats(gradebook: Gradebook, now: Optional[datetime] = None) -> dict:
    """Computes the headline numbers shown on the dashboard.

    The GPA here is derived from each course's percentage rather than its
    upstream letter, so it stays consistent with hypothetical recalculation.

    Args:
        gradebook (Gradebook): The gradebook to summarize.
        now (datetime, optional): Reference time for missing-assignment detection.

    Returns:
        dict: ``average_grade`` and ``gpa`` over graded courses (0.0 when none
            are graded), ``average_letter``, ``course_count`` and
            ``missing_assignments``.
    """
    df = course_summary(gradebook, now)
    graded = df["grade"].dropna().astype(float)

    if graded.empty:
        average_grade = 0.0
        gpa = 0.0
    else:
        average_grade = float(graded.mean())
        gpa = float(
            np.mean([points_from_letter(letter_from_percentage(g)) for g in graded])
        )

    return {
        "average_grade": average_grade,
        "average_letter": letter_from_percentage(average_grade if not graded.empty else None),
        "gpa": gpa,
        "course_count": len(df),
        "missing_assignments": int(df["missing"].sum()) if len(df) else 0,
    }
