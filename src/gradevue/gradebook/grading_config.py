from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import numpy as np


@dataclass
class GradeConfig:
    """
    Configuration class holding the grading tables used across gradevue.

    Attributes:
        grade_ranges (List[Tuple[float, float, str]]): Letter grade bands as
            ``(low, high, letter)``; a percentage belongs to a band when
            ``low <= pct < high``. The bands cover the whole real line.
        letter_points (Dict[str, float]): GPA points per letter grade on a 4.0 scale.
        ap_bonus (float): Weighted GPA bonus for AP courses.
        honors_bonus (float): Weighted GPA bonus for Honors courses.
        max_grade_changes (int): Number of grade change events retained by a session.
        ungraded_letter (str): Letter shown for a course without a grade.

    Example:
        ```python
        grade_config = GradeConfig(
            grade_ranges=[(90, np.inf, "A"), (-np.inf, 90, "F")],
            max_grade_changes=10,
        )
        ```
    """

    grade_ranges: List[Tuple[float, float, str]] = field(
        default_factory=lambda: [
            (93, np.inf, "A"),
            (90, 93, "A-"),
            (87, 90, "B+"),
            (83, 87, "B"),
            (80, 83, "B-"),
            (77, 80, "C+"),
            (73, 77, "C"),
            (70, 73, "C-"),
            (67, 70, "D+"),
            (63, 67, "D"),
            (60, 63, "D-"),
            (-np.inf, 60, "F"),
        ]
    )
    letter_points: Dict[str, float] = field(
        default_factory=lambda: {
            "A+": 4.0,
            "A": 4.0,
            "A-": 3.7,
            "B+": 3.3,
            "B": 3.0,
            "B-": 2.7,
            "C+": 2.3,
            "C": 2.0,
            "C-": 1.7,
            "D+": 1.3,
            "D": 1.0,
            "D-": 0.7,
            "F": 0.0,
        }
    )
    ap_bonus: float = 1.0
    honors_bonus: float = 0.5
    max_grade_changes: int = 50
    ungraded_letter: str = "N/A"


grade_config = GradeConfig()

grade_ranges = grade_config.grade_ranges
letter_points = grade_config.letter_points
max_grade_changes = grade_config.max_grade_changes
ungraded_letter = grade_config.ungraded_letter
