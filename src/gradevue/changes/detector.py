from datetime import datetime, timezone
from typing import List, Optional

from gradevue.gradebook.models import Gradebook, GradeChange


def detect_grade_changes(
    previous: Optional[Gradebook],
    next: Gradebook,
    now: Optional[datetime] = None,
) -> List[GradeChange]:
    """
    Compares two gradebook snapshots course by course.

    Courses are matched by id. A matched course whose grade or letter differs
    produces one GradeChange; a missing grade is compared like any other value,
    so a course going from ungraded to graded is a change. Courses present in
    only one snapshot produce nothing.

    Args:
        previous (Optional[Gradebook]): The snapshot being replaced, if any.
        next (Gradebook): The new snapshot.
        now (datetime, optional): Timestamp for the batch. Defaults to the
            current UTC time.

    Returns:
        List[GradeChange]: Changes in the course order of ``next``. All
            entries share one ISO-8601 UTC timestamp.
    """
    if previous is None or not next.courses:
        return []

    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    timestamp = now.astimezone(timezone.utc).isoformat()

    previous_by_id = {course.id: course for course in previous.courses}

    changes = []
    for course in next.courses:
        old = previous_by_id.get(course.id)
        if old is None:
            continue
        if old.grade == course.grade and old.letter_grade == course.letter_grade:
            continue
        changes.append(
            GradeChange(
                course_id=course.id,
                course_name=course.name,
                previous_grade=old.grade,
                new_grade=course.grade,
                previous_letter=old.letter_grade,
                new_letter=course.letter_grade,
                timestamp=timestamp,
            )
        )

    return changes
