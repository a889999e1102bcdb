from gradevue.gradebook.models import (
    Assignment,
    Category,
    Course,
    Credentials,
    Gradebook,
    ReportingPeriod,
    StudentInfo,
)
from gradevue.parser.fields import points_from_strings

DEMO_CREDENTIALS = Credentials(district="demo", username="demo", password="demo")

FALL_2024 = ReportingPeriod("Fall Semester 2024", "Aug 26, 2024", "Dec 20, 2024")
SPRING_2024 = ReportingPeriod("Spring Semester 2024", "Jan 8, 2024", "May 24, 2024")

# (name, period, teacher, room, grade, letter, assignments, categories)
# assignments: (name, type, date, due date, score, points, notes)
# categories: (name, weight, score, points)
DEMO_COURSES = [
    (
        "AP Calculus BC", 1, "Ms. Rodriguez", "201", 92.5, "A-",
        [
            ("Unit 5 Test - Integration", "Tests", "Nov 29, 2024", "Dec 6, 2024", "95 out of 100", "95/100", ""),
            ("Quiz: Derivatives", "Quizzes", "Nov 26, 2024", "Nov 30, 2024", "28 out of 30", "28/30", ""),
            ("Homework Set 12", "Homework", "Dec 3, 2024", "Dec 7, 2024", "19 out of 20", "19/20", ""),
            ("Unit 6 Test - Applications", "Tests", "Dec 10, 2024", "Dec 15, 2024", "Not Graded", "0/100", ""),
        ],
        [
            ("Tests", 40, 90, "360/400"),
            ("Quizzes", 30, 90, "270/300"),
            ("Homework", 20, 95, "190/200"),
            ("Participation", 10, 100, "100/100"),
        ],
    ),
    (
        "AP English Literature", 2, "Mr. Thompson", "105", 88.3, "B+",
        [
            ("Hamlet Essay", "Essays", "Nov 20, 2024", "Dec 4, 2024", "85 out of 100", "85/100", "Good analysis, improve thesis"),
            ("Reading Quiz - Act III", "Reading Quizzes", "Nov 25, 2024", "Nov 25, 2024", "88 out of 100", "88/100", ""),
            ("Poetry Analysis", "Essays", "Dec 1, 2024", "Dec 8, 2024", "92 out of 100", "92/100", ""),
        ],
        [
            ("Essays", 50, 88, "440/500"),
            ("Reading Quizzes", 25, 88, "220/250"),
            ("Participation", 25, 92, "230/250"),
        ],
    ),
    (
        "AP Chemistry", 3, "Dr. Patel", "302", 85.7, "B",
        [
            ("Lab Report: Titration", "Labs", "Nov 22, 2024", "Nov 29, 2024", "91 out of 100", "91/100", ""),
            ("Chapter 8 Test", "Tests", "Dec 2, 2024", "Dec 2, 2024", "82 out of 100", "82/100", ""),
            ("Homework 14", "Homework", "Dec 5, 2024", "Dec 9, 2024", "18 out of 20", "18/20", ""),
        ],
        [
            ("Tests", 45, 85, "382/450"),
            ("Labs", 35, 91, "318/350"),
            ("Homework", 20, 82, "164/200"),
        ],
    ),
    (
        "US History", 4, "Mrs. Johnson", "210", 94.2, "A",
        [
            ("Civil War Essay", "Essays", "Nov 15, 2024", "Nov 22, 2024", "96 out of 100", "96/100", "Excellent research"),
            ("Chapter 12 Test", "Tests", "Dec 1, 2024", "Dec 1, 2024", "93 out of 100", "93/100", ""),
            ("Document Analysis", "Projects", "Dec 8, 2024", "Dec 15, 2024", "Not Graded", "0/50", ""),
        ],
        [
            ("Tests", 40, 93, "372/400"),
            ("Essays", 30, 96, "288/300"),
            ("Projects", 20, 92, "184/200"),
            ("Participation", 10, 98, "98/100"),
        ],
    ),
    (
        "Spanish III", 5, "Sra. Martinez", "115", 91.8, "A-",
        [
            ("Oral Presentation", "Speaking", "Nov 28, 2024", "Nov 28, 2024", "95 out of 100", "95/100", "Great pronunciation!"),
            ("Writing Assignment 5", "Writing", "Dec 3, 2024", "Dec 6, 2024", "88 out of 100", "88/100", ""),
            ("Vocabulary Quiz Ch. 7", "Quizzes", "Dec 9, 2024", "Dec 9, 2024", "18 out of 20", "18/20", ""),
        ],
        [
            ("Speaking", 30, 94, "282/300"),
            ("Writing", 30, 90, "270/300"),
            ("Quizzes", 25, 91, "227/250"),
            ("Participation", 15, 95, "142/150"),
        ],
    ),
    (
        "Physics", 6, "Mr. Wilson", "305", 87.4, "B+",
        [
            ("Lab: Projectile Motion", "Labs", "Nov 20, 2024", "Nov 27, 2024", "88 out of 100", "88/100", ""),
            ("Problem Set 10", "Homework", "Dec 2, 2024", "Dec 6, 2024", "85 out of 100", "85/100", ""),
            ("Unit 4 Test", "Tests", "Dec 10, 2024", "Dec 10, 2024", "Not Graded", "0/100", ""),
        ],
        [
            ("Tests", 40, 86, "344/400"),
            ("Labs", 35, 89, "311/350"),
            ("Homework", 25, 87, "217/250"),
        ],
    ),
]


def _demo_assignment(name, kind, date, due_date, score, points, notes) -> Assignment:
    earned, possible = points_from_strings(score, points)
    return Assignment(
        name=name,
        type=kind,
        date=date,
        due_date=due_date,
        score=score,
        points=points,
        points_earned=earned,
        points_possible=possible,
        notes=notes,
    )


def demo_gradebook() -> Gradebook:
    """Builds the sample gradebook shown when logged in with the demo credentials."""
    courses = tuple(
        Course(
            id=f"course-{index}",
            name=name,
            period=period,
            teacher=teacher,
            room=room,
            grade=grade,
            letter_grade=letter,
            assignments=tuple(_demo_assignment(*row) for row in assignments),
            categories=tuple(Category(*row) for row in categories),
        )
        for index, (name, period, teacher, room, grade, letter, assignments, categories)
        in enumerate(DEMO_COURSES)
    )

    return Gradebook(
        courses=courses,
        reporting_period=FALL_2024,
        reporting_periods=(FALL_2024, SPRING_2024),
        student_info=StudentInfo(
            name="Alex Johnson",
            student_id="123456",
            grade="11",
            school="Westview High School",
            email="alex.johnson@student.westview.edu",
            phone="(555) 123-4567",
            counselor="Ms. Williams",
        ),
    )
