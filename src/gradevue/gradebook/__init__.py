from gradevue.gradebook import grade_math
from gradevue.gradebook import grading_config
from gradevue.gradebook import models
from gradevue.gradebook import report

from gradevue.gradebook.grade_math import (GPAEntry, GPAResult, calculate_gpa,
                                           category_breakdown, course_grade,
                                           gpa_entries_from_gradebook,
                                           letter_from_percentage,
                                           match_category, points_from_letter,
                                           simple_course_grade,
                                           weighted_course_grade,)
from gradevue.gradebook.grading_config import (GradeConfig, grade_config,
                                               grade_ranges, letter_points,
                                               max_grade_changes,
                                               ungraded_letter,)
from gradevue.gradebook.models import (Assignment, Category, Course,
                                       CourseOverrides, Credentials, Gradebook,
                                       GradeChange, HypotheticalAssignment,
                                       ReportingPeriod, ScoreOverride,
                                       StudentInfo,)
from gradevue.gradebook.report import (SUMMARY_COLUMNS, course_summary,
                                       dashboard_stats,)

__all__ = ['Assignment', 'Category', 'Course', 'CourseOverrides',
           'Credentials', 'GPAEntry', 'GPAResult', 'GradeChange',
           'GradeConfig', 'Gradebook', 'HypotheticalAssignment',
           'ReportingPeriod', 'SUMMARY_COLUMNS', 'ScoreOverride',
           'StudentInfo', 'calculate_gpa', 'category_breakdown',
           'course_grade', 'course_summary', 'dashboard_stats',
           'gpa_entries_from_gradebook', 'grade_config', 'grade_math',
           'grade_ranges', 'grading_config', 'letter_from_percentage',
           'letter_points', 'match_category', 'max_grade_changes', 'models',
           'points_from_letter', 'report', 'simple_course_grade',
           'ungraded_letter', 'weighted_course_grade']
