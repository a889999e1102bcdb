from gradevue import api
from gradevue import changes
from gradevue import errors
from gradevue import gradebook
from gradevue import hypothetical
from gradevue import parser
from gradevue import session
from gradevue import utils

from gradevue.api import (DEMO_CREDENTIALS, StudentVueClient, demo_gradebook,
                          fetch_gradebook,)
from gradevue.changes import (detect_grade_changes,)
from gradevue.errors import (GradeVueError, MalformedUpstreamData,
                             UpstreamAuthFailure, UpstreamError,
                             UpstreamTimeout,)
from gradevue.gradebook import (Assignment, Category, Course, CourseOverrides,
                                Credentials, GPAEntry, GPAResult, GradeChange,
                                Gradebook, HypotheticalAssignment,
                                ReportingPeriod, ScoreOverride, StudentInfo,
                                calculate_gpa, course_summary,
                                dashboard_stats, letter_from_percentage,
                                points_from_letter, simple_course_grade,
                                weighted_course_grade,)
from gradevue.hypothetical import (apply_overrides,)
from gradevue.parser import (GradebookParser, parse_gradebook,)
from gradevue.session import (GradeSession, SessionState, SessionStore,)

__all__ = ['Assignment', 'Category', 'Course', 'CourseOverrides',
           'Credentials', 'DEMO_CREDENTIALS', 'GPAEntry', 'GPAResult',
           'GradeChange', 'GradeSession', 'GradeVueError', 'Gradebook',
           'GradebookParser', 'HypotheticalAssignment',
           'MalformedUpstreamData', 'ReportingPeriod', 'ScoreOverride',
           'SessionState', 'SessionStore', 'StudentInfo', 'StudentVueClient',
           'UpstreamAuthFailure', 'UpstreamError', 'UpstreamTimeout', 'api',
           'apply_overrides', 'calculate_gpa', 'changes', 'course_summary',
           'dashboard_stats', 'demo_gradebook', 'detect_grade_changes',
           'errors', 'fetch_gradebook', 'gradebook', 'hypothetical',
           'letter_from_percentage', 'parse_gradebook', 'parser',
           'points_from_letter', 'session', 'simple_course_grade', 'utils',
           'weighted_course_grade']
