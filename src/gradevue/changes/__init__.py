from gradevue.changes import detector

from gradevue.changes.detector import (detect_grade_changes,)

__all__ = ['detect_grade_changes', 'detector']
