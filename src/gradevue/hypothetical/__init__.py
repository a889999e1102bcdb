from gradevue.hypothetical import engine

from gradevue.hypothetical.engine import (apply_course_overrides,
                                          apply_overrides, score_strings,)

__all__ = ['apply_course_overrides', 'apply_overrides', 'engine',
           'score_strings']
