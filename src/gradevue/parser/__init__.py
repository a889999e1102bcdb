from gradevue.parser import fields
from gradevue.parser import parse

from gradevue.parser.fields import (get_list, get_node, get_text,
                                    has_ungraded_marker, is_ungraded,
                                    points_from_strings, text_of, to_float,
                                    to_int,)
from gradevue.parser.parse import (GradebookParser, parse_gradebook,)

__all__ = ['GradebookParser', 'fields', 'get_list', 'get_node', 'get_text',
           'has_ungraded_marker', 'is_ungraded', 'parse', 'parse_gradebook',
           'points_from_strings', 'text_of', 'to_float', 'to_int']
