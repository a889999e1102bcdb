"""
Field access and coercion helpers for raw StudentVue payloads.

The upstream XML is converted to nested dicts in which attributes may appear as
``_Name``, ``@Name`` or plain ``Name`` depending on the converter, collections
of one collapse to a bare object, and every leaf is a string. These helpers are
the only place that knows about those shapes.
"""

import re
from typing import Any, Optional, Tuple

import numpy as np

from gradevue.errors import MalformedUpstreamData
from gradevue.utils import ensure_list

KEY_PREFIXES = ("_", "@", "")

UNGRADED_PATTERN = re.compile(r"^\s*(not graded|n/?a|not due)?\s*$", re.IGNORECASE)
UNGRADED_MARKER_PATTERN = re.compile(r"^\s*(not graded|n/?a|not due)\s*$", re.IGNORECASE)
POINTS_PATTERN = re.compile(r"(-?\d+(?:\.\d+)?)\s*/\s*(\d+(?:\.\d+)?)")
SCORE_PATTERN = re.compile(
    r"(-?\d+(?:\.\d+)?)\s*(?:out of|/)\s*(\d+(?:\.\d+)?)", re.IGNORECASE
)
POSSIBLE_ONLY_PATTERN = re.compile(
    r"^\s*(\d+(?:\.\d+)?)\s*points?\s+possible", re.IGNORECASE
)


def get_node(raw: Any, name: str) -> Any:
    """
    Looks up a child value under any of the accepted key spellings.

    Args:
        raw (Any): A dict produced from the upstream XML. Anything else yields None.
        name (str): The unprefixed field name, e.g. ``"Courses"``.

    Returns:
        Any: The first non-None value found under ``_name``, ``@name`` or ``name``.
    """
    if not isinstance(raw, dict):
        return None
    for prefix in KEY_PREFIXES:
        value = raw.get(prefix + name)
        if value is not None:
            return value
    return None


def get_list(raw: Any, *path: str) -> list:
    """Follows ``path`` through nested nodes and returns the final node as a list."""
    node = raw
    for name in path:
        node = get_node(node, name)
        if node is None:
            return []
    return ensure_list(node)


def text_of(value: Any) -> Optional[str]:
    """Extracts the text content of a leaf, which may be wrapped as ``{"#text": ...}``."""
    if value is None:
        return None
    if isinstance(value, dict):
        value = value.get("#text")
        if value is None:
            return None
    return str(value).strip()


def get_text(raw: Any, *names: str, default: str = "") -> str:
    """
    Returns the first non-empty text value among several candidate field names.

    Args:
        raw (Any): The node to read from.
        *names (str): Candidate field names, in priority order.
        default (str): Returned when no candidate holds a non-empty value.

    Returns:
        str: The stripped text value or ``default``.
    """
    for name in names:
        text = text_of(get_node(raw, name))
        if text:
            return text
    return default


def to_float(value: Any) -> Optional[float]:
    """
    Coerces an upstream numeric string to a float.

    Percent signs and surrounding whitespace are tolerated.

    Args:
        value (Any): The raw value.

    Returns:
        Optional[float]: The number, or None when the value is empty.

    Raises:
        MalformedUpstreamData: If the value is not a finite number.
    """
    text = text_of(value)
    if not text:
        return None

    text = text.rstrip("%").replace(",", "").strip()
    try:
        number = float(text)
    except ValueError as e:
        raise MalformedUpstreamData(f"not a number: {value!r}") from e

    if not np.isfinite(number):
        raise MalformedUpstreamData(f"not a finite number: {value!r}")

    return number


def to_int(value: Any) -> Optional[int]:
    """Coerces an upstream integer string, truncating any fractional part."""
    number = to_float(value)
    return None if number is None else int(number)


def is_ungraded(score: str) -> bool:
    return bool(UNGRADED_PATTERN.match(score or ""))


def has_ungraded_marker(score: str) -> bool:
    """True only when the score text explicitly says the assignment is ungraded."""
    return bool(UNGRADED_MARKER_PATTERN.match(score or ""))


def points_from_strings(
    score: str, points: str
) -> Tuple[Optional[float], Optional[float]]:
    """
    Derives earned and possible points from an assignment's display strings.

    The points string (``"8 / 10"``) is tried first, then the score string
    (``"8 out of 10"``), then a possible-only string (``"10 Points Possible"``).
    A score marked ungraded ("Not Graded", "N/A", "Not Due") never yields
    earned points, even if the points string carries a placeholder such as
    ``"0/100"``. A blank score does not count as such a marker.

    Args:
        score (str): The display score, e.g. ``"95 out of 100"`` or ``"Not Graded"``.
        points (str): The display points, e.g. ``"95 / 100"``.

    Returns:
        Tuple[Optional[float], Optional[float]]: ``(earned, possible)``; either
            may be None when it cannot be derived.
    """
    earned = possible = None

    for text, pattern in ((points, POINTS_PATTERN), (score, SCORE_PATTERN)):
        match = pattern.search(text or "")
        if match:
            earned, possible = float(match.group(1)), float(match.group(2))
            break
    else:
        for text in (points, score):
            match = POSSIBLE_ONLY_PATTERN.match(text or "")
            if match:
                possible = float(match.group(1))
                break

    if has_ungraded_marker(score):
        earned = None

    return earned, possible
