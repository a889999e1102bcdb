import os
from datetime import datetime
from typing import Any, Optional

from dateutil import parser

session_path = os.getenv("GRADEVUE_SESSION_PATH", ".gradevue_session.json")
log_level = os.getenv("GRADEVUE_LOG_LEVEL", "INFO")

try:
    request_timeout = float(os.getenv("GRADEVUE_TIMEOUT", "30"))
except ValueError:
    request_timeout = 30.0


def ensure_list(value: Any) -> list[Any]:
    """
    Normalizes a value that may be missing, a single item, or a list into a list.

    The upstream service collapses one-element collections into a bare object,
    so every collection read from a payload passes through here.

    Args:
        value (Any): None, a single item, or a list/tuple of items.

    Returns:
        list[Any]: An empty list for None, the items of a list/tuple, or a
            one-element list wrapping anything else.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [item for item in value if item is not None]
    return [value]


def format_number(value: float) -> str:
    """Formats a point value without a trailing ``.0``."""
    return f"{value:g}"


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """
    Parses an upstream date string whose format is not guaranteed.

    StudentVue districts return dates such as ``"12/6/2024"``, ``"Dec 6, 2024"``
    or ISO timestamps depending on configuration, so the string is handed to
    ``dateutil`` rather than matched against a fixed format.

    Args:
        value (Optional[str]): The raw date string.

    Returns:
        Optional[datetime]: The parsed datetime, or None when the value is empty
            or cannot be interpreted as a date.
    """
    if not value or not isinstance(value, str):
        return None
    try:
        return parser.parse(value)
    except (ValueError, OverflowError):
        return None
