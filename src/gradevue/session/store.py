import json
import os
from dataclasses import dataclass, field
from typing import List, Optional

from gradevue.gradebook.models import Credentials, Gradebook, GradeChange
from gradevue.logging.config import logger_session
from gradevue.utils import session_path


@dataclass
class PersistedSession:
    gradebook: Optional[Gradebook] = None
    last_updated: Optional[str] = None
    credentials: Optional[Credentials] = None
    grade_changes: List[GradeChange] = field(default_factory=list)


@dataclass
class SessionStore:
    """
    JSON file persistence for a grade session.

    The file holds four keys: ``gradebook``, ``lastUpdated``, ``credentials``
    and ``gradeChanges``. Writes go through a temporary file that replaces the
    original, so a crash never leaves a half-written session.

    Attributes:
        path (str): Location of the session file.
    """

    path: str = session_path

    @property
    def temp_path(self) -> str:
        return self.path + ".tmp"

    def read_raw(self) -> dict:
        """
        Reads the session file as a dict.

        Returns:
            dict: The stored keys, or an empty dict when the file is missing or
                is not a JSON object.
        """
        if not os.path.exists(self.path):
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger_session.warning(f"Discarding unreadable session file {self.path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger_session.warning(f"Discarding session file {self.path}: not an object")
            return {}

        return data

    def load(self) -> PersistedSession:
        """
        Loads the persisted session, discarding any entry that does not parse.

        Returns:
            PersistedSession: The restored values; everything empty on a cold start.
        """
        data = self.read_raw()
        session = PersistedSession()

        session.gradebook = self._load_entry(data, "gradebook", Gradebook.from_dict)
        session.credentials = self._load_entry(data, "credentials", Credentials.from_dict)

        last_updated = data.get("lastUpdated")
        session.last_updated = last_updated if isinstance(last_updated, str) else None

        changes = data.get("gradeChanges") or []
        if isinstance(changes, list):
            for raw in changes:
                change = self._load_entry({"change": raw}, "change", GradeChange.from_dict)
                if change is not None:
                    session.grade_changes.append(change)

        return session

    def _load_entry(self, data: dict, key: str, from_dict):
        raw = data.get(key)
        if raw is None:
            return None
        try:
            return from_dict(raw)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger_session.warning(f"Discarding malformed {key} in session file: {e}")
            return None

    def save(
        self,
        gradebook: Optional[Gradebook],
        last_updated: Optional[str],
        credentials: Optional[Credentials],
        grade_changes: List[GradeChange],
    ) -> dict:
        """
        Writes the session atomically.

        Returns:
            dict: The data written to disk.

        Raises:
            OSError: If the file cannot be written.
        """
        data = {
            "gradebook": gradebook.to_dict() if gradebook is not None else None,
            "lastUpdated": last_updated,
            "credentials": credentials.to_dict() if credentials is not None else None,
            "gradeChanges": [change.to_dict() for change in grade_changes],
        }

        try:
            with open(self.temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f)

            os.replace(self.temp_path, self.path)
        except (OSError, TypeError) as e:
            logger_session.error(f"Failed to save session to {self.path}: {e}")

            if os.path.exists(self.temp_path):
                os.remove(self.temp_path)

            raise

        return data

    def clear(self) -> None:
        if os.path.exists(self.path):
            os.remove(self.path)
