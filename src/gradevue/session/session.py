from collections import deque
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple

import pandas as pd

from gradevue.api.client import fetch_gradebook
from gradevue.api.demo import DEMO_CREDENTIALS, demo_gradebook
from gradevue.changes.detector import detect_grade_changes
from gradevue.gradebook.grading_config import max_grade_changes
from gradevue.gradebook.models import (
    Course,
    CourseOverrides,
    Credentials,
    Gradebook,
    GradeChange,
    HypotheticalAssignment,
    ScoreOverride,
)
from gradevue.gradebook.report import course_summary
from gradevue.hypothetical.engine import apply_overrides
from gradevue.logging.config import Logger
from gradevue.parser.parse import parse_gradebook
from gradevue.session.store import SessionStore


@dataclass(frozen=True)
class SessionState:
    """
    Immutable snapshot of a session, as handed to callers and subscribers.

    Attributes:
        gradebook (Optional[Gradebook]): The gradebook to display; the
            hypothetical view while hypothetical mode is on.
        base_gradebook (Optional[Gradebook]): The canonical gradebook.
        is_logged_in (bool): Whether a gradebook is loaded.
        hypothetical_mode (bool): Whether what-if edits are active.
        grade_changes (Tuple[GradeChange, ...]): Detected changes, newest first.
        last_updated (Optional[str]): ISO-8601 UTC time of the last login or refresh.
        selected_course_id (Optional[str]): The course the user is looking at.
    """

    gradebook: Optional[Gradebook] = None
    base_gradebook: Optional[Gradebook] = None
    is_logged_in: bool = False
    hypothetical_mode: bool = False
    grade_changes: Tuple[GradeChange, ...] = ()
    last_updated: Optional[str] = None
    selected_course_id: Optional[str] = None

    @property
    def selected_course(self) -> Optional[Course]:
        if self.gradebook is None or self.selected_course_id is None:
            return None
        return self.gradebook.course(self.selected_course_id)


@dataclass
class GradeSession(Logger):
    """
    Owns the gradebook of one student and every transition applied to it.

    The session is either logged out or logged in; hypothetical mode is an
    independent flag. Every mutation returns the resulting SessionState and
    notifies subscribers with it.

    Attributes:
        store (Optional[SessionStore]): Where to persist the session. Nothing is
            persisted when None.
        fetcher (Callable): Called with the credentials by ``refresh`` and
            ``connect``; returns ``(raw_gradebook, raw_student_info)``.
        clock (Callable): Returns the current time.

    Example:
        ```python
        session = GradeSession()
        session.login_demo()
        session.set_hypothetical_mode(True)
        state = session.update_assignment_score("course-0", 3, 90, 100)
        print(state.gradebook.courses[0].letter_grade)
        ```
    """

    store: Optional[SessionStore] = None
    fetcher: Callable = fetch_gradebook
    clock: Callable = field(default=lambda: datetime.now(timezone.utc), repr=False)

    def __post_init__(self):
        super().__post_init__()

        self._gradebook: Optional[Gradebook] = None
        self._credentials: Optional[Credentials] = None
        self._last_updated: Optional[str] = None
        self._hypothetical_mode = False
        self._overrides: Dict[str, CourseOverrides] = {}
        self._selected_course_id: Optional[str] = None
        self._grade_changes: deque = deque(maxlen=max_grade_changes)
        self._subscribers: List[Callable] = []

        self._refreshing = False
        self._generation = 0

    # === read side ===

    @property
    def is_logged_in(self) -> bool:
        return self._gradebook is not None

    @property
    def credentials(self) -> Optional[Credentials]:
        return self._credentials

    @property
    def hypothetical_mode(self) -> bool:
        return self._hypothetical_mode

    @property
    def is_refreshing(self) -> bool:
        return self._refreshing

    @property
    def overrides(self) -> Dict[str, CourseOverrides]:
        return dict(self._overrides)

    @property
    def state(self) -> SessionState:
        view = self._gradebook
        if view is not None and self._hypothetical_mode:
            view = apply_overrides(view, self._overrides)

        return SessionState(
            gradebook=view,
            base_gradebook=self._gradebook,
            is_logged_in=self.is_logged_in,
            hypothetical_mode=self._hypothetical_mode,
            grade_changes=tuple(self._grade_changes),
            last_updated=self._last_updated,
            selected_course_id=self._selected_course_id,
        )

    def summary(self) -> pd.DataFrame:
        """Returns the per-course summary table of the displayed gradebook."""
        return course_summary(self.state.gradebook or Gradebook(), self.clock())

    def subscribe(self, callback: Callable[[SessionState], None]) -> Callable[[], None]:
        """
        Registers a callback invoked with the new state after every mutation.

        Returns:
            Callable[[], None]: Removes the callback when called.
        """
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # === login / logout ===

    def login(
        self, gradebook: Gradebook, credentials: Optional[Credentials] = None
    ) -> SessionState:
        """
        Installs a new canonical gradebook.

        When a gradebook is already loaded, the two are compared and any grade
        changes are prepended to the history, which keeps at most
        ``max_grade_changes`` entries.

        Args:
            gradebook (Gradebook): The freshly parsed gradebook.
            credentials (Credentials, optional): Replaces the stored credentials
                when given.

        Returns:
            SessionState: The new state.
        """
        now = self.clock()

        changes = detect_grade_changes(self._gradebook, gradebook, now)
        if changes:
            self._grade_changes.extendleft(reversed(changes))
            self.print_and_log(f"Detected {len(changes)} grade change(s)")

        self._gradebook = gradebook
        if credentials is not None:
            self._credentials = credentials
        self._last_updated = now.isoformat()

        if self._credentials is not None:
            self.print_and_log(f"Loaded gradebook for {self._credentials!r}")

        return self._commit()

    def login_demo(self) -> SessionState:
        return self.login(demo_gradebook(), DEMO_CREDENTIALS)

    def connect(self, credentials: Credentials) -> SessionState:
        """
        Fetches, parses and installs the gradebook for a set of credentials.

        Demo credentials load the built-in demo gradebook without a request.

        Raises:
            UpstreamError: If the fetch fails; the session is left unchanged.
        """
        if credentials.is_demo:
            return self.login_demo()

        raw_gradebook, raw_student_info = self.fetcher(credentials)
        return self.login(parse_gradebook(raw_gradebook, raw_student_info), credentials)

    def logout(self) -> SessionState:
        """Clears the gradebook, credentials, selection and overrides; keeps the change history."""
        self.abandon_refresh()

        self._gradebook = None
        self._credentials = None
        self._selected_course_id = None
        self._overrides = {}

        self.print_and_log("Logged out")
        return self._commit()

    # === refresh ===

    def refresh(self) -> Optional[SessionState]:
        """
        Re-fetches the gradebook with the stored credentials.

        Nothing happens while logged out, without stored credentials, with the
        demo credentials, or while another refresh is in flight. A refresh that
        is abandoned before the fetch returns is discarded.

        Returns:
            Optional[SessionState]: The new state, or None if nothing was done.

        Raises:
            UpstreamError: If the fetch fails; the session is left unchanged.
        """
        if not self.is_logged_in or self._credentials is None or self._credentials.is_demo:
            return None
        if self._refreshing:
            self.logger.debug("Refresh already in flight")
            return None

        self._refreshing = True
        generation = self._generation
        try:
            raw_gradebook, raw_student_info = self.fetcher(self._credentials)
        finally:
            if generation == self._generation:
                self._refreshing = False

        if generation != self._generation:
            self.print_and_log("Discarding result of an abandoned refresh")
            return None

        return self.login(parse_gradebook(raw_gradebook, raw_student_info))

    def abandon_refresh(self) -> None:
        """Invalidates an in-flight refresh so its result is discarded on arrival."""
        self._generation += 1
        self._refreshing = False

    # === hypothetical mode ===

    def set_hypothetical_mode(self, on: bool) -> SessionState:
        """Turns hypothetical mode on or off. Turning it off discards every override."""
        self._hypothetical_mode = bool(on)
        if not self._hypothetical_mode:
            self._overrides = {}
        return self._commit(persist=False)

    def update_assignment_score(
        self, course_id: str, index: int, points_earned: float, points_possible: float
    ) -> SessionState:
        """
        Sets the simulated score of an existing assignment.

        Args:
            course_id (str): The course id.
            index (int): Position of the assignment in the course's list.
            points_earned (float): Simulated earned points.
            points_possible (float): Simulated possible points.

        Returns:
            SessionState: The new state.
        """
        if not self._can_edit(course_id):
            return self.state

        overrides = self._overrides.get(course_id, CourseOverrides())
        modified = dict(overrides.modified_assignments)
        modified[index] = ScoreOverride(float(points_earned), float(points_possible))

        self._overrides[course_id] = replace(overrides, modified_assignments=modified)
        return self._commit(persist=False)

    def add_hypothetical_assignment(
        self, course_id: str, assignment: HypotheticalAssignment
    ) -> SessionState:
        if not self._can_edit(course_id):
            return self.state

        overrides = self._overrides.get(course_id, CourseOverrides())
        self._overrides[course_id] = replace(
            overrides, added_assignments=overrides.added_assignments + (assignment,)
        )
        return self._commit(persist=False)

    def remove_hypothetical_assignment(self, course_id: str, assignment_id: str) -> SessionState:
        if not self._can_edit(course_id) or course_id not in self._overrides:
            return self.state

        overrides = self._overrides[course_id]
        self._overrides[course_id] = replace(
            overrides,
            added_assignments=tuple(
                a for a in overrides.added_assignments if a.id != assignment_id
            ),
        )
        return self._commit(persist=False)

    def reset_course_overrides(self, course_id: str) -> SessionState:
        self._overrides.pop(course_id, None)
        return self._commit(persist=False)

    def _can_edit(self, course_id: str) -> bool:
        if not self._hypothetical_mode:
            self.logger.warning(
                f"Ignoring hypothetical edit to {course_id}: hypothetical mode is off"
            )
            return False
        if self._gradebook is None or self._gradebook.course(course_id) is None:
            self.logger.warning(f"Ignoring hypothetical edit to unknown course {course_id}")
            return False
        return True

    # === misc ===

    def select_course(self, course_id: Optional[str]) -> SessionState:
        if course_id is not None and (
            self._gradebook is None or self._gradebook.course(course_id) is None
        ):
            self.logger.warning(f"Cannot select unknown course {course_id}")
            course_id = None
        self._selected_course_id = course_id
        return self._commit(persist=False)

    def clear_changes(self) -> SessionState:
        self._grade_changes.clear()
        return self._commit()

    def _commit(self, persist: bool = True) -> SessionState:
        """
        Persists the session and notifies subscribers of the new state.

        Subscribers are notified even when saving fails, since the in-memory
        state has already changed; the save error is then re-raised.
        """
        state = self.state
        try:
            if persist and self.store is not None:
                self.store.save(
                    self._gradebook,
                    self._last_updated,
                    self._credentials,
                    list(self._grade_changes),
                )
        finally:
            for callback in list(self._subscribers):
                callback(state)
        return state

    @classmethod
    def restore(
        cls, store: SessionStore, fetcher: Optional[Callable] = None, **kwargs
    ) -> "GradeSession":
        """
        Rebuilds a session from its persisted state.

        Args:
            store (SessionStore): The store to load from; also used for later saves.
            fetcher (Callable, optional): Overrides the default upstream fetcher.
            **kwargs: Passed to the constructor.

        Returns:
            GradeSession: A session that is logged in when a gradebook was persisted.
        """
        if fetcher is not None:
            kwargs["fetcher"] = fetcher
        session = cls(store=store, **kwargs)

        persisted = store.load()
        session._gradebook = persisted.gradebook
        session._credentials = persisted.credentials
        session._last_updated = persisted.last_updated
        session._grade_changes.extend(persisted.grade_changes)

        session.print_and_log(
            f"Restored session (logged in: {session.is_logged_in}, "
            f"{len(session._grade_changes)} grade change(s))"
        )
        return session
