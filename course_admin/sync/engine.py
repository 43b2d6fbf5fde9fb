"""
Course synchronization engine.

The engine is the single owner of the admin-visible course collection.
Every mutation goes to the service first; the local collection changes
only when a refresh completes, and it is then replaced wholesale.

Ordering policy: refreshes are applied in request order. Each refresh
takes a sequence number when it is issued, and a completion older than
the last applied one is dropped, so a slow early response can never
overwrite data from a later request.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Any, Awaitable, Callable, List, Optional, Set, Tuple

from ..errors import (
    CourseAdminError,
    MissingIdentifier,
    ProtocolError,
    RemoteConnectionError,
    SubmissionInProgress,
)
from ..models.course import (
    Course,
    CourseDraft,
    CourseStats,
    distinct_categories,
)
from ..models.result import Result
from ..service.interfaces import AsyncCourseService
from ..service.responses import parse_course_list, parse_mutation
from ..session.auth import AuthFlow
from ..validation.course_validator import CourseDraftValidator
from .messages import StatusMessages


logger = logging.getLogger(__name__)

CourseListener = Callable[[str, Optional[Course]], Any]


class FormKind(Enum):
    """Forms whose submissions are tracked separately."""

    ADD = "add"
    EDIT = "edit"
    DELETE = "delete"


class CourseSyncEngine:
    """
    Owns the course collection and mediates create/update/delete.

    Examples:
        >>> engine = CourseSyncEngine(service, auth)
        >>> await engine.refresh()
        >>> result = await engine.create(CourseDraft(name="Web Dev", instructor="Ana",
        ...                                          category="Prog", price=100))
        >>> if result.is_failure:
        ...     print(engine.error_message)
        >>> engine.search("web", "Prog")
    """

    def __init__(
        self,
        service: AsyncCourseService,
        auth: AuthFlow,
        validator: Optional[CourseDraftValidator] = None,
        success_timeout: float = 3.0
    ):
        self.service = service
        self.auth = auth
        self.validator = validator or CourseDraftValidator()
        self.messages = StatusMessages(success_timeout)

        self._courses: List[Course] = []
        self._issued_seq = 0
        self._applied_seq = 0
        self._refreshing: Set[int] = set()
        self._in_flight: Set[FormKind] = set()
        self._listeners: List[CourseListener] = []
        self._closed = False
        self.last_refreshed: Optional[datetime] = None

    # -- read-only projection -------------------------------------------

    @property
    def courses(self) -> Tuple[Course, ...]:
        return tuple(self._courses)

    @property
    def loading(self) -> bool:
        return bool(self._refreshing or self._in_flight)

    @property
    def refreshing(self) -> bool:
        return bool(self._refreshing)

    def is_loading(self, form: FormKind) -> bool:
        """True while a submission of this form is in flight."""
        return form in self._in_flight

    @property
    def last_error(self) -> Optional[CourseAdminError]:
        return self.messages.last_error

    @property
    def error_message(self) -> Optional[str]:
        return self.messages.error

    @property
    def success_message(self) -> Optional[str]:
        return self.messages.success

    def dismiss_error(self):
        self.messages.dismiss_error()

    def search(self, term: str = "", category: Optional[str] = None) -> List[Course]:
        """
        Case-insensitive substring match of term against name, instructor
        or category, combined with an exact category match when given.

        Pure: never touches the collection or the network.
        """
        needle = (term or "").strip().lower()
        wanted = category or None

        matches = []
        for course in self._courses:
            if wanted is not None and course.category != wanted:
                continue
            if needle and not (
                needle in course.name.lower()
                or needle in course.instructor.lower()
                or needle in course.category.lower()
            ):
                continue
            matches.append(course)
        return matches

    def public_catalog(self, term: str = "", category: Optional[str] = None) -> List[Course]:
        """Active courses only, as shown on the public courses page."""
        return [course for course in self.search(term, category) if course.is_active]

    def categories(self, active_only: bool = False) -> List[str]:
        courses = [c for c in self._courses if c.is_active] if active_only else self._courses
        return distinct_categories(courses)

    def stats(self) -> CourseStats:
        return CourseStats.from_courses(self._courses)

    def find(self, course_id: int) -> Optional[Course]:
        for course in self._courses:
            if course.id == course_id:
                return course
        return None

    # -- lifecycle --------------------------------------------------------

    def subscribe(self, listener: CourseListener) -> Callable[[], None]:
        """
        Call listener(action, course) after every confirmed mutation.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self):
        """
        The view is gone. Requests still in flight finish quietly and
        their results are discarded.
        """
        self._closed = True
        self._listeners.clear()
        self.messages.close()
        logger.debug("Sync engine closed")

    @property
    def closed(self) -> bool:
        return self._closed

    @staticmethod
    def _discarded() -> Result:
        return Result.failure("View closed, result discarded")

    def _report(self, error: CourseAdminError) -> Result:
        self.messages.show_error(error)
        logger.warning(f"Course operation failed: {error!r}")
        return Result.from_error(error)

    def _notify(self, action: str, course: Optional[Course]):
        for listener in list(self._listeners):
            try:
                listener(action, course)
            except Exception as e:
                logger.error(f"Course listener failed on '{action}': {e}", exc_info=True)

    # -- remote operations -----------------------------------------------

    async def refresh(self) -> Result[List[Course]]:
        """
        Fetch the full collection and replace the local one.

        Returns:
            Result with the courses now held locally
        """
        self._issued_seq += 1
        seq = self._issued_seq
        self._refreshing.add(seq)
        try:
            try:
                payload = await self.service.list_courses()
            except (RemoteConnectionError, ProtocolError) as e:
                result = Result.from_error(e)
            else:
                result = parse_course_list(payload)
        finally:
            self._refreshing.discard(seq)

        if self._closed:
            return self._discarded()

        if seq < self._applied_seq:
            logger.debug(f"Dropping refresh #{seq}, #{self._applied_seq} already applied")
            return Result.success(list(self._courses), "Superseded by a newer refresh")

        if result.is_failure:
            return self._report(result.error)

        self._applied_seq = seq
        self._courses = list(result.value)
        self.last_refreshed = datetime.now()
        logger.info(f"Refresh #{seq}: {len(self._courses)} courses")
        return Result.success(list(self._courses), f"Loaded {len(self._courses)} courses")

    def _precheck(self, form: FormKind) -> Optional[Result]:
        """Refuse duplicate submissions and anonymous mutations."""
        if form in self._in_flight:
            return Result.from_error(SubmissionInProgress(form.value))
        gate = self.auth.require_session()
        if gate.is_failure:
            return self._report(gate.error)
        return None

    def _validate(self, draft: CourseDraft) -> Optional[Result]:
        error = self.validator.validate(draft.to_dict()).to_error()
        if error:
            return self._report(error)
        return None

    async def _submit(
        self,
        form: FormKind,
        action: str,
        call: Callable[..., Awaitable[Any]],
        *args
    ) -> Result[Optional[Course]]:
        """
        Send one mutation, then refresh on success.

        The form stays marked as loading until the refresh is done.
        """
        self._in_flight.add(form)
        try:
            try:
                payload = await call(*args)
            except (RemoteConnectionError, ProtocolError) as e:
                result = Result.from_error(e)
            else:
                result = parse_mutation(payload, action)

            if self._closed:
                return self._discarded()
            if result.is_failure:
                return self._report(result.error)

            self.messages.dismiss_error()
            refreshed = await self.refresh()
            if self._closed:
                return self._discarded()
            if refreshed.is_failure:
                logger.warning(f"{action} succeeded but the list could not be reloaded")
            return result
        finally:
            self._in_flight.discard(form)

    def _locate_created(self, draft: CourseDraft, owner_id: int) -> Optional[Course]:
        """Best guess at the freshly created course in the refreshed list."""
        candidates = [
            course for course in self._courses
            if course.name == draft.name.strip()
            and course.instructor == draft.instructor.strip()
            and course.category == draft.category.strip()
            and course.owner_id in (None, owner_id)
        ]
        if not candidates:
            return None
        return max(candidates, key=lambda course: course.id or 0)

    async def create(self, draft: CourseDraft) -> Result[Course]:
        """
        Validate the draft locally, POST it tagged with the session's user
        id, and refresh.

        Returns:
            Result with the created course (server-assigned id when the
            service reports it)
        """
        refused = self._precheck(FormKind.ADD)
        if refused:
            return refused
        invalid = self._validate(draft)
        if invalid:
            return invalid

        owner_id = self.auth.session.user_id
        payload = draft.to_payload(owner_id=owner_id)
        result = await self._submit(FormKind.ADD, "create", self.service.create_course, payload)
        if result.is_failure:
            return result

        course = result.value or self._locate_created(draft, owner_id) or draft.to_course(owner_id)
        self.messages.show_success(f"Course '{course.name}' created")
        self._notify("created", course)
        return Result.success(course, self.messages.success)

    async def update(self, course_id: Optional[int], draft: CourseDraft) -> Result[Course]:
        """Same policy as create, for an existing course id."""
        if course_id is None:
            return self._report(MissingIdentifier())
        refused = self._precheck(FormKind.EDIT)
        if refused:
            return refused
        invalid = self._validate(draft)
        if invalid:
            return invalid

        owner_id = self.auth.session.user_id
        payload = draft.to_payload(owner_id=owner_id, course_id=course_id)
        result = await self._submit(FormKind.EDIT, "update", self.service.update_course, payload)
        if result.is_failure:
            return result

        course = result.value or self.find(course_id)
        if course is None:
            course = draft.to_course(owner_id)
        self.messages.show_success(f"Course '{course.name}' updated")
        self._notify("updated", course)
        return Result.success(course, self.messages.success)

    async def delete(self, course_id: Optional[int]) -> Result[None]:
        """
        Delete a course. Deleting an id the service no longer knows is a
        RemoteRejected failure, not a no-op.
        """
        if course_id is None:
            return self._report(MissingIdentifier())
        refused = self._precheck(FormKind.DELETE)
        if refused:
            return refused

        removed = self.find(course_id)
        result = await self._submit(FormKind.DELETE, "delete", self.service.delete_course, course_id)
        if result.is_failure:
            return result

        self.messages.show_success("Course deleted")
        self._notify("deleted", removed)
        return Result.success(None, self.messages.success)
