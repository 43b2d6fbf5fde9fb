"""
Course admin client.

Authentication and course synchronization against the portfolio site's
course service.

Usage:
    >>> from course_admin import CourseSyncEngine, AuthFlow, CourseDraft
    >>> from course_admin.utils.di_container import DIContainer, configure_default_services
    >>>
    >>> container = DIContainer()
    >>> configure_default_services(container)
    >>> auth = container.resolve(AuthFlow)
    >>> engine = container.resolve(CourseSyncEngine)
"""

from .errors import CourseAdminError
from .models.course import Course, CourseDraft, CourseStats, CourseStatus
from .models.result import Result
from .models.session import AuthState, Session
from .session.auth import AuthFlow
from .session.store import FileSessionStore, MemorySessionStore, SessionStore
from .sync.engine import CourseSyncEngine, FormKind

__all__ = [
    "AuthFlow",
    "AuthState",
    "Course",
    "CourseAdminError",
    "CourseDraft",
    "CourseStats",
    "CourseStatus",
    "CourseSyncEngine",
    "FileSessionStore",
    "FormKind",
    "MemorySessionStore",
    "Result",
    "Session",
    "SessionStore",
]

__version__ = "0.1.0"
