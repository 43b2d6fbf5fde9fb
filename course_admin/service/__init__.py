"""
Course service clients.

Usage:
    >>> from course_admin.service import HttpCourseService, ThreadedCourseService
    >>>
    >>> service = ThreadedCourseService(HttpCourseService("https://example.com/api"))
    >>> payload = await service.list_courses()
"""

from .http import HttpCourseService
from .interfaces import AsyncCourseService, CourseService
from .threaded import ThreadedCourseService

__all__ = [
    "AsyncCourseService",
    "CourseService",
    "HttpCourseService",
    "ThreadedCourseService",
]
