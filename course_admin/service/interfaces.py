"""
Abstract interfaces for the remote course service.

The auth flow and the sync engine depend on AsyncCourseService only, which
keeps them testable with a hand-written fake and lets the blocking HTTP
implementation be swapped out.

Every method returns the decoded JSON body untouched. Interpreting it is
the job of ``service.responses``. Implementations raise
RemoteConnectionError for transport failures and non-2xx statuses, and
ProtocolError for bodies that are not JSON.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class CourseService(ABC):
    """Blocking client for the course service."""

    @abstractmethod
    def set_token(self, token: Optional[str]):
        """Bearer token to send with authorized requests (None to stop)."""
        pass

    @abstractmethod
    def login(self, email: str, password: str) -> Any:
        """POST /auth/login"""
        pass

    @abstractmethod
    def register(self, name: str, email: str, password: str) -> Any:
        """POST /auth/register"""
        pass

    @abstractmethod
    def list_courses(self) -> Any:
        """GET /courses"""
        pass

    @abstractmethod
    def create_course(self, payload: Dict[str, Any]) -> Any:
        """POST /courses with a course body without id"""
        pass

    @abstractmethod
    def update_course(self, payload: Dict[str, Any]) -> Any:
        """POST /courses/update with a course body including id"""
        pass

    @abstractmethod
    def delete_course(self, course_id: int) -> Any:
        """POST /courses/delete with {id}"""
        pass


class AsyncCourseService(ABC):
    """Non-blocking counterpart of CourseService, awaited by the engine."""

    @abstractmethod
    def set_token(self, token: Optional[str]):
        pass

    @abstractmethod
    async def login(self, email: str, password: str) -> Any:
        pass

    @abstractmethod
    async def register(self, name: str, email: str, password: str) -> Any:
        pass

    @abstractmethod
    async def list_courses(self) -> Any:
        pass

    @abstractmethod
    async def create_course(self, payload: Dict[str, Any]) -> Any:
        pass

    @abstractmethod
    async def update_course(self, payload: Dict[str, Any]) -> Any:
        pass

    @abstractmethod
    async def delete_course(self, course_id: int) -> Any:
        pass
