"""
Result<T> for the auth flow, the sync engine and response parsing.

Public operations never raise domain errors. They hand back a Result that
is either a success carrying a value, or a failure carrying the
CourseAdminError and a user-facing message. Response parsing uses the same
type as its tagged Ok/Err step.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, Optional, TypeVar

from ..errors import CourseAdminError


T = TypeVar('T')
U = TypeVar('U')


class ResultStatus(Enum):
    """Status of a Result."""
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class Result(Generic[T]):
    """
    Outcome of an operation against the course service.

    Attributes:
        status: SUCCESS or FAILURE
        value: Value on success (None on failure)
        error: The CourseAdminError on failure
        message: Text suitable for a banner in the view

    Examples:
        >>> result = parse_course_list([{"id": 1, "name": "Web Dev"}])
        >>> if result.is_success:
        ...     courses = result.value

        >>> result = Result.failure("not found", RemoteRejected("not found"))
        >>> result.retryable
        False
    """

    status: ResultStatus
    value: Optional[T] = None
    error: Optional[Exception] = None
    message: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.status == ResultStatus.SUCCESS

    @property
    def is_failure(self) -> bool:
        return self.status == ResultStatus.FAILURE

    @property
    def retryable(self) -> bool:
        """True when re-invoking the same operation may succeed."""
        return bool(getattr(self.error, "retryable", False))

    @classmethod
    def success(cls, value: T, message: Optional[str] = None) -> 'Result[T]':
        return cls(status=ResultStatus.SUCCESS, value=value, message=message)

    @classmethod
    def failure(
        cls,
        message: str,
        error: Optional[Exception] = None
    ) -> 'Result[T]':
        return cls(status=ResultStatus.FAILURE, message=message, error=error)

    @classmethod
    def from_error(cls, error: CourseAdminError) -> 'Result[T]':
        """Failure whose message is the error's own message."""
        return cls.failure(error.message, error)

    def unwrap(self) -> T:
        """
        Return the value of a successful result.

        Raises:
            The carried error if it is a CourseAdminError, else ValueError
        """
        if self.is_failure:
            if isinstance(self.error, CourseAdminError):
                raise self.error
            raise ValueError(f"Cannot unwrap failure result: {self.message}")
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value if self.is_success else default

    def map(self, func: Callable[[T], U]) -> 'Result[U]':
        """Apply func to the value; failures pass through untouched."""
        if self.is_failure:
            return Result.failure(self.message, self.error)
        return Result.success(func(self.value), self.message)

    def and_then(self, func: Callable[[T], 'Result[U]']) -> 'Result[U]':
        """Chain another Result-returning step onto a success."""
        if self.is_failure:
            return Result.failure(self.message, self.error)
        return func(self.value)
