"""
Error taxonomy for the course admin client.

Every failure the auth flow or the sync engine can report is one of these
classes. They are never raised out of the public operations; they travel
inside a failed Result and are kept as ``last_error`` for the view.
"""

from typing import Iterable, List, Optional


class CourseAdminError(Exception):
    """Base class for all course admin errors."""

    retryable = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and self.message == other.message

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.message))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class ValidationError(CourseAdminError):
    """Local, pre-network validation failure."""

    def __init__(self, fields: Iterable[str], errors: Optional[List[str]] = None):
        self.fields = list(fields)
        self.errors = list(errors or [])
        if self.fields:
            message = "Missing required field(s): " + ", ".join(self.fields)
        else:
            message = "; ".join(self.errors) or "Invalid input"
        super().__init__(message)


class RemoteConnectionError(CourseAdminError):
    """Transport failure, timeout or non-2xx status."""

    retryable = True


class ProtocolError(CourseAdminError):
    """Response body was not the JSON shape the service is supposed to send."""

    retryable = True


class RemoteRejected(CourseAdminError):
    """Well-formed error response from the service."""

    GENERIC_MESSAGE = "The server rejected the request"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.GENERIC_MESSAGE)


class IncompleteServerResponse(CourseAdminError):
    """Response flagged success but required fields are absent."""

    def __init__(self, missing: Iterable[str]):
        self.missing = list(missing)
        super().__init__(
            "Incomplete server response, missing: " + ", ".join(self.missing)
        )


class PasswordMismatch(CourseAdminError):
    def __init__(self, message: str = "Passwords do not match"):
        super().__init__(message)


class MissingIdentifier(CourseAdminError):
    def __init__(self, message: str = "Course id is required"):
        super().__init__(message)


class SessionCorrupt(CourseAdminError):
    """Stored session is missing userId or token."""

    def __init__(self, missing: Iterable[str]):
        self.missing = list(missing)
        super().__init__(
            "Stored session is corrupt, missing: " + ", ".join(self.missing)
        )


class NotAuthenticated(CourseAdminError):
    def __init__(self, message: str = "Login required"):
        super().__init__(message)


class SubmissionInProgress(CourseAdminError):
    """Same form submitted again while the first request is in flight."""

    def __init__(self, form: str):
        self.form = form
        super().__init__(f"A '{form}' request is already in progress")
