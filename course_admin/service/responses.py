"""
Response parsing for the course service.

Each parser takes the decoded JSON body and returns a Result: the parsed
value on success, or a failure carrying ProtocolError (wrong shape),
RemoteRejected (``success: false``) or IncompleteServerResponse
(``success: true`` with required fields absent). A ``success`` flag is
never trusted on its own.
"""

from typing import Any, List, Optional

from ..errors import (
    IncompleteServerResponse,
    ProtocolError,
    RemoteRejected,
)
from ..models.course import Course
from ..models.result import Result
from ..models.session import Session


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _acknowledgement(payload: Any, what: str) -> Result[dict]:
    """Check the ``{success, message?}`` envelope shared by most endpoints."""
    if not isinstance(payload, dict):
        return Result.from_error(
            ProtocolError(f"{what} response is not a JSON object")
        )

    success = payload.get("success")
    if not isinstance(success, bool):
        return Result.from_error(
            ProtocolError(f"{what} response has no boolean 'success' flag")
        )

    if not success:
        message = payload.get("message")
        return Result.from_error(RemoteRejected(str(message) if message else None))

    return Result.success(payload, payload.get("message"))


def parse_login(payload: Any, email: str = "") -> Result[Session]:
    """
    Parse the login response into a Session.

    Accepts ``{success, user: {id, name, email}, token}`` as well as the
    legacy flat ``{success, user_id, nombre, token}``. The login email is
    used when the service does not echo one back.
    """
    ack = _acknowledgement(payload, "Login")
    if ack.is_failure:
        return Result.failure(ack.message, ack.error)

    user = payload.get("user")
    if not isinstance(user, dict):
        user = {}

    user_id = user.get("id")
    if user_id is None:
        user_id = payload.get("user_id")
    name = user.get("name") or user.get("nombre") or payload.get("nombre")
    token = payload.get("token")

    missing = []
    if _blank(user_id):
        missing.append("user.id")
    if _blank(name):
        missing.append("user.name")
    if _blank(token):
        missing.append("token")
    if missing:
        return Result.from_error(IncompleteServerResponse(missing))

    try:
        user_id = int(user_id)
    except (TypeError, ValueError):
        return Result.from_error(
            ProtocolError(f"Login response has a non-numeric user id: {user_id!r}")
        )

    session = Session(
        user_id=user_id,
        display_name=str(name),
        email=str(user.get("email") or email),
        token=str(token),
    )
    return Result.success(session, ack.message or f"Welcome, {session.display_name}")


def parse_registration(payload: Any) -> Result[None]:
    """Parse ``{success, message?}``. Registration yields no token."""
    return _acknowledgement(payload, "Registration").map(lambda _: None)


def parse_course(data: Any, position: Optional[int] = None) -> Result[Course]:
    where = "course" if position is None else f"course #{position}"
    try:
        return Result.success(Course.from_payload(data))
    except (TypeError, ValueError) as e:
        return Result.from_error(ProtocolError(f"Malformed {where}: {e}"))


def parse_course_list(payload: Any) -> Result[List[Course]]:
    """
    Parse the course listing.

    A bare JSON array is expected; ``{"courses": [...]}`` and
    ``{"data": [...]}`` wrappers are unwrapped. A single malformed entry
    fails the whole listing so a partial collection never replaces the
    local one.
    """
    items = payload
    if isinstance(payload, dict):
        if payload.get("success") is False:
            message = payload.get("message")
            return Result.from_error(RemoteRejected(str(message) if message else None))
        for key in ("courses", "data"):
            if isinstance(payload.get(key), list):
                items = payload[key]
                break

    if not isinstance(items, list):
        return Result.from_error(
            ProtocolError("Course list response is not a JSON array")
        )

    courses = []
    for position, item in enumerate(items):
        parsed = parse_course(item, position)
        if parsed.is_failure:
            return Result.failure(parsed.message, parsed.error)
        courses.append(parsed.value)

    return Result.success(courses)


def parse_mutation(payload: Any, action: str) -> Result[Optional[Course]]:
    """
    Parse a create/update/delete response ``{success, data?, message?}``.

    Returns:
        The Course echoed back in ``data`` when there is one, else None
    """
    ack = _acknowledgement(payload, action.capitalize())
    if ack.is_failure:
        return Result.failure(ack.message, ack.error)

    data = payload.get("data")
    if isinstance(data, dict):
        parsed = parse_course(data)
        if parsed.is_failure:
            return parsed
        return Result.success(parsed.value, ack.message)
    return Result.success(None, ack.message)
