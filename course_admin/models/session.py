"""
Session data model.

A Session is the authenticated identity plus the bearer token handed out by
the service at login.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class AuthState(Enum):
    """Auth flow states."""

    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


# Keys of the two persisted records
USER_KEY = "session.user"
TOKEN_KEY = "session.token"

# Fields a stored record must have to be trusted
REQUIRED_RECORD_FIELDS = ("userId", "token")


@dataclass(frozen=True)
class Session:
    """
    Authenticated admin session.

    Attributes:
        user_id: Service-side user identifier
        display_name: Name shown in the panel header
        email: Login email
        token: Opaque bearer credential
    """

    user_id: int
    display_name: str
    email: str
    token: str

    def user_record(self) -> Dict[str, Any]:
        """Identity part, as stored under ``session.user``."""
        return {
            "userId": self.user_id,
            "displayName": self.display_name,
            "email": self.email,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> 'Session':
        """Rebuild from a raw store record that has already been checked."""
        return cls(
            user_id=int(record["userId"]),
            display_name=str(record.get("displayName") or ""),
            email=str(record.get("email") or ""),
            token=str(record["token"]),
        )

    def __repr__(self) -> str:
        return (
            f"Session(user_id={self.user_id!r}, display_name={self.display_name!r}, "
            f"email={self.email!r}, token='********')"
        )
