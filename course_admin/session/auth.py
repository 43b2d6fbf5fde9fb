"""
Admin authentication flow.

This module exchanges credentials for a Session, persists it through the
SessionStore, restores it at startup, and gates the sync engine.

State machine:
    UNAUTHENTICATED -> AUTHENTICATING -> AUTHENTICATED   (success)
    AUTHENTICATING  -> UNAUTHENTICATED                   (failure)
    AUTHENTICATED   -> UNAUTHENTICATED                   (logout, corrupt store)
"""

import logging
from typing import Optional, Union

from ..errors import (
    CourseAdminError,
    NotAuthenticated,
    PasswordMismatch,
    ProtocolError,
    RemoteConnectionError,
    SessionCorrupt,
    SubmissionInProgress,
)
from ..models.result import Result
from ..models.session import REQUIRED_RECORD_FIELDS, AuthState, Session
from ..service.interfaces import AsyncCourseService
from ..service.responses import parse_login, parse_registration
from ..utils.config import SecureString, reveal
from ..utils.logger import mask_email
from ..validation.credentials_validator import LoginValidator, RegistrationValidator
from .store import SessionStore


logger = logging.getLogger(__name__)

Password = Union[str, SecureString]


class AuthFlow:
    """
    Login, registration, logout and session bootstrap.

    Operations return a Result and never raise domain errors; the last
    failure is kept in ``last_error`` and ``message`` for the view.

    Examples:
        >>> auth = AuthFlow(service, FileSessionStore(config.session_file))
        >>> if auth.bootstrap() is None:
        ...     result = await auth.login("admin@example.com", SecureString("secret"))
        ...     if result.is_failure:
        ...         print(result.message)
    """

    def __init__(self, service: AsyncCourseService, store: SessionStore):
        self.service = service
        self.store = store
        self.login_validator = LoginValidator()
        self.registration_validator = RegistrationValidator()

        self._state = AuthState.UNAUTHENTICATED
        self._session: Optional[Session] = None
        self.last_error: Optional[CourseAdminError] = None
        self.message: Optional[str] = None

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self._state == AuthState.AUTHENTICATED

    @property
    def is_loading(self) -> bool:
        """True while a login/register request is in flight."""
        return self._state == AuthState.AUTHENTICATING

    def require_session(self) -> Result[Session]:
        """Gate for operations that need a logged-in admin."""
        if self.is_authenticated and self._session is not None:
            return Result.success(self._session)
        return Result.from_error(NotAuthenticated())

    def dismiss_error(self):
        self.last_error = None
        self.message = None

    def _establish(self, session: Session, message: str, persist: bool = True) -> Result[Session]:
        if persist:
            self.store.save(session)
        self.service.set_token(session.token)
        self._session = session
        self._state = AuthState.AUTHENTICATED
        self.last_error = None
        self.message = message
        logger.info(f"Authenticated as user {session.user_id} ({mask_email(session.email)})")
        return Result.success(session, message)

    def _restore(self, previous: Optional[Session]):
        """Leave AUTHENTICATING for whatever state we came from."""
        self._session = previous
        self._state = AuthState.AUTHENTICATED if previous else AuthState.UNAUTHENTICATED

    def _fail(self, error: CourseAdminError, previous: Optional[Session] = None) -> Result[Session]:
        self._restore(previous)
        self.last_error = error
        self.message = error.message
        logger.warning(f"Authentication failed: {error!r}")
        return Result.from_error(error)

    async def _authenticate(self, email: str, password: str) -> Result[Session]:
        try:
            payload = await self.service.login(email, password)
        except (RemoteConnectionError, ProtocolError) as e:
            return Result.from_error(e)
        return parse_login(payload, email)

    async def login(self, email: str, password: Password) -> Result[Session]:
        """
        Exchange credentials for a Session.

        Returns:
            Result with the Session, or a failure carrying ValidationError,
            RemoteConnectionError, ProtocolError, RemoteRejected or
            IncompleteServerResponse
        """
        if self.is_loading:
            return Result.from_error(SubmissionInProgress("login"))

        email = (email or "").strip()
        plain = reveal(password)
        error = self.login_validator.validate({"email": email, "password": plain}).to_error()
        if error:
            return self._fail(error, self._session)

        previous = self._session
        self._state = AuthState.AUTHENTICATING
        try:
            result = await self._authenticate(email, plain)
            if result.is_failure:
                return self._fail(result.error, previous)
            return self._establish(result.value, result.message)
        finally:
            if self._state == AuthState.AUTHENTICATING:
                self._restore(previous)

    async def register(
        self,
        name: str,
        email: str,
        password: Password,
        confirm_password: Password
    ) -> Result[Session]:
        """
        Create an account, then log in with the same credentials.

        Passwords are compared before anything else; a mismatch never
        reaches the network.
        """
        if self.is_loading:
            return Result.from_error(SubmissionInProgress("register"))

        plain = reveal(password)
        if plain != reveal(confirm_password):
            return self._fail(PasswordMismatch(), self._session)

        name = (name or "").strip()
        email = (email or "").strip()
        error = self.registration_validator.validate(
            {"name": name, "email": email, "password": plain}
        ).to_error()
        if error:
            return self._fail(error, self._session)

        previous = self._session
        self._state = AuthState.AUTHENTICATING
        try:
            try:
                payload = await self.service.register(name, email, plain)
            except (RemoteConnectionError, ProtocolError) as e:
                return self._fail(e, previous)

            registered = parse_registration(payload)
            if registered.is_failure:
                return self._fail(registered.error, previous)
            logger.info(f"Registered {mask_email(email)}")

            result = await self._authenticate(email, plain)
            if result.is_failure:
                return self._fail(result.error, previous)
            return self._establish(result.value, "Account created")
        finally:
            if self._state == AuthState.AUTHENTICATING:
                self._restore(previous)

    def logout(self):
        """Forget the session. Never fails."""
        self.store.clear()
        self.service.set_token(None)
        self._session = None
        self._state = AuthState.UNAUTHENTICATED
        self.last_error = None
        self.message = "Logged out"
        logger.info("Session cleared")

    def bootstrap(self) -> Optional[Session]:
        """
        Restore the stored session at startup.

        A record lacking userId or token is corrupt: the store is wiped
        and None is returned instead of a partial Session.
        """
        record = self.store.load()
        if record is None:
            logger.debug("No stored session")
            return None

        missing = [
            name for name in REQUIRED_RECORD_FIELDS
            if record.get(name) is None or str(record.get(name)).strip() == ""
        ]
        session = None
        if not missing:
            try:
                session = Session.from_record(record)
            except (TypeError, ValueError):
                missing = ["userId"]

        if missing:
            error = SessionCorrupt(missing)
            logger.warning(f"Discarding stored session: {error.message}")
            self.logout()
            self.last_error = error
            self.message = error.message
            return None

        self._establish(session, f"Welcome back, {session.display_name}", persist=False)
        return session
