"""
HTTP implementation of the course service, built on requests.
"""

import logging
from datetime import timedelta
from typing import Any, Dict, Optional

import requests

from ..errors import ProtocolError, RemoteConnectionError
from ..resilience.circuit_breaker import CircuitBreaker
from ..utils.logger import mask_email
from .interfaces import CourseService


logger = logging.getLogger(__name__)


class HttpCourseService(CourseService):
    """
    Blocking REST client for the course service.

    Only the course listing carries the bearer token; auth and mutation
    endpoints identify the user through the body (``ownerId``).

    Examples:
        >>> service = HttpCourseService("https://example.com/BACKEND", suffix=".php")
        >>> service.login("admin@example.com", "secret")
        {'success': True, 'user': {...}, 'token': '...'}
    """

    LOGIN_PATH = "/auth/login"
    REGISTER_PATH = "/auth/register"
    COURSES_PATH = "/courses"
    UPDATE_PATH = "/courses/update"
    DELETE_PATH = "/courses/delete"

    def __init__(
        self,
        base_url: str,
        suffix: str = "",
        timeout: float = 30.0,
        circuit_breaker: Optional[CircuitBreaker] = None,
        http: Optional[requests.Session] = None
    ):
        """
        Args:
            base_url: Service root, without trailing slash
            suffix: Appended to every path (".php" on the legacy backend)
            timeout: Transport timeout in seconds
            circuit_breaker: Breaker shared by all calls (a default one if omitted)
            http: requests.Session to use (mainly for tests)
        """
        self.base_url = base_url.rstrip('/')
        self.suffix = suffix
        self.timeout = timeout
        self.circuit_breaker = circuit_breaker or CircuitBreaker(
            failure_threshold=3,
            timeout=timedelta(seconds=60),
            expected_exception=RemoteConnectionError
        )
        self.http = http or requests.Session()
        self.http.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
        })
        self._token: Optional[str] = None

        logger.info(f"HttpCourseService initialized with base_url: {self.base_url}")

    def set_token(self, token: Optional[str]):
        self._token = token

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{path}{self.suffix}"

    def _request(
        self,
        method: str,
        path: str,
        body: Optional[Dict[str, Any]] = None,
        authorized: bool = False
    ) -> Any:
        response = self.circuit_breaker.call(self._send, method, path, body, authorized)
        if not response.ok:
            # 4xx: the service is up, so the breaker never sees it
            raise self._status_error(method, response)
        return self._decode(response)

    def _send(
        self,
        method: str,
        path: str,
        body: Optional[Dict[str, Any]],
        authorized: bool
    ) -> requests.Response:
        """
        Perform the request. Transport failures and 5xx statuses raise,
        so they count toward opening the circuit.
        """
        url = self.url_for(path)
        headers = {}
        if authorized and self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        logger.debug(f"{method} {url}")
        try:
            response = self.http.request(
                method,
                url,
                json=body,
                headers=headers,
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Request to {url} failed: {e}")
            raise RemoteConnectionError(str(e)) from e

        if response.status_code >= 500:
            raise self._status_error(method, response)

        return response

    @classmethod
    def _status_error(cls, method: str, response: requests.Response) -> RemoteConnectionError:
        message = f"HTTP error! status: {response.status_code}"
        detail = cls._error_detail(response)
        if detail:
            message = f"{message} ({detail})"
        logger.error(f"{method} {response.url} -> {message}")
        return RemoteConnectionError(message)

    @staticmethod
    def _error_detail(response: requests.Response) -> Optional[str]:
        """Server-supplied message of an error response, if it sent one."""
        try:
            data = response.json()
        except ValueError:
            return None
        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
        return None

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            content_type = response.headers.get("Content-Type") or "unknown content type"
            snippet = (response.text or "")[:80].strip()
            logger.error(f"Non-JSON response from {response.url} ({content_type})")
            raise ProtocolError(
                f"Expected JSON from {response.url}, got {content_type}: {snippet!r}"
            ) from e

    def login(self, email: str, password: str) -> Any:
        logger.info(f"Logging in as {mask_email(email)}")
        return self._request("POST", self.LOGIN_PATH, {"email": email, "password": password})

    def register(self, name: str, email: str, password: str) -> Any:
        logger.info(f"Registering {mask_email(email)}")
        return self._request(
            "POST",
            self.REGISTER_PATH,
            {"email": email, "password": password, "name": name}
        )

    def list_courses(self) -> Any:
        return self._request("GET", self.COURSES_PATH, authorized=True)

    def create_course(self, payload: Dict[str, Any]) -> Any:
        return self._request("POST", self.COURSES_PATH, payload)

    def update_course(self, payload: Dict[str, Any]) -> Any:
        return self._request("POST", self.UPDATE_PATH, payload)

    def delete_course(self, course_id: int) -> Any:
        return self._request("POST", self.DELETE_PATH, {"id": course_id})
