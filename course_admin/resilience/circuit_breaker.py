"""
Circuit breaker for calls to the course service.

States:
- CLOSED: Normal operation, requests pass through
- OPEN: Too many consecutive connection failures, requests fail fast
- HALF_OPEN: Reset timeout elapsed, the next request probes the service

HTTP calls run on worker threads (see AsyncCourseService), so the state
is guarded by a lock.
"""

import logging
import threading
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Callable, Optional, Type

from ..errors import RemoteConnectionError


logger = logging.getLogger(__name__)


class CircuitState(Enum):
    """Circuit breaker states."""
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitOpenError(RemoteConnectionError):
    """Raised instead of calling the service while the circuit is OPEN."""

    def __init__(self, failure_count: int):
        super().__init__(
            f"Course service unavailable after {failure_count} consecutive failures, "
            "try again shortly"
        )


class CircuitBreaker:
    """
    Counts consecutive failures of the expected type and opens after the
    threshold. Any success closes the circuit again.

    Examples:
        >>> cb = CircuitBreaker(failure_threshold=3,
        ...                     timeout=timedelta(seconds=60),
        ...                     expected_exception=RemoteConnectionError)
        >>> payload = cb.call(session.get, url)
    """

    def __init__(
        self,
        failure_threshold: int = 3,
        timeout: timedelta = timedelta(seconds=60),
        expected_exception: Type[Exception] = RemoteConnectionError
    ):
        self.failure_threshold = failure_threshold
        self.timeout = timeout
        self.expected_exception = expected_exception

        self.failure_count = 0
        self.last_failure_time: Optional[datetime] = None
        self.state = CircuitState.CLOSED
        self._lock = threading.Lock()

        logger.debug(
            f"Circuit breaker initialized: "
            f"threshold={failure_threshold}, timeout={timeout}"
        )

    def call(self, func: Callable, *args, **kwargs) -> Any:
        """
        Execute func with circuit breaker protection.

        Raises:
            CircuitOpenError: If the circuit is OPEN
            Exception: Whatever func raises
        """
        with self._lock:
            if self.state == CircuitState.OPEN:
                if self._should_attempt_reset():
                    logger.info("Circuit breaker: Entering HALF_OPEN state")
                    self.state = CircuitState.HALF_OPEN
                else:
                    raise CircuitOpenError(self.failure_count)

        try:
            result = func(*args, **kwargs)
        except self.expected_exception:
            self._on_failure()
            raise

        self._on_success()
        return result

    def _should_attempt_reset(self) -> bool:
        if self.last_failure_time is None:
            return True
        return datetime.now() - self.last_failure_time >= self.timeout

    def _on_success(self):
        with self._lock:
            if self.state == CircuitState.HALF_OPEN:
                logger.info("Circuit breaker: Back to CLOSED state")
            self.state = CircuitState.CLOSED
            self.failure_count = 0

    def _on_failure(self):
        with self._lock:
            self.failure_count += 1
            self.last_failure_time = datetime.now()

            logger.warning(
                f"Circuit breaker: Failure #{self.failure_count} "
                f"(threshold={self.failure_threshold})"
            )

            if self.state == CircuitState.HALF_OPEN or self.failure_count >= self.failure_threshold:
                if self.state != CircuitState.OPEN:
                    logger.error(
                        f"Circuit breaker: OPEN after {self.failure_count} failures"
                    )
                self.state = CircuitState.OPEN

    def reset(self):
        """Manually reset circuit breaker to CLOSED state."""
        with self._lock:
            logger.info("Circuit breaker: Manual reset to CLOSED")
            self.state = CircuitState.CLOSED
            self.failure_count = 0
            self.last_failure_time = None

    @property
    def is_open(self) -> bool:
        return self.state == CircuitState.OPEN

    @property
    def is_closed(self) -> bool:
        return self.state == CircuitState.CLOSED

    @property
    def is_half_open(self) -> bool:
        return self.state == CircuitState.HALF_OPEN
