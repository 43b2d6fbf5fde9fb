"""
Unit tests for Circuit Breaker pattern.
"""

import time
from datetime import timedelta

import pytest

from course_admin.errors import ProtocolError, RemoteConnectionError
from course_admin.resilience.circuit_breaker import (
    CircuitBreaker,
    CircuitOpenError,
    CircuitState,
)


def failing_func():
    raise RemoteConnectionError("refused")


class TestCircuitBreaker:
    """Test cases for CircuitBreaker."""

    def test_initial_state_closed(self):
        """Test circuit breaker starts in CLOSED state."""
        cb = CircuitBreaker(failure_threshold=3)

        assert cb.state == CircuitState.CLOSED
        assert cb.is_closed
        assert not cb.is_open
        assert not cb.is_half_open
        assert cb.failure_count == 0

    def test_successful_call(self):
        cb = CircuitBreaker(failure_threshold=3)

        assert cb.call(lambda x: x * 2, 21) == 42
        assert cb.failure_count == 0

    def test_circuit_opens_after_threshold(self):
        """Test circuit opens after reaching failure threshold."""
        cb = CircuitBreaker(failure_threshold=3)

        for _ in range(3):
            with pytest.raises(RemoteConnectionError):
                cb.call(failing_func)

        assert cb.is_open
        assert cb.failure_count == 3

    def test_open_circuit_fails_fast(self):
        """Test OPEN circuit raises without calling the function."""
        cb = CircuitBreaker(failure_threshold=1)
        with pytest.raises(RemoteConnectionError):
            cb.call(failing_func)

        calls = []
        with pytest.raises(CircuitOpenError) as exc_info:
            cb.call(lambda: calls.append(1))

        assert calls == []
        assert exc_info.value.retryable
        assert isinstance(exc_info.value, RemoteConnectionError)

    def test_success_resets_count(self):
        cb = CircuitBreaker(failure_threshold=3)
        with pytest.raises(RemoteConnectionError):
            cb.call(failing_func)

        cb.call(lambda: None)

        assert cb.failure_count == 0
        assert cb.is_closed

    def test_half_open_after_timeout(self):
        """Test the circuit probes again once the timeout has elapsed."""
        cb = CircuitBreaker(failure_threshold=1, timeout=timedelta(milliseconds=50))
        with pytest.raises(RemoteConnectionError):
            cb.call(failing_func)

        time.sleep(0.1)

        assert cb.call(lambda: "ok") == "ok"
        assert cb.is_closed

    def test_failure_in_half_open_reopens(self):
        cb = CircuitBreaker(failure_threshold=3, timeout=timedelta(milliseconds=50))
        for _ in range(3):
            with pytest.raises(RemoteConnectionError):
                cb.call(failing_func)

        time.sleep(0.1)
        with pytest.raises(RemoteConnectionError):
            cb.call(failing_func)

        assert cb.is_open

    def test_unexpected_exception_not_counted(self):
        cb = CircuitBreaker(failure_threshold=1)

        def bad_body():
            raise ProtocolError("not json")

        with pytest.raises(ProtocolError):
            cb.call(bad_body)

        assert cb.failure_count == 0
        assert cb.is_closed

    def test_manual_reset(self):
        cb = CircuitBreaker(failure_threshold=1)
        with pytest.raises(RemoteConnectionError):
            cb.call(failing_func)

        cb.reset()

        assert cb.is_closed
        assert cb.failure_count == 0
        assert cb.last_failure_time is None
