"""
Configuration management with environment variables.

This module provides centralized configuration for the course admin
client, loaded from the environment (and a .env file when present).
"""

import os
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlparse
from dotenv import load_dotenv


class SecureString:
    """
    Wrapper for sensitive strings that prevents accidental exposure.

    Examples:
        >>> password = SecureString("secret123")
        >>> str(password)  # Returns "********"
        >>> password.get_value()  # Returns actual value
    """

    def __init__(self, value: str):
        self._value = value

    def get_value(self) -> str:
        """
        Get the actual value (use with caution).

        Warning:
            Use only when building the login request, never log the result.
        """
        return self._value

    def __str__(self) -> str:
        return "********"

    def __repr__(self) -> str:
        return "SecureString(********)"

    def __eq__(self, other) -> bool:
        if isinstance(other, SecureString):
            return self._value == other._value
        return False

    def __bool__(self) -> bool:
        return bool(self._value)


def reveal(value: Union[str, SecureString, None]) -> str:
    """Plain text of a password given either wrapped or bare."""
    if value is None:
        return ""
    if isinstance(value, SecureString):
        return value.get_value()
    return value


class Config:
    """
    Application configuration manager.

    Attributes:
        api_url: Base URL of the course service
        api_suffix: Suffix appended to every endpoint path (".php" for the legacy backend)
        api_timeout: Transport timeout in seconds
        session_file: JSON file holding the persisted session
        success_message_seconds: How long success banners stay up
        circuit_threshold: Consecutive connection failures before failing fast
        circuit_reset_seconds: How long the circuit stays open
        admin_email: Default login email
        admin_password: Default login password (SecureString)
        output_dir: Directory for exports and logs
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional rotating log file

    Examples:
        >>> config = Config()
        >>> if config.validate():
        ...     print(f"Using service at: {config.api_url}")
    """

    @staticmethod
    def _validate_url(url: str, name: str) -> str:
        """
        Validate URL format and scheme.

        Raises:
            ValueError: If URL is invalid
        """
        parsed = urlparse(url)

        if not parsed.scheme:
            raise ValueError(f"{name} must include URL scheme (http/https)")

        if parsed.scheme not in ['http', 'https']:
            raise ValueError(f"{name} must use http or https scheme, got: {parsed.scheme}")

        if not parsed.netloc:
            raise ValueError(f"{name} must have a valid domain")

        return url

    def __init__(self):
        """Initialize configuration by loading environment variables."""
        load_dotenv()

        url = os.getenv("COURSE_API_URL", "http://localhost:8000")
        self._api_url = self._validate_url(url, "COURSE_API_URL").rstrip("/")
        self._api_suffix = os.getenv("COURSE_API_SUFFIX", "")
        self._api_timeout = float(os.getenv("COURSE_API_TIMEOUT", "30"))

        self._session_file = Path(os.getenv("COURSE_SESSION_FILE", "output/session.json"))
        self._success_message_seconds = float(
            os.getenv("COURSE_SUCCESS_MESSAGE_SECONDS", "3")
        )

        self._circuit_threshold = int(os.getenv("COURSE_CIRCUIT_THRESHOLD", "3"))
        self._circuit_reset_seconds = float(os.getenv("COURSE_CIRCUIT_RESET_SECONDS", "60"))

        self._admin_email = os.getenv("COURSE_ADMIN_EMAIL")
        pwd = os.getenv("COURSE_ADMIN_PASSWORD")
        self._admin_password = SecureString(pwd) if pwd else None

        self._output_dir = Path(os.getenv("OUTPUT_DIR", "output"))
        self._log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self._log_file = os.getenv("LOG_FILE") or None

    @property
    def api_url(self) -> str:
        return self._api_url

    @property
    def api_suffix(self) -> str:
        return self._api_suffix

    @property
    def api_timeout(self) -> float:
        return self._api_timeout

    @property
    def session_file(self) -> Path:
        return self._session_file

    @property
    def success_message_seconds(self) -> float:
        return self._success_message_seconds

    @property
    def circuit_threshold(self) -> int:
        return self._circuit_threshold

    @property
    def circuit_reset_seconds(self) -> float:
        return self._circuit_reset_seconds

    @property
    def admin_email(self) -> Optional[str]:
        return self._admin_email

    @property
    def admin_password(self) -> Optional[SecureString]:
        """
        Default admin password (wrapped in SecureString).

        Note:
            Can also be given on the command line, which takes precedence.
        """
        return self._admin_password

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    @property
    def log_level(self) -> str:
        return self._log_level

    @property
    def log_file(self) -> Optional[str]:
        return self._log_file

    def validate(self) -> bool:
        """
        Validate configuration values.

        Returns:
            True if all configuration is valid

        Raises:
            ValueError: Listing every problem found
        """
        errors = []

        if self._admin_email and "@" not in self._admin_email:
            errors.append("COURSE_ADMIN_EMAIL must be a valid email address")

        if self._api_suffix and not self._api_suffix.startswith("."):
            errors.append("COURSE_API_SUFFIX must start with a dot (e.g. .php)")

        if self._api_timeout <= 0:
            errors.append("COURSE_API_TIMEOUT must be positive")

        if self._success_message_seconds <= 0:
            errors.append("COURSE_SUCCESS_MESSAGE_SECONDS must be positive")

        if self._circuit_threshold <= 0:
            errors.append("COURSE_CIRCUIT_THRESHOLD must be positive")

        if self._circuit_reset_seconds < 0:
            errors.append("COURSE_CIRCUIT_RESET_SECONDS must not be negative")

        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self._log_level not in valid_levels:
            errors.append(
                f"LOG_LEVEL must be one of: {', '.join(valid_levels)}"
            )

        if errors:
            error_msg = "Configuration validation failed:\n  - " + "\n  - ".join(errors)
            raise ValueError(error_msg)

        return True

    def create_output_directories(self):
        """Create output directories if they don't exist."""
        for directory in (self.output_dir / "exports", self.session_file.parent):
            directory.mkdir(parents=True, exist_ok=True)


# Singleton instance
config = Config()
