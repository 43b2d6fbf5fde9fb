"""
Logging utilities with security features.

This module provides logging setup with:
- Configurable log levels and output destinations
- Log rotation for file handlers
- Masking of passwords, bearer tokens and emails
"""

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


def mask_email(email: str) -> str:
    """
    Mask email address for safe logging.

    Examples:
        >>> mask_email("user@example.com")
        'u***@example.com'
        >>> mask_email("invalid")
        '***'
    """
    if not email or "@" not in email:
        return "***"

    local, domain = email.split("@", 1)
    masked_local = local[0] + "***" if len(local) > 0 else "***"
    return f"{masked_local}@{domain}"


def mask_token(token: Optional[str]) -> str:
    """
    Keep only the last four characters of a bearer token.

    Examples:
        >>> mask_token("abcdef123456")
        '****3456'
    """
    if not token:
        return "<none>"
    if len(token) <= 4:
        return "****"
    return "****" + token[-4:]


class SensitiveDataFilter(logging.Filter):
    """
    Logging filter that masks passwords and bearer tokens before output.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()

        message = re.sub(
            r'(password|pass|pwd)["\']?\s*[:=]\s*["\']?([^"\'\s,}]+)',
            r'\1: ********',
            message,
            flags=re.IGNORECASE
        )
        message = re.sub(
            r'(bearer\s+)[A-Za-z0-9._~+/=-]+',
            r'\1********',
            message,
            flags=re.IGNORECASE
        )
        message = re.sub(
            r'(token["\']?\s*[:=]\s*["\']?)([^"\'\s,}]+)',
            r'\1********',
            message,
            flags=re.IGNORECASE
        )

        record.msg = message
        record.args = None
        return True


def setup_logger(
    name: str = "course_admin",
    level: int = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up and configure the package logger.

    Module loggers (``course_admin.*``) propagate to it, so calling this
    once at startup covers the whole package.

    Args:
        name: Logger name (default: "course_admin")
        level: Logging level (default: logging.INFO)
        log_file: Optional path to log file for file output

    Examples:
        >>> logger = setup_logger(level=logging.DEBUG, log_file="output/logs/admin.log")
    """
    logger = logging.getLogger(name)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    logger.setLevel(level)

    formatter = logging.Formatter(
        fmt='%(asctime)s [%(levelname)s] %(name)s:%(funcName)s:%(lineno)d %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    sensitive_filter = SensitiveDataFilter()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.addFilter(sensitive_filter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        file_handler.addFilter(sensitive_filter)
        logger.addHandler(file_handler)

    return logger
