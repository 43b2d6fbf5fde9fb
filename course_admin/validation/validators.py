"""
Validation framework with Strategy pattern.

This module provides:
- Abstract Validator interface
- ValidationResult that separates missing fields from other errors
- Field checks shared by the course and credential validators
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional

from ..errors import ValidationError


EMAIL_PATTERN = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'


@dataclass
class ValidationResult:
    """
    Result of form validation.

    Attributes:
        is_valid: Whether validation passed
        missing: Names of required fields that are absent or empty
        errors: Other error messages (wrong type, negative value...)
        warnings: Non-fatal messages
    """

    is_valid: bool = True
    missing: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_missing(self, field_name: str) -> 'ValidationResult':
        self.missing.append(field_name)
        self.is_valid = False
        return self

    def add_error(self, message: str) -> 'ValidationResult':
        """
        Add an error message.

        Returns:
            Self for method chaining
        """
        self.errors.append(message)
        self.is_valid = False
        return self

    def add_warning(self, message: str) -> 'ValidationResult':
        self.warnings.append(message)
        return self

    @property
    def has_errors(self) -> bool:
        return bool(self.missing or self.errors)

    def to_error(self) -> Optional[ValidationError]:
        """ValidationError for a failed result, None when valid."""
        if self.is_valid:
            return None
        return ValidationError(self.missing, self.errors)

    def get_summary(self) -> str:
        """Human-readable summary of validation results."""
        if self.is_valid and not self.warnings:
            return "Validation passed"

        parts = []
        if self.missing:
            parts.append("Missing: " + ", ".join(self.missing))
        for error in self.errors:
            parts.append(f"  - {error}")
        for warning in self.warnings:
            parts.append(f"  ! {warning}")
        return "\n".join(parts)


class Validator(ABC):
    """
    Abstract base class for form validators.

    Subclasses implement validate() over a plain field dictionary so the
    same checks run for drafts coming from the CLI or from tests.
    """

    @abstractmethod
    def validate(self, data: Any) -> ValidationResult:
        pass

    def check_required_text(
        self,
        result: ValidationResult,
        data: dict,
        required_fields: List[str]
    ):
        """Flag fields that are absent, None or blank."""
        for name in required_fields:
            value = data.get(name)
            if value is None or not str(value).strip():
                result.add_missing(name)

    def validate_non_negative_number(
        self,
        value: Any,
        field_name: str
    ) -> Optional[str]:
        """
        Validate that value is a number >= 0.

        Returns:
            Error message if invalid, None if valid
        """
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return f"{field_name} must be a number, got {type(value).__name__}"
        if value < 0:
            return f"{field_name} must not be negative, got {value}"
        return None

    def validate_email_format(
        self,
        email: str,
        field_name: str = "email"
    ) -> Optional[str]:
        if not re.match(EMAIL_PATTERN, email):
            return f"Invalid {field_name} format: {email}"
        return None

    def validate_string_length(
        self,
        value: str,
        field_name: str,
        max_length: int
    ) -> Optional[str]:
        if len(value) > max_length:
            return f"{field_name} must be at most {max_length} characters, got {len(value)}"
        return None
