"""
Login and registration form validators.
"""

from typing import Any, Dict

from .validators import Validator, ValidationResult


class LoginValidator(Validator):
    """Email present and well-formed, password present."""

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult(is_valid=True)
        self.check_required_text(result, data, ["email", "password"])

        email = data.get("email")
        if email and str(email).strip():
            error = self.validate_email_format(str(email).strip())
            if error:
                result.add_error(error)

        return result


class RegistrationValidator(LoginValidator):
    """Login checks plus a non-blank display name."""

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult(is_valid=True)
        self.check_required_text(result, data, ["name"])

        login_result = super().validate(data)
        for name in login_result.missing:
            result.add_missing(name)
        for error in login_result.errors:
            result.add_error(error)

        return result
