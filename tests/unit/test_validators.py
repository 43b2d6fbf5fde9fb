"""
Unit tests for validation framework.
"""

import pytest

from course_admin.errors import ValidationError
from course_admin.models.course import CourseDraft, CourseStatus
from course_admin.validation.course_validator import CourseDraftValidator
from course_admin.validation.credentials_validator import LoginValidator, RegistrationValidator
from course_admin.validation.validators import ValidationResult


class TestValidationResult:
    """Test cases for ValidationResult."""

    def test_initial_valid(self):
        result = ValidationResult()

        assert result.is_valid
        assert not result.has_errors
        assert result.to_error() is None
        assert result.get_summary() == "Validation passed"

    def test_add_missing(self):
        """Test missing fields invalidate the result."""
        result = ValidationResult().add_missing("name").add_missing("price")

        assert not result.is_valid
        assert result.to_error() == ValidationError(["name", "price"])

    def test_warning_keeps_valid(self):
        result = ValidationResult().add_warning("long name")

        assert result.is_valid
        assert "! long name" in result.get_summary()

    def test_summary_lists_everything(self):
        result = ValidationResult().add_missing("name").add_error("price must be a number, got str")

        summary = result.get_summary()

        assert "Missing: name" in summary
        assert "price must be a number" in summary


class TestCourseDraftValidator:
    """Test cases for CourseDraftValidator."""

    @pytest.fixture
    def validator(self):
        return CourseDraftValidator()

    def test_valid_draft(self, validator):
        draft = CourseDraft(name="Web Dev", instructor="Ana", category="Prog", price=100)

        result = validator.validate(draft.to_dict())

        assert result.is_valid, result.get_summary()

    def test_empty_draft(self, validator):
        """Test every missing field is reported at once, in form order."""
        result = validator.validate(CourseDraft().to_dict())

        assert result.missing == ["name", "instructor", "category", "price"]

    def test_blank_text_counts_as_missing(self, validator):
        draft = CourseDraft(name="  ", instructor="Ana", category="Prog", price=10)

        assert validator.validate(draft.to_dict()).missing == ["name"]

    def test_zero_price_counts_as_missing(self, validator):
        draft = CourseDraft(name="A", instructor="B", category="C", price=0)

        assert validator.validate(draft.to_dict()).missing == ["price"]

    @pytest.mark.parametrize("price", [-1, "100", True])
    def test_bad_price(self, validator, price):
        draft = CourseDraft(name="A", instructor="B", category="C", price=price)

        result = validator.validate(draft.to_dict())

        assert not result.is_valid
        assert result.missing == []
        assert any("price" in error for error in result.errors)

    @pytest.mark.parametrize("students", [-3, 2.5])
    def test_bad_student_count(self, validator, students):
        draft = CourseDraft(name="A", instructor="B", category="C", price=1, student_count=students)

        assert any("student_count" in e for e in validator.validate(draft.to_dict()).errors)

    def test_unknown_status(self, validator):
        data = CourseDraft(name="A", instructor="B", category="C", price=1).to_dict()
        data["status"] = "Archived"

        result = validator.validate(data)

        assert any("Archived" in error for error in result.errors)

    def test_status_case_insensitive(self, validator):
        data = CourseDraft(name="A", instructor="B", category="C", price=1).to_dict()
        data["status"] = "active"

        assert validator.validate(data).is_valid
        assert CourseStatus.parse("active") == CourseStatus.ACTIVE

    def test_overlong_name(self, validator):
        draft = CourseDraft(name="x" * 201, instructor="B", category="C", price=1)

        assert not validator.validate(draft.to_dict()).is_valid


class TestCredentialValidators:
    """Test cases for login and registration validators."""

    def test_login_valid(self):
        assert LoginValidator().validate({"email": "a@b.com", "password": "x"}).is_valid

    def test_login_missing_both(self):
        result = LoginValidator().validate({})

        assert result.missing == ["email", "password"]

    def test_login_bad_email(self):
        result = LoginValidator().validate({"email": "a@b", "password": "x"})

        assert result.missing == []
        assert result.errors == ["Invalid email format: a@b"]

    def test_registration_requires_name_first(self):
        result = RegistrationValidator().validate({"email": "", "password": "x"})

        assert result.missing == ["name", "email"]
