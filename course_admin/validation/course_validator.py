"""
Course draft validator.

Runs before any create/update request leaves the client.
"""

from typing import Any, Dict

from ..models.course import CourseStatus
from .validators import Validator, ValidationResult


class CourseDraftValidator(Validator):
    """
    Validator for the add/edit course form.

    Validates:
    - name, instructor, category present and not blank
    - price present, numeric, non-negative and not zero
    - student count a non-negative integer
    - status one of Active/Inactive/Draft

    Examples:
        >>> validator = CourseDraftValidator()
        >>> result = validator.validate(CourseDraft(name="Web Dev").to_dict())
        >>> result.missing
        ['instructor', 'category', 'price']
    """

    REQUIRED_TEXT_FIELDS = ["name", "instructor", "category"]
    MAX_TEXT_LENGTH = 200

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult(is_valid=True)

        self.check_required_text(result, data, self.REQUIRED_TEXT_FIELDS)
        for name in self.REQUIRED_TEXT_FIELDS:
            value = data.get(name)
            if isinstance(value, str):
                error = self.validate_string_length(value.strip(), name, self.MAX_TEXT_LENGTH)
                if error:
                    result.add_error(error)

        # A zero price is the untouched form default, so it counts as missing
        price = data.get("price")
        if price is None or price == 0:
            result.add_missing("price")
        else:
            error = self.validate_non_negative_number(price, "price")
            if error:
                result.add_error(error)

        students = data.get("student_count", 0)
        if isinstance(students, bool) or not isinstance(students, int):
            result.add_error(
                f"student_count must be an integer, got {type(students).__name__}"
            )
        elif students < 0:
            result.add_error(f"student_count must not be negative, got {students}")

        try:
            CourseStatus.parse(data.get("status", CourseStatus.DRAFT))
        except ValueError as e:
            result.add_error(str(e))

        return result
