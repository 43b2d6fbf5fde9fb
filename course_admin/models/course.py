"""
Course data models.

This module provides the Course record as the service reports it, the
editable CourseDraft behind the add/edit forms, and the dashboard summary.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


class CourseStatus(Enum):
    """Publication status of a course."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"
    DRAFT = "Draft"

    @classmethod
    def parse(cls, value: Any) -> 'CourseStatus':
        """
        Parse a status string case-insensitively.

        Raises:
            ValueError: If the value is not a known status
        """
        if isinstance(value, CourseStatus):
            return value
        text = str(value).strip().lower()
        for status in cls:
            if status.value.lower() == text:
                return status
        raise ValueError(f"Unknown course status: {value!r}")


# Wire key -> accepted aliases, first one is what we send.
# The legacy PHP backend answers with Spanish keys.
FIELD_ALIASES: Dict[str, tuple] = {
    "id": ("id",),
    "name": ("name", "title", "nombre"),
    "instructor": ("instructor",),
    "category": ("category", "categoria"),
    "price": ("price", "precio"),
    "student_count": ("studentCount", "students", "estudiantes"),
    "status": ("status", "estado"),
    "owner_id": ("ownerId", "user_id", "userId"),
    "creator_email": ("creatorEmail", "creador_email"),
    "created_at": ("createdAt", "created_at"),
    "updated_at": ("updatedAt", "updated_at"),
}


def _pick(data: Dict[str, Any], attr: str) -> Any:
    for key in FIELD_ALIASES[attr]:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _optional_int(value: Any, name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got bool")
    number = float(value)
    if not number.is_integer():
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return int(number)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class Course:
    """
    A course as confirmed by the remote service.

    Instances are immutable; the sync engine replaces them wholesale on
    every refresh.
    """

    name: str
    instructor: str
    category: str
    price: float
    id: Optional[int] = None
    student_count: int = 0
    status: CourseStatus = CourseStatus.DRAFT
    owner_id: Optional[int] = None
    creator_email: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == CourseStatus.ACTIVE

    @property
    def revenue(self) -> float:
        return self.price * self.student_count

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> 'Course':
        """
        Build a Course from a service payload.

        Accepts both the English keys and the legacy Spanish ones.

        Raises:
            ValueError: If a field has the wrong type
        """
        if not isinstance(data, dict):
            raise ValueError(f"course must be an object, got {type(data).__name__}")

        price = _pick(data, "price")
        status = _pick(data, "status")
        return cls(
            id=_optional_int(_pick(data, "id"), "id"),
            name=_text(_pick(data, "name")),
            instructor=_text(_pick(data, "instructor")),
            category=_text(_pick(data, "category")),
            price=float(price) if price is not None else 0.0,
            student_count=_optional_int(_pick(data, "student_count"), "studentCount") or 0,
            status=CourseStatus.parse(status) if status is not None else CourseStatus.DRAFT,
            owner_id=_optional_int(_pick(data, "owner_id"), "ownerId"),
            creator_email=_pick(data, "creator_email"),
            created_at=_pick(data, "created_at"),
            updated_at=_pick(data, "updated_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Flat representation used for JSON/CSV export."""
        return {
            "id": self.id,
            "name": self.name,
            "instructor": self.instructor,
            "category": self.category,
            "price": self.price,
            "studentCount": self.student_count,
            "status": self.status.value,
            "ownerId": self.owner_id,
            "creatorEmail": self.creator_email,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


@dataclass
class CourseDraft:
    """
    Editable fields of a course while an add/edit form is open.

    Examples:
        >>> draft = CourseDraft(name="Web Dev", instructor="Ana",
        ...                     category="Prog", price=100)
        >>> draft.to_payload(owner_id=1)["ownerId"]
        1
    """

    name: str = ""
    instructor: str = ""
    category: str = ""
    price: Optional[float] = None
    student_count: int = 0
    status: CourseStatus = CourseStatus.DRAFT

    @classmethod
    def from_course(cls, course: Course) -> 'CourseDraft':
        """Prefill an edit form."""
        return cls(
            name=course.name,
            instructor=course.instructor,
            category=course.category,
            price=course.price,
            student_count=course.student_count,
            status=course.status,
        )

    def with_changes(self, **changes) -> 'CourseDraft':
        """Copy with the given non-None fields overridden."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    def to_dict(self) -> Dict[str, Any]:
        """Field dictionary for validation."""
        return {
            "name": self.name,
            "instructor": self.instructor,
            "category": self.category,
            "price": self.price,
            "student_count": self.student_count,
            "status": self.status,
        }

    def to_payload(
        self,
        owner_id: Optional[int] = None,
        course_id: Optional[int] = None
    ) -> Dict[str, Any]:
        """Request body for create (no id) or update (with id)."""
        status = self.status if isinstance(self.status, CourseStatus) else CourseStatus.parse(self.status)
        payload: Dict[str, Any] = {
            "name": self.name.strip(),
            "instructor": self.instructor.strip(),
            "category": self.category.strip(),
            "price": self.price,
            "studentCount": self.student_count,
            "status": status.value,
        }
        if owner_id is not None:
            payload["ownerId"] = owner_id
        if course_id is not None:
            payload["id"] = course_id
        return payload

    def to_course(self, owner_id: Optional[int] = None) -> Course:
        """Unsaved Course built from this draft (no id)."""
        return Course(
            name=self.name.strip(),
            instructor=self.instructor.strip(),
            category=self.category.strip(),
            price=float(self.price or 0),
            student_count=self.student_count,
            status=self.status,
            owner_id=owner_id,
        )


@dataclass
class CourseStats:
    """Dashboard figures for the admin panel header cards."""

    total_courses: int = 0
    active_courses: int = 0
    total_students: int = 0
    total_revenue: float = 0.0
    by_status: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_courses(cls, courses: Iterable[Course]) -> 'CourseStats':
        stats = cls(by_status={status.value: 0 for status in CourseStatus})
        for course in courses:
            stats.total_courses += 1
            stats.total_students += course.student_count
            stats.total_revenue += course.revenue
            stats.by_status[course.status.value] += 1
        stats.active_courses = stats.by_status[CourseStatus.ACTIVE.value]
        return stats

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_courses": self.total_courses,
            "active_courses": self.active_courses,
            "total_students": self.total_students,
            "total_revenue": self.total_revenue,
            "by_status": dict(self.by_status),
        }


def distinct_categories(courses: Iterable[Course]) -> List[str]:
    return sorted({course.category for course in courses if course.category})
