"""
Central data model definitions used across the project.

This module defines the canonical structure of Course, Week and Material
objects so that:
- the gateway, the store and the terminal views share the same field names
- records coming from the API are validated in exactly one place

All records are read-only from this program's point of view.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Optional

from studybrowser.errors import FetchFailure


class Level(enum.Enum):
    """One level of the Courses -> Weeks -> Materials hierarchy."""

    COURSES = "courses"
    WEEKS = "weeks"
    MATERIALS = "materials"


def _require_int(record: dict[str, Any], key: str) -> int:
    value = record.get(key)
    # bool is an int subclass, but never a valid id
    if isinstance(value, bool) or not isinstance(value, int):
        raise FetchFailure(f"Malformed record: {key!r} must be an integer, got {value!r}")
    return value


def _opt_str(record: dict[str, Any], key: str) -> Optional[str]:
    value = record.get(key)
    return None if value is None else str(value)


def _str(record: dict[str, Any], key: str) -> str:
    value = record.get(key)
    return "" if value is None else str(value)


@dataclass(frozen=True)
class Course:
    """
    Represents one course as returned by GET /courses/.
    """

    id: int
    title: str
    description: Optional[str] = None
    lecturer_id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> Course:
        lecturer = record.get("lecturer_id")
        return cls(
            id=_require_int(record, "id"),
            title=_str(record, "title"),
            description=_opt_str(record, "description"),
            lecturer_id=lecturer if isinstance(lecturer, int) else None,
            created_at=_opt_str(record, "created_at"),
            updated_at=_opt_str(record, "updated_at"),
        )


@dataclass(frozen=True)
class Week:
    """
    Represents one week of a course.

    `week_number` defines the display order inside the course.
    """

    id: int
    course_id: int
    title: str
    description: str
    week_number: int
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> Week:
        return cls(
            id=_require_int(record, "id"),
            course_id=_require_int(record, "course_id"),
            title=_str(record, "title"),
            description=_str(record, "description"),
            week_number=_require_int(record, "week_number"),
            created_at=_opt_str(record, "created_at"),
            updated_at=_opt_str(record, "updated_at"),
        )


@dataclass(frozen=True)
class Material:
    """
    Represents one study material attached to a week.

    `material_type` is usually "link" or "drive-file", but any other string
    is accepted and shown as a file. `content` holds the URL or file reference.
    """

    id: int
    week_id: int
    title: str
    description: str
    material_type: str
    content: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def is_link(self) -> bool:
        return self.material_type == "link"

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> Material:
        return cls(
            id=_require_int(record, "id"),
            week_id=_require_int(record, "week_id"),
            title=_str(record, "title"),
            description=_str(record, "description"),
            material_type=_str(record, "material_type"),
            content=_str(record, "content"),
            created_at=_opt_str(record, "created_at"),
            updated_at=_opt_str(record, "updated_at"),
        )
