from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.enums import StudentCategory


@dataclass(frozen=True)
class Student:
    """Domain entity: Student (read-only input to the attendance matrix).

    Note: ``category`` keeps the raw API value; anything that is not
    ``regular`` is shown in the make-up/trial section.
    """

    student_id: int
    name: str
    category: str = StudentCategory.REGULAR.value
    color_code: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    parent_contact: Optional[str] = None
    class_id: Optional[int] = None

    @property
    def is_regular(self) -> bool:
        return self.category == StudentCategory.REGULAR.value

    @classmethod
    def from_api(cls, row: Mapping[str, Any]) -> "Student":
        class_id = row.get("class_id")
        return cls(
            student_id=int(row["id"]),
            name=str(row.get("name") or ""),
            category=str(row.get("student_type") or row.get("category") or StudentCategory.REGULAR.value),
            color_code=row.get("color_code") or None,
            email=row.get("email") or None,
            phone=row.get("phone") or None,
            parent_contact=row.get("parent_name") or row.get("parent_contact") or None,
            class_id=int(class_id) if class_id not in (None, "") else None,
        )
