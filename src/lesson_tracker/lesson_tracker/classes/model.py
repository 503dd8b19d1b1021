from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class ClassSection:
    """Domain entity: a class section with an optional free-text recurring schedule."""

    class_id: int
    name: str
    teacher_id: Optional[int] = None
    teacher_name: Optional[str] = None
    schedule: Optional[str] = None
    color: Optional[str] = None

    @classmethod
    def from_api(cls, row: Mapping[str, Any]) -> "ClassSection":
        teacher_id = row.get("teacher_id")
        return cls(
            class_id=int(row["id"]),
            name=str(row.get("name") or ""),
            teacher_id=int(teacher_id) if teacher_id not in (None, "") else None,
            teacher_name=row.get("teacher_name") or None,
            schedule=row.get("schedule") or None,
            color=row.get("color") or None,
        )
