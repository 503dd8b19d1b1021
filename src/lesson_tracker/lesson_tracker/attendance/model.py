from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..common.datetime_utils import normalize_date
from ..core.enums import AttendanceStatus
from ..students.model import Student


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance mark, identified by (student, class, date).

    ``date`` is always the canonical ``YYYY-MM-DD`` string.
    """

    student_id: int
    class_id: int
    date: str
    status: AttendanceStatus = AttendanceStatus.UNSET
    notes: Optional[str] = None

    def to_payload(self) -> dict:
        payload = {
            "student_id": int(self.student_id),
            "class_id": int(self.class_id),
            "date": self.date,
            "status": AttendanceStatus(self.status).value,
        }
        if self.notes:
            payload["notes"] = self.notes
        return payload


@dataclass(frozen=True)
class MatrixData:
    """Raw payload of the matrix endpoint, before grid building.

    ``attendance`` maps ``"<studentId>-<date>"`` to a status marker.
    """

    students: List[Student]
    dates: List[str]
    attendance: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_api(cls, body: Mapping[str, Any]) -> "MatrixData":
        return cls(
            students=[Student.from_api(s) for s in body.get("students") or []],
            dates=[str(d) for d in body.get("dates") or []],
            attendance={str(k): str(v or "") for k, v in (body.get("attendance") or {}).items()},
        )


@dataclass(frozen=True)
class DateRange:
    """Inclusive (start, end) of canonical dates; both ``None`` means every recorded date."""

    start: Optional[str] = None
    end: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.start is None and self.end is None

    @classmethod
    def bounding(cls, dates: Sequence[str]) -> Optional["DateRange"]:
        normalized = sorted(d for d in (normalize_date(x) for x in dates) if d)
        if not normalized:
            return None
        return cls(start=normalized[0], end=normalized[-1])

    def widen_to(self, other: "DateRange") -> "DateRange":
        """Smallest range covering both; a ``None`` bound is unbounded and wins."""
        start = None if self.start is None or other.start is None else min(self.start, other.start)
        end = None if self.end is None or other.end is None else max(self.end, other.end)
        return DateRange(start=start, end=end)


@dataclass(frozen=True)
class ScheduleResolution:
    dates: List[str]
    range: Optional[DateRange]
    schedule: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.range is not None


@dataclass(frozen=True)
class CellUpdate:
    """Confirmed new state of one matrix cell, applied in place by the caller."""

    student_id: int
    date: str
    status: AttendanceStatus
    css_class: str

    @property
    def text(self) -> str:
        return self.status.value
