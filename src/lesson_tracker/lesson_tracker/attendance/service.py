from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.datetime_utils import months_before, normalize_date, today_local
from ..common.validators import optional_date, require_class_id, require_date
from ..core.constants import DEFAULT_SCHEDULE_LOOKBACK_MONTHS
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..students.repository import StudentRepository
from .model import AttendanceRecord, CellUpdate, DateRange, MatrixData, ScheduleResolution
from .repository import AttendanceRepository
from .state_machine import css_class_for, next_status

logger = logging.getLogger(__name__)


class AttendanceService:
    """Attendance matrix use cases on top of the remote API.

    Every date is normalized before it leaves this layer; validation failures
    raise ``ValidationError`` before any request is made.
    """

    def __init__(self, attendance: AttendanceRepository, students: StudentRepository):
        self._attendance = attendance
        self._students = students

    def load_matrix(self, *, class_id, date_range: DateRange) -> MatrixData:
        class_id = require_class_id(class_id)
        start = optional_date(date_range.start, "Start date")
        end = optional_date(date_range.end, "End date")
        return self._attendance.fetch_matrix(class_id=class_id, start_date=start, end_date=end)

    def toggle_cell(self, *, student_id: int, class_id, day, current_text: Optional[str]) -> CellUpdate:
        """Advance one cell and persist it.

        The returned update is only produced after the API confirmed the write,
        so a failure leaves the caller's cell untouched.
        """

        class_id = require_class_id(class_id)
        day = require_date(day, "Date")
        status = next_status(current_text)

        self._attendance.upsert(
            AttendanceRecord(student_id=int(student_id), class_id=class_id, date=day, status=status)
        )
        return CellUpdate(student_id=int(student_id), date=day, status=status, css_class=css_class_for(status))

    def create_sheet(self, *, class_id, day) -> int:
        """Create one empty-status record per rostered student; returns the count."""

        class_id = require_class_id(class_id)
        day = require_date(day, "Date")

        roster = self._students.list_for_class(class_id)
        if not roster:
            raise ValidationError("No students in this class")

        for student in roster:
            self._attendance.upsert(
                AttendanceRecord(
                    student_id=student.student_id,
                    class_id=class_id,
                    date=day,
                    status=AttendanceStatus.UNSET,
                )
            )
        logger.info("Created attendance sheet for class %s on %s (%d students)", class_id, day, len(roster))
        return len(roster)

    def move_records(self, *, class_id, from_date, to_date) -> int:
        class_id = require_class_id(class_id)
        from_day = require_date(from_date, "Source date")
        to_day = require_date(to_date, "Target date")
        if from_day == to_day:
            raise ValidationError("Source and target dates must be different")

        moved = self._attendance.move(class_id=class_id, from_date=from_day, to_date=to_day)
        logger.info("Moved %d attendance records for class %s: %s -> %s", moved, class_id, from_day, to_day)
        return moved

    def resolve_schedule_range(
        self,
        *,
        class_id,
        requested: DateRange,
        today: Optional[date] = None,
    ) -> ScheduleResolution:
        """Ask the API which scheduled lesson days fall in ``requested``.

        Blank bounds default to the last six months ending today.
        """

        class_id = require_class_id(class_id)
        today = today or today_local()
        start = optional_date(requested.start, "Start date") or normalize_date(
            months_before(today, DEFAULT_SCHEDULE_LOOKBACK_MONTHS)
        )
        end = optional_date(requested.end, "End date") or normalize_date(today)

        return self._attendance.schedule_dates(class_id=class_id, start_date=start, end_date=end)
