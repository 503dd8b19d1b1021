from __future__ import annotations

from typing import Optional, Protocol

from .model import AttendanceRecord, MatrixData, ScheduleResolution


class AttendanceRepository(Protocol):
    """Attendance operations offered by the remote API.

    Note (DIP): services depend on this interface, not on the HTTP client.
    All dates passed in are already canonical.
    """

    def fetch_matrix(self, *, class_id: int, start_date: Optional[str], end_date: Optional[str]) -> MatrixData:
        raise NotImplementedError

    def upsert(self, record: AttendanceRecord) -> dict:
        raise NotImplementedError

    def schedule_dates(self, *, class_id: int, start_date: str, end_date: str) -> ScheduleResolution:
        raise NotImplementedError

    def move(self, *, class_id: int, from_date: str, to_date: str) -> int:
        """Move every record of a class between dates; returns the moved count."""

        raise NotImplementedError
