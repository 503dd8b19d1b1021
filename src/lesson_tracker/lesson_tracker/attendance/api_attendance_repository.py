from __future__ import annotations

from typing import Optional

from ..api.client import ApiClient
from ..common.datetime_utils import normalize_date
from .model import AttendanceRecord, DateRange, MatrixData, ScheduleResolution
from .repository import AttendanceRepository


class ApiAttendanceRepository(AttendanceRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def fetch_matrix(self, *, class_id: int, start_date: Optional[str], end_date: Optional[str]) -> MatrixData:
        body = self._client.get(
            "/attendance/matrix",
            params={"classId": int(class_id), "startDate": start_date, "endDate": end_date},
        )
        return MatrixData.from_api(body or {})

    def upsert(self, record: AttendanceRecord) -> dict:
        return self._client.post("/attendance", json=record.to_payload()) or {}

    def schedule_dates(self, *, class_id: int, start_date: str, end_date: str) -> ScheduleResolution:
        body = self._client.get(
            "/attendance/schedule-dates",
            params={"classId": int(class_id), "startDate": start_date, "endDate": end_date},
        ) or {}
        dates = [str(d) for d in body.get("dates") or []]
        return ScheduleResolution(
            dates=dates,
            range=_reported_range(body, dates),
            schedule=body.get("schedule") or None,
        )

    def move(self, *, class_id: int, from_date: str, to_date: str) -> int:
        body = self._client.post(
            "/attendance/move",
            json={"class_id": int(class_id), "from_date": from_date, "to_date": to_date},
        ) or {}
        return int(body.get("movedCount") or 0)


def _reported_range(body, dates) -> Optional[DateRange]:
    """Range the server echoes back; the dates' own bounds fill in missing ends."""
    bounds = DateRange.bounding(dates)
    if bounds is None:
        return None
    return DateRange(
        start=normalize_date(body.get("startDate")) or bounds.start,
        end=normalize_date(body.get("endDate")) or bounds.end,
    ).widen_to(bounds)
