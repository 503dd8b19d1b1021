from __future__ import annotations

import pytest
import requests

from src.lesson_tracker.lesson_tracker.api.client import ApiClient, ApiConfig
from src.lesson_tracker.lesson_tracker.attendance.api_attendance_repository import ApiAttendanceRepository
from src.lesson_tracker.lesson_tracker.attendance.model import AttendanceRecord, DateRange
from src.lesson_tracker.lesson_tracker.core.constants import OFFLINE_MESSAGE
from src.lesson_tracker.lesson_tracker.core.enums import AttendanceStatus
from src.lesson_tracker.lesson_tracker.core.exceptions import ApiError, ApiUnavailableError, NotFoundError
from src.lesson_tracker.lesson_tracker.students.api_student_repository import ApiStudentRepository


def _client(session, token=None):
    return ApiClient(ApiConfig(base_url="http://api.test/api/", timeout=2.0, token=token), session=session)


def test_get_drops_empty_params_and_sends_token(fake_session):
    fake_session.route("GET", "/classes", [])
    client = _client(fake_session, token="abc")

    client.get("/classes", params={"classId": 7, "startDate": None, "endDate": ""})

    assert fake_session.calls[0]["params"] == {"classId": 7}
    assert fake_session.headers["Authorization"] == "Bearer abc"


def test_server_error_message_is_surfaced(fake_session, response):
    fake_session.route("POST", "/attendance", response(409, {"error": "Attendance record already exists"}))

    with pytest.raises(ApiError) as exc:
        _client(fake_session).post("/attendance", json={})

    assert exc.value.message == "Attendance record already exists"
    assert exc.value.status_code == 409


def test_generic_status_message_without_body(fake_session, response):
    fake_session.route("GET", "/classes", response(500, raw=b"<html>oops</html>"))

    with pytest.raises(ApiError, match=r"Request failed \(HTTP 500\)"):
        _client(fake_session).get("/classes")


def test_404_maps_to_not_found(fake_session):
    with pytest.raises(NotFoundError):
        _client(fake_session).get("/reports/1")


def test_connection_errors_map_to_offline(fake_session):
    fake_session.route("GET", "/classes", lambda **_: requests.ConnectionError("down"))

    with pytest.raises(ApiUnavailableError) as exc:
        _client(fake_session).get("/classes")
    assert exc.value.message == OFFLINE_MESSAGE


def test_matrix_and_upsert_wire_format(fake_session):
    fake_session.route(
        "GET",
        "/attendance/matrix",
        {
            "students": [{"id": 3, "name": "Chie", "student_type": "regular", "color_code": "red"}],
            "dates": ["2024-01-02"],
            "attendance": {"3-2024-01-02": "O"},
        },
    )
    fake_session.route("POST", "/attendance", lambda json, **_: json)
    repo = ApiAttendanceRepository(_client(fake_session))

    data = repo.fetch_matrix(class_id=7, start_date="2024-01-01", end_date=None)
    repo.upsert(AttendanceRecord(student_id=3, class_id=7, date="2024-01-02", status=AttendanceStatus.PARTIAL))

    assert data.students[0].color_code == "red"
    assert data.attendance == {"3-2024-01-02": "O"}
    assert fake_session.calls[0]["params"] == {"classId": 7, "startDate": "2024-01-01"}
    assert fake_session.calls[1]["json"] == {"student_id": 3, "class_id": 7, "date": "2024-01-02", "status": "/"}


def test_schedule_dates_keep_the_reported_range(fake_session):
    fake_session.route(
        "GET",
        "/attendance/schedule-dates",
        {
            "dates": ["2024-01-29", "2024-01-08", "2024-01-15", "2024-01-22"],
            "startDate": "2024-01-01",
            "endDate": "2024-01-31",
            "schedule": "Mon",
        },
    )
    repo = ApiAttendanceRepository(_client(fake_session))

    result = repo.schedule_dates(class_id=7, start_date="2024-01-01", end_date="2024-01-31")

    assert result.range == DateRange("2024-01-01", "2024-01-31")
    assert result.schedule == "Mon"


def test_schedule_dates_without_reported_range_use_their_bounds(fake_session):
    fake_session.route("GET", "/attendance/schedule-dates", {"dates": ["2024-01-15", "2024-01-08"]})
    repo = ApiAttendanceRepository(_client(fake_session))

    assert repo.schedule_dates(class_id=7, start_date="2024-01-01", end_date="2024-01-31").range == DateRange(
        "2024-01-08", "2024-01-15"
    )


def test_schedule_dates_empty_list_is_not_found(fake_session):
    fake_session.route(
        "GET", "/attendance/schedule-dates", {"dates": [], "startDate": "2024-01-01", "endDate": "2024-01-31"}
    )
    repo = ApiAttendanceRepository(_client(fake_session))

    assert not repo.schedule_dates(class_id=7, start_date="2024-01-01", end_date="2024-01-31").found


def test_move_and_roster(fake_session):
    fake_session.route("POST", "/attendance/move", {"message": "ok", "movedCount": 4})
    fake_session.route("GET", "/students", [{"id": 1, "name": "Aiko", "student_type": "trial", "class_id": 7}])
    client = _client(fake_session)

    moved = ApiAttendanceRepository(client).move(class_id=7, from_date="2024-01-01", to_date="2024-01-02")
    roster = ApiStudentRepository(client).list_for_class(7)

    assert moved == 4
    assert fake_session.calls_to("POST", "/attendance/move")[0]["json"] == {
        "class_id": 7,
        "from_date": "2024-01-01",
        "to_date": "2024-01-02",
    }
    assert roster[0].category == "trial"
    assert not roster[0].is_regular
