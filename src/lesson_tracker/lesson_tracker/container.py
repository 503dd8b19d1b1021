from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests

from .api.client import ApiClient, ApiConfig
from .attendance.api_attendance_repository import ApiAttendanceRepository
from .attendance.service import AttendanceService
from .classes.api_class_repository import ApiClassRepository
from .core.constants import DEFAULT_API_TIMEOUT_SECONDS
from .students.api_student_repository import ApiStudentRepository


@dataclass(frozen=True)
class Container:
    client: ApiClient

    attendance_repo: ApiAttendanceRepository
    students_repo: ApiStudentRepository
    classes_repo: ApiClassRepository

    attendance_service: AttendanceService


def build_container(*, api_config: dict, session: Optional[requests.Session] = None) -> Container:
    config = ApiConfig(
        base_url=str(api_config["base_url"]),
        timeout=float(api_config.get("timeout") or DEFAULT_API_TIMEOUT_SECONDS),
        token=api_config.get("token") or None,
    )
    client = ApiClient(config, session=session)

    attendance_repo = ApiAttendanceRepository(client)
    students_repo = ApiStudentRepository(client)
    classes_repo = ApiClassRepository(client)

    attendance_service = AttendanceService(attendance_repo, students_repo)

    return Container(
        client=client,
        attendance_repo=attendance_repo,
        students_repo=students_repo,
        classes_repo=classes_repo,
        attendance_service=attendance_service,
    )
