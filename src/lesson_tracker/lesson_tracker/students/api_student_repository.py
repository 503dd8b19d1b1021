from __future__ import annotations

from typing import Sequence

from ..api.client import ApiClient
from .model import Student
from .repository import StudentRepository


class ApiStudentRepository(StudentRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def list_for_class(self, class_id: int) -> Sequence[Student]:
        rows = self._client.get("/students", params={"classId": int(class_id)}) or []
        return [Student.from_api(r) for r in rows]
