from __future__ import annotations

from typing import Sequence

from ..api.client import ApiClient
from .model import ClassSection
from .repository import ClassRepository


class ApiClassRepository(ClassRepository):
    def __init__(self, client: ApiClient):
        self._client = client

    def list_all(self) -> Sequence[ClassSection]:
        rows = self._client.get("/classes") or []
        return [ClassSection.from_api(r) for r in rows]
