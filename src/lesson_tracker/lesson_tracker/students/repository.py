from __future__ import annotations

from typing import Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    """Read-only student access used by the attendance core.

    Note: Student CRUD lives in the admin screens; only the class roster is needed here.
    """

    def list_for_class(self, class_id: int) -> Sequence[Student]:
        raise NotImplementedError
