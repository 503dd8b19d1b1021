from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Status markers stored by the API and shown verbatim in the matrix."""

    UNSET = ""
    PRESENT = "O"
    ABSENT = "X"
    PARTIAL = "/"


class StudentCategory(str, Enum):
    """Student type; anything other than REGULAR renders in the make-up/trial section."""

    REGULAR = "regular"
    TRIAL = "trial"
    MAKEUP = "makeup"


class NotificationLevel(str, Enum):
    """Flash categories understood by the templates."""

    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"
