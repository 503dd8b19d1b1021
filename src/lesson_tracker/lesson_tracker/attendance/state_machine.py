"""Per-cell attendance status cycle.

unset -> present -> absent -> partial -> unset -> ...

There is no terminal state: ``UNSET`` is both the initial state of a cell with
no record and a member of the cycle.
"""

from __future__ import annotations

from typing import Union

from ..core.enums import AttendanceStatus

STATUS_CYCLE = (
    AttendanceStatus.UNSET,
    AttendanceStatus.PRESENT,
    AttendanceStatus.ABSENT,
    AttendanceStatus.PARTIAL,
)

_CSS_BY_STATUS = {
    AttendanceStatus.UNSET: "",
    AttendanceStatus.PRESENT: "present",
    AttendanceStatus.ABSENT: "absent",
    AttendanceStatus.PARTIAL: "partial",
}


def parse_status(text: Union[str, AttendanceStatus, None]) -> AttendanceStatus | None:
    """Known marker for ``text`` (trimmed), or ``None`` for anything unrecognized."""
    if isinstance(text, AttendanceStatus):
        return text
    try:
        return AttendanceStatus((text or "").strip())
    except ValueError:
        return None


def next_status(current: Union[str, AttendanceStatus, None]) -> AttendanceStatus:
    """Successor of the currently displayed cell text.

    Unrecognized text has no position in the cycle and resets to ``UNSET``.
    """
    status = parse_status(current)
    if status is None:
        return STATUS_CYCLE[0]
    return STATUS_CYCLE[(STATUS_CYCLE.index(status) + 1) % len(STATUS_CYCLE)]


def css_class_for(status: Union[str, AttendanceStatus, None]) -> str:
    """Style class for a marker; unknown markers get none."""
    parsed = parse_status(status)
    if parsed is None:
        return ""
    return _CSS_BY_STATUS[parsed]
