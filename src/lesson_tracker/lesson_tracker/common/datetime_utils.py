from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta
from typing import List, Optional, Union

DateInput = Union[str, date, datetime, None]

_ISO_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_US_SLASH_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_DAY_FIRST_HYPHEN_RE = re.compile(r"^(\d{1,2})-(\d{1,2})-(\d{4})$")

# Tried in order for anything the explicit patterns above do not claim.
_FALLBACK_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%Y.%m.%d",
    "%d.%m.%Y",
    "%Y%m%d",
    "%d-%b-%Y",
    "%b-%d-%Y",
)

_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _parse_date_only(text: str) -> Optional[date]:
    if _ISO_RE.match(text):
        year, month, day = (int(p) for p in text.split("-"))
        return _safe_date(year, month, day)

    m = _US_SLASH_RE.match(text)
    if m:
        month, day, year = (int(p) for p in m.groups())
        return _safe_date(year, month, day)

    m = _DAY_FIRST_HYPHEN_RE.match(text)
    if m:
        day, month, year = (int(p) for p in m.groups())
        return _safe_date(year, month, day)

    for fmt in _FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def normalize_date(value: DateInput) -> Optional[str]:
    """Normalize heterogeneous date input into canonical ``YYYY-MM-DD``.

    Accepted input:
    - ``date`` / ``datetime`` objects (aware datetimes use the local calendar day)
    - ``YYYY-MM-DD`` strings, validated as real calendar dates
    - ``MM/DD/YYYY`` (1-2 digit month/day)
    - ``DD-MM-YYYY`` (1-2 digit day/month)
    - a handful of other unambiguous layouts (``2024/03/05``, ``20240305``, ...)

    Any time-of-day part after ``T`` or a space is dropped first. Empty or
    unparsable input gives ``None`` rather than raising.
    """

    if value is None:
        return None

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date().isoformat()

    if isinstance(value, date):
        return value.isoformat()

    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    text = text.split("T")[0].split(" ")[0]
    parsed = _parse_date_only(text)
    return parsed.isoformat() if parsed else None


def is_valid_iso_date(value: DateInput) -> bool:
    return normalize_date(value) is not None


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def format_column_header(value: str) -> str:
    """Short column label such as ``Jan 5``; the raw value when it will not parse."""
    normalized = normalize_date(value)
    if not normalized:
        return value
    d = parse_iso_date(normalized)
    return f"{_MONTH_ABBR[d.month - 1]} {d.day}"


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return date.today()


def months_before(day: date, months: int) -> date:
    """Same day-of-month ``months`` earlier, clamped to the end of shorter months."""
    total = day.year * 12 + (day.month - 1) - months
    year, month = divmod(total, 12)
    month += 1
    last = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last))


def date_span(start: DateInput, end: DateInput) -> List[str]:
    """Inclusive list of canonical dates between ``start`` and ``end``."""
    start_s = normalize_date(start)
    end_s = normalize_date(end)
    if not start_s or not end_s:
        return []

    current = parse_iso_date(start_s)
    last = parse_iso_date(end_s)
    days: List[str] = []
    while current <= last:
        days.append(current.isoformat())
        current += timedelta(days=1)
    return days
