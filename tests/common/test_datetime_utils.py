from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from src.lesson_tracker.lesson_tracker.common.datetime_utils import (
    date_span,
    format_column_header,
    is_valid_iso_date,
    months_before,
    normalize_date,
)


def test_normalize_is_format_agnostic():
    assert normalize_date("2024-03-05") == "2024-03-05"
    assert normalize_date("03/05/2024") == "2024-03-05"
    assert normalize_date("2024-03-05T10:30:00") == "2024-03-05"
    assert normalize_date("2024-03-05 10:30:00") == "2024-03-05"


def test_normalize_zero_pads_short_components():
    assert normalize_date("3/5/2024") == "2024-03-05"
    assert normalize_date("5-3-2024") == "2024-03-05"
    assert normalize_date("2024-3-5") == "2024-03-05"


def test_hyphenated_day_first_is_day_month_year():
    assert normalize_date("05-03-2024") == "2024-03-05"
    assert normalize_date("31-12-2023") == "2023-12-31"


@pytest.mark.parametrize("value", ["2024-02-30", "2024-13-01", "13/01/2024", "31-02-2024", "2023-02-29"])
def test_normalize_rejects_impossible_calendar_dates(value):
    assert normalize_date(value) is None


@pytest.mark.parametrize("value", [None, "", "   ", "not a date", "March", 20240305])
def test_normalize_returns_none_for_empty_or_garbage(value):
    assert normalize_date(value) is None


def test_normalize_accepts_other_unambiguous_layouts():
    assert normalize_date("2024/03/05") == "2024-03-05"
    assert normalize_date("20240305") == "2024-03-05"
    assert normalize_date("05-Mar-2024") == "2024-03-05"


def test_normalize_formats_date_objects_directly():
    assert normalize_date(date(2024, 1, 2)) == "2024-01-02"
    assert normalize_date(datetime(2024, 1, 2, 23, 59)) == "2024-01-02"


def test_normalize_aware_datetime_uses_local_calendar_day():
    aware = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
    assert normalize_date(aware) == aware.astimezone().date().isoformat()


@pytest.mark.parametrize(
    "value",
    ["2024-03-05", "03/05/2024", "5-3-2024", "2024-03-05T10:30:00Z", "2024/03/05", date(2024, 3, 5)],
)
def test_normalize_is_idempotent(value):
    once = normalize_date(value)
    assert normalize_date(once) == once


def test_is_valid_iso_date():
    assert is_valid_iso_date("2024-01-31")
    assert not is_valid_iso_date("2024-01-32")


def test_column_header_is_short_month_and_day():
    assert format_column_header("2024-01-05") == "Jan 5"
    assert format_column_header("12/25/2024") == "Dec 25"


def test_column_header_falls_back_to_raw_string():
    assert format_column_header("someday") == "someday"


def test_months_before_clamps_day_of_month():
    assert months_before(date(2024, 8, 31), 6) == date(2024, 2, 29)
    assert months_before(date(2024, 3, 15), 6) == date(2023, 9, 15)


def test_date_span_is_inclusive():
    days = date_span("2024-01-01", "2024-01-07")
    assert len(days) == 7
    assert days[0] == "2024-01-01"
    assert days[-1] == "2024-01-07"
    assert date_span("bad", "2024-01-07") == []
    start = date(2024, 2, 27)
    assert date_span(start, start + timedelta(days=3)) == ["2024-02-27", "2024-02-28", "2024-02-29", "2024-03-01"]
