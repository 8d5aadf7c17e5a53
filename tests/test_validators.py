from __future__ import annotations

from datetime import date, time

import pytest

from school_attendance.common.datetime_utils import format_hhmm, parse_optional_date
from school_attendance.common.validators import (
    optional_id,
    require_non_empty,
    require_positive_id,
    validate_attendance_date,
    validate_period,
)
from school_attendance.core.exceptions import ValidationError


@pytest.mark.parametrize("period,ok", [(0, False), (1, True), (12, True), (13, False)])
def test_validate_period(period, ok):
    assert validate_period(period) is ok


def test_attendance_date_not_in_future():
    today = date(2024, 5, 1)
    assert validate_attendance_date(today, today)
    assert validate_attendance_date(date(2024, 4, 30), today)
    assert not validate_attendance_date(date(2024, 5, 2), today)


def test_require_non_empty_strips():
    assert require_non_empty("  5  ", "Class name") == "5"
    with pytest.raises(ValidationError, match="Class name is required"):
        require_non_empty("   ", "Class name")


@pytest.mark.parametrize("value", [None, "", "abc", "0", "-3"])
def test_require_positive_id_rejects(value):
    with pytest.raises(ValidationError):
        require_positive_id(value, "Class")


@pytest.mark.parametrize("value,expected", [("all", None), ("", None), ("none", None), ("7", 7)])
def test_optional_id(value, expected):
    assert optional_id(value) == expected


def test_parse_optional_date():
    assert parse_optional_date("", "Start date") is None
    assert parse_optional_date("2024-05-01", "Start date") == date(2024, 5, 1)
    with pytest.raises(ValidationError):
        parse_optional_date("01/05/2024", "Start date")


def test_format_hhmm():
    assert format_hhmm(time(9, 5)) == "09:05"
    assert format_hhmm(None) == "-"
