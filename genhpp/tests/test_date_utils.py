"""
Test suite for month helpers.
"""

from datetime import date, datetime

import pytest

from genhpp.utils.date_utils import format_month, last_six_months, month_range, parse_month, previous_month


def test_parse_month():
    assert parse_month("2026-03") == date(2026, 3, 1)
    assert parse_month("1999-12") == date(1999, 12, 1)


@pytest.mark.parametrize("value", ["2026-3", "2026-13", "2026-00", "03-2026", "", None, "2026-03-01"])
def test_parse_month_rejects_bad_input(value):
    with pytest.raises(ValueError):
        parse_month(value)


def test_format_month():
    assert format_month(date(2026, 7, 19)) == "2026-07"


def test_month_range_leap_february():
    start, end = month_range(date(2024, 2, 10))
    assert start == datetime(2024, 2, 1, 0, 0)
    assert end == datetime(2024, 2, 29, 23, 59, 59, 999999)


def test_month_range_december():
    start, end = month_range(date(2025, 12, 1))
    assert end.date() == date(2025, 12, 31)


def test_previous_month_crosses_year():
    assert previous_month(date(2026, 1, 15)) == date(2025, 12, 1)


def test_last_six_months():
    """Test month keys are newest first and cross year boundaries."""
    assert last_six_months(date(2026, 3, 31)) == [
        "2026-03",
        "2026-02",
        "2026-01",
        "2025-12",
        "2025-11",
        "2025-10",
    ]
