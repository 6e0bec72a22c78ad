"""Tests for date parsing with relative dates."""

import pytest
from datetime import date, datetime
from cashbook.utils.date_parser import PERIODS, get_date_range, parse_date, parse_datetime

# A Thursday in a leap year
TODAY = date(2024, 3, 14)


def test_parse_absolute_date():
    assert parse_date("2024-01-15") == date(2024, 1, 15)
    assert parse_date("January 15, 2024") == date(2024, 1, 15)
    assert parse_date("15/01/2024") == date(2024, 1, 15)


def test_parse_today_without_reference():
    assert parse_date("Today") == date.today()


@pytest.mark.parametrize(
    "text,expected",
    [
        ("today", date(2024, 3, 14)),
        ("yesterday", date(2024, 3, 13)),
        ("tomorrow", date(2024, 3, 15)),
        ("this week", date(2024, 3, 11)),
        ("last week", date(2024, 3, 4)),
        ("next week", date(2024, 3, 18)),
        ("this month", date(2024, 3, 1)),
        ("last month", date(2024, 2, 1)),
        ("next month", date(2024, 4, 1)),
        ("this year", date(2024, 1, 1)),
        ("last year", date(2023, 1, 1)),
        ("  Next  Year ", date(2025, 1, 1)),
    ],
)
def test_parse_relative_dates(text, expected):
    assert parse_date(text, today=TODAY) == expected


def test_last_month_in_january():
    assert parse_date("last month", today=date(2024, 1, 20)) == date(2023, 12, 1)


@pytest.mark.parametrize("text", ["last invalid", "someday", "2024-13-45"])
def test_parse_invalid_date(text):
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date(text)


@pytest.mark.parametrize(
    "period,expected",
    [
        ("this-week", (date(2024, 3, 11), TODAY)),
        ("this-month", (date(2024, 3, 1), TODAY)),
        ("this-year", (date(2024, 1, 1), TODAY)),
        ("last-week", (date(2024, 3, 4), date(2024, 3, 10))),
        ("last-month", (date(2024, 2, 1), date(2024, 2, 29))),
        ("last-year", (date(2023, 1, 1), date(2023, 12, 31))),
    ],
)
def test_get_date_range(period, expected):
    assert get_date_range(period, today=TODAY) == expected


def test_get_date_range_covers_every_period():
    for period in PERIODS:
        start, end = get_date_range(period)
        assert start <= end


def test_get_date_range_last_month_in_january():
    assert get_date_range("last-month", today=date(2025, 1, 1)) == (date(2024, 12, 1), date(2024, 12, 31))


@pytest.mark.parametrize("period", ["invalid-period", "next-month", "month"])
def test_get_date_range_invalid_period(period):
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range(period)


def test_parse_datetime_without_time():
    """Missing time of day means midnight."""
    assert parse_datetime("2024-03-05") == datetime(2024, 3, 5, 0, 0)
    assert parse_datetime("2024-03-05", "  ") == datetime(2024, 3, 5, 0, 0)


def test_parse_datetime_with_time():
    """Time strings in 24h and 12h form."""
    assert parse_datetime("2024-03-05", "14:30") == datetime(2024, 3, 5, 14, 30)
    assert parse_datetime("05 Mar 2024", "2:30 PM") == datetime(2024, 3, 5, 14, 30)


def test_parse_datetime_invalid_time():
    """Unparseable times raise ValueError."""
    with pytest.raises(ValueError, match="Could not parse time"):
        parse_datetime("2024-03-05", "half past never")
