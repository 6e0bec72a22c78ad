"""Date parsing utilities."""

from datetime import date, datetime, time, timedelta
from typing import Callable, Optional
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIODS = ("this-week", "this-month", "this-year", "last-week", "last-month", "last-year")


def _week_start(day: date) -> date:
    return day - timedelta(days=day.weekday())


def _month_start(day: date) -> date:
    return day.replace(day=1)


def _year_start(day: date) -> date:
    return day.replace(month=1, day=1)


# Period unit -> (first day of the period containing a date, length of one period)
_UNITS: dict[str, tuple[Callable[[date], date], relativedelta]] = {
    "week": (_week_start, relativedelta(weeks=1)),
    "month": (_month_start, relativedelta(months=1)),
    "year": (_year_start, relativedelta(years=1)),
}

_DAY_OFFSETS = {"today": 0, "yesterday": -1, "tomorrow": 1}


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", "15/01/2024"
    - "today", "yesterday", "tomorrow"
    - "this/last/next week|month|year", meaning the first day of that period
      (weeks start on Monday)

    Args:
        date_str: Date string
        today: Reference day for relative dates (defaults to the current date)

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = today or date.today()

    if text in _DAY_OFFSETS:
        return today + timedelta(days=_DAY_OFFSETS[text])

    words = text.split()
    if len(words) == 2 and words[0] in ("last", "this", "next") and words[1] in _UNITS:
        period_start, step = _UNITS[words[1]]
        start = period_start(today)
        if words[0] == "last":
            return start - step
        if words[0] == "next":
            return start + step
        return start

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get the first and last day of a named period.

    "this-*" periods end today; "last-*" periods cover the whole previous
    week, month or year.

    Args:
        period: One of PERIODS
        today: Reference day (defaults to the current date)

    Raises:
        ValueError: If period string is not recognized
    """
    relation, _, unit = period.strip().lower().partition("-")
    if relation not in ("this", "last") or unit not in _UNITS:
        raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")

    today = today or date.today()
    period_start, step = _UNITS[unit]
    start = period_start(today)
    if relation == "this":
        return start, today
    return start - step, start - timedelta(days=1)


def parse_datetime(date_str: str, time_str: Optional[str] = None) -> datetime:
    """Parse a date and an optional time of day into a datetime.

    Args:
        date_str: Date string, absolute or relative (see parse_date)
        time_str: Optional time string such as "14:30" or "2:30 PM"

    Returns:
        Naive datetime; midnight when no time is given

    Raises:
        ValueError: If either part cannot be parsed
    """
    day = parse_date(date_str)
    if time_str is None or not time_str.strip():
        return datetime.combine(day, time.min)

    try:
        parsed = date_parser.parse(time_str.strip(), default=datetime.combine(day, time.min))
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse time '{time_str}': {e}")
    return datetime.combine(day, parsed.time())
