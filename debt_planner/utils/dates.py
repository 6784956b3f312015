# debt_planner/utils/dates.py
import calendar
from datetime import date, datetime
from typing import Union

DateLike = Union[date, str]


def parse_date(value: DateLike) -> date:
    """
    Accept a date, a datetime or an ISO-8601 string ("2024-01-01" or
    "2024-01-01T10:00:00"). Only the calendar date is kept.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if "T" in text:
        text = text.split("T", 1)[0]
    return date.fromisoformat(text)


def add_months(start: date, months: int) -> date:
    """Shift by whole months, clamping the day to the target month's length."""
    year = start.year + (start.month - 1 + months) // 12
    month = (start.month - 1 + months) % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(start.day, last_day))


def month_label(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}"
