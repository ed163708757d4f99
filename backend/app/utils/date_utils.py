import calendar
from datetime import date


def add_months(year: int, month: int, n: int):
    """
    Add n months to given (year, month)
    Returns new (year, month)
    """
    new_month = month + n
    new_year = year + (new_month - 1) // 12
    new_month = ((new_month - 1) % 12) + 1
    return new_year, new_month


def shift_date(d: date, n: int) -> date:
    """
    Move a calendar date n months forward (or back when n < 0).
    The day is clamped to the last day of the resulting month,
    so Jan 31 + 1 month is Feb 28/29.
    """
    year, month = add_months(d.year, d.month, n)
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def start_of_month(d: date) -> date:
    return d.replace(day=1)


def month_diff(start: date, end: date) -> int:
    """Whole calendar months from start to end, ignoring the day of month."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def month_key(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}"
