"""Working-day arithmetic (Monday to Friday, no holiday calendar)."""

from calendar import monthrange
from datetime import date, timedelta


def days_in_month(year: int, month: int) -> int:
    return monthrange(year, month)[1]


def month_range(year: int, month: int) -> tuple[str, str]:
    """First and last day of the month as YYYY-MM-DD strings."""
    last = days_in_month(year, month)
    return f"{year:04d}-{month:02d}-01", f"{year:04d}-{month:02d}-{last:02d}"


def is_working_day(d: date) -> bool:
    return d.weekday() < 5


def count_working_days(year: int, month: int, through_day: int) -> int:
    """Mon–Fri days among 1..through_day of the month."""
    through_day = max(0, min(through_day, days_in_month(year, month)))
    return sum(
        1 for day in range(1, through_day + 1) if is_working_day(date(year, month, day))
    )


def passed_through_day(year: int, month: int, today: date) -> int:
    """Last day of the month that has already started relative to `today`."""
    if (year, month) == (today.year, today.month):
        return today.day
    if (year, month) > (today.year, today.month):
        return 0
    return days_in_month(year, month)


def passed_working_days(year: int, month: int, today: date) -> int:
    return count_working_days(year, month, passed_through_day(year, month, today))


def implicit_absences(working_days_passed: int, records_found: int) -> int:
    return max(0, working_days_passed - records_found)


def last_n_days(today: date, n: int = 7) -> list[date]:
    """The `n` calendar days ending with `today`, oldest first."""
    return [today - timedelta(days=offset) for offset in range(n - 1, -1, -1)]
