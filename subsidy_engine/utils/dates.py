"""
Date arithmetic for ages, tenure and month offsets
"""
import calendar
from datetime import date
from typing import Optional


def calculate_age(birth_date: date, as_of: date) -> int:
    """
    Full years of age on a given date

    Args:
        birth_date: Date of birth
        as_of: Evaluation date

    Returns:
        Age in completed years (never negative)
    """
    age = as_of.year - birth_date.year
    if (as_of.month, as_of.day) < (birth_date.month, birth_date.day):
        age -= 1
    return max(age, 0)


def months_between(start: Optional[date], end: date) -> Optional[int]:
    """
    Whole months elapsed from start to end

    Returns None when start is unknown and 0 when start lies after end.
    """
    if start is None:
        return None
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day < start.day:
        months -= 1
    return max(months, 0)


def add_months(value: date, months: int) -> date:
    """Shift a date by whole months, clamping to the last day of the target month"""
    index = value.month - 1 + months
    year = value.year + index // 12
    month = index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def birthday_on_or_after(birth_date: date, years: int) -> date:
    """Date a person born on birth_date reaches the given age"""
    year = birth_date.year + years
    if birth_date.month == 2 and birth_date.day == 29 and not calendar.isleap(year):
        return date(year, 3, 1)
    return date(year, birth_date.month, birth_date.day)
