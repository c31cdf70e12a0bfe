"""
Utility functions for roster validation and display formatting
"""
import re
from typing import List, Sequence

from ..models.company import Employee


def normalize_name(name: str) -> str:
    """
    Normalize an employee name for matching across documents

    Args:
        name: Name as read from a document

    Returns:
        Name with all whitespace removed and case folded
    """
    return re.sub(r'\s+', '', name or '').casefold()


def validate_roster(employees: Sequence[Employee]) -> List[str]:
    """
    Validate a roster and return list of validation errors

    Args:
        employees: Roster to check

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    seen = set()
    duplicates = []
    for employee in employees:
        if employee.id in seen and employee.id not in duplicates:
            duplicates.append(employee.id)
        seen.add(employee.id)

    if duplicates:
        errors.append(f"Duplicate employee ids: {', '.join(duplicates)}")

    return errors


def format_krw(amount: int) -> str:
    """
    Format a KRW amount the way Korean notices quote subsidies

    Args:
        amount: Amount in won

    Returns:
        "1,200만원" for multiples of 10,000 won, otherwise "1,234,567원"
    """
    if amount % 10000 == 0:
        return f"{amount // 10000:,}만원"
    return f"{amount:,}원"
