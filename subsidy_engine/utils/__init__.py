"""
Utility functions for the Employment Subsidy Eligibility Engine
"""

from .validators import (
    normalize_name,
    validate_roster,
    format_krw
)

from .dates import (
    calculate_age,
    months_between,
    add_months,
    birthday_on_or_after
)

__all__ = [
    "normalize_name",
    "validate_roster",
    "format_krw",
    "calculate_age",
    "months_between",
    "add_months",
    "birthday_on_or_after"
]
