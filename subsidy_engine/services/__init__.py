"""
Services package for the Employment Subsidy Eligibility Engine
"""

from .eligibility_service import EligibilityService, eligibility_service, calculate
from .exclusion_resolver import resolve_exclusions
from .aggregator import Aggregator, CalculationContext
from .roster_service import build_roster
from .timing_service import analyze_senior_timing

__all__ = [
    "EligibilityService",
    "eligibility_service",
    "calculate",
    "resolve_exclusions",
    "Aggregator",
    "CalculationContext",
    "build_roster",
    "analyze_senior_timing"
]
