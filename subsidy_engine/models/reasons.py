"""
Stable requirement and reason codes used by the rule set

Codes are what callers and tests compare against. Display text lives in
REASON_LABELS / REQUIREMENT_LABELS and is only used to compose notes.
"""
from enum import Enum
from typing import Dict, Iterable, List


class Requirement(str, Enum):
    """A single condition a program checks"""
    CURRENT_EMPLOYEE = "CURRENT_EMPLOYEE"
    AGE_BAND = "AGE_BAND"
    WORK_TYPE = "WORK_TYPE"
    EMPLOYMENT_INSURANCE = "EMPLOYMENT_INSURANCE"
    MIN_TENURE = "MIN_TENURE"
    WAGE_FLOOR = "WAGE_FLOOR"
    ROSTER_SIZE_BAND = "ROSTER_SIZE_BAND"
    SMALL_BUSINESS = "SMALL_BUSINESS"
    # Not derivable from structured data, always confirmed by a person
    DISADVANTAGED_YOUTH = "DISADVANTAGED_YOUTH"
    PROTECTED_CLASS = "PROTECTED_CLASS"
    CONVERSION_CANDIDATE = "CONVERSION_CANDIDATE"
    RETIREMENT_POLICY = "RETIREMENT_POLICY"
    SENIOR_HEADCOUNT_INCREASE = "SENIOR_HEADCOUNT_INCREASE"
    PARENTAL_LEAVE = "PARENTAL_LEAVE"
    REVENUE_DECLINE = "REVENUE_DECLINE"


class ReasonCode(str, Enum):
    """Why a verdict is not a plain ELIGIBLE"""
    NO_EMPLOYEES = "NO_EMPLOYEES"
    FORMER_EMPLOYEE = "FORMER_EMPLOYEE"
    OUTSIDE_AGE_BAND = "OUTSIDE_AGE_BAND"
    WORK_TYPE_NOT_COVERED = "WORK_TYPE_NOT_COVERED"
    NO_EMPLOYMENT_INSURANCE = "NO_EMPLOYMENT_INSURANCE"
    TENURE_BELOW_MINIMUM = "TENURE_BELOW_MINIMUM"
    EXCLUDED_BY_WAGE_FLOOR = "EXCLUDED_BY_WAGE_FLOOR"
    ROSTER_SIZE_OUT_OF_BAND = "ROSTER_SIZE_OUT_OF_BAND"
    NOT_SMALL_BUSINESS = "NOT_SMALL_BUSINESS"
    SALARY_UNKNOWN = "SALARY_UNKNOWN"
    HIRE_DATE_UNKNOWN = "HIRE_DATE_UNKNOWN"
    MISSING_BIRTH_DATE = "MISSING_BIRTH_DATE"
    CONFLICTING_RECORDS = "CONFLICTING_RECORDS"
    DISADVANTAGED_YOUTH_UNVERIFIED = "DISADVANTAGED_YOUTH_UNVERIFIED"
    PROTECTED_CLASS_UNVERIFIED = "PROTECTED_CLASS_UNVERIFIED"
    CONVERSION_CANDIDATE_UNVERIFIED = "CONVERSION_CANDIDATE_UNVERIFIED"
    RETIREMENT_POLICY_UNVERIFIED = "RETIREMENT_POLICY_UNVERIFIED"
    SENIOR_HEADCOUNT_INCREASE_UNVERIFIED = "SENIOR_HEADCOUNT_INCREASE_UNVERIFIED"
    PARENTAL_LEAVE_UNVERIFIED = "PARENTAL_LEAVE_UNVERIFIED"
    REVENUE_DECLINE_UNVERIFIED = "REVENUE_DECLINE_UNVERIFIED"
    DUPLICATE_PAYMENT_EXCLUDED = "DUPLICATE_PAYMENT_EXCLUDED"


# Reason reported when a requirement fails (or cannot be confirmed)
FAILURE_REASONS: Dict[Requirement, ReasonCode] = {
    Requirement.CURRENT_EMPLOYEE: ReasonCode.FORMER_EMPLOYEE,
    Requirement.AGE_BAND: ReasonCode.OUTSIDE_AGE_BAND,
    Requirement.WORK_TYPE: ReasonCode.WORK_TYPE_NOT_COVERED,
    Requirement.EMPLOYMENT_INSURANCE: ReasonCode.NO_EMPLOYMENT_INSURANCE,
    Requirement.MIN_TENURE: ReasonCode.TENURE_BELOW_MINIMUM,
    Requirement.WAGE_FLOOR: ReasonCode.EXCLUDED_BY_WAGE_FLOOR,
    Requirement.ROSTER_SIZE_BAND: ReasonCode.ROSTER_SIZE_OUT_OF_BAND,
    Requirement.SMALL_BUSINESS: ReasonCode.NOT_SMALL_BUSINESS,
    Requirement.DISADVANTAGED_YOUTH: ReasonCode.DISADVANTAGED_YOUTH_UNVERIFIED,
    Requirement.PROTECTED_CLASS: ReasonCode.PROTECTED_CLASS_UNVERIFIED,
    Requirement.CONVERSION_CANDIDATE: ReasonCode.CONVERSION_CANDIDATE_UNVERIFIED,
    Requirement.RETIREMENT_POLICY: ReasonCode.RETIREMENT_POLICY_UNVERIFIED,
    Requirement.SENIOR_HEADCOUNT_INCREASE: ReasonCode.SENIOR_HEADCOUNT_INCREASE_UNVERIFIED,
    Requirement.PARENTAL_LEAVE: ReasonCode.PARENTAL_LEAVE_UNVERIFIED,
    Requirement.REVENUE_DECLINE: ReasonCode.REVENUE_DECLINE_UNVERIFIED,
}


REASON_LABELS: Dict[ReasonCode, str] = {
    ReasonCode.NO_EMPLOYEES: "No current employees on the roster",
    ReasonCode.FORMER_EMPLOYEE: "Employee has left the company",
    ReasonCode.OUTSIDE_AGE_BAND: "No employees in the required age band",
    ReasonCode.WORK_TYPE_NOT_COVERED: "Work type not covered by the program",
    ReasonCode.NO_EMPLOYMENT_INSURANCE: "Not enrolled in employment insurance",
    ReasonCode.TENURE_BELOW_MINIMUM: "Tenure below the program minimum",
    ReasonCode.EXCLUDED_BY_WAGE_FLOOR: "Monthly salary below the wage floor",
    ReasonCode.ROSTER_SIZE_OUT_OF_BAND: "Insured headcount outside the supported range",
    ReasonCode.NOT_SMALL_BUSINESS: "Only priority-support (small/medium) businesses qualify",
    ReasonCode.SALARY_UNKNOWN: "Monthly salary not provided",
    ReasonCode.HIRE_DATE_UNKNOWN: "Hire date not provided",
    ReasonCode.MISSING_BIRTH_DATE: "Birth date not provided",
    ReasonCode.CONFLICTING_RECORDS: "Source documents contradict each other",
    ReasonCode.DISADVANTAGED_YOUTH_UNVERIFIED: "Capital region: employment-disadvantaged youth status must be confirmed",
    ReasonCode.PROTECTED_CLASS_UNVERIFIED: "Employment-vulnerable group membership must be confirmed",
    ReasonCode.CONVERSION_CANDIDATE_UNVERIFIED: "Regular-conversion candidates must be confirmed",
    ReasonCode.RETIREMENT_POLICY_UNVERIFIED: "Retirement-age extension, abolition or re-employment policy must be evidenced",
    ReasonCode.SENIOR_HEADCOUNT_INCREASE_UNVERIFIED: "Increase in insured senior headcount must be confirmed",
    ReasonCode.PARENTAL_LEAVE_UNVERIFIED: "Approved parental leave or reduced hours must be evidenced",
    ReasonCode.REVENUE_DECLINE_UNVERIFIED: "Business downturn and paid leave allowance must be evidenced",
    ReasonCode.DUPLICATE_PAYMENT_EXCLUDED: "Cannot be claimed together with a higher-paying program for the same employees",
}


REQUIREMENT_LABELS: Dict[Requirement, str] = {
    Requirement.CURRENT_EMPLOYEE: "Currently employed",
    Requirement.AGE_BAND: "Age band",
    Requirement.WORK_TYPE: "Work type",
    Requirement.EMPLOYMENT_INSURANCE: "Employment insurance enrolment",
    Requirement.MIN_TENURE: "Minimum tenure",
    Requirement.WAGE_FLOOR: "Monthly salary at or above the wage floor",
    Requirement.ROSTER_SIZE_BAND: "Insured headcount band",
    Requirement.SMALL_BUSINESS: "Priority-support business",
    Requirement.DISADVANTAGED_YOUTH: "Employment-disadvantaged youth",
    Requirement.PROTECTED_CLASS: "Employment-vulnerable group",
    Requirement.CONVERSION_CANDIDATE: "Fixed-term, dispatched or subcontracted worker converted to regular",
    Requirement.RETIREMENT_POLICY: "Continued-employment policy",
    Requirement.SENIOR_HEADCOUNT_INCREASE: "Senior headcount increase",
    Requirement.PARENTAL_LEAVE: "Parental leave or reduced hours granted",
    Requirement.REVENUE_DECLINE: "Business downturn",
}


def describe_reason(code: ReasonCode) -> str:
    """Default display text for a reason code"""
    return REASON_LABELS.get(code, code.value)


def describe_reasons(codes: Iterable[ReasonCode]) -> List[str]:
    return [describe_reason(code) for code in codes]
