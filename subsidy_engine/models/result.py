"""
Pydantic models for eligibility results and the aggregated report
"""
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .company import CompanyProfile
from .program import PaymentPeriod, Program
from .reasons import ReasonCode, Requirement


class Eligibility(str, Enum):
    ELIGIBLE = "ELIGIBLE"
    NOT_ELIGIBLE = "NOT_ELIGIBLE"
    NEEDS_REVIEW = "NEEDS_REVIEW"


class RequirementCheck(BaseModel):
    """Outcome of one requirement across the roster"""
    requirement: Requirement
    employee_count: Optional[int] = Field(None, description="Employees the check applies to, None for company-level checks")
    detail: Optional[str] = None


class AmountBreakdown(BaseModel):
    """Arithmetic behind a program amount, all values in KRW"""
    payment_period: PaymentPeriod
    period_amount: int = Field(..., ge=0, description="Per person per payment period")
    periods: int = Field(..., ge=0)
    total_months: int = Field(..., ge=0)
    business_subsidy_per_person: int = Field(..., ge=0)
    incentive_per_person: int = Field(0, ge=0)
    amount_per_person: int = Field(..., ge=0)
    qualifying_count: int = Field(..., ge=1)
    total_amount: int = Field(..., ge=0)


class EligibilityResult(BaseModel):
    """Verdict and amount for one program"""
    program: Program
    display_name: str
    eligibility: Eligibility
    requirements_met: List[RequirementCheck] = Field(default_factory=list)
    requirements_not_met: List[RequirementCheck] = Field(default_factory=list)
    requirements_unverified: List[RequirementCheck] = Field(default_factory=list)
    reasons: List[ReasonCode] = Field(default_factory=list)
    qualifying_employee_ids: List[str] = Field(default_factory=list)
    qualifying_count: int = Field(0, ge=0)
    wage_floor_excluded_count: int = Field(0, ge=0, description="Employees excluded only by the wage floor")
    payment_period: PaymentPeriod = PaymentPeriod.MONTHLY
    period_amount: int = Field(0, ge=0)
    amount_per_person: int = Field(0, ge=0)
    incentive_per_person: int = Field(0, ge=0)
    total_months: int = Field(0, ge=0)
    total_amount: int = Field(0, ge=0)
    excluded_by: Optional[Program] = Field(None, description="Program paying for the same employees instead")
    notes: List[str] = Field(default_factory=list)

    @model_validator(mode='after')
    def check_amount_invariants(self):
        if self.eligibility == Eligibility.NOT_ELIGIBLE:
            if self.total_amount != 0:
                raise ValueError(f"{self.program.value}: NOT_ELIGIBLE result cannot carry an amount")
        else:
            if self.qualifying_count < 1:
                raise ValueError(f"{self.program.value}: claimable result needs at least one qualifying unit")
            if self.total_amount != self.amount_per_person * self.qualifying_count:
                raise ValueError(f"{self.program.value}: total_amount must equal amount_per_person x qualifying_count")
        if self.eligibility != Eligibility.ELIGIBLE and not self.reasons:
            raise ValueError(f"{self.program.value}: a reason is required unless ELIGIBLE")
        return self

    @property
    def is_claimable(self) -> bool:
        return self.excluded_by is None and self.eligibility in (Eligibility.ELIGIBLE, Eligibility.NEEDS_REVIEW)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "program": "YOUTH_JOB_LEAP",
                "display_name": "청년일자리도약장려금",
                "eligibility": "ELIGIBLE",
                "reasons": [],
                "qualifying_employee_ids": ["emp-001"],
                "qualifying_count": 1,
                "payment_period": "MONTHLY",
                "period_amount": 600000,
                "amount_per_person": 12000000,
                "incentive_per_person": 4800000,
                "total_months": 12,
                "total_amount": 12000000
            }
        }
    )


class ExclusionRecord(BaseModel):
    """A program dropped because a higher-priority program pays for the same employees"""
    program: Program
    excluded_by: Program
    reason: ReasonCode = ReasonCode.DUPLICATE_PAYMENT_EXCLUDED
    overlapping_employee_ids: List[str] = Field(default_factory=list)
    forgone_amount: int = Field(0, ge=0, description="What the excluded program would have paid")


class EmployeeStatus(str, Enum):
    QUALIFIES = "QUALIFIES"
    NEEDS_REVIEW = "NEEDS_REVIEW"
    DOES_NOT_QUALIFY = "DOES_NOT_QUALIFY"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class EmployeeCheck(BaseModel):
    """Per-employee predicate outcome for one program"""
    employee_id: str
    program: Program
    status: EmployeeStatus
    failed: List[Requirement] = Field(default_factory=list)
    review_reasons: List[ReasonCode] = Field(default_factory=list)

    @property
    def passes(self) -> bool:
        return self.status in (EmployeeStatus.QUALIFIES, EmployeeStatus.NEEDS_REVIEW)

    @property
    def failed_only_on_wage(self) -> bool:
        return self.failed == [Requirement.WAGE_FLOOR]


class MatrixCell(BaseModel):
    program: Program
    status: EmployeeStatus
    amount: int = Field(0, ge=0, description="Amount paid for this employee; 0 beyond the support cap")
    reasons: List[ReasonCode] = Field(default_factory=list)
    excluded_by: Optional[Program] = None
    beyond_support_cap: bool = Field(False, description="Qualifies but falls outside the capped paid count")


class EmployeeMatrixRow(BaseModel):
    employee_id: str
    name: Optional[str] = None
    age: int
    tenure_months: Optional[int] = None
    is_youth: bool
    is_senior: bool
    cells: List[MatrixCell] = Field(default_factory=list)
    total_estimated_amount: int = Field(0, ge=0)


class ApplicationChecklistItem(BaseModel):
    program: Program
    display_name: str
    required_documents: List[str] = Field(default_factory=list)
    application_site: str = ""
    application_period: str = ""
    contact: str = ""
    notes: List[str] = Field(default_factory=list)


class WarningSeverity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class DataQualityWarning(BaseModel):
    """An input-data gap that weakens a verdict"""
    employee_id: Optional[str] = None
    field: str
    code: ReasonCode
    severity: WarningSeverity = WarningSeverity.MEDIUM
    message: str = ""


class ReportAggregate(BaseModel):
    """Everything a report or screen needs from one calculation"""
    generated_at: datetime
    as_of: date
    catalog_version: str
    company: CompanyProfile
    results: List[EligibilityResult] = Field(default_factory=list)
    exclusions: List[ExclusionRecord] = Field(default_factory=list)
    total_eligible_amount: int = Field(0, ge=0, description="Sum of ELIGIBLE totals only")
    total_potential_amount: int = Field(0, ge=0, description="Sum of NEEDS_REVIEW totals, a ceiling")
    eligible_count: int = Field(0, ge=0)
    needs_review_count: int = Field(0, ge=0)
    employee_matrix: List[EmployeeMatrixRow] = Field(default_factory=list)
    application_checklist: List[ApplicationChecklistItem] = Field(default_factory=list)
    data_quality_warnings: List[DataQualityWarning] = Field(default_factory=list)

    def result_for(self, program: Program) -> Optional[EligibilityResult]:
        for result in self.results:
            if result.program == program:
                return result
        return None


class MonthlyEligibility(BaseModel):
    """Senior headcount and window total if the claim window started this month"""
    month: str = Field(..., description="YYYY-MM")
    start_date: date
    eligible_count: int = Field(0, ge=0)
    quarterly_amount: int = Field(0, ge=0)
    window_total: int = Field(0, ge=0)


class EmployeeTurning60(BaseModel):
    employee_id: str
    name: Optional[str] = None
    current_age: int
    turns_60_on: date
    months_until_60: int


class SeniorTimingRecommendation(BaseModel):
    """When to start a senior continued-employment claim window"""
    as_of: date
    quarterly_rate: int
    optimal_start_date: date
    optimal_end_date: date
    current_eligible_count: int
    optimal_eligible_count: int
    current_total_amount: int
    optimal_total_amount: int
    additional_amount_if_wait: int = Field(0, ge=0)
    employees_turning_60: List[EmployeeTurning60] = Field(default_factory=list)
    monthly_timeline: List[MonthlyEligibility] = Field(default_factory=list)
    recommendation: str = ""
