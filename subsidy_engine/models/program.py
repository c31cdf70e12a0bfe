"""
Pydantic models for the subsidy program catalog
"""
from datetime import date
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .company import NonCapitalTier, Region, WorkType
from .reasons import ReasonCode, Requirement


class Program(str, Enum):
    """Supported subsidy programs, in catalog declaration order"""
    YOUTH_JOB_LEAP = "YOUTH_JOB_LEAP"
    EMPLOYMENT_PROMOTION = "EMPLOYMENT_PROMOTION"
    REGULAR_CONVERSION = "REGULAR_CONVERSION"
    SENIOR_CONTINUED_EMPLOYMENT = "SENIOR_CONTINUED_EMPLOYMENT"
    SENIOR_EMPLOYMENT_SUPPORT = "SENIOR_EMPLOYMENT_SUPPORT"
    PARENTAL_EMPLOYMENT_STABILITY = "PARENTAL_EMPLOYMENT_STABILITY"
    EMPLOYMENT_RETENTION = "EMPLOYMENT_RETENTION"


class ProgramBasis(str, Enum):
    """Whether a program pays per qualifying employee or per company claim"""
    EMPLOYEE = "EMPLOYEE"
    COMPANY = "COMPANY"


class PaymentPeriod(str, Enum):
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"

    @property
    def months(self) -> int:
        return 3 if self is PaymentPeriod.QUARTERLY else 1


class WageThreshold(BaseModel):
    """Wage floor applying to employees hired on or after effective_from"""
    effective_from: Optional[date] = Field(None, description="First hire date the floor applies to, None for the base floor")
    amount: int = Field(..., ge=0, description="Minimum monthly salary in KRW")


class RosterBand(BaseModel):
    """Half-open headcount band [min_size, max_size_exclusive)"""
    min_size: int = Field(..., ge=0)
    max_size_exclusive: int = Field(..., gt=0)

    @model_validator(mode='after')
    def check_bounds(self):
        if self.max_size_exclusive <= self.min_size:
            raise ValueError("max_size_exclusive must be greater than min_size")
        return self

    def contains(self, size: int) -> bool:
        return self.min_size <= size < self.max_size_exclusive


class SupportCap(BaseModel):
    """Limit on how many employees a company can claim for"""
    small_roster_below: int = Field(..., gt=0, description="Rosters smaller than this use the flat cap")
    small_roster_cap: int = Field(..., gt=0)
    ratio_percent: int = Field(..., gt=0, le=100, description="Share of the roster, floored")

    def cap_for(self, roster_size: int) -> int:
        if roster_size < self.small_roster_below:
            return self.small_roster_cap
        return roster_size * self.ratio_percent // 100


class ApplicationInfo(BaseModel):
    """Where and how a claim is filed"""
    required_documents: List[str] = Field(default_factory=list)
    application_site: str = ""
    application_period: str = ""
    contact: str = ""
    notes: List[str] = Field(default_factory=list)


class ProgramDefinition(BaseModel):
    """One catalog entry: rule parameters and amounts for a program"""
    program: Program
    display_name: str = Field(..., min_length=1)
    basis: ProgramBasis = ProgramBasis.EMPLOYEE
    min_age: Optional[int] = Field(None, ge=0)
    max_age: Optional[int] = Field(None, ge=0)
    work_types: Optional[List[WorkType]] = Field(None, description="Covered work types, None for any")
    requires_employment_insurance: bool = False
    min_tenure_months: int = Field(0, ge=0)
    application_wait_months: int = Field(0, ge=0, description="Months of employment before a claim can be filed")
    wage_thresholds: List[WageThreshold] = Field(default_factory=list)
    payment_period: PaymentPeriod = PaymentPeriod.MONTHLY
    period_amount: Dict[Region, int] = Field(..., description="Amount per person per payment period")
    periods: int = Field(..., ge=0, description="Number of payment periods")
    non_capital_incentive: Dict[NonCapitalTier, int] = Field(default_factory=dict)
    roster_band: Optional[RosterBand] = None
    support_cap: Optional[SupportCap] = None
    requires_small_business: bool = False
    manual_review: List[Requirement] = Field(default_factory=list)
    capital_region_review: List[Requirement] = Field(default_factory=list)
    review_notes: List[str] = Field(default_factory=list)
    application: ApplicationInfo = Field(default_factory=ApplicationInfo)

    @field_validator('wage_thresholds')
    @classmethod
    def validate_thresholds(cls, v):
        base = [t for t in v if t.effective_from is None]
        if v and len(base) != 1:
            raise ValueError("wage_thresholds needs exactly one base entry without effective_from")
        dated = [t.effective_from for t in v if t.effective_from is not None]
        if len(dated) != len(set(dated)):
            raise ValueError("wage_thresholds effective_from dates must be unique")
        return sorted(v, key=lambda t: t.effective_from or date.min)

    @field_validator('period_amount')
    @classmethod
    def validate_period_amount(cls, v):
        missing = [region.value for region in Region if region not in v]
        if missing:
            raise ValueError(f"period_amount missing regions: {missing}")
        if any(amount < 0 for amount in v.values()):
            raise ValueError("period_amount values must be non-negative")
        return v

    @model_validator(mode='after')
    def check_age_band(self):
        if self.min_age is not None and self.max_age is not None and self.max_age < self.min_age:
            raise ValueError(f"{self.program.value}: max_age is below min_age")
        return self

    @property
    def has_date_dependent_wage_floor(self) -> bool:
        return len(self.wage_thresholds) > 1

    def wage_floor_on(self, on: date) -> Optional[int]:
        """Floor applying to an employee hired on the given date"""
        floor = None
        for threshold in self.wage_thresholds:
            if threshold.effective_from is None or threshold.effective_from <= on:
                floor = threshold.amount
        return floor

    def in_age_band(self, age: int) -> bool:
        if self.min_age is not None and age < self.min_age:
            return False
        if self.max_age is not None and age > self.max_age:
            return False
        return True


class ProgramParameters(BaseModel):
    """A catalog entry resolved for a specific date"""
    definition: ProgramDefinition
    as_of: date
    wage_floor: Optional[int] = None

    @property
    def program(self) -> Program:
        return self.definition.program

    model_config = ConfigDict(frozen=True)


class ExclusivePair(BaseModel):
    """Two programs that cannot pay for the same employee"""
    programs: Tuple[Program, Program]
    reason: ReasonCode = ReasonCode.DUPLICATE_PAYMENT_EXCLUDED
    description: str = ""

    @field_validator('programs')
    @classmethod
    def validate_distinct(cls, v):
        if v[0] == v[1]:
            raise ValueError("An exclusive pair needs two different programs")
        return v


class DemographicBands(BaseModel):
    youth_min_age: int = 15
    youth_max_age: int = 34
    senior_min_age: int = 60


class ProgramCatalogData(BaseModel):
    """The versioned catalog document"""
    version: str = Field(..., min_length=1)
    demographics: DemographicBands = Field(default_factory=DemographicBands)
    programs: List[ProgramDefinition]
    exclusive_pairs: List[ExclusivePair] = Field(default_factory=list)

    @model_validator(mode='after')
    def check_complete(self):
        declared = [definition.program for definition in self.programs]
        duplicates = sorted({p.value for p in declared if declared.count(p) > 1})
        if duplicates:
            raise ValueError(f"Programs declared more than once: {duplicates}")
        missing = [p.value for p in Program if p not in declared]
        if missing:
            raise ValueError(f"Programs missing from catalog: {missing}")
        return self
