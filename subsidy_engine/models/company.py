"""
Pydantic models for the employer profile and its employee roster
"""
import re
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Region(str, Enum):
    CAPITAL = "CAPITAL"
    NON_CAPITAL = "NON_CAPITAL"


class NonCapitalTier(str, Enum):
    """Population-decline tier of a non-capital workplace"""
    GENERAL = "GENERAL"
    PREFERRED = "PREFERRED"
    SPECIAL = "SPECIAL"


class WorkType(str, Enum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    CONTRACT = "CONTRACT"


class CompanyProfile(BaseModel):
    """Employer attributes every rule evaluation reads"""
    legal_name: str = Field(..., min_length=1, description="Registered business name")
    registration_number: str = Field(..., description="Business registration number (10 digits)")
    region: Region = Field(..., description="Workplace region")
    is_small_business: bool = Field(False, description="Priority-support (small/medium) business")
    opening_date: Optional[date] = Field(None, description="Business opening date")
    industry_code: Optional[str] = Field(None, description="Industry classification code")
    non_capital_tier: NonCapitalTier = Field(
        NonCapitalTier.GENERAL,
        description="Population-decline tier, only meaningful outside the capital region"
    )

    @field_validator('registration_number')
    @classmethod
    def validate_registration_number(cls, v):
        digits = re.sub(r'[\s-]', '', v)
        if not re.fullmatch(r'\d{10}', digits):
            raise ValueError("Registration number must contain exactly 10 digits")
        return f"{digits[:3]}-{digits[3:5]}-{digits[5:]}"

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "legal_name": "Hanbit Logistics Co., Ltd.",
                "registration_number": "123-45-67890",
                "region": "NON_CAPITAL",
                "is_small_business": True,
                "opening_date": "2019-03-01",
                "industry_code": "H49",
                "non_capital_tier": "GENERAL"
            }
        }
    )


class Employee(BaseModel):
    """One roster entry. A monthly salary of 0 means the salary is unknown."""
    id: str = Field(..., min_length=1, description="Identifier, unique within the roster")
    name: Optional[str] = Field(None, description="Display name")
    birth_date: date = Field(..., description="Date of birth")
    hire_date: Optional[date] = Field(None, description="Date of hire")
    monthly_salary: int = Field(0, ge=0, description="Monthly salary in KRW, 0 when unknown")
    work_type: WorkType = Field(WorkType.FULL_TIME, description="Employment form")
    has_employment_insurance: bool = Field(False, description="Enrolled in employment insurance")
    has_pension_insurance: bool = Field(False, description="Enrolled in national pension")
    has_health_insurance: bool = Field(False, description="Enrolled in health insurance")
    insurance_enrollment_date: Optional[date] = Field(None, description="Employment insurance enrolment date")
    is_current_employee: bool = Field(True, description="Still employed")
    termination_date: Optional[date] = Field(None, description="Date employment ended")

    @model_validator(mode='after')
    def check_dates(self):
        if self.hire_date is not None and self.hire_date < self.birth_date:
            raise ValueError("hire_date cannot precede birth_date")
        if self.termination_date is not None and self.hire_date is not None \
                and self.termination_date < self.hire_date:
            raise ValueError("termination_date cannot precede hire_date")
        return self

    @property
    def salary_known(self) -> bool:
        return self.monthly_salary > 0

    @property
    def label(self) -> str:
        return self.name or self.id

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "emp-001",
                "name": "Kim Minji",
                "birth_date": "2003-05-14",
                "hire_date": "2025-09-01",
                "monthly_salary": 2600000,
                "work_type": "FULL_TIME",
                "has_employment_insurance": True,
                "has_pension_insurance": True,
                "has_health_insurance": True
            }
        }
    )


class EmployeeFacts(BaseModel):
    """Facts derived from an Employee for one evaluation date, never stored"""
    employee: Employee
    as_of: date
    age: int
    tenure_months: Optional[int] = Field(None, description="Whole months employed, None when hire date is unknown")
    is_youth: bool
    is_senior: bool
    is_current: bool

    model_config = ConfigDict(frozen=True)
