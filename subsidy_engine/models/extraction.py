"""
Pydantic models for structured document-extraction records

These are produced by the document-extraction layer (wage ledger, insurance
enrolment list, employment contracts) and merged into a roster.
"""
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from .company import Employee, WorkType
from .result import DataQualityWarning


class WageLedgerEntry(BaseModel):
    """One employee line of a wage ledger"""
    name: str = Field(..., min_length=1)
    birth_date: Optional[date] = None
    hire_date: Optional[date] = None
    monthly_wage: int = Field(0, ge=0, description="Monthly wage in KRW, 0 when unreadable")
    work_type: Optional[WorkType] = None


class InsuranceListEntry(BaseModel):
    """One line of the four-insurance enrolment list"""
    name: str = Field(..., min_length=1)
    employment_insurance: Optional[bool] = None
    pension_insurance: Optional[bool] = None
    health_insurance: Optional[bool] = None
    enrollment_date: Optional[date] = None
    loss_date: Optional[date] = Field(None, description="Date coverage was lost")
    is_current_employee: Optional[bool] = None


class EmploymentContractEntry(BaseModel):
    """Fields read from one employment contract"""
    employee_name: str = Field(..., min_length=1)
    birth_date: Optional[date] = None
    contract_start_date: Optional[date] = None
    monthly_salary: Optional[int] = Field(None, ge=0)
    work_type: Optional[WorkType] = None
    employment_insurance: Optional[bool] = None


class RosterBuildResult(BaseModel):
    employees: List[Employee] = Field(default_factory=list)
    warnings: List[DataQualityWarning] = Field(default_factory=list)
