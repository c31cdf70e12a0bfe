"""
Roster builder: merges document-extraction records into Employee entries
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from ..models.company import Employee, WorkType
from ..models.extraction import (
    EmploymentContractEntry,
    InsuranceListEntry,
    RosterBuildResult,
    WageLedgerEntry
)
from ..models.reasons import ReasonCode, describe_reason
from ..models.result import DataQualityWarning, WarningSeverity
from ..utils.validators import normalize_name

logger = logging.getLogger(__name__)

ASSUMED_INSURED_WORK_TYPES = (WorkType.FULL_TIME, WorkType.CONTRACT)


def _assume_insured(work_type: Optional[WorkType], has_insurance_list: bool) -> bool:
    if has_insurance_list:
        return False
    return work_type is None or work_type in ASSUMED_INSURED_WORK_TYPES


def build_roster(
    wage_ledger: Optional[Sequence[WageLedgerEntry]] = None,
    insurance_list: Optional[Sequence[InsuranceListEntry]] = None,
    contracts: Optional[Sequence[EmploymentContractEntry]] = None,
    as_of: Optional[date] = None
) -> RosterBuildResult:
    """
    Merge extraction records into a roster, matching people by name

    Args:
        wage_ledger: Wage ledger lines, the primary source
        insurance_list: Insurance enrolment lines; authoritative for coverage
        contracts: Employment contracts; only fill fields still missing
        as_of: Date coverage losses are compared against (defaults to today)

    Returns:
        RosterBuildResult with employees in first-seen order and warnings
        for records that could not become an Employee
    """
    as_of = as_of or date.today()
    has_insurance_list = bool(insurance_list)
    records: Dict[str, Dict[str, Any]] = {}

    for entry in wage_ledger or []:
        records[normalize_name(entry.name)] = {
            "name": entry.name.strip(),
            "birth_date": entry.birth_date,
            "hire_date": entry.hire_date,
            "monthly_salary": entry.monthly_wage,
            "work_type": entry.work_type,
            "has_employment_insurance": _assume_insured(entry.work_type, has_insurance_list),
        }

    for entry in insurance_list or []:
        key = normalize_name(entry.name)
        record = records.setdefault(key, {"name": entry.name.strip()})

        if entry.employment_insurance is not None:
            record["has_employment_insurance"] = entry.employment_insurance
        else:
            record.setdefault("has_employment_insurance", False)
        if entry.pension_insurance is not None:
            record["has_pension_insurance"] = entry.pension_insurance
        if entry.health_insurance is not None:
            record["has_health_insurance"] = entry.health_insurance
        if entry.enrollment_date is not None:
            record["insurance_enrollment_date"] = entry.enrollment_date
            if record.get("hire_date") is None:
                record["hire_date"] = entry.enrollment_date

        lost = entry.loss_date is not None and entry.loss_date <= as_of
        if entry.is_current_employee is False or lost:
            record["is_current_employee"] = False
            if record.get("termination_date") is None:
                record["termination_date"] = entry.loss_date

    for entry in contracts or []:
        key = normalize_name(entry.employee_name)
        record = records.get(key)
        if record is None:
            insured = entry.employment_insurance
            if insured is None:
                insured = _assume_insured(entry.work_type, has_insurance_list)
            records[key] = {
                "name": entry.employee_name.strip(),
                "birth_date": entry.birth_date,
                "hire_date": entry.contract_start_date,
                "monthly_salary": entry.monthly_salary or 0,
                "work_type": entry.work_type,
                "has_employment_insurance": insured,
            }
            continue

        if record.get("birth_date") is None:
            record["birth_date"] = entry.birth_date
        if record.get("hire_date") is None:
            record["hire_date"] = entry.contract_start_date
        if not record.get("monthly_salary") and entry.monthly_salary:
            record["monthly_salary"] = entry.monthly_salary
        if record.get("work_type") is None:
            record["work_type"] = entry.work_type

    employees: List[Employee] = []
    warnings: List[DataQualityWarning] = []
    for record in records.values():
        if record.get("birth_date") is None:
            warnings.append(DataQualityWarning(
                field="birth_date",
                code=ReasonCode.MISSING_BIRTH_DATE,
                severity=WarningSeverity.HIGH,
                message=f"{record['name']}: {describe_reason(ReasonCode.MISSING_BIRTH_DATE)}; left out of the roster"
            ))
            continue

        fields = {k: v for k, v in record.items() if v is not None}
        fields["id"] = f"emp-{len(employees) + 1:03d}"
        try:
            employees.append(Employee(**fields))
        except ValidationError as e:
            problems = "; ".join(error["msg"] for error in e.errors())
            warnings.append(DataQualityWarning(
                field="record",
                code=ReasonCode.CONFLICTING_RECORDS,
                severity=WarningSeverity.HIGH,
                message=f"{record['name']}: {describe_reason(ReasonCode.CONFLICTING_RECORDS)} ({problems}); left out of the roster"
            ))

    logger.info(
        f"Built roster of {len(employees)} employee(s) from {len(records)} merged record(s), "
        f"{len(warnings)} dropped"
    )
    return RosterBuildResult(employees=employees, warnings=warnings)
