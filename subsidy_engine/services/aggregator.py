"""
Aggregation of program results into a report
"""
import logging
from datetime import date, datetime
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from ..catalog import ProgramCatalog
from ..models.company import CompanyProfile, Employee
from ..models.program import Program
from ..models.reasons import FAILURE_REASONS, ReasonCode, describe_reason
from ..models.result import (
    ApplicationChecklistItem,
    DataQualityWarning,
    Eligibility,
    EligibilityResult,
    EmployeeMatrixRow,
    EmployeeStatus,
    ExclusionRecord,
    MatrixCell,
    ReportAggregate,
    WarningSeverity
)
from ..rules_evaluator import RulesEvaluator

logger = logging.getLogger(__name__)


class CalculationContext(BaseModel):
    """Inputs of one calculation the report is built from"""
    company: CompanyProfile
    employees: List[Employee] = Field(default_factory=list)
    as_of: date
    generated_at: datetime


class Aggregator:
    """Builds a ReportAggregate from resolved program results"""

    def __init__(self, catalog: ProgramCatalog, rules: Optional[RulesEvaluator] = None):
        self.catalog = catalog
        self.rules = rules or RulesEvaluator(catalog)

    def aggregate(
        self,
        results: Sequence[EligibilityResult],
        exclusions: Sequence[ExclusionRecord],
        context: CalculationContext
    ) -> ReportAggregate:
        """
        Compose totals, the employee matrix, checklist and warnings

        Args:
            results: Program results in requested order, excluded ones zeroed
            exclusions: Programs zeroed by mutual exclusion
            context: Company, roster and dates of the calculation

        Returns:
            ReportAggregate
        """
        claimable = [r for r in results if r.is_claimable]
        eligible = [r for r in claimable if r.eligibility == Eligibility.ELIGIBLE]
        review = [r for r in claimable if r.eligibility == Eligibility.NEEDS_REVIEW]

        return ReportAggregate(
            generated_at=context.generated_at,
            as_of=context.as_of,
            catalog_version=self.catalog.version,
            company=context.company,
            results=list(results),
            exclusions=list(exclusions),
            total_eligible_amount=sum(r.total_amount for r in eligible),
            total_potential_amount=sum(r.total_amount for r in review),
            eligible_count=len(eligible),
            needs_review_count=len(review),
            employee_matrix=self.build_matrix(results, exclusions, context),
            application_checklist=self.build_checklist(results),
            data_quality_warnings=self.build_warnings(context.employees)
        )

    def build_matrix(
        self,
        results: Sequence[EligibilityResult],
        exclusions: Sequence[ExclusionRecord],
        context: CalculationContext
    ) -> List[EmployeeMatrixRow]:
        """Employee x program view, columns in catalog order"""
        by_program: Dict[Program, EligibilityResult] = {r.program: r for r in results}
        excluded: Dict[Program, ExclusionRecord] = {e.program: e for e in exclusions}
        programs = sorted(by_program, key=self.catalog.declaration_index)

        rows = []
        for employee in context.employees:
            facts = self.rules.derive_facts(employee, context.as_of)
            cells = [
                self._cell(program, facts, context.company, by_program.get(program), excluded.get(program))
                for program in programs
            ]
            rows.append(EmployeeMatrixRow(
                employee_id=employee.id,
                name=employee.name,
                age=facts.age,
                tenure_months=facts.tenure_months,
                is_youth=facts.is_youth,
                is_senior=facts.is_senior,
                cells=cells,
                total_estimated_amount=sum(c.amount for c in cells)
            ))
        return rows

    def _cell(self, program, facts, company, result, exclusion) -> MatrixCell:
        check = self.rules.check_employee(program, facts, company)
        reasons = [FAILURE_REASONS[r] for r in check.failed] + list(check.review_reasons)

        if exclusion is not None:
            return MatrixCell(
                program=program,
                status=check.status,
                reasons=reasons + ([exclusion.reason] if check.passes else []),
                excluded_by=exclusion.excluded_by
            )

        status = check.status
        amount = 0
        beyond_cap = False
        employee_id = facts.employee.id
        if check.passes:
            if result.is_claimable and employee_id in result.qualifying_employee_ids:
                # Paid slots go to qualifying employees in roster order
                paid = result.qualifying_employee_ids[:result.qualifying_count]
                if employee_id in paid:
                    amount = result.amount_per_person
                else:
                    beyond_cap = True
            else:
                # Company-level gates failed for the whole program
                status = EmployeeStatus.DOES_NOT_QUALIFY
                reasons = reasons + list(result.reasons)

        return MatrixCell(
            program=program,
            status=status,
            amount=amount,
            reasons=reasons,
            beyond_support_cap=beyond_cap
        )

    def build_checklist(self, results: Sequence[EligibilityResult]) -> List[ApplicationChecklistItem]:
        items = []
        for result in results:
            if not result.is_claimable:
                continue
            definition = self.catalog.definition(result.program)
            application = definition.application
            items.append(ApplicationChecklistItem(
                program=result.program,
                display_name=definition.display_name,
                required_documents=list(application.required_documents),
                application_site=application.application_site,
                application_period=application.application_period,
                contact=application.contact,
                notes=list(application.notes)
            ))
        return items

    def build_warnings(self, employees: Sequence[Employee]) -> List[DataQualityWarning]:
        warnings = []
        for employee in employees:
            if not employee.salary_known:
                warnings.append(DataQualityWarning(
                    employee_id=employee.id,
                    field="monthly_salary",
                    code=ReasonCode.SALARY_UNKNOWN,
                    severity=WarningSeverity.MEDIUM,
                    message=f"{employee.label}: {describe_reason(ReasonCode.SALARY_UNKNOWN)}"
                ))
            if employee.hire_date is None:
                warnings.append(DataQualityWarning(
                    employee_id=employee.id,
                    field="hire_date",
                    code=ReasonCode.HIRE_DATE_UNKNOWN,
                    severity=WarningSeverity.HIGH,
                    message=f"{employee.label}: {describe_reason(ReasonCode.HIRE_DATE_UNKNOWN)}"
                ))
        if warnings:
            logger.info(f"{len(warnings)} data-quality warning(s) on the roster")
        return warnings
