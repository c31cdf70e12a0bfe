import logging
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple, Type

from .amount_calculator import amount_calculator
from .catalog import CatalogConfigurationError, ProgramCatalog
from .models.company import CompanyProfile, Employee, EmployeeFacts, Region
from .models.program import DemographicBands, Program, ProgramBasis, ProgramDefinition
from .models.reasons import (
    FAILURE_REASONS,
    REQUIREMENT_LABELS,
    ReasonCode,
    Requirement,
    describe_reason,
    describe_reasons
)
from .models.result import (
    AmountBreakdown,
    Eligibility,
    EligibilityResult,
    EmployeeCheck,
    EmployeeStatus,
    RequirementCheck
)
from .utils.dates import add_months, calculate_age, months_between
from .utils.validators import format_krw

logger = logging.getLogger(__name__)

# Order in which per-employee requirements are checked and reported
EMPLOYEE_REQUIREMENTS = [
    Requirement.CURRENT_EMPLOYEE,
    Requirement.AGE_BAND,
    Requirement.WORK_TYPE,
    Requirement.EMPLOYMENT_INSURANCE,
    Requirement.MIN_TENURE,
    Requirement.WAGE_FLOOR,
]


def derive_facts(employee: Employee, as_of: date, bands: DemographicBands) -> EmployeeFacts:
    """Age, tenure and demographic flags of an employee on the evaluation date"""
    age = calculate_age(employee.birth_date, as_of)
    is_current = employee.is_current_employee and (
        employee.termination_date is None or employee.termination_date > as_of
    )
    return EmployeeFacts(
        employee=employee,
        as_of=as_of,
        age=age,
        tenure_months=months_between(employee.hire_date, as_of),
        is_youth=bands.youth_min_age <= age <= bands.youth_max_age,
        is_senior=age >= bands.senior_min_age,
        is_current=is_current
    )


def roster_size(facts: Sequence[EmployeeFacts]) -> int:
    return sum(1 for f in facts if f.is_current)


def _unique(codes):
    seen = []
    for code in codes:
        if code not in seen:
            seen.append(code)
    return seen


class ProgramEvaluator:
    """
    Shared evaluation pattern for one program

    Subclasses bind a program; everything else is driven by the program's
    catalog entry. Override paid_count or check_company for rules the
    catalog parameters cannot express.
    """

    program: Program

    def __init__(self, catalog: ProgramCatalog):
        self.catalog = catalog

    @property
    def definition(self) -> ProgramDefinition:
        return self.catalog.definition(self.program)

    def applicable_requirements(self) -> List[Requirement]:
        d = self.definition
        requirements = [Requirement.CURRENT_EMPLOYEE]
        if d.min_age is not None or d.max_age is not None:
            requirements.append(Requirement.AGE_BAND)
        if d.work_types is not None:
            requirements.append(Requirement.WORK_TYPE)
        if d.requires_employment_insurance:
            requirements.append(Requirement.EMPLOYMENT_INSURANCE)
        if d.min_tenure_months:
            requirements.append(Requirement.MIN_TENURE)
        if d.wage_thresholds:
            requirements.append(Requirement.WAGE_FLOOR)
        return requirements

    def wage_floor_for(self, facts: EmployeeFacts) -> Optional[int]:
        """Wage floor resolved from the employee's own hire date"""
        floor_date = facts.employee.hire_date or facts.as_of
        return self.catalog.get_program_parameters(self.program, floor_date).wage_floor

    def check_employee(self, facts: EmployeeFacts, company: CompanyProfile) -> EmployeeCheck:
        """
        Evaluate the per-employee predicate

        Unknown salary or hire date never fails a check; it is reported as a
        review reason instead.
        """
        d = self.definition
        employee = facts.employee

        if d.basis == ProgramBasis.COMPANY:
            return EmployeeCheck(
                employee_id=employee.id,
                program=self.program,
                status=EmployeeStatus.NOT_APPLICABLE
            )

        failed: List[Requirement] = []
        review: List[ReasonCode] = []

        if not facts.is_current:
            failed.append(Requirement.CURRENT_EMPLOYEE)
        if not d.in_age_band(facts.age):
            failed.append(Requirement.AGE_BAND)
        if d.work_types is not None and employee.work_type not in d.work_types:
            failed.append(Requirement.WORK_TYPE)
        if d.requires_employment_insurance and not employee.has_employment_insurance:
            failed.append(Requirement.EMPLOYMENT_INSURANCE)

        if d.min_tenure_months:
            if facts.tenure_months is None:
                review.append(ReasonCode.HIRE_DATE_UNKNOWN)
            elif facts.tenure_months < d.min_tenure_months:
                failed.append(Requirement.MIN_TENURE)

        if d.wage_thresholds:
            if d.has_date_dependent_wage_floor and employee.hire_date is None:
                review.append(ReasonCode.HIRE_DATE_UNKNOWN)
            if not employee.salary_known:
                review.append(ReasonCode.SALARY_UNKNOWN)
            elif employee.monthly_salary < self.wage_floor_for(facts):
                failed.append(Requirement.WAGE_FLOOR)

        if failed:
            status = EmployeeStatus.DOES_NOT_QUALIFY
        elif review:
            status = EmployeeStatus.NEEDS_REVIEW
        else:
            status = EmployeeStatus.QUALIFIES

        return EmployeeCheck(
            employee_id=employee.id,
            program=self.program,
            status=status,
            failed=failed,
            review_reasons=_unique(review)
        )

    def check_company(
        self,
        company: CompanyProfile,
        facts: Sequence[EmployeeFacts]
    ) -> Tuple[List[RequirementCheck], List[RequirementCheck]]:
        """Company-level gates, returned as (met, not_met)"""
        d = self.definition
        met: List[RequirementCheck] = []
        not_met: List[RequirementCheck] = []

        if d.roster_band is not None:
            size = roster_size(facts)
            band = d.roster_band
            check = RequirementCheck(
                requirement=Requirement.ROSTER_SIZE_BAND,
                employee_count=size,
                detail=f"{size} current employee(s); supported range {band.min_size} to {band.max_size_exclusive - 1}"
            )
            (met if band.contains(size) else not_met).append(check)

        if d.requires_small_business:
            check = RequirementCheck(requirement=Requirement.SMALL_BUSINESS)
            (met if company.is_small_business else not_met).append(check)

        return met, not_met

    def paid_count(self, qualifying_count: int, facts: Sequence[EmployeeFacts]) -> int:
        return qualifying_count

    def review_requirements(self, company: CompanyProfile) -> List[Requirement]:
        """Requirements a person must confirm before the amount is guaranteed"""
        d = self.definition
        requirements = list(d.manual_review)
        if company.region == Region.CAPITAL:
            requirements.extend(d.capital_region_review)
        return _unique(requirements)

    def evaluate(
        self,
        company: CompanyProfile,
        employees: Sequence[Employee],
        as_of: date
    ) -> EligibilityResult:
        """
        Evaluate the program against a roster

        Args:
            company: Company profile
            employees: Employee roster
            as_of: Date age, tenure and amounts are evaluated on

        Returns:
            EligibilityResult for the program
        """
        d = self.definition
        facts = [derive_facts(e, as_of, self.catalog.demographics) for e in employees]
        parameters = self.catalog.get_program_parameters(self.program, as_of)

        met, not_met = self.check_company(company, facts)
        if not_met:
            reasons = [FAILURE_REASONS[check.requirement] for check in not_met]
            return self._result(Eligibility.NOT_ELIGIBLE, met, not_met, [], reasons, [], None, 0, [])

        review_requirements = self.review_requirements(company)
        unverified = [
            RequirementCheck(requirement=r, detail=REQUIREMENT_LABELS[r]) for r in review_requirements
        ]
        review_reasons = [FAILURE_REASONS[r] for r in review_requirements]

        if d.basis == ProgramBasis.COMPANY:
            amount = amount_calculator.compute_amount(parameters, 1, company)
            eligibility = Eligibility.NEEDS_REVIEW if review_reasons else Eligibility.ELIGIBLE
            notes = list(d.review_notes) if review_reasons else []
            return self._result(eligibility, met, [], unverified, review_reasons, [], amount, 0, notes)

        checks = [self.check_employee(f, company) for f in facts]
        qualifying = [c for c in checks if c.passes]
        wage_only = [c for c in checks if c.failed_only_on_wage]
        self._tally_requirements(checks, met, not_met)

        notes: List[str] = []
        if wage_only:
            notes.append(f"{len(wage_only)} otherwise qualifying employee(s) excluded only by the wage floor")

        if not qualifying:
            reasons = self._non_qualification_reasons(checks)
            return self._result(
                Eligibility.NOT_ELIGIBLE, met, not_met, [], reasons, [], None, len(wage_only), notes
            )

        qualifying_ids = [c.employee_id for c in qualifying]
        count = self.paid_count(len(qualifying), facts)
        if count < 1:
            notes.append(f"Support cap allows no claims for a roster of {roster_size(facts)}")
            return self._result(
                Eligibility.NOT_ELIGIBLE, met, not_met, [], [ReasonCode.ROSTER_SIZE_OUT_OF_BAND],
                [], None, len(wage_only), notes
            )
        if count < len(qualifying):
            notes.append(f"Support cap limits the claim to {count} of {len(qualifying)} qualifying employee(s)")

        labels = {f.employee.id: f.employee.label for f in facts}
        data_gaps = _unique(code for c in qualifying for code in c.review_reasons)
        for code in data_gaps:
            affected = [labels[c.employee_id] for c in qualifying if code in c.review_reasons]
            notes.append(f"{describe_reason(code)}: {', '.join(affected)}")

        notes.extend(self._application_wait_notes(facts, qualifying_ids))

        reasons = review_reasons + data_gaps
        if review_reasons:
            notes.extend(d.review_notes)

        amount = amount_calculator.compute_amount(parameters, count, company)
        eligibility = Eligibility.NEEDS_REVIEW if reasons else Eligibility.ELIGIBLE
        return self._result(
            eligibility, met, not_met, unverified, reasons, qualifying_ids, amount, len(wage_only), notes
        )

    def _tally_requirements(
        self,
        checks: Sequence[EmployeeCheck],
        met: List[RequirementCheck],
        not_met: List[RequirementCheck]
    ) -> None:
        for requirement in self.applicable_requirements():
            failures = sum(1 for c in checks if requirement in c.failed)
            passes = len(checks) - failures
            if passes:
                met.append(RequirementCheck(requirement=requirement, employee_count=passes))
            if failures:
                not_met.append(RequirementCheck(requirement=requirement, employee_count=failures))

    def _non_qualification_reasons(self, checks: Sequence[EmployeeCheck]) -> List[ReasonCode]:
        """
        Separate structural failures from wage-floor exclusions

        A structurally failing employee contributes the first requirement it
        failed; employees failing only the wage floor are reported together.
        """
        if not checks:
            return [ReasonCode.NO_EMPLOYEES]

        reasons = []
        for check in checks:
            if check.failed and not check.failed_only_on_wage:
                reasons.append(FAILURE_REASONS[check.failed[0]])
        if any(c.failed_only_on_wage for c in checks):
            reasons.append(ReasonCode.EXCLUDED_BY_WAGE_FLOOR)

        order = [FAILURE_REASONS[r] for r in EMPLOYEE_REQUIREMENTS]
        return sorted(_unique(reasons), key=order.index)

    def _application_wait_notes(self, facts: Sequence[EmployeeFacts], qualifying_ids: List[str]) -> List[str]:
        wait = self.definition.application_wait_months
        if not wait:
            return []

        notes = []
        for f in facts:
            if f.employee.id not in qualifying_ids or f.tenure_months is None:
                continue
            if f.tenure_months < wait:
                eligible_on = add_months(f.employee.hire_date, wait)
                notes.append(
                    f"{f.employee.label}: claim can be filed from {eligible_on.isoformat()} "
                    f"after {wait} months of employment"
                )
        return notes

    def _result(
        self,
        eligibility: Eligibility,
        met: List[RequirementCheck],
        not_met: List[RequirementCheck],
        unverified: List[RequirementCheck],
        reasons: List[ReasonCode],
        qualifying_ids: List[str],
        amount: Optional[AmountBreakdown],
        wage_excluded: int,
        notes: List[str]
    ) -> EligibilityResult:
        d = self.definition
        if eligibility == Eligibility.NOT_ELIGIBLE:
            notes = notes + describe_reasons(reasons)
        elif amount is not None and amount.incentive_per_person:
            notes = notes + [
                f"Includes non-capital youth incentive of {format_krw(amount.incentive_per_person)} per person"
            ]

        result = EligibilityResult(
            program=self.program,
            display_name=d.display_name,
            eligibility=eligibility,
            requirements_met=met,
            requirements_not_met=not_met,
            requirements_unverified=unverified,
            reasons=reasons,
            qualifying_employee_ids=qualifying_ids,
            qualifying_count=amount.qualifying_count if amount else 0,
            wage_floor_excluded_count=wage_excluded,
            payment_period=d.payment_period,
            period_amount=amount.period_amount if amount else 0,
            amount_per_person=amount.amount_per_person if amount else 0,
            incentive_per_person=amount.incentive_per_person if amount else 0,
            total_months=amount.total_months if amount else 0,
            total_amount=amount.total_amount if amount else 0,
            notes=notes
        )

        logger.debug(
            f"{self.program.value}: {result.eligibility.value}, "
            f"{result.qualifying_count} qualifying, total {result.total_amount}"
        )
        return result


class YouthJobLeapEvaluator(ProgramEvaluator):
    """Youth (15-34) hired full time with employment insurance"""
    program = Program.YOUTH_JOB_LEAP


class EmploymentPromotionEvaluator(ProgramEvaluator):
    program = Program.EMPLOYMENT_PROMOTION


class RegularConversionEvaluator(ProgramEvaluator):
    """Paid count is capped by a share of the roster"""
    program = Program.REGULAR_CONVERSION

    def paid_count(self, qualifying_count: int, facts: Sequence[EmployeeFacts]) -> int:
        cap = self.definition.support_cap
        if cap is None:
            return qualifying_count
        return min(qualifying_count, cap.cap_for(roster_size(facts)))


class SeniorContinuedEmploymentEvaluator(ProgramEvaluator):
    program = Program.SENIOR_CONTINUED_EMPLOYMENT


class SeniorEmploymentSupportEvaluator(ProgramEvaluator):
    program = Program.SENIOR_EMPLOYMENT_SUPPORT


class ParentalEmploymentStabilityEvaluator(ProgramEvaluator):
    """Gated on business size only; the leave itself is never in the roster"""
    program = Program.PARENTAL_EMPLOYMENT_STABILITY


class EmploymentRetentionEvaluator(ProgramEvaluator):
    program = Program.EMPLOYMENT_RETENTION


EVALUATORS: Dict[Program, Type[ProgramEvaluator]] = {
    evaluator.program: evaluator
    for evaluator in (
        YouthJobLeapEvaluator,
        EmploymentPromotionEvaluator,
        RegularConversionEvaluator,
        SeniorContinuedEmploymentEvaluator,
        SeniorEmploymentSupportEvaluator,
        ParentalEmploymentStabilityEvaluator,
        EmploymentRetentionEvaluator,
    )
}


class RulesEvaluator:
    """Evaluates a company and roster against program rules"""

    def __init__(self, catalog: ProgramCatalog):
        self.catalog = catalog
        self._evaluators: Dict[Program, ProgramEvaluator] = {}

    def evaluator_for(self, program) -> ProgramEvaluator:
        program = self.catalog.resolve_program(program)
        if program not in self._evaluators:
            evaluator_class = EVALUATORS.get(program)
            if evaluator_class is None:
                raise CatalogConfigurationError(f"No evaluator registered for {program.value}")
            self._evaluators[program] = evaluator_class(self.catalog)
        return self._evaluators[program]

    def derive_facts(self, employee: Employee, as_of: date) -> EmployeeFacts:
        return derive_facts(employee, as_of, self.catalog.demographics)

    def evaluate_program(
        self,
        program,
        company: CompanyProfile,
        employees: Sequence[Employee],
        as_of: date
    ) -> EligibilityResult:
        return self.evaluator_for(program).evaluate(company, employees, as_of)

    def check_employee(self, program, facts: EmployeeFacts, company: CompanyProfile) -> EmployeeCheck:
        return self.evaluator_for(program).check_employee(facts, company)
