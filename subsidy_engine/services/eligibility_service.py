"""
Eligibility service: the engine's single entry point
"""
import logging
from datetime import date, datetime, time, timezone
from typing import List, Optional, Sequence, Union

from ..catalog import ProgramCatalog, get_catalog
from ..models.company import CompanyProfile, Employee
from ..models.program import Program
from ..models.result import ReportAggregate
from ..rules_evaluator import RulesEvaluator
from ..utils.validators import validate_roster
from .aggregator import Aggregator, CalculationContext
from .exclusion_resolver import resolve_exclusions

logger = logging.getLogger(__name__)


class EligibilityService:
    """Service for evaluating a company and roster against subsidy programs"""

    def __init__(self, catalog: Optional[ProgramCatalog] = None):
        self._catalog = catalog
        self._rules: Optional[RulesEvaluator] = None

    @property
    def catalog(self) -> ProgramCatalog:
        if self._catalog is None:
            self._catalog = get_catalog()
        return self._catalog

    @property
    def rules(self) -> RulesEvaluator:
        if self._rules is None:
            self._rules = RulesEvaluator(self.catalog)
        return self._rules

    def calculate(
        self,
        company: CompanyProfile,
        employees: Sequence[Employee],
        programs: Sequence[Union[Program, str]],
        as_of: Optional[date] = None,
        generated_at: Optional[datetime] = None
    ) -> ReportAggregate:
        """
        Evaluate the requested programs and aggregate the outcome

        Args:
            company: Company profile
            employees: Employee roster snapshot
            programs: Programs to evaluate, in the order results should appear
            as_of: Evaluation date (defaults to today)
            generated_at: Report timestamp (defaults to midnight UTC of as_of)

        Returns:
            ReportAggregate with results, exclusions, totals and the employee matrix

        Raises:
            CatalogConfigurationError: A requested program is unknown
            ValueError: The roster is invalid
        """
        as_of = as_of or date.today()
        generated_at = generated_at or datetime.combine(as_of, time.min, tzinfo=timezone.utc)

        errors = validate_roster(employees)
        if errors:
            raise ValueError("; ".join(errors))

        # Reject unknown programs before evaluating anything
        requested = self._resolve_programs(programs)

        results = [
            self.rules.evaluate_program(program, company, employees, as_of)
            for program in requested
        ]
        results, exclusions = resolve_exclusions(results, self.catalog)

        context = CalculationContext(
            company=company,
            employees=list(employees),
            as_of=as_of,
            generated_at=generated_at
        )
        report = Aggregator(self.catalog, self.rules).aggregate(results, exclusions, context)

        logger.info(
            f"Calculation for {company.legal_name} as of {as_of.isoformat()}: "
            f"{report.eligible_count} eligible, {report.needs_review_count} need review, "
            f"{len(exclusions)} excluded; eligible total {report.total_eligible_amount}, "
            f"potential {report.total_potential_amount}"
        )
        return report

    def _resolve_programs(self, programs: Sequence[Union[Program, str]]) -> List[Program]:
        requested: List[Program] = []
        for program in programs:
            resolved = self.catalog.resolve_program(program)
            if resolved in requested:
                logger.info(f"Ignoring duplicate request for {resolved.value}")
                continue
            requested.append(resolved)
        return requested


# Global eligibility service instance
eligibility_service = EligibilityService()


def calculate(
    company: CompanyProfile,
    employees: Sequence[Employee],
    programs: Sequence[Union[Program, str]],
    as_of: Optional[date] = None,
    generated_at: Optional[datetime] = None
) -> ReportAggregate:
    return eligibility_service.calculate(company, employees, programs, as_of, generated_at)
